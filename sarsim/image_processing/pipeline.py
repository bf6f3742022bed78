# -*- coding: utf-8 -*-
"""
Pipeline - Composable sequence of image transforms.

Chains multiple ``ImageTransform`` instances into a single callable
pipeline. The output of each transform feeds into the next. Supports
progress reporting across the full chain.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
import logging
from typing import Any, List, Sequence

# Third-party
import numpy as np

# sarsim internal
from sarsim.exceptions import ValidationError
from sarsim.image_processing.base import ImageTransform

logger = logging.getLogger(__name__)


class Pipeline(ImageTransform):
    """Sequential chain of image transforms.

    The pipeline itself is an ``ImageTransform``, so it can be nested
    inside other pipelines.

    Parameters
    ----------
    steps : Sequence[ImageTransform]
        Ordered transforms to apply. Must contain at least one.
    preserve_shape : bool
        Reject any step whose output shape differs from its input, as
        required of the in-place filter hooks. Default True.

    Examples
    --------
    >>> pipe = Pipeline([CinSnowFilter(), RFISuppression()])
    >>> filtered = pipe.apply(raw)
    """

    __processor_version__ = '1.0.0'

    def __init__(
        self,
        steps: Sequence[ImageTransform],
        preserve_shape: bool = True,
    ) -> None:
        if not steps:
            raise ValidationError("Pipeline requires at least one transform")
        for i, step in enumerate(steps):
            if not isinstance(step, ImageTransform):
                raise TypeError(
                    f"Step {i} is not an ImageTransform: {type(step).__name__}"
                )
        self._steps: List[ImageTransform] = list(steps)
        self.preserve_shape = preserve_shape

    @property
    def steps(self) -> List[ImageTransform]:
        """Shallow copy of the step list."""
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        step_names = [type(s).__name__ for s in self._steps]
        return f"Pipeline({step_names})"

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Apply all transforms in sequence.

        Parameters
        ----------
        source : np.ndarray
            Input image array.
        **kwargs
            Forwarded to each transform's ``apply()``.
            ``progress_callback`` is rescaled so each step reports its
            proportional share of overall progress.

        Returns
        -------
        np.ndarray
            Output after all transforms have been applied.
        """
        n = len(self._steps)
        outer_cb = kwargs.pop('progress_callback', None)

        result = source
        for i, step in enumerate(self._steps):
            logger.debug("Pipeline step %d/%d: %s", i + 1, n,
                         type(step).__qualname__)

            step_kwargs = dict(kwargs)
            if outer_cb is not None:
                base = i / n
                scale = 1.0 / n
                step_kwargs['progress_callback'] = (
                    lambda f, _b=base, _s=scale: outer_cb(_b + f * _s)
                )

            shape = np.shape(result)
            result = step.apply(result, **step_kwargs)
            if self.preserve_shape and np.shape(result) != shape:
                raise ValidationError(
                    f"{type(step).__name__} changed the image shape from "
                    f"{shape} to {np.shape(result)}"
                )

            if outer_cb is not None:
                outer_cb((i + 1) / n)

        return result
