# -*- coding: utf-8 -*-
"""
CinSnow Filter - Impulsive "snow" suppression on complex radar data.

Isolated bright samples (snow) are removed by median filtering the
magnitude of the complex data over a small neighbourhood and recombining
the filtered magnitude with the original phase. The phase history is
untouched, so the data stay coherent for image formation.

Dependencies
------------
scipy

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

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
from typing import Any

# Third-party
import numpy as np
from scipy.ndimage import median_filter

# sarsim internal
from sarsim.image_processing.base import ImageTransform
from sarsim.image_processing.versioning import processor_tags, processor_version
from sarsim.image_processing.filters._validation import (
    validate_image,
    validate_kernel_size,
    validate_mode,
)
from sarsim.vocabulary import ProcessorCategory


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE,
                description='Phase-preserving magnitude median filter')
class CinSnowFilter(ImageTransform):
    """Median filter of the magnitude, phase preserved.

    Parameters
    ----------
    kernel_size : int
        Square kernel side length in samples. Must be odd and >= 3.
        Default is 3.
    mode : str
        Boundary handling mode. One of ``'reflect'``, ``'constant'``,
        ``'nearest'``, ``'wrap'``. Default is ``'reflect'``.

    Examples
    --------
    >>> f = CinSnowFilter(kernel_size=5)
    >>> cleaned = f.apply(raw)
    """

    def __init__(self, kernel_size: int = 3, mode: str = 'reflect') -> None:
        validate_kernel_size(kernel_size)
        validate_mode(mode)
        self.kernel_size = kernel_size
        self.mode = mode

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Filter *source*.

        Parameters
        ----------
        source : np.ndarray
            2-D real or complex array.

        Returns
        -------
        np.ndarray
            Filtered array, same shape as *source*; complex128 for complex
            input.
        """
        source = validate_image(source, 'CinSnowFilter')
        magnitude = median_filter(
            np.abs(source), size=self.kernel_size, mode=self.mode,
        )
        self._report_progress(kwargs, 1.0)
        if not np.iscomplexobj(source):
            return magnitude * np.sign(source)
        return magnitude * np.exp(1j * np.angle(source))
