# -*- coding: utf-8 -*-
"""
RFI Suppression - Narrowband interference notching along range frequency.

Radio-frequency interference from narrowband emitters concentrates in a
few range-frequency bins and persists across pulses. The filter transforms
every row to range frequency, averages the power of each frequency bin
over all rows, and zeroes the bins whose mean power exceeds
``threshold`` times the median bin power. The notched spectrum is
transformed back, so the output has the input's shape.

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
import logging
from typing import Any

# Third-party
import numpy as np
from scipy.fft import fft, ifft

# sarsim internal
from sarsim.exceptions import ValidationError
from sarsim.image_processing.base import ImageTransform
from sarsim.image_processing.versioning import processor_tags, processor_version
from sarsim.image_processing.filters._validation import validate_image
from sarsim.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.NOISE,
                description='Range-frequency notch filter for narrowband RFI')
class RFISuppression(ImageTransform):
    """Notch narrowband interference out of 2-D radar data.

    Parameters
    ----------
    threshold : float
        Mean-power ratio over the median bin above which a frequency bin
        is notched. Must be > 1. Default 10.
    axis : int
        Fast-time (range) axis. Default 1 (columns).

    Examples
    --------
    >>> rfi = RFISuppression(threshold=20.0)
    >>> cleaned = rfi.apply(raw)
    """

    def __init__(self, threshold: float = 10.0, axis: int = 1) -> None:
        if not np.isfinite(threshold) or threshold <= 1.0:
            raise ValidationError(f"threshold must be > 1, got {threshold!r}")
        if axis not in (0, 1, -1, -2):
            raise ValidationError(f"axis must be 0 or 1, got {axis!r}")
        self.threshold = float(threshold)
        self.axis = axis

    def interference_bins(self, source: np.ndarray) -> np.ndarray:
        """Indices of the range-frequency bins that would be notched."""
        source = validate_image(source, 'RFISuppression')
        spectrum = fft(source, axis=self.axis)
        return self._find_bins(spectrum)

    def _find_bins(self, spectrum: np.ndarray) -> np.ndarray:
        other = 1 - (self.axis % 2)
        power = np.mean(np.abs(spectrum) ** 2, axis=other)
        median = float(np.median(power))
        if median <= 0.0:
            return np.zeros(0, dtype=np.intp)
        return np.flatnonzero(power > self.threshold * median)

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Return *source* with interference bins removed.

        Parameters
        ----------
        source : np.ndarray
            2-D array, range along ``axis``.

        Returns
        -------
        np.ndarray
            complex128 array, same shape as *source*.
        """
        source = validate_image(source, 'RFISuppression')
        spectrum = fft(source.astype(np.complex128), axis=self.axis)
        bins = self._find_bins(spectrum)
        self._report_progress(kwargs, 0.5)

        if bins.size:
            index = [slice(None), slice(None)]
            index[self.axis] = bins
            spectrum[tuple(index)] = 0.0
            logger.debug("Notched %d range-frequency bins", bins.size)
        out = ifft(spectrum, axis=self.axis)
        self._report_progress(kwargs, 1.0)
        return out
