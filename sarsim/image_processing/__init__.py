# -*- coding: utf-8 -*-
"""
Image Processing - Transforms applied to radar data and formed images.

Provides the ``ImageTransform`` processor framework, the transform
``Pipeline``, apodization windows, 2D spectral analysis, and the CinSnow
and RFI filter hooks.

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

from sarsim.image_processing.base import ImageProcessor, ImageTransform
from sarsim.image_processing.versioning import (
    processor_tags,
    processor_version,
)
from sarsim.image_processing.pipeline import Pipeline
from sarsim.image_processing.apodization import Apodization, window_2d
from sarsim.image_processing.spectral import (
    SpectralAnalysis,
    apodize_image,
    apodize_spectrum,
    fft2,
    ifft2,
    spectral_analysis,
)
from sarsim.image_processing.filters import CinSnowFilter, RFISuppression

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'processor_tags',
    'processor_version',
    'Pipeline',
    'Apodization',
    'window_2d',
    'SpectralAnalysis',
    'apodize_image',
    'apodize_spectrum',
    'fft2',
    'ifft2',
    'spectral_analysis',
    'CinSnowFilter',
    'RFISuppression',
]
