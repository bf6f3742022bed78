# -*- coding: utf-8 -*-
"""
Spectral Analysis - 2D DFT of the formed image and apodization stages.

``fft2`` is the unshifted 2D DFT (row-wise then column-wise; the two axes
commute) and ``ifft2`` its exact inverse, so
``ifft2(fft2(x)) == x`` to floating-point precision and Parseval's
relation ``sum|X|^2 == rows * cols * sum|x|^2`` holds.

The stage functions wire these into the buffer store:

- ``apodize_image``: window the formed image into ``gbp_apodized``.
- ``spectral_analysis``: DFT of the (apodized) image into ``gbp_fft``.
- ``apodize_spectrum``: window ``gbp_fft`` about DC into
  ``gbp_fft_apodized``.

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
from typing import Any, Optional

# Third-party
import numpy as np
import scipy.fft

# sarsim internal
from sarsim.config import RadarConfig
from sarsim.exceptions import ValidationError
from sarsim.image_processing.apodization import Apodization
from sarsim.image_processing.base import ImageTransform
from sarsim.image_processing.versioning import processor_tags, processor_version
from sarsim.store import BufferStore
from sarsim.vocabulary import BufferName, ProcessorCategory

logger = logging.getLogger(__name__)


def _as_image(image: np.ndarray) -> np.ndarray:
    image = np.asarray(image, dtype=np.complex128)
    if image.ndim != 2:
        raise ValidationError(f"Expected a 2-D array, got {image.ndim}-D")
    return image


def fft2(image: np.ndarray) -> np.ndarray:
    """Unshifted 2D DFT of *image*."""
    return scipy.fft.fft2(_as_image(image))


def ifft2(spectrum: np.ndarray) -> np.ndarray:
    """Inverse of ``fft2``."""
    return scipy.fft.ifft2(_as_image(spectrum))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FFT,
                description='Unshifted 2D DFT')
class SpectralAnalysis(ImageTransform):
    """2D DFT as an image transform.

    Parameters
    ----------
    inverse : bool
        Apply the inverse DFT instead. Default False.
    """

    def __init__(self, inverse: bool = False) -> None:
        self.inverse = inverse

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        return ifft2(source) if self.inverse else fft2(source)


def apodize_image(
    store: BufferStore,
    config: RadarConfig,
) -> Optional[np.ndarray]:
    """Window ``gbp`` into ``gbp_apodized`` when image apodization is on.

    Returns
    -------
    np.ndarray or None
        The apodized image, or ``None`` when the stage is skipped.
    """
    if config.apodization is None or config.apodize_spectrum:
        return None
    image = store.require(BufferName.GBP, 'apodization').data
    apodized = Apodization(config.apodization).apply(image)
    store.append(BufferName.GBP_APODIZED, apodized)
    logger.info("Apodized image with %s window", config.apodization.value)
    return apodized


def spectral_analysis(
    store: BufferStore,
    config: RadarConfig,
) -> np.ndarray:
    """Append ``gbp_fft``, the 2D DFT of the formed image.

    Uses ``gbp_apodized`` when image apodization produced it, otherwise
    ``gbp``.
    """
    stage = 'spectral_analysis'
    source = store.find(BufferName.GBP_APODIZED)
    if source is None or not source.populated:
        source = store.require(BufferName.GBP, stage)
    spectrum = fft2(source.data)
    store.append(BufferName.GBP_FFT, spectrum)
    logger.info("Computed %dx%d spectrum of %r", source.rows, source.cols,
                source.name)
    return spectrum


def apodize_spectrum(
    store: BufferStore,
    config: RadarConfig,
) -> Optional[np.ndarray]:
    """Window ``gbp_fft`` about DC into ``gbp_fft_apodized``.

    Returns
    -------
    np.ndarray or None
        The apodized spectrum, or ``None`` when the stage is skipped.
    """
    if config.apodization is None or not config.apodize_spectrum:
        return None
    spectrum = store.require(BufferName.GBP_FFT, 'apodization').data
    apodized = Apodization(config.apodization, spectral=True).apply(spectrum)
    store.append(BufferName.GBP_FFT_APODIZED, apodized)
    logger.info("Apodized spectrum with %s window", config.apodization.value)
    return apodized
