# -*- coding: utf-8 -*-
"""
Apodization - Separable 2D windowing of images and spectra.

The window is the outer product of a row window and a column window, each
drawn from the same family (uniform, Hamming, Hanning, Taylor). It is
applied multiplicatively and never changes the array shape.

For image-domain use the window is centred on the image. For
spectral-domain use on an unshifted 2D DFT the window is ``ifftshift``-ed
so that its maximum sits on the DC bin (index ``[0, 0]``) and it tapers
toward the Nyquist bins.

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
from typing import Any, Callable, Optional, Union

# Third-party
import numpy as np
from scipy.signal.windows import taylor as _taylor_window

# sarsim internal
from sarsim.exceptions import ValidationError
from sarsim.image_processing.base import ImageTransform
from sarsim.image_processing.versioning import processor_tags, processor_version
from sarsim.vocabulary import ProcessorCategory, WindowType

_WINDOW_FUNCTIONS = {
    'uniform': None,
    'taylor': lambda n: _taylor_window(n, nbar=4, sll=35, norm=True),
    'hamming': np.hamming,
    'hanning': np.hanning,
}


def _resolve_window(
    window: Union[str, WindowType, Callable, None],
) -> Optional[Callable]:
    """Resolve a window selector to a window function (``None`` = uniform)."""
    if isinstance(window, WindowType):
        window = window.value
    if window is None or window == 'uniform':
        return None
    if callable(window):
        return window
    if isinstance(window, str):
        key = window.lower()
        if key not in _WINDOW_FUNCTIONS:
            raise ValidationError(
                f"Unknown window '{window}'. "
                f"Options: {list(_WINDOW_FUNCTIONS.keys())}"
            )
        return _WINDOW_FUNCTIONS[key]
    raise TypeError(
        f"window must be str, WindowType, callable, or None, "
        f"got {type(window)}"
    )


def window_1d(
    n: int,
    window: Union[str, WindowType, Callable, None],
) -> np.ndarray:
    """Length-*n* window of the requested family."""
    func = _resolve_window(window)
    if func is None or n == 1:
        return np.ones(n)
    return np.asarray(func(n), dtype=np.float64)


def window_2d(
    shape,
    window: Union[str, WindowType, Callable, None],
    centered_on_dc: bool = False,
) -> np.ndarray:
    """Separable ``(rows, cols)`` window.

    Parameters
    ----------
    shape : tuple of int
        ``(rows, cols)``.
    window : str, WindowType, callable or None
        Window family.
    centered_on_dc : bool
        Shift the window for an unshifted spectrum (peak at ``[0, 0]``).
    """
    rows, cols = shape
    w = np.outer(window_1d(rows, window), window_1d(cols, window))
    if centered_on_dc:
        w = np.fft.ifftshift(w)
    return w


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FFT,
                description='Separable 2D sidelobe-suppression window')
class Apodization(ImageTransform):
    """Multiply an image or spectrum by a separable 2D window.

    Parameters
    ----------
    window : str, WindowType, callable or None
        ``'uniform'``, ``'hamming'``, ``'hanning'``, ``'taylor'``, or a
        callable ``f(n) -> ndarray``. ``None`` is uniform.
    spectral : bool
        Treat the input as an unshifted 2D spectrum and centre the window
        on DC. Default False (image domain).

    Examples
    --------
    >>> apod = Apodization('taylor')
    >>> weighted = apod.apply(image)
    """

    def __init__(
        self,
        window: Union[str, WindowType, Callable, None] = 'hamming',
        spectral: bool = False,
    ) -> None:
        _resolve_window(window)
        self.window = window
        self.spectral = spectral

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Return ``source * window``, same shape as *source*.

        Raises
        ------
        ValidationError
            If *source* is not 2-D.
        """
        source = np.asarray(source)
        if source.ndim != 2:
            raise ValidationError(
                f"Apodization expects a 2-D array, got {source.ndim}-D"
            )
        w = window_2d(source.shape, self.window, self.spectral)
        return source * w
