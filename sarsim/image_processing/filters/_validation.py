# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared argument checks for the filter hooks.

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

# Third-party
import numpy as np

# sarsim internal
from sarsim.exceptions import ValidationError


BOUNDARY_MODES = ('reflect', 'constant', 'nearest', 'wrap')


def validate_kernel_size(kernel_size: int, name: str = 'kernel_size') -> None:
    """Validate that kernel size is an odd integer >= 3.

    Raises
    ------
    ValidationError
        If ``kernel_size`` is not an integer, is less than 3, or is even.
    """
    if not isinstance(kernel_size, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(kernel_size).__name__}"
        )
    if kernel_size < 3 or kernel_size % 2 == 0:
        raise ValidationError(
            f"{name} must be an odd integer >= 3, got {kernel_size}"
        )


def validate_mode(mode: str) -> None:
    """Validate that *mode* is a scipy.ndimage boundary mode."""
    if mode not in BOUNDARY_MODES:
        raise ValidationError(
            f"mode must be one of {BOUNDARY_MODES}, got {mode!r}"
        )


def validate_image(source: np.ndarray, name: str) -> np.ndarray:
    """Return *source* as a 2-D array or raise ``ValidationError``."""
    source = np.asarray(source)
    if source.ndim != 2:
        raise ValidationError(
            f"{name} expects a 2-D array, got {source.ndim}-D"
        )
    return source
