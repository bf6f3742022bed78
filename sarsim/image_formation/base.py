# -*- coding: utf-8 -*-
"""
Image Formation Algorithm ABC - Algorithm-agnostic interface.

Defines the abstract contract for SAR image formation algorithms.
The interface is intentionally minimal: range profiles + geometry in,
complex image out. Algorithm-specific configuration (output grid,
interpolator) belongs in each concrete class's ``__init__``.

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
2026-02-12

Modified
--------
2026-10-18
"""

# Standard library
from abc import ABC, abstractmethod
from typing import Any, Dict

# Third-party
import numpy as np


class ImageFormationAlgorithm(ABC):
    """ABC for SAR image formation algorithms.

    Subclasses
    ----------
    - ``GlobalBackProjection``: direct time-domain backprojection
    """

    @abstractmethod
    def form_image(
        self,
        signal: np.ndarray,
        geometry: Any,
        **kwargs: Any,
    ) -> np.ndarray:
        """Transform range profiles into a complex SAR image.

        Parameters
        ----------
        signal : np.ndarray
            Range profiles, shape ``(num_positions, num_range_bins)``.
        geometry : Any
            Collection geometry providing antenna positions and the range
            sampling of *signal*. Typically an ``ApertureGeometry``.

        Returns
        -------
        np.ndarray
            Complex SAR image.
        """

    @abstractmethod
    def get_output_grid(self) -> Dict[str, Any]:
        """Return output grid parameters.

        Returns
        -------
        Dict[str, Any]
            Algorithm-specific grid parameters (size, spacing, origin).
        """
