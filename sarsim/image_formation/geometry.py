# -*- coding: utf-8 -*-
"""
Collection Geometry - Image grid and synthetic aperture description.

Defines the local Cartesian frame shared by the scan simulation and the
image formation stages:

- ``x`` runs along-track (image rows),
- ``y`` is ground range away from the track (image columns),
- ``z`` is height above the scene plane.

The antenna moves along ``x`` at ``y = 0``, ``z = altitude``. Image pixel
``(i, j)`` sits at ``x = (i - nrows // 2) * azimuth_spacing``,
``y = center_range + (j - ncols // 2) * range_spacing``, ``z = 0``, so the
centre pixel ``(nrows // 2, ncols // 2)`` is the scene centre.

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
from dataclasses import dataclass
from typing import Any, Dict

# Third-party
import numpy as np

# sarsim internal
from sarsim.config import RadarConfig
from sarsim.exceptions import ConfigurationError


@dataclass
class ImageGrid:
    """Rectangular pixel grid in the scene plane."""

    nrows: int
    """Along-track pixels."""

    ncols: int
    """Range pixels."""

    azimuth_spacing: float
    """Along-track pixel spacing in metres."""

    range_spacing: float
    """Ground-range pixel spacing in metres."""

    center_range: float
    """Ground range of the centre column in metres."""

    @classmethod
    def from_config(cls, config: RadarConfig) -> 'ImageGrid':
        """Grid of the scene described by *config*.

        Uses the derived image size when a stage has set it, otherwise the
        configured scene size.
        """
        derived = config.derived
        return cls(
            nrows=int(derived.nrows or config.scene_rows),
            ncols=int(derived.ncols or config.scene_cols),
            azimuth_spacing=float(
                derived.azimuth_spacing or config.image_azimuth_spacing),
            range_spacing=config.range_sample_spacing,
            center_range=float(config.scene_center_range),
        )

    @property
    def shape(self):
        return (self.nrows, self.ncols)

    def along_track_axis(self) -> np.ndarray:
        """Pixel ``x`` coordinates, shape ``(nrows,)``."""
        return (np.arange(self.nrows) - self.nrows // 2) * self.azimuth_spacing

    def ground_range_axis(self) -> np.ndarray:
        """Pixel ``y`` coordinates, shape ``(ncols,)``."""
        return (self.center_range
                + (np.arange(self.ncols) - self.ncols // 2)
                * self.range_spacing)

    def pixel_positions(self) -> np.ndarray:
        """3-D position of every pixel, shape ``(nrows, ncols, 3)``."""
        xx, yy = np.meshgrid(
            self.along_track_axis(), self.ground_range_axis(), indexing='ij',
        )
        return np.stack([xx, yy, np.zeros_like(xx)], axis=-1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nrows': self.nrows,
            'ncols': self.ncols,
            'azimuth_spacing': self.azimuth_spacing,
            'range_spacing': self.range_spacing,
            'center_range': self.center_range,
        }


@dataclass
class ApertureGeometry:
    """Antenna track and raw range sampling of one collection."""

    positions: np.ndarray
    """Antenna positions, shape ``(P, 3)``."""

    center_frequency: float
    """Carrier frequency in Hz."""

    range_start: float
    """Slant range of range bin 0 in metres."""

    range_spacing: float
    """Slant-range spacing of the range bins in metres."""

    n_range_bins: int
    """Samples per range profile."""

    phase_sign: int = -1
    """Sign of the carrier phase carried by the raw data."""

    @property
    def n_positions(self) -> int:
        return int(self.positions.shape[0])

    @classmethod
    def from_config(
        cls,
        positions: np.ndarray,
        config: RadarConfig,
    ) -> 'ApertureGeometry':
        """Assemble the geometry from *positions* and the derived range window.

        Raises
        ------
        ConfigurationError
            If the range window has not been established.
        """
        derived = config.derived
        for name in ('range_start', 'range_spacing', 'n_range_bins'):
            if getattr(derived, name) is None:
                raise ConfigurationError(
                    "raw range window is not defined",
                    stage='gbp', parameter=name,
                )
        return cls(
            positions=np.asarray(positions, dtype=np.float64),
            center_frequency=float(config.center_frequency),
            range_start=float(derived.range_start),
            range_spacing=float(derived.range_spacing),
            n_range_bins=int(derived.n_range_bins),
            phase_sign=int(config.phase_sign),
        )

    def validate(self, stage: str = 'gbp') -> None:
        """Reject geometry that would yield non-finite ranges.

        Raises
        ------
        ConfigurationError
            For zero, duplicate or non-finite positions, or a non-positive
            or non-finite range spacing.
        """
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ConfigurationError(
                f"positions must have shape (P, 3), got "
                f"{self.positions.shape}",
                stage=stage, parameter='aperture',
            )
        if self.n_positions == 0:
            raise ConfigurationError(
                "no aperture positions",
                stage=stage, parameter='n_aperture_positions',
            )
        if not np.all(np.isfinite(self.positions)):
            raise ConfigurationError(
                "non-finite antenna position",
                stage=stage, parameter='aperture',
            )
        if (self.n_positions > 1 and
                np.unique(self.positions, axis=0).shape[0] < self.n_positions):
            raise ConfigurationError(
                "duplicate antenna positions",
                stage=stage, parameter='aperture',
            )
        if not np.isfinite(self.range_spacing) or self.range_spacing <= 0:
            raise ConfigurationError(
                f"must be positive and finite, got {self.range_spacing!r}",
                stage=stage, parameter='range_spacing',
            )
        if not np.isfinite(self.range_start):
            raise ConfigurationError(
                f"must be finite, got {self.range_start!r}",
                stage=stage, parameter='range_start',
            )
        if (not np.isfinite(self.center_frequency)
                or self.center_frequency <= 0):
            raise ConfigurationError(
                f"must be positive, got {self.center_frequency!r}",
                stage=stage, parameter='center_frequency',
            )


def build_aperture_positions(config: RadarConfig) -> np.ndarray:
    """Evenly spaced antenna positions along ``x``, centred on ``x = 0``.

    Returns
    -------
    np.ndarray
        Shape ``(n_aperture_positions, 3)``.
    """
    n = int(config.n_aperture_positions)
    if n <= 0:
        raise ConfigurationError(
            f"must be positive, got {n}",
            stage='scene_simulation', parameter='n_aperture_positions',
        )
    half = config.aperture_length / 2.0
    x = np.linspace(-half, half, n) if n > 1 else np.zeros(1)
    positions = np.zeros((n, 3), dtype=np.float64)
    positions[:, 0] = x
    positions[:, 2] = config.altitude
    return positions
