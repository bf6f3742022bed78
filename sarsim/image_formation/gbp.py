# -*- coding: utf-8 -*-
"""
Global Back-Projection - Direct time-domain SAR image formation.

For every output pixel and every aperture position the algorithm

1. computes the slant range from the antenna to the pixel,
2. interpolates the range profile recorded at that position at the
   pixel's range (linear by default; pixels outside the recorded range
   window receive zero),
3. removes the round-trip carrier phase
   ``exp(-j * phase_sgn * 4 pi fc R / c)``,
4. accumulates the result coherently in complex128.

Cost is O(pixels x positions) with no approximations. The loop runs over
aperture positions and is vectorised over pixels; pixels are mutually
independent, so the result does not depend on evaluation order.

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
from typing import Any, Callable, Dict, Optional

# Third-party
import numpy as np
from scipy.interpolate import interp1d

# sarsim internal
from sarsim.config import SPEED_OF_LIGHT, RadarConfig
from sarsim.exceptions import ConfigurationError
from sarsim.image_formation.base import ImageFormationAlgorithm
from sarsim.image_formation.geometry import ApertureGeometry, ImageGrid
from sarsim.store import BufferStore
from sarsim.vocabulary import BufferName

logger = logging.getLogger(__name__)


def _scipy_interp1d(
    x_old: np.ndarray,
    y_old: np.ndarray,
    x_new: np.ndarray,
) -> np.ndarray:
    """Default interpolation using scipy interp1d (linear)."""
    func = interp1d(
        x_old, y_old,
        kind='linear',
        bounds_error=False,
        fill_value=0.0,
        copy=False,
    )
    return func(x_new)


class GlobalBackProjection(ImageFormationAlgorithm):
    """Global (direct) back-projection onto a rectangular scene grid.

    Parameters
    ----------
    grid : ImageGrid
        Output pixel grid.
    interpolator : callable, optional
        ``(x_old, y_old, x_new) -> y_new`` used to sample each range
        profile at fractional range bins. Defaults to linear interp1d
        with zero fill outside the profile.

    Examples
    --------
    >>> gbp = GlobalBackProjection(ImageGrid.from_config(config))
    >>> image = gbp.form_image(range_profiles, geometry)
    """

    def __init__(
        self,
        grid: ImageGrid,
        interpolator: Optional[Callable] = None,
    ) -> None:
        if grid.nrows <= 0 or grid.ncols <= 0:
            raise ConfigurationError(
                f"image grid must be non-empty, got {grid.shape}",
                stage='gbp', parameter='scene_rows/scene_cols',
            )
        self._grid = grid
        self._interp = interpolator or _scipy_interp1d

    @property
    def grid(self) -> ImageGrid:
        return self._grid

    def _validate_inputs(
        self,
        signal: np.ndarray,
        geometry: ApertureGeometry,
    ) -> None:
        geometry.validate(stage='gbp')
        expected = (geometry.n_positions, geometry.n_range_bins)
        if signal.ndim != 2 or signal.shape != expected:
            raise ConfigurationError(
                f"raw data has shape {signal.shape}, expected "
                f"{expected} (aperture positions x range bins)",
                stage='gbp', parameter='radar_image',
            )

    def slant_range(
        self,
        pixels: np.ndarray,
        antenna: np.ndarray,
    ) -> np.ndarray:
        """Range from *antenna* ``(3,)`` to every pixel ``(..., 3)``.

        Raises
        ------
        ConfigurationError
            If any range is non-finite or zero (pixel on the antenna).
        """
        diff = pixels - antenna[np.newaxis, np.newaxis, :]
        r = np.sqrt(np.sum(diff ** 2, axis=-1))
        if not np.all(np.isfinite(r)):
            raise ConfigurationError(
                "non-finite slant range", stage='gbp', parameter='aperture',
            )
        if np.any(r <= 0.0):
            raise ConfigurationError(
                "an image pixel coincides with an antenna position",
                stage='gbp', parameter='aperture',
            )
        return r

    def form_image(
        self,
        signal: np.ndarray,
        geometry: ApertureGeometry,
        **kwargs: Any,
    ) -> np.ndarray:
        """Back-project *signal* onto the output grid.

        Parameters
        ----------
        signal : np.ndarray
            Range profiles, shape ``(P, n_range_bins)``. Normally pulse
            compressed.
        geometry : ApertureGeometry
            Antenna positions and range sampling of *signal*.
        progress_callback : callable, optional
            Called with the completed fraction after each position.

        Returns
        -------
        np.ndarray
            complex128 image, shape ``(nrows, ncols)``.

        Raises
        ------
        ConfigurationError
            For empty or mismatched inputs, degenerate geometry, or a
            non-finite result.
        """
        signal = np.asarray(signal)
        self._validate_inputs(signal, geometry)
        progress_callback = kwargs.get('progress_callback')

        grid = self._grid
        pixels = grid.pixel_positions()
        n_pos = geometry.n_positions
        x_old = np.arange(geometry.n_range_bins, dtype=np.float64)
        k = -geometry.phase_sign * 4.0 * np.pi * geometry.center_frequency \
            / SPEED_OF_LIGHT

        logger.info(
            "GBP: %d positions x %d range bins -> %dx%d image",
            n_pos, geometry.n_range_bins, grid.nrows, grid.ncols,
        )

        image = np.zeros(grid.shape, dtype=np.complex128)
        for n in range(n_pos):
            r = self.slant_range(pixels, geometry.positions[n])
            r_bin = (r - geometry.range_start) / geometry.range_spacing
            samples = self._interp(
                x_old, signal[n].astype(np.complex128), r_bin.ravel(),
            ).reshape(r_bin.shape)
            image += samples * np.exp(1j * k * r)

            if progress_callback is not None:
                progress_callback((n + 1) / n_pos)
            logger.debug("GBP position %d/%d", n + 1, n_pos)

        if not np.all(np.isfinite(image)):
            raise ConfigurationError(
                "backprojected image contains NaN or Inf",
                stage='gbp', parameter='radar_image',
            )
        return image

    def get_output_grid(self) -> Dict[str, Any]:
        return self._grid.to_dict()


def form_gbp_image(
    store: BufferStore,
    config: RadarConfig,
    algorithm: Optional[ImageFormationAlgorithm] = None,
    **kwargs: Any,
) -> np.ndarray:
    """Run backprojection on the store's raw data into ``gbp``.

    Uses ``compressed_image`` when pulse compression produced one,
    otherwise ``radar_image`` as recorded.

    Parameters
    ----------
    store : BufferStore
        Run store holding ``aperture`` and the raw image.
    config : RadarConfig
        Run configuration with the derived range window set.
    algorithm : ImageFormationAlgorithm, optional
        Defaults to ``GlobalBackProjection`` on the configured grid.
    **kwargs
        Forwarded to ``form_image`` (e.g. ``progress_callback``).

    Returns
    -------
    np.ndarray
        The formed image.
    """
    stage = 'gbp'
    aperture = store.require(BufferName.APERTURE, stage)
    raw = store.find(BufferName.COMPRESSED_IMAGE)
    if raw is None or not raw.populated:
        raw = store.require(BufferName.RADAR_IMAGE, stage)

    if aperture.rows == 0:
        raise ConfigurationError(
            "no aperture positions", stage=stage,
            parameter='n_aperture_positions',
        )
    geometry = ApertureGeometry.from_config(aperture.data.real, config)
    if algorithm is None:
        algorithm = GlobalBackProjection(ImageGrid.from_config(config))

    image = algorithm.form_image(raw.data, geometry, **kwargs)
    store.append(BufferName.GBP, image)
    config.derived.nrows, config.derived.ncols = image.shape
    logger.info("Formed %dx%d GBP image from %r", image.shape[0],
                image.shape[1], raw.name)
    return image
