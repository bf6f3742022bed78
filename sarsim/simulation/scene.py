# -*- coding: utf-8 -*-
"""
Scene Simulation - Synthetic target scene and idealized radar scan.

``insert_waveform_in_scene`` builds the reflectivity map: a zero scene with
the compressed pulse laid along the centre row, its peak sample on the
centre pixel. ``simulate_scan`` then flies a straight synthetic aperture
past that scene and records, for each antenna position, the sum of the
echoes of every non-zero scene cell::

    raw[p, n] = sum_k  sigma_k * exp(+j * phase_sgn * 4 pi fc R_pk / c)
                      * chirp((n - (R_pk - r0) / dr) / fs)

where ``R_pk`` is the slant range from position ``p`` to cell ``k``, ``r0``
the range of bin 0 and ``dr = c / (2 fs)`` the range-bin spacing. The
echoes are evaluated from the continuous pulse, so fractional-bin delays
are exact.

The recorded range window covers the nearest to the farthest scene pixel
over the whole aperture, widened on both sides by half a pulse plus a
guard band.

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# sarsim internal
from sarsim.config import SPEED_OF_LIGHT, RadarConfig
from sarsim.exceptions import ConfigurationError
from sarsim.image_formation.geometry import ImageGrid, build_aperture_positions
from sarsim.signal.waveform import ChirpWaveform
from sarsim.store import BufferStore
from sarsim.vocabulary import BufferName

logger = logging.getLogger(__name__)

#: Extra range bins recorded beyond the pulse extent on each side.
RANGE_GUARD_BINS = 8

# Scatterers evaluated together per aperture position
_SCATTERER_CHUNK = 1024


def insert_waveform_in_scene(
    store: BufferStore,
    config: RadarConfig,
) -> np.ndarray:
    """Build ``scene`` with the compressed pulse centred in it.

    The pulse occupies row ``M // 2``; its peak sample lands on column
    ``N // 2``. Sets ``config.derived.nrows``, ``ncols`` and
    ``azimuth_spacing``.

    Returns
    -------
    np.ndarray
        The ``(scene_rows, scene_cols)`` scene.

    Raises
    ------
    ConfigurationError
        If the pulse does not fit in the scene. Nothing is appended.
    """
    stage = 'scene_simulation'
    pulse = store.require(BufferName.COMPRESSED_PULSE, stage)
    nrows, ncols = int(config.scene_rows), int(config.scene_cols)

    if pulse.rows > nrows:
        raise ConfigurationError(
            f"pulse has {pulse.rows} rows, scene only {nrows}",
            stage=stage, parameter='scene_rows',
        )
    if pulse.cols > ncols:
        raise ConfigurationError(
            f"compressed pulse is {pulse.cols} samples long, scene is only "
            f"{ncols} columns wide",
            stage=stage, parameter='scene_cols',
        )

    peak = int(np.argmax(np.abs(pulse.data[0])))
    row0 = nrows // 2 - pulse.rows // 2
    col0 = ncols // 2 - peak
    if col0 < 0 or col0 + pulse.cols > ncols:
        raise ConfigurationError(
            f"pulse peak at sample {peak} cannot be centred in "
            f"{ncols} columns",
            stage=stage, parameter='scene_cols',
        )

    scene = np.zeros((nrows, ncols), dtype=np.complex128)
    scene[row0:row0 + pulse.rows, col0:col0 + pulse.cols] = pulse.data
    store.append(BufferName.SCENE, scene)

    derived = config.derived
    derived.nrows, derived.ncols = nrows, ncols
    derived.azimuth_spacing = config.image_azimuth_spacing
    logger.info(
        "Built %dx%d scene, pulse peak at (%d, %d)",
        nrows, ncols, nrows // 2, ncols // 2,
    )
    return scene


def range_window(
    pixels: np.ndarray,
    positions: np.ndarray,
    range_spacing: float,
    pulse_samples: int,
    guard: int = RANGE_GUARD_BINS,
) -> Tuple[float, int]:
    """Start range and bin count covering every pixel from every position.

    Parameters
    ----------
    pixels : np.ndarray
        Pixel positions, shape ``(..., 3)``.
    positions : np.ndarray
        Antenna positions, shape ``(P, 3)``.
    range_spacing : float
        Range-bin spacing in metres.
    pulse_samples : int
        Transmitted pulse length in samples.
    guard : int
        Extra bins on each side.

    Returns
    -------
    Tuple[float, int]
        ``(range_start, n_range_bins)``.
    """
    pts = pixels.reshape(-1, 3)
    r_min, r_max = np.inf, -np.inf
    for pos in positions:
        r = np.sqrt(np.sum((pts - pos) ** 2, axis=1))
        r_min = min(r_min, float(r.min()))
        r_max = max(r_max, float(r.max()))
    margin = (pulse_samples - 1) // 2 + guard
    range_start = r_min - margin * range_spacing
    n_bins = int(np.ceil((r_max - r_min) / range_spacing)) + 2 * margin + 1
    return range_start, n_bins


def simulate_scan(
    store: BufferStore,
    config: RadarConfig,
    waveform: Optional[ChirpWaveform] = None,
) -> np.ndarray:
    """Record the raw returns of ``scene`` along the synthetic aperture.

    Appends ``aperture`` (``P x 3`` antenna positions) and ``radar_image``
    (``P x n_range_bins``). Sets the raw range window and aperture size
    in ``config.derived``.

    Parameters
    ----------
    store : BufferStore
        Run store holding ``scene``.
    config : RadarConfig
        Run configuration.
    waveform : ChirpWaveform, optional
        Transmitted pulse; defaults to the chirp described by *config*.

    Returns
    -------
    np.ndarray
        The raw data.

    Raises
    ------
    ConfigurationError
        For zero aperture positions or a non-finite echo.
    """
    stage = 'radar_scan'
    scene = store.require(BufferName.SCENE, stage).data
    if waveform is None:
        waveform = ChirpWaveform.from_config(config)

    grid = ImageGrid.from_config(config)
    if grid.shape != scene.shape:
        raise ConfigurationError(
            f"scene is {scene.shape}, image grid is {grid.shape}",
            stage=stage, parameter='scene_rows/scene_cols',
        )
    positions = build_aperture_positions(config)
    pixels = grid.pixel_positions()
    dr = config.range_sample_spacing
    fs = config.sample_rate

    range_start, n_bins = range_window(
        pixels, positions, dr, waveform.num_samples)

    rows, cols = np.nonzero(scene)
    sigma = scene[rows, cols]
    targets = pixels[rows, cols]
    if sigma.size == 0:
        logger.warning("Scene is empty; raw data will be all zeros")

    k = config.phase_sign * 4.0 * np.pi * config.center_frequency \
        / SPEED_OF_LIGHT
    bins = np.arange(n_bins, dtype=np.float64)
    raw = np.zeros((positions.shape[0], n_bins), dtype=np.complex128)

    for p, pos in enumerate(positions):
        for start in range(0, sigma.size, _SCATTERER_CHUNK):
            stop = start + _SCATTERER_CHUNK
            r = np.sqrt(np.sum((targets[start:stop] - pos) ** 2, axis=1))
            delay = (r - range_start) / dr
            echoes = waveform.evaluate(
                (bins[np.newaxis, :] - delay[:, np.newaxis]) / fs)
            weights = sigma[start:stop] * np.exp(1j * k * r)
            raw[p] += weights @ echoes
        logger.debug("Scan position %d/%d", p + 1, positions.shape[0])

    if not np.all(np.isfinite(raw)):
        raise ConfigurationError(
            "simulated raw data contains NaN or Inf",
            stage=stage, parameter='radar_image',
        )

    store.append(BufferName.APERTURE, positions)
    store.append(BufferName.RADAR_IMAGE, raw)

    derived = config.derived
    derived.range_start = range_start
    derived.range_spacing = dr
    derived.n_range_bins = n_bins
    derived.n_aperture_positions = positions.shape[0]
    logger.info(
        "Simulated scan: %d positions x %d range bins, %d scatterers, "
        "range window starts at %.2f m",
        positions.shape[0], n_bins, sigma.size, range_start,
    )
    return raw
