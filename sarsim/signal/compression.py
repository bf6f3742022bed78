# -*- coding: utf-8 -*-
"""
Pulse Compression - Matched filtering of single pulses and raw images.

Correlation against the matched filter is carried out as a convolution with
the filter taps, in the frequency domain: both operands are zero-padded to a
fast FFT length of at least ``N + L - 1``, multiplied, and inverse
transformed. ``correlate_direct`` is the O(N*L) time-domain reference used
to check the fast path.

Two output alignments are used:

- ``'full'``: length ``N + L - 1``. Compressing a pulse against its own
  matched filter peaks at index ``L - 1``.
- ``'same'``: length ``N``, aligned with the input. A return whose centre
  sits at sample ``k`` compresses to a peak at sample ``k`` (for the odd
  filter lengths produced by ``ChirpWaveform``).

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

# Third-party
import numpy as np
from scipy.fft import fft, ifft, next_fast_len

# sarsim internal
from sarsim.config import SPEED_OF_LIGHT, RadarConfig
from sarsim.exceptions import ConfigurationError, ValidationError
from sarsim.store import BufferStore
from sarsim.vocabulary import BufferName

logger = logging.getLogger(__name__)

_MODES = ('full', 'same')


def _slice_mode(full: np.ndarray, n: int, taps: int, mode: str) -> np.ndarray:
    if mode == 'full':
        return full
    start = (taps - 1) // 2
    return full[..., start:start + n]


def correlate_fft(
    signal: np.ndarray,
    taps: np.ndarray,
    mode: str = 'full',
    axis: int = -1,
) -> np.ndarray:
    """Filter *signal* with matched-filter *taps* via zero-padded FFTs.

    Parameters
    ----------
    signal : np.ndarray
        1-D pulse or 2-D array of pulses; filtered along *axis*.
    taps : np.ndarray
        1-D matched filter (time-reversed conjugate of the reference).
    mode : str
        ``'full'`` or ``'same'``.
    axis : int
        Axis of *signal* holding fast time. Default last.

    Returns
    -------
    np.ndarray
        complex128 compressed output.
    """
    if mode not in _MODES:
        raise ValidationError(f"mode must be one of {_MODES}, got {mode!r}")
    taps = np.asarray(taps, dtype=np.complex128).ravel()
    data = np.moveaxis(np.asarray(signal, dtype=np.complex128), axis, -1)
    n = data.shape[-1]
    if n == 0 or taps.size == 0:
        raise ValidationError("Cannot correlate empty inputs")

    full_len = n + taps.size - 1
    nfft = next_fast_len(full_len)
    spectrum = fft(data, nfft, axis=-1) * fft(taps, nfft)
    full = ifft(spectrum, axis=-1)[..., :full_len]
    out = _slice_mode(full, n, taps.size, mode)
    return np.moveaxis(out, -1, axis)


def correlate_direct(
    signal: np.ndarray,
    taps: np.ndarray,
    mode: str = 'full',
) -> np.ndarray:
    """Time-domain reference for ``correlate_fft`` (1-D only)."""
    if mode not in _MODES:
        raise ValidationError(f"mode must be one of {_MODES}, got {mode!r}")
    x = np.asarray(signal, dtype=np.complex128).ravel()
    taps = np.asarray(taps, dtype=np.complex128).ravel()
    full = np.zeros(x.size + taps.size - 1, dtype=np.complex128)
    for k, h in enumerate(taps):
        full[k:k + x.size] += h * x
    return _slice_mode(full, x.size, taps.size, mode)


def compressed_pulse_resolution(bandwidth: float) -> float:
    """Range resolution of a compressed pulse, ``c / (2 B)`` in metres."""
    if not np.isfinite(bandwidth) or bandwidth <= 0:
        raise ConfigurationError(
            f"must be positive, got {bandwidth!r}",
            stage='pulse_compression', parameter='bandwidth',
        )
    return SPEED_OF_LIGHT / (2.0 * bandwidth)


def mainlobe_width(pulse: np.ndarray, level_db: float = -3.0) -> float:
    """Width in samples of the main lobe of *pulse* at *level_db*.

    Edges are located by linear interpolation of the magnitude between
    the last sample above the level and the first sample below it on
    each side of the peak.
    """
    mag = np.abs(np.asarray(pulse).ravel())
    peak = int(np.argmax(mag))
    level = mag[peak] * 10.0 ** (level_db / 20.0)

    def edge(step: int) -> float:
        i = peak
        while 0 <= i + step < mag.size and mag[i + step] >= level:
            i += step
        j = i + step
        if not 0 <= j < mag.size:
            return float(i)
        frac = (mag[i] - level) / (mag[i] - mag[j])
        return i + step * frac

    return edge(+1) - edge(-1)


def compress_waveform(store: BufferStore, config: RadarConfig) -> float:
    """Compress ``chirp`` against ``match`` into ``compressed_pulse``.

    Returns
    -------
    float
        Compressed pulse resolution ``c / (2 B)`` in metres, also stored
        in ``config.derived.pulse_resolution``.
    """
    stage = 'pulse_compression'
    chirp = store.require(BufferName.CHIRP, stage).data.ravel()
    match = store.require(BufferName.MATCH, stage).data.ravel()

    compressed = correlate_fft(chirp, match, mode='full')
    store.append(BufferName.COMPRESSED_PULSE, compressed)

    resolution = compressed_pulse_resolution(config.bandwidth)
    config.derived.pulse_resolution = resolution
    logger.info("Compressed pulse resolution: %.3f m", resolution)
    return resolution


def compress_image(store: BufferStore, config: RadarConfig) -> np.ndarray:
    """Pulse-compress every raw range profile into ``compressed_image``.

    Each row of ``radar_image`` is filtered with ``match`` along range,
    aligned so that echo centres keep their range bin.

    Returns
    -------
    np.ndarray
        The compressed image, same shape as the raw image.
    """
    stage = 'pulse_compression'
    raw = store.require(BufferName.RADAR_IMAGE, stage)
    match = store.require(BufferName.MATCH, stage).data.ravel()

    compressed = correlate_fft(raw.data, match, mode='same', axis=1)
    store.append(BufferName.COMPRESSED_IMAGE, compressed)
    logger.info(
        "Pulse-compressed %dx%d raw image", raw.rows, raw.cols,
    )
    return compressed
