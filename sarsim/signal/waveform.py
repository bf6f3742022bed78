# -*- coding: utf-8 -*-
"""
Waveform Synthesis - Transmitted chirp and its matched filter.

Builds the complex baseband transmit pulse and the matched filter used for
pulse compression. The default pulse is a linear FM chirp sweeping
``-B/2 .. +B/2`` over the pulse duration; any other phase law can be
supplied as a callable ``phase(t) -> radians``.

The pulse is sampled on a time axis centred on zero with an odd number of
samples, so sample ``(N - 1) / 2`` sits at ``t = 0``. The continuous form
(``ChirpWaveform.evaluate``) is what the radar-scan simulation delays by
arbitrary, non-integer round-trip times.

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
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

# Third-party
import numpy as np
from scipy.fft import fft

# sarsim internal
from sarsim.config import RadarConfig
from sarsim.exceptions import ConfigurationError
from sarsim.store import BufferStore
from sarsim.vocabulary import BufferName

logger = logging.getLogger(__name__)


@dataclass
class ChirpWaveform:
    """Complex baseband radar pulse.

    Parameters
    ----------
    bandwidth : float
        Swept bandwidth in Hz.
    pulse_duration : float
        Nominal pulse length in seconds.
    sample_rate : float
        Complex sample rate in Hz.
    phase_function : callable, optional
        ``phase(t) -> ndarray`` in radians for a custom modulation.
        ``t`` is in seconds, zero at the pulse centre. Defaults to the
        linear FM law ``pi * (B / T) * t**2``.
    """

    bandwidth: float
    pulse_duration: float
    sample_rate: float
    phase_function: Optional[Callable[[np.ndarray], np.ndarray]] = None

    @classmethod
    def from_config(
        cls,
        config: RadarConfig,
        phase_function: Optional[Callable[[np.ndarray], np.ndarray]] = None,
    ) -> 'ChirpWaveform':
        """Build the waveform described by *config*."""
        return cls(
            bandwidth=config.bandwidth,
            pulse_duration=config.pulse_duration,
            sample_rate=config.sample_rate,
            phase_function=phase_function,
        )

    @property
    def num_samples(self) -> int:
        """Odd sample count closest to ``pulse_duration * sample_rate``.

        Raises
        ------
        ConfigurationError
            If the duration/rate combination yields no samples.
        """
        for name in ('bandwidth', 'pulse_duration', 'sample_rate'):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise ConfigurationError(
                    f"must be positive, got {value!r}",
                    stage='waveform', parameter=name,
                )
        n = int(round(self.pulse_duration * self.sample_rate))
        if n <= 0:
            raise ConfigurationError(
                f"pulse_duration * sample_rate = "
                f"{self.pulse_duration * self.sample_rate:g} yields no samples",
                stage='waveform', parameter='pulse_duration',
            )
        if n % 2 == 0:
            n += 1
        return n

    @property
    def effective_duration(self) -> float:
        """Duration actually covered by the sampled pulse, ``N / fs``."""
        return self.num_samples / self.sample_rate

    @property
    def chirp_rate(self) -> float:
        """Linear FM rate ``B / T`` in Hz/s."""
        return self.bandwidth / self.effective_duration

    def time_axis(self) -> np.ndarray:
        """Sample times, centred on zero, shape ``(N,)``."""
        n = self.num_samples
        return (np.arange(n) - (n - 1) / 2.0) / self.sample_rate

    def phase(self, t: np.ndarray) -> np.ndarray:
        """Instantaneous phase in radians at times *t*."""
        if self.phase_function is not None:
            return np.asarray(self.phase_function(t), dtype=np.float64)
        return np.pi * self.chirp_rate * t ** 2

    def evaluate(self, t: np.ndarray) -> np.ndarray:
        """Continuous pulse at arbitrary times, zero outside the pulse.

        Parameters
        ----------
        t : np.ndarray
            Times in seconds relative to the pulse centre.

        Returns
        -------
        np.ndarray
            complex128 samples, same shape as *t*.
        """
        t = np.asarray(t, dtype=np.float64)
        half_width = self.effective_duration / 2.0
        inside = np.abs(t) < half_width
        out = np.zeros(t.shape, dtype=np.complex128)
        out[inside] = np.exp(1j * self.phase(t[inside]))
        return out

    def sample(self) -> np.ndarray:
        """Sampled transmit pulse, shape ``(N,)``."""
        return self.evaluate(self.time_axis())

    def matched_filter(self) -> np.ndarray:
        """Time-reversed conjugate of the pulse, scaled to unit energy."""
        return matched_filter(self.sample())


def matched_filter(waveform: np.ndarray) -> np.ndarray:
    """Matched filter for *waveform*: ``conj(w[::-1]) / ||w||``.

    Raises
    ------
    ConfigurationError
        If *waveform* is empty or has zero energy.
    """
    w = np.asarray(waveform, dtype=np.complex128).ravel()
    energy = float(np.sqrt(np.sum(np.abs(w) ** 2)))
    if w.size == 0 or energy == 0.0:
        raise ConfigurationError(
            "waveform has zero length or zero energy",
            stage='waveform', parameter='chirp',
        )
    return np.conj(w[::-1]) / energy


def generate_waveforms(
    store: BufferStore,
    config: RadarConfig,
    waveform: Optional[ChirpWaveform] = None,
) -> Tuple[ChirpWaveform, np.ndarray, np.ndarray]:
    """Synthesize ``chirp`` and ``match`` and their spectra into *store*.

    Appends, in order, ``chirp``, ``match`` (both 1xN), ``chirp_fft`` and
    ``match_fft`` (N-point DFTs of each). Records the sample count in
    ``config.derived.chirp_samples``.

    Parameters
    ----------
    store : BufferStore
        Run store.
    config : RadarConfig
        Run configuration.
    waveform : ChirpWaveform, optional
        Custom pulse; defaults to the linear FM chirp from *config*.

    Returns
    -------
    Tuple[ChirpWaveform, np.ndarray, np.ndarray]
        The waveform object, the chirp samples and the matched filter.
    """
    if waveform is None:
        waveform = ChirpWaveform.from_config(config)
    chirp = waveform.sample()
    match = matched_filter(chirp)

    store.append(BufferName.CHIRP, chirp)
    store.append(BufferName.MATCH, match)
    store.append(BufferName.CHIRP_FFT, fft(chirp))
    store.append(BufferName.MATCH_FFT, fft(match))

    config.derived.chirp_samples = chirp.size
    logger.info(
        "Generated %d-sample chirp (B=%.3g Hz, T=%.3g s)",
        chirp.size, waveform.bandwidth, waveform.effective_duration,
    )
    return waveform, chirp, match
