# -*- coding: utf-8 -*-
"""
Waveform Synthesis Tests - Chirp sampling and matched filter.

Dependencies
------------
pytest

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

import numpy as np
import pytest

from sarsim.config import RadarConfig
from sarsim.exceptions import ConfigurationError
from sarsim.signal.waveform import (
    ChirpWaveform,
    generate_waveforms,
    matched_filter,
)
from sarsim.store import BufferStore


class TestChirpWaveform:

    def test_default_length_is_odd(self):
        wf = ChirpWaveform.from_config(RadarConfig())
        assert wf.num_samples == 75

    def test_even_length_forced_odd(self):
        wf = ChirpWaveform(100e6, 74 / 150e6, 150e6)
        assert wf.num_samples == 75

    def test_time_axis_centred(self):
        wf = ChirpWaveform(100e6, 0.5e-6, 150e6)
        t = wf.time_axis()
        assert t[(t.size - 1) // 2] == 0.0
        np.testing.assert_allclose(t, -t[::-1])

    def test_constant_modulus(self):
        chirp = ChirpWaveform(100e6, 0.5e-6, 150e6).sample()
        np.testing.assert_allclose(np.abs(chirp), 1.0)

    def test_instantaneous_frequency_sweeps_bandwidth(self):
        wf = ChirpWaveform(100e6, 0.5e-6, 150e6)
        phase = np.unwrap(np.angle(wf.sample()))
        freq = np.diff(phase) * wf.sample_rate / (2 * np.pi)
        assert freq[0] == pytest.approx(-50e6, rel=0.05)
        assert freq[-1] == pytest.approx(50e6, rel=0.05)

    def test_evaluate_zero_outside_pulse(self):
        wf = ChirpWaveform(100e6, 0.5e-6, 150e6)
        out = wf.evaluate(np.array([-1e-6, 0.0, 1e-6]))
        np.testing.assert_array_equal(out[[0, 2]], 0.0)
        assert out[1] == pytest.approx(1.0)

    def test_custom_phase_function(self):
        wf = ChirpWaveform(100e6, 0.5e-6, 150e6,
                           phase_function=lambda t: np.zeros_like(t))
        np.testing.assert_allclose(wf.sample(), np.ones(75))

    def test_zero_samples_is_configuration_error(self):
        wf = ChirpWaveform(100e6, 1e-12, 150e6)
        with pytest.raises(ConfigurationError) as info:
            wf.num_samples
        assert info.value.stage == 'waveform'

    @pytest.mark.parametrize('field', ['bandwidth', 'pulse_duration',
                                       'sample_rate'])
    def test_non_positive_parameter(self, field):
        kwargs = dict(bandwidth=100e6, pulse_duration=0.5e-6,
                      sample_rate=150e6)
        kwargs[field] = 0.0
        with pytest.raises(ConfigurationError) as info:
            ChirpWaveform(**kwargs).sample()
        assert info.value.parameter == field


class TestMatchedFilter:

    def test_unit_energy(self):
        match = ChirpWaveform(100e6, 0.5e-6, 150e6).matched_filter()
        assert np.sum(np.abs(match) ** 2) == pytest.approx(1.0)

    def test_time_reversed_conjugate(self):
        w = np.array([1 + 1j, 2 - 1j, 0.5j])
        expected = np.conj(w[::-1]) / np.linalg.norm(w)
        np.testing.assert_allclose(matched_filter(w), expected)

    def test_zero_energy(self):
        with pytest.raises(ConfigurationError):
            matched_filter(np.zeros(5))


class TestGenerateWaveforms:

    def test_buffers_appended_in_order(self):
        config = RadarConfig()
        store = BufferStore()
        wf, chirp, match = generate_waveforms(store, config)
        assert store.names() == ['metadata', 'chirp', 'match',
                                 'chirp_fft', 'match_fft']
        assert store.find('chirp').shape == (1, 75)
        assert store.find('match').shape == (1, 75)
        np.testing.assert_allclose(store.find('chirp_fft').data[0],
                                   np.fft.fft(chirp))
        assert config.derived.chirp_samples == 75

    def test_custom_waveform(self):
        config = RadarConfig()
        store = BufferStore()
        custom = ChirpWaveform(50e6, 0.2e-6, 150e6)
        generate_waveforms(store, config, custom)
        assert store.find('chirp').cols == 31
