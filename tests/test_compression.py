# -*- coding: utf-8 -*-
"""
Pulse Compression Tests - FFT correlation, alignment and resolution.

Dependencies
------------
pytest
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

import numpy as np
import pytest

from sarsim.config import SPEED_OF_LIGHT, RadarConfig
from sarsim.exceptions import StageOrderError, ValidationError
from sarsim.signal.compression import (
    compress_image,
    compress_waveform,
    compressed_pulse_resolution,
    correlate_direct,
    correlate_fft,
    mainlobe_width,
)
from sarsim.signal.waveform import ChirpWaveform, generate_waveforms
from sarsim.store import BufferStore


@pytest.fixture
def chirp():
    return ChirpWaveform(100e6, 0.5e-6, 150e6).sample()


class TestCorrelation:

    @pytest.mark.parametrize('mode', ['full', 'same'])
    def test_fft_matches_direct(self, rng, mode):
        x = rng.standard_normal(200) + 1j * rng.standard_normal(200)
        h = rng.standard_normal(31) + 1j * rng.standard_normal(31)
        np.testing.assert_allclose(
            correlate_fft(x, h, mode), correlate_direct(x, h, mode),
            atol=1e-10,
        )

    def test_output_lengths(self, chirp):
        match = np.conj(chirp[::-1])
        x = np.zeros(300, dtype=np.complex128)
        assert correlate_fft(x, match, 'full').size == 300 + 75 - 1
        assert correlate_fft(x, match, 'same').size == 300

    def test_invalid_mode(self, chirp):
        with pytest.raises(ValidationError):
            correlate_fft(chirp, chirp, 'valid')

    def test_empty_input(self):
        with pytest.raises(ValidationError):
            correlate_fft(np.zeros(0), np.ones(3))

    def test_same_mode_keeps_echo_position(self, chirp):
        match = np.conj(chirp[::-1]) / np.linalg.norm(chirp)
        x = np.zeros(400, dtype=np.complex128)
        centre = 163
        x[centre - 37:centre + 38] = chirp
        out = correlate_fft(x, match, 'same')
        assert int(np.argmax(np.abs(out))) == centre

    def test_axis_argument(self, rng, chirp):
        match = np.conj(chirp[::-1])
        rows = rng.standard_normal((4, 120)) + 0j
        by_row = correlate_fft(rows, match, 'same', axis=1)
        by_col = correlate_fft(rows.T, match, 'same', axis=0)
        np.testing.assert_allclose(by_row, by_col.T, atol=1e-10)


class TestCompressWaveform:

    def test_peak_at_centre_with_full_energy(self):
        config = RadarConfig()
        store = BufferStore()
        _, chirp, _ = generate_waveforms(store, config)
        compress_waveform(store, config)
        pulse = store.find('compressed_pulse').data[0]
        assert pulse.size == 2 * 75 - 1
        assert int(np.argmax(np.abs(pulse))) == 74
        assert np.abs(pulse[74]) == pytest.approx(np.linalg.norm(chirp))

    def test_resolution_reported(self):
        config = RadarConfig()
        store = BufferStore()
        generate_waveforms(store, config)
        resolution = compress_waveform(store, config)
        assert resolution == pytest.approx(SPEED_OF_LIGHT / 200e6)
        assert config.derived.pulse_resolution == resolution

    def test_narrower_bandwidth_wider_mainlobe(self):
        widths = []
        for bandwidth in (100e6, 25e6):
            config = RadarConfig(bandwidth=bandwidth)
            store = BufferStore()
            generate_waveforms(store, config)
            compress_waveform(store, config)
            widths.append(
                mainlobe_width(store.find('compressed_pulse').data))
        assert widths[1] > 1.5 * widths[0]

    def test_requires_waveforms(self):
        with pytest.raises(StageOrderError):
            compress_waveform(BufferStore(), RadarConfig())

    def test_resolution_rejects_zero_bandwidth(self):
        with pytest.raises(ValidationError):
            compressed_pulse_resolution(0.0)


class TestCompressImage:

    def test_same_shape_and_alignment(self, chirp):
        config = RadarConfig()
        store = BufferStore()
        generate_waveforms(store, config)
        raw = np.zeros((3, 250), dtype=np.complex128)
        centres = [60, 120, 180]
        for row, c in enumerate(centres):
            raw[row, c - 37:c + 38] = chirp
        store.append('radar_image', raw)
        out = compress_image(store, config)
        assert out.shape == raw.shape
        assert store.find('compressed_image').shape == (3, 250)
        np.testing.assert_array_equal(
            np.argmax(np.abs(out), axis=1), centres)

    def test_requires_raw_image(self):
        config = RadarConfig()
        store = BufferStore()
        generate_waveforms(store, config)
        with pytest.raises(StageOrderError):
            compress_image(store, config)
