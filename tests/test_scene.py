# -*- coding: utf-8 -*-
"""
Scene Simulation Tests - Scene construction and simulated radar scan.

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

from sarsim.config import SPEED_OF_LIGHT, RadarConfig
from sarsim.exceptions import ConfigurationError, StageOrderError
from sarsim.image_formation.geometry import (
    ImageGrid,
    build_aperture_positions,
)
from sarsim.signal.compression import compress_image, compress_waveform
from sarsim.signal.waveform import ChirpWaveform, generate_waveforms
from sarsim.simulation.scene import (
    RANGE_GUARD_BINS,
    insert_waveform_in_scene,
    range_window,
    simulate_scan,
)
from sarsim.store import BufferStore


def _scene_store(config):
    store = BufferStore()
    generate_waveforms(store, config)
    compress_waveform(store, config)
    return store


class TestInsertWaveform:

    def test_peak_at_scene_centre(self):
        config = RadarConfig()
        store = _scene_store(config)
        scene = insert_waveform_in_scene(store, config)
        assert scene.shape == (256, 256)
        peak = np.unravel_index(np.argmax(np.abs(scene)), scene.shape)
        assert peak == (128, 128)

    def test_only_centre_row_populated(self):
        config = RadarConfig(scene_rows=9, scene_cols=151)
        store = _scene_store(config)
        scene = insert_waveform_in_scene(store, config)
        pulse = store.find('compressed_pulse').data[0]
        np.testing.assert_array_equal(scene[4, 1:150], pulse)
        assert np.count_nonzero(np.delete(scene, 4, axis=0)) == 0

    def test_sets_derived_dimensions(self):
        config = RadarConfig(scene_rows=20, scene_cols=160,
                             azimuth_spacing=0.5)
        store = _scene_store(config)
        insert_waveform_in_scene(store, config)
        assert config.derived.nrows == 20
        assert config.derived.ncols == 160
        assert config.derived.azimuth_spacing == 0.5

    def test_pulse_wider_than_scene(self):
        config = RadarConfig(scene_cols=100)
        store = _scene_store(config)
        with pytest.raises(ConfigurationError) as info:
            insert_waveform_in_scene(store, config)
        assert info.value.stage == 'scene_simulation'
        assert info.value.parameter == 'scene_cols'
        assert 'scene' not in store

    def test_requires_compressed_pulse(self):
        with pytest.raises(StageOrderError):
            insert_waveform_in_scene(BufferStore(), RadarConfig())


class TestRangeWindow:

    def test_covers_all_ranges(self):
        pixels = np.array([[[0.0, 100.0, 0.0], [0.0, 110.0, 0.0]]])
        positions = np.array([[0.0, 0.0, 0.0]])
        start, n_bins = range_window(pixels, positions, 1.0, 11, guard=2)
        assert start == pytest.approx(100.0 - 7.0)
        assert n_bins == 10 + 14 + 1


class TestSimulateScan:

    def test_shapes_and_derived(self, small_config):
        store = _scene_store(small_config)
        insert_waveform_in_scene(store, small_config)
        raw = simulate_scan(store, small_config)

        derived = small_config.derived
        assert raw.shape == (16, derived.n_range_bins)
        assert store.find('radar_image').shape == raw.shape
        assert store.find('aperture').shape == (16, 3)
        assert derived.n_aperture_positions == 16
        assert derived.range_spacing == pytest.approx(
            small_config.range_sample_spacing)
        assert store.names()[-2:] == ['aperture', 'radar_image']

    def test_aperture_positions(self, small_config):
        store = _scene_store(small_config)
        insert_waveform_in_scene(store, small_config)
        simulate_scan(store, small_config)
        aperture = store.find('aperture').data
        np.testing.assert_array_equal(aperture.imag, 0.0)
        np.testing.assert_allclose(aperture.real[:, 0],
                                   np.linspace(-20.0, 20.0, 16))
        np.testing.assert_array_equal(aperture.real[:, 1:], 0.0)

    def test_point_echo_compresses_at_its_range(self, point_config):
        store = BufferStore()
        generate_waveforms(store, point_config)
        scene = np.zeros((64, 64), dtype=np.complex128)
        scene[40, 20] = 1.0
        store.append('scene', scene)
        simulate_scan(store, point_config)
        compressed = compress_image(store, point_config)

        derived = point_config.derived
        grid = ImageGrid.from_config(point_config)
        target = grid.pixel_positions()[40, 20]
        positions = build_aperture_positions(point_config)
        for p in (0, 31, 63):
            r = np.linalg.norm(target - positions[p])
            expected = (r - derived.range_start) / derived.range_spacing
            assert abs(int(np.argmax(np.abs(compressed[p]))) - expected) <= 1

    def test_echo_carries_carrier_phase(self, point_config):
        store = BufferStore()
        scene = np.zeros((64, 64), dtype=np.complex128)
        scene[32, 32] = 1.0
        store.append('scene', scene)
        raw = simulate_scan(store, point_config)

        derived = point_config.derived
        target = ImageGrid.from_config(point_config).pixel_positions()[32, 32]
        position = build_aperture_positions(point_config)[0]
        r = np.linalg.norm(target - position)
        f = (r - derived.range_start) / derived.range_spacing
        n = int(np.floor(f))
        wf = ChirpWaveform.from_config(point_config)
        expected = (np.exp(-1j * 4 * np.pi * 1e9 * r / SPEED_OF_LIGHT)
                    * wf.evaluate(np.array([(n - f) / 150e6]))[0])
        assert raw[0, n] == pytest.approx(expected)

    def test_guard_band_is_empty(self, point_config):
        store = BufferStore()
        scene = np.zeros((64, 64), dtype=np.complex128)
        scene[32, 32] = 1.0
        store.append('scene', scene)
        raw = simulate_scan(store, point_config)
        np.testing.assert_array_equal(raw[:, :RANGE_GUARD_BINS], 0.0)
        np.testing.assert_array_equal(raw[:, -RANGE_GUARD_BINS:], 0.0)

    def test_requires_scene(self, small_config):
        with pytest.raises(StageOrderError):
            simulate_scan(BufferStore(), small_config)
