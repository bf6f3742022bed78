# -*- coding: utf-8 -*-
"""
HDF5 Store IO Tests - Serialization, reading and corrupt-file handling.

Uses stores written by the simulate pipeline and hand-built stores.

Dependencies
------------
pytest
h5py

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

try:
    import h5py
    _HAS_H5PY = True
except ImportError:
    _HAS_H5PY = False

from sarsim.config import RadarConfig
from sarsim.exceptions import ProcessorError, RadarFileError
from sarsim.IO import (
    HDF5StoreReader,
    HDF5StoreWriter,
    read_radar_file,
    write_store,
)
from sarsim.pipeline import RadarPipeline
from sarsim.store import BufferStore

pytestmark = pytest.mark.skipif(
    not _HAS_H5PY, reason="h5py not installed"
)


@pytest.fixture
def simulated(small_config):
    """Run a small simulation; return its file and a copy of every buffer."""
    with RadarPipeline(small_config).run() as store:
        buffers = [(buf.name, buf.data.copy()) for buf in store]
    return small_config.output_filename, buffers


def _write_raw_store(path, buffers, config=None):
    store = BufferStore()
    for name, data in buffers:
        store.append(name, data)
    store.build_directory()
    write_store(store, path, config or RadarConfig())
    store.release()
    return path


class TestHDF5StoreWriter:

    def test_file_layout(self, simulated):
        path, buffers = simulated
        with h5py.File(str(path), 'r') as f:
            assert f.attrs['format'] == 'sarsim'
            assert f.attrs['buffer_count'] == len(buffers)
            group = f['buffers']
            assert sorted(group.keys()) == [
                str(i).zfill(3) for i in range(len(buffers))]
            assert group['000'].attrs['name'] == 'metadata'
            assert group['001'].attrs['name'] == 'chirp'
            assert group['001'].attrs['cols'] == 75

    def test_requires_directory(self, tmp_path):
        store = BufferStore()
        store.append('chirp', np.ones(3))
        with pytest.raises(ProcessorError):
            HDF5StoreWriter(tmp_path / 'x.h5').write(store)

    def test_failed_write_leaves_no_file(self, tmp_path):
        path = tmp_path / 'bad.h5'
        store = BufferStore()
        store.append('chirp', np.ones(3))
        store.build_directory()
        writer = HDF5StoreWriter(path, metadata={'bad': object()})
        with pytest.raises(RadarFileError):
            writer.write(store)
        assert not path.exists()

    def test_compression(self, tmp_path):
        path = tmp_path / 'gz.h5'
        store = BufferStore()
        store.append('scene', np.ones((16, 16)))
        store.build_directory()
        with HDF5StoreWriter(path, compression='gzip') as writer:
            writer.write(store)
        with h5py.File(str(path), 'r') as f:
            assert f['buffers']['001'].compression == 'gzip'


class TestHDF5StoreReader:

    def test_round_trip(self, simulated):
        path, buffers = simulated
        with HDF5StoreReader(path) as reader:
            store = reader.read_store()
        assert store.names() == [name for name, _ in buffers]
        assert not store.head.populated
        for name, data in buffers[1:]:
            np.testing.assert_array_equal(store.find(name).data, data)
        store.release()

    def test_radar_parameters(self, simulated):
        path, _ = simulated
        with HDF5StoreReader(path) as reader:
            params = reader.radar_parameters()
        assert params['bandwidth'] == 100e6
        assert params['scene_cols'] == 160
        assert params['derived_n_aperture_positions'] == 16
        assert 'format' not in params

    def test_name_selection(self, simulated):
        path, _ = simulated
        with HDF5StoreReader(path) as reader:
            store = reader.read_store(names=['aperture', 'gbp'])
        assert store.names() == ['metadata', 'aperture', 'gbp']

    def test_missing_file(self, tmp_path):
        with pytest.raises(RadarFileError, match="not found"):
            HDF5StoreReader(tmp_path / 'absent.h5')

    def test_not_hdf5(self, tmp_path):
        path = tmp_path / 'garbage.h5'
        path.write_bytes(b'not an hdf5 file at all')
        with pytest.raises(RadarFileError):
            HDF5StoreReader(path)

    def test_foreign_format(self, tmp_path):
        path = tmp_path / 'other.h5'
        with h5py.File(str(path), 'w') as f:
            f.attrs['format'] = 'sicd'
        with pytest.raises(RadarFileError, match="not a sarsim file"):
            HDF5StoreReader(path)

    def test_truncated_file(self, simulated):
        path, _ = simulated
        with h5py.File(str(path), 'a') as f:
            del f['buffers']['003']
        with HDF5StoreReader(path) as reader:
            with pytest.raises(RadarFileError, match="buffer_count"):
                reader.read_store()

    def test_inconsistent_shape(self, simulated):
        path, _ = simulated
        with h5py.File(str(path), 'a') as f:
            f['buffers']['001'].attrs['rows'] = 7
        with HDF5StoreReader(path) as reader:
            with pytest.raises(RadarFileError, match="inconsistent"):
                reader.read_store()


class TestReadRadarFile:

    def test_loads_raw_inputs(self, simulated, tmp_path):
        path, buffers = simulated
        caller = RadarConfig(mode='process', radar_data_filename=path,
                             output_filename=tmp_path / 'out.h5',
                             filter_rfi=True, scene_rows=8)
        store, config = read_radar_file(path, caller)
        assert store.names() == ['metadata', 'chirp', 'match', 'aperture',
                                 'radar_image']
        assert config.scene_rows == 32
        assert config.filter_rfi is True
        assert config.derived.n_aperture_positions == 16
        raw = dict(buffers)['radar_image']
        np.testing.assert_array_equal(store.find('radar_image').data, raw)
        store.release()

    def test_missing_raw_buffer(self, tmp_path):
        path = _write_raw_store(tmp_path / 'chirp_only.h5',
                                [('chirp', np.ones(75))])
        with pytest.raises(RadarFileError, match="missing buffer"):
            read_radar_file(path, RadarConfig())

    def test_missing_range_window(self, tmp_path):
        path = _write_raw_store(tmp_path / 'no_window.h5', [
            ('aperture', np.zeros((2, 3))),
            ('radar_image', np.zeros((2, 10))),
        ])
        with pytest.raises(RadarFileError, match="derived_range_start"):
            read_radar_file(path, RadarConfig())

    def test_raw_shape_disagrees_with_window(self, tmp_path):
        config = RadarConfig()
        config.derived.range_start = 900.0
        config.derived.range_spacing = 1.0
        config.derived.n_range_bins = 12
        path = _write_raw_store(tmp_path / 'mismatch.h5', [
            ('aperture', np.zeros((2, 3))),
            ('radar_image', np.zeros((2, 10))),
        ], config)
        with pytest.raises(RadarFileError, match="radar_image is 2x10"):
            read_radar_file(path, RadarConfig())

    def test_invalid_recorded_parameters(self, tmp_path):
        config = RadarConfig(bandwidth=-1.0)
        config.derived.range_start = 900.0
        config.derived.range_spacing = 1.0
        config.derived.n_range_bins = 10
        path = _write_raw_store(tmp_path / 'invalid.h5', [
            ('aperture', np.zeros((2, 3))),
            ('radar_image', np.zeros((2, 10))),
        ], config)
        with pytest.raises(RadarFileError, match="bandwidth"):
            read_radar_file(path, RadarConfig())
