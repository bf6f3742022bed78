# -*- coding: utf-8 -*-
"""
IO - Serialization of the named-buffer store.

Dependencies
------------
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

from sarsim.IO.base import StoreReader, StoreWriter
from sarsim.IO.hdf5 import (
    RAW_INPUT_BUFFERS,
    HDF5StoreReader,
    HDF5StoreWriter,
    read_radar_file,
    write_store,
)

__all__ = [
    'StoreReader',
    'StoreWriter',
    'RAW_INPUT_BUFFERS',
    'HDF5StoreReader',
    'HDF5StoreWriter',
    'read_radar_file',
    'write_store',
]
