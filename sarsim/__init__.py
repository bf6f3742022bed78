# -*- coding: utf-8 -*-
"""
sarsim - SAR simulation and Global Back-Projection imaging.

Simulates the raw returns of an idealized synthetic-aperture radar over a
point-like scene (or loads recorded raw data), pulse-compresses them,
forms a complex image by Global Back-Projection, and runs filter,
apodization and spectral stages. All stages exchange data through an
ordered store of named complex buffers, which is serialized to HDF5.

Dependencies
------------
numpy
scipy
h5py
pyyaml

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from sarsim.exceptions import (
    SarSimError,
    ValidationError,
    ConfigurationError,
    ProcessorError,
    StageOrderError,
    DependencyError,
    RadarFileError,
)
from sarsim.vocabulary import (
    BufferName,
    FilterPlacement,
    PipelineStage,
    RunMode,
    WindowType,
)
from sarsim.config import DerivedGeometry, RadarConfig
from sarsim.store import BufferStore, NamedBuffer
from sarsim.pipeline import RadarPipeline

__all__ = [
    'SarSimError',
    'ValidationError',
    'ConfigurationError',
    'ProcessorError',
    'StageOrderError',
    'DependencyError',
    'RadarFileError',
    'BufferName',
    'FilterPlacement',
    'PipelineStage',
    'RunMode',
    'WindowType',
    'DerivedGeometry',
    'RadarConfig',
    'BufferStore',
    'NamedBuffer',
    'RadarPipeline',
]
