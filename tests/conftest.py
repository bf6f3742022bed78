# -*- coding: utf-8 -*-
"""
Shared fixtures for the sarsim test suite.

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


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def small_config(tmp_path):
    """Scene just wide enough for the default compressed pulse."""
    return RadarConfig(
        output_filename=tmp_path / 'small.h5',
        scene_rows=32,
        scene_cols=160,
        n_aperture_positions=16,
    )


@pytest.fixture
def point_config():
    """64 x 64 scene at 500 m for point-target imaging."""
    return RadarConfig(
        scene_rows=64,
        scene_cols=64,
        scene_center_range=500.0,
        n_aperture_positions=64,
        aperture_length=40.0,
    )
