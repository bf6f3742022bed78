# -*- coding: utf-8 -*-
"""
Simulation - Synthetic scene and radar scan.

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

from sarsim.simulation.scene import (
    RANGE_GUARD_BINS,
    insert_waveform_in_scene,
    range_window,
    simulate_scan,
)

__all__ = [
    'RANGE_GUARD_BINS',
    'insert_waveform_in_scene',
    'range_window',
    'simulate_scan',
]
