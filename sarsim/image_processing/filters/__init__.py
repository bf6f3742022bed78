# -*- coding: utf-8 -*-
"""
Filters - Dimension-preserving filter hooks for radar data and images.

- ``CinSnowFilter``: phase-preserving magnitude median filter
- ``RFISuppression``: range-frequency notch for narrowband interference

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

from sarsim.image_processing.filters.cinsnow import CinSnowFilter
from sarsim.image_processing.filters.rfi import RFISuppression

__all__ = [
    'CinSnowFilter',
    'RFISuppression',
]
