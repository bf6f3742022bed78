# -*- coding: utf-8 -*-
"""
SAR Image Formation - Form complex SAR imagery from range profiles.

- ``ImageGrid``, ``ApertureGeometry``: scene grid and antenna track.
- ``GlobalBackProjection``: direct time-domain backprojection.

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

from sarsim.image_formation.base import ImageFormationAlgorithm
from sarsim.image_formation.geometry import (
    ApertureGeometry,
    ImageGrid,
    build_aperture_positions,
)
from sarsim.image_formation.gbp import GlobalBackProjection, form_gbp_image

__all__ = [
    'ImageFormationAlgorithm',
    'ApertureGeometry',
    'ImageGrid',
    'build_aperture_positions',
    'GlobalBackProjection',
    'form_gbp_image',
]
