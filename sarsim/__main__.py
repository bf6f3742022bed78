# -*- coding: utf-8 -*-
"""
Module entry point: ``python -m sarsim``.

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

import sys

from sarsim.cli import main

sys.exit(main())
