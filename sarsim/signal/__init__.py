# -*- coding: utf-8 -*-
"""
Signal - Waveform synthesis and pulse compression.

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

from sarsim.signal.waveform import (
    ChirpWaveform,
    generate_waveforms,
    matched_filter,
)
from sarsim.signal.compression import (
    compress_image,
    compress_waveform,
    compressed_pulse_resolution,
    correlate_direct,
    correlate_fft,
    mainlobe_width,
)

__all__ = [
    'ChirpWaveform',
    'generate_waveforms',
    'matched_filter',
    'compress_image',
    'compress_waveform',
    'compressed_pulse_resolution',
    'correlate_direct',
    'correlate_fft',
    'mainlobe_width',
]
