# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums and buffer names for sarsim.

Defines the single source of truth for controlled vocabularies used across
the package: run modes, apodization windows, filter placement, pipeline
stages, processor categories, and the reserved names of the buffers that
stages exchange through the ``BufferStore``.

Author
------
Steven Siebert

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

from enum import Enum


class RunMode(Enum):
    """Top-level run selector.

    ``SIMULATE`` synthesizes a scene and its raw returns; ``PROCESS``
    ingests raw returns recorded in a file.
    """

    SIMULATE = "simulate"
    PROCESS = "process"


class WindowType(Enum):
    """Apodization windows available to post-processing."""

    UNIFORM = "uniform"
    HAMMING = "hamming"
    HANNING = "hanning"
    TAYLOR = "taylor"


class FilterPlacement(Enum):
    """Where the CinSnow / RFI hooks run in the pipeline.

    ``RAW`` filters the raw range-return image before pulse compression
    and image formation. ``IMAGE`` filters the backprojected image
    before spectral analysis.
    """

    RAW = "raw"
    IMAGE = "image"


class PipelineStage(Enum):
    """Pipeline states, in execution order."""

    START = "start"
    SIMULATE = "simulate"
    LOAD_RAW = "load_raw"
    FILTER = "filter"
    COMPRESS = "compress"
    FORM_IMAGE = "form_image"
    APODIZE = "apodize"
    SPECTRAL_ANALYSIS = "spectral_analysis"
    SERIALIZE = "serialize"
    END = "end"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    FFT = "fft"
    NOISE = "noise"


class BufferName:
    """Reserved buffer names exchanged between stages.

    Lookup in the store is first-match-wins, so no stage reuses one of
    these names for a different payload.
    """

    METADATA = 'metadata'
    CHIRP = 'chirp'
    MATCH = 'match'
    CHIRP_FFT = 'chirp_fft'
    MATCH_FFT = 'match_fft'
    COMPRESSED_PULSE = 'compressed_pulse'
    SCENE = 'scene'
    APERTURE = 'aperture'
    RADAR_IMAGE = 'radar_image'
    UNFILTERED_RADAR_IMAGE = 'unfiltered_radar_image'
    COMPRESSED_IMAGE = 'compressed_image'
    GBP = 'gbp'
    GBP_APODIZED = 'gbp_apodized'
    GBP_FFT = 'gbp_fft'
    GBP_FFT_APODIZED = 'gbp_fft_apodized'
