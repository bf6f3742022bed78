# -*- coding: utf-8 -*-
"""
Radar Pipeline - End-to-end SAR simulation and image formation driver.

Runs one pass of the state machine::

    START -> SIMULATE | LOAD_RAW -> [FILTER] -> [COMPRESS] -> FORM_IMAGE
          -> [FILTER] -> [APODIZE] -> SPECTRAL_ANALYSIS -> SERIALIZE -> END

over a single ``BufferStore``. The configuration is validated once, at
construction. Every stage reads its inputs from the store by name, so a
stage run out of order raises ``StageOrderError``.

Simulate mode synthesizes the chirp and matched filter, compresses the
pulse, embeds it in a scene and simulates the radar scan. Process mode
loads the raw inputs and radar parameters of a previous run from its
HDF5 file instead.

The filter hooks (CinSnow, then RFI) run where ``filter_placement``
says: on the raw image before pulse compression (``raw``, keeping an
``unfiltered_radar_image`` copy) or on the formed image (``image``).

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

# Standard library
import logging
from typing import Callable, List, Optional

# Third-party
import numpy as np

# sarsim internal
from sarsim.config import RadarConfig
from sarsim.image_formation.gbp import form_gbp_image
from sarsim.image_processing.base import ImageTransform
from sarsim.image_processing.filters import CinSnowFilter, RFISuppression
from sarsim.image_processing.pipeline import Pipeline
from sarsim.image_processing.spectral import (
    apodize_image,
    apodize_spectrum,
    spectral_analysis,
)
from sarsim.IO.hdf5 import read_radar_file, write_store
from sarsim.signal.compression import compress_image, compress_waveform
from sarsim.signal.waveform import ChirpWaveform, generate_waveforms
from sarsim.simulation.scene import insert_waveform_in_scene, simulate_scan
from sarsim.store import BufferStore
from sarsim.vocabulary import (
    BufferName,
    FilterPlacement,
    PipelineStage,
    RunMode,
)

logger = logging.getLogger(__name__)


class RadarPipeline:
    """Drive one simulate or process run from configuration to file.

    Parameters
    ----------
    config : RadarConfig
        Run configuration. Validated here; invalid configurations raise
        ``ConfigurationError`` before any stage runs.
    cinsnow_filter : ImageTransform, optional
        Replacement CinSnow hook. Defaults to ``CinSnowFilter`` with the
        configured kernel size.
    rfi_filter : ImageTransform, optional
        Replacement RFI hook. Defaults to ``RFISuppression`` with the
        configured threshold.
    waveform : ChirpWaveform, optional
        Custom transmit pulse for simulate mode.
    progress_callback : callable, optional
        Forwarded to image formation; called with the completed fraction.

    Examples
    --------
    >>> config = RadarConfig(output_filename='run.h5', apodization='taylor')
    >>> with RadarPipeline(config).run() as store:
    ...     image = store.find('gbp').data
    """

    def __init__(
        self,
        config: RadarConfig,
        cinsnow_filter: Optional[ImageTransform] = None,
        rfi_filter: Optional[ImageTransform] = None,
        waveform: Optional[ChirpWaveform] = None,
        progress_callback: Optional[Callable[[float], None]] = None,
    ) -> None:
        config.validate()
        self.config = config
        self.cinsnow_filter = cinsnow_filter or CinSnowFilter(
            kernel_size=config.cinsnow_kernel_size)
        self.rfi_filter = rfi_filter or RFISuppression(
            threshold=config.rfi_threshold)
        self.waveform = waveform
        self.progress_callback = progress_callback
        self.history: List[PipelineStage] = [PipelineStage.START]

    def _enter(self, stage: PipelineStage) -> None:
        self.history.append(stage)
        logger.debug("Entering stage %s", stage.value)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def run(self) -> BufferStore:
        """Execute every stage and serialize the result.

        Returns
        -------
        BufferStore
            The populated store, now owned by the caller.

        Raises
        ------
        SarSimError
            From any stage. The store is released before the error
            propagates and no output file is left behind.
        """
        mode = self.config.mode
        logger.info("Starting %s run", mode.value)
        store: Optional[BufferStore] = None
        try:
            if mode is RunMode.PROCESS:
                store = self.load_raw()
            else:
                store = BufferStore()
                self.simulate(store)
            self.process(store)
            self.serialize(store)
        except Exception:
            if store is not None:
                store.release()
            raise
        self._enter(PipelineStage.END)
        logger.info("Run complete: %s", self.config.output_filename)
        return store

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def simulate(self, store: BufferStore) -> None:
        """Synthesize waveforms, scene and raw returns into *store*."""
        self._enter(PipelineStage.SIMULATE)
        waveform, _, _ = generate_waveforms(store, self.config, self.waveform)
        compress_waveform(store, self.config)
        insert_waveform_in_scene(store, self.config)
        simulate_scan(store, self.config, waveform)

    def load_raw(self) -> BufferStore:
        """Load the raw inputs named by ``radar_data_filename``.

        Replaces ``self.config`` with the configuration recorded in the
        file (selection fields kept from the caller).
        """
        self._enter(PipelineStage.LOAD_RAW)
        store, self.config = read_radar_file(
            self.config.radar_data_filename, self.config)
        return store

    def apply_filters(self, store: BufferStore, target: str) -> None:
        """Run the enabled filter hooks in place on buffer *target*.

        CinSnow runs before RFI. When *target* is the raw image, an
        ``unfiltered_radar_image`` copy is appended first.
        """
        steps = []
        if self.config.filter_cinsnow:
            steps.append(self.cinsnow_filter)
        if self.config.filter_rfi:
            steps.append(self.rfi_filter)
        if not steps:
            return

        self._enter(PipelineStage.FILTER)
        buf = store.require(target, 'filter')
        if (target == BufferName.RADAR_IMAGE
                and BufferName.UNFILTERED_RADAR_IMAGE not in store):
            store.append(BufferName.UNFILTERED_RADAR_IMAGE, buf.data)

        filtered = Pipeline(steps).apply(buf.data)
        buf.overwrite(filtered)
        logger.info(
            "Filtered %r with %s",
            target, ', '.join(type(s).__name__ for s in steps),
        )

    def process(self, store: BufferStore) -> np.ndarray:
        """Filter, compress, image and analyse the raw data in *store*.

        Returns
        -------
        np.ndarray
            The formed image.
        """
        config = self.config
        if config.filter_placement is FilterPlacement.RAW:
            self.apply_filters(store, BufferName.RADAR_IMAGE)

        if config.pulse_compress_image:
            self._enter(PipelineStage.COMPRESS)
            if BufferName.MATCH not in store:
                logger.info("No matched filter in store; synthesizing one")
                waveform = self.waveform or ChirpWaveform.from_config(config)
                store.append(BufferName.MATCH, waveform.matched_filter())
            compress_image(store, config)

        self._enter(PipelineStage.FORM_IMAGE)
        form_gbp_image(
            store, config, progress_callback=self.progress_callback)

        if config.filter_placement is FilterPlacement.IMAGE:
            self.apply_filters(store, BufferName.GBP)

        if config.apodization is not None and not config.apodize_spectrum:
            self._enter(PipelineStage.APODIZE)
            apodize_image(store, config)

        self._enter(PipelineStage.SPECTRAL_ANALYSIS)
        spectral_analysis(store, config)
        if config.apodization is not None and config.apodize_spectrum:
            self._enter(PipelineStage.APODIZE)
            apodize_spectrum(store, config)
        return store.find(BufferName.GBP).data

    def serialize(self, store: BufferStore) -> None:
        """Build the directory and write every buffer to the output file."""
        self._enter(PipelineStage.SERIALIZE)
        store.build_directory()
        write_store(store, self.config.output_filename, self.config)
