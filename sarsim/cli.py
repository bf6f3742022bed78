# -*- coding: utf-8 -*-
"""
Command-Line Interface - Run a SAR simulation or process recorded data.

Usage::

    sarsim simulate [--config run.yaml] [-o out.h5] [options]
    sarsim process RAW_FILE [--config run.yaml] [-o out.h5] [options]

Command-line options override values from the YAML configuration file,
which override the built-in defaults. Exit status is 0 on success and 1
when the run fails.

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
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# sarsim internal
from sarsim import __version__
from sarsim.config import RadarConfig
from sarsim.exceptions import SarSimError
from sarsim.pipeline import RadarPipeline
from sarsim.vocabulary import FilterPlacement, RunMode, WindowType

logger = logging.getLogger(__name__)


# -- CLI ------------------------------------------------------------


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file.",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output HDF5 file (default: sar_data.h5).",
    )
    parser.add_argument(
        "--cinsnow",
        action="store_true",
        default=None,
        help="Run the CinSnow filter.",
    )
    parser.add_argument(
        "--rfi",
        action="store_true",
        default=None,
        help="Run RFI suppression.",
    )
    parser.add_argument(
        "--no-pulse-compression",
        action="store_false",
        dest="pulse_compress_image",
        default=None,
        help="Backproject the raw image without pulse compression.",
    )
    parser.add_argument(
        "--filter-placement",
        choices=[p.value for p in FilterPlacement],
        default=None,
        help="Filter the raw data (default) or the formed image.",
    )
    parser.add_argument(
        "--apodization",
        choices=[w.value for w in WindowType],
        default=None,
        help="Apodization window (default: none).",
    )
    parser.add_argument(
        "--apodize-spectrum",
        action="store_true",
        default=None,
        help="Apply the apodization window to the 2D spectrum.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``sarsim`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="sarsim",
        description="Simulate SAR raw data and form images by Global "
                    "Back-Projection.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(dest="mode", required=True)

    simulate = sub.add_parser(
        RunMode.SIMULATE.value,
        help="Simulate a point scene, its raw returns and the GBP image.",
    )
    _add_common_arguments(simulate)

    process = sub.add_parser(
        RunMode.PROCESS.value,
        help="Form an image from the raw data of a previous run.",
    )
    process.add_argument(
        "radar_data_filename",
        type=Path,
        help="HDF5 file holding the raw radar data.",
    )
    _add_common_arguments(process)
    return parser


def config_from_args(args: argparse.Namespace) -> RadarConfig:
    """Merge the YAML file (if any) with command-line overrides."""
    overrides: Dict[str, Any] = {'mode': args.mode}
    if getattr(args, 'radar_data_filename', None) is not None:
        overrides['radar_data_filename'] = args.radar_data_filename
    for attr, key in (('output', 'output_filename'),
                      ('cinsnow', 'filter_cinsnow'),
                      ('rfi', 'filter_rfi'),
                      ('pulse_compress_image', 'pulse_compress_image'),
                      ('filter_placement', 'filter_placement'),
                      ('apodization', 'apodization'),
                      ('apodize_spectrum', 'apodize_spectrum')):
        value = getattr(args, attr)
        if value is not None:
            overrides[key] = value
    if args.config is not None:
        return RadarConfig.from_yaml(args.config, **overrides)
    return RadarConfig.from_dict(overrides)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run ``sarsim`` with *argv* (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = config_from_args(args)
        with RadarPipeline(config).run() as store:
            names = store.names()
    except SarSimError as exc:
        logger.error("%s failed: %s", args.mode, exc)
        return 1

    logger.info("Wrote %d buffers: %s", len(names), ', '.join(names))
    return 0


if __name__ == "__main__":
    sys.exit(main())
