# -*- coding: utf-8 -*-
"""
sarsim Exception Hierarchy - Domain-specific exceptions for SAR runs.

Provides a small exception hierarchy that lets the command-line front end
(or any other caller) tell configuration problems, unreadable radar files,
and stage-ordering defects apart from Python built-in exceptions. All
sarsim exceptions subclass both ``SarSimError`` and the appropriate
built-in exception for backward compatibility.

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

# Standard library
from typing import Optional


class SarSimError(Exception):
    """Base exception for all sarsim errors."""


class ValidationError(SarSimError, ValueError):
    """Invalid input data or parameters.

    Raised for shape mismatches, out-of-range parameters, invalid
    buffer names, and other input validation failures.
    """


class ConfigurationError(ValidationError):
    """A run cannot proceed with the given radar configuration.

    Fatal to the current run. Carries the pipeline stage and the
    offending parameter so the caller can report what to fix.

    Parameters
    ----------
    message : str
        Human-readable description of the problem.
    stage : str, optional
        Pipeline stage that detected the problem (e.g. ``'gbp'``).
    parameter : str, optional
        Configuration field or buffer at fault.
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        parameter: Optional[str] = None,
    ) -> None:
        self.stage = stage
        self.parameter = parameter
        prefix = ''
        if stage:
            prefix += f"[{stage}] "
        if parameter:
            prefix += f"{parameter}: "
        super().__init__(prefix + message)


class ProcessorError(SarSimError, RuntimeError):
    """Algorithm or processing failure during a pipeline stage.

    Raised when a stage encounters a non-recoverable error during
    execution (not an input validation issue).
    """


class StageOrderError(ProcessorError):
    """A stage ran before its predecessor populated its inputs.

    This is a programming defect, not a recoverable runtime condition.
    """


class DependencyError(SarSimError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a module requires an optional package (h5py) that
    is not installed.
    """


class RadarFileError(SarSimError, IOError):
    """Missing, unreadable, truncated, or inconsistent radar data file.

    Recoverable at the top level: the run is aborted cleanly and the
    caller decides whether to report and exit or ask for another file.
    """
