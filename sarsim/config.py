# -*- coding: utf-8 -*-
"""
Radar Configuration - Operating parameters and derived geometry for a run.

``RadarConfig`` is an immutable record of everything the caller selects:
run mode, file names, stage switches, waveform and scene/aperture sizing.
It is passed by reference to every stage. Quantities computed while the
pipeline runs (pulse resolution, image dimensions, the raw range window)
live in the mutable ``DerivedGeometry`` record attached as
``config.derived``; only the stage that owns a derived field writes it.

Configurations can be built directly, from a dictionary, or from a YAML
file::

    mode: simulate
    output_filename: run.h5
    filter_rfi: true
    apodization: hamming
    bandwidth: 1.0e+8

Dependencies
------------
pyyaml

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
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# Third-party
import numpy as np
import yaml

# sarsim internal
from sarsim.exceptions import ConfigurationError
from sarsim.vocabulary import FilterPlacement, RunMode, WindowType

# Speed of light (m/s)
SPEED_OF_LIGHT = 299792458.0

#: Fields that describe the radar and the collection geometry. In process
#: mode they are taken from the raw-data file rather than the caller.
RADAR_PARAMETER_FIELDS = (
    'center_frequency',
    'bandwidth',
    'pulse_duration',
    'sample_rate',
    'scene_rows',
    'scene_cols',
    'azimuth_spacing',
    'scene_center_range',
    'altitude',
    'n_aperture_positions',
    'aperture_length',
    'phase_sign',
)


@dataclass
class DerivedGeometry:
    """Values computed by pipeline stages and consumed by later ones.

    Every field starts unset (``None``); the owning stage fills it in.
    """

    pulse_resolution: Optional[float] = None
    """Compressed pulse range resolution ``c / (2B)`` in metres
    (pulse compression)."""

    chirp_samples: Optional[int] = None
    """Number of samples in the transmitted chirp (waveform synthesis)."""

    nrows: Optional[int] = None
    """Formed image rows, along-track (scene simulation or file load)."""

    ncols: Optional[int] = None
    """Formed image columns, range (scene simulation or file load)."""

    range_spacing: Optional[float] = None
    """Raw range-bin spacing in metres (radar scan or file load)."""

    range_start: Optional[float] = None
    """Slant range of raw range bin 0 in metres (radar scan or file load)."""

    n_range_bins: Optional[int] = None
    """Range bins per raw profile (radar scan or file load)."""

    n_aperture_positions: Optional[int] = None
    """Number of aperture positions actually recorded."""

    azimuth_spacing: Optional[float] = None
    """Along-track pixel spacing of the image grid in metres."""

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only, for serialization."""
        return {k: v for k, v in dataclasses.asdict(self).items()
                if v is not None}


_FLOAT_FIELDS = (
    'center_frequency', 'bandwidth', 'pulse_duration', 'sample_rate',
    'azimuth_spacing', 'scene_center_range', 'altitude', 'aperture_length',
    'rfi_threshold',
)


def _coerce_enum(enum_cls, value, parameter: str):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        options = [m.value for m in enum_cls]
        raise ConfigurationError(
            f"{value!r} is not one of {options}",
            stage='config', parameter=parameter,
        ) from None


@dataclass(frozen=True)
class RadarConfig:
    """Immutable radar run configuration.

    Parameters
    ----------
    mode : RunMode or str
        ``'simulate'`` or ``'process'``.
    radar_data_filename : str or Path, optional
        Raw-data file to ingest. Required in process mode.
    output_filename : str or Path
        Destination of the serialized buffer store.
    filter_cinsnow, filter_rfi : bool
        Run the CinSnow / RFI-suppression hooks.
    pulse_compress_image : bool
        Pulse-compress the raw image along range before backprojection.
    filter_placement : FilterPlacement or str
        ``'raw'`` (before compression and GBP) or ``'image'`` (after GBP).
    apodization : WindowType or str, optional
        Window for apodization, or ``None`` to skip.
    apodize_spectrum : bool
        Apply the window to the 2D spectrum instead of the image.
    center_frequency : float
        Carrier frequency in Hz.
    bandwidth : float
        Swept chirp bandwidth in Hz.
    pulse_duration : float
        Chirp duration in seconds.
    sample_rate : float
        Complex baseband sample rate in Hz.
    scene_rows, scene_cols : int
        Simulated scene (and formed image) size, rows along-track.
    azimuth_spacing : float, optional
        Along-track pixel spacing in metres; defaults to the range
        sample spacing.
    scene_center_range : float
        Ground range from the track to the scene centre in metres.
    altitude : float
        Platform height above the scene plane in metres.
    n_aperture_positions : int
        Antenna positions along the synthetic aperture.
    aperture_length : float
        Length of the synthetic aperture in metres.
    phase_sign : int
        Sign of the carrier phase recorded in the raw data, ``-1`` or
        ``+1``.
    cinsnow_kernel_size : int
        Neighbourhood of the default CinSnow filter (odd, >= 3).
    rfi_threshold : float
        Power ratio over the median spectrum at which the default RFI
        filter notches a range-frequency bin.
    """

    mode: Union[RunMode, str] = RunMode.SIMULATE
    radar_data_filename: Optional[Union[str, Path]] = None
    output_filename: Union[str, Path] = 'sar_data.h5'

    filter_cinsnow: bool = False
    filter_rfi: bool = False
    pulse_compress_image: bool = True
    filter_placement: Union[FilterPlacement, str] = FilterPlacement.RAW
    apodization: Optional[Union[WindowType, str]] = None
    apodize_spectrum: bool = False

    center_frequency: float = 1.0e9
    bandwidth: float = 100.0e6
    pulse_duration: float = 0.5e-6
    sample_rate: float = 150.0e6

    scene_rows: int = 256
    scene_cols: int = 256
    azimuth_spacing: Optional[float] = None
    scene_center_range: float = 1000.0
    altitude: float = 0.0
    n_aperture_positions: int = 64
    aperture_length: float = 40.0
    phase_sign: int = -1

    cinsnow_kernel_size: int = 3
    rfi_threshold: float = 10.0

    derived: DerivedGeometry = field(
        default_factory=DerivedGeometry, init=False, compare=False,
        repr=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'mode', _coerce_enum(RunMode, self.mode, 'mode'))
        object.__setattr__(
            self, 'filter_placement',
            _coerce_enum(FilterPlacement, self.filter_placement,
                         'filter_placement'))
        object.__setattr__(
            self, 'apodization',
            _coerce_enum(WindowType, self.apodization, 'apodization'))
        if self.radar_data_filename is not None:
            object.__setattr__(
                self, 'radar_data_filename', Path(self.radar_data_filename))
        object.__setattr__(self, 'output_filename', Path(self.output_filename))
        # YAML 1.1 reads exponents without a sign (1e8) as strings
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                try:
                    object.__setattr__(self, name, float(value))
                except ValueError:
                    raise ConfigurationError(
                        f"expected a number, got {value!r}",
                        stage='config', parameter=name,
                    ) from None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'RadarConfig':
        """Build a configuration from a mapping of field values.

        Raises
        ------
        ConfigurationError
            If *values* contains unknown keys.
        """
        known = {f.name for f in dataclasses.fields(cls) if f.init}
        known.discard('derived')
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {unknown}",
                stage='config',
            )
        return cls(**dict(values))

    @classmethod
    def from_yaml(
        cls,
        filepath: Union[str, Path],
        **overrides: Any,
    ) -> 'RadarConfig':
        """Load a configuration from a YAML file.

        Parameters
        ----------
        filepath : str or Path
            YAML file holding a mapping of field names to values.
        **overrides
            Field values that take precedence over the file.

        Raises
        ------
        ConfigurationError
            If the file is missing, is not a mapping, or holds unknown
            keys.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise ConfigurationError(
                f"Configuration file not found: {filepath}",
                stage='config',
            )
        with open(filepath) as f:
            values = yaml.safe_load(f) or {}
        if not isinstance(values, dict):
            raise ConfigurationError(
                f"Configuration file {filepath} must hold a mapping",
                stage='config',
            )
        values.update(overrides)
        return cls.from_dict(values)

    def with_radar_parameters(
        self,
        parameters: Mapping[str, Any],
    ) -> 'RadarConfig':
        """Return a copy whose radar and geometry fields come from *parameters*.

        Selection fields (mode, file names, stage switches) are kept.
        The copy gets a fresh ``DerivedGeometry`` populated from any
        derived values present in *parameters*.
        """
        updates = {k: parameters[k] for k in RADAR_PARAMETER_FIELDS
                   if k in parameters}
        derived_names = {f.name for f in dataclasses.fields(DerivedGeometry)}
        derived = DerivedGeometry(**{
            k[len('derived_'):]: v for k, v in parameters.items()
            if k.startswith('derived_') and k[len('derived_'):] in derived_names
        })
        config = dataclasses.replace(self, **updates)
        object.__setattr__(config, 'derived', derived)
        return config

    def radar_parameters(self) -> Dict[str, Any]:
        """Radar/geometry fields plus set derived values, flat.

        Derived values are prefixed with ``derived_``. ``None`` values are
        omitted so the result can be stored as HDF5 attributes.
        """
        params = {k: getattr(self, k) for k in RADAR_PARAMETER_FIELDS
                  if getattr(self, k) is not None}
        for k, v in self.derived.to_dict().items():
            params[f'derived_{k}'] = v
        return params

    # ------------------------------------------------------------------
    # Convenience quantities
    # ------------------------------------------------------------------

    @property
    def wavelength(self) -> float:
        """Carrier wavelength in metres."""
        return SPEED_OF_LIGHT / self.center_frequency

    @property
    def range_sample_spacing(self) -> float:
        """Slant-range distance per baseband sample, ``c / (2 fs)``."""
        return SPEED_OF_LIGHT / (2.0 * self.sample_rate)

    @property
    def image_azimuth_spacing(self) -> float:
        """Along-track pixel spacing actually used for the image grid."""
        if self.azimuth_spacing is not None:
            return float(self.azimuth_spacing)
        return self.range_sample_spacing

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Check every field; raise on the first problem found.

        Raises
        ------
        ConfigurationError
            Naming the offending field.
        """
        def fail(parameter: str, message: str) -> None:
            raise ConfigurationError(message, stage='config',
                                     parameter=parameter)

        if self.mode is RunMode.PROCESS and self.radar_data_filename is None:
            fail('radar_data_filename', "required in process mode")

        for name in ('center_frequency', 'bandwidth', 'pulse_duration',
                     'sample_rate', 'scene_center_range'):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                fail(name, f"must be a positive finite number, got {value!r}")

        for name in ('scene_rows', 'scene_cols', 'n_aperture_positions'):
            value = getattr(self, name)
            if not isinstance(value, (int, np.integer)) or value <= 0:
                fail(name, f"must be a positive integer, got {value!r}")

        if self.azimuth_spacing is not None and (
            not np.isfinite(self.azimuth_spacing)
            or self.azimuth_spacing <= 0
        ):
            fail('azimuth_spacing',
                 f"must be positive, got {self.azimuth_spacing!r}")

        if not np.isfinite(self.altitude) or self.altitude < 0:
            fail('altitude', f"must be >= 0, got {self.altitude!r}")

        if not np.isfinite(self.aperture_length) or self.aperture_length < 0:
            fail('aperture_length',
                 f"must be >= 0, got {self.aperture_length!r}")
        if self.aperture_length == 0 and self.n_aperture_positions > 1:
            fail('aperture_length',
                 f"zero-length aperture puts all {self.n_aperture_positions} "
                 f"positions at one point")

        nearest = (self.scene_center_range
                   - (self.scene_cols // 2) * self.range_sample_spacing)
        if nearest <= 0:
            fail('scene_center_range',
                 f"nearest scene column lies at {nearest:.2f} m ground "
                 f"range; the scene must not reach the flight track")

        for name in ('filter_cinsnow', 'filter_rfi', 'pulse_compress_image',
                     'apodize_spectrum'):
            value = getattr(self, name)
            if not isinstance(value, (bool, np.bool_)):
                fail(name, f"must be true or false, got {value!r}")

        if self.phase_sign not in (-1, 1):
            fail('phase_sign', f"must be -1 or +1, got {self.phase_sign!r}")

        if self.bandwidth > self.sample_rate:
            fail('sample_rate',
                 f"complex sample rate {self.sample_rate:g} Hz is below the "
                 f"chirp bandwidth {self.bandwidth:g} Hz")

        if (not isinstance(self.cinsnow_kernel_size, int)
                or self.cinsnow_kernel_size < 3
                or self.cinsnow_kernel_size % 2 == 0):
            fail('cinsnow_kernel_size',
                 f"must be an odd integer >= 3, got "
                 f"{self.cinsnow_kernel_size!r}")

        if not np.isfinite(self.rfi_threshold) or self.rfi_threshold <= 1.0:
            fail('rfi_threshold',
                 f"must be > 1, got {self.rfi_threshold!r}")
