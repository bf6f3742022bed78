# -*- coding: utf-8 -*-
"""
HDF5 Store IO - Serialize and load the named-buffer store with h5py.

File layout::

    /                       attrs: format="sarsim", format_version=1,
                                   directory_version=1, buffer_count,
                                   radar parameters (see RadarConfig)
    /buffers/000            metadata directory head, 1 x (buffer_count-1)
    /buffers/001 ...        payload buffers in insertion order

Each buffer dataset is complex128 with ``name``, ``rows`` and ``cols``
attributes. The head holds one ``rows + 1j * cols`` entry per following
buffer, which the reader checks against the datasets.

Dependencies
------------
h5py

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
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

try:
    import h5py
    _HAS_H5PY = True
except ImportError:
    _HAS_H5PY = False

# sarsim internal
from sarsim.config import RadarConfig
from sarsim.exceptions import (
    DependencyError,
    ProcessorError,
    RadarFileError,
    ValidationError,
)
from sarsim.IO.base import StoreReader, StoreWriter
from sarsim.store import (
    DIRECTORY_VERSION,
    BufferStore,
    NamedBuffer,
    decode_directory,
)
from sarsim.vocabulary import BufferName

logger = logging.getLogger(__name__)

FORMAT_NAME = 'sarsim'
FORMAT_VERSION = 1
BUFFER_GROUP = 'buffers'

#: Buffers read from a raw-data file in process mode.
RAW_INPUT_BUFFERS = (
    BufferName.CHIRP,
    BufferName.MATCH,
    BufferName.APERTURE,
    BufferName.RADAR_IMAGE,
)

_RESERVED_ATTRS = ('format', 'format_version', 'directory_version',
                   'buffer_count')

# Derived values process mode cannot run without
_REQUIRED_DERIVED = ('range_start', 'range_spacing', 'n_range_bins')


def _require_h5py() -> None:
    if not _HAS_H5PY:
        raise DependencyError(
            "h5py is required for HDF5 store IO. "
            "Install with: pip install h5py"
        )


def _attr_value(value: Any) -> Any:
    """Convert an h5py attribute to a plain Python value."""
    if isinstance(value, bytes):
        return value.decode('utf-8')
    if isinstance(value, np.generic):
        return value.item()
    return value


def _dataset_key(index: int, count: int) -> str:
    return str(index).zfill(max(3, len(str(count - 1))))


class HDF5StoreWriter(StoreWriter):
    """Write a complete buffer store to an HDF5 file.

    Parameters
    ----------
    filepath : str or Path
        Output HDF5 file path. Overwritten if it exists.
    metadata : Dict[str, Any], optional
        Root attributes, normally ``RadarConfig.radar_parameters()``.
    compression : str, optional
        h5py compression filter (``'gzip'`` or ``'lzf'``).

    Raises
    ------
    DependencyError
        If h5py is not installed.

    Examples
    --------
    >>> store.build_directory()
    >>> with HDF5StoreWriter('run.h5', config.radar_parameters()) as w:
    ...     w.write(store)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None,
        compression: Optional[str] = None,
    ) -> None:
        _require_h5py()
        super().__init__(filepath, metadata)
        self.compression = compression

    def write(self, store: BufferStore) -> None:
        """Write the head and every payload buffer of *store*.

        Raises
        ------
        ProcessorError
            If the store's directory has not been built.
        RadarFileError
            If the file cannot be written; any partial file is removed.
        """
        if not store.directory_built:
            raise ProcessorError(
                "Build the store directory before serializing"
            )
        buffers = list(store)
        kwargs: Dict[str, Any] = {}
        if self.compression:
            kwargs['compression'] = self.compression

        try:
            with h5py.File(str(self.filepath), 'w') as f:
                f.attrs['format'] = FORMAT_NAME
                f.attrs['format_version'] = FORMAT_VERSION
                f.attrs['directory_version'] = DIRECTORY_VERSION
                f.attrs['buffer_count'] = len(buffers)
                for key, val in self.metadata.items():
                    if val is not None:
                        f.attrs[key] = val

                group = f.create_group(BUFFER_GROUP)
                for i, buf in enumerate(buffers):
                    ds = group.create_dataset(
                        _dataset_key(i, len(buffers)), data=buf.data,
                        **kwargs,
                    )
                    ds.attrs['name'] = buf.name
                    ds.attrs['rows'] = buf.rows
                    ds.attrs['cols'] = buf.cols
        except (OSError, TypeError, ValueError) as exc:
            self.filepath.unlink(missing_ok=True)
            raise RadarFileError(
                f"Failed to write {self.filepath}: {exc}"
            ) from exc
        logger.info("Wrote %d buffers to %s", len(buffers), self.filepath)


class HDF5StoreReader(StoreReader):
    """Read a buffer store written by ``HDF5StoreWriter``.

    Parameters
    ----------
    filepath : str or Path
        HDF5 file path.

    Raises
    ------
    DependencyError
        If h5py is not installed.
    RadarFileError
        If the file is missing, unreadable, or not a sarsim store.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        _require_h5py()
        super().__init__(filepath)

    def _open(self) -> 'h5py.File':
        try:
            return h5py.File(str(self.filepath), 'r')
        except OSError as exc:
            raise RadarFileError(
                f"Cannot open {self.filepath}: {exc}"
            ) from exc

    def _load_metadata(self) -> None:
        with self._open() as f:
            self.metadata = {k: _attr_value(v) for k, v in f.attrs.items()}
            has_group = BUFFER_GROUP in f

        if self.metadata.get('format') != FORMAT_NAME:
            raise RadarFileError(
                f"{self.filepath} is not a {FORMAT_NAME} file "
                f"(format={self.metadata.get('format')!r})"
            )
        for key, expected in (('format_version', FORMAT_VERSION),
                              ('directory_version', DIRECTORY_VERSION)):
            if self.metadata.get(key) != expected:
                raise RadarFileError(
                    f"{self.filepath}: unsupported {key} "
                    f"{self.metadata.get(key)!r}, expected {expected}"
                )
        if not has_group:
            raise RadarFileError(
                f"{self.filepath}: missing '{BUFFER_GROUP}' group"
            )

    def radar_parameters(self) -> Dict[str, Any]:
        """Root attributes other than the format markers."""
        return {k: v for k, v in self.metadata.items()
                if k not in _RESERVED_ATTRS}

    def _read_entries(self) -> List[Tuple[str, int, int, np.ndarray]]:
        """``(name, rows, cols, data)`` for every buffer, in file order."""
        entries = []
        with self._open() as f:
            group = f[BUFFER_GROUP]
            keys = sorted(group.keys(), key=int)
            expected = self.metadata.get('buffer_count')
            if len(keys) != expected:
                raise RadarFileError(
                    f"{self.filepath}: buffer_count is {expected} but "
                    f"{len(keys)} buffers are present (truncated file?)"
                )
            for key in keys:
                ds = group[key]
                name = _attr_value(ds.attrs.get('name'))
                rows = _attr_value(ds.attrs.get('rows'))
                cols = _attr_value(ds.attrs.get('cols'))
                data = np.asarray(ds[()])
                if (not isinstance(name, str) or data.ndim != 2
                        or data.shape != (rows, cols)):
                    raise RadarFileError(
                        f"{self.filepath}: buffer {key} is inconsistent "
                        f"(name={name!r}, rows={rows}, cols={cols}, "
                        f"shape={data.shape})"
                    )
                entries.append((name, rows, cols, data))
        return entries

    def _check_directory(
        self,
        entries: List[Tuple[str, int, int, np.ndarray]],
    ) -> None:
        head_name, _, _, head_data = entries[0]
        if head_name != BufferName.METADATA:
            raise RadarFileError(
                f"{self.filepath}: first buffer is {head_name!r}, expected "
                f"{BufferName.METADATA!r}"
            )
        try:
            directory = decode_directory(
                NamedBuffer(BufferName.METADATA, head_data))
        except ValidationError as exc:
            raise RadarFileError(
                f"{self.filepath}: unreadable directory: {exc}"
            ) from exc
        actual = [(rows, cols) for _, rows, cols, _ in entries[1:]]
        if directory != actual:
            raise RadarFileError(
                f"{self.filepath}: directory does not match the stored "
                f"buffers"
            )

    def read_store(
        self,
        names: Optional[Sequence[str]] = None,
    ) -> BufferStore:
        """Rebuild a store from the file.

        The directory head is validated but not copied: the new store's
        head stays unpopulated until its own directory is built.

        Parameters
        ----------
        names : Sequence[str], optional
            Only load these buffers. All payload buffers when omitted.

        Returns
        -------
        BufferStore

        Raises
        ------
        RadarFileError
            If the file is truncated or inconsistent.
        """
        try:
            entries = self._read_entries()
        except RadarFileError:
            raise
        except (OSError, KeyError, ValueError) as exc:
            raise RadarFileError(
                f"Cannot read buffers from {self.filepath}: {exc}"
            ) from exc
        if not entries:
            raise RadarFileError(f"{self.filepath}: no buffers stored")
        self._check_directory(entries)

        store = BufferStore()
        try:
            for name, _, _, data in entries[1:]:
                if names is None or name in names:
                    store.append(name, data)
        except ValidationError as exc:
            store.release()
            raise RadarFileError(
                f"{self.filepath}: invalid buffer: {exc}"
            ) from exc
        logger.info("Loaded %d buffers from %s", len(store) - 1,
                    self.filepath)
        return store


def write_store(
    store: BufferStore,
    filepath: Union[str, Path],
    config: RadarConfig,
    compression: Optional[str] = None,
) -> Path:
    """Serialize *store* with the radar parameters of *config*.

    Returns
    -------
    Path
        The written file.
    """
    with HDF5StoreWriter(filepath, config.radar_parameters(),
                         compression=compression) as writer:
        writer.write(store)
    return writer.filepath


def read_radar_file(
    filepath: Union[str, Path],
    config: RadarConfig,
) -> Tuple[BufferStore, RadarConfig]:
    """Load the raw inputs of a recorded run for process mode.

    Parameters
    ----------
    filepath : str or Path
        File written by ``HDF5StoreWriter``.
    config : RadarConfig
        Caller's configuration; its selection fields are kept.

    Returns
    -------
    Tuple[BufferStore, RadarConfig]
        A fresh store holding ``chirp``, ``match`` (when present),
        ``aperture`` and ``radar_image``, and a configuration whose radar
        parameters and derived range window come from the file.

    Raises
    ------
    RadarFileError
        If the file is missing, unreadable, truncated, lacks a raw input
        or its raw data disagree with its geometry. No store is leaked.
    """
    with HDF5StoreReader(filepath) as reader:
        params = reader.radar_parameters()
        store = reader.read_store(names=RAW_INPUT_BUFFERS)

    try:
        for name in (BufferName.APERTURE, BufferName.RADAR_IMAGE):
            if name not in store:
                raise RadarFileError(f"{filepath}: missing buffer {name!r}")
        for name in _REQUIRED_DERIVED:
            if f'derived_{name}' not in params:
                raise RadarFileError(
                    f"{filepath}: missing range window attribute "
                    f"'derived_{name}'"
                )
        try:
            file_config = config.with_radar_parameters(params)
            file_config.validate()
        except (TypeError, ValidationError) as exc:
            raise RadarFileError(
                f"{filepath}: invalid radar parameters: {exc}"
            ) from exc

        aperture = store.find(BufferName.APERTURE)
        raw = store.find(BufferName.RADAR_IMAGE)
        derived = file_config.derived
        if aperture.cols != 3:
            raise RadarFileError(
                f"{filepath}: aperture is {aperture.rows}x{aperture.cols}, "
                f"expected Px3"
            )
        if raw.shape != (aperture.rows, derived.n_range_bins):
            raise RadarFileError(
                f"{filepath}: radar_image is {raw.rows}x{raw.cols}, "
                f"expected {aperture.rows}x{derived.n_range_bins}"
            )
        derived.n_aperture_positions = aperture.rows
    except RadarFileError:
        store.release()
        raise

    logger.info("Read raw data %dx%d from %s", raw.rows, raw.cols, filepath)
    return store, file_config
