# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for buffer-store readers and writers.

A writer serializes a complete ``BufferStore`` (directory head first, then
every payload buffer in insertion order) together with the radar
parameters of the run. A reader rebuilds a fresh store, or a subset of
its buffers, from such a file.

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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from sarsim.exceptions import RadarFileError
from sarsim.store import BufferStore


class StoreReader(ABC):
    """
    Abstract base class for buffer-store readers.

    Attributes
    ----------
    filepath : Path
        Path to the radar data file.
    metadata : Dict[str, Any]
        File-level attributes, radar parameters included.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the reader and load file-level metadata.

        Raises
        ------
        RadarFileError
            If *filepath* does not exist or its metadata is invalid.
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise RadarFileError(f"File not found: {self.filepath}")

        self.metadata: Dict[str, Any] = {}
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """Populate ``self.metadata`` from the file."""
        pass

    @abstractmethod
    def read_store(
        self,
        names: Optional[Sequence[str]] = None,
    ) -> BufferStore:
        """
        Rebuild a store from the file.

        Parameters
        ----------
        names : Sequence[str], optional
            Only load buffers with these names, in file order. All
            buffers are loaded when omitted.

        Returns
        -------
        BufferStore
            New store owned by the caller.
        """
        pass

    def close(self) -> None:
        """Release any open file handle."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class StoreWriter(ABC):
    """
    Abstract base class for buffer-store writers.

    Attributes
    ----------
    filepath : Path
        Destination file.
    metadata : Dict[str, Any]
        File-level attributes to write, typically the run's radar
        parameters.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self.filepath = Path(filepath)
        self.metadata = metadata or {}

    @abstractmethod
    def write(self, store: BufferStore) -> None:
        """
        Serialize every buffer of *store*.

        Parameters
        ----------
        store : BufferStore
            Store whose directory has been built.

        Raises
        ------
        RadarFileError
            If writing fails. No partial file is left behind.
        """
        pass

    def close(self) -> None:
        """Release any open file handle."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
