# -*- coding: utf-8 -*-
"""
Named Buffer Store - Ordered collection of named complex buffers.

Every pipeline stage communicates through a single ``BufferStore``: an
append-only sequence of ``NamedBuffer`` objects headed by a reserved
``metadata`` buffer. Stages append their outputs at the tail and look up
their inputs by name (first match in insertion order wins). Once all
stages have run, ``build_directory()`` fills the head buffer with one
summary value per payload buffer, which serializers write out alongside
the payloads.

Directory encoding (version ``DIRECTORY_VERSION``)::

    head.data[0, k] = rows_k + 1j * cols_k

for the k-th buffer following the head, in insertion order. The element
count of buffer k is ``rows_k * cols_k``.

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
from typing import Iterator, List, Optional, Tuple

# Third-party
import numpy as np

# sarsim internal
from sarsim.exceptions import ProcessorError, StageOrderError, ValidationError
from sarsim.vocabulary import BufferName

logger = logging.getLogger(__name__)

#: Maximum length of a buffer name.
NAME_CAPACITY = 32

#: Version of the head-buffer directory encoding.
DIRECTORY_VERSION = 1


def _validate_name(name: str) -> None:
    if not isinstance(name, str):
        raise ValidationError(
            f"Buffer name must be a string, got {type(name).__name__}"
        )
    if not name:
        raise ValidationError("Buffer name must not be empty")
    if len(name) > NAME_CAPACITY:
        raise ValidationError(
            f"Buffer name {name!r} exceeds {NAME_CAPACITY} characters"
        )


class NamedBuffer:
    """A named, row-major, complex128 payload.

    A 1xN buffer represents a vector, an MxN buffer an image. The buffer
    is created unpopulated (``data is None``, zero dimensions) and
    populated exactly once; afterwards its dimensions are fixed.

    Parameters
    ----------
    name : str
        Identifier, at most ``NAME_CAPACITY`` characters.
    data : np.ndarray, optional
        Initial payload. 1-D input becomes a 1xN vector.
    """

    def __init__(self, name: str, data: Optional[np.ndarray] = None) -> None:
        _validate_name(name)
        self.name = name
        self.rows = 0
        self.cols = 0
        self.data: Optional[np.ndarray] = None
        if data is not None:
            self.populate(data)

    def __repr__(self) -> str:
        state = 'empty' if self.data is None else f"{self.rows}x{self.cols}"
        return f"NamedBuffer({self.name!r}, {state})"

    @property
    def populated(self) -> bool:
        """Whether the payload has been allocated."""
        return self.data is not None

    @property
    def shape(self) -> Tuple[int, int]:
        """``(rows, cols)`` of the buffer."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Number of complex elements, ``rows * cols``."""
        return self.rows * self.cols

    def populate(self, data: np.ndarray) -> 'NamedBuffer':
        """Allocate the payload from *data*.

        Parameters
        ----------
        data : np.ndarray
            1-D (stored as 1xN) or 2-D array. Copied and cast to
            C-ordered complex128.

        Returns
        -------
        NamedBuffer
            ``self``, for chaining.

        Raises
        ------
        ValidationError
            If the buffer is already populated, *data* is not 1-D/2-D,
            or the element count does not match ``rows * cols``.
        """
        if self.data is not None:
            raise ValidationError(
                f"Buffer {self.name!r} is already populated; "
                f"payloads are never reallocated"
            )
        arr = np.asarray(data)
        if arr.ndim == 1:
            arr = arr[np.newaxis, :]
        if arr.ndim != 2:
            raise ValidationError(
                f"Buffer {self.name!r} expects 1-D or 2-D data, "
                f"got {arr.ndim}-D"
            )
        payload = np.array(arr, dtype=np.complex128, order='C', copy=True)
        rows, cols = payload.shape
        if rows * cols != payload.size:
            raise ValidationError(
                f"Buffer {self.name!r}: rows*cols ({rows}*{cols}) != "
                f"element count {payload.size}"
            )
        self.rows, self.cols = rows, cols
        self.data = payload
        return self

    def overwrite(self, data: np.ndarray) -> None:
        """Rewrite the payload in place with identical dimensions.

        Used by filter hooks that replace a buffer's content without
        resizing it.

        Raises
        ------
        ValidationError
            If the buffer is unpopulated or *data* has a different shape.
        """
        if self.data is None:
            raise ValidationError(
                f"Buffer {self.name!r} is not populated"
            )
        arr = np.asarray(data)
        if arr.shape != self.data.shape:
            raise ValidationError(
                f"Buffer {self.name!r} is {self.rows}x{self.cols}; "
                f"replacement has shape {arr.shape}"
            )
        self.data[...] = arr

    def release(self) -> None:
        """Drop the payload."""
        self.data = None


class BufferStore:
    """Append-only, insertion-ordered store of ``NamedBuffer`` objects.

    The head is always the reserved ``metadata`` buffer. The store owns
    every buffer's payload for the duration of one pipeline run and
    releases them exactly once, either explicitly via ``release()`` or on
    leaving a ``with`` block.

    Examples
    --------
    >>> with BufferStore() as store:
    ...     store.append('chirp', np.ones(8))
    ...     store.find('chirp').shape
    (1, 8)
    """

    def __init__(self) -> None:
        self._buffers: List[NamedBuffer] = [NamedBuffer(BufferName.METADATA)]
        self._directory_built = False
        self._released = False

    def __enter__(self) -> 'BufferStore':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[NamedBuffer]:
        return iter(list(self._buffers))

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __repr__(self) -> str:
        return f"BufferStore({self.names()})"

    @property
    def head(self) -> NamedBuffer:
        """The reserved metadata buffer."""
        self._check_alive()
        return self._buffers[0]

    @property
    def released(self) -> bool:
        """Whether ``release()`` has run."""
        return self._released

    @property
    def directory_built(self) -> bool:
        """Whether ``build_directory()`` has run."""
        return self._directory_built

    def names(self) -> List[str]:
        """Buffer names in insertion order, head included."""
        return [b.name for b in self._buffers]

    def _check_alive(self) -> None:
        if self._released:
            raise ProcessorError("Buffer store has been released")

    def append(
        self,
        name: str,
        data: Optional[np.ndarray] = None,
    ) -> NamedBuffer:
        """Create a new buffer at the tail.

        Parameters
        ----------
        name : str
            Buffer name. Names may repeat, but ``find`` only ever sees
            the first one.
        data : np.ndarray, optional
            Payload to populate immediately. If omitted the buffer is
            returned unpopulated for the caller to fill.

        Returns
        -------
        NamedBuffer
            The new tail buffer.

        Raises
        ------
        ProcessorError
            If the store was released or its directory already built.
        """
        self._check_alive()
        if self._directory_built:
            raise ProcessorError(
                f"Cannot append {name!r}: directory already built, "
                f"buffer count is final"
            )
        buf = NamedBuffer(name, data)
        self._buffers.append(buf)
        logger.debug("Appended buffer %r (%dx%d)", name, buf.rows, buf.cols)
        return buf

    def find(self, name: str) -> Optional[NamedBuffer]:
        """Return the first buffer named *name*, or ``None``."""
        self._check_alive()
        for buf in self._buffers:
            if buf.name == name:
                return buf
        return None

    def require(self, name: str, stage: str) -> NamedBuffer:
        """Return the populated buffer *name* needed by *stage*.

        Raises
        ------
        StageOrderError
            If the buffer is missing or unpopulated, meaning *stage* ran
            before the stage that produces it.
        """
        buf = self.find(name)
        if buf is None or not buf.populated:
            raise StageOrderError(
                f"Stage '{stage}' requires buffer {name!r}, which has not "
                f"been produced yet"
            )
        return buf

    def build_directory(self) -> NamedBuffer:
        """Populate the head buffer with one entry per following buffer.

        Must be called exactly once, after every stage has appended its
        outputs. See the module docstring for the encoding.

        Returns
        -------
        NamedBuffer
            The populated head buffer.

        Raises
        ------
        ProcessorError
            If called more than once or on a released store.
        """
        self._check_alive()
        if self._directory_built:
            raise ProcessorError("Directory has already been built")
        entries = np.array(
            [complex(b.rows, b.cols) for b in self._buffers[1:]],
            dtype=np.complex128,
        )
        self._buffers[0].populate(entries.reshape(1, len(entries)))
        self._directory_built = True
        logger.debug("Built directory with %d entries", len(entries))
        return self._buffers[0]

    def release(self) -> None:
        """Release every payload, then every buffer, in order, once."""
        if self._released:
            return
        for buf in self._buffers:
            buf.release()
        self._buffers.clear()
        self._released = True
        logger.debug("Released buffer store")


def decode_directory(head: NamedBuffer) -> List[Tuple[int, int]]:
    """Decode a populated head buffer into ``(rows, cols)`` pairs.

    Parameters
    ----------
    head : NamedBuffer
        Metadata buffer populated by ``BufferStore.build_directory``.

    Returns
    -------
    List[Tuple[int, int]]
        Dimensions of each following buffer, in insertion order.
    """
    if head.data is None:
        raise ValidationError("Directory buffer is not populated")
    entries = head.data.ravel()
    return [(int(round(e.real)), int(round(e.imag))) for e in entries]
