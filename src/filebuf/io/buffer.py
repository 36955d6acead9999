"""Owned byte buffer returned by the loader.

An :class:`OwnedBuffer` wraps the single ``bytearray`` allocated for a file.
``length`` counts the meaningful bytes; when ``terminated`` is true one extra
zero byte follows them.  The allocation may be larger than ``length + 1`` when
shrinking after carriage-return removal was not possible, so callers must rely
on ``length`` and never on ``len(data)``.

Ownership is single: whoever holds the buffer releases it once with
:meth:`OwnedBuffer.release` (or by leaving a ``with`` block).  Releasing
invalidates every view handed out earlier.
"""

from __future__ import annotations

from types import TracebackType

from ..utils.errors import BufferReleasedError

TERMINATOR = 0


class OwnedBuffer:
    """Exclusively owned file contents."""

    __slots__ = ("_data", "_length", "_terminated")

    def __init__(self, data: bytearray, length: int, *, terminated: bool) -> None:
        if length < 0 or length + int(terminated) > len(data):
            raise ValueError(f"length {length} does not fit a {len(data)} byte buffer")
        self._data: bytearray | None = data
        self._length = length
        self._terminated = terminated

    @property
    def length(self) -> int:
        return self._length

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def capacity(self) -> int:
        """Return the number of bytes currently allocated."""

        return len(self.data)

    @property
    def released(self) -> bool:
        return self._data is None

    @property
    def data(self) -> bytearray:
        """Return the underlying allocation, including any terminator."""

        if self._data is None:
            raise BufferReleasedError("buffer has been released")
        return self._data

    def view(self) -> memoryview:
        """Return a read-only view of ``[0, length)``."""

        return memoryview(self.data)[: self._length].toreadonly()

    def tobytes(self) -> bytes:
        return bytes(self.data[: self._length])

    def release(self) -> None:
        """Drop the allocation.  Later calls are no-ops."""

        self._data = None

    def __len__(self) -> int:
        return self._length

    def __enter__(self) -> "OwnedBuffer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._data is None else f"length={self._length}"
        return f"OwnedBuffer({state}, terminated={self._terminated})"


__all__ = ["TERMINATOR", "OwnedBuffer"]
