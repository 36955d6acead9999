r"""Split a loaded text buffer into line references.

:func:`read_lines` loads a file in text mode (carriage returns removed, zero
terminated) and carves it into lines without copying: every ``\n`` is
overwritten with a zero byte and each non-empty line is recorded as a
:class:`LineRef` ``(offset, length)`` pair into the one shared buffer.  The
reference list ends with a ``None`` sentinel.

Empty lines are never recorded, whether they come from consecutive
delimiters, a leading delimiter or the final ``\n`` of the file.  ``count``
is therefore the number of references actually recorded, which can be lower
than the delimiter-based estimate used to size the list.

``max_size`` is a single budget shared by the text buffer and the reference
list.  Each reference is charged one platform pointer, the sentinel included.

Releasing a :class:`LineArray` (see :func:`release`) drops the shared buffer
exactly once; every view taken from it becomes invalid.
"""

from __future__ import annotations

import os
import struct
from collections.abc import Iterator
from dataclasses import dataclass
from types import TracebackType

from ..utils.errors import BufferReleasedError, OutOfMemoryError, SizeLimitExceededError
from ..utils.logging import get_logger
from .buffer import TERMINATOR, OwnedBuffer
from .loader import LoadMode, load

PathLikeStr = os.PathLike[str]

LF = 0x0A
_LF_BYTE = b"\n"
REFERENCE_SIZE = struct.calcsize("P")

log = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class LineRef:
    """Half-open span ``[offset, offset + length)`` of one line."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class LineArray:
    """Line references into one owned buffer, terminated by a ``None`` sentinel."""

    __slots__ = ("_buffer", "_entries")

    def __init__(self, buffer: OwnedBuffer | None, entries: list[LineRef | None]) -> None:
        if not entries or entries[-1] is not None:
            raise ValueError("entries must end with a None sentinel")
        self._buffer = buffer
        self._entries: list[LineRef | None] | None = entries

    @property
    def released(self) -> bool:
        return self._entries is None

    @property
    def buffer(self) -> OwnedBuffer | None:
        """Return the shared buffer, or ``None`` when the file had no content."""

        self._check()
        return self._buffer

    @property
    def entries(self) -> tuple[LineRef | None, ...]:
        """Return all references followed by the ``None`` sentinel."""

        return tuple(self._check())

    @property
    def count(self) -> int:
        return len(self._check()) - 1

    def __len__(self) -> int:
        return self.count

    def ref(self, index: int) -> LineRef:
        entries = self._check()
        if not -self.count <= index < self.count:
            raise IndexError("line index out of range")
        ref = entries[index if index >= 0 else index - 1]
        assert ref is not None
        return ref

    def view(self, index: int) -> memoryview:
        """Return a zero-copy, read-only view of line ``index``."""

        ref = self.ref(index)
        assert self._buffer is not None
        return self._buffer.view()[ref.offset : ref.end]

    def line(self, index: int) -> bytes:
        return self.view(index).tobytes()

    def views(self) -> Iterator[memoryview]:
        entries = self._check()
        if self._buffer is None:
            return
        whole = self._buffer.view()
        for ref in entries:
            if ref is None:
                break
            yield whole[ref.offset : ref.end]

    def __iter__(self) -> Iterator[bytes]:
        for view in self.views():
            yield view.tobytes()

    def release(self) -> None:
        """Release the shared buffer and then the reference list."""

        if self._entries is None:
            return
        if self._buffer is not None:
            self._buffer.release()
            self._buffer = None
        self._entries = None

    def _check(self) -> list[LineRef | None]:
        if self._entries is None:
            raise BufferReleasedError("line array has been released")
        return self._entries

    def __enter__(self) -> "LineArray":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        if self._entries is None:
            return "LineArray(released)"
        return f"LineArray(count={self.count})"


def estimate_line_count(buf: bytearray, length: int) -> int:
    """Return the delimiter-based upper bound on the number of lines."""

    count = buf.count(_LF_BYTE, 0, length)
    if length and buf[length - 1] != LF:
        count += 1
    return count


def _allocate_refs(slots: int) -> list[LineRef | None]:
    return [None] * slots


def _split_in_place(buf: bytearray, length: int, refs: list[LineRef | None]) -> int:
    """Fill ``refs`` with non-empty lines of ``buf[:length]`` and return the count."""

    recorded = 0
    start = 0
    while start < length:
        nl = buf.find(_LF_BYTE, start, length)
        end = length if nl < 0 else nl
        if end > start:
            refs[recorded] = LineRef(start, end - start)
            recorded += 1
        if nl < 0:
            break
        buf[nl] = TERMINATOR
        start = nl + 1
    return recorded


def read_lines(path: str | PathLikeStr, max_size: int = 0) -> LineArray:
    """Load ``path`` in text mode and split it into lines.

    Raises the same exceptions as :func:`~filebuf.io.loader.load`.
    :class:`~filebuf.utils.errors.SizeLimitExceededError` is also raised when
    the text buffer and the reference list together exceed ``max_size``.
    """

    buffer = load(path, LoadMode.TEXT, True, max_size)
    try:
        buf = buffer.data
        length = buffer.length
        estimate = estimate_line_count(buf, length)
        slots = estimate + 1

        if max_size:
            required = slots * REFERENCE_SIZE + length + 1
            if required > max_size:
                raise SizeLimitExceededError(required, max_size, path=path)

        try:
            refs = _allocate_refs(slots)
        except MemoryError as exc:
            raise OutOfMemoryError(f"cannot allocate {slots} line references", path=path) from exc

        if not length:
            buffer.release()
            return LineArray(None, refs)

        recorded = _split_in_place(buf, length, refs)
        refs[recorded] = None
        del refs[recorded + 1 :]
    except BaseException:
        buffer.release()
        raise

    log.debug("split %s into %d lines (estimate %d)", os.fspath(path), recorded, estimate)
    return LineArray(buffer, refs)


def release(lines: LineArray | None) -> None:
    """Release ``lines`` and its buffer.  ``None`` is accepted and ignored."""

    if lines is None:
        return
    lines.release()


__all__ = [
    "REFERENCE_SIZE",
    "LineRef",
    "LineArray",
    "estimate_line_count",
    "read_lines",
    "release",
]
