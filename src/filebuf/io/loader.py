"""Whole-file loader.

:func:`load` reads a file into one freshly allocated buffer and hands
ownership of it to the caller.  Processing steps, in order:

1. Validate the path and resolve the effective terminate flag.  Text mode
   always terminates so the carriage-return scan has a defined end.
2. Discover the file size by seeking to the end.
3. Check ``size + terminator`` against ``max_size`` *before* allocating.
4. Allocate exactly that many bytes and read into them.  A short read is
   tolerated; the number of bytes actually read is authoritative.
5. Write the terminator, strip carriage returns in text mode, then shrink the
   allocation to ``length + terminator`` when it ended up larger.

Any failure after allocation drops the partially filled buffer before the
exception propagates, and the file handle is closed on every path.

Example
-------
>>> with load("notes.txt", LoadMode.TEXT) as buf:  # doctest: +SKIP
...     buf.length, buf.data[buf.length]
(42, 0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO

from ..utils.errors import (
    FileIOError,
    InvalidArgumentError,
    OutOfMemoryError,
    SizeLimitExceededError,
)
from ..utils.logging import get_logger
from .buffer import TERMINATOR, OwnedBuffer
from .crlf import strip_carriage_returns

PathLikeStr = os.PathLike[str]

log = get_logger(__name__)


class LoadMode(Enum):
    """How file bytes are delivered."""

    BINARY = "binary"
    TEXT = "text"


@dataclass(slots=True, frozen=True)
class LoadRequest:
    """Immutable description of a single load.

    ``mode`` may be given as a string and is converted to :class:`LoadMode`.
    ``max_size`` bounds the total allocation including any terminator; ``0``
    means unbounded.
    """

    path: str | PathLikeStr
    mode: LoadMode | str = LoadMode.BINARY
    terminate: bool = False
    max_size: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.mode, LoadMode):
            try:
                object.__setattr__(self, "mode", LoadMode(self.mode))
            except ValueError as exc:
                raise InvalidArgumentError(f"unknown load mode {self.mode!r}") from exc
        if self.max_size < 0:
            raise InvalidArgumentError(f"max_size must be non-negative, got {self.max_size}")

    @property
    def effective_terminate(self) -> bool:
        return self.terminate or self.mode is LoadMode.TEXT

    def required_capacity(self, file_size: int) -> int:
        return file_size + int(self.effective_terminate)


def _allocate(size: int) -> bytearray:
    return bytearray(size)


def _validate_path(path: str | PathLikeStr | None) -> str | PathLikeStr:
    if path is None:
        raise InvalidArgumentError("path is required")
    try:
        raw = os.fspath(path)
    except TypeError as exc:
        raise InvalidArgumentError(
            f"path must be str or os.PathLike, got {type(path).__name__}"
        ) from exc
    if not raw:
        raise InvalidArgumentError("path must be non-empty")
    return path


def _io_error(action: str, path: str | PathLikeStr, exc: OSError) -> FileIOError:
    reason = exc.strerror or str(exc)
    message = f"cannot {action} '{os.fspath(path)}': {reason}"
    return FileIOError(message, path=path, cause=exc)


def _read_into(handle: BinaryIO, buf: bytearray, size: int) -> int:
    """Read up to ``size`` bytes into ``buf`` and return the count read."""

    n = 0
    with memoryview(buf) as mv:
        while n < size:
            got = handle.readinto(mv[n:size])
            if not got:
                break
            n += got
    return n


def load_request(request: LoadRequest) -> OwnedBuffer:
    """Execute ``request`` and return the owned buffer."""

    path = _validate_path(request.path)
    terminate = request.effective_terminate
    text_mode = request.mode is LoadMode.TEXT

    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise _io_error("open", path, exc) from exc

    with handle:
        try:
            file_size = handle.seek(0, os.SEEK_END)
        except OSError as exc:
            raise _io_error("seek", path, exc) from exc

        capacity = request.required_capacity(file_size)
        if request.max_size and capacity > request.max_size:
            raise SizeLimitExceededError(capacity, request.max_size, path=path)

        try:
            buf = _allocate(capacity)
        except MemoryError as exc:
            raise OutOfMemoryError(
                f"cannot allocate {capacity} bytes for '{os.fspath(path)}'", path=path
            ) from exc

        try:
            handle.seek(0)
            n = _read_into(handle, buf, file_size)
        except OSError as exc:
            del buf
            raise _io_error("read", path, exc) from exc

    if n < file_size:
        log.debug("short read on %s: %d of %d bytes", os.fspath(path), n, file_size)

    if terminate:
        buf[n] = TERMINATOR

    if text_mode:
        stripped = strip_carriage_returns(buf, n)
        if stripped != n:
            log.debug("removed %d carriage returns from %s", n - stripped, os.fspath(path))
            n = stripped
            buf[n] = TERMINATOR

    wanted = n + int(terminate)
    if wanted < capacity:
        try:
            del buf[wanted:]
        except MemoryError:
            # The larger allocation is still valid; only ``length`` is observed.
            log.debug("could not shrink %d byte buffer to %d", capacity, wanted)

    return OwnedBuffer(buf, n, terminated=terminate)


def load(
    path: str | PathLikeStr,
    mode: LoadMode | str = LoadMode.BINARY,
    terminate: bool = False,
    max_size: int = 0,
) -> OwnedBuffer:
    """Read the whole of ``path`` into a newly allocated :class:`OwnedBuffer`.

    Parameters
    ----------
    path:
        File to read.  ``None`` or an empty path raises
        :class:`~filebuf.utils.errors.InvalidArgumentError`.
    mode:
        :attr:`LoadMode.TEXT` removes carriage returns and forces
        ``terminate``.  :attr:`LoadMode.BINARY` returns bytes unmodified.
        The strings ``"text"`` and ``"binary"`` are accepted as well.
    terminate:
        Append one zero byte after the content.  It is not counted in
        ``length``.
    max_size:
        Upper bound on the allocation in bytes, terminator included.  ``0``
        disables the limit.

    Raises
    ------
    InvalidArgumentError
        Missing or empty path.
    FileIOError
        The file could not be opened, sized or read.
    SizeLimitExceededError
        ``max_size`` is smaller than the required capacity.
    OutOfMemoryError
        The buffer could not be allocated.
    """

    return load_request(LoadRequest(path=path, mode=mode, terminate=terminate, max_size=max_size))


def read_file(
    path: str | PathLikeStr,
    *,
    text: bool = False,
    terminate: bool = False,
    max_size: int = 0,
) -> OwnedBuffer:
    """Flag-style wrapper around :func:`load`."""

    mode = LoadMode.TEXT if text else LoadMode.BINARY
    return load(path, mode, terminate, max_size)


__all__ = ["LoadMode", "LoadRequest", "load", "load_request", "read_file"]
