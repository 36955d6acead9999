"""Typed exceptions for whole-file loading and line splitting.

Every failure carries an :class:`ErrorKind` so callers (and the CLI) can branch
on the category without matching exception classes.  Exceptions that mirror a
builtin category also inherit from it, so ``except OSError`` still catches an
I/O failure raised by the loader.
"""

from __future__ import annotations

import os
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a failed load or split."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    IO_ERROR = "IO_ERROR"
    SIZE_LIMIT_EXCEEDED = "SIZE_LIMIT_EXCEEDED"
    OUT_OF_MEMORY = "OUT_OF_MEMORY"


class FileBufError(Exception):
    """Base class for all loader and splitter failures."""

    kind: ErrorKind

    def __init__(self, message: str, *, path: str | os.PathLike[str] | None = None) -> None:
        super().__init__(message)
        self.path = path


class InvalidArgumentError(FileBufError, ValueError):
    """Raised when the path is missing or empty."""

    kind = ErrorKind.INVALID_ARGUMENT


class FileIOError(FileBufError, OSError):
    """Raised when opening, seeking or reading the file fails.

    ``errno``, ``strerror`` and ``filename`` are copied from the underlying
    :class:`OSError`, which is also chained as ``__cause__``.
    """

    kind = ErrorKind.IO_ERROR

    def __init__(
        self,
        message: str,
        *,
        path: str | os.PathLike[str] | None = None,
        cause: OSError | None = None,
    ) -> None:
        FileBufError.__init__(self, message, path=path)
        self.errno = cause.errno if cause is not None else None
        self.strerror = cause.strerror if cause is not None else None
        self.filename = os.fspath(path) if path is not None else None

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class SizeLimitExceededError(FileBufError):
    """Raised when the required allocation would exceed ``max_size``."""

    kind = ErrorKind.SIZE_LIMIT_EXCEEDED

    def __init__(
        self,
        required: int,
        max_size: int,
        *,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        super().__init__(
            f"{required} bytes required but max_size is {max_size}",
            path=path,
        )
        self.required = required
        self.max_size = max_size


class OutOfMemoryError(FileBufError, MemoryError):
    """Raised when a buffer or line array cannot be allocated."""

    kind = ErrorKind.OUT_OF_MEMORY


class BufferReleasedError(ValueError):
    """Raised when a released buffer or its line views are accessed."""


__all__ = [
    "ErrorKind",
    "FileBufError",
    "InvalidArgumentError",
    "FileIOError",
    "SizeLimitExceededError",
    "OutOfMemoryError",
    "BufferReleasedError",
]
