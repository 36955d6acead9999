"""Read whole files into one owned buffer and split them into lines.

The public API is re-exported here::

    from filebuf import load, read_lines, release, LoadMode

See :mod:`filebuf.io.loader` and :mod:`filebuf.io.lines` for the contracts.
"""

from .io import (
    LineArray,
    LineRef,
    LoadMode,
    LoadRequest,
    OwnedBuffer,
    load,
    load_request,
    read_file,
    read_lines,
    release,
)
from .utils.errors import (
    BufferReleasedError,
    ErrorKind,
    FileBufError,
    FileIOError,
    InvalidArgumentError,
    OutOfMemoryError,
    SizeLimitExceededError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "LineArray",
    "LineRef",
    "LoadMode",
    "LoadRequest",
    "OwnedBuffer",
    "load",
    "load_request",
    "read_file",
    "read_lines",
    "release",
    "BufferReleasedError",
    "ErrorKind",
    "FileBufError",
    "FileIOError",
    "InvalidArgumentError",
    "OutOfMemoryError",
    "SizeLimitExceededError",
]
