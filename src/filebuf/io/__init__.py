"""Whole-file loading and in-place line splitting.

:func:`load` returns an :class:`OwnedBuffer` holding the complete file.
:func:`read_lines` loads in text mode and returns a :class:`LineArray` of
references into that single buffer; :func:`release` tears both down at once.
"""

from __future__ import annotations

from .buffer import TERMINATOR, OwnedBuffer
from .crlf import strip_carriage_returns
from .lines import REFERENCE_SIZE, LineArray, LineRef, read_lines, release
from .loader import LoadMode, LoadRequest, load, load_request, read_file

__all__ = [
    "TERMINATOR",
    "REFERENCE_SIZE",
    "OwnedBuffer",
    "LoadMode",
    "LoadRequest",
    "LineRef",
    "LineArray",
    "load",
    "load_request",
    "read_file",
    "read_lines",
    "release",
    "strip_carriage_returns",
]
