r"""In-place carriage-return removal.

The pass locates the first ``\r`` and, from there on, moves every run of
non-CR bytes leftwards over the gap left by the CRs already skipped.  Runs are
moved through a ``memoryview`` so no copy proportional to the input is made and
the whole pass is a single forward scan.
"""

from __future__ import annotations

CR = 0x0D
_CR_BYTE = b"\r"


def strip_carriage_returns(buf: bytearray, length: int) -> int:
    r"""Remove every ``\r`` from ``buf[:length]`` in place.

    Returns the new length.  Bytes at and beyond the returned length are left
    as they were; callers that keep a terminator must rewrite it.
    """

    first = buf.find(_CR_BYTE, 0, length)
    if first < 0:
        return length

    write = first
    read = first + 1
    with memoryview(buf) as mv:
        while read < length:
            nxt = buf.find(_CR_BYTE, read, length)
            end = length if nxt < 0 else nxt
            run = end - read
            if run:
                mv[write : write + run] = mv[read:end]
                write += run
            if nxt < 0:
                break
            read = nxt + 1
    return write


__all__ = ["CR", "strip_carriage_returns"]
