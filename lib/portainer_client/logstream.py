"""Docker container log payload decoding.

Without a TTY the Engine API multiplexes stdout and stderr into one body made
of frames::

    [stream: 1][padding: 3][size: 4, big-endian][payload: size]

With a TTY the body is plain text. The two cases are told apart by looking at
the first byte: stream tags are 0 (stdin), 1 (stdout) and 2 (stderr).
"""

from __future__ import annotations

import struct
from typing import Iterator

STDIN = 0
STDOUT = 1
STDERR = 2

HEADER_SIZE = 8
_SIZE = struct.Struct(">I")


def is_multiplexed(data: bytes) -> bool:
    return bool(data) and data[0] <= STDERR


def iter_frames(data: bytes) -> Iterator[tuple[int, bytes]]:
    """Yield ``(stream, payload)`` pairs in wire order.

    A final frame whose declared size runs past the buffer yields whatever
    bytes remain. Trailing bytes shorter than a header are dropped.
    """
    offset = 0
    end = len(data)
    while offset + HEADER_SIZE <= end:
        stream = data[offset]
        (size,) = _SIZE.unpack_from(data, offset + 4)
        offset += HEADER_SIZE
        if size == 0:
            continue
        if offset + size > end:
            yield stream, data[offset:]
            return
        yield stream, data[offset:offset + size]
        offset += size


def demux(data: bytes) -> str:
    """Return the combined stdout/stderr transcript of a log payload."""
    if not data:
        return ""
    if not is_multiplexed(data):
        return data.decode("utf-8", errors="replace")
    return "".join(payload.decode("utf-8", errors="replace") for _, payload in iter_frames(data))
