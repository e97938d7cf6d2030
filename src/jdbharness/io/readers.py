"""Bounded reads from binary streams."""

from __future__ import annotations

from typing import BinaryIO

# Growth step when the read buffer has no room left
_GROW_STEP = 1024


def read_fully(stream: BinaryIO, length: int, read_all: bool) -> bytes:
    """Read up to ``length`` bytes from ``stream``.

    The buffer grows in steps of at most ``_GROW_STEP`` bytes beyond its
    current size, so a bogus huge ``length`` read from an untrusted header
    does not allocate everything up front.

    Args:
        stream: Binary stream to read from.
        length: Number of bytes wanted.
        read_all: If True, running out of data before ``length`` bytes
            raises ``EOFError``; otherwise the bytes read so far are returned.

    Raises:
        ValueError: ``length`` is negative.
        EOFError: Premature EOF with ``read_all`` set.
    """
    if length < 0:
        raise ValueError("Invalid length")
    output = bytearray()
    while len(output) < length:
        to_read = min(length - len(output), len(output) + _GROW_STEP)
        chunk = stream.read(to_read)
        if not chunk:
            if read_all:
                raise EOFError("Detect premature EOF")
            break
        output += chunk
    return bytes(output)


def read_n_bytes(stream: BinaryIO, length: int) -> bytes:
    """Read exactly ``length`` bytes or raise ``EOFError``."""
    if length < 0:
        raise ValueError(f"length cannot be negative: {length}")
    return read_fully(stream, length, True)
