"""Simple run-length compression used when zlib is not wanted."""

from __future__ import annotations

from itertools import groupby

_MAX_RUN = 255


def compress(data: bytes) -> bytes:
    """Encode ``data`` as (count, byte) pairs, runs capped at 255."""
    out = bytearray()
    for value, group in groupby(data):
        run = sum(1 for _ in group)
        while run > 0:
            chunk = min(run, _MAX_RUN)
            out += bytes((chunk, value))
            run -= chunk
    return bytes(out)


def decompress(data: bytes) -> bytes:
    """Expand (count, byte) pairs produced by :func:`compress`."""
    if len(data) % 2 != 0:
        raise ValueError("Invalid compressed data format")
    return b"".join(
        bytes((value,)) * count for count, value in zip(data[::2], data[1::2])
    )