"""Hashing, compression and small string helpers."""

from __future__ import annotations

import hashlib
import zlib

_C_WHITESPACE = " \t\n\v\f\r"


class MotorError(RuntimeError):
    """Raised when a repository operation fails."""


def hash_sha1(data: bytes | str) -> str:
    """Return the lowercase hex SHA-1 digest of ``data``."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha1(data).hexdigest()


def compress_data(data: bytes) -> bytes:
    """Deflate ``data`` into a zlib stream."""
    try:
        return zlib.compress(data, zlib.Z_DEFAULT_COMPRESSION)
    except zlib.error as exc:
        raise MotorError("Error during zlib compression") from exc


def decompress_data(data: bytes) -> bytes:
    """Inflate a complete zlib stream."""
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise MotorError("Error during zlib decompression") from exc


def binary_to_hex(binary: bytes) -> str:
    """Return the lowercase hex form of ``binary``."""
    return binary.hex()


def hex_to_binary(hex_str: str) -> bytes:
    """Turn pairs of hex digits into bytes."""
    return bytes(int(hex_str[i : i + 2], 16) for i in range(0, len(hex_str), 2))


def split_string(text: str, delimiter: str) -> list[str]:
    """Split on ``delimiter``; a trailing empty field is dropped."""
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def trim_string(text: str) -> str:
    """Strip leading and trailing whitespace."""
    return text.strip(_C_WHITESPACE)