"""Length-prefix helpers for the raw string region.

UTF-16 strings carry a 16-bit code unit count.  UTF-8 strings carry two
varints (character count, then byte length), each one or two bytes wide:

  0xxxxxxx            -> value 0..0x7F
  1xxxxxxx yyyyyyyy   -> value (x << 8) | y
"""

from __future__ import annotations

import struct

from .exceptions import StringWindowError


def get_short(data: bytes, offset: int) -> int:
    """Read an unsigned 16-bit little-endian value at *offset*."""
    if offset < 0 or offset + 2 > len(data):
        raise StringWindowError(f"16-bit length at {offset} outside {len(data)} bytes")
    return struct.unpack_from("<H", data, offset)[0]


def get_varint(data: bytes, offset: int) -> tuple[int, int]:
    """Return ``(value, width)`` of the length varint at *offset*."""
    if offset < 0 or offset >= len(data):
        raise StringWindowError(f"Varint at {offset} outside {len(data)} bytes")
    val = data[offset]
    if not val & 0x80:
        return val & 0x7F, 1
    if offset + 1 >= len(data):
        raise StringWindowError(f"Varint at {offset} truncated")
    return (val & 0x7F) << 8 | data[offset + 1], 2
