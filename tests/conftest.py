from __future__ import annotations

import struct

import pytest

STRING_POOL_TAG = 0x001C0001
UTF8_FLAG = 0x100


def _varint(n: int) -> bytes:
    if n < 0x80:
        return bytes([n])
    return bytes([(n >> 8) | 0x80, n & 0xFF])


def _encode(item: str | bytes, utf8: bool) -> bytes:
    """Length-prefixed payload; bytes items are stored undecoded."""
    if utf8:
        payload = item if isinstance(item, bytes) else item.encode("utf-8")
        chars = len(item)
        return _varint(chars) + _varint(len(payload)) + payload + b"\x00"
    payload = item if isinstance(item, bytes) else item.encode("utf-16-le")
    return struct.pack("<H", len(payload) // 2) + payload + b"\x00\x00"


def build_chunk(
    strings: list[str | bytes],
    styles: list[list[tuple[int, int, int]]] | None = None,
    *,
    utf8: bool = False,
    flags: int = 0,
) -> bytes:
    """Build a string pool chunk.

    *styles* holds one span list per leading string; an empty list gives
    that string a bare terminator.
    """
    offsets = []
    data = b""
    for s in strings:
        offsets.append(len(data))
        data += _encode(s, utf8)
    data += b"\x00" * (-len(data) % 4)

    style_offsets: list[int] = []
    style_ints: list[int] = []
    for spans in styles or []:
        style_offsets.append(len(style_ints) * 4)
        for tag, start, end in spans:
            style_ints.extend((tag, start, end))
        style_ints.append(-1)
    if styles:
        style_ints.extend((-1, -1))

    strings_offset = 28 + 4 * len(offsets) + 4 * len(style_offsets)
    styles_offset = strings_offset + len(data) if styles else 0
    chunk_size = strings_offset + len(data) + 4 * len(style_ints)
    if utf8:
        flags |= UTF8_FLAG

    return b"".join(
        [
            struct.pack(
                "<7I",
                STRING_POOL_TAG,
                chunk_size,
                len(offsets),
                len(style_offsets),
                flags,
                strings_offset,
                styles_offset,
            ),
            struct.pack(f"<{len(offsets)}I", *offsets),
            struct.pack(f"<{len(style_offsets)}I", *style_offsets),
            data,
            struct.pack(f"<{len(style_ints)}i", *style_ints),
        ]
    )


@pytest.fixture
def make_chunk():
    return build_chunk


@pytest.fixture
def overlap_chunk() -> bytes:
    """Tag names "0" and "1", then "abcdefg" with two overlapping spans."""
    return build_chunk(
        ["0", "1", "abcdefg"],
        [[], [], [(0, 0, 4), (1, 2, 6)]],
    )
