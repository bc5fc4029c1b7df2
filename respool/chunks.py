"""Chunk type, header flag and encoding definitions for string pool chunks."""

from __future__ import annotations

from enum import Enum, IntEnum


class ChunkType(IntEnum):
    """Known resource chunk tags, read as a single little-endian uint32.

    The low half is the chunk type, the high half the header size.
    """

    STRING_POOL = 0x001C0001  # type 0x0001, header size 28


# Header flags
SORTED_FLAG = 0x00000001
UTF8_FLAG = 0x00000100

# Fixed part of the string pool header, tag included
HEADER_SIZE = 28


class StringEncoding(str, Enum):
    """Pool-wide text encoding, selected by UTF8_FLAG."""

    UTF16 = "utf-16-le"
    UTF8 = "utf-8"

    @classmethod
    def from_flags(cls, flags: int) -> StringEncoding:
        return cls.UTF8 if flags & UTF8_FLAG else cls.UTF16


# Encoding names for display
ENCODING_NAMES: dict[StringEncoding, str] = {
    StringEncoding.UTF16: "UTF-16LE",
    StringEncoding.UTF8: "UTF-8",
}
