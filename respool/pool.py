"""String pool chunk parser and queries.

Compiled resource tables and binary XML documents keep every string once
in a shared pool and refer to it by index.

Layout (all little-endian)
--------------------------
  Offset  Size  Description
  0       4     Chunk tag (0x001C0001)
  4       4     Chunk size, header included
  8       4     String count
  12      4     Style count
  16      4     Flags (0x100 = UTF-8, 0x1 = sorted)
  20      4     Strings start, from chunk start
  24      4     Styles start, from chunk start (0 = no styles)
  28      4*N   String offsets, into the string data
  ..      4*M   Style offsets, into the style data
  ..      ...   String data (size multiple of 4)
  ..      ...   Style data: int32 triplets (tag, first, last), -1 terminated

The pool is read once and never modified; every query works on its own
copies, so a pool can be shared freely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator

from .bits import get_short, get_varint
from .chunks import ENCODING_NAMES, HEADER_SIZE, SORTED_FLAG, ChunkType, StringEncoding
from .exceptions import (
    ChunkBoundsError,
    ChunkTypeError,
    MisalignedRegionError,
    StringWindowError,
)
from .reader import BinaryReader

log = logging.getLogger(__name__)

Reporter = Callable[[int, Exception], None]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class StyleSpan:
    """One style span: tag name string index plus first/last character."""

    tag: int
    start: int
    end: int


@dataclass(frozen=True)
class StringPool:
    """Parsed string pool chunk."""

    string_offsets: tuple[int, ...]
    string_bytes: bytes
    style_offsets: tuple[int, ...] | None = None
    style_data: tuple[int, ...] | None = None
    encoding: StringEncoding = StringEncoding.UTF16
    flags: int = 0
    reporter: Reporter | None = field(default=None, compare=False, repr=False)

    # -- Construction ---------------------------------------------------------

    @classmethod
    def read(cls, reader: BinaryReader, *, reporter: Reporter | None = None) -> StringPool:
        return read_string_pool(reader, reporter=reporter)

    @classmethod
    def from_bytes(
        cls, data: bytes, offset: int = 0, *, reporter: Reporter | None = None
    ) -> StringPool:
        return read_string_pool(BinaryReader.from_bytes(data, offset), reporter=reporter)

    @classmethod
    def load(
        cls, path: str | Path, offset: int = 0, *, reporter: Reporter | None = None
    ) -> StringPool:
        """Read the chunk starting at *offset* in the file at *path*."""
        with open(path, "rb") as f:
            reader = BinaryReader(f)
            reader.seek(offset)
            return read_string_pool(reader, reporter=reporter)

    # -- Properties -----------------------------------------------------------

    @property
    def is_utf8(self) -> bool:
        return self.encoding is StringEncoding.UTF8

    @property
    def is_sorted(self) -> bool:
        return bool(self.flags & SORTED_FLAG)

    def count(self) -> int:
        """Number of strings in the pool."""
        return len(self.string_offsets)

    def __len__(self) -> int:
        return self.count()

    # -- Strings --------------------------------------------------------------

    def string(self, index: int) -> str | None:
        """Return the raw string at *index*, without styling.

        Returns None for an out-of-range index, and for a string whose bytes
        cannot be decoded; the latter is logged and passed to the reporter.
        """
        if index < 0 or index >= len(self.string_offsets):
            return None
        try:
            start, length = self._window(self.string_offsets[index])
            return self.string_bytes[start : start + length].decode(self.encoding.value)
        except (StringWindowError, UnicodeDecodeError) as e:
            log.warning("Failed to decode string %d: %s", index, e)
            if self.reporter is not None:
                self.reporter(index, e)
            return None

    def styled_string(self, index: int) -> str | None:
        """Return the string at *index*; styles are only rendered by html()."""
        return self.string(index)

    def _window(self, offset: int) -> tuple[int, int]:
        """Return ``(start, byte_length)`` of the payload at *offset*."""
        if self.encoding is StringEncoding.UTF8:
            _chars, width = get_varint(self.string_bytes, offset)
            offset += width
            length, width = get_varint(self.string_bytes, offset)
            offset += width
        else:
            length = get_short(self.string_bytes, offset) * 2
            offset += 2
        if offset + length > len(self.string_bytes):
            raise StringWindowError(
                f"{length} bytes at {offset} run past string data ({len(self.string_bytes)} bytes)"
            )
        return offset, length

    def iter_strings(self) -> Iterator[tuple[int, str | None]]:
        for i in range(self.count()):
            yield i, self.string(i)

    # -- Styles ---------------------------------------------------------------

    def styles(self, index: int) -> list[StyleSpan] | None:
        """Return a fresh copy of the style spans of string *index*."""
        if self.style_offsets is None or self.style_data is None:
            return None
        if index < 0 or index >= len(self.style_offsets):
            return None

        data = self.style_data
        base = self.style_offsets[index] // 4
        count = 0
        for i in range(base, len(data)):
            if data[i] == -1:
                break
            count += 1
        if count == 0 or count % 3:
            return None

        return [
            StyleSpan(tag=data[i], start=data[i + 1], end=data[i + 2])
            for i in range(base, base + count, 3)
        ]

    def html(self, index: int) -> str | None:
        """Return the string at *index* with its style spans as tags."""
        from .html import render_html

        raw = self.string(index)
        if raw is None:
            return None
        spans = self.styles(index)
        if spans is None:
            return raw
        return render_html(raw, spans, self.string)

    # -- Search ---------------------------------------------------------------

    def find(self, text: str | None) -> int | None:
        """Return the index of the first string equal to *text*.

        Strings are compared as UTF-16 code units behind a 16-bit length,
        so this only gives meaningful answers for UTF-16 pools.
        """
        if text is None:
            return None
        units = text.encode("utf-16-le", "surrogatepass")
        length = len(units) // 2
        data = self.string_bytes
        for i, offset in enumerate(self.string_offsets):
            if offset + 2 > len(data):
                continue
            if get_short(data, offset) != length:
                continue
            if data[offset + 2 : offset + 2 + len(units)] == units:
                return i
        return None

    # -- Export helpers -------------------------------------------------------

    def summary(self) -> dict[str, Any]:
        """Return a summary dict suitable for JSON export."""
        styled = 0
        if self.style_offsets is not None:
            styled = sum(1 for i in range(len(self.style_offsets)) if self.styles(i))
        return {
            "encoding": ENCODING_NAMES[self.encoding],
            "flags": self.flags,
            "sorted": self.is_sorted,
            "string_count": self.count(),
            "style_count": len(self.style_offsets) if self.style_offsets is not None else 0,
            "styled_strings": styled,
            "string_data_size": len(self.string_bytes),
            "style_data_size": len(self.style_data) * 4 if self.style_data is not None else 0,
        }


# ---------------------------------------------------------------------------
# Chunk parser
# ---------------------------------------------------------------------------


def read_string_pool(reader: BinaryReader, *, reporter: Reporter | None = None) -> StringPool:
    """Read a whole string pool chunk, tag included.

    The reader must be positioned at the chunk tag.  Raises a
    PoolFormatError subclass for a wrong tag, tables or regions that do not
    fit the declared chunk size, misaligned regions or a truncated stream.  String offsets are not checked here; a bad offset
    only affects the string it belongs to.
    """
    chunk_start = reader.pos
    reader.skip_check_uint32(ChunkType.STRING_POOL, ChunkTypeError)
    chunk_size = reader.read_uint32()
    string_count = reader.read_uint32()
    style_offset_count = reader.read_uint32()
    flags = reader.read_uint32()
    strings_offset = reader.read_uint32()
    styles_offset = reader.read_uint32()

    encoding = StringEncoding.from_flags(flags)
    log.debug(
        "String pool @%d: size=%d strings=%d styles=%d flags=0x%X (%s) "
        "strings_offset=%d styles_offset=%d",
        chunk_start,
        chunk_size,
        string_count,
        style_offset_count,
        flags,
        ENCODING_NAMES[encoding],
        strings_offset,
        styles_offset,
    )

    tables_end = HEADER_SIZE + 4 * (string_count + style_offset_count)
    if tables_end > chunk_size:
        raise ChunkBoundsError(
            f"{string_count} string and {style_offset_count} style offsets "
            f"overrun chunk size {chunk_size}."
        )
    if strings_offset > chunk_size or styles_offset > chunk_size:
        raise ChunkBoundsError(
            f"Region offsets ({strings_offset}, {styles_offset}) "
            f"past chunk size {chunk_size}."
        )

    string_offsets = reader.read_uint32_array(string_count)
    style_offsets = None
    if style_offset_count != 0:
        style_offsets = reader.read_uint32_array(style_offset_count)

    size = (styles_offset if styles_offset != 0 else chunk_size) - strings_offset
    if size < 0 or size % 4 != 0:
        raise MisalignedRegionError(f"String data size is not multiple of 4 ({size}).")
    string_bytes = reader.read_bytes(size)

    style_data = None
    if styles_offset != 0:
        size = chunk_size - styles_offset
        if size < 0 or size % 4 != 0:
            raise MisalignedRegionError(f"Style data size is not multiple of 4 ({size}).")
        style_data = reader.read_int32_array(size // 4)

    return StringPool(
        string_offsets=string_offsets,
        string_bytes=string_bytes,
        style_offsets=style_offsets,
        style_data=style_data,
        encoding=encoding,
        flags=flags,
        reporter=reporter,
    )
