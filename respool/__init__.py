"""Android resource string pool decoder."""

__version__ = "0.1.0"

from .chunks import ChunkType, StringEncoding, SORTED_FLAG, UTF8_FLAG
from .exceptions import (
    PoolFormatError,
    ChunkTypeError,
    ChunkBoundsError,
    MisalignedRegionError,
    TruncatedChunkError,
    StringDecodeError,
    StringWindowError,
)
from .reader import BinaryReader
from .pool import StringPool, StyleSpan, read_string_pool
from .html import render_html
from .export import export_pool

__all__ = [
    "__version__",
    "ChunkType",
    "StringEncoding",
    "SORTED_FLAG",
    "UTF8_FLAG",
    "PoolFormatError",
    "ChunkTypeError",
    "ChunkBoundsError",
    "MisalignedRegionError",
    "TruncatedChunkError",
    "StringDecodeError",
    "StringWindowError",
    "BinaryReader",
    "StringPool",
    "StyleSpan",
    "read_string_pool",
    "render_html",
    "export_pool",
]
