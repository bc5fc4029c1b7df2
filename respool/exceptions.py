class PoolFormatError(Exception):
    """Base exception for corrupt string pool chunks."""


class ChunkTypeError(PoolFormatError):
    """Chunk tag does not match the string pool chunk type."""


class MisalignedRegionError(PoolFormatError):
    """String or style region size is not a multiple of 4."""


class TruncatedChunkError(PoolFormatError):
    """Stream ended before the chunk was fully read."""


class StringDecodeError(Exception):
    """A single string could not be decoded; the pool stays usable."""


class StringWindowError(StringDecodeError):
    """Length header or payload lies outside the string data."""


class ChunkBoundsError(PoolFormatError):
    """Header tables or regions extend past the declared chunk size."""
