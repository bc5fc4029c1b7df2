"""Binary reader over a file handle, used to parse chunks sequentially."""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .exceptions import PoolFormatError, TruncatedChunkError

READ_BLOCK = 1 << 20


class BinaryReader:
    """Wraps a file handle with endian-aware read methods.

    Resource chunks are little-endian, so that is the default.  Every read
    raises TruncatedChunkError when the handle runs dry.
    """

    def __init__(self, f: BinaryIO, little_endian: bool = True):
        self.f = f
        self.little_endian = little_endian

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> BinaryReader:
        r = cls(io.BytesIO(data))
        r.seek(offset)
        return r

    @property
    def pos(self) -> int:
        return self.f.tell()

    def seek(self, offset: int, whence: int = 0) -> None:
        self.f.seek(offset, whence)

    def skip(self, n: int) -> None:
        self.f.seek(n, 1)

    def read_bytes(self, n: int) -> bytes:
        """Read exactly *n* bytes.

        Reads in blocks so a bogus size from a corrupt header fails on the
        real end of stream instead of allocating *n* bytes up front.
        """
        pos = self.pos
        parts: list[bytes] = []
        got = 0
        while got < n:
            block = self.f.read(min(n - got, READ_BLOCK))
            if not block:
                break
            parts.append(block)
            got += len(block)
        if got != n:
            raise TruncatedChunkError(
                f"Unexpected end of stream at {pos}: wanted {n} bytes, got {got}"
            )
        return b"".join(parts)

    def _fmt(self, char: str) -> str:
        prefix = "<" if self.little_endian else ">"
        return f"{prefix}{char}"

    def read_uint8(self) -> int:
        return self.read_bytes(1)[0]

    def read_uint16(self) -> int:
        return struct.unpack(self._fmt("H"), self.read_bytes(2))[0]

    def read_uint32(self) -> int:
        return struct.unpack(self._fmt("I"), self.read_bytes(4))[0]

    def read_int32(self) -> int:
        return struct.unpack(self._fmt("i"), self.read_bytes(4))[0]

    def read_uint32_array(self, count: int) -> tuple[int, ...]:
        return struct.unpack(self._fmt(f"{count}I"), self.read_bytes(count * 4))

    def read_int32_array(self, count: int) -> tuple[int, ...]:
        return struct.unpack(self._fmt(f"{count}i"), self.read_bytes(count * 4))

    def skip_check_uint32(self, expected: int, error: type[PoolFormatError] = PoolFormatError) -> None:
        """Read a uint32 and raise *error* unless it equals *expected*."""
        got = self.read_uint32()
        if got != expected:
            raise error(f"Expected: 0x{expected:08x}, got: 0x{got:08x}")
