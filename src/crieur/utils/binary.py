"""
Bounds-checked binary reader for fixed-layout account data.

All multi-byte integers are little-endian, as in Borsh and the
Metaplex/Anchor account layouts.
"""

import struct

from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.exceptions import MalformedBufferError

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")


class ByteReader:
    """
    Sequential reader over an immutable byte buffer.

    Every read checks the remaining length first and raises
    MalformedBufferError instead of reading past the end.

    Examples:
        >>> reader = ByteReader(b"\\x01\\x00\\x02")
        >>> reader.read_u16()
        1
        >>> reader.remaining
        1
    """

    def __init__(self, data: bytes, offset: int = 0):
        """
        Initialize reader.

        Args:
            data: Buffer to read
            offset: Starting position
        """
        self._data = bytes(data)
        self._offset = offset

    @property
    def offset(self) -> int:
        """Current read position."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Bytes left after the current position."""
        return len(self._data) - self._offset

    def require(self, size: int) -> None:
        """Raise MalformedBufferError unless `size` more bytes are available."""
        if size < 0 or size > self.remaining:
            raise MalformedBufferError(
                f"Need {size} bytes at offset {self._offset}, "
                f"{self.remaining} available",
                details={"offset": self._offset, "size": size},
            )

    def read_bytes(self, size: int) -> bytes:
        """Read `size` raw bytes."""
        self.require(size)
        start = self._offset
        self._offset += size
        return self._data[start : self._offset]

    def skip(self, size: int) -> None:
        """Advance past `size` bytes."""
        self.require(size)
        self._offset += size

    def read_u8(self) -> int:
        """Read unsigned 8-bit integer."""
        return self.read_bytes(1)[0]

    def read_bool(self) -> bool:
        """Read a one-byte flag (nonzero = True)."""
        return self.read_u8() != 0

    def read_u16(self) -> int:
        """Read unsigned 16-bit integer."""
        return _U16.unpack(self.read_bytes(2))[0]

    def read_u32(self) -> int:
        """Read unsigned 32-bit integer."""
        return _U32.unpack(self.read_bytes(4))[0]

    def read_u64(self) -> int:
        """Read unsigned 64-bit integer."""
        return _U64.unpack(self.read_bytes(8))[0]

    def read_i64(self) -> int:
        """Read signed 64-bit integer."""
        return _I64.unpack(self.read_bytes(8))[0]

    def read_pubkey(self) -> Pubkey:
        """Read a 32-byte public key."""
        return Pubkey.from_bytes(self.read_bytes(32))
