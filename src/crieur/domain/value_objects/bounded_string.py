"""
BoundedString field - fixed-capacity string encoding of legacy account layouts.
"""

from dataclasses import dataclass

from crieur.utils.binary import ByteReader


@dataclass(frozen=True)
class BoundedString:
    """
    A length-prefixed string stored in a fixed-capacity field.

    Encoding: u32 little-endian declared length, followed by exactly
    `capacity` bytes regardless of the declared length. Only the first
    min(declared, capacity) bytes carry the value; the rest is padding.
    """

    capacity: int

    def read(self, reader: ByteReader) -> str:
        """
        Read one field from the reader and return its cleaned value.

        Args:
            reader: Reader positioned at the length prefix

        Returns:
            Decoded string without NUL padding or surrounding whitespace

        Raises:
            MalformedBufferError: If the field runs past the buffer end
        """
        declared_length = reader.read_u32()
        raw = reader.read_bytes(self.capacity)
        value = raw[: self.logical_length(declared_length)]
        return value.decode("utf-8", errors="replace").replace("\x00", "").strip()

    def logical_length(self, declared_length: int) -> int:
        """Clamp a declared length to the field capacity."""
        return min(declared_length, self.capacity)

    @property
    def encoded_size(self) -> int:
        """Bytes consumed by the field, length prefix included."""
        return 4 + self.capacity
