"""
Metaplex metadata account decoder.

Layout (all integers little-endian):
    key                      u8   (ignored)
    update_authority         32 bytes
    mint                     32 bytes
    name                     u32 length + 32-byte field
    symbol                   u32 length + 10-byte field
    uri                      u32 length + 200-byte field
    seller_fee_basis_points  u16
    creators                 u8 presence, then u32 count + count * 34 bytes
                             (32-byte address, u8 verified, u8 share)

Decoding is all-or-nothing: any truncation returns None for the whole
record, including a creators section shorter than its declared count.
"""

from typing import Optional, Tuple

from crieur.domain.entities.metadata import Creator, MetadataRecord
from crieur.domain.exceptions import MalformedBufferError
from crieur.domain.value_objects import BoundedString
from crieur.utils.binary import ByteReader

NAME_FIELD = BoundedString(capacity=32)
SYMBOL_FIELD = BoundedString(capacity=10)
URI_FIELD = BoundedString(capacity=200)

CREATOR_SIZE = 32 + 1 + 1

# key + update authority + mint + three bounded strings + fee + presence byte
FIXED_PREFIX_SIZE = (
    1
    + 32
    + 32
    + NAME_FIELD.encoded_size
    + SYMBOL_FIELD.encoded_size
    + URI_FIELD.encoded_size
    + 2
    + 1
)


class MetadataDecoder:
    """
    Decoder for Metaplex v1 metadata accounts.

    Stateless; decode() never raises and never reads out of bounds.
    """

    def decode(self, buffer: bytes) -> Optional[MetadataRecord]:
        """
        Decode a raw metadata account.

        Args:
            buffer: Raw account data

        Returns:
            MetadataRecord, or None if the buffer is truncated or malformed
        """
        if buffer is None or len(buffer) < FIXED_PREFIX_SIZE:
            return None

        try:
            return self._decode(ByteReader(buffer))
        except MalformedBufferError:
            return None

    def _decode(self, reader: ByteReader) -> MetadataRecord:
        reader.skip(1)
        update_authority = reader.read_pubkey()
        mint = reader.read_pubkey()

        name = NAME_FIELD.read(reader)
        symbol = SYMBOL_FIELD.read(reader)
        uri = URI_FIELD.read(reader)

        seller_fee_basis_points = reader.read_u16()
        creators = self._read_creators(reader)

        return MetadataRecord(
            update_authority=update_authority,
            mint=mint,
            name=name,
            symbol=symbol,
            uri=uri,
            seller_fee_basis_points=seller_fee_basis_points,
            creators=creators,
        )

    def _read_creators(self, reader: ByteReader) -> Tuple[Creator, ...]:
        presence = reader.read_u8()
        if presence == 0:
            return ()
        if presence != 1:
            raise MalformedBufferError(f"Invalid creators option tag: {presence}")

        count = reader.read_u32()
        reader.require(count * CREATOR_SIZE)

        return tuple(
            Creator(
                address=reader.read_pubkey(),
                verified=reader.read_bool(),
                share=reader.read_u8(),
            )
            for _ in range(count)
        )


_decoder = MetadataDecoder()


def decode_metadata(buffer: bytes) -> Optional[MetadataRecord]:
    """
    Decode a raw Metaplex metadata account.

    Args:
        buffer: Raw account data

    Returns:
        MetadataRecord, or None if the buffer is truncated or malformed
    """
    return _decoder.decode(buffer)
