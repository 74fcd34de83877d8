"""
Unit tests for MetadataDecoder.

Tests fixed vectors, truncation safety and string clamping.

Usage:
    pytest tests/unit/domain/test_metadata_decoder.py
"""

import struct

from crieur.domain.entities import Creator
from crieur.domain.services import MetadataDecoder, decode_metadata
from crieur.domain.services.metadata_decoder import CREATOR_SIZE, FIXED_PREFIX_SIZE
from tests.helpers.buffers import build_metadata_buffer, key

AUTHORITY = key(1)
MINT = key(2)


class TestMetadataDecoder:
    """Unit tests for MetadataDecoder."""

    # ================================================================
    # Fixed vectors
    # ================================================================

    def test_fixed_prefix_size(self):
        """Test fixed prefix covers key, keys, strings, fee and tag."""
        self.reporter.info("Testing fixed prefix size", context="Test")

        assert FIXED_PREFIX_SIZE == 1 + 32 + 32 + 36 + 14 + 204 + 2 + 1
        assert FIXED_PREFIX_SIZE == 322
        assert CREATOR_SIZE == 34

        self.reporter.info("Prefix size correct", context="Test")

    def test_decode_without_creators(self):
        """Test record with absent creators option."""
        self.reporter.info("Testing decode with no creators", context="Test")

        buffer = build_metadata_buffer(
            AUTHORITY,
            MINT,
            name="Outcry #1",
            symbol="OUT",
            uri="https://example.com/1.json",
            seller_fee_basis_points=500,
        )
        assert len(buffer) == FIXED_PREFIX_SIZE

        record = decode_metadata(buffer)

        assert record is not None
        assert record.update_authority == AUTHORITY
        assert record.mint == MINT
        assert record.name == "Outcry #1"
        assert record.symbol == "OUT"
        assert record.uri == "https://example.com/1.json"
        assert record.seller_fee_basis_points == 500
        assert record.creators == ()
        assert record.creator_share_total == 0

        self.reporter.info("Record decoded without creators", context="Test")

    def test_decode_with_two_creators(self):
        """Test creators are decoded in declared order."""
        self.reporter.info("Testing decode with two creators", context="Test")

        buffer = build_metadata_buffer(
            AUTHORITY,
            MINT,
            name="Gavel",
            symbol="GVL",
            uri="ipfs://cid",
            seller_fee_basis_points=250,
            creators=[(key(3), True, 70), (key(4), False, 30)],
        )
        assert len(buffer) == FIXED_PREFIX_SIZE + 4 + 2 * CREATOR_SIZE

        record = MetadataDecoder().decode(buffer)

        assert record is not None
        assert record.creators == (
            Creator(address=key(3), verified=True, share=70),
            Creator(address=key(4), verified=False, share=30),
        )
        assert record.creator_share_total == 100

        self.reporter.info("Creators decoded in order", context="Test")

    def test_present_but_empty_creators(self):
        """Test presence byte 1 with count 0 yields no creators."""
        self.reporter.info("Testing empty creators list", context="Test")

        buffer = build_metadata_buffer(AUTHORITY, MINT, name="A", creators=[])
        record = decode_metadata(buffer)

        assert record is not None
        assert record.creators == ()

        self.reporter.info("Empty creators list decoded", context="Test")

    def test_trailing_bytes_ignored(self):
        """Test bytes after the creators section are ignored."""
        self.reporter.info("Testing trailing bytes", context="Test")

        buffer = build_metadata_buffer(AUTHORITY, MINT, name="Tail") + b"\xff" * 64
        record = decode_metadata(buffer)

        assert record is not None
        assert record.name == "Tail"

        self.reporter.info("Trailing bytes ignored", context="Test")

    # ================================================================
    # String cleaning
    # ================================================================

    def test_declared_length_clamped_to_capacity(self):
        """Test declared length above capacity reads only capacity bytes."""
        self.reporter.info("Testing length clamping", context="Test")

        buffer = build_metadata_buffer(
            AUTHORITY, MINT, name="N" * 32, name_length=1000, symbol="S"
        )
        record = decode_metadata(buffer)

        assert record is not None
        assert record.name == "N" * 32
        assert record.symbol == "S"

        self.reporter.info("Declared length clamped", context="Test")

    def test_declared_length_shorter_than_content(self):
        """Test only the declared prefix of the field is used."""
        self.reporter.info("Testing short declared length", context="Test")

        buffer = build_metadata_buffer(AUTHORITY, MINT, name="Hello", name_length=3)
        record = decode_metadata(buffer)

        assert record is not None
        assert record.name == "Hel"

        self.reporter.info("Declared prefix used", context="Test")

    def test_nul_padding_and_whitespace_removed(self):
        """Test NUL bytes are removed and whitespace trimmed."""
        self.reporter.info("Testing NUL and whitespace cleanup", context="Test")

        buffer = build_metadata_buffer(
            AUTHORITY, MINT, name="  Padded\x00Name  ", name_length=32
        )
        record = decode_metadata(buffer)

        assert record is not None
        assert record.name == "PaddedName"

        self.reporter.info("Strings cleaned", context="Test")

    def test_invalid_utf8_replaced(self):
        """Test invalid UTF-8 does not fail the decode."""
        self.reporter.info("Testing invalid UTF-8", context="Test")

        valid = build_metadata_buffer(AUTHORITY, MINT)
        name_offset = 1 + 32 + 32
        field = struct.pack("<I", 2) + b"\xff\xfe".ljust(32, b"\x00")
        buffer = valid[:name_offset] + field + valid[name_offset + len(field) :]

        record = decode_metadata(buffer)

        assert record is not None
        assert record.name == "\ufffd\ufffd"

        self.reporter.info("Invalid bytes replaced", context="Test")

    # ================================================================
    # Truncation safety
    # ================================================================

    def test_empty_buffer_returns_none(self):
        """Test empty buffer decodes to None."""
        self.reporter.info("Testing empty buffer", context="Test")

        assert decode_metadata(b"") is None
        assert decode_metadata(None) is None

        self.reporter.info("Empty buffer rejected", context="Test")

    def test_short_buffer_returns_none(self):
        """Test buffers shorter than the fixed prefix decode to None."""
        self.reporter.info("Testing short buffers", context="Test")

        buffer = build_metadata_buffer(AUTHORITY, MINT, name="Short")

        assert decode_metadata(buffer[:10]) is None
        assert decode_metadata(buffer[: FIXED_PREFIX_SIZE - 1]) is None

        self.reporter.info("Short buffers rejected", context="Test")

    def test_truncated_creators_section_returns_none(self):
        """Test a count larger than the remaining bytes rejects the record."""
        self.reporter.info("Testing short creators section", context="Test")

        buffer = build_metadata_buffer(
            AUTHORITY,
            MINT,
            name="Truncated",
            creators=[(key(3), True, 100)],
            declared_creator_count=2,
        )

        assert decode_metadata(buffer) is None

        self.reporter.info("Short creators section rejected", context="Test")

    def test_missing_creator_count_returns_none(self):
        """Test presence byte without a count rejects the record."""
        self.reporter.info("Testing missing creator count", context="Test")

        buffer = build_metadata_buffer(AUTHORITY, MINT)[:-1] + b"\x01\x02"

        assert decode_metadata(buffer) is None

        self.reporter.info("Missing count rejected", context="Test")

    def test_invalid_presence_byte_returns_none(self):
        """Test an option tag other than 0 or 1 rejects the record."""
        self.reporter.info("Testing invalid option tag", context="Test")

        buffer = build_metadata_buffer(AUTHORITY, MINT)[:-1] + b"\x07"

        assert decode_metadata(buffer) is None

        self.reporter.info("Invalid option tag rejected", context="Test")

