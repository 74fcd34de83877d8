"""
Account buffer builders for tests.

Produce byte-exact Metaplex metadata and Outcry account layouts so
decoders and use cases can be exercised without an RPC node.
"""

import struct
from typing import Optional, Sequence, Tuple

from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.services.auction_decoder import (
    AUCTION_STATE_DISCRIMINATOR,
    AUCTION_VAULT_DISCRIMINATOR,
    BIDDER_DEPOSIT_DISCRIMINATOR,
)

CreatorFields = Tuple[Pubkey, bool, int]


def key(seed: int) -> Pubkey:
    """Deterministic test address filled with one byte value."""
    return Pubkey.from_bytes(bytes([seed]) * 32)


def encode_bounded(
    value: str, capacity: int, declared_length: Optional[int] = None
) -> bytes:
    """Encode a fixed-capacity string field (u32 length + padded bytes)."""
    raw = value.encode("utf-8")
    length = len(raw) if declared_length is None else declared_length
    return struct.pack("<I", length) + raw[:capacity].ljust(capacity, b"\x00")


def build_metadata_buffer(
    update_authority: Pubkey,
    mint: Pubkey,
    name: str = "",
    symbol: str = "",
    uri: str = "",
    seller_fee_basis_points: int = 0,
    creators: Optional[Sequence[CreatorFields]] = None,
    declared_creator_count: Optional[int] = None,
    name_length: Optional[int] = None,
    key_byte: int = 4,
) -> bytes:
    """
    Build a metadata account buffer.

    Args:
        creators: None for an absent creators option
        declared_creator_count: Override the u32 count (truncation tests)
        name_length: Override the declared name length (clamping tests)
    """
    buffer = bytes([key_byte]) + bytes(update_authority) + bytes(mint)
    buffer += encode_bounded(name, 32, name_length)
    buffer += encode_bounded(symbol, 10)
    buffer += encode_bounded(uri, 200)
    buffer += struct.pack("<H", seller_fee_basis_points)

    if creators is None:
        return buffer + b"\x00"

    count = len(creators) if declared_creator_count is None else declared_creator_count
    buffer += b"\x01" + struct.pack("<I", count)
    for address, verified, share in creators:
        buffer += bytes(address) + bytes([1 if verified else 0, share])
    return buffer


def build_auction_state_buffer(
    seller: Pubkey,
    nft_mint: Pubkey,
    reserve_price: int = 1_000_000_000,
    duration_seconds: int = 3600,
    current_bid: int = 0,
    highest_bidder: Optional[Pubkey] = None,
    start_time: int = 0,
    end_time: int = 0,
    extension_seconds: int = 300,
    extension_window: int = 300,
    min_bid_increment: int = 100_000_000,
    status: int = 0,
    bid_count: int = 0,
    bump: int = 255,
    discriminator: bytes = AUCTION_STATE_DISCRIMINATOR,
) -> bytes:
    """Build an Anchor AuctionState account buffer."""
    return (
        discriminator
        + bytes(seller)
        + bytes(nft_mint)
        + struct.pack("<QQQ", reserve_price, duration_seconds, current_bid)
        + bytes(highest_bidder or Pubkey.default())
        + struct.pack("<qq", start_time, end_time)
        + struct.pack("<II", extension_seconds, extension_window)
        + struct.pack("<Q", min_bid_increment)
        + struct.pack("<BIB", status, bid_count, bump)
    )


def build_vault_buffer(auction: Pubkey, bump: int = 254) -> bytes:
    """Build an Anchor AuctionVault account buffer."""
    return AUCTION_VAULT_DISCRIMINATOR + bytes(auction) + bytes([bump])


def build_deposit_buffer(
    auction: Pubkey, bidder: Pubkey, amount: int, bump: int = 253
) -> bytes:
    """Build an Anchor BidderDeposit account buffer."""
    return (
        BIDDER_DEPOSIT_DISCRIMINATOR
        + bytes(auction)
        + bytes(bidder)
        + struct.pack("<Q", amount)
        + bytes([bump])
    )
