"""
Outcry program account decoders.

Anchor prefixes every account with an 8-byte discriminator,
sha256("account:<AccountName>")[:8], followed by the Borsh-encoded
fields. Same policy as the metadata decoder: a truncated buffer, a
foreign discriminator or an unknown enum variant decodes to None.
"""

import hashlib
from typing import Optional

from crieur.domain.entities.auction import (
    AuctionState,
    AuctionStatus,
    AuctionVault,
    BidderDeposit,
)
from crieur.domain.exceptions import MalformedBufferError
from crieur.utils.binary import ByteReader

DISCRIMINATOR_SIZE = 8

AUCTION_STATE_SIZE = 166
AUCTION_VAULT_SIZE = DISCRIMINATOR_SIZE + 32 + 1
BIDDER_DEPOSIT_SIZE = DISCRIMINATOR_SIZE + 32 + 32 + 8 + 1


def account_discriminator(account_name: str) -> bytes:
    """
    Compute the Anchor account discriminator.

    Examples:
        >>> len(account_discriminator("AuctionState"))
        8
    """
    return hashlib.sha256(f"account:{account_name}".encode()).digest()[
        :DISCRIMINATOR_SIZE
    ]


AUCTION_STATE_DISCRIMINATOR = account_discriminator("AuctionState")
AUCTION_VAULT_DISCRIMINATOR = account_discriminator("AuctionVault")
BIDDER_DEPOSIT_DISCRIMINATOR = account_discriminator("BidderDeposit")


def _open(buffer: bytes, discriminator: bytes, size: int) -> ByteReader:
    if buffer is None or len(buffer) < size:
        raise MalformedBufferError("Account data too short")
    reader = ByteReader(buffer)
    if reader.read_bytes(DISCRIMINATOR_SIZE) != discriminator:
        raise MalformedBufferError("Account discriminator mismatch")
    return reader


def decode_auction_state(buffer: bytes) -> Optional[AuctionState]:
    """
    Decode an AuctionState account.

    Args:
        buffer: Raw account data

    Returns:
        AuctionState, or None if the data is not a valid AuctionState
    """
    try:
        reader = _open(buffer, AUCTION_STATE_DISCRIMINATOR, AUCTION_STATE_SIZE)
        seller = reader.read_pubkey()
        nft_mint = reader.read_pubkey()
        reserve_price = reader.read_u64()
        duration_seconds = reader.read_u64()
        current_bid = reader.read_u64()
        highest_bidder = reader.read_pubkey()
        start_time = reader.read_i64()
        end_time = reader.read_i64()
        extension_seconds = reader.read_u32()
        extension_window = reader.read_u32()
        min_bid_increment = reader.read_u64()
        status_index = reader.read_u8()
        bid_count = reader.read_u32()
        bump = reader.read_u8()
    except MalformedBufferError:
        return None

    try:
        status = AuctionStatus(status_index)
    except ValueError:
        return None

    return AuctionState(
        seller=seller,
        nft_mint=nft_mint,
        reserve_price=reserve_price,
        duration_seconds=duration_seconds,
        current_bid=current_bid,
        highest_bidder=highest_bidder,
        start_time=start_time,
        end_time=end_time,
        extension_seconds=extension_seconds,
        extension_window=extension_window,
        min_bid_increment=min_bid_increment,
        status=status,
        bid_count=bid_count,
        bump=bump,
    )


def decode_auction_vault(buffer: bytes) -> Optional[AuctionVault]:
    """Decode an AuctionVault account, None if invalid."""
    try:
        reader = _open(buffer, AUCTION_VAULT_DISCRIMINATOR, AUCTION_VAULT_SIZE)
        return AuctionVault(auction=reader.read_pubkey(), bump=reader.read_u8())
    except MalformedBufferError:
        return None


def decode_bidder_deposit(buffer: bytes) -> Optional[BidderDeposit]:
    """Decode a BidderDeposit account, None if invalid."""
    try:
        reader = _open(buffer, BIDDER_DEPOSIT_DISCRIMINATOR, BIDDER_DEPOSIT_SIZE)
        return BidderDeposit(
            auction=reader.read_pubkey(),
            bidder=reader.read_pubkey(),
            amount=reader.read_u64(),
            bump=reader.read_u8(),
        )
    except MalformedBufferError:
        return None
