"""
Outcry program account entities.

Mirrors the Anchor accounts of the on-chain auction program:
AuctionState, AuctionVault and BidderDeposit.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict

from solders.pubkey import Pubkey  # type: ignore


class AuctionStatus(IntEnum):
    """Auction lifecycle status (Borsh enum variant index)."""

    CREATED = 0  # NFT escrowed, accepting deposits
    ACTIVE = 1  # Accepting bids
    ENDED = 2  # Timer expired, awaiting settlement
    SETTLED = 3  # NFT transferred, SOL distributed
    CANCELLED = 4  # Seller cancelled before any bid

    @property
    def label(self) -> str:
        """Human-readable label, e.g. 'Active'."""
        return self.name.capitalize()


@dataclass(frozen=True)
class AuctionState:
    """
    Decoded AuctionState account.

    Amounts are lamports; timestamps are unix seconds (0 = not started).
    highest_bidder is the default (all-zero) key while there are no bids.
    """

    seller: Pubkey
    nft_mint: Pubkey
    reserve_price: int
    duration_seconds: int
    current_bid: int
    highest_bidder: Pubkey
    start_time: int
    end_time: int
    extension_seconds: int
    extension_window: int
    min_bid_increment: int
    status: AuctionStatus
    bid_count: int
    bump: int

    @property
    def has_bids(self) -> bool:
        """Whether any bid has been placed."""
        return self.bid_count > 0 and self.highest_bidder != Pubkey.default()

    @property
    def minimum_next_bid(self) -> int:
        """Smallest acceptable next bid in lamports."""
        if not self.has_bids:
            return self.reserve_price
        return self.current_bid + self.min_bid_increment

    def is_active_at(self, timestamp: int) -> bool:
        """Whether bids are accepted at `timestamp`."""
        return (
            self.status == AuctionStatus.ACTIVE
            and self.start_time <= timestamp < self.end_time
        )

    def seconds_remaining(self, timestamp: int) -> int:
        """Seconds until end_time, 0 once ended or if never started."""
        if self.end_time == 0:
            return 0
        return max(0, self.end_time - timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict output."""
        return {
            "seller": str(self.seller),
            "nft_mint": str(self.nft_mint),
            "reserve_price": self.reserve_price,
            "duration_seconds": self.duration_seconds,
            "current_bid": self.current_bid,
            "highest_bidder": str(self.highest_bidder),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "extension_seconds": self.extension_seconds,
            "extension_window": self.extension_window,
            "min_bid_increment": self.min_bid_increment,
            "status": self.status.label,
            "bid_count": self.bid_count,
            "bump": self.bump,
        }


@dataclass(frozen=True)
class AuctionVault:
    """Decoded AuctionVault account (holds bid lamports for one auction)."""

    auction: Pubkey
    bump: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict output."""
        return {"auction": str(self.auction), "bump": self.bump}


@dataclass(frozen=True)
class BidderDeposit:
    """Decoded BidderDeposit account (per-bidder deposit for one auction)."""

    auction: Pubkey
    bidder: Pubkey
    amount: int
    bump: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict output."""
        return {
            "auction": str(self.auction),
            "bidder": str(self.bidder),
            "amount": self.amount,
            "bump": self.bump,
        }
