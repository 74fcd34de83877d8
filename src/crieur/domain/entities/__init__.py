"""
Domain entities.
"""

from crieur.domain.entities.auction import (
    AuctionState,
    AuctionStatus,
    AuctionVault,
    BidderDeposit,
)
from crieur.domain.entities.metadata import (
    Creator,
    MetadataRecord,
    ResolvedMetadata,
)

__all__ = [
    "AuctionState",
    "AuctionStatus",
    "AuctionVault",
    "BidderDeposit",
    "Creator",
    "MetadataRecord",
    "ResolvedMetadata",
]
