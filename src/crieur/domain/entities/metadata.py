"""
Metaplex metadata entities.

MetadataRecord is the decoded on-chain account; ResolvedMetadata is
the merged view of on-chain fields and the off-chain JSON document.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from solders.pubkey import Pubkey  # type: ignore


@dataclass(frozen=True)
class Creator:
    """
    Royalty recipient listed in a metadata account.

    Attributes:
        address: Creator wallet
        verified: Whether the creator signed the metadata
        share: Percentage of royalties (0-100)
    """

    address: Pubkey
    verified: bool
    share: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict output."""
        return {
            "address": str(self.address),
            "verified": self.verified,
            "share": self.share,
        }


@dataclass(frozen=True)
class MetadataRecord:
    """
    Decoded Metaplex metadata account.

    Strings have NUL padding removed and surrounding whitespace stripped.
    Creator shares are expected to sum to 100 when creators are present;
    the decoder does not enforce it.
    """

    update_authority: Pubkey
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: Tuple[Creator, ...] = ()

    @property
    def creator_share_total(self) -> int:
        """Sum of creator shares (100 for well-formed records with creators)."""
        return sum(c.share for c in self.creators)


@dataclass(frozen=True)
class ResolvedMetadata:
    """
    On-chain metadata merged with the off-chain JSON document.

    Attributes:
        mint: NFT mint address (base-58)
        name: Off-chain name when supplied, otherwise on-chain name
        symbol: On-chain symbol
        uri: On-chain URI of the off-chain document
        seller_fee_basis_points: Royalty in basis points
        creators: On-chain creators in declared order
        image: Off-chain image URL (None if unavailable)
        description: Off-chain description (None if unavailable)
        onchain_name: Name as stored in the account
        offchain_loaded: Whether the off-chain document was reachable
    """

    mint: str
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int = 0
    creators: Tuple[Creator, ...] = ()
    image: Optional[str] = None
    description: Optional[str] = None
    onchain_name: str = ""
    offchain_loaded: bool = False
    attributes: Tuple[Dict[str, Any], ...] = field(default=(), compare=False)

    @classmethod
    def from_record(
        cls,
        mint: str,
        record: MetadataRecord,
        offchain: Optional[Dict[str, Any]] = None,
    ) -> "ResolvedMetadata":
        """
        Merge a decoded record with an optional off-chain document.

        Args:
            mint: Mint address the record was resolved for
            record: Decoded on-chain record
            offchain: Parsed off-chain JSON object, None if unavailable

        Returns:
            ResolvedMetadata
        """
        if offchain is None:
            return cls(
                mint=mint,
                name=record.name,
                symbol=record.symbol,
                uri=record.uri,
                seller_fee_basis_points=record.seller_fee_basis_points,
                creators=record.creators,
                onchain_name=record.name,
            )

        name = offchain.get("name")
        image = offchain.get("image") or offchain.get("image_url")
        description = offchain.get("description")
        attributes = offchain.get("attributes")

        return cls(
            mint=mint,
            name=name if isinstance(name, str) and name else record.name,
            symbol=record.symbol,
            uri=record.uri,
            seller_fee_basis_points=record.seller_fee_basis_points,
            creators=record.creators,
            image=image if isinstance(image, str) and image else None,
            description=(
                description if isinstance(description, str) and description else None
            ),
            onchain_name=record.name,
            offchain_loaded=True,
            attributes=(
                tuple(a for a in attributes if isinstance(a, dict))
                if isinstance(attributes, list)
                else ()
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict output."""
        return {
            "mint": self.mint,
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "seller_fee_basis_points": self.seller_fee_basis_points,
            "creators": [c.to_dict() for c in self.creators],
            "image": self.image,
            "description": self.description,
            "onchain_name": self.onchain_name,
            "offchain_loaded": self.offchain_loaded,
            "attributes": list(self.attributes),
        }
