"""
ProgramDerivedAddress value object - immutable (address, bump) pair.
"""

from dataclasses import dataclass
from typing import Iterator, Union

from solders.pubkey import Pubkey  # type: ignore


@dataclass(frozen=True)
class ProgramDerivedAddress:
    """
    Value object representing a derived program address.

    Rules:
    - address is a 32-byte public key that lies off the ed25519 curve
    - bump is the discriminant byte found by the search, in [0, 255]
    - Immutable once created

    Unpacks like the tuple returned by Pubkey.find_program_address:
        address, bump = deriver.derive(seeds, program_id)
    """

    address: Pubkey
    bump: int

    def __post_init__(self):
        """Validate bump range on creation."""
        if not isinstance(self.bump, int) or not 0 <= self.bump <= 255:
            raise ValueError(f"Bump must be in [0, 255], got {self.bump!r}")

    def __iter__(self) -> Iterator[Union[Pubkey, int]]:
        """Allow tuple unpacking as (address, bump)."""
        yield self.address
        yield self.bump

    def __str__(self) -> str:
        """String representation returns base-58 address."""
        return str(self.address)

    def to_dict(self) -> dict:
        """Convert to dict output."""
        return {"address": str(self.address), "bump": self.bump}
