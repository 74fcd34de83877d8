"""
Program-derived address derivation.

Reproduces the Solana runtime algorithm bit for bit:

    candidate = sha256(seed_1 || ... || seed_n || bump || program_id
                       || "ProgramDerivedAddress")

searching bump from 255 down to 0 and accepting the first candidate
that is NOT a valid ed25519 point, so no private key can sign for it.
"""

from typing import Optional, Sequence

from solders.pubkey import Pubkey  # type: ignore

from crieur.constants import (
    AUCTION_SEED,
    DEPOSIT_SEED,
    MAX_SEED_LENGTH,
    MAX_SEEDS,
    METADATA_SEED,
    PDA_MARKER,
    PROGRAM_ID,
    TOKEN_METADATA_PROGRAM_ID,
    VAULT_SEED,
)
from crieur.domain.exceptions import InvalidSeedsError, NoValidBumpFoundError
from crieur.domain.services.i_curve_provider import ICurveProvider
from crieur.domain.value_objects import ProgramDerivedAddress
from crieur.utils.blockchain import AddressLike, address_bytes, to_pubkey


class AddressDeriver:
    """
    Derives program addresses from seeds.

    Pure and reentrant: holds only the curve provider and the two
    program ids used by the specialized derivations.

    Example:
        deriver = AddressDeriver(Ed25519CurveProvider())
        auction, bump = deriver.derive_auction_address(seller, mint)
    """

    def __init__(
        self,
        curve_provider: ICurveProvider,
        program_id: AddressLike = PROGRAM_ID,
        metadata_program_id: AddressLike = TOKEN_METADATA_PROGRAM_ID,
    ):
        """
        Initialize deriver.

        Args:
            curve_provider: Hash and on-curve primitives
            program_id: Outcry auction program id
            metadata_program_id: Metaplex token metadata program id
        """
        self.curve_provider = curve_provider
        self.program_id = to_pubkey(program_id)
        self.metadata_program_id = to_pubkey(metadata_program_id)

    # ================================================================
    # Core derivation
    # ================================================================

    def derive(
        self,
        seeds: Sequence[bytes],
        program_id: Optional[AddressLike] = None,
    ) -> ProgramDerivedAddress:
        """
        Find the canonical program address for a seed set.

        Args:
            seeds: Ordered seed byte strings (each at most 32 bytes)
            program_id: Owning program (defaults to the auction program)

        Returns:
            ProgramDerivedAddress with the highest off-curve bump

        Raises:
            InvalidSeedsError: If a seed is too long or there are too many
            NoValidBumpFoundError: If every bump yields an on-curve point
        """
        owner = self._program_bytes(program_id)
        prefix = self._seed_prefix(seeds, reserve_bump=True)

        for bump in range(255, -1, -1):
            candidate = self._hash_candidate(prefix + bytes([bump]), owner)
            if not self.curve_provider.is_on_curve(candidate):
                return ProgramDerivedAddress(Pubkey.from_bytes(candidate), bump)

        raise NoValidBumpFoundError(
            "Unable to find a viable program address bump seed",
            details={"program_id": str(Pubkey.from_bytes(owner))},
        )

    def create_program_address(
        self,
        seeds: Sequence[bytes],
        program_id: Optional[AddressLike] = None,
    ) -> Pubkey:
        """
        Compute the address for an exact seed set (bump already included).

        Args:
            seeds: Ordered seed byte strings
            program_id: Owning program (defaults to the auction program)

        Returns:
            Derived address

        Raises:
            InvalidSeedsError: If seeds are invalid or the result is on curve
        """
        owner = self._program_bytes(program_id)
        candidate = self._hash_candidate(
            self._seed_prefix(seeds, reserve_bump=False), owner
        )
        if self.curve_provider.is_on_curve(candidate):
            raise InvalidSeedsError("Derived address lies on the ed25519 curve")
        return Pubkey.from_bytes(candidate)

    # ================================================================
    # Outcry / Metaplex derivations
    # ================================================================

    def derive_auction_address(
        self, seller: AddressLike, nft_mint: AddressLike
    ) -> ProgramDerivedAddress:
        """
        Derive the AuctionState PDA.

        Seeds: ["auction", seller, nft_mint]
        """
        return self.derive(
            [AUCTION_SEED, address_bytes(seller), address_bytes(nft_mint)],
            self.program_id,
        )

    def derive_vault_address(self, auction: AddressLike) -> ProgramDerivedAddress:
        """
        Derive the AuctionVault PDA.

        Seeds: ["vault", auction]
        """
        return self.derive([VAULT_SEED, address_bytes(auction)], self.program_id)

    def derive_deposit_address(
        self, auction: AddressLike, bidder: AddressLike
    ) -> ProgramDerivedAddress:
        """
        Derive the BidderDeposit PDA.

        Seeds: ["deposit", auction, bidder]
        """
        return self.derive(
            [DEPOSIT_SEED, address_bytes(auction), address_bytes(bidder)],
            self.program_id,
        )

    def derive_metadata_address(self, mint: AddressLike) -> ProgramDerivedAddress:
        """
        Derive the Metaplex metadata PDA.

        Seeds: ["metadata", metadata_program_id, mint], owned by the
        metadata program rather than the auction program.
        """
        return self.derive(
            [METADATA_SEED, bytes(self.metadata_program_id), address_bytes(mint)],
            self.metadata_program_id,
        )

    # ================================================================
    # Helpers
    # ================================================================

    def _program_bytes(self, program_id: Optional[AddressLike]) -> bytes:
        if program_id is None:
            return bytes(self.program_id)
        return address_bytes(program_id)

    def _seed_prefix(self, seeds: Sequence[bytes], reserve_bump: bool) -> bytes:
        """Validate seeds and concatenate them."""
        limit = MAX_SEEDS - 1 if reserve_bump else MAX_SEEDS
        if len(seeds) > limit:
            raise InvalidSeedsError(
                f"Too many seeds: {len(seeds)} (max {limit})",
                details={"count": len(seeds), "max": limit},
            )

        for index, seed in enumerate(seeds):
            if len(seed) > MAX_SEED_LENGTH:
                raise InvalidSeedsError(
                    f"Seed {index} is {len(seed)} bytes "
                    f"(max {MAX_SEED_LENGTH})",
                    details={"index": index, "length": len(seed)},
                )

        return b"".join(bytes(seed) for seed in seeds)

    def _hash_candidate(self, seed_bytes: bytes, program_id: bytes) -> bytes:
        return self.curve_provider.hash(seed_bytes + program_id + PDA_MARKER)
