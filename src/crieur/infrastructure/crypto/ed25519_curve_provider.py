"""
Ed25519 curve provider.

SHA-256 hashing plus the ed25519 point decompression check used by the
Solana runtime (via solders).
"""

import hashlib

from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.services.i_curve_provider import ICurveProvider


class Ed25519CurveProvider(ICurveProvider):
    """Production curve provider for Solana program addresses."""

    def hash(self, data: bytes) -> bytes:
        """SHA-256 digest of data."""
        return hashlib.sha256(data).digest()

    def is_on_curve(self, point: bytes) -> bool:
        """
        Check whether 32 bytes decompress to an ed25519 point.

        Args:
            point: 32-byte compressed Edwards Y encoding

        Returns:
            True if the bytes are a valid point
        """
        if len(point) != 32:
            return False
        return Pubkey.from_bytes(point).is_on_curve()
