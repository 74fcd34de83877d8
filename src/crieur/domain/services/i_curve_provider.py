"""
Curve provider interface.

Defines the cryptographic capability used by address derivation.
"""

from abc import ABC, abstractmethod


class ICurveProvider(ABC):
    """
    Interface for the hash and curve-membership primitives.

    Clean Architecture: Domain layer defines interface,
    Infrastructure layer implements concrete cryptography.
    """

    @abstractmethod
    def hash(self, data: bytes) -> bytes:
        """
        Hash data with the fixed-output derivation hash.

        Args:
            data: Bytes to hash

        Returns:
            32-byte digest
        """

    @abstractmethod
    def is_on_curve(self, point: bytes) -> bool:
        """
        Check whether 32 bytes decode to a valid curve point.

        Args:
            point: Compressed point encoding

        Returns:
            True if the bytes are a valid public key
        """
