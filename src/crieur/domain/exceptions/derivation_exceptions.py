"""
Address derivation exceptions.
"""

from crieur.domain.exceptions.base import CrieurException


class DerivationException(CrieurException):
    """Base exception for address derivation."""


class InvalidSeedsError(DerivationException):
    """Seed set cannot be used for derivation (too long, too many, on curve)."""


class NoValidBumpFoundError(DerivationException):
    """
    No bump in [0, 255] produced an off-curve address.

    Indicates a defect in the seed scheme, never bad input data.
    Must be surfaced to the caller.
    """


class InvalidAddressError(DerivationException):
    """Address is not a valid base-58 string or 32-byte value."""
