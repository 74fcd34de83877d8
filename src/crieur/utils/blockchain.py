"""
Blockchain utility functions for Crieur.

Conversions between the address forms callers pass around
(base-58 strings, raw bytes, solders Pubkey).
"""

from typing import Union

from solders.pubkey import Pubkey  # type: ignore

from crieur.constants import LAMPORTS_PER_SOL
from crieur.domain.exceptions import InvalidAddressError
from crieur.utils.validation import validate_solana_address

AddressLike = Union[Pubkey, str, bytes]


def to_pubkey(value: AddressLike) -> Pubkey:
    """
    Coerce an address-like value to a Pubkey.

    Args:
        value: Pubkey, base-58 string, or 32 raw bytes

    Returns:
        Pubkey instance

    Raises:
        InvalidAddressError: If the value is not a valid address

    Examples:
        >>> str(to_pubkey("11111111111111111111111111111111"))
        '11111111111111111111111111111111'
    """
    if isinstance(value, Pubkey):
        return value

    if isinstance(value, (bytes, bytearray)):
        if len(value) != 32:
            raise InvalidAddressError(
                f"Address must be 32 bytes, got {len(value)}",
                details={"length": len(value)},
            )
        return Pubkey.from_bytes(bytes(value))

    if isinstance(value, str):
        if not validate_solana_address(value):
            raise InvalidAddressError(
                f"Invalid base-58 address: {value!r}",
                details={"address": value},
            )
        try:
            return Pubkey.from_string(value)
        except ValueError as e:
            raise InvalidAddressError(
                f"Invalid base-58 address: {value!r}",
                details={"address": value},
            ) from e

    raise InvalidAddressError(f"Unsupported address type: {type(value).__name__}")


def address_bytes(value: AddressLike) -> bytes:
    """Return the 32 raw bytes of an address-like value."""
    return bytes(to_pubkey(value))


def lamports_to_sol(lamports: int) -> float:
    """
    Convert lamports to SOL.

    Examples:
        >>> lamports_to_sol(1_500_000_000)
        1.5
    """
    return lamports / LAMPORTS_PER_SOL
