"""
Validation utility functions for Crieur.

Cheap format checks for Solana addresses, used where raising on
bad input is not wanted.
"""

BASE58_CHARS = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def validate_solana_address(address: str) -> bool:
    """
    Validate Solana address format.

    Solana addresses are base58-encoded 32-byte public keys.
    Valid addresses are typically 32-44 characters.

    Args:
        address: Solana address string

    Returns:
        True if valid format, False otherwise

    Examples:
        >>> validate_solana_address("11111111111111111111111111111111")
        True
        >>> validate_solana_address("invalid")
        False
    """
    if not address or not isinstance(address, str):
        return False

    if len(address) < 32 or len(address) > 44:
        return False

    return all(c in BASE58_CHARS for c in address)
