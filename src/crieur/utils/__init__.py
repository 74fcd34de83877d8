"""Utility modules for Crieur."""

from crieur.utils.binary import ByteReader
from crieur.utils.blockchain import (
    AddressLike,
    address_bytes,
    lamports_to_sol,
    to_pubkey,
)
from crieur.utils.validation import validate_solana_address

__all__ = [
    "AddressLike",
    "ByteReader",
    "address_bytes",
    "lamports_to_sol",
    "to_pubkey",
    "validate_solana_address",
]
