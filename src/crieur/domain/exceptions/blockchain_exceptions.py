"""
Blockchain-related exceptions.
"""

from crieur.domain.exceptions.base import CrieurException


class BlockchainException(CrieurException):
    """Base exception for blockchain reads."""


class RPCException(BlockchainException):
    """RPC call failed."""


class AccountDataError(BlockchainException):
    """Account exists but its data could not be extracted from the RPC response."""
