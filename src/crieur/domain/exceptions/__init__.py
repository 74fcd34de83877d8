"""
Domain exceptions.
"""

from crieur.domain.exceptions.base import CrieurException
from crieur.domain.exceptions.blockchain_exceptions import (
    AccountDataError,
    BlockchainException,
    RPCException,
)
from crieur.domain.exceptions.data_exceptions import (
    MalformedBufferError,
    OffchainUnavailableError,
)
from crieur.domain.exceptions.derivation_exceptions import (
    DerivationException,
    InvalidAddressError,
    InvalidSeedsError,
    NoValidBumpFoundError,
)

__all__ = [
    "CrieurException",
    "DerivationException",
    "InvalidSeedsError",
    "NoValidBumpFoundError",
    "InvalidAddressError",
    "BlockchainException",
    "RPCException",
    "AccountDataError",
    "MalformedBufferError",
    "OffchainUnavailableError",
]
