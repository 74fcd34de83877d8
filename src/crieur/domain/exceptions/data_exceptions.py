"""
Data decoding and off-chain exceptions.
"""

from crieur.domain.exceptions.base import CrieurException


class MalformedBufferError(CrieurException):
    """
    Account buffer is too short or a length field overruns it.

    Raised by the byte reader and caught by the decoders, which
    report the buffer as undecodable instead.
    """


class OffchainUnavailableError(CrieurException):
    """Off-chain document could not be fetched or parsed."""
