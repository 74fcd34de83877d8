"""
Application use cases.
"""

from crieur.application.use_cases.read_auction import AuctionLookup, AuctionReader
from crieur.application.use_cases.resolve_metadata import MetadataResolver

__all__ = [
    "AuctionLookup",
    "AuctionReader",
    "MetadataResolver",
]
