"""
Domain services and capability interfaces.
"""

from crieur.domain.services.address_deriver import AddressDeriver
from crieur.domain.services.auction_decoder import (
    account_discriminator,
    decode_auction_state,
    decode_auction_vault,
    decode_bidder_deposit,
)
from crieur.domain.services.i_account_reader import IAccountReader
from crieur.domain.services.i_curve_provider import ICurveProvider
from crieur.domain.services.i_json_fetcher import IJsonFetcher
from crieur.domain.services.metadata_decoder import (
    MetadataDecoder,
    decode_metadata,
)

__all__ = [
    "AddressDeriver",
    "IAccountReader",
    "ICurveProvider",
    "IJsonFetcher",
    "MetadataDecoder",
    "account_discriminator",
    "decode_auction_state",
    "decode_auction_vault",
    "decode_bidder_deposit",
    "decode_metadata",
]
