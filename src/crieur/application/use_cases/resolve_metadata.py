"""
Resolve NFT Metadata use case.

Derives the Metaplex metadata PDA for a mint, reads and decodes the
account, fetches the off-chain JSON document and merges both views.
Results are cached per mint; concurrent requests for the same mint
share a single in-flight load.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.entities import MetadataRecord, ResolvedMetadata
from crieur.domain.exceptions import (
    BlockchainException,
    InvalidAddressError,
    OffchainUnavailableError,
)
from crieur.domain.services.address_deriver import AddressDeriver
from crieur.domain.services.i_account_reader import IAccountReader
from crieur.domain.services.i_json_fetcher import IJsonFetcher
from crieur.domain.services.metadata_decoder import MetadataDecoder
from crieur.infrastructure.cache import MetadataCache
from crieur.reporter import SystemReporter
from crieur.utils.blockchain import AddressLike, to_pubkey


class MetadataResolver:
    """
    Resolve a mint to its merged on-chain + off-chain metadata.

    Business rules:
    - Cache hit returns immediately, without I/O
    - Missing account, read failure or undecodable data yields None,
      and nothing is cached for that mint
    - Off-chain failure degrades to on-chain fields only
    - Only successful resolutions are cached
    - NoValidBumpFoundError is a defect and propagates
    """

    def __init__(
        self,
        address_deriver: AddressDeriver,
        account_reader: IAccountReader,
        json_fetcher: IJsonFetcher,
        cache: MetadataCache,
        reporter: Optional[SystemReporter] = None,
        decoder: Optional[MetadataDecoder] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            address_deriver: Metadata PDA derivation
            account_reader: Raw account reads
            json_fetcher: Off-chain document retrieval
            cache: Resolved metadata cache
            reporter: Optional logger
            decoder: Optional metadata decoder
        """
        self.address_deriver = address_deriver
        self.account_reader = account_reader
        self.json_fetcher = json_fetcher
        self.cache = cache
        self.reporter = reporter or SystemReporter()
        self.decoder = decoder or MetadataDecoder()

        self._in_flight: Dict[str, "asyncio.Task[Optional[ResolvedMetadata]]"] = {}

    def is_loading(self, mint: AddressLike) -> bool:
        """Whether a load for mint is currently in flight."""
        try:
            key = str(to_pubkey(mint))
        except InvalidAddressError:
            return False
        return key in self._in_flight

    async def resolve(self, mint: AddressLike) -> Optional[ResolvedMetadata]:
        """
        Resolve metadata for a mint.

        Args:
            mint: NFT mint address

        Returns:
            ResolvedMetadata, or None if the metadata account is missing
            or unreadable

        Raises:
            NoValidBumpFoundError: If the metadata PDA cannot be derived
        """
        try:
            mint_key = to_pubkey(mint)
        except InvalidAddressError as e:
            self.reporter.warning(
                f"Invalid mint address {mint!r}: {e.message}",
                context="MetadataResolver",
            )
            return None

        key = str(mint_key)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(mint_key))
            self._in_flight[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))

        return await asyncio.shield(task)

    async def resolve_many(
        self, mints: Sequence[AddressLike]
    ) -> List[Optional[ResolvedMetadata]]:
        """
        Resolve several mints concurrently.

        Returns:
            Results in the same order as mints
        """
        return list(await asyncio.gather(*(self.resolve(m) for m in mints)))

    def _forget(self, key: str, task: "asyncio.Task[Any]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _load(self, mint: Pubkey) -> Optional[ResolvedMetadata]:
        key = str(mint)
        metadata_address, _ = self.address_deriver.derive_metadata_address(mint)

        try:
            data = await self.account_reader.read_account(metadata_address)
        except BlockchainException as e:
            self.reporter.warning(
                f"Metadata read failed for {key}: {e.message}",
                context="MetadataResolver",
            )
            return None

        if data is None:
            self.reporter.debug(
                f"No metadata account for {key}", context="MetadataResolver"
            )
            return None

        record = self.decoder.decode(data)
        if record is None:
            self.reporter.warning(
                f"Undecodable metadata account for {key} ({len(data)} bytes)",
                context="MetadataResolver",
            )
            return None

        if record.mint != mint:
            self.reporter.warning(
                f"Metadata account for {key} names mint {record.mint}",
                context="MetadataResolver",
            )
            return None

        offchain = await self._fetch_offchain(key, record)
        resolved = ResolvedMetadata.from_record(key, record, offchain)

        self.cache.set(key, resolved)
        self.reporter.debug(
            f"Resolved {key}: {resolved.name!r} "
            f"(offchain={'yes' if resolved.offchain_loaded else 'no'})",
            context="MetadataResolver",
        )
        return resolved

    async def _fetch_offchain(
        self, key: str, record: MetadataRecord
    ) -> Optional[Dict[str, Any]]:
        """Fetch the off-chain document, None when unavailable."""
        if not record.uri:
            return None

        try:
            body = await self.json_fetcher.fetch_json(record.uri)
        except OffchainUnavailableError as e:
            self.reporter.warning(
                f"Off-chain metadata unavailable for {key}: {e.message}",
                context="MetadataResolver",
            )
            return None

        if not isinstance(body, dict):
            self.reporter.warning(
                f"Off-chain metadata for {key} is not a JSON object",
                context="MetadataResolver",
            )
            return None

        return body
