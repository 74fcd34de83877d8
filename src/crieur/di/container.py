"""
Dependency Injection Container for Crieur.

Builds and owns every service instance; nothing is process-global
except the optional default container below.
"""

from typing import Optional

from crieur.application.use_cases import AuctionReader, MetadataResolver
from crieur.config.settings import CrieurConfig, get_settings
from crieur.domain.services.address_deriver import AddressDeriver
from crieur.domain.services.i_account_reader import IAccountReader
from crieur.domain.services.i_curve_provider import ICurveProvider
from crieur.domain.services.i_json_fetcher import IJsonFetcher
from crieur.infrastructure.blockchain import SolanaRPCClient
from crieur.infrastructure.blockchain.solana_rpc_client import (
    BREAKER_ERRORS,
    TRANSIENT_ERRORS,
)
from crieur.infrastructure.cache import MetadataCache
from crieur.infrastructure.crypto import Ed25519CurveProvider
from crieur.infrastructure.offchain import HttpJsonFetcher
from crieur.reporter import SystemReporter
from crieur.resilience import CircuitBreakerConfig, RetryConfig


class DIContainer:
    """
    Dependency Injection Container.

    Services are created lazily on first access and cached for the
    lifetime of the container.
    """

    def __init__(self, settings: Optional[CrieurConfig] = None):
        """
        Initialize container with None instances.

        Args:
            settings: Configuration (defaults to get_settings())
        """
        self.settings = settings or get_settings()

        # Infrastructure
        self._reporter: Optional[SystemReporter] = None
        self._curve_provider: Optional[ICurveProvider] = None
        self._account_reader: Optional[IAccountReader] = None
        self._json_fetcher: Optional[IJsonFetcher] = None
        self._metadata_cache: Optional[MetadataCache] = None

        # Domain services
        self._address_deriver: Optional[AddressDeriver] = None

        # Use cases
        self._metadata_resolver: Optional[MetadataResolver] = None
        self._auction_reader: Optional[AuctionReader] = None

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._account_reader:
            await self._account_reader.close()

        if self._json_fetcher:
            await self._json_fetcher.close()

    # Infrastructure Getters

    @property
    def reporter(self) -> SystemReporter:
        """Get system reporter instance."""
        if self._reporter is None:
            self._reporter = SystemReporter.from_level_name(
                "crieur", self.settings.log_level, self.settings.log_dir
            )
        return self._reporter

    @property
    def curve_provider(self) -> ICurveProvider:
        """Get curve provider instance."""
        if self._curve_provider is None:
            self._curve_provider = Ed25519CurveProvider()
        return self._curve_provider

    @property
    def account_reader(self) -> IAccountReader:
        """Get Solana RPC client instance."""
        if self._account_reader is None:
            resilience = self.settings.resilience
            self._account_reader = SolanaRPCClient(
                rpc_url=self.settings.solana_rpc_url,
                timeout=resilience.timeouts.rpc_call,
                circuit_breaker_config=CircuitBreakerConfig(
                    failure_threshold=resilience.circuit_breaker.failure_threshold,
                    success_threshold=resilience.circuit_breaker.success_threshold,
                    timeout=resilience.circuit_breaker.timeout,
                    expected_exceptions=BREAKER_ERRORS,
                ),
                retry_config=RetryConfig(
                    max_attempts=resilience.retry.max_attempts,
                    initial_delay=resilience.retry.initial_delay,
                    max_delay=resilience.retry.max_delay,
                    backoff_multiplier=resilience.retry.exponential_base,
                    jitter=resilience.retry.jitter,
                    retry_on=TRANSIENT_ERRORS,
                ),
            )
        return self._account_reader

    @property
    def json_fetcher(self) -> IJsonFetcher:
        """Get off-chain JSON fetcher instance."""
        if self._json_fetcher is None:
            self._json_fetcher = HttpJsonFetcher(
                timeout=self.settings.resilience.timeouts.offchain_fetch
            )
        return self._json_fetcher

    @property
    def metadata_cache(self) -> MetadataCache:
        """Get metadata cache instance."""
        if self._metadata_cache is None:
            self._metadata_cache = MetadataCache(
                maxsize=self.settings.cache.maxsize,
                ttl=self.settings.cache.ttl_seconds,
            )
        return self._metadata_cache

    # Domain Service Getters

    @property
    def address_deriver(self) -> AddressDeriver:
        """Get address deriver instance."""
        if self._address_deriver is None:
            self._address_deriver = AddressDeriver(
                self.curve_provider,
                program_id=self.settings.program_id,
                metadata_program_id=self.settings.metadata_program_id,
            )
        return self._address_deriver

    # Use Case Getters

    @property
    def metadata_resolver(self) -> MetadataResolver:
        """Get metadata resolver instance."""
        if self._metadata_resolver is None:
            self._metadata_resolver = MetadataResolver(
                address_deriver=self.address_deriver,
                account_reader=self.account_reader,
                json_fetcher=self.json_fetcher,
                cache=self.metadata_cache,
                reporter=self.reporter,
            )
        return self._metadata_resolver

    @property
    def auction_reader(self) -> AuctionReader:
        """Get auction reader instance."""
        if self._auction_reader is None:
            self._auction_reader = AuctionReader(
                address_deriver=self.address_deriver,
                account_reader=self.account_reader,
                reporter=self.reporter,
            )
        return self._auction_reader


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    global _container
    if _container is not None:
        await _container.shutdown()
        _container = None
