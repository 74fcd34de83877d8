"""
JSON fetcher interface.

Defines contract for retrieving off-chain JSON documents.
"""

from abc import ABC, abstractmethod
from typing import Any


class IJsonFetcher(ABC):
    """Interface for fetching and parsing JSON documents by URI."""

    @abstractmethod
    async def fetch_json(self, uri: str) -> Any:
        """
        Fetch a document and parse it as JSON.

        Args:
            uri: Document URI

        Returns:
            Parsed JSON value

        Raises:
            OffchainUnavailableError: On network error, non-2xx status,
                or malformed body
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
