"""
HTTP JSON fetcher implementation.

Retrieves off-chain metadata documents with lazy client lifecycle.
"""

import asyncio
from typing import Any, Optional

import httpx

from crieur.domain.exceptions import OffchainUnavailableError
from crieur.domain.services.i_json_fetcher import IJsonFetcher


class HttpJsonFetcher(IJsonFetcher):
    """
    Fetch JSON documents over HTTP(S).

    The client is created lazily on first use under a lock, so one
    instance holds at most one connection pool. Call close() on shutdown.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize fetcher.

        Args:
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        follow_redirects=True,
                        transport=self._transport,
                        limits=httpx.Limits(
                            max_connections=20,
                            max_keepalive_connections=10,
                        ),
                    )
        return self._client

    async def fetch_json(self, uri: str) -> Any:
        """
        Fetch uri and parse the body as JSON.

        Args:
            uri: Document URI

        Returns:
            Parsed JSON value

        Raises:
            OffchainUnavailableError: On network error, non-2xx status,
                or a body that is not valid JSON
        """
        if not uri:
            raise OffchainUnavailableError("Empty metadata URI")

        try:
            client = await self._ensure_client()
            response = await client.get(uri)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            raise OffchainUnavailableError(
                f"Metadata URI returned HTTP {e.response.status_code}",
                details={"uri": uri, "status": e.response.status_code},
            )
        except httpx.InvalidURL as e:
            raise OffchainUnavailableError(
                f"Invalid metadata URI: {e}", details={"uri": uri}
            )
        except httpx.HTTPError as e:
            raise OffchainUnavailableError(
                f"Network error fetching metadata: {e}", details={"uri": uri}
            )
        except ValueError as e:
            raise OffchainUnavailableError(
                f"Metadata body is not valid JSON: {e}", details={"uri": uri}
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
