"""
Solana RPC client with resilience patterns.

Features:
- Circuit Breaker (stop calling a failing endpoint)
- Retry with exponential backoff
- Per-call timeout
"""

import asyncio
import base64
import binascii
from typing import Any, List, Optional, Sequence

import aiohttp
from solders.pubkey import Pubkey  # type: ignore

from crieur.domain.exceptions import AccountDataError, RPCException
from crieur.domain.services.i_account_reader import IAccountReader
from crieur.resilience import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerOpenError,
    Retry,
    RetryConfig,
    RetryError,
)

TRANSIENT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, RPCException)
BREAKER_ERRORS = TRANSIENT_ERRORS + (RetryError,)


class SolanaRPCClient(IAccountReader):
    """
    Read-only Solana JSON-RPC client.

    Every call goes circuit breaker -> retry -> HTTP POST. Resilience
    exhaustion surfaces as RPCException so callers handle a single type.
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        circuit_breaker_config: Optional[CircuitBreakerConfig] = None,
        retry_config: Optional[RetryConfig] = None,
        commitment: str = "confirmed",
    ):
        """
        Initialize Solana RPC client.

        Args:
            rpc_url: JSON-RPC endpoint
            timeout: Per-request timeout in seconds
            circuit_breaker_config: Optional breaker settings
            retry_config: Optional retry settings
            commitment: Commitment level for account reads
        """
        self.rpc_url = rpc_url
        self.rpc_timeout = timeout
        self.commitment = commitment

        self.circuit_breaker = CircuitBreaker(
            name="solana_rpc",
            config=circuit_breaker_config
            or CircuitBreakerConfig(expected_exceptions=BREAKER_ERRORS),
        )
        self.retry = Retry(
            name="rpc_query",
            config=retry_config or RetryConfig(retry_on=TRANSIENT_ERRORS),
        )

        self._session: Optional[aiohttp.ClientSession] = None
        self._lock = asyncio.Lock()
        self._request_id = 0

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            async with self._lock:
                if self._session is None or self._session.closed:
                    self._session = aiohttp.ClientSession(
                        timeout=aiohttp.ClientTimeout(total=self.rpc_timeout)
                    )
        return self._session

    async def call_rpc(self, method: str, params: Optional[list] = None) -> Any:
        """
        Call Solana RPC method with resilience.

        Args:
            method: RPC method name
            params: Optional method parameters

        Returns:
            The "result" member of the response

        Raises:
            RPCException: On RPC error, exhausted retries or open circuit
        """
        try:
            return await self.circuit_breaker.call_async(
                self.retry.execute_async, self._call_rpc, method, params
            )
        except RetryError as e:
            raise RPCException(
                f"RPC {method} failed after {e.attempts} attempts",
                details={"method": method, "error": str(e.last_exception)},
            ) from e
        except CircuitBreakerOpenError as e:
            raise RPCException(
                f"RPC circuit open: {e}",
                details={"method": method, "breaker": e.breaker_name},
            ) from e

    async def _call_rpc(self, method: str, params: Optional[list] = None) -> Any:
        """Single JSON-RPC round trip."""
        if not self.rpc_url:
            raise RPCException("Solana RPC URL not configured")

        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }

        try:
            session = await self._ensure_session()
            async with session.post(self.rpc_url, json=payload) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)

        except aiohttp.ClientError as e:
            raise RPCException(
                f"RPC connection error: {e}",
                details={"method": method},
            )
        except asyncio.TimeoutError:
            raise RPCException(
                f"RPC timeout: {method}",
                details={"method": method, "timeout": self.rpc_timeout},
            )
        except ValueError as e:
            raise RPCException(
                f"RPC response is not valid JSON: {e}",
                details={"method": method},
            )

        if not isinstance(data, dict):
            raise RPCException(
                "RPC response is not a JSON object", details={"method": method}
            )
        if "error" in data:
            raise RPCException(
                f"RPC error: {data['error']}",
                details={"method": method, "error": data["error"]},
            )

        return data.get("result")

    async def read_account(self, address: Pubkey) -> Optional[bytes]:
        """
        Read raw account data.

        Args:
            address: Account address

        Returns:
            Account data, None if the account does not exist

        Raises:
            RPCException: If the RPC call fails
            AccountDataError: If the response carries unreadable data
        """
        result = await self.call_rpc(
            "getAccountInfo",
            [
                str(address),
                {"encoding": "base64", "commitment": self.commitment},
            ],
        )
        value = self._result_value(result, "getAccountInfo")
        if value is None:
            return None
        return self._decode_account_data(value, str(address))

    async def read_accounts(
        self, addresses: Sequence[Pubkey]
    ) -> List[Optional[bytes]]:
        """
        Read several accounts in one round trip.

        Args:
            addresses: Account addresses

        Returns:
            Account data per address, None where the account does not exist
        """
        if not addresses:
            return []

        result = await self.call_rpc(
            "getMultipleAccounts",
            [
                [str(a) for a in addresses],
                {"encoding": "base64", "commitment": self.commitment},
            ],
        )
        values = self._result_value(result, "getMultipleAccounts")
        if not isinstance(values, list):
            raise AccountDataError(
                "getMultipleAccounts value is not a list",
                details={"value": repr(values)[:100]},
            )
        if len(values) != len(addresses):
            raise RPCException(
                "getMultipleAccounts returned wrong number of accounts",
                details={"expected": len(addresses), "got": len(values)},
            )

        return [
            None if value is None else self._decode_account_data(value, str(addr))
            for addr, value in zip(addresses, values)
        ]

    @staticmethod
    def _result_value(result: Any, method: str) -> Any:
        """Extract the "value" member of an RPC context result."""
        if result is None:
            return None
        if not isinstance(result, dict):
            raise AccountDataError(
                f"{method} result is not a JSON object",
                details={"method": method, "result": repr(result)[:100]},
            )
        return result.get("value")

    @staticmethod
    def _decode_account_data(value: Any, address: str) -> bytes:
        if not isinstance(value, dict):
            raise AccountDataError(
                "Account entry is not a JSON object",
                details={"address": address},
            )
        data = value.get("data")
        if not isinstance(data, list) or not data or not isinstance(data[0], str):
            raise AccountDataError(
                "Account data missing from RPC response",
                details={"address": address},
            )
        try:
            return base64.b64decode(data[0], validate=True)
        except (binascii.Error, ValueError) as e:
            raise AccountDataError(
                f"Account data is not valid base64: {e}",
                details={"address": address},
            )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
