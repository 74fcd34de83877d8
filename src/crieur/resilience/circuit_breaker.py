"""
Circuit breaker for the RPC endpoint.

    CLOSED --(failure_threshold consecutive failures)--> OPEN
    OPEN --(timeout elapsed)--> HALF_OPEN
    HALF_OPEN --(success_threshold successes)--> CLOSED
    HALF_OPEN --(any failure)--> OPEN

While OPEN every call fails fast with CircuitBreakerOpenError.
"""

import time
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type

from crieur.resilience.exceptions import CircuitBreakerOpenError


class CircuitBreakerState(str, Enum):
    """Breaker position."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreakerConfig:
    """
    Breaker settings.

    Attributes:
        failure_threshold: Consecutive failures that open the breaker
        success_threshold: HALF_OPEN successes that close it again
        timeout: Seconds spent OPEN before a trial call is allowed
        half_open_max_calls: Concurrent trial calls admitted in HALF_OPEN
        expected_exceptions: Exception types that count as failures
    """

    failure_threshold: int = 5
    success_threshold: int = 2
    timeout: float = 30.0
    half_open_max_calls: int = 3
    expected_exceptions: Tuple[Type[BaseException], ...] = (Exception,)


class CircuitBreaker:
    """
    Fail-fast guard around an async dependency.

    Example:
        breaker = CircuitBreaker("solana_rpc")
        data = await breaker.call_async(client.read_account, address)
    """

    def __init__(self, name: str, config: Optional[CircuitBreakerConfig] = None):
        self.name = name
        self.config = config or CircuitBreakerConfig()

        self._lock = Lock()
        self._state = CircuitBreakerState.CLOSED
        self._failures = 0
        self._trial_successes = 0
        self._trials = 0
        self._opened_at = 0.0
        self._calls = 0
        self._failures_total = 0

    @property
    def state(self) -> CircuitBreakerState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failures

    async def call_async(
        self, func: Callable[..., Awaitable[Any]], *args, **kwargs
    ) -> Any:
        """
        Await func(*args, **kwargs) unless the breaker is open.

        Raises:
            CircuitBreakerOpenError: Breaker is OPEN or HALF_OPEN is saturated
        """
        self._admit()
        try:
            result = await func(*args, **kwargs)
        except self.config.expected_exceptions:
            self._record_failure()
            raise
        self._record_success()
        return result

    def _admit(self) -> None:
        with self._lock:
            self._calls += 1

            if self._state is CircuitBreakerState.OPEN:
                if time.monotonic() - self._opened_at < self.config.timeout:
                    raise CircuitBreakerOpenError(self.name, self._failures)
                self._enter(CircuitBreakerState.HALF_OPEN)

            if self._state is CircuitBreakerState.HALF_OPEN:
                if self._trials >= self.config.half_open_max_calls:
                    raise CircuitBreakerOpenError(self.name, self._failures)
                self._trials += 1

    def _record_success(self) -> None:
        with self._lock:
            if self._state is CircuitBreakerState.HALF_OPEN:
                self._trial_successes += 1
                if self._trial_successes >= self.config.success_threshold:
                    self._enter(CircuitBreakerState.CLOSED)
            else:
                self._failures = 0

    def _record_failure(self) -> None:
        with self._lock:
            self._failures_total += 1
            self._failures += 1
            if (
                self._state is CircuitBreakerState.HALF_OPEN
                or self._failures >= self.config.failure_threshold
            ):
                self._enter(CircuitBreakerState.OPEN)

    def _enter(self, state: CircuitBreakerState) -> None:
        self._state = state
        self._trials = 0
        self._trial_successes = 0
        if state is CircuitBreakerState.OPEN:
            self._opened_at = time.monotonic()
        else:
            self._failures = 0

    def reset(self) -> None:
        """Force the breaker back to CLOSED."""
        with self._lock:
            self._enter(CircuitBreakerState.CLOSED)

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot of breaker state and counters."""
        with self._lock:
            return {
                "name": self.name,
                "state": self._state.value,
                "failure_count": self._failures,
                "total_calls": self._calls,
                "total_failures": self._failures_total,
            }
