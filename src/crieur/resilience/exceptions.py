"""
Resilience exceptions.

Both are converted to RPCException by SolanaRPCClient before they reach
application code.
"""

from typing import Optional


class CircuitBreakerOpenError(Exception):
    """A call was refused because the named breaker is open."""

    def __init__(self, breaker_name: str, failure_count: int):
        self.breaker_name = breaker_name
        self.failure_count = failure_count
        super().__init__(
            f"circuit '{breaker_name}' open after {failure_count} failures"
        )


class RetryError(Exception):
    """Every retry attempt failed; last_exception holds the final cause."""

    def __init__(
        self,
        message: str,
        attempts: int,
        last_exception: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.attempts = attempts
        self.last_exception = last_exception
