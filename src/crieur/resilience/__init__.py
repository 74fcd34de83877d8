"""
Resilience patterns for RPC access.

- Circuit Breaker: Stops calling a failing endpoint
- Retry: Automatic retry with exponential backoff
"""

from crieur.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitBreakerState,
)
from crieur.resilience.exceptions import CircuitBreakerOpenError, RetryError
from crieur.resilience.retry import Retry, RetryConfig

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitBreakerState",
    "CircuitBreakerOpenError",
    "Retry",
    "RetryConfig",
    "RetryError",
]
