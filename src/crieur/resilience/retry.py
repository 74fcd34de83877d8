"""
Retry with capped exponential backoff.

Only exception types listed in RetryConfig.retry_on are retried; anything
else escapes on the first attempt.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

from crieur.resilience.exceptions import RetryError

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """
    Retry settings.

    Attributes:
        max_attempts: Total attempts, first call included
        initial_delay: Pause after the first failure (seconds)
        max_delay: Cap on any single pause (seconds)
        backoff_multiplier: Growth factor between pauses
        jitter: Randomise each pause by +/- jitter_factor
        jitter_factor: Relative jitter width
        retry_on: Exception types worth another attempt
    """

    max_attempts: int = 3
    initial_delay: float = 0.5
    max_delay: float = 5.0
    backoff_multiplier: float = 2.0
    jitter: bool = True
    jitter_factor: float = 0.1
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)


class Retry:
    """
    Async retry runner.

    Example:
        retry = Retry(RetryConfig(retry_on=(RPCException,)), name="rpc_query")
        result = await retry.execute_async(client._call_rpc, "getAccountInfo", params)
    """

    def __init__(self, config: Optional[RetryConfig] = None, name: str = "retry"):
        self.config = config or RetryConfig()
        self.name = name

    def delay_for(self, failures: int) -> float:
        """Pause before the next attempt after `failures` failed ones (>= 1)."""
        cfg = self.config
        delay = min(
            cfg.initial_delay * cfg.backoff_multiplier ** (failures - 1),
            cfg.max_delay,
        )
        if cfg.jitter and delay > 0:
            spread = delay * cfg.jitter_factor
            delay = max(0.0, random.uniform(delay - spread, delay + spread))
        return delay

    async def execute_async(
        self, func: Callable[..., Awaitable[Any]], *args, **kwargs
    ) -> Any:
        """
        Await func(*args, **kwargs), retrying transient failures.

        Raises:
            RetryError: Every attempt failed with a retryable error
        """
        attempts = max(1, self.config.max_attempts)
        failures = 0

        while True:
            try:
                return await func(*args, **kwargs)
            except self.config.retry_on as e:
                failures += 1
                if failures >= attempts:
                    raise RetryError(
                        f"[{self.name}] gave up after {failures} attempts: "
                        f"{type(e).__name__}: {e}",
                        attempts=failures,
                        last_exception=e,
                    ) from e

                delay = self.delay_for(failures)
                logger.warning(
                    f"[{self.name}] attempt {failures}/{attempts} failed "
                    f"({type(e).__name__}: {e}); next try in {delay:.2f}s"
                )
                await asyncio.sleep(delay)
