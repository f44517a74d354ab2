"""
Retry handling with exponential backoff.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, Tuple, Type

from ..config import RetryConfig
from ..logger import get_logger

logger = get_logger(__name__)


class RetryHandler:
    """Retries coroutines with exponential backoff."""

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Initialize retry handler.

        Args:
            config: RetryConfig instance, uses defaults if None
            sleep: Coroutine used for backoff delays, asyncio.sleep if None
        """
        self.config = config or RetryConfig()
        self._sleep = sleep or asyncio.sleep

    def backoff_delay(self, attempt: int) -> float:
        """
        Delay before the retry following a failed attempt.

        Args:
            attempt: 1-based number of the attempt that just failed
        """
        delay = self.config.base_delay * (self.config.backoff_factor ** (attempt - 1))
        return min(delay, self.config.max_delay)

    async def execute_with_retry(
        self,
        func: Callable[..., Awaitable[Any]],
        *args,
        max_retries: Optional[int] = None,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
        **kwargs
    ) -> Any:
        """
        Await func until it succeeds or attempts run out.

        Args:
            func: Coroutine function to execute
            *args: Positional arguments for func
            max_retries: Total attempts, config value if None
            retry_on: Exception types that trigger a retry
            **kwargs: Keyword arguments for func

        Returns:
            The first successful result

        Raises:
            The exception from the final attempt
        """
        attempts = max(1, max_retries if max_retries is not None else self.config.max_retries)

        for attempt in range(1, attempts + 1):
            try:
                return await func(*args, **kwargs)
            except retry_on as e:
                if attempt >= attempts:
                    raise
                sleep_time = self.backoff_delay(attempt)
                logger.info(
                    "Attempt %d/%d failed: %s. Retrying in %.1fs...",
                    attempt, attempts, e, sleep_time,
                )
                await self._sleep(sleep_time)

    def get_stats(self) -> dict:
        return {
            'max_retries': self.config.max_retries,
            'base_delay': self.config.base_delay,
            'backoff_factor': self.config.backoff_factor,
        }
