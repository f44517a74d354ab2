"""
Adaptive rate limiting with jitter and cooldown.
Paces requests to the community site; the sleep function is injectable so
tests can run without real delays.
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Optional

from ..config import RateLimitConfig
from ..logger import get_logger

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class RateLimiter:
    """Implements adaptive rate limiting with exponential backoff and jitter."""

    def __init__(self, config: Optional[RateLimitConfig] = None, sleep: Optional[SleepFunc] = None):
        """
        Initialize rate limiter with configuration.

        Args:
            config: RateLimitConfig instance, uses defaults if None
            sleep: Coroutine used for every delay, asyncio.sleep if None
        """
        self.config = config or RateLimitConfig()
        self._sleep = sleep or asyncio.sleep
        self._current_delay = self.config.initial_delay
        self._consecutive_failures = 0
        self._last_request_time: Optional[float] = None
        self._cooldown_until: Optional[float] = None

    async def wait(self):
        """Wait for the appropriate delay before the next request."""
        if self._cooldown_until is not None:
            remaining = self._cooldown_until - time.monotonic()
            if remaining > 0:
                logger.info("In cooldown, waiting %.1fs...", remaining)
                await self._sleep(remaining)
            self._cooldown_until = None

        jitter_range = self._current_delay * self.config.jitter_percent
        jitter = random.uniform(-jitter_range, jitter_range)
        actual_delay = max(self.config.min_delay, self._current_delay + jitter)

        # The first request goes out immediately; afterwards account for elapsed time
        if self._last_request_time is not None:
            elapsed = time.monotonic() - self._last_request_time
            remaining_delay = actual_delay - elapsed
            if remaining_delay > 0:
                await self._sleep(remaining_delay)

        self._last_request_time = time.monotonic()

    async def pause(self, seconds: float):
        """Fixed pause, e.g. between detail page batches."""
        if seconds > 0:
            await self._sleep(seconds)

    def record_success(self):
        """Record successful request, gradually decrease delay."""
        self._consecutive_failures = 0
        new_delay = self._current_delay * 0.9
        self._current_delay = max(self.config.min_delay, new_delay)

    def record_failure(self):
        """Record failed request, increase delay with backoff."""
        self._consecutive_failures += 1
        new_delay = self._current_delay * self.config.backoff_factor
        self._current_delay = min(self.config.max_delay, new_delay)
        if self.should_cooldown():
            self.cooldown()

    def should_cooldown(self) -> bool:
        return self._consecutive_failures >= self.config.cooldown_threshold

    def cooldown(self):
        """Enter cooldown period; the next wait() sleeps it off."""
        self._cooldown_until = time.monotonic() + self.config.cooldown_duration
        logger.warning(
            "Entering cooldown for %ss due to %d consecutive failures",
            self.config.cooldown_duration,
            self._consecutive_failures,
        )
        # Delay stays elevated after cooldown and decreases on success
        self._consecutive_failures = 0

    def get_current_delay(self) -> float:
        return self._current_delay

    def get_stats(self) -> dict:
        """
        Get rate limiter statistics.

        Returns:
            Dict with current state info
        """
        return {
            'current_delay': self._current_delay,
            'consecutive_failures': self._consecutive_failures,
            'in_cooldown': self._cooldown_until is not None,
            'min_delay': self.config.min_delay,
            'max_delay': self.config.max_delay,
        }
