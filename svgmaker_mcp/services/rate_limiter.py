# svgmaker_mcp/services/rate_limiter.py
"""
Async token bucket rate limiter.

Throttles outbound SVGMaker requests to a requests-per-minute budget. Waiters
are served in arrival order; a waiting caller suspends instead of failing.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class AsyncRateLimiter:
    """
    Token bucket limiter for coroutines.

    Args:
        capacity: Maximum number of tokens the bucket can hold
        refill_rate: Number of tokens added per second
        clock: Monotonic clock (injectable for tests)
        sleep: Coroutine used to wait for tokens (injectable for tests)
    """

    def __init__(
        self,
        capacity: int,
        refill_rate: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got: {capacity}")
        if refill_rate <= 0:
            raise ValueError(f"Refill rate must be positive, got: {refill_rate}")

        self.capacity = capacity
        self.refill_rate = refill_rate
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._last_refill = clock()
        self._lock = asyncio.Lock()

    @classmethod
    def per_minute(cls, requests_per_minute: int, **kwargs) -> "AsyncRateLimiter":
        """Limiter allowing a burst of `requests_per_minute`, refilled over a minute."""
        return cls(
            capacity=requests_per_minute,
            refill_rate=requests_per_minute / 60.0,
            **kwargs,
        )

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(self.capacity, self._tokens + elapsed * self.refill_rate)
            self._last_refill = now

    def try_acquire(self) -> bool:
        """Take a token if one is available, without waiting."""
        self._refill()
        if self._tokens >= 1:
            self._tokens -= 1
            return True
        return False

    async def acquire(self) -> None:
        """Wait until a token is available, then take it."""
        async with self._lock:
            while not self.try_acquire():
                wait = (1 - self._tokens) / self.refill_rate
                logger.info(f"Rate limit reached, waiting {wait:.1f}s for next request slot")
                await self._sleep(wait)
