"""Token bucket rate limiter shared by every request of a client.

Architecture:
    A RateLimiter owns one bucket of request tokens. Every outbound request
    awaits ``acquire()`` first, so the budget covers attempts, not just
    successes. Listings of one client share its limiter by reference; several
    clients can share one limiter by passing it explicitly.

Design Decisions:
    - Lazy refill: tokens are recomputed from elapsed monotonic time on each
      acquisition attempt; no background task is needed.
    - The check-and-decrement runs under an ``asyncio.Lock`` with no await in
      between, and waiting happens outside the lock. A task cancelled while
      waiting therefore never consumes a token.
    - A token taken for a request that is later abandoned stays consumed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """Token bucket gate for outbound requests.

    Example:
        >>> limiter = RateLimiter(capacity=2, refill_interval=0.5)
        >>> await limiter.acquire()  # returns immediately, one token left
    """

    def __init__(
        self,
        capacity: int = 1,
        refill_interval: float = 0.6,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize rate limiter.

        Args:
            capacity: Maximum number of tokens (burst size); the bucket starts full
            refill_interval: Seconds needed to regain one token
            clock: Monotonic time source in seconds

        Raises:
            ValueError: If capacity or refill_interval is not positive
        """
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        if refill_interval <= 0:
            raise ValueError(f"refill_interval must be positive, got {refill_interval}")

        self.capacity = capacity
        self.refill_interval = refill_interval
        self._clock = clock
        self._tokens = float(capacity)
        self._last_refill = clock()
        self._lock = asyncio.Lock()

    @property
    def available(self) -> float:
        """Tokens currently in the bucket (refill not applied)."""
        return self._tokens

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(
                float(self.capacity), self._tokens + elapsed / self.refill_interval
            )
        self._last_refill = now

    async def acquire(self) -> None:
        """Wait until a token is available, then take it.

        Never fails; it only delays. Waiters are served in no particular order.
        """
        while True:
            async with self._lock:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return
                delay = (1.0 - self._tokens) * self.refill_interval

            logger.debug(
                "rate_limit_wait",
                extra={"delay_s": delay, "capacity": self.capacity},
            )
            await asyncio.sleep(delay)


class NullRateLimiter:
    """Limiter that never waits.

    For callers that already pace their requests; they are then responsible
    for staying under the server's limit.
    """

    async def acquire(self) -> None:
        return None
