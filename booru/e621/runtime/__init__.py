"""Runtime components: rate limiting, REST issuing and listing drivers."""

from .rate_limit import NullRateLimiter, RateLimiter

__all__ = [
    "NullRateLimiter",
    "RateLimiter",
]
