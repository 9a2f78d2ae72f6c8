import time
import math
import logging
from collections import deque
from typing import Callable, Optional

from fastapi import Request

from ecowise.config import get_settings
from ecowise.errors import RateLimitError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """Admit at most ``limit`` hits per key in any rolling ``window`` seconds."""

    def __init__(self, limit: int, window: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: dict[str, deque] = {}

    def _prune(self, key: str, now: float) -> deque:
        """Drop hits that left the window. Keys with no hits left are forgotten."""
        hits = self._hits.get(key)
        if hits is None:
            return deque()
        while hits and now - hits[0] >= self.window:
            hits.popleft()
        if not hits:
            del self._hits[key]
        return hits

    def hit(self, key: str) -> bool:
        """Record a hit. Returns False (and records nothing) when over the limit."""
        now = self._clock()
        hits = self._prune(key, now)
        if len(hits) >= self.limit:
            return False
        hits.append(now)
        self._hits[key] = hits
        return True

    def retry_after(self, key: str) -> int:
        """Seconds until the oldest hit for ``key`` leaves the window."""
        now = self._clock()
        hits = self._prune(key, now)
        if len(hits) < self.limit:
            return 0
        return max(1, math.ceil(self.window - (now - hits[0])))

    def reset(self):
        self._hits.clear()


_generation_limiter: Optional[SlidingWindowRateLimiter] = None


def get_generation_limiter() -> SlidingWindowRateLimiter:
    global _generation_limiter
    if _generation_limiter is None:
        _generation_limiter = SlidingWindowRateLimiter(limit=get_settings().rate_limit_per_minute)
    return _generation_limiter


async def enforce_generation_rate_limit(request: Request):
    """FastAPI dependency guarding the trip generation endpoint."""
    limiter = get_generation_limiter()
    key = request.client.host if request.client else "anonymous"
    if not limiter.hit(key):
        logger.warning(f"Rate limit hit for {key}")
        raise RateLimitError(retry_after=limiter.retry_after(key))
