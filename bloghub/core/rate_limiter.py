"""In-memory fixed-window rate limiter for the /api routes."""

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    """Counts requests per client in fixed windows of ``window_seconds``.

    State lives in process memory, so each worker process limits on its own.
    """

    def __init__(self, max_requests: int = 100, window_seconds: int = 15 * 60, clock=time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}  # key -> (window start, count)
        self._lock = asyncio.Lock()

    async def hit(self, key: str) -> tuple[bool, int]:
        """
        Record one request for ``key``.

        Returns:
            tuple: (is_allowed, seconds_until_reset)
        """
        async with self._lock:
            now = self._clock()
            start, count = self._windows.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0

            if count >= self.max_requests:
                retry_after = max(1, int(start + self.window_seconds - now))
                return False, retry_after

            self._windows[key] = (start, count + 1)
            if len(self._windows) > 10_000:
                self._evict_expired(now)
            return True, 0

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._windows[key]
        logger.debug("Evicted %d expired rate-limit windows", len(expired))
