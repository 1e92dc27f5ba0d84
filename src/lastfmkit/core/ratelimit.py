import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class AsyncRateLimiter:
    """Token bucket shared by all requests of one transport.

    Allows up to `rate` requests per `per` seconds. Last.fm asks clients to
    stay below five requests per second per API key.
    """

    def __init__(self, rate: int, per: float = 1.0) -> None:
        self.rate = max(1, int(rate))
        self.per = float(per)
        self._tokens = float(self.rate)
        self._updated = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._updated
        self._updated = now
        self._tokens = min(float(self.rate), self._tokens + elapsed * (self.rate / self.per))

    async def acquire(self) -> None:
        async with self._lock:
            self._refill()
            while self._tokens < 1:
                wait = (1 - self._tokens) * (self.per / self.rate)
                logger.debug("ratelimit: waiting %.3fs for a permit", wait)
                await asyncio.sleep(wait)
                self._refill()
            self._tokens -= 1
