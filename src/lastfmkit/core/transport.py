"""
HTTP transport used by the dispatcher.

The dispatcher only needs one capability: send a GET or POST with a flat
parameter map and get back the status code and the raw body. Anything that
implements :class:`Transport` can be injected (tests use an in-memory fake);
:class:`AiohttpTransport` is the default.
"""

import asyncio
import logging
from typing import Mapping, Optional, Protocol, Tuple

import aiohttp

from .ratelimit import AsyncRateLimiter
from .retry import retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "lastfmkit/0.1.0"


class Transport(Protocol):
    async def request(
        self,
        verb: str,
        url: str,
        params: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> Tuple[int, str]:
        """Send one request; GET puts params in the query string, POST in a form body."""
        ...

    async def close(self) -> None: ...


class AiohttpTransport:
    """aiohttp-backed transport.

    Retries (off by default) cover connection errors and timeouts only; a
    response that arrived, whatever its status, is returned as is.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        limiter: AsyncRateLimiter | None = None,
        retries: int = 0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self.limiter = limiter
        self.retries = max(0, int(retries))
        self.user_agent = user_agent

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers={"User-Agent": self.user_agent})
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _send_once(
        self, verb: str, url: str, params: Mapping[str, str], timeout: Optional[float]
    ) -> Tuple[int, str]:
        if self.limiter:
            await self.limiter.acquire()
        session = self._get_session()
        to = aiohttp.ClientTimeout(total=timeout) if timeout else None
        if verb == "POST":
            ctx = session.post(url, data=dict(params), timeout=to)
        else:
            ctx = session.get(url, params=dict(params), timeout=to)
        async with ctx as response:
            body = await response.text()
            logger.debug(
                "transport: %s %s method=%s -> %s",
                verb,
                url,
                params.get("method"),
                response.status,
            )
            return response.status, body

    async def request(
        self,
        verb: str,
        url: str,
        params: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> Tuple[int, str]:
        if not self.retries:
            return await self._send_once(verb, url, params, timeout)
        return await retry_with_backoff(
            lambda: self._send_once(verb, url, params, timeout),
            retries=self.retries,
            retry_on=(aiohttp.ClientConnectionError, asyncio.TimeoutError),
        )
