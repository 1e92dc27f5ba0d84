"""
High-level client.

Bundles a :class:`Dispatcher` with the per-domain service functions so callers
can write ``await fm.album.get_info(ByName("Low", "Things We Lost in the Fire"))``
instead of passing the dispatcher around. Signed methods still take the
session explicitly::

    async with LastFm.from_settings() as fm:
        await fm.track.love(fm.session, "Low", "Sunflower")
"""

import functools
import inspect
from types import ModuleType
from typing import Any, Optional

from .core.config import LastFmSettings, get_settings
from .core.credentials import get_credential, load_session
from .core.dispatcher import Dispatcher
from .core.errors import LastFmError
from .core.ratelimit import AsyncRateLimiter
from .core.session import Session
from .core.transport import AiohttpTransport, Transport
from .services import album, artist, auth, tag, track


class _BoundService:
    """Exposes a service module's public coroutines with the dispatcher pre-bound."""

    def __init__(self, module: ModuleType, dispatcher: Dispatcher) -> None:
        self._module = module
        self._dispatcher = dispatcher

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        fn = getattr(self._module, name)
        if not inspect.iscoroutinefunction(fn):
            return fn
        return functools.partial(fn, self._dispatcher)

    def __dir__(self):
        return [
            n
            for n, v in vars(self._module).items()
            if not n.startswith("_") and inspect.iscoroutinefunction(v)
        ]


class LastFm:
    def __init__(self, dispatcher: Dispatcher, session: Optional[Session] = None) -> None:
        self.dispatcher = dispatcher
        self.session = session
        self.album = _BoundService(album, dispatcher)
        self.artist = _BoundService(artist, dispatcher)
        self.auth = _BoundService(auth, dispatcher)
        self.tag = _BoundService(tag, dispatcher)
        self.track = _BoundService(track, dispatcher)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[LastFmSettings] = None,
        *,
        transport: Transport | None = None,
        session: Optional[Session] = None,
    ) -> "LastFm":
        """Build a client from configuration plus stored credentials."""
        settings = settings or get_settings()
        api_key = settings.api_key or get_credential("api_key")
        api_secret = settings.api_secret or get_credential("api_secret")
        if not api_key:
            raise LastFmError(
                "No Last.fm API key configured. Run `lfm config set-key` or set LFM_API_KEY."
            )
        created = transport is None
        if transport is None:
            limiter = AsyncRateLimiter(settings.rate_limit) if settings.rate_limit else None
            transport = AiohttpTransport(limiter=limiter, retries=settings.retries)
        dispatcher = Dispatcher(
            api_key,
            api_secret,
            transport,
            base_url=settings.base_url,
            timeout=settings.timeout,
            owns_transport=created,
        )
        return cls(dispatcher, session if session is not None else load_session())

    async def close(self) -> None:
        await self.dispatcher.close()

    async def __aenter__(self) -> "LastFm":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
