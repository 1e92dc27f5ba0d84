"""
Dispatch of Last.fm web service calls.

Every service function funnels through one of three entry points:

- ``unsigned_call``: public reads, API key only, always GET
- ``signed_call``: user-scoped reads and writes, needs a :class:`Session`
- ``auth_call``: signed, but without a session key (session acquisition)

The dispatcher owns the credentials and the transport. It does not retry and
does not log; failures surface to the caller as one of the errors in
:mod:`lastfmkit.core.errors`.
"""

import asyncio
import json
from typing import Any, Dict, Mapping, Optional

import aiohttp

from .errors import ApiError, AuthenticationError, LastFmError, LocalValidationError, NotFoundError
from .params import drop_absent
from .session import Session
from .signing import GET, HTTP_VERBS, POST, build_signed_request
from .transport import AiohttpTransport, Transport

API_URL = "https://ws.audioscrobbler.com/2.0/"
DEFAULT_TIMEOUT = 30.0

# Error 6 is what the service answers for unknown artists, albums, tracks,
# tags and users ("Invalid parameters")
NOT_FOUND_CODES = frozenset({6})

# Fields that never describe what was looked up
_NON_LOOKUP_FIELDS = frozenset(
    {
        "api_key", "api_sig", "sk", "method", "format", "callback", "password", "token",
        "autocorrect", "lang", "limit", "page",
    }
)


def lookup_context(params: Mapping[str, Any] | None) -> Dict[str, str]:
    """Identifying parameters of a call, for NotFoundError diagnostics."""
    return {k: v for k, v in drop_absent(params).items() if k not in _NON_LOOKUP_FIELDS}


def parse_envelope(
    method: str, status: int, body: str, params: Mapping[str, Any] | None = None
) -> Dict[str, Any]:
    """Turn a raw response into a payload dict or raise the matching error.

    An embedded ``{"error": code, "message": ...}`` object wins over the HTTP
    status: the service sometimes answers 200 with an error body and
    sometimes 4xx with one.
    """
    try:
        data = json.loads(body) if body else None
    except ValueError:
        if not 200 <= status < 300:
            raise ApiError(f"{method}: HTTP error with unparseable body", status=status)
        raise ApiError(f"{method}: malformed response body", status=status)

    if isinstance(data, dict) and "error" in data:
        raw_code = data.get("error")
        try:
            code: Optional[int] = int(raw_code)
        except (TypeError, ValueError):
            code = None
        message = str(data.get("message") or "unknown error")
        if code in NOT_FOUND_CODES:
            raise NotFoundError(method, lookup_context(params), code=code, message=message)
        raise ApiError(f"{method}: {message}", status=status, code=code)

    if not 200 <= status < 300:
        raise ApiError(f"{method}: unexpected HTTP status", status=status)
    if not isinstance(data, dict):
        raise ApiError(f"{method}: unexpected response shape", status=status)
    return data


class Dispatcher:
    """Holds API credentials and a transport; sends calls and classifies replies."""

    def __init__(
        self,
        api_key: str,
        api_secret: Optional[str] = None,
        transport: Transport | None = None,
        *,
        base_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        owns_transport: Optional[bool] = None,
    ) -> None:
        if not api_key:
            raise ValueError("Last.fm API key required")
        self._api_key = api_key
        self._api_secret = api_secret
        self._owns_transport = transport is None if owns_transport is None else owns_transport
        self._transport: Transport = transport or AiohttpTransport()
        self._base_url = base_url
        self._timeout = timeout

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "Dispatcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _exchange(
        self,
        method: str,
        verb: str,
        wire_params: Mapping[str, str],
        call_params: Mapping[str, Any] | None,
        timeout: Optional[float],
    ) -> Dict[str, Any]:
        try:
            status, body = await self._transport.request(
                verb,
                self._base_url,
                wire_params,
                timeout if timeout is not None else self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ApiError(f"{method}: request timed out") from exc
        except aiohttp.ClientError as exc:
            raise ApiError(f"{method}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise ApiError(f"{method}: malformed response body") from exc
        return parse_envelope(method, status, body, call_params)

    async def unsigned_call(
        self,
        method: str,
        params: Mapping[str, Any] | None = None,
        *,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        wire = drop_absent(params)
        wire["method"] = method
        wire["api_key"] = self._api_key
        wire["format"] = "json"
        return await self._exchange(method, GET, wire, params, timeout)

    async def signed_call(
        self,
        method: str,
        params: Mapping[str, Any] | None,
        session: Session | None,
        http_verb: str = POST,
        *,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        if session is None:
            raise AuthenticationError(method)
        return await self._signed(method, params, session.key, http_verb, timeout)

    async def auth_call(
        self,
        method: str,
        params: Mapping[str, Any] | None = None,
        *,
        http_verb: str = POST,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        return await self._signed(method, params, None, http_verb, timeout)

    async def _signed(
        self,
        method: str,
        params: Mapping[str, Any] | None,
        session_key: Optional[str],
        http_verb: str,
        timeout: Optional[float],
    ) -> Dict[str, Any]:
        verb = http_verb.upper()
        if verb not in HTTP_VERBS:
            raise LocalValidationError(f"Unsupported HTTP verb for {method}: {http_verb}")
        if not self._api_secret:
            raise LastFmError(f"{method} requires an API secret; none is configured")
        request = build_signed_request(
            method,
            params,
            secret=self._api_secret,
            api_key=self._api_key,
            session_key=session_key,
            http_verb=verb,
        )
        wire = dict(request.parameters)
        wire["format"] = "json"
        return await self._exchange(method, request.http_verb, wire, params, timeout)
