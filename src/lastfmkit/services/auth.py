"""
Session acquisition (``auth.*``).

Two flows are supported:

- Web/desktop: ``get_token`` -> user approves at :func:`authorize_url` ->
  ``get_session(token)``
- Mobile: ``get_mobile_session(username, password)`` in one step

Both return a :class:`Session` that can be persisted and reused; session keys
do not expire.
"""

from typing import Any, Dict
from urllib.parse import urlencode

from ..core.dispatcher import Dispatcher
from ..core.errors import ApiError
from ..core.session import Session

AUTHORIZE_URL = "https://www.last.fm/api/auth/"


def authorize_url(api_key: str, token: str) -> str:
    """Page where the user grants the application access for ``token``."""
    return f"{AUTHORIZE_URL}?{urlencode({'api_key': api_key, 'token': token})}"


def session_from_payload(payload: Dict[str, Any]) -> Session:
    data = payload.get("session")
    if not isinstance(data, dict) or not data.get("key"):
        raise ApiError("auth: response carries no session")
    try:
        subscriber = int(data.get("subscriber") or 0)
    except (TypeError, ValueError):
        subscriber = 0
    return Session(name=str(data.get("name") or ""), key=str(data["key"]), subscriber=subscriber)


async def get_token(dispatcher: Dispatcher) -> str:
    payload = await dispatcher.auth_call("auth.getToken", http_verb="GET")
    token = payload.get("token")
    if not token:
        raise ApiError("auth.getToken: response carries no token")
    return str(token)


async def get_session(dispatcher: Dispatcher, token: str) -> Session:
    """Exchange an authorized token for a session."""
    payload = await dispatcher.auth_call("auth.getSession", {"token": token}, http_verb="GET")
    return session_from_payload(payload)


async def get_mobile_session(dispatcher: Dispatcher, username: str, password: str) -> Session:
    payload = await dispatcher.auth_call(
        "auth.getMobileSession", {"username": username, "password": password}
    )
    return session_from_payload(payload)
