"""
Request signing for authenticated Last.fm calls.

Observed service behavior:
- All request parameters take part in the signature except ``format`` and
  ``callback``
- Parameters are sorted by name (code point order) and concatenated as
  name+value with no separators
- The shared secret is appended last
- Signature = MD5 hex digest of the UTF-8 encoded base string
"""

import hashlib
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .params import drop_absent

UNSIGNED_FIELDS = frozenset({"format", "callback"})
SIGNATURE_FIELD = "api_sig"
SESSION_KEY_FIELD = "sk"

GET = "GET"
POST = "POST"
HTTP_VERBS = (GET, POST)


def signature_base(params: Mapping[str, str], secret: str) -> str:
    """Build the string that gets hashed: sorted name+value pairs, then the secret."""
    pairs = "".join(f"{k}{v}" for k, v in sorted(params.items()) if k not in UNSIGNED_FIELDS)
    return f"{pairs}{secret}"


def sign(
    method: str,
    params: Mapping[str, Any] | None,
    secret: str,
    api_key: str,
    session_key: Optional[str] = None,
) -> Tuple[str, Dict[str, str]]:
    """
    Finalize and sign a parameter map.

    Args:
        method: API method name, e.g. ``album.addTags``.
        params: Call parameters; ``None``/absent values are dropped.
        secret: Shared API secret. Never copied into the output.
        api_key: Application API key, always added as ``api_key``.
        session_key: User session key, added as ``sk`` when given.

    Returns:
        ``(signature, final_params)`` where ``final_params`` is ready for
        transport and already carries ``api_sig``.
    """
    final = drop_absent(params)
    if session_key is not None:
        final[SESSION_KEY_FIELD] = session_key
    final["method"] = method
    final["api_key"] = api_key
    final.pop(SIGNATURE_FIELD, None)

    # MD5 is the service's documented signature scheme, not used for security here
    signature = hashlib.md5(  # nosec B324
        signature_base(final, secret).encode("utf-8"), usedforsecurity=False
    ).hexdigest()
    final[SIGNATURE_FIELD] = signature
    return signature, final


@dataclass(frozen=True)
class SignedRequest:
    """A finalized, signed request ready for the transport."""

    method: str
    http_verb: str
    signature: str
    api_key: str
    parameters: Dict[str, str] = field(default_factory=dict)


def build_signed_request(
    method: str,
    params: Mapping[str, Any] | None,
    *,
    secret: str,
    api_key: str,
    session_key: Optional[str] = None,
    http_verb: str = POST,
) -> SignedRequest:
    signature, final = sign(method, params, secret, api_key, session_key)
    return SignedRequest(
        method=method,
        http_verb=http_verb,
        signature=signature,
        api_key=api_key,
        parameters=final,
    )
