# src/lastfmkit/core/errors.py

from typing import Any, Mapping, Optional


class LastFmError(Exception):
    """Base application error for lastfmkit.

    Every failure surfaced by the client derives from this class so the CLI
    can catch it once and print a readable message. Callers that need to
    branch should catch one of the concrete subclasses below.
    """

    pass


class LocalValidationError(LastFmError, ValueError):
    """Arguments rejected before any request was built (tag or batch limits)."""

    pass


class AuthenticationError(LastFmError):
    """A signed call was attempted without a user session."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"{method} requires an authenticated session")


class NotFoundError(LastFmError):
    """The service reported that the requested entity does not exist.

    ``lookup`` holds the identifying parameters of the failed call (artist,
    album, track, mbid, ...) with credentials stripped.
    """

    def __init__(
        self,
        method: str,
        lookup: Mapping[str, Any],
        *,
        code: Optional[int] = None,
        message: str = "",
    ) -> None:
        self.method = method
        self.lookup = dict(lookup)
        self.code = code
        self.message = message
        details = ", ".join(f"{k}={v}" for k, v in sorted(self.lookup.items()))
        super().__init__(f"{method}: not found ({details}) {message}".rstrip())


class ApiError(LastFmError):
    """Any other service-level or transport failure.

    ``status`` is the HTTP status when a response was received (``None`` for
    connection errors and timeouts); ``code`` is the service error code from
    the response envelope when one was present.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[int] = None,
    ) -> None:
        self.message = message
        self.status = status
        self.code = code
        prefix = []
        if status is not None:
            prefix.append(f"HTTP {status}")
        if code is not None:
            prefix.append(f"error {code}")
        label = f"[{' / '.join(prefix)}] " if prefix else ""
        super().__init__(f"{label}{message}")
