"""lastfmkit - async client for the Last.fm web service."""

from .client import LastFm
from .core.errors import (
    ApiError,
    AuthenticationError,
    LastFmError,
    LocalValidationError,
    NotFoundError,
)
from .core.identifiers import ByMbid, ByName
from .core.session import Session

__version__ = "0.1.0"

__all__ = [
    "LastFm",
    "Session",
    "ByName",
    "ByMbid",
    "LastFmError",
    "LocalValidationError",
    "AuthenticationError",
    "NotFoundError",
    "ApiError",
]
