"""Authenticated user session value."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """A Last.fm web service session.

    Obtained from ``auth.getSession`` / ``auth.getMobileSession`` or loaded
    from stored credentials. Session keys do not expire, so one value can be
    shared by any number of concurrent calls.
    """

    name: str
    key: str
    subscriber: int = 0

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        return f"Session(name={self.name!r}, key='***', subscriber={self.subscriber})"
