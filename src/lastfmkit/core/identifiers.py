"""
Lookup keys for albums, artists and tracks.

The service accepts either names or a MusicBrainz id for the same lookup
methods. Instead of duplicating every method, callers pass one of:

    ByName("Radiohead", "OK Computer")   # album / track by artist + title
    ByName("Radiohead")                  # artist by name
    ByMbid("a74b1b7f-71a5-4011-9441-d0b5e4122711")
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .errors import LocalValidationError


@dataclass(frozen=True)
class ByName:
    artist: str
    title: Optional[str] = None


@dataclass(frozen=True)
class ByMbid:
    mbid: str


Ref = Union[ByName, ByMbid]


def ref_params(ref: Ref, title_field: Optional[str] = None) -> Dict[str, str]:
    """Map a lookup key onto the wire fields of one entity type.

    ``title_field`` is ``"album"`` or ``"track"``; ``None`` for artist lookups,
    where only the artist name is sent.
    """
    if isinstance(ref, ByMbid):
        return {"mbid": ref.mbid}
    if isinstance(ref, ByName):
        params = {"artist": ref.artist}
        if title_field is not None:
            if not ref.title:
                raise LocalValidationError(f"A {title_field} title is required for this lookup")
            params[title_field] = ref.title
        return params
    raise LocalValidationError(f"Unsupported lookup key: {ref!r}")
