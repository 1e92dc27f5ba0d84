"""Album methods (``album.*``)."""

from typing import Any, Dict, Optional, Sequence

from ..core.dispatcher import Dispatcher
from ..core.identifiers import Ref, ref_params
from ..core.params import flag
from ..core.session import Session
from ._common import DEFAULT_PAGE_SIZE, join_tags


async def add_tags(
    dispatcher: Dispatcher, session: Session, artist: str, album: str, tags: Sequence[str]
) -> None:
    """Tag an album with up to ten user supplied tags. No tags is a no-op."""
    joined = join_tags(tags)
    if joined is None:
        return
    await dispatcher.signed_call(
        "album.addTags",
        {"artist": artist, "album": album, "tags": joined},
        session,
        "POST",
    )


async def get_info(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    autocorrect: bool = False,
    username: Optional[str] = None,
    lang: Optional[str] = None,
) -> Dict[str, Any]:
    """Album metadata and tracklist; ``username`` adds that user's playcount."""
    return await dispatcher.unsigned_call(
        "album.getInfo",
        {
            **ref_params(ref, "album"),
            "autocorrect": flag(autocorrect),
            "username": username,
            "lang": lang,
        },
    )


async def get_tags(
    dispatcher: Dispatcher, ref: Ref, username: str, *, autocorrect: bool = False
) -> Dict[str, Any]:
    """Tags applied by one user to an album."""
    return await dispatcher.unsigned_call(
        "album.getTags",
        {**ref_params(ref, "album"), "autocorrect": flag(autocorrect), "user": username},
    )


async def get_top_tags(
    dispatcher: Dispatcher, ref: Ref, *, autocorrect: bool = False
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "album.getTopTags",
        {**ref_params(ref, "album"), "autocorrect": flag(autocorrect)},
    )


async def remove_tag(
    dispatcher: Dispatcher, session: Session, artist: str, album: str, tag: str
) -> None:
    await dispatcher.signed_call(
        "album.removeTag",
        {"artist": artist, "album": album, "tag": tag},
        session,
        "POST",
    )


async def search(
    dispatcher: Dispatcher, album: str, *, limit: int = DEFAULT_PAGE_SIZE, page: int = 1
) -> Dict[str, Any]:
    """Album matches sorted by relevance."""
    return await dispatcher.unsigned_call(
        "album.search", {"album": album, "limit": limit, "page": page}
    )
