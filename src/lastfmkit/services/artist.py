"""Artist methods (``artist.*``)."""

from typing import Any, Dict, Optional, Sequence

from ..core.dispatcher import Dispatcher
from ..core.identifiers import Ref, ref_params
from ..core.params import flag
from ..core.session import Session
from ._common import DEFAULT_PAGE_SIZE, join_tags

# artist.getTop* default to a smaller page than search
TOP_PAGE_SIZE = 10


async def add_tags(
    dispatcher: Dispatcher, session: Session, artist: str, tags: Sequence[str]
) -> None:
    joined = join_tags(tags)
    if joined is None:
        return
    await dispatcher.signed_call(
        "artist.addTags", {"artist": artist, "tags": joined}, session, "POST"
    )


async def get_correction(dispatcher: Dispatcher, artist: str) -> Dict[str, Any]:
    """Canonical spelling of a possibly misspelled artist name."""
    return await dispatcher.unsigned_call("artist.getCorrection", {"artist": artist})


async def get_info(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    autocorrect: bool = False,
    username: Optional[str] = None,
    lang: Optional[str] = None,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.getInfo",
        {
            **ref_params(ref),
            "autocorrect": flag(autocorrect),
            "username": username,
            "lang": lang,
        },
    )


async def get_similar(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    limit: int = DEFAULT_PAGE_SIZE,
    autocorrect: bool = False,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.getSimilar",
        {**ref_params(ref), "limit": limit, "autocorrect": flag(autocorrect)},
    )


async def get_tags(
    dispatcher: Dispatcher, ref: Ref, username: str, *, autocorrect: bool = False
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.getTags",
        {**ref_params(ref), "user": username, "autocorrect": flag(autocorrect)},
    )


async def get_top_albums(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    page: int = 1,
    limit: int = TOP_PAGE_SIZE,
    autocorrect: bool = False,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.getTopAlbums",
        {**ref_params(ref), "page": page, "limit": limit, "autocorrect": flag(autocorrect)},
    )


async def get_top_tags(
    dispatcher: Dispatcher, ref: Ref, *, autocorrect: bool = False
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.getTopTags", {**ref_params(ref), "autocorrect": flag(autocorrect)}
    )


async def get_top_tracks(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    page: int = 1,
    limit: int = TOP_PAGE_SIZE,
    autocorrect: bool = False,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.getTopTracks",
        {**ref_params(ref), "page": page, "limit": limit, "autocorrect": flag(autocorrect)},
    )


async def remove_tag(dispatcher: Dispatcher, session: Session, artist: str, tag: str) -> None:
    await dispatcher.signed_call(
        "artist.removeTag", {"artist": artist, "tag": tag}, session, "POST"
    )


async def search(
    dispatcher: Dispatcher, artist: str, *, limit: int = DEFAULT_PAGE_SIZE, page: int = 1
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "artist.search", {"artist": artist, "limit": limit, "page": page}
    )
