"""Track methods (``track.*``), including scrobbling and now-playing updates."""

from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.dispatcher import Dispatcher
from ..core.errors import LocalValidationError
from ..core.identifiers import Ref, ref_params
from ..core.params import flag, is_absent
from ..core.session import Session
from ._common import DEFAULT_PAGE_SIZE, join_tags

SIMILAR_PAGE_SIZE = 10
MAX_SCROBBLES = 10

SCROBBLE_REQUIRED = ("artist", "track", "timestamp")
SCROBBLE_OPTIONAL = (
    "album",
    "context",
    "streamId",
    "chosenByUser",
    "trackNumber",
    "mbid",
    "albumArtist",
    "duration",
)


async def add_tags(
    dispatcher: Dispatcher, session: Session, artist: str, track: str, tags: Sequence[str]
) -> None:
    joined = join_tags(tags)
    if joined is None:
        return
    await dispatcher.signed_call(
        "track.addTags", {"artist": artist, "track": track, "tags": joined}, session, "POST"
    )


async def get_correction(dispatcher: Dispatcher, artist: str, track: str) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "track.getCorrection", {"artist": artist, "track": track}
    )


async def get_info(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    username: Optional[str] = None,
    autocorrect: bool = False,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "track.getInfo",
        {**ref_params(ref, "track"), "autocorrect": flag(autocorrect), "username": username},
    )


async def get_similar(
    dispatcher: Dispatcher,
    ref: Ref,
    *,
    limit: int = SIMILAR_PAGE_SIZE,
    autocorrect: bool = False,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "track.getSimilar",
        {**ref_params(ref, "track"), "limit": limit, "autocorrect": flag(autocorrect)},
    )


async def get_tags(
    dispatcher: Dispatcher, ref: Ref, username: str, *, autocorrect: bool = False
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "track.getTags",
        {**ref_params(ref, "track"), "user": username, "autocorrect": flag(autocorrect)},
    )


async def get_top_tags(
    dispatcher: Dispatcher, ref: Ref, *, autocorrect: bool = False
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "track.getTopTags", {**ref_params(ref, "track"), "autocorrect": flag(autocorrect)}
    )


async def love(dispatcher: Dispatcher, session: Session, artist: str, track: str) -> None:
    await dispatcher.signed_call(
        "track.love", {"artist": artist, "track": track}, session, "POST"
    )


async def unlove(dispatcher: Dispatcher, session: Session, artist: str, track: str) -> None:
    await dispatcher.signed_call(
        "track.unlove", {"artist": artist, "track": track}, session, "POST"
    )


async def remove_tag(
    dispatcher: Dispatcher, session: Session, artist: str, track: str, tag: str
) -> None:
    await dispatcher.signed_call(
        "track.removeTag", {"artist": artist, "track": track, "tag": tag}, session, "POST"
    )


def scrobble_params(
    entries: Sequence[Mapping[str, Any]], first_index: int = 0
) -> Dict[str, Any]:
    """Flatten a scrobble batch into ``field[i]`` parameters.

    ``first_index`` only shifts the entry numbers quoted in error messages,
    for batches cut from a longer list.

    Raises:
        LocalValidationError: too many entries, or an entry lacks a required field.
    """
    count = len(entries)
    if count > MAX_SCROBBLES:
        raise LocalValidationError(
            f"A maximum of {MAX_SCROBBLES} scrobbles per batch is allowed, got {count}"
        )
    data: Dict[str, Any] = {}
    for i, entry in enumerate(entries):
        for name in SCROBBLE_REQUIRED:
            if is_absent(entry.get(name)):
                raise LocalValidationError(f'Field "{name}" not set on entry {first_index + i}')
            data[f"{name}[{i}]"] = entry[name]
        for name in SCROBBLE_OPTIONAL:
            if name in entry:
                data[f"{name}[{i}]"] = entry[name]
    return data


async def scrobble(
    dispatcher: Dispatcher, session: Session, entries: Sequence[Mapping[str, Any]]
) -> Optional[Dict[str, Any]]:
    """Submit a batch of listens.

    Each entry needs ``artist``, ``track`` and ``timestamp`` (UNIX seconds,
    UTC). An empty batch sends nothing and returns ``None``.
    """
    params = scrobble_params(entries)
    if not params:
        return None
    return await dispatcher.signed_call("track.scrobble", params, session, "POST")


async def search(
    dispatcher: Dispatcher,
    track: str,
    *,
    artist: Optional[str] = None,
    limit: int = DEFAULT_PAGE_SIZE,
    page: int = 1,
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "track.search", {"track": track, "artist": artist, "limit": limit, "page": page}
    )


async def update_now_playing(
    dispatcher: Dispatcher,
    session: Session,
    artist: str,
    track: str,
    *,
    album: Optional[str] = None,
    track_number: Optional[int] = None,
    context: Optional[str] = None,
    mbid: Optional[str] = None,
    duration: Optional[int] = None,
    album_artist: Optional[str] = None,
) -> Dict[str, Any]:
    return await dispatcher.signed_call(
        "track.updateNowPlaying",
        {
            "artist": artist,
            "track": track,
            "album": album,
            "trackNumber": track_number,
            "context": context,
            "mbid": mbid,
            "duration": duration,
            "albumArtist": album_artist,
        },
        session,
        "POST",
    )
