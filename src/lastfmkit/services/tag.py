"""Tag methods (``tag.*``). All public, none need a session."""

from typing import Any, Dict, Optional

from ..core.dispatcher import Dispatcher
from ._common import DEFAULT_PAGE_SIZE


async def get_info(dispatcher: Dispatcher, tag: str, *, lang: Optional[str] = None) -> Dict[str, Any]:
    return await dispatcher.unsigned_call("tag.getInfo", {"tag": tag, "lang": lang})


async def get_similar(dispatcher: Dispatcher, tag: str) -> Dict[str, Any]:
    return await dispatcher.unsigned_call("tag.getSimilar", {"tag": tag})


async def get_top_albums(
    dispatcher: Dispatcher, tag: str, *, limit: int = DEFAULT_PAGE_SIZE, page: int = 1
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "tag.getTopAlbums", {"tag": tag, "limit": limit, "page": page}
    )


async def get_top_artists(
    dispatcher: Dispatcher, tag: str, *, limit: int = DEFAULT_PAGE_SIZE, page: int = 1
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "tag.getTopArtists", {"tag": tag, "limit": limit, "page": page}
    )


async def get_top_tags(dispatcher: Dispatcher) -> Dict[str, Any]:
    """Most used tags site-wide."""
    return await dispatcher.unsigned_call("tag.getTopTags")


async def get_top_tracks(
    dispatcher: Dispatcher, tag: str, *, limit: int = DEFAULT_PAGE_SIZE, page: int = 1
) -> Dict[str, Any]:
    return await dispatcher.unsigned_call(
        "tag.getTopTracks", {"tag": tag, "limit": limit, "page": page}
    )


async def get_weekly_chart_list(dispatcher: Dispatcher, tag: str) -> Dict[str, Any]:
    return await dispatcher.unsigned_call("tag.getWeeklyChartList", {"tag": tag})
