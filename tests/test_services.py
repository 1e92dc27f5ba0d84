import pytest

from lastfmkit.core.errors import AuthenticationError, LocalValidationError, NotFoundError
from lastfmkit.core.identifiers import ByMbid, ByName
from lastfmkit.services import album, artist, auth, tag, track


# --- tagging limits -----------------------------------------------------------


@pytest.mark.asyncio
async def test_add_tags_with_no_tags_is_a_noop(dispatcher, transport, session):
    assert await album.add_tags(dispatcher, session, "A", "B", []) is None
    await artist.add_tags(dispatcher, session, "A", [])
    await track.add_tags(dispatcher, session, "A", "T", [])
    assert transport.calls == []


@pytest.mark.asyncio
async def test_add_tags_over_limit_fails_locally(dispatcher, transport, session):
    tags = [f"t{i}" for i in range(11)]
    with pytest.raises(LocalValidationError):
        await album.add_tags(dispatcher, session, "A", "B", tags)
    with pytest.raises(LocalValidationError):
        await artist.add_tags(dispatcher, session, "A", tags)
    with pytest.raises(LocalValidationError):
        await track.add_tags(dispatcher, session, "A", "T", tags)
    assert transport.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [1, 10])
async def test_add_tags_issues_one_signed_post(dispatcher, transport, session, count):
    tags = [f"t{i}" for i in range(count)]
    await album.add_tags(dispatcher, session, "A", "B", tags)

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["verb"] == "POST"
    assert call["params"]["method"] == "album.addTags"
    assert call["params"]["tags"] == ",".join(tags)
    assert call["params"]["sk"] == "sessionkey"
    assert "api_sig" in call["params"]


@pytest.mark.asyncio
async def test_add_tags_rejects_a_bare_string(dispatcher, transport, session):
    with pytest.raises(LocalValidationError):
        await artist.add_tags(dispatcher, session, "A", "rock")
    assert transport.calls == []


@pytest.mark.asyncio
async def test_add_tags_without_session(dispatcher, transport):
    with pytest.raises(AuthenticationError):
        await track.add_tags(dispatcher, None, "A", "T", ["x"])
    assert transport.calls == []


# --- lookups ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_album_get_info_by_name_omits_unset_options(dispatcher, transport):
    await album.get_info(dispatcher, ByName("Cher", "Believe"), autocorrect=True)
    params = transport.calls[0]["params"]
    assert params["method"] == "album.getInfo"
    assert params["artist"] == "Cher"
    assert params["album"] == "Believe"
    assert params["autocorrect"] == "1"
    assert "username" not in params
    assert "lang" not in params


@pytest.mark.asyncio
async def test_album_get_info_by_mbid(dispatcher, transport):
    await album.get_info(dispatcher, ByMbid("61bf0388-b8a9-48f4-81d1-7eb02706dfb0"))
    params = transport.calls[0]["params"]
    assert params["mbid"] == "61bf0388-b8a9-48f4-81d1-7eb02706dfb0"
    assert "artist" not in params
    assert params["autocorrect"] == "0"


@pytest.mark.asyncio
async def test_lookup_by_name_requires_title(dispatcher, transport):
    with pytest.raises(LocalValidationError):
        await track.get_info(dispatcher, ByName("Cher"))
    assert transport.calls == []


@pytest.mark.asyncio
async def test_track_top_tags_by_mbid_sends_mbid(dispatcher, transport):
    await track.get_top_tags(dispatcher, ByMbid("abc"))
    params = transport.calls[0]["params"]
    assert params["method"] == "track.getTopTags"
    assert params["mbid"] == "abc"


@pytest.mark.asyncio
async def test_user_scoped_tags_use_user_field(dispatcher, transport):
    await artist.get_tags(dispatcher, ByName("Cher"), "rj")
    assert transport.calls[0]["params"]["user"] == "rj"


@pytest.mark.asyncio
async def test_artist_top_tracks_defaults(dispatcher, transport):
    await artist.get_top_tracks(dispatcher, ByName("Cher"))
    params = transport.calls[0]["params"]
    assert params["page"] == "1"
    assert params["limit"] == "10"


@pytest.mark.asyncio
async def test_tag_methods(dispatcher, transport):
    await tag.get_top_tags(dispatcher)
    await tag.get_top_artists(dispatcher, "disco", limit=5, page=2)
    await tag.get_weekly_chart_list(dispatcher, "disco")

    methods = [c["params"]["method"] for c in transport.calls]
    assert methods == ["tag.getTopTags", "tag.getTopArtists", "tag.getWeeklyChartList"]
    assert transport.calls[1]["params"]["limit"] == "5"
    assert transport.calls[1]["params"]["page"] == "2"
    assert all(c["verb"] == "GET" for c in transport.calls)


@pytest.mark.asyncio
async def test_not_found_carries_lookup(dispatcher, transport):
    transport.queue({"error": 6, "message": "Album not found"})
    with pytest.raises(NotFoundError) as exc_info:
        await album.get_info(dispatcher, ByName("Nobody", "Nothing"))
    assert exc_info.value.lookup["artist"] == "Nobody"
    assert exc_info.value.lookup["album"] == "Nothing"


# --- love / now playing ---------------------------------------------------------


@pytest.mark.asyncio
async def test_love_and_unlove_use_distinct_methods(dispatcher, transport, session):
    await track.love(dispatcher, session, "A", "T")
    await track.unlove(dispatcher, session, "A", "T")
    assert [c["params"]["method"] for c in transport.calls] == ["track.love", "track.unlove"]


@pytest.mark.asyncio
async def test_update_now_playing_optional_fields(dispatcher, transport, session):
    await track.update_now_playing(dispatcher, session, "A", "T", album="B", duration=215)
    params = transport.calls[0]["params"]
    assert params["album"] == "B"
    assert params["duration"] == "215"
    for missing in ("trackNumber", "context", "mbid", "albumArtist"):
        assert missing not in params


# --- scrobbling -----------------------------------------------------------------


def _entry(i, **extra):
    return {"artist": f"A{i}", "track": f"T{i}", "timestamp": 1700000000 + i, **extra}


@pytest.mark.asyncio
async def test_scrobble_missing_timestamp_names_entry(dispatcher, transport, session):
    entries = [_entry(0), {"artist": "A1", "track": "T1"}]
    with pytest.raises(LocalValidationError, match="timestamp.*entry 1"):
        await track.scrobble(dispatcher, session, entries)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_scrobble_full_batch_is_one_post(dispatcher, transport, session):
    entries = [_entry(i) for i in range(10)]
    await track.scrobble(dispatcher, session, entries)

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["verb"] == "POST"
    params = call["params"]
    assert params["method"] == "track.scrobble"
    for i in range(10):
        assert params[f"artist[{i}]"] == f"A{i}"
        assert params[f"track[{i}]"] == f"T{i}"
        assert params[f"timestamp[{i}]"] == str(1700000000 + i)
    assert "artist[10]" not in params


@pytest.mark.asyncio
async def test_scrobble_over_limit_fails_locally(dispatcher, transport, session):
    with pytest.raises(LocalValidationError):
        await track.scrobble(dispatcher, session, [_entry(i) for i in range(11)])
    assert transport.calls == []


@pytest.mark.asyncio
async def test_scrobble_empty_batch_is_noop(dispatcher, transport, session):
    assert await track.scrobble(dispatcher, session, []) is None
    assert transport.calls == []


@pytest.mark.asyncio
async def test_scrobble_optional_fields_only_when_supplied(dispatcher, transport, session):
    entries = [_entry(0, album="B", chosenByUser=0), _entry(1, duration=180)]
    await track.scrobble(dispatcher, session, entries)
    params = transport.calls[0]["params"]
    assert params["album[0]"] == "B"
    assert params["chosenByUser[0]"] == "0"
    assert "album[1]" not in params
    assert params["duration[1]"] == "180"
    assert "duration[0]" not in params


# --- auth -----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_mobile_session_builds_session(dispatcher, transport):
    transport.queue({"session": {"name": "rj", "key": "d580d57f", "subscriber": "1"}})
    s = await auth.get_mobile_session(dispatcher, "rj", "pw")
    assert s.name == "rj"
    assert s.key == "d580d57f"
    assert s.subscriber == 1
    assert transport.calls[0]["params"]["method"] == "auth.getMobileSession"
    assert "sk" not in transport.calls[0]["params"]


@pytest.mark.asyncio
async def test_get_token_and_session(dispatcher, transport):
    transport.queue({"token": "tok"})
    transport.queue({"session": {"name": "rj", "key": "sk1", "subscriber": 0}})

    token = await auth.get_token(dispatcher)
    s = await auth.get_session(dispatcher, token)

    assert token == "tok"
    assert s.key == "sk1"
    assert transport.calls[1]["params"]["token"] == "tok"


def test_authorize_url():
    assert auth.authorize_url("k", "t") == "https://www.last.fm/api/auth/?api_key=k&token=t"
