import asyncio

import aiohttp
import pytest

from lastfmkit.core.dispatcher import API_URL, Dispatcher, parse_envelope
from lastfmkit.core.errors import (
    ApiError,
    AuthenticationError,
    LastFmError,
    LocalValidationError,
    NotFoundError,
)
from lastfmkit.core.signing import sign


@pytest.mark.asyncio
async def test_unsigned_call_is_get_with_key_method_and_format(dispatcher, transport):
    transport.queue({"artist": {"name": "Cher"}})

    data = await dispatcher.unsigned_call("artist.getInfo", {"artist": "Cher", "lang": None})

    assert data == {"artist": {"name": "Cher"}}
    call = transport.calls[0]
    assert call["verb"] == "GET"
    assert call["url"] == API_URL
    assert call["params"] == {
        "artist": "Cher",
        "method": "artist.getInfo",
        "api_key": "key123",
        "format": "json",
    }
    assert "api_sig" not in call["params"]


@pytest.mark.asyncio
async def test_signed_call_posts_signed_params(dispatcher, transport, session):
    params = {"artist": "A", "album": "B", "tags": "x,y"}
    await dispatcher.signed_call("album.addTags", params, session, "POST")

    call = transport.calls[0]
    expected_sig, expected = sign("album.addTags", params, "secret456", "key123", "sessionkey")
    assert call["verb"] == "POST"
    assert call["params"]["api_sig"] == expected_sig
    assert call["params"] == {**expected, "format": "json"}
    assert "secret456" not in call["params"].values()


@pytest.mark.asyncio
async def test_signed_call_supports_get(dispatcher, transport, session):
    await dispatcher.signed_call("user.getRecommendedArtists", {}, session, "get")
    assert transport.calls[0]["verb"] == "GET"
    assert transport.calls[0]["params"]["sk"] == "sessionkey"


@pytest.mark.asyncio
async def test_signed_call_without_session_never_hits_network(dispatcher, transport):
    with pytest.raises(AuthenticationError):
        await dispatcher.signed_call("track.love", {"artist": "A", "track": "T"}, None)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_signed_call_rejects_unknown_verb(dispatcher, transport, session):
    with pytest.raises(LocalValidationError):
        await dispatcher.signed_call("track.love", {}, session, "PUT")
    assert transport.calls == []


@pytest.mark.asyncio
async def test_signed_call_without_secret(transport, session):
    d = Dispatcher("key123", None, transport)
    with pytest.raises(LastFmError):
        await d.signed_call("track.love", {}, session)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_auth_call_is_signed_without_session_key(dispatcher, transport):
    await dispatcher.auth_call("auth.getMobileSession", {"username": "u", "password": "p"})
    params = transport.calls[0]["params"]
    assert "sk" not in params
    assert params["api_sig"] == sign(
        "auth.getMobileSession", {"username": "u", "password": "p"}, "secret456", "key123"
    )[0]


@pytest.mark.asyncio
async def test_embedded_not_found_error_with_http_200(dispatcher, transport):
    transport.queue({"error": 6, "message": "The artist you supplied could not be found"})

    with pytest.raises(NotFoundError) as exc_info:
        await dispatcher.unsigned_call("artist.getInfo", {"artist": "Nobody", "lang": None})

    err = exc_info.value
    assert err.method == "artist.getInfo"
    assert err.lookup == {"artist": "Nobody"}
    assert err.code == 6


@pytest.mark.asyncio
async def test_other_error_codes_become_api_error(dispatcher, transport):
    transport.queue({"error": 29, "message": "Rate limit exceeded"}, status=429)

    with pytest.raises(ApiError) as exc_info:
        await dispatcher.unsigned_call("tag.getInfo", {"tag": "rock"})

    assert exc_info.value.code == 29
    assert exc_info.value.status == 429
    assert not isinstance(exc_info.value, NotFoundError)


@pytest.mark.asyncio
async def test_invalid_signature_is_api_error(dispatcher, transport, session):
    transport.queue({"error": 13, "message": "Invalid method signature supplied"}, status=403)
    with pytest.raises(ApiError) as exc_info:
        await dispatcher.signed_call("track.love", {"artist": "A", "track": "T"}, session)
    assert exc_info.value.code == 13


@pytest.mark.asyncio
async def test_transport_errors_become_api_error(dispatcher, transport):
    transport.responses.append(aiohttp.ClientConnectionError("connection refused"))
    with pytest.raises(ApiError) as exc_info:
        await dispatcher.unsigned_call("tag.getTopTags")
    assert exc_info.value.status is None
    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_timeouts_become_api_error(dispatcher, transport):
    transport.responses.append(asyncio.TimeoutError())
    with pytest.raises(ApiError, match="timed out"):
        await dispatcher.unsigned_call("tag.getTopTags")


@pytest.mark.asyncio
async def test_timeout_is_passed_through(transport):
    d = Dispatcher("k", "s", transport, timeout=12.5)
    await d.unsigned_call("tag.getTopTags")
    await d.unsigned_call("tag.getTopTags", timeout=3)
    assert [c["timeout"] for c in transport.calls] == [12.5, 3]


@pytest.mark.asyncio
async def test_no_retry_on_failure(dispatcher, transport):
    transport.queue({"error": 16, "message": "temporary error"}, status=500)
    transport.queue({"ok": True})
    with pytest.raises(ApiError):
        await dispatcher.unsigned_call("tag.getTopTags")
    assert len(transport.calls) == 1


def test_parse_envelope_malformed_body():
    with pytest.raises(ApiError, match="malformed"):
        parse_envelope("tag.getInfo", 200, "<html>oops</html>")


def test_parse_envelope_non_2xx_without_error_object():
    with pytest.raises(ApiError) as exc_info:
        parse_envelope("tag.getInfo", 502, "Bad Gateway")
    assert exc_info.value.status == 502

    with pytest.raises(ApiError):
        parse_envelope("tag.getInfo", 503, '{"unexpected": true}')


def test_parse_envelope_non_object_payload():
    with pytest.raises(ApiError, match="shape"):
        parse_envelope("tag.getInfo", 200, "[1, 2]")


def test_parse_envelope_success():
    assert parse_envelope("track.love", 200, "{}") == {}


def test_not_found_lookup_strips_credentials():
    with pytest.raises(NotFoundError) as exc_info:
        parse_envelope(
            "track.getInfo",
            200,
            '{"error": 6, "message": "Track not found"}',
            {"mbid": "abc", "api_key": "k", "sk": "s", "api_sig": "x", "username": None},
        )
    assert exc_info.value.lookup == {"mbid": "abc"}


def test_dispatcher_requires_api_key(transport):
    with pytest.raises(ValueError):
        Dispatcher("", "s", transport)


@pytest.mark.asyncio
async def test_injected_transport_is_not_closed(transport):
    async with Dispatcher("k", "s", transport):
        pass
    assert transport.closed is False


def test_not_found_lookup_drops_paging_and_options():
    with pytest.raises(NotFoundError) as exc_info:
        parse_envelope(
            "artist.getTopTracks",
            200,
            '{"error": 6, "message": "The artist you supplied could not be found"}',
            {"artist": "Nobody", "autocorrect": 0, "limit": 10, "page": 1, "lang": "en"},
        )
    assert exc_info.value.lookup == {"artist": "Nobody"}
