import hashlib

from lastfmkit.core.params import ABSENT
from lastfmkit.core.signing import build_signed_request, sign, signature_base


def _md5(text):
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def test_sign_matches_documented_scheme():
    sig, final = sign("album.addTags", {"artist": "A", "album": "B", "tags": "x,y"}, "s", "apikey", "k")

    base = "albumBapi_keyapikeyartistAmethodalbum.addTagsskktagsx,ys"
    assert sig == _md5(base)
    assert final == {
        "artist": "A",
        "album": "B",
        "tags": "x,y",
        "sk": "k",
        "method": "album.addTags",
        "api_key": "apikey",
        "api_sig": sig,
    }


def test_sign_is_deterministic_and_sensitive_to_values():
    params = {"artist": "A", "album": "B", "tags": "x,y"}
    first, _ = sign("album.addTags", params, "s", "apikey", "k")
    second, _ = sign("album.addTags", dict(params), "s", "apikey", "k")
    assert first == second

    for field, value in (("artist", "A2"), ("album", "B2"), ("tags", "x,z")):
        changed = dict(params, **{field: value})
        assert sign("album.addTags", changed, "s", "apikey", "k")[0] != first
    assert sign("album.addTags", params, "s2", "apikey", "k")[0] != first
    assert sign("album.addTags", params, "s", "apikey", "k2")[0] != first


def test_sign_ignores_insertion_order():
    a = {"track": "T", "artist": "A", "album": "B", "duration": 200}
    b = {"duration": 200, "album": "B", "artist": "A", "track": "T"}
    assert sign("track.updateNowPlaying", a, "s", "key", "k") == sign(
        "track.updateNowPlaying", b, "s", "key", "k"
    )


def test_absent_values_are_excluded_everywhere():
    params = {"artist": "A", "album": None, "lang": ABSENT, "tags": "x"}
    sig, final = sign("album.addTags", params, "s", "key", "k")

    assert "album" not in final
    assert "lang" not in final
    assert sig == sign("album.addTags", {"artist": "A", "tags": "x"}, "s", "key", "k")[0]


def test_secret_is_never_in_final_params():
    _, final = sign("track.love", {"artist": "A", "track": "T"}, "topsecret", "key", "k")
    assert "topsecret" not in final.values()


def test_session_key_is_optional():
    sig, final = sign("auth.getToken", {}, "s", "key")
    assert "sk" not in final
    assert sig == _md5("api_keykeymethodauth.getTokens")


def test_empty_session_key_is_still_sent():
    sig, final = sign("auth.getToken", {}, "s", "key", "")
    assert final["sk"] == ""
    assert sig == _md5("api_keykeymethodauth.getTokensks")


def test_booleans_and_ints_render_as_wire_strings():
    _, final = sign("artist.getInfo", {"artist": "A", "autocorrect": True, "limit": 5}, "s", "key")
    assert final["autocorrect"] == "1"
    assert final["limit"] == "5"


def test_format_and_callback_are_not_signed():
    base = signature_base({"method": "m", "format": "json", "callback": "cb", "b": "2"}, "s")
    assert base == "b2methodms"


def test_sorting_uses_code_point_order():
    # Upper case sorts before lower case, indexed fields sort as plain strings
    base = signature_base({"b": "1", "B": "2", "artist[1]": "y", "artist[0]": "x"}, "")
    assert base == "B2artist[0]xartist[1]yb1"


def test_build_signed_request_carries_verb_and_signature():
    req = build_signed_request(
        "track.love", {"artist": "A", "track": "T"}, secret="s", api_key="key", session_key="k"
    )
    assert req.http_verb == "POST"
    assert req.api_key == "key"
    assert req.parameters["api_sig"] == req.signature
