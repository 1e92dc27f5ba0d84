import json

import pytest

from lastfmkit.core import config as cfg
from lastfmkit.core import credentials as creds
from lastfmkit.core.dispatcher import Dispatcher
from lastfmkit.core.session import Session


class FakeTransport:
    """Records requests and replays canned (status, body) responses."""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses or [])
        self.closed = False

    def queue(self, payload, status=200):
        body = payload if isinstance(payload, str) else json.dumps(payload)
        self.responses.append((status, body))

    async def request(self, verb, url, params, timeout=None):
        self.calls.append({"verb": verb, "url": url, "params": dict(params), "timeout": timeout})
        if self.responses:
            item = self.responses.pop(0)
            if isinstance(item, BaseException):
                raise item
            return item
        return 200, "{}"

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep settings and secrets away from the real home directory and keyring."""
    for var in (
        "LFM_API_KEY",
        "LFM_API_SECRET",
        "LFM_BASE_URL",
        "LFM_SESSION_KEY",
        "LFM_SESSION_NAME",
        "LFM_SUBSCRIBER",
        "LASTFM_API_KEY",
        "LASTFM_API_SECRET",
        "LASTFM_SESSION_KEY",
        "LASTFM_USERNAME",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LFM_DISABLE_KEYRING", "1")
    monkeypatch.setenv("LFM_SETTINGS_PATH", str(tmp_path / "settings.json"))
    monkeypatch.setattr(cfg, "USER_CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(cfg, "USER_SETTINGS_FILE", tmp_path / "config" / "settings.toml")
    monkeypatch.setattr(creds, "USER_SECRETS_FILE", tmp_path / "config" / ".secrets.toml")
    monkeypatch.setattr(creds, "LOCAL_SECRETS_FILE", tmp_path / "local.secrets.toml")
    cfg.reset_settings()
    yield
    cfg.reset_settings()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def dispatcher(transport):
    return Dispatcher("key123", "secret456", transport)


@pytest.fixture
def session():
    return Session(name="rj", key="sessionkey", subscriber=0)
