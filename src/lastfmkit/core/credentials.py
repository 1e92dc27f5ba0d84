"""
Stores the API secret and the user session with the system keyring, with fallbacks.

Primary store/retrieve is via `keyring` (macOS Keychain, Windows Credential Locker,
Secret Service, etc). For environments where keyring is unavailable or
undesired:

- Opt-out via `LFM_DISABLE_KEYRING=1` to bypass keyring completely
- Environment variable overrides (e.g., `LFM_SESSION_KEY`)
- File fallback in `.secrets.toml` (user or project-local)

All entries live under the keyring service name "lastfmkit".
"""

import logging
import os
from pathlib import Path
from typing import Optional

import keyring
import keyring.errors
import toml

from .config import LOCAL_SECRETS_FILE, USER_SECRETS_FILE
from .session import Session

logger = logging.getLogger(__name__)

KEYRING_SERVICE = "lastfmkit"

KEYS = ("api_key", "api_secret", "session_key", "session_name", "subscriber")
SENSITIVE_KEYS = frozenset({"api_secret", "session_key"})

_ENV_OVERRIDES = {
    "api_key": ["LFM_API_KEY", "LASTFM_API_KEY"],
    "api_secret": ["LFM_API_SECRET", "LASTFM_API_SECRET"],
    "session_key": ["LFM_SESSION_KEY", "LASTFM_SESSION_KEY"],
    "session_name": ["LFM_SESSION_NAME", "LASTFM_USERNAME"],
    "subscriber": ["LFM_SUBSCRIBER"],
}


def _keyring_disabled() -> bool:
    return os.getenv("LFM_DISABLE_KEYRING") == "1"


def _load_secrets() -> dict:
    """Load combined secrets from project-local and user-scoped .secrets.toml."""
    data: dict = {}
    for p in (LOCAL_SECRETS_FILE, USER_SECRETS_FILE):
        path = Path(p)
        if not path.exists():
            continue
        try:
            d = toml.loads(path.read_text(encoding="utf-8")) or {}
        except (OSError, toml.TomlDecodeError) as e:
            logger.warning("credentials: ignoring unreadable %s (%s)", path, e)
            continue
        if isinstance(d, dict):
            data.update(d)
    return data


def _write_secret_file(key: str, value: Optional[str]) -> None:
    data = {}
    if USER_SECRETS_FILE.exists():
        try:
            data = toml.loads(USER_SECRETS_FILE.read_text(encoding="utf-8")) or {}
        except toml.TomlDecodeError:
            data = {}
    if value is None:
        data.pop(key, None)
    else:
        data[key] = value
    USER_SECRETS_FILE.parent.mkdir(parents=True, exist_ok=True)
    USER_SECRETS_FILE.write_text(toml.dumps(data), encoding="utf-8")


def store_credential(key: str, value: str) -> str:
    """Store a credential; returns where it ended up ("keyring" or the file path)."""
    if not _keyring_disabled():
        try:
            keyring.set_password(KEYRING_SERVICE, key, value)
            return "keyring"
        except keyring.errors.KeyringError as e:
            if key in SENSITIVE_KEYS:
                logger.warning("credentials: keyring unavailable for %s (%s); using file", key, e)
    _write_secret_file(key, value)
    return str(USER_SECRETS_FILE)


def get_credential(key: str) -> Optional[str]:
    """Look up a credential: keyring, then environment, then .secrets.toml."""
    if not _keyring_disabled():
        try:
            v = keyring.get_password(KEYRING_SERVICE, key)
            if v:
                return v
        except keyring.errors.KeyringError as e:
            logger.debug("credentials: keyring lookup for %s failed: %s", key, e)

    for env in _ENV_OVERRIDES.get(key, []):
        v = os.getenv(env)
        if v:
            return v

    v = _load_secrets().get(key)
    return str(v) if v else None


def clear_credentials() -> None:
    """Remove every stored credential. Missing entries are not an error."""
    if not _keyring_disabled():
        for key in KEYS:
            try:
                if keyring.get_password(KEYRING_SERVICE, key) is None:
                    continue
                keyring.delete_password(KEYRING_SERVICE, key)
            except keyring.errors.PasswordDeleteError:
                pass
            except keyring.errors.KeyringError as e:
                logger.warning("credentials: keyring error while deleting %s: %s", key, e)
    if USER_SECRETS_FILE.exists():
        for key in KEYS:
            _write_secret_file(key, None)


def store_session(session: Session) -> str:
    where = store_credential("session_key", session.key)
    store_credential("session_name", session.name)
    store_credential("subscriber", str(session.subscriber))
    return where


def load_session() -> Optional[Session]:
    """The stored user session, or None when no session key is available."""
    key = get_credential("session_key")
    if not key:
        return None
    try:
        subscriber = int(get_credential("subscriber") or 0)
    except ValueError:
        subscriber = 0
    return Session(name=get_credential("session_name") or "", key=key, subscriber=subscriber)
