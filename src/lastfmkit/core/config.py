"""
Configuration management using Dynaconf and Pydantic.

Dynaconf loads settings from files (`settings.toml`, `.secrets.toml`, both
project-local and under `~/.config/lastfmkit/`) and `LFM_*` environment
variables. Pydantic validates the merged data into a typed `LastFmSettings`.

`get_settings` returns a process-wide instance; the dispatcher itself never
reads it, it receives explicit values from `lastfmkit.client.LastFm.from_settings`.
"""

import json
import os
from pathlib import Path
from typing import Optional

import toml
from dynaconf import Dynaconf
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console

from .dispatcher import API_URL, DEFAULT_TIMEOUT

console = Console()

USER_CONFIG_DIR = Path.home() / ".config" / "lastfmkit"
USER_SETTINGS_FILE = USER_CONFIG_DIR / "settings.toml"
USER_SECRETS_FILE = USER_CONFIG_DIR / ".secrets.toml"

LOCAL_SETTINGS_FILE = Path("settings.toml")
LOCAL_SECRETS_FILE = Path(".secrets.toml")


def _make_loader() -> Dynaconf:
    return Dynaconf(
        envvar_prefix="LFM",
        # Later files override earlier ones
        settings_files=[
            "settings.toml",
            ".secrets.toml",
            str(USER_SETTINGS_FILE),
            str(USER_SECRETS_FILE),
        ],
        load_dotenv=True,
    )


settings_loader = _make_loader()

# Fields written by save_settings; secrets go through lastfmkit.core.credentials
PERSISTED_FIELDS = ("api_key", "base_url", "timeout", "rate_limit", "retries")


class LastFmSettings(BaseModel):
    """Validated client settings."""

    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    base_url: str = API_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    # Requests per second; 0 disables client-side limiting
    rate_limit: int = Field(default=5, ge=0)
    # Transport-level retries on connection errors/timeouts
    retries: int = Field(default=0, ge=0, le=10)

    model_config = ConfigDict(validate_assignment=True)


_settings_instance: Optional[LastFmSettings] = None


def _known(data: dict) -> dict:
    # Dynaconf upper-cases keys and adds its own; keep only model fields
    fields = LastFmSettings.model_fields
    return {k.lower(): v for k, v in data.items() if k.lower() in fields}


def get_settings() -> LastFmSettings:
    """Get the application settings as a singleton Pydantic model.

    Honors LFM_SETTINGS_PATH when set: a JSON file path used for persistence in tests.
    """
    global _settings_instance
    if _settings_instance is None:
        config_dict: dict = {}

        # 1) Dynaconf loader (project + user scope + LFM_* env)
        config_dict.update(_known(settings_loader.as_dict() or {}))

        # 2) Explicit JSON override for tests
        env_settings_path = os.getenv("LFM_SETTINGS_PATH")
        if env_settings_path:
            p = Path(env_settings_path)
            if p.exists():
                try:
                    config_dict.update(_known(json.loads(p.read_text(encoding="utf-8")) or {}))
                except ValueError:
                    console.print(f"[yellow]Ignoring malformed settings file {p}[/yellow]")

        # 3) Explicit environment overrides win over files
        for key in ("api_key", "api_secret", "base_url"):
            env_val = os.getenv(f"LFM_{key.upper()}")
            if env_val:
                config_dict[key] = env_val

        try:
            _settings_instance = LastFmSettings(**config_dict)
        except ValidationError as e:
            console.print(f"[red]Configuration error:[/red]\n{e}")
            raise

    return _settings_instance


def save_settings(new_settings: LastFmSettings) -> None:
    """Persist non-secret settings.

    If LFM_SETTINGS_PATH is set, write JSON there only (used by tests);
    otherwise write the user-level settings.toml.
    """
    global _settings_instance
    data = {
        k: getattr(new_settings, k)
        for k in PERSISTED_FIELDS
        if getattr(new_settings, k) is not None
    }
    env_settings_path = os.getenv("LFM_SETTINGS_PATH")
    if env_settings_path:
        p = Path(env_settings_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data), encoding="utf-8")
    else:
        USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        USER_SETTINGS_FILE.write_text(toml.dumps(data), encoding="utf-8")

    _settings_instance = new_settings


def create_default_settings() -> LastFmSettings:
    return LastFmSettings()


def reset_settings() -> None:
    """Reset in-memory settings (do not delete on-disk settings)."""
    global _settings_instance, settings_loader
    _settings_instance = None
    settings_loader = _make_loader()
