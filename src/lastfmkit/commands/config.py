"""
Configuration commands (`lfm config`).

Handles user-facing setup:
- API key/secret storage
- Session creation (mobile username/password flow or web approval flow)
- Client tuning (timeout, rate limit, retries)
- Viewing and clearing stored settings
"""

import json
import webbrowser
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from ..core.config import USER_SETTINGS_FILE, get_settings, save_settings
from ..core.credentials import (
    clear_credentials,
    get_credential,
    load_session,
    store_credential,
    store_session,
)
from ..services.auth import authorize_url
from ._common import run

console = Console()
app = typer.Typer(
    no_args_is_help=True,
    help="Manage API credentials, sessions and client settings.",
)


def _mask(value: Optional[str]) -> str:
    if not value:
        return "not set"
    if len(value) <= 8:
        return "***"
    return f"{value[:4]}…{value[-2:]}"


@app.command("set-key")
def set_key(
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Application API key"),
    api_secret: Optional[str] = typer.Option(None, "--api-secret", help="Shared API secret"),
):
    """
    Store the application's API key and shared secret.

    The key is written to settings; the secret goes to the system keyring
    (or ~/.config/lastfmkit/.secrets.toml when no keyring is available).
    """
    key = api_key or Prompt.ask("Enter your Last.fm API key")
    secret = api_secret or Prompt.ask("Enter your Last.fm API secret", password=True)

    settings = get_settings()
    settings.api_key = key
    save_settings(settings)
    where = store_credential("api_secret", secret)

    console.print("[green]✅ API credentials saved.[/green]")
    console.print(f"  api_key: [blue]settings ({USER_SETTINGS_FILE})[/blue]")
    console.print(f"  api_secret: [blue]{where}[/blue]")


@app.command("login")
def login(
    username: Optional[str] = typer.Option(None, "-u", "--username"),
    password: Optional[str] = typer.Option(None, "-p", "--password"),
    web: bool = typer.Option(
        False, "--web", help="Approve access in a browser instead of sending a password"
    ),
):
    """Create a user session and store its key for signed calls."""
    console.print("🔐 [bold]Last.fm login[/bold]")

    if web:

        async def _token(fm):
            return fm.dispatcher.api_key, await fm.auth.get_token()

        api_key, token = run(_token)
        url = authorize_url(api_key, token)
        console.print(f"Open this page and allow access:\n  [blue]{url}[/blue]")
        try:
            webbrowser.open(url)
        except webbrowser.Error:
            pass
        if not Confirm.ask("Have you approved access?", default=True):
            raise typer.Exit(1)
        session = run(lambda fm: fm.auth.get_session(token))
    else:
        user = username or Prompt.ask("Last.fm username")
        pwd = password or Prompt.ask("Last.fm password", password=True)
        session = run(lambda fm: fm.auth.get_mobile_session(user, pwd))

    where = store_session(session)
    console.print(f"[green]✅ Logged in as {session.name}.[/green] Session key stored in {where}.")


@app.command("set")
def config_set(
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout (s)"),
    rate_limit: Optional[int] = typer.Option(
        None, "--rate-limit", help="Requests per second, 0 to disable"
    ),
    retries: Optional[int] = typer.Option(
        None, "--retries", help="Retries on connection errors/timeouts"
    ),
    base_url: Optional[str] = typer.Option(None, "--base-url"),
):
    """Adjust client settings."""
    settings = get_settings()
    if timeout is not None:
        settings.timeout = timeout
    if rate_limit is not None:
        settings.rate_limit = rate_limit
    if retries is not None:
        settings.retries = retries
    if base_url is not None:
        settings.base_url = base_url
    save_settings(settings)
    console.print("[green]✅ Settings saved.[/green]")


@app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Display the current configuration and stored credential status.

    Secrets are never printed, only whether they are present.
    """
    settings = get_settings()
    session = load_session()
    data = {
        "api": {
            "base_url": settings.base_url,
            "api_key": _mask(settings.api_key or get_credential("api_key")),
            "api_secret": "set" if (settings.api_secret or get_credential("api_secret")) else "not set",
        },
        "session": {
            "name": session.name if session else None,
            "subscriber": bool(session.subscriber) if session else None,
            "key": "set" if session else "not set",
        },
        "client": {
            "timeout": settings.timeout,
            "rate_limit": settings.rate_limit,
            "retries": settings.retries,
        },
    }
    if json_output:
        typer.echo(json.dumps(data, indent=2))
        return

    console.print("[bold]Current Configuration:[/bold]")
    for section, values in data.items():
        console.print(f"[bold]{section}[/bold]")
        for k, v in values.items():
            console.print(f"  {k}: [blue]{v}[/blue]")


@app.command("clear")
def config_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Forget the stored API secret and session."""
    if not yes and not Confirm.ask("Remove stored Last.fm credentials?", default=False):
        raise typer.Exit()
    clear_credentials()
    console.print("[green]✅ Stored credentials cleared.[/green]")
