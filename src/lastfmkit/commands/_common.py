"""Helpers shared by the command groups."""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from ..client import LastFm
from ..core.errors import AuthenticationError, LastFmError, NotFoundError
from ..core.identifiers import ByMbid, ByName, Ref

T = TypeVar("T")

console = Console()
logger = logging.getLogger(__name__)


def run(call: Callable[[LastFm], Awaitable[T]]) -> T:
    """Build a client from settings, run one call, map errors to exit codes.

    Exit code 1 for API/validation failures, 2 for "not found", 3 for a
    missing session.
    """

    async def _main() -> T:
        async with LastFm.from_settings() as fm:
            return await call(fm)

    try:
        return asyncio.run(_main())
    except AuthenticationError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        console.print("Run `lfm config login` to create a session.")
        raise typer.Exit(3)
    except NotFoundError as e:
        console.print(f"[yellow]Not found:[/yellow] {escape(str(e))}")
        raise typer.Exit(2)
    except LastFmError as e:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)


def emit(payload: Optional[Any], raw: bool = False) -> None:
    """Print a response payload as JSON (styled unless --raw)."""
    if payload is None:
        return
    if raw:
        typer.echo(json.dumps(payload, ensure_ascii=False))
    else:
        console.print_json(data=payload)


def make_ref(artist: Optional[str], title: Optional[str], mbid: Optional[str]) -> Ref:
    if mbid:
        return ByMbid(mbid)
    if not artist:
        raise typer.BadParameter("Provide an artist name or --mbid.")
    return ByName(artist, title)


RawOption = typer.Option(False, "--raw", help="Print compact JSON without styling")
MbidOption = typer.Option(None, "--mbid", help="Look up by MusicBrainz id instead of name")
AutocorrectOption = typer.Option(
    False, "--autocorrect/--no-autocorrect", help="Let the service correct misspelled names"
)
