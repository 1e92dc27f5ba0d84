"""
lastfmkit CLI - Main entry point using Typer.

This module configures the main Typer application, registers all command groups,
and defines global options like --version and --verbose.
"""

import typer
from rich.console import Console
from rich.traceback import install

from .commands import album, artist, config, tag, track
from .core.logging_util import setup_logging

install(show_locals=False)

console = Console()

app = typer.Typer(
    name="lfm",
    help="🎧 lastfmkit - query Last.fm and scrobble from the command line.",
    epilog="Use `lfm [COMMAND] --help` for more info on a specific command.",
    no_args_is_help=True,
    invoke_without_command=True,
    pretty_exceptions_enable=False,
)

app.add_typer(config.app, name="config", help="🔐 Manage API credentials, sessions and settings.")
app.add_typer(album.app, name="album", help="💿 Look up, search and tag albums.")
app.add_typer(artist.app, name="artist", help="🎤 Look up, search and tag artists.")
app.add_typer(track.app, name="track", help="🎵 Look up tracks, love them and scrobble.")
app.add_typer(tag.app, name="tag", help="🏷️ Explore tags and their charts.")


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the application version and exit.",
        is_eager=True,
    ),
    verbose: bool = typer.Option(None, "--verbose", help="Enable DEBUG-level logging."),
    quiet: bool = typer.Option(None, "--quiet", help="Reduce logging to warnings and errors."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines."),
):
    """
    lastfmkit CLI - a client for the Last.fm web service.
    """
    if version:
        from . import __version__

        console.print(f"lastfmkit v{__version__}")
        raise typer.Exit()

    setup_logging(json_logs=json_logs, verbose=bool(verbose), quiet=bool(quiet))
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
