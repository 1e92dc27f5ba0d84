"""
Album commands (`lfm album`).

Lookups print the service's JSON payload; tag edits need a stored session.
"""

from typing import List, Optional

import typer

from ._common import AutocorrectOption, MbidOption, RawOption, console, emit, make_ref, run

app = typer.Typer(no_args_is_help=True, help="Look up, search and tag albums.")


@app.command("info")
def album_info(
    artist: Optional[str] = typer.Argument(None, help="Album artist"),
    album: Optional[str] = typer.Argument(None, help="Album title"),
    mbid: Optional[str] = MbidOption,
    username: Optional[str] = typer.Option(None, "--user", help="Include this user's playcount"),
    lang: Optional[str] = typer.Option(None, "--lang", help="ISO 639 language for the wiki text"),
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    """Show album metadata and tracklist."""
    ref = make_ref(artist, album, mbid)
    emit(
        run(
            lambda fm: fm.album.get_info(
                ref, autocorrect=autocorrect, username=username, lang=lang
            )
        ),
        raw,
    )


@app.command("search")
def album_search(
    query: str = typer.Argument(..., help="Album title"),
    limit: int = typer.Option(10, "--limit", help="Max results"),
    page: int = typer.Option(1, "--page"),
    raw: bool = RawOption,
):
    emit(run(lambda fm: fm.album.search(query, limit=limit, page=page)), raw)


@app.command("tags")
def album_tags(
    artist: Optional[str] = typer.Argument(None),
    album: Optional[str] = typer.Argument(None),
    user: Optional[str] = typer.Option(
        None, "--user", help="Tags applied by this user (default: top tags)"
    ),
    mbid: Optional[str] = MbidOption,
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    """Show top tags, or one user's tags with --user."""
    ref = make_ref(artist, album, mbid)
    if user:
        emit(run(lambda fm: fm.album.get_tags(ref, user, autocorrect=autocorrect)), raw)
    else:
        emit(run(lambda fm: fm.album.get_top_tags(ref, autocorrect=autocorrect)), raw)


@app.command("add-tags")
def album_add_tags(
    artist: str = typer.Argument(...),
    album: str = typer.Argument(...),
    tags: List[str] = typer.Argument(..., help="Up to 10 tags"),
):
    run(lambda fm: fm.album.add_tags(fm.session, artist, album, tags))
    console.print(f"[green]✅ Tagged {artist} - {album}: {', '.join(tags)}[/green]")


@app.command("remove-tag")
def album_remove_tag(
    artist: str = typer.Argument(...),
    album: str = typer.Argument(...),
    tag: str = typer.Argument(...),
):
    run(lambda fm: fm.album.remove_tag(fm.session, artist, album, tag))
    console.print(f"[green]✅ Removed tag '{tag}' from {artist} - {album}[/green]")
