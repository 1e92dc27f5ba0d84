"""Artist commands (`lfm artist`)."""

from typing import List, Optional

import typer

from ._common import AutocorrectOption, MbidOption, RawOption, console, emit, make_ref, run

app = typer.Typer(no_args_is_help=True, help="Look up, search and tag artists.")


@app.command("info")
def artist_info(
    artist: Optional[str] = typer.Argument(None, help="Artist name"),
    mbid: Optional[str] = MbidOption,
    username: Optional[str] = typer.Option(None, "--user"),
    lang: Optional[str] = typer.Option(None, "--lang"),
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    ref = make_ref(artist, None, mbid)
    emit(
        run(
            lambda fm: fm.artist.get_info(
                ref, autocorrect=autocorrect, username=username, lang=lang
            )
        ),
        raw,
    )


@app.command("correction")
def artist_correction(artist: str = typer.Argument(...), raw: bool = RawOption):
    """Show the canonical spelling of an artist name."""
    emit(run(lambda fm: fm.artist.get_correction(artist)), raw)


@app.command("similar")
def artist_similar(
    artist: Optional[str] = typer.Argument(None),
    mbid: Optional[str] = MbidOption,
    limit: int = typer.Option(20, "--limit"),
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    ref = make_ref(artist, None, mbid)
    emit(run(lambda fm: fm.artist.get_similar(ref, limit=limit, autocorrect=autocorrect)), raw)


@app.command("top")
def artist_top(
    artist: Optional[str] = typer.Argument(None),
    kind: str = typer.Option("tracks", "--kind", "-k", help="tracks|albums|tags"),
    mbid: Optional[str] = MbidOption,
    limit: int = typer.Option(10, "--limit"),
    page: int = typer.Option(1, "--page"),
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    """Show an artist's top tracks, albums or tags."""
    ref = make_ref(artist, None, mbid)
    if kind == "tracks":
        call = lambda fm: fm.artist.get_top_tracks(  # noqa: E731
            ref, page=page, limit=limit, autocorrect=autocorrect
        )
    elif kind == "albums":
        call = lambda fm: fm.artist.get_top_albums(  # noqa: E731
            ref, page=page, limit=limit, autocorrect=autocorrect
        )
    elif kind == "tags":
        call = lambda fm: fm.artist.get_top_tags(ref, autocorrect=autocorrect)  # noqa: E731
    else:
        raise typer.BadParameter("--kind must be one of: tracks, albums, tags")
    emit(run(call), raw)


@app.command("tags")
def artist_tags(
    artist: Optional[str] = typer.Argument(None),
    user: str = typer.Option(..., "--user", help="Tags applied by this user"),
    mbid: Optional[str] = MbidOption,
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    ref = make_ref(artist, None, mbid)
    emit(run(lambda fm: fm.artist.get_tags(ref, user, autocorrect=autocorrect)), raw)


@app.command("search")
def artist_search(
    query: str = typer.Argument(...),
    limit: int = typer.Option(10, "--limit"),
    page: int = typer.Option(1, "--page"),
    raw: bool = RawOption,
):
    emit(run(lambda fm: fm.artist.search(query, limit=limit, page=page)), raw)


@app.command("add-tags")
def artist_add_tags(
    artist: str = typer.Argument(...),
    tags: List[str] = typer.Argument(..., help="Up to 10 tags"),
):
    run(lambda fm: fm.artist.add_tags(fm.session, artist, tags))
    console.print(f"[green]✅ Tagged {artist}: {', '.join(tags)}[/green]")


@app.command("remove-tag")
def artist_remove_tag(artist: str = typer.Argument(...), tag: str = typer.Argument(...)):
    run(lambda fm: fm.artist.remove_tag(fm.session, artist, tag))
    console.print(f"[green]✅ Removed tag '{tag}' from {artist}[/green]")
