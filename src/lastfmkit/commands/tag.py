"""Tag commands (`lfm tag`). All public lookups."""

from typing import Optional

import typer

from ._common import RawOption, emit, run

app = typer.Typer(no_args_is_help=True, help="Explore tags and their charts.")


@app.command("info")
def tag_info(
    tag: str = typer.Argument(...),
    lang: Optional[str] = typer.Option(None, "--lang"),
    raw: bool = RawOption,
):
    emit(run(lambda fm: fm.tag.get_info(tag, lang=lang)), raw)


@app.command("similar")
def tag_similar(tag: str = typer.Argument(...), raw: bool = RawOption):
    emit(run(lambda fm: fm.tag.get_similar(tag)), raw)


@app.command("top")
def tag_top(
    tag: Optional[str] = typer.Argument(None, help="Omit to list the most used tags"),
    kind: str = typer.Option("tracks", "--kind", "-k", help="tracks|albums|artists"),
    limit: int = typer.Option(10, "--limit"),
    page: int = typer.Option(1, "--page"),
    raw: bool = RawOption,
):
    """Top tracks/albums/artists for a tag, or the global top tags."""
    if tag is None:
        emit(run(lambda fm: fm.tag.get_top_tags()), raw)
        return
    methods = {
        "tracks": "get_top_tracks",
        "albums": "get_top_albums",
        "artists": "get_top_artists",
    }
    if kind not in methods:
        raise typer.BadParameter("--kind must be one of: tracks, albums, artists")
    emit(run(lambda fm: getattr(fm.tag, methods[kind])(tag, limit=limit, page=page)), raw)


@app.command("charts")
def tag_charts(tag: str = typer.Argument(...), raw: bool = RawOption):
    """List available weekly chart ranges for a tag."""
    emit(run(lambda fm: fm.tag.get_weekly_chart_list(tag)), raw)
