"""
Track commands (`lfm track`).

Besides lookups this group carries the user-scoped writes: love/unlove,
now-playing updates and scrobbling. Scrobbles can come from the command line
(one listen) or from a JSON file holding a list of entries, which is sent in
batches of ten.
"""

import json
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..core.errors import LocalValidationError
from ..services.track import MAX_SCROBBLES, scrobble_params
from ._common import AutocorrectOption, MbidOption, RawOption, console, emit, make_ref, run

app = typer.Typer(no_args_is_help=True, help="Look up tracks, love them and scrobble listens.")


@app.command("info")
def track_info(
    artist: Optional[str] = typer.Argument(None),
    track: Optional[str] = typer.Argument(None),
    mbid: Optional[str] = MbidOption,
    username: Optional[str] = typer.Option(None, "--user"),
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    ref = make_ref(artist, track, mbid)
    emit(
        run(lambda fm: fm.track.get_info(ref, username=username, autocorrect=autocorrect)),
        raw,
    )


@app.command("correction")
def track_correction(
    artist: str = typer.Argument(...), track: str = typer.Argument(...), raw: bool = RawOption
):
    emit(run(lambda fm: fm.track.get_correction(artist, track)), raw)


@app.command("similar")
def track_similar(
    artist: Optional[str] = typer.Argument(None),
    track: Optional[str] = typer.Argument(None),
    mbid: Optional[str] = MbidOption,
    limit: int = typer.Option(10, "--limit"),
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    ref = make_ref(artist, track, mbid)
    emit(run(lambda fm: fm.track.get_similar(ref, limit=limit, autocorrect=autocorrect)), raw)


@app.command("tags")
def track_tags(
    artist: Optional[str] = typer.Argument(None),
    track: Optional[str] = typer.Argument(None),
    user: Optional[str] = typer.Option(None, "--user"),
    mbid: Optional[str] = MbidOption,
    autocorrect: bool = AutocorrectOption,
    raw: bool = RawOption,
):
    ref = make_ref(artist, track, mbid)
    if user:
        emit(run(lambda fm: fm.track.get_tags(ref, user, autocorrect=autocorrect)), raw)
    else:
        emit(run(lambda fm: fm.track.get_top_tags(ref, autocorrect=autocorrect)), raw)


@app.command("search")
def track_search(
    query: str = typer.Argument(..., help="Track title"),
    artist: Optional[str] = typer.Option(None, "--artist", help="Narrow by artist"),
    limit: int = typer.Option(10, "--limit"),
    page: int = typer.Option(1, "--page"),
    raw: bool = RawOption,
):
    emit(run(lambda fm: fm.track.search(query, artist=artist, limit=limit, page=page)), raw)


@app.command("love")
def track_love(artist: str = typer.Argument(...), track: str = typer.Argument(...)):
    run(lambda fm: fm.track.love(fm.session, artist, track))
    console.print(f"[green]❤️ Loved {artist} - {track}[/green]")


@app.command("unlove")
def track_unlove(artist: str = typer.Argument(...), track: str = typer.Argument(...)):
    run(lambda fm: fm.track.unlove(fm.session, artist, track))
    console.print(f"[green]Unloved {artist} - {track}[/green]")


@app.command("add-tags")
def track_add_tags(
    artist: str = typer.Argument(...),
    track: str = typer.Argument(...),
    tags: List[str] = typer.Argument(..., help="Up to 10 tags"),
):
    run(lambda fm: fm.track.add_tags(fm.session, artist, track, tags))
    console.print(f"[green]✅ Tagged {artist} - {track}: {', '.join(tags)}[/green]")


@app.command("remove-tag")
def track_remove_tag(
    artist: str = typer.Argument(...),
    track: str = typer.Argument(...),
    tag: str = typer.Argument(...),
):
    run(lambda fm: fm.track.remove_tag(fm.session, artist, track, tag))
    console.print(f"[green]✅ Removed tag '{tag}' from {artist} - {track}[/green]")


@app.command("now-playing")
def track_now_playing(
    artist: str = typer.Argument(...),
    track: str = typer.Argument(...),
    album: Optional[str] = typer.Option(None, "--album"),
    album_artist: Optional[str] = typer.Option(None, "--album-artist"),
    track_number: Optional[int] = typer.Option(None, "--track-number"),
    duration: Optional[int] = typer.Option(None, "--duration", help="Length in seconds"),
    mbid: Optional[str] = typer.Option(None, "--mbid"),
    raw: bool = RawOption,
):
    emit(
        run(
            lambda fm: fm.track.update_now_playing(
                fm.session,
                artist,
                track,
                album=album,
                track_number=track_number,
                duration=duration,
                mbid=mbid,
                album_artist=album_artist,
            )
        ),
        raw,
    )


def _load_entries(path: Path) -> list[dict]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise typer.BadParameter(f"Cannot read scrobbles from {path}: {e}")
    if not isinstance(data, list) or not all(isinstance(x, dict) for x in data):
        raise typer.BadParameter(f"{path} must contain a JSON list of objects")
    return data


@app.command("scrobble")
def track_scrobble(
    artist: Optional[str] = typer.Argument(None),
    track: Optional[str] = typer.Argument(None),
    timestamp: Optional[int] = typer.Option(
        None, "--timestamp", "-t", help="UNIX time the track started (default: now)"
    ),
    album: Optional[str] = typer.Option(None, "--album"),
    duration: Optional[int] = typer.Option(None, "--duration"),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", help="JSON list of scrobble entries to submit"
    ),
    raw: bool = RawOption,
):
    """Scrobble one listen, or every entry of --file in batches of ten."""
    if file is not None:
        entries = _load_entries(file)
    elif artist and track:
        entry: dict = {
            "artist": artist,
            "track": track,
            "timestamp": timestamp if timestamp is not None else int(time.time()),
        }
        if album:
            entry["album"] = album
        if duration:
            entry["duration"] = duration
        entries = [entry]
    else:
        raise typer.BadParameter("Give ARTIST and TRACK, or --file.")

    batches = [entries[i : i + MAX_SCROBBLES] for i in range(0, len(entries), MAX_SCROBBLES)]
    try:
        for n, batch in enumerate(batches):
            scrobble_params(batch, first_index=n * MAX_SCROBBLES)
    except LocalValidationError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    async def _submit(fm):
        results = []
        for batch in batches:
            results.append(await fm.track.scrobble(fm.session, batch))
        return results

    results = run(_submit)
    if raw:
        emit(results, raw=True)
        return
    console.print(f"[green]✅ Scrobbled {len(entries)} track(s) in {len(batches)} batch(es)[/green]")
