import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from .config import ENV_VAR, Config
from .exceptions import ConfigError, LayoutError
from .parser import get_name, parse_playlist, parse_song
from .pitch import PitchClass
from .render import render_song

_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(exc: Exception | str) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        _fail(f"{path} is not UTF-8 text ({exc.reason} at byte {exc.start})")


def _parse_key(ctx, param, value: str | None) -> PitchClass | None:
    if value is None:
        return None
    pitch = PitchClass.parse(value)
    if pitch is None:
        raise click.BadParameter(f"{value!r} is not a key (try C, F# or Bb)")
    return pitch


@click.group()
@click.option("--debug", is_flag=True, default=False,
              help="Log parsing and layout details to stderr.")
def main(debug: bool) -> None:
    """Show ChordPro song sheets in the terminal."""
    _setup_logging(debug)


@main.command()
@click.argument("path", type=_FILE)
@click.option("-k", "--key", "target", default=None, callback=_parse_key, metavar="KEY",
              help="Transpose to KEY (needs a {key: ...} directive in the song).")
@click.option("-w", "--width", type=click.IntRange(min=1), default=None,
              help="Viewport width (default: terminal width).")
@click.option("--height", type=click.IntRange(min=1), default=None,
              help="Viewport height (default: terminal height).")
@click.option("--column-width", type=click.IntRange(min=1), default=None,
              help="Maximum width of each column.")
@click.option("-c", "--config", "config_path", type=_FILE, default=None, metavar="PATH",
              help=f"Config file (default: ${ENV_VAR}).")
def show(path: Path, target: PitchClass | None, width: int | None, height: int | None,
         column_width: int | None, config_path: Path | None) -> None:
    """Render the song at PATH in columns."""
    try:
        config = Config.discover(config_path)
    except ConfigError as exc:
        _fail(exc)

    song = parse_song(_read(path), target)
    try:
        render_song(
            song,
            Console(),
            width=width,
            height=height,
            theme=config.theme,
            column_width=config.effective_column_width(column_width),
        )
    except LayoutError as exc:
        _fail(exc)


@main.command()
@click.argument("paths", nargs=-1, required=True, type=_FILE)
def name(paths: tuple[Path, ...]) -> None:
    """Print the display name of each song."""
    for path in paths:
        click.echo(get_name(_read(path)))


@main.command()
@click.argument("path", type=_FILE)
def playlist(path: Path) -> None:
    """Print a playlist's title and the names of its songs.

    Song paths are resolved relative to the playlist file.
    """
    parsed = parse_playlist(_read(path))
    click.echo(parsed.title)
    for entry in parsed.songs:
        song_path = path.parent / entry
        if song_path.is_file():
            click.echo(f"  {get_name(_read(song_path))}")
        else:
            click.echo(f"  {entry} (missing)")


@main.command("default-config")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def default_config(path: Path) -> None:
    """Write the default configuration to PATH."""
    Config.write_default(path)
    click.echo(f"Default config has been written to {path}")
