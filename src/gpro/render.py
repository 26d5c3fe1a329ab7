"""Terminal rendering of laid-out songs with rich.

Usage::

    from rich.console import Console
    from gpro.render import render_song

    render_song(song, Console(), theme=config.theme)
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import Theme
from .layout import wrap_song
from .models import Column, Song, StyledRun


def run_to_text(run: StyledRun, theme: Theme) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    for span in run.spans:
        text.append(span.text, style=theme.style_for(span.style) or None)
    return text


def column_to_text(column: Column, theme: Theme) -> Text:
    """One column as a multi-line Text, chord rows above their lyric rows."""
    rows = [run_to_text(run, theme) for line in column.lines for run in line.runs()]
    return Text("\n", no_wrap=True, overflow="crop").join(rows)


def song_panel(
    song: Song,
    columns: list[Column],
    theme: Theme,
    width: int | None = None,
    height: int | None = None,
) -> Panel:
    """Put *columns* side by side in a bordered panel titled with the song."""
    if columns:
        body = Table.grid(padding=(0, 2))
        for column in columns:
            body.add_column(width=column.width() or None, no_wrap=True)
        body.add_row(*(column_to_text(column, theme) for column in columns))
    else:
        body = Text("")

    title = Text(song.title, style=theme.title or "") if song.title else None
    return Panel(
        body,
        title=title,
        title_align="left",
        padding=0,
        width=width,
        height=height,
    )


def render_song(
    song: Song,
    console: Console | None = None,
    width: int | None = None,
    height: int | None = None,
    theme: Theme | None = None,
    column_width: int | None = None,
) -> list[Column]:
    """Lay out *song* for the console size (or *width* x *height*) and print it.

    Columns that don't fit beside each other are cut off at the right edge.
    Returns the columns that were laid out.
    """
    console = console or Console()
    theme = theme or Theme()
    width = width or console.size.width
    height = height or console.size.height

    columns = wrap_song(song, width, height, column_width)
    console.print(song_panel(song, columns, theme, width=width, height=height))
    return columns
