"""Column layout for parsed songs.

Songs are shown as newspaper-style columns: lines flow down the first column
until it is full, then continue at the top of the next. The column width
budget is fixed up front (the usable viewport width, or a narrower configured
column width), so wrapping is a single pass:

  1. any line wider than the budget is hard split at the budget, however
     often it takes, without looking for word boundaries;
  2. the resulting lines are packed greedily by height.

Each column is later drawn only as wide as its widest line.
"""

import logging
from collections.abc import Iterable

from .exceptions import LayoutError
from .models import Column, Song, SongLine

logger = logging.getLogger(__name__)

# Cells reserved on each axis for the border around the song.
MARGIN = 2

# A column must be able to hold a chord row above a lyric row.
_MIN_HEIGHT = 2


def column_budget(width: int, column_width: int | None = None) -> int:
    """Width available to each column inside a viewport *width* cells wide."""
    budget = width - MARGIN
    if column_width is not None:
        budget = min(budget, column_width)
    return budget


def split_to_width(line: SongLine, budget: int) -> list[SongLine]:
    """Cut *line* into pieces no wider than *budget*, in display order."""
    pieces: list[SongLine] = []
    while line.width() > budget:
        head, line = line.split_at(budget)
        pieces.append(head)
    pieces.append(line)
    return pieces


def wrap_lines(
    lines: Iterable[SongLine],
    width: int,
    height: int,
    column_width: int | None = None,
) -> list[Column]:
    """Pack *lines* into columns that fit a *width* x *height* viewport.

    Lines keep their order. A line is only ever cut when it is wider than the
    column budget; columns break between lines.

    Raises LayoutError if the viewport cannot hold a single two-row line one
    cell wide.
    """
    width_budget = column_budget(width, column_width)
    height_budget = height - MARGIN
    if width_budget < 1 or height_budget < _MIN_HEIGHT:
        raise LayoutError(
            f"Viewport {width}x{height} too small for columns "
            f"(usable {width_budget}x{height_budget})"
        )

    columns: list[Column] = []
    current = Column()
    used = 0
    for line in lines:
        for piece in split_to_width(line, width_budget):
            piece_height = piece.height()
            if current.lines and used + piece_height > height_budget:
                columns.append(current)
                current = Column()
                used = 0
            current.lines.append(piece)
            used += piece_height
    if current.lines:
        columns.append(current)

    logger.debug(
        "Wrapped into %d columns (budget %dx%d)", len(columns), width_budget, height_budget
    )
    return columns


def wrap_song(song: Song, width: int, height: int, column_width: int | None = None) -> list[Column]:
    """Lay out *song* for a viewport. The song itself is left untouched."""
    return wrap_lines(song.lines, width, height, column_width)
