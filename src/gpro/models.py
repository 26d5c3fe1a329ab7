"""Data model shared by the parser, the layout engine and the renderer.

A parsed :class:`Song` is a sequence of :class:`SongLine` values. Each line is
one of four variants, depending on which of its two styled runs are present::

    Both(chords, text)   two rows: chords above lyrics
    ChordsOnly(chords)   one row: an instrumental passage
    TextOnly(text)       one row: lyrics, comments, titles, blank spacers
    Empty()              zero rows

Everything here is immutable; the layout engine builds new lines rather than
editing the ones held by a song.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import LayoutError


class Style(Enum):
    PLAIN = "plain"
    CHORD = "chord"
    COMMENT = "comment"
    TITLE = "title"


@dataclass(frozen=True)
class Span:
    """A piece of text rendered in a single style."""

    text: str
    style: Style = Style.PLAIN

    def width(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class StyledRun:
    """An ordered sequence of spans forming one display row."""

    spans: tuple[Span, ...] = ()

    @classmethod
    def of(cls, text: str, style: Style = Style.PLAIN) -> "StyledRun":
        return cls((Span(text, style),))

    def __add__(self, other: "StyledRun") -> "StyledRun":
        return StyledRun(self.spans + other.spans)

    def __bool__(self) -> bool:
        return any(span.text for span in self.spans)

    @property
    def plain(self) -> str:
        """The run's text with styling dropped."""
        return "".join(span.text for span in self.spans)

    def width(self) -> int:
        return sum(span.width() for span in self.spans)

    def split_at(self, index: int) -> tuple["StyledRun", "StyledRun"]:
        """Split at a character index, keeping each character's style.

        A span straddling *index* becomes two spans with the same style. An
        index past the end leaves the right-hand run empty.
        """
        left: list[Span] = []
        right: list[Span] = []
        offset = 0
        for span in self.spans:
            end = offset + span.width()
            if end <= index:
                left.append(span)
            elif offset >= index:
                right.append(span)
            else:
                cut = index - offset
                left.append(Span(span.text[:cut], span.style))
                right.append(Span(span.text[cut:], span.style))
            offset = end
        return StyledRun(tuple(left)), StyledRun(tuple(right))


# ---------------------------------------------------------------------------
# Song lines
# ---------------------------------------------------------------------------


class SongLine(ABC):
    """A chord/lyric pair. See the module docstring for the variants."""

    chords: "StyledRun | None"
    text: "StyledRun | None"

    @abstractmethod
    def height(self) -> int:
        """Number of display rows this line occupies."""

    def runs(self) -> list[StyledRun]:
        """Present runs, top row first."""
        return [run for run in (self.chords, self.text) if run is not None]

    def width(self) -> int:
        return max((run.width() for run in self.runs()), default=0)

    def split_at(self, index: int) -> tuple["SongLine", "SongLine"]:
        """Split both runs at the same character index.

        Raises LayoutError if the line has no content or *index* does not
        fall strictly inside the line.
        """
        if isinstance(self, Empty):
            raise LayoutError("No content to split on")
        width = self.width()
        if index >= width:
            raise LayoutError(f"Split index ({index}) larger than width ({width})")
        if index < 1:
            raise LayoutError(f"Split index ({index}) must be positive")

        chords_left = chords_right = text_left = text_right = None
        if self.chords is not None:
            chords_left, chords_right = self.chords.split_at(index)
        if self.text is not None:
            text_left, text_right = self.text.split_at(index)
        return line_from_runs(chords_left, text_left), line_from_runs(chords_right, text_right)


@dataclass(frozen=True)
class Both(SongLine):
    chords: StyledRun
    text: StyledRun

    def height(self) -> int:
        return 2


@dataclass(frozen=True)
class ChordsOnly(SongLine):
    chords: StyledRun
    text: None = field(default=None, init=False)

    def height(self) -> int:
        return 1


@dataclass(frozen=True)
class TextOnly(SongLine):
    text: StyledRun
    chords: None = field(default=None, init=False)

    def height(self) -> int:
        return 1


@dataclass(frozen=True)
class Empty(SongLine):
    chords: None = field(default=None, init=False)
    text: None = field(default=None, init=False)

    def height(self) -> int:
        return 0


def line_from_runs(chords: StyledRun | None, text: StyledRun | None) -> SongLine:
    """Pick the variant matching which runs carry any text."""
    if chords and text:
        return Both(chords, text)
    if chords:
        return ChordsOnly(chords)
    if text:
        return TextOnly(text)
    return Empty()


# ---------------------------------------------------------------------------
# Songs, columns and playlists
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Song:
    """A parsed song. Transposition is already applied to every chord."""

    title: str = ""
    subtitle: str = ""
    raw_source: str = ""
    lines: tuple[SongLine, ...] = ()


@dataclass
class Column:
    """A contiguous slice of song lines that fits the viewport height."""

    lines: list[SongLine] = field(default_factory=list)

    def height(self) -> int:
        return sum(line.height() for line in self.lines)

    def width(self) -> int:
        return max((line.width() for line in self.lines), default=0)


@dataclass
class Playlist:
    """A named list of song file paths, one per line after the title."""

    title: str
    songs: list[str] = field(default_factory=list)
    source: str = ""
