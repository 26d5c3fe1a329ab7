"""ChordPro-style song parser.

Turns song source text into a :class:`~gpro.models.Song`: directive tags set
metadata and section state, and chords written inline in brackets are lifted
onto their own row, aligned above the syllable they precede::

    [C]Hello [G]world      ->      C     G
                                   Hello world

Transposition is applied while parsing. A ``{key: ...}`` directive shifts
the chords towards the requested target key, and a capo directive shifts them
down by the capo position.

Usage::

    from gpro.parser import parse_song
    from gpro.pitch import PitchClass

    song = parse_song(Path("amazing.cho").read_text(), PitchClass.parse("D"))
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from .models import Both, ChordsOnly, Playlist, Song, SongLine, Span, Style, StyledRun, TextOnly
from .pitch import ROOT_NOTE_RE, PitchClass, interval, transpose_chord
from .tokenizer import (
    CAPO,
    CHORDS_RE,
    COMMENT,
    END_OF_CHORUS,
    END_OF_COMMENT_BLOCK,
    KEY,
    START_OF_CHORUS,
    START_OF_COMMENT_BLOCK,
    SUBTITLE,
    TAG,
    TAGS_RE,
    TITLE,
    normalize_newlines,
    parse_chord_token,
    parse_directive,
    source_lines,
    split_keep,
)

logger = logging.getLogger(__name__)

CHORUS_MARKER = "| "

# Characters after which alignment padding inside the lyrics is a space
# rather than a hyphen.
_WORD_BREAKS = ",.:;"


class Section(Enum):
    NORMAL = auto()
    IN_CHORUS = auto()
    IN_COMMENT_BLOCK = auto()


@dataclass
class _ParseState:
    title: str = ""
    subtitle: str = ""
    section: Section = Section.NORMAL
    transposition: int = 0
    lines: list[SongLine] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Chord alignment
# ---------------------------------------------------------------------------


def _filler(lyrics: str) -> str:
    last = lyrics[-1:] or " "
    if last.isspace() or last in _WORD_BREAKS:
        return " "
    return "-"


def align_chords(
    segment: str,
    transposition: int = 0,
    chords_width: int = 0,
    lyrics_width: int = 0,
) -> tuple[str, str]:
    """Lift the bracketed chords out of *segment* onto a row of their own.

    Args:
        segment:       Literal song text, possibly containing ``[chord]`` tokens.
        transposition: Semitones to move every chord by.
        chords_width:  Width of the chord row already emitted on this line.
        lyrics_width:  Width of the lyric row already emitted on this line.

    Returns:
        ``(chords, lyrics)`` strings. Each chord starts at the same column as
        the lyric text that followed it in *segment*. Where chords crowd each
        other the lyrics are padded, with hyphens inside a word and spaces
        between words.
    """
    chords = ""
    lyrics = ""
    for part in split_keep(CHORDS_RE, segment):
        chord = parse_chord_token(part)
        if chord is None:
            lyrics += part
            continue

        difference = (lyrics_width + len(lyrics)) - (chords_width + len(chords))
        if difference > 0:
            chords += " " * difference
        elif difference < 0:
            lyrics += _filler(lyrics) * -difference

        if chord:
            chords += transpose_chord(chord, transposition) + " "
    return chords, lyrics


# ---------------------------------------------------------------------------
# Song builder
# ---------------------------------------------------------------------------


class SongBuilder:
    """Build :class:`~gpro.models.Song` values from source text.

    A builder holds only the transposition target, so one instance can be
    reused for any number of songs.
    """

    def __init__(self, transpose_to: PitchClass | None = None):
        self.transpose_to = transpose_to

    def build(self, source: str) -> Song:
        source = normalize_newlines(source)
        state = _ParseState()

        for line in source_lines(source):
            song_line = self._parse_line(line, state)
            if song_line is not None:
                state.lines.append(song_line)

        logger.debug(
            "Parsed %r: %d lines, transposition %+d",
            state.title,
            len(state.lines),
            state.transposition,
        )
        return Song(
            title=state.title,
            subtitle=state.subtitle,
            raw_source=source,
            lines=tuple(state.lines),
        )

    def _parse_line(self, line: str, state: _ParseState) -> SongLine | None:
        """Parse one physical line. None means the line produced no output."""
        chords: list[Span] = []
        text: list[Span] = []

        for token in split_keep(TAGS_RE, line):
            directive = parse_directive(token)

            if directive is None:
                if state.section is Section.IN_COMMENT_BLOCK:
                    text.append(Span(token, Style.COMMENT))
                    continue
                chord_row, lyric_row = align_chords(
                    token,
                    state.transposition,
                    chords_width=StyledRun(tuple(chords)).width(),
                    lyrics_width=StyledRun(tuple(text)).width(),
                )
                if chord_row:
                    chords.append(Span(chord_row, Style.CHORD))
                if lyric_row:
                    text.append(Span(lyric_row))
                continue

            name = directive.name
            if name in TITLE:
                state.title = directive.value
                return None
            if name in SUBTITLE:
                state.subtitle = directive.value
                return TextOnly(StyledRun.of(state.subtitle, Style.TITLE))
            if name in KEY:
                if self.transpose_to is not None:
                    state.transposition += self._key_offset(directive.value)
                return None
            if name in CAPO:
                state.transposition -= _capo_offset(directive.value)
            elif name in COMMENT:
                text.append(Span(directive.value, Style.COMMENT))
            elif name in START_OF_CHORUS:
                state.section = Section.IN_CHORUS
                return None
            elif name in END_OF_CHORUS:
                if state.section is Section.IN_CHORUS:
                    state.section = Section.NORMAL
            elif name in START_OF_COMMENT_BLOCK:
                state.section = Section.IN_COMMENT_BLOCK
            elif name in END_OF_COMMENT_BLOCK:
                if state.section is Section.IN_COMMENT_BLOCK:
                    state.section = Section.NORMAL
            elif name in TAG:
                return None
            else:
                logger.debug("Ignoring unknown directive %r", name)

        chord_run = StyledRun(tuple(chords))
        text_run = StyledRun(tuple(text))
        if chord_run and not text_run.plain.strip():
            # Instrumental line: the lyric row only holds alignment padding.
            text_run = StyledRun()
        if state.section is Section.IN_CHORUS:
            marker = StyledRun.of(CHORUS_MARKER, Style.COMMENT)
            if chord_run:
                chord_run = marker + chord_run
            if text_run:
                text_run = marker + text_run

        if chord_run and text_run:
            return Both(chord_run, text_run)
        if chord_run:
            return ChordsOnly(chord_run)
        return TextOnly(text_run)

    def _key_offset(self, declared: str) -> int:
        """Semitones from the declared key to the target key (0 if unparseable)."""
        match = ROOT_NOTE_RE.match(declared)
        if match is None:
            logger.debug("Ignoring unparseable key %r", declared)
            return 0
        return interval(PitchClass.parse(match.group()), self.transpose_to)


def _capo_offset(argument: str) -> int:
    try:
        return int(argument)
    except ValueError:
        logger.debug("Ignoring non-numeric capo %r", argument)
        return 0


def parse_song(source: str, transpose_to: PitchClass | None = None) -> Song:
    """Parse *source* into a Song, transposing to *transpose_to* if given."""
    return SongBuilder(transpose_to).build(source)


# ---------------------------------------------------------------------------
# Lightweight lookups
# ---------------------------------------------------------------------------


def get_name(source: str) -> str:
    """Return ``"Title"`` or ``"Title - Subtitle"`` without a full parse.

    Songs without a title directive are called ``"Untitled"``.
    """
    title = "Untitled"
    subtitle = ""
    for line in source_lines(normalize_newlines(source)):
        for token in split_keep(TAGS_RE, line):
            directive = parse_directive(token)
            if directive is None:
                continue
            if directive.name in TITLE:
                title = directive.value
            elif directive.name in SUBTITLE:
                subtitle = directive.value
    if not subtitle:
        return title
    return f"{title} - {subtitle}"


def parse_playlist(source: str) -> Playlist:
    """Parse a playlist: a title line followed by one song path per line."""
    lines = source_lines(normalize_newlines(source))
    if not lines:
        return Playlist(title="", source=source)
    songs = [line.strip() for line in lines[1:] if line.strip()]
    return Playlist(title=lines[0].strip(), songs=songs, source=source)
