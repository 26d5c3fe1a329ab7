"""Splitting song source into literal text and markup tokens.

Two kinds of markup are recognised inside a line:

  directive tags   ``{title: Amazing Grace}``, ``{soc}``, ``{c: Slowly}``
  chord brackets   ``[Am7]``, ``[G/B]``, ``[]``

:func:`split_keep` cuts a line into the pieces between and including the
matches, so that joining the pieces gives back the line unchanged.
"""

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# Every line-ending convention: CRLF, LFCR, LF, bare CR.
NEWLINES_RE = re.compile(r"\n\r?|\r\n?")

# {name} or {name: argument}. The name stops at the first colon.
TAGS_RE = re.compile(r"\{([^{}\n]+?)(?::([^{}\n]*))?\}")

# [chord], possibly empty.
CHORDS_RE = re.compile(r"\[([^\n\[\]]*)\]")

TITLE = frozenset({"t", "title"})
SUBTITLE = frozenset({"st", "subtitle"})
KEY = frozenset({"key"})
CAPO = frozenset({"capo", "Capo-Bass_Guitar"})
COMMENT = frozenset({"c", "comment"})
START_OF_CHORUS = frozenset({"soc", "start_of_chorus"})
END_OF_CHORUS = frozenset({"eoc", "end_of_chorus"})
START_OF_COMMENT_BLOCK = frozenset({"soh"})
END_OF_COMMENT_BLOCK = frozenset({"eoh"})
TAG = frozenset({"tag"})


@dataclass(frozen=True)
class Directive:
    """A parsed ``{name: argument}`` tag. ``argument`` is None when absent."""

    name: str
    argument: str | None = None

    @property
    def value(self) -> str:
        return self.argument or ""


def normalize_newlines(text: str) -> str:
    return NEWLINES_RE.sub("\n", text)


def source_lines(text: str) -> list[str]:
    """Split normalised text into physical lines.

    A final newline terminates the last line rather than starting an empty
    one, so ``"a\\n"`` is one line and ``""`` is none.
    """
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def split_keep(pattern: re.Pattern, line: str) -> list[str]:
    """Split *line* around the matches of *pattern*, keeping the matches.

    The result alternates literal text and matched markup in source order.
    No empty strings are produced, and ``"".join(result) == line``.
    """
    parts: list[str] = []
    last = 0
    for match in pattern.finditer(line):
        start, end = match.span()
        if start == end:
            continue
        if last != start:
            parts.append(line[last:start])
        parts.append(match.group())
        last = end
    if last < len(line):
        parts.append(line[last:])
    return parts


def parse_directive(token: str) -> Directive | None:
    """Return the directive for a tag token, or None for literal text."""
    match = TAGS_RE.fullmatch(token)
    if match is None:
        return None
    name, argument = match.groups()
    if argument is not None:
        argument = argument.strip()
    return Directive(name.strip(), argument)


def parse_chord_token(token: str) -> str | None:
    """Return the chord inside a bracket token, or None for literal text."""
    match = CHORDS_RE.fullmatch(token)
    if match is None:
        return None
    return match.group(1)
