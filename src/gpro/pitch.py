"""Pitch classes and chord transposition.

Pitch classes are numbered 0-11 with C=0 and displayed with sharps::

    >>> PitchClass.parse("Bb")
    PitchClass(semitone=10)
    >>> str(transpose(PitchClass.parse("A"), 3))
    'C'
    >>> transpose_chord("Am7/G", 2)
    'Bm7/A'
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

PC_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Root letter plus optional accidental, anchored at the start of a chord name.
ROOT_NOTE_RE = re.compile(r"[A-G][b#]?")

# Slash bass note: the "/B" in "G/B".
SLASH_BASS_RE = re.compile(r"/([A-G][b#]?)")


@dataclass(frozen=True)
class PitchClass:
    semitone: int

    def __post_init__(self):
        if not 0 <= self.semitone < 12:
            raise ValueError(f"Pitch class out of range: {self.semitone}")

    @classmethod
    def parse(cls, name: str) -> "PitchClass | None":
        """Return the pitch class for a note name, or None if it isn't one."""
        semitone = NOTE_TO_PC.get(name)
        if semitone is None:
            return None
        return cls(semitone)

    def transpose(self, semitones: int) -> "PitchClass":
        return PitchClass((self.semitone + semitones) % 12)

    def __str__(self) -> str:
        return PC_NAMES[self.semitone]


def transpose(pitch: PitchClass, semitones: int) -> PitchClass:
    """Move *pitch* by any number of semitones around the 12-tone circle."""
    return pitch.transpose(semitones)


def interval(source: PitchClass, target: PitchClass) -> int:
    """Semitones to add to *source* to reach *target*, in [0, 12)."""
    return (target.semitone - source.semitone) % 12


def transpose_chord(chord: str, semitones: int) -> str:
    """Transpose a chord name, keeping its quality suffix verbatim.

    The root and a slash bass note are substituted. A chord whose root cannot
    be parsed (``N.C.``, ``x``, an empty bracket) comes back unchanged.
    """
    if semitones % 12 == 0:
        return chord

    match = ROOT_NOTE_RE.match(chord)
    if match is None:
        if chord:
            logger.debug("Not transposing %r: no chord root", chord)
        return chord

    root = PitchClass.parse(match.group())
    suffix = SLASH_BASS_RE.sub(
        lambda m: "/" + str(PitchClass.parse(m.group(1)).transpose(semitones)),
        chord[match.end():],
        count=1,
    )
    return f"{root.transpose(semitones)}{suffix}"
