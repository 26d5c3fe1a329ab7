import pytest

from gpro.exceptions import LayoutError
from gpro.models import (
    Both,
    ChordsOnly,
    Column,
    Empty,
    Span,
    Style,
    StyledRun,
    TextOnly,
    line_from_runs,
)


def _run(*pieces) -> StyledRun:
    return StyledRun(tuple(Span(text, style) for text, style in pieces))


# ---------------------------------------------------------------------------
# StyledRun
# ---------------------------------------------------------------------------


def test_run_width_counts_characters():
    assert _run(("ab", Style.CHORD), ("cde", Style.PLAIN)).width() == 5
    assert StyledRun().width() == 0


def test_run_concatenation_is_associative():
    a, b, c = StyledRun.of("a"), StyledRun.of("b", Style.CHORD), StyledRun.of("c", Style.COMMENT)
    assert (a + b) + c == a + (b + c)


def test_run_truthiness_ignores_empty_spans():
    assert not StyledRun()
    assert not StyledRun.of("")
    assert StyledRun.of(" ")


def test_run_split_inside_span_keeps_style():
    run = _run(("abc", Style.CHORD), ("defgh", Style.COMMENT))
    left, right = run.split_at(5)
    assert left == _run(("abc", Style.CHORD), ("de", Style.COMMENT))
    assert right == _run(("fgh", Style.COMMENT),)


def test_run_split_on_span_boundary():
    run = _run(("abc", Style.CHORD), ("defgh", Style.COMMENT))
    left, right = run.split_at(3)
    assert left == _run(("abc", Style.CHORD),)
    assert right == _run(("defgh", Style.COMMENT),)


def test_run_split_past_end():
    run = StyledRun.of("C ")
    assert run.split_at(5) == (run, StyledRun())


# ---------------------------------------------------------------------------
# SongLine variants
# ---------------------------------------------------------------------------


def test_line_dimensions():
    chords = StyledRun.of("C     G ", Style.CHORD)
    text = StyledRun.of("Hello world")
    assert (Both(chords, text).width(), Both(chords, text).height()) == (11, 2)
    assert (ChordsOnly(chords).width(), ChordsOnly(chords).height()) == (8, 1)
    assert (TextOnly(text).width(), TextOnly(text).height()) == (11, 1)
    assert (Empty().width(), Empty().height()) == (0, 0)


def test_line_runs_top_to_bottom():
    chords, text = StyledRun.of("C"), StyledRun.of("la")
    assert Both(chords, text).runs() == [chords, text]
    assert TextOnly(text).runs() == [text]
    assert Empty().runs() == []


def test_absent_runs_are_none():
    assert ChordsOnly(StyledRun.of("C")).text is None
    assert TextOnly(StyledRun.of("la")).chords is None


def test_line_from_runs_picks_variant():
    chords, text = StyledRun.of("C"), StyledRun.of("la")
    assert line_from_runs(chords, text) == Both(chords, text)
    assert line_from_runs(chords, StyledRun()) == ChordsOnly(chords)
    assert line_from_runs(None, text) == TextOnly(text)
    assert line_from_runs(None, None) == Empty()


def test_split_both_with_short_chord_row():
    line = Both(StyledRun.of("C ", Style.CHORD), StyledRun.of("Hello world"))
    head, tail = line.split_at(5)
    assert head == Both(StyledRun.of("C ", Style.CHORD), StyledRun.of("Hello"))
    assert tail == TextOnly(StyledRun.of(" world"))


def test_split_text_only():
    head, tail = TextOnly(StyledRun.of("abcdef")).split_at(2)
    assert head == TextOnly(StyledRun.of("ab"))
    assert tail == TextOnly(StyledRun.of("cdef"))


def test_split_at_width_is_an_error():
    with pytest.raises(LayoutError, match="larger than width"):
        TextOnly(StyledRun.of("abc")).split_at(3)


def test_split_at_zero_is_an_error():
    with pytest.raises(LayoutError):
        TextOnly(StyledRun.of("abc")).split_at(0)


def test_split_empty_line_is_an_error():
    with pytest.raises(LayoutError, match="No content"):
        Empty().split_at(1)


# ---------------------------------------------------------------------------
# Column
# ---------------------------------------------------------------------------


def test_column_defaults():
    column = Column()
    assert column.lines == []
    assert column.height() == 0
    assert column.width() == 0


def test_column_dimensions():
    column = Column([
        Both(StyledRun.of("C"), StyledRun.of("abc")),
        TextOnly(StyledRun.of("abcdefg")),
        Empty(),
    ])
    assert column.height() == 3
    assert column.width() == 7
