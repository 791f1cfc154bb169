"""End-to-end tests for the layout engine."""

import pytest

from snview.errors import ConfigurationError, LayoutError, PitchRangeError, StructureError
from snview.layout_engine import layout_score
from snview.pitch_range import LineRange
from snview.preferences import LayoutPreferences
from snview.primitives import Caption
from snview.score_models import Score, Tie, TimeSignature
from tests.helpers import make_note, make_score


def _two_note_score() -> Score:
    return make_score([make_note(60, 0, 2), make_note(62, 2, 2)], beats=4, fifths=0)


def test_two_note_scenario() -> None:
    layout = layout_score(_two_note_score(), 1000, LayoutPreferences(measures_per_row=4))

    assert len(layout.rows) == 1
    (row,) = layout.rows
    assert len(row.measures) == 1
    assert layout.line_range == LineRange(28, 31)
    assert layout.line_range.span >= 3

    (measure,) = row.measures
    assert measure.width == 220  # (1000 - 2*40 - 25 - 15) / 4
    assert len(measure.bars) == 2
    for bar in measure.bars:
        assert not bar.pointed_end
        assert not bar.spans_row
        assert bar.radius_start == 5 and bar.radius_end == 10
    assert [head.y for head in measure.heads] == [45, 35]
    assert [head.x for head in measure.heads] == [10, 120]


def test_row_offset_and_measure_positions() -> None:
    score = make_score(*[[make_note(60, 0, 4)] for _ in range(6)])
    layout = layout_score(score, 1000, LayoutPreferences(measures_per_row=4))

    assert [len(row.measures) for row in layout.rows] == [4, 2]
    assert all(row.offset_x == 40 for row in layout.rows)
    assert [m.x for m in layout.rows[1].measures] == [40, 260]
    assert [m.index for m in layout.measure_groups] == list(range(6))


def test_tie_wrapping_to_the_next_row() -> None:
    score = make_score(
        [make_note(60, 0, 2), make_note(64, 2, 2, Tie.START)],
        [make_note(64, 0, 2, Tie.STOP), make_note(67, 2, 2)],
    )
    layout = layout_score(score, 1000, LayoutPreferences(measures_per_row=1))
    first, second = layout.measure_groups

    wrapping = first.bars[1]
    assert wrapping.spans_row is True
    assert wrapping.pointed_end is True
    assert wrapping.radius_end == 0  # pointed does not imply a rounded radius
    assert wrapping.radius_start > 0

    continuation = second.bars[0]
    assert continuation.spans_row is False
    assert continuation.radius_start == 0
    assert continuation.radius_end > 0
    # The continuation has no head of its own
    assert len(second.heads) == 1


def test_tie_inside_a_row_is_not_pointed() -> None:
    score = make_score(
        [make_note(64, 2, 2, Tie.START)],
        [make_note(64, 0, 2, Tie.STOP)],
    )
    layout = layout_score(score, 1000, LayoutPreferences(measures_per_row=2))
    bar = layout.measure_groups[0].bars[0]
    assert bar.spans_row is False
    assert bar.radius_end == 0


def test_mid_score_time_signature_changes_beat_width() -> None:
    score = make_score(
        [make_note(60, 0, 4)],
        [make_note(60, 0, 1), make_note(62, 2, 1)],
        time_signatures=(TimeSignature(4, 0), TimeSignature(3, 1)),
    )
    layout = layout_score(score, 1000, LayoutPreferences(measures_per_row=2))
    first, second = layout.measure_groups

    assert (first.beats, second.beats) == (4, 3)
    assert first.width == second.width == 440
    # Second note starts two thirds of the way through the 3/4 measure
    assert second.heads[1].x == pytest.approx(440 / 3 * 2 + 10)


def test_layout_is_idempotent() -> None:
    score = make_score(
        [make_note(61, 0, 1.5), make_note(66, 1.5, 2.5, Tie.START)],
        [make_note(66, 0, 1, Tie.STOP), make_note(48, 1, 3)],
        fifths=-2,
    )
    prefs = LayoutPreferences(measures_per_row=1)
    caption = Caption(title="Etude", author="Someone", tempo_bpm=72)
    assert layout_score(score, 777, prefs, caption) == layout_score(score, 777, prefs, caption)


def test_tracks_with_fewer_measures_are_skipped_past_their_end() -> None:
    short = make_score([make_note(72, 0, 4)]).tracks[0]
    long = make_score([make_note(60, 0, 4)], [make_note(62, 0, 4)]).tracks[0]
    layout = layout_score(Score(tracks=(long, short)), 1000)
    assert [len(m.bars) for m in layout.measure_groups] == [2, 1]


def test_header_caption() -> None:
    layout = layout_score(_two_note_score(), 1000, caption=Caption(title="Tune", author="Anon", tempo_bpm=90))
    title, tempo, author = layout.header.texts
    assert (title.text, title.x) == ("Tune", 500)
    assert tempo.text == "90 bpm"
    assert (author.text, author.x, author.anchor) == ("Anon", 930, "end")


def test_empty_score_is_a_range_error() -> None:
    with pytest.raises(PitchRangeError):
        layout_score(make_score([], []), 1000)


def test_no_tracks_is_a_structure_error() -> None:
    with pytest.raises(StructureError):
        layout_score(Score(tracks=()), 1000)


@pytest.mark.parametrize("width", [0, -10, 100])
def test_unusable_width_is_a_configuration_error(width: float) -> None:
    with pytest.raises(ConfigurationError):
        layout_score(_two_note_score(), width)


def test_layout_errors_are_value_errors() -> None:
    with pytest.raises(ValueError) as excinfo:
        layout_score(_two_note_score(), 1000, LayoutPreferences(measures_per_row=-1))
    assert isinstance(excinfo.value, LayoutError)
    assert excinfo.value.category == "configuration"
