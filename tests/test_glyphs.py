"""Unit tests for note-head shape selection and glyph geometry."""

import math

import pytest

from snview.glyphs import GLYPH_BUILDERS, build_glyph, build_note_head, select_shape
from snview.preferences import AccidentalMode, LayoutPreferences, ShapeKind
from snview.primitives import Circle, Line, Polygon, Rect
from snview.score_models import Tie
from tests.helpers import make_note

PREFS = LayoutPreferences(
    natural_note_shape=ShapeKind.CIRCLE,
    sharp_note_shape=ShapeKind.TRIANGLE_UP,
    flat_note_shape=ShapeKind.TRIANGLE_DOWN,
)


def _head(note, key_fifths: int = 0, preferences: LayoutPreferences = PREFS):
    return build_note_head(
        note,
        key_fifths=key_fifths,
        beat_width=55,
        baseline=45,
        min_line=28,
        note_size=20,
        stroke_width=3,
        color="#000000",
        preferences=preferences,
    )


def test_every_shape_kind_has_a_builder() -> None:
    assert set(GLYPH_BUILDERS) == set(ShapeKind)


@pytest.mark.parametrize(
    "pitch, fifths, mode, expected",
    [
        (60, 0, AccidentalMode.AUTO, ShapeKind.CIRCLE),
        (60, -4, AccidentalMode.FLAT, ShapeKind.CIRCLE),
        (61, 0, AccidentalMode.AUTO, ShapeKind.TRIANGLE_UP),
        (61, -1, AccidentalMode.AUTO, ShapeKind.TRIANGLE_DOWN),
        (61, -1, AccidentalMode.SHARP, ShapeKind.TRIANGLE_UP),
        (61, 3, AccidentalMode.FLAT, ShapeKind.TRIANGLE_DOWN),
    ],
)
def test_shape_follows_accidental_and_mode(
    pitch: int, fifths: int, mode: AccidentalMode, expected: ShapeKind
) -> None:
    prefs = LayoutPreferences(
        accidental_type=mode,
        natural_note_shape=ShapeKind.CIRCLE,
        sharp_note_shape=ShapeKind.TRIANGLE_UP,
        flat_note_shape=ShapeKind.TRIANGLE_DOWN,
    )
    assert select_shape(pitch, fifths, prefs) is expected


def test_tie_continuation_has_no_head() -> None:
    assert _head(make_note(60, 0, 1, Tie.STOP)) is None
    assert _head(make_note(60, 0, 1, Tie.START, Tie.STOP)) is None
    assert _head(make_note(60, 0, 1, Tie.START)) is not None


def test_head_sits_on_the_leading_edge_of_its_bar() -> None:
    head = _head(make_note(60, 2, 1))
    assert head is not None
    assert head.kind is ShapeKind.CIRCLE
    assert head.x == 55 * 2 + 10
    assert head.y == 45
    assert head.parts == (Circle(cx=120, cy=45, r=10, fill="#000000"),)


def test_flat_head_is_drawn_one_line_higher() -> None:
    head = _head(make_note(61, 0, 1), key_fifths=-2)
    assert head is not None
    assert head.kind is ShapeKind.TRIANGLE_DOWN
    assert head.y == 45 - 10


def test_triangle_up_apex_is_above_the_centre() -> None:
    (triangle,) = build_glyph(ShapeKind.TRIANGLE_UP, 0, 0, 20, 3, "#000")
    assert isinstance(triangle, Polygon)
    apex, right, left = triangle.points
    assert apex == (0, pytest.approx(-10 * math.sqrt(3) / 2))
    assert right[0] == 10 and left[0] == -10
    assert right[1] == left[1] > 0


def test_triangle_down_apex_is_below_the_centre() -> None:
    (triangle,) = build_glyph(ShapeKind.TRIANGLE_DOWN, 0, 0, 20, 3, "#000")
    assert triangle.points[0][1] > 0


def test_hollow_shapes_are_stroked_inside_the_glyph() -> None:
    (ring,) = build_glyph(ShapeKind.HOLLOW_CIRCLE, 0, 0, 20, 3, "#000")
    assert ring == Circle(cx=0, cy=0, r=8.5, stroke="#000", stroke_width=3)
    (box,) = build_glyph(ShapeKind.HOLLOW_SQUARE, 0, 0, 20, 3, "#000")
    assert isinstance(box, Rect)
    assert box.fill is None and box.stroke == "#000"
    assert (box.x, box.width) == (-8.5, 17)


def test_square_is_inset_by_the_stroke_width() -> None:
    (square,) = build_glyph(ShapeKind.SQUARE, 10, 10, 20, 3, "#000")
    assert square == Rect(x=1.5, y=1.5, width=17, height=17, fill="#000")


def test_crossed_circle_has_two_diagonals() -> None:
    ring, first, second = build_glyph(ShapeKind.CROSSED_CIRCLE, 0, 0, 20, 3, "#000")
    assert isinstance(ring, Circle) and ring.r == 9
    assert isinstance(first, Line) and isinstance(second, Line)
    reach = 10 / math.sqrt(2)
    assert first.x1 == pytest.approx(-reach)
    assert second.y1 == pytest.approx(reach)
