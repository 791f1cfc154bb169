"""Note-head glyphs: shape selection and per-shape geometry."""

from __future__ import annotations

import math
from typing import Callable, Final

from snview.pitch import Accidental, display_line, head_accidental
from snview.preferences import AccidentalMode, LayoutPreferences, ShapeKind
from snview.primitives import Circle, Line, NoteHead, Polygon, Rect, Shape
from snview.score_models import Note

CROSS_STROKE_WIDTH = 2

GlyphBuilder = Callable[[float, float, float, float, str], tuple[Shape, ...]]


def _triangle_up(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    half_height = size * math.sqrt(3) / 4
    return (
        Polygon(
            points=((x, y - half_height), (x + size / 2, y + half_height), (x - size / 2, y + half_height)),
            fill=color,
        ),
    )


def _triangle_down(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    half_height = size * math.sqrt(3) / 4
    return (
        Polygon(
            points=((x, y + half_height), (x + size / 2, y - half_height), (x - size / 2, y - half_height)),
            fill=color,
        ),
    )


def _hollow_circle(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    return (Circle(cx=x, cy=y, r=(size - stroke) / 2, stroke=color, stroke_width=stroke),)


def _circle(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    return (Circle(cx=x, cy=y, r=size / 2, fill=color),)


def _square(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    side = size - stroke
    return (Rect(x=x - side / 2, y=y - side / 2, width=side, height=side, fill=color),)


def _hollow_square(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    side = size - stroke
    return (
        Rect(
            x=x - side / 2,
            y=y - side / 2,
            width=side,
            height=side,
            fill=None,
            stroke=color,
            stroke_width=stroke,
        ),
    )


def _crossed_circle(x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    reach = size / 2 / math.sqrt(2)
    return (
        Circle(cx=x, cy=y, r=(size - CROSS_STROKE_WIDTH) / 2, stroke=color, stroke_width=CROSS_STROKE_WIDTH),
        Line(x1=x - reach, y1=y - reach, x2=x + reach, y2=y + reach, stroke=color, stroke_width=CROSS_STROKE_WIDTH),
        Line(x1=x - reach, y1=y + reach, x2=x + reach, y2=y - reach, stroke=color, stroke_width=CROSS_STROKE_WIDTH),
    )


GLYPH_BUILDERS: Final[dict[ShapeKind, GlyphBuilder]] = {
    ShapeKind.TRIANGLE_UP: _triangle_up,
    ShapeKind.TRIANGLE_DOWN: _triangle_down,
    ShapeKind.HOLLOW_CIRCLE: _hollow_circle,
    ShapeKind.CIRCLE: _circle,
    ShapeKind.SQUARE: _square,
    ShapeKind.HOLLOW_SQUARE: _hollow_square,
    ShapeKind.CROSSED_CIRCLE: _crossed_circle,
}


def select_shape(
    pitch: int, key_fifths: int, preferences: LayoutPreferences
) -> ShapeKind:
    """Pick the head shape for a pitch from the natural/sharp/flat shape choices."""
    accidental = head_accidental(pitch, key_fifths, AccidentalMode(preferences.accidental_type))
    if accidental is Accidental.NATURAL:
        return ShapeKind(preferences.natural_note_shape)
    if accidental is Accidental.SHARP:
        return ShapeKind(preferences.sharp_note_shape)
    return ShapeKind(preferences.flat_note_shape)


def build_glyph(kind: ShapeKind, x: float, y: float, size: float, stroke: float, color: str) -> tuple[Shape, ...]:
    return GLYPH_BUILDERS[kind](x, y, size, stroke, color)


def build_note_head(
    note: Note,
    *,
    key_fifths: int,
    beat_width: float,
    baseline: float,
    min_line: int,
    note_size: float,
    stroke_width: float,
    color: str,
    preferences: LayoutPreferences,
    note_key: str = "",
) -> NoteHead | None:
    """
    Head glyph for a note, or ``None`` for a tie continuation.

    The head is centred half a glyph to the right of the note's onset, so it
    sits on the leading edge of the duration bar.
    """
    if note.tie_stop:
        return None

    mode = AccidentalMode(preferences.accidental_type)
    line = display_line(note.pitch, key_fifths, mode) - min_line
    x = beat_width * note.time + note_size / 2
    y = baseline - line * note_size / 2

    kind = select_shape(note.pitch, key_fifths, preferences)
    return NoteHead(
        kind=kind,
        x=x,
        y=y,
        parts=build_glyph(kind, x, y, note_size, stroke_width, color),
        note_key=note_key,
    )
