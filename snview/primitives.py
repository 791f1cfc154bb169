"""Renderer-neutral output primitives produced by the layout engine.

Every primitive carries absolute geometry in the coordinate space of its
enclosing group; nothing refers back to the score.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from snview.partition import RowPlan
from snview.pitch_range import LineRange
from snview.preferences import ShapeKind


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = "#000000"
    stroke: str | None = None
    stroke_width: float = 0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font_size: float
    anchor: str = "start"  # start | middle | end
    baseline: str | None = None  # e.g. "middle", "hanging"


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0


@dataclass(frozen=True)
class Polygon:
    points: tuple[tuple[float, float], ...]
    fill: str


PathCommand = tuple[str, tuple[float, ...]]


def format_number(value: float) -> str:
    """Compact decimal form used in path data and SVG attributes."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class Path:
    """Closed outline described as SVG-style path commands."""

    commands: tuple[PathCommand, ...]
    fill: str
    fill_opacity: float = 1.0

    @property
    def d(self) -> str:
        return " ".join(
            op + " ".join(format_number(arg) for arg in args) for op, args in self.commands
        )


Shape = Union[Rect, Text, Line, Circle, Polygon, Path]


@dataclass(frozen=True)
class NoteHead:
    """A note-head glyph centred on ``(x, y)``, drawn by ``parts``."""

    kind: ShapeKind
    x: float
    y: float
    parts: tuple[Shape, ...]
    note_key: str = ""


@dataclass(frozen=True)
class DurationBar:
    """
    Rounded duration outline of one note.

    ``radius_start``/``radius_end`` are the leading and trailing corner radii;
    ``pointed_end`` marks a trailing point that signals continuation onto the
    next row.
    """

    path: Path
    radius_start: float
    radius_end: float
    pointed_end: bool
    spans_row: bool
    note_key: str = ""


@dataclass(frozen=True)
class MeasureGroup:
    """One measure, translated to ``(x, y)`` inside its row."""

    index: int
    x: float
    y: float
    width: float
    beats: int
    frame: tuple[Shape, ...]
    bars: tuple[DurationBar, ...] = ()
    heads: tuple[NoteHead, ...] = ()

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class Row:
    """One canvas of the layout: row labels plus its measures."""

    index: int
    width: float
    height: float
    offset_x: float
    padding_bottom: float
    labels: tuple[Shape, ...]
    measures: tuple[MeasureGroup, ...]


@dataclass(frozen=True)
class Caption:
    """Title block text, extracted upstream from the score metadata."""

    title: str = ""
    author: str = ""
    tempo_bpm: float = 60


@dataclass(frozen=True)
class Header:
    """The caption canvas shown above the first row."""

    caption: Caption
    width: float
    height: float
    padding_bottom: float
    texts: tuple[Text, ...]


@dataclass(frozen=True)
class Layout:
    """Complete result of one layout pass."""

    width: float
    vertical_padding: float
    line_range: LineRange
    row_plan: RowPlan
    header: Header
    rows: tuple[Row, ...] = field(default_factory=tuple)

    @property
    def measure_groups(self) -> list[MeasureGroup]:
        return [group for row in self.rows for group in row.measures]
