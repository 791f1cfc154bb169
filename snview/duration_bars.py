"""Duration bars: rounded outlines whose ends depend on tie and row-wrap state.

Corner policy per note:

    ============  ================  =====================
    tie state     leading edge      trailing edge
    ============  ================  =====================
    none          rounded           rounded
    stop          square            rounded
    start         rounded           square (or pointed)
    start + stop  square            square (or pointed)
    ============  ================  =====================

A trailing end is pointed instead when the note starts a tie, ends its row's
last measure and reaches the end of that measure: the bar continues on the
next row.
"""

from __future__ import annotations

from dataclasses import dataclass

from snview.primitives import DurationBar, Path, PathCommand
from snview.score_models import Note


@dataclass(frozen=True)
class CornerRadii:
    start: float
    end: float


def corner_radii(bar_width: float, note_size: float, tie_start: bool, tie_stop: bool) -> CornerRadii:
    """Leading radius is a quarter of the rounding space, trailing radius half."""
    rounding_space = max(min(note_size, bar_width), 0)
    start = 0.0 if tie_stop else rounding_space / 4
    end = 0.0 if tie_start else rounding_space / 2
    return CornerRadii(start=start, end=end)


def note_spans_row(note: Note, beats_in_measure: int, last_in_row: bool) -> bool:
    """Whether a tied note runs off the end of its row onto the next one."""
    return note.tie_start and last_in_row and note.end >= beats_in_measure


def outline_commands(
    x_start: float,
    x_end: float,
    top: float,
    note_size: float,
    radii: CornerRadii,
    pointed_end: bool,
) -> tuple[PathCommand, ...]:
    """
    Path commands for a bar from ``x_start`` to ``x_end`` with its top at ``top``.

    Traced clockwise from the top-left corner. A pointed end adds two
    segments meeting half a glyph beyond ``x_end`` at mid height.
    """
    rs, re_ = radii.start, radii.end
    half = note_size / 2
    commands: list[PathCommand] = [
        ("M", (x_start + rs, top)),
        ("H", (x_end - re_,)),
    ]
    if pointed_end:
        commands += [
            ("l", (re_, re_)),
            ("l", (half - re_, half - re_)),
            ("l", (-half + re_, half - re_)),
            ("l", (-re_, re_)),
        ]
    else:
        commands += [
            ("a", (re_, re_, 0, 0, 1, re_, re_)),
            ("v", (note_size - 2 * re_,)),
            ("a", (re_, re_, 0, 0, 1, -re_, re_)),
        ]
    commands += [
        ("H", (x_start + rs,)),
        ("a", (rs, rs, 0, 0, 1, -rs, -rs)),
        ("v", (-note_size + 2 * rs,)),
        ("a", (rs, rs, 0, 0, 1, rs, -rs)),
        ("z", ()),
    ]
    return tuple(commands)


def build_duration_bar(
    note: Note,
    *,
    line: int,
    beat_width: float,
    baseline: float,
    note_size: float,
    beats_in_measure: int,
    last_in_row: bool,
    color: str,
    opacity: float,
    note_key: str = "",
) -> DurationBar:
    """
    Build the outline of one note's duration bar in measure-local coordinates.

    ``line`` is the note's display line relative to the lowest visible line.
    """
    x_start = beat_width * note.time
    x_end = beat_width * note.end
    top = baseline - (line + 1) * note_size / 2

    radii = corner_radii(x_end - x_start, note_size, note.tie_start, note.tie_stop)
    spans_row = note_spans_row(note, beats_in_measure, last_in_row)

    return DurationBar(
        path=Path(
            commands=outline_commands(x_start, x_end, top, note_size, radii, pointed_end=spans_row),
            fill=color,
            fill_opacity=opacity,
        ),
        radius_start=radii.start,
        radius_end=radii.end,
        pointed_end=spans_row,
        spans_row=spans_row,
        note_key=note_key,
    )
