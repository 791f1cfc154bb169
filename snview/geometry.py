"""Measure frames: reference lines, beat ticks, labels and bar lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from snview.pitch import LINES_PER_OCTAVE
from snview.pitch_range import LineRange
from snview.preferences import LayoutParameters
from snview.primitives import Rect, Shape, Text

FRAME_COLOR = "#000000"
STAFF_LABEL = "𝒯"


@dataclass(frozen=True)
class OctaveLine:
    color: str
    numbered: bool = False


#: One slot per line of an octave (C D E F G A B); only C and F are drawn.
OCTAVE_LINES: Final[tuple[OctaveLine | None, ...]] = (
    OctaveLine(color="red", numbered=True),  # C
    None,  # D
    None,  # E
    OctaveLine(color="blue"),  # F
    None,  # G
    None,  # A
    None,  # B
)


@dataclass(frozen=True)
class StaffMetrics:
    """
    Vertical coordinate system shared by every measure of a layout pass.

    ``baseline`` is the y of ``line_range.min_line`` inside a measure group;
    each line above it moves up half a note size.
    """

    params: LayoutParameters
    line_range: LineRange

    @property
    def row_height(self) -> float:
        return self.line_range.row_height(self.params.note_size)

    @property
    def baseline(self) -> float:
        return self.row_height + self.params.measure_label_space

    @property
    def canvas_height(self) -> float:
        """Row canvas height: labels, staff, and half a glyph of overhang."""
        return self.row_height + self.params.measure_label_space + self.params.note_size / 2

    def line_y(self, line: int) -> float:
        return self.baseline - (line - self.line_range.min_line) * self.params.note_size / 2


def build_measure_frame(
    metrics: StaffMetrics,
    measure_index: int,
    beats: int,
    measure_width: float,
    first_in_row: bool,
) -> tuple[Shape, ...]:
    """
    Emit the frame of one measure in measure-local coordinates.

    The frame holds the measure number, the right-hand bar line, one line per
    visible C/F reference line, octave numbers on C lines when the measure
    opens its row, and ticks at each interior beat on every reference line
    but the topmost.
    """
    params = metrics.params
    sw = params.stroke_width
    label_space = params.measure_label_space

    shapes: list[Shape] = [
        Text(x=sw, y=label_space - sw, text=str(measure_index + 1), font_size=label_space),
        Rect(
            x=measure_width - sw / 2,
            y=label_space - sw / 2,
            width=sw,
            height=metrics.row_height + sw,
            fill=FRAME_COLOR,
        ),
    ]

    line_range = metrics.line_range
    for line in range(line_range.min_line, line_range.max_line + 1):
        octave_line = OCTAVE_LINES[line % LINES_PER_OCTAVE]
        if octave_line is None:
            continue
        line_y = metrics.line_y(line)
        shapes.append(
            Rect(x=sw / 2, y=line_y - sw / 2, width=measure_width - sw, height=sw, fill=octave_line.color)
        )
        if first_in_row and octave_line.numbered:
            shapes.append(
                Text(
                    x=-sw,
                    y=line_y,
                    text=str(line // LINES_PER_OCTAVE),
                    font_size=label_space,
                    anchor="end",
                    baseline="middle",
                )
            )
        if line < line_range.max_line:
            for beat in range(1, beats):
                tick_x = measure_width / beats * beat
                shapes.append(
                    Rect(
                        x=tick_x - sw / 2,
                        y=line_y - params.tick_size,
                        width=sw,
                        height=params.tick_size - sw / 2,
                        fill=FRAME_COLOR,
                    )
                )
    return tuple(shapes)


def build_row_labels(metrics: StaffMetrics) -> tuple[Shape, ...]:
    """Staff label glyph and the opening bar line, left of the first measure."""
    params = metrics.params
    sw = params.stroke_width
    label_space = params.measure_label_space
    return (
        Text(
            x=params.staff_label_space,
            y=label_space + metrics.row_height / 2,
            text=STAFF_LABEL,
            font_size=params.staff_label_space * 1.5,
            anchor="end",
            baseline="middle",
        ),
        Rect(
            x=params.staff_label_space + params.octave_label_space - sw / 2,
            y=label_space - sw / 2,
            width=sw,
            height=metrics.row_height + sw,
            fill=FRAME_COLOR,
        ),
    )
