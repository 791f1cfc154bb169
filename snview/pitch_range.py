"""Vertical coordinate system: the line range covered by a score."""

from __future__ import annotations

from dataclasses import dataclass

from snview.errors import PitchRangeError
from snview.pitch import LINES_PER_OCTAVE, display_line
from snview.preferences import AccidentalMode
from snview.score_models import Score
from snview.signatures import SignatureResolver

MIDI_MIN = 0
MIDI_MAX = 127

#: Slots within an octave that carry a coloured reference line (C and F).
C_LINE = 0
F_LINE = 3
REFERENCE_SLOTS = (C_LINE, F_LINE)


@dataclass(frozen=True)
class LineRange:
    """Inclusive range of visible lines, both ends on reference lines."""

    min_line: int
    max_line: int

    @property
    def span(self) -> int:
        return self.max_line - self.min_line

    def row_height(self, note_size: float) -> float:
        """Height of the staff area of a row, excluding the measure labels."""
        return self.span * note_size / 2


def is_reference_line(line: int) -> bool:
    return line % LINES_PER_OCTAVE in REFERENCE_SLOTS


def find_note_range(score: Score) -> tuple[int, int]:
    """
    Return the lowest and highest MIDI pitch in the score.

    Raises:
        PitchRangeError: If the score has no notes or a pitch outside 0-127.
    """
    pitches = [note.pitch for note in score.notes()]
    if not pitches:
        raise PitchRangeError("An issue was detected while analyzing this work's note range: no notes found.")
    low, high = min(pitches), max(pitches)
    if low < MIDI_MIN or high > MIDI_MAX:
        raise PitchRangeError(
            f"An issue was detected while analyzing this work's note range: "
            f"pitches {low}-{high} fall outside {MIDI_MIN}-{MIDI_MAX}."
        )
    return low, high


def snap_line_range(min_line: int, max_line: int) -> LineRange:
    """
    Widen ``[min_line, max_line]`` outwards to the nearest reference lines.

    A range that collapses onto a single reference line is widened by a
    fixed asymmetric rule: the top moves up 3 lines from a C line (to F) or
    4 from an F line (to C), and the bottom moves down 4 from a C line or
    3 from an F line, so a lone note still gets a full octave of staff.
    """
    while not is_reference_line(min_line):
        min_line -= 1
    while not is_reference_line(max_line):
        max_line += 1

    if abs(max_line - min_line) <= 1:
        max_line += 3 if max_line % LINES_PER_OCTAVE == C_LINE else 4
        min_line -= 4 if min_line % LINES_PER_OCTAVE == C_LINE else 3

    return LineRange(min_line=min_line, max_line=max_line)


def compute_line_range(
    score: Score, resolver: SignatureResolver, mode: AccidentalMode
) -> LineRange:
    """
    Line range of every note in the score, each spelled under the key
    active in its own measure, snapped to reference lines.

    Raises:
        PitchRangeError: If the score has no notes or a pitch outside 0-127.
    """
    find_note_range(score)

    lines = [
        display_line(note.pitch, resolver.key_fifths(index), mode)
        for track in score.tracks
        for index, measure in enumerate(track.measures)
        for note in measure
    ]
    return snap_line_range(min(lines), max(lines))
