"""Layout engine: turns a parsed score into rows of positioned primitives."""

from __future__ import annotations

import logging

from snview.caption import build_header
from snview.duration_bars import build_duration_bar
from snview.errors import ConfigurationError, StructureError
from snview.geometry import StaffMetrics, build_measure_frame, build_row_labels
from snview.glyphs import build_note_head
from snview.partition import RowPlan, partition_rows
from snview.pitch import display_line
from snview.pitch_range import compute_line_range
from snview.preferences import (
    AccidentalMode,
    LayoutParameters,
    LayoutPreferences,
    resolve_parameters,
)
from snview.primitives import Caption, DurationBar, Layout, MeasureGroup, NoteHead, Row
from snview.score_models import Score
from snview.signatures import SignatureResolver

logger = logging.getLogger(__name__)


def score_width(width: float, params: LayoutParameters) -> float:
    """Width left for measures once padding and the label columns are removed."""
    return width - 2 * params.horizontal_padding - params.staff_label_space - params.octave_label_space


def layout_score(
    score: Score,
    width: float,
    preferences: LayoutPreferences | None = None,
    caption: Caption | None = None,
) -> Layout:
    """
    Compute the complete staff-less layout of ``score`` for a given width.

    The function is pure: the same inputs always produce identical geometry,
    and nothing is drawn unless the whole layout succeeds.

    Args:
        score:       Parsed score; signatures of the first track apply to all.
        width:       Available width in pixels.
        preferences: Style options; defaults are used when omitted.
        caption:     Title/author/tempo shown in the header canvas.

    Raises:
        PitchRangeError:    No notes, or a pitch outside 0-127.
        StructureError:     No measures in any track.
        ConfigurationError: A preference outside its set, or a width too
                            narrow to hold any measure.
    """
    preferences = preferences or LayoutPreferences()
    caption = caption or Caption()
    params = resolve_parameters(preferences)
    mode = AccidentalMode(preferences.accidental_type)

    if width <= 0:
        raise ConfigurationError(f"Layout width must be positive, got {width}.")
    if not score.tracks:
        raise StructureError("Failed to identify number of measures: the score has no tracks.")

    resolver = SignatureResolver(score.tracks[0])
    line_range = compute_line_range(score, resolver, mode)
    metrics = StaffMetrics(params=params, line_range=line_range)

    available = score_width(width, params)
    if available <= 0:
        raise ConfigurationError(f"Layout width {width} is too narrow to place a measure.")
    measures_per_row = preferences.measures_per_row
    plan = partition_rows(
        score.measure_count,
        measures_per_row,
        available_width=available,
        measure_width=available / measures_per_row,
    )
    offset_x = params.horizontal_padding + plan.centering_offset

    logger.debug(
        "Layout: %d measures in %d rows, lines %d..%d, measure width %.2f",
        score.measure_count,
        plan.row_count,
        line_range.min_line,
        line_range.max_line,
        plan.measure_width,
    )

    rows = tuple(
        Row(
            index=row_index,
            width=width,
            height=metrics.canvas_height,
            offset_x=offset_x,
            padding_bottom=params.row_padding,
            labels=build_row_labels(metrics),
            measures=tuple(
                _build_measure(score, metrics, plan, resolver, preferences, first + j, x=_measure_x(params, plan, j))
                for j in range(count)
            ),
        )
        for row_index, first, count in plan.rows()
    )

    return Layout(
        width=width,
        vertical_padding=params.vertical_padding,
        line_range=line_range,
        row_plan=plan,
        header=build_header(caption, width, params.row_padding),
        rows=rows,
    )


def _measure_x(params: LayoutParameters, plan: RowPlan, position_in_row: int) -> float:
    return params.staff_label_space + params.octave_label_space + position_in_row * plan.measure_width


def _build_measure(
    score: Score,
    metrics: StaffMetrics,
    plan: RowPlan,
    resolver: SignatureResolver,
    preferences: LayoutPreferences,
    measure_index: int,
    x: float,
) -> MeasureGroup:
    params = metrics.params
    signatures = resolver.at(measure_index)
    beats = signatures.time.beats
    key_fifths = signatures.key.fifths
    beat_width = resolver.beat_width(measure_index, plan.measure_width)
    last_in_row = plan.is_last_in_row(measure_index)
    mode = AccidentalMode(preferences.accidental_type)

    bars: list[DurationBar] = []
    heads: list[NoteHead] = []
    for track_index, track in enumerate(score.tracks):
        if measure_index >= len(track.measures):
            continue
        for note_index, note in enumerate(track.measures[measure_index]):
            note_key = f"t{track_index}-m{measure_index}-n{note_index}"
            head = build_note_head(
                note,
                key_fifths=key_fifths,
                beat_width=beat_width,
                baseline=metrics.baseline,
                min_line=metrics.line_range.min_line,
                note_size=params.note_size,
                stroke_width=params.head_stroke_width,
                color=params.symbol_color,
                preferences=preferences,
                note_key=note_key,
            )
            if head is not None:
                heads.append(head)
            bars.append(
                build_duration_bar(
                    note,
                    line=display_line(note.pitch, key_fifths, mode) - metrics.line_range.min_line,
                    beat_width=beat_width,
                    baseline=metrics.baseline,
                    note_size=params.note_size,
                    beats_in_measure=beats,
                    last_in_row=last_in_row,
                    color=params.duration_color,
                    opacity=params.duration_opacity,
                    note_key=note_key,
                )
            )

    return MeasureGroup(
        index=measure_index,
        x=x,
        y=0,
        width=plan.measure_width,
        beats=beats,
        frame=build_measure_frame(
            metrics,
            measure_index,
            beats=beats,
            measure_width=plan.measure_width,
            first_in_row=plan.is_first_in_row(measure_index),
        ),
        bars=tuple(bars),
        heads=tuple(heads),
    )
