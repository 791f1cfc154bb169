"""snview CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click

from snview import __version__
from snview.preferences import (
    AccidentalMode,
    LayoutPreferences,
    PaletteColor,
    ScalePreference,
    ShapeKind,
    SpacingPreference,
)

MAX_MEASURES_PER_ROW = 16
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _choice(enum_type: type) -> click.Choice:
    return click.Choice([member.value for member in enum_type], case_sensitive=False)


def _preference_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach one option per layout preference."""
    defaults = LayoutPreferences()
    options = [
        click.option("--note-scale", type=_choice(ScalePreference), default=defaults.note_scale.value,
                     show_default=True, help="Size of note-head glyphs."),
        click.option("--staff-scale", type=_choice(ScalePreference), default=defaults.staff_scale.value,
                     show_default=True, help="Width of the staff label column."),
        click.option("--horizontal-spacing", type=_choice(SpacingPreference),
                     default=defaults.horizontal_spacing.value, show_default=True,
                     help="Left/right page padding."),
        click.option("--vertical-spacing", type=_choice(SpacingPreference),
                     default=defaults.vertical_spacing.value, show_default=True, help="Gap between rows."),
        click.option("--accidentals", "accidental_type", type=_choice(AccidentalMode),
                     default=defaults.accidental_type.value, show_default=True,
                     help="Spell accidentals from the key (auto) or force sharps/flats."),
        click.option("--measures-per-row", type=click.IntRange(1, MAX_MEASURES_PER_ROW),
                     default=defaults.measures_per_row, show_default=True, help="Measures in a full row."),
        click.option("--natural-shape", "natural_note_shape", type=_choice(ShapeKind),
                     default=defaults.natural_note_shape.value, show_default=True),
        click.option("--sharp-shape", "sharp_note_shape", type=_choice(ShapeKind),
                     default=defaults.sharp_note_shape.value, show_default=True),
        click.option("--flat-shape", "flat_note_shape", type=_choice(ShapeKind),
                     default=defaults.flat_note_shape.value, show_default=True),
        click.option("--duration-color", "note_duration_color", type=_choice(PaletteColor),
                     default=defaults.note_duration_color.value, show_default=True),
        click.option("--note-color", "note_symbol_color", type=_choice(PaletteColor),
                     default=defaults.note_symbol_color.value, show_default=True),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_preferences(values: dict[str, Any]) -> LayoutPreferences:
    return LayoutPreferences.from_mapping({key: value.lower() if isinstance(value, str) else value
                                           for key, value in values.items()})


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="snview")
@click.option("--verbose", "-v", is_flag=True, help="Log layout details to stderr.")
def main(verbose: bool) -> None:
    """snview — staff-less notation layout for MusicXML and MIDI scores."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


# ── render subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.argument("score_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file path. Defaults to extension based on --format.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json"], case_sensitive=False),
    default="html",
    show_default=True,
    help="Output format: self-contained HTML with inline SVG, or JSON primitives.",
)
@click.option("--width", type=click.IntRange(min=1), default=1000, show_default=True,
              help="Layout width in pixels.")
@click.option("--title", default=None, metavar="TEXT",
              help="Title shown in the header. Defaults to the score's own title.")
@_preference_options
def render(
    score_file: str,
    output: str | None,
    output_format: str,
    width: int,
    title: str | None,
    **preference_values: Any,
) -> None:
    """
    Lay out a score file as staff-less notation (HTML or JSON).

    SCORE_FILE is a MusicXML (.musicxml, .xml, .mxl) or MIDI file.

    \b
    Examples:
      snview render song.musicxml
      snview render song.mxl -o song.html --measures-per-row 3
      snview render song.mid --format json --width 1400
    """
    from snview.layout_exporter import LayoutExporter

    score_path = Path(score_file)
    normalized_format = output_format.lower()
    resolved_output = output if output is not None else str(score_path.with_suffix(f".{normalized_format}"))

    click.echo(f"snview v{__version__}")
    click.echo(f"  Score  : {score_file}")
    click.echo(f"  Format : {normalized_format}")
    click.echo(f"  Width  : {width}px")
    click.echo(f"  Output : {resolved_output}")
    click.echo()

    try:
        preferences = _build_preferences(preference_values)
        exporter = LayoutExporter(
            width=width,
            preferences=preferences,
            output_format=normalized_format,
            title=title,
        )
        click.echo("[1/3] Parsing score with music21...")
        click.echo("[2/3] Computing layout...")
        click.echo(f"[3/3] Writing {normalized_format.upper()} file...")
        exporter.export(score_file, resolved_output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)
    except ValueError as exc:
        click.echo(f"  ERROR: Could not lay out score — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  Open '{resolved_output}'.")


# ── inspect subcommand ────────────────────────────────────────────────────────

@main.command()
@click.argument("score_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option("--width", type=click.IntRange(min=1), default=1000, show_default=True)
@_preference_options
def inspect(score_file: str, width: int, **preference_values: Any) -> None:
    """
    Print the row/measure partition and line range of a score without writing output.
    """
    from snview.layout_exporter import LayoutExporter

    try:
        exporter = LayoutExporter(width=width, preferences=_build_preferences(preference_values))
        layout = exporter.layout(score_file)
    except ValueError as exc:
        click.echo(f"  ERROR: Could not lay out score — {exc}", err=True)
        sys.exit(1)

    plan = layout.row_plan
    line_range = layout.line_range
    caption = layout.header.caption
    click.echo(f"Title    : {caption.title or '-'}")
    click.echo(f"Author   : {caption.author or '-'}")
    click.echo(f"Measures : {sum(plan.row_sizes)}")
    click.echo(f"Rows     : {plan.row_count}  ({', '.join(str(size) for size in plan.row_sizes)})")
    click.echo(f"Lines    : {line_range.min_line}..{line_range.max_line}")
    for group in layout.measure_groups:
        tied = sum(1 for bar in group.bars if bar.spans_row)
        suffix = f"  [{tied} wraps]" if tied else ""
        click.echo(f"  m{group.number:<4} {group.beats} beats  {len(group.bars)} notes{suffix}")
