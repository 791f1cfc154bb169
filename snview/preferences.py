"""Layout preferences and their resolution into numeric layout parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Mapping, TypeVar

from snview.errors import ConfigurationError


class ScalePreference(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class SpacingPreference(str, Enum):
    NARROW = "narrow"
    MODERATE = "moderate"
    WIDE = "wide"


class AccidentalMode(str, Enum):
    """How accidental pitch classes are spelled: follow the key, or force one."""

    AUTO = "auto"
    SHARP = "sharp"
    FLAT = "flat"


class ShapeKind(str, Enum):
    """Note-head shape variants."""

    TRIANGLE_UP = "triangle-up"
    TRIANGLE_DOWN = "triangle-down"
    HOLLOW_CIRCLE = "hollow-circle"
    CIRCLE = "circle"
    SQUARE = "square"
    HOLLOW_SQUARE = "hollow-square"
    CROSSED_CIRCLE = "crossed-circle"

    @property
    def symbol(self) -> str:
        """Display glyph shown for this shape in a preferences menu."""
        return _SHAPE_SYMBOLS[self]


_SHAPE_SYMBOLS: Final[dict[ShapeKind, str]] = {
    ShapeKind.TRIANGLE_UP: "▲",
    ShapeKind.TRIANGLE_DOWN: "▼",
    ShapeKind.HOLLOW_CIRCLE: "○",
    ShapeKind.CIRCLE: "●",
    ShapeKind.SQUARE: "◼",
    ShapeKind.HOLLOW_SQUARE: "□",
    ShapeKind.CROSSED_CIRCLE: "⨂",
}


class PaletteColor(str, Enum):
    BLACK = "black"
    GREY = "grey"
    RED = "red"
    ORANGE = "orange"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"

    @property
    def css(self) -> str:
        return PALETTE[self]


PALETTE: Final[dict[PaletteColor, str]] = {
    PaletteColor.BLACK: "#000000",
    PaletteColor.GREY: "#808080",
    PaletteColor.RED: "#e53935",
    PaletteColor.ORANGE: "#fb8c00",
    PaletteColor.GREEN: "#43a047",
    PaletteColor.BLUE: "#1e88e5",
    PaletteColor.PURPLE: "#8e24aa",
}


@dataclass(frozen=True)
class LayoutPreferences:
    """User-facing style options. Every field is drawn from a closed set."""

    note_scale: ScalePreference = ScalePreference.MEDIUM
    staff_scale: ScalePreference = ScalePreference.MEDIUM
    horizontal_spacing: SpacingPreference = SpacingPreference.MODERATE
    vertical_spacing: SpacingPreference = SpacingPreference.MODERATE
    accidental_type: AccidentalMode = AccidentalMode.AUTO
    measures_per_row: int = 4
    natural_note_shape: ShapeKind = ShapeKind.CIRCLE
    sharp_note_shape: ShapeKind = ShapeKind.TRIANGLE_UP
    flat_note_shape: ShapeKind = ShapeKind.TRIANGLE_DOWN
    note_duration_color: PaletteColor = PaletteColor.BLUE
    note_symbol_color: PaletteColor = PaletteColor.BLACK

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> LayoutPreferences:
        """
        Build preferences from a plain mapping, e.g. a stored settings record.

        Keys may be snake_case or camelCase (``noteScale``). Shape values may
        be given by name or by display glyph.

        Raises:
            ConfigurationError: On an unknown key or an out-of-set value.
        """
        kwargs: dict[str, Any] = {}
        for raw_key, raw_value in values.items():
            key = _snake_case(raw_key)
            if key not in _FIELD_TYPES:
                raise ConfigurationError(f"Unknown layout preference '{raw_key}'.")
            field_type = _FIELD_TYPES[key]
            if field_type is int:
                kwargs[key] = _positive_int(key, raw_value)
            else:
                kwargs[key] = _coerce_enum(field_type, key, raw_value)
        return cls(**kwargs)


_FIELD_TYPES: Final[dict[str, type]] = {
    "note_scale": ScalePreference,
    "staff_scale": ScalePreference,
    "horizontal_spacing": SpacingPreference,
    "vertical_spacing": SpacingPreference,
    "accidental_type": AccidentalMode,
    "measures_per_row": int,
    "natural_note_shape": ShapeKind,
    "sharp_note_shape": ShapeKind,
    "flat_note_shape": ShapeKind,
    "note_duration_color": PaletteColor,
    "note_symbol_color": PaletteColor,
}

E = TypeVar("E", bound=Enum)


def _snake_case(key: str) -> str:
    return "".join(f"_{ch.lower()}" if ch.isupper() else ch for ch in key)


def _coerce_enum(enum_type: type[E], name: str, value: Any) -> E:
    if isinstance(value, enum_type):
        return value
    if enum_type is ShapeKind:
        for shape, symbol in _SHAPE_SYMBOLS.items():
            if value == symbol:
                return shape  # type: ignore[return-value]
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(str(member.value) for member in enum_type)
        raise ConfigurationError(
            f"Invalid value {value!r} for '{name}'. Use one of: {allowed}."
        ) from None


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"'{name}' must be a positive integer, got {value!r}.")
    return value


# ── Numeric parameters ──────────────────────────────────────────────────────

NOTE_SCALE_SIZES: Final[dict[ScalePreference, float]] = {
    ScalePreference.SMALL: 15,
    ScalePreference.MEDIUM: 20,
    ScalePreference.LARGE: 25,
}
STAFF_SCALE_SIZES: Final[dict[ScalePreference, float]] = {
    ScalePreference.SMALL: 18,
    ScalePreference.MEDIUM: 25,
    ScalePreference.LARGE: 32,
}
VERTICAL_SPACING: Final[dict[SpacingPreference, float]] = {
    SpacingPreference.NARROW: 10,
    SpacingPreference.MODERATE: 30,
    SpacingPreference.WIDE: 50,
}
HORIZONTAL_SPACING: Final[dict[SpacingPreference, float]] = {
    SpacingPreference.NARROW: 20,
    SpacingPreference.MODERATE: 40,
    SpacingPreference.WIDE: 60,
}

STROKE_WIDTH = 2
TICK_SIZE = 7
VERTICAL_PADDING = 30  # top/bottom of the whole document
MEASURE_LABEL_SPACE = 15
HEAD_STROKE_WIDTH = 3
DURATION_OPACITY = 0.5

# Grand-staff gap: dynamics band + lyrics band + padding on both sides
DYNAMICS_SPACE = 20
LYRICS_SPACE = 20
STAFF_PADDING = 5


@dataclass(frozen=True)
class LayoutParameters:
    """Flat record of numeric constants for one layout pass."""

    note_size: float
    stroke_width: float
    tick_size: float
    vertical_padding: float
    row_padding: float
    measure_label_space: float
    staff_distance: float  # gap between staves; single-staff rows do not read it
    horizontal_padding: float
    staff_label_space: float
    octave_label_space: float
    head_stroke_width: float
    duration_opacity: float
    duration_color: str
    symbol_color: str


def resolve_parameters(preferences: LayoutPreferences) -> LayoutParameters:
    """
    Turn style enums into the numeric constants used by the layout engine.

    Raises:
        ConfigurationError: If any preference lies outside its declared set.
    """
    try:
        note_size = NOTE_SCALE_SIZES[ScalePreference(preferences.note_scale)]
        staff_label_space = STAFF_SCALE_SIZES[ScalePreference(preferences.staff_scale)]
        row_padding = VERTICAL_SPACING[SpacingPreference(preferences.vertical_spacing)]
        horizontal_padding = HORIZONTAL_SPACING[SpacingPreference(preferences.horizontal_spacing)]
        AccidentalMode(preferences.accidental_type)
        for shape in (
            preferences.natural_note_shape,
            preferences.sharp_note_shape,
            preferences.flat_note_shape,
        ):
            ShapeKind(shape)
        duration_color = PaletteColor(preferences.note_duration_color).css
        symbol_color = PaletteColor(preferences.note_symbol_color).css
    except ValueError as exc:
        raise ConfigurationError(f"Invalid layout preference: {exc}") from None
    _positive_int("measures_per_row", preferences.measures_per_row)

    return LayoutParameters(
        note_size=note_size,
        stroke_width=STROKE_WIDTH,
        tick_size=TICK_SIZE,
        vertical_padding=VERTICAL_PADDING,
        row_padding=row_padding,
        measure_label_space=MEASURE_LABEL_SPACE,
        staff_distance=DYNAMICS_SPACE + LYRICS_SPACE + 2 * STAFF_PADDING,
        horizontal_padding=horizontal_padding,
        staff_label_space=staff_label_space,
        octave_label_space=MEASURE_LABEL_SPACE,
        head_stroke_width=HEAD_STROKE_WIDTH,
        duration_opacity=DURATION_OPACITY,
        duration_color=duration_color,
        symbol_color=symbol_color,
    )
