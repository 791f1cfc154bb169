"""Errors raised when a score cannot be laid out."""


class LayoutError(ValueError):
    """
    Base class for layout failures.

    A layout error means no layout is produced at all; callers are expected
    to fall back to an empty placeholder and show ``str(error)`` to the user.
    """

    category = "layout"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PitchRangeError(LayoutError):
    """The score has no notes, or a pitch lies outside the MIDI range."""

    category = "range"


class StructureError(LayoutError):
    """No measures were found across all tracks."""

    category = "structure"


class ConfigurationError(LayoutError):
    """A layout preference is outside its declared set of values."""

    category = "configuration"
