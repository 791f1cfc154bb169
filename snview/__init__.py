"""snview: staff-less notation layout engine."""

__version__ = "0.1.0"
