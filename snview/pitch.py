"""Pitch to vertical line mapping and accidental spelling."""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from snview.preferences import AccidentalMode

SEMITONES_PER_OCTAVE = 12
LINES_PER_OCTAVE = 7

#: Line offset within an octave for each pitch class (index 0 = C).
#: Black keys share the line of the natural just below them.
PITCH_CLASS_LINES: Final[tuple[int, ...]] = (0, 0, 1, 1, 2, 3, 3, 4, 4, 5, 5, 6)

#: Pitch classes that need an accidental (C#, D#, F#, G#, A#).
ACCIDENTAL_PITCH_CLASSES: Final[frozenset[int]] = frozenset({1, 3, 6, 8, 10})


class Accidental(IntEnum):
    FLAT = -1
    NATURAL = 0
    SHARP = 1


def line_of(pitch: int) -> int:
    """
    Map a MIDI pitch to its line on the vertical axis, ignoring spelling.

    C0 (MIDI 12) sits on line 0 and every octave adds seven lines, so
    ``line_of(p + 12) == line_of(p) + 7``.
    """
    octave = pitch // SEMITONES_PER_OCTAVE - 1
    return octave * LINES_PER_OCTAVE + PITCH_CLASS_LINES[pitch % SEMITONES_PER_OCTAVE]


def accidental_of(pitch: int, key_fifths: int) -> Accidental:
    """Spell a pitch from the key: sharps for sharp/neutral keys, flats otherwise."""
    if pitch % SEMITONES_PER_OCTAVE not in ACCIDENTAL_PITCH_CLASSES:
        return Accidental.NATURAL
    return Accidental.SHARP if key_fifths >= 0 else Accidental.FLAT


def head_accidental(pitch: int, key_fifths: int, mode: AccidentalMode) -> Accidental:
    """Accidental class used to pick a note-head shape; forced modes ignore the key."""
    accidental = accidental_of(pitch, key_fifths)
    if accidental is Accidental.NATURAL or mode is AccidentalMode.AUTO:
        return accidental
    return Accidental.SHARP if mode is AccidentalMode.SHARP else Accidental.FLAT


def display_line(pitch: int, key_fifths: int, mode: AccidentalMode) -> int:
    """
    Line a note is drawn on.

    A flat is drawn one line above its natural neighbour (D♭ shares the D
    line), so the line moves up when the spelling is flat: under ``auto``
    when the key has flats, under ``flat`` for every accidental pitch.
    """
    line = line_of(pitch)
    accidental = accidental_of(pitch, key_fifths)
    if mode is AccidentalMode.AUTO and accidental is Accidental.FLAT:
        line += 1
    elif mode is AccidentalMode.FLAT and accidental is not Accidental.NATURAL:
        line += 1
    return line
