"""Unit tests for the pitch/line mapper."""

import pytest

from snview.pitch import Accidental, accidental_of, display_line, head_accidental, line_of
from snview.preferences import AccidentalMode

ACCIDENTAL_CLASSES = (1, 3, 6, 8, 10)


def test_c0_is_line_zero() -> None:
    assert line_of(12) == 0


def test_middle_c_and_neighbours() -> None:
    assert line_of(60) == 28
    assert line_of(61) == 28  # C# shares the C line
    assert line_of(62) == 29
    assert line_of(65) == 31
    assert line_of(71) == 34


def test_lowest_midi_pitches_are_below_c0() -> None:
    assert line_of(0) == -7
    assert line_of(11) == -1


def test_octave_equivalence() -> None:
    for pitch in range(0, 116):
        assert line_of(pitch + 12) == line_of(pitch) + 7


def test_sharp_keys_spell_accidentals_as_sharps() -> None:
    for fifths in range(0, 8):
        for pitch_class in ACCIDENTAL_CLASSES:
            assert accidental_of(60 + pitch_class, fifths) is Accidental.SHARP


def test_flat_keys_spell_accidentals_as_flats() -> None:
    for fifths in range(-7, 0):
        for pitch_class in ACCIDENTAL_CLASSES:
            assert accidental_of(60 + pitch_class, fifths) is Accidental.FLAT


def test_naturals_ignore_the_key() -> None:
    for fifths in (-3, 0, 3):
        for pitch_class in (0, 2, 4, 5, 7, 9, 11):
            assert accidental_of(48 + pitch_class, fifths) is Accidental.NATURAL


def test_auto_flat_moves_up_one_line() -> None:
    assert display_line(61, -1, AccidentalMode.AUTO) == 29  # D flat on the D line
    assert display_line(61, 1, AccidentalMode.AUTO) == 28  # C sharp on the C line


def test_forced_flat_moves_every_accidental_up() -> None:
    assert display_line(61, 2, AccidentalMode.FLAT) == 29
    assert display_line(60, 2, AccidentalMode.FLAT) == 28


def test_forced_sharp_keeps_line_even_in_flat_key() -> None:
    assert display_line(70, -4, AccidentalMode.SHARP) == line_of(70)


@pytest.mark.parametrize(
    "mode, fifths, expected",
    [
        (AccidentalMode.AUTO, 0, Accidental.SHARP),
        (AccidentalMode.AUTO, -2, Accidental.FLAT),
        (AccidentalMode.SHARP, -2, Accidental.SHARP),
        (AccidentalMode.FLAT, 3, Accidental.FLAT),
    ],
)
def test_head_accidental_modes(mode: AccidentalMode, fifths: int, expected: Accidental) -> None:
    assert head_accidental(66, fifths, mode) is expected
    assert head_accidental(67, fifths, mode) is Accidental.NATURAL
