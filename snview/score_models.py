"""Data models for the parsed score consumed by the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Tie(Enum):
    """Tie marker carried by a note."""

    START = "start"
    STOP = "stop"


@dataclass(frozen=True)
class Note:
    """
    A single sounding pitch inside a measure.

    Attributes:
        pitch:    MIDI pitch number (0-127).
        time:     Onset in beats, relative to the start of its measure.
        duration: Length in beats.
        ties:     Tie markers; both START and STOP means a mid-sequence note.
    """

    pitch: int
    time: float
    duration: float
    ties: frozenset[Tie] = field(default_factory=frozenset)

    @property
    def tie_start(self) -> bool:
        return Tie.START in self.ties

    @property
    def tie_stop(self) -> bool:
        return Tie.STOP in self.ties

    @property
    def end(self) -> float:
        return self.time + self.duration


@dataclass(frozen=True)
class TimeSignature:
    """Beats per measure, active from ``measure`` onwards."""

    beats: int
    measure: int = 0


@dataclass(frozen=True)
class KeySignature:
    """Sharps (positive) or flats (negative), active from ``measure`` onwards."""

    fifths: int
    measure: int = 0


@dataclass(frozen=True)
class Track:
    """One part of the score: its measures and signature changes."""

    measures: tuple[tuple[Note, ...], ...]
    time_signatures: tuple[TimeSignature, ...] = (TimeSignature(beats=4),)
    key_signatures: tuple[KeySignature, ...] = (KeySignature(fifths=0),)


@dataclass(frozen=True)
class Score:
    """Ordered collection of tracks, as produced by the score loader."""

    tracks: tuple[Track, ...]

    @property
    def measure_count(self) -> int:
        """Number of measures in the longest track."""
        return max((len(track.measures) for track in self.tracks), default=0)

    def notes(self) -> list[Note]:
        """Every note of every track, in track/measure order."""
        return [note for track in self.tracks for measure in track.measures for note in measure]
