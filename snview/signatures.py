"""Resolve the time and key signature active at a given measure."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from snview.score_models import KeySignature, TimeSignature, Track

S = TypeVar("S", TimeSignature, KeySignature)


@dataclass(frozen=True)
class ActiveSignatures:
    time: TimeSignature
    key: KeySignature


class _SignatureIndex(Generic[S]):
    """Signatures sorted by activation measure, searched with bisect."""

    def __init__(self, signatures: Sequence[S]) -> None:
        if not signatures:
            raise ValueError("At least one signature is required.")
        self._first_declared = signatures[0]
        # sorted() is stable: among equal activations the later-declared wins
        self._ordered = sorted(signatures, key=lambda sig: sig.measure)
        self._starts = [sig.measure for sig in self._ordered]

    def at(self, measure_index: int) -> S:
        pos = bisect_right(self._starts, measure_index)
        if pos == 0:
            # Signatures declared from measure 1 onwards still cover measure 0
            return self._first_declared
        return self._ordered[pos - 1]


class SignatureResolver:
    """
    Answers "which signatures apply to measure i?" for one track.

    A signature applies from its activation measure until a signature with a
    later activation measure takes over, regardless of declaration order.
    When nothing has activated yet, the first declared signature is used.
    """

    def __init__(self, track: Track) -> None:
        self._times: _SignatureIndex[TimeSignature] = _SignatureIndex(track.time_signatures)
        self._keys: _SignatureIndex[KeySignature] = _SignatureIndex(track.key_signatures)

    def at(self, measure_index: int) -> ActiveSignatures:
        return ActiveSignatures(
            time=self._times.at(measure_index),
            key=self._keys.at(measure_index),
        )

    def beats(self, measure_index: int) -> int:
        return self._times.at(measure_index).beats

    def key_fifths(self, measure_index: int) -> int:
        return self._keys.at(measure_index).fifths

    def beat_width(self, measure_index: int, measure_width: float) -> float:
        """Pixel width of one beat in the given measure."""
        return measure_width / self.beats(measure_index)
