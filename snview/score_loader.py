"""ScoreLoader: parses MusicXML or MIDI files into the layout score model via music21."""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, Final

from snview.caption import resolve_author, resolve_title
from snview.primitives import Caption
from snview.score_models import KeySignature, Note, Score, Tie, TimeSignature, Track

logger = logging.getLogger(__name__)

DEFAULT_TEMPO_BPM: Final[float] = 60
QUARTERS_PER_WHOLE = 4

_TIE_TYPES: Final[dict[str, frozenset[Tie]]] = {
    "start": frozenset({Tie.START}),
    "stop": frozenset({Tie.STOP}),
    "continue": frozenset({Tie.START, Tie.STOP}),
}


class ScoreLoader:
    """
    Convert a music21 stream into a :class:`Score` and a :class:`Caption`.

    Times are converted from quarter lengths to beats of the time signature
    active in each measure, so a 6/8 measure spans six beats.
    """

    def load(self, path: str) -> tuple[Score, Caption]:
        """
        Parse a score file (any format music21 reads: MusicXML, MXL, MIDI).

        Raises:
            ValueError: If music21 cannot parse the file.
        """
        m21_score = self._parse(path)
        score = self.to_score(m21_score)
        logger.info("Loaded %s: %d track(s), %d measure(s)", path, len(score.tracks), score.measure_count)
        return score, self.extract_caption(m21_score)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _parse(self, path: str) -> Any:
        from music21 import converter

        try:
            return converter.parse(path)
        except Exception as exc:
            raise ValueError(f"music21 could not parse '{path}': {exc}") from exc

    def _parts(self, m21_score: Any) -> list[Any]:
        parts = list(getattr(m21_score, "parts", []) or [])
        return parts or [m21_score]

    def _measures(self, part: Any) -> list[Any]:
        measures = list(part.getElementsByClass("Measure"))
        if not measures:
            measures = list(part.makeMeasures(inPlace=False).getElementsByClass("Measure"))
        return measures

    def _note_ties(self, element: Any, chord_tie: Any = None) -> frozenset[Tie]:
        tie = getattr(element, "tie", None) or chord_tie
        if tie is None:
            return frozenset()
        return _TIE_TYPES.get(str(tie.type), frozenset())

    def _to_beats(self, quarter_length: Any, beat_unit: int) -> float:
        return float(Fraction(quarter_length) * beat_unit / QUARTERS_PER_WHOLE)

    def _measure_notes(self, measure: Any, beat_unit: int) -> tuple[Note, ...]:
        from music21 import note

        notes: list[Note] = []
        for element in measure.flatten().notes:
            # Percussion hits carry no pitch and have no line to sit on.
            if element.duration.isGrace or isinstance(element, note.Unpitched):
                continue
            time = self._to_beats(element.offset, beat_unit)
            duration = self._to_beats(element.duration.quarterLength, beat_unit)
            if element.isChord:
                for chord_note in element.notes:
                    if isinstance(chord_note, note.Unpitched):
                        continue
                    notes.append(
                        Note(
                            pitch=int(chord_note.pitch.midi),
                            time=time,
                            duration=duration,
                            ties=self._note_ties(chord_note, element.tie),
                        )
                    )
            else:
                notes.append(
                    Note(
                        pitch=int(element.pitch.midi),
                        time=time,
                        duration=duration,
                        ties=self._note_ties(element),
                    )
                )
        return tuple(notes)

    def _part_to_track(self, part: Any) -> Track:
        time_signatures: list[TimeSignature] = []
        key_signatures: list[KeySignature] = []
        measures: list[tuple[Note, ...]] = []
        beat_unit = QUARTERS_PER_WHOLE

        for index, measure in enumerate(self._measures(part)):
            ts = measure.timeSignature
            if ts is not None:
                time_signatures.append(TimeSignature(beats=max(1, int(ts.numerator)), measure=index))
                beat_unit = max(1, int(ts.denominator))
            ks = measure.keySignature
            if ks is not None:
                key_signatures.append(KeySignature(fifths=int(ks.sharps), measure=index))
            measures.append(self._measure_notes(measure, beat_unit))

        return Track(
            measures=tuple(measures),
            time_signatures=tuple(time_signatures) or (TimeSignature(beats=4, measure=0),),
            key_signatures=tuple(key_signatures) or (KeySignature(fifths=0, measure=0),),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def to_score(self, m21_score: Any) -> Score:
        """Convert a parsed music21 score (or single part) into a :class:`Score`."""
        return Score(tracks=tuple(self._part_to_track(part) for part in self._parts(m21_score)))

    def extract_caption(self, m21_score: Any) -> Caption:
        """
        Best-effort title, author and tempo; each falls back independently.

        Metadata layouts vary a lot between files, so a failure here only
        blanks the affected field.
        """
        title = ""
        try:
            metadata = m21_score.metadata
            title = resolve_title(metadata.movementName, metadata.title)
        except Exception:
            logger.warning("Could not read the title from the score metadata.")

        author = ""
        try:
            credits = [str(box.content) for box in m21_score.getElementsByClass("TextBox")]
            author = resolve_author(words for words in credits if words)
        except Exception:
            logger.warning("Could not read credit texts from the score.")

        tempo = DEFAULT_TEMPO_BPM
        try:
            marks = list(m21_score.recurse().getElementsByClass("MetronomeMark"))
            if marks and marks[0].number:
                tempo = float(marks[0].number)
        except Exception:
            logger.warning("Could not read the tempo from the score.")

        return Caption(title=title, author=author, tempo_bpm=tempo)
