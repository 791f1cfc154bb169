"""Shared score builders and fixture files for the layout tests."""

from snview.score_models import KeySignature, Note, Score, Tie, TimeSignature, Track


def make_note(pitch: int, time: float, duration: float, *ties: Tie) -> Note:
    return Note(pitch=pitch, time=time, duration=duration, ties=frozenset(ties))


def make_score(
    *measures: list[Note],
    beats: int = 4,
    fifths: int = 0,
    time_signatures: tuple[TimeSignature, ...] | None = None,
    key_signatures: tuple[KeySignature, ...] | None = None,
) -> Score:
    track = Track(
        measures=tuple(tuple(measure) for measure in measures),
        time_signatures=time_signatures or (TimeSignature(beats=beats, measure=0),),
        key_signatures=key_signatures or (KeySignature(fifths=fifths, measure=0),),
    )
    return Score(tracks=(track,))


MUSICXML = """<?xml version="1.0" encoding="UTF-8"?>
<score-partwise version="3.1">
  <work><work-title>Little Tune</work-title></work>
  <part-list>
    <score-part id="P1"><part-name>Piano</part-name></score-part>
  </part-list>
  <part id="P1">
    <measure number="1">
      <attributes>
        <divisions>1</divisions>
        <key><fifths>0</fifths></key>
        <time><beats>4</beats><beat-type>4</beat-type></time>
        <clef><sign>G</sign><line>2</line></clef>
      </attributes>
      <note><pitch><step>C</step><octave>4</octave></pitch><duration>2</duration><type>half</type></note>
      <note>
        <pitch><step>E</step><octave>4</octave></pitch><duration>2</duration><type>half</type>
        <tie type="start"/><notations><tied type="start"/></notations>
      </note>
    </measure>
    <measure number="2">
      <note>
        <pitch><step>E</step><octave>4</octave></pitch><duration>2</duration><type>half</type>
        <tie type="stop"/><notations><tied type="stop"/></notations>
      </note>
      <note><pitch><step>G</step><octave>4</octave></pitch><duration>2</duration><type>half</type></note>
    </measure>
  </part>
</score-partwise>
"""


DRUMS_MUSICXML = """<?xml version="1.0" encoding="UTF-8"?>
<score-partwise version="3.1">
  <part-list>
    <score-part id="P1"><part-name>Drums</part-name></score-part>
  </part-list>
  <part id="P1">
    <measure number="1">
      <attributes>
        <divisions>1</divisions>
        <time><beats>4</beats><beat-type>4</beat-type></time>
        <clef><sign>percussion</sign></clef>
      </attributes>
      <note>
        <unpitched><display-step>C</display-step><display-octave>5</display-octave></unpitched>
        <duration>4</duration><type>whole</type>
      </note>
    </measure>
  </part>
</score-partwise>
"""
