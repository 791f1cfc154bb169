"""Title block: title/author resolution and header geometry."""

from __future__ import annotations

from typing import Iterable

from snview.primitives import Caption, Header, Text

AUTHOR_TARGET_LENGTH = 20

HEADER_HEIGHT = 180
TITLE_Y = 50
TITLE_FONT_SIZE = 40
FOOTER_Y = 170
FOOTER_FONT_SIZE = 25
FOOTER_INSET = 70


def resolve_title(movement_title: str | None, work_title: str | None) -> str:
    """Work title wins over movement title whenever both are present."""
    title = ""
    if movement_title:
        title = movement_title
    if work_title:
        title = work_title
    return title


def resolve_author(credit_words: Iterable[str]) -> str:
    """
    Guess the author among the score's credit texts.

    Picks the credit whose length is closest to 20 characters; ties keep
    the earlier credit.
    """
    author = ""
    for words in credit_words:
        if abs(len(words) - AUTHOR_TARGET_LENGTH) < abs(len(author) - AUTHOR_TARGET_LENGTH):
            author = words
    return author


def format_tempo(tempo_bpm: float) -> str:
    return f"{tempo_bpm:g} bpm"


def build_header(caption: Caption, width: float, padding_bottom: float) -> Header:
    return Header(
        caption=caption,
        width=width,
        height=HEADER_HEIGHT,
        padding_bottom=padding_bottom,
        texts=(
            Text(
                x=width / 2,
                y=TITLE_Y,
                text=caption.title,
                font_size=TITLE_FONT_SIZE,
                anchor="middle",
                baseline="hanging",
            ),
            Text(x=FOOTER_INSET, y=FOOTER_Y, text=format_tempo(caption.tempo_bpm), font_size=FOOTER_FONT_SIZE),
            Text(
                x=width - FOOTER_INSET,
                y=FOOTER_Y,
                text=caption.author,
                font_size=FOOTER_FONT_SIZE,
                anchor="end",
            ),
        ),
    )
