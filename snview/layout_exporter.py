"""LayoutExporter: converts score files to HTML or JSON layout outputs."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Final

from snview.layout_engine import layout_score
from snview.layout_renderers import JsonLayoutRenderer, LayoutRenderer, SvgHtmlRenderer
from snview.preferences import LayoutPreferences
from snview.primitives import Layout
from snview.score_loader import ScoreLoader

SUPPORTED_FORMATS: Final[set[str]] = {"html", "json"}
DEFAULT_WIDTH: Final[int] = 1000

logger = logging.getLogger(__name__)


class LayoutExporter:
    """
    Lay out a score file at a fixed width and write it via a pluggable renderer.

    Supported formats:
    - ``html``: one inline SVG per row in a self-contained HTML file.
    - ``json``: the raw primitive stream, for other vector back ends.
    """

    def __init__(
        self,
        width: float = DEFAULT_WIDTH,
        preferences: LayoutPreferences | None = None,
        output_format: str = "html",
        title: str | None = None,
    ) -> None:
        self.width = width
        self.preferences = preferences or LayoutPreferences()
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)
        self.loader = ScoreLoader()

    def _build_renderer(self, output_format: str) -> LayoutRenderer:
        if output_format == "html":
            return SvgHtmlRenderer()
        return JsonLayoutRenderer()

    def layout(self, input_path: str) -> Layout:
        """
        Parse a score file and compute its layout.

        Raises:
            ValueError: If parsing fails or the score cannot be laid out
                        (``LayoutError`` is a ``ValueError``).
        """
        score, caption = self.loader.load(input_path)
        if self.title is not None:
            caption = replace(caption, title=self.title)
        return layout_score(score, self.width, self.preferences, caption)

    def export(self, input_path: str, output_path: str) -> None:
        """
        Convert a score file into the selected format and write it to disk.

        Raises:
            ValueError: If parsing or layout fails.
            OSError: If the output file cannot be written.
        """
        layout = self.layout(input_path)
        content = self.renderer.render(layout, title=layout.header.caption.title)

        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
        logger.info("Wrote %d row(s) to %s", len(layout.rows), output_path)
