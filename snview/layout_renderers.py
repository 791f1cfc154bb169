"""Renderer implementations for layout output formats."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import asdict

from snview.primitives import (
    Circle,
    Header,
    Layout,
    Line,
    MeasureGroup,
    Path,
    Polygon,
    Rect,
    Row,
    Shape,
    Text,
    format_number,
)

_n = format_number


def _escape_html(text: str) -> str:
    """Escape the characters that are unsafe in HTML text and attribute content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


class LayoutRenderer(ABC):
    """Abstract layout renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, layout: Layout, *, title: str = "") -> str:
        """Render a layout into a file content string."""


class SvgHtmlRenderer(LayoutRenderer):
    """Render a layout into a self-contained HTML document with one inline SVG per row."""

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, layout: Layout, *, title: str = "") -> str:
        svgs = [self.header_svg(layout.header)]
        svgs += [self.row_svg(row) for row in layout.rows]
        paddings = [layout.header.padding_bottom] + [row.padding_bottom for row in layout.rows]
        return self.build_html(title, svgs, paddings, layout.vertical_padding)

    # ------------------------------------------------------------------
    # SVG building
    # ------------------------------------------------------------------

    def header_svg(self, header: Header) -> str:
        body = "".join(self.shape_svg(text) for text in header.texts)
        return self._svg(header.width, header.height, body)

    def row_svg(self, row: Row) -> str:
        labels = "".join(self.shape_svg(shape) for shape in row.labels)
        measures = "".join(self.measure_svg(measure) for measure in row.measures)
        body = (
            f'<g id="row{row.index}" transform="translate({_n(row.offset_x)}, 0)">'
            f"{labels}{measures}</g>"
        )
        return self._svg(row.width, row.height, body)

    def measure_svg(self, measure: MeasureGroup) -> str:
        frame = "".join(self.shape_svg(shape) for shape in measure.frame)
        bars = "".join(self.shape_svg(bar.path) for bar in measure.bars)
        heads = "".join(self.shape_svg(part) for head in measure.heads for part in head.parts)
        return (
            f'<g id="measure{measure.number}" transform="translate({_n(measure.x)}, {_n(measure.y)})">'
            f'<g id="frame">{frame}</g>'
            f'<g id="notes">{bars}{heads}</g>'
            "</g>"
        )

    def shape_svg(self, shape: Shape) -> str:
        if isinstance(shape, Rect):
            return (
                f'<rect x="{_n(shape.x)}" y="{_n(shape.y)}" width="{_n(shape.width)}" '
                f'height="{_n(shape.height)}"{self._paint(shape.fill, shape.stroke, shape.stroke_width)} />'
            )
        if isinstance(shape, Text):
            baseline = f' dominant-baseline="{shape.baseline}"' if shape.baseline else ""
            return (
                f'<text x="{_n(shape.x)}" y="{_n(shape.y)}" font-size="{_n(shape.font_size)}" '
                f'text-anchor="{shape.anchor}"{baseline}>{_escape_html(shape.text)}</text>'
            )
        if isinstance(shape, Line):
            return (
                f'<line x1="{_n(shape.x1)}" y1="{_n(shape.y1)}" x2="{_n(shape.x2)}" y2="{_n(shape.y2)}" '
                f'stroke="{shape.stroke}" stroke-width="{_n(shape.stroke_width)}" />'
            )
        if isinstance(shape, Circle):
            return (
                f'<circle cx="{_n(shape.cx)}" cy="{_n(shape.cy)}" r="{_n(shape.r)}"'
                f"{self._paint(shape.fill, shape.stroke, shape.stroke_width)} />"
            )
        if isinstance(shape, Polygon):
            points = " ".join(f"{_n(x)},{_n(y)}" for x, y in shape.points)
            return f'<polygon points="{points}" fill="{shape.fill}" />'
        if isinstance(shape, Path):
            return f'<path d="{shape.d}" fill="{shape.fill}" fill-opacity="{_n(shape.fill_opacity)}" />'
        raise TypeError(f"Unsupported primitive: {type(shape).__name__}")

    def _paint(self, fill: str | None, stroke: str | None, stroke_width: float) -> str:
        attrs = f' fill="{fill or "none"}"'
        if stroke:
            attrs += f' stroke="{stroke}" stroke-width="{_n(stroke_width)}"'
        return attrs

    def _svg(self, width: float, height: float, body: str) -> str:
        return f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_n(width)} {_n(height)}">{body}</svg>'

    def build_html(
        self,
        title: str,
        svgs: list[str],
        paddings: list[float] | None = None,
        vertical_padding: float = 0,
    ) -> str:
        """
        Wrap a list of row SVGs in a self-contained HTML document.

        Each SVG is placed in its own ``.snview-row`` div whose bottom padding
        is the row gap.
        """
        title_safe = _escape_html(title)
        paddings = paddings or [0.0] * len(svgs)
        rows = "\n".join(
            f'  <div class="snview-row snview-row-{index}" style="padding-bottom: {_n(padding)}px">{svg}</div>'
            for index, (svg, padding) in enumerate(zip(svgs, paddings))
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Georgia, serif;
      background: #fff;
      margin: 0;
    }}
    #snview {{
      width: 100%;
      min-width: 350px;
      overflow: hidden;
      padding-top: {_n(vertical_padding)}px;
      padding-bottom: {_n(vertical_padding)}px;
    }}
    .snview-row {{
      position: relative;
    }}
    .snview-row svg {{
      display: block;
      width: 100%;
      height: auto;
    }}
    @media print {{
      .snview-row {{
        page-break-inside: avoid;
      }}
    }}
  </style>
</head>
<body>
<div id="snview">
{rows}
</div>
</body>
</html>"""


class JsonLayoutRenderer(LayoutRenderer):
    """Dump the layout primitives as JSON for other vector back ends."""

    @property
    def default_extension(self) -> str:
        return ".json"

    def render(self, layout: Layout, *, title: str = "") -> str:
        payload = {"title": title, "layout": asdict(layout)}
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)
