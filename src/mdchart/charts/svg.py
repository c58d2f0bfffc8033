"""Text emitter for the fixed, shallow SVG documents the charts produce."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from xml.sax.saxutils import escape

if TYPE_CHECKING:
    from mdchart.charts.base import BaseChart

THEMED_TEXT = "var(--chart-text)"

_STYLE_TEMPLATE = (
    "<style>"
    ":root {{ --chart-bg: {lb}; --chart-text: {lt}; --chart-axis: {la}; --chart-grid: {lg}; }} "
    "@media (prefers-color-scheme: dark) {{ "
    ":root {{ --chart-bg: {db}; --chart-text: {dt}; --chart-axis: {da}; --chart-grid: {dg}; }} "
    "}}"
    "</style>"
)


class SvgCanvas:
    """
    Appends SVG fragments in document order and joins them on `finish()`.

    Text colour follows the chart theme: with dark mode on, themed text uses
    the `--chart-text` variable; otherwise the static `fill` (if any).
    """

    def __init__(self, chart: "BaseChart") -> None:
        self.chart = chart
        self.width = chart.width
        self.height = chart.height
        self.themed = chart.dark_mode
        self._parts: List[str] = []

    def begin(self) -> "SvgCanvas":
        c = self.chart
        self._parts.append(
            f'<svg width="100%" height="auto" viewBox="0 0 {self.width} {self.height}" '
            f'preserveAspectRatio="xMidYMid meet" xmlns="http://www.w3.org/2000/svg">'
        )
        if self.themed:
            lt, dt = c.light_theme, c.dark_theme
            self._parts.append(
                _STYLE_TEMPLATE.format(
                    lb=lt.background, lt=lt.text, la=lt.axis, lg=lt.grid,
                    db=dt.background, dt=dt.text, da=dt.axis, dg=dt.grid,
                )
            )
            self.rect(None, None, self.width, self.height, fill="var(--chart-bg)")
        else:
            self.rect(None, None, self.width, self.height, fill=c.background_color)

        if c.show_title and c.title:
            self.text(self.width // 2, 30, c.title, size=20, bold=True)
        return self

    def finish(self) -> str:
        self._parts.append("</svg>")
        return "".join(self._parts)

    # ---------------------------
    # Primitives
    # ---------------------------

    def rect(
        self,
        x: Optional[int],
        y: Optional[int],
        width: int,
        height: int,
        fill: str,
        rounding: Optional[int] = None,
        tooltip: Optional[str] = None,
    ) -> None:
        attrs = []
        if x is not None:
            attrs.append(f'x="{x}" y="{y}"')
        attrs.append(f'width="{width}" height="{height}"')
        if rounding is not None:
            attrs.append(f'rx="{rounding}" ry="{rounding}"')
        attrs.append(f'fill="{fill}"')
        head = "<rect " + " ".join(attrs)
        if tooltip is None:
            self._parts.append(head + "/>")
        else:
            self._parts.append(f"{head}><title>{escape(tooltip)}</title></rect>")

    def line(self, x1: int, y1: int, x2: int, y2: int, width: int = 2) -> None:
        stroke = "var(--chart-axis)" if self.themed else "black"
        self._parts.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" stroke="{stroke}" stroke-width="{width}"/>'
        )

    def path(self, d: str, fill: str = "none", stroke: Optional[str] = None, stroke_width: int = 3) -> None:
        if stroke is None:
            self._parts.append(f'<path d="{d}" fill="{fill}"/>')
        else:
            self._parts.append(
                f'<path d="{d}" fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
            )

    def circle(self, cx: int, cy: int, r: int, fill: str, tooltip: Optional[str] = None) -> None:
        if tooltip is None:
            self._parts.append(f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="{fill}"/>')
        else:
            self._parts.append(
                f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="{fill}"><title>{escape(tooltip)}</title></circle>'
            )

    def text(
        self,
        x: int,
        y: int,
        content: str,
        *,
        size: int = 12,
        anchor: Optional[str] = "middle",
        fill: Optional[str] = None,
        themed: bool = True,
        bold: bool = False,
        tooltip: Optional[str] = None,
    ) -> None:
        attrs = [f'x="{x}" y="{y}"']
        if anchor:
            attrs.append(f'text-anchor="{anchor}"')
        attrs.append(f'font-family="Arial" font-size="{size}"')
        if bold:
            attrs.append('font-weight="bold"')
        colour = THEMED_TEXT if (themed and self.themed) else fill
        if colour:
            attrs.append(f'fill="{colour}"')
        body = escape(content)
        if tooltip is not None:
            body += f"<title>{escape(tooltip)}</title>"
        self._parts.append(f"<text {' '.join(attrs)}>{body}</text>")

    # ---------------------------
    # Composite pieces
    # ---------------------------

    def axes(self) -> None:
        m = self.chart.margins
        baseline = self.height - m.bottom
        self.line(m.left, baseline, self.width - m.right, baseline)
        self.line(m.left, m.top, m.left, baseline)
