"""Pie and donut chart renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from mdchart.charts.base import BaseChart, Margins
from mdchart.charts.svg import SvgCanvas
from mdchart.core.constants import (
    DEFAULT_MAX_LABEL_LENGTH,
    MAX_DONUT_HOLE,
    PIE_RIGHT_MARGIN,
    ChartType,
)

SMALL_SLICE = math.pi / 6  # 30 degrees: label sits closer to the centre
TINY_SLICE = math.pi / 15  # 12 degrees: label collapses to a dot
FULL_CIRCLE = 2 * math.pi


@dataclass(frozen=True)
class PieSlice:
    value: float
    start_angle: float
    sweep: float
    percentage: float

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep


def clamp_donut_hole(fraction: float) -> float:
    return min(max(fraction, 0.0), MAX_DONUT_HOLE)


@dataclass
class PieChart(BaseChart):
    chart_type = ChartType.PIE

    margins: Margins = field(default_factory=lambda: Margins(right=PIE_RIGHT_MARGIN))
    donut_hole: float = 0.0
    max_label_length: int = DEFAULT_MAX_LABEL_LENGTH
    show_tooltips: bool = True

    def add_series(self, name: str, data: Sequence[float]) -> "PieChart":
        # one ring only: a new series replaces the slices
        self.data = [float(v) for v in data]
        return self

    def set_series_colors(self, colors: Sequence[str]) -> "PieChart":
        self.colors = list(colors)
        return self

    def set_donut_hole(self, fraction: float) -> "PieChart":
        self.donut_hole = clamp_donut_hole(fraction)
        return self

    def set_max_label_length(self, length: int) -> "PieChart":
        self.max_label_length = length
        return self

    def enable_tooltips(self, enable: bool) -> "PieChart":
        self.show_tooltips = enable
        return self

    def slices(self) -> List[PieSlice]:
        """Slices in input order; empty when the total is not positive."""
        total = sum(self.data)
        if not self.data or total <= 0:
            return []

        out: List[PieSlice] = []
        start = 0.0
        for v in self.data:
            sweep = v / total * 2 * math.pi
            out.append(PieSlice(value=v, start_angle=start, sweep=sweep, percentage=v / total * 100))
            start += sweep
        return out

    def legend_label(self, label: str) -> str:
        if self.max_label_length > 0 and len(label) > self.max_label_length:
            return label[: self.max_label_length] + "…"
        return label

    # ---------------------------
    # Render
    # ---------------------------

    def _ring_path(self, cx: int, cy: int, radius: int, inner: int) -> str:
        """Whole disc, or annulus for a donut, drawn as pairs of half-circle arcs."""
        d = (
            f"M{cx + radius},{cy} A{radius},{radius} 0 1,1 {cx - radius},{cy} "
            f"A{radius},{radius} 0 1,1 {cx + radius},{cy} Z"
        )
        if self.donut_hole > 0 and inner > 0:
            # opposite winding cuts the hole out
            d += (
                f" M{cx + inner},{cy} A{inner},{inner} 0 1,0 {cx - inner},{cy} "
                f"A{inner},{inner} 0 1,0 {cx + inner},{cy} Z"
            )
        return d

    def _wedge_path(self, cx: int, cy: int, radius: int, inner: int, s: PieSlice) -> str:
        if s.sweep >= FULL_CIRCLE - 1e-9:
            return self._ring_path(cx, cy, radius, inner)

        x1 = cx + int(math.cos(s.start_angle) * radius)
        y1 = cy + int(math.sin(s.start_angle) * radius)
        x2 = cx + int(math.cos(s.end_angle) * radius)
        y2 = cy + int(math.sin(s.end_angle) * radius)
        large_arc = 1 if s.sweep > math.pi else 0

        if self.donut_hole > 0:
            x1i = cx + int(math.cos(s.start_angle) * inner)
            y1i = cy + int(math.sin(s.start_angle) * inner)
            x2i = cx + int(math.cos(s.end_angle) * inner)
            y2i = cy + int(math.sin(s.end_angle) * inner)
            return (
                f"M{x1i},{y1i} L{x1},{y1} A{radius},{radius} 0 {large_arc},1 {x2},{y2} "
                f"L{x2i},{y2i} A{inner},{inner} 0 {large_arc},0 {x1i},{y1i} Z"
            )
        return f"M{cx},{cy} L{x1},{y1} A{radius},{radius} 0 {large_arc},1 {x2},{y2} L{cx},{cy} Z"

    def _draw_percentage(self, canvas: SvgCanvas, cx: int, cy: int, radius: int, s: PieSlice) -> None:
        mid = s.start_angle + s.sweep / 2
        distance = radius * (0.6 if s.sweep < SMALL_SLICE else 0.7)
        x = cx + int(math.cos(mid) * distance)
        y = cy + int(math.sin(mid) * distance)
        full = f"{s.percentage:.1f}%"

        if s.sweep < TINY_SLICE:
            # under 12 degrees is always under 5%: no room for text
            canvas.circle(x, y, 4, fill="white", tooltip=full)
        else:
            canvas.text(x, y, full, fill="white", themed=False)

    def _draw_legend(self, canvas: SvgCanvas, labels: List[str]) -> None:
        m = self.margins
        palette = self.palette()
        legend_x = self.width - m.right + 20
        legend_y = m.top
        legend_height = len(labels) * 25
        if legend_y + legend_height > self.height - m.bottom:
            legend_y = max(m.top, self.height - m.bottom - legend_height)

        for i, label in enumerate(labels):
            shown = self.legend_label(label)
            canvas.rect(legend_x, legend_y, 15, 15, fill=palette[i % len(palette)])
            tooltip = label if (self.show_tooltips and shown != label) else None
            canvas.text(legend_x + 20, legend_y + 12, shown, anchor=None, tooltip=tooltip)
            legend_y += 25

    def render(self) -> str:
        self.apply_auto_height()
        canvas = SvgCanvas(self).begin()

        m = self.margins
        cx, cy = self.width // 2, self.height // 2
        radius = min(self.width - m.left - m.right, self.height - m.top - m.bottom) // 2
        inner = int(radius * self.donut_hole)
        palette = self.palette()

        slices = self.slices()
        for i, s in enumerate(slices):
            canvas.path(self._wedge_path(cx, cy, radius, inner, s), fill=palette[i % len(palette)])
            self._draw_percentage(canvas, cx, cy, radius, s)

        if slices and self.show_legend and self.labels:
            self._draw_legend(canvas, self.axis_labels(len(self.data)))

        return canvas.finish()
