"""Line chart renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from mdchart.charts.base import BaseChart, max_over
from mdchart.charts.svg import SvgCanvas
from mdchart.core.constants import FALLBACK_SERIES_COLORS, ChartType

Point = Tuple[int, int]


@dataclass
class LineChart(BaseChart):
    chart_type = ChartType.LINE

    show_points: bool = True
    smooth: bool = False

    def show_data_points(self, show: bool) -> "LineChart":
        self.show_points = show
        return self

    def set_smooth(self, smooth: bool) -> "LineChart":
        self.smooth = smooth
        return self

    # ---------------------------
    # Geometry
    # ---------------------------

    def _max_value(self) -> float:
        if self.series:
            top = max_over([v for s in self.series for v in s.data])
        else:
            top = max_over(self.data)
        # 10% headroom; an all-zero chart still needs a non-zero scale
        return top * 1.1 if top > 0 else 1.0

    def x_at(self, index: int, count: int) -> int:
        chart_width, _ = self.plot_size()
        if count == 1:
            return self.margins.left + chart_width // 2
        return self.margins.left + index * chart_width // (count - 1)

    def points(self, values: Sequence[float], max_value: float) -> List[Point]:
        _, chart_height = self.plot_size()
        baseline = self.height - self.margins.bottom
        return [
            (self.x_at(i, len(values)), baseline - int(v / max_value * chart_height))
            for i, v in enumerate(values)
        ]

    def path_data(self, points: Sequence[Point]) -> str:
        """Straight segments, or quadratic Beziers through segment midpoints when smooth."""
        x0, y0 = points[0]
        d = [f"M{x0},{y0}"]
        last = len(points) - 1
        for i in range(1, len(points)):
            x1, y1 = points[i - 1]
            x2, y2 = points[i]
            if self.smooth and i < last:
                xc = (x1 + x2) // 2
                d.append(f" Q{xc},{y1} {xc},{(y1 + y2) // 2}")
                d.append(f" Q{xc},{y2} {x2},{y2}")
            else:
                d.append(f" L{x2},{y2}")
        return "".join(d)

    # ---------------------------
    # Render
    # ---------------------------

    def _draw_line(self, canvas: SvgCanvas, points: Sequence[Point], color: str) -> None:
        canvas.path(self.path_data(points), stroke=color, stroke_width=3)
        if self.show_points:
            for x, y in points:
                canvas.circle(x, y, 5, fill=color)

    def _draw_labels(self, canvas: SvgCanvas, count: int) -> None:
        y = self.height - self.margins.bottom + 20
        for i, label in enumerate(self.axis_labels(count)):
            canvas.text(self.x_at(i, count), y, label)

    def render(self) -> str:
        self.apply_auto_height()
        canvas = SvgCanvas(self).begin()
        max_value = self._max_value()
        canvas.axes()

        if self.series:
            for index, s in enumerate(self.series):
                if not s.data:
                    continue
                self._draw_line(canvas, self.points(s.data, max_value), self.series_color(index))

            if self.show_legend:
                self.draw_series_legend(canvas)

            count = max(len(s.data) for s in self.series)
            if self.labels and count > 0:
                self._draw_labels(canvas, count)
        elif self.data:
            color = self.colors[0] if self.colors else FALLBACK_SERIES_COLORS[0]
            self._draw_line(canvas, self.points(self.data, max_value), color)
            if self.labels:
                self._draw_labels(canvas, len(self.data))

        return canvas.finish()
