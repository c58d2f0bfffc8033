"""Bar chart renderer: single series, grouped or stacked."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from mdchart.charts.base import BaseChart, max_over
from mdchart.charts.svg import SvgCanvas
from mdchart.core.constants import ChartType


@dataclass
class BarChart(BaseChart):
    chart_type = ChartType.BAR

    # not rendered: bars are always vertical
    horizontal: bool = False
    stacked: bool = False

    def set_horizontal(self, horizontal: bool) -> "BarChart":
        self.horizontal = horizontal
        return self

    def set_stacked(self, stacked: bool) -> "BarChart":
        self.stacked = stacked
        return self

    def _positions(self) -> int:
        return max((len(s.data) for s in self.series), default=0)

    def stack_totals(self) -> List[float]:
        """Per-index sums across series."""
        totals = [0.0] * self._positions()
        for s in self.series:
            for i, v in enumerate(s.data):
                totals[i] += v
        return totals

    def _max_value(self) -> float:
        if self.series and self.stacked:
            top = max_over(self.stack_totals())
        elif self.series:
            top = max_over([v for s in self.series for v in s.data])
        else:
            top = max_over(self.data)
        return top * 1.1 if top > 0 else 1.0

    def _value_label(self, value: float) -> str:
        return f"{value:.0f}"

    # ---------------------------
    # Render
    # ---------------------------

    def _draw_stacked(self, canvas: SvgCanvas, max_value: float) -> None:
        chart_width, chart_height = self.plot_size()
        baseline = self.height - self.margins.bottom
        count = self._positions()
        slot = chart_width // count
        bar_width = chart_width // (count * 2)
        totals = self.stack_totals()

        for i in range(count):
            bar_x = self.margins.left + i * slot + (slot - bar_width) // 2
            stacked_so_far = 0.0

            for index, s in enumerate(self.series):
                if i >= len(s.data) or s.data[i] <= 0:
                    continue
                value = s.data[i]
                bar_height = int(value / max_value * chart_height)
                bar_y = baseline - int(stacked_so_far / max_value * chart_height) - bar_height
                stacked_so_far += value

                canvas.rect(bar_x, bar_y, bar_width, bar_height, fill=self.series_color(index))
                if bar_height > 20:
                    canvas.text(
                        bar_x + bar_width // 2,
                        bar_y + bar_height // 2 + 5,
                        self._value_label(value),
                        fill="white",
                    )

            if len(self.series) > 1:
                total = totals[i]
                total_y = baseline - int(total / max_value * chart_height)
                canvas.text(bar_x + bar_width // 2, total_y - 5, self._value_label(total), fill="black")

    def _draw_grouped(self, canvas: SvgCanvas, max_value: float) -> None:
        chart_width, chart_height = self.plot_size()
        baseline = self.height - self.margins.bottom
        count = self._positions()
        group_width = chart_width // count
        bar_width = group_width // (len(self.series) + 1)  # +1 leaves a gap between groups

        for i in range(count):
            for index, s in enumerate(self.series):
                if i >= len(s.data) or s.data[i] <= 0:
                    continue
                value = s.data[i]
                bar_height = int(value / max_value * chart_height)
                bar_x = self.margins.left + i * group_width + index * bar_width + bar_width // 2
                bar_y = baseline - bar_height

                canvas.rect(bar_x, bar_y, bar_width, bar_height, fill=self.series_color(index))
                canvas.text(bar_x + bar_width // 2, bar_y - 5, self._value_label(value), fill="black")

    def _draw_single(self, canvas: SvgCanvas, max_value: float) -> None:
        chart_width, chart_height = self.plot_size()
        baseline = self.height - self.margins.bottom
        count = len(self.data)
        slot = chart_width // count
        bar_width = chart_width // (count * 2)
        palette = self.palette()

        for i, value in enumerate(self.data):
            # negative values collapse to the axis rather than emitting a negative height
            bar_height = max(0, int(value / max_value * chart_height))
            bar_x = self.margins.left + i * slot + (slot - bar_width) // 2
            bar_y = baseline - bar_height

            canvas.rect(bar_x, bar_y, bar_width, bar_height, fill=palette[i % len(palette)])
            canvas.text(bar_x + bar_width // 2, bar_y - 5, self._value_label(value), fill="black")

    def _draw_labels(self, canvas: SvgCanvas, count: int) -> None:
        chart_width, _ = self.plot_size()
        slot = chart_width // count
        y = self.height - self.margins.bottom + 20
        for i, label in enumerate(self.axis_labels(count)):
            canvas.text(self.margins.left + i * slot + slot // 2, y, label)

    def render(self) -> str:
        self.apply_auto_height()
        canvas = SvgCanvas(self).begin()
        max_value = self._max_value()
        canvas.axes()

        if self.series:
            count = self._positions()
            if count > 0:
                if self.stacked:
                    self._draw_stacked(canvas, max_value)
                else:
                    self._draw_grouped(canvas, max_value)

            if self.show_legend:
                self.draw_series_legend(canvas)

            if self.labels and count > 0:
                self._draw_labels(canvas, count)
        elif self.data:
            self._draw_single(canvas, max_value)
            if self.labels:
                self._draw_labels(canvas, len(self.data))

        return canvas.finish()
