"""Calendar heatmap renderer (one cell per day, one column per week)."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

import pandas as pd

from mdchart.charts.base import BaseChart, max_over
from mdchart.charts.svg import SvgCanvas
from mdchart.core.constants import (
    DAY_LETTERS,
    DEFAULT_HEATMAP_HEIGHT,
    HEATMAP_PALETTE,
    MIN_HEATMAP_CELL,
    MONTH_LABELS,
    ChartType,
)

logger = logging.getLogger(__name__)

DAY_LABEL_WIDTH = 15
HEADER_HEIGHT = 50  # title and month labels above the grid


def _sunday_index(d: date) -> int:
    """Day of week counted from Sunday = 0."""
    return (d.weekday() + 1) % 7


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(value)


@dataclass(frozen=True)
class HeatmapGrid:
    """Calendar span covering the data, padded out to whole weeks."""

    first_sunday: date
    last_saturday: date
    values: Dict[date, float]

    @property
    def total_weeks(self) -> int:
        return ((self.last_saturday - self.first_sunday).days + 1) // 7

    def days(self) -> pd.DatetimeIndex:
        return pd.date_range(self.first_sunday, self.last_saturday, freq="D")


@dataclass
class HeatmapChart(BaseChart):
    chart_type = ChartType.HEATMAP

    height: int = DEFAULT_HEATMAP_HEIGHT
    colors: List[str] = field(default_factory=lambda: list(HEATMAP_PALETTE))
    cell_size: int = 15
    cell_spacing: int = 3
    cell_rounding: int = 2
    date_format: str = "%Y-%m-%d"
    day_labels: List[str] = field(default_factory=list)
    month_labels: List[str] = field(default_factory=lambda: list(MONTH_LABELS))
    max_value: float = 0.0  # 0 means scale against the data maximum

    def add_series(self, name: str, data: Sequence[float]) -> "HeatmapChart":
        # a heatmap shows one series: the new one replaces the data
        self.data = [float(v) for v in data]
        return self

    def set_series_colors(self, colors: Sequence[str]) -> "HeatmapChart":
        self.colors = list(colors)
        return self

    def set_cell_size(self, size: int) -> "HeatmapChart":
        self.cell_size = size
        return self

    def set_cell_spacing(self, spacing: int) -> "HeatmapChart":
        self.cell_spacing = spacing
        return self

    def set_cell_rounding(self, radius: int) -> "HeatmapChart":
        self.cell_rounding = radius
        return self

    def set_max_value(self, value: float) -> "HeatmapChart":
        self.max_value = value
        return self

    def set_date_format(self, fmt: str) -> "HeatmapChart":
        self.date_format = fmt
        return self

    def set_day_labels(self, labels: Sequence[str]) -> "HeatmapChart":
        self.day_labels = list(labels)
        return self

    def set_month_labels(self, labels: Sequence[str]) -> "HeatmapChart":
        self.month_labels = list(labels)
        return self

    def palette(self) -> List[str]:
        return self.colors or list(HEATMAP_PALETTE)

    # ---------------------------
    # Calendar
    # ---------------------------

    def parse_values(self) -> Dict[date, float]:
        """Map each parseable label date to its value; unparseable labels are dropped."""
        count = min(len(self.labels), len(self.data))
        if count == 0:
            return {}

        parsed = pd.to_datetime(
            pd.Series(self.labels[:count], dtype="object"),
            format=self.date_format,
            errors="coerce",
        )
        dropped = int(parsed.isna().sum())
        if dropped:
            examples = [lbl for lbl, ts in zip(self.labels, parsed) if pd.isna(ts)][:5]
            logger.debug("Heatmap dropped %d unparseable dates. Examples: %s", dropped, examples)

        values: Dict[date, float] = {}
        for ts, value in zip(parsed, self.data[:count]):
            if pd.isna(ts):
                continue
            values[ts.date()] = value
        return values

    def calendar(self) -> Optional[HeatmapGrid]:
        values = self.parse_values()
        if not values:
            return None
        start, end = min(values), max(values)
        return HeatmapGrid(
            first_sunday=start - timedelta(days=_sunday_index(start)),
            last_saturday=end + timedelta(days=6 - _sunday_index(end)),
            values=values,
        )

    def cell_size_for(self, total_weeks: int) -> int:
        """Largest square cell fitting both the week columns and the seven rows."""
        m = self.margins
        available_width = self.width - m.left - m.right - DAY_LABEL_WIDTH
        available_height = self.height - m.top - m.bottom - HEADER_HEIGHT

        max_cell_width = int((available_width - (total_weeks - 1) * self.cell_spacing) / total_weeks)
        max_cell_height = int((available_height - 6 * self.cell_spacing) / 7)
        calculated = min(max_cell_width, max_cell_height)

        if self.cell_size > 0:
            calculated = min(self.cell_size, calculated)
        return max(MIN_HEATMAP_CELL, calculated)

    def cell_color(self, value: float, max_value: float) -> str:
        palette = self.palette()
        if max_value <= 0:
            return palette[0]
        index = int(min(len(palette) - 1, math.floor(value / max_value * len(palette))))
        if 0 <= index < len(palette):
            return palette[index]
        return palette[0]

    # ---------------------------
    # Render
    # ---------------------------

    def render(self) -> str:
        self.apply_auto_height()
        canvas = SvgCanvas(self).begin()

        grid = self.calendar()
        if grid is None:
            return canvas.finish()

        cell = self.cell_size_for(grid.total_weeks)
        step = cell + self.cell_spacing
        max_value = self.max_value if self.max_value > 0 else max_over(self.data)
        start_x = self.margins.left + DAY_LABEL_WIDTH
        start_y = self.margins.top + HEADER_HEIGHT

        day_labels = self.day_labels if len(self.day_labels) == 7 else list(DAY_LETTERS)
        for i, label in enumerate(day_labels):
            canvas.text(start_x - 5, start_y + i * step + cell // 2 + 5, label, size=10, anchor="end")

        month_labels = self.month_labels if len(self.month_labels) >= 12 else list(MONTH_LABELS)
        for index, ts in enumerate(grid.days()):
            week, day = divmod(index, 7)
            if day == 0 and ts.day <= 7:
                canvas.text(
                    start_x + week * step + cell // 2,
                    start_y - 5,
                    month_labels[ts.month - 1],
                    size=10,
                )

            value = grid.values.get(ts.date(), 0.0)
            canvas.rect(
                start_x + week * step,
                start_y + day * step,
                cell,
                cell,
                fill=self.cell_color(value, max_value),
                rounding=self.cell_rounding,
                tooltip=f"{ts.strftime(self.date_format)}: {_format_value(value)}",
            )

        if self.show_legend:
            self._draw_legend(canvas, start_y, cell)

        return canvas.finish()

    def _draw_legend(self, canvas: SvgCanvas, start_y: int, cell: int) -> None:
        step = cell + self.cell_spacing
        palette = self.palette()
        legend_x = self.margins.left
        legend_y = start_y + 7 * step + 30
        label_y = legend_y + cell // 2 + 5

        canvas.text(legend_x, label_y, "Less", size=10, anchor="start")
        for i, color in enumerate(palette):
            canvas.rect(legend_x + 40 + i * step, legend_y, cell, cell, fill=color, rounding=self.cell_rounding)
        canvas.text(legend_x + 40 + len(palette) * step + 5, label_y, "More", size=10, anchor="start")
