"""Chart-type dispatch: one constructor per kind, with settings applied."""

from __future__ import annotations

from typing import Dict, Optional, Type

from mdchart.charts.bar import BarChart
from mdchart.charts.base import BaseChart
from mdchart.charts.heatmap import HeatmapChart
from mdchart.charts.line import LineChart
from mdchart.charts.pie import PieChart
from mdchart.core.constants import CHART_TYPE_KEYWORDS, ChartType
from mdchart.core.errors import UnsupportedChartType
from mdchart.core.settings import Settings

CHART_CLASSES: Dict[ChartType, Type[BaseChart]] = {
    ChartType.LINE: LineChart,
    ChartType.BAR: BarChart,
    ChartType.PIE: PieChart,
    ChartType.HEATMAP: HeatmapChart,
}


def resolve_chart_type(kind: ChartType | str) -> ChartType:
    if isinstance(kind, ChartType):
        return kind
    key = str(kind).strip().lower()
    if key not in CHART_TYPE_KEYWORDS:
        raise UnsupportedChartType(f"unknown chart type: {key}")
    return CHART_TYPE_KEYWORDS[key]


def new_chart(kind: ChartType | str, settings: Optional[Settings] = None) -> BaseChart:
    """
    Build an empty chart of the given kind.

    `kind` is a ChartType or any DSL keyword (`line`, `barchart`, ...).
    Explicitly configured settings sizes override the per-kind defaults;
    palettes and themes always come from settings when given.
    """
    chart = CHART_CLASSES[resolve_chart_type(kind)]()
    if settings is None:
        return chart

    if "width" in settings.model_fields_set:
        chart.width = settings.width
    if "height" in settings.model_fields_set:
        chart.height = settings.height

    if chart.chart_type == ChartType.HEATMAP:
        chart.set_colors(settings.heatmap_palette)
    else:
        chart.set_colors(settings.palette)

    lt, dt = settings.light_theme, settings.dark_theme
    chart.set_light_theme(lt.background, lt.text, lt.axis, lt.grid)
    chart.set_dark_theme(dt.background, dt.text, dt.axis, dt.grid)
    chart.background_color = lt.background
    chart.enable_dark_mode(settings.dark_mode)
    return chart
