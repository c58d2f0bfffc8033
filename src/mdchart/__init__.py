"""Render line, bar, pie and heatmap charts to SVG from code or a small text DSL."""

from mdchart.charts import BarChart, HeatmapChart, LineChart, PieChart, new_chart
from mdchart.core.errors import ChartSyntaxError, ConfigError, MdChartError, UnsupportedChartType
from mdchart.core.settings import Settings, load_settings
from mdchart.dsl import render_markdown_chart
from mdchart.embed import embed_charts

__version__ = "0.1.0"

__all__ = [
    "BarChart",
    "ChartSyntaxError",
    "ConfigError",
    "HeatmapChart",
    "LineChart",
    "MdChartError",
    "PieChart",
    "Settings",
    "UnsupportedChartType",
    "embed_charts",
    "load_settings",
    "new_chart",
    "render_markdown_chart",
]
