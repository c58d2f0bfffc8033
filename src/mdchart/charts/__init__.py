from mdchart.charts.bar import BarChart
from mdchart.charts.base import BaseChart, Margins, Series, Theme
from mdchart.charts.factory import new_chart
from mdchart.charts.heatmap import HeatmapChart
from mdchart.charts.line import LineChart
from mdchart.charts.pie import PieChart

__all__ = [
    "BarChart",
    "BaseChart",
    "HeatmapChart",
    "LineChart",
    "Margins",
    "PieChart",
    "Series",
    "Theme",
    "new_chart",
]
