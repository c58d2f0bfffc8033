"""Constants and enums for chart types, sizes, palettes and themes."""

from __future__ import annotations

from enum import Enum
from fractions import Fraction
from typing import Dict, Tuple


class ChartType(str, Enum):
    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    HEATMAP = "heatmap"


# Keywords accepted on the first line of a DSL block
CHART_TYPE_KEYWORDS: Dict[str, ChartType] = {
    "line": ChartType.LINE,
    "linechart": ChartType.LINE,
    "bar": ChartType.BAR,
    "barchart": ChartType.BAR,
    "pie": ChartType.PIE,
    "piechart": ChartType.PIE,
    "heatmap": ChartType.HEATMAP,
    "heatmapchart": ChartType.HEATMAP,
}

DEFAULT_WIDTH: int = 800
DEFAULT_HEIGHT: int = 500
DEFAULT_HEATMAP_HEIGHT: int = 200
DEFAULT_MARGIN: int = 50
PIE_RIGHT_MARGIN: int = 120

# height = width * ratio when auto-height is on
ASPECT_RATIOS: Dict[ChartType, Fraction] = {
    ChartType.LINE: Fraction(9, 16),
    ChartType.BAR: Fraction(9, 16),
    ChartType.PIE: Fraction(1, 1),
    ChartType.HEATMAP: Fraction(1, 4),
}

DEFAULT_PALETTE: Tuple[str, ...] = ("#3498db", "#e74c3c", "#2ecc71", "#f39c12", "#9b59b6")

# Light to dark, one step per intensity bucket
HEATMAP_PALETTE: Tuple[str, ...] = ("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39")

# Used for series when neither series colors nor a palette are set
FALLBACK_SERIES_COLORS: Tuple[str, ...] = (
    "#4285F4",
    "#EA4335",
    "#FBBC05",
    "#34A853",
    "#8AB4F8",
    "#F6AEA9",
    "#FDE293",
    "#A8DAB5",
)

DEFAULT_BACKGROUND: str = "#ffffff"

# (background, text, axis, grid)
DARK_THEME_DEFAULTS: Tuple[str, str, str, str] = ("#121212", "#ffffff", "#aaaaaa", "#333333")
LIGHT_THEME_DEFAULTS: Tuple[str, str, str] = ("#000000", "#666666", "#dddddd")

MONTH_LABELS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
DAY_LETTERS: Tuple[str, ...] = ("S", "M", "T", "W", "T", "F", "S")

MAX_DONUT_HOLE: float = 0.9
DEFAULT_MAX_LABEL_LENGTH: int = 10
MIN_HEATMAP_CELL: int = 3

# Fence info strings picked up by the markdown adapter
FENCE_LANGUAGES: Tuple[str, ...] = ("mdchart", "gosvgchart")
