"""Shared chart configuration and chained setters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, List, Sequence, Tuple

from mdchart.core.constants import (
    ASPECT_RATIOS,
    DARK_THEME_DEFAULTS,
    DEFAULT_BACKGROUND,
    DEFAULT_HEIGHT,
    DEFAULT_MARGIN,
    DEFAULT_PALETTE,
    DEFAULT_WIDTH,
    FALLBACK_SERIES_COLORS,
    LIGHT_THEME_DEFAULTS,
    ChartType,
)

if TYPE_CHECKING:
    from mdchart.charts.svg import SvgCanvas

logger = logging.getLogger(__name__)


@dataclass
class Series:
    """One named sequence of values sharing the chart's label axis."""

    name: str
    data: List[float] = field(default_factory=list)


@dataclass
class Margins:
    top: int = DEFAULT_MARGIN
    right: int = DEFAULT_MARGIN
    bottom: int = DEFAULT_MARGIN
    left: int = DEFAULT_MARGIN


@dataclass
class Theme:
    background: str = ""
    text: str = ""
    axis: str = ""
    grid: str = ""


@dataclass
class BaseChart(ABC):
    """
    Configuration common to every chart kind.

    Setters mutate in place and return the chart so calls can be chained:

        LineChart().set_title("Sales").set_size(600, 400).set_data([1, 2, 3])

    Nothing is validated here; renderers cope with degenerate values.
    """

    chart_type: ClassVar[ChartType]

    title: str = ""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    auto_height: bool = False
    data: List[float] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    series: List[Series] = field(default_factory=list)
    series_colors: List[str] = field(default_factory=list)
    show_title: bool = True
    show_legend: bool = True
    margins: Margins = field(default_factory=Margins)
    background_color: str = DEFAULT_BACKGROUND
    dark_mode: bool = True
    light_theme: Theme = field(default_factory=Theme)
    dark_theme: Theme = field(default_factory=Theme)

    def __post_init__(self) -> None:
        self.enable_dark_mode(self.dark_mode)

    # ---------------------------
    # Setters
    # ---------------------------

    def set_title(self, title: str) -> "BaseChart":
        self.title = title
        return self

    def set_size(self, width: int, height: int) -> "BaseChart":
        self.width = width
        self.height = height
        self.auto_height = False
        return self

    def set_auto_height(self, auto: bool) -> "BaseChart":
        self.auto_height = auto
        return self

    def set_data(self, data: Sequence[float]) -> "BaseChart":
        self.data = [float(v) for v in data]
        return self

    def set_labels(self, labels: Sequence[str]) -> "BaseChart":
        self.labels = list(labels)
        return self

    def set_colors(self, colors: Sequence[str]) -> "BaseChart":
        self.colors = list(colors)
        return self

    def add_series(self, name: str, data: Sequence[float]) -> "BaseChart":
        self.series.append(Series(name=name, data=[float(v) for v in data]))
        return self

    def set_series_colors(self, colors: Sequence[str]) -> "BaseChart":
        self.series_colors = list(colors)
        return self

    def enable_dark_mode(self, enable: bool) -> "BaseChart":
        """Toggle the prefers-color-scheme stylesheet, filling unset themes."""
        self.dark_mode = enable

        if not self.dark_theme.background:
            bg, text, axis, grid = DARK_THEME_DEFAULTS
            self.dark_theme = Theme(background=bg, text=text, axis=axis, grid=grid)

        if not self.light_theme.background:
            text, axis, grid = LIGHT_THEME_DEFAULTS
            self.light_theme = Theme(
                background=self.background_color or DEFAULT_BACKGROUND,
                text=text,
                axis=axis,
                grid=grid,
            )
        return self

    def set_dark_theme(self, background: str, text: str, axis: str, grid: str) -> "BaseChart":
        self.dark_theme = Theme(background=background, text=text, axis=axis, grid=grid)
        return self

    def set_light_theme(self, background: str, text: str, axis: str, grid: str) -> "BaseChart":
        self.light_theme = Theme(background=background, text=text, axis=axis, grid=grid)
        return self

    # ---------------------------
    # Rendering helpers
    # ---------------------------

    @abstractmethod
    def render(self) -> str:
        """Complete SVG document for the current configuration."""

    def apply_auto_height(self) -> None:
        if self.auto_height:
            ratio = ASPECT_RATIOS[self.chart_type]
            self.height = self.width * ratio.numerator // ratio.denominator

    def plot_size(self) -> Tuple[int, int]:
        """Usable plot rectangle: canvas minus margins."""
        m = self.margins
        return self.width - m.left - m.right, self.height - m.top - m.bottom

    def palette(self) -> List[str]:
        return self.colors or list(FALLBACK_SERIES_COLORS)

    def series_color(self, index: int) -> str:
        if index < len(self.series_colors):
            return self.series_colors[index]
        if self.colors:
            return self.colors[index % len(self.colors)]
        return FALLBACK_SERIES_COLORS[index % len(FALLBACK_SERIES_COLORS)]

    def axis_labels(self, count: int) -> List[str]:
        """Labels for `count` positions; extra labels or points are dropped."""
        if self.labels and len(self.labels) != count:
            logger.warning(
                "%s chart '%s': %d labels for %d data points; rendering %d",
                self.chart_type.value,
                self.title,
                len(self.labels),
                count,
                min(count, len(self.labels)),
            )
        return self.labels[:count]

    def draw_series_legend(self, canvas: "SvgCanvas") -> None:
        m = self.margins
        legend_x = self.width - m.right - 150
        legend_y = m.top + 20
        for i, s in enumerate(self.series):
            y = legend_y + i * 25
            canvas.rect(legend_x, y, 15, 15, fill=self.series_color(i))
            canvas.text(legend_x + 25, y + 12, s.name, anchor=None)


def max_over(values: Sequence[float]) -> float:
    """Largest value, never below zero (so empty data scales against 0)."""
    top = 0.0
    for v in values:
        if v > top:
            top = v
    return top
