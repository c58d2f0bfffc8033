from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from mdchart.core.constants import ChartType


@dataclass(frozen=True)
class Diagnostic:
    """One problem found while scanning DSL text."""

    line: int | None  # 1-based, counted over the whole input; None for structural problems
    message: str
    chart: int | None = None  # 1-based block number, set for multi-chart input

    def __str__(self) -> str:
        text = self.message if self.line is None else f"line {self.line}: {self.message}"
        return text if self.chart is None else f"chart {self.chart}: {text}"


class SeriesDefinition(BaseModel):
    name: str
    labels: list[str] = Field(default_factory=list)
    data: list[float] = Field(default_factory=list)


class ChartDefinition(BaseModel):
    """
    Parsed form of one DSL block, before any chart object exists.

    `None` for an option means "not given": the chart keeps its own default.
    """

    chart_type: ChartType
    start_line: int = 1

    title: str = ""
    width: int | None = None
    height: int | None = None
    auto_height: bool = False
    colors: list[str] = Field(default_factory=list)
    series_colors: list[str] = Field(default_factory=list)
    stacked: bool = False

    labels: list[str] = Field(default_factory=list)
    data: list[float] = Field(default_factory=list)
    series: list[SeriesDefinition] = Field(default_factory=list)

    smooth: bool | None = None
    show_points: bool | None = None
    donut_hole: float | None = None
    show_legend: bool | None = None
    dark_mode: bool | None = None
    date_format: str | None = None
    max_value: float | None = None

    def point_count(self) -> int:
        return len(self.data) + sum(len(s.data) for s in self.series)
