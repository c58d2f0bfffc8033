"""
Line-oriented chart DSL.

A block looks like:

    barchart
    title: Quarterly sales
    height: auto
    stacked: yes

    data:
    | North | South
    Q1 | 10 | 12
    Q2 | 14 | 9

Blocks are separated by a line holding only `---`. Every problem found
in a block is collected before anything is raised, so one
ChartSyntaxError lists them all.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from mdchart.charts.bar import BarChart
from mdchart.charts.base import BaseChart
from mdchart.charts.factory import new_chart
from mdchart.charts.heatmap import HeatmapChart
from mdchart.charts.line import LineChart
from mdchart.charts.pie import PieChart
from mdchart.core.constants import CHART_TYPE_KEYWORDS
from mdchart.core.errors import ChartSyntaxError
from mdchart.core.settings import Settings
from mdchart.dsl.definition import ChartDefinition, Diagnostic, SeriesDefinition

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "---"

FLEX_CONTAINER_STYLE = (
    "display: flex; flex-wrap: wrap; justify-content: space-around; "
    "align-items: center; gap: 20px; margin: 20px 0;"
)
FLEX_ITEM_STYLE = "flex: 1; min-width: 300px; max-width: 48%;"

_TRUE = {"true", "yes", "1"}
_FALSE = {"false", "no", "0"}

Line = Tuple[int, str]  # (absolute line number, raw text)


# ---------------------------
# Value parsing
# ---------------------------

def parse_number(text: str) -> Optional[float]:
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_positive_int(text: str) -> Optional[int]:
    if "_" in text:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value > 0 else None


def parse_bool(text: str) -> Optional[bool]:
    lowered = text.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return None


def parse_list(text: str) -> List[str]:
    """Comma-separated values, trimmed, empties dropped."""
    return [part.strip() for part in text.split(",") if part.strip()]


# ---------------------------
# Block scanning
# ---------------------------

class _BlockScanner:
    """Single pass over one block; fills a ChartDefinition and a diagnostics list."""

    CONFIG, DATA, SERIES, TABLE_HEADER, TABLE = range(5)

    def __init__(self, definition: ChartDefinition) -> None:
        self.definition = definition
        self.diagnostics: List[Diagnostic] = []
        self.state = self.CONFIG
        self.seen_section = False
        self.current: Optional[SeriesDefinition] = None
        self.table: List[SeriesDefinition] = []
        self._options: Dict[str, Callable[[int, str, str], None]] = {
            "title": self._title,
            "width": self._width,
            "height": self._height,
            "colors": self._colors,
            "seriescolors": self._colors,
            "stacked": self._flag,
            "smooth": self._flag,
            "points": self._flag,
            "legend": self._flag,
            "darkmode": self._flag,
            "donut": self._float,
            "maxvalue": self._float,
            "dateformat": self._date_format,
        }

    def error(self, line: Optional[int], message: str) -> None:
        self.diagnostics.append(Diagnostic(line, message))

    def scan(self, lines: List[Line]) -> None:
        for lineno, raw in lines:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            lowered = line.lower()
            if lowered == "data:":
                self.state, self.seen_section, self.current = self.DATA, True, None
                continue
            if lowered.startswith("series:"):
                self._start_series(line[len("series:"):].strip())
                continue

            if self.state == self.CONFIG:
                self._config_line(lineno, line)
            elif self.state == self.DATA:
                if line.startswith("|"):
                    self._table_header(line)
                else:
                    self._data_row(lineno, line)
            elif self.state == self.SERIES:
                self._series_row(lineno, line)
            elif self.state == self.TABLE_HEADER:
                if line.startswith("|"):
                    self._table_header(line)
                else:
                    self.error(lineno, "expected a '| name | name' header after 'series:'")
            else:
                self._table_row(lineno, line)

    def finish(self) -> None:
        d = self.definition
        if not self.seen_section:
            self.error(None, "missing 'data:' or 'series:' section")
            return

        if not d.labels:
            for s in d.series:
                if s.labels:
                    d.labels = list(s.labels)
                    break

        if d.point_count() == 0:
            self.error(None, "no valid data points found")
            return

        if d.data and d.labels and len(d.labels) != len(d.data):
            self.error(
                None,
                f"mismatched labels and data points ({len(d.labels)} labels, {len(d.data)} values)",
            )
        for s in d.series:
            if s.labels and len(s.labels) != len(s.data):
                self.error(
                    None,
                    f"mismatched labels and data points in series '{s.name}' "
                    f"({len(s.labels)} labels, {len(s.data)} values)",
                )

    # configuration

    def _config_line(self, lineno: int, line: str) -> None:
        if ":" not in line:
            if "|" in line:
                self.error(lineno, "data row outside of a data section")
            else:
                self.error(lineno, f"invalid configuration line: {line}")
            return

        key, value = line.split(":", 1)
        key, value = key.strip().lower(), value.strip()
        handler = self._options.get(key)
        if handler is None:
            self.error(lineno, f"unknown configuration key: {key}")
            return
        handler(lineno, key, value)

    def _title(self, lineno: int, key: str, value: str) -> None:
        self.definition.title = value

    def _width(self, lineno: int, key: str, value: str) -> None:
        width = parse_positive_int(value)
        if width is None:
            self.error(lineno, f"invalid width value: {value}")
        else:
            self.definition.width = width

    def _height(self, lineno: int, key: str, value: str) -> None:
        if value.lower() == "auto":
            self.definition.auto_height = True
            return
        height = parse_positive_int(value)
        if height is None:
            self.error(lineno, f"invalid height value: {value}")
        else:
            self.definition.height = height
            self.definition.auto_height = False

    def _colors(self, lineno: int, key: str, value: str) -> None:
        colors = parse_list(value)
        if not colors:
            self.error(lineno, "empty color list")
        elif key == "colors":
            self.definition.colors = colors
        else:
            self.definition.series_colors = colors

    def _flag(self, lineno: int, key: str, value: str) -> None:
        flag = parse_bool(value)
        if flag is None:
            self.error(lineno, f"invalid {key} value: {value}")
            return
        field_name = {
            "stacked": "stacked",
            "smooth": "smooth",
            "points": "show_points",
            "legend": "show_legend",
            "darkmode": "dark_mode",
        }[key]
        setattr(self.definition, field_name, flag)

    def _float(self, lineno: int, key: str, value: str) -> None:
        number = parse_number(value)
        if number is None:
            self.error(lineno, f"invalid {key} value: {value}")
        elif key == "donut":
            self.definition.donut_hole = number
        else:
            self.definition.max_value = number

    def _date_format(self, lineno: int, key: str, value: str) -> None:
        if not value:
            self.error(lineno, "empty date format")
        else:
            self.definition.date_format = value

    # data sections

    def _start_series(self, name: str) -> None:
        self.seen_section = True
        if name:
            self.current = SeriesDefinition(name=name)
            self.definition.series.append(self.current)
            self.state = self.SERIES
        else:
            self.current = None
            self.state = self.TABLE_HEADER

    def _table_header(self, line: str) -> None:
        names = [part.strip() for part in line.strip().strip("|").split("|")]
        self.table = [SeriesDefinition(name=name) for name in names]
        self.definition.series.extend(self.table)
        self.state = self.TABLE

    def _value(self, lineno: int, text: str) -> Optional[float]:
        value = parse_number(text)
        if value is None:
            self.error(lineno, f"'{text}' is not a valid number")
        return value

    def _data_row(self, lineno: int, line: str) -> None:
        d = self.definition
        if "|" in line:
            label, text = line.split("|", 1)
            d.labels.append(label.strip())
        else:
            text = line
        value = self._value(lineno, text.strip())
        if value is not None:
            d.data.append(value)

    def _series_row(self, lineno: int, line: str) -> None:
        s = self.current
        if "|" in line:
            label, text = line.split("|", 1)
            s.labels.append(label.strip())
        else:
            text = line
        value = self._value(lineno, text.strip())
        if value is not None:
            s.data.append(value)

    def _table_row(self, lineno: int, line: str) -> None:
        row = line[:-1] if line.endswith("|") else line
        cells = [cell.strip() for cell in row.split("|")]
        label, values = cells[0], cells[1:]
        if len(values) != len(self.table):
            self.error(lineno, f"expected {len(self.table)} values, found {len(values)}")

        self.definition.labels.append(label)
        for s, text in zip(self.table, values):
            value = self._value(lineno, text)
            if value is not None:
                s.data.append(value)


def _trim_blank(lines: List[Line]) -> List[Line]:
    start, end = 0, len(lines)
    while start < end and not lines[start][1].strip():
        start += 1
    while end > start and not lines[end - 1][1].strip():
        end -= 1
    return lines[start:end]


def _scan_block(lines: List[Line]) -> Tuple[Optional[ChartDefinition], List[Diagnostic]]:
    lines = _trim_blank(lines)
    if len(lines) < 3:
        line = lines[0][0] if lines else None
        return None, [Diagnostic(line, "invalid chart format: too few lines")]

    first_line, keyword = lines[0][0], lines[0][1].strip().lower()
    chart_type = CHART_TYPE_KEYWORDS.get(keyword)
    if chart_type is None:
        return None, [Diagnostic(first_line, f"unknown chart type: {keyword}")]

    scanner = _BlockScanner(ChartDefinition(chart_type=chart_type, start_line=first_line))
    scanner.scan(lines[1:])
    scanner.finish()
    if scanner.diagnostics:
        return None, scanner.diagnostics
    return scanner.definition, []


def split_blocks(text: str) -> List[List[Line]]:
    """Split on `---` lines, keeping absolute line numbers; blank-only blocks are dropped."""
    blocks: List[List[Line]] = [[]]
    for lineno, raw in enumerate(text.splitlines(), start=1):
        if raw.strip() == BLOCK_SEPARATOR:
            blocks.append([])
        else:
            blocks[-1].append((lineno, raw))

    non_empty = [b for b in blocks if any(raw.strip() for _, raw in b)]
    return non_empty or blocks[:1]


def parse_chart_block(text: str) -> ChartDefinition:
    """Parse a single block (no `---` separators)."""
    definition, diagnostics = _scan_block([(i, raw) for i, raw in enumerate(text.splitlines(), start=1)])
    if diagnostics:
        raise ChartSyntaxError(diagnostics)
    return definition


def parse_definitions(text: str) -> List[ChartDefinition]:
    """Parse every block; raise once with the diagnostics of all failing blocks."""
    blocks = split_blocks(text)
    definitions: List[ChartDefinition] = []
    diagnostics: List[Diagnostic] = []

    for number, block in enumerate(blocks, start=1):
        definition, found = _scan_block(block)
        if len(blocks) > 1:
            found = [replace(d, chart=number) for d in found]
        diagnostics.extend(found)
        if definition is not None:
            definitions.append(definition)

    logger.debug("Parsed %d chart block(s), %d problem(s)", len(blocks), len(diagnostics))
    if diagnostics:
        raise ChartSyntaxError(diagnostics)
    return definitions


# ---------------------------
# Building and rendering
# ---------------------------

def build_chart(definition: ChartDefinition, settings: Optional[Settings] = None) -> BaseChart:
    d = definition
    chart = new_chart(d.chart_type, settings)

    if d.title:
        chart.set_title(d.title)
    if d.width is not None:
        chart.width = d.width
    if d.height is not None:
        chart.height = d.height
    chart.set_auto_height(d.auto_height)

    if d.colors:
        chart.set_colors(d.colors)
    if d.series_colors:
        chart.set_series_colors(d.series_colors)
    if d.labels:
        chart.set_labels(d.labels)
    if d.data:
        chart.set_data(d.data)
    for s in d.series:
        chart.add_series(s.name, s.data)

    if d.show_legend is not None:
        chart.show_legend = d.show_legend
    if d.dark_mode is not None:
        chart.enable_dark_mode(d.dark_mode)

    if isinstance(chart, LineChart):
        if d.smooth is not None:
            chart.set_smooth(d.smooth)
        if d.show_points is not None:
            chart.show_data_points(d.show_points)
    elif isinstance(chart, BarChart):
        chart.set_stacked(d.stacked)
    elif isinstance(chart, PieChart):
        if d.donut_hole is not None:
            chart.set_donut_hole(d.donut_hole)
    elif isinstance(chart, HeatmapChart):
        if d.date_format is not None:
            chart.set_date_format(d.date_format)
        if d.max_value is not None:
            chart.set_max_value(d.max_value)

    return chart


def wrap_side_by_side(svgs: List[str]) -> str:
    items = "".join(f'<div style="{FLEX_ITEM_STYLE}">{svg}</div>' for svg in svgs)
    return f'<div style="{FLEX_CONTAINER_STYLE}">{items}</div>'


def render_markdown_chart(text: str, settings: Optional[Settings] = None) -> str:
    """
    Parse DSL text and render it.

    One block gives a bare SVG document; several blocks give a flex
    container with the charts side by side.
    """
    svgs = [build_chart(d, settings).render() for d in parse_definitions(text)]
    if len(svgs) == 1:
        return svgs[0]
    return wrap_side_by_side(svgs)
