from mdchart.dsl.definition import ChartDefinition, Diagnostic, SeriesDefinition
from mdchart.dsl.parser import (
    build_chart,
    parse_chart_block,
    parse_definitions,
    render_markdown_chart,
)

__all__ = [
    "ChartDefinition",
    "Diagnostic",
    "SeriesDefinition",
    "build_chart",
    "parse_chart_block",
    "parse_definitions",
    "render_markdown_chart",
]
