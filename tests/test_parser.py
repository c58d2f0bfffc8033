from __future__ import annotations

import pytest

from mdchart.charts import BarChart, HeatmapChart, LineChart, PieChart
from mdchart.core.constants import ChartType
from mdchart.core.errors import ChartSyntaxError
from mdchart.dsl.parser import (
    build_chart,
    parse_chart_block,
    parse_definitions,
    render_markdown_chart,
)


def syntax_error(text: str) -> ChartSyntaxError:
    with pytest.raises(ChartSyntaxError) as excinfo:
        render_markdown_chart(text)
    return excinfo.value


# ---------------------------
# Successful parses
# ---------------------------


def test_render_contains_one_svg_and_title(line_dsl):
    svg = render_markdown_chart(line_dsl)
    assert svg.count("<svg") == 1
    assert svg.count("</svg>") == 1
    assert "Monthly Sales" in svg


def test_explicit_width_and_height_round_trip(line_dsl):
    svg = render_markdown_chart(line_dsl)
    assert 'width="600"' in svg
    assert 'height="400"' in svg
    assert 'viewBox="0 0 600 400"' in svg


@pytest.mark.parametrize("kind", ["barchart", "linechart"])
def test_auto_height_uses_sixteen_by_nine(kind):
    svg = render_markdown_chart(f"{kind}\ntitle: Auto\nwidth: 600\nheight: auto\ndata:\nA | 1\nB | 2\n")
    assert 'viewBox="0 0 600 337"' in svg


def test_chart_type_keywords_are_case_insensitive():
    for keyword, expected in [("LineChart", ChartType.LINE), ("BAR", ChartType.BAR), ("Pie", ChartType.PIE)]:
        definition = parse_chart_block(f"{keyword}\ntitle: T\ndata:\nA | 1\n")
        assert definition.chart_type == expected


def test_legacy_data_rows(line_dsl):
    d = parse_chart_block(line_dsl)
    assert d.labels == ["Jan", "Feb", "Mar"]
    assert d.data == [120.0, 150.0, 180.0]
    assert d.colors == ["#3498db"]
    assert d.width == 600 and d.height == 400


def test_bare_values_without_labels():
    d = parse_chart_block("line\ntitle: Bare\ndata:\n1\n2.5\n-3\n")
    assert d.data == [1.0, 2.5, -3.0]
    assert d.labels == []


def test_comments_and_blank_lines_are_ignored():
    text = "\n\nbarchart\n# a comment\n\ntitle: Commented\n\ndata:\n# another\nA | 1\n\nB | 2\n\n"
    d = parse_chart_block(text)
    assert d.title == "Commented"
    assert d.data == [1.0, 2.0]


def test_title_may_contain_colons():
    d = parse_chart_block("line\ntitle: Sales: 2024\ndata:\nA | 1\n")
    assert d.title == "Sales: 2024"


def test_named_series_share_labels_from_first_series():
    text = """linechart
title: Regions
seriescolors: #ff0000, #00ff00
series: North
Jan | 1
Feb | 2
series: South
Jan | 3
Feb | 4
"""
    d = parse_chart_block(text)
    assert [s.name for s in d.series] == ["North", "South"]
    assert d.series[1].data == [3.0, 4.0]
    assert d.labels == ["Jan", "Feb"]
    assert d.series_colors == ["#ff0000", "#00ff00"]

    svg = render_markdown_chart(text)
    assert 'stroke="#ff0000"' in svg
    assert ">South</text>" in svg


@pytest.mark.parametrize("marker", ["data:", "series:"])
def test_tabular_block(marker):
    text = f"""barchart
title: Quarterly
stacked: yes
{marker}
| North | South
Q1 | 10 | 12
Q2 | 14 | 9
"""
    d = parse_chart_block(text)
    assert [s.name for s in d.series] == ["North", "South"]
    assert d.series[0].data == [10.0, 14.0]
    assert d.series[1].data == [12.0, 9.0]
    assert d.labels == ["Q1", "Q2"]
    assert d.stacked is True

    chart = build_chart(d)
    assert isinstance(chart, BarChart)
    assert chart.stacked is True
    assert chart.stack_totals() == [22.0, 23.0]


@pytest.mark.parametrize("value, expected", [("true", True), ("yes", True), ("1", True), ("false", False), ("No", False), ("0", False)])
def test_stacked_values(value, expected):
    d = parse_chart_block(f"bar\ntitle: T\nstacked: {value}\ndata:\nA | 1\n")
    assert d.stacked is expected


def test_supplemented_options_reach_the_chart():
    line = build_chart(parse_chart_block("line\nsmooth: yes\npoints: no\nlegend: no\ndarkmode: false\ndata:\n1\n2\n"))
    assert isinstance(line, LineChart)
    assert line.smooth is True
    assert line.show_points is False
    assert line.show_legend is False
    assert line.dark_mode is False

    pie = build_chart(parse_chart_block("pie\ndonut: 1.5\ndata:\nA | 1\nB | 2\n"))
    assert isinstance(pie, PieChart)
    assert pie.donut_hole == 0.9

    heatmap = build_chart(
        parse_chart_block("heatmap\ndateformat: %d.%m.%Y\nmaxvalue: 10\ndata:\n01.02.2024 | 3\n")
    )
    assert isinstance(heatmap, HeatmapChart)
    assert heatmap.date_format == "%d.%m.%Y"
    assert heatmap.max_value == 10.0
    assert heatmap.height == 200


def test_heatmap_from_dsl_renders_tooltips():
    svg = render_markdown_chart("heatmap\ntitle: Activity\ndata:\n2024-01-01 | 3\n2024-01-02 | 5\n")
    assert "<title>2024-01-02: 5</title>" in svg
    assert "Activity" in svg


def test_multiple_blocks_are_wrapped_side_by_side(two_chart_dsl):
    out = render_markdown_chart(two_chart_dsl)
    assert "display: flex" in out
    assert out.count("<svg") == 2
    assert out.count('<div style="flex: 1; min-width: 300px; max-width: 48%;">') == 2
    assert "Visitors" in out
    assert "Browsers" in out


def test_parse_definitions_keeps_absolute_line_numbers(two_chart_dsl):
    first, second = parse_definitions(two_chart_dsl)
    assert first.start_line == 1
    assert second.start_line == 7
    assert second.chart_type == ChartType.PIE


def test_trailing_separator_is_ignored():
    out = render_markdown_chart("line\ntitle: Solo\ndata:\n1\n2\n---\n\n")
    assert out.startswith("<svg")


# ---------------------------
# Diagnostics
# ---------------------------


def test_too_few_lines():
    assert "too few lines" in str(syntax_error("linechart"))


def test_unknown_chart_type():
    assert "unknown chart type: invalidtype" in str(syntax_error("invalidtype\ntitle: X\ndata:\nA | 1\n"))


def test_not_a_valid_number():
    err = syntax_error("linechart\ntitle: T\ndata:\nA | notanumber\n")
    assert "'notanumber' is not a valid number" in str(err)


def test_mismatched_labels_and_data_points():
    err = syntax_error("barchart\ntitle: T\ndata:\nA | 10\nB | 20\nC |\n")
    message = str(err)
    assert "mismatched labels and data points" in message
    assert "(3 labels, 2 values)" in message
    assert "not a valid number" in message


def test_invalid_width_reports_line_number():
    err = syntax_error("linechart\ntitle: T\nwidth: abc\ndata:\nA | 1\n")
    assert str(err) == "invalid chart definition:\n• line 3: invalid width value: abc"
    assert err.diagnostics[0].line == 3


@pytest.mark.parametrize("value", ["-400", "0", "tall"])
def test_invalid_height(value):
    assert f"invalid height value: {value}" in str(syntax_error(f"line\nheight: {value}\ndata:\n1\n"))


def test_missing_data_section():
    err = syntax_error("linechart\ntitle: T\nwidth: 600\n")
    assert "missing 'data:' or 'series:' section" in str(err)


def test_no_valid_data_points():
    err = syntax_error("linechart\ntitle: T\ndata:\n# nothing here\n")
    assert "no valid data points found" in str(err)


def test_unknown_configuration_key():
    err = syntax_error("linechart\nfoo: bar\ndata:\n1\n")
    assert "line 2: unknown configuration key: foo" in str(err)


def test_bad_option_values():
    text = "barchart\ncolors: , ,\nstacked: maybe\ndonut: lots\njust words\nA | 1\ndata:\n1\n"
    message = str(syntax_error(text))
    assert "line 2: empty color list" in message
    assert "line 3: invalid stacked value: maybe" in message
    assert "line 4: invalid donut value: lots" in message
    assert "line 5: invalid configuration line: just words" in message
    assert "line 6: data row outside of a data section" in message


def test_tabular_row_with_wrong_value_count():
    err = syntax_error("bar\ndata:\n| A | B\nQ1 | 1\n")
    assert "line 4: expected 2 values, found 1" in str(err)


def test_all_problems_are_reported_together():
    err = syntax_error("linechart\nwidth: abc\nheight: -1\ndata:\nA | x\nB | 2\n")
    assert len(err.diagnostics) == 4
    assert str(err).count("\n• ") == 4


def test_multi_block_errors_are_prefixed_with_chart_number(two_chart_dsl):
    broken = two_chart_dsl.replace("Chrome | 70", "Chrome | seventy")
    message = str(syntax_error(broken))
    assert "chart 2: line 11: 'seventy' is not a valid number" in message
    assert "chart 1:" not in message


def test_underscore_digit_separators_are_rejected():
    message = str(syntax_error("line\nwidth: 6_00\ndata:\nA | 1_0\nB | 2\n"))
    assert "line 2: invalid width value: 6_00" in message
    assert "line 4: '1_0' is not a valid number" in message
