from __future__ import annotations

from mdchart.charts import BarChart
from mdchart.core.constants import FALLBACK_SERIES_COLORS


def test_single_series_bars_have_value_labels():
    svg = BarChart().set_data([10, 20]).set_labels(["A", "B"]).render()

    assert ">10</text>" in svg
    assert ">20</text>" in svg
    assert ">A</text>" in svg
    assert ">B</text>" in svg


def test_single_series_colors_cycle_through_palette():
    svg = BarChart().set_colors(["#111111", "#222222"]).set_data([1, 2, 3]).render()
    assert svg.count('fill="#111111"') == 2
    assert svg.count('fill="#222222"') == 1


def test_stack_totals_sum_per_index():
    chart = BarChart().add_series("A", [1, 2]).add_series("B", [3, 4, 5])
    assert chart.stack_totals() == [4.0, 6.0, 5.0]


def test_stacked_render_draws_totals():
    svg = (
        BarChart()
        .set_stacked(True)
        .set_labels(["Q1", "Q2"])
        .add_series("North", [10, 20])
        .add_series("South", [30, 40])
        .render()
    )
    assert ">40</text>" in svg  # Q1 total, also South's Q2 segment
    assert ">60</text>" in svg  # Q2 total
    assert ">North</text>" in svg


def test_grouped_render_draws_one_bar_per_series_value():
    chart = BarChart().set_series_colors(["#aa0000", "#00aa00"])
    chart.add_series("A", [1, 2]).add_series("B", [3, 4])
    svg = chart.render()
    # two bars each plus one legend swatch each
    assert svg.count('fill="#aa0000"') == 3
    assert svg.count('fill="#00aa00"') == 3


def test_negative_values_do_not_produce_negative_heights():
    svg = BarChart().set_data([-5, 10]).render()
    assert 'height="-' not in svg


def test_empty_palette_falls_back():
    svg = BarChart().set_colors([]).set_data([1, 2]).render()
    assert FALLBACK_SERIES_COLORS[0] in svg


def test_empty_chart_renders_axes_only():
    svg = BarChart().set_title("Empty").render()
    assert svg.count("<line") == 2
    assert ">Empty</text>" in svg
