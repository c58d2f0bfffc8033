from __future__ import annotations

from pathlib import Path

import pytest

from mdchart.charts import HeatmapChart, LineChart, new_chart
from mdchart.core.errors import ConfigError, UnsupportedChartType
from mdchart.core.settings import Settings, load_settings
from mdchart.dsl.parser import render_markdown_chart


def write_yaml(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "mdchart.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_match_renderer_defaults():
    s = Settings()
    assert (s.width, s.height) == (800, 500)
    assert s.palette[0] == "#3498db"
    assert s.heatmap_palette[-1] == "#216e39"
    assert s.dark_theme.background == "#121212"


def test_load_settings_from_yaml(tmp_path: Path):
    path = write_yaml(
        tmp_path,
        """
width: 640
palette: ["#000001", "#000002"]
dark_mode: false
""",
    )
    s = load_settings(path)

    assert s.width == 640
    assert s.palette == ["#000001", "#000002"]
    assert s.dark_mode is False


def test_new_chart_applies_settings(tmp_path: Path):
    s = load_settings(write_yaml(tmp_path, "width: 640\nheight: 360\npalette: ['#000001']\n"))

    chart = new_chart("linechart", s)
    assert isinstance(chart, LineChart)
    assert (chart.width, chart.height) == (640, 360)
    assert chart.colors == ["#000001"]


def test_heatmap_keeps_own_height_and_palette():
    chart = new_chart("heatmap", Settings(width=1000, palette=["#000001"]))
    assert isinstance(chart, HeatmapChart)
    assert chart.width == 1000
    assert chart.height == 200
    assert chart.colors[0] == "#ebedf0"


def test_settings_flow_through_dsl_rendering():
    svg = render_markdown_chart("line\ntitle: T\ndata:\n1\n2\n", Settings(width=640, dark_mode=False))
    assert 'viewBox="0 0 640 500"' in svg
    assert "<style>" not in svg


def test_dsl_values_override_settings():
    svg = render_markdown_chart("line\nwidth: 300\ndata:\n1\n", Settings(width=640))
    assert 'viewBox="0 0 300 500"' in svg


def test_missing_file_raises_config_error(tmp_path: Path):
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "width: [1, 2",  # not YAML
        "- just\n- a list\n",  # not a mapping
        "width: -5\n",  # fails validation
        "palette: []\n",
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, text: str):
    with pytest.raises(ConfigError):
        load_settings(write_yaml(tmp_path, text))


def test_empty_file_gives_defaults(tmp_path: Path):
    assert load_settings(write_yaml(tmp_path, "")) == Settings()


def test_unknown_chart_kind():
    with pytest.raises(UnsupportedChartType, match="unknown chart type: scatter"):
        new_chart("scatter")
