from __future__ import annotations

from mdchart.embed.markdown import ChartFence, comment_safe, embed_charts, split_segments

CHART = """linechart
title: {title}
data:
A | 1
B | 2
"""


def fence(title: str, lang: str = "mdchart") -> str:
    return f"```{lang}\n{CHART.format(title=title)}```\n"


def test_chart_fence_is_replaced_by_svg():
    doc = "# Report\n\n" + fence("Inline") + "\nAfter the chart.\n"
    out = embed_charts(doc)

    assert "```mdchart" not in out
    assert out.count("<svg") == 1
    assert "Inline" in out
    assert out.startswith("# Report\n\n<svg")
    assert out.endswith("\nAfter the chart.\n")


def test_legacy_fence_language_is_accepted():
    out = embed_charts(fence("Legacy", lang="gosvgchart"))
    assert out.count("<svg") == 1


def test_other_fences_pass_through_untouched():
    doc = "```python\nlinechart\nprint('hi')\n```\n\n~~~\nplain\n~~~\n"
    assert embed_charts(doc) == doc


def test_chart_fence_inside_longer_fence_is_not_rendered():
    doc = "````markdown\n" + fence("Quoted") + "````\n"
    assert embed_charts(doc) == doc


def test_broken_chart_becomes_html_comment():
    out = embed_charts("```mdchart\nlinechart\n```\n")
    assert out.startswith("<!-- mdchart error: invalid chart definition:")
    assert "too few lines" in out
    assert "<svg" not in out


def test_adjacent_fences_are_placed_side_by_side():
    doc = fence("Left") + "\n" + fence("Right") + "\nText\n"
    out = embed_charts(doc)

    assert out.count("display: flex") == 1
    assert out.count("<svg") == 2
    assert "Left" in out and "Right" in out
    assert out.endswith("\nText\n")


def test_fences_separated_by_text_stay_separate():
    doc = fence("One") + "\nSome prose.\n\n" + fence("Two")
    out = embed_charts(doc)

    assert "display: flex" not in out
    assert out.count("<svg") == 2


def test_split_segments_records_fence_line():
    segments = split_segments("intro\n\n" + fence("X"))
    charts = [s for s in segments if isinstance(s, ChartFence)]

    assert len(charts) == 1
    assert charts[0].line == 3
    assert charts[0].source.startswith("linechart\n")


def test_unclosed_fence_runs_to_end_of_document():
    out = embed_charts("```mdchart\n" + CHART.format(title="Open"))
    assert out.count("<svg") == 1


def test_error_comment_cannot_be_closed_by_chart_text():
    doc = "```mdchart\n--><script>alert(1)</script>\ntitle: x\ndata:\n```\n"
    out = embed_charts(doc)

    assert out.startswith("<!-- mdchart error:")
    assert out.rstrip("\n").endswith(" -->")
    # only the opening and closing markers contain a double dash
    assert out.count("--") == 2
    assert "unknown chart type" in out


def test_comment_safe_breaks_every_double_dash():
    assert "--" not in comment_safe("a---b----c-->")
