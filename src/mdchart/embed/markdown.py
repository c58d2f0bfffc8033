"""Replace chart fences in a markdown document with rendered SVG."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from mdchart.core.constants import FENCE_LANGUAGES
from mdchart.core.errors import MdChartError
from mdchart.core.settings import Settings
from mdchart.dsl.parser import render_markdown_chart, wrap_side_by_side

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^\s`]*)[^`]*$")


@dataclass(frozen=True)
class ChartFence:
    source: str
    line: int  # line number of the opening fence


Segment = Union[str, ChartFence]


def _is_closing(line: str, fence: str) -> bool:
    stripped = line.strip()
    return (
        len(line) - len(line.lstrip(" ")) <= 3
        and stripped.startswith(fence[0] * len(fence))
        and set(stripped) == {fence[0]}
    )


def split_segments(document: str) -> List[Segment]:
    """
    Cut the document into plain lines and chart fences.

    Fences in other languages are kept as plain lines, body included.
    An unclosed fence runs to the end of the document.
    """
    lines = document.splitlines(keepends=True)
    segments: List[Segment] = []
    i = 0
    while i < len(lines):
        m = _FENCE_OPEN.match(lines[i].rstrip("\r\n"))
        if not m:
            segments.append(lines[i])
            i += 1
            continue

        fence = m.group("fence")
        end = i + 1
        while end < len(lines) and not _is_closing(lines[end].rstrip("\r\n"), fence):
            end += 1

        if m.group("info").lower() in FENCE_LANGUAGES:
            segments.append(ChartFence(source="".join(lines[i + 1 : end]), line=i + 1))
        else:
            segments.extend(lines[i : end + 1])
        i = end + 1
    return segments


def comment_safe(text: str) -> str:
    """Break up every `--` so the text cannot end an HTML comment."""
    while "--" in text:
        text = text.replace("--", "- -")
    return text


def render_fence(block: ChartFence, settings: Optional[Settings] = None) -> str:
    try:
        return render_markdown_chart(block.source, settings)
    except MdChartError as e:
        logger.warning("Chart at line %d failed to render: %s", block.line, e)
        return f"<!-- mdchart error: {comment_safe(str(e))} -->"


def embed_charts(document: str, settings: Optional[Settings] = None) -> str:
    """
    Return `document` with every chart fence replaced by its SVG.

    Chart fences separated only by blank lines are placed side by side in
    one flex container.
    """
    out: List[str] = []
    run: List[str] = []
    gap: List[str] = []

    def flush() -> None:
        if run:
            out.append((run[0] if len(run) == 1 else wrap_side_by_side(run)) + "\n")
            run.clear()
        out.extend(gap)
        gap.clear()

    charts = 0
    for segment in split_segments(document):
        if isinstance(segment, ChartFence):
            run.append(render_fence(segment, settings))
            gap.clear()
            charts += 1
        elif run and not segment.strip():
            gap.append(segment)
        else:
            flush()
            out.append(segment)
    flush()

    logger.debug("Embedded %d chart fence(s)", charts)
    return "".join(out)
