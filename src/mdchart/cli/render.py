"""CLI entrypoint: render a chart DSL file to SVG."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mdchart.cli.options import add_common_arguments, setup
from mdchart.core.errors import MdChartError
from mdchart.dsl.parser import render_markdown_chart


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mdchart render",
        description="Render a chart definition file to SVG.",
    )
    p.add_argument(
        "--input",
        required=True,
        help="Path to the chart definition file.",
    )
    p.add_argument(
        "--output",
        default=None,
        help="Where to write the SVG. Default: the input path with a .svg suffix.",
    )
    add_common_arguments(p)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(".svg")

    try:
        settings = setup(args)
        if not input_path.exists():
            print(f"Input file not found: {input_path}", file=sys.stderr)
            return 1
        svg = render_markdown_chart(input_path.read_text(encoding="utf-8"), settings)
    except MdChartError as e:
        print(str(e), file=sys.stderr)
        return 1

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(svg, encoding="utf-8")
    print(f"Chart written to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
