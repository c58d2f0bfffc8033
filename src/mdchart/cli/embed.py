"""CLI entrypoint: replace chart fences in a markdown document."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mdchart.cli.options import add_common_arguments, setup
from mdchart.core.errors import MdChartError
from mdchart.embed.markdown import embed_charts


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mdchart embed",
        description="Render every ```mdchart fence of a markdown document in place.",
    )
    p.add_argument("--input", required=True, help="Markdown document to process.")
    p.add_argument("--output", default=None, help="Output path. Default: stdout.")
    add_common_arguments(p)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    try:
        settings = setup(args)
        if not input_path.exists():
            print(f"Input file not found: {input_path}", file=sys.stderr)
            return 1
        result = embed_charts(input_path.read_text(encoding="utf-8"), settings)
    except MdChartError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result, encoding="utf-8")
    else:
        sys.stdout.write(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
