from __future__ import annotations

import sys

from mdchart.cli.embed import main as embed_main
from mdchart.cli.render import main as render_main

COMMANDS = {
    "render": render_main,
    "embed": embed_main,
}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if not argv or argv[0] in {"-h", "--help"}:
        print("Usage: mdchart <command> [options]\n")
        print("Commands:")
        print("  render   Render a chart definition file to SVG")
        print("  embed    Replace chart fences in a markdown document with SVG\n")
        return 0

    cmd = argv[0]
    if cmd in COMMANDS:
        return COMMANDS[cmd](argv[1:])

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
