"""Run docscope with ``python -m docscope``.

Arguments go to the ``docscope`` CLI. The ``--mcp`` flag is shorthand for
the ``serve`` command, so ``python -m docscope --root src --mcp`` starts the
MCP server over stdio with the given global options.
"""

from __future__ import annotations

import sys

from docscope.cli.main import app

MCP_FLAG = "--mcp"


def cli_args(argv: list[str]) -> list[str]:
    """Translate module arguments into CLI arguments."""
    if MCP_FLAG not in argv:
        return argv
    return [arg for arg in argv if arg != MCP_FLAG] + ["serve"]


def main(argv: list[str] | None = None) -> None:
    app(args=cli_args(sys.argv[1:] if argv is None else argv), prog_name="docscope")


if __name__ == "__main__":
    main()
