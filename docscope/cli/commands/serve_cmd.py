"""Serve command: run the MCP server over stdio."""

import typer
from rich.console import Console
from rich.markup import escape

from docscope.exceptions import DocScopeError

console = Console(stderr=True)


def serve(ctx: typer.Context) -> None:
    """Serve documentation queries as MCP tools over stdio."""
    try:
        from docscope.mcp_server import main as serve_mcp
    except ImportError:
        console.print("[red]✗[/red] MCP dependencies not installed.")
        console.print("Please install with:")
        console.print("  pip install docscope")
        raise typer.Exit(1) from None

    options = ctx.obj or {}
    try:
        serve_mcp(
            root_dir=options.get("root"),
            selector=options.get("pkg"),
            log_level=options.get("log_level"),
        )
    except DocScopeError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1) from None
