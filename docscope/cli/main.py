"""docscope CLI - Main entrypoint."""

import os

import typer
from rich.console import Console

from docscope import __version__
from docscope.cli.commands import query_cmd, serve_cmd
from docscope.config import ENV_LOG_LEVEL, load_settings
from docscope.exceptions import ConfigurationError
from docscope.logging import configure_logging

app = typer.Typer(
    name="docscope",
    help="docscope - Structured documentation queries over Python source trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.add_typer(query_cmd.app, name="query", help="Query package documentation")
app.command("serve")(serve_cmd.serve)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    root: str | None = typer.Option(
        None, "--root", "-r", help="Root directory to load (env: DOCSCOPE_ROOT_DIR)"
    ),
    pkg: str | None = typer.Option(
        None, "--pkg", "-p", help="Package selector pattern (env: DOCSCOPE_PKG_PATTERN)"
    ),
    json_out: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit"),
) -> None:
    """docscope CLI.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if version:
        console.print(f"[bold blue]docscope[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    if ctx.obj is None:
        ctx.obj = {}

    try:
        settings = load_settings(root_dir=root, selector=pkg, log_level=log_level)
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1) from None

    # Queries only log errors unless a level was asked for
    level = settings.log_level if log_level or os.getenv(ENV_LOG_LEVEL) else "ERROR"
    configure_logging(level=level, format=settings.log_format)  # type: ignore[arg-type]

    ctx.obj.update({
        "root": root,
        "pkg": pkg,
        "json": json_out,
        "log_level": settings.log_level,
    })

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
