"""Query commands: run documentation queries from the terminal."""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from docscope.config import load_settings
from docscope.engine import DocEngine
from docscope.exceptions import DocScopeError
from docscope.tools import call_tool

app = typer.Typer(help="Query documentation of the loaded packages", no_args_is_help=True)
console = Console()


def _run(ctx: typer.Context, tool_name: str, **arguments: object) -> None:
    """Load the engine from the global options, run one tool and print the result."""
    options = ctx.obj or {}
    output_format = "json" if options.get("json") else "markdown"
    try:
        settings = load_settings(root_dir=options.get("root"), selector=options.get("pkg"))
        engine = DocEngine.load(settings.root_dir, settings.selector)
        text = call_tool(engine, tool_name, {**arguments, "output_format": output_format})
    except (DocScopeError, ValidationError) as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    if output_format == "json":
        typer.echo(text)
    else:
        console.print(Markdown(text))


@app.command("packages")
def list_packages(ctx: typer.Context) -> None:
    """List every loaded package with its docstring."""
    _run(ctx, "python_list_packages")


@app.command("inspect")
def inspect_package(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Import path of the package"),
    comments: bool = typer.Option(True, "--comments/--no-comments", help="Include comments"),
) -> None:
    """List the public classes, functions and methods of a package."""
    _run(ctx, "python_inspect_package", package_name=package, include_comments=comments)


@app.command("class")
def class_doc(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Import path of the package"),
    name: str = typer.Argument(..., help="Class name"),
) -> None:
    """Show a class with its fields and methods."""
    _run(ctx, "python_get_class_doc", package_name=package, class_name=name)


@app.command("func")
def func_doc(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Import path of the package"),
    name: str = typer.Argument(..., help="Function name"),
) -> None:
    """Show a function's signature, docstring and examples."""
    _run(ctx, "python_get_func_doc", package_name=package, func_name=name)


@app.command("method")
def method_doc(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Import path of the package"),
    class_name: str = typer.Argument(..., help="Class that owns the method"),
    name: str = typer.Argument(..., help="Method name"),
) -> None:
    """Show a method's signature, docstring and examples."""
    _run(
        ctx,
        "python_get_method_doc",
        package_name=package,
        class_name=class_name,
        method_name=name,
    )


@app.command("values")
def values_doc(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Import path of the package"),
) -> None:
    """Show module-level constants and variables."""
    _run(ctx, "python_get_const_and_var_doc", package_name=package)
