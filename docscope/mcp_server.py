"""MCP (Model Context Protocol) server for docscope.

Exposes the documentation queries as MCP tools so LLM-powered editors can
ask for targeted views of a Python codebase instead of raw source.

Usage
-----
Run over stdio::

    docscope --root /path/to/project serve

Configuration
-------------
The root directory, package selector and log level are resolved from::

    1. Command line options (--root, --pkg, --log-level)
    2. DOCSCOPE_ROOT_DIR / DOCSCOPE_PKG_PATTERN / DOCSCOPE_LOG_LEVEL environment variables
    3. Defaults (current directory, every package, INFO)

Example Claude Desktop config::

    {
      "mcpServers": {
        "docscope": {
          "command": "docscope",
          "args": ["--root", "/path/to/project", "serve"]
        }
      }
    }
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from docscope.config import load_settings
from docscope.docs.renderers import OutputFormat
from docscope.engine import DocEngine
from docscope.exceptions import DocScopeError
from docscope.logging import configure_logging, get_logger
from docscope.tools import call_tool, get_tool

logger = get_logger(__name__)

SERVER_NAME = "docscope"


def build_server(engine: DocEngine) -> FastMCP:
    """Create an MCP server exposing one tool per registered query.

    Parameters
    ----------
    engine : DocEngine
        Loaded engine every tool call is routed to

    Returns
    -------
    FastMCP
        Server ready to ``run()``
    """
    mcp = FastMCP(SERVER_NAME)

    def run(name: str, **arguments: Any) -> str:
        try:
            return call_tool(engine, name, arguments)
        except DocScopeError as e:
            logger.info("Tool {name} failed: {error}", name=name, error=e)
            raise ToolError(str(e)) from e

    @mcp.tool(
        name="python_list_packages",
        description=get_tool("python_list_packages").description,
    )
    def list_packages(output_format: OutputFormat = "markdown") -> str:
        return run("python_list_packages", output_format=output_format)

    @mcp.tool(
        name="python_inspect_package",
        description=get_tool("python_inspect_package").description,
    )
    def inspect_package(
        package_name: str,
        include_comments: bool = True,
        output_format: OutputFormat = "markdown",
    ) -> str:
        return run(
            "python_inspect_package",
            package_name=package_name,
            include_comments=include_comments,
            output_format=output_format,
        )

    @mcp.tool(
        name="python_get_class_doc",
        description=get_tool("python_get_class_doc").description,
    )
    def get_class_doc(
        package_name: str, class_name: str, output_format: OutputFormat = "markdown"
    ) -> str:
        return run(
            "python_get_class_doc",
            package_name=package_name,
            class_name=class_name,
            output_format=output_format,
        )

    @mcp.tool(
        name="python_get_func_doc",
        description=get_tool("python_get_func_doc").description,
    )
    def get_func_doc(
        package_name: str, func_name: str, output_format: OutputFormat = "markdown"
    ) -> str:
        return run(
            "python_get_func_doc",
            package_name=package_name,
            func_name=func_name,
            output_format=output_format,
        )

    @mcp.tool(
        name="python_get_method_doc",
        description=get_tool("python_get_method_doc").description,
    )
    def get_method_doc(
        package_name: str,
        class_name: str,
        method_name: str,
        output_format: OutputFormat = "markdown",
    ) -> str:
        return run(
            "python_get_method_doc",
            package_name=package_name,
            class_name=class_name,
            method_name=method_name,
            output_format=output_format,
        )

    @mcp.tool(
        name="python_get_const_and_var_doc",
        description=get_tool("python_get_const_and_var_doc").description,
    )
    def get_const_and_var_doc(
        package_name: str, output_format: OutputFormat = "markdown"
    ) -> str:
        return run(
            "python_get_const_and_var_doc",
            package_name=package_name,
            output_format=output_format,
        )

    return mcp


def main(
    root_dir: str | None = None,
    selector: str | None = None,
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Resolve settings, load the engine and serve over stdio.

    Parameters
    ----------
    root_dir : str | None
        Directory to load, falls back to ``DOCSCOPE_ROOT_DIR`` then the cwd
    selector : str | None
        Package selector pattern
    log_level : str | None
        Log level, falls back to ``DOCSCOPE_LOG_LEVEL`` then INFO
    log_format : str | None
        Log format, falls back to ``DOCSCOPE_LOG_FORMAT``
    """
    settings = load_settings(
        root_dir=root_dir, selector=selector, log_level=log_level, log_format=log_format
    )
    configure_logging(level=settings.log_level, format=settings.log_format)  # type: ignore[arg-type]
    logger.info(
        "Starting MCP server for {root} (selector={selector})",
        root=settings.root_dir,
        selector=settings.selector,
    )
    engine = DocEngine.load(settings.root_dir, settings.selector)
    build_server(engine).run()


if __name__ == "__main__":
    main()
