"""Command line interface for docscope."""

from docscope.cli.main import app, main

__all__ = ["app", "main"]
