"""docscope - Structured documentation queries over Python source trees.

Loads the modules under a root directory, correlates every symbol with its
docstring or comments, and answers targeted questions about classes,
functions, methods and module-level values.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("docscope")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from docscope.engine import DocEngine
from docscope.exceptions import (
    ConfigurationError,
    DocScopeError,
    LoadError,
    MethodNotFoundError,
    NotFoundError,
    PackageNotFoundError,
    SymbolNotFoundError,
    UnknownToolError,
    WrongKindError,
)
from docscope.loader import Package, PackageIndex, load
from docscope.tools import TOOLS, call_tool

__all__ = [
    "TOOLS",
    "ConfigurationError",
    "DocEngine",
    "DocScopeError",
    "LoadError",
    "MethodNotFoundError",
    "NotFoundError",
    "Package",
    "PackageIndex",
    "PackageNotFoundError",
    "SymbolNotFoundError",
    "UnknownToolError",
    "WrongKindError",
    "__version__",
    "call_tool",
    "load",
]
