"""Exception hierarchy for docscope.

All docscope exceptions inherit from DocScopeError so that callers at the
query boundary can catch a single type. Comment and example lookups never
raise; absence is modelled as empty values.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class DocScopeError(Exception):
    """Base exception for all docscope errors.

    Catch this to handle every failure raised by the loader, the engine
    and the tool layer.
    """

    pass


# ============================================================================
# Configuration & Loading Errors
# ============================================================================


class ConfigurationError(DocScopeError):
    """Raised when a setting is invalid.

    Examples
    --------
    Example usage::

        raise ConfigurationError("log_level", "unknown level 'LOUD'")
    """

    def __init__(self, setting: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            setting: Name of the offending setting
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{setting}': {reason}")
        self.setting = setting
        self.reason = reason


class LoadError(DocScopeError):
    """Raised when the package set cannot be loaded.

    This is fatal to engine construction: the root is unreadable or
    nothing under it could be parsed.

    Examples
    --------
    Example usage::

        raise LoadError("/src/project", "root directory does not exist")
    """

    def __init__(self, root: str, reason: str) -> None:
        """Initialize load error.

        Args
        ----
            root: Root directory that was being loaded
            reason: Why loading failed
        """
        super().__init__(f"Failed to load packages from '{root}': {reason}")
        self.root = root
        self.reason = reason


# ============================================================================
# Query Errors
# ============================================================================


class NotFoundError(DocScopeError):
    """Raised when a queried package or symbol does not exist."""

    pass


class PackageNotFoundError(NotFoundError):
    """Raised when an import path is not part of the loaded set.

    Examples
    --------
    Example usage::

        raise PackageNotFoundError("sample.missing")
    """

    def __init__(self, import_path: str) -> None:
        """Initialize package not found error.

        Args
        ----
            import_path: The unknown import path
        """
        super().__init__(f"Package not found: {import_path}")
        self.import_path = import_path


class SymbolNotFoundError(NotFoundError):
    """Raised when a package has no symbol with the requested name.

    Examples
    --------
    Example usage::

        raise SymbolNotFoundError("sample", "Point", "class")
    """

    def __init__(self, import_path: str, name: str, kind: str = "symbol") -> None:
        """Initialize symbol not found error.

        Args
        ----
            import_path: Package that was searched
            name: Requested symbol name
            kind: Kind the caller was looking for (e.g., "class", "function")
        """
        super().__init__(f"{kind.capitalize()} not found: {name} in package {import_path}")
        self.import_path = import_path
        self.name = name
        self.kind = kind


class MethodNotFoundError(NotFoundError):
    """Raised when a class exists but has no method with the requested name."""

    def __init__(self, import_path: str, class_name: str, method_name: str) -> None:
        super().__init__(
            f"Method not found: {class_name}.{method_name} in package {import_path}"
        )
        self.import_path = import_path
        self.class_name = class_name
        self.method_name = method_name


class WrongKindError(DocScopeError):
    """Raised when a symbol exists but is the wrong kind for the query.

    Examples
    --------
    Example usage::

        raise WrongKindError("sample", "Point.norm", expected="function", actual="method")
    """

    def __init__(self, import_path: str, name: str, expected: str, actual: str) -> None:
        """Initialize wrong kind error.

        Args
        ----
            import_path: Package that owns the symbol
            name: Symbol name as requested
            expected: Kind the query requires
            actual: Kind the symbol actually has
        """
        super().__init__(
            f"Not a {expected}: {name} in package {import_path} (found {actual})"
        )
        self.import_path = import_path
        self.name = name
        self.expected = expected
        self.actual = actual


class UnknownToolError(DocScopeError):
    """Raised when a tool call names no registered tool."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        msg = f"Unknown tool: {name}"
        if available:
            msg += f". Available: {', '.join(available)}"
        super().__init__(msg)
        self.name = name
        self.available = available
