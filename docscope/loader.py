"""Package loader and symbol index.

Discovers the Python modules below a root directory, parses each one once,
binds its scope, and exposes the result as an immutable ``PackageIndex``
keyed by import path. Loading happens exactly once per engine.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from types import MappingProxyType

from docscope.exceptions import LoadError, PackageNotFoundError
from docscope.logging import get_logger
from docscope.scope import Scope, build_scope
from docscope.syntax import SourceFile, parse_file

logger = get_logger(__name__)

# Directories that never hold importable project code
_SKIP_DIRS = frozenset(
    {"__pycache__", "node_modules", "build", "dist", "site-packages", "venv", "env"}
)
_TEST_DIRS = frozenset({"tests", "test"})

RECURSIVE_SUFFIX = "..."


@dataclass(frozen=True, slots=True)
class ModuleSource:
    """A module found on disk but not parsed yet."""

    import_path: str
    path: Path


@dataclass(frozen=True, slots=True)
class Package:
    """One loaded module.

    Attributes
    ----------
    name : str
        Short name (last import path segment)
    import_path : str
        Dotted import path, e.g. ``sample.geometry``
    files : tuple[SourceFile, ...]
        Parsed source files in load order
    scope : Scope
        Bound module-level symbols
    """

    name: str
    import_path: str
    files: tuple[SourceFile, ...]
    scope: Scope


def is_test_source(path: Path) -> bool:
    name = path.name
    return name.startswith("test_") or name.endswith("_test.py") or name == "conftest.py"


def source_root(root: Path) -> Path:
    """Directory import paths are relative to.

    When ``root`` is itself inside a regular package, walk up until the
    first directory without an ``__init__.py``.
    """
    current = root
    while (current / "__init__.py").is_file() and current.parent != current:
        current = current.parent
    return current


def module_import_path(path: Path, base: Path) -> str | None:
    """Dotted import path of ``path`` relative to ``base``, None if not importable."""
    parts = list(path.relative_to(base).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    if not parts or not all(part.isidentifier() for part in parts):
        return None
    return ".".join(parts)


def discover_modules(root: Path) -> list[ModuleSource]:
    """Find every non-test Python module below ``root`` in a stable order."""
    base = source_root(root)
    modules: list[ModuleSource] = []

    def on_error(error: OSError) -> None:
        logger.warning("Skipping unreadable directory {path}: {error}", path=error.filename, error=error)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not d.startswith(".") and d not in _SKIP_DIRS and d not in _TEST_DIRS
        )
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix != ".py" or is_test_source(path):
                continue
            import_path = module_import_path(path, base)
            if import_path is None:
                logger.debug("Ignoring non-importable file {path}", path=path)
                continue
            modules.append(ModuleSource(import_path, path))

    return modules


def normalize_selector(selector: str) -> str:
    """Accept path-style selectors (``./pkg/sub/...``) as dotted patterns."""
    selector = selector.strip()
    if selector.startswith("./"):
        selector = selector[2:]
    selector = selector.replace("/", ".").replace("\\", ".")
    if selector.endswith(".py"):
        selector = selector[: -len(".py")]
    return selector


def matches_selector(import_path: str, selector: str | None) -> bool:
    """Whether ``import_path`` is selected.

    A pattern ending in ``...`` selects a module and all of its submodules;
    anything else is an ``fnmatch`` pattern over the dotted path.
    """
    if selector is None:
        return True
    pattern = normalize_selector(selector)
    if pattern.endswith(RECURSIVE_SUFFIX):
        prefix = pattern[: -len(RECURSIVE_SUFFIX)].rstrip(".")
        return not prefix or import_path == prefix or import_path.startswith(prefix + ".")
    return fnmatchcase(import_path, pattern)


class PackageIndex:
    """Read-only mapping from import path to loaded ``Package``."""

    def __init__(self, root: Path, packages: Iterable[Package]) -> None:
        self._root = root
        self._packages = MappingProxyType({pkg.import_path: pkg for pkg in packages})

    @property
    def root(self) -> Path:
        return self._root

    def all_packages(self) -> tuple[Package, ...]:
        """Every loaded package, in load order."""
        return tuple(self._packages.values())

    def get_package(self, import_path: str) -> Package:
        """Return the package for ``import_path``.

        Raises
        ------
        PackageNotFoundError
            If no package with that import path was loaded
        """
        try:
            return self._packages[import_path]
        except KeyError:
            raise PackageNotFoundError(import_path) from None

    def __contains__(self, import_path: object) -> bool:
        return import_path in self._packages

    def __len__(self) -> int:
        return len(self._packages)


def _check_root(root: Path) -> None:
    if not root.exists():
        raise LoadError(str(root), "root directory does not exist")
    if not root.is_dir():
        raise LoadError(str(root), "root is not a directory")
    if not os.access(root, os.R_OK | os.X_OK):
        raise LoadError(str(root), "root directory is not readable")


def load(root: str | Path, selector: str | None = None) -> PackageIndex:
    """Load every selected module below ``root``.

    Modules that fail to parse are skipped and logged; the others still
    load. Test sources are never loaded.

    Parameters
    ----------
    root : str | Path
        Root directory to scan
    selector : str | None
        Import path pattern restricting which modules are loaded

    Returns
    -------
    PackageIndex
        Index over the loaded packages

    Raises
    ------
    LoadError
        If the root is missing or unreadable, or if modules were found but
        none of them could be parsed
    """
    root = Path(root).expanduser().resolve()
    _check_root(root)

    discovered = discover_modules(root)
    selected = [m for m in discovered if matches_selector(m.import_path, selector)]
    if selector is not None and discovered and not selected:
        logger.warning(
            "Selector {selector!r} matched none of {count} modules",
            selector=selector,
            count=len(discovered),
        )

    packages: list[Package] = []
    failures: list[str] = []
    for module in selected:
        try:
            source_file = parse_file(module.path)
        except (SyntaxError, UnicodeDecodeError, ValueError, OSError) as e:
            logger.warning("Skipping {module}: {error}", module=module.import_path, error=e)
            failures.append(module.import_path)
            continue
        packages.append(
            Package(
                name=module.import_path.rpartition(".")[2],
                import_path=module.import_path,
                files=(source_file,),
                scope=build_scope([source_file]),
            )
        )

    if failures and not packages:
        raise LoadError(
            str(root), f"none of the {len(failures)} selected modules could be parsed"
        )

    logger.info(
        "Loaded {count} packages from {root} ({failed} skipped)",
        count=len(packages),
        root=root,
        failed=len(failures),
    )
    return PackageIndex(root, packages)
