"""Shared fixtures for docscope tests.

The ``sample_project`` fixture writes a small source tree to disk:

- ``sample``: package docstring only
- ``sample.geometry``: classes, a protocol, functions and ``example_*`` functions
- ``sample.values``: constants and variables with ``__all__``
- ``sample.broken``: a syntax error, skipped at load time
- test sources that must never be loaded
"""

import textwrap
from pathlib import Path

import pytest

from docscope.engine import DocEngine

GEOMETRY_SOURCE = '''\
"""Geometry primitives for the sample project."""

from __future__ import annotations

import math
from typing import Protocol


class Point:
    """Point represents a location in the plane."""

    x: int
    """Horizontal coordinate."""

    y: int  # Vertical coordinate

    # Cached norm.
    _norm: float = 0.0

    def __init__(self, x: int, y: int, label: str = "") -> None:
        self.x = x
        self.y = y
        self.label = label

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def norm(self) -> float:
        """Return the distance from the origin."""
        return math.hypot(self.x, self.y)

    # Origin returns the point at (0, 0).
    @classmethod
    def origin(cls) -> Point:
        return cls(0, 0)

    @staticmethod
    def parse(text: str) -> Point:
        """Parse a point from "x,y" text."""
        x, y = text.split(",")
        return Point(int(x), int(y))

    def _reset(self) -> None:
        self._norm = 0.0


class Shape(Protocol):
    """Anything with an area."""

    def area(self) -> float: ...


# Distance computes the Euclidean distance.
def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def foo() -> int:
    """Foo returns a constant."""
    return 1


async def fetch(name: str) -> str:
    return name


def _helper() -> None:
    pass


def example_distance():
    # Output: 5.0
    print(distance(Point(0, 0), Point(3, 4)))


def example_bar_foo():
    """Shows foo.

    Output: 1
    """
    print(foo())


def example_norm():
    # Output:
    # 5.0
    # done
    print(Point(3, 4).norm())
    print("done")
'''

VALUES_SOURCE = '''\
"""Module-level values."""

from typing import Final, TypeAlias, TypeVar

__all__ = ["MAX_SIZE", "TIMEOUT", "Vector", "registry"]

# MaxSize bounds the buffer.
MAX_SIZE = 1024

TIMEOUT: Final[float] = 2.5
"""Seconds to wait before giving up."""

registry: dict[str, int] = {}  # Registered handlers

_PRIVATE_LIMIT = 3

counter = 0

T = TypeVar("T")

Vector: TypeAlias = list[float]
'''


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``files`` (relative path -> source) below ``root``."""
    for relative, source in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
    return root


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Project root containing the ``sample`` package."""
    return write_tree(
        tmp_path / "project",
        {
            "sample/__init__.py": '"""Sample package for documentation tests."""\n',
            "sample/geometry.py": GEOMETRY_SOURCE,
            "sample/values.py": VALUES_SOURCE,
            "sample/broken.py": "def broken(:\n    pass\n",
            "sample/test_geometry.py": "def test_nothing():\n    pass\n",
            "sample/tests/helpers.py": "HELPER = 1\n",
            "conftest.py": "import pytest\n",
            ".cache/hidden.py": "HIDDEN = 1\n",
        },
    )


@pytest.fixture
def engine(sample_project: Path) -> DocEngine:
    """Engine loaded over the sample project."""
    return DocEngine.load(sample_project)


@pytest.fixture
def make_tree():
    """Factory writing a source tree: ``make_tree(root, {relative_path: source})``."""
    return write_tree
