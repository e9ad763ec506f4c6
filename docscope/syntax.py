"""Syntax layer: parsed source files, their comments, and declaration walking.

Python's ``ast`` drops comments, so each ``SourceFile`` pairs the tree with a
``CommentMap`` built from ``tokenize``. ``iter_declarations`` is the single
visitor over declaration shapes shared by the comment correlator and the
example extractor.
"""

from __future__ import annotations

import ast
import io
import tokenize
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

# ``type X = ...`` statements only exist on Python 3.12+
_TYPE_ALIAS_NODE = getattr(ast, "TypeAlias", ())

_FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef)

# Tool directives are not documentation
_PRAGMA_PREFIXES = (
    "noqa",
    "type:",
    "pragma",
    "pylint:",
    "mypy:",
    "fmt:",
    "isort:",
    "nosec",
    "pyright:",
    "ruff:",
)


def _strip_comment_marker(text: str) -> str:
    """Remove the leading ``#`` (or Sphinx ``#:``) and one following space."""
    body = text[1:]
    if body.startswith(":"):
        body = body[1:]
    if body.startswith(" "):
        body = body[1:]
    return body.rstrip()


def _is_directive(text: str) -> bool:
    if text.startswith(("#!", "# -*-")):
        return True
    stripped = text.lstrip("#").strip().lower()
    return stripped.startswith(_PRAGMA_PREFIXES) or stripped.startswith("-*- coding")


@dataclass(frozen=True, slots=True)
class CommentMap:
    """Comments of one source file indexed by line number.

    Attributes
    ----------
    standalone : Mapping[int, str]
        Comments that occupy a whole line, marker removed
    trailing : Mapping[int, str]
        Comments that follow code on the same line, marker removed
    """

    standalone: Mapping[int, str] = field(default_factory=dict)
    trailing: Mapping[int, str] = field(default_factory=dict)

    @classmethod
    def from_source(cls, source: str) -> CommentMap:
        """Tokenize ``source`` and classify every comment it contains."""
        standalone: dict[int, str] = {}
        trailing: dict[int, str] = {}
        tokens = tokenize.generate_tokens(io.StringIO(source).readline)
        for tok in tokens:
            if tok.type != tokenize.COMMENT or _is_directive(tok.string):
                continue
            line, col = tok.start
            if tok.line[:col].strip():
                trailing[line] = _strip_comment_marker(tok.string)
            else:
                standalone[line] = _strip_comment_marker(tok.string)
        return cls(MappingProxyType(standalone), MappingProxyType(trailing))

    def leading_block(self, line: int) -> str:
        """Return the comment block that ends on the line right above ``line``.

        The block is the run of consecutive whole-line comments directly
        preceding ``line``; a blank or code line ends it.
        """
        collected: list[str] = []
        current = line - 1
        while current in self.standalone:
            collected.append(self.standalone[current])
            current -= 1
        return "\n".join(reversed(collected))

    def trailing_comment(self, line: int) -> str:
        return self.trailing.get(line, "")


@dataclass(frozen=True, slots=True)
class SourceFile:
    """One parsed source file.

    Attributes
    ----------
    path : Path
        Location on disk
    source : str
        Full decoded source text
    tree : ast.Module
        Parsed syntax tree
    comments : CommentMap
        Comments extracted from the token stream
    """

    path: Path
    source: str
    tree: ast.Module
    comments: CommentMap

    @property
    def docstring(self) -> str:
        return ast.get_docstring(self.tree, clean=True) or ""


def parse_source(source: str, path: Path | str = "<string>") -> SourceFile:
    """Parse ``source`` into a ``SourceFile``.

    Raises
    ------
    SyntaxError
        If the source is not valid Python
    """
    path = Path(path)
    tree = ast.parse(source, filename=str(path))
    return SourceFile(path=path, source=source, tree=tree, comments=CommentMap.from_source(source))


def parse_file(path: Path) -> SourceFile:
    """Read and parse one file, honouring PEP 263 encoding declarations.

    Raises
    ------
    OSError
        If the file cannot be read
    SyntaxError
        If the source is not valid Python
    """
    with tokenize.open(path) as f:
        source = f.read()
    return parse_source(source, path)


# ============================================================================
# Declaration variants
# ============================================================================


@dataclass(frozen=True, slots=True)
class TypeDecl:
    """A class statement or a ``type X = ...`` alias statement."""

    name: str
    node: ast.stmt


@dataclass(frozen=True, slots=True)
class FuncDecl:
    """A ``def`` or ``async def``, at module level or inside a class body."""

    name: str
    node: ast.FunctionDef | ast.AsyncFunctionDef
    owner: str | None = None


@dataclass(frozen=True, slots=True)
class FieldDecl:
    """An attribute binding inside a class body or a ``self.x`` in ``__init__``."""

    names: tuple[str, ...]
    node: ast.stmt
    owner: str
    doc_node: ast.Expr | None = None


@dataclass(frozen=True, slots=True)
class ValueDecl:
    """A module-level assignment binding one or more names."""

    names: tuple[str, ...]
    node: ast.stmt
    doc_node: ast.Expr | None = None


Declaration = TypeDecl | FuncDecl | FieldDecl | ValueDecl


def first_line(node: ast.stmt) -> int:
    """Line where a statement starts, including its decorators."""
    decorators = getattr(node, "decorator_list", None) or []
    return min([node.lineno, *(d.lineno for d in decorators)])


def target_names(target: ast.expr) -> list[str]:
    """Names bound by an assignment target, unpacking tuples and lists."""
    if isinstance(target, ast.Name):
        return [target.id]
    if isinstance(target, ast.Tuple | ast.List):
        names: list[str] = []
        for elt in target.elts:
            names.extend(target_names(elt.value if isinstance(elt, ast.Starred) else elt))
        return names
    return []


def self_attribute(target: ast.expr, receiver: str) -> str | None:
    """Return ``x`` for a ``<receiver>.x`` target, else None."""
    if (
        isinstance(target, ast.Attribute)
        and isinstance(target.value, ast.Name)
        and target.value.id == receiver
    ):
        return target.attr
    return None


def assigned_names(stmt: ast.stmt) -> list[str]:
    if isinstance(stmt, ast.Assign):
        names: list[str] = []
        for target in stmt.targets:
            names.extend(target_names(target))
        return names
    if isinstance(stmt, ast.AnnAssign):
        return target_names(stmt.target)
    return []


def _string_statement(stmt: ast.stmt | None) -> ast.Expr | None:
    if (
        isinstance(stmt, ast.Expr)
        and isinstance(stmt.value, ast.Constant)
        and isinstance(stmt.value.value, str)
    ):
        return stmt
    return None


def nested_bodies(stmt: ast.stmt) -> Iterator[list[ast.stmt]]:
    """Statement lists of compound statements that do not open a new scope."""
    if isinstance(stmt, ast.If | ast.For | ast.AsyncFor | ast.While):
        yield stmt.body
        yield stmt.orelse
    elif isinstance(stmt, ast.With | ast.AsyncWith):
        yield stmt.body
    elif isinstance(stmt, ast.Try | ast.TryStar):
        yield stmt.body
        for handler in stmt.handlers:
            yield handler.body
        yield stmt.orelse
        yield stmt.finalbody
    elif isinstance(stmt, ast.Match):
        for case in stmt.cases:
            yield case.body


def receiver_name(func: ast.FunctionDef | ast.AsyncFunctionDef) -> str | None:
    """Name of the first positional parameter (``self``/``cls`` by convention)."""
    args = func.args.posonlyargs + func.args.args
    return args[0].arg if args else None


def _init_fields(
    body: Sequence[ast.stmt], receiver: str, owner: str
) -> Iterator[FieldDecl]:
    """``self.x = ...`` assignments inside ``__init__``, in source order."""
    for index, stmt in enumerate(body):
        if isinstance(stmt, ast.Assign | ast.AnnAssign):
            targets = stmt.targets if isinstance(stmt, ast.Assign) else [stmt.target]
            names = tuple(a for a in (self_attribute(t, receiver) for t in targets) if a)
            if names:
                doc = _string_statement(body[index + 1]) if index + 1 < len(body) else None
                yield FieldDecl(names, stmt, owner, doc)
        else:
            for nested in nested_bodies(stmt):
                yield from _init_fields(nested, receiver, owner)


def _walk_body(body: Sequence[ast.stmt], owner: str | None) -> Iterator[Declaration]:
    for index, stmt in enumerate(body):
        if isinstance(stmt, ast.ClassDef):
            yield TypeDecl(stmt.name, stmt)
            yield from _walk_body(stmt.body, owner=stmt.name)
        elif isinstance(stmt, _FUNCTION_NODES):
            yield FuncDecl(stmt.name, stmt, owner)
            if owner is not None and stmt.name == "__init__":
                receiver = receiver_name(stmt)
                if receiver is not None:
                    yield from _init_fields(stmt.body, receiver, owner)
        elif isinstance(stmt, _TYPE_ALIAS_NODE):
            yield TypeDecl(stmt.name.id, stmt)
        elif isinstance(stmt, ast.Assign | ast.AnnAssign):
            names = tuple(assigned_names(stmt))
            if not names:
                continue
            doc = _string_statement(body[index + 1]) if index + 1 < len(body) else None
            if owner is None:
                yield ValueDecl(names, stmt, doc)
            else:
                yield FieldDecl(names, stmt, owner, doc)
        else:
            for nested in nested_bodies(stmt):
                yield from _walk_body(nested, owner)


def iter_declarations(tree: ast.Module) -> Iterator[Declaration]:
    """Yield every declaration of a module in depth-first source order.

    Class bodies are descended into; function bodies are not, except for
    the ``self.x`` attributes bound in ``__init__``. Compound statements such
    as ``if TYPE_CHECKING:`` or ``try``/``except ImportError`` are transparent.
    """
    yield from _walk_body(tree.body, owner=None)
