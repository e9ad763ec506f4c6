"""Comment correlation between the symbol table and the syntax trees.

A ``Scope`` knows what a symbol is but not what its documentation says.
``comment_for`` finds the first declaration in a package's syntax trees that
binds the symbol's name and returns the text attached to it:

- classes and functions: the docstring, else the leading ``#`` block
- fields and module-level values: the leading ``#`` block, else the
  attribute docstring that follows the assignment, else the trailing
  same-line comment

Matching is by name only and the first declaration wins, files visited in
load order. An undocumented symbol yields an empty string.
"""

from __future__ import annotations

import ast
import inspect
from typing import TYPE_CHECKING, assert_never

from docscope.syntax import (
    Declaration,
    FieldDecl,
    FuncDecl,
    SourceFile,
    TypeDecl,
    ValueDecl,
    first_line,
    iter_declarations,
)

if TYPE_CHECKING:
    from docscope.loader import Package
    from docscope.scope import Member, Symbol


def _binds(decl: Declaration, name: str) -> bool:
    match decl:
        case TypeDecl(name=bound) | FuncDecl(name=bound):
            return bound == name
        case FieldDecl(names=names) | ValueDecl(names=names):
            return name in names
        case _:
            assert_never(decl)


def _definition_doc(node: ast.stmt, source_file: SourceFile) -> str:
    if isinstance(node, ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef):
        docstring = ast.get_docstring(node, clean=True)
        if docstring:
            return docstring
    return source_file.comments.leading_block(first_line(node))


def _binding_doc(node: ast.stmt, doc_node: ast.Expr | None, source_file: SourceFile) -> str:
    comments = source_file.comments
    leading = comments.leading_block(node.lineno)
    if leading.strip():
        return leading
    if doc_node is not None:
        return inspect.cleandoc(doc_node.value.value)  # type: ignore[attr-defined]
    trailing = comments.trailing_comment(node.lineno)
    if not trailing and node.end_lineno is not None and node.end_lineno != node.lineno:
        trailing = comments.trailing_comment(node.end_lineno)
    return trailing


def doc_text(decl: Declaration, source_file: SourceFile) -> str:
    """Documentation attached to one declaration, untrimmed."""
    match decl:
        case TypeDecl(node=node) | FuncDecl(node=node):
            return _definition_doc(node, source_file)
        case FieldDecl(node=node, doc_node=doc_node) | ValueDecl(node=node, doc_node=doc_node):
            return _binding_doc(node, doc_node, source_file)
        case _:
            assert_never(decl)


def comment_for(package: Package, symbol: Symbol | Member | str) -> str:
    """Return the documentation of ``symbol`` within ``package``.

    Parameters
    ----------
    package : Package
        Package whose syntax trees are searched
    symbol : Symbol | Member | str
        Symbol (or bare name) to document

    Returns
    -------
    str
        Trimmed documentation text, empty when nothing documents the name
    """
    name = symbol if isinstance(symbol, str) else symbol.name
    for source_file in package.files:
        for decl in iter_declarations(source_file.tree):
            if _binds(decl, name):
                return doc_text(decl, source_file).strip()
    return ""


def package_comment(package: Package) -> str:
    """First non-empty module docstring across the package's files."""
    for source_file in package.files:
        text = source_file.docstring.strip()
        if text:
            return text
    return ""
