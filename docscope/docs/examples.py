"""Usage example extraction.

An example for ``target`` is any function whose name starts with
``example_`` and ends with ``target``. The suffix rule is loose:
``example_other_parse`` also counts as an example for ``parse``.

The expected output is declared on an ``Output:`` line, either in the
function's documentation or in a comment inside its body::

    def example_add():
        # Output: 3
        print(add(1, 2))

When the marker line is otherwise empty, the lines that follow it in the
same block form a multi-line output.
"""

from __future__ import annotations

import ast
from collections.abc import Iterator
from typing import TYPE_CHECKING

from docscope.docs.models import Example
from docscope.syntax import FuncDecl, SourceFile, first_line, iter_declarations

if TYPE_CHECKING:
    from docscope.loader import Package

EXAMPLE_PREFIX = "example_"
OUTPUT_MARKER = "Output:"


def is_example_for(function_name: str, target: str) -> bool:
    return function_name.startswith(EXAMPLE_PREFIX) and function_name.endswith(target)


def body_source(node: ast.FunctionDef | ast.AsyncFunctionDef) -> str:
    """Normalized source of a function body, without its docstring."""
    body = list(node.body)
    if ast.get_docstring(node, clean=False) is not None:
        body = body[1:]
    return ast.unparse(ast.Module(body=body, type_ignores=[]))


def _comment_blocks(node: ast.stmt, source_file: SourceFile) -> Iterator[list[str]]:
    """Documentation and in-body comment blocks of a function, in source order."""
    leading = source_file.comments.leading_block(first_line(node))
    if leading:
        yield leading.splitlines()

    docstring = ast.get_docstring(node, clean=True)  # type: ignore[arg-type]
    if docstring:
        yield docstring.splitlines()

    block: list[str] = []
    previous = None
    standalone = source_file.comments.standalone
    end = node.end_lineno or node.lineno
    for line in range(node.lineno + 1, end + 1):
        if line not in standalone:
            continue
        if previous is not None and line != previous + 1 and block:
            yield block
            block = []
        block.append(standalone[line])
        previous = line
    if block:
        yield block


def declared_output(lines: list[str]) -> str | None:
    """Output declared in one block of lines; the last marker wins."""
    output: str | None = None
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped.startswith(OUTPUT_MARKER):
            continue
        remainder = stripped[len(OUTPUT_MARKER) :].strip()
        if not remainder:
            continuation: list[str] = []
            for following in lines[index + 1 :]:
                if not following.strip():
                    break
                continuation.append(following.strip())
            remainder = "\n".join(continuation)
        output = remainder or None
    return output


def examples_for(package: Package, target: str) -> Iterator[Example]:
    """Yield the usage examples for ``target`` found in ``package``.

    Parameters
    ----------
    package : Package
        Package whose syntax trees are scanned
    target : str
        Name of the documented function or method

    Yields
    ------
    Example
        One record per qualifying function, in traversal order
    """
    for source_file in package.files:
        for decl in iter_declarations(source_file.tree):
            if not isinstance(decl, FuncDecl) or not is_example_for(decl.name, target):
                continue
            output = None
            for block in _comment_blocks(decl.node, source_file):
                output = declared_output(block) or output
            yield Example(name=decl.name, code=body_source(decl.node), output=output)
