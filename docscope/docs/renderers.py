"""Renderers turning documentation records into text.

Every renderer is a pure function of its record. Optional parts that are
empty simply leave their section out.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Literal

from pydantic import BaseModel

from docscope.docs.models import (
    ClassInfo,
    ConstAndVarDoc,
    Example,
    FuncDoc,
    MethodDocResult,
    PackageInfo,
    PackageInspection,
    PackageList,
)

OutputFormat = Literal["markdown", "json"]

NO_PACKAGES = "No packages loaded."


def _paragraph(lines: list[str], text: str) -> None:
    if text:
        lines.extend([text, ""])


def _render_examples(lines: list[str], examples: Sequence[Example]) -> None:
    if not examples:
        return
    lines.extend(["## Examples", ""])
    for example in examples:
        lines.extend([f"### {example.name}", "```python", example.code, "```"])
        if example.output:
            lines.extend(["Output:", "```", example.output, "```"])
        lines.append("")


def render_package_list(packages: Sequence[PackageInfo]) -> str:
    """Render the package listing as markdown."""
    if not packages:
        return NO_PACKAGES
    lines = ["# Packages", ""]
    for package in packages:
        lines.extend([f"## {package.name}", f"Import Path: `{package.import_path}`", ""])
        _paragraph(lines, package.comment)
    return "\n".join(lines)


def render_package_inspection(inspection: PackageInspection) -> str:
    """Render a package's exported classes, functions and methods as markdown."""
    package = inspection.package
    with_comments = inspection.include_comments
    lines = [f"# Package: {package.name}", "", f"Import Path: `{package.import_path}`", ""]
    _paragraph(lines, package.comment)

    if inspection.classes:
        lines.extend(["## Classes", ""])
        for cls in inspection.classes:
            lines.append(f"### {cls.name}")
            _paragraph(lines, cls.comment if with_comments else "")

    if inspection.functions:
        lines.extend(["## Functions", ""])
        for func in inspection.functions:
            lines.append(f"### {func.name}")
            _paragraph(lines, func.comment if with_comments else "")

    if inspection.methods:
        lines.extend(["## Methods", ""])
        for method in inspection.methods:
            lines.append(f"### {method.receiver_type}.{method.name}")
            _paragraph(lines, method.comment if with_comments else "")

    return "\n".join(lines)


def render_class_doc(info: ClassInfo) -> str:
    """Render a class with its fields and methods as markdown."""
    lines = [f"# Class: {info.name}", ""]
    _paragraph(lines, info.comment)

    if info.fields:
        lines.extend(["## Fields", ""])
        for field in info.fields:
            heading = f"### {field.name}" if field.is_exported else f"### {field.name} (private)"
            lines.extend([heading, f"Type: `{field.type}`"])
            _paragraph(lines, field.comment)

    if info.methods:
        lines.extend(["## Methods", ""])
        for method in info.methods:
            lines.extend([f"### {method.name}", f"Signature: `{method.signature}`"])
            _paragraph(lines, method.comment)
            if method.examples:
                names = ", ".join(f"`{example.name}`" for example in method.examples)
                lines.extend([f"Examples: {names}", ""])

    return "\n".join(lines)


def render_func_doc(doc: FuncDoc) -> str:
    """Render a function with its signature and examples as markdown."""
    lines = [f"# Function: {doc.name}", "", f"Signature: `{doc.signature}`", ""]
    _paragraph(lines, doc.comment)
    _render_examples(lines, doc.examples)
    return "\n".join(lines)


def render_method_doc(doc: MethodDocResult) -> str:
    """Render a method with its signature and examples as markdown."""
    lines = [
        f"# Method: {doc.receiver_type}.{doc.name}",
        "",
        f"Signature: `{doc.signature}`",
        "",
    ]
    _paragraph(lines, doc.comment)
    _render_examples(lines, doc.examples)
    return "\n".join(lines)


def render_const_and_var_doc(doc: ConstAndVarDoc) -> str:
    """Render a package's constants and variables as markdown."""
    lines: list[str] = []

    if doc.constants:
        lines.extend(["# Constants", ""])
        for const in doc.constants:
            lines.extend([f"## {const.name}", f"Type: `{const.type}`", f"Value: `{const.value}`"])
            _paragraph(lines, const.comment)

    if doc.variables:
        lines.extend(["# Variables", ""])
        for var in doc.variables:
            lines.extend([f"## {var.name}", f"Type: `{var.type}`"])
            _paragraph(lines, var.comment)

    return "\n".join(lines)


def _without_comments(inspection: PackageInspection) -> PackageInspection:
    return inspection.model_copy(
        update={
            "classes": [c.model_copy(update={"comment": ""}) for c in inspection.classes],
            "functions": [f.model_copy(update={"comment": ""}) for f in inspection.functions],
            "methods": [m.model_copy(update={"comment": ""}) for m in inspection.methods],
        }
    )


def render_json(record: BaseModel) -> str:
    """Render any record as indented JSON.

    A package inspection taken without comments has its listing comments
    blanked, matching the markdown rendering.
    """
    if isinstance(record, PackageInspection) and not record.include_comments:
        record = _without_comments(record)
    return record.model_dump_json(indent=2)


_MARKDOWN_RENDERERS: dict[type[BaseModel], Callable] = {
    PackageList: lambda record: render_package_list(record.packages),
    PackageInspection: render_package_inspection,
    ClassInfo: render_class_doc,
    FuncDoc: render_func_doc,
    MethodDocResult: render_method_doc,
    ConstAndVarDoc: render_const_and_var_doc,
}


def render(record: BaseModel, output_format: OutputFormat = "markdown") -> str:
    """Render a query result in the requested format.

    Parameters
    ----------
    record : BaseModel
        Any result record produced by ``DocEngine``
    output_format : OutputFormat, default="markdown"
        ``"markdown"`` for human-readable text, ``"json"`` for structured output

    Returns
    -------
    str
        Rendered text
    """
    if output_format == "json":
        return render_json(record)
    return _MARKDOWN_RENDERERS[type(record)](record)
