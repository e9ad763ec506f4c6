"""Documentation extraction and rendering.

Correlates symbols with their comments, extracts usage examples, and renders
assembled records as markdown or JSON.
"""

from docscope.docs.comments import comment_for, package_comment
from docscope.docs.examples import EXAMPLE_PREFIX, OUTPUT_MARKER, examples_for
from docscope.docs.models import (
    ClassInfo,
    ClassSummary,
    ConstAndVarDoc,
    ConstDoc,
    Example,
    FieldDoc,
    FuncDoc,
    FuncSummary,
    MethodDoc,
    MethodDocResult,
    MethodSummary,
    PackageInfo,
    PackageInspection,
    PackageList,
    VarDoc,
)
from docscope.docs.renderers import render, render_json

__all__ = [
    "EXAMPLE_PREFIX",
    "OUTPUT_MARKER",
    "ClassInfo",
    "ClassSummary",
    "ConstAndVarDoc",
    "ConstDoc",
    "Example",
    "FieldDoc",
    "FuncDoc",
    "FuncSummary",
    "MethodDoc",
    "MethodDocResult",
    "MethodSummary",
    "PackageInfo",
    "PackageInspection",
    "PackageList",
    "VarDoc",
    "comment_for",
    "examples_for",
    "package_comment",
    "render",
    "render_json",
]
