"""Semantic scope of a module: the symbol table docscope queries against.

The binder walks a module's top-level statements once and records every
binding as a typed ``Symbol`` with rendered signatures, class member
tables and constant values. Comments are not part of the scope; they
live in the syntax layer and are correlated on demand.
"""

from __future__ import annotations

import ast
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from docscope.syntax import (
    SourceFile,
    assigned_names,
    nested_bodies,
    receiver_name,
    self_attribute,
    target_names,
)

_TYPE_ALIAS_NODE = getattr(ast, "TypeAlias", ())

_CONSTANT_NAME = re.compile(r"^_*[A-Z][A-Z0-9_]*$")

_TYPE_PARAMETER_FACTORIES = frozenset({"TypeVar", "ParamSpec", "TypeVarTuple"})

UNKNOWN_TYPE = "Any"


class SymbolKind(StrEnum):
    """Declaration kinds a symbol can have."""

    CLASS = "class"
    ALIAS = "type alias"
    FUNCTION = "function"
    METHOD = "method"
    CONSTANT = "constant"
    VARIABLE = "variable"
    FIELD = "field"


class ClassShape(StrEnum):
    """Underlying shape of a class symbol."""

    STRUCT = "class"
    INTERFACE = "protocol"


@dataclass(frozen=True, slots=True)
class FieldSymbol:
    name: str
    type_text: str
    exported: bool

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.FIELD


@dataclass(frozen=True, slots=True)
class FunctionSymbol:
    """A function, or a method when ``receiver`` is set.

    Attributes
    ----------
    name : str
        Function name
    signature : str
        Rendered signature, e.g. ``(x: int) -> str``; the receiver parameter
        of instance and class methods is omitted
    receiver : str | None
        Receiver type text: the owning class name, or ``type[Owner]`` for
        classmethods. None for module-level functions.
    exported : bool
        Whether the name is part of the public surface
    """

    name: str
    signature: str
    receiver: str | None
    exported: bool

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.METHOD if self.receiver is not None else SymbolKind.FUNCTION


@dataclass(frozen=True, slots=True)
class ClassSymbol:
    name: str
    shape: ClassShape
    bases: tuple[str, ...]
    fields: tuple[FieldSymbol, ...]
    methods: tuple[FunctionSymbol, ...]
    exported: bool

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.CLASS

    def method(self, name: str) -> FunctionSymbol | None:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def field(self, name: str) -> FieldSymbol | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


@dataclass(frozen=True, slots=True)
class AliasSymbol:
    name: str
    target: str
    exported: bool

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.ALIAS


@dataclass(frozen=True, slots=True)
class ConstSymbol:
    name: str
    type_text: str
    value: str
    exported: bool

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.CONSTANT


@dataclass(frozen=True, slots=True)
class VarSymbol:
    name: str
    type_text: str
    exported: bool

    @property
    def kind(self) -> SymbolKind:
        return SymbolKind.VARIABLE


Symbol = ClassSymbol | AliasSymbol | FunctionSymbol | ConstSymbol | VarSymbol
Member = FunctionSymbol | FieldSymbol


class Scope:
    """Read-only symbol table of one module.

    Examples
    --------
    >>> from docscope.syntax import parse_source
    >>> scope = build_scope([parse_source("def f() -> int: ...")])
    >>> scope.lookup("f").signature
    '() -> int'
    """

    def __init__(self, symbols: Mapping[str, Symbol]) -> None:
        self._symbols = MappingProxyType(dict(symbols))
        self._names = tuple(sorted(self._symbols))

    def names(self) -> tuple[str, ...]:
        """All bound names, sorted."""
        return self._names

    def lookup(self, name: str) -> Symbol | Member | None:
        """Resolve a name; ``Class.member`` resolves to a method or field."""
        symbol = self._symbols.get(name)
        if symbol is not None or "." not in name:
            return symbol
        owner_name, _, member_name = name.rpartition(".")
        owner = self._symbols.get(owner_name)
        if not isinstance(owner, ClassSymbol):
            return None
        return owner.method(member_name) or owner.field(member_name)

    def __iter__(self) -> Iterator[Symbol]:
        return (self._symbols[name] for name in self._names)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols


# ============================================================================
# Naming rules
# ============================================================================


def is_exported(name: str, public_names: frozenset[str] | None = None) -> bool:
    """Module-level export rule: ``__all__`` when present, else no leading underscore."""
    if public_names is not None:
        return name in public_names
    return not name.startswith("_")


def is_exported_member(name: str) -> bool:
    """Class member export rule: public names and dunder protocol methods."""
    if name.startswith("__") and name.endswith("__") and len(name) > 4:
        return True
    return not name.startswith("_")


def is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def display_receiver(receiver: str) -> str:
    """Strip exactly one ``type[...]`` layer from a receiver type text.

    >>> display_receiver("type[Point]")
    'Point'
    >>> display_receiver("Point")
    'Point'
    """
    if receiver.startswith("type[") and receiver.endswith("]"):
        return receiver[len("type[") : -1]
    return receiver


# ============================================================================
# Rendering helpers
# ============================================================================


def _dotted_tail(node: ast.expr) -> str:
    """Last segment of a (possibly subscripted) name: ``typing.Final[int]`` -> ``Final``."""
    if isinstance(node, ast.Subscript):
        node = node.value
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    return ""


def _decorator_names(node: ast.FunctionDef | ast.AsyncFunctionDef) -> list[str]:
    names = []
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        names.append(ast.unparse(target))
    return names


def render_signature(
    node: ast.FunctionDef | ast.AsyncFunctionDef, *, drop_receiver: bool = False
) -> str:
    """Render ``(params) -> returns`` for a function definition."""
    args = node.args
    if drop_receiver:
        posonly, regular = list(args.posonlyargs), list(args.args)
        if posonly:
            posonly.pop(0)
        elif regular:
            regular.pop(0)
        args = ast.arguments(
            posonlyargs=posonly,
            args=regular,
            vararg=args.vararg,
            kwonlyargs=args.kwonlyargs,
            kw_defaults=args.kw_defaults,
            kwarg=args.kwarg,
            defaults=args.defaults,
        )
    text = f"({ast.unparse(args)})"
    if node.returns is not None:
        text += f" -> {ast.unparse(node.returns)}"
    if isinstance(node, ast.AsyncFunctionDef):
        text = f"async {text}"
    return text


def infer_type(value: ast.expr | None) -> str:
    """Best-effort type text for an unannotated value expression."""
    if value is None:
        return UNKNOWN_TYPE
    if isinstance(value, ast.Constant):
        return "None" if value.value is None else type(value.value).__name__
    if isinstance(value, ast.JoinedStr):
        return "str"
    displays = {
        ast.List: "list",
        ast.ListComp: "list",
        ast.Dict: "dict",
        ast.DictComp: "dict",
        ast.Set: "set",
        ast.SetComp: "set",
        ast.Tuple: "tuple",
    }
    for node_type, type_text in displays.items():
        if isinstance(value, node_type):
            return type_text
    if isinstance(value, ast.UnaryOp) and isinstance(value.operand, ast.Constant):
        return infer_type(value.operand)
    if isinstance(value, ast.Call) and isinstance(value.func, ast.Name | ast.Attribute):
        callee = _dotted_tail(value.func)
        if callee[:1].isupper():
            return ast.unparse(value.func)
    return UNKNOWN_TYPE


def render_value(value: ast.expr | None) -> str:
    """Literal text of a constant value; falls back to the source expression."""
    if value is None:
        return ""
    try:
        return repr(ast.literal_eval(value))
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        return ast.unparse(value)


def _annotation_text(annotation: ast.expr, value: ast.expr | None) -> tuple[str, bool]:
    """Return (type text, is_final) for an annotation, unwrapping ``Final[...]``."""
    if _dotted_tail(annotation) == "Final":
        if isinstance(annotation, ast.Subscript):
            return ast.unparse(annotation.slice), True
        return infer_type(value), True
    return ast.unparse(annotation), False


def _pair_values(stmt: ast.Assign | ast.AnnAssign) -> dict[str, ast.expr | None]:
    """Map each bound name to the expression assigned to it."""
    if isinstance(stmt, ast.AnnAssign):
        return {name: stmt.value for name in target_names(stmt.target)}
    pairs: dict[str, ast.expr | None] = {}
    for target in stmt.targets:
        if (
            isinstance(target, ast.Tuple | ast.List)
            and isinstance(stmt.value, ast.Tuple | ast.List)
            and len(target.elts) == len(stmt.value.elts)
        ):
            for elt, value in zip(target.elts, stmt.value.elts, strict=True):
                for name in target_names(elt):
                    pairs[name] = value
        else:
            for name in target_names(target):
                pairs[name] = stmt.value
    return pairs


def _walk_statements(body: Iterable[ast.stmt]) -> Iterator[ast.stmt]:
    """Statements of a scope with transparent compound statements flattened."""
    for stmt in body:
        nested = list(nested_bodies(stmt))
        if nested:
            for inner in nested:
                yield from _walk_statements(inner)
        else:
            yield stmt


# ============================================================================
# Binder
# ============================================================================


def _public_names(files: Iterable[SourceFile]) -> frozenset[str] | None:
    """Literal ``__all__`` of the module, or None when it has none."""
    names: list[str] | None = None
    for source_file in files:
        for stmt in _walk_statements(source_file.tree.body):
            if isinstance(stmt, ast.Assign | ast.AnnAssign) and "__all__" in assigned_names(stmt):
                value = stmt.value
                operation = "set"
            elif (
                isinstance(stmt, ast.AugAssign)
                and isinstance(stmt.target, ast.Name)
                and stmt.target.id == "__all__"
            ):
                value = stmt.value
                operation = "extend"
            else:
                continue
            try:
                items = ast.literal_eval(value) if value is not None else []
            except (ValueError, TypeError, SyntaxError):
                continue
            if not isinstance(items, list | tuple):
                continue
            entries = [item for item in items if isinstance(item, str)]
            if operation == "set" or names is None:
                names = entries
            else:
                names.extend(entries)
    return frozenset(names) if names is not None else None


def _class_shape(node: ast.ClassDef) -> ClassShape:
    if any(_dotted_tail(base) == "Protocol" for base in node.bases):
        return ClassShape.INTERFACE
    return ClassShape.STRUCT


def _bind_method(
    node: ast.FunctionDef | ast.AsyncFunctionDef, owner: str
) -> FunctionSymbol:
    decorators = _decorator_names(node)
    if "staticmethod" in decorators:
        receiver, drop = owner, False
    elif "classmethod" in decorators:
        receiver, drop = f"type[{owner}]", True
    else:
        receiver, drop = owner, True
    return FunctionSymbol(
        name=node.name,
        signature=render_signature(node, drop_receiver=drop),
        receiver=receiver,
        exported=is_exported_member(node.name),
    )


def _is_accessor_redefinition(node: ast.FunctionDef | ast.AsyncFunctionDef) -> bool:
    """``@x.setter`` / ``@x.deleter`` re-bind a property already recorded."""
    return any(
        name.endswith((".setter", ".deleter")) for name in _decorator_names(node)
    )


def _init_parameter_types(node: ast.FunctionDef | ast.AsyncFunctionDef) -> dict[str, str]:
    params = node.args.posonlyargs + node.args.args + node.args.kwonlyargs
    return {arg.arg: ast.unparse(arg.annotation) for arg in params if arg.annotation is not None}


def _bind_init_fields(
    node: ast.FunctionDef | ast.AsyncFunctionDef, fields: dict[str, FieldSymbol]
) -> None:
    receiver = receiver_name(node)
    if receiver is None:
        return
    param_types = _init_parameter_types(node)
    for stmt in _walk_statements(node.body):
        if isinstance(stmt, ast.AnnAssign):
            attr = self_attribute(stmt.target, receiver)
            if attr and attr not in fields:
                fields[attr] = FieldSymbol(
                    attr, ast.unparse(stmt.annotation), is_exported_member(attr)
                )
        elif isinstance(stmt, ast.Assign):
            for target in stmt.targets:
                attr = self_attribute(target, receiver)
                if not attr or attr in fields:
                    continue
                if isinstance(stmt.value, ast.Name) and stmt.value.id in param_types:
                    type_text = param_types[stmt.value.id]
                else:
                    type_text = infer_type(stmt.value)
                fields[attr] = FieldSymbol(attr, type_text, is_exported_member(attr))


def _bind_class(node: ast.ClassDef, exported: bool) -> ClassSymbol:
    fields: dict[str, FieldSymbol] = {}
    methods: dict[str, FunctionSymbol] = {}
    init: ast.FunctionDef | ast.AsyncFunctionDef | None = None

    for stmt in _walk_statements(node.body):
        if isinstance(stmt, ast.FunctionDef | ast.AsyncFunctionDef):
            if stmt.name in methods and _is_accessor_redefinition(stmt):
                continue
            methods[stmt.name] = _bind_method(stmt, node.name)
            if stmt.name == "__init__":
                init = stmt
        elif isinstance(stmt, ast.AnnAssign):
            for name in target_names(stmt.target):
                fields[name] = FieldSymbol(
                    name, ast.unparse(stmt.annotation), is_exported_member(name)
                )
        elif isinstance(stmt, ast.Assign):
            for name, value in _pair_values(stmt).items():
                fields[name] = FieldSymbol(name, infer_type(value), is_exported_member(name))

    if init is not None:
        _bind_init_fields(init, fields)

    return ClassSymbol(
        name=node.name,
        shape=_class_shape(node),
        bases=tuple(ast.unparse(base) for base in node.bases),
        fields=tuple(fields.values()),
        methods=tuple(methods.values()),
        exported=exported,
    )


def _bind_assignment(
    stmt: ast.Assign | ast.AnnAssign, public_names: frozenset[str] | None
) -> Iterator[Symbol]:
    annotation = stmt.annotation if isinstance(stmt, ast.AnnAssign) else None

    if annotation is not None and _dotted_tail(annotation) == "TypeAlias":
        for name in target_names(stmt.target):  # type: ignore[union-attr]
            yield AliasSymbol(name, render_value_text(stmt.value), is_exported(name, public_names))
        return

    value = stmt.value
    if (
        isinstance(value, ast.Call)
        and _dotted_tail(value.func) == "NewType"
        and len(value.args) == 2
    ):
        for name in assigned_names(stmt):
            yield AliasSymbol(name, ast.unparse(value.args[1]), is_exported(name, public_names))
        return

    if isinstance(value, ast.Call) and _dotted_tail(value.func) in _TYPE_PARAMETER_FACTORIES:
        for name in assigned_names(stmt):
            yield VarSymbol(name, _dotted_tail(value.func), is_exported(name, public_names))
        return

    for name, name_value in _pair_values(stmt).items():
        if is_dunder(name):
            continue
        exported = is_exported(name, public_names)
        if annotation is not None:
            type_text, is_final = _annotation_text(annotation, name_value)
        else:
            type_text, is_final = infer_type(name_value), False
        if is_final or _CONSTANT_NAME.match(name):
            yield ConstSymbol(name, type_text, render_value(name_value), exported)
        else:
            yield VarSymbol(name, type_text, exported)


def render_value_text(value: ast.expr | None) -> str:
    """Source text of an expression, or an empty string."""
    if value is None:
        return ""
    if isinstance(value, ast.Constant) and isinstance(value.value, str):
        return value.value
    return ast.unparse(value)


def build_scope(files: Iterable[SourceFile]) -> Scope:
    """Bind every module-level declaration of ``files`` into a ``Scope``.

    Files are processed in order; a later binding of a name replaces an
    earlier one, as rebinding does at runtime. Imports are not bound.

    Parameters
    ----------
    files : Iterable[SourceFile]
        Parsed files of one module

    Returns
    -------
    Scope
        Immutable symbol table
    """
    files = list(files)
    public_names = _public_names(files)
    symbols: dict[str, Symbol] = {}

    for source_file in files:
        for stmt in _walk_statements(source_file.tree.body):
            if isinstance(stmt, ast.ClassDef):
                symbols[stmt.name] = _bind_class(stmt, is_exported(stmt.name, public_names))
            elif isinstance(stmt, ast.FunctionDef | ast.AsyncFunctionDef):
                symbols[stmt.name] = FunctionSymbol(
                    name=stmt.name,
                    signature=render_signature(stmt),
                    receiver=None,
                    exported=is_exported(stmt.name, public_names),
                )
            elif isinstance(stmt, _TYPE_ALIAS_NODE):
                name = stmt.name.id
                symbols[name] = AliasSymbol(
                    name, ast.unparse(stmt.value), is_exported(name, public_names)
                )
            elif isinstance(stmt, ast.Assign | ast.AnnAssign):
                for symbol in _bind_assignment(stmt, public_names):
                    symbols[symbol.name] = symbol

    return Scope(symbols)
