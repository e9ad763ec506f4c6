"""Documentation engine: the query layer over a loaded package index.

``DocEngine`` is built once from a root directory and is immutable
afterwards. Every query is a pure read, so one engine can serve concurrent
callers from several threads without locking.

Examples
--------
Example usage::

    engine = DocEngine.load("/path/to/project")
    for package in engine.list_packages():
        print(package.import_path)
    print(engine.get_func_doc("sample.geometry", "distance").signature)
"""

from __future__ import annotations

from pathlib import Path

from docscope.docs.comments import comment_for, package_comment
from docscope.docs.examples import examples_for
from docscope.docs.models import (
    ClassInfo,
    ClassSummary,
    ConstAndVarDoc,
    ConstDoc,
    FieldDoc,
    FuncDoc,
    FuncSummary,
    MethodDoc,
    MethodDocResult,
    MethodSummary,
    PackageInfo,
    PackageInspection,
    VarDoc,
)
from docscope.exceptions import MethodNotFoundError, SymbolNotFoundError, WrongKindError
from docscope.loader import Package, PackageIndex, load
from docscope.logging import get_logger
from docscope.scope import (
    ClassShape,
    ClassSymbol,
    ConstSymbol,
    FunctionSymbol,
    VarSymbol,
    display_receiver,
)

logger = get_logger(__name__)


def _kind_label(symbol: object) -> str:
    if isinstance(symbol, ClassSymbol):
        return symbol.shape.value
    return symbol.kind.value  # type: ignore[attr-defined]


class DocEngine:
    """Answers documentation queries about a fixed set of loaded packages."""

    def __init__(self, index: PackageIndex) -> None:
        self._index = index

    @classmethod
    def load(cls, root: str | Path, selector: str | None = None) -> DocEngine:
        """Load packages below ``root`` and build an engine over them.

        Raises
        ------
        LoadError
            If the root is unreadable or nothing under it could be parsed
        """
        return cls(load(root, selector))

    @property
    def index(self) -> PackageIndex:
        return self._index

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _package_info(package: Package) -> PackageInfo:
        return PackageInfo(
            name=package.name,
            import_path=package.import_path,
            comment=package_comment(package),
        )

    def _lookup_class(self, package: Package, class_name: str) -> ClassSymbol:
        symbol = package.scope.lookup(class_name)
        if symbol is None:
            raise SymbolNotFoundError(package.import_path, class_name, "class")
        if not isinstance(symbol, ClassSymbol):
            raise WrongKindError(package.import_path, class_name, "class", _kind_label(symbol))
        return symbol

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_packages(self) -> list[PackageInfo]:
        """List every loaded package with its documentation, sorted by import path."""
        packages = sorted(self._index.all_packages(), key=lambda pkg: pkg.import_path)
        return [self._package_info(package) for package in packages]

    def inspect_package(self, import_path: str, include_comments: bool = True) -> PackageInspection:
        """List the exported classes, functions and methods of a package.

        Parameters
        ----------
        import_path : str
            Package to inspect
        include_comments : bool, default=True
            Whether comments are shown when the result is rendered; the
            listed symbols are the same either way

        Returns
        -------
        PackageInspection
            Exported surface in scope name order

        Raises
        ------
        PackageNotFoundError
            If the import path is unknown
        """
        logger.debug("inspect_package {import_path}", import_path=import_path)
        package = self._index.get_package(import_path)

        classes: list[ClassSummary] = []
        functions: list[FuncSummary] = []
        methods: list[MethodSummary] = []

        for symbol in package.scope:
            if not symbol.exported:
                continue
            if isinstance(symbol, ClassSymbol):
                if symbol.shape is ClassShape.STRUCT:
                    classes.append(
                        ClassSummary(name=symbol.name, comment=comment_for(package, symbol))
                    )
                for method in symbol.methods:
                    if not method.exported or method.receiver is None:
                        continue
                    methods.append(
                        MethodSummary(
                            receiver_type=display_receiver(method.receiver),
                            name=method.name,
                            comment=comment_for(package, method),
                        )
                    )
            elif isinstance(symbol, FunctionSymbol) and symbol.receiver is None:
                functions.append(FuncSummary(name=symbol.name, comment=comment_for(package, symbol)))

        return PackageInspection(
            package=self._package_info(package),
            classes=classes,
            functions=functions,
            methods=methods,
            include_comments=include_comments,
        )

    def get_class_doc(self, import_path: str, class_name: str) -> ClassInfo:
        """Document a class: its comment, fields and methods.

        Raises
        ------
        PackageNotFoundError
            If the import path is unknown
        SymbolNotFoundError
            If the package binds no such name
        WrongKindError
            If the name is not a plain (non-protocol) class
        """
        logger.debug(
            "get_class_doc {import_path}.{name}", import_path=import_path, name=class_name
        )
        package = self._index.get_package(import_path)
        symbol = self._lookup_class(package, class_name)
        if symbol.shape is not ClassShape.STRUCT:
            raise WrongKindError(import_path, class_name, "class", symbol.shape.value)

        return ClassInfo(
            name=symbol.name,
            comment=comment_for(package, symbol),
            fields=[
                FieldDoc(
                    name=field.name,
                    type=field.type_text,
                    comment=comment_for(package, field),
                    is_exported=field.exported,
                )
                for field in symbol.fields
            ],
            methods=[
                MethodDoc(
                    name=method.name,
                    signature=method.signature,
                    comment=comment_for(package, method),
                    examples=list(examples_for(package, method.name)),
                )
                for method in symbol.methods
            ],
        )

    def get_func_doc(self, import_path: str, func_name: str) -> FuncDoc:
        """Document a module-level function with its usage examples.

        Raises
        ------
        PackageNotFoundError
            If the import path is unknown
        SymbolNotFoundError
            If the package binds no such name
        WrongKindError
            If the name resolves to a method or to a non-function symbol
        """
        logger.debug("get_func_doc {import_path}.{name}", import_path=import_path, name=func_name)
        package = self._index.get_package(import_path)
        symbol = package.scope.lookup(func_name)
        if symbol is None:
            raise SymbolNotFoundError(import_path, func_name, "function")
        if not isinstance(symbol, FunctionSymbol) or symbol.receiver is not None:
            raise WrongKindError(import_path, func_name, "function", _kind_label(symbol))

        return FuncDoc(
            name=symbol.name,
            signature=symbol.signature,
            comment=comment_for(package, symbol),
            examples=list(examples_for(package, symbol.name)),
        )

    def get_method_doc(self, import_path: str, class_name: str, method_name: str) -> MethodDocResult:
        """Document one method of a class with its usage examples.

        Raises
        ------
        PackageNotFoundError
            If the import path is unknown
        SymbolNotFoundError
            If the receiver class does not exist
        WrongKindError
            If the receiver name is not a class
        MethodNotFoundError
            If the class has no method with that name
        """
        logger.debug(
            "get_method_doc {import_path}.{cls}.{name}",
            import_path=import_path,
            cls=class_name,
            name=method_name,
        )
        package = self._index.get_package(import_path)
        symbol = self._lookup_class(package, class_name)
        method = symbol.method(method_name)
        if method is None:
            raise MethodNotFoundError(import_path, class_name, method_name)

        return MethodDocResult(
            receiver_type=class_name,
            name=method.name,
            signature=method.signature,
            comment=comment_for(package, method),
            examples=list(examples_for(package, method.name)),
        )

    def get_const_and_var_doc(self, import_path: str) -> ConstAndVarDoc:
        """Document the module-level constants and variables of a package.

        Raises
        ------
        PackageNotFoundError
            If the import path is unknown
        """
        logger.debug("get_const_and_var_doc {import_path}", import_path=import_path)
        package = self._index.get_package(import_path)

        constants: list[ConstDoc] = []
        variables: list[VarDoc] = []
        for symbol in package.scope:
            if isinstance(symbol, ConstSymbol):
                constants.append(
                    ConstDoc(
                        name=symbol.name,
                        type=symbol.type_text,
                        value=symbol.value,
                        comment=comment_for(package, symbol),
                    )
                )
            elif isinstance(symbol, VarSymbol):
                variables.append(
                    VarDoc(
                        name=symbol.name,
                        type=symbol.type_text,
                        comment=comment_for(package, symbol),
                    )
                )

        return ConstAndVarDoc(constants=constants, variables=variables)
