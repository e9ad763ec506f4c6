"""Tool registry: the query operations docscope advertises to callers.

``TOOLS`` is the static list of (name, description, parameter shape)
entries, one per ``DocEngine`` query. Transports register these and route
calls through ``call_tool``, which validates the parameters, runs the query
and renders the result as text.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from docscope.docs.models import PackageList
from docscope.docs.renderers import OutputFormat, render
from docscope.engine import DocEngine
from docscope.exceptions import UnknownToolError
from docscope.logging import get_logger

logger = get_logger(__name__)

# ============================================================================
# Parameter shapes
# ============================================================================


class ToolParams(BaseModel):
    """Parameters shared by every tool."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    output_format: OutputFormat = Field(
        "markdown", description="Result format: 'markdown' (default) or 'json'"
    )


class ListPackagesParams(ToolParams):
    pass


class InspectPackageParams(ToolParams):
    package_name: str = Field(description="Import path of the package, e.g. 'sample.geometry'")
    include_comments: bool = Field(True, description="Whether to include comments")


class GetClassDocParams(ToolParams):
    package_name: str = Field(description="Import path of the package defining the class")
    class_name: str = Field(description="Name of the class")


class GetFuncDocParams(ToolParams):
    package_name: str = Field(description="Import path of the package defining the function")
    func_name: str = Field(description="Name of the function")


class GetMethodDocParams(ToolParams):
    package_name: str = Field(description="Import path of the package defining the method")
    class_name: str = Field(description="Name of the class that owns the method")
    method_name: str = Field(description="Name of the method")


class GetConstAndVarDocParams(ToolParams):
    package_name: str = Field(description="Import path of the package")


# ============================================================================
# Registry
# ============================================================================


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """One advertised query operation.

    Attributes
    ----------
    name : str
        Tool name as seen by callers
    description : str
        Human-readable description
    params_model : type[ToolParams]
        Parameter shape
    handler : Callable[[DocEngine, Any], BaseModel]
        Runs the query on an engine and returns the result record
    """

    name: str
    description: str
    params_model: type[ToolParams]
    handler: Callable[[DocEngine, Any], BaseModel]

    def input_schema(self) -> dict[str, Any]:
        return self.params_model.model_json_schema()


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="python_list_packages",
        description=(
            "Display a list of Python packages and their package docstrings. "
            "You can check the description and purpose of each package."
        ),
        params_model=ListPackagesParams,
        handler=lambda engine, params: PackageList(packages=engine.list_packages()),
    ),
    ToolSpec(
        name="python_inspect_package",
        description=(
            "List the public classes, methods, and functions in the specified Python "
            "package. You can check comments for each element."
        ),
        params_model=InspectPackageParams,
        handler=lambda engine, params: engine.inspect_package(
            params.package_name, params.include_comments
        ),
    ),
    ToolSpec(
        name="python_get_class_doc",
        description=(
            "Display detailed information about the specified Python class. You can check "
            "the class's docstring, fields, methods, and their comments."
        ),
        params_model=GetClassDocParams,
        handler=lambda engine, params: engine.get_class_doc(params.package_name, params.class_name),
    ),
    ToolSpec(
        name="python_get_func_doc",
        description=(
            "Display detailed information about the specified Python function. You can check "
            "the function's signature, docstring, and usage examples."
        ),
        params_model=GetFuncDocParams,
        handler=lambda engine, params: engine.get_func_doc(params.package_name, params.func_name),
    ),
    ToolSpec(
        name="python_get_method_doc",
        description=(
            "Display detailed information about the specified method of a Python class. You "
            "can check the method's signature, docstring, and usage examples."
        ),
        params_model=GetMethodDocParams,
        handler=lambda engine, params: engine.get_method_doc(
            params.package_name, params.class_name, params.method_name
        ),
    ),
    ToolSpec(
        name="python_get_const_and_var_doc",
        description=(
            "Display detailed information about module-level constants and variables in the "
            "specified Python package. You can check the type, value, and comments for each."
        ),
        params_model=GetConstAndVarDocParams,
        handler=lambda engine, params: engine.get_const_and_var_doc(params.package_name),
    ),
)

_TOOLS_BY_NAME: dict[str, ToolSpec] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolSpec:
    """Return the registered tool called ``name``.

    Raises
    ------
    UnknownToolError
        If no tool has that name
    """
    try:
        return _TOOLS_BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name, list(_TOOLS_BY_NAME)) from None


def call_tool(engine: DocEngine, name: str, arguments: Mapping[str, Any] | None = None) -> str:
    """Validate ``arguments``, run the named query and render its result.

    Parameters
    ----------
    engine : DocEngine
        Engine to query
    name : str
        Registered tool name
    arguments : Mapping[str, Any] | None
        Raw parameter record

    Returns
    -------
    str
        Rendered result text

    Raises
    ------
    UnknownToolError
        If the tool name is not registered
    pydantic.ValidationError
        If the arguments do not match the tool's parameter shape
    DocScopeError
        Any query failure raised by the engine
    """
    tool = get_tool(name)
    params = tool.params_model.model_validate(dict(arguments or {}))
    logger.debug("Calling tool {name} with {params}", name=name, params=params.model_dump())
    record = tool.handler(engine, params)
    return render(record, params.output_format)
