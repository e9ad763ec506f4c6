"""Data models for documentation query results.

These Pydantic models are the records the engine assembles and the
renderers format. They are frozen: a result never changes after it is built.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class PackageInfo(_Record):
    """Identity and documentation of one package.

    Attributes
    ----------
    name : str
        Short package name
    import_path : str
        Dotted import path
    comment : str
        Package-level documentation (module docstring)
    """

    name: str
    import_path: str
    comment: str = ""


class ClassSummary(_Record):
    name: str
    comment: str = ""


class FuncSummary(_Record):
    name: str
    comment: str = ""


class MethodSummary(_Record):
    """Listing entry for a method.

    Attributes
    ----------
    receiver_type : str
        Owning class name for display (class-object wrapper stripped)
    name : str
        Method name
    comment : str
        Method documentation
    """

    receiver_type: str
    name: str
    comment: str = ""


class PackageInspection(_Record):
    """Exported surface of a package.

    ``include_comments`` only affects rendering; the listed symbols are the
    same either way.
    """

    package: PackageInfo
    classes: list[ClassSummary] = Field(default_factory=list)
    functions: list[FuncSummary] = Field(default_factory=list)
    methods: list[MethodSummary] = Field(default_factory=list)
    include_comments: bool = True


class FieldDoc(_Record):
    name: str
    type: str
    comment: str = ""
    is_exported: bool = True


class Example(_Record):
    """A usage example extracted from an ``example_*`` function.

    Attributes
    ----------
    name : str
        Name of the example function
    code : str
        Normalized source of the function body
    output : str | None
        Expected output declared on an ``Output:`` line, if any
    """

    name: str
    code: str
    output: str | None = None


class MethodDoc(_Record):
    name: str
    signature: str
    comment: str = ""
    examples: list[Example] = Field(default_factory=list)


class ClassInfo(_Record):
    """Detailed documentation of a class with a struct shape.

    Attributes
    ----------
    name : str
        Class name
    comment : str
        Class documentation
    fields : list[FieldDoc]
        Fields in declaration order
    methods : list[MethodDoc]
        Methods in class body order
    """

    name: str
    comment: str = ""
    fields: list[FieldDoc] = Field(default_factory=list)
    methods: list[MethodDoc] = Field(default_factory=list)


class FuncDoc(_Record):
    name: str
    signature: str
    comment: str = ""
    examples: list[Example] = Field(default_factory=list)


class MethodDocResult(_Record):
    receiver_type: str
    name: str
    signature: str
    comment: str = ""
    examples: list[Example] = Field(default_factory=list)


class ConstDoc(_Record):
    name: str
    type: str
    value: str
    comment: str = ""


class VarDoc(_Record):
    name: str
    type: str
    comment: str = ""


class ConstAndVarDoc(_Record):
    constants: list[ConstDoc] = Field(default_factory=list)
    variables: list[VarDoc] = Field(default_factory=list)


class PackageList(_Record):
    packages: list[PackageInfo] = Field(default_factory=list)
