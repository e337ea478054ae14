"""Data models for template information and diagnostics.

All models are immutable and exist only for the duration of one generation
pass.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class SourceLocation(_FrozenModel):
    """Span of a syntax node in a source file.

    Lines are 1-based, columns are 0-based character offsets within the line.
    """

    path: str
    line: int
    column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        """Render as ``path(line,column)``."""
        return f"{self.path}({self.line},{self.column + 1})"


class ParameterInfo(_FrozenModel):
    """A declared method parameter."""

    type: str
    name: str


class MethodTemplateInfo(_FrozenModel):
    """Signature of one interface method, in declaration order."""

    name: str
    return_type: str
    parameters: list[ParameterInfo] = []
    is_refit_method: bool
    type_parameters: str | None = None
    constraint_clauses: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def argument_list(self) -> str:
        """Parameter names joined positionally, e.g. ``id,body``."""
        return ",".join(parameter.name for parameter in self.parameters)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def argument_list_with_types(self) -> str:
        """Typed parameters joined positionally, e.g. ``int id,Pet body``."""
        return ",".join(
            f"{parameter.type} {parameter.name}" for parameter in self.parameters
        )


class ClassTemplateInfo(_FrozenModel):
    """Shape of one candidate interface."""

    namespace: str
    interface_name: str
    type_parameters: str | None = None
    constraint_clauses: str | None = None
    methods: list[MethodTemplateInfo] = []


class UsingDeclaration(_FrozenModel):
    """A single using directive carried into the generated source."""

    name: str
    alias: str | None = None
    is_static: bool = False
    is_unsafe: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def item(self) -> str:
        """Directive text without the ``using`` keyword and semicolon."""
        target = f"{self.alias} = {self.name}" if self.alias else self.name
        modifiers: list[str] = []
        if self.is_static:
            modifiers.append("static")
        if self.is_unsafe:
            modifiers.append("unsafe")
        return " ".join([*modifiers, target])


class TemplateInformation(_FrozenModel):
    """Complete batch model handed to a synthesizer."""

    usings: list[UsingDeclaration] = []
    classes: list[ClassTemplateInfo] = []


class DiagnosticSeverity(str, Enum):
    """Severity of a reported diagnostic."""

    WARNING = "warning"
    ERROR = "error"


class DiagnosticDescriptor(_FrozenModel):
    """Static description of a diagnostic family."""

    id: str
    title: str
    message_format: str
    category: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING


class Diagnostic(_FrozenModel):
    """An advisory finding attached to a source location."""

    descriptor: DiagnosticDescriptor
    location: SourceLocation
    arguments: tuple[str, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        """Descriptor message with the positional arguments substituted."""
        return self.descriptor.message_format.format(*self.arguments)

    def __str__(self) -> str:
        """Render in compiler style: ``path(line,col): warning ID: message``."""
        return (
            f"{self.location}: {self.descriptor.severity.value} "
            f"{self.descriptor.id}: {self.message}"
        )


class GenerationResult(_FrozenModel):
    """Output of one generation pass."""

    source: str
    template_info: TemplateInformation
    diagnostics: tuple[Diagnostic, ...] = ()
