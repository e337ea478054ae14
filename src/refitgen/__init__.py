"""refitgen - stub generator for Refit-style C# HTTP client interfaces.

Scans parsed C# sources for interfaces whose methods carry HTTP method
attributes and renders a concrete ``AutoGenerated<Name>`` class for each.
"""

from refitgen.config import ConventionConfig, load_config
from refitgen.errors import (
    ConfigError,
    ParserError,
    RefitGenError,
    StructuralMismatchError,
)
from refitgen.generator import InterfaceStubGenerator
from refitgen.models import (
    ClassTemplateInfo,
    Diagnostic,
    DiagnosticDescriptor,
    DiagnosticSeverity,
    GenerationResult,
    MethodTemplateInfo,
    ParameterInfo,
    SourceLocation,
    TemplateInformation,
    UsingDeclaration,
)
from refitgen.parser import CSharpParser, SyntaxTree

__version__ = "0.1.0"

__all__ = [
    "CSharpParser",
    "ClassTemplateInfo",
    "ConfigError",
    "ConventionConfig",
    "Diagnostic",
    "DiagnosticDescriptor",
    "DiagnosticSeverity",
    "GenerationResult",
    "InterfaceStubGenerator",
    "MethodTemplateInfo",
    "ParameterInfo",
    "ParserError",
    "RefitGenError",
    "SourceLocation",
    "StructuralMismatchError",
    "SyntaxTree",
    "TemplateInformation",
    "UsingDeclaration",
    "__version__",
    "load_config",
]
