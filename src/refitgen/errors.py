"""Error classes for refitgen.

This module provides:
- RefitGenError: Base exception class for all generator errors
- ConfigError: Convention configuration exception
- ParserError: Parser-related exception
- StructuralMismatchError: Extraction contract violation (aborts a batch)
"""


class RefitGenError(Exception):
    """Base exception for all refitgen errors."""

    pass


class ConfigError(RefitGenError):
    """Raised when convention configuration is invalid."""

    pass


class ParserError(RefitGenError):
    """Base exception for parser-related errors."""

    pass


class StructuralMismatchError(RefitGenError):
    """Raised when a candidate interface does not have the expected shape.

    Examples are an interface that is not declared inside a namespace, or a
    method whose return type or parameter text cannot be located. The whole
    generation pass is aborted rather than emitting a partial model.
    """

    pass
