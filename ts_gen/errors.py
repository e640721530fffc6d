"""
Error types raised while deriving and exporting TypeScript declarations.
"""

from __future__ import annotations


class TsGenError(Exception):
    """Base class for all errors raised by ts_gen."""

    pass


class AttrError(TsGenError):
    """Raised when a `ts` attribute is unknown, malformed or conflicting.

    Always fatal to the item being derived.
    """

    pass


class ShapeError(TsGenError):
    """Raised when an operation is not supported by a type's shape.

    For example, declaring a tuple or flattening a primitive.
    """

    def __init__(self, operation: str, type_name: str):
        self.operation = operation
        self.type_name = type_name
        super().__init__(f"{type_name} cannot be {operation}")


class ExportError(TsGenError):
    """Raised when a type cannot be exported."""

    pass


class ExportPathError(ExportError):
    """Raised when an output path escapes the output directory."""

    pass


class FormattingError(TsGenError):
    """Raised when the external formatter fails.

    The unformatted file has already been written when this is raised.
    """

    pass


class ConfigError(TsGenError):
    """Raised when a configuration file holds an invalid value."""

    pass
