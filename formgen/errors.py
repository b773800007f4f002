"""
Error types raised while loading and compiling form configurations.

Every error carries the dotted path of the offending field (when there is
one) so the presentation layer can point at it.
"""

from typing import Optional


class FormConfigError(Exception):
    """Base exception for invalid form configurations."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self._format())

    def _format(self) -> str:
        if self.field:
            return f"field '{self.field}': {self.message}"
        return self.message


class StructuralError(FormConfigError):
    """The document violates the form descriptor invariants."""

    pass


class CompileError(FormConfigError):
    """A field cannot be compiled into a validator."""

    def __init__(self, field: str, kind: str, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or f"unknown field type '{kind}'", field)


class IdentifierError(FormConfigError):
    """A code identifier cannot be derived from the form title."""

    pass


def describe_error(error: FormConfigError) -> str:
    """Render an error the way the CLI reports it to the user."""
    return f"Invalid configuration: {error}"
