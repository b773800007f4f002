"""
formgen: compile declarative form configurations.

A form configuration (a tree of field descriptors) is compiled into a
runtime validation schema, a tree of default values and the source of a
React form component with its Zod schema and TypeScript types.
"""

__version__ = "0.1.0"

from .compiler import CompiledForm, compile_form, generate
from .defaults import form_defaults, item_defaults, synthesize_defaults
from .descriptor import (
    FieldDescriptor,
    FieldKind,
    FormDescriptor,
    ValidationConstraints,
    check_form,
    parse_form,
)
from .errors import CompileError, FormConfigError, IdentifierError, StructuralError, describe_error
from .codegen.core.naming import FormIdentifiers, type_identifier, value_identifier
from .logging_config import get_logger, setup_logging
from .validation import ValidationSchema, compile_form_schema, compile_schema

__all__ = [
    "__version__",
    # Pipeline
    "CompiledForm",
    "compile_form",
    "generate",
    # Descriptors
    "FieldDescriptor",
    "FieldKind",
    "FormDescriptor",
    "ValidationConstraints",
    "parse_form",
    "check_form",
    # Outputs
    "ValidationSchema",
    "compile_schema",
    "compile_form_schema",
    "synthesize_defaults",
    "item_defaults",
    "form_defaults",
    # Identifiers
    "FormIdentifiers",
    "type_identifier",
    "value_identifier",
    # Errors
    "FormConfigError",
    "StructuralError",
    "CompileError",
    "IdentifierError",
    "describe_error",
    # Logging
    "get_logger",
    "setup_logging",
]
