"""
Default value synthesizer.

Builds the initial value tree for a form. Synthesis is lenient: a field of
an unrecognized kind starts as an empty string instead of failing.
"""

from typing import Any, Dict, Sequence

from .descriptor import FieldDescriptor, FormDescriptor
from .kinds import KIND_SPECS, get_kind_spec


def field_default(field: FieldDescriptor) -> Any:
    """Initial value for one field (a fresh object on every call)."""
    spec = get_kind_spec(field.kind)
    if spec is None:
        return ""
    # "" is never one of the options, so an untouched optional choice is unset
    if spec.needs_options and not field.required:
        return None
    return spec.default_value()


def synthesize_defaults(fields: Sequence[FieldDescriptor]) -> Dict[str, Any]:
    """
    Build the default value tree for a field sequence.

    Boolean fields start as False, arrays as an empty list, numbers and
    optional select/radio fields as None (unset) and every other kind as an
    empty string.
    """
    return {field.name: field_default(field) for field in fields}


def item_defaults(field: FieldDescriptor) -> Any:
    """
    Value appended when the user adds one item to an array field.

    Composite arrays get an object of their children's defaults; primitive
    arrays get the default of their item kind.
    """
    if field.children:
        return synthesize_defaults(field.children)
    return KIND_SPECS[field.item_kind].default_value()


def form_defaults(form: FormDescriptor) -> Dict[str, Any]:
    return synthesize_defaults(form.fields)
