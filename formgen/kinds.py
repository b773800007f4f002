"""
Per-kind dispatch table.

One KindSpec per FieldKind holds everything the validation compiler, the
default value synthesizer and the three generators need to know about a
kind, so the consumers cannot drift apart.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional

from .descriptor import FieldDescriptor, FieldKind

LENGTH_CONSTRAINTS = frozenset({"min_length", "max_length", "pattern"})
RANGE_CONSTRAINTS = frozenset({"min", "max"})


@dataclass(frozen=True)
class KindSpec:
    """Static description of one field kind."""

    kind: FieldKind
    default_factory: Callable[[], Any]
    ts_type: str
    control: str  # field block template, see codegen/react/templates/fields
    input_type: Optional[str] = None
    text_like: bool = False
    numeric: bool = False
    email_format: bool = False
    needs_options: bool = False

    @property
    def accepted_constraints(self) -> FrozenSet[str]:
        if self.text_like:
            return LENGTH_CONSTRAINTS
        if self.numeric:
            return RANGE_CONSTRAINTS
        return frozenset()

    def default_value(self) -> Any:
        return self.default_factory()


def _empty_string() -> str:
    return ""


KIND_SPECS: Dict[FieldKind, KindSpec] = {
    FieldKind.TEXT: KindSpec(
        FieldKind.TEXT, _empty_string, "string", "input", input_type="text", text_like=True
    ),
    FieldKind.EMAIL: KindSpec(
        FieldKind.EMAIL,
        _empty_string,
        "string",
        "input",
        input_type="email",
        text_like=True,
        email_format=True,
    ),
    FieldKind.PASSWORD: KindSpec(
        FieldKind.PASSWORD,
        _empty_string,
        "string",
        "input",
        input_type="password",
        text_like=True,
    ),
    FieldKind.NUMBER: KindSpec(
        FieldKind.NUMBER, lambda: None, "number", "input", input_type="number", numeric=True
    ),
    FieldKind.TEXTAREA: KindSpec(
        FieldKind.TEXTAREA, _empty_string, "string", "textarea", text_like=True
    ),
    FieldKind.BOOLEAN: KindSpec(FieldKind.BOOLEAN, lambda: False, "boolean", "checkbox"),
    FieldKind.SELECT: KindSpec(
        FieldKind.SELECT, _empty_string, "string", "select", needs_options=True
    ),
    FieldKind.RADIO: KindSpec(
        FieldKind.RADIO, _empty_string, "string", "radio", needs_options=True
    ),
    FieldKind.ARRAY: KindSpec(FieldKind.ARRAY, list, "unknown[]", "array"),
}


def get_kind_spec(kind) -> Optional[KindSpec]:
    """Spec for a kind, or None for an unrecognized (raw string) kind."""
    if isinstance(kind, FieldKind):
        return KIND_SPECS[kind]
    return None


def ignored_constraints(field: FieldDescriptor) -> List[str]:
    """Constraints set on a field that its kind does not admit."""
    if not field.constraints:
        return []
    spec = get_kind_spec(field.kind)
    accepted = spec.accepted_constraints if spec else frozenset()
    return [name for name in field.constraints.present() if name not in accepted]


def collect_warnings(fields, prefix: str = "") -> List[str]:
    """
    Advisory warnings for a field tree.

    Covers unknown kinds, empty enumerations and constraints that do not
    apply to their field's kind.
    """
    warnings = []
    for field in fields:
        path = f"{prefix}{field.name}"
        spec = get_kind_spec(field.kind)
        if spec is None:
            warnings.append(f"Unknown field type '{field.kind_name}' in {path}")
            continue

        needs_options = spec.needs_options or (
            field.is_array
            and not field.children
            and KIND_SPECS[field.item_kind].needs_options
        )
        if needs_options and not field.options:
            warnings.append(f"Field {path} has no options and will accept no value")

        for name in ignored_constraints(field):
            warnings.append(
                f"Constraint '{name}' is ignored for {spec.kind.value} field {path}"
            )

        if field.children:
            warnings.extend(collect_warnings(field.children, f"{path}."))
    return warnings
