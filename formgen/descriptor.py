"""
Field descriptor model.

Represents a parsed form configuration as an immutable tree and checks that
an arbitrary JSON value satisfies the form invariants before anything is
compiled from it.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import StructuralError
from .logging_config import get_logger

logger = get_logger(__name__)


class FieldKind(Enum):
    """Supported field kinds (the ``type`` key of a field)."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEXTAREA = "textarea"
    BOOLEAN = "boolean"
    SELECT = "select"
    RADIO = "radio"
    ARRAY = "array"


# JSON key -> attribute name
CONSTRAINT_KEYS = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "min": "min",
    "max": "max",
    "pattern": "pattern",
}


@dataclass(frozen=True)
class ValidationConstraints:
    """Optional bounds attached to a field."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None

    def present(self) -> List[str]:
        """Names of the constraints that are set."""
        return [
            name
            for name in ("min_length", "max_length", "min", "max", "pattern")
            if getattr(self, name) is not None
        ]


@dataclass(frozen=True)
class FieldDescriptor:
    """One node of the form tree."""

    name: str
    kind: Union[FieldKind, str]  # raw string only for permissively loaded unknown kinds
    label: str
    required: bool = False
    constraints: Optional[ValidationConstraints] = None
    options: Tuple[str, ...] = ()
    item_kind: FieldKind = FieldKind.TEXT
    children: Tuple["FieldDescriptor", ...] = ()
    placeholder: Optional[str] = None
    helper_text: Optional[str] = None

    @property
    def kind_name(self) -> str:
        """The kind as written in the configuration."""
        return self.kind.value if isinstance(self.kind, FieldKind) else str(self.kind)

    @property
    def is_known_kind(self) -> bool:
        return isinstance(self.kind, FieldKind)

    @property
    def is_array(self) -> bool:
        return self.kind is FieldKind.ARRAY

    @property
    def is_composite(self) -> bool:
        """True for arrays whose items are objects built from ``children``."""
        return self.is_array and bool(self.children)

    @property
    def display_placeholder(self) -> str:
        """Placeholder text, falling back to ``Enter <label>``."""
        if self.placeholder:
            return self.placeholder
        return f"Enter {self.label.lower()}"


@dataclass(frozen=True)
class FormDescriptor:
    """A complete form: a title plus its top-level fields."""

    title: str
    fields: Tuple[FieldDescriptor, ...] = field(default_factory=tuple)

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        """Get a top-level field by name."""
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None

    def walk(self):
        """Yield ``(path, field)`` for every field in the tree, depth first."""

        def visit(fields, prefix):
            for descriptor in fields:
                path = f"{prefix}{descriptor.name}"
                yield path, descriptor
                if descriptor.children:
                    yield from visit(descriptor.children, f"{path}.")

        yield from visit(self.fields, "")

    def max_depth(self) -> int:
        """Nesting depth of the tree (1 for a flat form)."""

        def depth(fields) -> int:
            nested = [depth(f.children) for f in fields if f.children]
            return 1 + max(nested, default=0)

        return depth(self.fields)


class _Parser:
    """Turns parsed JSON into descriptors, strictly or permissively."""

    def __init__(self, strict: bool):
        self.strict = strict
        self.warnings: List[str] = []

    def degrade(self, path: str, rule: str) -> None:
        """Raise in strict mode, otherwise record and log the violation."""
        if self.strict:
            raise StructuralError(rule, path or None)
        message = f"{path}: {rule}" if path else rule
        self.warnings.append(message)
        logger.warning("Lenient configuration: %s", message)

    def parse_form(self, data: Any) -> FormDescriptor:
        if not isinstance(data, dict):
            raise StructuralError(
                f"configuration must be a JSON object, got {type(data).__name__}"
            )

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            self.degrade("", "title must be a non-empty string")
            title = title if isinstance(title, str) else ""

        fields = self.parse_fields(data.get("fields"), "")
        return FormDescriptor(title=title, fields=fields)

    def parse_fields(self, raw: Any, prefix: str) -> Tuple[FieldDescriptor, ...]:
        if not isinstance(raw, list):
            raise StructuralError(
                "'fields' must be a list of field objects", prefix.rstrip(".") or None
            )

        parsed = []
        seen = set()
        for index, item in enumerate(raw):
            descriptor = self.parse_field(item, prefix, index)
            if descriptor.name in seen:
                raise StructuralError(
                    "duplicate field name among siblings", f"{prefix}{descriptor.name}"
                )
            seen.add(descriptor.name)
            parsed.append(descriptor)
        return tuple(parsed)

    def parse_field(self, raw: Any, prefix: str, index: int) -> FieldDescriptor:
        position = f"{prefix}[{index}]"
        if not isinstance(raw, dict):
            raise StructuralError("field must be a JSON object", position)

        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            raise StructuralError("field 'name' must be a non-empty string", position)
        path = f"{prefix}{name}"

        kind = self._parse_kind(raw.get("type"), path)

        label = raw.get("label")
        if not isinstance(label, str) or not label.strip():
            self.degrade(path, "'label' must be a non-empty string")
            label = name

        required = raw.get("required", False)
        if not isinstance(required, bool):
            self.degrade(path, "'required' must be a boolean")
            required = bool(required)

        options = self._parse_options(raw, kind, path)
        item_kind, children = self._parse_array_shape(raw, kind, path)

        return FieldDescriptor(
            name=name,
            kind=kind,
            label=label,
            required=required,
            constraints=self._parse_constraints(raw.get("validation"), path),
            options=options,
            item_kind=item_kind,
            children=children,
            placeholder=self._optional_text(raw, "placeholder", path),
            helper_text=self._optional_text(raw, "helperText", path),
        )

    def _parse_kind(self, raw: Any, path: str) -> Union[FieldKind, str]:
        try:
            return FieldKind(raw)
        except ValueError:
            self.degrade(path, f"unknown field type '{raw}'")
            return str(raw)

    def _parse_options(self, raw: Dict[str, Any], kind, path: str) -> Tuple[str, ...]:
        options = raw.get("options")
        needs_options = kind in (FieldKind.SELECT, FieldKind.RADIO)
        needs_options = needs_options or (
            kind is FieldKind.ARRAY
            and raw.get("itemType") in (FieldKind.SELECT.value, FieldKind.RADIO.value)
        )

        if options is None:
            if needs_options:
                self.degrade(path, "'options' is required for select and radio fields")
            return ()

        if not isinstance(options, list):
            self.degrade(path, "'options' must be a list of strings")
            return ()

        if not all(isinstance(option, str) for option in options):
            self.degrade(path, "'options' must be a list of strings")
            options = [option for option in options if isinstance(option, str)]

        if needs_options and not options:
            self.degrade(path, "'options' must not be empty")

        if len(set(options)) != len(options):
            self.degrade(path, "'options' contains duplicates")
            options = list(dict.fromkeys(options))

        return tuple(options)

    def _parse_array_shape(self, raw: Dict[str, Any], kind, path: str):
        children_raw = raw.get("fields")
        item_type = raw.get("itemType")

        if kind is not FieldKind.ARRAY:
            if children_raw is not None:
                self.degrade(path, "only array fields may declare nested 'fields'")
            return FieldKind.TEXT, ()

        children: Tuple[FieldDescriptor, ...] = ()
        if children_raw is not None:
            children = self.parse_fields(children_raw, f"{path}.")
            if not children:
                self.degrade(path, "nested 'fields' must not be empty")

        if children and item_type is not None:
            self.degrade(path, "array field cannot declare both 'fields' and 'itemType'")
            return FieldKind.TEXT, children

        if item_type is None:
            return FieldKind.TEXT, children

        try:
            item_kind = FieldKind(item_type)
        except ValueError:
            self.degrade(path, f"unknown item type '{item_type}'")
            return FieldKind.TEXT, children

        if item_kind is FieldKind.ARRAY:
            self.degrade(path, "'itemType' must be a primitive kind, not 'array'")
            return FieldKind.TEXT, children

        return item_kind, children

    def _parse_constraints(self, raw: Any, path: str) -> Optional[ValidationConstraints]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            self.degrade(path, "'validation' must be an object")
            return None

        values: Dict[str, Any] = {}
        for key, attr in CONSTRAINT_KEYS.items():
            if key not in raw or raw[key] is None:
                continue
            value = raw[key]
            problem = self._constraint_problem(key, value)
            if problem:
                self.degrade(path, problem)
                continue
            values[attr] = value

        for low, high, label in (
            ("min_length", "max_length", "minLength"),
            ("min", "max", "min"),
        ):
            if low in values and high in values and values[low] > values[high]:
                upper = "maxLength" if label == "minLength" else "max"
                self.degrade(path, f"'{label}' is greater than '{upper}'")
                values.pop(low)
                values.pop(high)

        return ValidationConstraints(**values)

    @staticmethod
    def _constraint_problem(key: str, value: Any) -> Optional[str]:
        if key in ("minLength", "maxLength"):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                return f"'{key}' must be a non-negative integer"
        elif key in ("min", "max"):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return f"'{key}' must be a number"
        elif key == "pattern":
            if not isinstance(value, str):
                return "'pattern' must be a string"
            try:
                re.compile(value)
            except re.error as e:
                return f"'pattern' is not a valid regular expression: {e}"
        return None

    def _optional_text(self, raw: Dict[str, Any], key: str, path: str) -> Optional[str]:
        value = raw.get(key)
        if value is None or isinstance(value, str):
            return value
        self.degrade(path, f"'{key}' must be a string")
        return None


def parse_form(data: Any, strict: bool = True) -> FormDescriptor:
    """
    Build a FormDescriptor from parsed JSON.

    Args:
        data: Parsed JSON document
        strict: Reject every invariant violation when True; otherwise degrade
            recoverable violations (unknown kinds, missing options, bad
            constraints) and log them

    Returns:
        Immutable FormDescriptor

    Raises:
        StructuralError: If the document violates the form invariants
    """
    return _Parser(strict).parse_form(data)


def check_form(data: Any) -> List[str]:
    """
    Parse permissively and return every violation found.

    Violations that make the tree unusable still raise StructuralError.
    """
    parser = _Parser(strict=False)
    parser.parse_form(data)
    return parser.warnings
