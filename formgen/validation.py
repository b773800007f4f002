"""
Validation compiler.

Turns a field descriptor tree into a pydantic model tree. Composite array
items become nested models, every other kind becomes an annotated type
built from the per-kind table in ``kinds``.
"""

import re
from dataclasses import replace
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Sequence, Type

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    create_model,
)
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from .descriptor import FieldDescriptor, FieldKind, FormDescriptor
from .errors import CompileError
from .kinds import KindSpec, get_kind_spec
from .logging_config import get_logger

logger = get_logger(__name__)

MODEL_CONFIG = ConfigDict(extra="ignore", protected_namespaces=())

ROOT_ERROR_KEY = "(form)"


class ValidationSchema:
    """Compiled acceptance rules for one form."""

    def __init__(self, model: Type[BaseModel], fields: Sequence[FieldDescriptor]):
        self.model = model
        self.fields = tuple(fields)

    def validate(self, data: Any) -> Dict[str, Any]:
        """
        Validate a submission and return the cleaned values.

        Raises:
            pydantic.ValidationError: If the submission is rejected
        """
        return self.model.model_validate(data).model_dump(by_alias=True)

    def errors(self, data: Any) -> Dict[str, str]:
        """Field path -> message for every rejected field (empty when valid)."""
        try:
            self.model.model_validate(data)
        except ValidationError as e:
            return format_errors(e)
        return {}

    def is_valid(self, data: Any) -> bool:
        return not self.errors(data)

    def json_schema(self) -> Dict[str, Any]:
        """JSON Schema of the compiled model, keyed by the original field names."""
        return self.model.model_json_schema(by_alias=True)


def format_errors(error: ValidationError) -> Dict[str, str]:
    """
    Flatten a pydantic ValidationError.

    Returns:
        Dict mapping dotted field paths (``addresses.0.street``) to the first
        message reported for that path
    """
    messages: Dict[str, str] = {}
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or ROOT_ERROR_KEY
        messages.setdefault(path, item["msg"])
    return messages


# Validator factories


def _blank_to_none(value: Any) -> Any:
    if value == "":
        return None
    return value


def _require_value(label: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if value is None or value == "":
            raise PydanticCustomError("required", "{label} is required", {"label": label})
        return value

    return check


def _must_be_checked(label: str) -> Callable[[bool], bool]:
    def check(value: bool) -> bool:
        if value is not True:
            raise PydanticCustomError(
                "must_be_checked", "{label} must be checked", {"label": label}
            )
        return value

    return check


def _at_least_one(label: str) -> Callable[[list], list]:
    def check(value: list) -> list:
        if not value:
            raise PydanticCustomError(
                "too_short", "At least one {label} is required", {"label": label.lower()}
            )
        return value

    return check


def _matches_pattern(pattern: str) -> Callable[[str], str]:
    compiled = re.compile(pattern)

    def check(value: str) -> str:
        if not compiled.search(value):
            raise PydanticCustomError(
                "string_pattern_mismatch", "Please enter a valid format"
            )
        return value

    return check


def _length_between(min_length: Optional[int], max_length: Optional[int]) -> Callable[[str], str]:
    def check(value: str) -> str:
        if min_length is not None and len(value) < min_length:
            raise PydanticCustomError(
                "string_too_short",
                "Minimum {min_length} characters required",
                {"min_length": min_length},
            )
        if max_length is not None and len(value) > max_length:
            raise PydanticCustomError(
                "string_too_long",
                "Maximum {max_length} characters allowed",
                {"max_length": max_length},
            )
        return value

    return check


def _within_range(minimum: Optional[float], maximum: Optional[float]) -> Callable[[float], float]:
    def check(value: float) -> float:
        if minimum is not None and value < minimum:
            raise PydanticCustomError(
                "less_than_minimum", "Minimum value is {minimum}", {"minimum": minimum}
            )
        if maximum is not None and value > maximum:
            raise PydanticCustomError(
                "greater_than_maximum", "Maximum value is {maximum}", {"maximum": maximum}
            )
        return value

    return check


def _email_shaped(value: str) -> str:
    validate_email(value)
    return value


def _no_options(label: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        raise PydanticCustomError(
            "no_options", "{label} has no options to choose from", {"label": label}
        )

    return check


# Per-kind compilation


def _text_type(field: FieldDescriptor, spec: KindSpec) -> Any:
    constraints = field.constraints
    metadata: List[Any] = []
    if constraints and (constraints.min_length is not None or constraints.max_length is not None):
        metadata.append(AfterValidator(_length_between(constraints.min_length, constraints.max_length)))
    if spec.email_format:
        metadata.append(AfterValidator(_email_shaped))
    if constraints and constraints.pattern is not None:
        metadata.append(AfterValidator(_matches_pattern(constraints.pattern)))

    if not metadata:
        return str
    return Annotated[(str, *metadata)]


def _number_type(field: FieldDescriptor) -> Any:
    number = Annotated[float, Field(allow_inf_nan=False)]
    constraints = field.constraints
    if constraints and (constraints.min is not None or constraints.max is not None):
        return Annotated[number, AfterValidator(_within_range(constraints.min, constraints.max))]
    return number


def _choice_type(field: FieldDescriptor) -> Any:
    if not field.options:
        logger.warning("Field %s has no options; its validator accepts nothing", field.name)
        return Annotated[Any, AfterValidator(_no_options(field.label))]
    return Literal[field.options]


def _base_type(field: FieldDescriptor, spec: KindSpec) -> Any:
    """Validator for a present, non-empty value of the field's kind."""
    if spec.text_like:
        return _text_type(field, spec)
    if spec.numeric:
        return _number_type(field)
    if spec.needs_options:
        return _choice_type(field)
    if spec.kind is FieldKind.BOOLEAN:
        if field.required:
            return Annotated[StrictBool, AfterValidator(_must_be_checked(field.label))]
        return StrictBool
    raise CompileError(field.name, spec.kind.value, "no scalar validator for this kind")


class _ModelCompiler:
    """Recursively builds pydantic models for a field tree."""

    def compile(self, fields: Sequence[FieldDescriptor], model_name: str, prefix: str = ""):
        definitions: Dict[str, Any] = {}
        for index, field in enumerate(fields):
            path = f"{prefix}{field.name}"
            annotation, default = self._field_definition(field, model_name, path)
            # Attribute names are positional; the configured name is the alias
            definitions[f"field_{index}"] = (annotation, default)

        logger.debug("Compiled %d field(s) into model %s", len(fields), model_name)
        return create_model(model_name, __config__=MODEL_CONFIG, **definitions)

    def _field_definition(self, field: FieldDescriptor, model_name: str, path: str):
        spec = get_kind_spec(field.kind)
        if spec is None:
            raise CompileError(path, field.kind_name)

        if spec.kind is FieldKind.ARRAY:
            return self._array_definition(field, model_name, path)

        base = _base_type(field, spec)
        if field.required:
            annotation = Annotated[base, BeforeValidator(_require_value(field.label))]
            return annotation, Field(..., alias=field.name)

        if spec.needs_options:
            # The empty string is never a valid choice, even when optional
            return Optional[base], Field(None, alias=field.name)
        annotation = Annotated[Optional[base], BeforeValidator(_blank_to_none)]
        return annotation, Field(None, alias=field.name)

    def _array_definition(self, field: FieldDescriptor, model_name: str, path: str):
        if field.children:
            item_model_name = f"{model_name}{_pascal(field.name)}Item"
            item = self.compile(field.children, item_model_name, f"{path}.")
        else:
            item_field = replace(
                field, kind=field.item_kind, required=False, children=(), constraints=None
            )
            item_spec = get_kind_spec(field.item_kind)
            item = Annotated[
                _base_type(item_field, item_spec),
                BeforeValidator(_require_value(field.label)),
            ]

        if field.required:
            annotation = Annotated[List[item], AfterValidator(_at_least_one(field.label))]
            return annotation, Field(..., alias=field.name)

        annotation = Optional[List[item]]
        return annotation, Field(default_factory=list, alias=field.name)


def _pascal(name: str) -> str:
    parts = re.split(r"[\W_]+", name)
    return "".join(part[:1].upper() + part[1:] for part in parts if part) or "Field"


def compile_schema(
    fields: Sequence[FieldDescriptor], model_name: str = "FormModel"
) -> ValidationSchema:
    """
    Compile a field sequence into a ValidationSchema.

    Args:
        fields: Top-level field descriptors
        model_name: Class name of the root pydantic model

    Returns:
        ValidationSchema wrapping the root model

    Raises:
        CompileError: If any field in the tree has an unrecognized kind
    """
    model = _ModelCompiler().compile(fields, model_name)
    return ValidationSchema(model, fields)


def compile_form_schema(form: FormDescriptor, model_name: Optional[str] = None) -> ValidationSchema:
    """Compile a whole form; the model is named after the form title when possible."""
    return compile_schema(form.fields, model_name or f"{_pascal(form.title)}Model")
