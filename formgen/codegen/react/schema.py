"""
Zod schema generator.

Emits ``schema.ts``: a Zod object mirroring the runtime validation rules,
plus the inferred form data type.
"""

from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from ...descriptor import FieldDescriptor, FieldKind, FormDescriptor
from ...kinds import KindSpec, get_kind_spec
from ...logging_config import get_logger
from ..core.generator import TEMPLATE_INDENT, ArtifactGenerator, ArtifactKind
from ..core.naming import FormIdentifiers
from ..core.templates import js_string, ts_key, ts_literal

logger = get_logger(__name__)

EMAIL_MESSAGE = "Please enter a valid email address"
PATTERN_MESSAGE = "Please enter a valid format"
NUMBER_MESSAGE = "Please enter a valid number"


def _uses_number(form: FormDescriptor) -> bool:
    """True when some field or primitive array item needs the toNumber helper."""
    return any(
        FieldKind.NUMBER in (field.kind, field.item_kind) for _, field in form.walk()
    )


class ZodSchemaGenerator(ArtifactGenerator):
    """Generates the Zod validation schema."""

    @property
    def artifact_kind(self) -> ArtifactKind:
        return ArtifactKind.SCHEMA

    @property
    def file_extension(self) -> str:
        return self.config.source_extension

    def file_name(self, identifiers: FormIdentifiers) -> str:
        return f"schema.{self.file_extension}"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def generate(self, form: FormDescriptor, identifiers: FormIdentifiers) -> str:
        """Generate the schema source for a form."""
        properties = self._properties(form.fields, "")

        header = None
        if self.config.add_comments:
            header = f"Validation schema generated by formgen from \"{form.title}\"."

        context = {
            "header": header,
            "ids": identifiers,
            "uses_number": _uses_number(form),
            "properties": properties,
        }
        return self.render_template("schema.ts.j2", context)

    def _properties(self, fields: Sequence[FieldDescriptor], prefix: str) -> List[str]:
        """One entry per field; entries for composite arrays span several lines."""
        lines = []
        for field in fields:
            path = f"{prefix}{field.name}"
            expression = self.field_expression(field, path)
            if expression is None:
                lines.append(f"// Unsupported field type {js_string(field.kind_name)} for field {path}")
            else:
                lines.append(f"{ts_key(field.name)}: {expression},")
        return lines

    def field_expression(self, field: FieldDescriptor, path: str = "") -> Optional[str]:
        """Zod expression for one field, or None for an unrecognized kind."""
        spec = get_kind_spec(field.kind)
        if spec is None:
            logger.warning("No schema for field %s of type '%s'", path or field.name, field.kind_name)
            return None

        if spec.kind is FieldKind.ARRAY:
            return self._array_expression(field, path or field.name)
        if spec.text_like:
            return self._string_expression(field, spec)
        if spec.numeric:
            return self._number_expression(field)
        if spec.needs_options:
            return self._choice_expression(field)
        return self._boolean_expression(field)

    def _string_expression(self, field: FieldDescriptor, spec: KindSpec) -> str:
        constraints = field.constraints
        min_length = constraints.min_length if constraints else None
        max_length = constraints.max_length if constraints else None
        pattern = constraints.pattern if constraints else None

        expression = "z.string()"
        if field.required:
            expression += f".min(1, {js_string(f'{field.label} is required')})"
        if min_length:
            expression += (
                f".min({min_length}, {js_string(f'Minimum {min_length} characters required')})"
            )
        if max_length is not None:
            expression += (
                f".max({max_length}, {js_string(f'Maximum {max_length} characters allowed')})"
            )
        if spec.email_format:
            expression += f".email({js_string(EMAIL_MESSAGE)})"
        if pattern is not None:
            expression += f".regex(new RegExp({js_string(pattern)}), {js_string(PATTERN_MESSAGE)})"

        if not field.required:
            expression += '.optional().or(z.literal(""))'
        return expression

    def _number_expression(self, field: FieldDescriptor) -> str:
        constraints = field.constraints

        inner = (
            "z.number({ "
            f"required_error: {js_string(f'{field.label} is required')}, "
            f"invalid_type_error: {js_string(NUMBER_MESSAGE)} "
            "})"
        )
        if constraints and constraints.min is not None:
            bound = ts_literal(constraints.min)
            inner += f".min({bound}, {js_string(f'Minimum value is {bound}')})"
        if constraints and constraints.max is not None:
            bound = ts_literal(constraints.max)
            inner += f".max({bound}, {js_string(f'Maximum value is {bound}')})"
        if not field.required:
            inner += ".optional()"
        return f"z.preprocess(toNumber, {inner})"

    def _choice_expression(self, field: FieldDescriptor) -> str:
        if field.options:
            options = ", ".join(js_string(option) for option in field.options)
            expression = f"z.enum([{options}])"
        else:
            expression = "z.never()"
        if not field.required:
            expression += ".optional()"
        return expression

    def _boolean_expression(self, field: FieldDescriptor) -> str:
        if field.required:
            message = js_string(f"{field.label} must be checked")
            return f"z.boolean().refine((value) => value === true, {{ message: {message} }})"
        return "z.boolean().optional()"

    def _array_expression(self, field: FieldDescriptor, path: str) -> str:
        if field.children:
            body = [
                TEMPLATE_INDENT * 2 + line.replace("\n", "\n" + TEMPLATE_INDENT * 2)
                for line in self._properties(field.children, f"{path}.")
            ]
            item = "\n".join(
                ["z.object({"] + body + [TEMPLATE_INDENT + "})"]
            )
            expression = f"z.array(\n{TEMPLATE_INDENT}{item}\n)"
        else:
            expression = f"z.array({self._item_expression(field, path)})"

        if field.required:
            message = js_string(f"At least one {field.label.lower()} is required")
            return f"{expression}.min(1, {message})"
        return f"{expression}.optional()"

    def _item_expression(self, field: FieldDescriptor, path: str) -> str:
        """Items of a primitive array must be present; a checkbox item may be unchecked."""
        if field.item_kind is FieldKind.BOOLEAN:
            return "z.boolean()"
        item_field = replace(
            field, kind=field.item_kind, required=True, children=(), constraints=None
        )
        return self.field_expression(item_field, path)
