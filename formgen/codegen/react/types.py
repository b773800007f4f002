"""
TypeScript types generator.

Emits ``types.ts`` with the form data interface.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from ...descriptor import FieldDescriptor, FormDescriptor
from ...kinds import KIND_SPECS, KindSpec, get_kind_spec
from ..core.generator import TEMPLATE_INDENT, ArtifactGenerator, ArtifactKind
from ..core.naming import FormIdentifiers
from ..core.templates import js_string, ts_key


class TypesGenerator(ArtifactGenerator):
    """Generates the form data interface."""

    @property
    def artifact_kind(self) -> ArtifactKind:
        return ArtifactKind.TYPES

    @property
    def file_extension(self) -> str:
        return self.config.source_extension

    def file_name(self, identifiers: FormIdentifiers) -> str:
        return f"types.{self.file_extension}"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def generate(self, form: FormDescriptor, identifiers: FormIdentifiers) -> str:
        header = None
        if self.config.add_comments:
            header = f"Form data types generated by formgen from \"{form.title}\"."

        context = {
            "header": header,
            "ids": identifiers,
            "properties": self._properties(form.fields, ""),
        }
        return self.render_template("types.ts.j2", context)

    def _properties(self, fields: Sequence[FieldDescriptor], prefix: str) -> List[str]:
        lines = []
        for field in fields:
            path = f"{prefix}{field.name}"
            ts_type = self.field_type(field, path)
            if ts_type is None:
                lines.append(
                    f"// Unsupported field type {js_string(field.kind_name)} for field {path}"
                )
                continue
            marker = "" if field.required else "?"
            lines.append(f"{ts_key(field.name)}{marker}: {ts_type};")
        return lines

    def field_type(self, field: FieldDescriptor, path: str = "") -> Optional[str]:
        """TypeScript type of one field, or None for an unrecognized kind."""
        spec = get_kind_spec(field.kind)
        if spec is None:
            return None
        if not field.is_array:
            return self._scalar_type(spec, field.options)

        if field.children:
            body = [
                TEMPLATE_INDENT + line.replace("\n", "\n" + TEMPLATE_INDENT)
                for line in self._properties(field.children, f"{path or field.name}.")
            ]
            return "\n".join(["Array<{"] + body + ["}>"])

        item_type = self._scalar_type(KIND_SPECS[field.item_kind], field.options)
        if " | " in item_type:
            return f"({item_type})[]"
        return f"{item_type}[]"

    @staticmethod
    def _scalar_type(spec: KindSpec, options: Sequence[str]) -> str:
        if spec.needs_options and options:
            return " | ".join(js_string(option) for option in options)
        return spec.ts_type
