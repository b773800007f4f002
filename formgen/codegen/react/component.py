"""
React component generator.

Renders a react-hook-form + Chakra UI component for a form. Field blocks are
rendered recursively in Python, each with an explicit depth and the
FieldPath it registers under; templates only lay out one block at a time.
"""

from dataclasses import dataclass, field as dataclass_field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from ...defaults import item_defaults, synthesize_defaults
from ...descriptor import FieldDescriptor, FormDescriptor
from ...kinds import KIND_SPECS, get_kind_spec
from ...logging_config import get_logger
from ..core.generator import ArtifactGenerator, ArtifactKind
from ..core.naming import FormIdentifiers, NameSanitizer, NamingCase, create_tsx_sanitizer
from ..core.templates import ts_literal
from .config import ReactConfig
from .paths import FieldPath

logger = get_logger(__name__)

# Chakra components each control template needs
CONTROL_COMPONENTS = {
    "input": {"Input"},
    "textarea": {"Textarea"},
    "checkbox": {"Checkbox"},
    "radio": {"RadioGroup", "Stack"},
    "select": set(),
    "array": {"Box", "Button", "HStack", "Text", "VStack"},
}
ITEM_COMPONENTS = {
    "input": {"Input"},
    "textarea": {"Textarea"},
    "checkbox": {"Checkbox"},
    "select": {"NativeSelect"},
    "radio": {"NativeSelect"},
}
BASE_COMPONENTS = {"Box", "Button", "Heading", "VStack"}


@dataclass
class _Emission:
    """Names and imports collected while rendering one component."""

    sanitizer: NameSanitizer
    hooks: List[str] = dataclass_field(default_factory=list)
    list_components: List[str] = dataclass_field(default_factory=list)
    ui_imports: Set[str] = dataclass_field(default_factory=lambda: set(BASE_COMPONENTS))
    uses_controller: bool = False
    uses_select: bool = False

    @classmethod
    def start(cls, identifiers: FormIdentifiers) -> "_Emission":
        sanitizer = create_tsx_sanitizer()
        for name in (
            identifiers.component_name,
            identifiers.props_name,
            identifiers.schema_name,
            identifiers.data_type_name,
        ):
            sanitizer.add_used_name(name)
        return cls(sanitizer)


class ComponentGenerator(ArtifactGenerator):
    """Generates the ``{Type}.tsx`` form component."""

    def __init__(self, config=None):
        super().__init__(config)
        self.react_config = ReactConfig.from_custom(self.config.custom)

    @property
    def artifact_kind(self) -> ArtifactKind:
        return ArtifactKind.COMPONENT

    @property
    def file_extension(self) -> str:
        return self.config.component_extension

    def file_name(self, identifiers: FormIdentifiers) -> str:
        return f"{identifiers.component_name}.{self.file_extension}"

    @property
    def handle_case(self) -> NamingCase:
        """Case of the array state handles; unknown settings fall back to camel."""
        try:
            return NamingCase(self.config.handle_case)
        except ValueError:
            return NamingCase.CAMEL_CASE

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def generate(self, form: FormDescriptor, identifiers: FormIdentifiers) -> str:
        """Generate the component source for a form."""
        emission = _Emission.start(identifiers)

        blocks = [
            self._render_field(emission, field, FieldPath((field.name,)), depth=0)
            for field in form.fields
        ]

        hook_imports = ["useForm"]
        if emission.hooks or emission.list_components:
            hook_imports.append("useFieldArray")
        if emission.uses_controller:
            hook_imports.append("Controller")
        if emission.list_components:
            hook_imports.extend(["type Control", "type FormState", "type UseFormRegister"])

        context = {
            "header": self._header(form),
            "ids": identifiers,
            "react": self.react_config,
            "title": form.title,
            "hook_imports": hook_imports,
            "ui_imports": sorted(emission.ui_imports),
            "uses_select": emission.uses_select,
            "list_components": emission.list_components,
            "default_values": list(synthesize_defaults(form.fields).items()),
            "array_hooks": emission.hooks,
            "blocks": blocks,
        }
        return self.render_template("component.tsx.j2", context)

    def _header(self, form: FormDescriptor) -> Optional[str]:
        if not self.config.add_comments:
            return None
        return f"Form component generated by formgen from \"{form.title}\"."

    # Field blocks

    def _render_field(
        self, emission: _Emission, field: FieldDescriptor, path: FieldPath, depth: int
    ) -> str:
        spec = get_kind_spec(field.kind)
        if spec is None:
            logger.warning("Skipping unsupported field type '%s' at %s", field.kind_name, path.text)
            return self.render_template(
                "fields/unsupported.j2",
                {
                    "kind": field.kind_name.replace("*/", "*\\/"),
                    "path": path.text.replace("*/", "*\\/"),
                },
            )

        if field.is_array:
            return self._render_array(emission, field, path, depth)

        emission.ui_imports |= CONTROL_COMPONENTS[spec.control]
        if spec.control in ("checkbox", "radio"):
            emission.uses_controller = True
        if spec.control == "select":
            emission.uses_select = True

        context = self._block_context(field, path, depth)
        context["input_type"] = spec.input_type
        return self.render_template(f"fields/{spec.control}.j2", context)

    def _block_context(self, field: FieldDescriptor, path: FieldPath, depth: int) -> Dict[str, Any]:
        return {
            "label": field.label,
            "name_attr": path.jsx(),
            "name_js": path.js(),
            "required": field.required,
            "helper_text": field.helper_text,
            "placeholder": field.display_placeholder,
            "options": field.options,
            "compact": depth > 0,
        }

    def _render_array(
        self, emission: _Emission, field: FieldDescriptor, path: FieldPath, depth: int
    ) -> str:
        emission.ui_imports |= CONTROL_COMPONENTS["array"]
        base_name = "_".join(path.static_names)

        if depth == 0:
            handle = emission.sanitizer.sanitize_name(base_name, self.handle_case)
            handles = {
                "fields_var": f"{handle}Fields",
                "append_var": f"{handle}Append",
                "remove_var": f"{handle}Remove",
            }
            emission.hooks.append(
                self.render_template(
                    "fields/field_array_hook.j2", dict(handles, name_js=path.js())
                )
            )
            return self._array_block(emission, field, path, depth, handles)

        # Arrays inside array items are rendered by a separate list component
        # that owns its useFieldArray call.
        list_name = emission.sanitizer.sanitize_name(f"{base_name}_list", NamingCase.PASCAL_CASE)
        handles = {"fields_var": "fields", "append_var": "append", "remove_var": "remove"}
        block = self._array_block(
            emission, field, FieldPath.from_expression("name"), depth, handles
        )
        emission.list_components.append(
            self.render_template(
                "fields/list_component.j2", dict(handles, list_name=list_name, block=block)
            )
        )
        logger.debug("Generated %s for nested array %s", list_name, path.text)
        return self.render_template(
            "fields/list_usage.j2", {"list_name": list_name, "name_attr": path.jsx()}
        )

    def _array_block(
        self,
        emission: _Emission,
        field: FieldDescriptor,
        path: FieldPath,
        depth: int,
        handles: Dict[str, str],
    ) -> str:
        item_path = path.item("index")
        context = self._block_context(field, path, depth)
        context.update(handles)
        context["append_value"] = ts_literal(item_defaults(field))

        if field.children:
            context["item_blocks"] = [
                self._render_field(emission, child, item_path.child(child.name), depth + 1)
                for child in field.children
            ]
            context["item_control"] = None
        else:
            context["item_blocks"] = None
            context["item_control"] = self._render_item_control(emission, field, item_path)

        return self.render_template("fields/array.j2", context)

    def _render_item_control(
        self, emission: _Emission, field: FieldDescriptor, item_path: FieldPath
    ) -> str:
        item_spec = KIND_SPECS[field.item_kind]
        emission.ui_imports |= ITEM_COMPONENTS[item_spec.control]
        if item_spec.control == "checkbox":
            emission.uses_controller = True

        item_field = replace(field, kind=field.item_kind, children=())
        context = self._block_context(item_field, item_path, depth=1)
        context["control"] = item_spec.control
        context["input_type"] = item_spec.input_type
        return self.render_template("fields/array_item.j2", context)

    def validate_form(self, form: FormDescriptor) -> List[str]:
        """Add warnings for array fields whose state handles are renamed."""
        warnings = super().validate_form(form)

        sanitizer = create_tsx_sanitizer()
        for field in form.fields:
            if not field.is_array:
                continue
            handle = sanitizer.sanitize_name(field.name, self.handle_case)
            if handle != field.name:
                warnings.append(
                    f"Array field {field.name} uses state handles {handle}Fields, "
                    f"{handle}Append and {handle}Remove"
                )
        return warnings
