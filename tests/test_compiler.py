"""Tests for the end-to-end form compiler."""

import pytest

from formgen import compile_form, generate, parse_form
from formgen.codegen.core.generator import ArtifactKind
from formgen.errors import CompileError, IdentifierError, StructuralError


class TestCompileForm:
    """Tests for compile_form."""

    def test_outputs(self, sample_config):
        """Test every output is produced for the sample form."""
        compiled = compile_form(sample_config)

        assert compiled.identifiers.type_name == "UserRegistrationForm"
        assert set(compiled.files) == {"UserRegistrationForm.tsx", "schema.ts", "types.ts"}
        assert compiled.defaults["newsletter"] is False
        assert compiled.schema.model.__name__ == "UserRegistrationFormModel"
        assert compiled.warnings == []

    def test_artifact_lookup(self, sample_config):
        """Test artifacts can be looked up by kind or name."""
        compiled = compile_form(sample_config)

        assert compiled.artifact("schema") is compiled.artifact(ArtifactKind.SCHEMA)
        assert compiled.artifact("types").file_name == "types.ts"

    def test_schema_and_defaults_agree(self, sample_config):
        """Test the synthesized defaults fail only on required fields."""
        compiled = compile_form(sample_config)

        errors = compiled.schema.errors(compiled.defaults)
        assert set(errors) == {"firstName", "email", "age", "role"}

    def test_optional_choice_defaults_are_valid(self):
        """Test an untouched optional select submits cleanly."""
        compiled = compile_form(
            {
                "title": "Shipping",
                "fields": [
                    {
                        "name": "country",
                        "type": "select",
                        "label": "Country",
                        "options": ["US", "CA"],
                    },
                    {"name": "speed", "type": "radio", "label": "Speed", "options": ["Fast"]},
                ],
            }
        )

        assert compiled.defaults == {"country": None, "speed": None}
        assert compiled.schema.errors(compiled.defaults) == {}
        component = compiled.artifact("component").text
        assert "      country: undefined,\n" in component
        assert "      speed: undefined,\n" in component
        assert "country: z.enum([\"US\", \"CA\"]).optional()," in compiled.artifact("schema").text

    def test_accepts_descriptor(self, registration_config):
        """Test an already parsed descriptor is used as is."""
        form = parse_form(registration_config)
        assert compile_form(form).form is form

    def test_config_overrides(self, registration_config):
        """Test override dicts reach the generators."""
        compiled = compile_form(
            registration_config, {"component_extension": "jsx", "source_extension": "js"}
        )
        assert set(compiled.files) == {"UserRegistrationForm.jsx", "schema.js", "types.js"}

    def test_warnings_are_collected_once(self):
        """Test a warning shared by every artifact is reported once."""
        compiled = compile_form(
            {
                "title": "Survey",
                "fields": [
                    {"name": "n", "type": "text", "label": "N", "validation": {"min": 1}},
                ],
            }
        )
        assert compiled.warnings == ["Constraint 'min' is ignored for text field n"]

    def test_strict_by_default(self):
        """Test invalid configurations are rejected unless parsing is permissive."""
        data = {"title": "T", "fields": [{"name": "s", "type": "select", "label": "S"}]}

        with pytest.raises(StructuralError):
            compile_form(data)
        compiled = compile_form(data, strict=False)
        assert "s: z.never().optional()," in compiled.artifact("schema").text

    def test_empty_title(self):
        """Test a title without letters fails after permissive parsing."""
        with pytest.raises(IdentifierError):
            compile_form({"title": "", "fields": []}, strict=False)

    def test_unknown_kind_aborts(self):
        """Test a field that cannot be validated aborts the compile."""
        data = {"title": "T", "fields": [{"name": "c", "type": "color", "label": "C"}]}
        with pytest.raises(CompileError) as exc_info:
            compile_form(data, strict=False)
        assert exc_info.value.field == "c"


class TestGenerate:
    """Tests for single-artifact generation."""

    def test_alias(self, sample_config):
        """Test an artifact can be requested by alias."""
        result = generate(sample_config, "zod")

        assert result.success
        assert result.artifact.file_name == "schema.ts"
        assert result.metadata["field_count"] == 11

    def test_unknown_kinds_still_generate(self):
        """Test generation degrades unknown kinds instead of failing."""
        result = generate(
            {"title": "T", "fields": [{"name": "c", "type": "color", "label": "C"}]},
            "types",
            {"strict": False},
        )
        assert result.success
        assert result.metadata["has_unknowns"] is True
        assert result.warnings == ["Unknown field type 'color' in c"]
