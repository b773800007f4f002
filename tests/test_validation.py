"""Tests for the runtime validation compiler."""

import pytest
from pydantic import ValidationError

from formgen.descriptor import parse_form
from formgen.errors import CompileError
from formgen.validation import ROOT_ERROR_KEY, compile_form_schema, compile_schema


def schema_for(*fields, strict=True):
    """Compile a one-off form made of the given field configurations."""
    form = parse_form({"title": "Test Form", "fields": list(fields)}, strict=strict)
    return compile_form_schema(form)


class TestRegistrationRoundTrip:
    """Tests for the registration form bounds."""

    def test_accepts_values_on_the_bounds(self, registration_config):
        """Test the lowest accepted values pass."""
        schema = compile_form_schema(parse_form(registration_config))
        assert schema.is_valid({"firstName": "Al", "age": 18})

    def test_rejects_values_below_the_bounds(self, registration_config):
        """Test each field reports its own message."""
        schema = compile_form_schema(parse_form(registration_config))

        errors = schema.errors({"firstName": "A", "age": 17})
        assert errors == {
            "firstName": "Minimum 2 characters required",
            "age": "Minimum value is 18",
        }

    def test_maximum(self, registration_config):
        """Test the upper bound message."""
        schema = compile_form_schema(parse_form(registration_config))
        assert schema.errors({"firstName": "Al", "age": 101}) == {"age": "Maximum value is 100"}

    def test_numeric_strings_are_coerced(self, registration_config):
        """Test form input strings are accepted as numbers."""
        schema = compile_form_schema(parse_form(registration_config))
        assert schema.validate({"firstName": "Al", "age": "42"}) == {"firstName": "Al", "age": 42.0}

    def test_missing_required_values(self, registration_config):
        """Test empty and missing required values are reported."""
        schema = compile_form_schema(parse_form(registration_config))

        errors = schema.errors({"firstName": "", "age": None})
        assert errors == {"firstName": "First Name is required", "age": "Age is required"}
        assert set(schema.errors({})) == {"firstName", "age"}

    def test_validate_raises(self, registration_config):
        """Test validate raises pydantic's ValidationError."""
        schema = compile_form_schema(parse_form(registration_config))
        with pytest.raises(ValidationError):
            schema.validate({"firstName": "A", "age": 17})

    def test_non_object_submission(self, registration_config):
        """Test a submission that is not an object is keyed at the form root."""
        schema = compile_form_schema(parse_form(registration_config))
        assert list(schema.errors(["Al", 18])) == [ROOT_ERROR_KEY]


class TestTextFields:
    """Tests for text-like kinds."""

    def test_optional_text_accepts_empty(self):
        """Test optional text accepts "", None and absence."""
        schema = schema_for({"name": "bio", "type": "textarea", "label": "Bio"})

        assert schema.is_valid({})
        assert schema.is_valid({"bio": ""})
        assert schema.is_valid({"bio": None})
        assert schema.validate({"bio": ""}) == {"bio": None}

    def test_optional_text_still_checks_bounds(self):
        """Test a present optional value must satisfy its constraints."""
        schema = schema_for(
            {"name": "code", "type": "text", "label": "Code", "validation": {"maxLength": 3}}
        )
        assert schema.errors({"code": "abcd"}) == {"code": "Maximum 3 characters allowed"}

    def test_email(self):
        """Test email shape is checked."""
        schema = schema_for({"name": "email", "type": "email", "label": "Email", "required": True})

        assert schema.is_valid({"email": "ada@gmail.com"})
        assert "email" in schema.errors({"email": "not-an-email"})

    def test_pattern(self):
        """Test pattern mismatches use the format message."""
        schema = schema_for(
            {
                "name": "zip",
                "type": "text",
                "label": "ZIP",
                "required": True,
                "validation": {"pattern": "^[0-9]{5}$"},
            }
        )
        assert schema.is_valid({"zip": "12345"})
        assert schema.errors({"zip": "1234a"}) == {"zip": "Please enter a valid format"}

    def test_number_constraints_ignored_on_text(self):
        """Test constraints that do not apply to the kind are ignored."""
        schema = schema_for(
            {"name": "t", "type": "text", "label": "T", "validation": {"min": 100}}
        )
        assert schema.is_valid({"t": "5"})


class TestBooleanFields:
    """Tests for boolean fields."""

    def test_required_boolean(self):
        """Test a required checkbox must be checked."""
        schema = schema_for({"name": "terms", "type": "boolean", "label": "Terms", "required": True})

        assert schema.is_valid({"terms": True})
        assert schema.errors({"terms": False}) == {"terms": "Terms must be checked"}

    def test_optional_boolean(self):
        """Test an optional checkbox accepts both values."""
        schema = schema_for({"name": "news", "type": "boolean", "label": "News"})

        assert schema.is_valid({"news": True})
        assert schema.is_valid({"news": False})

    def test_strict_booleans(self):
        """Test strings are not coerced to booleans."""
        schema = schema_for({"name": "news", "type": "boolean", "label": "News"})
        assert not schema.is_valid({"news": "yes"})


class TestChoiceFields:
    """Tests for select and radio fields."""

    @pytest.mark.parametrize("kind", ["select", "radio"])
    @pytest.mark.parametrize("required", [True, False])
    def test_accepts_exactly_the_options(self, kind, required):
        """Test only declared options are accepted, never the empty string."""
        schema = schema_for(
            {
                "name": "role",
                "type": kind,
                "label": "Role",
                "required": required,
                "options": ["Developer", "Designer"],
            }
        )

        assert schema.is_valid({"role": "Developer"})
        assert schema.is_valid({"role": "Designer"})
        assert not schema.is_valid({"role": "Manager"})
        assert not schema.is_valid({"role": "developer"})
        assert not schema.is_valid({"role": ""})

    def test_optional_choice_may_be_absent(self):
        """Test an optional choice accepts a missing value."""
        schema = schema_for({"name": "c", "type": "select", "label": "C", "options": ["a"]})
        assert schema.is_valid({})

    def test_no_options_accepts_nothing(self):
        """Test an empty enumeration rejects every value."""
        schema = schema_for(
            {"name": "c", "type": "select", "label": "Color", "required": True, "options": []},
            strict=False,
        )
        assert schema.errors({"c": "red"}) == {"c": "Color has no options to choose from"}


class TestArrayFields:
    """Tests for array fields."""

    def test_optional_primitive_array(self):
        """Test an optional array accepts an empty list."""
        schema = schema_for(
            {"name": "hobbies", "type": "array", "label": "Hobbies", "itemType": "text"}
        )
        assert schema.is_valid({"hobbies": []})
        assert schema.is_valid({})
        assert schema.validate({}) == {"hobbies": []}

    def test_required_primitive_array(self):
        """Test a required array needs at least one valid item."""
        schema = schema_for(
            {
                "name": "hobbies",
                "type": "array",
                "label": "Hobbies",
                "itemType": "text",
                "required": True,
            }
        )

        assert schema.errors({"hobbies": []}) == {"hobbies": "At least one hobbies is required"}
        assert schema.is_valid({"hobbies": ["chess"]})
        assert schema.errors({"hobbies": ["chess", ""]}) == {"hobbies.1": "Hobbies is required"}

    def test_array_constraints_do_not_reach_items(self):
        """Test array-level constraints are not applied to each item."""
        schema = schema_for(
            {
                "name": "tags",
                "type": "array",
                "label": "Tags",
                "itemType": "text",
                "validation": {"minLength": 5},
            },
            strict=False,
        )
        assert schema.is_valid({"tags": ["a"]})

    def test_choice_items(self):
        """Test select items use the array's options."""
        schema = schema_for(
            {
                "name": "colors",
                "type": "array",
                "label": "Colors",
                "itemType": "select",
                "options": ["red", "blue"],
            }
        )
        assert schema.is_valid({"colors": ["red", "blue"]})
        assert "colors.0" in schema.errors({"colors": ["green"]})

    def test_nested_error_paths(self, addresses_config):
        """Test item errors are keyed by their dotted path."""
        schema = compile_form_schema(parse_form(addresses_config))

        errors = schema.errors({"addresses": [{"street": "", "city": "X", "zipCode": "1"}]})
        assert errors == {"addresses.0.street": "Street is required"}

    def test_optional_composite_array(self, addresses_config):
        """Test an optional composite array accepts no items."""
        schema = compile_form_schema(parse_form(addresses_config))
        assert schema.is_valid({"addresses": []})

    def test_nested_arrays(self, nested_config):
        """Test arrays inside array items validate recursively."""
        schema = compile_form_schema(parse_form(nested_config))

        assert schema.is_valid({"addresses": [{"street": "Main", "tags": ["home", "work"]}]})
        errors = schema.errors({"addresses": [{"street": "Main", "tags": [""]}]})
        assert errors == {"addresses.0.tags.0": "Tags is required"}


class TestCompileSchema:
    """Tests for compile_schema itself."""

    def test_unknown_kind(self):
        """Test an unknown kind aborts the compile."""
        form = parse_form(
            {"title": "T", "fields": [{"name": "c", "type": "color", "label": "C"}]},
            strict=False,
        )
        with pytest.raises(CompileError) as exc_info:
            compile_schema(form.fields)
        assert exc_info.value.field == "c"
        assert exc_info.value.kind == "color"

    def test_names_that_are_not_identifiers(self):
        """Test field names are used verbatim as submission keys."""
        schema = schema_for(
            {"name": "zip-code", "type": "text", "label": "ZIP", "required": True},
            {"name": "model_config", "type": "text", "label": "Config"},
        )
        assert schema.validate({"zip-code": "1", "model_config": "x"}) == {
            "zip-code": "1",
            "model_config": "x",
        }

    def test_extra_keys_ignored(self, registration_config):
        """Test keys outside the form are dropped."""
        schema = compile_form_schema(parse_form(registration_config))
        assert schema.validate({"firstName": "Al", "age": 20, "extra": 1}) == {
            "firstName": "Al",
            "age": 20.0,
        }

    def test_json_schema(self, registration_config):
        """Test the JSON Schema is keyed by field name."""
        schema = compile_form_schema(parse_form(registration_config))
        properties = schema.json_schema()["properties"]
        assert set(properties) == {"firstName", "age"}
