"""Tests for default value synthesis."""

import pytest

from formgen.defaults import field_default, form_defaults, item_defaults, synthesize_defaults
from formgen.descriptor import parse_form


class TestSynthesizeDefaults:
    """Tests for synthesize_defaults."""

    def test_sample_defaults(self, sample_config):
        """Test one default per top-level field."""
        form = parse_form(sample_config)
        defaults = form_defaults(form)

        assert list(defaults) == [field.name for field in form.fields]
        assert defaults == {
            "firstName": "",
            "email": "",
            "age": None,
            "bio": "",
            "newsletter": False,
            "role": "",
            "hobbies": [],
            "addresses": [],
        }

    def test_unknown_kind_defaults_to_empty_string(self):
        """Test synthesis never fails on unknown kinds."""
        form = parse_form(
            {"title": "T", "fields": [{"name": "c", "type": "color", "label": "C"}]},
            strict=False,
        )
        assert synthesize_defaults(form.fields) == {"c": ""}

    @pytest.mark.parametrize("kind", ["select", "radio"])
    def test_optional_choice_starts_unset(self, kind):
        """Test optional choices start as None and required ones as an empty string."""
        form = parse_form(
            {
                "title": "T",
                "fields": [
                    {"name": "a", "type": kind, "label": "A", "options": ["x", "y"]},
                    {
                        "name": "b",
                        "type": kind,
                        "label": "B",
                        "required": True,
                        "options": ["x", "y"],
                    },
                ],
            }
        )
        assert synthesize_defaults(form.fields) == {"a": None, "b": ""}

    def test_empty_form(self):
        assert synthesize_defaults([]) == {}

    def test_fresh_lists(self, sample_config):
        """Test array defaults are not shared between calls."""
        form = parse_form(sample_config)
        first = form_defaults(form)
        first["hobbies"].append("chess")
        assert form_defaults(form)["hobbies"] == []
        assert field_default(form.get_field("addresses")) == []


class TestItemDefaults:
    """Tests for item_defaults."""

    def test_composite_item(self, addresses_config):
        """Test a composite item starts with its children's defaults."""
        field = parse_form(addresses_config).fields[0]
        assert item_defaults(field) == {"street": "", "city": "", "zipCode": ""}

    def test_primitive_items(self):
        """Test primitive items use the item kind default."""
        form = parse_form(
            {
                "title": "T",
                "fields": [
                    {"name": "a", "type": "array", "label": "A", "itemType": "text"},
                    {"name": "b", "type": "array", "label": "B", "itemType": "boolean"},
                    {"name": "c", "type": "array", "label": "C", "itemType": "number"},
                ],
            }
        )
        assert [item_defaults(field) for field in form.fields] == ["", False, None]
