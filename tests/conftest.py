"""Shared fixtures for formgen tests."""

import copy
import json

import pytest

from formgen.samples import SAMPLE_FORM


@pytest.fixture
def registration_config():
    """Small registration form with length and range bounds."""
    return {
        "title": "User Registration Form",
        "fields": [
            {
                "name": "firstName",
                "type": "text",
                "label": "First Name",
                "required": True,
                "validation": {"minLength": 2},
            },
            {
                "name": "age",
                "type": "number",
                "label": "Age",
                "required": True,
                "validation": {"min": 18, "max": 100},
            },
        ],
    }


@pytest.fixture
def addresses_config():
    """Form with one optional composite array."""
    return {
        "title": "Address Book",
        "fields": [
            {
                "name": "addresses",
                "type": "array",
                "label": "Addresses",
                "required": False,
                "fields": [
                    {"name": "street", "type": "text", "label": "Street", "required": True},
                    {"name": "city", "type": "text", "label": "City", "required": True},
                    {"name": "zipCode", "type": "text", "label": "ZIP Code", "required": True},
                ],
            }
        ],
    }


@pytest.fixture
def nested_config():
    """Composite array whose items hold a primitive array."""
    return {
        "title": "Mailing List",
        "fields": [
            {
                "name": "addresses",
                "type": "array",
                "label": "Addresses",
                "fields": [
                    {"name": "street", "type": "text", "label": "Street", "required": True},
                    {"name": "tags", "type": "array", "label": "Tags", "itemType": "text"},
                ],
            }
        ],
    }


@pytest.fixture
def sample_config():
    """A private copy of the built-in sample form."""
    return copy.deepcopy(SAMPLE_FORM)


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document into tmp_path and return its path."""

    def write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write
