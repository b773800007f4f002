"""Tests for loading form configurations."""

import pytest
import requests

from formgen.errors import StructuralError
from formgen.utils import JSONLoaderError, is_url, load_form, load_json, load_source


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload, content_type="application/json", status_code=200):
        self.payload = payload
        self.headers = {"content-type": content_type}
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class TestLoadJson:
    """Tests for file and URL loading."""

    def test_load_file(self, write_json, sample_config):
        path = write_json("form.json", sample_config)
        source, data = load_source(path)

        assert source == str(path)
        assert data == sample_config

    def test_argument_checks(self):
        """Test exactly one of file_path and url is required."""
        with pytest.raises(JSONLoaderError):
            load_json()
        with pytest.raises(JSONLoaderError):
            load_json(file_path="a.json", url="https://example.com/a.json")

    def test_load_url(self, monkeypatch, sample_config):
        """Test http(s) sources are fetched with requests."""
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(sample_config)

        monkeypatch.setattr(requests, "get", fake_get)
        source, data = load_source("https://forms.example.com/registration.json")

        assert source == "https://forms.example.com/registration.json"
        assert data["title"] == "User Registration Form"
        assert calls == [("https://forms.example.com/registration.json", 30)]

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(requests, "get", lambda url, timeout: FakeResponse({}, status_code=404))
        with pytest.raises(JSONLoaderError, match="HTTP error 404"):
            load_source("https://forms.example.com/missing.json")

    def test_invalid_json_response(self, monkeypatch):
        """Test a non-JSON body is reported as invalid JSON."""
        error = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        monkeypatch.setattr(
            requests, "get", lambda url, timeout: FakeResponse(error, content_type="text/html")
        )
        with pytest.raises(JSONLoaderError, match="Invalid JSON response"):
            load_source("https://forms.example.com/page")

    def test_is_url(self):
        assert is_url("https://example.com/form.json")
        assert not is_url("forms/form.json")


class TestLoadForm:
    """Tests for load_form."""

    def test_parses_descriptor(self, write_json, registration_config):
        form = load_form(write_json("form.json", registration_config))
        assert form.get_field("age").constraints.max == 100

    def test_strictness(self, write_json):
        """Test the strict flag is passed to the parser."""
        path = write_json(
            "form.json", {"title": "T", "fields": [{"name": "c", "type": "color", "label": "C"}]}
        )
        with pytest.raises(StructuralError):
            load_form(path)
        assert load_form(path, strict=False).fields[0].kind == "color"
