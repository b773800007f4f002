"""Tests for generator configuration."""

import json

import pytest

from formgen.codegen.core.config import CodegenConfig, ConfigError, ConfigManager
from formgen.codegen.react.config import REQUIRED_PACKAGES, ReactConfig


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_react_defaults(self):
        """Test the default target configuration."""
        config = ConfigManager().get_config()

        assert config.indent_unit == "  "
        assert config.component_extension == "tsx"
        assert config.strict is True
        assert config.custom["validation_mode"] == "onChange"
        assert ConfigManager().list_targets() == ["react"]

    def test_overrides_merge_custom(self):
        """Test custom settings are merged rather than replaced."""
        config = ConfigManager().get_config(custom_config={"custom": {"submit_label": "Send"}})

        assert config.custom["submit_label"] == "Send"
        assert config.custom["ui_library"] == "@chakra-ui/react"

    def test_unknown_keys_become_custom(self):
        """Test unknown top-level keys are kept as target settings."""
        config = ConfigManager().get_config(custom_config={"schema_import": "./zod"})
        assert config.custom["schema_import"] == "./zod"

    def test_config_file(self, tmp_path):
        """Test file settings apply before overrides."""
        path = tmp_path / "formgen.json"
        path.write_text(json.dumps({"indent_size": 4, "add_comments": False}), encoding="utf-8")

        config = ConfigManager().get_config(config_file=path, custom_config={"indent_size": 3})
        assert config.indent_size == 3
        assert config.add_comments is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager().get_config(config_file=tmp_path / "missing.json")

    @pytest.mark.parametrize(
        "name, content",
        [("config.yaml", "indent_size: 4"), ("config.json", "{nope"), ("config.json", "[1]")],
    )
    def test_invalid_files(self, tmp_path, name, content):
        """Test unreadable configuration files raise ConfigError."""
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigManager().get_config(config_file=path)

    def test_validate_config(self):
        """Test invalid settings are reported as warnings."""
        config = CodegenConfig(
            indent_size=0,
            handle_case="kebab",
            source_extension=".ts",
            custom={"validation_mode": "onKeyUp"},
        )
        assert ConfigManager().validate_config(config) == [
            "Invalid handle_case: kebab",
            "Invalid indent_size: 0",
            "Invalid validation_mode: 'onKeyUp'",
            "Invalid source_extension: '.ts'",
        ]

    def test_tabs(self):
        assert CodegenConfig(use_tabs=True).indent_unit == "\t"


class TestReactConfig:
    """Tests for ReactConfig."""

    def test_from_custom_ignores_other_keys(self):
        """Test only React settings are picked up."""
        config = ReactConfig.from_custom({"submit_label": "Send", "theme": "dark"})

        assert config.submit_label == "Send"
        assert config.ui_library == "@chakra-ui/react"

    def test_required_packages(self):
        """Test the npm packages the generated code imports."""
        names = [package["name"] for package in REQUIRED_PACKAGES]
        assert names == [
            "@chakra-ui/react",
            "@emotion/react",
            "@emotion/styled",
            "react-hook-form",
            "@hookform/resolvers",
            "zod",
        ]
