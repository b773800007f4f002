"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


# react-hook-form `mode` values
VALIDATION_MODES = {"onChange", "onBlur", "onSubmit", "onTouched", "all"}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class CodegenConfig:
    """Base configuration for artifact generators."""

    # Code style settings
    indent_size: int = 2
    use_tabs: bool = False
    line_ending: str = "\n"

    # Naming settings
    handle_case: str = "camel"  # camel, pascal, snake

    # Output file names
    component_extension: str = "tsx"
    source_extension: str = "ts"

    # Additional metadata
    add_comments: bool = True

    # Reject invalid configurations instead of degrading them
    strict: bool = True

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def indent_unit(self) -> str:
        return "\t" if self.use_tabs else " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["react"] = {
            "indent_size": 2,
            "handle_case": "camel",
            "component_extension": "tsx",
            "source_extension": "ts",
            "add_comments": True,
            "custom": {
                "ui_library": "@chakra-ui/react",
                "field_wrapper_import": "./FieldWrapper",
                "select_wrapper_import": "./SelectFieldWrapper",
                "validation_mode": "onChange",
            },
        }

    def get_config(
        self,
        target: str = "react",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> CodegenConfig:
        """
        Get complete configuration for a target.

        Args:
            target: Target framework name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        base_config = json.loads(json.dumps(self._configs.get(target, {})))

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> CodegenConfig:
        """Convert dictionary to CodegenConfig instance."""
        known_fields = {f.name for f in fields(CodegenConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown top-level keys are target-specific settings
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return CodegenConfig(**config_args)

    def list_targets(self) -> List[str]:
        """Get list of supported targets."""
        return list(self._configs.keys())

    def validate_config(self, config: CodegenConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.handle_case not in {"pascal", "camel", "snake"}:
            warnings.append(f"Invalid handle_case: {config.handle_case}")

        if not isinstance(config.indent_size, int) or config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        mode = config.custom.get("validation_mode")
        if mode is not None and mode not in VALIDATION_MODES:
            warnings.append(f"Invalid validation_mode: {mode!r}")

        for name in ("component_extension", "source_extension"):
            value = getattr(config, name)
            if not value or "." in value or "/" in value:
                warnings.append(f"Invalid {name}: {value!r}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    target: str = "react",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> CodegenConfig:
    """
    Convenience function to load configuration.

    Args:
        target: Target framework name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(target, custom_config, config_file)
