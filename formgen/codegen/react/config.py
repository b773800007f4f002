"""
React-specific configuration.

Import paths and UI settings for the generated React + react-hook-form +
Chakra UI code, plus the npm packages that code depends on.
"""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass
class ReactConfig:
    """Settings read from ``CodegenConfig.custom``."""

    ui_library: str = "@chakra-ui/react"
    field_wrapper_import: str = "./FieldWrapper"
    select_wrapper_import: str = "./SelectFieldWrapper"
    schema_import: str = "./schema"
    validation_mode: str = "onChange"
    submit_label: str = "Submit Form"

    @classmethod
    def from_custom(cls, custom: Dict[str, Any]) -> "ReactConfig":
        """Build from a custom settings dict, ignoring keys for other targets."""
        known = cls.__dataclass_fields__.keys()
        return cls(**{key: value for key, value in custom.items() if key in known})


REQUIRED_PACKAGES: List[Dict[str, str]] = [
    {
        "name": "@chakra-ui/react",
        "version": "latest",
        "description": "Simple, modular and accessible UI components",
    },
    {
        "name": "@emotion/react",
        "version": "latest",
        "description": "Required peer dependency for Chakra UI",
    },
    {
        "name": "@emotion/styled",
        "version": "latest",
        "description": "Required peer dependency for Chakra UI",
    },
    {
        "name": "react-hook-form",
        "version": "^7.53.0",
        "description": "Form state management and validation",
    },
    {
        "name": "@hookform/resolvers",
        "version": "^3.9.0",
        "description": "Resolver for Zod schema validation",
    },
    {
        "name": "zod",
        "version": "^3.23.8",
        "description": "TypeScript-first schema validation",
    },
]

