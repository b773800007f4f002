"""
React target.

Generates a react-hook-form + Chakra UI component, a Zod schema and
TypeScript types from a form descriptor.
"""

from .component import ComponentGenerator
from .config import REQUIRED_PACKAGES, ReactConfig
from .paths import FieldPath
from .schema import ZodSchemaGenerator
from .types import TypesGenerator


def create_react_generators(config=None):
    """Create one generator per artifact, sharing a configuration."""
    return [ComponentGenerator(config), ZodSchemaGenerator(config), TypesGenerator(config)]


__all__ = [
    # Generators
    "ComponentGenerator",
    "ZodSchemaGenerator",
    "TypesGenerator",
    "create_react_generators",
    # Configuration
    "ReactConfig",
    "REQUIRED_PACKAGES",
    # Paths
    "FieldPath",
]
