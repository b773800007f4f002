"""
formgen code generation.

Generates the component, schema and types artifacts for a form.
"""

from .core.config import CodegenConfig, ConfigManager, load_config
from .core.generator import (
    ArtifactGenerator,
    ArtifactKind,
    GeneratedArtifact,
    GenerationResult,
    generate_artifact,
)
from .core.naming import FormIdentifiers
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_artifacts,
)

__all__ = [
    "ArtifactGenerator",
    "ArtifactKind",
    "GeneratedArtifact",
    "GenerationResult",
    "generate_artifact",
    "CodegenConfig",
    "ConfigManager",
    "load_config",
    "FormIdentifiers",
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "get_registry",
    "list_supported_artifacts",
]
