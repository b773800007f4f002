"""Target-independent code generation building blocks."""

from .config import CodegenConfig, ConfigError, ConfigManager, load_config
from .generator import (
    ArtifactGenerator,
    ArtifactKind,
    GeneratedArtifact,
    GenerationResult,
    GeneratorError,
    generate_artifact,
)
from .naming import FormIdentifiers, NameSanitizer, NamingCase, type_identifier, value_identifier
from .templates import TemplateEngine, TemplateError

__all__ = [
    "CodegenConfig",
    "ConfigError",
    "ConfigManager",
    "load_config",
    "ArtifactGenerator",
    "ArtifactKind",
    "GeneratedArtifact",
    "GenerationResult",
    "GeneratorError",
    "generate_artifact",
    "FormIdentifiers",
    "NameSanitizer",
    "NamingCase",
    "type_identifier",
    "value_identifier",
    "TemplateEngine",
    "TemplateError",
]
