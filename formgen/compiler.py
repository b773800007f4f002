"""
Configuration compiler.

Runs the whole pipeline for one form: descriptor, identifiers, runtime
validation schema, default values and the three generated artifacts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .codegen.core.config import CodegenConfig, load_config
from .codegen.core.generator import (
    ArtifactKind,
    GeneratedArtifact,
    GenerationResult,
    GeneratorError,
    generate_artifact,
)
from .codegen.core.naming import FormIdentifiers
from .codegen.registry import get_generator
from .defaults import synthesize_defaults
from .descriptor import FormDescriptor, parse_form
from .logging_config import get_logger
from .validation import ValidationSchema, compile_form_schema

logger = get_logger(__name__)


@dataclass
class CompiledForm:
    """Everything derived from one form configuration."""

    form: FormDescriptor
    identifiers: FormIdentifiers
    schema: ValidationSchema
    defaults: Dict[str, Any]
    artifacts: Dict[ArtifactKind, GeneratedArtifact] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def artifact(self, kind: Union[ArtifactKind, str]) -> GeneratedArtifact:
        return self.artifacts[ArtifactKind(kind)]

    @property
    def files(self) -> Dict[str, str]:
        """File name -> generated text."""
        return {artifact.file_name: artifact.text for artifact in self.artifacts.values()}


def _resolve_config(config: Optional[Union[CodegenConfig, Dict[str, Any]]]) -> CodegenConfig:
    if isinstance(config, CodegenConfig):
        return config
    return load_config(custom_config=config)


def load_descriptor(
    data: Union[FormDescriptor, Any], strict: bool = True
) -> FormDescriptor:
    """Return ``data`` unchanged when already a descriptor, else parse it."""
    if isinstance(data, FormDescriptor):
        return data
    return parse_form(data, strict=strict)


def generate(
    data: Union[FormDescriptor, Any],
    artifact: Union[ArtifactKind, str],
    config: Optional[Union[CodegenConfig, Dict[str, Any]]] = None,
) -> GenerationResult:
    """
    Generate a single artifact.

    Raises:
        FormConfigError: If the configuration or its title is invalid
    """
    config = _resolve_config(config)
    form = load_descriptor(data, strict=config.strict)
    identifiers = FormIdentifiers.from_title(form.title)
    return generate_artifact(get_generator(artifact, config), form, identifiers)


def compile_form(
    data: Union[FormDescriptor, Any],
    config: Optional[Union[CodegenConfig, Dict[str, Any]]] = None,
    strict: Optional[bool] = None,
) -> CompiledForm:
    """
    Compile a form configuration into all of its outputs.

    Args:
        data: Parsed JSON configuration or a FormDescriptor
        config: Generator configuration or override dict
        strict: Overrides ``config.strict`` for parsing

    Returns:
        CompiledForm with schema, defaults, artifacts and warnings

    Raises:
        StructuralError: If the configuration is malformed
        IdentifierError: If no identifier can be derived from the title
        CompileError: If a field kind cannot be validated
        GeneratorError: If rendering an artifact fails
    """
    config = _resolve_config(config)
    if strict is None:
        strict = config.strict

    form = load_descriptor(data, strict=strict)
    identifiers = FormIdentifiers.from_title(form.title)
    schema = compile_form_schema(form, f"{identifiers.type_name}Model")
    defaults = synthesize_defaults(form.fields)

    compiled = CompiledForm(form, identifiers, schema, defaults)
    for kind in ArtifactKind:
        result = generate_artifact(get_generator(kind, config), form, identifiers)
        if not result.success:
            raise GeneratorError(result.error_message) from result.exception
        compiled.artifacts[kind] = result.artifact
        for warning in result.warnings:
            if warning not in compiled.warnings:
                compiled.warnings.append(warning)

    logger.info(
        "Compiled form '%s' into %s", form.title, ", ".join(sorted(compiled.files))
    )
    return compiled
