"""
Base generator interface for all artifact kinds.

Defines the contract that every artifact generator must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...descriptor import FormDescriptor
from ...errors import FormConfigError
from ...kinds import collect_warnings
from ...logging_config import get_logger
from .config import CodegenConfig, load_config
from .naming import FormIdentifiers
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

# Templates and builders nest with this unit; format_code maps it to the
# configured indentation.
TEMPLATE_INDENT = "  "


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ArtifactKind(Enum):
    """The three generated files."""

    COMPONENT = "component"
    SCHEMA = "schema"
    TYPES = "types"


@dataclass(frozen=True)
class GeneratedArtifact:
    """One generated source file."""

    kind: ArtifactKind
    text: str
    file_name: str


class ArtifactGenerator(ABC):
    """Abstract base class for all artifact generators."""

    def __init__(self, config: Optional[Union[CodegenConfig, Dict[str, Any]]] = None):
        """Initialize generator with optional configuration."""
        if config is None:
            config = load_config()
        elif isinstance(config, dict):
            config = load_config(custom_config=config)
        self.config = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(
            self.get_template_directory(), TEMPLATE_INDENT
        )

    @property
    @abstractmethod
    def artifact_kind(self) -> ArtifactKind:
        """Return the kind of artifact this generator emits."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for the generated file (e.g., 'tsx')."""
        pass

    @abstractmethod
    def file_name(self, identifiers: FormIdentifiers) -> str:
        """Return the file name of the generated artifact."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, form: FormDescriptor, identifiers: FormIdentifiers) -> str:
        """
        Generate the artifact text for a form.

        Args:
            form: Form to generate code for
            identifiers: Names derived from the form title

        Returns:
            Generated code as a string
        """
        pass

    def validate_form(self, form: FormDescriptor) -> List[str]:
        """
        Check a form for issues that degrade the generated code.

        Generators should override this to add artifact-specific checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = collect_warnings(form.fields)
        if not form.fields:
            warnings.append(f"Form '{form.title}' has no fields")
        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = self._reindent(line.rstrip())
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # collapse runs of blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        text = "\n".join(formatted_lines).strip("\n") + "\n"
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)
        return text

    def _reindent(self, line: str) -> str:
        unit = self.config.indent_unit
        if unit == TEMPLATE_INDENT:
            return line
        body = line.lstrip(" ")
        levels, rest = divmod(len(line) - len(body), len(TEMPLATE_INDENT))
        return unit * levels + " " * rest + body

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        artifact: Optional[GeneratedArtifact],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            artifact: Generated artifact
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.artifact = artifact
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def code(self) -> str:
        return self.artifact.text if self.artifact else ""

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(artifact=None)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_artifact(
    generator: ArtifactGenerator,
    form: FormDescriptor,
    identifiers: Optional[FormIdentifiers] = None,
) -> GenerationResult:
    """
    Generate one artifact with error handling.

    Configuration errors (empty title, invalid tree) propagate because they
    block every artifact; rendering failures are returned as a failed result.

    Args:
        generator: Artifact generator instance
        form: Form to generate code for
        identifiers: Names derived from the title (derived here when omitted)

    Returns:
        GenerationResult with artifact, warnings, and metadata
    """
    if identifiers is None:
        identifiers = FormIdentifiers.from_title(form.title)

    try:
        warnings = generator.validate_form(form)
        code = generator.generate(form, identifiers)
        formatted_code = generator.format_code(code)
    except FormConfigError:
        raise
    except Exception as e:
        logger.error("Failed to generate %s artifact: %s", generator.artifact_kind.value, e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    artifact = GeneratedArtifact(
        kind=generator.artifact_kind,
        text=formatted_code,
        file_name=generator.file_name(identifiers),
    )
    metadata = {
        "artifact": generator.artifact_kind.value,
        "file_name": artifact.file_name,
        "field_count": sum(1 for _ in form.walk()),
        "max_depth": form.max_depth(),
        "has_unknowns": any(not f.is_known_kind for _, f in form.walk()),
    }
    logger.info("Generated %s (%d lines)", artifact.file_name, formatted_code.count("\n"))

    return GenerationResult(artifact, warnings, metadata)
