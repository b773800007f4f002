"""
Generator registry for the artifact generators.

Maps artifact kinds (and their aliases) to generator classes.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import CodegenConfig, load_config
from .core.generator import ArtifactGenerator, ArtifactKind


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available artifact generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[ArtifactGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        artifact: Union[str, ArtifactKind],
        generator_class: Type[ArtifactGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for an artifact kind.

        Args:
            artifact: Artifact kind or its name (e.g., 'component')
            generator_class: Class implementing ArtifactGenerator
            aliases: Alternative names (e.g., 'tsx')
            replace: Replace an existing registration instead of skipping it

        Raises:
            RegistryError: If the class is invalid or an alias conflicts
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, ArtifactGenerator
        ):
            raise RegistryError("Generator class must inherit from ArtifactGenerator")

        key = self._key(artifact)
        if key in self._generators and not replace:
            return

        self._generators[key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == key:
                continue
            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(f"Alias '{alias}' conflicts with artifact '{alias_key}'")
                if alias_key in self._aliases and self._aliases[alias_key] != key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )
            self._aliases[alias_key] = key

    def unregister(self, artifact: Union[str, ArtifactKind]):
        """Unregister a generator and its aliases."""
        key = self._key(artifact)
        self._generators.pop(key, None)
        for alias in [a for a, target in self._aliases.items() if target == key]:
            del self._aliases[alias]

    def resolve(self, artifact: Union[str, ArtifactKind]) -> str:
        """Primary artifact name for a name or alias."""
        key = self._key(artifact)
        if key in self._generators:
            return key
        if key in self._aliases:
            return self._aliases[key]
        raise RegistryError(
            f"No generator registered for artifact: {artifact}. "
            f"Available: {', '.join(self.list_artifacts())}"
        )

    def get_generator_class(self, artifact: Union[str, ArtifactKind]) -> Type[ArtifactGenerator]:
        return self._generators[self.resolve(artifact)]

    def create_generator(
        self,
        artifact: Union[str, ArtifactKind],
        config: Optional[Union[CodegenConfig, Dict[str, Any], str, Path]] = None,
    ) -> ArtifactGenerator:
        """
        Create a generator instance.

        Args:
            artifact: Artifact kind, name or alias
            config: Configuration as CodegenConfig, override dict, or file path

        Raises:
            RegistryError: If the artifact is unknown or the generator cannot be built
        """
        generator_class = self.get_generator_class(artifact)

        if isinstance(config, CodegenConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        try:
            return generator_class(final_config)
        except Exception as e:
            raise RegistryError(f"Failed to create {artifact} generator: {e}") from e

    def list_artifacts(self) -> List[str]:
        """Registered primary artifact names, in generation order."""
        order = [kind.value for kind in ArtifactKind]

        def position(key: str):
            return (order.index(key) if key in order else len(order), key)

        return sorted(self._generators, key=position)

    def get_aliases(self, artifact: Union[str, ArtifactKind]) -> List[str]:
        key = self._key(artifact)
        return sorted(alias for alias, target in self._aliases.items() if target == key)

    def is_supported(self, artifact: Union[str, ArtifactKind]) -> bool:
        key = self._key(artifact)
        return key in self._generators or key in self._aliases

    def get_artifact_info(self, artifact: Union[str, ArtifactKind]) -> Dict[str, Any]:
        """Describe a registered artifact generator."""
        key = self.resolve(artifact)
        generator = self.create_generator(key)
        return {
            "name": key,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases(key),
            "module": type(generator).__module__,
        }

    @staticmethod
    def _key(artifact: Union[str, ArtifactKind]) -> str:
        if isinstance(artifact, ArtifactKind):
            return artifact.value
        return str(artifact).lower()


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_react_generators(_global_registry)
    return _global_registry


def _register_react_generators(registry: GeneratorRegistry):
    from .react import ComponentGenerator, TypesGenerator, ZodSchemaGenerator

    registry.register(ArtifactKind.COMPONENT, ComponentGenerator, aliases=["tsx"])
    registry.register(ArtifactKind.SCHEMA, ZodSchemaGenerator, aliases=["zod"])
    registry.register(ArtifactKind.TYPES, TypesGenerator, aliases=["ts"])


# Public API functions using the global registry


def get_generator(
    artifact: Union[str, ArtifactKind],
    config: Optional[Union[CodegenConfig, Dict[str, Any], str, Path]] = None,
) -> ArtifactGenerator:
    """Get a generator instance from the global registry."""
    return get_registry().create_generator(artifact, config)


def list_supported_artifacts() -> List[str]:
    return get_registry().list_artifacts()


def is_artifact_supported(artifact: Union[str, ArtifactKind]) -> bool:
    return get_registry().is_supported(artifact)


def get_artifact_info(artifact: Union[str, ArtifactKind]) -> Dict[str, Any]:
    return get_registry().get_artifact_info(artifact)
