"""
Generator registry system for managing the construct-kind generators.

Registration order is execution order: the controller runs generators
in the order they were registered, which keeps output deterministic.
"""

from typing import Dict, List, Optional, Type

from .core.generator import ArtifactGenerator, GenerationContext
from .generators import (
    EnumGenerator,
    InputTypeGenerator,
    InterfaceGenerator,
    MutationGenerator,
    ProjectionGenerator,
    QueryGenerator,
    TypeGenerator,
    UnionGenerator,
)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Ordered registry of generator classes keyed by construct kind."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[ArtifactGenerator]] = {}

    def register(
        self,
        kind: str,
        generator_class: Type[ArtifactGenerator],
        replace: bool = False,
    ):
        """
        Register a generator for a construct kind.

        A replaced generator keeps its original position in the order.

        Args:
            kind: Construct kind key (e.g. 'enum', 'type')
            generator_class: Class implementing ArtifactGenerator
            replace: If True, replace an existing registration

        Raises:
            RegistryError: If the class is invalid or the kind is taken
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, ArtifactGenerator
        ):
            raise RegistryError("Generator class must inherit from ArtifactGenerator")

        kind_key = kind.lower()
        if kind_key in self._generators and not replace:
            raise RegistryError(f"Generator already registered for kind: {kind}")

        self._generators[kind_key] = generator_class

    def unregister(self, kind: str):
        """
        Unregister a generator.

        Args:
            kind: Construct kind to unregister
        """
        self._generators.pop(kind.lower(), None)

    def get_generator_class(self, kind: str) -> Type[ArtifactGenerator]:
        """
        Get generator class for a construct kind.

        Raises:
            RegistryError: If kind not found
        """
        kind_key = kind.lower()
        if kind_key in self._generators:
            return self._generators[kind_key]

        raise RegistryError(
            f"No generator registered for kind: {kind}. "
            f"Available: {', '.join(self.list_kinds())}"
        )

    def create_generators(self, context: GenerationContext) -> List[ArtifactGenerator]:
        """Instantiate every registered generator, in registration order."""
        return [generator_class(context) for generator_class in self._generators.values()]

    def list_kinds(self) -> List[str]:
        """Registered kinds in execution order."""
        return list(self._generators)

    def is_supported(self, kind: str) -> bool:
        return kind.lower() in self._generators


# Fixed execution order: leaves before the types that reference them
DEFAULT_GENERATORS = (
    ("enum", EnumGenerator),
    ("input", InputTypeGenerator),
    ("interface", InterfaceGenerator),
    ("union", UnionGenerator),
    ("type", TypeGenerator),
    ("projection", ProjectionGenerator),
    ("query", QueryGenerator),
    ("mutation", MutationGenerator),
)


def create_default_registry() -> GeneratorRegistry:
    """A registry holding the built-in generators in their fixed order."""
    registry = GeneratorRegistry()
    for kind, generator_class in DEFAULT_GENERATORS:
        registry.register(kind, generator_class)
    return registry


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = create_default_registry()
    return _global_registry


def list_generator_kinds() -> List[str]:
    """List all construct kinds from the global registry."""
    return get_registry().list_kinds()
