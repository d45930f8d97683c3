"""
Interface generator.

Each interface becomes a closed-hierarchy base class listing one
annotated accessor per field and the exact set of permitted
implementers. An interface nobody implements still gets a valid class
with an empty permitted set.
"""

from typing import Iterable

from ..core.generator import Artifact, ArtifactGenerator, ArtifactKind, ImportCollector
from ..core.naming import Partition
from ..core.schema import InterfaceDefinition, SchemaModel
from ..logging_config import get_logger
from .common import object_fields

logger = get_logger(__name__)


class InterfaceGenerator(ArtifactGenerator):
    """Generates closed-hierarchy classes for interfaces."""

    kind = "interface"

    def select(self, model: SchemaModel) -> Iterable[InterfaceDefinition]:
        return list(model.interfaces.values())

    def generate_one(self, definition: InterfaceDefinition) -> Artifact:
        class_name = self.naming.interface_name(definition.name)
        own_module = self.module_for(Partition.TYPE, class_name)
        type_imports = ImportCollector(own_module)

        fields = object_fields(self, definition.fields, type_imports)
        permits = tuple(
            self.mapper.map_named(type_name).qualified_name
            for type_name in definition.possible_types
        )

        if not permits:
            logger.debug("Interface %s has no implementers", definition.name)

        return Artifact(
            kind=ArtifactKind.INTERFACE,
            namespace=self.namespace,
            partition=Partition.TYPE,
            name=class_name,
            module=own_module,
            graphql_name=definition.name,
            description=self.describe(definition.description),
            fields=tuple(fields),
            permits=permits,
            type_imports=type_imports.items(),
        )
