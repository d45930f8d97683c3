"""Union generator: closed-hierarchy marker classes without accessors."""

from typing import Iterable

from ..core.generator import Artifact, ArtifactGenerator, ArtifactKind
from ..core.naming import Partition
from ..core.schema import SchemaModel, UnionDefinition


class UnionGenerator(ArtifactGenerator):
    """Generates marker classes for unions."""

    kind = "union"

    def select(self, model: SchemaModel) -> Iterable[UnionDefinition]:
        return list(model.unions.values())

    def generate_one(self, definition: UnionDefinition) -> Artifact:
        class_name = self.naming.union_name(definition.name)
        permits = tuple(
            self.mapper.map_named(type_name).qualified_name
            for type_name in definition.possible_types
        )

        return Artifact(
            kind=ArtifactKind.UNION,
            namespace=self.namespace,
            partition=Partition.UNION,
            name=class_name,
            module=self.module_for(Partition.UNION, class_name),
            graphql_name=definition.name,
            description=self.describe(definition.description),
            permits=permits,
        )
