"""
Projection generator.

A projection selects which fields of an object type an operation asks
for. Scalar and enum fields get a plain selector; object fields get a
selector that configures the nested projection; interface and union
fields select only ``__typename``.
"""

from typing import Iterable

from ..core.generator import Artifact, ArtifactField, ArtifactGenerator, ArtifactKind, ImportCollector
from ..core.naming import (
    GENERATED_MEMBER_NAMES,
    NameSanitizer,
    NamingCase,
    PYTHON_RESERVED_WORDS,
    Partition,
)
from ..core.schema import ObjectTypeDefinition, SchemaModel
from ..core.types import TargetKind

# Builder internals a selector must not shadow
PROJECTION_RESERVED_NAMES = frozenset({"_select", "_selections"})


class Selection:
    """How a projected field is rendered."""

    LEAF = "leaf"
    NESTED = "nested"
    TYPENAME = "typename"


class ProjectionGenerator(ArtifactGenerator):
    """Generates field-selection builders for object types."""

    kind = "projection"

    def select(self, model: SchemaModel) -> Iterable[ObjectTypeDefinition]:
        return [t for t in model.types.values() if not model.is_root_type(t.name)]

    def generate_one(self, definition: ObjectTypeDefinition) -> Artifact:
        class_name = self.naming.projection_name(definition.name)
        own_module = self.module_for(Partition.TYPE, class_name)
        type_imports = ImportCollector(own_module)
        sanitizer = NameSanitizer(
            PYTHON_RESERVED_WORDS | GENERATED_MEMBER_NAMES | PROJECTION_RESERVED_NAMES
        )

        selectors = []
        for field_def in definition.fields:
            leaf = self.mapper.map(field_def.type).leaf
            metadata = {"selection": Selection.LEAF}

            if self.context.model.is_root_type(field_def.type.base_name):
                metadata = {"selection": Selection.TYPENAME}
            elif leaf.kind == TargetKind.OBJECT:
                nested_name = self.naming.projection_name(field_def.type.base_name)
                nested_module = self.module_for(Partition.TYPE, nested_name)
                type_imports.add(nested_module, nested_name)
                metadata = {
                    "selection": Selection.NESTED,
                    "projection": nested_name,
                    "projection_module": nested_module if nested_module != own_module else None,
                }
            elif leaf.kind in (TargetKind.INTERFACE, TargetKind.UNION):
                metadata = {"selection": Selection.TYPENAME}

            selectors.append(
                ArtifactField(
                    name=sanitizer.sanitize_name(field_def.name, NamingCase.SNAKE_CASE),
                    graphql_name=field_def.name,
                    description=self.describe(field_def.description),
                    deprecated=field_def.is_deprecated,
                    deprecation_reason=field_def.deprecation_reason,
                    metadata=metadata,
                )
            )

        return Artifact(
            kind=ArtifactKind.PROJECTION,
            namespace=self.namespace,
            partition=Partition.TYPE,
            name=class_name,
            module=own_module,
            graphql_name=definition.name,
            description=self.describe(definition.description),
            fields=tuple(selectors),
            type_imports=type_imports.items(),
            metadata={"dto": self.naming.type_name(definition.name)},
        )
