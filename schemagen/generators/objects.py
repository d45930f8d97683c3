"""
Object type generator.

Emits one frozen dataclass per non-root object type. Types that
implement interfaces or belong to unions subclass the corresponding
closed-hierarchy artifacts.
"""

from typing import Iterable

from ..core.exceptions import GenerationError
from ..core.generator import Artifact, ArtifactGenerator, ArtifactKind, ImportCollector
from ..core.naming import Partition, create_member_sanitizer
from ..core.schema import ObjectTypeDefinition, SchemaModel
from ..logging_config import get_logger
from .common import exclude, member_names, object_fields

logger = get_logger(__name__)


class TypeGenerator(ArtifactGenerator):
    """Generates data-holder classes for object types."""

    kind = "type"

    def select(self, model: SchemaModel) -> Iterable[ObjectTypeDefinition]:
        # Root operation types become operations, not DTOs
        return [t for t in model.types.values() if not model.is_root_type(t.name)]

    def generate_one(self, definition: ObjectTypeDefinition) -> Artifact:
        class_name = self.naming.type_name(definition.name)
        own_module = self.module_for(Partition.TYPE, class_name)

        imports = ImportCollector(own_module)
        type_imports = ImportCollector(own_module)

        bases = []
        for interface_name in definition.interfaces:
            base = self.mapper.map_named(interface_name)
            imports.add_type(base)
            bases.append(base.name)
        for union_name in self.context.model.unions_of(definition.name):
            base = self.mapper.map_named(union_name)
            imports.add_type(base)
            bases.append(base.name)

        sanitizer = create_member_sanitizer()
        # Inherited accessors keep the names their interface gave them
        for interface_name in definition.interfaces:
            interface = self.context.model.interfaces[interface_name]
            for graphql_name, member in member_names(interface.fields).items():
                try:
                    sanitizer.claim(graphql_name, member)
                except ValueError as e:
                    raise GenerationError(
                        f"Cannot name fields of {definition.name} consistently with {interface_name}: {e}"
                    ) from e

        fields = object_fields(self, definition.fields, type_imports, sanitizer)

        logger.debug(
            "Object type %s -> %s (%d fields, %d bases)",
            definition.name,
            class_name,
            len(fields),
            len(bases),
        )

        return Artifact(
            kind=ArtifactKind.DTO,
            namespace=self.namespace,
            partition=Partition.TYPE,
            name=class_name,
            module=own_module,
            graphql_name=definition.name,
            description=self.describe(definition.description),
            fields=tuple(fields),
            bases=tuple(bases),
            imports=imports.items(),
            type_imports=exclude(type_imports.items(), imports.items()),
        )