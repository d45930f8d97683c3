"""
Input type generator.

Each input object becomes an immutable dataclass built through a nested
``Builder``. Required-field checks run when ``build()`` is called, so a
missing value is reported by name at construction time.
"""

from typing import Iterable

from ..core.generator import Artifact, ArtifactGenerator, ArtifactKind, ImportCollector
from ..core.naming import Partition
from ..core.schema import InputTypeDefinition, SchemaModel
from ..logging_config import get_logger
from .common import input_fields

logger = get_logger(__name__)


class InputTypeGenerator(ArtifactGenerator):
    """Generates builder-pattern classes for input objects."""

    kind = "input"

    def select(self, model: SchemaModel) -> Iterable[InputTypeDefinition]:
        return list(model.input_types.values())

    def generate_one(self, definition: InputTypeDefinition) -> Artifact:
        class_name = self.naming.input_type_name(definition.name)
        own_module = self.module_for(Partition.INPUT, class_name)
        type_imports = ImportCollector(own_module)

        fields = input_fields(self, definition.fields, type_imports)
        required = [f.graphql_name for f in fields if f.required]
        logger.debug(
            "Input type %s -> %s (required: %s)",
            definition.name,
            class_name,
            ", ".join(required) or "none",
        )

        return Artifact(
            kind=ArtifactKind.INPUT,
            namespace=self.namespace,
            partition=Partition.INPUT,
            name=class_name,
            module=own_module,
            graphql_name=definition.name,
            description=self.describe(definition.description),
            fields=tuple(fields),
            type_imports=type_imports.items(),
        )
