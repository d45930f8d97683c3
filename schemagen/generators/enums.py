"""
Enum generator.

Values keep their declaration order. Deprecated values are emitted like
any other and additionally listed in the class's ``__deprecated_values__``
mapping.
"""

from typing import Iterable

from ..core.generator import Artifact, ArtifactField, ArtifactGenerator, ArtifactKind
from ..core.naming import NameSanitizer, NamingCase, PYTHON_RESERVED_WORDS, Partition
from ..core.schema import EnumDefinition, SchemaModel

# Members the generated enum class defines or inherits from Enum
ENUM_RESERVED_NAMES = frozenset({"name", "value", "from_value", "to_value", "is_deprecated", "mro"})


class EnumGenerator(ArtifactGenerator):
    """Generates str-valued Enum classes."""

    kind = "enum"

    def select(self, model: SchemaModel) -> Iterable[EnumDefinition]:
        return list(model.enums.values())

    def generate_one(self, definition: EnumDefinition) -> Artifact:
        class_name = self.naming.enum_name(definition.name)
        sanitizer = NameSanitizer(PYTHON_RESERVED_WORDS | ENUM_RESERVED_NAMES)
        members = []

        for value in definition.values:
            # Enum treats _underscored names as private or reserved
            raw = value.name if not value.name.startswith("_") else f"VALUE{value.name}"
            members.append(
                ArtifactField(
                    name=sanitizer.sanitize_name(raw, NamingCase.PRESERVE),
                    graphql_name=value.name,
                    description=self.describe(value.description),
                    deprecated=value.is_deprecated,
                    deprecation_reason=value.deprecation_reason,
                )
            )

        return Artifact(
            kind=ArtifactKind.ENUM,
            namespace=self.namespace,
            partition=Partition.ENUMERATION,
            name=class_name,
            module=self.module_for(Partition.ENUMERATION, class_name),
            graphql_name=definition.name,
            description=self.describe(definition.description),
            fields=tuple(members),
        )
