"""
Operation generators.

Every field of the query and mutation root types becomes a wrapper
class holding the field's arguments and, for object results, a
projection of the fields to select. The wrapper renders the complete
operation document plus its variables.
"""

from typing import Iterable, List, Optional

from ..core.generator import Artifact, ArtifactField, ArtifactGenerator, ArtifactKind, ImportCollector
from ..core.naming import (
    GENERATED_MEMBER_NAMES,
    NameSanitizer,
    PYTHON_RESERVED_WORDS,
    Partition,
    capitalize,
)
from ..core.schema import FieldDefinition, ObjectTypeDefinition, SchemaModel
from ..core.types import TargetKind
from ..logging_config import get_logger
from .common import exclude, input_fields
from .projections import Selection

logger = get_logger(__name__)

# Operation internals an argument attribute must not shadow
OPERATION_RESERVED_NAMES = frozenset({"_selection"})


class OperationGenerator(ArtifactGenerator):
    """Shared logic of the query and mutation generators."""

    operation_type = ""
    partition = ""
    artifact_kind = ""

    def root_type(self, model: SchemaModel) -> Optional[ObjectTypeDefinition]:
        raise NotImplementedError

    def class_name(self, field_name: str) -> str:
        raise NotImplementedError

    def select(self, model: SchemaModel) -> Iterable[FieldDefinition]:
        root = self.root_type(model)
        return list(root.fields) if root is not None else []

    def generate_one(self, definition: FieldDefinition) -> Artifact:
        class_name = self.class_name(definition.name)
        own_module = self.module_for(self.partition, class_name)
        imports = ImportCollector(own_module)
        type_imports = ImportCollector(own_module)

        sanitizer = NameSanitizer(
            PYTHON_RESERVED_WORDS | GENERATED_MEMBER_NAMES | OPERATION_RESERVED_NAMES
        )
        arguments = input_fields(self, definition.arguments, type_imports, sanitizer)

        result = self.mapper.map(definition.type)
        type_imports.add_type(result)

        metadata = {
            "operation_type": self.operation_type,
            "operation_name": capitalize(definition.name),
            "field_name": definition.name,
            "response_type": result.annotation(),
            "selection": Selection.LEAF,
        }

        leaf = result.leaf
        if self.context.model.is_root_type(definition.type.base_name):
            metadata["selection"] = Selection.TYPENAME
        elif leaf.kind == TargetKind.OBJECT:
            projection = self.naming.projection_name(definition.type.base_name)
            imports.add(self.module_for(Partition.TYPE, projection), projection)
            metadata["selection"] = Selection.NESTED
            metadata["projection"] = projection
        elif leaf.kind in (TargetKind.INTERFACE, TargetKind.UNION):
            metadata["selection"] = Selection.TYPENAME

        metadata["document_head"], metadata["document_tail"] = self._document(
            definition, arguments, metadata
        )

        logger.debug(
            "%s %s -> %s (%d arguments)",
            self.operation_type.capitalize(),
            definition.name,
            class_name,
            len(arguments),
        )

        return Artifact(
            kind=self.artifact_kind,
            namespace=self.namespace,
            partition=self.partition,
            name=class_name,
            module=own_module,
            graphql_name=definition.name,
            description=self.describe(definition.description),
            fields=tuple(arguments),
            imports=imports.items(),
            type_imports=exclude(type_imports.items(), imports.items()),
            metadata=metadata,
        )

    def _document(self, definition: FieldDefinition, arguments: List[ArtifactField], metadata):
        """
        Split the operation document around the dynamic selection set.

        Returns:
            (head, tail); the selection set, if any, goes between them
        """
        head = f"{self.operation_type} {metadata['operation_name']}"
        call = definition.name

        if arguments:
            variables = []
            for argument in arguments:
                variable = f"${argument.graphql_name}: {argument.graphql_type}"
                if argument.default_value is not None:
                    variable += f" = {argument.default_value}"
                variables.append(variable)
            head += f"({', '.join(variables)})"
            call += "(" + ", ".join(f"{a.graphql_name}: ${a.graphql_name}" for a in arguments) + ")"

        head += " { " + call
        if metadata["selection"] == Selection.TYPENAME:
            head += " { __typename }"
        return head, " }"


class QueryGenerator(OperationGenerator):
    """Generates wrappers for the fields of the query root type."""

    kind = "query"
    operation_type = "query"
    partition = Partition.QUERY
    artifact_kind = ArtifactKind.QUERY

    def root_type(self, model: SchemaModel) -> Optional[ObjectTypeDefinition]:
        return model.query_type

    def class_name(self, field_name: str) -> str:
        return self.naming.query_name(field_name)


class MutationGenerator(OperationGenerator):
    """Generates wrappers for the fields of the mutation root type."""

    kind = "mutation"
    operation_type = "mutation"
    partition = Partition.MUTATION
    artifact_kind = ArtifactKind.MUTATION

    def root_type(self, model: SchemaModel) -> Optional[ObjectTypeDefinition]:
        return model.mutation_type

    def class_name(self, field_name: str) -> str:
        return self.naming.mutation_name(field_name)
