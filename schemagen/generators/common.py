"""Helpers shared by the construct-kind generators."""

from typing import Dict, Iterable, List, Optional, Sequence

from ..core.generator import ArtifactField, ArtifactGenerator, ImportCollector
from ..core.naming import NameSanitizer, NamingCase, create_member_sanitizer
from ..core.schema import FieldDefinition, InputFieldDefinition


def object_fields(
    generator: ArtifactGenerator,
    fields: Sequence[FieldDefinition],
    type_imports: Optional[ImportCollector] = None,
    sanitizer: Optional[NameSanitizer] = None,
) -> List[ArtifactField]:
    """
    Members for the fields of an object or interface type.

    Attribute names are snake_case and unique within the class. Every
    referenced type is added to ``type_imports`` when given.
    """
    sanitizer = sanitizer or create_member_sanitizer()
    members = []

    for field_def in fields:
        target = generator.mapper.map(field_def.type)
        if type_imports is not None:
            type_imports.add_type(target)

        members.append(
            ArtifactField(
                name=sanitizer.sanitize_name(field_def.name, NamingCase.SNAKE_CASE),
                graphql_name=field_def.name,
                annotation=target.annotation(),
                target=target,
                required=not target.nullable,
                description=generator.describe(field_def.description),
                deprecated=field_def.is_deprecated,
                deprecation_reason=field_def.deprecation_reason,
            )
        )

    return members


def member_names(fields: Sequence[FieldDefinition]) -> Dict[str, str]:
    """GraphQL field name to attribute name, exactly as ``object_fields`` assigns them."""
    sanitizer = create_member_sanitizer()
    return {
        field_def.name: sanitizer.sanitize_name(field_def.name, NamingCase.SNAKE_CASE)
        for field_def in fields
    }


def input_fields(
    generator: ArtifactGenerator,
    fields: Iterable[InputFieldDefinition],
    type_imports: ImportCollector,
    sanitizer: Optional[NameSanitizer] = None,
) -> List[ArtifactField]:
    """Members for input fields (or operation arguments, which share the shape)."""
    sanitizer = sanitizer or create_member_sanitizer()
    members = []

    for field_def in fields:
        target = generator.mapper.map(field_def.type)
        type_imports.add_type(target)

        # A defaulted non-null field may be left out; the server fills it in
        if not field_def.is_required:
            target = target.as_nullable()

        members.append(
            ArtifactField(
                name=sanitizer.sanitize_name(field_def.name, NamingCase.SNAKE_CASE),
                graphql_name=field_def.name,
                annotation=target.annotation(),
                target=target,
                required=field_def.is_required,
                description=generator.describe(field_def.description),
                default_value=field_def.default_value,
                graphql_type=field_def.type.to_graphql(),
            )
        )

    return members


def exclude(items, present) -> tuple:
    """Type-only imports not already imported at runtime."""
    present = set(present)
    return tuple(item for item in items if item not in present)
