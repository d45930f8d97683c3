"""
Core schema representation for code generation.

Normalized, read-only view of an introspection document that every
generator works against. Instances are built once by the parser and
shared between generators without being mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class TypeKind(Enum):
    """Type kinds as reported by introspection."""

    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"


BUILT_IN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})


class TypeReference:
    """A possibly wrapped pointer to a named type."""

    @property
    def base_name(self) -> str:
        raise NotImplementedError

    def is_non_null(self) -> bool:
        return False

    def is_list(self) -> bool:
        """True if a list wrapper appears at the outermost nullable level."""
        return False

    def to_graphql(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Named(TypeReference):
    name: str

    @property
    def base_name(self) -> str:
        return self.name

    def to_graphql(self) -> str:
        return self.name


@dataclass(frozen=True)
class NonNull(TypeReference):
    of_type: TypeReference

    @property
    def base_name(self) -> str:
        return self.of_type.base_name

    def is_non_null(self) -> bool:
        return True

    def is_list(self) -> bool:
        return self.of_type.is_list()

    def to_graphql(self) -> str:
        return f"{self.of_type.to_graphql()}!"


@dataclass(frozen=True)
class ListOf(TypeReference):
    of_type: TypeReference

    @property
    def base_name(self) -> str:
        return self.of_type.base_name

    def is_list(self) -> bool:
        return True

    def to_graphql(self) -> str:
        return f"[{self.of_type.to_graphql()}]"


@dataclass(frozen=True)
class ArgumentDefinition:
    """An argument of a field."""

    name: str
    type: TypeReference
    description: Optional[str] = None
    default_value: Optional[str] = None

    @property
    def is_required(self) -> bool:
        return self.type.is_non_null() and self.default_value is None


@dataclass(frozen=True)
class FieldDefinition:
    """A field on an object or interface type."""

    name: str
    type: TypeReference
    description: Optional[str] = None
    arguments: Tuple[ArgumentDefinition, ...] = ()
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None


@dataclass(frozen=True)
class ObjectTypeDefinition:
    name: str
    description: Optional[str] = None
    fields: Tuple[FieldDefinition, ...] = ()
    interfaces: Tuple[str, ...] = ()
    # Derived from union possible-types listings
    unions: Tuple[str, ...] = ()

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True)
class InterfaceDefinition:
    name: str
    description: Optional[str] = None
    fields: Tuple[FieldDefinition, ...] = ()
    possible_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class UnionDefinition:
    name: str
    description: Optional[str] = None
    possible_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumValueDefinition:
    name: str
    description: Optional[str] = None
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None


@dataclass(frozen=True)
class EnumDefinition:
    name: str
    description: Optional[str] = None
    values: Tuple[EnumValueDefinition, ...] = ()


@dataclass(frozen=True)
class InputFieldDefinition:
    name: str
    type: TypeReference
    description: Optional[str] = None
    default_value: Optional[str] = None

    @property
    def is_required(self) -> bool:
        return self.type.is_non_null() and self.default_value is None


@dataclass(frozen=True)
class InputTypeDefinition:
    name: str
    description: Optional[str] = None
    fields: Tuple[InputFieldDefinition, ...] = ()


@dataclass(frozen=True)
class ScalarDefinition:
    name: str
    description: Optional[str] = None


def _frozen(mapping: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class SchemaModel:
    """
    Validated, cross-referenced schema.

    All mappings preserve declaration order and are read-only views.
    """

    query_type: ObjectTypeDefinition
    mutation_type: Optional[ObjectTypeDefinition] = None
    subscription_type: Optional[ObjectTypeDefinition] = None
    types: Mapping[str, ObjectTypeDefinition] = field(default_factory=dict)
    enums: Mapping[str, EnumDefinition] = field(default_factory=dict)
    input_types: Mapping[str, InputTypeDefinition] = field(default_factory=dict)
    interfaces: Mapping[str, InterfaceDefinition] = field(default_factory=dict)
    unions: Mapping[str, UnionDefinition] = field(default_factory=dict)
    scalars: Mapping[str, ScalarDefinition] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("types", "enums", "input_types", "interfaces", "unions", "scalars"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @property
    def root_type_names(self) -> Tuple[str, ...]:
        roots = (self.query_type, self.mutation_type, self.subscription_type)
        return tuple(root.name for root in roots if root is not None)

    def is_root_type(self, name: str) -> bool:
        return name in self.root_type_names

    def is_scalar(self, name: str) -> bool:
        return name in BUILT_IN_SCALARS or name in self.scalars

    def is_enum(self, name: str) -> bool:
        return name in self.enums

    def is_input_type(self, name: str) -> bool:
        return name in self.input_types

    def is_object_type(self, name: str) -> bool:
        return name in self.types

    def is_interface(self, name: str) -> bool:
        return name in self.interfaces

    def is_union(self, name: str) -> bool:
        return name in self.unions

    def is_defined(self, name: str) -> bool:
        return (
            self.is_scalar(name)
            or self.is_enum(name)
            or self.is_input_type(name)
            or self.is_object_type(name)
            or self.is_interface(name)
            or self.is_union(name)
        )

    def unions_of(self, type_name: str) -> Tuple[str, ...]:
        """Names of the unions listing the given object type."""
        object_type = self.types.get(type_name)
        return object_type.unions if object_type else ()

    def implementers_of(self, interface_name: str) -> Tuple[str, ...]:
        interface = self.interfaces.get(interface_name)
        return interface.possible_types if interface else ()
