"""
Python type system for code generation.

Maps schema type references to the Python annotations used in the
generated modules, with configurable scalar overrides.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from .exceptions import GenerationError, UnknownScalarError
from .naming import ModuleLayout, NamingConvention, Partition
from .schema import ListOf, Named, NonNull, SchemaModel, TypeReference


# Built-in scalars plus the custom scalars most servers ship
DEFAULT_SCALAR_MAPPINGS: Dict[str, str] = {
    "String": "str",
    "ID": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
    "DateTime": "datetime.datetime",
    "Date": "datetime.date",
    "Time": "datetime.time",
    "UUID": "uuid.UUID",
    "Long": "int",
    "BigDecimal": "decimal.Decimal",
    "BigInteger": "int",
}


class TargetKind:
    """What a mapped type points at."""

    SCALAR = "scalar"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    INPUT = "input"
    LIST = "list"


@dataclass(frozen=True)
class TargetType:
    """
    Immutable representation of a Python type with its import metadata.

    A named type carries the module it must be imported from (None for
    builtins); a sequence carries its element type.
    """

    name: str
    module: Optional[str] = None
    nullable: bool = True
    kind: str = TargetKind.SCALAR
    element: Optional["TargetType"] = field(default=None)

    @property
    def is_list(self) -> bool:
        return self.element is not None

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}" if self.module else self.name

    @property
    def leaf(self) -> "TargetType":
        """Innermost named type, through any sequence wrappers."""
        node = self
        while node.element is not None:
            node = node.element
        return node

    @property
    def local_name(self) -> str:
        """Name as written in generated code.

        Scalars are referenced through their module (``datetime.date``),
        generated artifacts by bare class name.
        """
        if self.kind == TargetKind.SCALAR:
            return self.qualified_name
        return self.name

    def annotation(self) -> str:
        """Render as an annotation string, e.g. ``list[UserDTO | None] | None``."""
        if self.is_list:
            base = f"list[{self.element.annotation()}]"
        else:
            base = self.local_name
        return f"{base} | None" if self.nullable else base

    def as_non_null(self) -> "TargetType":
        if not self.nullable:
            return self
        return replace(self, nullable=False)

    def as_nullable(self) -> "TargetType":
        if self.nullable:
            return self
        return replace(self, nullable=True)

    def imports(self) -> FrozenSet[Tuple[str, Optional[str]]]:
        """
        (module, name) pairs needed to reference this type.

        A name of None means a plain ``import module``.
        """
        if self.is_list:
            return self.element.imports()
        if not self.module:
            return frozenset()
        if self.kind == TargetKind.SCALAR:
            return frozenset({(self.module, None)})
        return frozenset({(self.module, self.name)})


def parse_type_identifier(identifier: str) -> Tuple[Optional[str], str]:
    """
    Split ``"package.module.Name"`` into module and name.

    A bare name (``"str"``) is a builtin and has no module.
    """
    if not isinstance(identifier, str) or not identifier:
        raise ValueError(f"Invalid type identifier: {identifier!r}")

    parts = identifier.split(".")
    if not all(part.isidentifier() for part in parts):
        raise ValueError(f"Invalid type identifier: {identifier!r}")

    if len(parts) == 1:
        return None, identifier
    return ".".join(parts[:-1]), parts[-1]


class ScalarRegistry:
    """Resolves scalar names through overrides, then the default table."""

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self.overrides = dict(overrides or {})
        self._cache: Dict[str, TargetType] = {}

    def resolve(self, scalar_name: str) -> TargetType:
        if scalar_name in self._cache:
            return self._cache[scalar_name]

        identifier = self.overrides.get(scalar_name)
        if identifier is None:
            identifier = DEFAULT_SCALAR_MAPPINGS.get(scalar_name)
        if identifier is None:
            raise UnknownScalarError(scalar_name)

        try:
            module, name = parse_type_identifier(identifier)
        except ValueError as e:
            raise GenerationError(f"Scalar '{scalar_name}': {e}") from e

        target = TargetType(name=name, module=module, kind=TargetKind.SCALAR)
        self._cache[scalar_name] = target
        return target


def plan_modules(model: SchemaModel, namespace: str, naming: NamingConvention) -> ModuleLayout:
    """Module layout covering every class generated from the model."""
    layout = ModuleLayout(namespace)

    objects = [name for name in model.types if not model.is_root_type(name)]
    layout.plan(
        Partition.TYPE,
        [naming.type_name(name) for name in objects]
        + [naming.interface_name(name) for name in model.interfaces]
        + [naming.projection_name(name) for name in objects],
    )
    layout.plan(Partition.INPUT, [naming.input_type_name(name) for name in model.input_types])
    layout.plan(Partition.ENUMERATION, [naming.enum_name(name) for name in model.enums])
    layout.plan(Partition.UNION, [naming.union_name(name) for name in model.unions])
    layout.plan(Partition.QUERY, [naming.query_name(f.name) for f in model.query_type.fields])
    if model.mutation_type is not None:
        layout.plan(
            Partition.MUTATION, [naming.mutation_name(f.name) for f in model.mutation_type.fields]
        )

    return layout


class TypeMapper:
    """
    Central engine for mapping schema type references to Python types.

    The mapper only names artifacts; it never generates them. Results
    are memoized so identical references always map to the same value.
    """

    def __init__(
        self,
        model: SchemaModel,
        namespace: str,
        naming: Optional[NamingConvention] = None,
        scalar_overrides: Optional[Mapping[str, str]] = None,
    ):
        self.model = model
        self.namespace = namespace
        self.naming = naming or NamingConvention()
        self.scalars = ScalarRegistry(scalar_overrides)
        self.layout = plan_modules(model, namespace, self.naming)
        self._cache: Dict[TypeReference, TargetType] = {}

    def map(self, type_ref: TypeReference) -> TargetType:
        """
        Map a type reference.

        Args:
            type_ref: Possibly wrapped schema type reference

        Returns:
            Target type; nullable unless wrapped in non-null
        """
        cached = self._cache.get(type_ref)
        if cached is not None:
            return cached

        if isinstance(type_ref, NonNull):
            target = self.map(type_ref.of_type).as_non_null()
        elif isinstance(type_ref, ListOf):
            target = TargetType(
                name="list", kind=TargetKind.LIST, element=self.map(type_ref.of_type)
            )
        elif isinstance(type_ref, Named):
            target = self.map_named(type_ref.name)
        else:
            raise GenerationError(f"Unsupported type reference: {type_ref!r}")

        self._cache[type_ref] = target
        return target

    def map_named(self, type_name: str) -> TargetType:
        """Map a bare named type (always nullable)."""
        model = self.model

        if model.is_scalar(type_name):
            return self.scalars.resolve(type_name)
        if model.is_enum(type_name):
            return self._artifact_type(
                self.naming.enum_name(type_name), Partition.ENUMERATION, TargetKind.ENUM
            )
        if model.is_input_type(type_name):
            return self._artifact_type(
                self.naming.input_type_name(type_name), Partition.INPUT, TargetKind.INPUT
            )
        if model.is_interface(type_name):
            return self._artifact_type(
                self.naming.interface_name(type_name), Partition.TYPE, TargetKind.INTERFACE
            )
        if model.is_union(type_name):
            return self._artifact_type(
                self.naming.union_name(type_name), Partition.UNION, TargetKind.UNION
            )
        if model.is_root_type(type_name):
            # Root types get no DTO; a field returning one is left untyped
            return TargetType(name="Any", module="typing", kind=TargetKind.SCALAR)
        if model.is_object_type(type_name):
            return self._artifact_type(
                self.naming.type_name(type_name), Partition.TYPE, TargetKind.OBJECT
            )

        raise GenerationError(f"Type '{type_name}' is not defined in the schema")

    def _artifact_type(self, class_name: str, partition: str, kind: str) -> TargetType:
        return TargetType(
            name=class_name,
            module=self.layout.module(partition, class_name),
            kind=kind,
        )
