"""
Introspection schema parser.

Turns the JSON result of an introspection query into a validated
SchemaModel. Ordering of types, fields, arguments and enum values is
preserved exactly as declared so that generated output is stable.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from ..logging_config import get_logger
from .exceptions import (
    SchemaNotAFileError,
    SchemaNotFoundError,
    SchemaParseError,
    SchemaUnreadableError,
)
from .schema import (
    BUILT_IN_SCALARS,
    ArgumentDefinition,
    EnumDefinition,
    EnumValueDefinition,
    FieldDefinition,
    InputFieldDefinition,
    InputTypeDefinition,
    InterfaceDefinition,
    ListOf,
    Named,
    NonNull,
    ObjectTypeDefinition,
    ScalarDefinition,
    SchemaModel,
    TypeKind,
    TypeReference,
    UnionDefinition,
)

logger = get_logger(__name__)

# Upper bound on wrapper nesting, guards against cyclic or absurd ofType chains
MAX_WRAPPER_DEPTH = 32


def read_schema_bytes(path: Union[str, Path]) -> bytes:
    """
    Read raw schema bytes from a file.

    Raises:
        SchemaNotFoundError: If the path does not exist.
        SchemaNotAFileError: If the path is not a regular file.
        SchemaUnreadableError: If the file cannot be read.
    """
    path = Path(path)
    if not path.exists():
        raise SchemaNotFoundError(path)
    if not path.is_file():
        raise SchemaNotAFileError(path)
    if not os.access(path, os.R_OK):
        raise SchemaUnreadableError(path)

    try:
        return path.read_bytes()
    except OSError as e:
        raise SchemaUnreadableError(path) from e


class SchemaParser:
    """Parser for introspection-style schema documents."""

    def parse_file(self, path: Union[str, Path]) -> SchemaModel:
        """Parse a schema file."""
        logger.debug("Parsing schema file: %s", path)
        return self.parse_bytes(read_schema_bytes(path), source=str(path))

    def parse_bytes(self, content: bytes, source: str = "<bytes>") -> SchemaModel:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SchemaParseError(f"Schema is not valid UTF-8: {e}", source) from e
        return self.parse_string(text, source=source)

    def parse_string(self, content: str, source: str = "<string>") -> SchemaModel:
        """
        Parse schema content held in memory.

        Args:
            content: Introspection JSON text
            source: Name used in error messages

        Returns:
            Validated schema model
        """
        if content is None or not content.strip():
            raise SchemaParseError("Schema content is empty", source)

        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaParseError(
                f"Failed to parse schema JSON: {e.msg}",
                f"{source} line {e.lineno} column {e.colno}",
            ) from e

        model = self._parse_document(document)
        logger.info(
            "Parsed schema %s: %d object types, %d interfaces, %d unions, "
            "%d enums, %d input types",
            source,
            len(model.types),
            len(model.interfaces),
            len(model.unions),
            len(model.enums),
            len(model.input_types),
        )
        return model

    # Document structure

    def _parse_document(self, document: Any) -> SchemaModel:
        if not isinstance(document, dict):
            raise SchemaParseError("Schema document must be a JSON object")

        schema_node = document.get("__schema")
        if schema_node is None and isinstance(document.get("data"), dict):
            schema_node = document["data"].get("__schema")
        if not isinstance(schema_node, dict):
            raise SchemaParseError("Missing '__schema' field in introspection result")

        query_name = self._root_name(schema_node, "queryType", required=True)
        mutation_name = self._root_name(schema_node, "mutationType")
        subscription_name = self._root_name(schema_node, "subscriptionType")

        types_node = schema_node.get("types")
        if not isinstance(types_node, list):
            raise SchemaParseError("Missing or invalid 'types' array in schema")

        objects: Dict[str, ObjectTypeDefinition] = {}
        interfaces: Dict[str, InterfaceDefinition] = {}
        unions: Dict[str, UnionDefinition] = {}
        enums: Dict[str, EnumDefinition] = {}
        input_types: Dict[str, InputTypeDefinition] = {}
        scalars: Dict[str, ScalarDefinition] = {}
        seen: Set[str] = set()

        for index, type_node in enumerate(types_node):
            if not isinstance(type_node, dict):
                raise SchemaParseError("Type entry must be an object", f"types[{index}]")
            name = self._required_string(type_node, "name", f"types[{index}]")
            if name.startswith("__") or name in BUILT_IN_SCALARS:
                continue

            if name in seen:
                raise SchemaParseError(f"Duplicate type name '{name}'", f"types[{index}]")
            seen.add(name)

            kind = self._required_string(type_node, "kind", f"type '{name}'")
            if kind == TypeKind.OBJECT.value:
                objects[name] = self._parse_object(type_node, name)
            elif kind == TypeKind.INTERFACE.value:
                interfaces[name] = self._parse_interface(type_node, name)
            elif kind == TypeKind.UNION.value:
                unions[name] = self._parse_union(type_node, name)
            elif kind == TypeKind.ENUM.value:
                enums[name] = self._parse_enum(type_node, name)
            elif kind == TypeKind.INPUT_OBJECT.value:
                input_types[name] = self._parse_input(type_node, name)
            elif kind == TypeKind.SCALAR.value:
                scalars[name] = ScalarDefinition(name, self._string(type_node, "description"))
            else:
                logger.debug("Ignoring type '%s' of unknown kind %s", name, kind)

        objects = self._attach_union_memberships(objects, unions)

        model = SchemaModel(
            query_type=self._root_type(objects, query_name, "Query"),
            mutation_type=self._root_type(objects, mutation_name, "Mutation"),
            subscription_type=self._root_type(objects, subscription_name, "Subscription"),
            types=objects,
            enums=enums,
            input_types=input_types,
            interfaces=interfaces,
            unions=unions,
            scalars=scalars,
        )
        SchemaValidator(model).validate()
        return model

    def _root_name(self, schema_node: dict, key: str, required: bool = False) -> Optional[str]:
        node = schema_node.get(key)
        if node is None:
            if required:
                raise SchemaParseError(f"Missing '{key}' field in schema")
            return None
        if not isinstance(node, dict):
            raise SchemaParseError(f"Invalid '{key}' field in schema")
        return self._required_string(node, "name", key)

    def _root_type(
        self, objects: Dict[str, ObjectTypeDefinition], name: Optional[str], label: str
    ) -> Optional[ObjectTypeDefinition]:
        if name is None:
            return None
        root = objects.get(name)
        if root is None:
            raise SchemaParseError(f"{label} type '{name}' not found in schema")
        return root

    def _attach_union_memberships(
        self,
        objects: Dict[str, ObjectTypeDefinition],
        unions: Dict[str, UnionDefinition],
    ) -> Dict[str, ObjectTypeDefinition]:
        memberships: Dict[str, List[str]] = {}
        for union in unions.values():
            for member in union.possible_types:
                memberships.setdefault(member, []).append(union.name)

        result = {}
        for name, obj in objects.items():
            if name in memberships:
                obj = ObjectTypeDefinition(
                    name=obj.name,
                    description=obj.description,
                    fields=obj.fields,
                    interfaces=obj.interfaces,
                    unions=tuple(memberships[name]),
                )
            result[name] = obj
        return result

    # Type definitions

    def _parse_object(self, node: dict, name: str) -> ObjectTypeDefinition:
        return ObjectTypeDefinition(
            name=name,
            description=self._string(node, "description"),
            fields=self._parse_fields(node.get("fields"), name),
            interfaces=self._names(node.get("interfaces"), f"{name}.interfaces"),
        )

    def _parse_interface(self, node: dict, name: str) -> InterfaceDefinition:
        return InterfaceDefinition(
            name=name,
            description=self._string(node, "description"),
            fields=self._parse_fields(node.get("fields"), name),
            possible_types=self._names(node.get("possibleTypes"), f"{name}.possibleTypes"),
        )

    def _parse_union(self, node: dict, name: str) -> UnionDefinition:
        return UnionDefinition(
            name=name,
            description=self._string(node, "description"),
            possible_types=self._names(node.get("possibleTypes"), f"{name}.possibleTypes"),
        )

    def _parse_enum(self, node: dict, name: str) -> EnumDefinition:
        values = []
        for value_node in self._list(node.get("enumValues")):
            values.append(
                EnumValueDefinition(
                    name=self._required_string(value_node, "name", f"enum value in {name}"),
                    description=self._string(value_node, "description"),
                    is_deprecated=bool(value_node.get("isDeprecated", False)),
                    deprecation_reason=self._string(value_node, "deprecationReason"),
                )
            )
        return EnumDefinition(name, self._string(node, "description"), tuple(values))

    def _parse_input(self, node: dict, name: str) -> InputTypeDefinition:
        fields = []
        for field_node in self._list(node.get("inputFields")):
            field_name = self._required_string(field_node, "name", f"input field in {name}")
            context = f"{name}.{field_name}"
            fields.append(
                InputFieldDefinition(
                    name=field_name,
                    type=self._parse_type_ref(field_node.get("type"), context),
                    description=self._string(field_node, "description"),
                    default_value=self._string(field_node, "defaultValue"),
                )
            )
        return InputTypeDefinition(name, self._string(node, "description"), tuple(fields))

    def _parse_fields(self, fields_node: Any, type_name: str) -> Tuple[FieldDefinition, ...]:
        fields = []
        for field_node in self._list(fields_node):
            name = self._required_string(field_node, "name", f"field in {type_name}")
            context = f"{type_name}.{name}"
            fields.append(
                FieldDefinition(
                    name=name,
                    type=self._parse_type_ref(field_node.get("type"), context),
                    description=self._string(field_node, "description"),
                    arguments=self._parse_arguments(field_node.get("args"), context),
                    is_deprecated=bool(field_node.get("isDeprecated", False)),
                    deprecation_reason=self._string(field_node, "deprecationReason"),
                )
            )
        return tuple(fields)

    def _parse_arguments(self, args_node: Any, context: str) -> Tuple[ArgumentDefinition, ...]:
        args = []
        for arg_node in self._list(args_node):
            name = self._required_string(arg_node, "name", f"argument in {context}")
            args.append(
                ArgumentDefinition(
                    name=name,
                    type=self._parse_type_ref(arg_node.get("type"), f"{context}.{name}"),
                    description=self._string(arg_node, "description"),
                    default_value=self._string(arg_node, "defaultValue"),
                )
            )
        return tuple(args)

    def _parse_type_ref(self, node: Any, context: str, depth: int = 0) -> TypeReference:
        """Unwrap NON_NULL/LIST wrappers into a reference chain."""
        if depth > MAX_WRAPPER_DEPTH:
            raise SchemaParseError("Type reference nested too deeply", context)
        if not isinstance(node, dict):
            raise SchemaParseError("Missing type reference", context)

        kind = self._string(node, "kind")
        if kind is None:
            raise SchemaParseError("Missing 'kind' in type reference", context)

        if kind == TypeKind.NON_NULL.value:
            inner = self._parse_type_ref(node.get("ofType"), context, depth + 1)
            if isinstance(inner, NonNull):
                raise SchemaParseError("NON_NULL cannot wrap NON_NULL", context)
            return NonNull(inner)
        if kind == TypeKind.LIST.value:
            return ListOf(self._parse_type_ref(node.get("ofType"), context, depth + 1))

        name = self._string(node, "name")
        if name is None:
            raise SchemaParseError("Missing 'name' in named type reference", context)
        return Named(name)

    # JSON helpers

    @staticmethod
    def _list(node: Any) -> list:
        if not isinstance(node, list):
            return []
        return [item for item in node if isinstance(item, dict)]

    def _names(self, node: Any, context: str) -> Tuple[str, ...]:
        names = []
        for item in self._list(node):
            name = self._string(item, "name")
            if name is None:
                continue
            if name in names:
                raise SchemaParseError(f"Duplicate entry '{name}'", context)
            names.append(name)
        return tuple(names)

    @staticmethod
    def _string(node: dict, key: str) -> Optional[str]:
        value = node.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def _required_string(self, node: dict, key: str, context: str) -> str:
        value = self._string(node, key)
        if value is None:
            raise SchemaParseError(f"Missing required field '{key}'", context)
        return value


class SchemaValidator:
    """Referential-integrity checks over a freshly built model."""

    def __init__(self, model: SchemaModel):
        self.model = model

    def validate(self) -> None:
        self._check_dangling_references()
        self._check_unions()
        self._check_interfaces()

    def _check_dangling_references(self) -> None:
        missing: Dict[str, str] = {}

        def check(name: str, context: str) -> None:
            if not self.model.is_defined(name) and name not in missing:
                missing[name] = context

        for obj in self.model.types.values():
            self._check_fields(obj.name, obj.fields, check)
            for interface_name in obj.interfaces:
                check(interface_name, f"{obj.name} interfaces")
        for interface in self.model.interfaces.values():
            self._check_fields(interface.name, interface.fields, check)
            for member in interface.possible_types:
                check(member, f"{interface.name} possibleTypes")
        for union in self.model.unions.values():
            for member in union.possible_types:
                check(member, f"{union.name} possibleTypes")
        for input_type in self.model.input_types.values():
            for f in input_type.fields:
                check(f.type.base_name, f"{input_type.name}.{f.name}")

        if missing:
            details = ", ".join(f"'{name}' ({ctx})" for name, ctx in missing.items())
            raise SchemaParseError(f"Unresolved type references: {details}")

    @staticmethod
    def _check_fields(owner: str, fields, check) -> None:
        for f in fields:
            context = f"{owner}.{f.name}"
            check(f.type.base_name, context)
            for arg in f.arguments:
                check(arg.type.base_name, f"{context}({arg.name})")

    def _check_unions(self) -> None:
        for union in self.model.unions.values():
            for member in union.possible_types:
                if not self.model.is_object_type(member):
                    raise SchemaParseError(
                        f"Union '{union.name}' member '{member}' is not an object type"
                    )

    def _check_interfaces(self) -> None:
        for obj in self.model.types.values():
            for interface_name in obj.interfaces:
                if not self.model.is_interface(interface_name):
                    raise SchemaParseError(
                        f"Type '{obj.name}' implements '{interface_name}' "
                        f"which is not an interface"
                    )
                if obj.name not in self.model.interfaces[interface_name].possible_types:
                    raise SchemaParseError(
                        f"Type '{obj.name}' implements '{interface_name}' "
                        f"but is missing from its possibleTypes"
                    )
        for interface in self.model.interfaces.values():
            for member in interface.possible_types:
                implementer = self.model.types.get(member)
                if implementer is None:
                    raise SchemaParseError(
                        f"Interface '{interface.name}' possible type '{member}' "
                        f"is not an object type"
                    )
                if interface.name not in implementer.interfaces:
                    raise SchemaParseError(
                        f"Type '{member}' is listed as implementing "
                        f"'{interface.name}' but does not declare it"
                    )
