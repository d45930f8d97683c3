"""Builders for introspection documents used across the test suite."""

import json
from typing import Any

from schemagen.core.parser import SchemaParser
from schemagen.core.schema import SchemaModel


def named(name: str, kind: str = "SCALAR") -> dict[str, Any]:
    return {"kind": kind, "name": name, "ofType": None}


def non_null(of_type: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def list_of(of_type: dict[str, Any]) -> dict[str, Any]:
    return {"kind": "LIST", "name": None, "ofType": of_type}


def arg(name: str, type_ref: dict[str, Any], default: str | None = None) -> dict[str, Any]:
    return {"name": name, "description": None, "type": type_ref, "defaultValue": default}


def field(
    name: str,
    type_ref: dict[str, Any],
    args: list[dict[str, Any]] | None = None,
    description: str | None = None,
    deprecation_reason: str | None = None,
) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "args": args or [],
        "type": type_ref,
        "isDeprecated": deprecation_reason is not None,
        "deprecationReason": deprecation_reason,
    }


def object_type(
    name: str,
    fields: list[dict[str, Any]],
    interfaces: list[str] | None = None,
    description: str | None = None,
) -> dict[str, Any]:
    return {
        "kind": "OBJECT",
        "name": name,
        "description": description,
        "fields": fields,
        "interfaces": [named(i, "INTERFACE") for i in interfaces or []],
    }


def interface_type(
    name: str, fields: list[dict[str, Any]], possible_types: list[str] | None = None
) -> dict[str, Any]:
    return {
        "kind": "INTERFACE",
        "name": name,
        "description": None,
        "fields": fields,
        "possibleTypes": [named(t, "OBJECT") for t in possible_types or []],
    }


def union_type(name: str, possible_types: list[str]) -> dict[str, Any]:
    return {
        "kind": "UNION",
        "name": name,
        "description": None,
        "possibleTypes": [named(t, "OBJECT") for t in possible_types],
    }


def enum_type(name: str, values: list[str], deprecated: dict[str, str] | None = None) -> dict[str, Any]:
    deprecated = deprecated or {}
    return {
        "kind": "ENUM",
        "name": name,
        "description": None,
        "enumValues": [
            {
                "name": value,
                "description": None,
                "isDeprecated": value in deprecated,
                "deprecationReason": deprecated.get(value),
            }
            for value in values
        ],
    }


def input_type(name: str, fields: list[dict[str, Any]]) -> dict[str, Any]:
    return {"kind": "INPUT_OBJECT", "name": name, "description": None, "inputFields": fields}


def scalar_type(name: str) -> dict[str, Any]:
    return {"kind": "SCALAR", "name": name, "description": None}


def schema(
    types: list[dict[str, Any]], query: str = "Query", mutation: str | None = None
) -> dict[str, Any]:
    return {
        "__schema": {
            "queryType": {"name": query},
            "mutationType": {"name": mutation} if mutation else None,
            "subscriptionType": None,
            "types": types,
        }
    }


def parse(document: dict[str, Any]) -> SchemaModel:
    return SchemaParser().parse_string(json.dumps(document))


STRING = named("String")
ID = named("ID")
INT = named("Int")


def sample_schema() -> dict[str, Any]:
    """A schema touching every construct kind."""
    return schema(
        [
            object_type(
                "Query",
                [
                    field("hello", STRING),
                    field("user", named("User", "OBJECT"), [arg("id", non_null(ID))]),
                    field(
                        "users",
                        non_null(list_of(non_null(named("User", "OBJECT")))),
                        [arg("limit", INT, "10")],
                    ),
                    field("search", list_of(named("SearchResult", "UNION")), [arg("term", non_null(STRING))]),
                    field("node", named("Node", "INTERFACE"), [arg("id", non_null(ID))]),
                ],
            ),
            object_type(
                "Mutation",
                [
                    field(
                        "createUser",
                        non_null(named("User", "OBJECT")),
                        [arg("input", non_null(named("CreateUserInput", "INPUT_OBJECT")))],
                    ),
                ],
            ),
            interface_type("Node", [field("id", non_null(ID))], ["User", "Post"]),
            object_type(
                "User",
                [
                    field("id", non_null(ID)),
                    field("name", STRING, description="Display name"),
                    field("role", non_null(named("Role", "ENUM"))),
                    field("posts", list_of(named("Post", "OBJECT"))),
                    field("bestFriend", named("User", "OBJECT")),
                ],
                interfaces=["Node"],
                description="A registered account",
            ),
            object_type(
                "Post",
                [
                    field("id", non_null(ID)),
                    field("title", non_null(STRING)),
                    field("createdAt", named("DateTime")),
                    field("legacyScore", INT, deprecation_reason="Use rating"),
                ],
                interfaces=["Node"],
            ),
            union_type("SearchResult", ["User", "Post"]),
            enum_type("Role", ["ADMIN", "MEMBER", "GUEST"], deprecated={"GUEST": "Use MEMBER"}),
            input_type(
                "CreateUserInput",
                [
                    arg("name", non_null(STRING)),
                    arg("role", non_null(named("Role", "ENUM")), '"MEMBER"'),
                    arg("nickname", STRING),
                    arg("tags", list_of(non_null(STRING))),
                ],
            ),
            scalar_type("DateTime"),
        ],
        mutation="Mutation",
    )
