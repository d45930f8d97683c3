"""Tests that import and exercise the generated modules."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from schemagen.controller import CodegenController
from schemagen.runtime import GraphQLOperation, RequiredFieldMissingError
from tests.schemas import INT, STRING, field, interface_type, named, object_type, schema


@pytest.fixture
def generated(make_config) -> Path:
    config = make_config()
    CodegenController(config).run()
    return config.output_dir


@pytest.fixture
def load(generated: Path, import_generated):
    def _load(module: str, name: str):
        return getattr(import_generated(generated, f"acme.api.{module}"), name)

    return _load


def test_every_module_imports(generated: Path, import_generated) -> None:
    for path in sorted(generated.rglob("*.py")):
        module = ".".join(path.relative_to(generated).with_suffix("").parts)
        import_generated(generated, module.removesuffix(".__init__"))


class TestInputBuilder:
    def test_missing_required_field(self, load) -> None:
        create_user_input = load("input.create_user_input", "CreateUserInput")

        with pytest.raises(RequiredFieldMissingError) as exc_info:
            create_user_input.builder().nickname("ada").build()

        assert exc_info.value.field_name == "name"
        assert exc_info.value.owner == "CreateUserInput"

    def test_build_and_variables(self, load) -> None:
        create_user_input = load("input.create_user_input", "CreateUserInput")
        role = load("enumeration.role", "Role")

        value = create_user_input.builder().name("Ada").role(role.ADMIN).tags(["a", "b"]).build()

        assert value.name == "Ada"
        assert value.nickname is None
        assert value.to_variables() == {"name": "Ada", "role": "ADMIN", "tags": ["a", "b"]}
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.name = "Grace"


class TestDataClasses:
    def test_dto_belongs_to_its_hierarchies(self, load) -> None:
        user_dto = load("type.user_dto", "UserDTO")
        node = load("type.node", "Node")
        search_result = load("union.search_result", "SearchResult")
        role = load("enumeration.role", "Role")

        user = user_dto(id="1", role=role.MEMBER)

        assert isinstance(user, node)
        assert isinstance(user, search_result)
        assert user.name is None
        assert node.__fields__ == ("id",)

    def test_non_null_fields_are_required(self, load) -> None:
        post_dto = load("type.post_dto", "PostDTO")
        with pytest.raises(TypeError):
            post_dto(id="1")

    def test_unlisted_implementer_is_rejected(self, load) -> None:
        node = load("type.node", "Node")
        with pytest.raises(TypeError, match="not a permitted subclass"):

            class Rogue(node):
                id: str


class TestEnum:
    def test_values(self, load) -> None:
        role = load("enumeration.role", "Role")

        assert [member.value for member in role] == ["ADMIN", "MEMBER", "GUEST"]
        assert role.from_value("GUEST") is role.GUEST
        assert role.ADMIN.to_value() == "ADMIN"
        assert role.GUEST.is_deprecated
        assert not role.ADMIN.is_deprecated
        assert role.__deprecated_values__ == {"GUEST": "Use MEMBER"}

    def test_unknown_value(self, load) -> None:
        role = load("enumeration.role", "Role")
        with pytest.raises(ValueError):
            role.from_value("OWNER")


class TestProjection:
    def test_nested_selection(self, load) -> None:
        user_projection = load("type.user_projection", "UserProjection")

        projection = (
            user_projection.builder()
            .id()
            .posts(lambda post: post.title().created_at())
            .best_friend(lambda friend: friend.name())
            .build()
        )

        assert projection.to_graphql() == (
            "{ id posts { title createdAt } bestFriend { name } }"
        )

    def test_reselecting_keeps_first_position(self, load) -> None:
        user_projection = load("type.user_projection", "UserProjection")
        projection = user_projection.builder().id().name().id().build()
        assert projection.selections == ("id", "name")

    def test_empty_selection(self, load) -> None:
        user_projection = load("type.user_projection", "UserProjection")
        with pytest.raises(ValueError, match="UserProjection selects no fields"):
            user_projection.builder().build()


class TestOperations:
    def test_query_with_selection(self, load) -> None:
        user_query = load("query.user_query", "UserQuery")

        query = user_query.builder().id("42").selecting(lambda user: user.id().name()).build()

        assert isinstance(query, GraphQLOperation)
        assert query.to_graphql() == "query User($id: ID!) { user(id: $id) { id name } }"
        assert query.variables() == {"id": "42"}
        assert query.to_request()["operationName"] == "User"
        assert user_query.response_type() == "UserDTO | None"

    def test_missing_argument_and_selection(self, load) -> None:
        user_query = load("query.user_query", "UserQuery")

        with pytest.raises(RequiredFieldMissingError) as exc_info:
            user_query.builder().selecting(lambda user: user.id()).build()
        assert exc_info.value.field_name == "id"

        with pytest.raises(RequiredFieldMissingError) as exc_info:
            user_query.builder().id("42").build()
        assert exc_info.value.field_name == "selection"

    def test_optional_argument_is_omitted(self, load) -> None:
        users_query = load("query.users_query", "UsersQuery")
        query = users_query.builder().selecting(lambda user: user.id()).build()
        assert query.variables() == {}
        assert query.to_graphql() == "query Users($limit: Int = 10) { users(limit: $limit) { id } }"

    def test_union_result(self, load) -> None:
        search_query = load("query.search_query", "SearchQuery")
        query = search_query.builder().term("ada").build()
        assert query.to_graphql() == (
            "query Search($term: String!) { search(term: $term) { __typename } }"
        )

    def test_mutation_serializes_input(self, load) -> None:
        create_user_mutation = load("mutation.create_user_mutation", "CreateUserMutation")
        create_user_input = load("input.create_user_input", "CreateUserInput")

        mutation = (
            create_user_mutation.builder()
            .input(create_user_input.builder().name("Ada").build())
            .selecting(lambda user: user.id())
            .build()
        )

        assert mutation.OPERATION_TYPE == "mutation"
        assert mutation.variables() == {"input": {"name": "Ada"}}
        assert mutation.to_graphql() == (
            "mutation CreateUser($input: CreateUserInput!) { createUser(input: $input) { id } }"
        )


def test_hello_query(make_config, import_generated) -> None:
    config = make_config(schema([object_type("Query", [field("hello", STRING)])]))
    CodegenController(config).run()

    hello_query = import_generated(config.output_dir, "acme.api.query.hello_query").HelloQuery

    assert hello_query.builder().build().to_graphql() == "query Hello { hello }"
    assert hello_query.response_type() == "str | None"


def test_descriptions_with_carriage_returns(make_config, import_generated) -> None:
    document = schema(
        [
            object_type("Query", [field("user", named("User", "OBJECT"))]),
            object_type(
                "User",
                [field("name", STRING, description="first\rsecond line")],
                description="An account\r\nwith a note",
            ),
        ]
    )
    config = make_config(document)
    CodegenController(config).run()

    user_dto = import_generated(config.output_dir, "acme.api.type.user_dto").UserDTO

    assert user_dto().name is None
    assert "with a note" in user_dto.__doc__


def test_inherited_field_keeps_interface_name(make_config, import_generated) -> None:
    document = schema(
        [
            object_type("Query", [field("node", named("Node", "INTERFACE"))]),
            interface_type("Node", [field("fooBar", STRING)], ["User"]),
            object_type("User", [field("foo_bar", INT), field("fooBar", STRING)], interfaces=["Node"]),
        ]
    )
    config = make_config(document)
    CodegenController(config).run()

    node = import_generated(config.output_dir, "acme.api.type.node").Node
    user_dto = import_generated(config.output_dir, "acme.api.type.user_dto").UserDTO

    assert node.__fields__ == ("foo_bar",)
    assert user_dto.__annotations__["foo_bar"] == node.__annotations__["foo_bar"] == "str | None"
    assert user_dto.__annotations__["foo_bar_1"] == "int | None"
