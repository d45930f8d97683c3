"""Tests for the construct-kind generators and artifact rendering."""

from __future__ import annotations

from typing import Any

import pytest

from schemagen.core.exceptions import GenerationError
from schemagen.core.generator import (
    GENERATED_HEADER,
    Artifact,
    ArtifactKind,
    ArtifactRenderer,
    GenerationContext,
)
from schemagen.core.naming import NamingConvention
from schemagen.core.types import TypeMapper
from schemagen.generators import (
    EnumGenerator,
    InputTypeGenerator,
    InterfaceGenerator,
    MutationGenerator,
    ProjectionGenerator,
    QueryGenerator,
    TypeGenerator,
    UnionGenerator,
)
from schemagen.generators.projections import Selection
from tests.schemas import (
    ID,
    INT,
    STRING,
    enum_type,
    field,
    interface_type,
    named,
    non_null,
    object_type,
    parse,
    sample_schema,
    schema,
)


def _context(document: dict[str, Any] | None = None, add_comments: bool = True) -> GenerationContext:
    model = parse(document if document is not None else sample_schema())
    naming = NamingConvention()
    return GenerationContext(
        mapper=TypeMapper(model, "acme.api", naming=naming),
        namespace="acme.api",
        naming=naming,
        add_comments=add_comments,
    )


def _generate(generator_class, document: dict[str, Any] | None = None, **kwargs) -> dict[str, Artifact]:
    context = _context(document, **kwargs)
    artifacts = generator_class(context).generate(context.model)
    return {artifact.name: artifact for artifact in artifacts}


def _render(artifact: Artifact, add_comments: bool = True) -> str:
    return ArtifactRenderer(add_comments=add_comments).render(artifact)


class TestInterfaceGenerator:
    def test_interface_without_implementers(self) -> None:
        """An interface nobody implements still yields a closed hierarchy."""
        document = schema(
            [
                object_type("Query", [field("hello", STRING)]),
                interface_type("Node", [field("id", non_null(ID))]),
            ]
        )
        node = _generate(InterfaceGenerator, document)["Node"]

        assert node.kind == ArtifactKind.INTERFACE
        assert node.permits == ()
        assert [(f.name, f.annotation, f.required) for f in node.fields] == [("id", "str", True)]
        assert node.module == "acme.api.type.node"

        source = _render(node)
        assert "class Node(ClosedHierarchy):" in source
        assert "__permitted__ = ()" in source
        assert "    id: str\n" in source

    def test_permits_list_every_implementer(self) -> None:
        node = _generate(InterfaceGenerator)["Node"]
        assert node.permits == (
            "acme.api.type.user_dto.UserDTO",
            "acme.api.type.post_dto.PostDTO",
        )
        assert '"acme.api.type.user_dto.UserDTO",' in _render(node)


class TestUnionGenerator:
    def test_permits_members_in_order(self) -> None:
        union = _generate(UnionGenerator)["SearchResult"]
        assert union.partition == "union"
        assert union.fields == ()
        assert union.permits == (
            "acme.api.type.user_dto.UserDTO",
            "acme.api.type.post_dto.PostDTO",
        )


class TestTypeGenerator:
    def test_root_types_are_excluded(self) -> None:
        assert list(_generate(TypeGenerator)) == ["UserDTO", "PostDTO"]

    def test_bases_are_interfaces_then_unions(self) -> None:
        user = _generate(TypeGenerator)["UserDTO"]
        assert user.bases == ("Node", "SearchResult")
        assert ("acme.api.type.node", "Node") in user.imports
        assert ("acme.api.union.search_result", "SearchResult") in user.imports

    def test_fields(self) -> None:
        user = _generate(TypeGenerator)["UserDTO"]
        assert [(f.name, f.annotation) for f in user.fields] == [
            ("id", "str"),
            ("name", "str | None"),
            ("role", "Role"),
            ("posts", "list[PostDTO | None] | None"),
            ("best_friend", "UserDTO | None"),
        ]

    def test_self_reference_is_not_imported(self) -> None:
        user = _generate(TypeGenerator)["UserDTO"]
        modules = {module for module, _ in user.type_imports}
        assert "acme.api.type.user_dto" not in modules
        assert "acme.api.type.post_dto" in modules

    def test_rendered_dataclass(self) -> None:
        source = _render(_generate(TypeGenerator)["UserDTO"])
        assert source.startswith(GENERATED_HEADER + "\nfrom __future__ import annotations\n")
        assert "@dataclass(frozen=True, kw_only=True)\nclass UserDTO(Node, SearchResult):" in source
        assert '    """A registered account"""' in source
        assert "    # Display name\n    name: str | None = None\n" in source
        assert "    id: str\n" in source
        assert "if TYPE_CHECKING:\n    import datetime" not in source

    def test_deprecated_field_comment(self) -> None:
        source = _render(_generate(TypeGenerator)["PostDTO"])
        assert "    # Deprecated: Use rating\n    legacy_score: int | None = None" in source
        assert "    import datetime\n" in source

    def test_comments_can_be_disabled(self) -> None:
        user = _generate(TypeGenerator, add_comments=False)["UserDTO"]
        source = _render(user, add_comments=False)
        assert user.description is None
        assert GENERATED_HEADER not in source
        assert "Display name" not in source

    def test_inherited_fields_keep_interface_names(self) -> None:
        document = schema(
            [
                object_type("Query", [field("hello", STRING)]),
                interface_type("Node", [field("fooBar", STRING)], ["User"]),
                object_type("User", [field("foo_bar", INT), field("fooBar", STRING)], interfaces=["Node"]),
            ]
        )
        node = _generate(InterfaceGenerator, document)["Node"]
        user = _generate(TypeGenerator, document)["UserDTO"]

        assert [(f.name, f.graphql_name) for f in node.fields] == [("foo_bar", "fooBar")]
        assert [(f.name, f.graphql_name, f.annotation) for f in user.fields] == [
            ("foo_bar_1", "foo_bar", "int | None"),
            ("foo_bar", "fooBar", "str | None"),
        ]

    def test_interfaces_with_clashing_names_fail(self) -> None:
        document = schema(
            [
                object_type("Query", [field("hello", STRING)]),
                interface_type("Named", [field("fooBar", STRING)], ["User"]),
                interface_type("Legacy", [field("foo_bar", STRING)], ["User"]),
                object_type(
                    "User",
                    [field("fooBar", STRING), field("foo_bar", STRING)],
                    interfaces=["Named", "Legacy"],
                ),
            ]
        )
        with pytest.raises(GenerationError, match="User consistently with Legacy"):
            _generate(TypeGenerator, document)


class TestEnumGenerator:
    def test_values_and_deprecation(self) -> None:
        role = _generate(EnumGenerator)["Role"]
        assert [v.name for v in role.fields] == ["ADMIN", "MEMBER", "GUEST"]
        assert [v.deprecated for v in role.fields] == [False, False, True]

        source = _render(role)
        assert "class Role(str, Enum):" in source
        assert '    ADMIN = "ADMIN"' in source
        assert '        "GUEST": "Use MEMBER",' in source

    def test_member_names_are_sanitized(self) -> None:
        document = schema(
            [
                object_type("Query", [field("hello", STRING)]),
                enum_type("Odd", ["_internal", "name", "class", "in-progress"]),
            ]
        )
        odd = _generate(EnumGenerator, document)["Odd"]
        assert [(v.name, v.graphql_name) for v in odd.fields] == [
            ("VALUE_internal", "_internal"),
            ("name_", "name"),
            ("class_", "class"),
            ("in_progress", "in-progress"),
        ]


class TestInputTypeGenerator:
    def test_required_and_optional_fields(self) -> None:
        create = _generate(InputTypeGenerator)["CreateUserInput"]
        assert [(f.name, f.annotation, f.required) for f in create.fields] == [
            ("name", "str", True),
            ("role", "Role | None", False),
            ("nickname", "str | None", False),
            ("tags", "list[str] | None", False),
        ]
        assert create.get_field("role").default_value == '"MEMBER"'

    def test_rendered_builder(self) -> None:
        source = _render(_generate(InputTypeGenerator)["CreateUserInput"])
        assert "    class Builder:" in source
        assert "        def name(self, value: str) -> CreateUserInput.Builder:" in source
        assert 'raise RequiredFieldMissingError("name", "CreateUserInput")' in source
        assert 'raise RequiredFieldMissingError("role"' not in source


class TestProjectionGenerator:
    def test_selection_kinds(self) -> None:
        projection = _generate(ProjectionGenerator)["UserProjection"]
        selections = {f.graphql_name: f.metadata["selection"] for f in projection.fields}
        assert selections == {
            "id": Selection.LEAF,
            "name": Selection.LEAF,
            "role": Selection.LEAF,
            "posts": Selection.NESTED,
            "bestFriend": Selection.NESTED,
        }

    def test_nested_projection_modules(self) -> None:
        projection = _generate(ProjectionGenerator)["UserProjection"]
        assert projection.get_field("posts").metadata["projection_module"] == (
            "acme.api.type.post_projection"
        )
        assert projection.get_field("best_friend").metadata["projection_module"] is None

    def test_abstract_results_select_typename(self) -> None:
        document = schema(
            [
                object_type("Query", [field("hello", STRING)]),
                interface_type("Node", [field("id", non_null(ID))], ["Edge"]),
                object_type("Edge", [field("id", non_null(ID)), field("node", non_null(named("Node", "INTERFACE")))], ["Node"]),
            ]
        )
        edge = _generate(ProjectionGenerator, document)["EdgeProjection"]
        assert edge.get_field("node").metadata["selection"] == Selection.TYPENAME

    def test_root_types_get_no_projection(self) -> None:
        assert sorted(_generate(ProjectionGenerator)) == ["PostProjection", "UserProjection"]


class TestOperationGenerators:
    def test_query_without_arguments(self) -> None:
        """A scalar query field gets an argument-free wrapper."""
        document = schema([object_type("Query", [field("hello", STRING)])])
        hello = _generate(QueryGenerator, document)["HelloQuery"]

        assert hello.partition == "query"
        assert hello.fields == ()
        assert hello.metadata["response_type"] == "str | None"
        assert hello.metadata["document_head"] + hello.metadata["document_tail"] == "query Hello { hello }"

    def test_arguments_and_nested_selection(self) -> None:
        user = _generate(QueryGenerator)["UserQuery"]
        assert user.metadata["selection"] == Selection.NESTED
        assert user.metadata["projection"] == "UserProjection"
        assert user.metadata["document_head"] == "query User($id: ID!) { user(id: $id)"
        assert ("acme.api.type.user_projection", "UserProjection") in user.imports

    def test_argument_default_is_declared_on_variable(self) -> None:
        users = _generate(QueryGenerator)["UsersQuery"]
        assert users.metadata["document_head"] == "query Users($limit: Int = 10) { users(limit: $limit)"
        assert users.get_field("limit").annotation == "int | None"
        assert users.metadata["response_type"] == "list[UserDTO]"

    def test_union_result_selects_typename(self) -> None:
        search = _generate(QueryGenerator)["SearchQuery"]
        assert search.metadata["document_head"] == (
            "query Search($term: String!) { search(term: $term) { __typename }"
        )

    def test_mutations(self) -> None:
        create = _generate(MutationGenerator)["CreateUserMutation"]
        assert create.module == "acme.api.mutation.create_user_mutation"
        assert create.metadata["operation_type"] == "mutation"
        assert create.metadata["document_head"] == (
            "mutation CreateUser($input: CreateUserInput!) { createUser(input: $input)"
        )

    def test_no_mutation_root(self) -> None:
        document = schema([object_type("Query", [field("hello", STRING)])])
        assert _generate(MutationGenerator, document) == {}


class TestRenderer:
    def test_conflicting_imports_fail(self) -> None:
        artifact = Artifact(
            kind=ArtifactKind.DTO,
            namespace="acme.api",
            partition="type",
            name="ThingDTO",
            graphql_name="Thing",
            imports=(("acme.api.type.a", "Base"), ("acme.api.type.b", "Base")),
        )
        with pytest.raises(GenerationError, match="Conflicting imports for 'Base'"):
            _render(artifact)

    def test_output_is_deterministic(self) -> None:
        first = [_render(a) for a in _generate(QueryGenerator).values()]
        second = [_render(a) for a in _generate(QueryGenerator).values()]
        assert first == second

    def test_relative_path(self) -> None:
        user = _generate(TypeGenerator)["UserDTO"]
        assert str(user.relative_path) == "acme/api/type/user_dto.py"
