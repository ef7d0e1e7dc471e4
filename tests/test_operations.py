"""
Operations registry tests.
"""
import pytest  # type: ignore
from graphql import parse  # type: ignore

from monday_toolkit.sources.client.monday.graphql_op import MondayGraphQLOperations


@pytest.mark.client
class TestMondayGraphQLOperations:
    """Lookup and fragment assembly of the registered operations."""

    def test_every_operation_parses(self):
        """Each operation, completed with its fragments, is a valid GraphQL document."""
        for operation_type, names in (("query", MondayGraphQLOperations.QUERIES), ("mutation", MondayGraphQLOperations.MUTATIONS)):
            for name in names:
                document = MondayGraphQLOperations.get_operation_with_fragments(operation_type, name)
                assert document, f"{operation_type} {name} is empty"
                parse(document)

    def test_nested_fragments_are_collected_once(self):
        document = MondayGraphQLOperations.get_operation_with_fragments("query", "introspection")
        assert document.count("fragment FullType on __Type") == 1
        assert document.count("fragment InputValue on __InputValue") == 1
        assert document.count("fragment TypeRef on __Type") == 1
        assert document.rstrip().endswith("}")

    def test_unknown_operation(self):
        assert MondayGraphQLOperations.get_operation("query", "does_not_exist") == {}
        assert MondayGraphQLOperations.get_operation("subscription", "get_board_schema") == {}
        assert MondayGraphQLOperations.get_operation_with_fragments("mutation", "does_not_exist") == ""

    def test_list_operations(self):
        operations = MondayGraphQLOperations.list_operations()
        assert "get_board_schema" in operations["queries"]
        assert "search_dev" in operations["queries"]
        assert "create_item" in operations["mutations"]
        assert "update_overview_hierarchy" in operations["mutations"]

    def test_get_fragment(self):
        assert "fragment UserDetails on User" in MondayGraphQLOperations.get_fragment("UserDetails")
        assert MondayGraphQLOperations.get_fragment("Missing") == ""

    def test_type_details_query_inlines_type_name(self):
        document = MondayGraphQLOperations.type_details_query("Board")
        assert '__type(name: "Board")' in document
        parse(document)

    def test_fragment_spreads_match_whole_names(self, monkeypatch):
        """A fragment named as a prefix of another is only pulled in when spread itself."""
        monkeypatch.setattr(
            MondayGraphQLOperations,
            "FRAGMENTS",
            {
                "Board": "fragment Board on Board { id }",
                "BoardDetails": "fragment BoardDetails on Board { name ... on Board { url } }",
            },
        )
        monkeypatch.setattr(
            MondayGraphQLOperations,
            "QUERIES",
            {"boards": {"query": "query boards { boards { ...BoardDetails } }", "fragments": ["BoardDetails"], "description": ""}},
        )

        document = MondayGraphQLOperations.get_operation_with_fragments("query", "boards")

        assert MondayGraphQLOperations.fragment_dependencies("BoardDetails") == []
        assert "fragment Board on" not in document
        assert document.startswith("fragment BoardDetails on Board")

    def test_form_fragments_are_collected_through_question_complete(self):
        document = MondayGraphQLOperations.get_operation_with_fragments("query", "get_form")

        for fragment in ("QuestionComplete", "QuestionBasic", "QuestionOptions", "QuestionSettings", "FormTag"):
            assert document.count(f"fragment {fragment} on") == 1
        assert MondayGraphQLOperations.fragment_dependencies("QuestionComplete") == [
            "QuestionBasic",
            "QuestionOptions",
            "QuestionSettings",
        ]
        parse(document)
