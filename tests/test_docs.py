"""
Document tool tests.
"""
import json

import pytest  # type: ignore

from monday_toolkit.agents.actions.monday.docs import MondayDocs
from monday_toolkit.exceptions.toolkit_exceptions import MondayApiError


def doc(doc_id, name="Roadmap"):
    return {
        "id": doc_id,
        "object_id": f"o{doc_id}",
        "name": name,
        "created_by": {"name": "Ada"},
        "workspace": None,
        "url": f"https://example.monday.com/docs/{doc_id}",
    }


def exported(markdown):
    return {"export_markdown_from_doc": {"success": True, "markdown": markdown}}


@pytest.mark.tools
class TestReadDocs:
    """Reading docs as markdown."""

    @pytest.mark.asyncio
    async def test_read_docs_by_workspace(self, monday_client, run_tool):
        monday_client.respond("readDocs", {"docs": [doc("1"), doc("2", "Plan")]})
        monday_client.respond(
            "exportMarkdownFromDoc",
            exported("# Roadmap"),
            {"export_markdown_from_doc": {"success": False, "error": "too large"}},
        )

        result = await run_tool(MondayDocs, "read_docs", {"type": "workspace_ids", "ids": [5], "order_by": "used_at"})

        assert result.startswith("Successfully retrieved 2 documents.\n\nPAGINATION INFO:\n- Current page: 1\n")
        assert "- Has more pages: NO\n" in result
        docs = json.loads(result.split("DOCUMENTS:\n", 1)[1])
        assert [d["blocks_as_markdown"] for d in docs] == ["# Roadmap", "Error getting markdown: too large"]
        assert docs[0]["created_by"] == "Ada"
        assert docs[0]["workspace"] == "Unknown"
        assert monday_client.last("readDocs").variables == {
            "workspace_ids": ["5"],
            "limit": 25,
            "order_by": "used_at",
        }

    @pytest.mark.asyncio
    async def test_ids_fall_back_to_object_ids(self, monday_client, run_tool):
        monday_client.respond("readDocs", {"docs": []}, {"docs": [doc("1")]})
        monday_client.respond("exportMarkdownFromDoc", exported("body"))

        result = await run_tool(MondayDocs, "read_docs", {"type": "ids", "ids": ["o1"], "limit": 1, "page": 2})

        retries = [r.variables for r in monday_client.requests if r.operation == "readDocs"]
        assert retries == [
            {"ids": ["o1"], "limit": 1, "page": 2},
            {"object_ids": ["o1"], "limit": 1, "page": 2},
        ]
        assert "Successfully retrieved 1 document.\n" in result
        assert "- Has more pages: YES - call again with page: 3\n" in result
        assert result.endswith("Consider calling this tool again with page: 3 to get additional documents.")

    @pytest.mark.asyncio
    async def test_no_docs(self, run_tool):
        result = await run_tool(MondayDocs, "read_docs", {"type": "object_ids", "ids": ["1"], "page": 4})

        assert result == "No documents found matching the specified criteria (page 4)."

    @pytest.mark.asyncio
    async def test_errors_are_reported_as_text(self, monday_client, run_tool):
        monday_client.respond("readDocs", MondayApiError("Not authorized"))

        result = await run_tool(MondayDocs, "read_docs", {"type": "ids", "ids": ["1"]})

        assert result == "Error reading documents: Not authorized"


@pytest.mark.tools
class TestCreateDoc:
    """Creating docs in workspaces and on items."""

    @pytest.mark.asyncio
    async def test_missing_location_parameters(self, monday_client, run_tool):
        result = await run_tool(MondayDocs, "create_doc", {"doc_name": "x", "markdown": "y", "location": "item"})

        assert result == "Required parameters were not provided for location parameter of item"
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_workspace_doc(self, monday_client, run_tool):
        monday_client.respond("createDoc", {"create_doc": {"id": "d1", "url": "https://docs/d1"}})
        monday_client.respond("addContentToDocFromMarkdown", {"add_content_to_doc_from_markdown": {"success": True}})

        result = await run_tool(
            MondayDocs,
            "create_doc",
            {"doc_name": "Notes", "markdown": "# Hi", "location": "workspace", "workspace_id": 3, "folder_id": 8},
        )

        assert result == "✅ Document successfully created (id: d1). \n\nURL: https://docs/d1"
        assert monday_client.last("createDoc").variables == {
            "location": {"workspace": {"workspace_id": "3", "name": "Notes", "kind": "public", "folder_id": "8"}}
        }
        assert monday_client.last("addContentToDocFromMarkdown").variables == {"docId": "d1", "markdown": "# Hi"}

    @pytest.mark.asyncio
    async def test_item_doc_creates_doc_column(self, monday_client, run_tool):
        monday_client.respond(
            "getItemBoard",
            {"items": [{"id": "5", "board": {"id": "b1", "columns": [{"id": "text", "type": "text"}]}}]},
        )
        monday_client.respond("createColumn", {"create_column": {"id": "doc_col"}})
        monday_client.respond("createDoc", {"create_doc": {"id": "d2"}})
        monday_client.respond("updateDocName", MondayApiError("rename failed"))
        monday_client.respond("addContentToDocFromMarkdown", {"add_content_to_doc_from_markdown": {"success": True}})

        result = await run_tool(
            MondayDocs,
            "create_doc",
            {"doc_name": "Notes", "markdown": "text", "location": "item", "item_id": "5"},
        )

        assert result == "✅ Document successfully created (id: d2). "
        assert monday_client.operations() == [
            "getItemBoard",
            "createColumn",
            "createDoc",
            "updateDocName",
            "addContentToDocFromMarkdown",
        ]
        assert monday_client.last("createDoc").variables == {
            "location": {"board": {"item_id": "5", "column_id": "doc_col"}}
        }

    @pytest.mark.asyncio
    async def test_item_doc_uses_existing_doc_column(self, monday_client, run_tool):
        monday_client.respond(
            "getItemBoard",
            {"items": [{"id": "5", "board": {"id": "b1", "columns": [{"id": "files_doc", "type": "doc"}]}}]},
        )
        monday_client.respond("createDoc", {"create_doc": {"id": "d3"}})
        monday_client.respond(
            "addContentToDocFromMarkdown",
            {"add_content_to_doc_from_markdown": {"success": False, "error": "bad markdown"}},
        )

        result = await run_tool(
            MondayDocs,
            "create_doc",
            {"doc_name": "Notes", "markdown": "text", "location": "item", "item_id": "5"},
        )

        assert result == "Document d3 created, but failed to add markdown content: bad markdown"
        assert "createColumn" not in monday_client.operations()

    @pytest.mark.asyncio
    async def test_item_not_found(self, monday_client, run_tool):
        monday_client.respond("getItemBoard", {"items": []})

        result = await run_tool(
            MondayDocs,
            "create_doc",
            {"doc_name": "Notes", "markdown": "text", "location": "item", "item_id": "5"},
        )

        assert result == "Error: Item with id 5 not found."

    @pytest.mark.asyncio
    async def test_doc_not_created(self, monday_client, run_tool):
        monday_client.respond("createDoc", {"create_doc": None})

        result = await run_tool(
            MondayDocs,
            "create_doc",
            {"doc_name": "Notes", "markdown": "text", "location": "workspace", "workspace_id": "3"},
        )

        assert result == "Error: Failed to create document."
