import asyncio
import json
import logging
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.boards import BoardKind
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool

logger = logging.getLogger(__name__)

DEFAULT_DOCS_LIMIT = 25
DOC_COLUMN_TYPE = "doc"


class DocsOrderBy(str, Enum):
    CREATED_AT = "created_at"
    USED_AT = "used_at"


class ReadDocsInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    type: Literal["ids", "object_ids", "workspace_ids"] = Field(
        description="Query type of ids parameter that is used query by: ids, object_ids, or workspace_ids"
    )
    ids: List[MondayId] = Field(
        min_length=1,
        description="Array of ID values for this query type (at least 1 required)",
    )
    limit: Optional[int] = Field(
        default=None,
        description=(
            "Number of docs per page (default: 25). Affects pagination - if you get exactly this many "
            "results, there may be more pages."
        ),
    )
    order_by: Optional[DocsOrderBy] = Field(
        default=None,
        description=(
            "The order in which to retrieve your docs. The default shows created_at with the newest docs "
            "listed first. This argument will not be applied if you query docs by specific ids."
        ),
    )
    page: Optional[int] = Field(
        default=None,
        description=(
            "The page number to return (starts at 1). Use this to paginate through large result sets. "
            "Check response for has_more_pages indicator."
        ),
    )


class CreateDocInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    doc_name: str = Field(description="Name for the new document.")
    markdown: str = Field(
        description="Markdown content that will be imported into the newly created document as blocks."
    )
    location: Literal["workspace", "item"] = Field(
        description="Location where the document should be created - either in a workspace or attached to an item"
    )
    workspace_id: Optional[MondayId] = Field(
        default=None,
        description='[REQUIRED - use only when location="workspace"] Workspace ID under which to create the new document',
    )
    doc_kind: Optional[BoardKind] = Field(
        default=None,
        description=(
            '[OPTIONAL - use only when location="workspace"] Document kind (public/private/share). '
            "Defaults to public."
        ),
    )
    folder_id: Optional[MondayId] = Field(
        default=None,
        description=(
            '[OPTIONAL - use only when location="workspace"] Optional folder ID to place the document '
            "inside a specific folder"
        ),
    )
    item_id: Optional[MondayId] = Field(
        default=None,
        description='[REQUIRED - use only when location="item"] Item ID to attach the new document to',
    )
    column_id: Optional[str] = Field(
        default=None,
        description=(
            '[OPTIONAL - use only when location="item"] ID of an existing "doc" column on the board which '
            "contains the item. If not provided, the tool will create a new doc column automatically when "
            "creating a doc on an item."
        ),
    )


class CreateDocError(Exception):
    """Doc creation stopped with a message for the agent"""


class MondayDocs(MondayActions):
    """Document tools"""

    @tool(
        name="read_docs",
        type=ToolType.READ,
        title="Read Documents",
        description="""Get a collection of monday.com documents with their content as markdown.

PAGINATION:
- Default limit is 25 documents per page
- Use 'page' parameter to get additional pages (starts at 1)
- Check response for 'has_more_pages' to know if you should continue paginating
- If user asks for "all documents" and you get exactly 25 results, continue with page 2, 3, etc.

FILTERING: Provide a type value and array of ids:
- type: 'ids' for specific document IDs
- type: 'object_ids' for specific document object IDs
- type: 'workspace_ids' for all docs in specific workspaces
- ids: array of ID strings (at least 1 required)

Examples:
- { type: 'ids', ids: ['123', '456'] }
- { type: 'object_ids', ids: ['123'] }
- { type: 'workspace_ids', ids: ['ws_101'] }

USAGE PATTERNS:
- For specific documents: use type 'ids' or 'object_ids' (A monday doc has two unique identifiers)
- For workspace exploration: use type 'workspace_ids' with pagination
- For large searches: start with page 1, then paginate if has_more_pages=true""",
        input_model=ReadDocsInput,
        read_only=True,
        idempotent=True,
    )
    async def read_docs(self, tool_input: ReadDocsInput) -> str:
        try:
            limit = tool_input.limit or DEFAULT_DOCS_LIMIT
            variables: Dict[str, Any] = {
                "ids": None,
                "object_ids": None,
                "workspace_ids": None,
                "limit": limit,
                "order_by": tool_input.order_by.value if tool_input.order_by else None,
                "page": tool_input.page,
            }
            variables[tool_input.type] = tool_input.ids

            res = await self.client.query("read_docs", variables)
            docs = [doc for doc in res.get("docs") or [] if doc]

            # Doc ids given by users are often object ids
            if not docs and tool_input.type == "ids":
                res = await self.client.query(
                    "read_docs",
                    {**variables, "ids": None, "object_ids": tool_input.ids},
                )
                docs = [doc for doc in res.get("docs") or [] if doc]

            if not docs:
                page_info = f" (page {tool_input.page})" if tool_input.page else ""
                return f"No documents found matching the specified criteria{page_info}."

            current_page = tool_input.page or 1
            content = await self._docs_with_markdown(docs, limit, current_page)
            return content + self._pagination_suggestion(len(docs), limit, current_page)
        except Exception as e:
            logger.error(f"Error reading documents: {e}")
            return f"Error reading documents: {str(e) or 'Unknown error occurred'}"

    @staticmethod
    def _pagination_suggestion(docs_count: int, limit: int, current_page: int) -> str:
        if docs_count != limit:
            return ""
        return (
            f"\n\n🔄 PAGINATION SUGGESTION: You received exactly {limit} documents, which suggests there may "
            f"be more. Consider calling this tool again with page: {current_page + 1} to get additional documents."
        )

    async def _doc_markdown(self, doc_id: str) -> str:
        try:
            res = await self.client.query("export_markdown_from_doc", {"docId": doc_id})
        except Exception as e:
            return f"Error getting markdown: {str(e) or 'Unknown error'}"

        export = res.get("export_markdown_from_doc") or {}
        if export.get("success") and export.get("markdown"):
            return export["markdown"]
        return f"Error getting markdown: {export.get('error') or 'Unknown error'}"

    async def _docs_with_markdown(self, docs: List[Dict[str, Any]], limit: int, current_page: int) -> str:
        markdowns = await asyncio.gather(*(self._doc_markdown(doc["id"]) for doc in docs))

        docs_info = [
            {
                "id": doc.get("id"),
                "object_id": doc.get("object_id"),
                "name": doc.get("name"),
                "doc_kind": doc.get("doc_kind"),
                "created_at": doc.get("created_at"),
                "created_by": (doc.get("created_by") or {}).get("name") or "Unknown",
                "url": doc.get("url"),
                "relative_url": doc.get("relative_url"),
                "workspace": (doc.get("workspace") or {}).get("name") or "Unknown",
                "workspace_id": doc.get("workspace_id"),
                "doc_folder_id": doc.get("doc_folder_id"),
                "settings": doc.get("settings"),
                "blocks_as_markdown": markdown,
            }
            for doc, markdown in zip(docs, markdowns)
        ]

        docs_count = len(docs_info)
        has_more_pages = f"YES - call again with page: {current_page + 1}" if docs_count == limit else "NO"
        plural = "" if docs_count == 1 else "s"
        return (
            f"Successfully retrieved {docs_count} document{plural}.\n\n"
            "PAGINATION INFO:\n"
            f"- Current page: {current_page}\n"
            f"- Documents per page: {limit}\n"
            f"- Documents in this response: {docs_count}\n"
            f"- Has more pages: {has_more_pages}\n\n"
            "DOCUMENTS:\n"
            f"{json.dumps(docs_info, indent=2, ensure_ascii=False)}"
        )

    @tool(
        name="create_doc",
        type=ToolType.WRITE,
        title="Create Document",
        description="""Create a new monday.com doc either inside a workspace or attached to an item (via a doc column). After creation, the provided markdown will be appended to the document.

LOCATION TYPES:
- workspace: Creates a document in a workspace (requires workspace_id, optional doc_kind, optional folder_id)
- item: Creates a document attached to an item (requires item_id, optional column_id)

USAGE EXAMPLES:
- Workspace doc: { location: "workspace", workspace_id: 123, doc_kind: "private" , markdown: "..." }
- Workspace doc in folder: { location: "workspace", workspace_id: 123, folder_id: 17264196 , markdown: "..." }
- Item doc: { location: "item", item_id: 456, column_id: "doc_col_1" , markdown: "..." }""",
        input_model=CreateDocInput,
    )
    async def create_doc(self, tool_input: CreateDocInput) -> str:
        if (tool_input.location == "workspace" and not tool_input.workspace_id) or (
            tool_input.location == "item" and not tool_input.item_id
        ):
            return f"Required parameters were not provided for location parameter of {tool_input.location}"

        try:
            if tool_input.location == "workspace":
                doc = await self._create_workspace_doc(tool_input)
            else:
                doc = await self._create_item_doc(tool_input)

            doc_id = doc.get("id")
            if not doc_id:
                return "Error: Failed to create document."

            res = await self.client.mutation(
                "add_content_to_doc_from_markdown",
                {"docId": doc_id, "markdown": tool_input.markdown},
            )
            content_result = res.get("add_content_to_doc_from_markdown") or {}
            if not content_result.get("success"):
                return (
                    f"Document {doc_id} created, but failed to add markdown content: "
                    f"{content_result.get('error') or 'Unknown error'}"
                )

            url = f"\n\nURL: {doc['url']}" if doc.get("url") else ""
            return f"✅ Document successfully created (id: {doc_id}). {url}"
        except CreateDocError as e:
            return str(e)
        except Exception as e:
            logger.error(f"Error creating document: {e}")
            return f"Error creating document: {str(e) or 'Unknown error'}"

    async def _create_workspace_doc(self, tool_input: CreateDocInput) -> Dict[str, Any]:
        kind = tool_input.doc_kind or BoardKind.PUBLIC
        workspace_location = {
            "workspace_id": tool_input.workspace_id,
            "name": tool_input.doc_name,
            "kind": kind.value,
        }
        if tool_input.folder_id:
            workspace_location["folder_id"] = tool_input.folder_id

        res = await self.client.mutation("create_doc", {"location": {"workspace": workspace_location}})
        return res.get("create_doc") or {}

    async def _create_item_doc(self, tool_input: CreateDocInput) -> Dict[str, Any]:
        res = await self.client.query("get_item_board", {"itemId": tool_input.item_id})
        items = res.get("items") or []
        item = items[0] if items else None
        if not item:
            raise CreateDocError(f"Error: Item with id {tool_input.item_id} not found.")

        board = item.get("board") or {}
        column_id = tool_input.column_id or await self._doc_column_id(board)

        res = await self.client.mutation(
            "create_doc",
            {"location": {"board": {"item_id": tool_input.item_id, "column_id": column_id}}},
        )
        doc = res.get("create_doc") or {}

        # Docs attached to items cannot be named on creation
        if tool_input.doc_name and doc.get("id"):
            try:
                await self.client.mutation("update_doc_name", {"docId": doc["id"], "name": tool_input.doc_name})
            except Exception as e:
                logger.warning(f"Failed to update doc name: {e}")

        return doc

    async def _doc_column_id(self, board: Dict[str, Any]) -> str:
        """Id of the board's doc column, creating one when the board has none."""
        for column in board.get("columns") or []:
            if column and column.get("type") == DOC_COLUMN_TYPE:
                return column["id"]

        res = await self.client.mutation(
            "create_column",
            {"boardId": board.get("id"), "columnType": DOC_COLUMN_TYPE, "columnTitle": "Doc"},
        )
        column_id = (res.get("create_column") or {}).get("id")
        if not column_id:
            raise CreateDocError("Error: Failed to create doc column.")
        return column_id
