import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.constants import (
    DEV_API_VERSION,
    LOAD_INTO_MEMORY_LIMIT,
    SEARCH_LIMIT,
    SEARCH_TIMEOUT_SECONDS,
)
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import MondayToolkitError
from monday_toolkit.utils.errors import raise_if_search_timeout
from monday_toolkit.utils.strings import normalize_string

logger = logging.getLogger(__name__)

BOARD_PREFIX = "board-"
DOCUMENT_PREFIX = "doc-"
FOLDER_PREFIX = "folder-"

BOARD_RESULT_TYPENAME = "CrossEntityBoardResult"
DOC_RESULT_TYPENAME = "CrossEntityDocResult"

NOT_FILTERED_DISCLAIMER = "[IMPORTANT]Items were not filtered. Please perform the filtering."


class GlobalSearchType(str, Enum):
    BOARD = "BOARD"
    DOCUMENTS = "DOCUMENTS"
    FOLDERS = "FOLDERS"


# Entity type of the cross-entity search endpoint; folders are not searchable there
SEARCHABLE_ENTITIES = {
    GlobalSearchType.BOARD: "BOARD",
    GlobalSearchType.DOCUMENTS: "DOCUMENT",
}


class SearchInput(ToolInput):
    search_term: Optional[str] = Field(default=None, description="The search term to use for the search.")
    search_type: GlobalSearchType = Field(description="The type of search to perform.")
    limit: int = Field(
        default=SEARCH_LIMIT,
        le=SEARCH_LIMIT,
        description=f"The number of items to get. The max and default value is {SEARCH_LIMIT}.",
    )
    page: int = Field(default=1, description="The page number to get. The default value is 1.")
    workspace_ids: Optional[List[MondayId]] = Field(
        default=None,
        description=(
            "The ids of the workspaces to search in. [IMPORTANT] Only pass this param if user explicitly "
            "asked to search within specific workspaces."
        ),
    )


def _result(prefix: str, entry: Dict[str, Any], with_url: bool = False) -> Dict[str, Any]:
    result = {"id": f"{prefix}{entry.get('id')}", "title": entry.get("name")}
    if with_url and entry.get("url"):
        result["url"] = entry["url"]
    return result


class MondaySearch(MondayActions):
    """Platform search over boards, docs and folders"""

    @tool(
        name="search",
        type=ToolType.READ,
        title="Search",
        description="""Search within monday.com platform. Can search for boards, documents, forms, folders.
For users and teams, use list_users_and_teams tool.
For workspaces, use list_workspaces tool.
For items and groups, use get_board_items_page tool.
For groups, use get_board_info tool.
IMPORTANT: ids returned by this tool are prefixed with the type of the object (e.g doc-123, board-456, folder-789). When passing the ids to other tools, you need to remove the prefix and just pass the number.
    """,
        input_model=SearchInput,
        read_only=True,
        idempotent=True,
    )
    async def search(self, tool_input: SearchInput) -> str:
        if tool_input.search_type != GlobalSearchType.FOLDERS and tool_input.search_term:
            try:
                items = await self._search_with_dev_endpoint(tool_input)
            except Exception as e:
                raise_if_search_timeout(e)
                logger.info(f"Cross-entity search unavailable, listing and filtering instead: {e}")
            else:
                return json.dumps({"results": items}, indent=2, ensure_ascii=False)

        handlers: Dict[GlobalSearchType, Callable[[SearchInput], Any]] = {
            GlobalSearchType.BOARD: self._search_boards,
            GlobalSearchType.DOCUMENTS: self._search_docs,
            GlobalSearchType.FOLDERS: self._search_folders,
        }
        items, was_filtered = await handlers[tool_input.search_type](tool_input)

        response: Dict[str, Any] = {}
        if not was_filtered and tool_input.search_term:
            response["disclaimer"] = NOT_FILTERED_DISCLAIMER
        response["results"] = items
        return json.dumps(response, indent=2, ensure_ascii=False)

    async def _search_with_dev_endpoint(self, tool_input: SearchInput) -> List[Dict[str, Any]]:
        if tool_input.page > 1:
            raise MondayToolkitError("Pagination is not supported for search, increase the limit parameter instead")

        res = await self.client.query(
            "search_dev",
            {
                "query": tool_input.search_term,
                "size": tool_input.limit,
                "entityTypes": [SEARCHABLE_ENTITIES[tool_input.search_type]],
                "workspaceIds": tool_input.workspace_ids,
            },
            version_override=DEV_API_VERSION,
            timeout=SEARCH_TIMEOUT_SECONDS,
        )

        items = []
        for result in res.get("search") or []:
            if not result:
                continue
            data = result.get("data") or {}
            if result.get("__typename") == BOARD_RESULT_TYPENAME:
                items.append(_result(BOARD_PREFIX, data, with_url=True))
            elif result.get("__typename") == DOC_RESULT_TYPENAME:
                items.append(_result(DOCUMENT_PREFIX, data))
        return items

    def _paging_variables(self, tool_input: SearchInput) -> Dict[str, Any]:
        # With a search term everything is loaded and filtered in memory
        return {
            "page": 1 if tool_input.search_term else tool_input.page,
            "limit": LOAD_INTO_MEMORY_LIMIT if tool_input.search_term else tool_input.limit,
            "workspace_ids": tool_input.workspace_ids,
        }

    @staticmethod
    def _filter_and_paginate(
        tool_input: SearchInput,
        entries: List[Dict[str, Any]],
    ) -> Tuple[List[Dict[str, Any]], bool]:
        """Filter ``entries`` by name and page them; small result sets are returned unfiltered."""
        entries = [entry for entry in entries if entry]
        if len(entries) <= SEARCH_LIMIT:
            return entries, False

        search_term = normalize_string(tool_input.search_term or "")
        start = (tool_input.page - 1) * tool_input.limit
        matching = [entry for entry in entries if search_term in normalize_string(entry.get("name") or "")]
        return matching[start:start + tool_input.limit], True

    async def _search_boards(self, tool_input: SearchInput) -> Tuple[List[Dict[str, Any]], bool]:
        res = await self.client.query("get_boards", self._paging_variables(tool_input))
        boards, was_filtered = self._filter_and_paginate(tool_input, res.get("boards") or [])
        return [_result(BOARD_PREFIX, board, with_url=True) for board in boards], was_filtered

    async def _search_docs(self, tool_input: SearchInput) -> Tuple[List[Dict[str, Any]], bool]:
        res = await self.client.query("get_docs", self._paging_variables(tool_input))
        docs, was_filtered = self._filter_and_paginate(tool_input, res.get("docs") or [])
        return [_result(DOCUMENT_PREFIX, doc, with_url=True) for doc in docs], was_filtered

    async def _search_folders(self, tool_input: SearchInput) -> Tuple[List[Dict[str, Any]], bool]:
        res = await self.client.query("get_folders", self._paging_variables(tool_input))
        folders, was_filtered = self._filter_and_paginate(tool_input, res.get("folders") or [])
        return [_result(FOLDER_PREFIX, folder) for folder in folders], was_filtered
