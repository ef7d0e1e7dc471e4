import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.constants import LOAD_INTO_MEMORY_LIMIT
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError
from monday_toolkit.utils.strings import normalize_string

DEFAULT_WORKSPACE_LIMIT = 100

NO_FILTERING_DISCLAIMER = (
    "IMPORTANT: Search term was not applied. Returning all workspaces. Please perform the filtering manually."
)
POSITION_PAIR_ERROR = "position_object_id and position_object_type must be provided together"


class WorkspaceKind(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    TEMPLATE = "template"


class ObjectType(str, Enum):
    BOARD = "Board"
    FOLDER = "Folder"
    OVERVIEW = "Overview"


class ListWorkspacesInput(ToolInput):
    search_term: Optional[str] = Field(
        default=None,
        description=(
            "The search term to filter the workspaces by. If not provided, all workspaces will be returned. "
            "[IMPORANT] Only alphanumeric characters are supported."
        ),
    )
    limit: int = Field(
        default=DEFAULT_WORKSPACE_LIMIT,
        ge=1,
        le=DEFAULT_WORKSPACE_LIMIT,
        description=(
            f"The number of workspaces to return. Default and maximum allowed is {DEFAULT_WORKSPACE_LIMIT}"
        ),
    )
    page: int = Field(default=1, ge=1, description="The page number to return. Default is 1.")


class WorkspaceInfoInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    workspace_id: MondayId = Field(description="The ID of the workspace to get information for")


class CreateWorkspaceInput(ToolInput):
    name: str = Field(description="The name of the new workspace to be created")
    workspace_kind: WorkspaceKind = Field(description="The kind of workspace to create")
    description: Optional[str] = Field(default=None, description="The description of the new workspace")
    account_product_id: Optional[MondayId] = Field(
        default=None, description="The account product ID associated with the workspace"
    )


class UpdateWorkspaceInput(ToolInput):
    id: MondayId = Field(description="The ID of the workspace to update")
    attribute_account_product_id: Optional[int] = Field(
        default=None, description="The target account product's ID to move the workspace to"
    )
    attribute_description: Optional[str] = Field(
        default=None, description="The description of the workspace to update"
    )
    attribute_kind: Optional[WorkspaceKind] = Field(
        default=None, description="The kind of the workspace to update (open / closed / template)"
    )
    attribute_name: Optional[str] = Field(default=None, description="The name of the workspace to update")


class CreateFolderInput(ToolInput):
    workspace_id: MondayId = Field(description="The ID of the workspace where the folder will be created")
    name: str = Field(description="The name of the folder to be created")
    color: Optional[str] = Field(default=None, description="The color of the folder")
    font_weight: Optional[str] = Field(default=None, description="The font weight of the folder")
    custom_icon: Optional[str] = Field(default=None, description="The custom icon of the folder")
    parent_folder_id: Optional[MondayId] = Field(default=None, description="The ID of the parent folder")


class PositionInput(ToolInput):
    """Relative placement arguments; their wire names are snake_case"""

    position_object_id: Optional[str] = Field(
        default=None,
        alias="position_object_id",
        description=(
            "The ID of the object to position the folder relative to. If this parameter is provided, "
            "position_object_type must be also provided."
        ),
    )
    position_object_type: Optional[ObjectType] = Field(
        default=None,
        alias="position_object_type",
        description=(
            "The type of object to position the folder relative to. If this parameter is provided, "
            "position_object_id must be also provided."
        ),
    )
    position_is_after: Optional[bool] = Field(
        default=None,
        alias="position_is_after",
        description="Whether to position the folder after the object",
    )

    def position(self) -> Optional[Dict[str, Any]]:
        """``DynamicPosition`` input, or None when no position was requested.

        Raises:
            ToolInputError: only one of the object id and type is set
        """
        if bool(self.position_object_id) != bool(self.position_object_type):
            raise ToolInputError(POSITION_PAIR_ERROR)
        if not self.position_object_id:
            return None
        return _compact(
            {
                "position_is_after": self.position_is_after,
                "position_object_id": self.position_object_id,
                "position_object_type": self.position_object_type.value if self.position_object_type else None,
            }
        )


class UpdateFolderInput(PositionInput):
    folder_id: MondayId = Field(description="The ID of the folder to update")
    name: Optional[str] = Field(default=None, description="The new name of the folder")
    color: Optional[str] = Field(default=None, description="The new color of the folder")
    font_weight: Optional[str] = Field(default=None, description="The new font weight of the folder")
    custom_icon: Optional[str] = Field(default=None, description="The new custom icon of the folder")
    parent_folder_id: Optional[MondayId] = Field(default=None, description="The ID of the new parent folder")
    workspace_id: Optional[MondayId] = Field(
        default=None, description="The ID of the workspace containing the folder"
    )
    account_product_id: Optional[MondayId] = Field(
        default=None, description="The account product ID associated with the folder"
    )


class MoveObjectInput(PositionInput):
    object_type: ObjectType = Field(description="The type of object to move")
    id: MondayId = Field(description="The ID of the object to move")
    parent_folder_id: Optional[MondayId] = Field(
        default=None,
        description="The ID of the new parent folder. Required if moving to a different folder.",
    )
    workspace_id: Optional[MondayId] = Field(
        default=None,
        description="The ID of the workspace containing the object. Required if moving to a different workspace.",
    )
    account_product_id: Optional[MondayId] = Field(
        default=None,
        description=(
            "The ID of the account product containing the object. Required if moving to a different "
            "account product."
        ),
    )


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset fields of a nested GraphQL input object."""
    return {key: value for key, value in values.items() if value is not None}


def _named_entries(entries: Optional[List[Any]]) -> List[Dict[str, Any]]:
    return [entry for entry in entries or [] if entry and entry.get("id") is not None and entry.get("name") is not None]


def organize_workspace_info(res: Dict[str, Any]) -> Dict[str, Any]:
    """Group the boards and docs of a workspace under their folders."""
    workspaces = res.get("workspaces") or []
    workspace = workspaces[0] if workspaces else None
    if not workspace:
        raise ValueError("No workspace found")

    folders: Dict[str, Dict[str, Any]] = {
        folder["id"]: {"id": folder["id"], "name": folder["name"], "boards": [], "docs": []}
        for folder in _named_entries(res.get("folders"))
    }

    root_boards = []
    for board in _named_entries(res.get("boards")):
        entry = {"id": board["id"], "name": board["name"]}
        folder_id = board.get("board_folder_id")
        if folder_id and folder_id in folders:
            folders[folder_id]["boards"].append(entry)
        else:
            root_boards.append(entry)

    root_docs = []
    for doc in _named_entries(res.get("docs")):
        entry = {"id": doc["id"], "name": doc["name"]}
        folder_id = doc.get("doc_folder_id")
        if folder_id and folder_id in folders:
            folders[folder_id]["docs"].append(entry)
        else:
            root_docs.append(entry)

    owners = [
        {"id": owner["id"], "name": owner["name"], "email": owner["email"]}
        for owner in workspace.get("owners_subscribers") or []
        if owner and owner.get("id") is not None and owner.get("name") is not None and owner.get("email") is not None
    ]

    return {
        "workspace": {
            "id": workspace.get("id"),
            "name": workspace.get("name"),
            "description": workspace.get("description") or "",
            "kind": workspace.get("kind") or "",
            "created_at": workspace.get("created_at") or "",
            "state": workspace.get("state") or "",
            "is_default_workspace": workspace.get("is_default_workspace") or False,
            "owners_subscribers": owners,
        },
        "folders": list(folders.values()),
        "root_items": {"boards": root_boards, "docs": root_docs},
    }


def _names_with_ids(entries: List[Dict[str, Any]]) -> str:
    return ", ".join(f"{entry['name']} ({entry['id']})" for entry in entries) or "None"


class MondayWorkspaces(MondayActions):
    """Workspace and folder tools"""

    @tool(
        name="list_workspaces",
        type=ToolType.READ,
        title="List Workspaces",
        description=(
            "List all workspaces available to the user. Returns up to 500 workspaces with their ID, name, "
            "and description."
        ),
        input_model=ListWorkspacesInput,
        read_only=True,
        idempotent=True,
    )
    async def list_workspaces(self, tool_input: ListWorkspacesInput) -> str:
        # The API cannot search workspaces: with a search term everything is
        # loaded in one request and filtered and paged in memory
        search_term = None
        if tool_input.search_term:
            search_term = normalize_string(tool_input.search_term)
            if not search_term:
                raise ToolInputError(
                    "Search term did not include any alphanumeric characters. Please provide a valid search term."
                )

        res = await self.client.query(
            "list_workspaces",
            {
                "limit": LOAD_INTO_MEMORY_LIMIT if search_term else tool_input.limit,
                "page": 1 if search_term else tool_input.page,
            },
        )
        workspaces = [workspace for workspace in res.get("workspaces") or [] if workspace]
        if not workspaces:
            return "No workspaces found."

        include_disclaimer = bool(search_term) and len(workspaces) <= DEFAULT_WORKSPACE_LIMIT
        filtered = self._filter_workspaces(search_term, workspaces, tool_input)
        if not filtered:
            return "No workspaces found matching the search term. Try using the tool without a search term"

        has_more_pages = len(filtered) == tool_input.limit
        workspaces_list = "\n".join(
            f"• **{workspace.get('name')}** (ID: {workspace.get('id')})"
            + (f" - {workspace['description']}" if workspace.get("description") else "")
            for workspace in filtered
        )
        disclaimer = NO_FILTERING_DISCLAIMER if include_disclaimer else ""
        pagination = (
            f"PAGINATION INFO: More results available - call the tool again with page: {tool_input.page + 1}"
            if has_more_pages
            else ""
        )
        return f"\n{disclaimer}\n{workspaces_list}\n{pagination}\n      "

    @staticmethod
    def _filter_workspaces(
        search_term: Optional[str],
        workspaces: List[Dict[str, Any]],
        tool_input: ListWorkspacesInput,
    ) -> List[Dict[str, Any]]:
        # A single page of results is left to the agent to filter
        if not search_term or len(workspaces) <= DEFAULT_WORKSPACE_LIMIT:
            return workspaces

        start = (tool_input.page - 1) * tool_input.limit
        matching = [w for w in workspaces if search_term in normalize_string(w.get("name") or "")]
        return matching[start:start + tool_input.limit]

    @tool(
        name="workspace_info",
        type=ToolType.READ,
        title="Get Workspace Information",
        description=(
            "This tool returns the boards, docs and folders in a workspace and which folder they are in. It "
            "returns up to 100 of each object type, if you receive 100 assume there are additional objects "
            "of that type in the workspace."
        ),
        input_model=WorkspaceInfoInput,
        read_only=True,
        idempotent=True,
    )
    async def workspace_info(self, tool_input: WorkspaceInfoInput) -> str:
        res = await self.client.query("get_workspace_info", {"workspace_id": tool_input.workspace_id})
        if not res.get("workspaces"):
            return f"No workspace found with ID {tool_input.workspace_id}"

        info = organize_workspace_info(res)
        workspace = info["workspace"]
        folders = info["folders"]
        root_items = info["root_items"]

        folder_sections = "\n".join(
            f"\n📁 {folder['name']} (ID: {folder['id']})\n"
            f"  - Boards ({len(folder['boards'])}): {_names_with_ids(folder['boards'])}\n"
            f"  - Docs ({len(folder['docs'])}): {_names_with_ids(folder['docs'])}"
            for folder in folders
        )
        total_boards = sum(len(folder["boards"]) for folder in folders) + len(root_items["boards"])
        total_docs = sum(len(folder["docs"]) for folder in folders) + len(root_items["docs"])

        return (
            "Workspace Information:\n\n"
            f"**Workspace:** {workspace['name']} (ID: {workspace['id']})\n"
            f"- Description: {workspace['description'] or 'No description'}\n"
            f"- Kind: {workspace['kind']}\n"
            f"- State: {workspace['state']}\n"
            f"- Default Workspace: {'Yes' if workspace['is_default_workspace'] else 'No'}\n"
            f"- Created: {workspace['created_at']}\n"
            f"- Owners/Subscribers: {len(workspace['owners_subscribers'])} users\n\n"
            f"**Folders ({len(folders)}):**\n"
            f"{folder_sections}\n\n"
            "**Root Level Items:**\n"
            f"- Boards ({len(root_items['boards'])}): {_names_with_ids(root_items['boards'])}\n"
            f"- Docs ({len(root_items['docs'])}): {_names_with_ids(root_items['docs'])}\n\n"
            "**Summary:**\n"
            f"- Total Folders: {len(folders)}\n"
            f"- Total Boards: {total_boards}\n"
            f"- Total Docs: {total_docs}\n\n"
            f"{json.dumps(info, indent=2, ensure_ascii=False)}"
        )

    @tool(
        name="create_workspace",
        type=ToolType.WRITE,
        title="Create Workspace",
        description="Create a new workspace in monday.com",
        input_model=CreateWorkspaceInput,
    )
    async def create_workspace(self, tool_input: CreateWorkspaceInput) -> str:
        res = await self.client.mutation(
            "create_workspace",
            {
                "name": tool_input.name,
                "workspaceKind": tool_input.workspace_kind.value,
                "description": tool_input.description,
                "accountProductId": tool_input.account_product_id,
            },
        )
        return f"Workspace {(res.get('create_workspace') or {}).get('id')} successfully created"

    @tool(
        name="update_workspace",
        type=ToolType.WRITE,
        title="Update Workspace",
        description="Update an existing workspace in monday.com",
        input_model=UpdateWorkspaceInput,
        idempotent=True,
    )
    async def update_workspace(self, tool_input: UpdateWorkspaceInput) -> str:
        kind = tool_input.attribute_kind
        attributes = _compact(
            {
                "account_product_id": tool_input.attribute_account_product_id,
                "description": tool_input.attribute_description,
                "kind": kind.value if kind else None,
                "name": tool_input.attribute_name,
            }
        )
        res = await self.client.mutation("update_workspace", {"id": tool_input.id, "attributes": attributes})
        return f"Workspace {(res.get('update_workspace') or {}).get('id')} successfully updated"

    @tool(
        name="create_folder",
        type=ToolType.WRITE,
        title="Create Folder",
        description="Create a new folder in a monday.com workspace",
        input_model=CreateFolderInput,
    )
    async def create_folder(self, tool_input: CreateFolderInput) -> str:
        res = await self.client.mutation(
            "create_folder",
            {
                "workspaceId": tool_input.workspace_id,
                "name": tool_input.name,
                "color": tool_input.color,
                "fontWeight": tool_input.font_weight,
                "customIcon": tool_input.custom_icon,
                "parentFolderId": tool_input.parent_folder_id,
            },
        )
        return f"Folder {(res.get('create_folder') or {}).get('id')} successfully created"

    @tool(
        name="update_folder",
        type=ToolType.WRITE,
        title="Update Folder",
        description="Update an existing folder in monday.com",
        input_model=UpdateFolderInput,
        idempotent=True,
    )
    async def update_folder(self, tool_input: UpdateFolderInput) -> str:
        position = tool_input.position()
        res = await self.client.mutation(
            "update_folder",
            {
                "folderId": tool_input.folder_id,
                "name": tool_input.name,
                "color": tool_input.color,
                "fontWeight": tool_input.font_weight,
                "customIcon": tool_input.custom_icon,
                "parentFolderId": tool_input.parent_folder_id,
                "workspaceId": tool_input.workspace_id,
                "accountProductId": tool_input.account_product_id,
                "position": position,
            },
        )
        return f"Folder {(res.get('update_folder') or {}).get('id')} successfully updated"

    @tool(
        name="move_object",
        type=ToolType.WRITE,
        title="Move Object",
        description=(
            "Move a folder, board, or overview in monday.com. Use `position` for relative placement based on "
            "another object, `parentFolderId` for folder changes, `workspaceId` for workspace moves, and "
            "`accountProductId` for account product changes."
        ),
        input_model=MoveObjectInput,
        idempotent=True,
    )
    async def move_object(self, tool_input: MoveObjectInput) -> str:
        position = tool_input.position()

        if tool_input.object_type == ObjectType.FOLDER:
            res = await self.client.mutation(
                "update_folder",
                {
                    "folderId": tool_input.id,
                    "position": position,
                    "parentFolderId": tool_input.parent_folder_id,
                    "workspaceId": tool_input.workspace_id,
                    "accountProductId": tool_input.account_product_id,
                },
            )
            return f"Object {(res.get('update_folder') or {}).get('id')} successfully moved"

        attributes = _compact(
            {
                "position": position,
                "folder_id": tool_input.parent_folder_id,
                "workspace_id": tool_input.workspace_id,
                "account_product_id": tool_input.account_product_id,
            }
        )

        if tool_input.object_type == ObjectType.BOARD:
            res = await self.client.mutation(
                "update_board_hierarchy",
                {"boardId": tool_input.id, "attributes": attributes},
            )
            result = res.get("update_board_hierarchy") or {}
            if result.get("success"):
                return f"Board {(result.get('board') or {}).get('id')} position updated successfully"
            return f"Board position updated failed: {result.get('message')}"

        res = await self.client.mutation(
            "update_overview_hierarchy",
            {"overviewId": tool_input.id, "attributes": attributes},
        )
        result = res.get("update_overview_hierarchy") or {}
        if result.get("success"):
            return f"Overview {(result.get('overview') or {}).get('id')} position updated successfully"
        return f"Overview position updated failed: {result.get('message')}"
