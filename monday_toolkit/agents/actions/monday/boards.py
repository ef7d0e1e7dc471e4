import json
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.board_guidelines import (
    column_aggregation_guidelines,
    column_filtering_guidelines,
)
from monday_toolkit.agents.actions.monday.constants import (
    DEV_API_VERSION,
    SEARCH_TIMEOUT_SECONDS,
)
from monday_toolkit.agents.actions.monday.filters import (
    FILTER_RULES,
    ORDER_BY_LIST,
    FilteredItemsInput,
    FilterRule,
    ItemsQueryRuleOperator,
    OrderBy,
    to_order_by,
    to_query_rules,
)
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import MondayToolkitError
from monday_toolkit.utils.errors import raise_if_search_timeout, rethrow_with_context
from monday_toolkit.utils.stringified import fallback_to_stringified_version_if_null

logger = logging.getLogger(__name__)

ITEMS_PAGE_DEFAULT_LIMIT = 25
ITEMS_PAGE_MAX_LIMIT = 500
SUB_ITEMS_MAX_LIMIT = 100
FULL_BOARD_ITEMS_LIMIT = 500
ACTIVITY_LOGS_LIMIT = 1000
ACTIVITY_DEFAULT_RANGE = timedelta(days=30)

COLUMN_VALUE_NOT_SUPPORTED_MESSAGE = "Column value type is not supported"

GROUP_COLORS = (
    "#037f4c",
    "#00c875",
    "#9cd326",
    "#cab641",
    "#ffcb00",
    "#784bd1",
    "#9d50dd",
    "#007eb5",
    "#579bfc",
    "#66ccff",
    "#bb3354",
    "#df2f4a",
    "#ff007f",
    "#ff5ac4",
    "#ff642e",
    "#fdab3d",
    "#7f5347",
    "#c4c4c4",
    "#757575",
)

GroupColor = Literal[GROUP_COLORS]  # type: ignore[valid-type]


class BoardKind(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    SHARE = "share"


class PositionRelative(str, Enum):
    BEFORE_AT = "before_at"
    AFTER_AT = "after_at"


class CreateBoardInput(ToolInput):
    board_name: str = Field(description="The name of the board to create")
    board_kind: BoardKind = Field(default=BoardKind.PUBLIC, description="The kind of board to create")
    board_description: Optional[str] = Field(default=None, description="The description of the board to create")
    workspace_id: Optional[MondayId] = Field(
        default=None, description="The ID of the workspace to create the board in"
    )


class BoardIdInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board to get the schema of")


class GetBoardInfoInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board to get information for")


class GetBoardItemsPageInput(FilteredItemsInput):
    item_ids: Optional[List[MondayId]] = Field(
        default=None,
        description="The ids of the items to get. The count of items should be less than 100.",
    )
    search_term: Optional[str] = Field(
        default=None,
        description=(
            "The search term to use for the search.\n"
            "- Use this when: the user provides a vague, incomplete, or approximate search term (e.g., "
            "\"marketing campaign\", \"John's task\", \"budget-related\"), and there isn't a clear exact "
            "compare value for a specific field.\n"
            "- Do not use this when: the user specifies an exact value that maps directly to a column "
            "comparison (e.g., name contains \"marketing campaign\", status = \"Done\", priority = \"High\", "
            "owner = \"Daniel\"). In these cases, prefer structured compare filters."
        ),
    )
    limit: int = Field(
        default=ITEMS_PAGE_DEFAULT_LIMIT,
        ge=1,
        le=ITEMS_PAGE_MAX_LIMIT,
        description="The number of items to get",
    )
    cursor: Optional[str] = Field(
        default=None,
        description=(
            "The cursor to get the next page of items, use the nextCursor from the previous response. "
            "If the nextCursor was null, it means there are no more items to get"
        ),
    )
    include_columns: bool = Field(
        default=False,
        description=(
            "Whether to include column values in the response.\nPERFORMANCE OPTIMIZATION: Only set this to "
            "true when you actually need the column data. Excluding columns significantly reduces token "
            "usage and improves response latency. If you only need to count items, get item IDs/names, or "
            "check if items exist, keep this false."
        ),
    )
    include_sub_items: bool = Field(
        default=False,
        description=(
            "Whether to include sub items in the response. PERFORMANCE OPTIMIZATION: Only set this to true "
            "when you actually need the sub items data."
        ),
    )
    sub_item_limit: int = Field(
        default=ITEMS_PAGE_DEFAULT_LIMIT,
        ge=1,
        le=SUB_ITEMS_MAX_LIMIT,
        description="The number of sub items to get per item. This is only used when includeSubItems is true.",
    )
    filters_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The filters to apply on the items. Send this as a stringified '
            'JSON array of "filters" field. Read "filters" field description for details how to use it.'
        ),
    )
    column_ids: Optional[List[str]] = Field(
        default=None,
        description=(
            "The ids of the item columns and subitem columns to get, can be used to reduce the response "
            "size when user asks for specific columns. Works only when includeColumns is true. If not "
            "provided, all columns will be returned"
        ),
    )
    order_by_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The order by to apply on the items. Send this as a stringified '
            'JSON array of "orderBy" field. Read "orderBy" field description for details how to use it.'
        ),
    )
    order_by: Optional[List[OrderBy]] = Field(
        default=None,
        description="The columns to order by, will control the order of the items in the response",
    )


class FullBoardDataInput(FilteredItemsInput):
    board_id: MondayId = Field(description="The ID of the board to fetch complete data for")


class GetBoardActivityInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board to get activity for")
    from_date: Optional[str] = Field(
        default=None,
        description="Start date for activity range (ISO8601DateTime format). Defaults to 30 days ago",
    )
    to_date: Optional[str] = Field(
        default=None,
        description="End date for activity range (ISO8601DateTime format). Defaults to now",
    )


class CreateGroupInput(ToolInput):
    board_id: MondayId = Field(description="The ID of the board to create the group in")
    group_name: str = Field(max_length=255, description="The name of the new group (maximum 255 characters)")
    group_color: Optional[GroupColor] = Field(
        default=None,
        description=(
            "The color for the group. Must be one of the predefined Monday.com group colors: "
            + ", ".join(GROUP_COLORS)
        ),
    )
    relative_to: Optional[str] = Field(
        default=None, description="The ID of the group to position this new group relative to"
    )
    position_relative_method: Optional[PositionRelative] = Field(
        default=None,
        description="Whether to position the new group before or after the relativeTo group",
    )


def _iso_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _column_settings(column: Dict[str, Any]) -> Dict[str, Any]:
    settings = column.get("settings") or {}
    if isinstance(settings, str):
        try:
            settings = json.loads(settings)
        except ValueError:
            return {}
    return settings if isinstance(settings, dict) else {}


def column_value_data(column_value: Dict[str, Any]) -> Any:
    """Readable value of an item's column value."""
    column_type = column_value.get("type")
    if column_type == "board_relation":
        return column_value.get("linked_items")
    if column_type == "formula":
        return column_value.get("display_value")
    if column_type == "mirror":
        return COLUMN_VALUE_NOT_SUPPORTED_MESSAGE

    if column_value.get("text"):
        return column_value["text"]

    raw_value = column_value.get("value")
    try:
        return json.loads(raw_value)
    except (TypeError, ValueError):
        return raw_value or None


class MondayBoards(MondayActions):
    """Board tools: structure, items, activity and groups"""

    @tool(
        name="create_board",
        type=ToolType.WRITE,
        title="Create Board",
        description="Create a monday.com board",
        input_model=CreateBoardInput,
    )
    async def create_board(self, tool_input: CreateBoardInput) -> str:
        res = await self.client.mutation(
            "create_board",
            {
                "boardName": tool_input.board_name,
                "boardKind": tool_input.board_kind.value,
                "boardDescription": tool_input.board_description,
                "workspaceId": tool_input.workspace_id,
            },
        )
        return f"Board {(res.get('create_board') or {}).get('id')} successfully created"

    @tool(
        name="get_board_schema",
        type=ToolType.READ,
        title="Get Board Schema",
        description="Get board schema (columns and groups) by board id",
        input_model=BoardIdInput,
        read_only=True,
        idempotent=True,
    )
    async def get_board_schema(self, tool_input: BoardIdInput) -> str:
        res = await self.client.query("get_board_schema", {"boardId": tool_input.board_id})
        boards = res.get("boards") or [{}]
        board = boards[0] or {}
        columns = "\n".join(
            f"Id - {column.get('id')}\n Title - {column.get('title')}\n Type - {column.get('type')}"
            for column in board.get("columns") or []
            if column
        )
        groups = "\n".join(
            f"Id - {group.get('id')}\n Title - {group.get('title')}"
            for group in board.get("groups") or []
            if group
        )
        return (
            f"The current schema of the board {tool_input.board_id} is: \n"
            f"    \n\nColumns:\n {columns}\n"
            f"    \n\nGroups:\n {groups}"
        )

    @tool(
        name="get_board_info",
        type=ToolType.READ,
        title="Get Board Info",
        description="Get comprehensive board information including metadata, structure, owners, and configuration",
        input_model=GetBoardInfoInput,
        read_only=True,
        idempotent=True,
    )
    async def get_board_info(self, tool_input: GetBoardInfoInput) -> str:
        res = await self.client.query("get_board_info", {"boardId": tool_input.board_id})
        boards = res.get("boards") or []
        board = boards[0] if boards else None
        if not board:
            return f"Board with id {tool_input.board_id} not found or you don't have access to it."

        board_info = dict(board)
        sub_item_columns = await self._get_sub_items_columns(board)
        if sub_item_columns is not None:
            board_info["subItemColumns"] = sub_item_columns

        result = {
            "board": board_info,
            "filteringGuidelines": column_filtering_guidelines(board.get("columns") or []),
            "aggregationGuidelines": column_aggregation_guidelines(),
        }
        return json.dumps(result, indent=2, ensure_ascii=False)

    async def _get_sub_items_columns(self, board: Dict[str, Any]) -> Optional[List[Any]]:
        subtasks_column = next(
            (column for column in board.get("columns") or [] if column and column.get("type") == "subtasks"),
            None,
        )
        if not subtasks_column:
            return None

        board_ids = _column_settings(subtasks_column).get("boardIds") or []
        if not board_ids:
            logger.warning(f"Subtasks column {subtasks_column.get('id')} has no sub items board")
            return None

        res = await self.client.query("get_board_info_just_columns", {"boardId": str(board_ids[0])})
        boards = res.get("boards") or []
        if not boards or not boards[0]:
            return None
        return boards[0].get("columns")

    @tool(
        name="get_board_items_page",
        type=ToolType.READ,
        title="Get Board Items Page",
        description=(
            "Get all items from a monday.com board with pagination support and optional column values. "
            "Returns structured JSON with item details, creation/update timestamps, and pagination info. "
            "Use the 'nextCursor' parameter from the response to get the next page of results when "
            "'has_more' is true.[REQUIRED PRECONDITION]: Before using this tool, if new columns were added "
            "to the board or if you are not familiar with the board's structure (column IDs, column types, "
            "status labels, etc.), first use get_board_info to understand the board metadata. This is "
            "essential for constructing proper filters and knowing which columns are available."
        ),
        input_model=GetBoardItemsPageInput,
        read_only=True,
        idempotent=True,
    )
    async def get_board_items_page(self, tool_input: GetBoardItemsPageInput) -> str:
        # A cursor already encodes the query, filters cannot be sent along with it
        can_include_filters = not tool_input.cursor

        if can_include_filters and tool_input.search_term:
            try:
                item_ids = await self._smart_search_item_ids(tool_input)
            except Exception as e:
                raise_if_search_timeout(e)
                logger.info(f"Smart search unavailable, filtering by item name instead: {e}")
                fallback_to_stringified_version_if_null(tool_input, "filters", FILTER_RULES)
                tool_input.filters = self._filters_with_name_search(tool_input.search_term, tool_input.filters)
            else:
                if not item_ids:
                    return "No items found matching the specified searchTerm"
                tool_input.item_ids = item_ids

        variables: Dict[str, Any] = {
            "boardId": tool_input.board_id,
            "limit": tool_input.limit,
            "cursor": tool_input.cursor or None,
            "includeColumns": tool_input.include_columns,
            "columnIds": tool_input.column_ids,
            "includeSubItems": tool_input.include_sub_items,
        }

        fallback_to_stringified_version_if_null(tool_input, "filters", FILTER_RULES)
        fallback_to_stringified_version_if_null(tool_input, "order_by", ORDER_BY_LIST)

        if can_include_filters and (tool_input.item_ids or tool_input.filters or tool_input.order_by):
            query_params: Dict[str, Any] = {"operator": tool_input.filters_operator.value}
            if tool_input.item_ids:
                query_params["ids"] = tool_input.item_ids
            if tool_input.filters:
                query_params["rules"] = to_query_rules(tool_input.filters)
            if tool_input.order_by:
                query_params["order_by"] = to_order_by(tool_input.order_by)
            variables["queryParams"] = query_params

        res = await self.client.query("get_board_items_page", variables)
        return json.dumps(self._items_page_result(res, tool_input), indent=2, ensure_ascii=False)

    async def _smart_search_item_ids(self, tool_input: GetBoardItemsPageInput) -> List[str]:
        res = await self.client.query(
            "search_items_dev",
            {"board_ids": [tool_input.board_id], "searchTerm": tool_input.search_term},
            version_override=DEV_API_VERSION,
            timeout=SEARCH_TIMEOUT_SECONDS,
        )
        results = (res.get("search_items") or {}).get("results") or []
        found_ids = [str(result["data"]["id"]) for result in results if result and result.get("data")]

        if not found_ids:
            raise MondayToolkitError(
                "No items found for search term or new search is not enabled for this account"
            )

        if not tool_input.item_ids:
            return found_ids
        allowed_ids = set(tool_input.item_ids)
        return [item_id for item_id in found_ids if item_id in allowed_ids]

    @staticmethod
    def _filters_with_name_search(search_term: str, filters: Optional[List[FilterRule]]) -> List[FilterRule]:
        rules = [rule for rule in filters or [] if rule.column_id != "name"]
        rules.append(
            FilterRule(
                column_id="name",
                operator=ItemsQueryRuleOperator.CONTAINS_TEXT,
                compare_value=search_term,
            )
        )
        return rules

    def _items_page_result(self, res: Dict[str, Any], tool_input: GetBoardItemsPageInput) -> Dict[str, Any]:
        boards = res.get("boards") or []
        board = (boards[0] if boards else None) or {}
        items_page = board.get("items_page") or {}
        items = items_page.get("items") or []
        cursor = items_page.get("cursor")

        return {
            "board": {"id": board.get("id"), "name": board.get("name")},
            "items": [self._map_item(item, tool_input) for item in items],
            "pagination": {
                "has_more": bool(cursor),
                "nextCursor": cursor or None,
                "count": len(items),
            },
        }

    def _map_item(self, item: Dict[str, Any], tool_input: GetBoardItemsPageInput) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": item.get("id"),
            "name": item.get("name"),
            "created_at": item.get("created_at"),
            "updated_at": item.get("updated_at"),
        }

        if tool_input.include_columns and item.get("column_values"):
            result["column_values"] = {
                column_value["id"]: column_value_data(column_value)
                for column_value in item["column_values"]
            }

        if tool_input.include_sub_items and item.get("subitems"):
            result["subitems"] = [
                self._map_item(sub_item, tool_input)
                for sub_item in item["subitems"][: tool_input.sub_item_limit]
                if sub_item
            ]

        return result

    @tool(
        name="get_full_board_data",
        type=ToolType.READ,
        title="Get Full Board Data",
        description=(
            "INTERNAL USE ONLY - DO NOT CALL THIS TOOL DIRECTLY. This tool is exclusively triggered by UI "
            "components and should never be invoked directly by the agent."
        ),
        input_model=FullBoardDataInput,
        read_only=True,
        idempotent=True,
    )
    async def get_full_board_data(self, tool_input: FullBoardDataInput) -> str:
        try:
            variables: Dict[str, Any] = {
                "boardId": tool_input.board_id,
                "itemsLimit": FULL_BOARD_ITEMS_LIMIT,
            }
            if tool_input.filters:
                variables["queryParams"] = {
                    "operator": tool_input.filters_operator.value,
                    "rules": to_query_rules(tool_input.filters),
                }

            board_data = await self.client.query("get_board_data", variables)
            boards = board_data.get("boards") or []
            if not boards or not boards[0]:
                raise MondayToolkitError(f"Board with ID {tool_input.board_id} not found")
            board = boards[0]
            items = (board.get("items_page") or {}).get("items") or []

            users = await self._get_users(self._referenced_user_ids(items))
            users_by_id = {user["id"]: user for user in users}

            result = {
                "board": {
                    "id": board.get("id"),
                    "name": board.get("name"),
                    "columns": board.get("columns"),
                    "items": [self._full_item(item, users_by_id) for item in items],
                },
                "users": users,
                "stats": {
                    "total_items": len(items),
                    "total_updates": sum(len(item.get("updates") or []) for item in items),
                    "total_unique_creators": len(users),
                },
            }
            return json.dumps(result, indent=2, ensure_ascii=False)
        except Exception as e:
            rethrow_with_context(e, "get full board data")

    @staticmethod
    def _referenced_user_ids(items: List[Dict[str, Any]]) -> List[str]:
        """Creators of updates and replies plus people column assignees, in first seen order."""
        user_ids: Dict[str, None] = {}
        for item in items:
            for update in item.get("updates") or []:
                if update.get("creator_id"):
                    user_ids[update["creator_id"]] = None
                for reply in update.get("replies") or []:
                    if reply.get("creator_id"):
                        user_ids[reply["creator_id"]] = None
            for column_value in item.get("column_values") or []:
                for entity in column_value.get("persons_and_teams") or []:
                    if entity.get("kind") == "person" and entity.get("id"):
                        user_ids[str(entity["id"])] = None
        return list(user_ids)

    async def _get_users(self, user_ids: List[str]) -> List[Dict[str, Any]]:
        if not user_ids:
            return []
        res = await self.client.query("get_users_by_ids", {"userIds": user_ids})
        return [user for user in res.get("users") or [] if user]

    @staticmethod
    def _full_item(item: Dict[str, Any], users_by_id: Dict[str, Any]) -> Dict[str, Any]:
        def entry(post: Dict[str, Any]) -> Dict[str, Any]:
            creator_id = post.get("creator_id")
            return {
                "id": post.get("id"),
                "creator_id": creator_id or "",
                "creator": users_by_id.get(creator_id) if creator_id else None,
                "text_body": post.get("text_body"),
                "created_at": post.get("created_at"),
            }

        updates = []
        for update in item.get("updates") or []:
            update_entry = entry(update)
            update_entry["replies"] = [entry(reply) for reply in update.get("replies") or []]
            updates.append(update_entry)

        return {
            "id": item.get("id"),
            "name": item.get("name"),
            "column_values": item.get("column_values"),
            "updates": updates,
        }

    @tool(
        name="get_board_activity",
        type=ToolType.READ,
        title="Get Board Activity",
        description="Get board activity logs for a specified time range (defaults to last 30 days)",
        input_model=GetBoardActivityInput,
        read_only=True,
        idempotent=True,
    )
    async def get_board_activity(self, tool_input: GetBoardActivityInput) -> str:
        now = datetime.now(timezone.utc)
        from_date = tool_input.from_date or _iso_timestamp(now - ACTIVITY_DEFAULT_RANGE)
        to_date = tool_input.to_date or _iso_timestamp(now)

        res = await self.client.query(
            "get_board_all_activity",
            {
                "boardId": tool_input.board_id,
                "fromDate": from_date,
                "toDate": to_date,
                "limit": ACTIVITY_LOGS_LIMIT,
                "page": 1,
            },
        )
        boards = res.get("boards") or []
        activity_logs = (boards[0] or {}).get("activity_logs") if boards else None

        if not activity_logs:
            return (
                f"No activity found for board {tool_input.board_id} in the specified time range "
                f"({from_date} to {to_date})."
            )

        lines = []
        for log in activity_logs:
            if not log:
                continue
            data = f" - Data: {log['data']}" if log.get("data") else ""
            lines.append(
                f"• {log.get('created_at')}: {log.get('event')} on {log.get('entity')} "
                f"by user {log.get('user_id')}{data}"
            )

        return (
            f"Activity logs for board {tool_input.board_id} from {from_date} to {to_date} "
            f"({len(activity_logs)} entries):\n\n" + "\n".join(lines)
        )

    @tool(
        name="create_group",
        type=ToolType.WRITE,
        title="Create Group",
        description=(
            "Create a new group in a monday.com board. Groups are sections that organize related items. Use "
            "when users want to add structure, categorize items, or create workflow phases. Groups can be "
            "positioned relative to existing groups and assigned predefined colors. Items will always be "
            "created in the top group and so the top group should be the most relevant one for new item "
            "creation"
        ),
        input_model=CreateGroupInput,
    )
    async def create_group(self, tool_input: CreateGroupInput) -> str:
        method = tool_input.position_relative_method
        res = await self.client.mutation(
            "create_group",
            {
                "boardId": tool_input.board_id,
                "groupName": tool_input.group_name,
                "groupColor": tool_input.group_color,
                "relativeTo": tool_input.relative_to,
                "positionRelativeMethod": method.value if method else None,
            },
        )
        group = res.get("create_group") or {}
        return f'Group "{group.get("title")}" (ID: {group.get("id")}) successfully created'
