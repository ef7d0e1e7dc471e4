import json
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import MondayToolkitError, ToolInputError
from monday_toolkit.utils.errors import rethrow_with_context

logger = logging.getLogger(__name__)

BOARD_INFO_PRECONDITION = (
    "[REQUIRED PRECONDITION]: Before using this tool, if new columns were added to the board or if you "
    "are not familiar with the board's structure (column IDs, column types, status labels, etc.), first "
    "use get_board_info to understand the board metadata. This is essential for constructing proper "
    "column values and knowing which columns are available."
)

COLUMN_VALUES_DESCRIPTION = (
    'A string containing the new column values for the item following this structure: '
    '{\\"column_id\\": \\"value\\",... you can change multiple columns at once, note that for status '
    "column you must use nested value with 'label' as a key and for date column use 'date' as key} - "
    'example: "{\\"text_column_id\\":\\"New text\\", \\"status_column_id\\":{\\"label\\":\\"Done\\"}, '
    '\\"date_column_id\\":{\\"date\\":\\"2023-05-25\\"},\\"dropdown_id\\":\\"value\\", '
    '\\"phone_id\\":\\"123-456-7890\\", \\"email_id\\":\\"test@example.com\\"}"'
)


class MentionType(str, Enum):
    USER = "User"
    TEAM = "Team"
    BOARD = "Board"
    PROJECT = "Project"


class Mention(BaseModel):
    id: MondayId = Field(description="The ID of the entity to mention")
    type: MentionType = Field(description="The type of mention: User, Team, Board, or Project")


MENTIONS_LIST = TypeAdapter(List[Mention])


class DeleteItemInput(ToolInput):
    item_id: MondayId = Field(description="The id of the item to delete")


class CreateItemInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board to which the new item will be added")
    name: str = Field(description="The name of the new item to be created, must be relevant to the user's request")
    group_id: Optional[str] = Field(
        default=None,
        description="The id of the group id to which the new item will be added, if its not clearly specified, leave empty",
    )
    column_values: str = Field(description=COLUMN_VALUES_DESCRIPTION)
    parent_item_id: Optional[MondayId] = Field(
        default=None,
        description="The id of the parent item under which the new subitem will be created",
    )
    duplicate_from_item_id: Optional[MondayId] = Field(
        default=None,
        description="The id of existing item to duplicate and update with new values (only provide when duplicating)",
    )


class ChangeItemColumnValuesInput(ToolInput):
    board_id: MondayId = Field(description="The ID of the board that contains the item to be updated")
    item_id: MondayId = Field(description="The ID of the item to be updated")
    column_values: str = Field(description=COLUMN_VALUES_DESCRIPTION)


class MoveItemToGroupInput(ToolInput):
    item_id: MondayId = Field(description="The id of the item which will be moved")
    group_id: str = Field(description="The id of the group to which the item will be moved")


class CreateUpdateInput(ToolInput):
    item_id: MondayId = Field(description="The id of the item to which the update will be added")
    body: str = Field(
        description="The update text to be created. Do not use @ to mention users, use the mentionsList field instead."
    )
    mentions_list: Optional[str] = Field(
        default=None,
        description=(
            'Optional JSON array of mentions in the format: [{"id": "123", "type": "User"}, '
            '{"id": "456", "type": "Team"}]. Valid types are: User, Team, Board, Project'
        ),
    )


def parse_mentions_list(mentions_list: Optional[str]) -> Optional[List[dict]]:
    """Parse the JSON mentions list of an update."""
    if not mentions_list:
        return None
    try:
        parsed = json.loads(mentions_list)
    except ValueError as e:
        raise ToolInputError(f"Invalid mentionsList JSON format: {e}") from e
    try:
        mentions = MENTIONS_LIST.validate_python(parsed)
    except ValidationError as e:
        raise ToolInputError(
            f"Invalid mentionsList JSON format: Invalid mentionsList format: {e}"
        ) from e
    return [mention.model_dump(mode="json") for mention in mentions]


class MondayItems(MondayActions):
    """Item tools: create, duplicate, update, move and delete items"""

    @tool(
        name="delete_item",
        type=ToolType.WRITE,
        title="Delete Item",
        description="Delete an item",
        input_model=DeleteItemInput,
        destructive=True,
    )
    async def delete_item(self, tool_input: DeleteItemInput) -> str:
        res = await self.client.mutation("delete_item", {"id": tool_input.item_id})
        return f"Item {(res.get('delete_item') or {}).get('id')} successfully deleted"

    @tool(
        name="create_item",
        type=ToolType.WRITE,
        title="Create Item",
        description=(
            "Create a new item with provided values, create a subitem under a parent item, or duplicate an "
            "existing item and update it with new values. Use parentItemId when creating a subitem under an "
            "existing item. Use duplicateFromItemId when copying an existing item with modifications."
            + BOARD_INFO_PRECONDITION
        ),
        input_model=CreateItemInput,
    )
    async def create_item(self, tool_input: CreateItemInput) -> str:
        if tool_input.duplicate_from_item_id and tool_input.parent_item_id:
            raise ToolInputError(
                "Cannot specify both parentItemId and duplicateFromItemId. "
                "Please provide only one of these parameters."
            )

        if tool_input.duplicate_from_item_id:
            return await self._duplicate_and_update_item(tool_input)
        if tool_input.parent_item_id:
            return await self._create_subitem(tool_input)
        return await self._create_new_item(tool_input)

    async def _duplicate_and_update_item(self, tool_input: CreateItemInput) -> str:
        try:
            res = await self.client.mutation(
                "duplicate_item",
                {"boardId": tool_input.board_id, "itemId": tool_input.duplicate_from_item_id},
            )
            duplicated_id = (res.get("duplicate_item") or {}).get("id")
            if not duplicated_id:
                raise MondayToolkitError("Failed to duplicate item: no item duplicated")

            try:
                column_values = json.loads(tool_input.column_values)
            except ValueError as e:
                raise ToolInputError("Invalid JSON in columnValues") from e

            await self._change_column_values(
                board_id=tool_input.board_id,
                item_id=duplicated_id,
                column_values={**column_values, "name": tool_input.name},
            )
            return (
                f"Item {duplicated_id} successfully duplicated from "
                f"{tool_input.duplicate_from_item_id} and updated"
            )
        except Exception as e:
            logger.error(f"Error duplicating item {tool_input.duplicate_from_item_id}: {e}")
            rethrow_with_context(e, "duplicate item")

    async def _create_subitem(self, tool_input: CreateItemInput) -> str:
        try:
            res = await self.client.mutation(
                "create_subitem",
                {
                    "parentItemId": tool_input.parent_item_id,
                    "itemName": tool_input.name,
                    "columnValues": tool_input.column_values,
                },
            )
            subitem_id = (res.get("create_subitem") or {}).get("id")
            if not subitem_id:
                raise MondayToolkitError("Failed to create subitem: no subitem created")
            return f"Subitem {subitem_id} successfully created under parent item {tool_input.parent_item_id}"
        except Exception as e:
            rethrow_with_context(e, "create subitem")

    async def _create_new_item(self, tool_input: CreateItemInput) -> str:
        try:
            res = await self.client.mutation(
                "create_item",
                {
                    "boardId": tool_input.board_id,
                    "itemName": tool_input.name,
                    "groupId": tool_input.group_id,
                    "columnValues": tool_input.column_values,
                },
            )
            return f"Item {(res.get('create_item') or {}).get('id')} successfully created"
        except Exception as e:
            rethrow_with_context(e, "create item")

    async def _change_column_values(self, board_id: str, item_id: str, column_values: dict) -> str:
        res = await self.client.mutation(
            "change_item_column_values",
            {
                "boardId": board_id,
                "itemId": item_id,
                "columnValues": json.dumps(column_values),
            },
        )
        return (res.get("change_multiple_column_values") or {}).get("id")

    @tool(
        name="change_item_column_values",
        type=ToolType.WRITE,
        title="Change Item Column Values",
        description="Change the column values of an item in a monday.com board. " + BOARD_INFO_PRECONDITION,
        input_model=ChangeItemColumnValuesInput,
        idempotent=True,
    )
    async def change_item_column_values(self, tool_input: ChangeItemColumnValuesInput) -> str:
        try:
            column_values = json.loads(tool_input.column_values)
        except ValueError as e:
            raise ToolInputError("Invalid JSON in columnValues") from e
        if not isinstance(column_values, dict):
            raise ToolInputError("columnValues must be a JSON object")

        item_id = await self._change_column_values(tool_input.board_id, tool_input.item_id, column_values)
        return f"Item {item_id} successfully updated with the new column values"

    @tool(
        name="move_item_to_group",
        type=ToolType.WRITE,
        title="Move Item to Group",
        description="Move an item to a group in a monday.com board",
        input_model=MoveItemToGroupInput,
        idempotent=True,
    )
    async def move_item_to_group(self, tool_input: MoveItemToGroupInput) -> str:
        res = await self.client.mutation(
            "move_item_to_group",
            {"itemId": tool_input.item_id, "groupId": tool_input.group_id},
        )
        moved_id = (res.get("move_item_to_group") or {}).get("id")
        return f"Item {moved_id} successfully moved to group {tool_input.group_id}"

    async def _create_update(self, tool_input: CreateUpdateInput) -> str:
        mentions = parse_mentions_list(tool_input.mentions_list)
        try:
            res = await self.client.mutation(
                "create_update",
                {
                    "itemId": tool_input.item_id,
                    "body": tool_input.body,
                    "mentionsList": mentions,
                },
            )
            update_id = (res.get("create_update") or {}).get("id")
            if not update_id:
                raise MondayToolkitError("Failed to create update: no update created")
            return update_id
        except Exception as e:
            rethrow_with_context(e, "create update")

    @tool(
        name="create_update",
        type=ToolType.WRITE,
        title="Create Update",
        description=(
            "Create a new update (comment/post) on a monday.com item. Updates can be used to add comments, "
            "notes, or discussions to items. You can optionally mention users, teams, or boards in the update."
        ),
        input_model=CreateUpdateInput,
    )
    async def create_update(self, tool_input: CreateUpdateInput) -> str:
        update_id = await self._create_update(tool_input)
        return f"Update {update_id} successfully created on item {tool_input.item_id}"

    @tool(
        name="create_update_in_monday",
        type=ToolType.WRITE,
        title="Create Update in Monday, after calling this tool you should",
        description=(
            "Create a new update (comment/post) on a monday.com item. Updates can be used to add comments, "
            "notes, or discussions to items. You can optionally mention users, teams, or boards in the update. "
            "After calling this tool you should call the full board data tool to get data, and immediately "
            "after that call the show table tool to show the data from that tool. IMPORTANT: You MUST use the "
            "COMPLETE data from the full board data tool - do NOT cut, truncate, or omit any data. Pass the "
            "entire dataset to the show table tool."
        ),
        input_model=CreateUpdateInput,
    )
    async def create_update_in_monday(self, tool_input: CreateUpdateInput) -> str:
        update_id = await self._create_update(tool_input)
        return (
            f"Update {update_id} successfully created on item {tool_input.item_id}. Now we want to show the "
            "updated data, so call the full board data tool to get data, and then immediately after that call "
            "the show table tool to show the data from that tool. CRITICAL: You MUST pass the COMPLETE and FULL "
            "data from the full board data tool to the show table tool - do NOT cut, summarize, truncate, or "
            "omit ANY data. Use the entire dataset exactly as received."
        )
