import json
from enum import Enum
from typing import Optional

from pydantic import Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError


class ColumnType(str, Enum):
    """Column types that can still be created on a board"""

    AUTO_NUMBER = "auto_number"
    BOARD_RELATION = "board_relation"
    BUTTON = "button"
    CHECKBOX = "checkbox"
    COLOR_PICKER = "color_picker"
    COUNTRY = "country"
    CREATION_LOG = "creation_log"
    DATE = "date"
    DEPENDENCY = "dependency"
    DOC = "doc"
    DROPDOWN = "dropdown"
    EMAIL = "email"
    FILE = "file"
    FORMULA = "formula"
    HOUR = "hour"
    ITEM_ASSIGNEES = "item_assignees"
    ITEM_ID = "item_id"
    LAST_UPDATED = "last_updated"
    LINK = "link"
    LOCATION = "location"
    LONG_TEXT = "long_text"
    MIRROR = "mirror"
    NAME = "name"
    NUMBERS = "numbers"
    PEOPLE = "people"
    PHONE = "phone"
    PROGRESS = "progress"
    RATING = "rating"
    STATUS = "status"
    SUBTASKS = "subtasks"
    TAGS = "tags"
    TEAM = "team"
    TEXT = "text"
    TIME_TRACKING = "time_tracking"
    TIMELINE = "timeline"
    VOTE = "vote"
    WEEK = "week"
    WORLD_CLOCK = "world_clock"


class CreateColumnInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board to which the new column will be added")
    column_type: ColumnType = Field(description="The type of the column to be created")
    column_title: str = Field(description="The title of the column to be created")
    column_description: Optional[str] = Field(
        default=None, description="The description of the column to be created"
    )
    column_settings: Optional[str] = Field(
        default=None,
        description=(
            "Column-specific configuration settings as a JSON string. Use the get_column_type_info tool "
            "to fetch the JSON schema for the given column type."
        ),
    )


class DeleteColumnInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board from which the column will be deleted")
    column_id: str = Field(description="The id of the column to be deleted")


class GetColumnTypeInfoInput(ToolInput):
    column_type: ColumnType = Field(
        description='The column type to retrieve information for (e.g., "text", "status", "date", "numbers")'
    )


class MondayColumns(MondayActions):
    """Column tools"""

    @tool(
        name="create_column",
        type=ToolType.WRITE,
        title="Create Column",
        description="Create a new column in a monday.com board",
        input_model=CreateColumnInput,
    )
    async def create_column(self, tool_input: CreateColumnInput) -> str:
        settings = None
        if tool_input.column_settings:
            try:
                settings = json.loads(tool_input.column_settings)
            except ValueError as e:
                raise ToolInputError(f"Invalid JSON in columnSettings: {e}") from e

        res = await self.client.mutation(
            "create_column",
            {
                "boardId": tool_input.board_id,
                "columnType": tool_input.column_type.value,
                "columnTitle": tool_input.column_title,
                "columnDescription": tool_input.column_description,
                "columnSettings": settings,
            },
        )
        return f"Column {(res.get('create_column') or {}).get('id')} successfully created"

    @tool(
        name="delete_column",
        type=ToolType.WRITE,
        title="Delete Column",
        description="Delete a column from a monday.com board",
        input_model=DeleteColumnInput,
        destructive=True,
    )
    async def delete_column(self, tool_input: DeleteColumnInput) -> str:
        res = await self.client.mutation(
            "delete_column",
            {"boardId": tool_input.board_id, "columnId": tool_input.column_id},
        )
        return f"Column {(res.get('delete_column') or {}).get('id')} successfully deleted"

    @tool(
        name="get_column_type_info",
        type=ToolType.READ,
        title="Get Column Type Info",
        description=(
            "Retrieves comprehensive information about a specific column type, including JSON schema "
            "definition and other metadata. Use this before creating columns with the create_column tool "
            "to understand the structure, validation rules, and available properties for column settings."
        ),
        input_model=GetColumnTypeInfoInput,
        read_only=True,
        idempotent=True,
    )
    async def get_column_type_info(self, tool_input: GetColumnTypeInfoInput) -> str:
        column_type = tool_input.column_type.value
        res = await self.client.query("get_column_type_schema", {"type": column_type})
        schema = res.get("get_column_type_schema")
        if not schema:
            return f'Information for column type "{column_type}" not found or not available.'

        info = json.dumps({"schema": schema}, indent=2, ensure_ascii=False)
        return f'Column Type Information for "{column_type}":\n\n{info}'
