import json
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool


class CustomActivityColor(str, Enum):
    BRINK_PINK = "BRINK_PINK"
    CELTIC_BLUE = "CELTIC_BLUE"
    CORNFLOWER_BLUE = "CORNFLOWER_BLUE"
    DINGY_DUNGEON = "DINGY_DUNGEON"
    GO_GREEN = "GO_GREEN"
    GRAY = "GRAY"
    LIGHT_DEEP_PINK = "LIGHT_DEEP_PINK"
    LIGHT_HOT_PINK = "LIGHT_HOT_PINK"
    MAYA_BLUE = "MAYA_BLUE"
    MEDIUM_TURQUOISE = "MEDIUM_TURQUOISE"
    PARADISE_PINK = "PARADISE_PINK"
    PHILIPPINE_GREEN = "PHILIPPINE_GREEN"
    PHILIPPINE_YELLOW = "PHILIPPINE_YELLOW"
    SLATE_BLUE = "SLATE_BLUE"
    VIVID_CERULEAN = "VIVID_CERULEAN"
    YANKEES_BLUE = "YANKEES_BLUE"
    YELLOW_GREEN = "YELLOW_GREEN"
    YELLOW_ORANGE = "YELLOW_ORANGE"


class CustomActivityIcon(str, Enum):
    ASCENDING = "ASCENDING"
    CAMERA = "CAMERA"
    CONFERENCE = "CONFERENCE"
    FLAG = "FLAG"
    GIFT = "GIFT"
    HEADPHONES = "HEADPHONES"
    HOMEKEYS = "HOMEKEYS"
    LOCATION = "LOCATION"
    NOTEBOOK = "NOTEBOOK"
    PAPERPLANE = "PAPERPLANE"
    PLANE = "PLANE"
    PLANNING = "PLANNING"
    SHOPPING = "SHOPPING"


class CreateCustomActivityInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    color: CustomActivityColor = Field(description="The color of the custom activity")
    icon_id: CustomActivityIcon = Field(description="The icon ID of the custom activity")
    name: str = Field(description="The name of the custom activity")


class CreateTimelineItemInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    item_id: MondayId = Field(description="The ID of the item to create the new timeline item on")
    custom_activity_id: str = Field(description="The ID of the custom activity for the timeline item")
    title: str = Field(description="The title of the new timeline item")
    summary: Optional[str] = Field(
        default=None, description="The summary of the new timeline item (max 255 characters)"
    )
    content: Optional[str] = Field(default=None, description="The content of the new timeline item")
    timestamp: str = Field(
        description="The creation time of the new timeline item in ISO8601 format (e.g., 2024-06-06T18:00:30Z)"
    )
    start_timestamp: Optional[str] = Field(
        default=None, description="The start time of the timeline item in ISO8601 format"
    )
    end_timestamp: Optional[str] = Field(
        default=None, description="The end time of the timeline item in ISO8601 format"
    )
    location: Optional[str] = Field(default=None, description="The location to add to the new timeline item")
    phone: Optional[str] = Field(default=None, description="The phone number to add to the new timeline item")
    url: Optional[str] = Field(default=None, description="The URL to add to the new timeline item")


class MondayActivities(MondayActions):
    """Custom activities and timeline items of the Emails & Activities app"""

    @tool(
        name="create_custom_activity",
        type=ToolType.WRITE,
        title="Create Custom Activity",
        description="Create a new custom activity in the E&A app",
        input_model=CreateCustomActivityInput,
    )
    async def create_custom_activity(self, tool_input: CreateCustomActivityInput) -> str:
        await self.client.mutation(
            "create_custom_activity",
            {
                "color": tool_input.color.value,
                "icon_id": tool_input.icon_id.value,
                "name": tool_input.name,
            },
        )
        return (
            f"Custom activity '{tool_input.name}' with color {tool_input.color.value} "
            f"and icon {tool_input.icon_id.value} successfully created"
        )

    @tool(
        name="fetch_custom_activity",
        type=ToolType.READ,
        title="Fetch Custom Activities",
        description="Get custom activities from the E&A app",
        read_only=True,
        idempotent=True,
    )
    async def fetch_custom_activity(self) -> str:
        res = await self.client.query("fetch_custom_activity")
        custom_activities = res.get("custom_activity") or []
        if not custom_activities:
            return "No custom activities found"

        activities = [
            {
                "id": activity.get("id"),
                "name": activity.get("name"),
                "color": activity.get("color"),
                "icon_id": activity.get("icon_id"),
                "type": activity.get("type"),
            }
            for activity in custom_activities
        ]
        return f"Found {len(activities)} custom activities: {json.dumps(activities, indent=2, ensure_ascii=False)}"

    @tool(
        name="create_timeline_item",
        type=ToolType.WRITE,
        title="Create Timeline Item",
        description="Create a new timeline item in the E&A app",
        input_model=CreateTimelineItemInput,
    )
    async def create_timeline_item(self, tool_input: CreateTimelineItemInput) -> str:
        variables = {
            "item_id": tool_input.item_id,
            "custom_activity_id": tool_input.custom_activity_id,
            "title": tool_input.title,
            "timestamp": tool_input.timestamp,
            "summary": tool_input.summary,
            "content": tool_input.content,
            "location": tool_input.location,
            "phone": tool_input.phone,
            "url": tool_input.url,
        }
        # A time range is only sent when both ends are known
        if tool_input.start_timestamp and tool_input.end_timestamp:
            variables["time_range"] = {
                "start_timestamp": tool_input.start_timestamp,
                "end_timestamp": tool_input.end_timestamp,
            }

        res = await self.client.mutation("create_timeline_item", variables)
        timeline_item_id = (res.get("create_timeline_item") or {}).get("id")
        return (
            f"Timeline item '{tool_input.title}' with ID {timeline_item_id} "
            f"successfully created on item {tool_input.item_id}"
        )
