import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, TypeAdapter  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import MondayToolkitError, ToolInputError
from monday_toolkit.utils.errors import rethrow_with_context
from monday_toolkit.utils.stringified import fallback_to_stringified_version_if_null

MAX_DASHBOARD_BOARDS = 50
MAX_WIDGET_NAME_LENGTH = 255


class DashboardKind(str, Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class WidgetParentKind(str, Enum):
    DASHBOARD = "DASHBOARD"
    BOARD_VIEW = "BOARD_VIEW"


class WidgetKind(str, Enum):
    CHART = "CHART"
    NUMBER = "NUMBER"
    BATTERY = "BATTERY"


WIDGET_SETTINGS = TypeAdapter(Dict[str, Any])


class CreateDashboardInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    name: str = Field(min_length=1, description="Human-readable dashboard title (UTF-8 chars)")
    workspace_id: MondayId = Field(description="ID of the workspace that will own the dashboard")
    board_ids: List[MondayId] = Field(
        min_length=1,
        max_length=MAX_DASHBOARD_BOARDS,
        description="List of board IDs as strings (min 1 element)",
    )
    kind: DashboardKind = Field(default=DashboardKind.PUBLIC, description="Visibility level: PUBLIC or PRIVATE")
    board_folder_id: Optional[MondayId] = Field(
        default=None,
        description=(
            "Optional folder ID within workspace to place this dashboard (if not provided, dashboard will be "
            "placed in workspace root)"
        ),
    )


class CreateWidgetInput(ToolInput):
    model_config = ConfigDict(alias_generator=None)

    parent_container_id: MondayId = Field(description="ID of the parent container (dashboard ID or board view ID)")
    parent_container_type: WidgetParentKind = Field(
        description="Type of parent container: DASHBOARD or BOARD_VIEW"
    )
    widget_kind: WidgetKind = Field(description="Type of widget to create: i.e CHART, NUMBER, BATTERY")
    widget_name: str = Field(
        min_length=1,
        max_length=MAX_WIDGET_NAME_LENGTH,
        description="Widget display name (1-255 UTF-8 chars)",
    )
    settings: Optional[Dict[str, Any]] = Field(
        default=None,
        description=(
            "Widget-specific settings as JSON object conforming to widget schema. Use all_widgets_schema tool "
            "to get the required schema for each widget type."
        ),
    )
    settings_stringified: Optional[str] = Field(
        default=None,
        alias="settingsStringified",
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The settings object. Send this as a stringified JSON of "settings" '
            'field. Read "settings" field description for details how to use it.'
        ),
    )


class MondayDashboards(MondayActions):
    """Dashboard and widget tools"""

    @tool(
        name="create_dashboard",
        type=ToolType.WRITE,
        title="Create Dashboard",
        description=(
            "Use this tool to create a new monday.com dashboard that aggregates data from one or more boards. \n"
            "    Dashboards provide visual representations of board data through widgets and charts.\n"
            "    \n"
            "    Use this tool when users want to:\n"
            "    - Create a dashboard to visualize board data\n"
            "    - Aggregate information from multiple boards\n"
            "    - Set up a data visualization container for widgets"
        ),
        input_model=CreateDashboardInput,
    )
    async def create_dashboard(self, tool_input: CreateDashboardInput) -> str:
        try:
            res = await self.client.mutation(
                "create_dashboard",
                {
                    "name": tool_input.name,
                    "workspace_id": tool_input.workspace_id,
                    "board_ids": tool_input.board_ids,
                    "kind": tool_input.kind.value,
                    "board_folder_id": tool_input.board_folder_id,
                },
            )
            dashboard = res.get("create_dashboard")
            if not dashboard:
                raise MondayToolkitError("Failed to create dashboard")
        except Exception as e:
            rethrow_with_context(e, "create dashboard")

        folder_id = dashboard.get("board_folder_id")
        folder_info = f" in folder {folder_id}" if folder_id else " in workspace root"
        if dashboard.get("kind") == DashboardKind.PUBLIC.value:
            visibility_info = "(visible to all workspace members)"
        else:
            visibility_info = "(private - visible only to invited users)"

        return (
            f'✅ Dashboard "{dashboard.get("name")}" successfully created!\n\n'
            "Dashboard Details:\n"
            f"• ID: {dashboard.get('id')}\n"
            f"• Name: {dashboard.get('name')}\n"
            f"• Workspace ID: {dashboard.get('workspace_id')}{folder_info}\n"
            f"• Visibility: {dashboard.get('kind')} {visibility_info}\n"
            f"• Connected Boards: {len(tool_input.board_ids)} board(s)\n\n"
            "Next Steps:\n"
            "1. Use 'all_widgets_schema' to understand available widget types\n"
            "2. Understand the connected boards structure, columns, and metadata. Map board ids to column ids\n"
            "3. Plan Domain-Beneficial Widgets - Strategic widget planning based on real data analysis\n"
            "4. Use 'create_widget' to add widgets to the dashboard"
        )

    @tool(
        name="all_widgets_schema",
        type=ToolType.READ,
        title="Get All Widget Schemas",
        description=(
            "Fetch complete JSON Schema 7 definitions for all available widget types in monday.com.\n"
            "    \n"
            "    This tool is essential before creating widgets as it provides:\n"
            "    - Complete schema definitions for all supported widgets\n"
            "    - Required and optional fields for each widget type\n"
            "    - Data type specifications and validation rules\n"
            "    - Detailed descriptions of widget capabilities\n"
            "    \n"
            "    Use this tool when you need to:\n"
            "    - Understand widget configuration requirements before creating widgets\n"
            "    - Validate widget settings against official schemas\n"
            "    - Plan widget implementations with proper data structures\n"
            "    \n"
            "    The response includes JSON Schema 7 definitions that describe exactly what settings each "
            "widget type accepts."
        ),
        read_only=True,
        idempotent=True,
    )
    async def all_widgets_schema(self) -> str:
        try:
            res = await self.client.query("get_all_widgets_schema")
            widget_schemas = res.get("all_widgets_schema") or []
            if not widget_schemas:
                raise MondayToolkitError("No widget schemas found - API returned empty response")

            formatted: Dict[str, Dict[str, Any]] = {}
            for widget_schema in widget_schemas:
                widget_type = (widget_schema or {}).get("widget_type")
                schema = (widget_schema or {}).get("schema")
                if not widget_type or schema in (None, ""):
                    continue
                schema_obj = json.loads(schema) if isinstance(schema, str) else schema
                description = (
                    schema_obj.get("description")
                    or schema_obj.get("title")
                    or f"{widget_type} widget for data visualization"
                )
                formatted[widget_type] = {"type": widget_type, "description": description, "schema": schema}

            if not formatted:
                raise MondayToolkitError("No valid widget schemas found in API response")
        except Exception as e:
            rethrow_with_context(e, "fetch widget schemas")

        overview = "\n".join(
            f"• **{widget_type}**: {entry['description']}" for widget_type, entry in formatted.items()
        )
        return (
            "**Widget Schemas Retrieved Successfully!**\n\n"
            f"🎯 **Available Widget Types** ({len(formatted)} schemas found):\n"
            f"{overview}\n\n"
            "**Complete JSON Schema 7 Definitions:**\n\n"
            f"{json.dumps(formatted, indent=2, ensure_ascii=False)}\n\n"
            "**Schema Compliance Tips:**\n"
            "- All required fields MUST be provided in widget settings\n"
            "- Enum values must match exactly as specified in the schema\n"
            "- Data types must conform to the schema definitions\n"
            "- Nested objects must follow the exact structure\n\n"
            "⚡ **Next Steps:**\n"
            "- Use these schemas to validate widget settings before calling 'create_widget'\n"
            "- Reference the schema structure when planning widget configurations\n"
            "- Ensure 100% compliance with field requirements and data types"
        )

    @tool(
        name="create_widget",
        type=ToolType.WRITE,
        title="Create Widget",
        description=(
            "Create a new widget in a dashboard or board view with specific configuration settings.\n"
            "    \n"
            "    This tool creates data visualization widgets that display information from monday.com boards:\n"
            "    **Parent Containers:**\n"
            "    - **DASHBOARD**: Place widget in a dashboard (most common use case)\n"
            "    - **BOARD_VIEW**: Place widget in a specific board view\n"
            "    \n"
            "    **Critical Requirements:**\n"
            "    1. **Schema Compliance**: Widget settings MUST conform to the JSON schema for the specific "
            "widget type\n"
            "    2. **Use all_widgets_schema first**: Always fetch widget schemas before creating widgets\n"
            "    3. **Validate settings**: Ensure all required fields are provided and data types match\n"
            "    \n"
            "    **Workflow:**\n"
            "    1. Use 'all_widgets_schema' to get schema definitions\n"
            "    2. Prepare widget settings according to the schema\n"
            "    3. Use this tool to create the widget"
        ),
        input_model=CreateWidgetInput,
    )
    async def create_widget(self, tool_input: CreateWidgetInput) -> str:
        fallback_to_stringified_version_if_null(tool_input, "settings", WIDGET_SETTINGS)
        if not tool_input.settings:
            raise ToolInputError("You must pass either settings or settingsStringified parameter")

        try:
            res = await self.client.mutation(
                "create_widget",
                {
                    "parent": {
                        "kind": tool_input.parent_container_type.value,
                        "id": tool_input.parent_container_id,
                    },
                    "kind": tool_input.widget_kind.value,
                    "name": tool_input.widget_name,
                    "settings": tool_input.settings,
                },
            )
            widget = res.get("create_widget")
            if not widget:
                raise MondayToolkitError("Failed to create widget")
        except Exception as e:
            rethrow_with_context(e, f"create {tool_input.widget_kind.value} widget")

        parent = widget.get("parent") or {}
        if parent.get("kind") == WidgetParentKind.DASHBOARD.value:
            parent_info = f"dashboard {parent.get('id')}"
        else:
            parent_info = f"board view {parent.get('id')}"

        return (
            f'✅ Widget "{widget.get("name")}" successfully created!\n\n'
            "**Widget Details:**\n"
            f"• **ID**: {widget.get('id')}\n"
            f"• **Name**: {widget.get('name')}\n"
            f"• **Type**: {widget.get('kind')}\n"
            f"• **Location**: Placed in {parent_info}\n\n"
            "**Widget Configuration:**\n"
            f"• **Settings Applied**: {json.dumps(tool_input.settings, indent=2, ensure_ascii=False)}"
        )
