"""
Dashboard and widget tool tests.
"""
import json

import pytest  # type: ignore

from monday_toolkit.agents.actions.monday.dashboards import MondayDashboards
from monday_toolkit.exceptions.toolkit_exceptions import MondayApiError, MondayToolkitError, ToolInputError

CHART_SETTINGS = {"x_axis": {"column_id": "status"}, "aggregation": "count"}


@pytest.mark.tools
class TestCreateDashboard:
    """Dashboard creation."""

    @pytest.mark.asyncio
    async def test_creates_public_dashboard_in_workspace_root(self, monday_client, run_tool):
        monday_client.respond(
            "CreateDashboard",
            {
                "create_dashboard": {
                    "id": "900",
                    "name": "Sales",
                    "workspace_id": "5",
                    "kind": "PUBLIC",
                    "board_folder_id": None,
                }
            },
        )

        result = await run_tool(
            MondayDashboards, "create_dashboard", {"name": "Sales", "workspace_id": 5, "board_ids": [1, 2]}
        )

        assert result.startswith('✅ Dashboard "Sales" successfully created!')
        assert "• Workspace ID: 5 in workspace root\n" in result
        assert "• Visibility: PUBLIC (visible to all workspace members)\n" in result
        assert "• Connected Boards: 2 board(s)" in result
        assert monday_client.last("CreateDashboard").variables == {
            "name": "Sales",
            "workspace_id": "5",
            "board_ids": ["1", "2"],
            "kind": "PUBLIC",
        }

    @pytest.mark.asyncio
    async def test_private_dashboard_in_folder(self, monday_client, run_tool):
        monday_client.respond(
            "CreateDashboard",
            {"create_dashboard": {"id": "1", "name": "Ops", "workspace_id": "5", "kind": "PRIVATE", "board_folder_id": "f7"}},
        )

        result = await run_tool(
            MondayDashboards,
            "create_dashboard",
            {"name": "Ops", "workspace_id": "5", "board_ids": ["1"], "kind": "PRIVATE", "board_folder_id": "f7"},
        )

        assert "• Workspace ID: 5 in folder f7\n" in result
        assert "(private - visible only to invited users)" in result

    @pytest.mark.asyncio
    async def test_board_ids_are_bounded(self, run_tool):
        with pytest.raises(ToolInputError, match="board_ids"):
            await run_tool(MondayDashboards, "create_dashboard", {"name": "x", "workspace_id": "5", "board_ids": []})
        with pytest.raises(ToolInputError, match="board_ids"):
            await run_tool(
                MondayDashboards,
                "create_dashboard",
                {"name": "x", "workspace_id": "5", "board_ids": [str(i) for i in range(51)]},
            )

    @pytest.mark.asyncio
    async def test_api_failure_is_wrapped(self, monday_client, run_tool):
        monday_client.respond("CreateDashboard", MondayApiError("denied", ["Workspace not found"]))

        with pytest.raises(MondayToolkitError, match="^Failed to create dashboard: Workspace not found$"):
            await run_tool(MondayDashboards, "create_dashboard", {"name": "x", "workspace_id": "5", "board_ids": ["1"]})


@pytest.mark.tools
class TestWidgets:
    """Widget schemas and widget creation."""

    @pytest.mark.asyncio
    async def test_all_widgets_schema(self, monday_client, run_tool):
        monday_client.respond(
            "GetAllWidgetsSchema",
            {
                "all_widgets_schema": [
                    {"widget_type": "CHART", "schema": json.dumps({"title": "Chart widget"})},
                    {"widget_type": "NUMBER", "schema": {"description": "Single number"}},
                    {"widget_type": "BATTERY", "schema": {}},
                    {"widget_type": "GANTT", "schema": None},
                    {"widget_type": None, "schema": {"title": "ignored"}},
                ]
            },
        )

        result = await run_tool(MondayDashboards, "all_widgets_schema")

        assert "(3 schemas found)" in result
        assert "• **CHART**: Chart widget\n• **NUMBER**: Single number\n" in result
        assert "• **BATTERY**: BATTERY widget for data visualization\n" in result
        assert "GANTT" not in result

    @pytest.mark.asyncio
    async def test_all_widgets_schema_empty(self, monday_client, run_tool):
        monday_client.respond("GetAllWidgetsSchema", {"all_widgets_schema": []})

        with pytest.raises(
            MondayToolkitError,
            match="^Failed to fetch widget schemas: No widget schemas found - API returned empty response$",
        ):
            await run_tool(MondayDashboards, "all_widgets_schema")

    @pytest.mark.asyncio
    async def test_create_widget(self, monday_client, run_tool):
        monday_client.respond(
            "CreateWidget",
            {
                "create_widget": {
                    "id": "w1",
                    "name": "Status chart",
                    "kind": "CHART",
                    "parent": {"kind": "DASHBOARD", "id": "900"},
                }
            },
        )

        result = await run_tool(
            MondayDashboards,
            "create_widget",
            {
                "parent_container_id": 900,
                "parent_container_type": "DASHBOARD",
                "widget_kind": "CHART",
                "widget_name": "Status chart",
                "settingsStringified": json.dumps(CHART_SETTINGS),
            },
        )

        assert result.startswith('✅ Widget "Status chart" successfully created!')
        assert "• **Location**: Placed in dashboard 900\n" in result
        assert result.endswith(json.dumps(CHART_SETTINGS, indent=2))
        assert monday_client.last("CreateWidget").variables == {
            "parent": {"kind": "DASHBOARD", "id": "900"},
            "kind": "CHART",
            "name": "Status chart",
            "settings": CHART_SETTINGS,
        }

    @pytest.mark.asyncio
    async def test_create_widget_requires_settings(self, monday_client, run_tool):
        with pytest.raises(ToolInputError, match="You must pass either settings or settingsStringified parameter"):
            await run_tool(
                MondayDashboards,
                "create_widget",
                {
                    "parent_container_id": "1",
                    "parent_container_type": "BOARD_VIEW",
                    "widget_kind": "NUMBER",
                    "widget_name": "Total",
                },
            )
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_create_widget_failure_names_the_kind(self, monday_client, run_tool):
        monday_client.respond("CreateWidget", {"create_widget": None})

        with pytest.raises(MondayToolkitError, match="^Failed to create BATTERY widget: Failed to create widget$"):
            await run_tool(
                MondayDashboards,
                "create_widget",
                {
                    "parent_container_id": "1",
                    "parent_container_type": "BOARD_VIEW",
                    "widget_kind": "BATTERY",
                    "widget_name": "Progress",
                    "settings": {"columns": ["status"]},
                },
            )
