"""
Tool framework tests: decorator, binding, validation, filtering and registry.
"""
from typing import Optional

import pytest  # type: ignore
from pydantic import Field  # type: ignore

from monday_toolkit.agents.tool.enums import ToolMode, ToolType
from monday_toolkit.agents.tool.models import MondayApiToolContext, MondayId, ToolInput
from monday_toolkit.agents.tools import models as tool_models
from monday_toolkit.agents.tools.config import ToolsConfiguration
from monday_toolkit.agents.tools.decorator import get_tool_definition, tool
from monday_toolkit.agents.tools.filtering import get_filtered_tools, select_tool_family
from monday_toolkit.agents.tools.registry import ToolRegistry, bind_tools
from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError


class RenameInput(ToolInput):
    board_id: MondayId = Field(description="Board to rename")
    new_name: str = Field(description="New board name")
    note: Optional[str] = None


class SampleActions:
    def __init__(self) -> None:
        self.seen = []

    @tool(
        name="rename_board",
        type=ToolType.WRITE,
        title="Rename Board",
        description="Rename a board",
        input_model=RenameInput,
        idempotent=True,
    )
    async def rename_board(self, tool_input: RenameInput) -> str:
        self.seen.append(tool_input)
        return f"renamed {tool_input.board_id} to {tool_input.new_name}"

    @tool(name="whoami", type=ToolType.READ, title="Who Am I", description="Current user", read_only=True)
    async def whoami(self) -> str:
        return "me"

    @tool(name="raw_api", type=ToolType.ALL_API, title="Raw", description="Raw API", enabled_by_default=False)
    async def raw_api(self) -> str:
        raise RuntimeError("api down")

    async def not_a_tool(self) -> str:
        return "ignored"


def sample_tools(context: Optional[MondayApiToolContext] = None):
    actions = SampleActions()
    return actions, bind_tools(actions, context=context)


@pytest.mark.tools
class TestDecoratorAndBinding:
    """Definitions attached by @tool and bound per instance."""

    def test_definition_is_attached(self):
        definition = get_tool_definition(SampleActions.rename_board)
        assert definition.name == "rename_board"
        assert definition.annotations.idempotent_hint
        assert definition.annotations.open_world_hint
        assert get_tool_definition(SampleActions.not_a_tool) is None

    def test_bind_tools_keeps_declaration_order(self):
        _, tools = sample_tools()
        assert [t.name for t in tools] == ["rename_board", "whoami", "raw_api"]
        assert tools[2].enabled_by_default is False

    def test_annotations_wire_format(self):
        _, tools = sample_tools()
        assert tools[1].annotations.to_wire() == {
            "title": "Who Am I",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True,
        }


@pytest.mark.tools
class TestMondayTool:
    """Validation, board pinning and execution."""

    def test_input_schema_uses_camel_case(self):
        _, tools = sample_tools()
        schema = tools[0].input_schema()
        assert set(schema["properties"]) == {"boardId", "newName", "note"}
        assert set(schema["required"]) == {"boardId", "newName"}

    def test_no_input_schema(self):
        _, tools = sample_tools()
        assert tools[1].input_schema() == {"type": "object", "properties": {}}

    def test_pinned_board_is_hidden(self):
        _, tools = sample_tools(MondayApiToolContext(board_id="42"))
        schema = tools[0].input_schema()
        assert "boardId" not in schema["properties"]
        assert schema["required"] == ["newName"]

    @pytest.mark.asyncio
    async def test_pinned_board_is_injected(self):
        actions, tools = sample_tools(MondayApiToolContext(boardId="42"))
        output = await tools[0].execute({"boardId": "7", "newName": "Roadmap"})
        assert output.content == "renamed 42 to Roadmap"

    @pytest.mark.asyncio
    async def test_numeric_ids_are_accepted(self):
        actions, tools = sample_tools()
        output = await tools[0].execute({"boardId": 123, "new_name": "Roadmap"})
        assert output.content == "renamed 123 to Roadmap"
        assert actions.seen[0].board_id == "123"

    @pytest.mark.asyncio
    async def test_invalid_arguments(self):
        _, tools = sample_tools()
        with pytest.raises(ToolInputError, match="Invalid arguments for tool rename_board: newName"):
            await tools[0].execute({"boardId": "1"})

    @pytest.mark.asyncio
    async def test_handler_errors_propagate_and_are_tracked(self, monkeypatch):
        tracked = []
        monkeypatch.setattr(
            tool_models.MondayTool,
            "_track_execution",
            lambda self, execution_time_ms, is_error: tracked.append((self.name, is_error)),
        )
        _, tools = sample_tools()
        with pytest.raises(RuntimeError, match="api down"):
            await tools[2].execute()
        await tools[1].execute()
        assert tracked == [("raw_api", True), ("whoami", False)]


@pytest.mark.tools
class TestFiltering:
    """Tool selection by configuration."""

    def names(self, tools):
        return [t.name for t in tools]

    def test_no_configuration_drops_dynamic_api_tools(self):
        _, tools = sample_tools()
        assert self.names(get_filtered_tools(tools, None)) == ["rename_board", "whoami"]

    def test_only_dynamic_api_tools(self):
        _, tools = sample_tools()
        config = ToolsConfiguration(mode=ToolMode.API, enable_dynamic_api_tools="only")
        assert self.names(get_filtered_tools(tools, config)) == ["raw_api"]

    def test_dynamic_api_tools_disabled(self):
        _, tools = sample_tools()
        config = ToolsConfiguration(mode=ToolMode.API, enable_dynamic_api_tools=False)
        assert self.names(get_filtered_tools(tools, config)) == ["rename_board", "whoami"]

    def test_dynamic_api_tools_enabled(self):
        _, tools = sample_tools()
        config = ToolsConfiguration(mode=ToolMode.API, enable_dynamic_api_tools=True)
        assert self.names(get_filtered_tools(tools, config)) == ["rename_board", "whoami", "raw_api"]

    def test_read_only_mode(self):
        _, tools = sample_tools()
        config = ToolsConfiguration(read_only_mode=True)
        assert self.names(get_filtered_tools(tools, config)) == ["whoami"]

    def test_include_wins_over_exclude(self):
        _, tools = sample_tools()
        config = ToolsConfiguration(include=["rename_board"], exclude=["rename_board", "whoami"])
        assert self.names(get_filtered_tools(tools, config)) == ["rename_board"]

    def test_exclude(self):
        _, tools = sample_tools()
        config = ToolsConfiguration(exclude=["whoami"])
        assert self.names(get_filtered_tools(tools, config)) == ["rename_board", "raw_api"]

    def test_tool_families(self):
        _, tools = sample_tools()
        assert select_tool_family(tools, [], None) == tools
        assert select_tool_family(tools, [], ToolsConfiguration(mode=ToolMode.APPS)) == []
        assert select_tool_family(tools, [], ToolsConfiguration(mode=ToolMode.ATP)) == []

    def test_configuration_accepts_camel_case(self):
        config = ToolsConfiguration.model_validate({"readOnlyMode": True, "enableDynamicApiTools": "only"})
        assert config.read_only_mode
        assert config.enable_dynamic_api_tools == "only"


@pytest.mark.tools
class TestToolRegistry:
    """Name-keyed registry of bound tools."""

    def test_register_and_lookup(self):
        _, tools = sample_tools()
        registry = ToolRegistry()
        for t in tools + tools[:1]:
            registry.register(t)

        assert len(registry) == 3
        assert "whoami" in registry
        assert registry.get_tool("missing") is None
        assert registry.list_tools() == ["rename_board", "whoami", "raw_api"]
        assert [t.name for t in registry.get_tools_by_type(ToolType.READ)] == ["whoami"]
        assert [t.name for t in registry.search_tools("RAW")] == ["raw_api"]

        registry.clear()
        assert len(registry) == 0
