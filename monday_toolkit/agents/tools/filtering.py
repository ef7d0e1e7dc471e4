from typing import List, Optional

from monday_toolkit.agents.tool.enums import ToolMode, ToolType
from monday_toolkit.agents.tools.config import ToolsConfiguration
from monday_toolkit.agents.tools.models import MondayTool


def select_tool_family(
    api_tools: List[MondayTool],
    apps_tools: List[MondayTool],
    config: Optional[ToolsConfiguration],
) -> List[MondayTool]:
    """Pick the tools of the configured mode (API when no mode is set)."""
    mode = config.mode if config else None
    if mode == ToolMode.APPS:
        return list(apps_tools)
    if mode in (None, ToolMode.API):
        return list(api_tools)
    return []


def get_filtered_tools(
    tools: List[MondayTool],
    config: Optional[ToolsConfiguration],
) -> List[MondayTool]:
    """
    Apply the tool configuration to a tool family.

    Without configuration the free-form API tools are left out. ``include``
    takes precedence over ``exclude``.
    """
    if config is None:
        return [tool for tool in tools if tool.type != ToolType.ALL_API]

    if config.mode == ToolMode.API and config.enable_dynamic_api_tools == "only":
        return [tool for tool in tools if tool.type == ToolType.ALL_API]

    def should_filter(tool: MondayTool) -> bool:
        if (
            config.mode == ToolMode.API
            and config.enable_dynamic_api_tools is False
            and tool.type == ToolType.ALL_API
        ):
            return True
        if config.read_only_mode and tool.type != ToolType.READ:
            return True
        if config.include is not None:
            return tool.name not in config.include
        if config.exclude is not None:
            return tool.name in config.exclude
        return False

    return [tool for tool in tools if not should_filter(tool)]
