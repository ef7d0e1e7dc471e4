from enum import Enum
from typing import Optional

from pydantic import Field  # type: ignore

from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError
from monday_toolkit.toolkit.dynamic_tool_manager import DynamicToolManager


class ManageToolsAction(str, Enum):
    ENABLE = "enable"
    DISABLE = "disable"
    STATUS = "status"
    LIST = "list"
    DETAILED = "detailed"
    RESET = "reset"


class ManageToolsInput(ToolInput):
    action: ManageToolsAction = Field(
        description=(
            'Action to perform: "list" or "detailed" to discover available tools, "status" to check current '
            'states, "enable" to activate needed tools, "disable" to deactivate tools, "reset" to restore defaults'
        )
    )
    tool_name: Optional[str] = Field(
        default=None,
        description="Name of the tool to manage (required for enable/disable/status/reset)",
    )


def _state(enabled: bool) -> str:
    return "enabled" if enabled else "disabled"


class ManageTools:
    """Lets the agent discover tools and switch them on and off"""

    def __init__(self, manager: DynamicToolManager) -> None:
        self.manager = manager

    @tool(
        name="manage_tools",
        type=ToolType.READ,
        title="Discover & Manage monday.com Tools",
        description=(
            "Discover and manage available monday.com tools. Use this tool first to see what tools are "
            "available, check which ones are active/inactive, and enable any tools you need for your tasks. "
            "When enabling a tool, you will be asked for confirmation first. Essential for understanding your "
            "monday.com toolkit capabilities."
        ),
        input_model=ManageToolsInput,
        open_world=False,
    )
    async def manage_tools(self, tool_input: ManageToolsInput) -> str:
        action = tool_input.action
        tool_name = tool_input.tool_name

        if action in (ManageToolsAction.ENABLE, ManageToolsAction.DISABLE, ManageToolsAction.RESET) and not tool_name:
            raise ToolInputError(f"Tool name is required for {action.value} action")

        if action == ManageToolsAction.ENABLE:
            if self.manager.is_tool_enabled(tool_name):
                return f"Tool '{tool_name}' is already enabled"
            if self.manager.enable_tool(tool_name):
                return f"✅ Tool '{tool_name}' has been enabled and is now available for use"
            return f"❌ Failed to enable tool '{tool_name}' (tool not found)"

        if action == ManageToolsAction.DISABLE:
            if self.manager.disable_tool(tool_name):
                return f"Tool '{tool_name}' has been disabled"
            return f"Failed to disable tool '{tool_name}' (tool not found)"

        if action == ManageToolsAction.STATUS:
            if tool_name:
                return f"Tool '{tool_name}' is {_state(self.manager.is_tool_enabled(tool_name))}"
            status_text = "\n".join(
                f"{name}: {_state(enabled)}" for name, enabled in self.manager.get_tools_status().items()
            )
            return f"All tools status:\n{status_text}"

        if action == ManageToolsAction.DETAILED:
            return self._discovery_report()

        if action == ManageToolsAction.RESET:
            reset = self.manager.reset_tool_to_default(tool_name)
            if not reset:
                return f"Failed to reset tool '{tool_name}' (tool not found)"
            default_state = _state(self.manager.is_tool_enabled_by_default(tool_name))
            return f"Tool '{tool_name}' has been reset to its default state ({default_state})"

        tools_list = ", ".join(
            f"{name} ({_state(enabled)})" for name, enabled in self.manager.get_tools_status().items()
        )
        return f"Available tools: {tools_list}"

    def _discovery_report(self) -> str:
        detailed = self.manager.get_detailed_tools_status()
        enabled_tools = [(name, status) for name, status in detailed.items() if status["enabled"]]
        disabled_tools = [(name, status) for name, status in detailed.items() if not status["enabled"]]

        content = "monday.com Tools Discovery:\n\n"
        if enabled_tools:
            content += "✅ ACTIVE TOOLS (ready to use):\n"
            content += "\n".join(
                f"  • {name} (default: {_state(status['enabled_by_default'])})" for name, status in enabled_tools
            )
        if disabled_tools:
            content += "\n\n⚠️  INACTIVE TOOLS (need activation):\n"
            content += "\n".join(
                f"  • {name} (default: {_state(status['enabled_by_default'])}) - use "
                f'{{"action": "enable", "toolName": "{name}"}} to activate'
                for name, status in disabled_tools
            )
        return content
