import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class ToolHandle(Protocol):
    """Registration of a tool on a server that can be switched on and off"""

    def enable(self) -> None: ...

    def disable(self) -> None: ...


@dataclass
class DynamicTool:
    instance: Any
    handle: Optional[ToolHandle]
    enabled: bool
    enabled_by_default: bool


class DynamicToolManager:
    """
    Tracks which registered tools are enabled.

    A tool starts in its default state. Switching a tool calls ``enable`` or
    ``disable`` on its handle, when one was given, so the hosting server can
    follow.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, DynamicTool] = {}

    def register_tool(
        self,
        tool: Any,
        handle: Optional[ToolHandle] = None,
        enabled_by_default: Optional[bool] = None,
    ) -> None:
        """
        Register a tool for dynamic management.

        Args:
            tool: Tool instance; only its ``name`` (and ``enabled_by_default``) are used
            handle: Server registration to keep in sync
            enabled_by_default: Initial state, defaults to the tool's own setting
        """
        if enabled_by_default is None:
            enabled_by_default = getattr(tool, "enabled_by_default", True)

        self._tools[tool.name] = DynamicTool(
            instance=tool,
            handle=handle,
            enabled=enabled_by_default,
            enabled_by_default=enabled_by_default,
        )
        if not enabled_by_default and handle is not None:
            handle.disable()

    def _set_enabled(self, dynamic_tool: DynamicTool, enabled: bool) -> None:
        if dynamic_tool.enabled == enabled:
            return
        if dynamic_tool.handle is not None:
            if enabled:
                dynamic_tool.handle.enable()
            else:
                dynamic_tool.handle.disable()
        dynamic_tool.enabled = enabled
        logger.debug(f"Tool {dynamic_tool.instance.name} {'enabled' if enabled else 'disabled'}")

    def enable_tool(self, tool_name: str) -> bool:
        """Enable a tool. Returns False when the tool is unknown."""
        dynamic_tool = self._tools.get(tool_name)
        if dynamic_tool is None:
            return False
        self._set_enabled(dynamic_tool, True)
        return True

    def disable_tool(self, tool_name: str) -> bool:
        """Disable a tool. Returns False when the tool is unknown."""
        dynamic_tool = self._tools.get(tool_name)
        if dynamic_tool is None:
            return False
        self._set_enabled(dynamic_tool, False)
        return True

    def is_tool_enabled(self, tool_name: str) -> bool:
        dynamic_tool = self._tools.get(tool_name)
        return dynamic_tool.enabled if dynamic_tool else False

    def is_tool_enabled_by_default(self, tool_name: str) -> bool:
        # Unknown tools report the default of a freshly registered tool
        dynamic_tool = self._tools.get(tool_name)
        return dynamic_tool.enabled_by_default if dynamic_tool else True

    def get_tools_status(self) -> Dict[str, bool]:
        return {name: dynamic_tool.enabled for name, dynamic_tool in self._tools.items()}

    def get_dynamic_tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def get_detailed_tools_status(self) -> Dict[str, Dict[str, bool]]:
        return {
            name: {"enabled": dynamic_tool.enabled, "enabled_by_default": dynamic_tool.enabled_by_default}
            for name, dynamic_tool in self._tools.items()
        }

    def reset_tool_to_default(self, tool_name: str) -> bool:
        """Restore a tool's default state. Returns False when the tool is unknown."""
        dynamic_tool = self._tools.get(tool_name)
        if dynamic_tool is None:
            return False
        self._set_enabled(dynamic_tool, dynamic_tool.enabled_by_default)
        return True

    def get_all_dynamic_tools(self) -> Dict[str, DynamicTool]:
        return self._tools

    def clear(self) -> None:
        self._tools.clear()
