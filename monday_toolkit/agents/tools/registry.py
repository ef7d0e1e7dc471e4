"""
Registry of tools bound to a toolkit instance.
"""

import logging
from typing import Any, Dict, List, Optional

from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayApiToolContext
from monday_toolkit.agents.tools.decorator import get_tool_definition
from monday_toolkit.agents.tools.models import MondayTool


def bind_tools(
    owner: Any,
    context: Optional[MondayApiToolContext] = None,
    api_token: Optional[str] = None,
) -> List[MondayTool]:
    """
    Create a MondayTool for every ``@tool`` method of ``owner``.

    Args:
        owner: Instance whose class declares decorated methods
        context: Context passed to each tool
        api_token: Token used for tracking metadata
    Returns:
        Tools in declaration order
    """
    tools: List[MondayTool] = []
    for attr_name, attr in vars(type(owner)).items():
        definition = get_tool_definition(attr)
        if definition is None:
            continue
        tools.append(
            MondayTool(
                definition=definition,
                handler=getattr(owner, attr_name),
                context=context,
                api_token=api_token,
            )
        )
    return tools


class ToolRegistry:
    """Registry for the tools of one toolkit, keyed by tool name."""

    def __init__(self) -> None:
        self._tools: Dict[str, MondayTool] = {}
        self.logger = logging.getLogger(__name__)

    def register(self, tool: MondayTool) -> None:
        """
        Register a tool.

        Args:
            tool: Tool to register; a name that is already taken is skipped
        """
        if tool.name in self._tools:
            self.logger.warning(f"Tool '{tool.name}' already registered, skipping")
            return
        self._tools[tool.name] = tool
        self.logger.debug(f"Registered tool: {tool.name}")

    def get_tool(self, tool_name: str) -> Optional[MondayTool]:
        return self._tools.get(tool_name)

    def get_tools_by_type(self, tool_type: ToolType) -> List[MondayTool]:
        return [tool for tool in self._tools.values() if tool.type == tool_type]

    def list_tools(self) -> List[str]:
        """
        List all registered tool names.

        Returns:
            Tool names in registration order
        """
        return list(self._tools.keys())

    def get_all_tools(self) -> Dict[str, MondayTool]:
        return self._tools.copy()

    def search_tools(self, query: str) -> List[MondayTool]:
        """
        Search tools whose name or description contains ``query`` (case-insensitive).
        """
        query_lower = query.lower()
        return [
            tool for name, tool in self._tools.items()
            if query_lower in name.lower() or query_lower in tool.description.lower()
        ]

    def clear(self) -> None:
        self._tools.clear()

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
