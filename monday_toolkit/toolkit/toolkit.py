"""
monday.com agent toolkit: the configured set of tools with their enabled state.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from monday_toolkit.agents.actions.monday.catalog import build_api_tools
from monday_toolkit.agents.tool.models import MondayApiToolContext, ToolAnnotations
from monday_toolkit.agents.tools.config import MondayAgentToolkitConfig
from monday_toolkit.agents.tools.filtering import get_filtered_tools, select_tool_family
from monday_toolkit.agents.tools.models import MondayTool
from monday_toolkit.agents.tools.registry import ToolRegistry, bind_tools
from monday_toolkit.exceptions.toolkit_exceptions import MondayToolkitError, ToolNotFoundError
from monday_toolkit.sources.client.monday.monday import (
    API_URL,
    API_VERSION,
    MondayClient,
    MondayTokenConfig,
)
from monday_toolkit.toolkit.dynamic_tool_manager import DynamicToolManager
from monday_toolkit.toolkit.manage_tools import ManageTools
from monday_toolkit.utils.tokens import normalize_token

logger = logging.getLogger(__name__)


@dataclass
class CallOutcome:
    """Text returned to the agent and whether it reports a failure"""

    text: str
    is_error: bool = False


@dataclass
class ToolkitTool:
    """A tool exported for registration on another agent framework"""

    name: str
    description: str
    schema: Dict[str, Any]
    annotations: ToolAnnotations
    tool: MondayTool

    async def execute(self, arguments: Optional[Dict[str, Any]] = None) -> str:
        try:
            output = await self.tool.execute(arguments)
        except Exception as e:
            return f"Error: {str(e) or type(e).__name__}"
        return output.content


class MondayAgentToolkit:
    """
    monday.com tools selected by a MondayAgentToolkitConfig.

    The toolkit owns the API client, binds the tool catalog, applies the tool
    configuration and keeps track of which tools are enabled.
    """

    def __init__(self, config: MondayAgentToolkitConfig, client: Optional[MondayClient] = None) -> None:
        self.config = config
        self.api_token = normalize_token(config.monday_api_token)
        self.client = client or self._create_client(config)

        context_fields = config.context.model_dump() if config.context else {}
        context_fields["api_version"] = config.monday_api_version or API_VERSION
        self.context = MondayApiToolContext(**context_fields)

        self.registry = ToolRegistry()
        self.manager = DynamicToolManager()
        try:
            self._register_tools()
        except Exception as e:
            raise MondayToolkitError(f"Failed to initialize Monday Agent Toolkit: {e}") from e

    @staticmethod
    def _create_client(config: MondayAgentToolkitConfig) -> MondayClient:
        request_config = config.monday_api_request_config
        token_config = MondayTokenConfig(
            token=normalize_token(config.monday_api_token),
            api_version=config.monday_api_version or API_VERSION,
            endpoint=config.monday_api_endpoint or API_URL,
            timeout=request_config.timeout,
            headers=request_config.headers,
        )
        return MondayClient.build_with_config(token_config)

    def _register_tools(self) -> None:
        tools_configuration = self.config.tools_configuration
        api_tools = build_api_tools(self.client, self.context, self.api_token)
        # The apps framework tools are not shipped, so that family is empty
        family = select_tool_family(api_tools, [], tools_configuration)
        if not family:
            mode = tools_configuration.mode.value if tools_configuration and tools_configuration.mode else None
            logger.warning(f"No monday.com tools are available in mode {mode!r}")

        for tool in get_filtered_tools(family, tools_configuration):
            self._register(tool)

        if tools_configuration and tools_configuration.enable_tool_manager:
            for tool in bind_tools(ManageTools(self.manager)):
                self._register(tool)

        logger.info(f"monday.com toolkit ready with {len(self.registry)} tools")

    def _register(self, tool: MondayTool) -> None:
        self.registry.register(tool)
        self.manager.register_tool(tool, enabled_by_default=tool.enabled_by_default)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallOutcome:
        """
        Run a tool by name.

        Failures, including unknown or disabled tools, are reported in the
        outcome instead of being raised.
        """
        try:
            tool = self.registry.get_tool(name)
            if tool is None:
                raise ToolNotFoundError(name)
            if not self.manager.is_tool_enabled(name):
                raise MondayToolkitError(f"Tool {name} disabled")
            output = await tool.execute(arguments)
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            return CallOutcome(text=f"Failed to execute tool {name}: {str(e) or type(e).__name__}", is_error=True)
        return CallOutcome(text=output.content)

    def get_tools(self) -> List[ToolkitTool]:
        """All registered tools, enabled or not, with JSON schemas and bound handlers."""
        return [
            ToolkitTool(
                name=tool.name,
                description=tool.description,
                schema=tool.input_schema(),
                annotations=tool.annotations,
                tool=tool,
            )
            for tool in self.registry.get_all_tools().values()
        ]

    def list_enabled_tools(self) -> List[MondayTool]:
        return [tool for name, tool in self.registry.get_all_tools().items() if self.manager.is_tool_enabled(name)]

    def enable_tool(self, tool_name: str) -> bool:
        return self.manager.enable_tool(tool_name)

    def disable_tool(self, tool_name: str) -> bool:
        return self.manager.disable_tool(tool_name)

    def is_tool_enabled(self, tool_name: str) -> bool:
        return self.manager.is_tool_enabled(tool_name)

    def get_tools_status(self) -> Dict[str, bool]:
        return self.manager.get_tools_status()

    def get_dynamic_tool_names(self) -> List[str]:
        return self.manager.get_dynamic_tool_names()
