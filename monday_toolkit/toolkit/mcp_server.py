"""
Model Context Protocol server exposing the enabled toolkit tools.
"""

import logging
from typing import Any, Dict, List, Optional

import mcp.types as types  # type: ignore
from mcp.server.lowlevel import NotificationOptions, Server  # type: ignore
from mcp.server.stdio import stdio_server  # type: ignore

from monday_toolkit.agents.tools.models import MondayTool
from monday_toolkit.exceptions.toolkit_exceptions import MondayToolkitError
from monday_toolkit.toolkit.toolkit import MondayAgentToolkit

logger = logging.getLogger(__name__)

SERVER_NAME = "monday.com"
SERVER_VERSION = "1.0.0"


def to_mcp_tool(tool: MondayTool) -> types.Tool:
    return types.Tool(
        name=tool.name,
        title=tool.annotations.title,
        description=tool.description,
        inputSchema=tool.input_schema(),
        annotations=types.ToolAnnotations(**tool.annotations.to_wire()),
    )


def create_mcp_server(toolkit: MondayAgentToolkit) -> Server:
    """
    Build an MCP server whose tools follow the toolkit's enabled state.

    When a call changes which tools are enabled (``manage_tools``), clients
    are sent a tools list-changed notification.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [to_mcp_tool(tool) for tool in toolkit.list_enabled_tools()]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        status_before = toolkit.get_tools_status()
        outcome = await toolkit.call_tool(name, arguments or {})

        if toolkit.get_tools_status() != status_before:
            await server.request_context.session.send_tool_list_changed()

        if outcome.is_error:
            # Raised errors are returned to the client as results with isError set
            raise MondayToolkitError(outcome.text)
        return [types.TextContent(type="text", text=outcome.text)]

    return server


def initialization_options(server: Server) -> Any:
    return server.create_initialization_options(
        notification_options=NotificationOptions(tools_changed=True),
    )


async def run_stdio(toolkit: MondayAgentToolkit) -> None:
    """Serve the toolkit over stdin/stdout until the client disconnects."""
    server = create_mcp_server(toolkit)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("monday.com MCP server running on stdio")
        await server.run(read_stream, write_stream, initialization_options(server))
