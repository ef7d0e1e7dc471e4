from monday_toolkit.agents.tool.enums import ToolMode, ToolType
from monday_toolkit.agents.tools.config import MondayAgentToolkitConfig, ToolsConfiguration
from monday_toolkit.toolkit.toolkit import CallOutcome, MondayAgentToolkit

__all__ = [
    "CallOutcome",
    "MondayAgentToolkit",
    "MondayAgentToolkitConfig",
    "ToolMode",
    "ToolType",
    "ToolsConfiguration",
]
