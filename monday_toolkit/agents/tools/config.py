"""
Configuration models for the agent toolkit.
"""

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field  # type: ignore
from pydantic.alias_generators import to_camel  # type: ignore

from monday_toolkit.agents.tool.enums import ToolMode
from monday_toolkit.agents.tool.models import MondayApiToolContext


class ToolsConfiguration(BaseModel):
    """
    Which tools the toolkit exposes.

    Attributes:
        include: Only these tool names (takes precedence over ``exclude``)
        exclude: Tool names to leave out
        read_only_mode: Keep only read tools
        mode: Tool family to expose
        enable_dynamic_api_tools: In API mode, ``False`` drops the free-form API
            tools, ``"only"`` keeps nothing but them
        enable_tool_manager: Register the ``manage_tools`` tool
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    read_only_mode: bool = False
    mode: Optional[ToolMode] = None
    enable_dynamic_api_tools: Optional[Union[bool, Literal["only"]]] = None
    enable_tool_manager: bool = False


class MondayApiRequestConfig(BaseModel):
    """Extra settings applied to every monday.com API request"""
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: float = Field(default=30, gt=0)


class MondayAgentToolkitConfig(BaseModel):
    """
    Toolkit configuration.

    Attributes:
        monday_api_token: monday.com API token
        monday_api_version: API-Version header (defaults to the client's version)
        monday_api_endpoint: GraphQL endpoint override
        monday_api_request_config: Extra request settings (``headers``, ``timeout``)
        tools_configuration: Tool selection
        context: Context shared by every tool
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    monday_api_token: str = Field(..., min_length=1)
    monday_api_version: Optional[str] = None
    monday_api_endpoint: Optional[str] = None
    monday_api_request_config: MondayApiRequestConfig = Field(default_factory=MondayApiRequestConfig)
    tools_configuration: Optional[ToolsConfiguration] = None
    context: Optional[MondayApiToolContext] = None
