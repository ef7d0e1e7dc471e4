from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

from pydantic import BaseModel  # type: ignore

from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import ToolAnnotations
from monday_toolkit.agents.tools.models import ToolDefinition

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

TOOL_DEFINITION_ATTR = "_tool_definition"


def tool(
    name: str,
    type: ToolType,
    title: str,
    description: str,
    input_model: Optional[type[BaseModel]] = None,
    read_only: bool = False,
    destructive: bool = False,
    idempotent: bool = False,
    open_world: bool = True,
    enabled_by_default: bool = True,
) -> Callable[[F], F]:
    """
    Decorator that marks an async method as an agent tool.

    Args:
        name: Tool name as exposed to agents
        type: Access level of the tool
        title: Human readable title
        description: What the tool does and when to use it
        input_model: Pydantic model validating the arguments (None for no arguments)
        read_only: The tool does not modify data
        destructive: The tool may delete or overwrite data
        idempotent: Repeating the call has no further effect
        open_world: The tool talks to an external system
        enabled_by_default: Whether the tool starts enabled in the toolkit

    Returns:
        Decorated function with its ToolDefinition attached

    Example:
        @tool(
            name="delete_item",
            type=ToolType.WRITE,
            title="Delete Item",
            description="Delete an item",
            input_model=DeleteItemInput,
            destructive=True,
        )
        async def delete_item(self, tool_input: DeleteItemInput) -> str:
            ...
    """
    def decorator(func: F) -> F:
        definition = ToolDefinition(
            name=name,
            type=type,
            description=description,
            annotations=ToolAnnotations(
                title=title,
                read_only_hint=read_only,
                destructive_hint=destructive,
                idempotent_hint=idempotent,
                open_world_hint=open_world,
            ),
            function=func,
            input_model=input_model,
            enabled_by_default=enabled_by_default,
        )
        setattr(func, TOOL_DEFINITION_ATTR, definition)
        return func

    return decorator


def get_tool_definition(func: Any) -> Optional[ToolDefinition]:
    return getattr(func, TOOL_DEFINITION_ATTR, None)
