import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Dict, Optional, Set

from pydantic import BaseModel, ValidationError  # type: ignore

from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import (
    MondayApiToolContext,
    ToolAnnotations,
    ToolOutput,
    field_wire_name,
)
from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError
from monday_toolkit.utils.tokens import extract_token_info
from monday_toolkit.utils.tracking import track_event

logger = logging.getLogger(__name__)

TOOL_EXECUTION_EVENT = "monday_mcp_tool_execution"
CONTEXT_BOARD_FIELD = "board_id"

# Keeps fire-and-forget tracking tasks referenced until they finish
_background_tasks: Set["asyncio.Task[None]"] = set()


@dataclass
class ToolDefinition:
    """Static description of a tool, attached to its handler by ``@tool``"""

    name: str
    type: ToolType
    description: str
    annotations: ToolAnnotations
    function: Callable[..., Awaitable[Any]]
    input_model: Optional[type[BaseModel]] = None
    enabled_by_default: bool = True


class MondayTool:
    """A tool definition bound to the object that executes it.

    Handles argument validation, execution timing and usage tracking so the
    handlers only deal with their own logic.
    """

    def __init__(
        self,
        definition: ToolDefinition,
        handler: Callable[..., Awaitable[Any]],
        context: Optional[MondayApiToolContext] = None,
        api_token: Optional[str] = None,
    ) -> None:
        self.definition = definition
        self.handler = handler
        self.context = context
        self.api_token = api_token

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def type(self) -> ToolType:
        return self.definition.type

    @property
    def annotations(self) -> ToolAnnotations:
        return self.definition.annotations

    @property
    def enabled_by_default(self) -> bool:
        return self.definition.enabled_by_default

    @property
    def description(self) -> str:
        return self.definition.description

    def _pinned_board_id(self) -> Optional[str]:
        model = self.definition.input_model
        if not self.context or not self.context.board_id or model is None:
            return None
        if CONTEXT_BOARD_FIELD not in model.model_fields:
            return None
        return self.context.board_id

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the tool arguments."""
        model = self.definition.input_model
        if model is None:
            return {"type": "object", "properties": {}}

        schema = model.model_json_schema(by_alias=True)
        schema.setdefault("properties", {})
        if self._pinned_board_id():
            wire_name = field_wire_name(model, CONTEXT_BOARD_FIELD)
            schema["properties"].pop(wire_name, None)
            if "required" in schema:
                schema["required"] = [name for name in schema["required"] if name != wire_name]
                if not schema["required"]:
                    del schema["required"]
        return schema

    def parse_input(self, arguments: Optional[Dict[str, Any]]) -> Optional[BaseModel]:
        """Validate raw arguments into the input model.

        Raises:
            ToolInputError: arguments do not satisfy the input model
        """
        model = self.definition.input_model
        if model is None:
            return None

        data = dict(arguments or {})
        pinned_board_id = self._pinned_board_id()
        if pinned_board_id:
            data[field_wire_name(model, CONTEXT_BOARD_FIELD)] = pinned_board_id

        try:
            return model.model_validate(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'input'}: {error['msg']}"
                for error in e.errors()
            )
            raise ToolInputError(f"Invalid arguments for tool {self.name}: {problems}") from e

    async def execute(self, arguments: Optional[Dict[str, Any]] = None) -> ToolOutput:
        """Validate ``arguments``, run the handler and track the execution."""
        start = time.perf_counter()
        is_error = False
        try:
            tool_input = self.parse_input(arguments)
            if tool_input is None:
                result = await self.handler()
            else:
                result = await self.handler(tool_input)
            if isinstance(result, ToolOutput):
                return result
            return ToolOutput(content=result)
        except Exception:
            is_error = True
            raise
        finally:
            execution_time_ms = int((time.perf_counter() - start) * 1000)
            self._track_execution(execution_time_ms, is_error)

    def _track_execution(self, execution_time_ms: int, is_error: bool) -> None:
        data: Dict[str, Any] = {
            "toolName": self.name,
            "executionTimeMs": execution_time_ms,
            "isError": is_error,
            "toolType": "monday_api_tool",
        }
        if self.context:
            data.update(self.context.tracking_fields())
        if self.api_token:
            data.update(extract_token_info(self.api_token))

        try:
            task = asyncio.get_running_loop().create_task(track_event(TOOL_EXECUTION_EVENT, data))
        except RuntimeError:
            logger.debug(f"No running event loop, skipping tracking for {self.name}")
            return
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
