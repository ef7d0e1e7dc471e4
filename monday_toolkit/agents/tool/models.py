from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict  # type: ignore
from pydantic.alias_generators import to_camel  # type: ignore


class ToolAnnotations(BaseModel):
    """Behaviour hints advertised to agent clients"""

    title: str
    read_only_hint: bool = False
    destructive_hint: bool = False
    idempotent_hint: bool = False
    open_world_hint: bool = True

    def to_wire(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "readOnlyHint": self.read_only_hint,
            "destructiveHint": self.destructive_hint,
            "idempotentHint": self.idempotent_hint,
            "openWorldHint": self.open_world_hint,
        }


class ToolOutput(BaseModel):
    """Result of a tool execution"""

    content: str
    metadata: Optional[Dict[str, Any]] = None


class MondayApiToolContext(BaseModel):
    """
    Execution context shared by every API tool.

    Attributes:
        board_id: When set, tools that take a board id act on this board and
            do not advertise ``boardId`` as an input
        api_version: monday.com API version requests are sent with
        agent_type: Identifier of the hosting agent, reported in tracking
        agent_client_name: Name of the agent client, reported in tracking
        client_redirect_uris: OAuth redirect URIs of the client, reported in tracking
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    board_id: Optional[str] = None
    api_version: Optional[str] = None
    agent_type: Optional[str] = None
    agent_client_name: Optional[str] = None
    client_redirect_uris: Optional[List[str]] = None

    def tracking_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ToolInput(BaseModel):
    """
    Base class for tool inputs.

    Fields are declared in snake_case and exchanged in camelCase
    (``board_id`` <-> ``boardId``). Inputs whose wire names are already
    snake_case switch the generator off with ``alias_generator=None``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def field_wire_name(model: type[BaseModel], field_name: str) -> str:
    """Name under which ``field_name`` travels in tool arguments."""
    field = model.model_fields[field_name]
    return field.alias or field_name


def _coerce_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# monday.com IDs are strings on the wire; agents often send them as numbers
MondayId = Annotated[str, BeforeValidator(_coerce_id)]
