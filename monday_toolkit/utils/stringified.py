import json
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError  # type: ignore
from pydantic.alias_generators import to_camel  # type: ignore

from monday_toolkit.exceptions.toolkit_exceptions import ToolInputError

STRINGIFIED_SUFFIX = "Stringified"


def fallback_to_stringified_version_if_null(
    tool_input: BaseModel,
    key: str,
    schema: TypeAdapter,
) -> None:
    """
    Fill ``tool_input.<key>`` from its JSON-string twin ``<key>_stringified``.

    Some agent clients cannot send nested objects and pass them as JSON text
    instead. They may also wrap the payload as ``{"<key>": ...}``; a single-key
    wrapper is unwrapped.

    Args:
        tool_input: Validated tool input model, modified in place
        key: Attribute holding the structured value, e.g. "filters"
        schema: Type adapter the parsed JSON must satisfy
    Raises:
        ToolInputError: the string is not JSON or does not match ``schema``
    """
    wire_key = to_camel(key)
    stringified_name = f"{wire_key}{STRINGIFIED_SUFFIX}"
    stringified_value = getattr(tool_input, f"{key}_stringified", None)
    if getattr(tool_input, key, None) or not stringified_value:
        return

    try:
        parsed: Any = json.loads(stringified_value)
    except ValueError as e:
        raise ToolInputError(f"{stringified_name} is not a valid JSON") from e

    if isinstance(parsed, dict) and len(parsed) == 1:
        wrapper_key = next(iter(parsed))
        if wrapper_key in (key, wire_key):
            parsed = parsed[wrapper_key]

    try:
        value = schema.validate_python(parsed)
    except ValidationError as e:
        raise ToolInputError(
            f"JSON string defined as {stringified_name} does not match the specified schema"
        ) from e

    setattr(tool_input, key, value)
