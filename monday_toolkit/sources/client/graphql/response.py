from typing import Any

from pydantic import BaseModel  # type: ignore

# Top-level keys monday.com sends next to ``error_message``
MONDAY_ERROR_DETAIL_KEYS = ("error_code", "status_code", "error_data")


class GraphQLError(BaseModel):
    """A single entry of a GraphQL ``errors`` list."""

    message: str
    locations: list[dict[str, int]] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> "GraphQLError":
        return cls(
            message=entry.get("message", "Unknown error"),
            locations=entry.get("locations"),
            path=entry.get("path"),
            extensions=entry.get("extensions"),
        )


def _collect_errors(body: dict[str, Any]) -> list[GraphQLError]:
    if body.get("errors"):
        return [GraphQLError.from_entry(entry) for entry in body["errors"]]
    if body.get("error_message"):
        # auth, complexity and rate limit failures arrive outside the errors list
        details = {key: body[key] for key in MONDAY_ERROR_DETAIL_KEYS if key in body}
        return [GraphQLError(message=str(body["error_message"]), extensions=details or None)]
    return []


class GraphQLResponse(BaseModel):
    """Outcome of one GraphQL request."""

    success: bool
    data: dict[str, Any] | None = None
    errors: list[GraphQLError] | None = None
    extensions: dict[str, Any] | None = None
    message: str | None = None
    status_code: int | None = None

    def error_messages(self) -> list[str]:
        """All error messages carried by the response, in order."""
        if self.errors:
            return [error.message for error in self.errors]
        return [self.message] if self.message else []

    @classmethod
    def from_response(
        cls,
        response_data: dict[str, Any],
        status_code: int | None = None,
    ) -> "GraphQLResponse":
        """Build a response from a decoded JSON body, folding monday's
        ``error_message`` bodies into ``errors``."""
        errors = _collect_errors(response_data)
        return cls(
            success=not errors,
            data=response_data.get("data"),
            errors=errors or None,
            extensions=response_data.get("extensions"),
            message=errors[0].message if errors else None,
            status_code=status_code,
        )
