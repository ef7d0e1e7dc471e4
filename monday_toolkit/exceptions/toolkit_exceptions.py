from typing import List, Optional


class MondayToolkitError(Exception):
    """Base exception for toolkit errors"""

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MondayApiError(MondayToolkitError):
    """Raised when the monday.com API answers with GraphQL or request errors"""

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.status_code = status_code


class MondayRequestTimeoutError(MondayToolkitError):
    """Raised when a request to the monday.com API exceeds its timeout"""

    def __init__(self, message: str = "Request to monday.com API timed out") -> None:
        super().__init__(message)


class ToolInputError(MondayToolkitError):
    """Raised when tool arguments are missing, malformed or fail validation"""


class ToolNotFoundError(MondayToolkitError):
    """Raised when a tool name is not known to the toolkit"""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Tool '{tool_name}' not found")
        self.tool_name = tool_name
