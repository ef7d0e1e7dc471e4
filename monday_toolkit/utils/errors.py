from typing import NoReturn

from monday_toolkit.exceptions.toolkit_exceptions import (
    MondayApiError,
    MondayRequestTimeoutError,
    MondayToolkitError,
)

SEARCH_TIMEOUT_MESSAGE = "Search has timed out, try providing alternative search term"


def rethrow_with_context(error: BaseException, operation: str) -> NoReturn:
    """
    Raise a MondayToolkitError describing which operation failed.
    GraphQL error messages are joined with ", " when the error carries them.
    Args:
        error: The caught exception
        operation: What was being attempted, e.g. "create item"
    Raises:
        MondayToolkitError: always, chained to ``error``
    """
    if isinstance(error, MondayApiError) and error.errors:
        details = ", ".join(error.errors)
    else:
        details = str(error) or "Unknown error"
    raise MondayToolkitError(f"Failed to {operation}: {details}") from error


def raise_if_search_timeout(error: BaseException) -> None:
    if isinstance(error, MondayRequestTimeoutError):
        raise MondayToolkitError(SEARCH_TIMEOUT_MESSAGE) from error
