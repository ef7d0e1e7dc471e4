from typing import Any, Dict, Optional

from monday_toolkit.sources.client.monday.graphql_op import MondayGraphQLOperations
from monday_toolkit.sources.client.monday.monday import MondayClient


def drop_unset(variables: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Leave out the optional arguments a tool did not set."""
    return {key: value for key, value in (variables or {}).items() if value is not None}


class MondayDataSource:
    """
    monday.com GraphQL operations by registry name.

    Operations are looked up in MondayGraphQLOperations, completed with their
    fragments and sent through the MondayClient. Errors returned by the API
    are raised as MondayApiError by the client.
    """

    def __init__(self, monday_client: MondayClient) -> None:
        """
        Initialize the monday.com GraphQL data source.

        Args:
            monday_client (MondayClient): monday.com client instance
        """
        self._monday_client = monday_client

    async def query(
        self,
        operation_name: str,
        variables: Optional[Dict[str, Any]] = None,
        version_override: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Run a registered query and return its data.

        Example:
            await data_source.query("get_board_schema", {"boardId": "123"})
        """
        return await self._execute("query", operation_name, variables, version_override, timeout)

    async def mutation(
        self,
        operation_name: str,
        variables: Optional[Dict[str, Any]] = None,
        version_override: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Run a registered mutation and return its data."""
        return await self._execute("mutation", operation_name, variables, version_override, timeout)

    async def raw(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        version_override: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run an arbitrary GraphQL document. Explicit ``null`` variables are kept."""
        return await self._monday_client.request(
            query=query,
            variables=variables,
            version_override=version_override,
        )

    async def _execute(
        self,
        operation_type: str,
        operation_name: str,
        variables: Optional[Dict[str, Any]],
        version_override: Optional[str],
        timeout: Optional[float],
    ) -> Dict[str, Any]:
        query = MondayGraphQLOperations.get_operation_with_fragments(operation_type, operation_name)
        if not query:
            raise ValueError(f"Unknown {operation_type} operation: {operation_name}")
        return await self._monday_client.request(
            query=query,
            variables=drop_unset(variables),
            version_override=version_override,
            timeout=timeout,
        )
