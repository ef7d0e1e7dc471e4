import asyncio
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field  # type: ignore

from monday_toolkit.exceptions.toolkit_exceptions import (
    MondayApiError,
    MondayRequestTimeoutError,
)
from monday_toolkit.sources.client.graphql.client import GraphQLClient

API_URL = "https://api.monday.com/v2"
API_VERSION = "2025-10"
USER_AGENT = "monday-api-mcp"


class MondayGraphQLClientViaToken(GraphQLClient):
    """monday.com GraphQL client authenticated with a personal or app token."""

    def __init__(
        self,
        token: str,
        api_version: str = API_VERSION,
        endpoint: str = API_URL,
        timeout: float = 30,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        request_headers = {
            **(headers or {}),
            "Authorization": token,
            "Content-Type": "application/json",
            "API-Version": api_version,
            "user-agent": USER_AGENT,
        }
        super().__init__(endpoint=endpoint, headers=request_headers, timeout=timeout)
        self.token = token
        self.api_version = api_version

    def get_endpoint(self) -> str:
        """Get the GraphQL endpoint."""
        return self.endpoint


class MondayTokenConfig(BaseModel):
    """Configuration for the monday.com GraphQL client.
    Args:
        token: monday.com API token
        api_version: value of the API-Version header
        endpoint: GraphQL endpoint (defaults to monday.com's endpoint)
        timeout: Request timeout in seconds
        headers: Extra headers sent with every request
    """
    token: str = Field(..., description="monday.com API token")
    api_version: str = Field(default=API_VERSION, description="monday.com API version")
    endpoint: str = Field(default=API_URL, description="GraphQL endpoint URL")
    timeout: float = Field(default=30, description="Request timeout in seconds", gt=0)
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")

    def create_client(self) -> MondayGraphQLClientViaToken:
        """Create a monday.com GraphQL client."""
        return MondayGraphQLClientViaToken(
            token=self.token,
            api_version=self.api_version,
            endpoint=self.endpoint,
            timeout=self.timeout,
            headers=self.headers,
        )


class MondayClient:
    """Builder and request gateway for the monday.com GraphQL API."""

    def __init__(self, client: MondayGraphQLClientViaToken) -> None:
        """Initialize with a monday.com GraphQL client object."""
        self.client = client
        self.logger = logging.getLogger(__name__)

    def get_client(self) -> MondayGraphQLClientViaToken:
        """Return the monday.com GraphQL client object."""
        return self.client

    def get_graphql_client(self) -> MondayGraphQLClientViaToken:
        return self.client

    @property
    def api_version(self) -> str:
        return self.client.api_version

    @classmethod
    def build_with_config(cls, config: MondayTokenConfig) -> "MondayClient":
        """Build MondayClient with configuration.

        Args:
            config: monday.com configuration instance
        Returns:
            MondayClient instance
        """
        return cls(config.create_client())

    @classmethod
    def build_from_env(cls) -> "MondayClient":
        """Build MondayClient from MONDAY_TOKEN / MONDAY_API_VERSION / MONDAY_API_ENDPOINT."""
        token = os.getenv("MONDAY_TOKEN", "")
        if not token:
            raise ValueError("MONDAY_TOKEN environment variable is not set")
        config = MondayTokenConfig(
            token=token,
            api_version=os.getenv("MONDAY_API_VERSION") or API_VERSION,
            endpoint=os.getenv("MONDAY_API_ENDPOINT") or API_URL,
        )
        return cls.build_with_config(config)

    async def request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        version_override: Optional[str] = None,
        timeout: Optional[float] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Execute an operation and return its ``data`` payload.

        Args:
            query: GraphQL document
            variables: Operation variables, sent as given
            version_override: API-Version header for this call only (e.g. "dev")
            timeout: Request timeout in seconds for this call only
            operation_name: Optional operation name
        Returns:
            The ``data`` object of the response (empty dict when absent)
        Raises:
            MondayApiError: the API answered with errors
            MondayRequestTimeoutError: the request timed out
        """
        headers = {"API-Version": version_override} if version_override else None

        try:
            response = await self.client.execute(
                query=query,
                variables=variables,
                operation_name=operation_name,
                headers=headers,
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise MondayRequestTimeoutError() from e

        if not response.success:
            messages = response.error_messages() or ["Unknown error"]
            self.logger.debug(f"monday.com API returned errors: {messages}")
            raise MondayApiError(
                ", ".join(messages),
                errors=messages,
                status_code=response.status_code,
            )
        return response.data or {}
