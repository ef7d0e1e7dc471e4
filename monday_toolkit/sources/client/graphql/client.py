import asyncio
import logging
from typing import Any

import aiohttp  # type: ignore

from monday_toolkit.sources.client.graphql.response import GraphQLResponse

logger = logging.getLogger(__name__)


class GraphQLClient:
    """POSTs GraphQL documents to a single endpoint.

    Every call opens its own ``ClientSession`` so the client holds no
    connection state and can be shared across event loops.
    """

    def __init__(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30,
    ) -> None:
        self.endpoint = endpoint
        self.headers = headers or {}
        self.timeout = timeout

    @staticmethod
    def build_payload(
        query: str,
        variables: dict[str, Any] | None,
        operation_name: str | None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query, "variables": variables or {}}
        if operation_name:
            payload["operationName"] = operation_name
        return payload

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> GraphQLResponse:
        """Send one operation.

        ``headers`` are merged over the client defaults for this call only and
        ``timeout`` overrides the client timeout. Transport and decoding
        problems come back as an unsuccessful ``GraphQLResponse``; exceeding
        the timeout raises ``asyncio.TimeoutError``.
        """
        payload = self.build_payload(query, variables, operation_name)
        label = operation_name or "anonymous operation"
        session_timeout = aiohttp.ClientTimeout(total=timeout or self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=session_timeout) as session:
                async with session.post(
                    self.endpoint,
                    json=payload,
                    headers={**self.headers, **(headers or {})},
                ) as response:
                    body = await response.json(content_type=None)
                    status = response.status
        except asyncio.TimeoutError:
            raise
        except aiohttp.ClientError as e:
            logger.debug(f"GraphQL transport error for {label}: {e}")
            return GraphQLResponse(success=False, message=f"Request failed: {e!s}")
        except ValueError as e:
            logger.debug(f"Non-JSON body for {label}: {e}")
            return GraphQLResponse(success=False, message=f"Request failed: invalid JSON response ({e!s})")

        if not isinstance(body, dict):
            return GraphQLResponse(
                success=False,
                message=f"Unexpected response body (HTTP {status})",
                status_code=status,
            )
        return GraphQLResponse.from_response(body, status_code=status)
