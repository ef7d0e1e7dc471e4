"""
Global pytest configuration and fixtures for the monday.com toolkit tests.

The monday.com API is replaced by FakeMondayClient: it records every request
and answers with responses queued per GraphQL operation name.
"""

import os
import re
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Generator, List, Optional, Union

import pytest  # type: ignore
from faker import Faker  # type: ignore

from monday_toolkit.agents.tool.models import MondayApiToolContext
from monday_toolkit.agents.tools.registry import bind_tools
from monday_toolkit.sources.client.monday.monday import MondayClient, MondayGraphQLClientViaToken

fake: Faker = Faker()

_OPERATION_NAME = re.compile(r"\b(?:query|mutation)\s+(\w+)")


@dataclass
class RecordedRequest:
    operation: str
    query: str
    variables: Dict[str, Any]
    version_override: Optional[str]
    timeout: Optional[float]


class FakeMondayClient(MondayClient):
    """MondayClient answering from queued responses instead of the network."""

    def __init__(self) -> None:
        super().__init__(MondayGraphQLClientViaToken(token="test-token"))
        self.requests: List[RecordedRequest] = []
        self._responses: Dict[str, Deque[Union[Dict[str, Any], BaseException]]] = defaultdict(deque)

    def respond(self, operation: str, *responses: Union[Dict[str, Any], BaseException]) -> "FakeMondayClient":
        """Queue responses (data dicts or exceptions to raise) for a GraphQL operation name."""
        self._responses[operation].extend(responses)
        return self

    async def request(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        version_override: Optional[str] = None,
        timeout: Optional[float] = None,
        operation_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        match = _OPERATION_NAME.search(query)
        operation = match.group(1) if match else "anonymous"
        self.requests.append(RecordedRequest(operation, query, dict(variables or {}), version_override, timeout))

        queue = self._responses.get(operation)
        if not queue:
            return {}
        response = queue.popleft()
        if isinstance(response, BaseException):
            raise response
        return response

    def operations(self) -> List[str]:
        return [recorded.operation for recorded in self.requests]

    def last(self, operation: str) -> RecordedRequest:
        return [recorded for recorded in self.requests if recorded.operation == operation][-1]


# ============================================================================
# Session-level fixtures
# ============================================================================


@pytest.fixture(scope="session")
def faker_instance() -> Faker:
    """
    Provide a Faker instance for generating test data.

    Returns:
        Shared Faker instance
    """
    return fake


# ============================================================================
# Function-level fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """
    Reset environment state around each test and keep usage tracking off.
    """
    original_env: Dict[str, str] = os.environ.copy()
    os.environ["MONDAY_TOOLKIT_DISABLE_TRACKING"] = "true"

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def monday_client() -> FakeMondayClient:
    return FakeMondayClient()


@pytest.fixture
def tool_context() -> MondayApiToolContext:
    return MondayApiToolContext(api_version="2025-10")


@pytest.fixture
def run_tool(monday_client: FakeMondayClient, tool_context: MondayApiToolContext):
    """
    Execute a tool of an action class against the fake client.

    Returns:
        Coroutine function ``run(action_class, tool_name, arguments=None, context=None)``
        resolving to the tool's text output
    """
    async def run(
        action_class: type,
        tool_name: str,
        arguments: Optional[Dict[str, Any]] = None,
        context: Optional[MondayApiToolContext] = None,
    ) -> str:
        context = context or tool_context
        tools = {t.name: t for t in bind_tools(action_class(monday_client, context), context=context)}
        output = await tools[tool_name].execute(arguments)
        return output.content

    return run
