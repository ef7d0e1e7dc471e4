"""
Catalog of the monday.com API tool groups.
"""

from typing import List, Optional, Type

from monday_toolkit.agents.actions.monday.activities import MondayActivities
from monday_toolkit.agents.actions.monday.api import MondayApi
from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.boards import MondayBoards
from monday_toolkit.agents.actions.monday.columns import MondayColumns
from monday_toolkit.agents.actions.monday.dashboards import MondayDashboards
from monday_toolkit.agents.actions.monday.docs import MondayDocs
from monday_toolkit.agents.actions.monday.forms import MondayForms
from monday_toolkit.agents.actions.monday.insights import MondayInsights
from monday_toolkit.agents.actions.monday.items import MondayItems
from monday_toolkit.agents.actions.monday.search import MondaySearch
from monday_toolkit.agents.actions.monday.users import MondayUsers
from monday_toolkit.agents.actions.monday.workspaces import MondayWorkspaces
from monday_toolkit.agents.tool.models import MondayApiToolContext
from monday_toolkit.agents.tools.models import MondayTool
from monday_toolkit.agents.tools.registry import bind_tools
from monday_toolkit.sources.client.monday.monday import MondayClient

MONDAY_ACTION_CLASSES: List[Type[MondayActions]] = [
    MondayItems,
    MondayBoards,
    MondayColumns,
    MondayActivities,
    MondayWorkspaces,
    MondayDocs,
    MondayUsers,
    MondaySearch,
    MondayForms,
    MondayInsights,
    MondayDashboards,
    MondayApi,
]


def build_api_tools(
    client: MondayClient,
    context: Optional[MondayApiToolContext] = None,
    api_token: Optional[str] = None,
) -> List[MondayTool]:
    """
    Instantiate every tool group and bind its tools.

    Args:
        client: monday.com client shared by the tools
        context: Context shared by the tools
        api_token: Token used for tracking metadata
    Returns:
        All API tools, grouped in catalog order
    """
    context = context or MondayApiToolContext()
    tools: List[MondayTool] = []
    for action_class in MONDAY_ACTION_CLASSES:
        tools.extend(bind_tools(action_class(client, context), context=context, api_token=api_token))
    return tools
