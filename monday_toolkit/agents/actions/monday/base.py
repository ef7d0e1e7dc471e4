from typing import Optional

from monday_toolkit.agents.tool.models import MondayApiToolContext
from monday_toolkit.sources.client.monday.monday import MondayClient
from monday_toolkit.sources.external.monday.monday_data_source import MondayDataSource


class MondayActions:
    """Base class of the monday.com tool groups exposed to agents"""

    def __init__(
        self,
        client: MondayClient,
        context: Optional[MondayApiToolContext] = None,
    ) -> None:
        """
        Args:
            client: monday.com client object
            context: Context shared by the tools of this group
        """
        self.client = MondayDataSource(client)
        self.context = context or MondayApiToolContext()
