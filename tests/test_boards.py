"""
Board and column tool tests.
"""
import json
import re

import pytest  # type: ignore

from monday_toolkit.agents.actions.monday.board_guidelines import column_filtering_guidelines
from monday_toolkit.agents.actions.monday.boards import (
    COLUMN_VALUE_NOT_SUPPORTED_MESSAGE,
    MondayBoards,
    column_value_data,
)
from monday_toolkit.agents.actions.monday.columns import MondayColumns
from monday_toolkit.agents.tool.models import MondayApiToolContext
from monday_toolkit.exceptions.toolkit_exceptions import (
    MondayApiError,
    MondayRequestTimeoutError,
    MondayToolkitError,
    ToolInputError,
)
from monday_toolkit.utils.errors import SEARCH_TIMEOUT_MESSAGE

BOARD_COLUMNS = [
    {"id": "name", "title": "Name", "type": "name"},
    {"id": "status", "title": "Status", "type": "status"},
    {"id": "subitems", "title": "Subitems", "type": "subtasks", "settings": {"boardIds": [555]}},
]


def items_page(items, cursor=None):
    return {"boards": [{"id": "1", "name": "Roadmap", "items_page": {"cursor": cursor, "items": items}}]}


@pytest.mark.tools
class TestColumnValues:
    """Readable column values."""

    def test_special_column_types(self):
        assert column_value_data({"type": "board_relation", "linked_items": [{"id": "1"}]}) == [{"id": "1"}]
        assert column_value_data({"type": "formula", "display_value": "42"}) == "42"
        assert column_value_data({"type": "mirror", "text": "x"}) == COLUMN_VALUE_NOT_SUPPORTED_MESSAGE

    def test_text_then_json_value(self):
        assert column_value_data({"type": "status", "text": "Done", "value": '{"index": 1}'}) == "Done"
        assert column_value_data({"type": "date", "text": "", "value": '{"date": "2025-01-01"}'}) == {
            "date": "2025-01-01"
        }
        assert column_value_data({"type": "text", "text": "", "value": "not json"}) == "not json"
        assert column_value_data({"type": "text", "text": None, "value": None}) is None


@pytest.mark.tools
class TestFilteringGuidelines:
    """Guidelines built from the board's column types."""

    def test_groups_column_ids_by_type(self):
        guidelines = column_filtering_guidelines(
            [
                {"id": "status", "type": "status"},
                {"id": "status_1", "type": "status"},
                {"id": "file", "type": "file"},
            ]
        )
        assert guidelines.startswith("\n[MEMORY] Remember the filtering guidelines")
        assert "- Column Type: status (Column IDs: status, status_1) - " in guidelines
        assert "Column Type: file" not in guidelines
        assert "Sub Items Columns MUST NOT BE USED FOR FILTERING" in guidelines

    def test_no_supported_columns(self):
        assert column_filtering_guidelines([{"id": "file", "type": "file"}, {"title": "broken"}]) == ""


@pytest.mark.tools
class TestBoardTools:
    """Board creation, structure and groups."""

    @pytest.mark.asyncio
    async def test_create_board(self, monday_client, run_tool):
        monday_client.respond("createBoard", {"create_board": {"id": "10"}})

        result = await run_tool(MondayBoards, "create_board", {"boardName": "Launch", "workspaceId": 3})

        assert result == "Board 10 successfully created"
        assert monday_client.last("createBoard").variables == {
            "boardName": "Launch",
            "boardKind": "public",
            "workspaceId": "3",
        }

    @pytest.mark.asyncio
    async def test_get_board_schema(self, monday_client, run_tool):
        monday_client.respond(
            "getBoardSchema",
            {"boards": [{"columns": BOARD_COLUMNS[:2], "groups": [{"id": "topics", "title": "Topics"}]}]},
        )

        result = await run_tool(MondayBoards, "get_board_schema", {"boardId": "1"})

        assert result == (
            "The current schema of the board 1 is: \n"
            "    \n\nColumns:\n Id - name\n Title - Name\n Type - name\n"
            "Id - status\n Title - Status\n Type - status\n"
            "    \n\nGroups:\n Id - topics\n Title - Topics"
        )

    @pytest.mark.asyncio
    async def test_get_board_info_with_sub_item_columns(self, monday_client, run_tool):
        monday_client.respond("GetBoardInfo", {"boards": [{"id": "1", "name": "Roadmap", "columns": BOARD_COLUMNS}]})
        monday_client.respond("GetBoardInfoJustColumns", {"boards": [{"columns": [{"id": "text", "type": "text"}]}]})

        result = json.loads(await run_tool(MondayBoards, "get_board_info", {"boardId": "1"}))

        assert result["board"]["subItemColumns"] == [{"id": "text", "type": "text"}]
        assert monday_client.last("GetBoardInfoJustColumns").variables == {"boardId": "555"}
        assert "Column Type: status (Column IDs: status)" in result["filteringGuidelines"]
        assert "COUNT_ITEMS" in result["aggregationGuidelines"]

    @pytest.mark.asyncio
    async def test_get_board_info_not_found(self, monday_client, run_tool):
        monday_client.respond("GetBoardInfo", {"boards": []})

        result = await run_tool(MondayBoards, "get_board_info", {"boardId": "404"})

        assert result == "Board with id 404 not found or you don't have access to it."

    @pytest.mark.asyncio
    async def test_create_group(self, monday_client, run_tool):
        monday_client.respond("createGroup", {"create_group": {"id": "new_group", "title": "Backlog"}})

        result = await run_tool(
            MondayBoards,
            "create_group",
            {
                "boardId": "1",
                "groupName": "Backlog",
                "groupColor": "#00c875",
                "relativeTo": "topics",
                "positionRelativeMethod": "after_at",
            },
        )

        assert result == 'Group "Backlog" (ID: new_group) successfully created'
        assert monday_client.last("createGroup").variables["positionRelativeMethod"] == "after_at"

    @pytest.mark.asyncio
    async def test_create_group_rejects_unknown_color(self, run_tool):
        with pytest.raises(ToolInputError, match="groupColor"):
            await run_tool(MondayBoards, "create_group", {"boardId": "1", "groupName": "x", "groupColor": "#123456"})

    @pytest.mark.asyncio
    async def test_board_activity(self, monday_client, run_tool):
        monday_client.respond(
            "GetBoardAllActivity",
            {
                "boards": [
                    {
                        "activity_logs": [
                            {
                                "created_at": "17000",
                                "event": "update_column_value",
                                "entity": "pulse",
                                "user_id": "5",
                                "data": '{"column_id":"status"}',
                            },
                            {"created_at": "17001", "event": "create_pulse", "entity": "pulse", "user_id": "6"},
                        ]
                    }
                ]
            },
        )

        result = await run_tool(
            MondayBoards,
            "get_board_activity",
            {"boardId": "1", "fromDate": "2025-01-01T00:00:00Z", "toDate": "2025-01-31T00:00:00Z"},
        )

        assert result == (
            "Activity logs for board 1 from 2025-01-01T00:00:00Z to 2025-01-31T00:00:00Z (2 entries):\n\n"
            '• 17000: update_column_value on pulse by user 5 - Data: {"column_id":"status"}\n'
            "• 17001: create_pulse on pulse by user 6"
        )
        assert monday_client.last("GetBoardAllActivity").variables["limit"] == 1000

    @pytest.mark.asyncio
    async def test_board_activity_defaults_to_last_30_days(self, monday_client, run_tool):
        result = await run_tool(MondayBoards, "get_board_activity", {"boardId": "1"})

        variables = monday_client.last("GetBoardAllActivity").variables
        assert variables["fromDate"].endswith("Z") and variables["toDate"].endswith("Z")
        assert variables["fromDate"] < variables["toDate"]
        assert result.startswith("No activity found for board 1 in the specified time range")


@pytest.mark.tools
class TestBoardItemsPage:
    """Paging, filters and smart search of board items."""

    @pytest.mark.asyncio
    async def test_plain_page(self, monday_client, run_tool):
        monday_client.respond(
            "GetBoardItemsPage",
            items_page([{"id": "1", "name": "Task", "created_at": "a", "updated_at": "b"}], cursor="next"),
        )

        result = json.loads(await run_tool(MondayBoards, "get_board_items_page", {"boardId": "1"}))

        assert result == {
            "board": {"id": "1", "name": "Roadmap"},
            "items": [{"id": "1", "name": "Task", "created_at": "a", "updated_at": "b"}],
            "pagination": {"has_more": True, "nextCursor": "next", "count": 1},
        }
        assert monday_client.last("GetBoardItemsPage").variables == {
            "boardId": "1",
            "limit": 25,
            "includeColumns": False,
            "includeSubItems": False,
        }

    @pytest.mark.asyncio
    async def test_filters_and_columns(self, monday_client, run_tool):
        monday_client.respond(
            "GetBoardItemsPage",
            items_page(
                [
                    {
                        "id": "1",
                        "name": "Task",
                        "column_values": [{"id": "status", "type": "status", "text": "Done"}],
                        "subitems": [{"id": "2", "name": "Sub"}, {"id": "3", "name": "Sub 2"}],
                    }
                ]
            ),
        )

        result = json.loads(
            await run_tool(
                MondayBoards,
                "get_board_items_page",
                {
                    "boardId": "1",
                    "includeColumns": True,
                    "includeSubItems": True,
                    "subItemLimit": 1,
                    "filters": [{"columnId": "status", "compareValue": [1]}],
                    "filtersOperator": "or",
                    "orderByStringified": '[{"columnId": "date", "direction": "desc"}]',
                },
            )
        )

        item = result["items"][0]
        assert item["column_values"] == {"status": "Done"}
        assert [sub["id"] for sub in item["subitems"]] == ["2"]
        assert result["pagination"]["has_more"] is False
        assert monday_client.last("GetBoardItemsPage").variables["queryParams"] == {
            "operator": "or",
            "rules": [{"column_id": "status", "compare_value": [1], "operator": "any_of"}],
            "order_by": [{"column_id": "date", "direction": "desc"}],
        }

    @pytest.mark.asyncio
    async def test_cursor_ignores_filters(self, monday_client, run_tool):
        monday_client.respond("GetBoardItemsPage", items_page([]))

        await run_tool(
            MondayBoards,
            "get_board_items_page",
            {"boardId": "1", "cursor": "abc", "searchTerm": "budget", "filters": [{"columnId": "x", "compareValue": "y"}]},
        )

        assert monday_client.operations() == ["GetBoardItemsPage"]
        variables = monday_client.last("GetBoardItemsPage").variables
        assert variables["cursor"] == "abc"
        assert "queryParams" not in variables

    @pytest.mark.asyncio
    async def test_smart_search_narrows_item_ids(self, monday_client, run_tool):
        monday_client.respond(
            "SearchItemsDev",
            {"search_items": {"results": [{"data": {"id": 7}}, {"data": {"id": 8}}]}},
        )
        monday_client.respond("GetBoardItemsPage", items_page([]))

        await run_tool(
            MondayBoards,
            "get_board_items_page",
            {"boardId": "1", "searchTerm": "budget", "itemIds": ["8", "9"]},
        )

        search = monday_client.last("SearchItemsDev")
        assert search.version_override == "dev"
        assert search.timeout == 10
        assert monday_client.last("GetBoardItemsPage").variables["queryParams"] == {"operator": "and", "ids": ["8"]}

    @pytest.mark.asyncio
    async def test_smart_search_without_matches(self, monday_client, run_tool):
        monday_client.respond("SearchItemsDev", {"search_items": {"results": [{"data": {"id": 7}}]}})

        result = await run_tool(
            MondayBoards,
            "get_board_items_page",
            {"boardId": "1", "searchTerm": "budget", "itemIds": ["9"]},
        )

        assert result == "No items found matching the specified searchTerm"
        assert monday_client.operations() == ["SearchItemsDev"]

    @pytest.mark.asyncio
    async def test_smart_search_falls_back_to_name_filter(self, monday_client, run_tool):
        monday_client.respond("SearchItemsDev", MondayApiError("search is not enabled"))
        monday_client.respond("GetBoardItemsPage", items_page([]))

        await run_tool(
            MondayBoards,
            "get_board_items_page",
            {
                "boardId": "1",
                "searchTerm": "budget",
                "filtersStringified": '[{"columnId": "name", "compareValue": "old"}, {"columnId": "status", "compareValue": [1]}]',
            },
        )

        assert monday_client.last("GetBoardItemsPage").variables["queryParams"]["rules"] == [
            {"column_id": "status", "compare_value": [1], "operator": "any_of"},
            {"column_id": "name", "compare_value": "budget", "operator": "contains_text"},
        ]

    @pytest.mark.asyncio
    async def test_smart_search_timeout(self, monday_client, run_tool):
        monday_client.respond("SearchItemsDev", MondayRequestTimeoutError())

        with pytest.raises(MondayToolkitError, match=re.escape(SEARCH_TIMEOUT_MESSAGE)):
            await run_tool(MondayBoards, "get_board_items_page", {"boardId": "1", "searchTerm": "budget"})

    @pytest.mark.asyncio
    async def test_pinned_board(self, monday_client, run_tool):
        monday_client.respond("GetBoardItemsPage", items_page([]))

        await run_tool(MondayBoards, "get_board_items_page", {}, context=MondayApiToolContext(board_id="99"))

        assert monday_client.last("GetBoardItemsPage").variables["boardId"] == "99"


@pytest.mark.tools
class TestFullBoardData:
    """Board data with updates and resolved users."""

    @pytest.mark.asyncio
    async def test_collects_users_and_stats(self, monday_client, run_tool):
        monday_client.respond(
            "getBoardData",
            {
                "boards": [
                    {
                        "id": "1",
                        "name": "Roadmap",
                        "columns": [],
                        "items_page": {
                            "items": [
                                {
                                    "id": "10",
                                    "name": "Task",
                                    "column_values": [
                                        {"id": "people", "persons_and_teams": [{"id": 3, "kind": "person"}, {"id": 4, "kind": "team"}]}
                                    ],
                                    "updates": [
                                        {
                                            "id": "u1",
                                            "creator_id": "1",
                                            "text_body": "hello",
                                            "replies": [{"id": "r1", "creator_id": "2", "text_body": "hi"}],
                                        }
                                    ],
                                }
                            ]
                        },
                    }
                ]
            },
        )
        monday_client.respond("getUsersByIds", {"users": [{"id": "1", "name": "Ada"}, {"id": "2", "name": "Bob"}]})

        result = json.loads(await run_tool(MondayBoards, "get_full_board_data", {"boardId": "1"}))

        assert monday_client.last("getUsersByIds").variables == {"userIds": ["1", "2", "3"]}
        update = result["board"]["items"][0]["updates"][0]
        assert update["creator"] == {"id": "1", "name": "Ada"}
        assert update["replies"][0]["creator"] == {"id": "2", "name": "Bob"}
        assert result["stats"] == {"total_items": 1, "total_updates": 1, "total_unique_creators": 2}

    @pytest.mark.asyncio
    async def test_missing_board(self, monday_client, run_tool):
        monday_client.respond("getBoardData", {"boards": []})

        with pytest.raises(MondayToolkitError, match="^Failed to get full board data: Board with ID 5 not found$"):
            await run_tool(MondayBoards, "get_full_board_data", {"boardId": "5"})


@pytest.mark.tools
class TestColumnTools:
    """Column creation, deletion and type information."""

    @pytest.mark.asyncio
    async def test_create_column_with_settings(self, monday_client, run_tool):
        monday_client.respond("createColumn", {"create_column": {"id": "status_2"}})

        result = await run_tool(
            MondayColumns,
            "create_column",
            {
                "boardId": "1",
                "columnType": "status",
                "columnTitle": "Stage",
                "columnSettings": '{"labels": {"1": "Done"}}',
            },
        )

        assert result == "Column status_2 successfully created"
        assert monday_client.last("createColumn").variables["columnSettings"] == {"labels": {"1": "Done"}}

    @pytest.mark.asyncio
    async def test_create_column_invalid_settings(self, run_tool):
        with pytest.raises(ToolInputError, match="Invalid JSON in columnSettings"):
            await run_tool(
                MondayColumns,
                "create_column",
                {"boardId": "1", "columnType": "text", "columnTitle": "x", "columnSettings": "{"},
            )

    @pytest.mark.asyncio
    async def test_delete_column(self, monday_client, run_tool):
        monday_client.respond("deleteColumn", {"delete_column": {"id": "status_2"}})

        result = await run_tool(MondayColumns, "delete_column", {"boardId": "1", "columnId": "status_2"})

        assert result == "Column status_2 successfully deleted"

    @pytest.mark.asyncio
    async def test_get_column_type_info(self, monday_client, run_tool):
        monday_client.respond("GetColumnTypeSchema", {"get_column_type_schema": {"type": "object"}})

        result = await run_tool(MondayColumns, "get_column_type_info", {"columnType": "status"})

        assert result.startswith('Column Type Information for "status":\n\n')
        assert json.loads(result.split("\n\n", 1)[1]) == {"schema": {"type": "object"}}

    @pytest.mark.asyncio
    async def test_get_column_type_info_missing(self, run_tool):
        result = await run_tool(MondayColumns, "get_column_type_info", {"columnType": "text"})

        assert result == 'Information for column type "text" not found or not available.'
