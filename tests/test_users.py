"""
User and team tool tests.
"""
import json

import pytest  # type: ignore

from monday_toolkit.agents.actions.monday.users import MondayUsers, format_users_and_teams


@pytest.mark.tools
class TestFormatUsersAndTeams:
    """Text rendering of users and teams."""

    def test_users_with_teams(self):
        text = format_users_and_teams(
            {
                "users": [
                    {
                        "id": "1",
                        "name": "Ada",
                        "email": "ada@example.com",
                        "title": None,
                        "enabled": True,
                        "is_admin": True,
                        "is_verified": False,
                        "location": "London",
                        "teams": [{"id": "7", "name": "Core"}],
                    }
                ]
            }
        )

        assert text == (
            "Users:\n"
            "  ID: 1\n"
            "  Name: Ada\n"
            "  Email: ada@example.com\n"
            "  Title: N/A\n"
            "  Enabled: true\n"
            "  Admin: true\n"
            "  Guest: false\n"
            "  Verified: false\n"
            "  Location: London\n"
            "  Teams:\n"
            "    - ID: 7, Name: Core, Guest Team: false, Picture URL: N/A"
        )

    def test_teams_with_owners_and_members(self):
        text = format_users_and_teams(
            {
                "teams": [
                    {
                        "id": "7",
                        "name": "Core",
                        "owners": [{"id": "1", "name": "Ada", "email": "ada@example.com"}],
                        "users": [{"id": "2", "name": "Bob", "email": None, "phone": "555"}],
                    },
                    {"id": "8", "name": "Ops"},
                ]
            }
        )

        assert "  Owners:\n    - ID: 1, Name: Ada, Email: ada@example.com" in text
        assert (
            "  Members:\n    - ID: 2, Name: Bob, Email: N/A, Title: N/A, Admin: false, Guest: false, Phone: 555"
        ) in text
        assert text.endswith("  ID: 8\n  Name: Ops")

    def test_nothing_found(self):
        assert format_users_and_teams({"users": [], "teams": None}) == (
            "No users or teams found with the specified filters."
        )


@pytest.mark.tools
class TestListUsersAndTeams:
    """Query selection by parameter combination."""

    @pytest.mark.asyncio
    async def test_get_me(self, monday_client, run_tool):
        monday_client.respond("getCurrentUser", {"me": {"id": "1", "name": "Ada"}})

        result = await run_tool(MondayUsers, "list_users_and_teams", {"getMe": True})

        assert result.startswith("Users:\n  ID: 1\n  Name: Ada")

    @pytest.mark.asyncio
    async def test_get_me_is_standalone(self, monday_client, run_tool):
        result = await run_tool(MondayUsers, "list_users_and_teams", {"getMe": True, "userIds": ["1"]})

        assert result.startswith("PARAMETER_CONFLICT: getMe is STANDALONE only.")
        assert monday_client.requests == []

    @pytest.mark.asyncio
    async def test_get_me_without_user(self, run_tool):
        result = await run_tool(MondayUsers, "list_users_and_teams", {"getMe": True})

        assert result.startswith("AUTHENTICATION_ERROR: Current user fetch failed.")

    @pytest.mark.asyncio
    async def test_name_search(self, monday_client, run_tool):
        monday_client.respond(
            "getUserByName",
            {"users": [{"id": "1", "name": "Ada Lovelace", "title": "Engineer"}, {"id": "2", "name": "Ada B"}]},
        )

        result = await run_tool(MondayUsers, "list_users_and_teams", {"name": "Ada"})

        assert result == (
            'Found 2 user(s) matching "Ada":\n\n'
            "• **Ada Lovelace** (ID: 1) - Engineer\n"
            "• **Ada B** (ID: 2)"
        )

    @pytest.mark.asyncio
    async def test_name_search_without_results(self, run_tool):
        result = await run_tool(MondayUsers, "list_users_and_teams", {"name": "Nobody"})

        assert result.startswith('NAME_SEARCH_EMPTY: No users found matching "Nobody".')

    @pytest.mark.asyncio
    async def test_name_is_standalone(self, run_tool):
        result = await run_tool(MondayUsers, "list_users_and_teams", {"name": "Ada", "teamsOnly": True})

        assert result.startswith("PARAMETER_CONFLICT: name is STANDALONE only.")

    @pytest.mark.asyncio
    async def test_teams_only_conflicts_with_include_teams(self, run_tool):
        result = await run_tool(MondayUsers, "list_users_and_teams", {"teamsOnly": True, "includeTeams": True})

        assert result.startswith("PARAMETER_CONFLICT: Cannot use teamsOnly: true with includeTeams: true.")

    @pytest.mark.parametrize(
        "arguments, operation, variables",
        [
            ({}, "listUsersOnly", {"limit": 1000}),
            ({"userIds": [1, 2]}, "listUsersWithTeams", {"userIds": ["1", "2"], "limit": 1000}),
            ({"teamIds": ["7"]}, "listTeamsOnly", {"teamIds": ["7"]}),
            ({"teamsOnly": True, "includeTeamMembers": True}, "listTeamsWithMembers", {}),
            (
                {"userIds": ["1"], "teamIds": ["7"], "includeTeams": True},
                "listUsersAndTeams",
                {"userIds": ["1"], "teamIds": ["7"], "limit": 1000},
            ),
        ],
    )
    @pytest.mark.asyncio
    async def test_query_selection(self, monday_client, run_tool, arguments, operation, variables):
        await run_tool(MondayUsers, "list_users_and_teams", arguments)

        assert monday_client.operations() == [operation]
        assert monday_client.last(operation).variables == variables


@pytest.mark.tools
class TestUserContext:
    """Current user, favorites and relevant boards."""

    @pytest.mark.asyncio
    async def test_user_context(self, monday_client, run_tool):
        monday_client.respond(
            "getUserContext",
            {
                "me": {"id": "1", "name": "Ada", "title": "Engineer"},
                "favorites": [
                    {"object": {"id": "10", "type": "Board"}},
                    {"object": {"id": "20", "type": "Workspace"}},
                    {"object": {"id": "30", "type": "Doc"}},
                ],
                "intelligence": {
                    "relevant_boards": [{"id": "11", "board": {"name": "Roadmap"}}, {"id": "12", "board": None}]
                },
            },
        )
        monday_client.respond(
            "getFavoriteDetails",
            {"boards": [{"id": "10", "name": "Sprint"}], "workspaces": [{"id": "20", "name": "Product"}]},
        )

        result = json.loads(await run_tool(MondayUsers, "get_user_context"))

        assert monday_client.last("getUserContext").version_override == "dev"
        assert monday_client.last("getFavoriteDetails").variables == {"boardIds": ["10"], "workspaceIds": ["20"]}
        assert result == {
            "user": {"id": "1", "name": "Ada", "title": "Engineer"},
            "favorites": [
                {"id": "10", "name": "Sprint", "type": "Board"},
                {"id": "20", "name": "Product", "type": "Workspace"},
            ],
            "relevantBoards": [{"id": "11", "name": "Roadmap"}],
        }

    @pytest.mark.asyncio
    async def test_without_favorites(self, monday_client, run_tool):
        monday_client.respond("getUserContext", {"me": {"id": "1"}})

        result = json.loads(await run_tool(MondayUsers, "get_user_context"))

        assert result["favorites"] == []
        assert monday_client.operations() == ["getUserContext"]

    @pytest.mark.asyncio
    async def test_authentication_error(self, run_tool):
        result = await run_tool(MondayUsers, "get_user_context")

        assert result.startswith("AUTHENTICATION_ERROR: Unable to fetch current user.")
