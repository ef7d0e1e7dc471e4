import json
from typing import Any, Dict, List, Optional

from pydantic import Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.constants import DEV_API_VERSION
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool

MAX_USER_IDS = 500
MAX_TEAM_IDS = 500
DEFAULT_USER_LIMIT = 1000

# Optional user fields printed when present: (field, label)
OPTIONAL_USER_FIELDS = (
    ("is_pending", "Pending"),
    ("is_verified", "Verified"),
    ("is_view_only", "View Only"),
    ("join_date", "Join Date"),
    ("last_activity", "Last Activity"),
    ("location", "Location"),
    ("mobile_phone", "Mobile Phone"),
    ("phone", "Phone"),
    ("photo_thumb", "Photo Thumb"),
    ("time_zone_identifier", "Timezone"),
    ("utc_hours_diff", "UTC Hours Diff"),
)

# Favorite object type -> (query variable, response key)
FAVORITE_TYPES = {
    "Board": ("boardIds", "boards"),
    "Folder": ("folderIds", "folders"),
    "Workspace": ("workspaceIds", "workspaces"),
    "Dashboard": ("dashboardIds", "dashboards"),
}


class ListUsersAndTeamsInput(ToolInput):
    user_ids: Optional[List[MondayId]] = Field(
        default=None,
        max_length=MAX_USER_IDS,
        description=(
            "Specific user IDs to fetch.[IMPORTANT] ALWAYS use when you have user IDs in context. PREFER over "
            "general search. RETURNS: user profiles including team memberships"
        ),
    )
    team_ids: Optional[List[MondayId]] = Field(
        default=None,
        max_length=MAX_TEAM_IDS,
        description=(
            "Specific team IDs to fetch.[IMPORTANT] ALWAYS use when you have team IDs in context, NEVER fetch "
            "all teams if specific IDs are available.\n      RETURNS: Team details with owners and optional "
            "member data."
        ),
    )
    name: Optional[str] = Field(
        default=None,
        description=(
            "Name-based USER search ONLY. STANDALONE parameter - cannot be combined with others. PREFERRED "
            "method for finding users when you know names. Performs fuzzy matching.\n      CRITICAL: This "
            "parameter searches for USERS ONLY, NOT teams. To search for teams, use teamIds parameter instead."
        ),
    )
    get_me: Optional[bool] = Field(
        default=None,
        description=(
            "[TOP PRIORITY] Use ALWAYS when requesting current user information. Examples of when it should "
            'be used: ["get my user" or "get my teams"].\n      This parameter CONFLICTS with all others. '
        ),
    )
    include_teams: Optional[bool] = Field(
        default=None,
        description=(
            "[AVOID] This fetches all teams in the account. To fetch a specific user's teams just fetch that "
            "user by id and you will get their team memberships."
        ),
    )
    teams_only: Optional[bool] = Field(
        default=None,
        description="Fetch only teams, no users returned. Combine with includeTeamMembers for member details.",
    )
    include_team_members: Optional[bool] = Field(
        default=None,
        description="Set to true only when you need additional member details for teams other than names and ids.",
    )


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "N/A"
    return str(value)


def _optional_user_fields(user: Dict[str, Any], prefix: str = "") -> List[str]:
    return [
        f"{prefix}{label}: {_display(user[field])}"
        for field, label in OPTIONAL_USER_FIELDS
        if user.get(field) is not None
    ]


def format_users_and_teams(data: Dict[str, Any]) -> str:
    """Render users and teams as an indented text listing."""
    sections: List[str] = []

    users = [user for user in data.get("users") or [] if user]
    if users:
        sections.append("Users:")
        for user in users:
            sections.append(f"  ID: {user.get('id')}")
            sections.append(f"  Name: {user.get('name')}")
            sections.append(f"  Email: {_display(user.get('email'))}")
            sections.append(f"  Title: {user.get('title') or 'N/A'}")
            sections.append(f"  Enabled: {_display(user.get('enabled'))}")
            sections.append(f"  Admin: {_display(bool(user.get('is_admin')))}")
            sections.append(f"  Guest: {_display(bool(user.get('is_guest')))}")
            sections.extend(_optional_user_fields(user, "  "))

            teams = [team for team in user.get("teams") or [] if team]
            if teams:
                sections.append("  Teams:")
                for team in teams:
                    sections.append(
                        f"    - ID: {team.get('id')}, Name: {team.get('name')}, "
                        f"Guest Team: {_display(bool(team.get('is_guest')))}, "
                        f"Picture URL: {team.get('picture_url') or 'N/A'}"
                    )
            sections.append("")

    teams = [team for team in data.get("teams") or [] if team]
    if teams:
        sections.append("Teams:")
        for team in teams:
            sections.append(f"  ID: {team.get('id')}")
            sections.append(f"  Name: {team.get('name')}")

            # Only the extended team queries return owners
            if "owners" in team:
                sections.append(f"  Guest Team: {_display(bool(team.get('is_guest')))}")
                sections.append(f"  Picture URL: {team.get('picture_url') or 'N/A'}")

                owners = team.get("owners") or []
                if owners:
                    sections.append("  Owners:")
                    for owner in owners:
                        sections.append(
                            f"    - ID: {owner.get('id')}, Name: {owner.get('name')}, Email: {owner.get('email')}"
                        )

                members = [member for member in team.get("users") or [] if member]
                if members:
                    sections.append("  Members:")
                    for member in members:
                        details = [
                            f"ID: {member.get('id')}",
                            f"Name: {member.get('name')}",
                            f"Email: {_display(member.get('email'))}",
                            f"Title: {member.get('title') or 'N/A'}",
                            f"Admin: {_display(bool(member.get('is_admin')))}",
                            f"Guest: {_display(bool(member.get('is_guest')))}",
                            *_optional_user_fields(member),
                        ]
                        sections.append(f"    - {', '.join(details)}")
            sections.append("")

    if not sections:
        return "No users or teams found with the specified filters."
    return "\n".join(sections).strip()


class MondayUsers(MondayActions):
    """User and team tools"""

    @tool(
        name="list_users_and_teams",
        type=ToolType.READ,
        title="List Users and Teams",
        description="""Tool to fetch users and/or teams data.

      MANDATORY BEST PRACTICES:
      1. ALWAYS use specific IDs or names when available
      2. If no ids available, use name search if possible (USERS ONLY)
      3. Use 'getMe: true' to get current user information
      4. AVOID broad queries (no parameters) - use only as last resort

      REQUIRED PARAMETER PRIORITY (use in this order):
      1. getMe - STANDALONE
      2. userIds
      3. name - STANDALONE (USERS ONLY, NOT for teams)
      4. teamIds + teamsOnly
      5. No parameters - LAST RESORT

      CRITICAL USAGE RULES:
      • userIds + teamIds requires explicit includeTeams: true flag
      • includeTeams: true fetches both users and teams, do not use this to fetch a specific user's teams rather fetch that user by id and you will get their team memberships.
      • name parameter is for USER search ONLY - it cannot be used to search for teams. Use teamIds to fetch specific teams.""",
        input_model=ListUsersAndTeamsInput,
        read_only=True,
        idempotent=True,
    )
    async def list_users_and_teams(self, tool_input: ListUsersAndTeamsInput) -> str:
        has_user_ids = bool(tool_input.user_ids)
        has_team_ids = bool(tool_input.team_ids)
        include_teams = bool(tool_input.include_teams)
        teams_only = bool(tool_input.teams_only)
        include_team_members = bool(tool_input.include_team_members)
        has_name = bool(tool_input.name)

        if tool_input.get_me:
            if has_user_ids or has_team_ids or include_teams or teams_only or include_team_members or has_name:
                return (
                    "PARAMETER_CONFLICT: getMe is STANDALONE only. Remove all other parameters when using "
                    "getMe: true for current user lookup."
                )
            res = await self.client.query("get_current_user")
            if not res.get("me"):
                return "AUTHENTICATION_ERROR: Current user fetch failed. Verify API token and user permissions."
            return format_users_and_teams({"users": [res["me"]]})

        if has_name:
            if has_user_ids or has_team_ids or include_teams or teams_only or include_team_members:
                return (
                    "PARAMETER_CONFLICT: name is STANDALONE only. Remove userIds, teamIds, includeTeams, "
                    "teamsOnly, and includeTeamMembers when using name search."
                )
            return await self._search_users_by_name(tool_input.name)

        if teams_only and include_teams:
            return (
                "PARAMETER_CONFLICT: Cannot use teamsOnly: true with includeTeams: true. Use teamsOnly for "
                "teams-only queries or includeTeams for combined data."
            )

        if teams_only or (not has_user_ids and has_team_ids and not include_teams):
            operation = "list_teams_with_members" if include_team_members else "list_teams_only"
            res = await self.client.query(operation, {"teamIds": tool_input.team_ids})
        elif not include_teams:
            operation = "list_users_with_teams" if has_user_ids else "list_users_only"
            res = await self.client.query(
                operation,
                {"userIds": tool_input.user_ids, "limit": DEFAULT_USER_LIMIT},
            )
        else:
            res = await self.client.query(
                "list_users_and_teams",
                {
                    "userIds": tool_input.user_ids,
                    "teamIds": tool_input.team_ids,
                    "limit": DEFAULT_USER_LIMIT,
                },
            )

        return format_users_and_teams(res)

    async def _search_users_by_name(self, name: str) -> str:
        res = await self.client.query("get_user_by_name", {"name": name})
        users = res.get("users") or []
        if not users:
            return (
                f'NAME_SEARCH_EMPTY: No users found matching "{name}". Try broader search terms or verify '
                "user exists in account."
            )

        user_list = "\n".join(
            f"• **{user.get('name')}** (ID: {user.get('id')})"
            + (f" - {user['title']}" if user.get("title") else "")
            for user in users
            if user
        )
        return f'Found {len(users)} user(s) matching "{name}":\n\n{user_list}'

    @tool(
        name="get_user_context",
        type=ToolType.READ,
        title="Get User Context",
        description="""Fetch current user information and their relevant items (boards, folders, workspaces, dashboards).

    Use this tool at the beginning of conversations to:
    - Get context about who the current user is (id, name, title)
    - Discover user's favorite boards, folders, workspaces, and dashboards
    - Get user's most relevant boards based on visit frequency and recency
    - Reduce the need for search requests by knowing user's commonly accessed items
    """,
        read_only=True,
        idempotent=True,
    )
    async def get_user_context(self) -> str:
        res = await self.client.query("get_user_context", {}, version_override=DEV_API_VERSION)
        me = res.get("me")
        if not me:
            return "AUTHENTICATION_ERROR: Unable to fetch current user. Verify API token and user permissions."

        favorites = await self._fetch_favorites(res.get("favorites") or [])
        relevant_boards = [
            {"id": relevant["id"], "name": relevant["board"]["name"]}
            for relevant in (res.get("intelligence") or {}).get("relevant_boards") or []
            if relevant and relevant.get("id") and (relevant.get("board") or {}).get("name")
        ]

        output = {"user": me, "favorites": favorites, "relevantBoards": relevant_boards}
        return json.dumps(output, indent=2, ensure_ascii=False)

    async def _fetch_favorites(self, favorites: List[Any]) -> List[Dict[str, Any]]:
        ids_by_type: Dict[str, List[str]] = {}
        for favorite in favorites:
            obj = (favorite or {}).get("object") or {}
            if obj.get("id") and obj.get("type") in FAVORITE_TYPES:
                ids_by_type.setdefault(obj["type"], []).append(obj["id"])

        if not ids_by_type:
            return []

        variables = {FAVORITE_TYPES[object_type][0]: ids for object_type, ids in ids_by_type.items()}
        res = await self.client.query("get_favorite_details", variables)

        result = []
        for object_type in ids_by_type:
            response_key = FAVORITE_TYPES[object_type][1]
            for entry in res.get(response_key) or []:
                if entry and entry.get("id"):
                    result.append({"id": entry["id"], "name": entry.get("name"), "type": object_type})
        return result
