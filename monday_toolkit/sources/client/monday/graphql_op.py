"""monday.com GraphQL Operations Registry.

This module contains the GraphQL queries and mutations used by the agent tools.
Based on monday.com API documentation: https://developer.monday.com/api-reference/reference/about-the-api-reference

monday.com uses a GraphQL API at https://api.monday.com/v2
"""

import re
from typing import Dict, List, TypedDict

# `...Name` fragment spreads; inline fragments (`... on Type`) are not matched
FRAGMENT_SPREAD = re.compile(r"\.\.\.\s*(?!on\b)([_A-Za-z][_0-9A-Za-z]*)\b")


class Operation(TypedDict):
    """Type definition for a GraphQL operation."""
    query: str
    fragments: List[str]
    description: str


class MondayGraphQLOperations:
    """Registry of monday.com GraphQL operations and fragments."""

    # Common fragments for reusable field selections
    FRAGMENTS: Dict[str, str] = {
        # Introspection
        "FullType": """
            fragment FullType on __Type {
                kind
                name
                description
                fields(includeDeprecated: true) {
                    name
                    description
                    args(includeDeprecated: true) {
                        ...InputValue
                    }
                    type {
                        ...TypeRef
                    }
                    isDeprecated
                    deprecationReason
                }
                inputFields(includeDeprecated: true) {
                    ...InputValue
                }
                interfaces {
                    ...TypeRef
                }
                enumValues(includeDeprecated: true) {
                    name
                    description
                    isDeprecated
                    deprecationReason
                }
                possibleTypes {
                    ...TypeRef
                }
            }
        """,

        "InputValue": """
            fragment InputValue on __InputValue {
                name
                description
                type {
                    ...TypeRef
                }
                defaultValue
                isDeprecated
                deprecationReason
            }
        """,

        "TypeRef": """
            fragment TypeRef on __Type {
                kind
                name
                ofType {
                    kind
                    name
                    ofType {
                        kind
                        name
                        ofType {
                            kind
                            name
                            ofType {
                                kind
                                name
                                ofType {
                                    kind
                                    name
                                    ofType {
                                        kind
                                        name
                                        ofType {
                                            kind
                                            name
                                        }
                                    }
                                }
                            }
                        }
                    }
                }
            }
        """,

        # Items
        "ItemDataFragment": """
            fragment ItemDataFragment on Item {
                id
                name
                created_at
                updated_at
                column_values(ids: $columnIds) @include(if: $includeColumns) {
                    id
                    type
                    text
                    value
                    ... on FormulaValue {
                        display_value
                    }
                    ... on BoardRelationValue {
                        linked_items {
                            id
                            name
                            board {
                                id
                                name
                            }
                        }
                    }
                }
            }
        """,

        # Users and teams
        "UserDetails": """
            fragment UserDetails on User {
                id
                name
                title
                email
                enabled
                is_admin
                is_guest
                is_pending
                is_verified
                is_view_only
                join_date
                last_activity
                location
                mobile_phone
                phone
                photo_thumb
                time_zone_identifier
                utc_hours_diff
            }
        """,

        "UserTeamMembership": """
            fragment UserTeamMembership on Team {
                id
                name
                is_guest
                picture_url
            }
        """,

        "UserTeamMembershipSimplified": """
            fragment UserTeamMembershipSimplified on Team {
                id
                name
                is_guest
            }
        """,

        "TeamBasicInfo": """
            fragment TeamBasicInfo on Team {
                id
                name
            }
        """,

        "TeamExtendedInfo": """
            fragment TeamExtendedInfo on Team {
                ...TeamBasicInfo
                is_guest
                picture_url
            }
        """,

        "TeamOwner": """
            fragment TeamOwner on User {
                id
                name
                email
            }
        """,

        "TeamMember": """
            fragment TeamMember on User {
                id
                name
                email
                title
                is_admin
                is_guest
                is_pending
                is_verified
                is_view_only
                join_date
                last_activity
                location
                mobile_phone
                phone
                photo_thumb
                time_zone_identifier
                utc_hours_diff
            }
        """,

        "TeamMemberSimplified": """
            fragment TeamMemberSimplified on User {
                id
                name
                email
                title
                is_admin
                is_guest
            }
        """,

        # Workforms
        "QuestionBasic": """
            fragment QuestionBasic on FormQuestion {
                id
                type
                title
                description
                visible
                required
            }
        """,

        "QuestionOptions": """
            fragment QuestionOptions on FormQuestion {
                options {
                    label
                }
            }
        """,

        "QuestionSettings": """
            fragment QuestionSettings on FormQuestion {
                settings {
                    prefill {
                        enabled
                        source
                        lookup
                    }
                    prefixAutofilled
                    prefixPredefined {
                        enabled
                        prefix
                    }
                    checkedByDefault
                    defaultCurrentDate
                    includeTime
                    display
                    optionsOrder
                    locationAutofilled
                    limit
                    skipValidation
                }
            }
        """,

        "QuestionComplete": """
            fragment QuestionComplete on FormQuestion {
                ...QuestionBasic
                ...QuestionOptions
                ...QuestionSettings
                showIfRules
            }
        """,

        "FormFeatures": """
            fragment FormFeatures on FormFeatures {
                isInternal
                reCaptchaChallenge
                shortenedLink {
                    enabled
                    url
                }
                password {
                    enabled
                }
                draftSubmission {
                    enabled
                }
                requireLogin {
                    enabled
                    redirectToLogin
                }
                responseLimit {
                    enabled
                    limit
                }
                closeDate {
                    enabled
                    date
                }
                preSubmissionView {
                    enabled
                    title
                    description
                    startButton {
                        text
                    }
                }
                afterSubmissionView {
                    title
                    description
                    redirectAfterSubmission {
                        enabled
                        redirectUrl
                    }
                    allowResubmit
                    showSuccessImage
                    allowEditSubmission
                    allowViewSubmission
                }
                monday {
                    itemGroupId
                    includeNameQuestion
                    includeUpdateQuestion
                    syncQuestionAndColumnsTitles
                }
            }
        """,

        "FormAppearance": """
            fragment FormAppearance on FormAppearance {
                hideBranding
                showProgressBar
                primaryColor
                layout {
                    format
                    alignment
                    direction
                }
                background {
                    type
                    value
                }
                text {
                    font
                    color
                    size
                }
                logo {
                    position
                    url
                    size
                }
                submitButton {
                    text
                }
            }
        """,

        "FormAccessibility": """
            fragment FormAccessibility on FormAccessibility {
                language
                logoAltText
            }
        """,

        "FormTag": """
            fragment FormTag on FormTag {
                id
                name
                value
                columnId
            }
        """,
    }

    # Query operations
    QUERIES: Dict[str, Operation] = {
        "get_board_schema": {
            "query": """
                query getBoardSchema($boardId: ID!) {
                    boards(ids: [$boardId]) {
                        groups {
                            id
                            title
                        }
                        columns {
                            id
                            type
                            title
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get the columns and groups of a board"
        },

        "get_graphql_schema": {
            "query": """
                query getGraphQLSchema {
                    __schema {
                        queryType {
                            name
                        }
                        mutationType {
                            name
                        }
                        types {
                            name
                            kind
                        }
                    }
                    queryType: __type(name: "Query") {
                        name
                        fields {
                            name
                            description
                            type {
                                name
                                kind
                                ofType {
                                    name
                                    kind
                                    ofType {
                                        name
                                        kind
                                    }
                                }
                            }
                        }
                    }
                    mutationType: __type(name: "Mutation") {
                        name
                        fields {
                            name
                            description
                            type {
                                name
                                kind
                                ofType {
                                    name
                                    kind
                                    ofType {
                                        name
                                        kind
                                    }
                                }
                            }
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get root query and mutation fields plus the list of schema types"
        },

        "introspection": {
            "query": """
                query IntrospectionQuery {
                    __schema {
                        queryType {
                            name
                        }
                        mutationType {
                            name
                        }
                        subscriptionType {
                            name
                        }
                        types {
                            ...FullType
                        }
                        directives {
                            name
                            description
                            locations
                            args(includeDeprecated: true) {
                                ...InputValue
                            }
                        }
                    }
                }
            """,
            "fragments": ["FullType", "InputValue", "TypeRef"],
            "description": "Full schema introspection"
        },

        "fetch_custom_activity": {
            "query": """
                query fetchCustomActivity {
                    custom_activity {
                        color
                        icon_id
                        id
                        name
                        type
                    }
                }
            """,
            "fragments": [],
            "description": "List custom timeline activities"
        },

        "read_docs": {
            "query": """
                query readDocs(
                    $ids: [ID!]
                    $object_ids: [ID!]
                    $limit: Int
                    $order_by: DocsOrderBy
                    $page: Int
                    $workspace_ids: [ID]
                ) {
                    docs(
                        ids: $ids
                        object_ids: $object_ids
                        limit: $limit
                        order_by: $order_by
                        page: $page
                        workspace_ids: $workspace_ids
                    ) {
                        id
                        object_id
                        name
                        doc_kind
                        created_at
                        created_by {
                            id
                            name
                        }
                        settings
                        url
                        relative_url
                        workspace {
                            id
                            name
                        }
                        workspace_id
                        doc_folder_id
                    }
                }
            """,
            "fragments": [],
            "description": "Read documents by id, object id or workspace"
        },

        "export_markdown_from_doc": {
            "query": """
                query exportMarkdownFromDoc($docId: ID!, $blockIds: [String!]) {
                    export_markdown_from_doc(docId: $docId, blockIds: $blockIds) {
                        success
                        markdown
                        error
                    }
                }
            """,
            "fragments": [],
            "description": "Export a document's content as markdown"
        },

        "get_item_board": {
            "query": """
                query getItemBoard($itemId: ID!) {
                    items(ids: [$itemId]) {
                        id
                        board {
                            id
                            columns {
                                id
                                type
                            }
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get the board (and its columns) an item belongs to"
        },

        "get_workspace_info": {
            "query": """
                query getWorkspaceInfo($workspace_id: ID!) {
                    workspaces(ids: [$workspace_id]) {
                        id
                        name
                        description
                        kind
                        created_at
                        state
                        is_default_workspace
                        owners_subscribers {
                            id
                            name
                            email
                        }
                    }
                    boards(workspace_ids: [$workspace_id], limit: 100, order_by: used_at, state: active) {
                        id
                        name
                        board_folder_id
                    }
                    docs(workspace_ids: [$workspace_id], limit: 100, order_by: used_at) {
                        id
                        name
                        doc_folder_id
                    }
                    folders(workspace_ids: [$workspace_id], limit: 100) {
                        id
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "Get a workspace with its boards, docs and folders"
        },

        "list_workspaces": {
            "query": """
                query listWorkspaces($limit: Int!, $page: Int!) {
                    workspaces(limit: $limit, page: $page) {
                        id
                        name
                        description
                    }
                }
            """,
            "fragments": [],
            "description": "List workspaces"
        },

        "get_board_items_page": {
            "query": """
                query GetBoardItemsPage(
                    $boardId: ID!
                    $limit: Int
                    $cursor: String
                    $includeColumns: Boolean!
                    $columnIds: [String!]
                    $queryParams: ItemsQuery
                    $includeSubItems: Boolean!
                ) {
                    boards(ids: [$boardId]) {
                        id
                        name
                        items_page(limit: $limit, cursor: $cursor, query_params: $queryParams) {
                            items {
                                ...ItemDataFragment
                                subitems @include(if: $includeSubItems) {
                                    ...ItemDataFragment
                                }
                            }
                            cursor
                        }
                    }
                }
            """,
            "fragments": ["ItemDataFragment"],
            "description": "Get a page of items from a board"
        },

        "search_items_dev": {
            "query": """
                query SearchItemsDev($searchTerm: String!, $board_ids: [ID!]) {
                    search_items(board_ids: $board_ids, query: $searchTerm, size: 100) {
                        results {
                            data {
                                id
                            }
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Semantic item search (dev API version)"
        },

        "get_board_data": {
            "query": """
                query getBoardData($boardId: ID!, $itemsLimit: Int!, $queryParams: ItemsQuery) {
                    boards(ids: [$boardId]) {
                        id
                        name
                        items_page(limit: $itemsLimit, query_params: $queryParams) {
                            items {
                                id
                                name
                                column_values {
                                    id
                                    text
                                    type
                                    value
                                    ... on PeopleValue {
                                        persons_and_teams {
                                            id
                                            kind
                                        }
                                    }
                                }
                                updates {
                                    id
                                    creator_id
                                    text_body
                                    created_at
                                    replies {
                                        id
                                        text_body
                                        created_at
                                        creator_id
                                    }
                                }
                            }
                        }
                        columns {
                            id
                            title
                            type
                            settings
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get a board with items, column values, updates and replies"
        },

        "get_users_by_ids": {
            "query": """
                query getUsersByIds($userIds: [ID!]!) {
                    users(ids: $userIds) {
                        id
                        name
                        photo_tiny
                    }
                }
            """,
            "fragments": [],
            "description": "Resolve users by id"
        },

        "get_board_all_activity": {
            "query": """
                query GetBoardAllActivity(
                    $boardId: ID!
                    $fromDate: ISO8601DateTime!
                    $toDate: ISO8601DateTime!
                    $limit: Int = 1000
                    $page: Int = 1
                ) {
                    boards(ids: [$boardId]) {
                        activity_logs(from: $fromDate, to: $toDate, limit: $limit, page: $page) {
                            user_id
                            entity
                            event
                            data
                            created_at
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get board activity logs in a time range"
        },

        "get_board_info": {
            "query": """
                query GetBoardInfo($boardId: ID!) {
                    boards(ids: [$boardId]) {
                        id
                        name
                        description
                        state
                        board_kind
                        permissions
                        url
                        updated_at
                        item_terminology
                        items_count
                        items_limit
                        creator {
                            id
                            name
                            email
                        }
                        workspace {
                            id
                            name
                            kind
                            description
                        }
                        board_folder_id
                        columns {
                            id
                            title
                            description
                            type
                            settings
                        }
                        groups {
                            id
                            title
                        }
                        owners {
                            id
                            name
                        }
                        team_owners {
                            id
                            name
                            picture_url
                        }
                        tags {
                            id
                            name
                        }
                        top_group {
                            id
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get board metadata, columns, groups and owners"
        },

        "get_board_info_just_columns": {
            "query": """
                query GetBoardInfoJustColumns($boardId: ID!) {
                    boards(ids: [$boardId]) {
                        columns {
                            id
                            title
                            description
                            type
                            settings
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get the columns of a board"
        },

        "get_column_type_schema": {
            "query": """
                query GetColumnTypeSchema($type: ColumnType!) {
                    get_column_type_schema(type: $type)
                }
            """,
            "fragments": [],
            "description": "Get the settings JSON schema of a column type"
        },

        "list_users_with_teams": {
            "query": """
                query listUsersWithTeams($userIds: [ID!], $limit: Int = 1000) {
                    users(ids: $userIds, limit: $limit) {
                        ...UserDetails
                        teams {
                            ...UserTeamMembership
                        }
                    }
                }
            """,
            "fragments": ["UserDetails", "UserTeamMembership"],
            "description": "List users with their team memberships"
        },

        "list_users_only": {
            "query": """
                query listUsersOnly($userIds: [ID!], $limit: Int = 1000) {
                    users(ids: $userIds, limit: $limit) {
                        ...UserDetails
                        teams {
                            ...UserTeamMembership
                        }
                    }
                }
            """,
            "fragments": ["UserDetails", "UserTeamMembership"],
            "description": "List users"
        },

        "list_users_and_teams": {
            "query": """
                query listUsersAndTeams($userIds: [ID!], $teamIds: [ID!], $limit: Int = 1000) {
                    users(ids: $userIds, limit: $limit) {
                        ...UserDetails
                        teams {
                            ...UserTeamMembershipSimplified
                        }
                    }
                    teams(ids: $teamIds) {
                        ...TeamExtendedInfo
                        owners {
                            ...TeamOwner
                        }
                        users {
                            ...TeamMemberSimplified
                        }
                    }
                }
            """,
            "fragments": [
                "UserDetails",
                "UserTeamMembershipSimplified",
                "TeamExtendedInfo",
                "TeamOwner",
                "TeamMemberSimplified",
            ],
            "description": "List users and teams together"
        },

        "list_teams_only": {
            "query": """
                query listTeamsOnly($teamIds: [ID!]) {
                    teams(ids: $teamIds) {
                        ...TeamBasicInfo
                    }
                }
            """,
            "fragments": ["TeamBasicInfo"],
            "description": "List teams"
        },

        "list_teams_with_members": {
            "query": """
                query listTeamsWithMembers($teamIds: [ID!]) {
                    teams(ids: $teamIds) {
                        ...TeamExtendedInfo
                        owners {
                            ...TeamOwner
                        }
                        users {
                            ...TeamMember
                        }
                    }
                }
            """,
            "fragments": ["TeamExtendedInfo", "TeamOwner", "TeamMember"],
            "description": "List teams with owners and members"
        },

        "get_user_by_name": {
            "query": """
                query getUserByName($name: String) {
                    users(name: $name) {
                        ...UserDetails
                        teams {
                            ...UserTeamMembership
                        }
                    }
                }
            """,
            "fragments": ["UserDetails", "UserTeamMembership"],
            "description": "Find users by name"
        },

        "get_current_user": {
            "query": """
                query getCurrentUser {
                    me {
                        id
                        name
                        title
                        enabled
                        is_admin
                        is_guest
                        photo_thumb
                    }
                }
            """,
            "fragments": [],
            "description": "Get the authenticated user"
        },

        "search_dev": {
            "query": """
                query SearchDev($query: String!, $size: Int!, $entityTypes: [SearchableEntity!], $workspaceIds: [ID!]) {
                    search(query: $query, size: $size, entity_types: $entityTypes, workspace_ids: $workspaceIds) {
                        __typename
                        ... on CrossEntityBoardResult {
                            entity_type
                            data {
                                id
                                name
                                url
                            }
                        }
                        ... on CrossEntityDocResult {
                            entity_type
                            data {
                                id
                                name
                            }
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Cross-entity search (dev API version)"
        },

        "get_boards": {
            "query": """
                query GetBoards($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
                    boards(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
                        id
                        name
                        url
                    }
                }
            """,
            "fragments": [],
            "description": "List boards"
        },

        "get_docs": {
            "query": """
                query GetDocs($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
                    docs(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
                        id
                        name
                        url
                    }
                }
            """,
            "fragments": [],
            "description": "List docs"
        },

        "get_folders": {
            "query": """
                query GetFolders($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
                    folders(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
                        id
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "List folders"
        },

        "get_user_context": {
            "query": """
                query getUserContext {
                    me {
                        id
                        name
                        title
                    }
                    favorites {
                        object {
                            id
                            type
                        }
                    }
                    intelligence {
                        relevant_boards {
                            id
                            board {
                                name
                            }
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Get the current user, favourites and relevant boards (dev API version)"
        },

        "get_favorite_details": {
            "query": """
                query getFavoriteDetails(
                    $boardIds: [ID!]
                    $folderIds: [ID!]
                    $workspaceIds: [ID!]
                    $dashboardIds: [ID!]
                ) {
                    boards(ids: $boardIds) {
                        id
                        name
                    }
                    folders(ids: $folderIds) {
                        id
                        name
                    }
                    workspaces(ids: $workspaceIds) {
                        id
                        name
                    }
                    dashboards: boards(ids: $dashboardIds) {
                        id
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "Resolve names of favourite objects"
        },

        "get_form": {
            "query": """
                query getForm($formToken: String!) {
                    form(formToken: $formToken) {
                        id
                        token
                        title
                        description
                        active
                        ownerId
                        type
                        builtWithAI
                        isAnonymous
                        questions {
                            ...QuestionComplete
                        }
                        features {
                            ...FormFeatures
                        }
                        appearance {
                            ...FormAppearance
                        }
                        accessibility {
                            ...FormAccessibility
                        }
                        tags {
                            ...FormTag
                        }
                    }
                }
            """,
            "fragments": ["QuestionComplete", "FormFeatures", "FormAppearance", "FormAccessibility", "FormTag"],
            "description": "Get a form with its questions and settings by form token"
        },

        "aggregate_board_insights": {
            "query": """
                query aggregateBoardInsights($query: AggregateQueryInput!) {
                    aggregate(query: $query) {
                        results {
                            entries {
                                alias
                                value {
                                    ... on AggregateBasicAggregationResult {
                                        result
                                    }
                                    ... on AggregateGroupByResult {
                                        value
                                    }
                                }
                            }
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Filter, group and aggregate the items of a board"
        },

        "get_all_widgets_schema": {
            "query": """
                query GetAllWidgetsSchema {
                    all_widgets_schema {
                        widget_type
                        schema
                    }
                }
            """,
            "fragments": [],
            "description": "JSON Schema definitions of every widget type"
        },
    }

    # Mutation operations
    MUTATIONS: Dict[str, Operation] = {
        "delete_item": {
            "query": """
                mutation DeleteItem($id: ID!) {
                    delete_item(item_id: $id) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Delete an item"
        },

        "create_item": {
            "query": """
                mutation createItem($boardId: ID!, $itemName: String!, $groupId: String, $columnValues: JSON) {
                    create_item(board_id: $boardId, item_name: $itemName, group_id: $groupId, column_values: $columnValues) {
                        id
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "Create an item"
        },

        "create_subitem": {
            "query": """
                mutation createSubitem($parentItemId: ID!, $itemName: String!, $columnValues: JSON) {
                    create_subitem(parent_item_id: $parentItemId, item_name: $itemName, column_values: $columnValues) {
                        id
                        name
                        parent_item {
                            id
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Create a subitem under a parent item"
        },

        "duplicate_item": {
            "query": """
                mutation duplicateItem($boardId: ID!, $itemId: ID!, $withUpdates: Boolean) {
                    duplicate_item(board_id: $boardId, item_id: $itemId, with_updates: $withUpdates) {
                        id
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "Duplicate an item"
        },

        "change_item_column_values": {
            "query": """
                mutation changeItemColumnValues($boardId: ID!, $itemId: ID!, $columnValues: JSON!) {
                    change_multiple_column_values(board_id: $boardId, item_id: $itemId, column_values: $columnValues) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Change several column values of an item"
        },

        "move_item_to_group": {
            "query": """
                mutation moveItemToGroup($itemId: ID!, $groupId: String!) {
                    move_item_to_group(item_id: $itemId, group_id: $groupId) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Move an item to another group"
        },

        "create_board": {
            "query": """
                mutation createBoard($boardKind: BoardKind!, $boardName: String!, $boardDescription: String, $workspaceId: ID) {
                    create_board(
                        board_kind: $boardKind
                        board_name: $boardName
                        description: $boardDescription
                        workspace_id: $workspaceId
                        empty: true
                    ) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Create an empty board"
        },

        "create_column": {
            "query": """
                mutation createColumn(
                    $boardId: ID!
                    $columnType: ColumnType!
                    $columnTitle: String!
                    $columnDescription: String
                    $columnSettings: JSON
                ) {
                    create_column(
                        board_id: $boardId
                        column_type: $columnType
                        title: $columnTitle
                        description: $columnDescription
                        defaults: $columnSettings
                    ) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Create a column"
        },

        "delete_column": {
            "query": """
                mutation deleteColumn($boardId: ID!, $columnId: String!) {
                    delete_column(board_id: $boardId, column_id: $columnId) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Delete a column"
        },

        "create_group": {
            "query": """
                mutation createGroup(
                    $boardId: ID!
                    $groupName: String!
                    $groupColor: String
                    $relativeTo: String
                    $positionRelativeMethod: PositionRelative
                ) {
                    create_group(
                        board_id: $boardId
                        group_name: $groupName
                        group_color: $groupColor
                        relative_to: $relativeTo
                        position_relative_method: $positionRelativeMethod
                    ) {
                        id
                        title
                    }
                }
            """,
            "fragments": [],
            "description": "Create a group"
        },

        "create_custom_activity": {
            "query": """
                mutation createCustomActivity($color: CustomActivityColor!, $icon_id: CustomActivityIcon!, $name: String!) {
                    create_custom_activity(color: $color, icon_id: $icon_id, name: $name) {
                        color
                        icon_id
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "Create a custom timeline activity"
        },

        "create_timeline_item": {
            "query": """
                mutation createTimelineItem(
                    $item_id: ID!
                    $custom_activity_id: String!
                    $title: String!
                    $summary: String
                    $content: String
                    $timestamp: ISO8601DateTime!
                    $time_range: TimelineItemTimeRange
                    $location: String
                    $phone: String
                    $url: String
                ) {
                    create_timeline_item(
                        item_id: $item_id
                        custom_activity_id: $custom_activity_id
                        title: $title
                        summary: $summary
                        content: $content
                        timestamp: $timestamp
                        time_range: $time_range
                        location: $location
                        phone: $phone
                        url: $url
                    ) {
                        id
                        title
                        content
                        created_at
                        custom_activity_id
                        type
                    }
                }
            """,
            "fragments": [],
            "description": "Create a timeline item on an item"
        },

        "create_doc": {
            "query": """
                mutation createDoc($location: CreateDocInput!) {
                    create_doc(location: $location) {
                        id
                        url
                        name
                    }
                }
            """,
            "fragments": [],
            "description": "Create a doc in a workspace or in an item doc column"
        },

        "add_content_to_doc_from_markdown": {
            "query": """
                mutation addContentToDocFromMarkdown($docId: ID!, $markdown: String!, $afterBlockId: String) {
                    add_content_to_doc_from_markdown(docId: $docId, markdown: $markdown, afterBlockId: $afterBlockId) {
                        success
                        block_ids
                        error
                    }
                }
            """,
            "fragments": [],
            "description": "Append markdown content to a doc"
        },

        "update_doc_name": {
            "query": """
                mutation updateDocName($docId: ID!, $name: String!) {
                    update_doc_name(docId: $docId, name: $name)
                }
            """,
            "fragments": [],
            "description": "Rename a doc"
        },

        "create_workspace": {
            "query": """
                mutation createWorkspace(
                    $name: String!
                    $workspaceKind: WorkspaceKind!
                    $description: String
                    $accountProductId: ID
                ) {
                    create_workspace(
                        name: $name
                        kind: $workspaceKind
                        description: $description
                        account_product_id: $accountProductId
                    ) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Create a workspace"
        },

        "update_workspace": {
            "query": """
                mutation updateWorkspace($id: ID!, $attributes: UpdateWorkspaceAttributesInput!) {
                    update_workspace(id: $id, attributes: $attributes) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Update a workspace"
        },

        "create_folder": {
            "query": """
                mutation createFolder(
                    $workspaceId: ID!
                    $name: String!
                    $color: FolderColor
                    $fontWeight: FolderFontWeight
                    $customIcon: FolderCustomIcon
                    $parentFolderId: ID
                ) {
                    create_folder(
                        workspace_id: $workspaceId
                        name: $name
                        color: $color
                        font_weight: $fontWeight
                        custom_icon: $customIcon
                        parent_folder_id: $parentFolderId
                    ) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Create a folder"
        },

        "update_folder": {
            "query": """
                mutation updateFolder(
                    $folderId: ID!
                    $name: String
                    $color: FolderColor
                    $fontWeight: FolderFontWeight
                    $customIcon: FolderCustomIcon
                    $parentFolderId: ID
                    $workspaceId: ID
                    $accountProductId: ID
                    $position: DynamicPosition
                ) {
                    update_folder(
                        folder_id: $folderId
                        name: $name
                        color: $color
                        font_weight: $fontWeight
                        custom_icon: $customIcon
                        parent_folder_id: $parentFolderId
                        workspace_id: $workspaceId
                        account_product_id: $accountProductId
                        position: $position
                    ) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Update or move a folder"
        },

        "update_board_hierarchy": {
            "query": """
                mutation updateBoardHierarchy($boardId: ID!, $attributes: UpdateBoardHierarchyAttributesInput!) {
                    update_board_hierarchy(board_id: $boardId, attributes: $attributes) {
                        success
                        message
                        board {
                            id
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Move a board within the workspace hierarchy"
        },

        "update_overview_hierarchy": {
            "query": """
                mutation updateOverviewHierarchy($overviewId: ID!, $attributes: UpdateOverviewHierarchyAttributesInput!) {
                    update_overview_hierarchy(overview_id: $overviewId, attributes: $attributes) {
                        success
                        message
                        overview {
                            id
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Move an overview within the workspace hierarchy"
        },

        "create_update": {
            "query": """
                mutation createUpdate($itemId: ID!, $body: String!, $mentionsList: [UpdateMention]) {
                    create_update(body: $body, item_id: $itemId, mentions_list: $mentionsList) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Create an update on an item"
        },

        # Workforms
        "create_form": {
            "query": """
                mutation createForm(
                    $destination_workspace_id: ID!
                    $destination_folder_id: ID
                    $destination_folder_name: String
                    $board_kind: BoardKind
                    $destination_name: String
                    $board_owner_ids: [ID!]
                    $board_owner_team_ids: [ID!]
                    $board_subscriber_ids: [ID!]
                    $board_subscriber_teams_ids: [ID!]
                ) {
                    create_form(
                        destination_workspace_id: $destination_workspace_id
                        destination_folder_id: $destination_folder_id
                        destination_folder_name: $destination_folder_name
                        board_kind: $board_kind
                        destination_name: $destination_name
                        board_owner_ids: $board_owner_ids
                        board_owner_team_ids: $board_owner_team_ids
                        board_subscriber_ids: $board_subscriber_ids
                        board_subscriber_teams_ids: $board_subscriber_teams_ids
                    ) {
                        boardId
                        token
                    }
                }
            """,
            "fragments": [],
            "description": "Create a form together with the board storing its responses"
        },

        "delete_form_question": {
            "query": """
                mutation deleteFormQuestion($formToken: String!, $questionId: String!) {
                    delete_question(formToken: $formToken, questionId: $questionId)
                }
            """,
            "fragments": [],
            "description": "Delete a form question"
        },

        "create_form_question": {
            "query": """
                mutation createFormQuestion($formToken: String!, $question: CreateQuestionInput!) {
                    create_form_question(formToken: $formToken, question: $question) {
                        ...QuestionBasic
                        ...QuestionOptions
                        ...QuestionSettings
                    }
                }
            """,
            "fragments": ["QuestionBasic", "QuestionOptions", "QuestionSettings"],
            "description": "Add a question to a form"
        },

        "update_form_question": {
            "query": """
                mutation updateFormQuestion($formToken: String!, $questionId: String!, $question: UpdateQuestionInput!) {
                    update_form_question(formToken: $formToken, questionId: $questionId, question: $question) {
                        ...QuestionBasic
                        ...QuestionOptions
                        ...QuestionSettings
                    }
                }
            """,
            "fragments": ["QuestionBasic", "QuestionOptions", "QuestionSettings"],
            "description": "Patch a form question"
        },

        "set_form_password": {
            "query": """
                mutation setFormPassword($formToken: String!, $input: SetFormPasswordInput!) {
                    set_form_password(formToken: $formToken, input: $input) {
                        id
                    }
                }
            """,
            "fragments": [],
            "description": "Protect a form with a password"
        },

        "shorten_form_url": {
            "query": """
                mutation shortenFormUrl($formToken: String!) {
                    shorten_form_url(formToken: $formToken) {
                        enabled
                        url
                    }
                }
            """,
            "fragments": [],
            "description": "Generate a shortened form link"
        },

        "deactivate_form": {
            "query": """
                mutation deactivateForm($formToken: String!) {
                    deactivate_form(formToken: $formToken)
                }
            """,
            "fragments": [],
            "description": "Stop a form from accepting submissions"
        },

        "activate_form": {
            "query": """
                mutation activateForm($formToken: String!) {
                    activate_form(formToken: $formToken)
                }
            """,
            "fragments": [],
            "description": "Make a form accept submissions again"
        },

        "delete_form_tag": {
            "query": """
                mutation deleteFormTag($formToken: String!, $tagId: String!) {
                    delete_form_tag(formToken: $formToken, tagId: $tagId)
                }
            """,
            "fragments": [],
            "description": "Delete a form tag"
        },

        "create_form_tag": {
            "query": """
                mutation createFormTag($formToken: String!, $tag: CreateFormTagInput!) {
                    create_form_tag(formToken: $formToken, tag: $tag) {
                        ...FormTag
                    }
                }
            """,
            "fragments": ["FormTag"],
            "description": "Create a form tag"
        },

        "update_form_tag": {
            "query": """
                mutation updateFormTag($formToken: String!, $tagId: String!, $tag: UpdateFormTagInput!) {
                    update_form_tag(formToken: $formToken, tagId: $tagId, tag: $tag)
                }
            """,
            "fragments": [],
            "description": "Change the value of a form tag"
        },

        "update_form_appearance": {
            "query": """
                mutation updateFormAppearance($formToken: String!, $appearance: FormAppearanceInput!) {
                    update_form_settings(formToken: $formToken, settings: { appearance: $appearance }) {
                        appearance {
                            ...FormAppearance
                        }
                    }
                }
            """,
            "fragments": ["FormAppearance"],
            "description": "Patch the appearance settings of a form"
        },

        "update_form_accessibility": {
            "query": """
                mutation updateFormAccessibility($formToken: String!, $accessibility: FormAccessibilityInput!) {
                    update_form_settings(formToken: $formToken, settings: { accessibility: $accessibility }) {
                        accessibility {
                            ...FormAccessibility
                        }
                    }
                }
            """,
            "fragments": ["FormAccessibility"],
            "description": "Patch the accessibility settings of a form"
        },

        "update_form_features": {
            "query": """
                mutation updateFormFeatures($formToken: String!, $features: FormFeaturesInput!) {
                    update_form_settings(formToken: $formToken, settings: { features: $features }) {
                        features {
                            ...FormFeatures
                        }
                    }
                }
            """,
            "fragments": ["FormFeatures"],
            "description": "Patch the feature settings of a form"
        },

        "update_form_question_order": {
            "query": """
                mutation updateFormQuestionOrder($formToken: String!, $questions: [QuestionOrderInput!]!) {
                    update_form(formToken: $formToken, input: { questions: $questions }) {
                        questions {
                            id
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Reorder the questions of a form"
        },

        "update_form_header": {
            "query": """
                mutation updateFormHeader($formToken: String!, $title: String, $description: String) {
                    update_form(formToken: $formToken, input: { title: $title, description: $description }) {
                        title
                        description
                    }
                }
            """,
            "fragments": [],
            "description": "Change the title or description of a form"
        },

        # Dashboards
        "create_dashboard": {
            "query": """
                mutation CreateDashboard(
                    $name: String!
                    $workspace_id: ID!
                    $board_ids: [ID!]!
                    $kind: DashboardKind
                    $board_folder_id: ID
                ) {
                    create_dashboard(
                        name: $name
                        workspace_id: $workspace_id
                        board_ids: $board_ids
                        kind: $kind
                        board_folder_id: $board_folder_id
                    ) {
                        id
                        name
                        workspace_id
                        kind
                        board_folder_id
                    }
                }
            """,
            "fragments": [],
            "description": "Create a dashboard over one or more boards"
        },

        "create_widget": {
            "query": """
                mutation CreateWidget($parent: WidgetParentInput!, $kind: ExternalWidget!, $name: String!, $settings: JSON!) {
                    create_widget(parent: $parent, kind: $kind, name: $name, settings: $settings) {
                        id
                        name
                        kind
                        parent {
                            kind
                            id
                        }
                    }
                }
            """,
            "fragments": [],
            "description": "Add a widget to a dashboard or board view"
        },
    }

    @classmethod
    def _operations_of(cls, operation_type: str) -> Dict[str, Operation]:
        return {"query": cls.QUERIES, "mutation": cls.MUTATIONS}.get(operation_type, {})

    @classmethod
    def get_operation(cls, operation_type: str, operation_name: str) -> Dict[str, object]:
        """Registered ``query`` or ``mutation`` by name, ``{}`` when unknown."""
        return dict(cls._operations_of(operation_type).get(operation_name, {}))

    @classmethod
    def get_fragment(cls, fragment_name: str) -> str:
        return cls.FRAGMENTS.get(fragment_name, "")

    @classmethod
    def fragment_dependencies(cls, fragment_name: str) -> List[str]:
        """Names of the registered fragments spread inside a fragment."""
        spreads = FRAGMENT_SPREAD.findall(cls.get_fragment(fragment_name))
        return [name for name in dict.fromkeys(spreads) if name in cls.FRAGMENTS]

    @classmethod
    def get_operation_with_fragments(cls, operation_type: str, operation_name: str) -> str:
        """Operation document preceded by every fragment it needs, each once."""
        operation = cls.get_operation(operation_type, operation_name)
        if not operation:
            return ""

        ordered: List[str] = []
        pending: List[str] = list(operation.get("fragments", []))  # type: ignore[arg-type]
        while pending:
            name = pending.pop(0)
            if name in ordered or name not in cls.FRAGMENTS:
                continue
            ordered.append(name)
            pending.extend(cls.fragment_dependencies(name))

        parts = [cls.FRAGMENTS[name] for name in ordered] + [str(operation.get("query", ""))]
        return "\n".join(parts).strip()

    @classmethod
    def list_operations(cls) -> Dict[str, List[str]]:
        return {"queries": list(cls.QUERIES), "mutations": list(cls.MUTATIONS)}

    @staticmethod
    def type_details_query(type_name: str) -> str:
        """Build the ``__type`` introspection query for one type.

        The API rejects the type name as a variable, so it is inlined.
        """
        type_ref = """
                    name
                    kind
                    ofType {
                        name
                        kind
                        ofType {
                            name
                            kind
                            ofType {
                                name
                                kind
                                ofType {
                                    name
                                    kind
                                }
                            }
                        }
                    }"""
        return f"""
            query getTypeDetails {{
                __type(name: "{type_name}") {{
                    name
                    description
                    kind
                    fields {{
                        name
                        description
                        type {{{type_ref}
                        }}
                        args {{
                            name
                            description
                            type {{{type_ref}
                            }}
                            defaultValue
                        }}
                    }}
                    inputFields {{
                        name
                        description
                        type {{{type_ref}
                        }}
                        defaultValue
                    }}
                    interfaces {{
                        name
                    }}
                    enumValues {{
                        name
                        description
                    }}
                    possibleTypes {{
                        name
                    }}
                }}
            }}
        """
