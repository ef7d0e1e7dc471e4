import json
import logging
import re
from typing import Any, Dict, List, Literal, Optional

from graphql import GraphQLError, GraphQLSchema, build_client_schema, parse, validate  # type: ignore
from pydantic import Field  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.exceptions.toolkit_exceptions import MondayApiError, MondayToolkitError
from monday_toolkit.sources.client.monday.graphql_op import MondayGraphQLOperations
from monday_toolkit.sources.client.monday.monday import API_VERSION

logger = logging.getLogger(__name__)

# Introspected schemas by API version, shared by every toolkit in the process
_schema_cache: Dict[str, GraphQLSchema] = {}

TYPE_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class GetGraphQLSchemaInput(ToolInput):
    random_string: Optional[str] = Field(
        default=None,
        alias="random_string",
        description="Dummy parameter for no-parameter tools",
    )
    operation_type: Optional[Literal["read", "write"]] = Field(
        default=None,
        description='Type of operation: "read" for queries, "write" for mutations',
    )


class GetTypeDetailsInput(ToolInput):
    type_name: str = Field(description="The name of the GraphQL type to get details for")


class AllMondayApiInput(ToolInput):
    query: str = Field(
        description="Custom GraphQL query/mutation. you need to provide the full query / mutation"
    )
    variables: str = Field(description="JSON string containing the variables for the GraphQL operation")


def _field_list(root_type: Optional[Dict[str, Any]]) -> List[str]:
    fields = (root_type or {}).get("fields") or []
    return [
        f"- {field['name']}: {field['description']}" if field.get("description") else f"- {field['name']}"
        for field in fields
    ]


def format_type_ref(type_ref: Optional[Dict[str, Any]]) -> str:
    """Render an introspection type reference in SDL notation, e.g. ``[ID!]!``."""
    if not type_ref:
        return "unknown"
    kind = type_ref.get("kind")
    if kind == "NON_NULL":
        return f"{format_type_ref(type_ref.get('ofType'))}!"
    if kind == "LIST":
        return f"[{format_type_ref(type_ref.get('ofType'))}]"
    return type_ref.get("name") or "unknown"


def _describe(name: str, description: Optional[str]) -> str:
    return f"{name}: {description}" if description else name


def format_type_details(type_info: Dict[str, Any]) -> str:
    lines = [f"## Type: {type_info.get('name')} ({type_info.get('kind')})"]
    if type_info.get("description"):
        lines.append(type_info["description"])

    fields = type_info.get("fields") or []
    if fields:
        lines.append("\n### Fields")
        for field in fields:
            lines.append(
                f"- {field['name']}: {format_type_ref(field.get('type'))}"
                + (f" - {field['description']}" if field.get("description") else "")
            )
            for arg in field.get("args") or []:
                default = f" = {arg['defaultValue']}" if arg.get("defaultValue") is not None else ""
                lines.append(f"  - {arg['name']}: {format_type_ref(arg.get('type'))}{default}")

    input_fields = type_info.get("inputFields") or []
    if input_fields:
        lines.append("\n### Input Fields")
        for input_field in input_fields:
            default = f" = {input_field['defaultValue']}" if input_field.get("defaultValue") is not None else ""
            lines.append(
                f"- {input_field['name']}: {format_type_ref(input_field.get('type'))}{default}"
                + (f" - {input_field['description']}" if input_field.get("description") else "")
            )

    enum_values = type_info.get("enumValues") or []
    if enum_values:
        lines.append("\n### Enum Values")
        lines.extend(f"- {_describe(value['name'], value.get('description'))}" for value in enum_values)

    interfaces = type_info.get("interfaces") or []
    if interfaces:
        lines.append("\n### Implements")
        lines.extend(f"- {interface['name']}" for interface in interfaces)

    possible_types = type_info.get("possibleTypes") or []
    if possible_types:
        lines.append("\n### Possible Types")
        lines.extend(f"- {possible['name']}" for possible in possible_types)

    return "\n".join(lines)


class MondayApi(MondayActions):
    """Free-form access to the monday.com GraphQL API"""

    @tool(
        name="all_monday_api",
        type=ToolType.ALL_API,
        title="Run Query or Mutation on any monday.com API",
        description=(
            "Execute any monday.com API operation by generating GraphQL queries and mutations dynamically. "
            "Make sure you ask only for the fields you need and nothing more. When providing the "
            "query/mutation - use get_graphql_schema and get_type_details tools first to understand the "
            "schema before crafting your query."
        ),
        input_model=AllMondayApiInput,
        destructive=True,
    )
    async def all_monday_api(self, tool_input: AllMondayApiInput) -> str:
        try:
            parsed_variables = json.loads(tool_input.variables)
        except ValueError as e:
            return f"Error parsing variables: {str(e) or 'Unknown error'}"

        try:
            validation_errors = await self.validate_operation(tool_input.query, self.api_version)
            if validation_errors:
                return ", ".join(validation_errors)

            data = await self.client.raw(tool_input.query, parsed_variables)
            return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        except MondayApiError as e:
            return ", ".join(e.errors) if e.errors else e.message
        except GraphQLError as e:
            return e.message
        except Exception as e:
            logger.error(f"all_monday_api failed: {e}")
            return str(e) or "Unknown error"

    @property
    def api_version(self) -> str:
        return self.context.api_version or API_VERSION

    async def load_schema(self, version: str) -> GraphQLSchema:
        """Introspect the API once per version and build a client schema from it."""
        if version in _schema_cache:
            return _schema_cache[version]

        try:
            data = await self.client.query("introspection")
            schema = build_client_schema(data)
        except Exception as e:
            raise MondayToolkitError(f"Failed to load GraphQL schema: {str(e) or 'Unknown error'}") from e

        _schema_cache[version] = schema
        logger.debug(f"Cached GraphQL schema for API version {version}")
        return schema

    async def validate_operation(self, query: str, version: str) -> List[str]:
        schema = await self.load_schema(version)
        document = parse(query)
        return [error.message for error in validate(schema, document)]

    @tool(
        name="get_graphql_schema",
        type=ToolType.ALL_API,
        title="Get GraphQL Schema",
        description=(
            "Fetch the monday.com GraphQL schema structure including query and mutation definitions. This "
            "tool returns available query fields, mutation fields, and a list of GraphQL types in the schema. "
            "You can filter results by operation type (read/write) to focus on either queries or mutations."
        ),
        input_model=GetGraphQLSchemaInput,
        read_only=True,
        idempotent=True,
    )
    async def get_graphql_schema(self, tool_input: GetGraphQLSchemaInput) -> str:
        try:
            res = await self.client.query("get_graphql_schema")
        except Exception as e:
            return f"Error fetching GraphQL schema: {str(e) or 'Unknown error'}"

        schema = res.get("__schema") or {}
        operation_type = tool_input.operation_type

        query_fields = "\n".join(_field_list(res.get("queryType"))) or "No query fields found"
        mutation_fields = "\n".join(_field_list(res.get("mutationType"))) or "No mutation fields found"
        types_list = "\n".join(
            f"- {schema_type['name']} ({schema_type.get('kind') or 'unknown'})"
            for schema_type in schema.get("types") or []
            if schema_type.get("name") and not schema_type["name"].startswith("__")
        ) or "No types found"

        response = "## GraphQL Schema\n"
        if operation_type in (None, "read"):
            response += f"- Query Type: {(schema.get('queryType') or {}).get('name')}\n\n"
            response += f"## Query Fields\n{query_fields}\n\n"
        if operation_type in (None, "write"):
            response += f"- Mutation Type: {(schema.get('mutationType') or {}).get('name')}\n\n"
            response += f"## Mutation Fields\n{mutation_fields}\n\n"
        response += f"## Available Types\n{types_list}\n\n"
        response += (
            "To get detailed information about a specific type, use the get_type_details tool with the type name.\n"
            'For example: get_type_details(typeName: "Board") to see Board type details.'
        )
        return response

    @tool(
        name="get_type_details",
        type=ToolType.ALL_API,
        title="Get Type Details",
        description=(
            "Get detailed information about a specific GraphQL type from the monday.com API schema: its "
            "fields with their arguments, input fields, enum values, interfaces and possible types."
        ),
        input_model=GetTypeDetailsInput,
        read_only=True,
        idempotent=True,
    )
    async def get_type_details(self, tool_input: GetTypeDetailsInput) -> str:
        type_name = tool_input.type_name.strip()
        if not TYPE_NAME_PATTERN.match(type_name):
            return f"Error: '{type_name}' is not a valid GraphQL type name"

        try:
            res = await self.client.raw(MondayGraphQLOperations.type_details_query(type_name))
        except Exception as e:
            return f"Error fetching type details: {str(e) or 'Unknown error'}"

        type_info = res.get("__type")
        if not type_info:
            return (
                f"Type '{type_name}' not found in the GraphQL schema. "
                "Please check the type name and try again."
            )
        return format_type_details(type_info)
