"""
Board insights: filter, group and aggregate the items of a board server side.

Every aggregation becomes a select element aliased ``<FUNCTION>_<columnId>_<n>``.
Plain columns and transformative functions must also be grouped by, and each
grouped column gets a ``LABEL`` select so its human readable value comes back.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field, TypeAdapter  # type: ignore

from monday_toolkit.agents.actions.monday.base import MondayActions
from monday_toolkit.agents.actions.monday.board_guidelines import COUNT_ITEMS_FUNCTION
from monday_toolkit.agents.actions.monday.filters import (
    FILTER_RULES,
    FILTERS_DESCRIPTION,
    ORDER_BY_LIST,
    FilterRule,
    ItemsQueryOperator,
    OrderBy,
    to_order_by,
    to_query_rules,
)
from monday_toolkit.agents.tool.enums import ToolType
from monday_toolkit.agents.tool.models import MondayId, ToolInput
from monday_toolkit.agents.tools.decorator import tool
from monday_toolkit.utils.stringified import fallback_to_stringified_version_if_null

INSIGHTS_DEFAULT_LIMIT = 1000
INSIGHTS_MAX_LIMIT = 1000

MISSING_AGGREGATIONS_MESSAGE = (
    'Input must contain either the "aggregations" field or the "aggregationsStringified" field.'
)


class AggregationFunction(str, Enum):
    # transformative
    TRIM = "TRIM"
    UPPER = "UPPER"
    LOWER = "LOWER"
    DATE_TRUNC_DAY = "DATE_TRUNC_DAY"
    DATE_TRUNC_WEEK = "DATE_TRUNC_WEEK"
    DATE_TRUNC_MONTH = "DATE_TRUNC_MONTH"
    DATE_TRUNC_QUARTER = "DATE_TRUNC_QUARTER"
    DATE_TRUNC_YEAR = "DATE_TRUNC_YEAR"
    COLOR = "COLOR"
    LABEL = "LABEL"
    END_DATE = "END_DATE"
    START_DATE = "START_DATE"
    HOUR = "HOUR"
    PHONE_COUNTRY_SHORT_NAME = "PHONE_COUNTRY_SHORT_NAME"
    PERSON = "PERSON"
    ORDER = "ORDER"
    LENGTH = "LENGTH"
    FLATTEN = "FLATTEN"
    IS_DONE = "IS_DONE"
    # aggregative
    COUNT = "COUNT"
    COUNT_DISTINCT = "COUNT_DISTINCT"
    COUNT_SUBITEMS = "COUNT_SUBITEMS"
    COUNT_ITEMS = COUNT_ITEMS_FUNCTION
    FIRST = "FIRST"
    SUM = "SUM"
    AVERAGE = "AVERAGE"
    MEDIAN = "MEDIAN"
    MIN = "MIN"
    MAX = "MAX"
    MIN_MAX = "MIN_MAX"


TRANSFORMATIVE_FUNCTIONS = frozenset(
    {
        AggregationFunction.TRIM,
        AggregationFunction.UPPER,
        AggregationFunction.LOWER,
        AggregationFunction.DATE_TRUNC_DAY,
        AggregationFunction.DATE_TRUNC_WEEK,
        AggregationFunction.DATE_TRUNC_MONTH,
        AggregationFunction.DATE_TRUNC_QUARTER,
        AggregationFunction.DATE_TRUNC_YEAR,
        AggregationFunction.COLOR,
        AggregationFunction.LABEL,
        AggregationFunction.END_DATE,
        AggregationFunction.START_DATE,
        AggregationFunction.HOUR,
        AggregationFunction.PHONE_COUNTRY_SHORT_NAME,
        AggregationFunction.PERSON,
        AggregationFunction.ORDER,
        AggregationFunction.LENGTH,
        AggregationFunction.FLATTEN,
        AggregationFunction.IS_DONE,
    }
)


class Aggregation(ToolInput):
    function: Optional[AggregationFunction] = Field(
        default=None,
        description="The function of the aggregation. For simple column value leave undefined",
    )
    column_id: str = Field(description="The id of the column to aggregate")


AGGREGATIONS = TypeAdapter(List[Aggregation])


class BoardInsightsInput(ToolInput):
    board_id: MondayId = Field(description="The id of the board to get insights for")
    aggregations_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The aggregations to get. Send this as a stringified JSON array of '
            '"aggregations" field. Read "aggregations" field description for details how to use it.'
        ),
    )
    aggregations: Optional[List[Aggregation]] = Field(
        default=None,
        description=(
            'The aggregations to get. Before sending the aggregations, use get_board_info tool to check '
            '"aggregationGuidelines" key for information. Transformative functions and plain columns (no '
            'function) must be in group by. [REQUIRED PRECONDITION]: Either send this field or the stringified '
            'version of it.'
        ),
    )
    group_by: Optional[List[str]] = Field(
        default=None,
        description=(
            "The columns to group by. All columns in the group by must be in the aggregations as well without "
            "a function."
        ),
    )
    limit: int = Field(
        default=INSIGHTS_DEFAULT_LIMIT,
        le=INSIGHTS_MAX_LIMIT,
        description="The limit of the results",
    )
    filters_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The filters to apply on the items. Send this as a stringified '
            'JSON array of "filters" field. Read "filters" field description for details how to use it.'
        ),
    )
    filters: Optional[List[FilterRule]] = Field(default=None, description=FILTERS_DESCRIPTION)
    filters_operator: ItemsQueryOperator = Field(
        default=ItemsQueryOperator.AND,
        description="The logical operator to use for the filters",
    )
    order_by_stringified: Optional[str] = Field(
        default=None,
        description=(
            '**ONLY FOR MICROSOFT COPILOT**: The order by to apply on the items. Send this as a stringified '
            'JSON array of "orderBy" field. Read "orderBy" field description for details how to use it.'
        ),
    )
    order_by: Optional[List[OrderBy]] = Field(
        default=None,
        description="The columns to order by, will control the order of the items in the response",
    )


def _column_select(column_id: str) -> Dict[str, Any]:
    return {"type": "COLUMN", "column": {"column_id": column_id}, "as": column_id}


def _function_select(function: AggregationFunction, column_id: str, alias: str) -> Dict[str, Any]:
    params = [] if function == AggregationFunction.COUNT_ITEMS else [_column_select(column_id)]
    return {
        "type": "FUNCTION",
        "function": {"function": function.value, "params": params},
        "as": alias,
    }


def build_select_and_group_by(
    aggregations: List[Aggregation],
    group_by: Optional[List[str]],
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    ``select`` and ``group_by`` elements of an ``AggregateQueryInput``.

    Args:
        aggregations: Requested aggregations, in order
        group_by: Column ids to group by
    Returns:
        (select elements, group by elements)
    """
    group_by_elements = [{"column_id": column_id} for column_id in group_by or []]

    def ensure_grouped(column_id: str) -> None:
        if not any(element["column_id"] == column_id for element in group_by_elements):
            group_by_elements.append({"column_id": column_id})

    labelled = {a.column_id for a in aggregations if a.function == AggregationFunction.LABEL}
    label_aggregations = [
        Aggregation(function=AggregationFunction.LABEL, column_id=column_id)
        for column_id in group_by or []
        if column_id not in labelled
    ]

    alias_counts: Dict[str, int] = {}
    select_elements = []
    for aggregation in aggregations + label_aggregations:
        if not aggregation.function:
            select_elements.append(_column_select(aggregation.column_id))
            ensure_grouped(aggregation.column_id)
            continue

        key = f"{aggregation.function.value}_{aggregation.column_id}"
        alias = f"{key}_{alias_counts.get(key, 0)}"
        alias_counts[key] = alias_counts.get(key, 0) + 1
        if aggregation.function in TRANSFORMATIVE_FUNCTIONS:
            ensure_grouped(alias)
        select_elements.append(_function_select(aggregation.function, aggregation.column_id, alias))

    selected = {element["as"] for element in select_elements}
    for element in group_by_elements:
        if element["column_id"] not in selected:
            select_elements.append(_column_select(element["column_id"]))
            selected.add(element["column_id"])

    return select_elements, group_by_elements


def build_items_query(tool_input: BoardInsightsInput) -> Optional[Dict[str, Any]]:
    """``ItemsQuery`` restricting the aggregated items, None when unfiltered and unordered."""
    if not tool_input.filters and not tool_input.order_by:
        return None
    items_query: Dict[str, Any] = {}
    if tool_input.filters:
        items_query["rules"] = to_query_rules(tool_input.filters)
        items_query["operator"] = tool_input.filters_operator.value
    if tool_input.order_by:
        items_query["order_by"] = to_order_by(tool_input.order_by)
    return items_query


def result_rows(res: Dict[str, Any]) -> List[Dict[str, Any]]:
    rows = []
    for result_set in (res.get("aggregate") or {}).get("results") or []:
        row: Dict[str, Any] = {}
        for entry in (result_set or {}).get("entries") or []:
            alias = entry.get("alias")
            if not alias:
                continue
            value = entry.get("value") or {}
            result = value.get("result")
            row[alias] = result if result is not None else value.get("value")
        rows.append(row)
    return rows


class MondayInsights(MondayActions):
    """Aggregated views over board items"""

    @tool(
        name="board_insights",
        type=ToolType.READ,
        title="Get Board Insights",
        description=(
            "This tool allows you to calculate insights about board's data by filtering, grouping and "
            "aggregating columns. For example, you can get the total number of items in a board, the number of "
            "items in each status, the number of items in each column, etc. Use this tool when you need to get "
            "a summary of the board's data, for example, you want to know the total number of items in a "
            "board, the number of items in each status, the number of items in each column, etc."
            "[REQUIRED PRECONDITION]: Before using this tool, if new columns were added to the board or if you "
            "are not familiar with the board's structure (column IDs, column types, status labels, etc.), first "
            "use get_board_info to understand the board metadata. This is essential for constructing proper "
            "filters and knowing which columns are available."
            "[IMPORTANT]: For some columns, human-friendly label is returned inside 'LABEL_<column_id' field. "
            "E.g. for column with id 'status_123' the label is returned inside 'LABEL_status_123' field."
        ),
        input_model=BoardInsightsInput,
        read_only=True,
        idempotent=True,
    )
    async def board_insights(self, tool_input: BoardInsightsInput) -> str:
        if not tool_input.aggregations and not tool_input.aggregations_stringified:
            return MISSING_AGGREGATIONS_MESSAGE

        fallback_to_stringified_version_if_null(tool_input, "aggregations", AGGREGATIONS)
        fallback_to_stringified_version_if_null(tool_input, "filters", FILTER_RULES)
        fallback_to_stringified_version_if_null(tool_input, "order_by", ORDER_BY_LIST)

        select, group_by = build_select_and_group_by(tool_input.aggregations or [], tool_input.group_by)
        query: Dict[str, Any] = {
            "from": {"id": tool_input.board_id, "type": "TABLE"},
            "select": select,
            "group_by": group_by,
            "limit": tool_input.limit,
        }
        items_query = build_items_query(tool_input)
        if items_query:
            query["query"] = items_query

        res = await self.client.query("aggregate_board_insights", {"query": query})
        rows = result_rows(res)
        if not rows:
            return "No board insights found for the given query."
        return f"Board insights result ({len(rows)} rows):\n{json.dumps(rows, indent=2, ensure_ascii=False)}"
