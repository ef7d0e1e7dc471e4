"""
Item filtering models shared by the board item tools.

Rules travel as ``{"columnId", "compareValue", "operator", "compareAttribute"}``
and are converted to the ``ItemsQuery`` input of the monday.com API.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, TypeAdapter  # type: ignore

from monday_toolkit.agents.tool.models import MondayId, ToolInput


class ItemsQueryRuleOperator(str, Enum):
    ANY_OF = "any_of"
    NOT_ANY_OF = "not_any_of"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUALS = "greater_than_or_equals"
    LOWER_THAN = "lower_than"
    LOWER_THAN_OR_EQUAL = "lower_than_or_equal"
    BETWEEN = "between"
    CONTAINS_TEXT = "contains_text"
    NOT_CONTAINS_TEXT = "not_contains_text"
    CONTAINS_TERMS = "contains_terms"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    WITHIN_THE_NEXT = "within_the_next"
    WITHIN_THE_LAST = "within_the_last"


class ItemsQueryOperator(str, Enum):
    AND = "and"
    OR = "or"


class ItemsOrderByDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


CompareValue = Union[str, int, float, bool, List[Union[str, int, float]]]


class FilterRule(ToolInput):
    column_id: str = Field(description="The id of the column to filter by")
    compare_attribute: Optional[str] = Field(
        default=None,
        description="The attribute to compare the value to. This is OPTIONAL property.",
    )
    compare_value: CompareValue = Field(
        description=(
            "The value to compare the attribute to. This can be a string or index value "
            "depending on the column type."
        )
    )
    operator: ItemsQueryRuleOperator = Field(
        default=ItemsQueryRuleOperator.ANY_OF,
        description="The operator to use for the filter",
    )


class OrderBy(ToolInput):
    column_id: str = Field(description="The id of the column to order by")
    direction: ItemsOrderByDirection = Field(
        default=ItemsOrderByDirection.ASC,
        description="The direction to order by",
    )


FILTER_RULES = TypeAdapter(List[FilterRule])
ORDER_BY_LIST = TypeAdapter(List[OrderBy])

FILTERS_DESCRIPTION = (
    "The configuration of filters to apply on the items. Before sending the filters, use get_board_info "
    'tool to check "filteringGuidelines" key for filtering by the column.'
)
FILTERS_OPERATOR_DESCRIPTION = "The operator to use for the filters"


class FilteredItemsInput(ToolInput):
    """Common arguments of tools reading a filtered set of board items"""

    board_id: MondayId = Field(description="The id of the board to get items from")
    filters: Optional[List[FilterRule]] = Field(default=None, description=FILTERS_DESCRIPTION)
    filters_operator: ItemsQueryOperator = Field(
        default=ItemsQueryOperator.AND,
        description=FILTERS_OPERATOR_DESCRIPTION,
    )


def to_query_rules(filters: List[FilterRule]) -> List[Dict[str, Any]]:
    """Convert filter rules to ``ItemsQueryRule`` inputs."""
    rules = []
    for rule in filters:
        query_rule: Dict[str, Any] = {
            "column_id": rule.column_id,
            "compare_value": rule.compare_value,
            "operator": rule.operator.value,
        }
        if rule.compare_attribute is not None:
            query_rule["compare_attribute"] = rule.compare_attribute
        rules.append(query_rule)
    return rules


def to_order_by(order_by: List[OrderBy]) -> List[Dict[str, Any]]:
    return [{"column_id": o.column_id, "direction": o.direction.value} for o in order_by]
