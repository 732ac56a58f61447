# =============================================================================
# lib/query.py - Advanced Results Query Parsing
# =============================================================================
# Turns a listing query string into a MongoDB filter plus projection,
# sort and pagination settings.
#
#   ?average_cost[lte]=10000&careers[in]=Business,UI/UX&select=name&sort=-name&page=2
#
# becomes
#
#   filters = {"average_cost": {"$lte": 10000},
#              "careers": {"$in": ["Business", "UI/UX"]}}
#   select = ["name"], sort = ["-name"], page = 2, limit = 25
# =============================================================================

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from bson import ObjectId

# Parameters that control the listing rather than filter it
RESERVED_PARAMS = {"select", "sort", "page", "limit"}

DEFAULT_SORT = "-created_at"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100

FIELD_PATTERN = re.compile(r"^[A-Za-z_][\w.]*$")
FILTER_KEY_PATTERN = re.compile(r"^(?P<field>[A-Za-z_][\w.]*)\[(?P<op>gt|gte|lt|lte|in)\]$")
NUMBER_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")


@dataclass
class ListQuery:
    """Parsed listing parameters."""
    filters: dict[str, Any] = field(default_factory=dict)
    select: list[str] = field(default_factory=list)
    sort: list[str] = field(default_factory=lambda: [DEFAULT_SORT])
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def coerce_value(value: str) -> Any:
    """
    Convert a query-string value to the type it most likely represents.

    "10" -> 10, "2.5" -> 2.5, "true" -> True, 24-char hex -> ObjectId.
    Anything else stays a string.
    """
    if NUMBER_PATTERN.match(value):
        return float(value) if "." in value else int(value)
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if len(value) == 24 and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_positive_int(name: str, value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"'{name}' must be an integer, got '{value}'")
    if number < 1:
        raise ValueError(f"'{name}' must be 1 or greater")
    return number


def parse_list_query(params: Iterable[tuple[str, str]]) -> ListQuery:
    """
    Parse raw query parameters into a ListQuery.

    Args:
        params: (key, value) pairs, e.g. request.query_params.multi_items()

    Returns:
        ListQuery with filters, select, sort, page and limit

    Raises:
        ValueError: If page or limit are not positive integers, or a filter
            key is not a plain field name (operators like $where are refused)
    """
    query = ListQuery()

    for key, value in params:
        if key == "select":
            query.select = _split_csv(value)
        elif key == "sort":
            query.sort = _split_csv(value) or [DEFAULT_SORT]
        elif key == "page":
            query.page = _parse_positive_int("page", value)
        elif key == "limit":
            query.limit = min(_parse_positive_int("limit", value), MAX_LIMIT)
        else:
            match = FILTER_KEY_PATTERN.match(key)
            if match:
                operator = f"${match.group('op')}"
                if operator == "$in":
                    operand = [coerce_value(v) for v in _split_csv(value)]
                else:
                    operand = coerce_value(value)
                query.filters.setdefault(match.group("field"), {})[operator] = operand
            elif FIELD_PATTERN.fullmatch(key):
                query.filters[key] = coerce_value(value)
            else:
                raise ValueError(f"'{key}' is not a filterable field")

    return query


def build_pagination(page: int, limit: int, total: int) -> dict[str, dict[str, int]]:
    """
    Build the next/prev pagination block.

    `next` is present only when results remain after this page,
    `prev` only when this page is not the first.
    """
    start_index = (page - 1) * limit
    end_index = page * limit

    pagination: dict[str, dict[str, int]] = {}
    if end_index < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if start_index > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination


def apply_select(record: dict[str, Any], select: list[str]) -> dict[str, Any]:
    """Keep only the selected fields (the id always survives)."""
    if not select:
        return record
    return {k: v for k, v in record.items() if k in select or k == "id"}
