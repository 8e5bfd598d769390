from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence

from domain_browser.core.dataset import ColumnDescriptor, Dataset, ValueKind
from domain_browser.core.query import MAX_SUFFIX, MIN_SUFFIX, parse_number
from domain_browser.core.view_state import SortDirection, SortSpec


# -----------------------------------------------------------------------------
# Cell formatting
# -----------------------------------------------------------------------------
def format_number(value: Any) -> str:
    number = parse_number(value)
    if math.isnan(number):
        return "0" if value is None else str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_value(value: Any, kind: ValueKind) -> str:
    """Render a cell the way the grid shows it, based on the column's value kind."""
    if kind is ValueKind.NUMBER:
        return format_number(value)

    if value is None:
        return ""

    if kind is ValueKind.CURRENCY:
        number = parse_number(value)
        return str(value) if math.isnan(number) else f"${number:.2f}"

    if kind is ValueKind.PERCENT:
        number = parse_number(value)
        return str(value) if math.isnan(number) else f"{number * 100:.0f}%"

    return str(value)


def table_columns(columns: Sequence[ColumnDescriptor]) -> List[dict]:
    return [{"name": c.label, "id": c.key} for c in columns]


def display_records(rows: Iterable[Dict[str, Any]], columns: Sequence[ColumnDescriptor]) -> List[dict]:
    return [
        {c.key: format_value(row.get(c.key), c.value_kind) for c in columns}
        for row in rows
    ]


def dropdown_options(dataset: Dataset, key: str) -> List[dict]:
    return [{"label": str(v), "value": str(v)} for v in dataset.unique_values(key)]


# -----------------------------------------------------------------------------
# DataTable <-> SortSpec
# -----------------------------------------------------------------------------
def sort_spec_from_sort_by(sort_by: Optional[List[dict]]) -> SortSpec:
    """DataTable `sort_by` ([{column_id, direction: asc|desc}]) -> SortSpec."""
    if not sort_by:
        return SortSpec()
    first = sort_by[0]
    return SortSpec(
        field=str(first.get("column_id") or ""),
        direction=SortDirection.parse(first.get("direction")),
    )


def sort_by_from_spec(sort: SortSpec) -> List[dict]:
    if not sort.is_active:
        return []
    direction = "asc" if sort.direction is SortDirection.ASCENDING else "desc"
    return [{"column_id": sort.field, "direction": direction}]


# -----------------------------------------------------------------------------
# Filter form <-> filter dict
# -----------------------------------------------------------------------------
def number_to_param(value: Any) -> Optional[str]:
    """Numeric input value -> decimal string carried in the address."""
    if value is None or value == "":
        return None
    number = parse_number(value)
    if math.isnan(number):
        return None
    if number.is_integer():
        return str(int(number))
    return repr(number)


def collect_filters(
    select_ids: Sequence[dict],
    select_values: Sequence[Any],
    range_ids: Sequence[dict],
    range_values: Sequence[Any],
) -> Dict[str, str]:
    """
    Build a filter dict from the drawer's pattern-matched controls.

    Dropdowns map to bare field keys; range inputs map to <field>Min / <field>Max.
    """
    filters: Dict[str, str] = {}

    for cid, value in zip(select_ids, select_values):
        if value is None or value == "":
            continue
        filters[cid["field"]] = str(value)

    for cid, value in zip(range_ids, range_values):
        param = number_to_param(value)
        if param is None:
            continue
        bound = cid.get("bound")
        if bound not in (MIN_SUFFIX, MAX_SUFFIX):
            continue
        filters[f"{cid['field']}{bound}"] = param

    return filters


def range_input_value(filters: Dict[str, str], key: str) -> Optional[float]:
    """Initial value of a numeric input from the current filters."""
    number = parse_number(filters.get(key))
    return None if math.isnan(number) else number
