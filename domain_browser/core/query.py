from __future__ import annotations

import locale
import math
import numbers
import re
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Mapping, Optional

import numpy as np
import pandas as pd

from domain_browser.core.dataset import Dataset
from domain_browser.core.view_state import PageSpec, SortDirection, SortSpec

MIN_SUFFIX = "Min"
MAX_SUFFIX = "Max"

# Spam score is stored as a 0-1 fraction but entered by users as 0-100
SPAM_SCORE_MARKER = "spamscore"

_NON_NUMERIC_RE = re.compile(r"[^0-9.+\-]")


@dataclass(frozen=True)
class ResultWindow:
    """One page of the filtered, sorted dataset plus the pre-slice match count."""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    total_matching: int = 0

    def page_count(self, page_size: int) -> int:
        if page_size < 1:
            return 0
        return math.ceil(self.total_matching / page_size)


# -----------------------------------------------------------------------------
# Value parsing
# -----------------------------------------------------------------------------
def parse_number(value: Any) -> float:
    """
    Parse a cell or filter value as a float, NaN when it is not a number.

    Formatted strings like "1,234" or "$12.50" are accepted by discarding
    everything except digits, sign and decimal point.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, numbers.Real):
        return float(value)
    cleaned = _NON_NUMERIC_RE.sub("", str(value))
    if not cleaned:
        return math.nan
    try:
        return float(cleaned)
    except ValueError:
        return math.nan


def is_empty_filter_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def split_filter_key(key: str) -> tuple[str, Optional[str]]:
    """'trafficMin' -> ('traffic', 'Min'); 'language' -> ('language', None)"""
    for suffix in (MIN_SUFFIX, MAX_SUFFIX):
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)], suffix
    return key, None


def filter_number(key: str, value: Any) -> float:
    number = parse_number(value)
    if SPAM_SCORE_MARKER in key.lower():
        number = number / 100
    return number


# -----------------------------------------------------------------------------
# Filtering
# -----------------------------------------------------------------------------
def _field_values(frame: pd.DataFrame, key: str) -> pd.Series:
    if key in frame.columns:
        return frame[key]
    return pd.Series([None] * len(frame), index=frame.index, dtype=object)


def _as_numbers(values: pd.Series) -> np.ndarray:
    return np.array([parse_number(v) for v in values], dtype=float)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _as_text(values: pd.Series) -> pd.Series:
    return values.map(lambda v: "" if _is_missing(v) else str(v)).astype(str)


def _contains(values: pd.Series, needle: str) -> np.ndarray:
    text = _as_text(values).str.lower()
    return text.str.contains(str(needle).lower(), regex=False).to_numpy(dtype=bool)


def filter_mask(dataset: Dataset, filters: Mapping[str, Any]) -> np.ndarray:
    """
    Boolean mask of rows satisfying every active filter (logical AND).

    Filter values are strings as carried in the address; empty values are skipped.
    """
    frame = dataset.frame
    mask = np.ones(len(frame), dtype=bool)

    for key, value in filters.items():
        if is_empty_filter_value(value):
            continue

        base, suffix = split_filter_key(key)
        values = _field_values(frame, base)

        if suffix is not None:
            bound = filter_number(key, value)
            numbers_ = _as_numbers(values)
            with np.errstate(invalid="ignore"):
                if suffix == MIN_SUFFIX:
                    mask &= numbers_ >= bound
                else:
                    mask &= numbers_ <= bound
            continue

        column = dataset.column(base)
        if column is not None and column.value_kind.is_numeric:
            target = filter_number(key, value)
            mask &= _as_numbers(values) == target
        else:
            mask &= _contains(values, value)

    return mask


def search_mask(dataset: Dataset, search_text: Optional[str]) -> np.ndarray:
    frame = dataset.frame
    if not search_text:
        return np.ones(len(frame), dtype=bool)
    return _contains(_field_values(frame, dataset.identity_field), search_text)


# -----------------------------------------------------------------------------
# Sorting
# -----------------------------------------------------------------------------
def _compare_numbers(a: Any, b: Any) -> int:
    x, y = parse_number(a), parse_number(b)
    x_nan, y_nan = math.isnan(x), math.isnan(y)
    if x_nan or y_nan:
        return int(x_nan) - int(y_nan)
    diff = x - y
    return (diff > 0) - (diff < 0)


def _compare_text(a: Any, b: Any) -> int:
    a_missing, b_missing = _is_missing(a), _is_missing(b)
    if a_missing or b_missing:
        return int(a_missing) - int(b_missing)
    sa, sb = str(a), str(b)
    result = locale.strcoll(sa.casefold(), sb.casefold())
    if result == 0:
        result = locale.strcoll(sa, sb)
    return (result > 0) - (result < 0)


def row_comparator(dataset: Dataset, sort: SortSpec) -> Callable[[Mapping[str, Any], Mapping[str, Any]], int]:
    column = dataset.column(sort.field)
    numeric = column is not None and column.value_kind.is_numeric
    base = _compare_numbers if numeric else _compare_text
    sign = -1 if sort.direction is SortDirection.DESCENDING else 1
    key = sort.field

    def compare(left: Mapping[str, Any], right: Mapping[str, Any]) -> int:
        return sign * base(left.get(key), right.get(key))

    return compare


def sort_rows(dataset: Dataset, rows: List[Dict[str, Any]], sort: SortSpec) -> List[Dict[str, Any]]:
    """Stable sort; unsorted specs return rows in dataset order."""
    if not sort.is_active:
        return list(rows)
    return sorted(rows, key=cmp_to_key(row_comparator(dataset, sort)))


# -----------------------------------------------------------------------------
# Pagination
# -----------------------------------------------------------------------------
def paginate(rows: List[Dict[str, Any]], page: PageSpec) -> List[Dict[str, Any]]:
    return rows[page.offset:page.offset + page.size]


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------
def query(
    dataset: Dataset,
    filters: Mapping[str, Any],
    search_text: Optional[str],
    sort: SortSpec,
    page: PageSpec,
) -> ResultWindow:
    """
    Derive the visible page from the full dataset.

    Pure function of its inputs: filter (AND of every active filter and the
    identity search), stable sort, then slice to the requested page.
    """
    mask = filter_mask(dataset, filters) & search_mask(dataset, search_text)
    matching = dataset.take(np.flatnonzero(mask))
    ordered = sort_rows(dataset, matching, sort)
    return ResultWindow(rows=paginate(ordered, page), total_matching=len(ordered))
