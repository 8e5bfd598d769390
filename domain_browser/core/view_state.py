from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode

PAGE_KEY = "page"
PAGE_SIZE_KEY = "pageSize"
SEARCH_TEXT_KEY = "searchText"
SORT_FIELD_KEY = "sortField"
SORT_ORDER_KEY = "sortOrder"

RESERVED_KEYS = frozenset({PAGE_KEY, PAGE_SIZE_KEY, SEARCH_TEXT_KEY, SORT_FIELD_KEY, SORT_ORDER_KEY})

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 20


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    NONE = "none"

    @property
    def param(self) -> Optional[str]:
        """Token written to the address ('ascend' / 'descend')."""
        if self is SortDirection.ASCENDING:
            return "ascend"
        if self is SortDirection.DESCENDING:
            return "descend"
        return None

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortDirection":
        token = (value or "").strip().lower()
        if token in ("ascend", "ascending", "asc"):
            return cls.ASCENDING
        if token in ("descend", "descending", "desc"):
            return cls.DESCENDING
        return cls.NONE


@dataclass(frozen=True)
class SortSpec:
    field: str = ""
    direction: SortDirection = SortDirection.NONE

    def __post_init__(self) -> None:
        # No field means unsorted, whatever the direction says
        if not self.field and self.direction is not SortDirection.NONE:
            object.__setattr__(self, "direction", SortDirection.NONE)

    @property
    def is_active(self) -> bool:
        return bool(self.field) and self.direction is not SortDirection.NONE


@dataclass(frozen=True)
class PageSpec:
    number: int = DEFAULT_PAGE_NUMBER
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.number}")
        if self.size < 1:
            raise ValueError(f"Page size must be >= 1, got {self.size}")

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size


@dataclass(frozen=True)
class ViewState:
    """
    Everything that determines what the grid shows.

    Fields:

    - filters: filter key -> string value (bare field keys and <field>Min / <field>Max bounds)
    - search_text: substring searched in the identity field
    - sort: sort field and direction
    - page: page number and page size
    """
    filters: Dict[str, str] = field(default_factory=dict)
    search_text: str = ""
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageSpec = field(default_factory=PageSpec)

    # -------------------------------------------------------------------------
    # UI transitions
    # -------------------------------------------------------------------------
    def with_search(self, text: Optional[str]) -> "ViewState":
        return replace(self, search_text=text or "", page=replace(self.page, number=1))

    def with_filters(self, filters: Mapping[str, Any]) -> "ViewState":
        cleaned = {
            str(k): str(v)
            for k, v in filters.items()
            if v is not None and str(v) != "" and k not in RESERVED_KEYS
        }
        return replace(self, filters=cleaned, page=replace(self.page, number=1))

    def reset(self) -> "ViewState":
        """Clear filters and search, keep sort and page size."""
        return replace(self, filters={}, search_text="", page=replace(self.page, number=1))

    def with_table_change(
        self,
        page_number: Optional[int],
        page_size: Optional[int],
        sort: Optional[SortSpec] = None,
    ) -> "ViewState":
        return replace(
            self,
            page=PageSpec(
                number=_positive_int(page_number, DEFAULT_PAGE_NUMBER),
                size=_positive_int(page_size, self.page.size),
            ),
            sort=sort if sort is not None else self.sort,
        )


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def decode(params: Mapping[str, str]) -> ViewState:
    """Address parameters -> ViewState. Unreserved keys become filters verbatim."""
    filters: Dict[str, str] = {}
    for key, value in params.items():
        if key in RESERVED_KEYS:
            continue
        if value is None or value == "":
            continue
        filters[key] = str(value)

    return ViewState(
        filters=filters,
        search_text=params.get(SEARCH_TEXT_KEY) or "",
        sort=SortSpec(
            field=params.get(SORT_FIELD_KEY) or "",
            direction=SortDirection.parse(params.get(SORT_ORDER_KEY)),
        ),
        page=PageSpec(
            number=_positive_int(params.get(PAGE_KEY), DEFAULT_PAGE_NUMBER),
            size=_positive_int(params.get(PAGE_SIZE_KEY), DEFAULT_PAGE_SIZE),
        ),
    )


def encode(state: ViewState) -> Dict[str, str]:
    """ViewState -> address parameters. Defaults and empty values are omitted."""
    params: Dict[str, str] = {}

    for key, value in state.filters.items():
        if key in RESERVED_KEYS or value is None or value == "":
            continue
        params[key] = str(value)

    if state.search_text:
        params[SEARCH_TEXT_KEY] = state.search_text

    if state.sort.field:
        params[SORT_FIELD_KEY] = state.sort.field
        order = state.sort.direction.param
        if order:
            params[SORT_ORDER_KEY] = order

    if state.page.number != DEFAULT_PAGE_NUMBER:
        params[PAGE_KEY] = str(state.page.number)
    if state.page.size != DEFAULT_PAGE_SIZE:
        params[PAGE_SIZE_KEY] = str(state.page.size)

    return params


def from_query_string(search: Optional[str]) -> ViewState:
    """'?page=2&language=English' -> ViewState (last value wins for repeated keys)."""
    query = (search or "").lstrip("?")
    return decode(dict(parse_qsl(query, keep_blank_values=False)))


def to_query_string(state: ViewState) -> str:
    params = encode(state)
    if not params:
        return ""
    return "?" + urlencode(sorted(params.items()))
