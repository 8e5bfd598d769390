from __future__ import annotations

__all__ = ["IDs", "select_filter_id", "range_filter_id"]


class IDs:
    class Store:
        AUTH = "auth-state"

    class Control:
        # Routing
        URL = "url"
        PAGE_CONTENT = "page-content"

        # Navbar
        LOGOUT_BTN = "logout-btn"

        # Login
        LOGIN_USERNAME = "login-username"
        LOGIN_PASSWORD = "login-password"
        LOGIN_BTN = "login-btn"
        LOGIN_STATUS = "login-status"

        # Dashboard toolbar
        SEARCH_INPUT = "search-input"
        FILTERS_OPEN_BTN = "filters-open-btn"
        RELOAD_BTN = "reload-btn"
        FETCH_ERROR = "fetch-error"
        TOTAL_TEXT = "total-text"

        # Grid
        DATA_TABLE = "data-table"
        PAGE_SIZE_SELECT = "page-size-select"

        # Filter drawer
        FILTER_DRAWER = "filter-drawer"
        FILTER_APPLY_BTN = "filter-apply-btn"
        FILTER_RESET_BTN = "filter-reset-btn"

    class Pattern:
        # pattern-matching "type" strings
        SELECT_FILTER = "select-filter"
        RANGE_FILTER = "range-filter"


def select_filter_id(field: str) -> dict:
    return {"type": IDs.Pattern.SELECT_FILTER, "field": field}


def range_filter_id(field: str, bound: str) -> dict:
    return {"type": IDs.Pattern.RANGE_FILTER, "field": field, "bound": bound}
