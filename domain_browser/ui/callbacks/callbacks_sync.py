from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List

import dash
from dash import ALL, Input, Output, State, exceptions

from domain_browser.core.query import MAX_SUFFIX, MIN_SUFFIX
from domain_browser.core.view_state import ViewState, from_query_string, to_query_string
from domain_browser.ui.helpers import collect_filters, range_input_value, sort_spec_from_sort_by
from domain_browser.ui.ids import IDs

if TYPE_CHECKING:
    from domain_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

_SELECT_FILTERS = {"type": IDs.Pattern.SELECT_FILTER, "field": ALL}
_RANGE_FILTERS = {"type": IDs.Pattern.RANGE_FILTER, "field": ALL, "bound": ALL}


def next_view_state(current: ViewState, triggered_id: Any, inputs: Dict[str, Any]) -> ViewState:
    """
    Pure helper: apply one user action to the current view state.

    `inputs` carries the control values read by the callback:
    search, page_current (0-based), sort_by, page_size and filters.
    """
    if triggered_id == IDs.Control.SEARCH_INPUT:
        return current.with_search(inputs.get("search"))

    if triggered_id == IDs.Control.FILTER_APPLY_BTN:
        return current.with_filters(inputs.get("filters") or {})

    if triggered_id == IDs.Control.FILTER_RESET_BTN:
        return current.reset()

    if triggered_id == IDs.Control.DATA_TABLE:
        page_current = inputs.get("page_current") or 0
        return current.with_table_change(
            page_number=int(page_current) + 1,
            page_size=current.page.size,
            sort=sort_spec_from_sort_by(inputs.get("sort_by")),
        )

    if triggered_id == IDs.Control.PAGE_SIZE_SELECT:
        return current.with_table_change(page_number=1, page_size=inputs.get("page_size"))

    return current


def _form_values(state: ViewState, select_ids: List[dict], range_ids: List[dict]) -> tuple[list, list]:
    selects = [state.filters.get(cid["field"]) for cid in select_ids]
    ranges = [
        range_input_value(state.filters, f"{cid['field']}{cid['bound']}")
        if cid.get("bound") in (MIN_SUFFIX, MAX_SUFFIX)
        else None
        for cid in range_ids
    ]
    return selects, ranges


def register_sync_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Controls -> address (canonical view state)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.URL, "search", allow_duplicate=True),
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Output(_SELECT_FILTERS, "value"),
        Output(_RANGE_FILTERS, "value"),
        Output(IDs.Control.DATA_TABLE, "page_current"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.FILTER_APPLY_BTN, "n_clicks"),
        Input(IDs.Control.FILTER_RESET_BTN, "n_clicks"),
        Input(IDs.Control.DATA_TABLE, "page_current"),
        Input(IDs.Control.DATA_TABLE, "sort_by"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        State(_SELECT_FILTERS, "value"),
        State(_SELECT_FILTERS, "id"),
        State(_RANGE_FILTERS, "value"),
        State(_RANGE_FILTERS, "id"),
        State(IDs.Control.URL, "search"),
        prevent_initial_call=True,
    )
    def sync_address_from_controls(
            search_val, _apply, _reset, page_current, sort_by, page_size,
            select_vals, select_ids, range_vals, range_ids, search,
    ):
        triggered_id = dash.ctx.triggered_id
        if triggered_id is None:
            raise exceptions.PreventUpdate

        current = from_query_string(search)
        inputs = {
            "search": search_val,
            "page_current": page_current,
            "sort_by": sort_by,
            "page_size": page_size,
            "filters": collect_filters(select_ids, select_vals, range_ids, range_vals),
        }
        new_state = next_view_state(current, triggered_id, inputs)

        if new_state == current and triggered_id != IDs.Control.FILTER_RESET_BTN:
            raise exceptions.PreventUpdate

        logger.debug(
            "View state changed",
            extra={"trigger": str(triggered_id), "query": to_query_string(new_state)},
        )

        # Only a reset rewrites the form; other actions leave controls as typed
        if triggered_id == IDs.Control.FILTER_RESET_BTN:
            selects, ranges = _form_values(new_state, select_ids, range_ids)
            search_out = new_state.search_text
        else:
            selects = [dash.no_update] * len(select_ids)
            ranges = [dash.no_update] * len(range_ids)
            search_out = dash.no_update

        return (
            to_query_string(new_state),
            search_out,
            selects,
            ranges,
            new_state.page.number - 1,
        )

    # ---------------------------------------------------------
    # Filter drawer open / close
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_DRAWER, "is_open"),
        Input(IDs.Control.FILTERS_OPEN_BTN, "n_clicks"),
        Input(IDs.Control.FILTER_APPLY_BTN, "n_clicks"),
        Input(IDs.Control.FILTER_RESET_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def toggle_filter_drawer(_open, _apply, _reset):
        return dash.ctx.triggered_id == IDs.Control.FILTERS_OPEN_BTN
