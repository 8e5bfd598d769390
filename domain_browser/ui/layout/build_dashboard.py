from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from domain_browser.core.query import query
from domain_browser.core.view_state import ViewState
from domain_browser.ui.layout.build_filter_drawer import build_filter_drawer
from domain_browser.ui.layout.build_table_panel import build_table_panel
from domain_browser.ui.ids import IDs

if TYPE_CHECKING:
    from domain_browser.ui.config import AppConfig


def build_dashboard(ctx: AppConfig, state: ViewState) -> html.Div:
    """
    Dashboard page rendered for the given view state.

    Controls are initialised from the state so a shared address reproduces
    the same view.
    """
    service = ctx.dataset_service
    dataset = service.current
    window = query(dataset, state.filters, state.search_text, state.sort, state.page)

    toolbar = html.Div(
        [
            html.Div(
                dcc.Input(
                    id=IDs.Control.SEARCH_INPUT,
                    type="search",
                    placeholder="Search by domain name...",
                    value=state.search_text,
                    debounce=True,
                    className="form-control",
                ),
                className="flex-grow-1 dbb-search",
            ),
            dbc.Button("Reload data", id=IDs.Control.RELOAD_BTN, color="secondary", outline=True),
            dbc.Button("Filters", id=IDs.Control.FILTERS_OPEN_BTN, color="primary"),
        ],
        className="d-flex flex-wrap gap-3 align-items-center mb-3",
    )

    error = dbc.Alert(
        f"Could not load data: {service.last_error}" if service.last_error else "",
        id=IDs.Control.FETCH_ERROR,
        color="warning",
        is_open=bool(service.last_error),
        className="py-2",
    )

    return html.Div(
        [
            toolbar,
            error,
            build_table_panel(dataset, state, window, ctx.global_config),
            build_filter_drawer(dataset, state, ctx.global_config),
        ],
        className="p-3",
    )
