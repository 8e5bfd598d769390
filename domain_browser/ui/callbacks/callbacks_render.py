from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, exceptions

from domain_browser.core.query import query
from domain_browser.core.view_state import from_query_string
from domain_browser.ui.callbacks.callbacks_routing import is_dashboard_path
from domain_browser.ui.helpers import display_records
from domain_browser.ui.ids import IDs
from domain_browser.ui.layout.build_table_panel import total_text

if TYPE_CHECKING:
    from domain_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Address -> visible page
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DATA_TABLE, "data"),
        Output(IDs.Control.DATA_TABLE, "page_count"),
        Output(IDs.Control.DATA_TABLE, "page_size"),
        Output(IDs.Control.TOTAL_TEXT, "children"),
        Input(IDs.Control.URL, "search"),
        State(IDs.Control.URL, "pathname"),
        prevent_initial_call=True,
    )
    def update_table_from_address(search, pathname):
        if not is_dashboard_path(pathname):
            raise exceptions.PreventUpdate

        state = from_query_string(search)
        dataset = ctx.dataset_service.current
        window = query(dataset, state.filters, state.search_text, state.sort, state.page)

        logger.debug(
            "Rendered result window",
            extra={"total_matching": window.total_matching, "page": state.page.number},
        )

        return (
            display_records(window.rows, dataset.columns),
            window.page_count(state.page.size),
            state.page.size,
            total_text(window),
        )
