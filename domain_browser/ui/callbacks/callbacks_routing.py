from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output, State

from domain_browser.core.view_state import from_query_string
from domain_browser.ui.ids import IDs
from domain_browser.ui.layout.build_dashboard import build_dashboard
from domain_browser.ui.layout.build_login_panel import build_login_panel

if TYPE_CHECKING:
    from domain_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"
LOGIN_PATH = "/"


def is_dashboard_path(pathname: str | None) -> bool:
    return (pathname or "").rstrip("/") == DASHBOARD_PATH


def render_page(ctx: AppConfig, pathname: str | None, search: str | None, authenticated: Any) -> Any:
    """
    Pure helper: pick the page for the current address and auth flag.

    The dashboard is only rendered when signed in; everything else shows the
    login screen.
    """
    if not (is_dashboard_path(pathname) and authenticated):
        return build_login_panel()

    ctx.dataset_service.ensure_loaded()
    return build_dashboard(ctx, from_query_string(search))


def register_routing_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    @app.callback(
        Output(IDs.Control.PAGE_CONTENT, "children"),
        Input(IDs.Control.URL, "pathname"),
        Input(IDs.Store.AUTH, "data"),
        State(IDs.Control.URL, "search"),
    )
    def route(pathname, authenticated, search):
        return render_page(ctx, pathname, search, authenticated)

    # ---------------------------------------------------------
    # Reload: refetch, then rebuild the page from the address
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.PAGE_CONTENT, "children", allow_duplicate=True),
        Input(IDs.Control.RELOAD_BTN, "n_clicks"),
        State(IDs.Control.URL, "search"),
        prevent_initial_call=True,
    )
    def reload_dataset(n_clicks, search):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        ok = ctx.dataset_service.refresh()
        logger.info("Reload requested", extra={"success": ok})
        return build_dashboard(ctx, from_query_string(search))
