from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, exceptions

from domain_browser.services.auth import authenticate
from domain_browser.ui.callbacks.callbacks_routing import DASHBOARD_PATH, LOGIN_PATH
from domain_browser.ui.ids import IDs

if TYPE_CHECKING:
    from domain_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials!"


def register_auth_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    @app.callback(
        Output(IDs.Store.AUTH, "data"),
        Output(IDs.Control.URL, "pathname"),
        Output(IDs.Control.LOGIN_STATUS, "children"),
        Input(IDs.Control.LOGIN_BTN, "n_clicks"),
        Input(IDs.Control.LOGIN_PASSWORD, "n_submit"),
        State(IDs.Control.LOGIN_USERNAME, "value"),
        State(IDs.Control.LOGIN_PASSWORD, "value"),
        prevent_initial_call=True,
    )
    def login(n_clicks, n_submit, username, password):
        if not n_clicks and not n_submit:
            raise exceptions.PreventUpdate

        if not authenticate(username, password, ctx.global_config.credentials):
            return dash.no_update, dash.no_update, INVALID_CREDENTIALS

        logger.info("Login successful", extra={"username": username})
        # Search params stay on the address, so a shared view survives sign-in
        return True, DASHBOARD_PATH, ""

    @app.callback(
        Output(IDs.Store.AUTH, "data", allow_duplicate=True),
        Output(IDs.Control.URL, "pathname", allow_duplicate=True),
        Output(IDs.Control.URL, "search", allow_duplicate=True),
        Input(IDs.Control.LOGOUT_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def logout(n_clicks):
        if not n_clicks:
            raise exceptions.PreventUpdate
        return False, LOGIN_PATH, ""
