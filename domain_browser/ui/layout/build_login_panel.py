from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from domain_browser.ui.ids import IDs


def build_login_panel() -> html.Div:
    return html.Div(
        className="d-flex justify-content-center align-items-center dbb-login",
        children=dbc.Card(
            dbc.CardBody(
                [
                    html.Div(
                        [
                            html.H2("Welcome Back", className="h4 fw-bold"),
                            html.P("Please sign in to continue", className="text-muted"),
                        ],
                        className="text-center mb-4",
                    ),
                    dbc.Input(
                        id=IDs.Control.LOGIN_USERNAME,
                        placeholder="Username",
                        type="text",
                        size="lg",
                        className="mb-3",
                    ),
                    dbc.Input(
                        id=IDs.Control.LOGIN_PASSWORD,
                        placeholder="Password",
                        type="password",
                        size="lg",
                        className="mb-3",
                    ),
                    dbc.Button(
                        "Sign In",
                        id=IDs.Control.LOGIN_BTN,
                        color="primary",
                        size="lg",
                        className="w-100 mb-3",
                    ),
                    html.Div(id=IDs.Control.LOGIN_STATUS, className="text-danger text-center mb-2"),
                    html.Div(
                        "Demo credentials: username: demo, password: demo",
                        className="text-center small text-muted",
                    ),
                ]
            ),
            className="shadow dbb-login-card",
        ),
    )
