from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from domain_browser.config.model import GlobalConfig
from domain_browser.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    title = global_config.ui_title

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    className="d-flex align-items-center",
                    children=[
                        html.H1(title, className="h4 mb-0 fw-bold text-dark"),
                    ],
                ),
                dbc.Button(
                    "Logout",
                    id=IDs.Control.LOGOUT_BTN,
                    color="link",
                    className="text-secondary",
                ),
            ],
        ),
        color="white",
        className="shadow-sm dbb-navbar",
    )
