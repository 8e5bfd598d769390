from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from domain_browser.ui.layout.build_navbar import build_navbar
from domain_browser.ui.ids import IDs

if TYPE_CHECKING:
    from domain_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    navbar = build_navbar(ctx.global_config)

    return dbc.Container(
        fluid=True,
        className="dbb-root px-0",
        children=[
            # Address bar is the only persisted view state
            dcc.Location(id=IDs.Control.URL, refresh=False),
            dcc.Store(id=IDs.Store.AUTH, storage_type="session"),
            navbar,
            html.Div(id=IDs.Control.PAGE_CONTENT),
        ],
    )
