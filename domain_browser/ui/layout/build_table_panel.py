from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from domain_browser.config.model import GlobalConfig
from domain_browser.core.dataset import Dataset
from domain_browser.core.query import ResultWindow
from domain_browser.core.view_state import ViewState
from domain_browser.ui.helpers import display_records, sort_by_from_spec, table_columns
from domain_browser.ui.ids import IDs


def total_text(window: ResultWindow) -> str:
    noun = "domain" if window.total_matching == 1 else "domains"
    return f"{window.total_matching:,} {noun}"


def build_table_panel(
    dataset: Dataset,
    state: ViewState,
    window: ResultWindow,
    global_config: GlobalConfig,
) -> dbc.Card:
    page_sizes = list(global_config.page_size_options)
    if state.page.size not in page_sizes:
        page_sizes = sorted(page_sizes + [state.page.size])

    return dbc.Card(
        dbc.CardBody(
            [
                dcc.Loading(
                    type="default",
                    children=dash_table.DataTable(
                        id=IDs.Control.DATA_TABLE,
                        columns=table_columns(dataset.columns),
                        data=display_records(window.rows, dataset.columns),
                        page_action="custom",
                        page_current=state.page.number - 1,
                        page_size=state.page.size,
                        page_count=window.page_count(state.page.size),
                        sort_action="custom",
                        sort_mode="single",
                        sort_by=sort_by_from_spec(state.sort),
                        style_table={"overflowX": "auto"},
                        style_cell={"textAlign": "left", "padding": "6px"},
                        style_header={"fontWeight": "600"},
                    ),
                ),
                html.Div(
                    [
                        html.Span(total_text(window), id=IDs.Control.TOTAL_TEXT, className="text-muted"),
                        html.Div(
                            [
                                html.Label("Rows per page", className="me-2 mb-0 small"),
                                dcc.Dropdown(
                                    id=IDs.Control.PAGE_SIZE_SELECT,
                                    options=[{"label": str(s), "value": s} for s in page_sizes],
                                    value=state.page.size,
                                    clearable=False,
                                    style={"width": "90px"},
                                ),
                            ],
                            className="d-flex align-items-center",
                        ),
                    ],
                    className="d-flex justify-content-between align-items-center mt-2",
                ),
            ]
        ),
        className="dbb-maincard",
    )
