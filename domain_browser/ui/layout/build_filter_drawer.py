from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from domain_browser.config.model import GlobalConfig
from domain_browser.core.dataset import Dataset
from domain_browser.core.query import MAX_SUFFIX, MIN_SUFFIX, SPAM_SCORE_MARKER
from domain_browser.core.view_state import ViewState
from domain_browser.ui.helpers import dropdown_options, range_input_value
from domain_browser.ui.ids import IDs, range_filter_id, select_filter_id


def _select_filter(dataset: Dataset, state: ViewState, key: str) -> html.Div:
    column = dataset.column(key)
    return html.Div(
        [
            html.Label(column.label if column else key, className="form-label"),
            dcc.Dropdown(
                id=select_filter_id(key),
                options=dropdown_options(dataset, key),
                value=state.filters.get(key),
                clearable=True,
                className="mb-3",
            ),
        ]
    )


def _range_filter(dataset: Dataset, state: ViewState, key: str) -> html.Div:
    column = dataset.column(key)
    label = column.label if column else key
    is_percent_input = SPAM_SCORE_MARKER in key.lower()
    suffix = " (%)" if is_percent_input else " Range"

    def bound_input(bound: str) -> dcc.Input:
        return dcc.Input(
            id=range_filter_id(key, bound),
            type="number",
            placeholder=bound,
            value=range_input_value(state.filters, f"{key}{bound}"),
            min=0 if is_percent_input else None,
            max=100 if is_percent_input else None,
            className="form-control w-50",
            debounce=True,
        )

    return html.Div(
        [
            html.Label(f"{label}{suffix}", className="form-label"),
            html.Div(
                [bound_input(MIN_SUFFIX), bound_input(MAX_SUFFIX)],
                className="d-flex gap-2 mb-3",
            ),
        ]
    )


def build_filter_drawer(dataset: Dataset, state: ViewState, global_config: GlobalConfig) -> dbc.Offcanvas:
    """Right-hand drawer with dropdowns for categorical fields and Min/Max ranges."""
    children: List = []

    for key in global_config.dropdown_filters:
        if dataset.has_column(key):
            children.append(_select_filter(dataset, state, key))

    for key in global_config.range_filters:
        if dataset.has_column(key):
            children.append(_range_filter(dataset, state, key))

    if not children:
        children.append(html.P("No filterable columns in this dataset.", className="text-muted"))

    children.append(
        html.Div(
            [
                dbc.Button("Reset", id=IDs.Control.FILTER_RESET_BTN, color="secondary", outline=True),
                dbc.Button("Apply Filters", id=IDs.Control.FILTER_APPLY_BTN, color="primary"),
            ],
            className="d-flex gap-2",
        )
    )

    return dbc.Offcanvas(
        children,
        id=IDs.Control.FILTER_DRAWER,
        title="Filter Data",
        placement="end",
        is_open=False,
    )
