from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from domain_browser.config.loader import load_global_config
from domain_browser.services.dataset_service import DatasetService
from domain_browser.ui.layout.build_layout import build_layout
from domain_browser.ui.callbacks.callbacks_auth import register_auth_callbacks
from domain_browser.ui.callbacks.callbacks_render import register_render_callbacks
from domain_browser.ui.callbacks.callbacks_routing import register_routing_callbacks
from domain_browser.ui.callbacks.callbacks_sync import register_sync_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(
    config_root: Path | str = Path("config"),
    dataset_service: DatasetService | None = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Dataset service (fetch is deferred until the dashboard is first shown)
    if dataset_service is None:
        dataset_service = DatasetService(
            url=global_config.source_url,
            identity_field=global_config.identity_field,
            timeout=global_config.fetch_timeout,
        )

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        dataset_service=dataset_service,
    )

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
        # Dashboard and login components are rendered per page
        suppress_callback_exceptions=True,
    )

    app.title = global_config.ui_title
    app.layout = build_layout(ctx)

    # Register callbacks
    register_routing_callbacks(app, ctx)
    register_auth_callbacks(app, ctx)
    register_sync_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    logger.info("Dash app created", extra={"config_root": str(config_root)})
    return app
