from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from domain_browser.config.model import Credentials, GlobalConfig
from domain_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

SOURCE_URL_ENV = "DOMAIN_BROWSER_SOURCE_URL"
USERNAME_ENV = "DOMAIN_BROWSER_USERNAME"
PASSWORD_ENV = "DOMAIN_BROWSER_PASSWORD"


def _str_list(raw: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = raw.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


def _page_sizes(raw: Dict[str, Any], default: tuple[int, ...]) -> tuple[int, ...]:
    value = raw.get("page_size_options", list(default))
    try:
        sizes = tuple(int(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'page_size_options' must be a list of integers: {e}") from e
    if not sizes or any(s < 1 for s in sizes):
        raise ConfigError("'page_size_options' must contain positive integers")
    return sizes


def parse_global_config(raw: Dict[str, Any]) -> GlobalConfig:
    """Validate a raw global.json mapping; missing keys take the defaults."""
    if not isinstance(raw, dict):
        raise ConfigError("global.json must contain a JSON object")

    defaults = GlobalConfig()

    raw_credentials = raw.get("credentials") or {}
    if not isinstance(raw_credentials, dict):
        raise ConfigError("'credentials' must be an object")

    try:
        fetch_timeout = float(raw.get("fetch_timeout", defaults.fetch_timeout))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'fetch_timeout' must be a number: {e}") from e

    return GlobalConfig(
        ui_title=str(raw.get("ui_title", defaults.ui_title)),
        source_url=os.getenv(SOURCE_URL_ENV) or str(raw.get("source_url", defaults.source_url)),
        identity_field=str(raw.get("identity_field", defaults.identity_field)),
        fetch_timeout=fetch_timeout,
        page_size_options=_page_sizes(raw, defaults.page_size_options),
        dropdown_filters=_str_list(raw, "dropdown_filters", defaults.dropdown_filters),
        range_filters=_str_list(raw, "range_filters", defaults.range_filters),
        credentials=Credentials(
            username=os.getenv(USERNAME_ENV) or str(raw_credentials.get("username", defaults.credentials.username)),
            password=os.getenv(PASSWORD_ENV) or str(raw_credentials.get("password", defaults.credentials.password)),
        ),
    )


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from `<root>/global.json`, then apply env overrides.
    """
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = Path(root) / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw_global = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    return parse_global_config(raw_global)
