from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "DOMAIN_BROWSER_LOG_FORMAT"
LINE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Per-request access lines from the dev server drown out the app's own logs
_NOISY_LOGGERS = ("werkzeug",)


def resolve_format(force_format: Optional[str] = None) -> str:
    """'plain' or 'json': the argument wins, then the env var, then json."""
    mode = force_format if force_format is not None else os.getenv(LOG_FORMAT_ENV, "json")
    return "plain" if mode.strip().lower() == "plain" else "json"


def build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(LINE_FORMAT)
    return jsonlogger.JsonFormatter(LINE_FORMAT)


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Point the root logger at a single stderr handler.

    JSON lines by default so the dashboard's structured `extra=` fields
    (row counts, fetch URL, errors) survive into log collectors; plain text
    with DOMAIN_BROWSER_LOG_FORMAT=plain for local runs.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(resolve_format(force_format)))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
