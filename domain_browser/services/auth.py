from __future__ import annotations

import hmac
import logging

from domain_browser.config.model import Credentials

logger = logging.getLogger(__name__)


def authenticate(username: str | None, password: str | None, credentials: Credentials) -> bool:
    """
    Check a login against the configured demo credentials.

    This only gates the dashboard; it is not an authorization layer.
    """
    user_ok = hmac.compare_digest((username or "").encode(), credentials.username.encode())
    pass_ok = hmac.compare_digest((password or "").encode(), credentials.password.encode())
    ok = user_ok and pass_ok
    if not ok:
        logger.info("Rejected login", extra={"username": username or ""})
    return ok
