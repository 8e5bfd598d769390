import logging
import os
import socket

from domain_browser.ui.dash_app import create_dash_app
from domain_browser.logging_config import configure_logging

configure_logging()
logger = logging.getLogger("domain_browser.app")

CONFIG_ROOT = os.getenv("DOMAIN_BROWSER_CONFIG_ROOT", "config")
DEFAULT_PORT = 8051
PORT_SEARCH_SPAN = 100

app = create_dash_app(CONFIG_ROOT)
server = app.server


def port_is_free(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex(("localhost", port)) != 0


def pick_port(preferred: int) -> int:
    """First free port at or after `preferred`; falls back to `preferred`."""
    for port in range(preferred, preferred + PORT_SEARCH_SPAN):
        if port_is_free(port):
            return port
    return preferred


def main() -> None:
    preferred = int(os.getenv("PORT", str(DEFAULT_PORT)))
    port = pick_port(preferred)
    if port != preferred:
        logger.warning("Preferred port taken", extra={"preferred": preferred, "port": port})

    debug = os.getenv("DEBUG", "0") == "1"
    logger.info("Starting dashboard", extra={"port": port, "debug": debug, "config_root": CONFIG_ROOT})
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
