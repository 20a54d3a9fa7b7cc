"""Long-running server variant of the HC3 webhook proxy."""

from hc3_webhook_proxy.server.app import (
    cli,
    get_app_config,
    get_forwarder,
    load_config_from_file,
    setup_app,
)
from hc3_webhook_proxy.server.server import create_app, run_server

__all__ = [
    "get_app_config",
    "get_forwarder",
    "load_config_from_file",
    "setup_app",
    "cli",
    "create_app",
    "run_server",
]
