import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from loguru import logger

from hc3_webhook_proxy.common.config import ProxyServerConfig
from hc3_webhook_proxy.common.log import setup_logging
from hc3_webhook_proxy.forwarder.client import SERVER_ERROR_FORMAT, HC3Forwarder
from hc3_webhook_proxy.server.server import run_server


_app_config: Optional[ProxyServerConfig] = None
_forwarder: Optional[HC3Forwarder] = None


def get_app_config() -> ProxyServerConfig:
    global _app_config
    if not _app_config:
        raise RuntimeError("Application config not initialized")
    return _app_config


def get_forwarder() -> HC3Forwarder:
    global _forwarder
    if not _forwarder:
        raise RuntimeError("Forwarder not initialized")
    return _forwarder


def load_config_from_file(config_path: str) -> ProxyServerConfig:
    """Load configuration from a YAML file."""
    file_path = Path(config_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(file_path, "r") as f:
        config_data = yaml.safe_load(f) or {}

    return ProxyServerConfig.model_validate(config_data)


def setup_app(config: ProxyServerConfig):
    """Initialize the application with the given config."""
    global _app_config, _forwarder

    setup_logging(config.log_level)

    # Fail fast on an incomplete destination
    destination = config.destination
    destination.require_complete()

    _forwarder = HC3Forwarder(destination, error_format=SERVER_ERROR_FORMAT)
    _app_config = config

    logger.info("SwitchBot webhook proxy initialized")
    logger.info(f"Target URL: {destination.action_url}")


@click.group()
def cli():
    """SwitchBot Webhook Proxy CLI"""
    pass


@cli.command("serve")
@click.option(
    "--config",
    "-c",
    default=None,
    help="Path to a YAML configuration file (environment variables otherwise)",
)
@click.option("--host", default=None, help="Interface to bind")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on")
def serve(config: Optional[str], host: Optional[str], port: Optional[int]):
    """Start the webhook proxy server."""
    try:
        config_obj = load_config_from_file(config) if config else ProxyServerConfig()
        if host:
            config_obj.host = host
        if port:
            config_obj.port = port

        setup_app(config_obj)
        run_server(config_obj)
    except Exception as e:
        logger.error(f"Failed to start webhook proxy: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
