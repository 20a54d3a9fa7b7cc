"""Forwarder component: relays payloads to the HC3 action endpoint."""

from hc3_webhook_proxy.forwarder.client import (
    EDGE_ERROR_FORMAT,
    SERVER_ERROR_FORMAT,
    HC3Error,
    HC3Forwarder,
)

__all__ = [
    "EDGE_ERROR_FORMAT",
    "SERVER_ERROR_FORMAT",
    "HC3Error",
    "HC3Forwarder",
]
