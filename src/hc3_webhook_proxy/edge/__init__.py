"""Edge-function variant of the HC3 webhook proxy."""

from hc3_webhook_proxy.edge.handler import EdgeResponse, handle_request, lambda_handler

__all__ = [
    "EdgeResponse",
    "handle_request",
    "lambda_handler",
]
