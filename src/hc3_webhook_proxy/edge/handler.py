"""Edge-function variant of the proxy.

Each invocation reads its destination from the environment, forwards the
payload once and returns. Deploy ``lambda_handler`` behind an API Gateway
route or a Lambda Function URL, with these variables set:

- ``HC3_URL``: controller base URL, e.g. ``http://192.168.1.100``
- ``HC3_USER`` / ``HC3_PASSWORD``: controller credentials
- ``QUICKAPP_ID``: device id of the SwitchBot QuickApp

The function URL is then used as the QuickApp's ``webhookUrl``.
"""

import asyncio
import base64
import json
import os
from typing import Any, Dict, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, Field

from hc3_webhook_proxy.common.config import DestinationConfig
from hc3_webhook_proxy.common.log import setup_logging
from hc3_webhook_proxy.common.models import (
    ForwardFailure,
    ForwardResult,
    ForwardSuccess,
    load_payload,
)
from hc3_webhook_proxy.forwarder.client import EDGE_ERROR_FORMAT, HC3Forwarder


JSON_HEADERS = {"Content-Type": "application/json"}
TEXT_HEADERS = {"Content-Type": "text/plain;charset=UTF-8"}

_logging_configured = False


class EdgeResponse(BaseModel):
    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_result(cls, result: ForwardResult) -> "EdgeResponse":
        status_code = 200 if result.success else 500
        return cls(
            status_code=status_code,
            headers=dict(JSON_HEADERS),
            body=json.dumps(result.model_dump(by_alias=True)),
        )

    def to_lambda(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": self.body,
            "isBase64Encoded": False,
        }


async def handle_request(
    method: str,
    body: bytes,
    env: Optional[Mapping[str, str]] = None,
) -> EdgeResponse:
    """Relay one inbound request to the controller."""
    if method.upper() != "POST":
        return EdgeResponse(
            status_code=405, headers=dict(TEXT_HEADERS), body="Method not allowed"
        )

    try:
        payload = load_payload(body)
        logger.info(f"Received webhook: {json.dumps(payload, separators=(',', ':'))}")

        destination = DestinationConfig.from_env(env)
        destination.require_complete()

        forwarder = HC3Forwarder(destination, error_format=EDGE_ERROR_FORMAT)
        status = await forwarder.forward(payload)
        result = ForwardSuccess(hc3_status=status)
    except Exception as e:
        result = ForwardFailure.from_exception(e)
        logger.error(f"Error: {result.error}")

    return EdgeResponse.from_result(result)


def _event_method(event: Mapping[str, Any]) -> str:
    # REST APIs (payload v1) vs HTTP APIs and Function URLs (payload v2)
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method", "")
    return method


def _event_body(event: Mapping[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body.encode("utf-8")


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    global _logging_configured
    if not _logging_configured:
        setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
        _logging_configured = True

    response = asyncio.run(
        handle_request(_event_method(event), _event_body(event), os.environ)
    )
    return response.to_lambda()
