import json
from typing import Any, Dict

import aiohttp
from loguru import logger

from hc3_webhook_proxy.common.config import DestinationConfig
from hc3_webhook_proxy.common.models import ActionInvocationRequest


EDGE_ERROR_FORMAT = "HC3 error: {status} - {body}"
SERVER_ERROR_FORMAT = "HC3 responded with {status}: {body}"


class HC3Error(Exception):
    """The controller answered with a non-2xx status."""

    def __init__(self, status: int, body: str, message: str):
        super().__init__(message)
        self.status = status
        self.body = body


class HC3Forwarder:
    def __init__(
        self,
        destination: DestinationConfig,
        error_format: str = SERVER_ERROR_FORMAT,
    ):
        self.destination = destination
        self.error_format = error_format

    @property
    def target_url(self) -> str:
        return self.destination.action_url

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.destination.authorization,
            "Content-Type": "application/json",
        }

    def build_request(self, payload: Any) -> ActionInvocationRequest:
        return ActionInvocationRequest(
            device_id=self.destination.device_id,
            args=[payload],
        )

    async def forward(self, payload: Any) -> int:
        """Call the QuickApp's handleWebhook action with the payload.

        Returns the controller's status code. Raises HC3Error on a non-2xx
        answer; transport errors propagate unchanged.
        """
        body = json.dumps(self.build_request(payload).model_dump(by_alias=True))
        timeout = aiohttp.ClientTimeout(total=self.destination.timeout)

        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.target_url,
                headers=self.build_headers(),
                data=body,
                timeout=timeout,
            ) as response:
                if not 200 <= response.status < 300:
                    text = await response.text(errors="replace")
                    raise HC3Error(
                        response.status,
                        text,
                        self.error_format.format(status=response.status, body=text),
                    )

                logger.info(
                    f"Webhook forwarded to {self.target_url} (status={response.status})"
                )
                return response.status
