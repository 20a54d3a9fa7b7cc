import json
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field


HANDLER_METHOD = "handleWebhook"


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name}")


def load_payload(body: bytes) -> Any:
    """Parse an inbound body as strict JSON.

    NaN, Infinity and -Infinity are rejected.
    """
    return json.loads(body, parse_constant=_reject_constant)


class ActionInvocationRequest(BaseModel):
    device_id: Optional[int] = Field(serialization_alias="deviceId")
    name: str = HANDLER_METHOD
    args: List[Any]


class ForwardSuccess(BaseModel):
    success: Literal[True] = True
    hc3_status: int = Field(serialization_alias="hc3Status")


class ForwardFailure(BaseModel):
    success: Literal[False] = False
    error: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ForwardFailure":
        # Timeouts and some transport errors have an empty message
        return cls(error=str(exc) or exc.__class__.__name__)


ForwardResult = Union[ForwardSuccess, ForwardFailure]


class HealthStatus(BaseModel):
    status: str = "ok"
    message: str = "SwitchBot Webhook Proxy"
