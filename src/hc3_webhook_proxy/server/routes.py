import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger

from hc3_webhook_proxy.common.models import (
    ForwardFailure,
    ForwardSuccess,
    HealthStatus,
    load_payload,
)
from hc3_webhook_proxy.forwarder.client import HC3Forwarder


router = APIRouter()


async def get_forwarder() -> HC3Forwarder:
    from hc3_webhook_proxy.server.app import get_forwarder
    return get_forwarder()


@router.get("/")
async def health_check():
    return HealthStatus().model_dump()


@router.post("/webhook")
async def receive_webhook(
    request: Request,
    forwarder: HC3Forwarder = Depends(get_forwarder),
):
    try:
        payload = load_payload(await request.body())
        logger.info(f"Received webhook: {json.dumps(payload, indent=2)}")

        status = await forwarder.forward(payload)
        return ForwardSuccess(hc3_status=status).model_dump(by_alias=True)
    except Exception as e:
        failure = ForwardFailure.from_exception(e)
        logger.error(f"Error forwarding to HC3: {failure.error}")
        return JSONResponse(status_code=500, content=failure.model_dump())
