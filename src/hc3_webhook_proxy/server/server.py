from typing import Optional

import uvicorn
from fastapi import FastAPI
from loguru import logger

from hc3_webhook_proxy.common.config import ProxyServerConfig
from hc3_webhook_proxy.common.log import setup_logging
from hc3_webhook_proxy.server.routes import router


def create_app(config: ProxyServerConfig) -> FastAPI:
    app = FastAPI(
        title="SwitchBot Webhook Proxy",
        description="Relays SwitchBot webhooks to a Fibaro HC3 QuickApp",
        version="0.1.0",
    )

    app.include_router(router)

    @app.on_event("startup")
    async def startup_event():
        setup_logging(config.log_level)

        logger.info(f"Webhook proxy running on port {config.port}")
        logger.info(f"Webhook URL: http://localhost:{config.port}/webhook")
        logger.info(
            f"Forwarding to: {config.hc3_url} (QuickApp ID: {config.quickapp_id})"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Webhook proxy shutting down")

    return app


def run_server(config: Optional[ProxyServerConfig] = None):
    if not config:
        from hc3_webhook_proxy.server.app import get_app_config

        config = get_app_config()

    app = create_app(config)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level="info",
    )
