"""Common configuration, models and logging for the HC3 webhook proxy."""

from hc3_webhook_proxy.common.config import (
    ACTION_PATH,
    ConfigurationError,
    DestinationConfig,
    ProxyServerConfig,
    parse_device_id,
)
from hc3_webhook_proxy.common.log import LOG_FORMAT, setup_logging
from hc3_webhook_proxy.common.models import (
    HANDLER_METHOD,
    ActionInvocationRequest,
    ForwardFailure,
    ForwardResult,
    ForwardSuccess,
    HealthStatus,
    load_payload,
)

__all__ = [
    # Config
    "ACTION_PATH",
    "ConfigurationError",
    "DestinationConfig",
    "ProxyServerConfig",
    "parse_device_id",
    # Logging
    "LOG_FORMAT",
    "setup_logging",
    # Models
    "HANDLER_METHOD",
    "ActionInvocationRequest",
    "ForwardFailure",
    "ForwardResult",
    "ForwardSuccess",
    "HealthStatus",
    "load_payload",
]
