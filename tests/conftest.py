import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from hc3_webhook_proxy.common.config import DestinationConfig, ProxyServerConfig
from hc3_webhook_proxy.forwarder.client import HC3Forwarder
from hc3_webhook_proxy.server.server import create_app


class MockHC3:
    """Stands in for aiohttp.ClientSession talking to an HC3 controller."""

    def __init__(self, status=200, text="OK"):
        self.response = MagicMock()
        self.response.status = status
        self.response.text = AsyncMock(return_value=text)

        post_cm = MagicMock()
        post_cm.__aenter__ = AsyncMock(return_value=self.response)
        post_cm.__aexit__ = AsyncMock(return_value=None)

        self.session = MagicMock()
        self.session.post = MagicMock(return_value=post_cm)
        self.session.__aenter__ = AsyncMock(return_value=self.session)
        self.session.__aexit__ = AsyncMock(return_value=None)

    def respond(self, status, text=""):
        self.response.status = status
        self.response.text.return_value = text

    @property
    def post_calls(self):
        return self.session.post.call_args_list

    @property
    def last_url(self):
        return self.session.post.call_args[0][0]

    @property
    def last_headers(self):
        return self.session.post.call_args[1]["headers"]

    @property
    def last_body(self):
        return json.loads(self.session.post.call_args[1]["data"])


@pytest.fixture
def mock_hc3():
    """Fixture that patches aiohttp so outbound calls hit a fake controller."""
    hc3 = MockHC3()
    with patch("aiohttp.ClientSession", return_value=hc3.session):
        yield hc3


@pytest.fixture
def hc3_env():
    """Fixture that provides a complete edge-function environment."""
    return {
        "HC3_URL": "http://hc3.local",
        "HC3_USER": "admin",
        "HC3_PASSWORD": "secret",
        "QUICKAPP_ID": "42",
    }


@pytest.fixture
def destination(hc3_env):
    """Fixture that provides a complete destination configuration."""
    return DestinationConfig.from_env(hc3_env)


@pytest.fixture
def forwarder(destination):
    """Fixture that provides a forwarder using the server error format."""
    return HC3Forwarder(destination)


@pytest.fixture
def server_config():
    """Fixture that provides a sample server configuration."""
    return ProxyServerConfig(
        host="127.0.0.1",
        port=3000,
        log_level="INFO",
        hc3_url="http://hc3.local",
        hc3_user="admin",
        hc3_password="secret",
        quickapp_id="42",
    )


@pytest.fixture
def sample_payload():
    """Fixture that provides a SwitchBot device-change notification."""
    return {
        "eventType": "changeReport",
        "eventVersion": "1",
        "context": {
            "deviceType": "WoMeter",
            "deviceMac": "C2:71:FE:12:34:56",
            "temperature": 22.5,
            "humidity": 48,
            "scale": "CELSIUS",
            "timeOfSample": 1698765432000,
        },
    }


@pytest.fixture
def server_app(server_config):
    """Fixture that provides the server app wired to a real forwarder."""
    forwarder = HC3Forwarder(server_config.destination)
    with patch("hc3_webhook_proxy.server.app.get_forwarder") as mock_get_forwarder:
        mock_get_forwarder.return_value = forwarder
        app = create_app(server_config)
        yield app


@pytest.fixture
def server_client(server_app):
    """Fixture that provides a test client for the server."""
    return TestClient(server_app)
