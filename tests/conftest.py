"""Global test configuration and fixtures.

Provides a stub Telegram Bot API server that records the calls it receives,
a factory for proxy test clients pointed at it, and environment isolation so
a developer's own token never leaks into the tests.
"""

import asyncio
import json
import socket
from dataclasses import dataclass
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from tgproxy.config import Config, ServerConfig, TelegramConfig
from tgproxy.main import create_app

TEST_BOT_TOKEN = "123456:TEST-token"
DEFAULT_BOT_TOKEN = "654321:DEFAULT-token"


@dataclass
class UpstreamCall:
    """One request received by the stub Bot API."""

    http_method: str
    path: str
    body: bytes

    @property
    def json(self) -> Any:
        return json.loads(self.body)


class UpstreamStub:
    """Minimal Bot API server answering every method with a fixed body."""

    def __init__(self) -> None:
        self.calls: list[UpstreamCall] = []
        self.status = 200
        self.body = b'{"ok":true,"result":[]}'
        self.delay = 0.0
        self.url = ""
        self.app = web.Application()
        self.app.router.add_route("*", "/{bot}/{method}", self.handle)

    async def handle(self, request: web.Request) -> web.Response:
        self.calls.append(UpstreamCall(request.method, request.path, await request.read()))
        if self.delay:
            await asyncio.sleep(self.delay)
        return web.Response(status=self.status, body=self.body, content_type="application/json")


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Remove proxy settings from the environment for all tests."""
    for key in ("TELEGRAM_BOT_TOKEN", "TELEGRAM_API_URL", "TELEGRAM_API_TIMEOUT", "TGPROXY_CONFIG"):
        monkeypatch.delenv(key, raising=False)


@pytest_asyncio.fixture
async def upstream():
    """Running stub Bot API server."""
    stub = UpstreamStub()
    server = TestServer(stub.app)
    await server.start_server()
    stub.url = f"http://{server.host}:{server.port}"
    yield stub
    await server.close()


@pytest.fixture
def refused_url():
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest_asyncio.fixture
async def make_client(upstream):
    """Factory for proxy test clients talking to the stub upstream."""
    clients: list[TestClient] = []

    async def _make(
        default_token: str | None = None,
        api_url: str | None = None,
        timeout: float = 60.0,
    ) -> TestClient:
        config = Config(
            telegram=TelegramConfig(
                bot_token=default_token,
                api_url=api_url or upstream.url,
                timeout=timeout,
            ),
            server=ServerConfig(),
        )
        client = TestClient(TestServer(create_app(config)))
        await client.start_server()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.close()


@pytest_asyncio.fixture
async def client(make_client):
    """Proxy test client without a default token."""
    return await make_client()
