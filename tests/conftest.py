"""
Shared pytest fixtures for the nanogpt-mcp test suite.

No test touches the network: the gateway is a ``FakeGateway`` plugged into
``httpx.MockTransport``. Routes are keyed by full URL; every request that
reaches the fake is recorded so tests can assert on method, headers and body.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from nanogpt_mcp.client import GatewayClient
from nanogpt_mcp.handlers import NanoGPTTools
from nanogpt_mcp.settings import Settings

BASE_URL = "https://gateway.test/api"


class FakeGateway:
    """Callable MockTransport handler with canned responses per URL."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, path: str, payload: Any = None, status: int = 200) -> None:
        """Answer *path* with a JSON body."""
        self.routes[BASE_URL + path] = lambda: httpx.Response(status, json=payload)

    def reply_html(self, path: str, body: str = "<html>Not Found</html>", status: int = 404) -> None:
        self.routes[BASE_URL + path] = lambda: httpx.Response(status, html=body)

    def reply_raw(self, path: str, content: bytes, content_type: str, status: int = 200) -> None:
        self.routes[BASE_URL + path] = lambda: httpx.Response(
            status, content=content, headers={"content-type": content_type},
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        factory = self.routes.get(str(request.url))
        if factory is None:
            return httpx.Response(404, html="<html>no route</html>")
        return factory()

    # -- inspection helpers --------------------------------------------------

    def paths(self) -> list[str]:
        return [str(r.url).removeprefix(BASE_URL) for r in self.requests]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(api_key="test-key", base_url=BASE_URL, image_dir=tmp_path / "images")


@pytest.fixture()
def client(gateway, settings) -> GatewayClient:
    return GatewayClient(settings, transport=httpx.MockTransport(gateway))


@pytest.fixture()
def tools(client) -> NanoGPTTools:
    return NanoGPTTools(client)
