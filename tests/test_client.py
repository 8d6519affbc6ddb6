"""Tests for nanogpt_mcp.client.GatewayClient."""

from __future__ import annotations

import httpx
import pytest

from nanogpt_mcp.client import GatewayClient, GatewayError, decode_json
from nanogpt_mcp.settings import Settings

from conftest import BASE_URL


class TestResolve:
    def test_relative_path_joined_to_base(self, client):
        assert client.resolve("/v1/models") == f"{BASE_URL}/v1/models"

    def test_absolute_url_untouched(self, client):
        assert client.resolve("https://elsewhere.test/x") == "https://elsewhere.test/x"


class TestRequest:
    def test_returns_parsed_json(self, client, gateway):
        gateway.reply("/v1/models?detailed=true", {"data": [{"id": "a"}]})
        assert client.request("/v1/models?detailed=true") == {"data": [{"id": "a"}]}

    def test_default_method_is_get_without_body(self, client, gateway):
        gateway.reply("/v1/models", {})
        client.request("/v1/models")
        sent = gateway.requests[0]
        assert sent.method == "GET"
        assert sent.content == b""

    def test_auth_and_content_type_headers(self, client, gateway):
        gateway.reply("/check-balance", {})
        client.request("/check-balance", method="POST")
        sent = gateway.requests[0]
        assert sent.headers["authorization"] == "Bearer test-key"
        assert sent.headers["content-type"] == "application/json"

    def test_caller_headers_override_defaults(self, client, gateway):
        gateway.reply("/x", {})
        client.request("/x", headers={"Authorization": "Bearer other", "X-Extra": "1"})
        sent = gateway.requests[0]
        assert sent.headers["authorization"] == "Bearer other"
        assert sent.headers["x-extra"] == "1"

    def test_json_body_sent(self, client, gateway):
        gateway.reply("/v1/chat/completions", {})
        client.request("/v1/chat/completions", method="POST", json={"model": "m"})
        assert gateway.body() == {"model": "m"}

    def test_status_code_not_inspected(self, client, gateway):
        gateway.reply("/x", {"error": {"message": "nope"}}, status=401)
        assert client.request("/x") == {"error": {"message": "nope"}}

    def test_non_json_body_raises(self, client, gateway):
        gateway.reply_html("/x", status=502)
        with pytest.raises(GatewayError, match="HTTP 502"):
            client.request("/x")

    def test_one_network_call_per_request(self, client, gateway):
        gateway.reply("/x", {})
        client.request("/x")
        client.request("/x")
        assert len(gateway.requests) == 2


class TestSend:
    def test_send_returns_raw_response(self, client, gateway):
        gateway.reply_html("/v1/video/generations")
        response = client.send("/v1/video/generations", json={"a": 1})
        assert isinstance(response, httpx.Response)
        assert response.status_code == 404
        assert "text/html" in response.headers["content-type"]
        assert gateway.requests[0].method == "POST"


class TestDecodeJson:
    def test_error_names_url(self):
        request = httpx.Request("GET", "https://gateway.test/api/y")
        response = httpx.Response(200, content=b"not json", request=request)
        with pytest.raises(GatewayError, match="gateway.test/api/y"):
            decode_json(response)

    def test_gateway_error_is_runtime_error(self):
        assert issubclass(GatewayError, RuntimeError)


def test_empty_api_key_still_sends_bearer(gateway):
    settings = Settings(api_key="", base_url=BASE_URL)
    client = GatewayClient(settings, transport=httpx.MockTransport(gateway))
    gateway.reply("/x", {})
    client.request("/x")
    assert gateway.requests[0].headers["authorization"].startswith("Bearer")
