"""Thin HTTP client for the NanoGPT gateway.

Every tool handler goes through this module. It resolves endpoint paths
against the configured base URL, attaches the bearer token, performs a
single round trip and hands back the parsed JSON body. Status codes are
not inspected; the gateway reports failures inside the JSON payload.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .settings import Settings

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    """The gateway answered with something that is not JSON."""


def decode_json(response: httpx.Response) -> Any:
    """Parse a response body as JSON, raising GatewayError on failure."""
    try:
        return response.json()
    except ValueError as exc:
        raise GatewayError(
            f"Non-JSON response from {response.request.url} "
            f"(HTTP {response.status_code}): {exc}"
        ) from exc


class GatewayClient:
    """Authenticated JSON requests against the NanoGPT REST API."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    def resolve(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.settings.base_url}{path}"

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}",
        }
        if extra:
            headers.update(extra)
        return headers

    def send(
        self,
        path: str,
        method: str = "POST",
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform one round trip and return the raw response."""
        url = self.resolve(path)
        logger.debug("%s %s", method, url)
        with httpx.Client(timeout=self.settings.timeout, transport=self._transport) as http:
            response = http.request(method, url, headers=self._headers(headers), json=json)
        logger.debug("%s %s -> %d (%s)", method, url, response.status_code,
                     response.headers.get("content-type", "?"))
        return response

    def request(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        return decode_json(self.send(path, method=method, json=json, headers=headers))
