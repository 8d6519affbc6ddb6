"""Tool handlers and the dispatcher that routes calls to them.

``NanoGPTTools.call_tool`` is the single entry point used by the MCP
server. It never raises: unknown tools and failures both come back as
plain text so the calling client always gets a normal tool result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from . import catalog
from .client import GatewayClient, decode_json
from .formatting import (
    declared_error,
    format_balance,
    format_chat,
    format_error,
    format_images,
    format_models,
    format_video,
)

logger = logging.getLogger(__name__)

CHAT_PATH = "/v1/chat/completions"
IMAGES_PATH = "/v1/images/generations"
VIDEO_PATH = "/v1/video/generations"
VIDEO_FALLBACK_PATH = "/v1/videos/generations"
BALANCE_PATH = "/check-balance"

MODEL_LIST_PATHS: dict[str, str] = {
    "text": "/v1/models?detailed=true",
    "image": "/v1/image-models?detailed=true",
    "video": "/v1/video-models?detailed=true",
    "audio": "/v1/audio-models?detailed=true",
}

DEFAULT_IMAGE_SIZE = "1024x1024"


@dataclass
class VideoReply:
    """Outcome of the primary/fallback video request."""
    data: Any
    via_fallback: bool = False


def _whole(value: Any) -> Any:
    """JSON-schema "number" arguments: send 2.0 as 2."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _is_json(response: httpx.Response) -> bool:
    return "json" in response.headers.get("content-type", "")


def fetch_video(client: GatewayClient, body: dict) -> VideoReply:
    """POST to the video endpoint, retrying once on the plural path.

    The primary path is trusted only when it answers with a JSON content
    type. Anything else (an HTML 404 page, a proxy error) sends the same
    body to the alternate path, whose body is parsed leniently.
    """
    primary = client.send(VIDEO_PATH, method="POST", json=body)
    if _is_json(primary):
        return VideoReply(decode_json(primary))

    logger.info(
        "Video endpoint %s answered %s (%s); trying %s",
        VIDEO_PATH, primary.status_code,
        primary.headers.get("content-type", "no content-type"), VIDEO_FALLBACK_PATH,
    )
    fallback = client.send(VIDEO_FALLBACK_PATH, method="POST", json=body)
    try:
        data = fallback.json()
    except ValueError:
        logger.warning("Fallback video endpoint returned a non-JSON body")
        data = None
    return VideoReply(data, via_fallback=True)


class NanoGPTTools:
    """Dispatches MCP tool invocations to the NanoGPT gateway."""

    def __init__(self, client: GatewayClient) -> None:
        self.client = client
        self._handlers: dict[str, Callable[[dict], str]] = {
            catalog.CHAT.name: self.chat,
            catalog.GENERATE_IMAGE.name: self.generate_image,
            catalog.GENERATE_VIDEO.name: self.generate_video,
            catalog.LIST_MODELS.name: self.list_models,
            catalog.CHECK_BALANCE.name: self.check_balance,
        }

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------

    def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> str:
        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            return f"Unknown tool: {name}"
        try:
            return handler(arguments or {})
        except Exception as exc:  # noqa: BLE001
            logger.warning("Tool %s failed: %s", name, exc, exc_info=True)
            return f"Error: {exc}"

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def chat(self, args: dict) -> str:
        model = args.get("model")
        messages = []
        if args.get("system"):
            messages.append({"role": "system", "content": args["system"]})
        messages.append({"role": "user", "content": args.get("prompt")})

        body: dict[str, Any] = {"model": model, "messages": messages}
        for key in ("temperature", "max_tokens"):
            if args.get(key) is not None:
                body[key] = _whole(args[key])

        data = self.client.request(CHAT_PATH, method="POST", json=body)
        error = declared_error(data)
        if error:
            return format_error(error)
        return format_chat(data, model)

    def generate_image(self, args: dict) -> str:
        body = {
            "model": args.get("model"),
            "prompt": args.get("prompt"),
            "size": args.get("size") or DEFAULT_IMAGE_SIZE,
            "n": _whole(args.get("n") or 1),
            "response_format": "url",
        }
        data = self.client.request(IMAGES_PATH, method="POST", json=body)
        error = declared_error(data)
        if error:
            return format_error(error)
        return format_images(data, self.client.settings.image_dir)

    def generate_video(self, args: dict) -> str:
        body = {"model": args.get("model"), "prompt": args.get("prompt")}
        for key in ("image_url", "duration", "aspect_ratio"):
            if args.get(key):
                body[key] = args[key]

        reply = fetch_video(self.client, body)
        error = declared_error(reply.data)
        if error:
            return format_error(error)
        return format_video(reply.data, via_fallback=reply.via_fallback)

    def list_models(self, args: dict) -> str:
        model_type = args.get("type") or "text"
        path = MODEL_LIST_PATHS.get(model_type, MODEL_LIST_PATHS["text"])
        data = self.client.request(path)
        error = declared_error(data)
        if error:
            return format_error(error)
        models = data.get("data") if isinstance(data, dict) else None
        if not isinstance(models, list):
            models = []
        return format_models(models, model_type, args.get("search"))

    def check_balance(self, args: dict) -> str:
        data = self.client.request(BALANCE_PATH, method="POST")
        error = declared_error(data)
        if error:
            return format_error(error)
        return format_balance(data)
