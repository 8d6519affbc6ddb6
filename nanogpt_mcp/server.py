"""
NanoGPT MCP Server — five tools backed by the NanoGPT gateway.

Tools
-----
  nano_chat(model, prompt, ...)             → model's text reply + usage footer
  nano_generate_image(model, prompt, ...)   → image URLs / saved file paths
  nano_generate_video(model, prompt, ...)   → video URL or raw gateway status
  nano_list_models(type, search)            → one line per model
  nano_check_balance()                      → account balance

Each tool is a thin typed wrapper that hands its arguments to the
dispatcher in ``handlers``; that is where routing and error capture live.
The dispatcher makes blocking HTTP calls, so wrappers run it on a worker
thread and the event loop keeps serving other sessions meanwhile.

Run with:
    python -m nanogpt_mcp                    # stdio
    python -m nanogpt_mcp --transport sse    # http://MCP_HOST:MCP_PORT/sse
"""

from __future__ import annotations

import asyncio
from typing import Annotated, Any, Literal

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from pydantic import Field

load_dotenv()  # load .env before reading NANO_GPT_* settings

from . import catalog  # noqa: E402
from .client import GatewayClient  # noqa: E402
from .handlers import NanoGPTTools  # noqa: E402
from .settings import DEFAULT_HOST, DEFAULT_PORT, SERVER_NAME, Settings  # noqa: E402

# ---------------------------------------------------------------------------
# FastMCP application
# ---------------------------------------------------------------------------

mcp = FastMCP(SERVER_NAME, host=DEFAULT_HOST, port=DEFAULT_PORT)

# ---------------------------------------------------------------------------
# Dispatcher — set by configure(), or built lazily from the environment
# ---------------------------------------------------------------------------

_tools: NanoGPTTools | None = None


def configure(settings: Settings) -> NanoGPTTools:
    """Wire the dispatcher and SSE bind address from one Settings value."""
    mcp.settings.host = settings.host
    mcp.settings.port = settings.port
    set_tools(NanoGPTTools(GatewayClient(settings)))
    return get_tools()


def get_tools() -> NanoGPTTools:
    global _tools
    if _tools is None:
        _tools = NanoGPTTools(GatewayClient(Settings.from_env()))
    return _tools


def set_tools(tools: NanoGPTTools | None) -> None:
    """Swap the dispatcher (tests, or a custom Settings at startup)."""
    global _tools
    _tools = tools


async def _call(name: str, arguments: dict[str, Any]) -> str:
    tools = get_tools()
    return await asyncio.to_thread(tools.call_tool, name, arguments)


def _describe(tool: catalog.ToolDescriptor, prop: str) -> str:
    return tool.input_schema["properties"][prop]["description"]


_CHAT = catalog.CHAT
_IMAGE = catalog.GENERATE_IMAGE
_VIDEO = catalog.GENERATE_VIDEO
_MODELS = catalog.LIST_MODELS


@mcp.tool(name=_CHAT.name, description=_CHAT.description)
async def nano_chat(
    model: Annotated[str, Field(description=_describe(_CHAT, "model"))],
    prompt: Annotated[str, Field(description=_describe(_CHAT, "prompt"))],
    system: Annotated[str | None, Field(description=_describe(_CHAT, "system"))] = None,
    temperature: Annotated[float | None, Field(description=_describe(_CHAT, "temperature"))] = None,
    max_tokens: Annotated[float | None, Field(description=_describe(_CHAT, "max_tokens"))] = None,
) -> str:
    return await _call(_CHAT.name, {
        "model": model,
        "prompt": prompt,
        "system": system,
        "temperature": temperature,
        "max_tokens": max_tokens,
    })


@mcp.tool(name=_IMAGE.name, description=_IMAGE.description)
async def nano_generate_image(
    model: Annotated[str, Field(description=_describe(_IMAGE, "model"))],
    prompt: Annotated[str, Field(description=_describe(_IMAGE, "prompt"))],
    size: Annotated[str | None, Field(description=_describe(_IMAGE, "size"))] = None,
    n: Annotated[float | None, Field(description=_describe(_IMAGE, "n"))] = None,
) -> str:
    return await _call(_IMAGE.name, {"model": model, "prompt": prompt, "size": size, "n": n})


@mcp.tool(name=_VIDEO.name, description=_VIDEO.description)
async def nano_generate_video(
    model: Annotated[str, Field(description=_describe(_VIDEO, "model"))],
    prompt: Annotated[str, Field(description=_describe(_VIDEO, "prompt"))],
    image_url: Annotated[str | None, Field(description=_describe(_VIDEO, "image_url"))] = None,
    duration: Annotated[str | None, Field(description=_describe(_VIDEO, "duration"))] = None,
    aspect_ratio: Annotated[str | None, Field(description=_describe(_VIDEO, "aspect_ratio"))] = None,
) -> str:
    return await _call(_VIDEO.name, {
        "model": model,
        "prompt": prompt,
        "image_url": image_url,
        "duration": duration,
        "aspect_ratio": aspect_ratio,
    })


@mcp.tool(name=_MODELS.name, description=_MODELS.description)
async def nano_list_models(
    type: Annotated[
        Literal["text", "image", "video", "audio"],
        Field(description=_describe(_MODELS, "type")),
    ] = "text",
    search: Annotated[str | None, Field(description=_describe(_MODELS, "search"))] = None,
) -> str:
    return await _call(_MODELS.name, {"type": type, "search": search})


@mcp.tool(name=catalog.CHECK_BALANCE.name, description=catalog.CHECK_BALANCE.description)
async def nano_check_balance() -> str:
    return await _call(catalog.CHECK_BALANCE.name, {})
