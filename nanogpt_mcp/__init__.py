"""NanoGPT MCP - chat, image, video, model listing and balance tools over the NanoGPT gateway."""

from nanogpt_mcp.catalog import TOOLS, ToolDescriptor
from nanogpt_mcp.client import GatewayClient, GatewayError
from nanogpt_mcp.handlers import NanoGPTTools
from nanogpt_mcp.settings import Settings

__all__ = [
    "GatewayClient",
    "GatewayError",
    "NanoGPTTools",
    "Settings",
    "TOOLS",
    "ToolDescriptor",
]
