"""Static catalog of the tools this server exposes.

Each entry carries the tool's name, description and the JSON schema of
its arguments. ``server`` registers one typed FastMCP wrapper per entry and
takes its names and argument descriptions from here, so the wrapper
signatures must declare the same properties and JSON types. Required
fields are enforced by the schema on the client side, not by the handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MODEL_TYPES = ("text", "image", "video", "audio")


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)


def _schema(properties: dict[str, dict], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


CHAT = ToolDescriptor(
    name="nano_chat",
    description=(
        "Send a prompt to any text/chat model via NanoGPT. Supports 700+ models "
        "including GPT, Claude, Gemini, Llama, DeepSeek, Qwen, Mistral etc. "
        "Returns the model's text response."
    ),
    input_schema=_schema(
        {
            "model": {
                "type": "string",
                "description": (
                    'Model ID e.g. "openai/gpt-4o", "google/gemini-2.5-flash", '
                    '"deepseek/deepseek-r1". Use nano_list_models to see all.'
                ),
            },
            "prompt": {"type": "string", "description": "The user message / prompt to send"},
            "system": {"type": "string", "description": "Optional system message"},
            "temperature": {
                "type": "number",
                "description": "Sampling temperature 0-2 (default: model default)",
            },
            "max_tokens": {"type": "number", "description": "Max tokens to generate"},
        },
        required=["model", "prompt"],
    ),
)

GENERATE_IMAGE = ToolDescriptor(
    name="nano_generate_image",
    description=(
        "Generate an image using NanoGPT. Supports models like gpt-image-1.5, "
        "nano-banana, flux-pro, recraft-v3, seedream-v4, stable-diffusion-3.5 etc. "
        "Returns image URL."
    ),
    input_schema=_schema(
        {
            "model": {
                "type": "string",
                "description": (
                    'Image model ID e.g. "gpt-image-1.5", "flux-1.1-pro", "recraft-v3". '
                    'Use nano_list_models with type "image" to see all.'
                ),
            },
            "prompt": {"type": "string", "description": "Text description of the image to generate"},
            "size": {
                "type": "string",
                "description": 'Image size e.g. "1024x1024", "1536x1024", "1024x1536". Defaults to "1024x1024".',
            },
            "n": {"type": "number", "description": "Number of images to generate (default: 1)"},
        },
        required=["model", "prompt"],
    ),
)

GENERATE_VIDEO = ToolDescriptor(
    name="nano_generate_video",
    description=(
        "Generate a video using NanoGPT. Supports text-to-video and image-to-video "
        "models like Kling, Sora 2, Veo 3, Wan, MiniMax etc. Returns video URL. "
        "Videos may take 1-5 minutes to generate."
    ),
    input_schema=_schema(
        {
            "model": {
                "type": "string",
                "description": (
                    'Video model ID e.g. "kling-v26-pro", "sora-2", "veo3-video". '
                    'Use nano_list_models with type "video" to see all.'
                ),
            },
            "prompt": {"type": "string", "description": "Text description of the video to generate"},
            "image_url": {
                "type": "string",
                "description": "Optional image URL for image-to-video generation (model must support it)",
            },
            "duration": {"type": "string", "description": 'Video duration in seconds e.g. "5", "10"'},
            "aspect_ratio": {"type": "string", "description": 'Aspect ratio e.g. "16:9", "9:16", "1:1"'},
        },
        required=["model", "prompt"],
    ),
)

LIST_MODELS = ToolDescriptor(
    name="nano_list_models",
    description=(
        "List available models on NanoGPT. Filter by type: text (700+ LLMs), "
        "image (30+ generators), video (20+ generators). Returns model IDs, names, and pricing."
    ),
    input_schema=_schema(
        {
            "type": {
                "type": "string",
                "enum": list(MODEL_TYPES),
                "description": "Model type to list (default: text)",
            },
            "search": {
                "type": "string",
                "description": "Optional search term to filter results (matches model ID or name)",
            },
        }
    ),
)

CHECK_BALANCE = ToolDescriptor(
    name="nano_check_balance",
    description="Check your NanoGPT account balance",
    input_schema=_schema({}),
)

TOOLS: tuple[ToolDescriptor, ...] = (CHAT, GENERATE_IMAGE, GENERATE_VIDEO, LIST_MODELS, CHECK_BALANCE)
