"""
Response normalizers: gateway JSON → one plain-text block per tool.

The gateway's payloads are only loosely specified, so every field is read
defensively. Declared errors are checked first by the handlers via
``declared_error`` and rendered with ``format_error``.

Public API
----------
  declared_error()   the ``error`` member of a reply, or None
  format_error()     "Error: <message or JSON>"
  cost_footer()      "\\n\\n---\\nCost: $X | Balance: $Y" (or "")
  format_chat()      chat completion → text + metadata footer
  format_images()    image generation → one line per image (+ footer)
  format_video()     video generation → URL line or raw-response fallback
  format_models()    model catalogue → one line per model
  format_balance()   account balance → "Balance: $..."
"""

from __future__ import annotations

import base64
import json
import tempfile
import time
from pathlib import Path
from typing import Any

_FOOTER_RULE = "\n\n---\n"

# Base64 of the JPEG SOI marker (FF D8 FF).
_JPEG_B64_PREFIX = "/9j/"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _money(value: Any) -> str:
    return f"${float(value):.4f}"


def _plain(value: Any) -> str:
    """Render a price the way it arrived: 2.0 → "2", 0.04 → "0.04"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def declared_error(data: Any) -> Any:
    if isinstance(data, dict) and data.get("error"):
        return data["error"]
    return None


def format_error(error: Any) -> str:
    if isinstance(error, dict) and error.get("message"):
        return f"Error: {error['message']}"
    if isinstance(error, str):
        return f"Error: {error}"
    return f"Error: {_dump(error)}"


def _cost_parts(data: dict) -> list[str]:
    parts = []
    if data.get("cost") is not None:
        parts.append(f"Cost: {_money(data['cost'])}")
    if data.get("remainingBalance") is not None:
        parts.append(f"Balance: {_money(data['remainingBalance'])}")
    return parts


def cost_footer(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    parts = _cost_parts(data)
    return _FOOTER_RULE + " | ".join(parts) if parts else ""


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

def _first_message_content(data: dict) -> Any:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    return message.get("content") if isinstance(message, dict) else None


def format_chat(data: Any, model: str) -> str:
    data = data if isinstance(data, dict) else {}
    content = _first_message_content(data)

    meta = [f"Model: {model}"]
    usage = data.get("usage")
    if isinstance(usage, dict) and usage:
        meta.append(
            f"Tokens: {usage.get('prompt_tokens', '?')} in / "
            f"{usage.get('completion_tokens', '?')} out"
        )
    meta.extend(_cost_parts(data))
    return (content or "No content returned") + _FOOTER_RULE + " | ".join(meta)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def image_extension(b64_data: str) -> str:
    return "jpg" if b64_data.startswith(_JPEG_B64_PREFIX) else "png"


def save_image(b64_data: str, index: int, directory: Path) -> Path:
    """Decode a base64 image into a fresh file under *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    stamp = time.time_ns() // 1_000_000
    tmp = tempfile.NamedTemporaryFile(
        mode="wb",
        prefix=f"nanogpt-{stamp}-{index}-",
        suffix=f".{image_extension(b64_data)}",
        dir=directory,
        delete=False,
    )
    with tmp:
        tmp.write(base64.b64decode(b64_data))
    return Path(tmp.name)


def format_images(data: Any, image_dir: Path) -> str:
    images = data.get("data") if isinstance(data, dict) else None
    if not isinstance(images, list) or not images:
        return "No images returned"

    lines = []
    for i, img in enumerate(images, start=1):
        img = img if isinstance(img, dict) else {}
        if img.get("url"):
            lines.append(f"Image {i}: {img['url']}")
        elif isinstance(img.get("b64_json"), str) and img["b64_json"]:
            path = save_image(img["b64_json"], i, image_dir)
            lines.append(f"Image {i}: saved to {path}")
        else:
            lines.append(f"Image {i}: no data returned")
    return "\n".join(lines) + cost_footer(data)


# ---------------------------------------------------------------------------
# Video
# ---------------------------------------------------------------------------

def video_url(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    items = data.get("data")
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0].get("url") or None
    return None


def format_video(data: Any, via_fallback: bool = False) -> str:
    url = video_url(data)
    if url:
        return f"Video: {url}{cost_footer(data)}"
    if via_fallback:
        return f"Video generation submitted. Response: {_dump(data)}"
    return f"Video generation response: {_dump(data)}"


# ---------------------------------------------------------------------------
# Model listings
# ---------------------------------------------------------------------------

def _matches(model: dict, term: str) -> bool:
    return any(
        term in str(model.get(key) or "").lower()
        for key in ("id", "name", "owned_by")
    )


def filter_models(models: list[dict], search: str | None) -> list[dict]:
    if not search:
        return list(models)
    term = search.lower()
    return [m for m in models if _matches(m, term)]


def _first_price(prices: Any) -> tuple[str, Any] | None:
    if isinstance(prices, dict) and prices:
        return next(iter(prices.items()))
    return None


def _pricing(model: dict) -> dict:
    pricing = model.get("pricing")
    return pricing if isinstance(pricing, dict) else {}


def _text_model_line(model: dict) -> str:
    line = str(model.get("id", ""))
    if model.get("name"):
        line += f" - {model['name']}"
    pricing = _pricing(model)
    if pricing.get("prompt"):
        line += f" (${_plain(pricing['prompt'])}/{_plain(pricing.get('completion'))} per M tokens)"
    return line


def _media_model_line(model: dict) -> str:
    line = f"{model.get('id', '')} - {model.get('name') or ''}"
    pricing = _pricing(model)
    per_image = _first_price(pricing.get("per_image"))
    per_duration = _first_price(pricing.get("per_duration"))
    if per_image:
        line += f" (${_plain(per_image[1])}/{per_image[0]})"
    elif per_duration:
        line += f" (${_plain(per_duration[1])}/{per_duration[0]}s)"
    capabilities = model.get("capabilities")
    if isinstance(capabilities, dict):
        enabled = ", ".join(name for name, on in capabilities.items() if on)
        line += f" [{enabled}]"
    return line


def format_models(models: list[dict], model_type: str, search: str | None = None) -> str:
    models = filter_models([m for m in models if isinstance(m, dict)], search)
    if not models:
        suffix = f' matching "{search}"' if search else ""
        return f"No {model_type} models found{suffix}"
    render = _text_model_line if model_type == "text" else _media_model_line
    return "\n".join(render(m) for m in models)


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------

def format_balance(data: Any) -> str:
    if isinstance(data, dict):
        for key in ("balance", "credits"):
            if data.get(key) is not None:
                return f"Balance: ${data[key]}"
    return f"Balance: ${_dump(data)}"
