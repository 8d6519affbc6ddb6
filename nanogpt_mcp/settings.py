"""
Runtime configuration for the NanoGPT MCP server.
Override any value via the corresponding environment variable.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://nano-gpt.com/api"
DEFAULT_HOST     = "127.0.0.1"
DEFAULT_PORT     = 8000
DEFAULT_LOG_LEVEL = "WARNING"

SERVER_NAME    = "nano-gpt"
SERVER_VERSION = "1.0.0"


def _optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    """Everything the gateway client and server need, read once at startup."""
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None
    image_dir: Path = Path(tempfile.gettempdir())
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        image_dir = os.environ.get("NANO_GPT_IMAGE_DIR")
        return cls(
            api_key=os.environ.get("NANO_GPT_API_KEY", ""),
            base_url=os.environ.get("NANO_GPT_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=_optional_float(os.environ.get("NANO_GPT_TIMEOUT")),
            image_dir=Path(image_dir) if image_dir else Path(tempfile.gettempdir()),
            host=os.environ.get("MCP_HOST", DEFAULT_HOST),
            port=int(os.environ.get("MCP_PORT", str(DEFAULT_PORT))),
            log_level=os.environ.get("NANO_GPT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
