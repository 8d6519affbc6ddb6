"""CLI entry point for the NanoGPT MCP server.

Usage:
    nanogpt-mcp                          # stdio transport (MCP clients spawn this)
    nanogpt-mcp --transport sse          # serve on MCP_HOST:MCP_PORT
    python -m nanogpt_mcp --log-level DEBUG
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

logger = logging.getLogger("nanogpt_mcp")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nanogpt-mcp",
        description="MCP server exposing the NanoGPT API as tools",
    )
    parser.add_argument(
        "--transport", choices=["stdio", "sse"], default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, type=str.upper, default=None,
        help="Log level (default: $NANO_GPT_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    load_dotenv()

    from nanogpt_mcp.settings import Settings

    settings = Settings.from_env()

    # stdout belongs to the stdio transport; logs go to stderr.
    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    if not settings.api_key:
        logger.warning("NANO_GPT_API_KEY is not set; gateway calls will be rejected")

    from nanogpt_mcp.server import configure, mcp

    configure(settings)
    logger.info("Starting %s over %s", mcp.name, args.transport)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
