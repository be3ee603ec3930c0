#!/usr/bin/env python3
"""
Entry point for the Track Patterns MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http).
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="Track Patterns MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--patterns-dir",
        help="Pattern library directory (default: built-in library)",
    )
    parser.add_argument(
        "--config",
        help="Validation config YAML file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.patterns_dir:
        os.environ["TRACK_PATTERNS_DIR"] = args.patterns_dir
    if args.config:
        os.environ["TRACK_PATTERNS_CONFIG"] = args.config

    # Import after argument parsing so the paths above are picked up
    from track_patterns.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting Track Patterns MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting Track Patterns MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
