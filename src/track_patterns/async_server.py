#!/usr/bin/env python3
"""
Async Track Patterns MCP Server using chuk-mcp-server

This server gives pattern authors the same load-and-validate pipeline the
game runs at startup, without launching the game.

The server provides tools for:
- Loading a pattern library and reading its diagnostics
- Listing and describing patterns
- Exploring the successor graph
- Validating a single pattern document while it is being written
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from track_patterns.config import DEFAULT_CONFIG, load_config
from track_patterns.manager import LibraryManager
from track_patterns.tools import register_library_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("track-patterns")

# Paths - overridable from the environment (see server.py)
LIBRARY_PATH = Path(__file__).parent / "patterns" / "library"
PATTERNS_DIR = Path(os.environ.get("TRACK_PATTERNS_DIR", str(LIBRARY_PATH)))
CONFIG_PATH = os.environ.get("TRACK_PATTERNS_CONFIG")

config = load_config(Path(CONFIG_PATH)) if CONFIG_PATH else DEFAULT_CONFIG

# Create managers
library_manager = LibraryManager(PATTERNS_DIR, config)

# Register all tools
library_tools = register_library_tools(mcp, library_manager)

# Export tool functions for direct access
track_load_library = library_tools["track_load_library"]
track_validate_library = library_tools["track_validate_library"]
track_list_patterns = library_tools["track_list_patterns"]
track_describe_pattern = library_tools["track_describe_pattern"]
track_successors = library_tools["track_successors"]
track_validate_pattern_text = library_tools["track_validate_pattern_text"]

logger.info("Track Patterns MCP Server initialized")
logger.info(f"  Patterns dir: {PATTERNS_DIR}")
logger.info(f"  Arc length: {config.min_arc_length}-{config.max_arc_length} rows")
