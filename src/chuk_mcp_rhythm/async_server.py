#!/usr/bin/env python3
"""
Async Rhythm MCP Server using chuk-mcp-server

This server provides MCP tools for working with rhythmic patterns:
a unit note duration, a resolution ratio for swing or triplet feel,
and the pitches played within one unit.

The server provides tools for:
- Listing library and project patterns
- Describing what a pattern's unit and resolution resolve to
- Validating pattern records
- Copying library patterns into the project
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_rhythm.patterns import PatternRegistry
from chuk_mcp_rhythm.patterns.registry import LIBRARY_PATH
from chuk_mcp_rhythm.tools import register_pattern_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-rhythm")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
PATTERNS_DIR = BASE_PATH / "patterns"

# Create registry
pattern_registry = PatternRegistry(
    library_path=LIBRARY_PATH,
    project_path=PATTERNS_DIR,
)

# Register all tools
pattern_tools = register_pattern_tools(mcp, pattern_registry)

# Export tool functions for direct access
pattern_list = pattern_tools["pattern_list"]
pattern_describe = pattern_tools["pattern_describe"]
pattern_validate = pattern_tools["pattern_validate"]
pattern_copy_to_project = pattern_tools["pattern_copy_to_project"]

logger.info("CHUK Rhythm MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Patterns dir: {PATTERNS_DIR}")
