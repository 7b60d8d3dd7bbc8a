"""
MCP tool implementations.

Tools are organized by domain:
- patterns - Pattern discovery, validation and customization
"""

from chuk_mcp_rhythm.tools.patterns import register_pattern_tools

__all__ = [
    "register_pattern_tools",
]
