"""
Pydantic models for the rhythm pattern system.

This module provides:
- Pattern: The immutable unit/resolution/event record
- PatternDocument: A named, stored pattern
- PatternMetadata: Listing view of a stored pattern
"""

from chuk_mcp_rhythm.models.pattern import Pattern, PatternDocument, PatternMetadata

__all__ = [
    "Pattern",
    "PatternDocument",
    "PatternMetadata",
]
