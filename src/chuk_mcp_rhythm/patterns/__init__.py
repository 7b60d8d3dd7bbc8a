"""
Pattern system - loading, storing and discovering patterns.

Library patterns ship with the package; project patterns are
user-owned copies that override them.
"""

from chuk_mcp_rhythm.patterns.loader import (
    PatternLoadError,
    dump_pattern_document,
    load_pattern_document,
    parse_pattern,
    pattern_to_yaml,
)
from chuk_mcp_rhythm.patterns.presets import swing_resolution, triplet_resolution
from chuk_mcp_rhythm.patterns.registry import PatternRegistry

__all__ = [
    "PatternLoadError",
    "PatternRegistry",
    "dump_pattern_document",
    "load_pattern_document",
    "parse_pattern",
    "pattern_to_yaml",
    "swing_resolution",
    "triplet_resolution",
]
