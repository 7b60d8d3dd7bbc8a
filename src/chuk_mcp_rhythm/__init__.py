"""
chuk-mcp-rhythm - rhythmic pattern records.

A pattern is a unit note duration, a resolution ratio and the ordered
pitches sounded within one unit:

    Pattern(unit="1/8", resolution=2 / 3, event=["c4", "e4", "g4"])

Malformed records fail at construction with a pydantic ValidationError.
"""

from pydantic import ValidationError

from chuk_mcp_rhythm.models import Pattern, PatternDocument, PatternMetadata
from chuk_mcp_rhythm.patterns import (
    PatternLoadError,
    PatternRegistry,
    parse_pattern,
    swing_resolution,
    triplet_resolution,
)

__all__ = [
    "Pattern",
    "PatternDocument",
    "PatternLoadError",
    "PatternMetadata",
    "PatternRegistry",
    "ValidationError",
    "parse_pattern",
    "swing_resolution",
    "triplet_resolution",
]
