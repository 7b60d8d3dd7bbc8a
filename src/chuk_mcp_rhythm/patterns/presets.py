"""
Preset patterns.

Factories return fresh values; patterns are immutable so callers may
share them freely.
"""

from __future__ import annotations

from chuk_mcp_rhythm.models.pattern import Pattern

_C_MAJOR_TRIAD = ("c4", "e4", "g4")


def triplet_resolution() -> Pattern:
    """Triplet feel: 3 notes in the space of 2 eighths."""
    return Pattern(unit="1/8", resolution=2 / 3, event=_C_MAJOR_TRIAD)


def swing_resolution() -> Pattern:
    """The same triad with a 5/4 swing stretch."""
    return Pattern(unit="1/8", resolution="5/4", event=_C_MAJOR_TRIAD)
