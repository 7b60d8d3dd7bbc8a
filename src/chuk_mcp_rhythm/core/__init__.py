"""
Core rhythm primitives.

These are the token types a pattern is written in:
- PitchClass: The 12 chromatic pitch classes (0-11)
- Pitch: A note token with octave ("c4")
- TimeUnit: A unit token ("1/8", "beats", "ms")
- BeatTimeBase: Tempo context for converting units to seconds
- parse_ratio: Resolution ratios from numbers or tokens ("5/4")
- snap_fraction: Decimal numbers to exact Fractions
"""

from chuk_mcp_rhythm.core.pitch import Pitch, PitchClass
from chuk_mcp_rhythm.core.rhythm import BeatTimeBase, TimeUnit, parse_ratio, snap_fraction

__all__ = [
    # Pitch
    "PitchClass",
    "Pitch",
    # Rhythm
    "TimeUnit",
    "BeatTimeBase",
    "parse_ratio",
    "snap_fraction",
]
