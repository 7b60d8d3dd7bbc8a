"""
Constants and enums for the rhythm pattern system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from fractions import Fraction
from typing import Literal


class TimeBase(str, Enum):
    """
    What a time unit is measured in.

    Beat and bar based units follow the tempo, second based units don't.
    """

    BEATS = "beats"
    BARS = "bars"
    SECONDS = "seconds"


# Symbolic unit tokens -> (time base, amount in that base)
UNIT_TOKENS: dict[str, tuple[TimeBase, Fraction]] = {
    "ms": (TimeBase.SECONDS, Fraction(1, 1000)),
    "seconds": (TimeBase.SECONDS, Fraction(1)),
    "beats": (TimeBase.BEATS, Fraction(1)),
    "bars": (TimeBase.BARS, Fraction(1)),
    "whole": (TimeBase.BEATS, Fraction(4)),
    "half": (TimeBase.BEATS, Fraction(2)),
    "quarter": (TimeBase.BEATS, Fraction(1)),
    "eighth": (TimeBase.BEATS, Fraction(1, 2)),
    "sixteenth": (TimeBase.BEATS, Fraction(1, 4)),
    "thirty-second": (TimeBase.BEATS, Fraction(1, 8)),
}

# Beats in a whole note ("1/4" is one beat)
BEATS_PER_WHOLE_NOTE = 4

# Named resolution tokens (notes played in the space of one unit)
NAMED_RATIOS: dict[str, Fraction] = {
    "straight": Fraction(1),
    "triplet": Fraction(2, 3),  # 3 notes in the space of 2
    "dotted": Fraction(3, 2),
    "quintuplet": Fraction(4, 5),  # 5 notes in the space of 4
    "septuplet": Fraction(4, 7),  # 7 notes in the space of 4
}

# Decimal numbers are snapped to the closest fraction with this denominator
# bound when within the tolerance, so 2/3 evaluated as a float round trips
# to Fraction(2, 3)
RATIO_MAX_DENOMINATOR = 1000
RATIO_SNAP_TOLERANCE = 1e-9

# Record defaults
DEFAULT_UNIT = "1/4"
DEFAULT_RESOLUTION = 1

# Default tempo context
DEFAULT_BEATS_PER_MIN = 120.0
DEFAULT_BEATS_PER_BAR = 4
DEFAULT_SAMPLES_PER_SEC = 44100

# Schema versions - frozen for v1
SchemaVersion = Literal["pattern/v1"]
PATTERN_SCHEMA: SchemaVersion = "pattern/v1"

# Files the pattern loader understands
PATTERN_FILE_SUFFIXES = (".yaml", ".yml", ".json")
