"""
Rhythm primitives - TimeUnit, BeatTimeBase and ratio parsing.

Time primitives for the unit and resolution tokens of a pattern.
Uses Fraction for exact subdivision representation.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction
from numbers import Real

from chuk_mcp_rhythm.constants import (
    BEATS_PER_WHOLE_NOTE,
    DEFAULT_BEATS_PER_BAR,
    DEFAULT_BEATS_PER_MIN,
    DEFAULT_SAMPLES_PER_SEC,
    NAMED_RATIOS,
    RATIO_MAX_DENOMINATOR,
    RATIO_SNAP_TOLERANCE,
    UNIT_TOKENS,
    TimeBase,
)

_RATIO_TOKEN = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_DECIMAL_TOKEN = re.compile(r"^\d+(\.\d+)?$|^\.\d+$")


def _positive_fraction(numerator: int, denominator: int, token: str) -> Fraction:
    if numerator <= 0 or denominator <= 0:
        raise ValueError(f"Numerator and denominator must be positive in {token!r}")
    return Fraction(numerator, denominator)


def snap_fraction(number: float) -> Fraction:
    """
    Convert a decimal number to a Fraction.

    Snaps to the closest simple fraction only when that fraction matches
    the number to within RATIO_SNAP_TOLERANCE, so 2/3 evaluated as a float
    gives Fraction(2, 3) while 1.0005 stays 2001/2000.

    Args:
        number: Finite number

    Returns:
        Fraction with the same sign as number
    """
    exact = Fraction(str(float(number)))
    snapped = exact.limit_denominator(RATIO_MAX_DENOMINATOR)
    if abs(snapped - exact) < RATIO_SNAP_TOLERANCE and (snapped > 0) == (exact > 0):
        return snapped
    return exact


def parse_ratio(value: object) -> Fraction:
    """
    Parse a resolution ratio into an exact Fraction.

    Accepts numbers (2/3, 1.25, Fraction(5, 4)) and string tokens
    ("5/4", "1.25", "triplet"). Decimal values are snapped to the closest
    simple fraction when they match it, so 2/3 evaluated as a float
    gives Fraction(2, 3). A number and its decimal string always agree.

    Args:
        value: Numeric or string ratio

    Returns:
        Strictly positive Fraction
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Resolution must be a number or a ratio string, got {value!r}")

    if isinstance(value, str):
        token = value.strip()
        named = NAMED_RATIOS.get(token.lower())
        if named is not None:
            return named

        match = _RATIO_TOKEN.match(token)
        if match:
            return _positive_fraction(int(match.group(1)), int(match.group(2)), value)

        if _DECIMAL_TOKEN.match(token):
            ratio = snap_fraction(float(token))
        else:
            raise ValueError(f"Invalid resolution token: {value!r}")

    elif isinstance(value, Fraction):
        ratio = value

    elif isinstance(value, Real):
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"Resolution must be finite, got {value!r}")
        ratio = snap_fraction(number)

    else:
        raise ValueError(
            f"Resolution must be a number or a ratio string, got {type(value).__name__}"
        )

    if ratio <= 0:
        raise ValueError(f"Resolution must be positive, got {value!r}")
    return ratio


@dataclass(frozen=True)
class BeatTimeBase:
    """
    Tempo context for converting beat based units to wall-clock time.

    Examples:
        BeatTimeBase(120) = 120 BPM in 4/4 at 44.1 kHz
        BeatTimeBase(90, beats_per_bar=3)
    """

    beats_per_min: float = DEFAULT_BEATS_PER_MIN
    beats_per_bar: int = DEFAULT_BEATS_PER_BAR
    samples_per_sec: int = DEFAULT_SAMPLES_PER_SEC

    def __post_init__(self) -> None:
        if not math.isfinite(self.beats_per_min) or self.beats_per_min <= 0:
            raise ValueError(f"Beats per minute must be positive, got {self.beats_per_min}")
        if self.beats_per_bar <= 0:
            raise ValueError(f"Beats per bar must be positive, got {self.beats_per_bar}")
        if self.samples_per_sec <= 0:
            raise ValueError(f"Samples per second must be positive, got {self.samples_per_sec}")

    @property
    def seconds_per_beat(self) -> Fraction:
        """Length of one beat in seconds."""
        return Fraction(60) / snap_fraction(self.beats_per_min)


@dataclass(frozen=True)
class TimeUnit:
    """
    A time unit as written in a pattern ("1/8", "beats", "ms").

    Rational tokens are fractions of a whole note, so "1/8" is an eighth
    note (half a beat). Symbolic tokens name a beat, bar or second based
    amount.

    Immutable and hashable.
    """

    symbol: str
    base: TimeBase
    amount: Fraction

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"Time unit amount must be positive, got {self.amount}")

    @classmethod
    def parse(cls, token: str) -> TimeUnit:
        """
        Parse a unit token like '1/8', 'beats' or 'ms'.

        Args:
            token: Unit token

        Returns:
            TimeUnit object
        """
        if not isinstance(token, str):
            raise ValueError(f"Unit must be a string token, got {type(token).__name__}")

        symbol = token.strip()
        named = UNIT_TOKENS.get(symbol.lower())
        if named is not None:
            base, amount = named
            return cls(symbol, base, amount)

        match = _RATIO_TOKEN.match(symbol)
        if match is None:
            raise ValueError(f"Invalid unit token: {token!r}")

        whole_notes = _positive_fraction(int(match.group(1)), int(match.group(2)), token)
        return cls(symbol, TimeBase.BEATS, whole_notes * BEATS_PER_WHOLE_NOTE)

    @property
    def is_beat_time(self) -> bool:
        """Whether the unit follows the tempo."""
        return self.base != TimeBase.SECONDS

    def scaled(self, ratio: Fraction) -> TimeUnit:
        """Return this unit with its amount multiplied by ratio."""
        return TimeUnit(f"{self.symbol}*{ratio}", self.base, self.amount * ratio)

    def to_beats(self, beats_per_bar: int = DEFAULT_BEATS_PER_BAR) -> Fraction:
        """
        Convert to beats.

        Args:
            beats_per_bar: Bar length, used by bar based units

        Returns:
            Length in beats
        """
        if self.base == TimeBase.BEATS:
            return self.amount
        if self.base == TimeBase.BARS:
            return self.amount * beats_per_bar
        raise ValueError(f"Unit {self.symbol!r} is measured in seconds, not beats")

    def to_seconds(self, time_base: BeatTimeBase) -> Fraction:
        """
        Convert to seconds.

        Args:
            time_base: Tempo context for beat based units

        Returns:
            Length in seconds
        """
        if self.base == TimeBase.SECONDS:
            return self.amount
        return self.to_beats(time_base.beats_per_bar) * time_base.seconds_per_beat

    def __str__(self) -> str:
        return self.symbol
