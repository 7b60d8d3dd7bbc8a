"""
Pattern model - the record a pattern script returns.

A pattern is a unit note duration, a resolution ratio applied within
that unit (swing or triplet feel) and the ordered pitches sounded in it.
Patterns are immutable and validated once, at construction.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_rhythm.constants import (
    DEFAULT_RESOLUTION,
    DEFAULT_UNIT,
    PATTERN_SCHEMA,
    SchemaVersion,
)
from chuk_mcp_rhythm.core import Pitch, TimeUnit, parse_ratio


class Pattern(BaseModel):
    """
    A rhythmic pattern: unit, resolution and event.

    Example:
        Pattern(unit="1/8", resolution=2/3, event=["c4", "e4", "g4"])

    Resolution may be numeric (2/3, 1.25) or a ratio token ("5/4",
    "triplet"). Both forms are equivalent: resolution_ratio resolves
    either one to the same Fraction.
    """

    unit: str = Field(DEFAULT_UNIT, description="Unit token (1/8, beats, ms, ...)")
    resolution: int | float | str = Field(
        DEFAULT_RESOLUTION, description="Resolution ratio (number or ratio token)"
    )
    event: tuple[str, ...] = Field(..., description="Pitch tokens sounded within one unit")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v: str) -> str:
        """Ensure unit is a known duration token."""
        TimeUnit.parse(v)
        return v

    @field_validator("resolution", mode="before")
    @classmethod
    def validate_resolution(cls, v: Any) -> Any:
        """Ensure resolution resolves to a positive ratio."""
        parse_ratio(v)
        if isinstance(v, Fraction):
            return f"{v.numerator}/{v.denominator}"
        return v

    @field_validator("event", mode="before")
    @classmethod
    def validate_event(cls, v: Any) -> Any:
        """Ensure event is a non-empty sequence of pitch tokens."""
        if isinstance(v, str) or not isinstance(v, (list, tuple)):
            raise ValueError("Event must be a sequence of pitch tokens")
        if not v:
            raise ValueError("Event must contain at least one pitch")
        for token in v:
            Pitch.parse(token)
        return v

    @property
    def time_unit(self) -> TimeUnit:
        """The parsed unit."""
        return TimeUnit.parse(self.unit)

    @property
    def resolution_ratio(self) -> Fraction:
        """The resolution as an exact ratio."""
        return parse_ratio(self.resolution)

    @property
    def step(self) -> TimeUnit:
        """
        Length of one step: the unit scaled by the resolution.

        "1/8" with resolution 2/3 is an eighth note triplet (1/3 beat).
        """
        return self.time_unit.scaled(self.resolution_ratio)

    @property
    def pitches(self) -> tuple[Pitch, ...]:
        """The parsed event pitches, in order."""
        return tuple(Pitch.parse(token) for token in self.event)

    @property
    def midi_notes(self) -> tuple[int, ...]:
        """MIDI note numbers of the event pitches."""
        return tuple(pitch.midi_note for pitch in self.pitches)

    def equivalent_to(self, other: Pattern) -> bool:
        """
        Check whether two patterns mean the same thing.

        Compares parsed values, so resolution "5/4" matches 1.25
        and "C4" matches "c4".
        """
        return (
            self.time_unit.base == other.time_unit.base
            and self.time_unit.amount == other.time_unit.amount
            and self.resolution_ratio == other.resolution_ratio
            and self.midi_notes == other.midi_notes
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON/YAML ready)."""
        return {
            "unit": self.unit,
            "resolution": self.resolution,
            "event": list(self.event),
        }


class PatternDocument(BaseModel):
    """
    A stored pattern - the record plus its name and description.
    """

    schema_version: SchemaVersion = Field(
        PATTERN_SCHEMA, alias="schema", description="Schema version"
    )
    name: str = Field(..., min_length=1, description="Pattern name")
    description: str = Field("", description="Human-readable description")
    pattern: Pattern = Field(..., description="The pattern record")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict in file layout."""
        result: dict[str, Any] = {
            "schema": self.schema_version,
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        result["pattern"] = self.pattern.to_dict()
        return result


class PatternMetadata(BaseModel):
    """
    Lightweight pattern metadata for listing/discovery.
    """

    name: str = Field(..., description="Pattern name")
    description: str = Field("", description="Human-readable description")
    unit: str = Field(..., description="Unit token")
    resolution: int | float | str = Field(..., description="Resolution as written")
    event_count: int = Field(..., description="Number of pitches in the event")
    path: str | None = Field(None, description="Path to pattern file")

    @classmethod
    def from_document(cls, document: PatternDocument, path: str | None = None) -> PatternMetadata:
        """Create metadata from a pattern document."""
        return cls(
            name=document.name,
            description=document.description,
            unit=document.pattern.unit,
            resolution=document.pattern.resolution,
            event_count=len(document.pattern.event),
            path=path,
        )
