#!/usr/bin/env python3
"""
Example: Triplet and swing resolution.

This demonstrates how a pattern's resolution changes the feel of a unit:
2/3 fits three eighth notes in the space of two, 5/4 stretches them.
The numeric and token forms of a resolution are interchangeable.

Usage:
    python examples/triplet_resolution.py
"""

from pydantic import ValidationError

from chuk_mcp_rhythm import Pattern, PatternRegistry, parse_pattern, triplet_resolution
from chuk_mcp_rhythm.core import BeatTimeBase


def main() -> None:
    """Demonstrate resolution ratios."""
    print("CHUK Rhythm Resolution Demo")
    print("=" * 40)
    print()

    time_base = BeatTimeBase(120)

    triplet = triplet_resolution()
    swing = parse_pattern({"unit": "1/8", "resolution": "5/4", "event": ["c4", "e4", "g4"]})

    for label, pattern in (("Triplet", triplet), ("Swing", swing)):
        step = pattern.step
        print(f"{label}: unit={pattern.unit} resolution={pattern.resolution}")
        print(f"  Ratio: {pattern.resolution_ratio}")
        seconds = float(step.to_seconds(time_base))
        print(f"  Step: {step.to_beats()} beats ({seconds:.3f}s at 120 BPM)")
        print(f"  MIDI notes: {list(pattern.midi_notes)}")
        print()

    numeric = Pattern(unit="1/8", resolution=1.25, event=["c4", "e4", "g4"])
    print(f'"5/4" equivalent to 1.25: {swing.equivalent_to(numeric)}')
    print()

    # Malformed records fail at construction
    try:
        Pattern(unit="1/8", resolution=2 / 3, event=[])
    except ValidationError as e:
        print(f"Empty event rejected: {e.errors()[0]['msg']}")
    print()

    print("Library patterns:")
    for metadata in PatternRegistry().list_patterns():
        print(f"  {metadata.name}: {metadata.description}")


if __name__ == "__main__":
    main()
