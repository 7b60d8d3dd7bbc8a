"""
Pitch primitives - PitchClass and Pitch.

PitchClass represents the 12 chromatic pitches (octave-independent).
Pitch is a single note token as written in a pattern ("c4", "F#3", "bb2").
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]

# Semitone offset of each natural note letter from C
_LETTER_SEMITONES: dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTAL_SEMITONES: dict[str, int] = {"": 0, "#": 1, "b": -1}

# letter, optional accidental, single octave digit
_PITCH_TOKEN = re.compile(r"^([A-Ga-g])([#b]?)([0-9])$")

MIDI_NOTE_MIN = 0
MIDI_NOTE_MAX = 127


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'c#', 'Db'."""
        name = name.strip()
        if not name or name[0].upper() not in _LETTER_SEMITONES:
            raise ValueError(f"Unknown pitch class: {name}")

        accidental = name[1:]
        if accidental not in _ACCIDENTAL_SEMITONES:
            raise ValueError(f"Unknown pitch class: {name}")

        semitones = _LETTER_SEMITONES[name[0].upper()] + _ACCIDENTAL_SEMITONES[accidental]
        return cls(semitones % 12)


@dataclass(frozen=True)
class Pitch:
    """
    A pitch token: note letter, optional accidental and octave.

    Examples:
        Pitch.parse("c4") = middle C (MIDI 60)
        Pitch.parse("F#3") = MIDI 54
        Pitch.parse("bb2") = B flat 2 (MIDI 46)

    Immutable and hashable.
    """

    letter: str
    accidental: str
    octave: int

    def __post_init__(self) -> None:
        if self.letter not in _LETTER_SEMITONES:
            raise ValueError(f"Pitch letter must be A-G, got {self.letter!r}")
        if self.accidental not in _ACCIDENTAL_SEMITONES:
            raise ValueError(f"Pitch accidental must be '#', 'b' or empty, got {self.accidental!r}")
        if not 0 <= self.octave <= 9:
            raise ValueError(f"Pitch octave must be a single digit, got {self.octave}")

        midi_note = self.midi_note
        if not MIDI_NOTE_MIN <= midi_note <= MIDI_NOTE_MAX:
            raise ValueError(f"Pitch {self} is outside the MIDI note range (MIDI {midi_note})")

    @property
    def pitch_class(self) -> PitchClass:
        """Octave-independent pitch class."""
        return PitchClass.from_midi(self.midi_note)

    @property
    def midi_note(self) -> int:
        """
        MIDI note number.

        Accidentals may cross the octave boundary: cb4 is B3, b#3 is C4.
        """
        return (
            (self.octave + 1) * 12
            + _LETTER_SEMITONES[self.letter]
            + _ACCIDENTAL_SEMITONES[self.accidental]
        )

    @classmethod
    def parse(cls, token: str) -> Pitch:
        """
        Parse a pitch token like 'c4', 'C#4' or 'eb3'.

        Args:
            token: Pitch token

        Returns:
            Pitch object
        """
        if not isinstance(token, str):
            raise ValueError(f"Pitch token must be a string, got {type(token).__name__}")

        match = _PITCH_TOKEN.match(token.strip())
        if match is None:
            raise ValueError(f"Invalid pitch token: {token!r}")

        letter, accidental, octave = match.groups()
        return cls(letter.upper(), accidental, int(octave))

    def __str__(self) -> str:
        return f"{self.letter.lower()}{self.accidental}{self.octave}"

    def __repr__(self) -> str:
        return f"Pitch.parse({str(self)!r})"
