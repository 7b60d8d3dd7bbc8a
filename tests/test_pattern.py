"""
Tests for the pattern system.

Tests cover:
- Pattern model creation and validation
- PatternDocument and PatternMetadata
- Loading and writing pattern files
- PatternRegistry discovery and loading
- Preset factories
"""

import json
from fractions import Fraction
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from chuk_mcp_rhythm.constants import TimeBase
from chuk_mcp_rhythm.models.pattern import Pattern, PatternDocument, PatternMetadata
from chuk_mcp_rhythm.patterns import (
    PatternLoadError,
    PatternRegistry,
    dump_pattern_document,
    load_pattern_document,
    parse_pattern,
    pattern_to_yaml,
    swing_resolution,
    triplet_resolution,
)


@pytest.fixture
def triplet() -> Pattern:
    """The triplet resolution pattern."""
    return Pattern(unit="1/8", resolution=2 / 3, event=["c4", "e4", "g4"])


class TestPattern:
    """Tests for Pattern model."""

    def test_triplet_pattern(self, triplet: Pattern) -> None:
        """Create the triplet resolution pattern."""
        assert triplet.unit == "1/8"
        assert triplet.resolution == 2 / 3
        assert triplet.event == ("c4", "e4", "g4")
        assert len(triplet.event) == 3

    def test_string_resolution(self) -> None:
        """Resolution may be a ratio token."""
        pattern = Pattern(unit="1/8", resolution="5/4", event=["c4", "e4", "g4"])
        assert pattern.resolution == "5/4"
        assert pattern.resolution_ratio == Fraction(5, 4)

    def test_string_and_numeric_resolution_equivalent(self) -> None:
        """'5/4' and 1.25 resolve to the same ratio."""
        named = Pattern(unit="1/8", resolution="5/4", event=["c4"])
        numeric = Pattern(unit="1/8", resolution=1.25, event=["c4"])
        assert named.resolution_ratio == numeric.resolution_ratio == Fraction(5, 4)
        assert named.equivalent_to(numeric)
        assert named != numeric  # fields keep the form they were written in

    def test_fields_keep_input_values(self) -> None:
        """Field values equal the input values."""
        pattern = Pattern(unit="beats", resolution=1, event=["C#4", "eb3"])
        assert pattern.unit == "beats"
        assert pattern.resolution == 1
        assert isinstance(pattern.resolution, int)
        assert list(pattern.event) == ["C#4", "eb3"]

    def test_fraction_resolution_stored_as_token(self) -> None:
        """Fraction input is stored as its ratio token."""
        pattern = Pattern(unit="1/8", resolution=Fraction(2, 3), event=["c4"])
        assert pattern.resolution == "2/3"
        assert pattern.resolution_ratio == Fraction(2, 3)

    def test_defaults(self) -> None:
        """Unit defaults to a quarter note and resolution to 1."""
        pattern = Pattern(event=["c4"])
        assert pattern.unit == "1/4"
        assert pattern.resolution == 1

    def test_empty_event(self) -> None:
        """An empty event fails."""
        with pytest.raises(ValidationError, match="at least one pitch"):
            Pattern(unit="1/8", resolution=2 / 3, event=[])

    def test_missing_event(self) -> None:
        """Event is required."""
        with pytest.raises(ValidationError):
            Pattern(unit="1/8", resolution=2 / 3)

    def test_invalid_unit(self) -> None:
        """A malformed unit fails."""
        with pytest.raises(ValidationError, match="Invalid unit token"):
            Pattern(unit="xyz", resolution=2 / 3, event=["c4"])

    def test_non_string_unit(self) -> None:
        """A numeric unit fails."""
        with pytest.raises(ValidationError):
            Pattern(unit=0.125, resolution=1, event=["c4"])

    @pytest.mark.parametrize("resolution", [0, -1, "0/3", "abc", True, None, float("nan")])
    def test_invalid_resolution(self, resolution: object) -> None:
        """Malformed resolutions fail."""
        with pytest.raises(ValidationError):
            Pattern(unit="1/8", resolution=resolution, event=["c4"])

    def test_invalid_pitch(self) -> None:
        """A malformed pitch token fails."""
        with pytest.raises(ValidationError, match="Invalid pitch token"):
            Pattern(unit="1/8", event=["c4", "x9"])

    def test_event_string_rejected(self) -> None:
        """A bare string is not an event sequence."""
        with pytest.raises(ValidationError, match="sequence"):
            Pattern(unit="1/8", event="c4")

    def test_extra_fields_rejected(self) -> None:
        """Unknown fields fail."""
        with pytest.raises(ValidationError):
            Pattern(unit="1/8", event=["c4"], offset=2)

    def test_immutable(self, triplet: Pattern) -> None:
        """Patterns can't be modified."""
        with pytest.raises(ValidationError):
            triplet.unit = "1/4"  # type: ignore[misc]

    def test_hashable(self, triplet: Pattern) -> None:
        """Equal patterns hash the same."""
        copy = Pattern(unit="1/8", resolution=2 / 3, event=("c4", "e4", "g4"))
        assert copy == triplet
        assert hash(copy) == hash(triplet)

    def test_step_is_eighth_triplet(self, triplet: Pattern) -> None:
        """1/8 at resolution 2/3 steps in eighth note triplets."""
        assert triplet.step.base == TimeBase.BEATS
        assert triplet.step.to_beats() == Fraction(1, 3)

    def test_step_in_seconds(self) -> None:
        """Second based units scale too."""
        pattern = Pattern(unit="ms", resolution=2, event=["c4"])
        assert pattern.step.base == TimeBase.SECONDS
        assert pattern.step.amount == Fraction(1, 500)

    def test_small_resolution(self) -> None:
        """A tiny positive resolution is valid and scales the step."""
        pattern = Pattern(unit="1/8", resolution=0.0004, event=["c4"])
        assert pattern.resolution_ratio == Fraction(1, 2500)
        assert pattern.step.to_beats() == Fraction(1, 5000)

    def test_decimal_resolution_equivalent(self) -> None:
        """A decimal string and its float resolve to the same ratio."""
        written = Pattern(unit="1/8", resolution="1.0005", event=["c4"])
        numeric = Pattern(unit="1/8", resolution=1.0005, event=["c4"])
        assert written.resolution_ratio == Fraction(2001, 2000)
        assert written.equivalent_to(numeric)

    def test_midi_notes(self, triplet: Pattern) -> None:
        """Event pitches resolve to MIDI notes in order."""
        assert triplet.midi_notes == (60, 64, 67)
        assert [str(p) for p in triplet.pitches] == ["c4", "e4", "g4"]

    def test_equivalent_ignores_spelling(self, triplet: Pattern) -> None:
        """Equivalence compares parsed values."""
        other = Pattern(unit="eighth", resolution="triplet", event=["C4", "E4", "G4"])
        assert triplet.equivalent_to(other)
        assert not triplet.equivalent_to(Pattern(unit="1/8", resolution=2 / 3, event=["c4"]))

    def test_to_dict(self, triplet: Pattern) -> None:
        """Convert to plain dict."""
        assert triplet.to_dict() == {
            "unit": "1/8",
            "resolution": 2 / 3,
            "event": ["c4", "e4", "g4"],
        }


class TestPatternDocument:
    """Tests for PatternDocument model."""

    def test_from_dict(self) -> None:
        """Validate a document from file layout."""
        document = PatternDocument.model_validate(
            {
                "schema": "pattern/v1",
                "name": "swing",
                "pattern": {"unit": "1/8", "resolution": "5/4", "event": ["c4"]},
            }
        )
        assert document.schema_version == "pattern/v1"
        assert document.pattern.resolution_ratio == Fraction(5, 4)

    def test_unknown_schema(self) -> None:
        """Only pattern/v1 is accepted."""
        with pytest.raises(ValidationError):
            PatternDocument.model_validate(
                {"schema": "pattern/v2", "name": "x", "pattern": {"event": ["c4"]}}
            )

    def test_invalid_pattern(self) -> None:
        """An invalid nested pattern fails the document."""
        with pytest.raises(ValidationError):
            PatternDocument(name="empty", pattern={"unit": "1/8", "event": []})

    def test_to_dict(self, triplet: Pattern) -> None:
        """File layout round trip."""
        document = PatternDocument(name="triplet", description="Triplets", pattern=triplet)
        data = document.to_dict()
        assert data["schema"] == "pattern/v1"
        assert data["pattern"]["unit"] == "1/8"
        assert PatternDocument.model_validate(data) == document


class TestPatternMetadata:
    """Tests for PatternMetadata model."""

    def test_from_document(self, triplet: Pattern) -> None:
        """Create metadata from a document."""
        document = PatternDocument(name="triplet", pattern=triplet)
        metadata = PatternMetadata.from_document(document, path="/test/triplet.yaml")

        assert metadata.name == "triplet"
        assert metadata.unit == "1/8"
        assert metadata.event_count == 3
        assert metadata.path == "/test/triplet.yaml"


class TestParsePattern:
    """Tests for parse_pattern."""

    def test_from_mapping(self) -> None:
        """Parse a mapping."""
        pattern = parse_pattern({"unit": "1/8", "resolution": 2 / 3, "event": ["c4", "e4", "g4"]})
        assert len(pattern.event) == 3

    def test_from_yaml(self) -> None:
        """Parse YAML text; an unquoted ratio is read as a token."""
        pattern = parse_pattern("unit: 1/8\nresolution: 2/3\nevent: [c4, e4, g4]\n")
        assert pattern.resolution == "2/3"
        assert pattern.resolution_ratio == Fraction(2, 3)

    def test_from_json(self) -> None:
        """Parse JSON text."""
        pattern = parse_pattern('{"unit": "1/8", "resolution": 1.25, "event": ["c4"]}')
        assert pattern.resolution == 1.25

    def test_invalid_record(self) -> None:
        """A malformed record raises ValidationError."""
        with pytest.raises(ValidationError):
            parse_pattern('{"unit": "1/8", "resolution": 2, "event": []}')

    def test_invalid_yaml(self) -> None:
        """Unparseable text raises PatternLoadError."""
        with pytest.raises(PatternLoadError):
            parse_pattern("unit: [1/8")

    def test_not_a_mapping(self) -> None:
        """A YAML list is not a pattern."""
        with pytest.raises(PatternLoadError, match="mapping"):
            parse_pattern("- c4\n- e4\n")

    def test_to_yaml_round_trip(self) -> None:
        """YAML output parses back to an equal pattern."""
        pattern = swing_resolution()
        assert parse_pattern(pattern_to_yaml(pattern)) == pattern


class TestPatternFiles:
    """Tests for loading and writing pattern files."""

    def test_load_bare_record(self, temp_dir: Path) -> None:
        """A bare record is named after the file."""
        path = temp_dir / "arp.yaml"
        path.write_text("unit: 1/16\nevent: [c4, g4]\n")

        document = load_pattern_document(path)
        assert document.name == "arp"
        assert document.pattern.unit == "1/16"

    def test_load_json_document(self, temp_dir: Path) -> None:
        """JSON documents load."""
        path = temp_dir / "swing.json"
        path.write_text(
            json.dumps(
                {
                    "schema": "pattern/v1",
                    "name": "swing",
                    "pattern": {"unit": "1/8", "resolution": "5/4", "event": ["c4"]},
                }
            )
        )

        document = load_pattern_document(path)
        assert document.name == "swing"

    def test_unsupported_suffix(self, temp_dir: Path) -> None:
        """Only YAML and JSON files load."""
        path = temp_dir / "pattern.lua"
        path.write_text("return pattern {}")
        with pytest.raises(PatternLoadError):
            load_pattern_document(path)

    def test_dump_yaml(self, temp_dir: Path) -> None:
        """Write and reload a YAML document."""
        document = PatternDocument(name="triplet", pattern=triplet_resolution())
        path = dump_pattern_document(document, temp_dir / "nested" / "triplet.yaml")

        with open(path) as f:
            data = yaml.safe_load(f)
        assert data["pattern"]["event"] == ["c4", "e4", "g4"]
        assert load_pattern_document(path) == document

    def test_dump_json(self, temp_dir: Path) -> None:
        """Write and reload a JSON document."""
        document = PatternDocument(name="swing", pattern=swing_resolution())
        path = dump_pattern_document(document, temp_dir / "swing.json")

        assert json.loads(path.read_text())["pattern"]["resolution"] == "5/4"
        assert load_pattern_document(path) == document

    def test_dump_unsupported_suffix(self, temp_dir: Path) -> None:
        """Only YAML and JSON files are written."""
        document = PatternDocument(name="swing", pattern=swing_resolution())
        with pytest.raises(PatternLoadError):
            dump_pattern_document(document, temp_dir / "swing.txt")
        assert not (temp_dir / "swing.txt").exists()

    def test_non_ascii_round_trip(self, temp_dir: Path) -> None:
        """Descriptions are written and read as UTF-8."""
        document = PatternDocument(
            name="habanera",
            description="Habanera en sí bemol, tresillo cubano",
            pattern=swing_resolution(),
        )
        path = dump_pattern_document(document, temp_dir / "habanera.yaml")
        assert load_pattern_document(path) == document


class TestPatternRegistry:
    """Tests for PatternRegistry."""

    def test_list_library(self, library_path: Path) -> None:
        """Built-in patterns are listed by name."""
        registry = PatternRegistry(library_path=library_path)
        names = [m.name for m in registry.list_patterns()]
        assert names == ["straight-eighths", "swing-resolution", "triplet-resolution"]

    def test_default_library(self) -> None:
        """The packaged library is used by default."""
        registry = PatternRegistry()
        assert registry.get_pattern("triplet-resolution") is not None

    def test_get_pattern(self, library_path: Path) -> None:
        """Library patterns load and validate."""
        registry = PatternRegistry(library_path=library_path)
        document = registry.get_pattern("triplet-resolution")

        assert document is not None
        assert document.pattern.equivalent_to(triplet_resolution())

    def test_get_pattern_cached(self, library_path: Path) -> None:
        """Patterns are cached after first load."""
        registry = PatternRegistry(library_path=library_path)
        assert registry.get_pattern("swing-resolution") is registry.get_pattern(
            "swing-resolution"
        )

    def test_get_missing(self, library_path: Path) -> None:
        """Missing patterns return None."""
        registry = PatternRegistry(library_path=library_path)
        assert registry.get_pattern("nonexistent") is None
        assert registry.get_pattern_metadata("nonexistent") is None

    def test_project_overrides_library(self, library_path: Path, temp_dir: Path) -> None:
        """Project patterns take precedence."""
        (temp_dir / "triplet-resolution.yaml").write_text(
            "unit: 1/16\nresolution: triplet\nevent: [a3]\n"
        )
        registry = PatternRegistry(library_path=library_path, project_path=temp_dir)

        assert registry.get_pattern("triplet-resolution").pattern.unit == "1/16"
        metadata = registry.get_pattern_metadata("triplet-resolution")
        assert metadata.event_count == 1

    def test_invalid_file_skipped(self, temp_dir: Path) -> None:
        """Invalid files are skipped."""
        (temp_dir / "broken.yaml").write_text("unit: xyz\nevent: [c4]\n")
        (temp_dir / "good.yaml").write_text("unit: 1/8\nevent: [c4]\n")
        (temp_dir / "notes.txt").write_text("not a pattern")
        registry = PatternRegistry(library_path=None, project_path=temp_dir)

        assert [m.name for m in registry.list_patterns()] == ["good"]
        assert registry.get_pattern("broken") is None

    def test_copy_to_project(self, library_path: Path, temp_dir: Path) -> None:
        """Copy a library pattern into the project."""
        registry = PatternRegistry(library_path=library_path, project_path=temp_dir)
        path = registry.copy_to_project("swing-resolution")

        assert path == temp_dir / "swing-resolution.yaml"
        assert path.exists()
        metadata = registry.get_pattern_metadata("swing-resolution")
        assert metadata.path == str(path)

    def test_copy_missing(self, library_path: Path, temp_dir: Path) -> None:
        """Copying a missing pattern returns None."""
        registry = PatternRegistry(library_path=library_path, project_path=temp_dir)
        assert registry.copy_to_project("nonexistent") is None

    def test_copy_without_project(self, library_path: Path) -> None:
        """Copying needs a project path."""
        registry = PatternRegistry(library_path=library_path)
        with pytest.raises(ValueError, match="No project path"):
            registry.copy_to_project("swing-resolution")

    def test_register_pattern(self, library_path: Path) -> None:
        """Register a pattern programmatically."""
        registry = PatternRegistry(library_path=library_path)
        document = PatternDocument(name="custom", pattern=Pattern(unit="1/16", event=["d4"]))

        assert registry.register_pattern(document) == "custom"
        assert registry.get_pattern("custom") is document
        assert len(registry.list_patterns()) == 4

    def test_registered_survives_copy(self, library_path: Path, temp_dir: Path) -> None:
        """Registered patterns stay listed after copying another pattern."""
        registry = PatternRegistry(library_path=library_path, project_path=temp_dir)
        document = PatternDocument(name="custom", pattern=Pattern(unit="1/16", event=["d4"]))
        registry.register_pattern(document)

        registry.copy_to_project("swing-resolution")

        assert "custom" in [m.name for m in registry.list_patterns()]
        assert registry.get_pattern_metadata("custom") is not None
        assert registry.get_pattern("custom") is document

    def test_registered_overrides_files(self, library_path: Path) -> None:
        """A registered pattern shadows a library file of the same name."""
        registry = PatternRegistry(library_path=library_path)
        document = PatternDocument(
            name="swing-resolution", pattern=Pattern(unit="1/16", event=["d4"])
        )
        registry.register_pattern(document)

        assert registry.get_pattern("swing-resolution") is document
        assert registry.get_pattern_metadata("swing-resolution").event_count == 1


class TestPresets:
    """Tests for preset factories."""

    def test_triplet_resolution(self) -> None:
        """The triplet preset."""
        pattern = triplet_resolution()
        assert pattern.unit == "1/8"
        assert pattern.resolution == 2 / 3
        assert pattern.event == ("c4", "e4", "g4")

    def test_swing_resolution(self) -> None:
        """The swing preset matches its numeric form."""
        pattern = swing_resolution()
        assert pattern.resolution == "5/4"
        assert pattern.equivalent_to(Pattern(unit="1/8", resolution=1.25, event=pattern.event))

    def test_fresh_equal_values(self) -> None:
        """Factories return equal values."""
        assert triplet_resolution() == triplet_resolution()
