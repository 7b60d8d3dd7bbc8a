"""
Pattern loader - reads and writes the serialized pattern record.

A pattern serializes as a mapping with three keys:

    unit: "1/8"
    resolution: "5/4"      # or a number
    event: [c4, e4, g4]

Pattern files wrap the record with a name and description. JSON is
accepted wherever YAML is, since the YAML loader reads both.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_rhythm.constants import PATTERN_FILE_SUFFIXES
from chuk_mcp_rhythm.models.pattern import Pattern, PatternDocument

logger = logging.getLogger(__name__)


class PatternLoadError(ValueError):
    """Raised when a pattern source can't be read as a mapping."""


def _load_mapping(text: str, origin: str = "<string>") -> dict[str, Any]:
    """Parse YAML/JSON text into a mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise PatternLoadError(f"Could not parse pattern source {origin}: {e}") from e

    if not isinstance(data, dict):
        raise PatternLoadError(
            f"Pattern source {origin} must be a mapping, got {type(data).__name__}"
        )
    return data


def _check_suffix(path: Path) -> None:
    if path.suffix not in PATTERN_FILE_SUFFIXES:
        raise PatternLoadError(f"Unsupported pattern file type: {path.suffix}")


def parse_pattern(source: Mapping[str, Any] | str) -> Pattern:
    """
    Parse a pattern record.

    Args:
        source: A mapping, or YAML/JSON text holding one

    Returns:
        Validated Pattern

    Raises:
        pydantic.ValidationError: If the record is malformed
        PatternLoadError: If text can't be parsed into a mapping
    """
    if isinstance(source, str):
        source = _load_mapping(source)
    return Pattern.model_validate(source)


def load_pattern_document(path: Path) -> PatternDocument:
    """
    Load a pattern file.

    Files holding a bare record (no 'pattern' key) are named after
    the file stem.

    Args:
        path: Path to a .yaml, .yml or .json file

    Returns:
        Validated PatternDocument
    """
    path = Path(path)
    _check_suffix(path)

    with open(path, encoding="utf-8") as f:
        data = _load_mapping(f.read(), origin=str(path))

    logger.debug("Loaded pattern file %s", path)

    if "pattern" in data:
        return PatternDocument.model_validate(data)
    return PatternDocument(name=path.stem, pattern=Pattern.model_validate(data))


def dump_pattern_document(document: PatternDocument, path: Path) -> Path:
    """
    Write a pattern file.

    Args:
        document: Pattern document to write
        path: Target .yaml, .yml or .json path; .json writes JSON, the others YAML

    Returns:
        The written path
    """
    path = Path(path)
    _check_suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix == ".json":
            json.dump(document.to_dict(), f, indent=2)
        else:
            yaml.safe_dump(document.to_dict(), f, default_flow_style=False, sort_keys=False)

    return path


def pattern_to_yaml(pattern: Pattern) -> str:
    """Serialize a pattern record to YAML text."""
    return yaml.safe_dump(pattern.to_dict(), default_flow_style=False, sort_keys=False)
