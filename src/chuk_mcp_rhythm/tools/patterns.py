"""
Pattern tools - MCP tools for pattern discovery and validation.

Tools for listing, describing, validating and copying patterns.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chuk_mcp_rhythm.models.pattern import Pattern
from chuk_mcp_rhythm.patterns import PatternLoadError, PatternRegistry, parse_pattern

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _describe(pattern: Pattern) -> dict[str, Any]:
    """Fields plus derived values of a pattern, JSON ready."""
    ratio = pattern.resolution_ratio
    step = pattern.step
    described: dict[str, Any] = {
        **pattern.to_dict(),
        "resolution_ratio": f"{ratio.numerator}/{ratio.denominator}",
        "time_base": step.base.value,
        "step": str(step.amount),
        "midi_notes": list(pattern.midi_notes),
    }
    if step.is_beat_time:
        described["step_beats"] = float(step.to_beats())
    return described


def register_pattern_tools(mcp: ChukMCPServer, registry: PatternRegistry) -> dict[str, Any]:
    """
    Register pattern tools with the MCP server.

    Args:
        mcp: The MCP server instance
        registry: The pattern registry

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def pattern_list() -> str:
        """
        List available patterns.

        Returns patterns from the library and the project.

        Returns:
            JSON string with list of pattern summaries

        Example:
            pattern_list()
        """
        try:
            patterns = registry.list_patterns()

            return json.dumps(
                {
                    "status": "success",
                    "patterns": [
                        {
                            "name": p.name,
                            "description": p.description,
                            "unit": p.unit,
                            "resolution": p.resolution,
                            "event_count": p.event_count,
                        }
                        for p in patterns
                    ],
                    "count": len(patterns),
                }
            )
        except Exception as e:
            logger.exception("Failed to list patterns")
            return json.dumps({"status": "error", "message": str(e)})

    tools["pattern_list"] = pattern_list

    @mcp.tool  # type: ignore[arg-type]
    async def pattern_describe(name: str) -> str:
        """
        Get detailed information about a pattern.

        Returns the pattern's fields and what they resolve to: the exact
        resolution ratio, the step length and the MIDI notes.

        Args:
            name: Pattern name (e.g., 'triplet-resolution')

        Returns:
            JSON string with pattern details

        Example:
            pattern_describe(name="triplet-resolution")
        """
        try:
            document = registry.get_pattern(name)
            if document is None:
                return json.dumps({"status": "error", "message": f"Pattern not found: {name}"})

            return json.dumps(
                {
                    "status": "success",
                    "pattern": {
                        "name": document.name,
                        "description": document.description,
                        **_describe(document.pattern),
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["pattern_describe"] = pattern_describe

    @mcp.tool  # type: ignore[arg-type]
    async def pattern_validate(source: str) -> str:
        """
        Validate a pattern record.

        Args:
            source: YAML or JSON text with unit, resolution and event

        Returns:
            JSON string with the validated pattern, or the validation errors

        Example:
            pattern_validate(source='{"unit": "1/8", "resolution": "5/4", "event": ["c4"]}')
        """
        try:
            pattern = parse_pattern(source)
            return json.dumps({"status": "success", "valid": True, "pattern": _describe(pattern)})
        except ValidationError as e:
            return json.dumps(
                {
                    "status": "success",
                    "valid": False,
                    "errors": [
                        {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
                        for err in e.errors()
                    ],
                }
            )
        except PatternLoadError as e:
            return json.dumps({"status": "success", "valid": False, "errors": [{"msg": str(e)}]})
        except Exception as e:
            logger.exception("Failed to validate pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["pattern_validate"] = pattern_validate

    @mcp.tool  # type: ignore[arg-type]
    async def pattern_copy_to_project(name: str) -> str:
        """
        Copy a library pattern into the project for customization.

        Args:
            name: Pattern name

        Returns:
            JSON string with the written path

        Example:
            pattern_copy_to_project(name="swing-resolution")
        """
        try:
            path = registry.copy_to_project(name)
            if path is None:
                return json.dumps({"status": "error", "message": f"Pattern not found: {name}"})

            return json.dumps({"status": "success", "name": name, "path": str(path)})
        except Exception as e:
            logger.exception("Failed to copy pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["pattern_copy_to_project"] = pattern_copy_to_project

    return tools
