"""
Pattern Registry - discovers and loads patterns.

The registry provides access to both the built-in library patterns
and user-owned patterns in a project.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from chuk_mcp_rhythm.constants import PATTERN_FILE_SUFFIXES
from chuk_mcp_rhythm.models.pattern import PatternDocument, PatternMetadata
from chuk_mcp_rhythm.patterns.loader import (
    PatternLoadError,
    dump_pattern_document,
    load_pattern_document,
)

logger = logging.getLogger(__name__)

LIBRARY_PATH = Path(__file__).parent / "library"


class PatternRegistry:
    """
    Discovers and loads patterns from library and project.

    Patterns are identified by file stem. A project pattern with the same
    name as a library pattern takes precedence, and patterns registered
    in code take precedence over both.
    """

    def __init__(
        self,
        library_path: Path | None = LIBRARY_PATH,
        project_path: Path | None = None,
    ):
        """
        Initialize the registry.

        Args:
            library_path: Path to built-in pattern library
            project_path: Path to project patterns (user-owned)
        """
        self.library_path = library_path
        self.project_path = project_path
        self._cache: dict[str, PatternDocument] = {}
        self._metadata_cache: dict[str, PatternMetadata] = {}
        self._registered: dict[str, PatternDocument] = {}

    def list_patterns(self) -> list[PatternMetadata]:
        """
        List available patterns.

        Returns:
            List of pattern metadata, sorted by name
        """
        self._ensure_metadata_loaded()
        return sorted(self._metadata_cache.values(), key=lambda m: m.name)

    def get_pattern(self, name: str) -> PatternDocument | None:
        """
        Get a pattern by name.

        Args:
            name: Pattern name (file stem, e.g. 'triplet-resolution')

        Returns:
            PatternDocument or None if not found
        """
        if name in self._registered:
            return self._registered[name]

        if name in self._cache:
            return self._cache[name]

        path = self._find_pattern_file(name)
        if path is None:
            return None

        document = self._load_pattern_file(path)
        if document:
            self._cache[name] = document

        return document

    def get_pattern_metadata(self, name: str) -> PatternMetadata | None:
        """
        Get metadata for a pattern.

        Args:
            name: Pattern name

        Returns:
            PatternMetadata or None if not found
        """
        self._ensure_metadata_loaded()
        return self._metadata_cache.get(name)

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library pattern to the project so it can be modified.

        Args:
            name: Pattern name

        Returns:
            Path to copied pattern, or None if source not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        document = self.get_pattern(name)
        if not document:
            return None

        target_path = dump_pattern_document(document, self.project_path / f"{name}.yaml")
        logger.info("Copied pattern %s to %s", name, target_path)

        # Clear caches so project pattern takes precedence
        self._cache.pop(name, None)
        self._metadata_cache.clear()

        return target_path

    def register_pattern(self, document: PatternDocument, name: str | None = None) -> str:
        """
        Register a pattern programmatically.

        Useful for testing or dynamic pattern creation.

        Args:
            document: Pattern document to register
            name: Optional name (defaults to the document name)

        Returns:
            The pattern name
        """
        if name is None:
            name = document.name

        self._ensure_metadata_loaded()
        self._registered[name] = document
        self._metadata_cache[name] = PatternMetadata.from_document(document)

        return name

    def _ensure_metadata_loaded(self) -> None:
        """Load metadata for all available patterns."""
        if self._metadata_cache:
            return  # Already loaded

        # Scan library
        if self.library_path and self.library_path.exists():
            self._scan_directory(self.library_path)

        # Scan project (overwrites library patterns)
        if self.project_path and self.project_path.exists():
            self._scan_directory(self.project_path)

        # Registered patterns take precedence over files
        for name, document in self._registered.items():
            self._metadata_cache[name] = PatternMetadata.from_document(document)

    def _pattern_files(self, base_path: Path) -> list[Path]:
        return sorted(
            path
            for path in base_path.iterdir()
            if path.is_file() and path.suffix in PATTERN_FILE_SUFFIXES
        )

    def _scan_directory(self, base_path: Path) -> None:
        """Scan a directory for patterns."""
        for pattern_file in self._pattern_files(base_path):
            document = self._load_pattern_file(pattern_file)
            if document is None:
                continue

            self._metadata_cache[pattern_file.stem] = PatternMetadata.from_document(
                document, path=str(pattern_file)
            )

    def _find_pattern_file(self, name: str) -> Path | None:
        """Find a pattern file, checking the project first."""
        for base_path in (self.project_path, self.library_path):
            if not base_path:
                continue
            for suffix in PATTERN_FILE_SUFFIXES:
                candidate = base_path / f"{name}{suffix}"
                if candidate.exists():
                    return candidate
        return None

    def _load_pattern_file(self, path: Path) -> PatternDocument | None:
        """Load a pattern file, skipping it if it's invalid."""
        try:
            return load_pattern_document(path)
        except (OSError, PatternLoadError, ValidationError) as e:
            logger.warning("Skipping invalid pattern file %s: %s", path, e)
            return None
