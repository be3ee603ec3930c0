"""
Library Manager - holds the currently loaded pattern library.

Used by the authoring tools. Loading runs the blocking pipeline in a worker
thread so the server's event loop stays responsive.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from track_patterns.config import DEFAULT_CONFIG, ValidationConfig
from track_patterns.constants import ErrorMessages
from track_patterns.loader import LibraryLoader, LibraryLoadResult
from track_patterns.models.pattern import Pattern

logger = logging.getLogger(__name__)


class LibraryManager:
    """
    Loads pattern libraries and keeps the latest result.

    Each load builds a fresh store; a failed load replaces the previous
    result so authors always see the state of the files on disk.
    """

    def __init__(
        self,
        patterns_dir: Path | None = None,
        config: ValidationConfig | None = None,
    ):
        """
        Initialize the manager.

        Args:
            patterns_dir: Default directory to load patterns from
            config: Validation settings
        """
        self.patterns_dir = patterns_dir
        self.config = config or DEFAULT_CONFIG
        self._result: LibraryLoadResult | None = None
        self._source: Path | None = None

    @property
    def result(self) -> LibraryLoadResult | None:
        return self._result

    @property
    def source(self) -> Path | None:
        return self._source

    async def load(self, directory: Path | None = None) -> LibraryLoadResult:
        """
        Load and validate a library.

        Args:
            directory: Directory to load (defaults to patterns_dir)

        Returns:
            The load result
        """
        directory = directory or self.patterns_dir
        if directory is None:
            raise ValueError("No patterns directory configured")

        loader = LibraryLoader(self.config)
        result = await asyncio.to_thread(loader.load_directory, directory)

        self._result = result
        self._source = directory
        return result

    def require(self) -> LibraryLoadResult:
        """Return the current result or raise if nothing is loaded."""
        if self._result is None:
            raise ValueError(ErrorMessages.NO_LIBRARY)
        return self._result

    def get_pattern(self, unique_name: str) -> Pattern | None:
        if self._result is None:
            return None
        return self._result.store.get(unique_name)

    def __repr__(self) -> str:
        loaded = self._result is not None
        return f"LibraryManager({self._source or self.patterns_dir}, loaded={loaded})"
