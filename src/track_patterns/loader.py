"""
Library loader - the start-of-process load-and-validate pipeline.

Phases:
1. Parse every asset (worker pool), merged back in source order
2. Insert into a fresh PatternStore in source order (first name wins)
3. Validate each stored pattern (worker pool), merged in store order
4. Validate the library graph once everything is in the store
5. If nothing failed, the store builds its successor index and seals

A broken asset is recorded and skipped; it never aborts the load. Any
error in the final report means gameplay must not start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from track_patterns.config import DEFAULT_CONFIG, ValidationConfig
from track_patterns.errors import DuplicateName, LibraryInvalid, ParseError
from track_patterns.models.pattern import Pattern
from track_patterns.patterns.parser import parse
from track_patterns.patterns.store import PatternStore
from track_patterns.validation.defects import AssetDefect, ValidationReport
from track_patterns.validation.library import LibraryValidator
from track_patterns.validation.pattern import PatternValidator

logger = logging.getLogger(__name__)

# (source name, raw document)
PatternSource = tuple[str, str | bytes]


class LibraryLoadResult:
    """The loaded store and everything that went wrong on the way."""

    def __init__(self, store: PatternStore, report: ValidationReport):
        self.store = store
        self.report = report

    @property
    def is_valid(self) -> bool:
        return self.report.is_valid

    def raise_for_errors(self) -> PatternStore:
        """
        Return the sealed store, or raise if the library is unusable.

        Raises:
            LibraryInvalid: If the report holds any error
        """
        if not self.report.is_valid:
            raise LibraryInvalid(self.report)
        return self.store

    def __repr__(self) -> str:
        return f"LibraryLoadResult({self.store!r}, {len(self.report)} diagnostics)"


def discover_pattern_files(
    directory: Path, suffixes: Iterable[str] | None = None
) -> list[Path]:
    """
    Find pattern assets below a directory.

    Files whose name starts with '_' are skipped. The result is sorted so
    that load order, and therefore duplicate detection, is deterministic.
    """
    suffixes = tuple(suffixes or DEFAULT_CONFIG.file_suffixes)
    if not directory.exists():
        return []

    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.name.endswith(suffixes) and not path.name.startswith("_")
    )


def read_pattern_sources(
    directory: Path, suffixes: Iterable[str] | None = None
) -> list[PatternSource]:
    """Read every discovered asset as raw bytes."""
    return [
        (str(path.relative_to(directory)), path.read_bytes())
        for path in discover_pattern_files(directory, suffixes)
    ]


class LibraryLoader:
    """Runs the load-and-validate pipeline over a set of pattern sources."""

    def __init__(self, config: ValidationConfig | None = None):
        self.config = config or DEFAULT_CONFIG
        self.pattern_validator = PatternValidator(self.config)
        self.library_validator = LibraryValidator(self.config)

    def load(self, sources: Iterable[PatternSource]) -> LibraryLoadResult:
        """
        Load and validate a library.

        Args:
            sources: (source name, raw text) pairs, in load order

        Returns:
            LibraryLoadResult with the store (sealed when valid) and report
        """
        sources = list(sources)
        store = PatternStore()
        report = ValidationReport()

        logger.info(f"Loading {len(sources)} pattern asset(s)...")
        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            parsed = list(pool.map(_parse_source, sources))

            for (source, _), outcome in zip(sources, parsed):
                if isinstance(outcome, ParseError):
                    logger.warning(f"Skipping {source}: {outcome}")
                    report.add(None, AssetDefect.from_error(outcome, source))
                    continue
                try:
                    store.insert(outcome)
                except DuplicateName as e:
                    logger.warning(f"Rejecting {source}: {e}")
                    report.add(outcome.unique_name, AssetDefect.from_error(e, source))

            logger.info(f"Validating {len(store)} pattern(s)...")
            patterns = store.all()
            results = pool.map(self.pattern_validator.validate, patterns)
            for pattern, defects in zip(patterns, results):
                report.extend(pattern.unique_name, defects)

        # Barrier: the graph pass needs the complete store
        for defect in self.library_validator.validate(store):
            report.add(defect.pattern, defect)

        if report.is_valid:
            store.build_index(report.diagnostics)
            logger.info(f"Pattern library ready: {len(store)} pattern(s)")
        else:
            logger.error(f"Pattern library has {len(report.errors)} error(s)")
            for diagnostic in report.errors:
                logger.error(f"  {diagnostic}")

        return LibraryLoadResult(store, report)

    def load_directory(self, directory: Path) -> LibraryLoadResult:
        """Discover, read and load every pattern asset below a directory."""
        logger.info(f"Discovering patterns in {directory}")
        return self.load(read_pattern_sources(directory, self.config.file_suffixes))


def _parse_source(source: PatternSource) -> Pattern | ParseError:
    name, raw = source
    try:
        return parse(raw, source=name)
    except ParseError as e:
        return e


def load_library(
    sources: Iterable[PatternSource], config: ValidationConfig | None = None
) -> LibraryLoadResult:
    """Convenience function to load a library from in-memory sources."""
    return LibraryLoader(config).load(sources)


def load_library_from_directory(
    directory: Path, config: ValidationConfig | None = None
) -> LibraryLoadResult:
    """Convenience function to load a library from a directory."""
    return LibraryLoader(config).load_directory(directory)
