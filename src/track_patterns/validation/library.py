"""
Library Validator - connectivity rules across all loaded patterns.

Pattern P may be followed by pattern Q when P.leads_to and Q.leads_from
share a tag. Validates:
- Every non-terminal pattern has a successor other than itself
- Every non-start pattern has a predecessor other than itself
- Every tag is both provided and received somewhere
- At least one pattern can open a track

Runs once, after every pattern is in the store.
"""

from __future__ import annotations

import logging

from track_patterns.config import DEFAULT_CONFIG, ValidationConfig
from track_patterns.constants import ValidationSeverity
from track_patterns.models.pattern import Pattern
from track_patterns.patterns.index import SuccessorIndex, TagIndex
from track_patterns.patterns.store import PatternStore
from track_patterns.validation.defects import (
    LibraryDefect,
    dead_end,
    no_start_pattern,
    orphan_tag,
    unreachable,
)

logger = logging.getLogger(__name__)


class LibraryValidator:
    """Validates the pattern graph of a whole store."""

    def __init__(self, config: ValidationConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def validate(self, store: PatternStore) -> list[LibraryDefect]:
        """
        Validate a store.

        Args:
            store: Store holding every loaded pattern

        Returns:
            Defects ordered by kind, then by name or tag (empty list = valid)
        """
        patterns = sorted(store.all(), key=lambda p: p.unique_name)
        tags = TagIndex(patterns)
        defects: list[LibraryDefect] = []

        self._validate_successors(patterns, tags, defects)
        self._validate_predecessors(patterns, tags, defects)
        self._validate_tags(tags, defects)
        self._validate_start(patterns, defects)

        logger.debug(f"Library validation: {len(defects)} defect(s), {len(patterns)} pattern(s)")
        return defects

    def _validate_successors(
        self, patterns: list[Pattern], tags: TagIndex, defects: list[LibraryDefect]
    ) -> None:
        for pattern in patterns:
            if not pattern.is_terminal and not tags.successors_of(pattern):
                defects.append(dead_end(pattern.unique_name))

    def _validate_predecessors(
        self, patterns: list[Pattern], tags: TagIndex, defects: list[LibraryDefect]
    ) -> None:
        for pattern in patterns:
            if not pattern.is_start and not tags.predecessors_of(pattern):
                defects.append(unreachable(pattern.unique_name))

    def _validate_tags(self, tags: TagIndex, defects: list[LibraryDefect]) -> None:
        for tag in tags.provider_only_tags():
            defects.append(orphan_tag(tag, "provider"))
        for tag in tags.receiver_only_tags():
            defects.append(orphan_tag(tag, "receiver"))

    def _validate_start(self, patterns: list[Pattern], defects: list[LibraryDefect]) -> None:
        if self.config.require_start and not any(p.is_start for p in patterns):
            defects.append(no_start_pattern(empty=not patterns))


def validate_library(
    store: PatternStore, config: ValidationConfig | None = None
) -> list[LibraryDefect]:
    """
    Convenience function to validate a library.

    Args:
        store: The pattern store
        config: Optional validation settings

    Returns:
        List of library defects (empty if the graph is consistent)

    When no defect is an error the store is sealed, so successor lookups
    work on it straight away. A store that is already sealed stays as is.
    """
    defects = LibraryValidator(config).validate(store)
    if not store.is_sealed and not any(d.severity == ValidationSeverity.ERROR for d in defects):
        store.build_index(defects)
    return defects


def build_successor_index(store: PatternStore) -> SuccessorIndex:
    """Derive the successor index from the patterns in a store."""
    return SuccessorIndex.from_patterns(store.all())
