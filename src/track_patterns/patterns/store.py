"""
Pattern Store - the name-indexed collection of loaded patterns.

The store owns its patterns. Insertion is the only mutation and refuses
duplicates instead of overwriting them. After a clean validation the store
is sealed with a successor index and becomes read-only, safe to share
between readers without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from track_patterns.constants import ValidationSeverity
from track_patterns.errors import DuplicateName, IndexNotReady, PatternNotFound, StoreSealed
from track_patterns.models.pattern import Pattern
from track_patterns.patterns.index import SuccessorIndex

if TYPE_CHECKING:
    from track_patterns.validation.defects import Defect, Diagnostic

logger = logging.getLogger(__name__)


class PatternStore:
    """
    Deduplicated, name-indexed pattern collection.

    Each store is an independent value; several libraries can coexist.
    """

    def __init__(self) -> None:
        self._patterns: dict[str, Pattern] = {}
        self._index: SuccessorIndex | None = None

    def insert(self, pattern: Pattern) -> None:
        """
        Add a pattern.

        Args:
            pattern: Pattern to add

        Raises:
            DuplicateName: If a pattern with the same unique_name exists
            StoreSealed: If the store was already indexed
        """
        if self._index is not None:
            raise StoreSealed()
        if pattern.unique_name in self._patterns:
            raise DuplicateName(pattern.unique_name)
        self._patterns[pattern.unique_name] = pattern

    def get(self, unique_name: str) -> Pattern | None:
        return self._patterns.get(unique_name)

    def all(self) -> list[Pattern]:
        """All patterns in insertion order."""
        return list(self._patterns.values())

    def names(self) -> list[str]:
        return list(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, unique_name: object) -> bool:
        return unique_name in self._patterns

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns.values())

    # -- successor index ----------------------------------------------------

    @property
    def is_sealed(self) -> bool:
        return self._index is not None

    def build_index(self, defects: Iterable[Defect | Diagnostic]) -> SuccessorIndex:
        """
        Build the successor index and seal the store.

        Args:
            defects: Defects or diagnostics from validating this store

        Returns:
            The cached index (built once; later calls return it again)

        Raises:
            IndexNotReady: If any defect has error severity
        """
        if any(d.severity == ValidationSeverity.ERROR for d in defects):
            raise IndexNotReady()
        if self._index is None:
            self._seal(SuccessorIndex.from_patterns(self._patterns.values()))
            logger.debug(f"Sealed pattern store with {len(self._patterns)} pattern(s)")
        return self.index

    def _seal(self, index: SuccessorIndex) -> None:
        self._index = index

    @property
    def index(self) -> SuccessorIndex:
        if self._index is None:
            raise IndexNotReady()
        return self._index

    def successors(self, unique_name: str) -> frozenset[str]:
        """
        Names of patterns that may directly follow a pattern.

        Raises:
            IndexNotReady: If the library has not validated cleanly
            PatternNotFound: If the name is unknown
        """
        if unique_name not in self._patterns:
            raise PatternNotFound(unique_name)
        return self.index.successors(unique_name)

    def predecessors(self, unique_name: str) -> frozenset[str]:
        """Names of patterns that may directly precede a pattern."""
        if unique_name not in self._patterns:
            raise PatternNotFound(unique_name)
        return self.index.predecessors(unique_name)

    def start_patterns(self) -> list[Pattern]:
        return [p for p in self._patterns.values() if p.is_start]

    def __repr__(self) -> str:
        state = "sealed" if self.is_sealed else "open"
        return f"PatternStore({len(self._patterns)} patterns, {state})"
