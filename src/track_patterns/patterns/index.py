"""
Successor index - the tag graph of a pattern library.

Pattern P may be followed by pattern Q when P.leads_to and Q.leads_from
share a tag. Self-transitions are never listed.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping

from track_patterns.errors import PatternNotFound
from track_patterns.models.pattern import Pattern


class TagIndex:
    """Which patterns provide (leads_to) and receive (leads_from) each tag."""

    def __init__(self, patterns: Iterable[Pattern]):
        self.providers: dict[str, set[str]] = defaultdict(set)
        self.receivers: dict[str, set[str]] = defaultdict(set)

        for pattern in patterns:
            for tag in pattern.leads_to:
                self.providers[tag].add(pattern.unique_name)
            for tag in pattern.leads_from:
                self.receivers[tag].add(pattern.unique_name)

    def successors_of(self, pattern: Pattern) -> frozenset[str]:
        names: set[str] = set()
        for tag in pattern.leads_to:
            names |= self.receivers.get(tag, set())
        names.discard(pattern.unique_name)
        return frozenset(names)

    def predecessors_of(self, pattern: Pattern) -> frozenset[str]:
        names: set[str] = set()
        for tag in pattern.leads_from:
            names |= self.providers.get(tag, set())
        names.discard(pattern.unique_name)
        return frozenset(names)

    def provider_only_tags(self) -> list[str]:
        return sorted(set(self.providers) - set(self.receivers))

    def receiver_only_tags(self) -> list[str]:
        return sorted(set(self.receivers) - set(self.providers))


class SuccessorIndex:
    """
    Read-only adjacency view of a validated library.

    Self-transitions are never listed, matching the validation rules.
    """

    def __init__(
        self,
        successors: Mapping[str, frozenset[str]],
        predecessors: Mapping[str, frozenset[str]],
    ):
        self._successors = dict(successors)
        self._predecessors = dict(predecessors)

    @classmethod
    def from_patterns(cls, patterns: Iterable[Pattern]) -> SuccessorIndex:
        patterns = list(patterns)
        tags = TagIndex(patterns)
        return cls(
            {p.unique_name: tags.successors_of(p) for p in patterns},
            {p.unique_name: tags.predecessors_of(p) for p in patterns},
        )

    def successors(self, unique_name: str) -> frozenset[str]:
        try:
            return self._successors[unique_name]
        except KeyError:
            raise PatternNotFound(unique_name) from None

    def predecessors(self, unique_name: str) -> frozenset[str]:
        try:
            return self._predecessors[unique_name]
        except KeyError:
            raise PatternNotFound(unique_name) from None

    def as_dict(self) -> dict[str, list[str]]:
        """Successor lists with sorted names, for inspection and JSON output."""
        return {name: sorted(names) for name, names in sorted(self._successors.items())}

    def __contains__(self, unique_name: object) -> bool:
        return unique_name in self._successors

    def __len__(self) -> int:
        return len(self._successors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SuccessorIndex):
            return NotImplemented
        return (
            self._successors == other._successors and self._predecessors == other._predecessors
        )
