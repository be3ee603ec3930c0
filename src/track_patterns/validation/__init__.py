"""
Validation passes.

This module provides:
- PatternValidator: Arc pairing, arc spacing and row checks per pattern
- LibraryValidator: Dead ends, unreachable patterns and orphan tags
- SuccessorIndex: Read-only adjacency view of a validated library
- ValidationReport: Ordered diagnostics for authors
"""

from track_patterns.validation.defects import (
    AssetDefect,
    DefectCode,
    Diagnostic,
    LibraryDefect,
    PatternDefect,
    ValidationReport,
)
from track_patterns.validation.library import (
    LibraryValidator,
    SuccessorIndex,
    TagIndex,
    build_successor_index,
    validate_library,
)
from track_patterns.validation.pattern import PatternValidator, validate_pattern

__all__ = [
    "AssetDefect",
    "DefectCode",
    "Diagnostic",
    "LibraryDefect",
    "LibraryValidator",
    "PatternDefect",
    "PatternValidator",
    "SuccessorIndex",
    "TagIndex",
    "ValidationReport",
    "build_successor_index",
    "validate_library",
    "validate_pattern",
]
