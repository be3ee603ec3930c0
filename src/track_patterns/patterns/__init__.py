"""
Pattern system - parsing and storage.

Patterns are authored as YAML documents, parsed into immutable models and
kept in a PatternStore keyed by unique_name.
"""

from track_patterns.patterns.index import SuccessorIndex, TagIndex
from track_patterns.patterns.parser import parse, parse_document
from track_patterns.patterns.store import PatternStore

__all__ = [
    "PatternStore",
    "SuccessorIndex",
    "TagIndex",
    "parse",
    "parse_document",
]
