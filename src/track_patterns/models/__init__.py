"""
Pydantic models for the pattern system.

This module provides:
- CellContent: What occupies one lane-cell
- PatternRow: One row of three lane-cells
- PatternMetadata: Identity and authoring info
- Pattern: A complete track segment
"""

from track_patterns.models.cell import (
    CELL_ALIASES,
    CellContent,
    parse_cell,
    to_alias,
)
from track_patterns.models.pattern import Pattern, PatternMetadata, PatternRow

__all__ = [
    "CELL_ALIASES",
    "CellContent",
    "Pattern",
    "PatternMetadata",
    "PatternRow",
    "parse_cell",
    "to_alias",
]
