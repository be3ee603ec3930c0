"""
Pattern model - one authored track segment.

A pattern is metadata, a pair of connectivity tag sets and an ordered grid
of rows. Row order is the direction of travel. Every model here is frozen:
patterns are built once at load time and only read afterwards.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from track_patterns.constants import Lane
from track_patterns.models.cell import CellContent, to_alias


class PatternRow(BaseModel):
    """
    One row of a pattern: exactly one cell per lane.
    """

    left: CellContent = Field(CellContent.EMPTY, description="Left lane cell")
    middle: CellContent = Field(CellContent.EMPTY, description="Middle lane cell")
    right: CellContent = Field(CellContent.EMPTY, description="Right lane cell")

    model_config = {"frozen": True}

    @classmethod
    def of(cls, left: CellContent, middle: CellContent, right: CellContent) -> PatternRow:
        """Build a row from cells in lane order."""
        return cls(left=left, middle=middle, right=right)

    @property
    def cells(self) -> tuple[CellContent, CellContent, CellContent]:
        """Cells in lane order (left, middle, right)."""
        return (self.left, self.middle, self.right)

    def cell(self, lane: Lane) -> CellContent:
        return self.cells[lane]

    def to_aliases(self) -> list[str]:
        return [to_alias(c) for c in self.cells]


class PatternMetadata(BaseModel):
    """
    Identity and authoring information for a pattern.

    `start` and `terminal` mark patterns that may open or close a track;
    they are exempt from the predecessor and successor checks respectively.
    """

    unique_name: str = Field(..., min_length=1, description="Library-wide identity")
    name: str = Field(..., description="Display name")
    version: str = Field(..., min_length=1, description="Authoring version")
    start: bool = Field(False, description="Pattern may open a track")
    terminal: bool = Field(False, description="Pattern may end a track")

    model_config = {"frozen": True}


class Pattern(BaseModel):
    """
    A complete, parsed pattern.

    Pattern P may precede pattern Q at runtime iff
    ``P.leads_to & Q.leads_from`` is non-empty.
    """

    metadata: PatternMetadata
    leads_from: frozenset[str] = Field(default_factory=frozenset, description="Receiver tags")
    leads_to: frozenset[str] = Field(default_factory=frozenset, description="Provider tags")
    rows: tuple[PatternRow, ...] = Field(default_factory=tuple, description="Rows, in travel order")

    model_config = {"frozen": True}

    @field_validator("leads_from", "leads_to")
    @classmethod
    def validate_tags(cls, v: frozenset[str]) -> frozenset[str]:
        """Tags must be non-empty strings."""
        for tag in v:
            if not tag:
                raise ValueError("Connectivity tags must be non-empty")
        return v

    @property
    def unique_name(self) -> str:
        return self.metadata.unique_name

    @property
    def is_start(self) -> bool:
        return self.metadata.start

    @property
    def is_terminal(self) -> bool:
        return self.metadata.terminal

    def lane_cells(self, lane: Lane) -> list[CellContent]:
        """Cells of one lane, top to bottom."""
        return [row.cell(lane) for row in self.rows]

    def can_precede(self, other: Pattern) -> bool:
        """True if `other` may directly follow this pattern."""
        return not self.leads_to.isdisjoint(other.leads_from)

    def to_yaml_dict(self) -> dict[str, Any]:
        """Convert to the authoring document layout."""
        metadata: dict[str, Any] = {
            "unique_name": self.metadata.unique_name,
            "name": self.metadata.name,
            "version": self.metadata.version,
        }
        if self.metadata.start:
            metadata["start"] = True
        if self.metadata.terminal:
            metadata["terminal"] = True

        return {
            "metadata": metadata,
            "pattern_data": {
                "leads_from": sorted(self.leads_from),
                "leads_to": sorted(self.leads_to),
                "pattern": [row.to_aliases() for row in self.rows],
            },
        }
