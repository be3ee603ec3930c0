"""
Pattern Validator - per-pattern rules.

Validates:
- The pattern has at least one row
- Coin arcs are paired per lane (start, then matching end of the same height)
- Closed arcs span an acceptable number of rows
- Nothing blocks the lane inside a closed arc

Each pattern is checked on its own, so this can run in parallel over a
library. Defects are collected, not short-circuited.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from track_patterns.config import DEFAULT_CONFIG, ValidationConfig
from track_patterns.constants import ArcHeight, Lane
from track_patterns.models.cell import CellContent
from track_patterns.models.pattern import Pattern
from track_patterns.validation.defects import (
    PatternDefect,
    arc_span_out_of_range,
    empty_pattern,
    obstacle_in_arc,
    unclosed_arc,
    unmatched_arc_end,
)


@dataclass
class _OpenArc:
    height: ArcHeight
    start_row: int
    obstacles: list[tuple[int, CellContent]] = field(default_factory=list)


class PatternValidator:
    """Validates a single pattern against arc and shape rules."""

    def __init__(self, config: ValidationConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def validate(self, pattern: Pattern) -> list[PatternDefect]:
        """
        Validate a pattern.

        Args:
            pattern: The pattern to validate

        Returns:
            Defects in lane order, then scan order (empty list = valid)
        """
        if not pattern.rows:
            return [empty_pattern()]

        defects: list[PatternDefect] = []
        for lane in Lane:
            self._validate_lane(lane, pattern.lane_cells(lane), defects)
        return defects

    def _validate_lane(
        self, lane: Lane, cells: list[CellContent], defects: list[PatternDefect]
    ) -> None:
        """Scan one lane top to bottom tracking the open arc."""
        open_arc: _OpenArc | None = None

        for row, cell in enumerate(cells):
            if cell.is_arc_start:
                # A new start before the previous arc closed
                if open_arc is not None:
                    defects.append(unclosed_arc(lane, open_arc.start_row))
                open_arc = _OpenArc(cell.arc_height, row)

            elif cell.is_arc_end:
                if open_arc is None or open_arc.height != cell.arc_height:
                    defects.append(unmatched_arc_end(lane, row))
                    continue
                self._close_arc(lane, open_arc, row, defects)
                open_arc = None

            elif open_arc is not None and cell.blocks_arc:
                open_arc.obstacles.append((row, cell))

        if open_arc is not None:
            defects.append(unclosed_arc(lane, open_arc.start_row))

    def _close_arc(
        self, lane: Lane, arc: _OpenArc, end_row: int, defects: list[PatternDefect]
    ) -> None:
        span = end_row - arc.start_row
        if not self.config.min_arc_length <= span <= self.config.max_arc_length:
            defects.append(
                arc_span_out_of_range(
                    lane,
                    arc.start_row,
                    end_row,
                    self.config.min_arc_length,
                    self.config.max_arc_length,
                )
            )

        for row, cell in arc.obstacles:
            defects.append(obstacle_in_arc(lane, row, cell.value, self.config.obstacle_in_arc))


def validate_pattern(
    pattern: Pattern, config: ValidationConfig | None = None
) -> list[PatternDefect]:
    """
    Convenience function to validate a pattern.

    Args:
        pattern: The pattern to validate
        config: Optional validation limits (defaults apply otherwise)

    Returns:
        List of defects (empty if the pattern is valid)
    """
    return PatternValidator(config).validate(pattern)
