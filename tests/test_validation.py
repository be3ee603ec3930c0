"""
Tests for per-pattern validation.

Tests cover:
- Arc pairing per lane
- Arc span limits
- Obstacles inside arcs
- Defect collection across lanes
"""

import pytest

from track_patterns.config import ValidationConfig
from track_patterns.constants import Lane, ValidationSeverity
from track_patterns.models import Pattern, PatternMetadata
from track_patterns.validation import DefectCode, PatternValidator, validate_pattern
from track_patterns.validation.defects import (
    arc_span_out_of_range,
    unclosed_arc,
    unmatched_arc_end,
)


def lane_grid(length: int, lane: Lane, cells: dict[int, str]) -> list[list[str]]:
    """A grid of `length` empty rows with some cells set in one lane."""
    grid = [["", "", ""] for _ in range(length)]
    for row, token in cells.items():
        grid[row][lane] = token
    return grid


def codes(defects) -> list[DefectCode]:
    return [d.code for d in defects]


class TestArcPairing:
    """Tests for arc start/end pairing."""

    @pytest.mark.parametrize("lane", list(Lane))
    def test_closed_low_arc(self, make_pattern, lane: Lane) -> None:
        """A low start closed by a low end is valid."""
        pattern = make_pattern("p", grid=lane_grid(6, lane, {0: "a", 4: "x"}))
        assert validate_pattern(pattern) == []

    def test_closed_high_arc(self, make_pattern) -> None:
        """A high start closed by a high end is valid."""
        pattern = make_pattern("p", grid=lane_grid(6, Lane.MIDDLE, {1: "A", 5: "X"}))
        assert validate_pattern(pattern) == []

    def test_mismatched_end(self, make_pattern) -> None:
        """A low start closed by a high end is UnmatchedArcEnd."""
        pattern = make_pattern("p", grid=lane_grid(6, Lane.LEFT, {0: "a", 4: "X"}))
        defects = validate_pattern(pattern)
        assert unmatched_arc_end(Lane.LEFT, 4) in defects
        # The low arc is still open at the end
        assert unclosed_arc(Lane.LEFT, 0) in defects

    def test_mismatched_end_then_match(self, make_pattern) -> None:
        """A mismatched end leaves the arc open for a later matching end."""
        pattern = make_pattern("p", grid=lane_grid(6, Lane.LEFT, {0: "a", 2: "X", 4: "x"}))
        assert validate_pattern(pattern) == [unmatched_arc_end(Lane.LEFT, 2)]

    def test_end_without_start(self, make_pattern) -> None:
        """An end with no open arc is UnmatchedArcEnd."""
        pattern = make_pattern("p", grid=lane_grid(3, Lane.RIGHT, {1: "x"}))
        assert validate_pattern(pattern) == [unmatched_arc_end(Lane.RIGHT, 1)]

    def test_start_never_closed(self, make_pattern) -> None:
        """An arc left open at the end is UnclosedArc."""
        pattern = make_pattern("p", grid=lane_grid(4, Lane.MIDDLE, {1: "A"}))
        assert validate_pattern(pattern) == [unclosed_arc(Lane.MIDDLE, 1)]

    def test_restart_same_height(self, make_pattern) -> None:
        """A second start before the end reports the first start."""
        pattern = make_pattern("p", grid=lane_grid(6, Lane.LEFT, {0: "a", 1: "a", 4: "x"}))
        assert validate_pattern(pattern) == [unclosed_arc(Lane.LEFT, 0)]

    def test_restart_other_height(self, make_pattern) -> None:
        """A start of the other height also interrupts the open arc."""
        pattern = make_pattern("p", grid=lane_grid(6, Lane.LEFT, {0: "a", 1: "A", 4: "X"}))
        assert validate_pattern(pattern) == [unclosed_arc(Lane.LEFT, 0)]

    def test_lanes_independent(self, make_pattern) -> None:
        """An arc in one lane is not closed by an end in another."""
        grid = [["a", "", ""], ["", "", ""], ["", "x", ""]]
        defects = validate_pattern(make_pattern("p", grid=grid))
        assert defects == [unclosed_arc(Lane.LEFT, 0), unmatched_arc_end(Lane.MIDDLE, 2)]

    def test_sequential_arcs(self, make_pattern) -> None:
        """Back-to-back arcs in one lane are fine."""
        grid = lane_grid(10, Lane.RIGHT, {0: "a", 3: "x", 4: "A", 8: "X"})
        assert validate_pattern(make_pattern("p", grid=grid)) == []


class TestArcSpan:
    """Tests for arc span limits."""

    def test_span_too_long(self, make_pattern) -> None:
        """Span 20 is above the default maximum of 12."""
        pattern = make_pattern("p", grid=lane_grid(21, Lane.LEFT, {0: "a", 20: "x"}))
        defects = validate_pattern(pattern)
        assert codes(defects) == [DefectCode.ARC_SPAN_OUT_OF_RANGE]
        assert defects[0].start_row == 0
        assert defects[0].end_row == 20
        assert defects[0].lane == Lane.LEFT

    def test_span_too_short(self, make_pattern) -> None:
        """Span 1 is below the default minimum of 2."""
        pattern = make_pattern("p", grid=lane_grid(3, Lane.LEFT, {0: "a", 1: "x"}))
        assert validate_pattern(pattern) == [arc_span_out_of_range(Lane.LEFT, 0, 1, 2, 12)]

    @pytest.mark.parametrize("span", [2, 12])
    def test_span_bounds_inclusive(self, make_pattern, span: int) -> None:
        """Both bounds are allowed."""
        pattern = make_pattern("p", grid=lane_grid(span + 1, Lane.MIDDLE, {0: "A", span: "X"}))
        assert validate_pattern(pattern) == []

    def test_custom_limits(self, make_pattern) -> None:
        """Limits come from the config."""
        config = ValidationConfig(min_arc_length=1, max_arc_length=3)
        short = make_pattern("short", grid=lane_grid(2, Lane.LEFT, {0: "a", 1: "x"}))
        long = make_pattern("long", grid=lane_grid(5, Lane.LEFT, {0: "a", 4: "x"}))
        assert validate_pattern(short, config) == []
        assert codes(validate_pattern(long, config)) == [DefectCode.ARC_SPAN_OUT_OF_RANGE]


class TestObstacles:
    """Tests for obstacles inside arcs."""

    @pytest.mark.parametrize("token", ["b", "r", "p", "P"])
    def test_obstacle_inside_arc(self, make_pattern, token: str) -> None:
        """Barriers, ramps and powerups inside an arc are reported."""
        pattern = make_pattern("p", grid=lane_grid(5, Lane.LEFT, {0: "a", 2: token, 4: "x"}))
        defects = validate_pattern(pattern)
        assert codes(defects) == [DefectCode.OBSTACLE_IN_ARC]
        assert defects[0].row == 2

    def test_obstacle_in_other_lane(self, make_pattern) -> None:
        """Obstacles in another lane do not matter."""
        grid = lane_grid(5, Lane.LEFT, {0: "a", 4: "x"})
        grid[2][Lane.RIGHT] = "b"
        assert validate_pattern(make_pattern("p", grid=grid)) == []

    def test_obstacle_outside_arc(self, make_pattern) -> None:
        """Obstacles before or after an arc are fine."""
        grid = lane_grid(7, Lane.LEFT, {0: "r", 1: "a", 4: "x", 5: "b"})
        assert validate_pattern(make_pattern("p", grid=grid)) == []

    def test_coins_inside_arc(self, make_pattern) -> None:
        """Coins inside an arc are fine."""
        grid = lane_grid(5, Lane.LEFT, {0: "a", 1: "c", 2: "C", 3: "c", 4: "x"})
        assert validate_pattern(make_pattern("p", grid=grid)) == []

    def test_obstacle_severity_configurable(self, make_pattern) -> None:
        """Obstacles can be downgraded to warnings."""
        config = ValidationConfig(obstacle_in_arc=ValidationSeverity.WARNING)
        pattern = make_pattern("p", grid=lane_grid(5, Lane.LEFT, {0: "a", 2: "b", 4: "x"}))
        defects = validate_pattern(pattern, config)
        assert defects[0].severity == ValidationSeverity.WARNING


class TestPatternValidator:
    """Tests for overall validator behaviour."""

    def test_empty_pattern(self) -> None:
        """A pattern built without rows is EmptyPattern."""
        pattern = Pattern(metadata=PatternMetadata(unique_name="p", name="p", version="1"))
        assert codes(validate_pattern(pattern)) == [DefectCode.EMPTY_PATTERN]

    def test_collects_all_defects(self, make_pattern) -> None:
        """Every defect is reported, lane by lane."""
        grid = [
            ["x", "A", "a"],
            ["", "", "b"],
            ["", "", "x"],
            ["", "", ""],
        ]
        defects = validate_pattern(make_pattern("p", grid=grid))
        assert codes(defects) == [
            DefectCode.UNMATCHED_ARC_END,
            DefectCode.UNCLOSED_ARC,
            DefectCode.OBSTACLE_IN_ARC,
        ]
        assert [d.lane for d in defects] == [Lane.LEFT, Lane.MIDDLE, Lane.RIGHT]

    def test_pure(self, make_pattern) -> None:
        """Validating twice gives the same result."""
        pattern = make_pattern("p", grid=lane_grid(21, Lane.LEFT, {0: "a", 20: "X"}))
        validator = PatternValidator()
        assert validator.validate(pattern) == validator.validate(pattern)

    def test_defect_str(self) -> None:
        """Defects render with severity, code and location."""
        defect = unmatched_arc_end(Lane.RIGHT, 3)
        assert str(defect).startswith("[ERROR] UNMATCHED_ARC_END:")
        assert str(defect).endswith("at right/3")
