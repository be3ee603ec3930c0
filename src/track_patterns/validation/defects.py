"""
Defects and diagnostics.

Every validation pass returns plain lists of defects. The loader gathers
them into a ValidationReport together with the name of the pattern they
belong to, so authors get the complete list in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from track_patterns.constants import Lane, TagSide, ValidationSeverity
from track_patterns.errors import TrackPatternError


class DefectCode(str, Enum):
    """Stable identifiers for every kind of defect."""

    # Asset level
    PARSE_ERROR = "PARSE_ERROR"
    DUPLICATE_NAME = "DUPLICATE_NAME"

    # Pattern level
    EMPTY_PATTERN = "EMPTY_PATTERN"
    UNCLOSED_ARC = "UNCLOSED_ARC"
    UNMATCHED_ARC_END = "UNMATCHED_ARC_END"
    ARC_SPAN_OUT_OF_RANGE = "ARC_SPAN_OUT_OF_RANGE"
    OBSTACLE_IN_ARC = "OBSTACLE_IN_ARC"

    # Library level
    DEAD_END = "DEAD_END"
    UNREACHABLE = "UNREACHABLE"
    ORPHAN_TAG = "ORPHAN_TAG"
    NO_START_PATTERN = "NO_START_PATTERN"


@dataclass(frozen=True)
class PatternDefect:
    """A rule violation inside a single pattern."""

    code: DefectCode
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    lane: Lane | None = None
    row: int | None = None
    start_row: int | None = None
    end_row: int | None = None

    @property
    def location(self) -> str | None:
        if self.lane is None:
            return None
        if self.row is not None:
            return f"{self.lane.label}/{self.row}"
        if self.start_row is not None:
            return f"{self.lane.label}/{self.start_row}"
        return self.lane.label

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" at {self.location}" if self.location else ""
        return f"{prefix} {self.code.value}: {self.message}{location}"


@dataclass(frozen=True)
class LibraryDefect:
    """A connectivity violation across the whole library."""

    code: DefectCode
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    pattern: str | None = None
    tag: str | None = None
    side: TagSide | None = None

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        return f"{prefix} {self.code.value}: {self.message}"


@dataclass(frozen=True)
class AssetDefect:
    """A pattern asset that never made it into the store."""

    code: DefectCode
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    source: str | None = None
    error_code: str | None = None

    @classmethod
    def from_error(cls, error: TrackPatternError, source: str | None = None) -> AssetDefect:
        if error.code == DefectCode.DUPLICATE_NAME.value:
            code = DefectCode.DUPLICATE_NAME
        else:
            code = DefectCode.PARSE_ERROR
        return cls(code=code, message=str(error), source=source, error_code=error.code)

    def __str__(self) -> str:
        prefix = f"[{self.severity.value.upper()}]"
        location = f" in {self.source}" if self.source else ""
        return f"{prefix} {self.code.value}: {self.message}{location}"


Defect = PatternDefect | LibraryDefect | AssetDefect


# ---------------------------------------------------------------------------
# Pattern defect constructors
# ---------------------------------------------------------------------------


def empty_pattern() -> PatternDefect:
    return PatternDefect(DefectCode.EMPTY_PATTERN, "Pattern has no rows")


def unclosed_arc(lane: Lane, start_row: int) -> PatternDefect:
    return PatternDefect(
        DefectCode.UNCLOSED_ARC,
        f"Arc started at row {start_row} in {lane.label} lane is never closed",
        lane=lane,
        start_row=start_row,
    )


def unmatched_arc_end(lane: Lane, row: int) -> PatternDefect:
    return PatternDefect(
        DefectCode.UNMATCHED_ARC_END,
        f"Arc end at row {row} in {lane.label} lane has no matching start",
        lane=lane,
        row=row,
    )


def arc_span_out_of_range(
    lane: Lane, start_row: int, end_row: int, min_length: int, max_length: int
) -> PatternDefect:
    return PatternDefect(
        DefectCode.ARC_SPAN_OUT_OF_RANGE,
        f"Arc in {lane.label} lane spans {end_row - start_row} rows "
        f"({start_row}-{end_row}), expected {min_length}-{max_length}",
        lane=lane,
        start_row=start_row,
        end_row=end_row,
    )


def obstacle_in_arc(
    lane: Lane, row: int, cell: str, severity: ValidationSeverity = ValidationSeverity.ERROR
) -> PatternDefect:
    return PatternDefect(
        DefectCode.OBSTACLE_IN_ARC,
        f"{cell} at row {row} sits inside a coin arc in {lane.label} lane",
        severity=severity,
        lane=lane,
        row=row,
    )


# ---------------------------------------------------------------------------
# Library defect constructors
# ---------------------------------------------------------------------------


def dead_end(unique_name: str) -> LibraryDefect:
    return LibraryDefect(
        DefectCode.DEAD_END,
        f"Pattern '{unique_name}' has no successor and is not terminal",
        pattern=unique_name,
    )


def unreachable(unique_name: str) -> LibraryDefect:
    return LibraryDefect(
        DefectCode.UNREACHABLE,
        f"Pattern '{unique_name}' has no predecessor and is not a start pattern",
        pattern=unique_name,
    )


def orphan_tag(tag: str, side: TagSide) -> LibraryDefect:
    missing = "leads_from" if side == "provider" else "leads_to"
    return LibraryDefect(
        DefectCode.ORPHAN_TAG,
        f"Tag '{tag}' never appears in any {missing}",
        tag=tag,
        side=side,
    )


def no_start_pattern(empty: bool = False) -> LibraryDefect:
    if empty:
        return LibraryDefect(DefectCode.NO_START_PATTERN, "Library holds no patterns")
    return LibraryDefect(DefectCode.NO_START_PATTERN, "No pattern is flagged as a track start")


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Diagnostic:
    """A defect together with the pattern it belongs to, if any."""

    pattern_name: str | None
    defect: Defect

    @property
    def severity(self) -> ValidationSeverity:
        return self.defect.severity

    @property
    def code(self) -> DefectCode:
        return self.defect.code

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern_name,
            "code": self.defect.code.value,
            "severity": self.defect.severity.value,
            "message": self.defect.message,
        }

    def __str__(self) -> str:
        if self.pattern_name is None:
            return str(self.defect)
        return f"{self.pattern_name}: {self.defect}"


class ValidationReport:
    """Ordered diagnostics from loading and validating a library."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def add(self, pattern_name: str | None, defect: Defect) -> None:
        """Append one defect."""
        self.diagnostics.append(Diagnostic(pattern_name, defect))

    def extend(
        self, pattern_name: str | None, defects: list[PatternDefect] | list[LibraryDefect]
    ) -> None:
        """Append several defects for the same pattern."""
        for defect in defects:
            self.add(pattern_name, defect)

    @property
    def is_valid(self) -> bool:
        """Return True if no errors (warnings/info are OK)."""
        return not any(d.severity == ValidationSeverity.ERROR for d in self.diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == ValidationSeverity.WARNING]

    def by_code(self, code: DefectCode) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __bool__(self) -> bool:
        """Boolean conversion returns is_valid."""
        return self.is_valid

    def __str__(self) -> str:
        if not self.diagnostics:
            return "Validation passed: no issues found"
        return "\n".join(str(d) for d in self.diagnostics)
