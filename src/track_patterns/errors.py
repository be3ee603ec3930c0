"""
Exceptions raised by the pattern engine.

Parse errors are local to one asset: the loader records them and keeps
going. Library-level failures surface as LibraryInvalid and abort startup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from track_patterns.constants import ErrorMessages, Lane

if TYPE_CHECKING:
    from track_patterns.validation.defects import ValidationReport


class TrackPatternError(Exception):
    """Base class for all pattern engine errors."""

    code = "TRACK_PATTERN_ERROR"


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class ParseError(TrackPatternError, ValueError):
    """A single pattern asset could not be turned into a Pattern."""

    code = "PARSE_ERROR"


class InvalidDocument(ParseError):
    """The raw text is not a mapping-shaped pattern document."""

    code = "INVALID_DOCUMENT"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid pattern document: {reason}")


class MissingField(ParseError):
    """A required field is absent."""

    code = "MISSING_FIELD"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class EmptyField(ParseError):
    """A required field is present but empty."""

    code = "EMPTY_FIELD"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field must not be empty: {field}")


class MalformedRow(ParseError):
    """A row does not supply exactly one cell per lane."""

    code = "MALFORMED_ROW"

    def __init__(self, row_index: int, found_count: int):
        self.row_index = row_index
        self.found_count = found_count
        super().__init__(f"Row {row_index} has {found_count} cell(s), expected {len(Lane)}")


class UnknownToken(ParseError):
    """A cell token has no entry in the alias table."""

    code = "UNKNOWN_TOKEN"

    def __init__(self, token: object, row_index: int | None = None, lane: Lane | None = None):
        self.token = token
        self.row_index = row_index
        self.lane = lane
        where = ""
        if row_index is not None:
            where = f" at row {row_index}"
            if lane is not None:
                where += f", lane {lane.label}"
        super().__init__(f"Unknown cell token {token!r}{where}")

    def at(self, row_index: int, lane: Lane) -> UnknownToken:
        """Return a copy of this error located at a row and lane."""
        return UnknownToken(self.token, row_index, lane)


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------


class DuplicateName(TrackPatternError):
    """A pattern with the same unique_name is already in the store."""

    code = "DUPLICATE_NAME"

    def __init__(self, unique_name: str):
        self.unique_name = unique_name
        super().__init__(f"Duplicate pattern unique_name: {unique_name}")


class StoreSealed(TrackPatternError):
    """The store was indexed and no longer accepts patterns."""

    code = "STORE_SEALED"

    def __init__(self) -> None:
        super().__init__("Pattern store is sealed; no further inserts are allowed")


class IndexNotReady(TrackPatternError):
    """Successor lookups were requested before a clean validation."""

    code = "INDEX_NOT_READY"

    def __init__(self) -> None:
        super().__init__(ErrorMessages.INDEX_NOT_READY)


class PatternNotFound(TrackPatternError, KeyError):
    """No pattern with the requested unique_name."""

    code = "PATTERN_NOT_FOUND"

    def __init__(self, unique_name: str):
        self.unique_name = unique_name
        super().__init__(ErrorMessages.PATTERN_NOT_FOUND.format(unique_name=unique_name))

    def __str__(self) -> str:
        return ErrorMessages.PATTERN_NOT_FOUND.format(unique_name=self.unique_name)


class LibraryInvalid(TrackPatternError):
    """Loading finished with errors; gameplay must not start."""

    code = "LIBRARY_INVALID"

    def __init__(self, report: ValidationReport):
        self.report = report
        super().__init__(
            ErrorMessages.LIBRARY_INVALID.format(count=len(report.errors)) + "\n" + str(report)
        )
