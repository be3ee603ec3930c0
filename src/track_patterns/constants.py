"""
Constants and enums for the track pattern system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum, IntEnum
from typing import Literal


class Lane(IntEnum):
    """
    The three fixed lanes of the track.

    Values are the cell index within a pattern row.
    """

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2

    @property
    def label(self) -> str:
        """Lower-case name used in authoring files and diagnostics."""
        return self.name.lower()


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Blocks gameplay start
    WARNING = "warning"  # Reported, does not block
    INFO = "info"  # Informational only


class ArcHeight(str, Enum):
    """Height at which a coin arc is collected."""

    LOW = "low"
    HIGH = "high"


LANE_COUNT = len(Lane)

# Arc spacing defaults (rows between start and end marker)
DEFAULT_MIN_ARC_LENGTH = 2
DEFAULT_MAX_ARC_LENGTH = 12

# Asset discovery
PATTERN_FILE_SUFFIXES: tuple[str, ...] = (".pattern.yaml", ".pattern.yml")
DEFAULT_WORKERS = 4

# Section keys of a pattern document
METADATA_KEY = "metadata"
DATA_KEYS: tuple[str, ...] = ("pattern_data", "data")
ROWS_KEYS: tuple[str, ...] = ("pattern", "rows")

# Which side of the tag graph a tag was seen on
TagSide = Literal["provider", "receiver"]


class ErrorMessages:
    """Standardized error messages."""

    NO_LIBRARY = "No pattern library loaded. Load one first."
    PATTERN_NOT_FOUND = "Pattern '{unique_name}' not found."
    INDEX_NOT_READY = "Successor index is not available: the library has not validated cleanly."
    LIBRARY_INVALID = "Pattern library failed validation with {count} error(s)."


class SuccessMessages:
    """Standardized success messages."""

    LIBRARY_LOADED = "Loaded {count} pattern(s) from {path}."
    LIBRARY_VALID = "Pattern library is valid."
