"""
Track Patterns - pattern definition and validation engine for an endless runner.

Track segments ("patterns") are authored as YAML grids of lane cells plus
connectivity tags. This package parses them, checks each pattern and the
library graph, and exposes the validated library as a successor index for
the runtime track assembler.
"""

from track_patterns.config import DEFAULT_CONFIG, ValidationConfig, load_config
from track_patterns.constants import ArcHeight, Lane, ValidationSeverity
from track_patterns.errors import (
    DuplicateName,
    EmptyField,
    IndexNotReady,
    InvalidDocument,
    LibraryInvalid,
    MalformedRow,
    MissingField,
    ParseError,
    PatternNotFound,
    StoreSealed,
    TrackPatternError,
    UnknownToken,
)
from track_patterns.loader import (
    LibraryLoader,
    LibraryLoadResult,
    load_library,
    load_library_from_directory,
)
from track_patterns.models import (
    CellContent,
    Pattern,
    PatternMetadata,
    PatternRow,
    parse_cell,
    to_alias,
)
from track_patterns.patterns import PatternStore, parse
from track_patterns.validation import (
    DefectCode,
    SuccessorIndex,
    ValidationReport,
    build_successor_index,
    validate_library,
    validate_pattern,
)

__version__ = "0.1.0"

__all__ = [
    "ArcHeight",
    "CellContent",
    "DEFAULT_CONFIG",
    "DefectCode",
    "DuplicateName",
    "EmptyField",
    "IndexNotReady",
    "InvalidDocument",
    "Lane",
    "LibraryInvalid",
    "LibraryLoadResult",
    "LibraryLoader",
    "MalformedRow",
    "MissingField",
    "ParseError",
    "Pattern",
    "PatternMetadata",
    "PatternNotFound",
    "PatternRow",
    "PatternStore",
    "StoreSealed",
    "SuccessorIndex",
    "TrackPatternError",
    "UnknownToken",
    "ValidationConfig",
    "ValidationReport",
    "ValidationSeverity",
    "build_successor_index",
    "load_config",
    "load_library",
    "load_library_from_directory",
    "parse",
    "parse_cell",
    "to_alias",
    "validate_library",
    "validate_pattern",
]
