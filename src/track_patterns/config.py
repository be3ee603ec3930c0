"""
Validation configuration.

Configuration can be built in code or loaded from a YAML file:

    min_arc_length: 2
    max_arc_length: 12
    obstacle_in_arc: error
    require_start: true
    workers: 4
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from track_patterns.constants import (
    DEFAULT_MAX_ARC_LENGTH,
    DEFAULT_MIN_ARC_LENGTH,
    DEFAULT_WORKERS,
    PATTERN_FILE_SUFFIXES,
    ValidationSeverity,
)


class ValidationConfig(BaseModel):
    """Tunable limits for pattern and library validation."""

    min_arc_length: int = Field(DEFAULT_MIN_ARC_LENGTH, ge=1, description="Shortest arc span")
    max_arc_length: int = Field(DEFAULT_MAX_ARC_LENGTH, ge=1, description="Longest arc span")
    obstacle_in_arc: ValidationSeverity = Field(
        ValidationSeverity.ERROR, description="Severity of obstacles inside a coin arc"
    )
    require_start: bool = Field(True, description="Library must flag at least one start pattern")
    workers: int = Field(DEFAULT_WORKERS, ge=1, le=64, description="Loader worker threads")
    file_suffixes: tuple[str, ...] = Field(
        PATTERN_FILE_SUFFIXES, description="Suffixes of pattern asset files"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_arc_range(self) -> ValidationConfig:
        """Arc span bounds must form a non-empty range."""
        if self.min_arc_length > self.max_arc_length:
            raise ValueError(
                f"min_arc_length ({self.min_arc_length}) exceeds "
                f"max_arc_length ({self.max_arc_length})"
            )
        return self


DEFAULT_CONFIG = ValidationConfig()


def load_config(config_path: Path) -> ValidationConfig:
    """Load validation configuration from a YAML file."""
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    if "file_suffixes" in data:
        data["file_suffixes"] = tuple(data["file_suffixes"])

    return ValidationConfig(**data)
