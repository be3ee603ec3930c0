"""
Pytest configuration and shared fixtures.
"""

import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest
import yaml

from track_patterns.models import Pattern, PatternMetadata, PatternRow, parse_cell

LIBRARY_PATH = Path(__file__).parent.parent / "src" / "track_patterns" / "patterns" / "library"


def rows_from_aliases(grid: Iterable[Iterable[str]]) -> tuple[PatternRow, ...]:
    """Build rows from alias tokens, e.g. [["a", "", "b"], ...]."""
    return tuple(PatternRow.of(*(parse_cell(token) for token in row)) for row in grid)


def build_pattern(
    name: str,
    leads_from: Iterable[str] = (),
    leads_to: Iterable[str] = (),
    grid: Iterable[Iterable[str]] | None = None,
    start: bool = False,
    terminal: bool = False,
) -> Pattern:
    """Build a pattern directly, bypassing the parser."""
    return Pattern(
        metadata=PatternMetadata(
            unique_name=name,
            name=name.replace("-", " ").title(),
            version="1",
            start=start,
            terminal=terminal,
        ),
        leads_from=frozenset(leads_from),
        leads_to=frozenset(leads_to),
        rows=rows_from_aliases(grid if grid is not None else [["", "c", ""]]),
    )


def pattern_document(
    name: str,
    leads_from: list[str] | None = None,
    leads_to: list[str] | None = None,
    grid: list[Any] | None = None,
    **metadata: Any,
) -> dict[str, Any]:
    """Build an authoring document as a plain dict."""
    return {
        "metadata": {"unique_name": name, "name": name, "version": "1", **metadata},
        "pattern_data": {
            "leads_from": leads_from if leads_from is not None else [],
            "leads_to": leads_to if leads_to is not None else [],
            "pattern": grid if grid is not None else [["", "c", ""]],
        },
    }


def pattern_yaml(name: str, **kwargs: Any) -> str:
    """Build an authoring document as YAML text."""
    return yaml.safe_dump(pattern_document(name, **kwargs), sort_keys=False)


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in pattern library."""
    return LIBRARY_PATH


@pytest.fixture
def make_pattern() -> Callable[..., Pattern]:
    """Factory for in-memory patterns."""
    return build_pattern


@pytest.fixture
def make_yaml() -> Callable[..., str]:
    """Factory for pattern YAML text."""
    return pattern_yaml
