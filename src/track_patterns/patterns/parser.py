"""
Pattern Parser - turns a raw pattern document into a Pattern.

The parser is a pure function over the document text. It either returns a
complete Pattern or raises a ParseError; a half-built pattern is never
returned. Reading the bytes is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from track_patterns.constants import DATA_KEYS, METADATA_KEY, ROWS_KEYS, Lane
from track_patterns.errors import (
    EmptyField,
    InvalidDocument,
    MalformedRow,
    MissingField,
    UnknownToken,
)
from track_patterns.models.cell import CellContent, parse_cell
from track_patterns.models.pattern import Pattern, PatternMetadata, PatternRow

logger = logging.getLogger(__name__)


def parse(raw_text: str | bytes, source: str | None = None) -> Pattern:
    """
    Parse a pattern document.

    Args:
        raw_text: YAML text (or UTF-8 bytes) of one pattern asset
        source: Optional source name, used only for debug logging

    Returns:
        The parsed Pattern

    Raises:
        ParseError: If the document is malformed
    """
    if isinstance(raw_text, bytes):
        try:
            raw_text = raw_text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidDocument(f"not UTF-8 text ({e.reason})") from e

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise InvalidDocument(f"YAML error: {e}") from e

    pattern = parse_document(data)
    logger.debug(f"Parsed pattern '{pattern.unique_name}' from {source or '<text>'}")
    return pattern


def parse_document(data: Any) -> Pattern:
    """
    Build a Pattern from an already-decoded document.

    Args:
        data: Mapping with `metadata` and `pattern_data` (or `data`) sections

    Returns:
        The parsed Pattern
    """
    if not isinstance(data, dict):
        raise InvalidDocument("top level must be a mapping")

    metadata = _parse_metadata(_require_section(data, (METADATA_KEY,)))

    pdata = _require_section(data, DATA_KEYS)
    leads_from = _parse_tags(pdata, "leads_from")
    leads_to = _parse_tags(pdata, "leads_to")
    rows = _parse_rows(_require(pdata, ROWS_KEYS))

    return Pattern(
        metadata=metadata,
        leads_from=leads_from,
        leads_to=leads_to,
        rows=rows,
    )


def _require(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the value of the first present key, or raise MissingField."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    raise MissingField(keys[0])


def _require_section(data: dict[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    section = _require(data, keys)
    if not isinstance(section, dict):
        raise InvalidDocument(f"'{keys[0]}' must be a mapping")
    return section


def _text(data: dict[str, Any], field: str) -> str:
    """Read a required string field; other scalar types are rejected."""
    value = _require(data, (field,))
    if not isinstance(value, str):
        raise InvalidDocument(f"'{field}' must be a string, got {value!r}")
    return value


def _parse_metadata(mdata: dict[str, Any]) -> PatternMetadata:
    unique_name = _text(mdata, "unique_name")
    name = _text(mdata, "name")
    version = _text(mdata, "version")

    if not unique_name:
        raise EmptyField("unique_name")
    if not version:
        raise EmptyField("version")

    flags = {}
    for flag in ("start", "terminal"):
        value = mdata.get(flag, False)
        if not isinstance(value, bool):
            raise InvalidDocument(f"'{flag}' must be true or false")
        flags[flag] = value

    return PatternMetadata(
        unique_name=unique_name,
        name=name,
        version=version,
        **flags,
    )


def _parse_tags(pdata: dict[str, Any], field: str) -> frozenset[str]:
    """Decode a tag list; duplicates collapse."""
    if field not in pdata:
        raise MissingField(field)
    value = pdata[field]
    if value is None:
        return frozenset()
    if not isinstance(value, list):
        raise InvalidDocument(f"'{field}' must be a list of tags")

    tags: set[str] = set()
    for tag in value:
        if not isinstance(tag, str):
            raise InvalidDocument(f"'{field}' entries must be strings, got {tag!r}")
        if not tag:
            raise EmptyField(field)
        tags.add(tag)
    return frozenset(tags)


def _parse_rows(rdata: Any) -> tuple[PatternRow, ...]:
    if not isinstance(rdata, list):
        raise InvalidDocument("'pattern' must be a list of rows")
    if not rdata:
        raise EmptyField("pattern")
    return tuple(_parse_row(index, row) for index, row in enumerate(rdata))


def _parse_row(index: int, row: Any) -> PatternRow:
    """Decode one row written as [l, m, r] or {left, middle, right}."""
    if isinstance(row, dict):
        lane_keys = [lane.label for lane in Lane]
        unknown = [key for key in row if key not in lane_keys]
        if unknown:
            raise InvalidDocument(f"row {index} has unknown lane key(s): {unknown!r}")
        if len(row) != len(Lane):
            raise MalformedRow(index, len(row))
        tokens = [row[key] for key in lane_keys]
    elif isinstance(row, list):
        if len(row) != len(Lane):
            raise MalformedRow(index, len(row))
        tokens = row
    else:
        raise MalformedRow(index, 1)

    cells: list[CellContent] = []
    for lane, token in zip(Lane, tokens):
        try:
            cells.append(parse_cell("" if token is None else token))
        except UnknownToken as e:
            raise e.at(index, lane) from None

    return PatternRow.of(*cells)
