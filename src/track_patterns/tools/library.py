"""
Library tools - MCP tools for pattern authors.

Tools for loading a pattern library, reading its diagnostics and exploring
the successor graph.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from track_patterns.constants import ErrorMessages, SuccessMessages, ValidationSeverity
from track_patterns.errors import ParseError
from track_patterns.loader import LibraryLoadResult
from track_patterns.manager import LibraryManager
from track_patterns.models.pattern import Pattern
from track_patterns.patterns.parser import parse
from track_patterns.validation.pattern import validate_pattern

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _report_json(result: LibraryLoadResult) -> dict[str, Any]:
    report = result.report
    return {
        "valid": report.is_valid,
        "pattern_count": len(result.store),
        "errors": [d.to_dict() for d in report.errors],
        "warnings": [d.to_dict() for d in report.warnings],
    }


def _pattern_summary(pattern: Pattern) -> dict[str, Any]:
    return {
        "unique_name": pattern.unique_name,
        "name": pattern.metadata.name,
        "version": pattern.metadata.version,
        "start": pattern.is_start,
        "terminal": pattern.is_terminal,
        "rows": len(pattern.rows),
    }


def register_library_tools(mcp: ChukMCPServer, manager: LibraryManager) -> dict[str, Any]:
    """
    Register pattern library tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The library manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def track_load_library(directory: str | None = None) -> str:
        """
        Load and validate a pattern library.

        Parses every *.pattern.yaml file below the directory, validates each
        pattern and then the connectivity graph of the whole library.

        Args:
            directory: Directory to load (defaults to the server's patterns directory)

        Returns:
            JSON string with validation results

        Example:
            track_load_library(directory="assets/patterns")
        """
        try:
            result = await manager.load(Path(directory) if directory else None)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.LIBRARY_LOADED.format(
                        count=len(result.store), path=manager.source
                    ),
                    **_report_json(result),
                }
            )
        except Exception as e:
            logger.exception("Failed to load pattern library")
            return json.dumps({"status": "error", "message": str(e)})

    tools["track_load_library"] = track_load_library

    @mcp.tool  # type: ignore[arg-type]
    async def track_validate_library() -> str:
        """
        Get the full diagnostic list of the loaded library.

        Returns:
            JSON string with every diagnostic, in report order

        Example:
            track_validate_library()
        """
        try:
            result = manager.require()
            return json.dumps(
                {
                    "status": "success",
                    **_report_json(result),
                    "diagnostics": [d.to_dict() for d in result.report.diagnostics],
                }
            )
        except Exception as e:
            logger.exception("Failed to validate pattern library")
            return json.dumps({"status": "error", "message": str(e)})

    tools["track_validate_library"] = track_validate_library

    @mcp.tool  # type: ignore[arg-type]
    async def track_list_patterns() -> str:
        """
        List the patterns of the loaded library.

        Returns:
            JSON string with pattern summaries sorted by unique_name

        Example:
            track_list_patterns()
        """
        try:
            store = manager.require().store
            patterns = sorted(store.all(), key=lambda p: p.unique_name)
            return json.dumps(
                {
                    "status": "success",
                    "patterns": [_pattern_summary(p) for p in patterns],
                    "count": len(patterns),
                }
            )
        except Exception as e:
            logger.exception("Failed to list patterns")
            return json.dumps({"status": "error", "message": str(e)})

    tools["track_list_patterns"] = track_list_patterns

    @mcp.tool  # type: ignore[arg-type]
    async def track_describe_pattern(unique_name: str) -> str:
        """
        Get detailed information about a pattern.

        Returns the pattern's tags and its rows as authoring aliases.

        Args:
            unique_name: Pattern identifier

        Returns:
            JSON string with pattern details

        Example:
            track_describe_pattern(unique_name="coin-arc-left")
        """
        try:
            pattern = manager.get_pattern(unique_name)
            if pattern is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.PATTERN_NOT_FOUND.format(unique_name=unique_name),
                    }
                )

            return json.dumps(
                {
                    "status": "success",
                    "pattern": {
                        **_pattern_summary(pattern),
                        "leads_from": sorted(pattern.leads_from),
                        "leads_to": sorted(pattern.leads_to),
                        "grid": [row.to_aliases() for row in pattern.rows],
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe pattern")
            return json.dumps({"status": "error", "message": str(e)})

    tools["track_describe_pattern"] = track_describe_pattern

    @mcp.tool  # type: ignore[arg-type]
    async def track_successors(unique_name: str) -> str:
        """
        List the patterns that may directly follow a pattern.

        Only available once the library has validated without errors.

        Args:
            unique_name: Pattern identifier

        Returns:
            JSON string with successor and predecessor names

        Example:
            track_successors(unique_name="straight-start")
        """
        try:
            store = manager.require().store
            return json.dumps(
                {
                    "status": "success",
                    "pattern": unique_name,
                    "successors": sorted(store.successors(unique_name)),
                    "predecessors": sorted(store.predecessors(unique_name)),
                }
            )
        except Exception as e:
            logger.exception("Failed to look up successors")
            return json.dumps({"status": "error", "message": str(e)})

    tools["track_successors"] = track_successors

    @mcp.tool  # type: ignore[arg-type]
    async def track_validate_pattern_text(text: str) -> str:
        """
        Parse and validate a single pattern document without loading it.

        Useful while authoring: reports parse errors and per-pattern defects
        (arc pairing, arc spacing, obstacles inside arcs).

        Args:
            text: YAML text of one pattern document

        Returns:
            JSON string with the parse result and defects

        Example:
            track_validate_pattern_text(text="metadata: ...")
        """
        try:
            try:
                pattern = parse(text, source="<tool>")
            except ParseError as e:
                return json.dumps(
                    {
                        "status": "success",
                        "valid": False,
                        "parse_error": {"code": e.code, "message": str(e)},
                        "defects": [],
                    }
                )

            defects = validate_pattern(pattern, manager.config)
            return json.dumps(
                {
                    "status": "success",
                    "valid": not any(d.severity == ValidationSeverity.ERROR for d in defects),
                    "unique_name": pattern.unique_name,
                    "defects": [
                        {
                            "code": d.code.value,
                            "severity": d.severity.value,
                            "message": d.message,
                        }
                        for d in defects
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to validate pattern text")
            return json.dumps({"status": "error", "message": str(e)})

    tools["track_validate_pattern_text"] = track_validate_pattern_text

    return tools
