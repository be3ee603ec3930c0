"""
Tests for MCP tools.

Tests the MCP tool implementations for loading, browsing and validating
pattern libraries.
"""

import json
from pathlib import Path

import pytest

from track_patterns.manager import LibraryManager
from track_patterns.tools.library import register_library_tools


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def tools(library_path: Path) -> dict:
    """Library tools bound to the built-in library."""
    mcp = MockMCPServer("test")
    manager = LibraryManager(library_path)
    return register_library_tools(mcp, manager)


async def load_builtin(tools: dict) -> dict:
    """Load the built-in library through the tool and return the tools."""
    await tools["track_load_library"]()
    return tools


class TestRegistration:
    """Tests for tool registration."""

    def test_all_tools_registered(self, library_path: Path):
        """Every tool is registered on the server."""
        mcp = MockMCPServer("test")
        register_library_tools(mcp, LibraryManager(library_path))
        assert set(mcp.tools) == {
            "track_load_library",
            "track_validate_library",
            "track_list_patterns",
            "track_describe_pattern",
            "track_successors",
            "track_validate_pattern_text",
        }


class TestLibraryTools:
    """Tests for library loading tools."""

    @pytest.mark.asyncio
    async def test_load_library(self, tools: dict):
        """Load the built-in library."""
        result = await tools["track_load_library"]()
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["valid"] is True
        assert data["pattern_count"] == 5
        assert data["errors"] == []

    @pytest.mark.asyncio
    async def test_load_broken_library(self, tools: dict, temp_dir: Path, make_yaml):
        """A broken library loads with errors listed."""
        (temp_dir / "a.pattern.yaml").write_text(make_yaml("a", leads_to=["x"]))
        result = await tools["track_load_library"](directory=str(temp_dir))
        data = json.loads(result)
        assert data["status"] == "success"
        assert data["valid"] is False
        codes = [e["code"] for e in data["errors"]]
        assert "DEAD_END" in codes
        assert "NO_START_PATTERN" in codes

    @pytest.mark.asyncio
    async def test_load_without_directory(self):
        """Loading needs a directory."""
        mcp = MockMCPServer("test")
        tools = register_library_tools(mcp, LibraryManager())
        data = json.loads(await tools["track_load_library"]())
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_validate_library(self, tools: dict):
        """Diagnostics of a clean library are empty."""
        loaded_tools = await load_builtin(tools)
        data = json.loads(await loaded_tools["track_validate_library"]())
        assert data["status"] == "success"
        assert data["valid"] is True
        assert data["diagnostics"] == []

    @pytest.mark.asyncio
    async def test_nothing_loaded(self, tools: dict):
        """Tools that need a library report an error before loading."""
        for name in ["track_validate_library", "track_list_patterns"]:
            data = json.loads(await tools[name]())
            assert data["status"] == "error"
        data = json.loads(await tools["track_successors"](unique_name="straight-start"))
        assert data["status"] == "error"


class TestPatternTools:
    """Tests for browsing tools."""

    @pytest.mark.asyncio
    async def test_list_patterns(self, tools: dict):
        """List patterns sorted by name."""
        loaded_tools = await load_builtin(tools)
        data = json.loads(await loaded_tools["track_list_patterns"]())
        assert data["status"] == "success"
        assert data["count"] == 5
        names = [p["unique_name"] for p in data["patterns"]]
        assert names == sorted(names)
        start = next(p for p in data["patterns"] if p["unique_name"] == "straight-start")
        assert start["start"] is True

    @pytest.mark.asyncio
    async def test_describe_pattern(self, tools: dict):
        """Describe a pattern."""
        loaded_tools = await load_builtin(tools)
        result = await loaded_tools["track_describe_pattern"](unique_name="coin-arc-left")
        data = json.loads(result)
        assert data["status"] == "success"
        pattern = data["pattern"]
        assert pattern["leads_to"] == ["narrow", "open"]
        assert pattern["grid"][1] == ["a", "", ""]
        assert len(pattern["grid"]) == pattern["rows"]

    @pytest.mark.asyncio
    async def test_describe_unknown_pattern(self, tools: dict):
        """Unknown patterns are errors."""
        loaded_tools = await load_builtin(tools)
        data = json.loads(await loaded_tools["track_describe_pattern"](unique_name="nope"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_successors(self, tools: dict):
        """Successor lookups follow tags."""
        loaded_tools = await load_builtin(tools)
        data = json.loads(await loaded_tools["track_successors"](unique_name="straight-start"))
        assert data["status"] == "success"
        assert data["successors"] == ["coin-arc-left", "finish-line", "high-arc-ramp"]
        assert data["predecessors"] == []

    @pytest.mark.asyncio
    async def test_successors_unknown(self, tools: dict):
        """Unknown names are errors."""
        loaded_tools = await load_builtin(tools)
        data = json.loads(await loaded_tools["track_successors"](unique_name="nope"))
        assert data["status"] == "error"


class TestValidatePatternText:
    """Tests for single-document validation."""

    @pytest.mark.asyncio
    async def test_valid_text(self, tools: dict, make_yaml):
        """A clean document validates."""
        text = make_yaml("p", grid=[["a", "", ""], ["c", "", ""], ["x", "", ""]])
        data = json.loads(await tools["track_validate_pattern_text"](text=text))
        assert data["status"] == "success"
        assert data["valid"] is True
        assert data["unique_name"] == "p"
        assert data["defects"] == []

    @pytest.mark.asyncio
    async def test_defects(self, tools: dict, make_yaml):
        """Pattern defects are listed."""
        text = make_yaml("p", grid=[["a", "", ""], ["b", "", ""]])
        data = json.loads(await tools["track_validate_pattern_text"](text=text))
        assert data["valid"] is False
        assert [d["code"] for d in data["defects"]] == ["UNCLOSED_ARC"]

    @pytest.mark.asyncio
    async def test_parse_error(self, tools: dict, make_yaml):
        """Parse errors are reported, not raised."""
        text = make_yaml("p", grid=[["Q", "", ""]])
        data = json.loads(await tools["track_validate_pattern_text"](text=text))
        assert data["status"] == "success"
        assert data["valid"] is False
        assert data["parse_error"]["code"] == "UNKNOWN_TOKEN"
