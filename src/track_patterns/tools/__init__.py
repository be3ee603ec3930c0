"""
MCP tool implementations.

Tools are organized by domain:
- library - Loading, diagnostics and successor lookups for pattern authors
"""

from track_patterns.tools.library import register_library_tools

__all__ = [
    "register_library_tools",
]
