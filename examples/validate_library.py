#!/usr/bin/env python3
"""
Example: Loading and Validating a Pattern Library.

This demonstrates the start-of-process pipeline: every pattern asset is
parsed and validated, the library graph is checked, and only a clean
library exposes successor lookups.

Usage:
    python examples/validate_library.py [patterns_dir]
"""

import sys
from pathlib import Path

from track_patterns import LibraryLoader, ValidationConfig, parse, validate_pattern

BROKEN_PATTERN = """
metadata:
  unique_name: broken-arc
  name: Broken arc
  version: "1"
pattern_data:
  leads_from: [open]
  leads_to: [open]
  pattern:
    - [a, "", ""]
    - [b, "", ""]
    - [X, "", ""]
"""


def main() -> None:
    """Demonstrate loading, validation and successor lookups."""
    print("Track Pattern Library Demo")
    print("=" * 40)
    print()

    if len(sys.argv) > 1:
        library_path = Path(sys.argv[1])
    else:
        library_path = Path(__file__).parent.parent / "src/track_patterns/patterns/library"

    loader = LibraryLoader(ValidationConfig())
    result = loader.load_directory(library_path)

    print(f"Loaded {len(result.store)} pattern(s) from {library_path}")
    print(result.report)
    print()

    if not result.is_valid:
        print("Library has errors; gameplay would not start.")
        return

    store = result.raise_for_errors()

    # Walk the graph from each start pattern
    print("Successors:")
    for pattern in sorted(store.all(), key=lambda p: p.unique_name):
        marker = " (start)" if pattern.is_start else ""
        marker += " (terminal)" if pattern.is_terminal else ""
        successors = ", ".join(sorted(store.successors(pattern.unique_name))) or "-"
        print(f"  {pattern.unique_name}{marker} -> {successors}")
    print()

    # Validate a single document while authoring
    print("Checking a pattern with a broken arc:")
    pattern = parse(BROKEN_PATTERN)
    for defect in validate_pattern(pattern):
        print(f"  {defect}")


if __name__ == "__main__":
    main()
