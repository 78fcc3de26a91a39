"""
Snapshot module for text and JSON snapshot assertions.

This module provides:
- SnapshotStore: File-based snapshot storage by logical name
- JSON canonical layout: Parsing and pretty-printing of JSON snapshots
- JsonComparator: Strict structural comparison with ignored field paths
- reconcile: Create / regenerate / compare decision logic
- verify_string_snapshot / verify_json_snapshot: Public assertions
"""

from .store import SnapshotStore
from .canonical import parse_json, pretty_json
from .json_compare import JsonComparator, compare_json
from .diff import build_report, create_diff
from .reconcile import exact_text_equality, reconcile
from .verify import verify_json_snapshot, verify_string_snapshot

__all__ = [
    "SnapshotStore",
    "parse_json",
    "pretty_json",
    "JsonComparator",
    "compare_json",
    "build_report",
    "create_diff",
    "exact_text_equality",
    "reconcile",
    "verify_json_snapshot",
    "verify_string_snapshot",
]
