"""
snapcheck: text and JSON snapshot assertions for tests.

The first run of an assertion stores the value under tests/__snapshots__;
later runs compare against it and fail with a diff on mismatch.
"""

from .core.exceptions import (
    SnapshotConfigError,
    SnapshotEnvironmentError,
    SnapshotError,
    SnapshotMismatchError,
    SnapshotNotFoundError,
    SnapshotParseError,
)
from .core.types import ReconcileOutcome, RegenerationMode, SnapshotSettings, Verdict
from .config.config_loader import load_settings
from .snapshot.verify import verify_json_snapshot, verify_string_snapshot

__version__ = "0.1.0"

__all__ = [
    "verify_string_snapshot",
    "verify_json_snapshot",
    "load_settings",
    "ReconcileOutcome",
    "RegenerationMode",
    "SnapshotSettings",
    "Verdict",
    "SnapshotError",
    "SnapshotConfigError",
    "SnapshotEnvironmentError",
    "SnapshotMismatchError",
    "SnapshotNotFoundError",
    "SnapshotParseError",
]
