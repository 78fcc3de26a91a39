"""
Core subpackage for the snapshot testing helper.

Contains types, exceptions, and logging utilities.
"""

from .types import (
    RegenerationMode,
    ReconcileOutcome,
    SnapshotSettings,
    MismatchKind,
    JsonMismatch,
    Verdict,
)
from .exceptions import (
    SnapshotError,
    SnapshotEnvironmentError,
    SnapshotConfigError,
    SnapshotNotFoundError,
    SnapshotParseError,
    SnapshotMismatchError,
)

__all__ = [
    # Types
    "RegenerationMode",
    "ReconcileOutcome",
    "SnapshotSettings",
    "MismatchKind",
    "JsonMismatch",
    "Verdict",
    # Exceptions
    "SnapshotError",
    "SnapshotEnvironmentError",
    "SnapshotConfigError",
    "SnapshotNotFoundError",
    "SnapshotParseError",
    "SnapshotMismatchError",
]
