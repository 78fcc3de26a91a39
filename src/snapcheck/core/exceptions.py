"""
Custom exceptions for the snapshot testing helper.
"""

from pathlib import Path
from typing import Optional


class SnapshotError(Exception):
    """Base exception for all snapshot errors."""
    pass


class SnapshotEnvironmentError(SnapshotError):
    """
    The expected snapshot base directory is not reachable.

    Raised before any snapshot file is touched, so a test run started from
    the wrong working directory never creates snapshots in the wrong place.
    """

    def __init__(self, message: str, expected_dir: Optional[Path] = None):
        super().__init__(message)
        self.expected_dir = expected_dir


class SnapshotConfigError(SnapshotError):
    """
    Error in snapshot configuration.

    Raised when:
    - The configuration file does not exist
    - The configuration file is not a YAML mapping
    """
    pass


class SnapshotNotFoundError(SnapshotError):
    """A snapshot was read before it was created."""

    def __init__(self, name: str, path: Path):
        super().__init__(f"Snapshot [{name}] not found at {path}")
        self.name = name
        self.path = path


class SnapshotParseError(SnapshotError, ValueError):
    """
    Malformed JSON given to the JSON comparator or serializer.

    This is a usage error and never reported as a snapshot mismatch.
    """

    def __init__(self, message: str, line: int = None, column: int = None):
        super().__init__(message)
        self.line = line
        self.column = column


class SnapshotMismatchError(SnapshotError, AssertionError):
    """
    The current value does not match the stored snapshot.

    The message is the full diagnostic report, so test runners show the
    diff directly in the failure output.
    """

    def __init__(self, name: str, report: str):
        super().__init__(report)
        self.name = name
        self.report = report
