"""
Core data types for the snapshot testing helper.

Uses dataclasses following the pattern established in the snapshot models.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional


class RegenerationMode(str, Enum):
    """How existing snapshots may be overwritten during a test run."""
    NORMAL = "normal"
    REGENERATE_ALL = "regenerate-all"
    REGENERATE_FAILED_ONLY = "regenerate-failed-only"

    @classmethod
    def from_flags(cls, regenerate_all: bool, regenerate_failed: bool) -> "RegenerationMode":
        """
        Derive the mode from the two independent regeneration flags.

        REGENERATE_ALL wins when both flags are set since it already covers
        every failed snapshot.
        """
        if regenerate_all:
            return cls.REGENERATE_ALL
        if regenerate_failed:
            return cls.REGENERATE_FAILED_ONLY
        return cls.NORMAL


class ReconcileOutcome(str, Enum):
    """Which reconciliation path a successful call took."""
    CREATED = "created"
    UNCHANGED = "unchanged"
    REGENERATED = "regenerated"
    REPAIRED = "repaired"


@dataclass(frozen=True)
class SnapshotSettings:
    """
    Resolved configuration for one reconciliation call.

    Attributes:
        base_dir: Directory that must exist relative to the working directory
        snapshot_dir_name: Name of the snapshot directory inside base_dir
        regenerate_all: Overwrite every snapshot that differs
        regenerate_failed: Overwrite only snapshots failing comparison
        example_command: Command shown in the failure report examples
        log_level: Level name for the snapcheck logger
    """
    base_dir: Path = Path("tests")
    snapshot_dir_name: str = "__snapshots__"
    regenerate_all: bool = False
    regenerate_failed: bool = False
    example_command: str = "pytest"
    log_level: str = "INFO"

    @property
    def snapshot_root(self) -> Path:
        return Path(self.base_dir) / self.snapshot_dir_name

    @property
    def mode(self) -> RegenerationMode:
        return RegenerationMode.from_flags(self.regenerate_all, self.regenerate_failed)


def describe_json_value(value: Any) -> str:
    """Render a parsed JSON value the way mismatch messages show it."""
    if isinstance(value, dict):
        return "a JSON object"
    if isinstance(value, list):
        return "a JSON array"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MismatchKind(str, Enum):
    """Kind of structural difference found between two JSON documents."""
    VALUE = "value"
    MISSING = "missing"
    UNEXPECTED = "unexpected"
    LENGTH = "length"


@dataclass
class JsonMismatch:
    """
    A single structural difference between a stored and a new JSON value.

    Attributes:
        path: Location of the difference (e.g. "a.b", "a[0]", "" for root)
        kind: What kind of difference it is
        expected: Stored side value (for MISSING: the missing key)
        actual: New side value (for UNEXPECTED: the extra key)
    """
    path: str
    kind: MismatchKind
    expected: Any = None
    actual: Any = None

    def format(self) -> str:
        if self.kind == MismatchKind.MISSING:
            return f"{self.path}\nExpected: {self.expected}\n     but none found\n"
        if self.kind == MismatchKind.UNEXPECTED:
            return f"{self.path}\nUnexpected: {self.actual}\n"
        if self.kind == MismatchKind.LENGTH:
            return f"{self.path}[]: Expected {self.expected} values but got {self.actual}"
        return (
            f"{self.path}\nExpected: {describe_json_value(self.expected)}"
            f"\n     got: {describe_json_value(self.actual)}\n"
        )


@dataclass
class Verdict:
    """
    Result of comparing a stored snapshot with a new value.

    Attributes:
        passed: Whether the two values are considered equal
        mismatches: Structural differences (JSON comparison only)
        detail: Optional diagnostics block shown in the failure report
    """
    passed: bool
    mismatches: List[JsonMismatch] = field(default_factory=list)
    detail: Optional[str] = None

    @classmethod
    def ok(cls) -> "Verdict":
        return cls(passed=True)

    @property
    def message(self) -> str:
        """All mismatches joined for display."""
        return " ; ".join(m.format() for m in self.mismatches)
