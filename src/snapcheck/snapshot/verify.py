"""
Public snapshot assertions.

Typical use inside a test:

    from snapcheck import verify_json_snapshot, verify_string_snapshot

    def test_render():
        verify_string_snapshot("render/summary.txt", render_summary())

    def test_api_payload():
        verify_json_snapshot("api/user.json", build_payload(), ignored_paths=["meta.created_at"])

Snapshots are stored under tests/__snapshots__ by default. Settings are
read from the environment on every call, so REGENERATE_SNAPSHOTS and
REGENERATE_FAILED_SNAPSHOTS take effect without restarting anything.
"""

from typing import Any, Iterable, Optional, Union

from ..config.config_loader import load_settings
from ..core.types import ReconcileOutcome, SnapshotSettings, Verdict
from .canonical import parse_json, pretty_json
from .json_compare import JsonComparator
from .reconcile import Comparator, ExtraDiagnostics, exact_text_equality, reconcile


def json_snapshot_comparator(ignored_paths: Optional[Iterable[str]] = None) -> Comparator:
    """
    Build the comparator used for JSON snapshots.

    Ignored paths decide whether the snapshot passes. A failing verdict
    carries the strict comparison, so its Error(s) block also lists the
    ignored fields that differ.
    """
    lenient = JsonComparator(ignored_paths)
    if not lenient.ignored_paths:
        return lenient
    strict = JsonComparator()

    def compare(stored: str, new: str) -> Verdict:
        verdict = lenient.compare(stored, new)
        if verdict.passed:
            return verdict
        return strict.compare(stored, new)

    return compare


def verify_string_snapshot(
    name: str,
    value: str,
    extra_diagnostics: Optional[ExtraDiagnostics] = None,
    settings: Optional[SnapshotSettings] = None,
) -> ReconcileOutcome:
    """
    Find and read the previous snapshot and require an exact text match.

    The snapshot named ``name`` is stored in tests/__snapshots__ and might
    contain a subdirectory, e.g. "subdir/test.txt".

    Args:
        name: Logical snapshot name
        value: Text to compare; stored byte-for-byte
        extra_diagnostics: Optional hook called as hook(stored, value) on
            mismatch; its text is shown before the diff
        settings: Settings to use instead of reading the environment
    """
    if not isinstance(value, str):
        raise TypeError(f"Snapshot value must be str, got {type(value).__name__}")

    return reconcile(
        name,
        value,
        comparator=exact_text_equality,
        extra_diagnostics=extra_diagnostics,
        settings=settings if settings is not None else load_settings(),
    )


def verify_json_snapshot(
    name: str,
    value: Union[str, bytes, Any],
    ignored_paths: Optional[Iterable[str]] = None,
    settings: Optional[SnapshotSettings] = None,
) -> ReconcileOutcome:
    """
    Ensure that the serialized JSON matches an existing snapshot.

    A ``str`` or ``bytes`` value must be JSON text and will be reformatted;
    use verify_string_snapshot() to check whitespace. Any other value is
    treated as already parsed JSON (dict, list, scalar).

    Args:
        name: Logical snapshot name
        value: JSON text or parsed JSON value
        ignored_paths: Dot-delimited field chains whose values may differ,
            as long as the field is present on both sides
        settings: Settings to use instead of reading the environment

    Raises:
        SnapshotParseError: If the value or the stored snapshot is not JSON
    """
    if isinstance(value, (str, bytes, bytearray)):
        value = parse_json(value)

    return reconcile(
        name,
        pretty_json(value),
        comparator=json_snapshot_comparator(ignored_paths),
        settings=settings if settings is not None else load_settings(),
    )
