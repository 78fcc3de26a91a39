"""
Snapshot reconciliation.

Decides, for one snapshot and one new value, whether to create the
snapshot, regenerate it, or compare against it:

    missing                        -> create           (every mode)
    existing, regenerate-all       -> overwrite if the text differs
    existing, normal               -> compare, fail with a report on mismatch
    existing, regenerate-failed    -> compare, overwrite on mismatch
"""

import sys
from typing import Callable, Optional, TextIO

from ..config.config_loader import load_settings
from ..core.exceptions import SnapshotMismatchError
from ..core.logging import get_logger
from ..core.types import ReconcileOutcome, RegenerationMode, SnapshotSettings, Verdict
from .diff import build_report, create_diff
from .store import SnapshotStore

logger = get_logger(__name__)

Comparator = Callable[[str, str], Verdict]
ExtraDiagnostics = Callable[[str, str], Optional[str]]


def exact_text_equality(stored: str, new: str) -> Verdict:
    """Comparator requiring the two texts to be identical."""
    return Verdict(passed=stored == new)


def _collect_extra(
    verdict: Verdict,
    extra_diagnostics: Optional[ExtraDiagnostics],
    stored: str,
    new: str,
) -> Optional[str]:
    blocks = [verdict.detail]
    if extra_diagnostics is not None:
        blocks.append(extra_diagnostics(stored, new))
    blocks = [block for block in blocks if block]
    return "\n\n".join(blocks) if blocks else None


def reconcile(
    name: str,
    value: str,
    comparator: Comparator = exact_text_equality,
    extra_diagnostics: Optional[ExtraDiagnostics] = None,
    settings: Optional[SnapshotSettings] = None,
    store: Optional[SnapshotStore] = None,
    stream: Optional[TextIO] = None,
) -> ReconcileOutcome:
    """
    Reconcile a new value with the stored snapshot.

    Args:
        name: Logical snapshot name, may contain subdirectories
        value: Text to store or compare
        comparator: Equality check, called as comparator(stored, value)
        extra_diagnostics: Called only on mismatch, may return a text block
            placed before the diff in the failure report
        settings: Resolved settings (default: loaded from the environment)
        store: Snapshot store (default: built from settings)
        stream: Where the failure report is written (default: stderr)

    Returns:
        Which path the reconciliation took

    Raises:
        SnapshotEnvironmentError: If the snapshot base directory is missing
        SnapshotMismatchError: If the value does not match in normal mode
    """
    if settings is None:
        settings = load_settings()
    if store is None:
        store = SnapshotStore.from_settings(settings)

    store.check_environment()

    existing = store.exists(name)
    mode = settings.mode
    context = {"snapshot": name, "mode": mode.value}

    if not existing:
        store.write(name, value)
        logger.info(f"Created initial snapshot for [{name}]", extra=context)
        return ReconcileOutcome.CREATED

    stored = store.read(name)

    if mode == RegenerationMode.REGENERATE_ALL:
        if stored == value:
            logger.debug(f"Snapshot for [{name}] is up to date", extra=context)
            return ReconcileOutcome.UNCHANGED

        store.write(name, value)
        logger.info(f"Snapshot for [{name}] does not match, regenerating", extra=context)
        return ReconcileOutcome.REGENERATED

    verdict = comparator(stored, value)
    if verdict.passed:
        logger.debug(f"Snapshot for [{name}] matches", extra=context)
        return ReconcileOutcome.UNCHANGED

    if mode == RegenerationMode.REGENERATE_FAILED_ONLY:
        store.write(name, value)
        logger.info(
            f"Snapshot for [{name}] does not match, regenerating (failed only)",
            extra=context,
        )
        return ReconcileOutcome.REPAIRED

    report = build_report(
        name,
        create_diff(stored, value),
        extra=_collect_extra(verdict, extra_diagnostics, stored, value),
        example_command=settings.example_command,
    )

    out = stream if stream is not None else sys.stderr
    out.write(report)
    out.flush()

    raise SnapshotMismatchError(name, report)
