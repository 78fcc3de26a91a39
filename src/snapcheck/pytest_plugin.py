"""
pytest integration for snapshot assertions.

Registered through the ``pytest11`` entry point, so installing the package
is enough. Provides:

- ``--regenerate-snapshots``: same as REGENERATE_SNAPSHOTS=true
- ``--regenerate-failed-snapshots``: same as REGENERATE_FAILED_SNAPSHOTS=true
- ``--snapshot-base-dir``: directory holding __snapshots__ (default: tests)
- the ``snapshot`` fixture
- a terminal summary of snapshots created or rewritten during the session
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, Optional

import pytest

from .config.config_loader import load_settings
from .core.logging import PACKAGE_LOGGER, configure_logging
from .core.types import ReconcileOutcome, SnapshotSettings
from .snapshot.reconcile import ExtraDiagnostics
from .snapshot.store import SnapshotStore
from .snapshot.verify import verify_json_snapshot, verify_string_snapshot

_OUTCOMES_KEY = pytest.StashKey[Counter]()
_HANDLERS_KEY = pytest.StashKey[list]()


def pytest_addoption(parser):
    group = parser.getgroup("snapcheck", "snapshot assertions")
    group.addoption(
        "--regenerate-snapshots",
        action="store_true",
        default=False,
        help="Overwrite every snapshot that does not match the current value.",
    )
    group.addoption(
        "--regenerate-failed-snapshots",
        action="store_true",
        default=False,
        help="Overwrite only snapshots that fail comparison.",
    )
    group.addoption(
        "--snapshot-base-dir",
        default=None,
        help="Directory containing __snapshots__ (default: tests).",
    )


def _overrides(config) -> Dict[str, Any]:
    return {
        "regenerate_all": True if config.getoption("--regenerate-snapshots") else None,
        "regenerate_failed": True if config.getoption("--regenerate-failed-snapshots") else None,
        "base_dir": config.getoption("--snapshot-base-dir"),
    }


def pytest_configure(config):
    config.stash[_OUTCOMES_KEY] = Counter()
    settings = load_settings(overrides=_overrides(config))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    existing = list(package_logger.handlers)
    configure_logging(settings.log_level)
    config.stash[_HANDLERS_KEY] = [h for h in package_logger.handlers if h not in existing]


def pytest_unconfigure(config):
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in config.stash.get(_HANDLERS_KEY, []):
        package_logger.removeHandler(handler)


class SnapshotAssertion:
    """
    Snapshot assertions bound to the pytest command line.

    Settings are loaded again on each call so environment changes made
    inside a test (monkeypatch.setenv) apply to the next assertion.
    """

    def __init__(self, overrides: Optional[Dict[str, Any]] = None, outcomes: Optional[Counter] = None):
        self.overrides = overrides or {}
        self.outcomes = outcomes if outcomes is not None else Counter()

    def settings(self) -> SnapshotSettings:
        return load_settings(overrides=self.overrides)

    def match_text(
        self,
        name: str,
        value: str,
        extra_diagnostics: Optional[ExtraDiagnostics] = None,
    ) -> ReconcileOutcome:
        outcome = verify_string_snapshot(
            name, value, extra_diagnostics=extra_diagnostics, settings=self.settings()
        )
        self.outcomes[outcome] += 1
        return outcome

    def match_json(
        self,
        name: str,
        value: Any,
        ignored_paths: Optional[Iterable[str]] = None,
    ) -> ReconcileOutcome:
        outcome = verify_json_snapshot(
            name, value, ignored_paths=ignored_paths, settings=self.settings()
        )
        self.outcomes[outcome] += 1
        return outcome


@pytest.fixture
def snapshot(request) -> SnapshotAssertion:
    """Snapshot assertions for the current test."""
    config = request.config
    return SnapshotAssertion(_overrides(config), config.stash[_OUTCOMES_KEY])


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    outcomes = config.stash.get(_OUTCOMES_KEY, None)
    if not outcomes:
        return

    written = [
        (outcome, outcomes[outcome])
        for outcome in (ReconcileOutcome.CREATED, ReconcileOutcome.REGENERATED, ReconcileOutcome.REPAIRED)
        if outcomes[outcome]
    ]
    if not written:
        return

    settings = load_settings(overrides=_overrides(config))
    stored = len(SnapshotStore.from_settings(settings).list_snapshots())

    terminalreporter.write_sep("-", "snapshot summary")
    for outcome, count in written:
        terminalreporter.write_line(f"{count} snapshot(s) {outcome.value}")
    terminalreporter.write_line(f"{stored} snapshot(s) stored in {settings.snapshot_root}")
