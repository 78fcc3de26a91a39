"""
Shared test fixtures and configuration for pytest.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from snapcheck.core.types import SnapshotSettings  # noqa: E402
from snapcheck.snapshot.store import SnapshotStore  # noqa: E402

SNAPSHOT_ENV_VARS = (
    "REGENERATE_SNAPSHOTS",
    "REGENERATE_FAILED_SNAPSHOTS",
    "SNAPSHOT_BASE_DIR",
    "SNAPSHOT_CONFIG",
    "SNAPSHOT_LOG_LEVEL",
)


# ============================================================================
# Pytest hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def clean_snapshot_env(monkeypatch):
    """
    Remove regeneration flags inherited from the shell.

    The suite must behave the same when it is itself run with
    REGENERATE_SNAPSHOTS=true.
    """
    for name in SNAPSHOT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """A working directory containing an empty tests/ directory."""
    (tmp_path / "tests").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def snapshot_root(workdir: Path) -> Path:
    """Path of the default snapshot root inside the working directory."""
    return workdir / "tests" / "__snapshots__"


@pytest.fixture
def store(workdir: Path) -> SnapshotStore:
    """Snapshot store rooted in the working directory."""
    return SnapshotStore(Path("tests"))


@pytest.fixture
def normal_settings() -> SnapshotSettings:
    return SnapshotSettings()


@pytest.fixture
def regenerate_all_settings() -> SnapshotSettings:
    return SnapshotSettings(regenerate_all=True)


@pytest.fixture
def regenerate_failed_settings() -> SnapshotSettings:
    return SnapshotSettings(regenerate_failed=True)
