"""
File-based snapshot storage.

Each snapshot is a single text file under the snapshot root:

    {base_dir}/
        __snapshots__/
            String.txt
            subdir/
                test.json
"""

import logging
from pathlib import Path, PurePosixPath
from typing import List, Optional

from ..core.exceptions import SnapshotEnvironmentError, SnapshotError, SnapshotNotFoundError
from ..core.types import SnapshotSettings

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Reads and writes snapshot files by logical name.

    No caching and no locking: every call goes to the file system.
    """

    def __init__(self, base_dir: Path, snapshot_dir_name: str = "__snapshots__"):
        """
        Initialize the snapshot store.

        Args:
            base_dir: Directory expected to exist in the working context
            snapshot_dir_name: Name of the snapshot directory inside base_dir
        """
        self.base_dir = Path(base_dir)
        self.root = self.base_dir / snapshot_dir_name

    @classmethod
    def from_settings(cls, settings: SnapshotSettings) -> "SnapshotStore":
        return cls(settings.base_dir, settings.snapshot_dir_name)

    def check_environment(self) -> None:
        """
        Check that we are running using the expected working directory.

        A test runner started from a parent directory (a monorepo root, or
        an IDE run configuration) would otherwise silently create a fresh
        snapshot tree in the wrong place.
        """
        if not self.base_dir.is_dir():
            raise SnapshotEnvironmentError(
                f"The tests are likely running with wrong working directory. "
                f"{self.base_dir} was not found (working directory: {Path.cwd()})",
                expected_dir=self.base_dir,
            )

    def resource_path(self, name: str) -> Path:
        """
        Map a logical snapshot name to its file.

        Names are relative, '/'-separated and may contain subdirectories.
        """
        if not name or not name.strip():
            raise SnapshotError("Snapshot name must not be empty")

        pure = PurePosixPath(name.replace("\\", "/"))
        if pure.is_absolute() or Path(name).is_absolute():
            raise SnapshotError(f"Snapshot name must be relative: {name}")
        if ".." in pure.parts:
            raise SnapshotError(f"Snapshot name escapes the snapshot root: {name}")

        return self.root.joinpath(*pure.parts)

    def exists(self, name: str) -> bool:
        return self.resource_path(name).is_file()

    def read(self, name: str) -> str:
        """
        Read a stored snapshot.

        Raises:
            SnapshotNotFoundError: If the snapshot has not been created
        """
        path = self.resource_path(name)
        if not path.is_file():
            raise SnapshotNotFoundError(name, path)

        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def write(self, name: str, text: str) -> Path:
        """Create or overwrite a snapshot with the exact text given."""
        path = self.resource_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)

        logger.debug(f"Wrote {len(text)} characters to {path}")
        return path

    def list_snapshots(self, pattern: Optional[str] = None) -> List[str]:
        """
        List logical names of all stored snapshots.

        Args:
            pattern: Optional glob applied below the root (default: all files)
        """
        if not self.root.is_dir():
            return []

        names = [
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob(pattern or "*")
            if path.is_file()
        ]
        return sorted(names)
