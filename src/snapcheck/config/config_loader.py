"""
Configuration loader for the snapshot testing helper.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.exceptions import SnapshotConfigError
from ..core.types import SnapshotSettings


logger = logging.getLogger(__name__)

REGENERATE_SNAPSHOTS = "REGENERATE_SNAPSHOTS"
REGENERATE_FAILED_SNAPSHOTS = "REGENERATE_FAILED_SNAPSHOTS"
SNAPSHOT_BASE_DIR = "SNAPSHOT_BASE_DIR"
SNAPSHOT_CONFIG = "SNAPSHOT_CONFIG"
SNAPSHOT_LOG_LEVEL = "SNAPSHOT_LOG_LEVEL"

_TRUE_VALUES = {"true", "1", "yes", "on"}


def parse_flag(value: Any) -> bool:
    """
    Interpret a configuration flag.

    Absent or unparseable values are false.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


class SnapshotConfig:
    """
    Configuration for the snapshot helper.

    Loads an optional YAML configuration file, then applies environment
    variable overrides. The environment always wins so a single test run
    can be switched into regeneration mode from the shell.
    """

    def __init__(self, config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (optional)
            environ: Environment mapping (default: os.environ)
        """
        self.environ = os.environ if environ is None else environ
        if config_path is None and self.environ.get(SNAPSHOT_CONFIG):
            config_path = Path(self.environ[SNAPSHOT_CONFIG])
        self.config_path = Path(config_path) if config_path else None
        self.config = self._default_config()
        if self.config_path:
            self._merge(self.config, self._load_config())
        self._apply_env_overrides()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise SnapshotConfigError(f"Config file not found: {self.config_path}")

        logger.debug(f"Loading config from: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise SnapshotConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise SnapshotConfigError(
                f"Config file {self.config_path} must contain a mapping, "
                f"got {type(config).__name__}"
            )
        return config

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            "snapshots": {
                "base_dir": "tests",
                "dir_name": "__snapshots__",
                "example_command": "pytest",
            },
            "regenerate": {
                "all": False,
                "failed": False,
            },
            "logging": {
                "level": "INFO",
            },
        }

    def _merge(self, base: Dict[str, Any], overlay: Dict[str, Any]) -> None:
        for key, value in overlay.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to loaded config."""
        regenerate = self.config.setdefault("regenerate", {})
        if REGENERATE_SNAPSHOTS in self.environ:
            regenerate["all"] = parse_flag(self.environ[REGENERATE_SNAPSHOTS])
        if REGENERATE_FAILED_SNAPSHOTS in self.environ:
            regenerate["failed"] = parse_flag(self.environ[REGENERATE_FAILED_SNAPSHOTS])

        base_dir = self.environ.get(SNAPSHOT_BASE_DIR)
        if base_dir:
            self.config.setdefault("snapshots", {})["base_dir"] = base_dir

        log_level = self.environ.get(SNAPSHOT_LOG_LEVEL)
        if log_level:
            self.config.setdefault("logging", {})["level"] = log_level

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dotted key."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def to_settings(self, overrides: Optional[Dict[str, Any]] = None) -> SnapshotSettings:
        """
        Build immutable settings for one reconciliation call.

        Args:
            overrides: SnapshotSettings field values that take precedence
                over file and environment (e.g. from command-line options)
        """
        values = {
            "base_dir": Path(self.get("snapshots.base_dir", "tests")),
            "snapshot_dir_name": str(self.get("snapshots.dir_name", "__snapshots__")),
            "regenerate_all": parse_flag(self.get("regenerate.all")),
            "regenerate_failed": parse_flag(self.get("regenerate.failed")),
            "example_command": str(self.get("snapshots.example_command", "pytest")),
            "log_level": str(self.get("logging.level", "INFO")).upper(),
        }
        for key, value in (overrides or {}).items():
            if value is None:
                continue
            if key not in values:
                raise SnapshotConfigError(f"Unknown snapshot setting: {key}")
            values[key] = Path(value) if key == "base_dir" else value
        return SnapshotSettings(**values)


def load_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SnapshotSettings:
    """
    Read the current snapshot settings from file and environment.

    Called at the start of every public verify call so flag changes take
    effect on the next call.
    """
    return SnapshotConfig(config_path).to_settings(overrides)
