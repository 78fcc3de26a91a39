"""
Configuration subpackage: YAML file plus environment overrides.
"""

from .config_loader import (
    REGENERATE_SNAPSHOTS,
    REGENERATE_FAILED_SNAPSHOTS,
    SnapshotConfig,
    load_settings,
    parse_flag,
)

__all__ = [
    "REGENERATE_SNAPSHOTS",
    "REGENERATE_FAILED_SNAPSHOTS",
    "SnapshotConfig",
    "load_settings",
    "parse_flag",
]
