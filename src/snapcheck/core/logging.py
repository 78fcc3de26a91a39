"""
Logging utilities for the snapshot testing helper.

Snapshot events carry the snapshot name through the logging ``extra``
mapping so a run log shows which snapshot was created or regenerated.
"""

import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "snapcheck"


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter that outputs human-readable log lines with snapshot context.

    Format: TIMESTAMP - LOGGER - LEVEL - MESSAGE [snapshot=X mode=Y]
    """

    def __init__(self, include_timestamp: bool = True):
        if include_timestamp:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(name)s - %(levelname)s - %(message)s"
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        context_parts = []
        for field in ["snapshot", "mode"]:
            value = getattr(record, field, None)
            if value is not None:
                context_parts.append(f"{field}={value}")

        if context_parts:
            return f"{base} [{' '.join(context_parts)}]"
        return base


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name ("debug", "INFO") into a logging level, INFO if unknown."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance for the snapcheck package.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional logging level override

    Example:
        >>> from snapcheck.core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Created snapshot", extra={"snapshot": "a.json"})
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger


def configure_logging(
    level: Union[int, str] = logging.INFO,
    include_timestamp: bool = True,
    stream=None,
) -> logging.Logger:
    """
    Configure the snapcheck package logger.

    Only adds a handler if none exist, so repeated calls (one per pytest
    session, for instance) never duplicate output.

    Args:
        level: Logging level or level name (default: INFO)
        include_timestamp: Whether to include timestamp in log messages
        stream: Output stream (default: stderr)

    Returns:
        The configured package logger
    """
    level = resolve_level(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    if not package_logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(HumanReadableFormatter(include_timestamp=include_timestamp))
        package_logger.addHandler(handler)
    else:
        for handler in package_logger.handlers:
            handler.setLevel(level)

    return package_logger
