"""
JSON parsing and pretty-printing for JSON snapshots.

Stored JSON snapshots are always in one canonical layout:
- 2-space indentation
- Keys in insertion order (never sorted, the order is part of the snapshot)
- Non-ASCII characters kept literal
- A trailing newline
"""

import json
import math
from typing import Any, Union

from ..core.exceptions import SnapshotParseError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number {literal} is out of range")
    return value


def parse_json(text: Union[str, bytes]) -> Any:
    """
    Parse JSON text into plain Python values.

    Raises:
        SnapshotParseError: If the text is not valid JSON or holds a number
            that does not fit a finite float
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8")

    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except json.JSONDecodeError as e:
        raise SnapshotParseError(
            f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
            line=e.lineno,
            column=e.colno,
        ) from e
    except ValueError as e:
        raise SnapshotParseError(f"Invalid JSON: {e}") from e


def _json_default(obj: Any) -> Any:
    """
    Default handler for JSON serialization of non-standard types.
    """
    if hasattr(obj, "isoformat"):
        # datetime objects
        return obj.isoformat()

    if hasattr(obj, "to_dict"):
        return obj.to_dict()

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def pretty_json(value: Any) -> str:
    """
    Serialize a value to the canonical snapshot layout.

    Args:
        value: Parsed JSON value (dict, list, str, number, bool, None)

    Returns:
        Pretty-printed JSON text ending with a newline

    Raises:
        SnapshotParseError: If the value holds NaN or an infinite float
    """
    try:
        text = json.dumps(
            value,
            indent=2,
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )
    except ValueError as e:
        raise SnapshotParseError(f"Value is not valid JSON: {e}") from e
    return text + "\n"
