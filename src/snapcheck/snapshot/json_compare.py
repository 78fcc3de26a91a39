"""
Structural comparison of JSON snapshots.

Compares two JSON documents strictly:
- Object key sets must match exactly
- Arrays must match in length and order
- Scalars must match in type and value (numbers by value, 1 == 1.0)

Ignored paths are dot-delimited field chains ("a.timestamp"). Array
indices never form part of the chain, so "a.timestamp" also applies to
"a[3].timestamp". An ignored field must still be present on both sides;
only its value is exempt from comparison.

Every difference is collected, the walk never stops at the first one.
"""

import logging
import re
from typing import Any, Iterable, List, Optional, Set

from ..core.types import JsonMismatch, MismatchKind, Verdict
from .canonical import parse_json

logger = logging.getLogger(__name__)

_INDEX_PATTERN = re.compile(r"\[\d*\]")


def normalize_ignored_path(path: str) -> str:
    """Reduce an ignored path to its field chain ("a[0].b" -> "a.b")."""
    return _INDEX_PATTERN.sub("", path.strip()).strip(".")


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _qualify(prefix: str, key: str) -> str:
    return key if not prefix else f"{prefix}.{key}"


class JsonComparator:
    """
    Comparator for JSON snapshot texts.

    Instances are callables usable as the reconciliation comparator:
    ``comparator(stored_text, new_text) -> Verdict``.
    """

    def __init__(self, ignored_paths: Optional[Iterable[str]] = None):
        """
        Initialize the comparator.

        Args:
            ignored_paths: Field chains whose values are not compared
        """
        self.ignored_paths: List[str] = list(ignored_paths or [])
        self._ignored: Set[str] = {
            normalized
            for normalized in (normalize_ignored_path(p) for p in self.ignored_paths)
            if normalized
        }

    def __call__(self, stored_text: str, new_text: str) -> Verdict:
        return self.compare(stored_text, new_text)

    def compare(self, stored_text: str, new_text: str) -> Verdict:
        """
        Compare two JSON texts.

        Raises:
            SnapshotParseError: If either text is not valid JSON
        """
        stored = parse_json(stored_text)
        new = parse_json(new_text)
        return self.compare_values(stored, new)

    def compare_values(self, stored: Any, new: Any) -> Verdict:
        """Compare two already parsed JSON values."""
        mismatches: List[JsonMismatch] = []
        self._compare(stored, new, "", "", mismatches)

        if not mismatches:
            return Verdict.ok()

        logger.debug(f"JSON comparison found {len(mismatches)} mismatch(es)")
        verdict = Verdict(passed=False, mismatches=mismatches)
        verdict.detail = f"Error(s):\n{verdict.message}"
        return verdict

    def _is_ignored(self, field_key: str) -> bool:
        return bool(field_key) and field_key in self._ignored

    def _compare(
        self,
        stored: Any,
        new: Any,
        path: str,
        field_key: str,
        mismatches: List[JsonMismatch],
    ) -> None:
        if self._is_ignored(field_key):
            return

        stored_kind = _json_kind(stored)
        new_kind = _json_kind(new)

        if stored_kind != new_kind:
            mismatches.append(JsonMismatch(path, MismatchKind.VALUE, stored, new))
        elif stored_kind == "object":
            self._compare_objects(stored, new, path, field_key, mismatches)
        elif stored_kind == "array":
            self._compare_arrays(stored, new, path, field_key, mismatches)
        elif stored != new:
            mismatches.append(JsonMismatch(path, MismatchKind.VALUE, stored, new))

    def _compare_objects(self, stored, new, path, field_key, mismatches) -> None:
        for key, stored_value in stored.items():
            if key in new:
                self._compare(
                    stored_value,
                    new[key],
                    _qualify(path, key),
                    _qualify(field_key, key),
                    mismatches,
                )
            else:
                mismatches.append(JsonMismatch(path, MismatchKind.MISSING, expected=key))

        for key in new:
            if key not in stored:
                mismatches.append(JsonMismatch(path, MismatchKind.UNEXPECTED, actual=key))

    def _compare_arrays(self, stored, new, path, field_key, mismatches) -> None:
        if len(stored) != len(new):
            mismatches.append(
                JsonMismatch(path, MismatchKind.LENGTH, expected=len(stored), actual=len(new))
            )
            return

        for index, (stored_item, new_item) in enumerate(zip(stored, new)):
            self._compare(stored_item, new_item, f"{path}[{index}]", field_key, mismatches)


def compare_json(
    stored_text: str,
    new_text: str,
    ignored_paths: Optional[Iterable[str]] = None,
) -> Verdict:
    """
    Compare two JSON texts structurally.

    Args:
        stored_text: JSON text of the stored snapshot
        new_text: JSON text of the new value
        ignored_paths: Field chains whose values are not compared

    Returns:
        Verdict listing every mismatching, missing, and unexpected path
    """
    return JsonComparator(ignored_paths).compare(stored_text, new_text)
