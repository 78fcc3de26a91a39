"""
Unified diff and failure report formatting.
"""

import difflib
import re
from typing import List, Optional

from ..config.config_loader import REGENERATE_FAILED_SNAPSHOTS, REGENERATE_SNAPSHOTS

DIFF_CONTEXT_LINES = 10
REPORT_RULE = "#" * 69

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


def split_lines(text: str) -> List[str]:
    """
    Split text into lines on any line break.

    Unlike str.splitlines() a trailing line break yields a final empty
    line, so a missing or extra newline at the end shows up in the diff.
    """
    return _LINE_BREAK.split(text)


def create_diff(original: str, new: str, context: int = DIFF_CONTEXT_LINES) -> str:
    """
    Build a unified diff of two texts without the file header.

    Removed (stored) lines are prefixed with '-', added (new) lines with
    '+'. The '---', '+++' and first '@@' lines are dropped.
    """
    diff = difflib.unified_diff(
        split_lines(original),
        split_lines(new),
        n=context,
        lineterm="",
    )
    return "\n".join(list(diff)[3:])


def build_report(
    name: str,
    diff: str,
    extra: Optional[str] = None,
    example_command: str = "pytest",
) -> str:
    """
    Build the diagnostic report for a failed snapshot.

    Args:
        name: Logical snapshot name
        diff: Unified diff from create_diff()
        extra: Optional diagnostics block placed before the diff
        example_command: Test command used in the regeneration examples

    Returns:
        The report text, ending with a newline
    """
    extra_block = f"{extra}\n\n" if extra else ""

    return (
        f"{REPORT_RULE}\n"
        f"\n"
        f"Snapshot [{name}] failed - recreate all snapshots by setting "
        f"environment variable {REGENERATE_SNAPSHOTS} to true\n"
        f"Example: {REGENERATE_SNAPSHOTS}=true {example_command}\n"
        f"Only recreate failed snapshots by setting environment variable "
        f"{REGENERATE_FAILED_SNAPSHOTS} to true instead\n"
        f"Example: {REGENERATE_FAILED_SNAPSHOTS}=true {example_command}\n"
        f"\n"
        f"{extra_block}Diff:\n"
        f"\n"
        f"{diff}\n"
        f"\n"
        f"{REPORT_RULE}\n"
    )
