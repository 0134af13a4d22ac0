"""Diff size handling for the model context window."""

from __future__ import annotations

MAX_DIFF_SIZE = 8000
TRUNCATION_SUFFIX = "\n\n... (diff truncated to fit context window)"


def truncate_diff(diff: str, limit: int = MAX_DIFF_SIZE) -> str:
    """Cap ``diff`` at ``limit`` characters, appending a marker when it was cut.

    The marker is not counted against ``limit``.
    """
    if len(diff) <= limit:
        return diff
    return diff[:limit] + TRUNCATION_SUFFIX


__all__ = ["MAX_DIFF_SIZE", "TRUNCATION_SUFFIX", "truncate_diff"]
