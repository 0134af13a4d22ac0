"""Pull request template loading and unfilled-template detection."""

from __future__ import annotations

from pathlib import Path

from .errors import FileAccessError

DEFAULT_TEMPLATE_PATH = Path(".github") / "pull_request_template.md"
PLACEHOLDER_MARKER = "<!--"
UNFILLED_COMMENT_THRESHOLD = 3


def is_unfilled(body: str, template: str) -> bool:
    """Return True when ``body`` still looks like the untouched template.

    A body counts as unfilled when it is blank, when it equals the template
    once surrounding whitespace is stripped, or when it still carries more
    than ``UNFILLED_COMMENT_THRESHOLD`` placeholder comments.
    """
    trimmed = body.strip()
    if not trimmed:
        return True
    if trimmed == template.strip():
        return True
    # Counted on the raw body; str.count is non-overlapping.
    return body.count(PLACEHOLDER_MARKER) > UNFILLED_COMMENT_THRESHOLD


def load_template(path: Path) -> str:
    """Read the pull request template as UTF-8 text."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Failed to read PR template {path}: {exc}") from exc


__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "PLACEHOLDER_MARKER",
    "UNFILLED_COMMENT_THRESHOLD",
    "is_unfilled",
    "load_template",
]
