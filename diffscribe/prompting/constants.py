"""Fixed inference parameters and the system instruction."""

from __future__ import annotations

DEFAULT_MODEL = "gpt-4o-mini"
MAX_TOKENS = 2000
TEMPERATURE = 0.3

SYSTEM_PROMPT = (
    "You are an expert software engineer who writes clear, concise, and helpful "
    "Pull Request descriptions."
)

PROMPT_TEMPLATE = "prompt.md.j2"
COMMENT_TEMPLATES: dict[str, str] = {
    "notice": "comments/notice.md.j2",
    "completed": "comments/completed.md.j2",
}


__all__ = [
    "COMMENT_TEMPLATES",
    "DEFAULT_MODEL",
    "MAX_TOKENS",
    "PROMPT_TEMPLATE",
    "SYSTEM_PROMPT",
    "TEMPERATURE",
]
