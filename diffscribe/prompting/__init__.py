"""Prompt and comment rendering."""

from .builder import CommentKind, PromptBuilder, PromptMessage

__all__ = ["CommentKind", "PromptBuilder", "PromptMessage"]
