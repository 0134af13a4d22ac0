"""Renders the model prompt and the PR notification comments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, StrictUndefined

from .constants import COMMENT_TEMPLATES, DEFAULT_MODEL, PROMPT_TEMPLATE, SYSTEM_PROMPT


class CommentKind(str, Enum):
    """The two fixed comments diffscribe leaves on a pull request."""

    NOTICE = "notice"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PromptMessage:
    """Represents a single chat message for LLM prompting."""

    role: str
    content: str


class PromptBuilder:
    """Loads Jinja2 templates, preferring a repository override directory."""

    def __init__(self, templates_dir: Path | None = None, *, model: str = DEFAULT_MODEL) -> None:
        self.templates_dir = templates_dir
        self.model = model
        self._env = self._create_env(templates_dir)

    def build_messages(self, template: str, current_body: str, diff: str) -> List[PromptMessage]:
        """Return the system and user messages for one fill request."""
        return [
            PromptMessage(role="system", content=SYSTEM_PROMPT),
            PromptMessage(role="user", content=self.render_prompt(template, current_body, diff)),
        ]

    def render_prompt(self, template: str, current_body: str, diff: str) -> str:
        prompt = self._env.get_template(PROMPT_TEMPLATE)
        return prompt.render(template=template, current_body=current_body, diff=diff)

    def render_comment(self, kind: CommentKind) -> str:
        comment = self._env.get_template(COMMENT_TEMPLATES[CommentKind(kind).value])
        return comment.render(model=self.model).strip()

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        loaders = []
        if templates_dir:
            loaders.append(FileSystemLoader(str(templates_dir)))
        loaders.append(FileSystemLoader(str(Path(__file__).with_name("templates"))))
        return Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            undefined=StrictUndefined,
        )


__all__ = ["CommentKind", "PromptBuilder", "PromptMessage"]
