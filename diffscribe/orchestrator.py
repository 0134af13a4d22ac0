"""Pipeline orchestration: classify, notify, fetch diff, generate, patch, notify."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import DiffScribeConfig, RunSettings
from .diff import truncate_diff
from .errors import DiffScribeError
from .github.client import GitHubClient
from .llm.generator import DescriptionGenerator
from .logging import get_logger
from .prompting.builder import CommentKind, PromptBuilder
from .prompting.constants import DEFAULT_MODEL
from .template import is_unfilled, load_template

STATUS_SKIPPED = "skipped"
STATUS_UPDATED = "updated"
STATUS_DRY_RUN = "dry-run"


@dataclass
class RunOutcome:
    """Result of one diffscribe run."""

    status: str
    description: Optional[str] = None
    notice_posted: bool = False
    completion_posted: bool = False


class Orchestrator:
    """Sequences one pass over a pull request.

    Collaborators may be injected; otherwise they are built from the run
    settings and file config when ``run`` is called.
    """

    def __init__(
        self,
        config: DiffScribeConfig,
        *,
        github: GitHubClient | None = None,
        generator: DescriptionGenerator | None = None,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self.config = config
        self._github = github
        self._generator = generator
        self.prompt_builder = prompt_builder or PromptBuilder(
            config.templates_dir,
            model=config.models.model or DEFAULT_MODEL,
        )
        self.logger = get_logger("orchestrator")

    def run(
        self,
        settings: RunSettings,
        *,
        template_path: Path | None = None,
        dry_run: bool = False,
    ) -> RunOutcome:
        """Fill the PR description when it is still an unfilled template."""
        template = load_template(template_path or self.config.template_path)

        if not is_unfilled(settings.pr_body, template):
            self.logger.info("PR description appears to be already filled. Skipping DiffScribe.")
            return RunOutcome(status=STATUS_SKIPPED)

        github = self._resolve_github(settings)
        generator = self._resolve_generator(settings)
        outcome = RunOutcome(status=STATUS_DRY_RUN if dry_run else STATUS_UPDATED)

        if dry_run:
            self.logger.info("PR description is unfilled. Dry-run: no comments will be posted.")
        else:
            self.logger.info("PR description is unfilled. Posting notice comment...")
            outcome.notice_posted = self._notify(github, settings, CommentKind.NOTICE)

        self.logger.info("Fetching diff...")
        diff = github.fetch_diff(settings.repository, settings.pr_number)
        capped = truncate_diff(diff)
        if len(capped) != len(diff):
            self.logger.info("Diff truncated from %d to %d characters", len(diff), len(capped))

        self.logger.info(
            "Calling GitHub Models API (%s) to fill PR description...", generator.model
        )
        description = generator.generate(template, settings.pr_body, capped)
        outcome.description = description

        if dry_run:
            self.logger.info("Dry-run completed; PR description not updated")
            return outcome

        github.update_body(settings.repository, settings.pr_number, description)
        self.logger.info("PR description updated successfully.")

        if self.config.strict_completion:
            github.post_comment(
                settings.repository,
                settings.pr_number,
                self.prompt_builder.render_comment(CommentKind.COMPLETED),
            )
            outcome.completion_posted = True
        else:
            outcome.completion_posted = self._notify(github, settings, CommentKind.COMPLETED)

        if outcome.completion_posted:
            self.logger.info("Comment posted on PR. DiffScribe completed successfully.")
        else:
            self.logger.info("DiffScribe completed; the completion comment could not be posted.")
        return outcome

    # ------------------------------------------------------------------
    # Helpers

    def _notify(self, github: GitHubClient, settings: RunSettings, kind: CommentKind) -> bool:
        """Post an advisory comment; failures are logged, never raised."""
        try:
            github.post_comment(
                settings.repository,
                settings.pr_number,
                self.prompt_builder.render_comment(kind),
            )
        except DiffScribeError as exc:
            self.logger.warning("Failed to post %s comment: %s", kind.value, exc)
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug("Comment failure detail", exc_info=True)
            return False
        return True

    def _resolve_github(self, settings: RunSettings) -> GitHubClient:
        if self._github is not None:
            return self._github
        return GitHubClient(
            settings.token,
            api_base=self.config.github.api_base,
            api_version=self.config.github.api_version,
            request_timeout=self.config.request_timeout,
        )

    def _resolve_generator(self, settings: RunSettings) -> DescriptionGenerator:
        if self._generator is not None:
            return self._generator
        return DescriptionGenerator(
            settings.token,
            model=self.config.models.model,
            base_url=self.config.models.base_url,
            request_timeout=self.config.request_timeout,
            prompt_builder=self.prompt_builder,
        )


__all__ = [
    "Orchestrator",
    "RunOutcome",
    "STATUS_DRY_RUN",
    "STATUS_SKIPPED",
    "STATUS_UPDATED",
]
