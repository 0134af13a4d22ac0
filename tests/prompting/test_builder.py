"""Tests for prompt and comment rendering."""

from __future__ import annotations

from pathlib import Path

from diffscribe.prompting.builder import CommentKind, PromptBuilder
from diffscribe.prompting.constants import SYSTEM_PROMPT


def test_prompt_embeds_inputs_in_order() -> None:
    builder = PromptBuilder()
    template = "## Summary\n<!-- describe your changes -->\n- [ ] Tested"
    body = "{{ not jinja }} <!-- left alone -->"
    diff = "diff --git a/x b/x\n+{% raw %}"

    prompt = builder.render_prompt(template, body, diff)

    assert prompt.startswith("You are helping fill out a Pull Request description template")
    assert template in prompt
    assert body in prompt
    assert diff in prompt
    template_at = prompt.index("## PR Template")
    body_at = prompt.index("## Current PR Description")
    diff_at = prompt.index("## Code Diff")
    instructions_at = prompt.index("## Instructions")
    assert template_at < body_at < diff_at < instructions_at
    assert prompt.index(template) > template_at
    assert prompt.index(diff) > diff_at


def test_prompt_carries_fill_instructions() -> None:
    prompt = PromptBuilder().render_prompt("t", "", "d")

    assert "Fill in ONLY the sections that can be reasonably inferred from the diff" in prompt
    assert "preserve the original placeholder comment" in prompt
    assert "Return ONLY the filled template content" in prompt
    assert "exact markdown structure, headings, and checklist format" in prompt


def test_build_messages_pairs_system_and_user() -> None:
    messages = PromptBuilder().build_messages("t", "b", "d")

    assert [m.role for m in messages] == ["system", "user"]
    assert messages[0].content == SYSTEM_PROMPT
    assert "## Code Diff\nd" in messages[1].content


def test_comment_variants_differ_and_name_model() -> None:
    builder = PromptBuilder(model="gpt-4o-mini")

    notice = builder.render_comment(CommentKind.NOTICE)
    completed = builder.render_comment(CommentKind.COMPLETED)

    assert notice.startswith("### ⚠️ PR Template Not Filled Out")
    assert "will update the PR description shortly" in notice
    assert completed.startswith("### ✅ DiffScribe")
    assert "Please review each section" in completed
    for body in (notice, completed):
        assert "GitHub Models (gpt-4o-mini)" in body


def test_override_directory_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "comments").mkdir()
    (tmp_path / "comments" / "completed.md.j2").write_text(
        "Filled by {{ model }}.\n", encoding="utf-8"
    )

    builder = PromptBuilder(tmp_path, model="custom")

    assert builder.render_comment(CommentKind.COMPLETED) == "Filled by custom."
    assert "PR Template Not Filled Out" in builder.render_comment(CommentKind.NOTICE)
    assert "## Instructions" in builder.render_prompt("t", "b", "d")


def test_comment_headings_keep_fixed_wording() -> None:
    builder = PromptBuilder()

    notice = builder.render_comment(CommentKind.NOTICE)
    completed = builder.render_comment(CommentKind.COMPLETED)

    assert completed.splitlines()[0] == "### ✅ DiffScribe — PR Description Auto-filled"
    assert (
        "> ⏳ Please wait — DiffScribe is processing the diff and will update the PR "
        "description shortly."
    ) in notice.splitlines()
