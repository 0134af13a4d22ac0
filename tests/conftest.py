from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.transport import RecordingTransport

SECTIONS = (
    "Summary",
    "Motivation",
    "Type of change",
    "Changes",
    "Breaking changes",
    "Migration notes",
    "How was this tested",
    "Test coverage",
    "Screenshots",
    "Performance impact",
    "Security considerations",
    "Documentation",
    "Dependencies",
    "Related issues",
    "Reviewer notes",
)


@pytest.fixture
def pr_template() -> str:
    """A template with one placeholder comment per section (15 in total)."""
    blocks = []
    for title in SECTIONS:
        blocks.append(f"## {title}\n<!-- describe {title.lower()} here -->\n")
    blocks.append("## Checklist\n- [ ] Tests added\n- [ ] Docs updated\n")
    return "\n".join(blocks)


@pytest.fixture
def filled_body(pr_template: str) -> str:
    """The template with every placeholder replaced by real text."""
    body = pr_template
    for title in SECTIONS:
        body = body.replace(f"<!-- describe {title.lower()} here -->", f"Filled {title.lower()}.")
    return body


@pytest.fixture
def template_file(tmp_path: Path, pr_template: str) -> Path:
    path = tmp_path / ".github" / "pull_request_template.md"
    path.parent.mkdir(parents=True)
    path.write_text(pr_template, encoding="utf-8")
    return path


@pytest.fixture
def transport_factory():
    return RecordingTransport
