"""Run settings from the environment and optional file config (.diffscribe.yml)."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .template import DEFAULT_TEMPLATE_PATH

CONFIG_FILENAME = ".diffscribe.yml"
REQUIRED_ENV_KEYS = ("GITHUB_TOKEN", "GITHUB_REPOSITORY", "PR_NUMBER")

_REPOSITORY_PATTERN = re.compile(r"^[^/\s]+/[^/\s]+$")
_PR_NUMBER_PATTERN = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class RunSettings:
    """Per-invocation inputs supplied by the workflow runner."""

    token: str
    repository: str
    pr_number: str
    pr_body: str = ""

    def __repr__(self) -> str:
        return (
            f"RunSettings(token='***', repository={self.repository!r}, "
            f"pr_number={self.pr_number!r}, pr_body=<{len(self.pr_body)} chars>)"
        )


@dataclass
class GitHubConfig:
    """GitHub REST API endpoint settings."""

    api_base: Optional[str] = None
    api_version: Optional[str] = None


@dataclass
class ModelsConfig:
    """Inference endpoint settings."""

    base_url: Optional[str] = None
    model: Optional[str] = None


@dataclass
class DiffScribeConfig:
    """Represents the settings defined in .diffscribe.yml."""

    root: Path
    template_path: Path
    github: GitHubConfig = field(default_factory=GitHubConfig)
    models: ModelsConfig = field(default_factory=ModelsConfig)
    templates_dir: Optional[Path] = None
    request_timeout: Optional[float] = None
    strict_completion: bool = False


def load_settings(env: Mapping[str, str] | None = None) -> RunSettings:
    """Read the required run inputs, failing before any network call when absent."""
    source = os.environ if env is None else env
    missing = [key for key in REQUIRED_ENV_KEYS if not source.get(key)]
    if missing:
        raise ConfigurationError(
            "Required environment variables (GITHUB_TOKEN, GITHUB_REPOSITORY, PR_NUMBER) "
            f"are not set: missing {', '.join(missing)}"
        )

    repository = source["GITHUB_REPOSITORY"].strip()
    if not _REPOSITORY_PATTERN.match(repository):
        raise ConfigurationError(
            f"GITHUB_REPOSITORY must look like 'owner/name', got {repository!r}"
        )

    pr_number = source["PR_NUMBER"].strip()
    if not _PR_NUMBER_PATTERN.match(pr_number) or int(pr_number) <= 0:
        raise ConfigurationError(f"PR_NUMBER must be a positive integer, got {pr_number!r}")

    return RunSettings(
        token=source["GITHUB_TOKEN"],
        repository=repository,
        pr_number=pr_number,
        pr_body=source.get("PR_BODY") or "",
    )


def load_config(config_path: Path) -> DiffScribeConfig:
    """Load configuration from disk.

    A directory is searched for ``.diffscribe.yml`` and falls back to the
    defaults when none is there; an explicit file path must exist.
    """
    implicit = config_path.expanduser().is_dir()
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        if not implicit:
            raise ConfigurationError(f"Config file {config_path} does not exist")
        return DiffScribeConfig(root=root, template_path=root / DEFAULT_TEMPLATE_PATH)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_file.name} must contain a mapping at the root")

    template_str = _as_str(data.get("template"))
    template_path = root / (template_str or DEFAULT_TEMPLATE_PATH)

    github_data = _as_dict(data.get("github"))
    github = GitHubConfig(
        api_base=_as_str(github_data.get("api_base")),
        api_version=_as_str(github_data.get("api_version")),
    )

    models_data = _as_dict(data.get("models"))
    models = ModelsConfig(
        base_url=_as_str(models_data.get("base_url")),
        model=_as_str(models_data.get("model")),
    )

    prompts_data = _as_dict(data.get("prompts"))
    templates_dir_str = _as_str(prompts_data.get("templates_dir"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    notify_data = _as_dict(data.get("notify"))
    strict_completion = _as_bool(notify_data.get("strict_completion")) or False

    return DiffScribeConfig(
        root=root,
        template_path=template_path,
        github=github,
        models=models,
        templates_dir=templates_dir,
        request_timeout=_as_float(data.get("request_timeout")),
        strict_completion=strict_completion,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "DiffScribeConfig",
    "GitHubConfig",
    "ModelsConfig",
    "RunSettings",
    "load_config",
    "load_settings",
]
