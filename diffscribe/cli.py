"""CLI entrypoint for the diffscribe command."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .config import load_config, load_settings
from .errors import DiffScribeError
from .logging import configure_logging
from .orchestrator import STATUS_DRY_RUN, Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffscribe",
        description=(
            "Fill an unfilled pull request template from the PR diff. Reads GITHUB_TOKEN, "
            "GITHUB_REPOSITORY, PR_NUMBER and PR_BODY from the environment."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .diffscribe.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help="Path to the pull request template (overrides the config file).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate the description and print it without commenting or updating the PR.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for diffscribe."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=args.log_file,
        secrets=[os.environ.get("GITHUB_TOKEN")],
    )

    try:
        settings = load_settings()
        config = load_config(args.config)
        outcome = Orchestrator(config).run(
            settings,
            template_path=args.template,
            dry_run=bool(args.dry_run),
        )
    except DiffScribeError as exc:
        parser.exit(1, f"diffscribe failed: {exc}\nRun with --verbose for more details.\n")

    if outcome.status == STATUS_DRY_RUN and outcome.description is not None:
        print(outcome.description)


if __name__ == "__main__":
    main(sys.argv[1:])
