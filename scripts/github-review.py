#!/usr/bin/env python3
"""Post linter output read from stdin as a GitHub pull request review.

Environment:
  OWNER         repository owner (required)
  REPOSITORY    repository name (required)
  COMMIT        head commit SHA the review is attached to (required)
  PULL_REQUEST  pull request number (required)

gh authenticates with GH_TOKEN (or its stored login). The PR diff is fetched
first; only problems on lines the diff touches become inline comments. An
empty report, or one whose problems all fall outside the diff, exits 0
without posting.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from typing import BinaryIO, Mapping

from lib.cli import EnvError, error, notice, parse_env, parse_env_int, tee_lines
from lib.github import ReviewPermissionError, TransientGitHubError
from lib.github_reviews import create_pr_review, fetch_pr_diff
from pkg.lintreview import (
    ConfigError,
    NoProblemsFound,
    ReviewComment,
    ReviewError,
    __version__,
    lines_to_review_comments,
    load_review_config,
)

PROG = "github-review"
EMPTY_IS_ERROR = False


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Publish linter output as a GitHub PR review.")
    p.add_argument("--version", action="store_true", help="print version details and exit")
    p.add_argument(
        "--dry-run",
        "--dry",
        dest="dry_run",
        action="store_true",
        help="parse env vars and input but do not publish review",
    )
    p.add_argument("--show", action="store_true", help="print lines while parsing")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--marker", default=None, help="file extension marker (default: .go)")
    return p


def format_comments(comments: list[ReviewComment]) -> str:
    return "\n".join(f"{c.path} @{c.position}: {c.message}" for c in comments)


def main(
    argv: list[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Main."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"{PROG} {__version__}", file=sys.stderr)
        return 0

    try:
        cfg = load_review_config(Path(args.config) if args.config else None)
        cfg = cfg.with_overrides(marker=args.marker)
    except ConfigError as exc:
        error(PROG, f"config error: {exc}")
        return 1

    try:
        owner = parse_env("OWNER", required=True, environ=environ)
        repo = parse_env("REPOSITORY", required=True, environ=environ)
        commit = parse_env("COMMIT", required=True, environ=environ)
        pr_number = parse_env_int("PULL_REQUEST", required=True, environ=environ)
    except EnvError as exc:
        error(PROG, exc)
        return 1

    source = stdin if stdin is not None else sys.stdin.buffer
    lines = tee_lines(source, sys.stdout) if args.show else source

    try:
        diff = fetch_pr_diff(owner, repo, pr_number)
        comments = lines_to_review_comments(
            lines,
            diff,
            marker=cfg.marker,
            treat_empty_as_error=cfg.empty_is_error(EMPTY_IS_ERROR),
        )
    except NoProblemsFound as exc:
        error(PROG, exc)
        return 0
    except (ReviewError, OSError) as exc:
        error(PROG, exc)
        return 1
    except (ReviewPermissionError, TransientGitHubError) as exc:
        error(PROG, exc)
        return 1
    except subprocess.CalledProcessError as exc:
        error(PROG, f"gh command failed: {exc.stderr or exc}")
        return 1

    if not comments:
        notice("No problems on lines touched by the pull request. Skipping review.")
        return 0

    print(format_comments(comments))
    if args.dry_run:
        return 0

    try:
        create_pr_review(
            owner=owner,
            repo=repo,
            pr_number=pr_number,
            commit_id=commit,
            body=cfg.summary(len(comments)),
            comments=comments,
        )
    except (ReviewPermissionError, TransientGitHubError) as exc:
        error(PROG, exc)
        return 1
    except subprocess.CalledProcessError as exc:
        error(PROG, f"gh command failed: {exc.stderr or exc}")
        return 1
    notice(f"Posted review with {len(comments)} inline comments on PR #{pr_number}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
