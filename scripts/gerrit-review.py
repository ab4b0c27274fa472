#!/usr/bin/env python3
"""Post linter output read from stdin as a Gerrit review.

Environment:
  GERRIT_REVIEW_URL       Gerrit base URL (required)
  GERRIT_CHANGE_NUMBER    change to review (required)
  GERRIT_PATCHSET_NUMBER  revision/patch set to review (required)
  GERRIT_USERNAME         basic auth user (optional)
  GERRIT_PASSWORD         basic auth password (optional)

An empty report is treated as "no problems found" by default: the message
is printed and the script exits 0 without posting anything. Setting
`treatEmptyAsError: false` in the config posts an empty review instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import BinaryIO, Mapping

from lib.cli import EnvError, error, notice, parse_env, tee_lines
from lib.gerrit import GerritClient, GerritError, review_input
from pkg.lintreview import (
    ConfigError,
    NoProblemsFound,
    ReviewError,
    __version__,
    lines_to_file_comments,
    load_review_config,
)

PROG = "gerrit-review"
EMPTY_IS_ERROR = True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Publish linter output as a Gerrit review.")
    p.add_argument("--version", action="store_true", help="print version details and exit")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="parse env vars and input but do not publish review",
    )
    p.add_argument("--show", action="store_true", help="print lines while parsing")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--marker", default=None, help="file extension marker (default: .go)")
    return p


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
        review_url = parse_env("GERRIT_REVIEW_URL", required=True, environ=environ)
        change_id = parse_env("GERRIT_CHANGE_NUMBER", required=True, environ=environ)
        revision = parse_env("GERRIT_PATCHSET_NUMBER", required=True, environ=environ)
        username = parse_env("GERRIT_USERNAME", required=False, environ=environ)
        password = parse_env("GERRIT_PASSWORD", required=False, environ=environ)
    except EnvError as exc:
        error(PROG, exc)
        return 1

    client = GerritClient(review_url, username=username or None, password=password or None)

    source = stdin if stdin is not None else sys.stdin.buffer
    lines = tee_lines(source, sys.stdout) if args.show else source

    try:
        comments = lines_to_file_comments(
            lines,
            marker=cfg.marker,
            treat_empty_as_error=cfg.empty_is_error(EMPTY_IS_ERROR),
        )
    except NoProblemsFound as exc:
        error(PROG, exc)
        return 0
    except (ReviewError, OSError) as exc:
        error(PROG, exc)
        return 1

    if args.dry_run:
        count = sum(len(items) for items in comments.values())
        notice(f"Dry run: {count} comments across {len(comments)} files not published.")
        return 0

    try:
        client.set_review(change_id, revision, review_input(cfg.message, comments))
    except GerritError as exc:
        error(PROG, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
