"""GitHub PR review utilities.

This module is intentionally small: fetch a PR's unified diff and create a
single PR review with inline comments.
"""

from __future__ import annotations

import json
import os
import tempfile

from lib import github as gh
from pkg.lintreview import ReviewComment

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


def fetch_pr_diff(owner: str, repo: str, pr_number: int) -> str:
    result = gh._run_gh(
        [
            "api",
            "-H",
            f"Accept: {DIFF_MEDIA_TYPE}",
            f"repos/{owner}/{repo}/pulls/{pr_number}",
        ]
    )
    return result.stdout or ""


def review_payload(*, commit_id: str, body: str, comments: list[ReviewComment]) -> dict[str, object]:
    payload: dict[str, object] = {
        "event": "COMMENT",
        "commit_id": commit_id,
        "body": body,
    }
    if comments:
        payload["comments"] = [
            {"path": c.path, "position": c.position, "body": c.message} for c in comments
        ]
    return payload


def create_pr_review(
    *,
    owner: str,
    repo: str,
    pr_number: int,
    commit_id: str,
    body: str,
    comments: list[ReviewComment],
) -> dict:
    payload = review_payload(commit_id=commit_id, body=body, comments=comments)

    with tempfile.NamedTemporaryFile("w", encoding="utf-8", suffix=".json", delete=False) as handle:
        json.dump(payload, handle)
        tmp_path = handle.name

    try:
        result = gh._run_gh(
            [
                "api",
                "-X",
                "POST",
                f"repos/{owner}/{repo}/pulls/{pr_number}/reviews",
                "--input",
                tmp_path,
            ]
        )
    finally:
        os.unlink(tmp_path)
    data = json.loads(result.stdout or "{}")
    return data if isinstance(data, dict) else {}
