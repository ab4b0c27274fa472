"""Thin wrapper around the gh CLI.

Every GitHub call in the publishers goes through `_run_gh`, which retries
transient 5xx responses and turns permission failures into a typed error.
Authentication is whatever gh is configured with (GH_TOKEN, gh auth login).
"""
from __future__ import annotations

import random
import subprocess
import sys
import time


class ReviewPermissionError(Exception):
    """Token lacks pull-requests: write permission."""


class TransientGitHubError(Exception):
    """GitHub API returned a transient error (5xx)."""


def _is_transient_error(stderr: str) -> bool:
    """Check if error is a transient GitHub API error (5xx)."""
    transient_codes = ("502", "503", "504")
    lower_stderr = stderr.lower()
    # Handle both gh CLI format "(http 503)" and raw "HTTP 503" formats
    return any(
        f"(http {code})" in lower_stderr or f"http {code}" in lower_stderr
        for code in transient_codes
    )


def _run_gh(
    args: list[str],
    *,
    check: bool = True,
    max_retries: int = 3,
    base_delay: float = 1.0,
) -> subprocess.CompletedProcess[str]:
    """Run a gh CLI command with retry logic for transient errors.

    Args:
        args: Arguments to pass to gh CLI
        check: Whether to raise on non-zero exit code
        max_retries: Maximum number of retry attempts for transient errors
        base_delay: Base delay in seconds between retries (uses exponential backoff)

    Returns:
        CompletedProcess result from the gh command

    Raises:
        ReviewPermissionError: Token lacks pull-requests: write permission
        TransientGitHubError: GitHub API returned 5xx after all retries
        subprocess.CalledProcessError: Other gh CLI failures
    """
    for attempt in range(max_retries):
        result = subprocess.run(
            ["gh", *args], capture_output=True, text=True, check=False
        )

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").lower()

        # Permission errors are final.
        if any(s in stderr for s in ("403", "resource not accessible", "insufficient")):
            raise ReviewPermissionError(
                "Unable to post PR review: token lacks pull-requests: write permission.\n"
                "Add this to your workflow:\n"
                "permissions:\n"
                "  contents: read\n"
                "  pull-requests: write"
            )

        if _is_transient_error(result.stderr or ""):
            if attempt < max_retries - 1:
                # Exponential backoff with jitter: 1s, 2s, 4s + random jitter
                delay = base_delay * (2 ** attempt) + random.uniform(0, 0.5)
                print(
                    f"::warning::GitHub API error (attempt {attempt + 1}/{max_retries}), "
                    f"retrying in {delay:.1f}s...",
                    file=sys.stderr,
                )
                time.sleep(delay)
                continue
            raise TransientGitHubError(
                f"GitHub API returned transient error after {max_retries} attempts: "
                f"{result.stderr}"
            )

        if check:
            raise subprocess.CalledProcessError(
                result.returncode, result.args, result.stdout, result.stderr
            )
        return result

    # The loop must either return or raise.
    raise RuntimeError("_run_gh retry loop exited unexpectedly")
