"""Project parsed problems into review comment records.

Two shapes are produced. Review systems that address a file and line
directly (Gerrit) get comments grouped by file. Systems that anchor comments
inside the patch (GitHub) get a flat list carrying the diff position, and
problems outside the diff are dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .diffmap import DiffLineIndex, diff_to_line_map
from .problems import DEFAULT_MARKER, Problem
from .reader import lines_to_problems


@dataclass(frozen=True)
class FileComment:
    line: int
    message: str


@dataclass(frozen=True)
class ReviewComment:
    path: str
    message: str
    position: int


def project_file_comments(problems: Iterable[Problem]) -> dict[str, list[FileComment]]:
    """Group problems by file name, keeping report order inside each file."""
    comments: dict[str, list[FileComment]] = {}
    for p in problems:
        comments.setdefault(p.file_name, []).append(
            FileComment(line=p.line, message=p.description)
        )
    return comments


def project_review_comments(problems: Iterable[Problem], index: DiffLineIndex) -> list[ReviewComment]:
    """Anchor problems to diff positions; problems outside the diff are skipped."""
    comments: list[ReviewComment] = []
    for p in problems:
        position = index.get(p.file_name, {}).get(p.line)
        if position is None:
            continue
        comments.append(ReviewComment(path=p.file_name, message=p.description, position=position))
    return comments


def lines_to_file_comments(
    stream: Iterable[bytes] | Iterable[str],
    *,
    marker: str = DEFAULT_MARKER,
    treat_empty_as_error: bool = False,
) -> dict[str, list[FileComment]]:
    """Read a linter report and group its problems per file."""
    problems = lines_to_problems(stream, marker=marker, treat_empty_as_error=treat_empty_as_error)
    return project_file_comments(problems)


def lines_to_review_comments(
    stream: Iterable[bytes] | Iterable[str],
    diff: str,
    *,
    marker: str = DEFAULT_MARKER,
    treat_empty_as_error: bool = False,
) -> list[ReviewComment]:
    """Read a linter report and keep the problems that land on lines of `diff`.

    The diff is parsed before the report is read so a bad diff fails fast.
    `treat_empty_as_error` applies to the parsed problems, not to the
    comments left after filtering.
    """
    index = diff_to_line_map(diff)
    problems = lines_to_problems(stream, marker=marker, treat_empty_as_error=treat_empty_as_error)
    return project_review_comments(problems, index)
