"""Unified diff helpers for GitHub PR review comments.

The line counter starts at 0 on a file's first `@@` hunk header, so the
line just below it is line 1. Later hunk headers, removed lines and
`\\ No newline` markers all advance the counter. A line's position is its
counter value minus 1: the first body line of a file maps to 0.

This module maps new-file line numbers to those positions, per file.
"""

from __future__ import annotations

import re

from .errors import DiffParseError

DiffLineIndex = dict[str, dict[int, int]]

_HUNK_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@"
)

_DEV_NULL = "/dev/null"


def _new_name(header: str) -> str | None:
    """Path from a `+++ b/path` header, or None for deleted files."""
    name = header[4:].split("\t", 1)[0].strip()
    if name == _DEV_NULL:
        return None
    if name.startswith("b/"):
        name = name[2:]
    return name


class _FileState:
    def __init__(self, name: str | None) -> None:
        self.name = name
        self.lines: dict[int, int] = {}
        self.index = 0
        self.seen_hunk = False


def diff_to_line_map(diff: str | None) -> DiffLineIndex:
    """Return map: file name -> {new-file line number -> review position}.

    Only context and added lines are mapped; removed lines have no new-side
    line number and can't carry a review comment. Files deleted by the diff
    are left out. Any malformed hunk raises `DiffParseError`.
    """
    index: DiffLineIndex = {}
    current: _FileState | None = None
    old_left = new_left = 0
    new_line = 0

    for lineno, raw in enumerate((diff or "").splitlines(), start=1):
        in_hunk = old_left > 0 or new_left > 0

        if in_hunk:
            prefix = raw[:1]
            if prefix == "\\":
                # "\ No newline at end of file" marker line.
                current.index += 1
                continue
            # Editors and mail clients strip the trailing space of empty context lines.
            if prefix in {" ", ""}:
                old_left -= 1
                new_left -= 1
            elif prefix == "+":
                new_left -= 1
            elif prefix == "-":
                old_left -= 1
            else:
                raise DiffParseError(f"unexpected line in hunk: {raw!r}", lineno)
            if old_left < 0 or new_left < 0:
                raise DiffParseError("hunk is longer than its header declares", lineno)

            current.index += 1
            if prefix != "-":
                current.lines[new_line] = current.index - 1
                new_line += 1
            continue

        if raw.startswith("@@"):
            m = _HUNK_RE.match(raw)
            if m is None:
                raise DiffParseError(f"malformed hunk header: {raw!r}", lineno)
            if current is None:
                raise DiffParseError("hunk header before file header", lineno)
            old_left = int(m.group("old_count") or 1)
            new_left = int(m.group("new_count") or 1)
            new_line = int(m.group("new_start"))
            if current.seen_hunk:
                current.index += 1
            current.seen_hunk = True
            continue

        if raw.startswith("\\") and current is not None:
            current.index += 1
            continue

        if raw.startswith("diff "):
            current = None
            continue

        if raw.startswith("+++ "):
            current = _FileState(_new_name(raw))
            if current.name:
                index[current.name] = current.lines
            continue

        if (
            current is not None
            and current.seen_hunk
            and raw[:1] in {" ", "+", "-"}
            and not raw.startswith("--- ")
            and raw != "-- "
        ):
            raise DiffParseError("hunk is longer than its header declares", lineno)

        # Any other line is file-level metadata: "---", "index", "new file mode"...

    if old_left > 0 or new_left > 0:
        raise DiffParseError("unexpected end of diff inside a hunk")

    return index
