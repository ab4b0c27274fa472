"""Tokenizer for `file:line:col: message` linter report lines."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import EmptyMarkerError, PositionError, SplitLineError, SplitLocationError

DEFAULT_MARKER = ".go"

_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Position:
    """Line and column of a problem; zero means absent."""

    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class Problem:
    """A single finding reported by a linter."""

    file_name: str
    line: int
    column: int
    description: str


def _parse_number(text: str, field: str) -> int:
    if not _NUMBER_RE.fullmatch(text):
        raise PositionError(field, text)
    return int(text)


def parse_position(text: str) -> Position:
    """Parse the fragment that follows the file name, e.g. `:12:4:`.

    Empty colon-delimited fields are dropped and anything past the second
    field is ignored. With no fields at all the zero position is returned.
    """
    fields = [part for part in text.split(":") if part]
    if not fields:
        return Position()
    if len(fields) == 1:
        return Position(line=_parse_number(fields[0], "line"))

    column = _parse_number(fields[1], "column")
    line = _parse_number(fields[0], "line")
    return Position(line=line, column=column)


def parse_line(line: str, marker: str = DEFAULT_MARKER) -> Problem:
    """Split one report line into a `Problem`.

    The file name ends at the last occurrence of `marker` so directory names
    that contain the marker (`some.go/file.go`) stay part of the path.
    """
    if not marker:
        raise EmptyMarkerError()
    location, sep, description = line.partition(" ")
    if not sep:
        raise SplitLineError()

    head, found, fragment = location.rpartition(marker)
    if not found:
        raise SplitLocationError()

    pos = parse_position(fragment)
    return Problem(
        file_name=head + found,
        line=pos.line,
        column=pos.column,
        description=description,
    )
