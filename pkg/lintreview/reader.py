"""Drive the line tokenizer over a whole linter report."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .errors import EmptyMarkerError, LineFormatError, NoProblemsFound, ParseError
from .problems import DEFAULT_MARKER, Problem, parse_line

COMMENT_PREFIX = "#"


def _decode(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


def iterate_problems(
    stream: Iterable[bytes] | Iterable[str],
    *,
    marker: str = DEFAULT_MARKER,
) -> Iterator[Problem]:
    """Yield problems from `stream` in report order.

    `stream` is anything that iterates over lines: a binary or text file
    object, `sys.stdin`, or a plain list. Every line counts toward the line
    number, including comment lines that start with `#`, which are skipped.
    The first malformed line raises `ParseError`; read errors from the
    stream propagate untouched.
    """
    if not marker:
        raise EmptyMarkerError()
    for line_number, raw in enumerate(stream, start=1):
        line = _decode(raw)
        if line.startswith(COMMENT_PREFIX):
            continue
        try:
            problem = parse_line(line, marker)
        except LineFormatError as exc:
            raise ParseError(line_number, exc) from exc
        yield problem


def lines_to_problems(
    stream: Iterable[bytes] | Iterable[str],
    *,
    marker: str = DEFAULT_MARKER,
    treat_empty_as_error: bool = False,
) -> list[Problem]:
    """Read every problem from `stream`.

    An empty result is returned as `[]` unless `treat_empty_as_error` is set,
    in which case `NoProblemsFound` is raised so the caller can tell "nothing
    to report" apart from a successful parse.
    """
    problems = list(iterate_problems(stream, marker=marker))
    if not problems and treat_empty_as_error:
        raise NoProblemsFound()
    return problems
