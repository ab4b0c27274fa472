from __future__ import annotations

import io

import pytest

from pkg.lintreview.errors import (
    EmptyMarkerError,
    NoProblemsFound,
    ParseError,
    PositionError,
    SplitLineError,
    SplitLocationError,
)
from pkg.lintreview.problems import Problem
from pkg.lintreview.reader import iterate_problems, lines_to_problems


class _FailingStream:
    def __iter__(self):
        return self

    def __next__(self):
        raise OSError("error")


def test_reads_bytes_in_order() -> None:
    stream = io.BytesIO(b"file.go:1:2: some problem\nfile.go:2:2: other problem\n")
    assert lines_to_problems(stream) == [
        Problem("file.go", 1, 2, "some problem"),
        Problem("file.go", 2, 2, "other problem"),
    ]


def test_reads_text_stream_and_crlf() -> None:
    stream = io.StringIO("file.go:1:2: a\r\nfile_2.go:3:5: b")
    assert lines_to_problems(stream) == [
        Problem("file.go", 1, 2, "a"),
        Problem("file_2.go", 3, 5, "b"),
    ]


def test_comment_lines_are_skipped() -> None:
    stream = io.StringIO("# some/pkg\nfile.go:1:2: some problem\n")
    assert lines_to_problems(stream) == [Problem("file.go", 1, 2, "some problem")]


def test_malformed_comment_line_never_fails() -> None:
    stream = io.StringIO("#no-space-here\n# 1:1: problem\n")
    assert lines_to_problems(stream) == []


def test_comment_lines_count_toward_line_number() -> None:
    stream = io.StringIO("# pkg\nfile.go:1:1: ok\n1:1: problem\n")
    with pytest.raises(ParseError) as exc:
        lines_to_problems(stream)
    assert exc.value.line_number == 3
    assert isinstance(exc.value.err, SplitLocationError)
    assert str(exc.value) == "could not parse line: 3, failed split location to filename and position"


def test_first_error_stops_iteration() -> None:
    stream = io.StringIO("file.go:1:1: ok\nbroken\nalso broken\n")
    seen = []
    with pytest.raises(ParseError) as exc:
        for problem in iterate_problems(stream):
            seen.append(problem)
    assert seen == [Problem("file.go", 1, 1, "ok")]
    assert exc.value.line_number == 2
    assert isinstance(exc.value.err, SplitLineError)
    assert exc.value.__cause__ is exc.value.err


def test_blank_line_is_a_parse_error() -> None:
    stream = io.StringIO("file.go:1:1: ok\n\nfile.go:2:1: ok\n")
    with pytest.raises(ParseError) as exc:
        lines_to_problems(stream)
    assert exc.value.line_number == 2


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("file.go:x:1: problem", "could not parse line: 1, expected line number but got: x"),
        ("file.go:1:x: problem", "could not parse line: 1, expected column number but got: x"),
        ("file.go:1:1:", "could not parse line: 1, failed to split line to location and description"),
    ],
)
def test_parse_error_messages(line: str, message: str) -> None:
    with pytest.raises(ParseError) as exc:
        lines_to_problems(io.StringIO(line))
    assert str(exc.value) == message


def test_numeric_error_keeps_field() -> None:
    with pytest.raises(ParseError) as exc:
        lines_to_problems(io.StringIO("file.go:1:x: problem"))
    assert isinstance(exc.value.err, PositionError)
    assert exc.value.err.field == "column"


def test_stream_errors_are_not_wrapped() -> None:
    with pytest.raises(OSError, match="error") as exc:
        lines_to_problems(_FailingStream())
    assert not isinstance(exc.value, ParseError)


def test_empty_input_is_benign_by_default() -> None:
    assert lines_to_problems(io.BytesIO(b"")) == []


def test_empty_input_raises_when_treated_as_error() -> None:
    with pytest.raises(NoProblemsFound, match="no problems found"):
        lines_to_problems(io.BytesIO(b""), treat_empty_as_error=True)


def test_only_comments_counts_as_empty() -> None:
    with pytest.raises(NoProblemsFound):
        lines_to_problems(io.StringIO("# pkg/a\n# pkg/b\n"), treat_empty_as_error=True)


def test_non_empty_input_unaffected_by_empty_policy() -> None:
    problems = lines_to_problems(io.StringIO("a.go:1:1: x\n"), treat_empty_as_error=True)
    assert len(problems) == 1


def test_custom_marker() -> None:
    stream = io.StringIO("pkg/mod.py:4:1: F401 unused import\n")
    assert lines_to_problems(stream, marker=".py") == [Problem("pkg/mod.py", 4, 1, "F401 unused import")]


def test_invalid_utf8_is_replaced() -> None:
    problems = lines_to_problems(io.BytesIO(b"a.go:1:1: bad \xff byte\n"))
    assert problems[0].description == "bad � byte"


def test_empty_marker_is_rejected_before_reading() -> None:
    with pytest.raises(EmptyMarkerError):
        lines_to_problems(io.StringIO("x.go:1 p\n"), marker="")
    with pytest.raises(EmptyMarkerError):
        lines_to_problems(io.StringIO(""), marker="")


def test_empty_marker_is_not_wrapped_as_parse_error() -> None:
    with pytest.raises(EmptyMarkerError) as exc:
        next(iterate_problems(["x.go:1 p"], marker=""))
    assert not isinstance(exc.value, ParseError)
