"""Error types raised while turning linter output into review comments."""

from __future__ import annotations

SPLIT_LINE_MESSAGE = "failed to split line to location and description"
SPLIT_LOCATION_MESSAGE = "failed split location to filename and position"


class ReviewError(Exception):
    """Base class for every lintreview failure."""


class LineFormatError(ReviewError):
    """A single report line does not follow `<location> <description>`."""


class SplitLineError(LineFormatError):
    """Line has no space separating location from description."""

    def __init__(self, message: str = SPLIT_LINE_MESSAGE) -> None:
        super().__init__(message)


class SplitLocationError(LineFormatError):
    """Location does not contain the file extension marker."""

    def __init__(self, message: str = SPLIT_LOCATION_MESSAGE) -> None:
        super().__init__(message)


class PositionError(LineFormatError):
    """Line or column field is not a non-negative integer."""

    def __init__(self, field: str, text: str) -> None:
        self.field = field
        self.text = text
        super().__init__(f"expected {field} number but got: {text}")


class ParseError(ReviewError):
    """Wraps a line failure with the 1-based number of the offending line."""

    def __init__(self, line_number: int, err: Exception) -> None:
        self.line_number = line_number
        self.err = err
        super().__init__(f"could not parse line: {line_number}, {err}")


class DiffParseError(ReviewError):
    """Unified diff text could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"diff line {line_number}: {message}"
        super().__init__(message)


class NoProblemsFound(ReviewError):
    """The report stream parsed cleanly but held no problems."""

    def __init__(self, message: str = "no problems found") -> None:
        super().__init__(message)


class EmptyMarkerError(ReviewError):
    """The file extension marker used to split locations is empty."""

    def __init__(self, message: str = "extension marker cannot be empty") -> None:
        super().__init__(message)
