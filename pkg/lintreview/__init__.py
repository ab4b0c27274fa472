"""Turn line-oriented linter output into code review comments."""

__version__ = "0.1.0"

from .comments import (
    FileComment,
    ReviewComment,
    lines_to_file_comments,
    lines_to_review_comments,
    project_file_comments,
    project_review_comments,
)
from .config import ConfigError, ReviewConfig, load_review_config
from .diffmap import DiffLineIndex, diff_to_line_map
from .errors import (
    DiffParseError,
    EmptyMarkerError,
    LineFormatError,
    NoProblemsFound,
    ParseError,
    PositionError,
    ReviewError,
    SplitLineError,
    SplitLocationError,
)
from .problems import DEFAULT_MARKER, Position, Problem, parse_line, parse_position
from .reader import iterate_problems, lines_to_problems

__all__ = [
    "__version__",
    "ConfigError",
    "DEFAULT_MARKER",
    "DiffLineIndex",
    "DiffParseError",
    "EmptyMarkerError",
    "FileComment",
    "LineFormatError",
    "NoProblemsFound",
    "ParseError",
    "Position",
    "PositionError",
    "Problem",
    "ReviewComment",
    "ReviewConfig",
    "ReviewError",
    "SplitLineError",
    "SplitLocationError",
    "diff_to_line_map",
    "iterate_problems",
    "lines_to_file_comments",
    "lines_to_problems",
    "lines_to_review_comments",
    "load_review_config",
    "parse_line",
    "parse_position",
    "project_file_comments",
    "project_review_comments",
]
