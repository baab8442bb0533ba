"""
reformat-comments: canonical layout for XML documentation comments.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    reformat-comments Widget.cs [backup-dir]

Library Usage:
    from pathlib import Path
    from reformat_comments import reformat_comments

    source = Path("Widget.cs").read_text()
    print(reformat_comments(source), end="")
"""

from .config import ConfigError, FormatterConfig
from .exceptions import (
    ConflictingTagsError,
    FormatError,
    InvalidListError,
    MarkupParseError,
    MixedContentError,
    NestingTooDeepError,
    StructureError,
    UnknownTagError,
    UnsupportedMarkupError,
)
from .formatter import format_run, reformat_comments, reformat_document
from .markup import parse_markup
from .models import CommentKind, CommentRun, Element, FormatResult, RawMarkup, RunResult, Text
from .segmenter import group_lines

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "reformat_comments",
    "reformat_document",
    "format_run",
    "group_lines",
    "parse_markup",
    # Data models
    "CommentKind",
    "CommentRun",
    "Element",
    "FormatResult",
    "RawMarkup",
    "RunResult",
    "Text",
    # Configuration
    "FormatterConfig",
    # Exceptions
    "ConfigError",
    "ConflictingTagsError",
    "FormatError",
    "InvalidListError",
    "MarkupParseError",
    "MixedContentError",
    "NestingTooDeepError",
    "StructureError",
    "UnknownTagError",
    "UnsupportedMarkupError",
    # Version
    "__version__",
]
