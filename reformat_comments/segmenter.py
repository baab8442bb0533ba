"""Splitting source text into plain lines and documentation-comment runs."""

from __future__ import annotations

from itertools import groupby

from .constants import COMMENT_LINE_PATTERN, LINE_BREAK_PATTERN, QUOTE_MARKER, SLASH_MARKER
from .models import CommentKind, CommentRun, LineGroup, SourceLine

_KIND_BY_MARKER = {SLASH_MARKER: CommentKind.SLASH, QUOTE_MARKER: CommentKind.QUOTE}


def split_lines(source: str) -> list[str]:
    """Split source text into lines, accepting ``\\n`` and ``\\r\\n`` breaks.

    Trailing whitespace of the whole text is dropped first, so a final line
    break does not produce an empty last line.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a", "b"]
    """
    return LINE_BREAK_PATTERN.split(source.rstrip())


def classify_line(index: int, text: str) -> SourceLine:
    """Classify one line by its comment marker.

    Args:
        index: Zero-based position of the line.
        text: Raw line text.

    Returns:
        SourceLine: The line with its `CommentKind` and, for comment lines, the
            text following the marker.

    Examples:
        classify_line(0, "    /// <summary>")  # kind=SLASH, content=" <summary>"
        classify_line(1, "int x;")  # kind=NONE, content=None
    """
    match = COMMENT_LINE_PATTERN.match(text)
    if not match:
        return SourceLine(index=index, text=text)
    return SourceLine(
        index=index,
        text=text,
        kind=_KIND_BY_MARKER[match.group("marker")],
        content=match.group("rest"),
    )


def segment(source: str) -> list[SourceLine]:
    return [classify_line(index, text) for index, text in enumerate(split_lines(source))]


def group_lines(source: str) -> list[LineGroup]:
    """Group consecutive lines of equal comment kind.

    Plain lines come back as `LineGroup` instances to be copied verbatim;
    documentation-comment lines come back as `CommentRun` instances.

    Args:
        source: Full source text.

    Returns:
        list[LineGroup]: Groups in original order, covering every line once.
    """
    groups: list[LineGroup] = []
    for kind, members in groupby(segment(source), key=lambda line: line.kind):
        lines = list(members)
        if kind is CommentKind.NONE:
            groups.append(LineGroup(kind=kind, lines=lines))
        else:
            groups.append(CommentRun(kind=kind, lines=lines))
    return groups
