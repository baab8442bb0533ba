"""Word wrapping and indentation helpers."""

from __future__ import annotations

import re
import textwrap

from .constants import CODE_CLOSE_MARKER, CODE_OPEN_PATTERN, TRAILING_END_TAGS_PATTERN

_LINE_SPLIT_PATTERN = re.compile(r"\r\n|\r|\n")


def _leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def indent(text: str, width: int) -> str:
    """Prefix every non-blank line of `text` with `width` spaces."""
    prefix = " " * width
    return "\n".join(prefix + line if line.strip() else line for line in text.split("\n"))


def set_indentation(text: str, width: int) -> str:
    """Replace the common leading indentation of `text` with `width` spaces.

    The common indentation is the smallest number of leading spaces over all
    non-blank lines. Blank lines become empty, and leading or trailing line
    breaks of the result are removed.

    Args:
        text: Text whose lines share some indentation.
        width: Number of spaces to put in front of every non-blank line.

    Returns:
        str: Re-indented text joined with ``\\n``.

    Examples:
        set_indentation("    a\\n      b", 0)  # "a\\n  b"
    """
    lines = _LINE_SPLIT_PATTERN.split(text)
    non_blank = [line for line in lines if line.strip()]
    common = min((_leading_spaces(line) for line in non_blank), default=0)

    prefix = " " * width
    result = [prefix + line[common:] if line.strip() else "" for line in lines]
    return "\n".join(result).strip("\r\n")


def word_wrap(line: str, width: int) -> list[str]:
    """Break a line at spaces so that segments fit in `width` columns.

    The line's own leading indentation is repeated on every segment. Words
    longer than the width are never split and may overflow.

    Args:
        line: Text without line breaks.
        width: Maximum segment length, indentation included.

    Returns:
        list[str]: At least one segment; a blank line yields ``[""]``.

    Examples:
        word_wrap("  aaa bbb ccc", 9)  # ["  aaa bbb", "  ccc"]
    """
    text = line.lstrip(" ")
    if not text.strip():
        return [""]

    leading = line[: len(line) - len(text)]
    wrapped = textwrap.wrap(
        text,
        width=max(width, len(leading) + 1),
        initial_indent=leading,
        subsequent_indent=leading,
        expand_tabs=False,
        replace_whitespace=False,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return wrapped or [""]


def split_trailing_end_tags(line: str) -> tuple[str, str]:
    """Separate a trailing run of closing tags from the rest of a line.

    Examples:
        split_trailing_end_tags("text</para></summary>")  # ("text", "</para></summary>")
    """
    match = TRAILING_END_TAGS_PATTERN.search(line)
    if not match:
        return line, ""
    return line[: match.start()], match.group(0)


def wrap_comment_lines(rendered: str, prefix: str, wrap_width: int) -> list[str]:
    """Lay out rendered comment markup as prefixed source lines.

    Lines inside a ``<code>`` block are copied verbatim. Every other line is
    wrapped to ``wrap_width - len(prefix)`` columns while the trailing closing
    tags stay attached to the last segment.

    Args:
        rendered: Markup produced by the renderer.
        prefix: Indentation plus comment marker, e.g. ``"    /// "``.
        wrap_width: Target line length including the prefix.

    Returns:
        list[str]: Output lines without line breaks.
    """
    output: list[str] = []
    in_code = False
    for line in rendered.split("\n"):
        if CODE_OPEN_PATTERN.search(line):
            in_code = True

        if in_code:
            output.append(prefix + line if line else prefix.rstrip())
            if CODE_CLOSE_MARKER in line:
                in_code = False
            continue

        body, end_tags = split_trailing_end_tags(line)
        segments = word_wrap(body, wrap_width - len(prefix))
        segments[-1] += end_tags
        for segment in segments:
            output.append(prefix + segment if segment else prefix.rstrip())
    return output
