"""Reformatting of documentation comments in source text."""

from __future__ import annotations

import logging

from .config import FormatterConfig, validate_config
from .constants import DIAGNOSTIC_PREFIX, SUMMARY_TAG
from .exceptions import FormatError, NestingTooDeepError
from .markup import parse_markup
from .models import CommentRun, Element, FormatResult, LineGroup, RunResult, Text
from .renderer import render_nodes
from .segmenter import group_lines
from .wrapping import wrap_comment_lines

logger = logging.getLogger(__name__)


def _single_summary(root: Element) -> Element | None:
    if any(isinstance(child, Text) and not child.is_whitespace for child in root.children):
        return None
    elements = root.elements
    if len(elements) != 1:
        return None
    summary = elements[0]
    if summary.name != SUMMARY_TAG or summary.attributes:
        return None
    return summary


def _render_one_line_summary(summary: Element, prefix: str, config: FormatterConfig) -> str | None:
    text = render_nodes(summary.children, False, indent_width=config.indent_width)
    if "\n" in text:
        return None
    line = f"{prefix}<{SUMMARY_TAG}>{text}</{SUMMARY_TAG}>"
    if len(line) > config.wrap_width:
        return None
    return line


def render_run(run: CommentRun, config: FormatterConfig | None = None) -> list[str]:
    """Reformat the markup of a single comment run.

    A lone ``<summary>`` that fits on one line is written on one line;
    everything else is rendered as block-level markup and word-wrapped.

    Args:
        run: Comment run to reformat.
        config: Layout settings. Defaults to a new `FormatterConfig`.

    Returns:
        list[str]: Output lines, each starting with the run's comment prefix.

    Raises:
        MarkupParseError: If the run's content is not well-formed markup.
        StructureError: If the markup cannot be laid out, or is nested too deeply.
    """
    config = config or FormatterConfig()
    root = parse_markup(run.content)
    prefix = run.prefix

    try:
        summary = _single_summary(root)
        if summary is not None:
            line = _render_one_line_summary(summary, prefix, config)
            if line is not None:
                return [line]

        rendered = render_nodes(root.children, True, indent_width=config.indent_width).strip()
    except RecursionError as error:
        raise NestingTooDeepError() from error
    return wrap_comment_lines(rendered, prefix, config.wrap_width)


def format_run(group: LineGroup, config: FormatterConfig | None = None) -> RunResult:
    """Produce the output lines for one line group without raising.

    Plain groups are returned unchanged. When a comment run cannot be
    reformatted, its original lines are kept behind a diagnostic line and the
    error is recorded on the result.

    Args:
        group: Group produced by `group_lines`.
        config: Layout settings. Defaults to a new `FormatterConfig`.

    Returns:
        RunResult: Output lines and, on failure, the error.
    """
    if not isinstance(group, CommentRun):
        return RunResult(group=group, lines=group.original_lines())

    try:
        lines = render_run(group, config)
    except FormatError as error:
        logger.debug("Comment at line %d left unchanged: %s", group.start + 1, error)
        return RunResult(
            group=group,
            lines=[f"{DIAGNOSTIC_PREFIX}{error}", *group.original_lines()],
            error=error,
        )

    logger.debug("Reformatted comment at line %d (%d lines)", group.start + 1, group.count)
    return RunResult(group=group, lines=lines)


def reformat_document(source: str, config: FormatterConfig | None = None) -> FormatResult:
    """Reformat every documentation comment in a source text.

    Args:
        source: Entire text of one source file.
        config: Layout settings. Defaults to a new `FormatterConfig`.

    Returns:
        FormatResult: Rewritten text, every line terminated by ``"\\n"``, and the
            runs that were left unmodified.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        reformat_document("/// <summary>\\n/// Hi.\\n/// </summary>\\n").text
        # "/// <summary>Hi.</summary>\\n"
    """
    config = config or FormatterConfig()
    validate_config(config)

    output: list[str] = []
    failures: list[RunResult] = []
    for group in group_lines(source):
        result = format_run(group, config)
        output.extend(result.lines)
        if not result.ok:
            failures.append(result)

    return FormatResult(text="".join(f"{line}\n" for line in output), failures=failures)


def reformat_comments(source: str, config: FormatterConfig | None = None) -> str:
    """Return `source` with its documentation comments reformatted.

    Examples:
        reformat_comments("int x;\\r\\n/// <summary>Hi.</summary>")
        # "int x;\\n/// <summary>Hi.</summary>\\n"
    """
    return reformat_document(source, config).text
