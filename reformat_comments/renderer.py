"""Recursive rendering of comment node trees into normalized markup."""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import partial

from .classifier import classify_nodes
from .constants import CODE_TAG, INDENT_WIDTH, LIST_ITEM_TAG, LIST_TAG
from .exceptions import InvalidListError, MixedContentError
from .models import Element, Node, RawMarkup, RenderMode, Text
from .serializer import escape_text, format_attributes, format_tag
from .wrapping import indent, set_indentation

_SPACES_BEFORE_BREAK_PATTERN = re.compile(r"[ \t]+(?=\r?\n)")
_LONE_BREAK_PATTERN = re.compile(r"(?<!\n) *\r?\n *(?!\r?\n)")
_PARAGRAPH_BREAK_PATTERN = re.compile(r" *\r?\n *")


def collapse_line_breaks(text: str) -> str:
    """Turn lone line breaks into spaces while keeping paragraph breaks.

    Examples:
        collapse_line_breaks("Hello\\n  world.")  # "Hello world."
        collapse_line_breaks("One.\\n\\n  Two.")  # "One.\\n\\nTwo."
    """
    text = _SPACES_BEFORE_BREAK_PATTERN.sub("", text)
    text = _LONE_BREAK_PATTERN.sub(" ", text)
    return _PARAGRAPH_BREAK_PATTERN.sub("\n", text)


def render_nodes(
    nodes: Sequence[Node],
    top_level: bool,
    keep_indentation: bool = False,
    indent_width: int = INDENT_WIDTH,
) -> str:
    """Classify a sibling node list and render it in the chosen mode.

    Args:
        nodes: Sibling nodes in document order.
        top_level: True for the children of a comment's synthetic root.
        keep_indentation: Preserve the relative indentation of text, as inside
            ``<code>``.
        indent_width: Spaces added for each nested block-level element.

    Returns:
        str: Rendered markup, lines joined by ``\\n``.

    Raises:
        StructureError: If the nodes, or any descendant list, cannot be laid
            out as block or inline content.
    """
    classification = classify_nodes(nodes, top_level)
    if classification.mode is RenderMode.BLOCK:
        return render_block(nodes, indent_width)
    if classification.mode is RenderMode.INLINE:
        return render_inline(nodes, keep_indentation, indent_width)
    raise classification.error


def render_block(nodes: Sequence[Node], indent_width: int = INDENT_WIDTH) -> str:
    """Render each element on its own line.

    Whitespace, XML comments and processing instructions between the elements
    are dropped.

    Raises:
        MixedContentError: If a text node holds anything besides whitespace.
    """
    rendered = []
    for node in nodes:
        if isinstance(node, Text):
            if node.is_whitespace:
                continue
            raise MixedContentError()
        if isinstance(node, RawMarkup):
            continue
        rendered.append(format_tag(node, True, partial(_render_block_contents, node, indent_width)))
    return "\n".join(rendered)


def _render_block_contents(element: Element, indent_width: int) -> str:
    if element.name == LIST_TAG:
        return indent(render_list_items(element, indent_width), indent_width)

    contents = render_nodes(
        element.children,
        False,
        keep_indentation=element.name == CODE_TAG,
        indent_width=indent_width,
    )
    return indent(contents, indent_width)


def render_list_items(element: Element, indent_width: int = INDENT_WIDTH) -> str:
    """Render the ``item`` children of a ``list``, one per line.

    Item contents are rendered inline directly inside ``<item>`` so that they
    are not indented a second time.

    Raises:
        InvalidListError: If the list holds anything besides ``item`` elements
            and whitespace.
    """
    items = []
    for child in element.children:
        if isinstance(child, Text):
            if child.is_whitespace:
                continue
            raise InvalidListError()
        if isinstance(child, RawMarkup) or child.name != LIST_ITEM_TAG:
            raise InvalidListError()
        contents = render_nodes(child.children, False, indent_width=indent_width)
        items.append(f"<{LIST_ITEM_TAG}{format_attributes(child)}>{contents}</{LIST_ITEM_TAG}>")
    return "\n".join(items)


def render_inline(
    nodes: Sequence[Node], keep_indentation: bool = False, indent_width: int = INDENT_WIDTH
) -> str:
    """Render nodes as flowing text.

    A leading text node loses its leading whitespace (only its leading line
    breaks when `keep_indentation` is set). Outside code, lone line breaks
    collapse into spaces and paragraph breaks are kept. The result is
    right-trimmed and shifted to column zero.
    """
    parts: list[str] = []
    for position, node in enumerate(nodes):
        if isinstance(node, Text):
            value = node.value
            if position == 0:
                value = value.lstrip("\r\n") if keep_indentation else value.lstrip()
            if not keep_indentation:
                value = collapse_line_breaks(value)
            parts.append(escape_text(value))
        else:
            inside = partial(render_nodes, node.children, False, indent_width=indent_width)
            parts.append(format_tag(node, False, inside))

    if parts:
        parts[-1] = parts[-1].rstrip()
    return set_indentation("".join(parts), 0)
