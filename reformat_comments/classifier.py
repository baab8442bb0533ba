"""Deciding whether a sibling node list is laid out as block or inline content."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import BLOCK_LEVEL_TAGS, INLINE_TAGS
from .exceptions import (
    ConflictingTagsError,
    MixedContentError,
    StructureError,
    UnknownTagError,
    UnsupportedMarkupError,
)
from .models import Classification, Element, Node, RawMarkup, RenderMode, TagClass, Text


def classify_tag(name: str) -> TagClass:
    """Return the `TagClass` of an element name.

    Examples:
        classify_tag("see")  # TagClass.INLINE
        classify_tag("para")  # TagClass.BLOCK
        classify_tag("summary")  # TagClass.UNKNOWN
    """
    if name in INLINE_TAGS:
        return TagClass.INLINE
    if name in BLOCK_LEVEL_TAGS:
        return TagClass.BLOCK
    return TagClass.UNKNOWN


def _tag_class(node: Node) -> TagClass | None:
    if isinstance(node, Element):
        return classify_tag(node.name)
    return None


def _is_block_candidate(node: Node) -> bool:
    if isinstance(node, Text):
        return node.is_whitespace
    if isinstance(node, RawMarkup):
        return False
    return classify_tag(node.name) is not TagClass.INLINE


def _is_inline_candidate(node: Node) -> bool:
    if isinstance(node, Text):
        return True
    if isinstance(node, RawMarkup):
        return False
    return classify_tag(node.name) is not TagClass.BLOCK


def classify_nodes(nodes: Sequence[Node], top_level: bool) -> Classification:
    """Choose the render mode for a sibling node list.

    Block mode applies at the top level of a comment, or when every node is
    whitespace or a non-inline element and at least one element is
    block-level. Inline mode applies when no element is block-level and either
    there are no elements or at least one is inline-level. Anything else is
    invalid, and the returned classification carries the reason.

    Args:
        nodes: Sibling nodes in document order.
        top_level: True for the children of the comment's synthetic root.

    Returns:
        Classification: The chosen mode, with the error for an invalid list.

    Examples:
        classify_nodes([Text("Hi "), Element("c", [], [Text("x")])], False).mode  # INLINE
    """
    classes = [_tag_class(node) for node in nodes]

    if top_level or (
        all(_is_block_candidate(node) for node in nodes) and TagClass.BLOCK in classes
    ):
        return Classification(RenderMode.BLOCK)

    if all(_is_inline_candidate(node) for node in nodes) and (
        not any(isinstance(node, Element) for node in nodes) or TagClass.INLINE in classes
    ):
        return Classification(RenderMode.INLINE)

    return Classification(RenderMode.INVALID, _explain_invalid(nodes))


def _explain_invalid(nodes: Sequence[Node]) -> StructureError:
    raw = next((node for node in nodes if isinstance(node, RawMarkup)), None)
    if raw is not None:
        return UnsupportedMarkupError(raw.value)

    elements = [node for node in nodes if isinstance(node, Element)]
    first_block = next((e for e in elements if classify_tag(e.name) is TagClass.BLOCK), None)
    first_inline = next((e for e in elements if classify_tag(e.name) is TagClass.INLINE), None)
    if first_block is not None and first_inline is not None:
        return ConflictingTagsError(first_block.name, first_inline.name)

    first_unknown = next((e for e in elements if classify_tag(e.name) is TagClass.UNKNOWN), None)
    if first_unknown is not None:
        return UnknownTagError(first_unknown.name)

    return MixedContentError()
