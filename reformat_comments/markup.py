"""Strict parsing of comment contents into `Text`/`Element` trees."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .constants import ROOT_TAG
from .exceptions import MarkupParseError, NestingTooDeepError
from .models import Element, Node, RawMarkup, Text


def _local_name(name: str) -> str:
    # ElementTree spells namespaced names as "{uri}local"
    return name.rsplit("}", 1)[-1]


def _convert_child(child: ET.Element) -> Node:
    if child.tag is ET.Comment:
        return RawMarkup(f"<!--{child.text or ''}-->")
    if child.tag is ET.ProcessingInstruction:
        return RawMarkup(f"<?{child.text or ''}?>")
    return _convert(child)


def _convert(element: ET.Element) -> Element:
    children: list[Node] = []
    if element.text:
        children.append(Text(element.text))
    for child in element:
        children.append(_convert_child(child))
        if child.tail:
            children.append(Text(child.tail))

    return Element(
        name=_local_name(element.tag),
        attributes=[(_local_name(name), value) for name, value in element.attrib.items()],
        children=children,
    )


def parse_markup(content: str) -> Element:
    """Parse the contents of a comment run under a synthetic root element.

    Whitespace is preserved exactly as written. XML comments and processing
    instructions are kept as `RawMarkup` nodes. Unbalanced tags, undefined
    entities, invalid characters, and duplicate or malformed attributes are
    rejected.

    Args:
        content: Comment text with the markers removed, lines joined by ``\\n``.

    Returns:
        Element: Synthetic root whose children are the comment's nodes.

    Raises:
        MarkupParseError: If the content is not well-formed.
        NestingTooDeepError: If the elements are nested beyond what can be converted.

    Examples:
        root = parse_markup(" <summary>Hi</summary>")
        root.children  # [Text(" "), Element("summary", [], [Text("Hi")])]
    """
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
    try:
        root = ET.fromstring(f"<{ROOT_TAG}>{content}</{ROOT_TAG}>", parser=parser)
    except ET.ParseError as error:
        line_number, column = getattr(error, "position", (None, None))
        raise MarkupParseError(str(error), line_number, column) from error

    try:
        return _convert(root)
    except RecursionError as error:
        raise NestingTooDeepError() from error
