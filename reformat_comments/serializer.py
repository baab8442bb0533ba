"""Serialization of elements and escaping of text and attribute values."""

from __future__ import annotations

import html
from collections.abc import Callable

from .models import Element


def escape_text(text: str) -> str:
    # Quotes are left alone inside character data
    return html.escape(text, quote=False)


def escape_attribute(value: str) -> str:
    return html.escape(value, quote=True)


def format_attributes(element: Element) -> str:
    return "".join(f' {name}="{escape_attribute(value)}"' for name, value in element.attributes)


def format_tag(element: Element, block_level: bool, inside: Callable[[], str]) -> str:
    """Render an element around its already formatted contents.

    Childless elements become self-closing tags. In block mode a line break
    follows the opening tag; the closing tag always follows the contents
    directly.

    Args:
        element: Element to render.
        block_level: Whether the element is laid out as a block.
        inside: Callback producing the rendered contents; only called when the
            element has children.

    Returns:
        str: The serialized element.

    Examples:
        format_tag(Element("see", [("cref", "List<T>")]), False, lambda: "")
        # '<see cref="List&lt;T&gt;"/>'
    """
    attributes = format_attributes(element)
    if not element.children:
        return f"<{element.name}{attributes}/>"

    separator = "\n" if block_level else ""
    return f"<{element.name}{attributes}>{separator}{inside()}</{element.name}>"
