"""Package-specific exception types."""

from __future__ import annotations


class FormatError(ValueError):
    """Base class for errors that prevent a comment from being reformatted.

    Raised while processing a single comment run; the driver catches it and
    keeps the run's original lines.
    """


class MarkupParseError(FormatError):
    """Raised when the contents of a comment are not well-formed markup.

    Args:
        message: Message reported by the XML parser.
        line_number: One-based line inside the comment run, when known.
        column: Zero-based column reported by the parser, when known.
    """

    def __init__(self, message: str, line_number: int | None = None, column: int | None = None):
        self.line_number = line_number
        self.column = column
        super().__init__(message)


class StructureError(FormatError):
    """Raised when well-formed markup cannot be laid out as block or inline content."""


class ConflictingTagsError(StructureError):
    """Raised when block-level and inline-level tags appear as siblings.

    Args:
        block_tag: Name of the first block-level sibling.
        inline_tag: Name of the first inline-level sibling.
    """

    def __init__(self, block_tag: str, inline_tag: str):
        self.block_tag = block_tag
        self.inline_tag = inline_tag
        super().__init__(f'"{block_tag}" is block-level, but "{inline_tag}" is inline-level.')


class UnknownTagError(StructureError):
    """Raised when a tag in neither vocabulary decides the layout of its siblings.

    Args:
        tag: Name of the unknown tag.
    """

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f'I don\'t know whether "{tag}" is inline-level or block-level.')


class MixedContentError(StructureError):
    """Raised when raw text sits next to block-level elements."""

    def __init__(self):
        super().__init__(
            "This comment contains an element that contains both block-level elements "
            "as well as raw text. Wrap the text in <para>."
        )


class InvalidListError(StructureError):
    """Raised when a ``list`` element has children other than ``item`` elements."""

    def __init__(self):
        super().__init__('A "list" tag is not supposed to contain anything other than "item" tags.')


class UnsupportedMarkupError(StructureError):
    """Raised when an XML comment or processing instruction sits inside laid-out content.

    Args:
        markup: The offending construct as written.
    """

    def __init__(self, markup: str):
        self.markup = markup
        super().__init__(f"Cannot reformat content that contains {markup}")


class NestingTooDeepError(StructureError):
    """Raised when elements are nested too deeply to be processed."""

    def __init__(self):
        super().__init__("This comment nests its elements too deeply to be reformatted.")
