"""Data models for reformat-comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from .constants import QUOTE_MARKER, SLASH_MARKER
from .exceptions import FormatError, StructureError


class CommentKind(Enum):
    """Comment prefix styles recognized by the segmenter.

    Attributes:
        NONE: Plain source line, passed through verbatim.
        SLASH: ``///`` documentation comment.
        QUOTE: ``'''`` documentation comment.
    """

    NONE = auto()
    SLASH = auto()
    QUOTE = auto()

    @property
    def marker(self) -> str | None:
        return _MARKERS.get(self)


_MARKERS = {CommentKind.SLASH: SLASH_MARKER, CommentKind.QUOTE: QUOTE_MARKER}


class TagClass(Enum):
    """Classification of an element name against the fixed vocabularies."""

    INLINE = auto()
    BLOCK = auto()
    UNKNOWN = auto()


class RenderMode(Enum):
    """How a sibling node list is laid out.

    Attributes:
        BLOCK: Each element on its own line with indented contents.
        INLINE: Nodes flow together with the surrounding text.
        INVALID: The list cannot be laid out; see `Classification.error`.
    """

    BLOCK = auto()
    INLINE = auto()
    INVALID = auto()


@dataclass(frozen=True)
class SourceLine:
    """One line of the input.

    Attributes:
        index: Zero-based position of the line in the input.
        text: Raw text of the line, without its line break.
        kind: Comment prefix style of the line.
        content: Text after the comment marker, or None for plain lines.
    """

    index: int
    text: str
    kind: CommentKind = CommentKind.NONE
    content: str | None = None


@dataclass
class LineGroup:
    """Consecutive lines sharing the same `CommentKind`.

    Attributes:
        kind: Comment prefix style shared by every line of the group.
        lines: Lines of the group in original order.
    """

    kind: CommentKind
    lines: list[SourceLine]

    @property
    def start(self) -> int:
        return self.lines[0].index

    @property
    def count(self) -> int:
        return len(self.lines)

    def original_lines(self) -> list[str]:
        return [line.text for line in self.lines]


@dataclass
class CommentRun(LineGroup):
    """A group of documentation-comment lines formatted as one unit."""

    @property
    def indentation(self) -> int:
        first = self.lines[0].text
        return len(first) - len(first.lstrip())

    @property
    def content(self) -> str:
        return "\n".join(line.content or "" for line in self.lines)

    @property
    def prefix(self) -> str:
        """Leading text written before every reformatted line, e.g. ``"    /// "``."""
        return f"{' ' * self.indentation}{self.kind.marker} "


@dataclass
class Text:
    """Character data inside a comment."""

    value: str

    @property
    def is_whitespace(self) -> bool:
        return not self.value.strip()


@dataclass
class Element:
    """A markup element with ordered attributes and children.

    Attributes:
        name: Local tag name.
        attributes: ``(name, value)`` pairs in document order.
        children: Child nodes in document order.
    """

    name: str
    attributes: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    @property
    def elements(self) -> list[Element]:
        return [child for child in self.children if isinstance(child, Element)]


@dataclass
class RawMarkup:
    """An XML comment or processing instruction, kept as its source text.

    Attributes:
        value: The construct as written, e.g. ``"<!-- TODO -->"``.
    """

    value: str


Node = Union[Text, Element, RawMarkup]


@dataclass
class Classification:
    """Render mode chosen for a node list.

    Attributes:
        mode: Selected render mode.
        error: Reason for a `RenderMode.INVALID` verdict, otherwise None.
    """

    mode: RenderMode
    error: StructureError | None = None


@dataclass
class RunResult:
    """Outcome of formatting one line group.

    Attributes:
        group: The group that was processed.
        lines: Output lines without line breaks.
        error: Failure that caused the original lines to be kept, if any.
    """

    group: LineGroup
    lines: list[str]
    error: FormatError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FormatResult:
    """Structured result of reformatting a whole source text.

    Attributes:
        text: Rewritten source text; every line ends with ``"\\n"``.
        failures: Results of comment runs that were left unmodified.
    """

    text: str
    failures: list[RunResult] = field(default_factory=list)
