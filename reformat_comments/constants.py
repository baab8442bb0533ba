"""Constants used across the reformat-comments package."""

from __future__ import annotations

import re

from .config import FormatterConfig

DEFAULT_CONFIG = FormatterConfig()

# Tag vocabularies
INLINE_TAGS = frozenset({"see", "paramref", "typeparamref", "c"})
BLOCK_LEVEL_TAGS = frozenset({"code", "para", "list", "description"})
LIST_TAG = "list"
LIST_ITEM_TAG = "item"
CODE_TAG = "code"
SUMMARY_TAG = "summary"

# Synthetic element wrapped around the contents of a comment run before parsing
ROOT_TAG = "outer"

# Comment markers
SLASH_MARKER = "///"
QUOTE_MARKER = "'''"
COMMENT_LINE_PATTERN = re.compile(r"^(?P<indent>\s*)(?P<marker>///|''')(?P<rest>.*)$")
LINE_BREAK_PATTERN = re.compile(r"\r?\n")

# Rendering patterns
TRAILING_END_TAGS_PATTERN = re.compile(r"(</\w+>)+$")
CODE_OPEN_PATTERN = re.compile(r"<code(\s[^>]*)?(?<!/)>")
CODE_CLOSE_MARKER = "</code>"

# Layout defaults
WRAP_WIDTH = DEFAULT_CONFIG.wrap_width
INDENT_WIDTH = DEFAULT_CONFIG.indent_width

DIAGNOSTIC_PREFIX = "The following comment is not valid: "

# Filesystem defaults
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
SOURCE_EXTENSIONS = (".cs", ".vb", ".fs", ".fsi", ".fsx")
BACKUP_SUFFIX = ".bak"
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d--%H.%M.%S"
