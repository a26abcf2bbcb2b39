"""Source text normalization helpers applied before pattern scanning."""

import logging
import re

logger = logging.getLogger(__name__)

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_comments(text: str) -> str:
    """Remove block and line comments from script source.

    Block comments are removed first, non-greedy and across lines, then
    everything from ``//`` to the end of its line. Comment markers inside
    string literals are not special-cased, so a URL such as ``'http://x'``
    loses its tail.

    Args:
        text: Raw source text.

    Returns:
        Text with comments removed. Line numbers of the result differ from the
        original wherever a removed block comment spanned several lines.
    """
    without_blocks = _BLOCK_COMMENT_RE.sub("", text)
    return _LINE_COMMENT_RE.sub("", without_blocks)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run into one space and trim the result."""
    return _WHITESPACE_RE.sub(" ", text).strip()
