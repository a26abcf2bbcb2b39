# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Extract ``stream(...)`` / ``setAlert(...)`` call-site pairs from script source.

The extractor recognizes one idiom::

    translate.stream('some.key').subscribe(message => {
        alerts.setAlert(a, b, 'page-alert', d, AlertType.ERROR);
    });

It scans comment-stripped text for each ``.stream(`` call, reads the leading
string literal, then looks for the first ``.setAlert(`` inside a line-count
window cut short where the ``stream`` statement ends, and splits its argument
list on top-level commas.
"""

import bisect
import logging
import re

from aks.analyzer import CallSitePattern
from aks.normalizer import collapse_whitespace, strip_comments

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_LINES = 20
MIN_SET_ALERT_ARGUMENTS = 5

_STREAM_CALL_RE = re.compile(r"\.stream\s*\(")
_SET_ALERT_CALL_RE = re.compile(r"\.setAlert\s*\(")
_QUOTES = frozenset("'\"`")
_OPENERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


def parse_string_literal(text: str) -> str | None:
    """Return the content of a complete string literal.

    Args:
        text: Candidate argument text, surrounding whitespace allowed.

    Returns:
        Trimmed literal content, or ``None`` when ``text`` is not exactly one
        non-empty literal delimited by ``'``, ``"`` or a backtick.
    """
    candidate = text.strip()
    if len(candidate) < 2 or candidate[0] not in _QUOTES:
        return None
    quote = candidate[0]
    if candidate.find(quote, 1) != len(candidate) - 1:
        return None
    value = candidate[1:-1].strip()
    return value or None


def split_arguments(text: str, open_index: int) -> tuple[list[str], int] | None:
    """Split a call argument list on top-level commas.

    Commas nested in parentheses, brackets, braces or string literals are not
    separators. A backslash inside a literal skips the following character.

    Args:
        text: Source text containing the call.
        open_index: Index of the opening parenthesis of the call.

    Returns:
        A tuple of trimmed argument texts and the index of the closing
        parenthesis, or ``None`` when the list is unterminated or mismatched.
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != "(":
        return None

    arguments: list[str] = []
    expected_closers: list[str] = []
    quote: str | None = None
    start = open_index + 1
    index = start
    while index < len(text):
        char = text[index]
        if quote is not None:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            expected_closers.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not expected_closers:
                if char != ")":
                    return None
                arguments.append(text[start:index].strip())
                return arguments, index
            if char != expected_closers.pop():
                return None
        elif char == "," and not expected_closers:
            arguments.append(text[start:index].strip())
            start = index + 1
        index += 1
    return None


class PatternExtractor:
    """Find ``stream`` / ``setAlert`` call-site pairs in one source text."""

    def __init__(self, window_lines: int = DEFAULT_WINDOW_LINES) -> None:
        """Initialize the extractor.

        Args:
            window_lines: Number of lines below a ``stream`` call searched for
                the paired ``setAlert`` call.

        Raises:
            ValueError: If ``window_lines`` is not positive.
        """
        if window_lines <= 0:
            raise ValueError("window_lines must be greater than 0.")
        self._window_lines = window_lines

    @property
    def window_lines(self) -> int:
        return self._window_lines

    def extract(self, text: str) -> list[CallSitePattern]:
        """Extract call-site patterns from raw source text.

        Args:
            text: Raw file content; comments are stripped before scanning.

        Returns:
            Patterns sorted by line number, unique on
            ``(line_number, translation_key)``.
        """
        cleaned = strip_comments(text)
        line_starts = _line_starts(cleaned)
        keyed_calls: list[tuple[re.Match[str], str, int]] = []
        for stream_call in _STREAM_CALL_RE.finditer(cleaned):
            leading = _read_leading_literal(cleaned, stream_call.end())
            if leading is None:
                line_number = bisect.bisect_right(line_starts, stream_call.start())
                logger.debug(f"stream call without literal key (line={line_number})")
                continue
            keyed_calls.append((stream_call, leading[0], leading[1]))
        keyed_starts = frozenset(stream_call.start() for stream_call, _, _ in keyed_calls)

        patterns: list[CallSitePattern] = []
        seen: set[tuple[int, str]] = set()
        for stream_call, translation_key, key_end in keyed_calls:
            pattern = self._match_stream_call(
                text=cleaned,
                line_starts=line_starts,
                stream_call=stream_call,
                translation_key=translation_key,
                key_end=key_end,
                keyed_starts=keyed_starts,
            )
            if pattern is None:
                continue
            identity = (pattern.line_number, pattern.translation_key)
            if identity in seen:
                logger.debug(
                    f"Dropping duplicate pattern (line={pattern.line_number} key={pattern.translation_key})"
                )
                continue
            seen.add(identity)
            patterns.append(pattern)

        return sorted(patterns, key=lambda pattern: pattern.line_number)

    def _match_stream_call(
        self,
        text: str,
        line_starts: list[int],
        stream_call: re.Match[str],
        translation_key: str,
        key_end: int,
        keyed_starts: frozenset[int],
    ) -> CallSitePattern | None:
        line_number = bisect.bisect_right(line_starts, stream_call.start())
        window_end = _statement_end(
            text,
            open_index=stream_call.end() - 1,
            limit=self._window_end(line_starts, line_number, len(text)),
            keyed_starts=keyed_starts,
        )
        alert_call = _SET_ALERT_CALL_RE.search(text, key_end, window_end)
        if alert_call is None:
            logger.debug(
                f"No setAlert call in window (line={line_number} key={translation_key})"
            )
            return None

        parsed = split_arguments(text, alert_call.end() - 1)
        if parsed is None:
            return None
        arguments, close_index = parsed
        if len(arguments) < MIN_SET_ALERT_ARGUMENTS:
            logger.debug(
                f"setAlert call has too few arguments (line={line_number} count={len(arguments)})"
            )
            return None

        alert_container = parse_string_literal(arguments[2])
        alert_type = _clean_token(arguments[4])
        if alert_container is None or not alert_type:
            return None

        return CallSitePattern(
            translation_key=translation_key,
            alert_container=alert_container,
            alert_type=alert_type,
            line_number=line_number,
            raw_snippet=collapse_whitespace(text[stream_call.start() : close_index + 1]),
        )

    def _window_end(self, line_starts: list[int], line_number: int, text_length: int) -> int:
        # line_starts[n] is the first offset of line n + 1
        next_line_index = line_number + self._window_lines
        if next_line_index < len(line_starts):
            return line_starts[next_line_index]
        return text_length


def _line_starts(text: str) -> list[int]:
    starts = [0]
    index = text.find("\n")
    while index != -1:
        starts.append(index + 1)
        index = text.find("\n", index + 1)
    return starts


def _statement_end(
    text: str, open_index: int, limit: int, keyed_starts: frozenset[int]
) -> int:
    """Return the offset where the statement of a ``stream`` call ends.

    The statement ends at the first ``;`` outside any bracket opened after the
    call, at the bracket closing the enclosing block, or at another keyed
    ``.stream(`` call on the same nesting level. Calls nested in the
    ``subscribe`` callback do not end it.

    Args:
        text: Comment-stripped source text.
        open_index: Index of the opening parenthesis of the ``stream`` call.
        limit: Offset where the line window ends.
        keyed_starts: Offsets of ``.stream(`` calls with a literal key.

    Returns:
        End offset of the statement, capped at ``limit``.
    """
    depth = 0
    quote: str | None = None
    index = open_index
    while index < limit:
        char = text[index]
        if quote is not None:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth < 0:
                return index
        elif depth == 0 and (char == ";" or index in keyed_starts):
            return index
        index += 1
    return limit


def _read_leading_literal(text: str, start: int) -> tuple[str, int] | None:
    """Read the string literal opening a call argument list.

    Args:
        text: Source text.
        start: Index just past the opening parenthesis.

    Returns:
        Trimmed literal content and the index after its closing quote, or
        ``None`` when no non-empty terminated literal starts the list.
    """
    index = start
    while index < len(text) and text[index].isspace():
        index += 1
    if index >= len(text) or text[index] not in _QUOTES:
        return None
    quote = text[index]
    closing = text.find(quote, index + 1)
    if closing == -1:
        return None
    value = text[index + 1 : closing].strip()
    if not value:
        return None
    return value, closing + 1


def _clean_token(token: str) -> str:
    cleaned = token.strip().rstrip(";").strip()
    while cleaned.endswith(")") and cleaned.count(")") > cleaned.count("("):
        cleaned = cleaned[:-1].rstrip().rstrip(";").rstrip()
    return cleaned
