"""Line classification for show files.

This module turns raw show file text into a lazy sequence of classified
lines: headers, section markers, data rows and, for dialects with a
section terminator, section ends and the blank lines between sections.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import Enum

from showfile.dialect import DEFAULT_DIALECT, Dialect
from showfile.errors import MalformedLine
from showfile.models import (
    ClassifiedLine,
    HeaderLine,
    MarkerLine,
    RowLine,
    SpacerLine,
    TerminatorLine,
)
from showfile.tokenizer import match_marker, split_fields, split_header

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class ParseState(Enum):
    """Where the classifier is in the document."""

    BEFORE_FIRST_SECTION = "before_first_section"
    IN_SECTION = "in_section"
    BETWEEN_SECTIONS = "between_sections"


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs without line endings.

    ``\\r\\n``, ``\\r`` and ``\\n`` all end a line. A final line ending does
    not start another line, so empty text yields nothing.

    Examples
    --------
    >>> list(iter_lines("a\\r\\n\\nb\\n"))
    [(1, 'a'), (2, ''), (3, 'b')]
    """
    start = 0
    number = 0
    for match in LINE_BREAK_RE.finditer(text):
        number += 1
        yield number, text[start : match.start()]
        start = match.end()
    if start < len(text):
        yield number + 1, text[start:]


def detect_newline(text: str) -> str:
    """Return the first line ending used in the text (``\\n`` if none)."""
    match = LINE_BREAK_RE.search(text)
    return match.group() if match else "\n"


def _header_line(number: int, line: str, dialect: Dialect) -> HeaderLine:
    prefix = dialect.header_prefix
    if prefix:
        if not line.startswith(prefix):
            msg = f"header line does not start with {prefix!r}"
            raise ValueError(msg)
        line = line[len(prefix) :]
    key, value = split_header(line, dialect)
    return HeaderLine(number, key, value)


def _split_row(text: str, dialect: Dialect) -> tuple[list[str] | None, bool]:
    """Split row text, detaching a section terminator.

    Returns the fields (None when the line holds nothing but the
    terminator) and whether the line ends the section.
    """
    terminator = dialect.section_terminator
    if terminator and text.endswith(terminator):
        content = text[: -len(terminator)]
        return (split_fields(content, dialect) if content else None), True
    return split_fields(text, dialect), False


def classify_lines(text: str, dialect: Dialect = DEFAULT_DIALECT) -> Iterator[ClassifiedLine]:
    """Classify show file lines lazily.

    Before the first marker every line is a header (blank lines included);
    after it every non-marker line is a row of the open section. Marker tags
    are not checked against the dialect's table here.

    For terminated dialects the marker line also carries the first row,
    markers are only recognized between sections, and the line ending
    with the terminator closes the section.

    Parameters
    ----------
    text : str
        The complete show file text.
    dialect : Dialect
        The syntax to read.

    Yields
    ------
    ClassifiedLine
        One record per header, marker and row; terminated dialects also
        yield ``TerminatorLine`` and ``SpacerLine`` records.

    Raises
    ------
    MalformedLine
        On the first line that cannot be read. Lines before it have already
        been yielded.

    Examples
    --------
    >>> lines = classify_lines("Name MyShow\\n$CUESTACK,Intro\\n1,Blackout,0\\n")
    >>> [type(line).__name__ for line in lines]
    ['HeaderLine', 'MarkerLine', 'RowLine']
    """
    state = ParseState.BEFORE_FIRST_SECTION
    opened_at: tuple[int, str] | None = None
    last: tuple[int, str] | None = None

    for number, line in iter_lines(text):
        last = (number, line)
        try:
            if state is ParseState.IN_SECTION:
                marker = None if dialect.terminated else match_marker(line, dialect)
                if marker is None:
                    fields, closed = _split_row(line, dialect)
                    if fields is not None:
                        yield RowLine(number, tuple(fields))
                    if closed:
                        yield TerminatorLine(number)
                        state = ParseState.BETWEEN_SECTIONS
                    continue
            elif state is ParseState.BETWEEN_SECTIONS:
                if not line.strip():
                    yield SpacerLine(number)
                    continue
                marker = match_marker(line, dialect)
                if marker is None:
                    msg = "text outside of a section"
                    raise ValueError(msg)
            else:
                marker = match_marker(line, dialect) if line else None
                if marker is None:
                    yield _header_line(number, line, dialect) if line else HeaderLine(number, "", None)
                    continue

            tag, rest = marker
            opened_at = (number, tag)
            if not dialect.terminated:
                body = line[len(dialect.marker_sentinel) :]
                yield MarkerLine(number, tag, tuple(split_fields(body, dialect)[1:]))
                state = ParseState.IN_SECTION
                continue

            yield MarkerLine(number, tag)
            fields, closed = _split_row(rest or "", dialect)
            if fields is not None:
                yield RowLine(number, tuple(fields))
            if closed:
                yield TerminatorLine(number)
                state = ParseState.BETWEEN_SECTIONS
            else:
                state = ParseState.IN_SECTION
        except ValueError as exc:
            raise MalformedLine(number, str(exc), line) from exc

    if dialect.terminated and state is ParseState.IN_SECTION and last is not None and opened_at is not None:
        number, line = last
        reason = f"section {opened_at[1]!r} opened on line {opened_at[0]} is never terminated"
        raise MalformedLine(number, reason, line)
