"""Field-level tokenizer for show file lines.

This module splits a single line into raw fields, headers into key and
value, and recognizes marker lines. It never changes field text: quotes and
escapes stay in place so that joining the fields gives back the line.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from showfile.dialect import Dialect

# A marker tag is a run of letters, digits and underscores
TAG_RE = re.compile(r"[A-Za-z0-9_]+")


def is_valid_tag(tag: str) -> bool:
    """Check if text can be used as a marker tag.

    Examples
    --------
    >>> is_valid_tag("CUESTACK")
    True
    >>> is_valid_tag("E1")
    True
    >>> is_valid_tag("Cue Stack")
    False
    """
    return TAG_RE.fullmatch(tag) is not None


def _closing_quote(text: str, start: int, quote: str, escape: str | None) -> int:
    """Find the index of the quote closing a field whose body starts at ``start``."""
    i = start
    n = len(text)
    while i < n:
        if escape and text.startswith(escape, i):
            i += len(escape) + 1
            continue
        if text.startswith(quote, i):
            return i
        i += 1
    msg = "unterminated quoted field"
    raise ValueError(msg)


def split_fields(text: str, dialect: Dialect) -> list[str]:
    """Split a line into raw fields.

    Quoted fields may contain the delimiter; the quotes stay part of the
    field text. An empty line has no fields, and a trailing delimiter gives
    a trailing empty field.

    Parameters
    ----------
    text : str
        The line, without its line ending.
    dialect : Dialect
        Supplies the field delimiter, quote and escape characters.

    Returns
    -------
    list[str]
        The raw fields in column order.

    Raises
    ------
    ValueError
        If a quoted field is not closed, or a closing quote is followed by
        something other than a delimiter.

    Examples
    --------
    >>> from showfile.dialect import DEFAULT_DIALECT
    >>> split_fields('1,"Fade, Up",5', DEFAULT_DIALECT)
    ['1', '"Fade, Up"', '5']
    >>> split_fields("007d,0000,", DEFAULT_DIALECT)
    ['007d', '0000', '']
    >>> split_fields("", DEFAULT_DIALECT)
    []
    """
    if not text:
        return []

    delimiter = dialect.field_delimiter
    quote = dialect.quote_char
    fields: list[str] = []
    n = len(text)
    start = 0

    while True:
        if quote and text.startswith(quote, start):
            close = _closing_quote(text, start + len(quote), quote, dialect.escape_char)
            end = close + len(quote)
            if end < n and not text.startswith(delimiter, end):
                msg = f"unexpected {text[end]!r} after closing quote"
                raise ValueError(msg)
        else:
            end = text.find(delimiter, start)
            if end == -1:
                end = n

        fields.append(text[start:end])
        if end >= n:
            return fields

        # Skip the delimiter; a delimiter at the very end opens an empty field
        start = end + len(delimiter)
        if start >= n:
            fields.append("")
            return fields


def join_fields(fields: Sequence[str], dialect: Dialect) -> str:
    """Join raw fields back into a line."""
    return dialect.field_delimiter.join(fields)


def split_header(text: str, dialect: Dialect) -> tuple[str, str | None]:
    """Split header text (prefix already removed) on the first delimiter.

    Examples
    --------
    >>> from showfile.dialect import DEFAULT_DIALECT
    >>> split_header("Name My Show", DEFAULT_DIALECT)
    ('Name', 'My Show')
    >>> split_header("Untitled", DEFAULT_DIALECT)
    ('Untitled', None)
    """
    key, delimiter, value = text.partition(dialect.header_delimiter)
    if not delimiter:
        return key, None
    return key, value


def format_header(key: str, value: str | None, dialect: Dialect) -> str:
    """Format a header line, prefix included. Blank headers give an empty line."""
    if key == "" and value is None:
        return ""
    if value is None:
        return f"{dialect.header_prefix}{key}"
    return f"{dialect.header_prefix}{key}{dialect.header_delimiter}{value}"


def match_marker(text: str, dialect: Dialect) -> tuple[str, str | None] | None:
    """Recognize a section marker line.

    Parameters
    ----------
    text : str
        The line to check.
    dialect : Dialect
        Supplies the sentinel and field delimiter.

    Returns
    -------
    tuple[str, str | None] | None
        ``(tag, rest)`` where ``rest`` is the text after the first field
        delimiter (None if there is none), or None if the line is not a
        marker. A line that starts with the sentinel but has no valid tag
        is not a marker.

    Examples
    --------
    >>> from showfile.dialect import DEFAULT_DIALECT, MAGICQ_DIALECT
    >>> match_marker("$CUESTACK,Intro", DEFAULT_DIALECT)
    ('CUESTACK', 'Intro')
    >>> match_marker("$GROUP", DEFAULT_DIALECT)
    ('GROUP', None)
    >>> match_marker('V,007d,"MagicQ 1",;', MAGICQ_DIALECT)
    ('V', '007d,"MagicQ 1",;')
    >>> match_marker("1,Blackout,0", DEFAULT_DIALECT)
    >>> match_marker("$ 5.00,price", DEFAULT_DIALECT)
    """
    sentinel = dialect.marker_sentinel
    if sentinel:
        if not text.startswith(sentinel):
            return None
        tag, delimiter, rest = text[len(sentinel) :].partition(dialect.field_delimiter)
        if not is_valid_tag(tag):
            return None
        return tag, (rest if delimiter else None)

    # Without a sentinel only "TAG," reads as a marker
    tag, delimiter, rest = text.partition(dialect.field_delimiter)
    if not delimiter or not is_valid_tag(tag):
        return None
    return tag, rest


def format_marker(tag: str, arguments: Sequence[str], dialect: Dialect) -> str:
    """Format a marker line for a dialect without a section terminator."""
    line = f"{dialect.marker_sentinel}{tag}"
    if arguments:
        line = f"{line}{dialect.field_delimiter}{join_fields(arguments, dialect)}"
    return line


def _check_line_breaks(text: str) -> None:
    if "\n" in text or "\r" in text:
        msg = f"Line break in {text!r}"
        raise ValueError(msg)


def validate_fields(fields: Sequence[str], dialect: Dialect) -> None:
    """Check that fields read back unchanged once joined.

    Raises
    ------
    ValueError
        If a field holds a line break, an unquoted delimiter or unbalanced
        quotes, or if the fields are a single empty field (which reads back
        as a blank row).
    """
    for value in fields:
        _check_line_breaks(value)
    if not fields:
        return
    if split_fields(join_fields(fields, dialect), dialect) != list(fields):
        msg = f"Fields {list(fields)!r} do not read back unchanged in the {dialect.name} dialect"
        raise ValueError(msg)


def _reads_as_marker(text: str, dialect: Dialect) -> bool:
    return match_marker(text, dialect) is not None


def validate_row(fields: Sequence[str], dialect: Dialect) -> None:
    """Check that a row reads back as the same row of the open section.

    Raises
    ------
    ValueError
        If the fields are invalid, or the row would read back as a marker
        or a section terminator.
    """
    validate_fields(fields, dialect)
    text = join_fields(fields, dialect)
    if dialect.terminated:
        if text.endswith(dialect.section_terminator):
            msg = f"Row {text!r} would read back as the end of its section"
            raise ValueError(msg)
    elif _reads_as_marker(text, dialect):
        msg = f"Row {text!r} would read back as a section marker"
        raise ValueError(msg)


def validate_arguments(tag: str, arguments: Sequence[str], dialect: Dialect) -> None:
    """Check that a marker line with these arguments reads back unchanged.

    Raises
    ------
    ValueError
        If the dialect puts rows on the marker line and arguments were
        given, or the arguments do not read back unchanged.
    """
    if not arguments:
        return
    if dialect.terminated:
        msg = f"Markers in the {dialect.name} dialect take no arguments"
        raise ValueError(msg)
    for value in arguments:
        _check_line_breaks(value)
    if split_fields(join_fields([tag, *arguments], dialect), dialect)[1:] != list(arguments):
        msg = f"Arguments {list(arguments)!r} do not read back unchanged in the {dialect.name} dialect"
        raise ValueError(msg)


def validate_header(key: str, value: str | None, dialect: Dialect) -> None:
    """Check that a header line reads back as the same header.

    Raises
    ------
    ValueError
        If the key or value holds a line break, the key holds the header
        delimiter, or the line would read back as a section marker.
    """
    _check_line_breaks(key)
    if value is not None:
        _check_line_breaks(value)
    if key == "" and value is None:
        return
    if dialect.header_delimiter in key:
        msg = f"Header key {key!r} contains the header delimiter {dialect.header_delimiter!r}"
        raise ValueError(msg)
    line = format_header(key, value, dialect)
    if _reads_as_marker(line, dialect):
        msg = f"Header {line!r} would read back as a section marker"
        raise ValueError(msg)
