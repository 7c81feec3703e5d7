"""Main show file parser.

This module folds the classified lines of a show file into a
``Showfile`` document.
"""

from __future__ import annotations

from showfile.classifier import classify_lines, detect_newline
from showfile.dialect import DEFAULT_DIALECT, Dialect
from showfile.models import (
    Header,
    HeaderLine,
    MarkerLine,
    Row,
    RowLine,
    Section,
    Showfile,
    SpacerLine,
)


def _build_section(marker: MarkerLine, rows: list[Row], trailing: int, dialect: Dialect) -> Section:
    return Section(dialect.identifier_for(marker.tag), marker.arguments, tuple(rows), trailing)


def parse(text: str, dialect: Dialect | None = None) -> Showfile:
    """Parse show file text into a document.

    This is the main entry point for reading show files. Headers and
    sections keep the order they have in the text; field text is stored
    unchanged. Sections with unknown tags are kept as ``UnknownTag``
    sections.

    Parameters
    ----------
    text : str
        The complete show file text. Empty text gives an empty showfile.
    dialect : Dialect | None
        The syntax to read, ``DEFAULT_DIALECT`` if None.

    Returns
    -------
    Showfile
        The parsed document, remembering the dialect and line ending.

    Raises
    ------
    MalformedLine
        If any line cannot be read. No partial document is returned.

    Examples
    --------
    >>> text = '''Name MyShow
    ... $CUESTACK,Intro
    ... 1,Blackout,0
    ... 2,Fade Up,5
    ...
    ... $CUESTACK,Main
    ... 1,Open,3
    ... '''
    >>> show = parse(text)
    >>> show.headers
    (Header(key='Name', value='MyShow'),)
    >>> [len(section.rows) for section in show.sections]
    [3, 1]
    >>> show.sections[0].rows[2].is_blank
    True
    """
    if dialect is None:
        dialect = DEFAULT_DIALECT

    headers: list[Header] = []
    sections: list[Section] = []
    marker: MarkerLine | None = None
    rows: list[Row] = []
    trailing = 0

    for line in classify_lines(text, dialect):
        if isinstance(line, HeaderLine):
            headers.append(Header(line.key, line.value))
        elif isinstance(line, MarkerLine):
            if marker is not None:
                sections.append(_build_section(marker, rows, trailing, dialect))
            marker, rows, trailing = line, [], 0
        elif isinstance(line, RowLine):
            rows.append(Row(line.fields))
        elif isinstance(line, SpacerLine):
            trailing += 1
        # TerminatorLine closes the section; the next marker opens a new one

    if marker is not None:
        sections.append(_build_section(marker, rows, trailing, dialect))

    return Showfile._from_parsed(headers, sections, dialect, detect_newline(text))
