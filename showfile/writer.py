"""Show file writer.

This module walks a ``Showfile`` and emits its text in the showfile's
dialect. Writing performs no validation: the model only accepts content
that reads back unchanged, so every showfile can be written.
"""

from __future__ import annotations

from collections.abc import Iterator

from showfile.dialect import Dialect
from showfile.models import Section, Showfile
from showfile.tokenizer import format_header, format_marker, join_fields


def _terminated_section_lines(section: Section, dialect: Dialect) -> Iterator[str]:
    """Lines of a section in a terminated dialect.

    The first row shares the marker line; the terminator follows the last
    row, on a line of its own if that row is blank.
    """
    tag = dialect.tag_for(section.identifier)
    marker = f"{dialect.marker_sentinel}{tag}{dialect.field_delimiter}"
    terminator = dialect.section_terminator or ""

    lines = [join_fields(row.fields, dialect) for row in section.rows]
    if not lines:
        yield marker + terminator
    else:
        lines[0] = marker + lines[0]
        if section.rows[-1].is_blank:
            lines.append(terminator)
        else:
            lines[-1] += terminator
        yield from lines

    for _ in range(section.trailing_blank_lines):
        yield ""


def iter_output_lines(showfile: Showfile) -> Iterator[str]:
    """Yield the lines of a showfile's text, without line endings."""
    dialect = showfile.dialect

    for header in showfile.headers:
        yield format_header(header.key, header.value, dialect)

    for section in showfile.sections:
        if dialect.terminated:
            yield from _terminated_section_lines(section, dialect)
            continue
        yield format_marker(dialect.tag_for(section.identifier), section.arguments, dialect)
        for row in section.rows:
            yield join_fields(row.fields, dialect)


def serialize(showfile: Showfile) -> str:
    """Serialize a showfile to text.

    Headers come first, then each section's marker line and rows. Lines end
    with the showfile's newline; empty showfiles give empty text.

    Parameters
    ----------
    showfile : Showfile
        The document to write.

    Returns
    -------
    str
        Text that parses back to an equal showfile.

    Examples
    --------
    >>> from showfile.parser import parse
    >>> show = parse("Name MyShow\\n$CUESTACK,Intro\\n1,Blackout,0\\n\\n")
    >>> serialize(show)
    'Name MyShow\\n$CUESTACK,Intro\\n1,Blackout,0\\n\\n'
    >>> serialize(parse(""))
    ''
    """
    newline = showfile.newline
    return "".join(line + newline for line in iter_output_lines(showfile))
