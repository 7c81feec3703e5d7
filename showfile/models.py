"""Data models for show file documents.

This module defines the document tree (``Showfile`` → ``Section`` → ``Row``
→ raw field text), the section identifier variant, and the records the
line classifier produces.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from showfile import tokenizer, values

if TYPE_CHECKING:
    from showfile.dialect import Dialect

NEWLINES = ("\n", "\r\n", "\r")


class SectionKind(Enum):
    """Section types whose marker tag is known."""

    VERSION = "version"
    SETTINGS = "settings"
    HEAD = "head"
    FIXTURE = "fixture"
    PALETTE = "palette"
    GROUP = "group"
    FX = "fx"
    PLAYBACK = "playback"
    CUE_STACK = "cue_stack"
    EXECUTE_PAGE = "execute_page"
    EXECUTE_ITEM = "execute_item"


@dataclass(frozen=True)
class UnknownTag:
    """Identifier of a section whose marker tag is not in the dialect.

    Parameters
    ----------
    tag : str
        The raw tag as written in the file.
    """

    tag: str


SectionIdentifier = SectionKind | UnknownTag


@dataclass(frozen=True)
class Header:
    """A header line from before the first section.

    Parameters
    ----------
    key : str
        Text before the first header delimiter.
    value : str | None
        Text after the first header delimiter, or None when the line has
        no delimiter. A blank line is ``Header("", None)``.

    Examples
    --------
    >>> Header("Name", "MyShow").is_blank
    False
    >>> Header("", None).is_blank
    True
    """

    key: str
    value: str | None = None

    @property
    def is_blank(self) -> bool:
        """Whether this header stands for a blank line."""
        return self.key == "" and self.value is None


@dataclass(frozen=True)
class Row:
    """One line of raw fields belonging to a section.

    Fields keep their exact text, quotes included. A row with no fields
    is a blank line.

    Parameters
    ----------
    fields : tuple[str, ...]
        The raw field text in column order.

    Examples
    --------
    >>> row = Row(("1", '"Fade Up"', "0.500000"))
    >>> row[1]
    '"Fade Up"'
    >>> row.get_string(1)
    'Fade Up'
    >>> row.get_float(2)
    0.5
    """

    fields: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))
        for value in self.fields:
            if not isinstance(value, str):
                msg = f"Row fields must be str, got {type(value).__name__}: {value!r}"
                raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __getitem__(self, index: int) -> str:
        return self.fields[index]

    @property
    def is_blank(self) -> bool:
        """Whether the row is a blank line."""
        return not self.fields

    def get_value(self, index: int) -> values.Value:
        """Interpret a field as a string, hex number or float."""
        return values.parse_value(self.fields[index])

    def get_string(self, index: int) -> str:
        """Interpret a field as a quoted string."""
        return values.parse_string(self.fields[index])

    def get_hex(self, index: int, width: int | None = None) -> int:
        """Interpret a field as a hexadecimal number, optionally of fixed width."""
        return values.parse_hex(self.fields[index], width).value

    def get_float(self, index: int) -> float:
        """Interpret a field as a float."""
        return values.parse_float(self.fields[index])


@dataclass(frozen=True)
class Section:
    """A block of rows introduced by a marker line.

    Sections are read-only. Rows are added through
    ``Showfile.append_row`` so that every edit is validated.

    Parameters
    ----------
    identifier : SectionIdentifier
        Known section kind, or ``UnknownTag`` with the raw tag.
    arguments : tuple[str, ...]
        Raw fields following the tag on the marker line.
    rows : tuple[Row, ...]
        The section's rows, blank rows included.
    trailing_blank_lines : int
        Blank lines between the section terminator and the next marker.
        Always 0 for dialects without a terminator.

    Examples
    --------
    >>> section = Section(SectionKind.CUE_STACK, ("Intro",), [Row(("1", "Blackout"))])
    >>> section.field(0, 1)
    'Blackout'
    >>> len(section)
    1
    """

    identifier: SectionIdentifier
    arguments: tuple[str, ...] = ()
    rows: tuple[Row, ...] = ()
    trailing_blank_lines: int = 0

    # Rows grow in place through Showfile.append_row
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))
        rows = tuple(row if isinstance(row, Row) else Row(tuple(row)) for row in self.rows)
        object.__setattr__(self, "rows", rows)

    def _insert_row(self, row: Row, index: int | None) -> None:
        rows = list(self.rows)
        if index is None:
            rows.append(row)
        else:
            rows.insert(index, row)
        object.__setattr__(self, "rows", tuple(rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def is_known(self) -> bool:
        """Whether the identifier is a known section kind."""
        return isinstance(self.identifier, SectionKind)

    def field(self, row: int, column: int) -> str:
        """Return the raw text of one field.

        Raises
        ------
        IndexError
            If the row or column does not exist.
        """
        return self.rows[row].fields[column]


class Showfile:
    """A parsed show file: ordered headers followed by ordered sections.

    The showfile owns its headers and sections. ``headers`` and
    ``sections`` are read-only tuple views; edits go through the
    ``append_*`` methods, which only ever add at the end or at an explicit
    index and refuse content that would not read back unchanged.

    Parameters
    ----------
    headers : Iterable[Header]
        Initial headers.
    sections : Iterable[Section]
        Initial sections.
    dialect : Dialect | None
        Syntax used to validate edits and to write the file. Defaults to
        ``DEFAULT_DIALECT``.
    newline : str
        Line ending used when writing.

    Examples
    --------
    >>> show = Showfile()
    >>> _ = show.append_header("Name", "MyShow")
    >>> stack = show.append_section(SectionKind.CUE_STACK, ["Intro"])
    >>> _ = show.append_row(stack, ["1", "Blackout", "0"])
    >>> print(show.to_string(), end="")
    Name MyShow
    $CUESTACK,Intro
    1,Blackout,0
    """

    def __init__(
        self,
        headers: Iterable[Header] = (),
        sections: Iterable[Section] = (),
        *,
        dialect: Dialect | None = None,
        newline: str = "\n",
    ) -> None:
        if dialect is None:
            from showfile.dialect import DEFAULT_DIALECT

            dialect = DEFAULT_DIALECT
        if newline not in NEWLINES:
            msg = f"Unsupported newline: {newline!r}"
            raise ValueError(msg)

        self._dialect = dialect
        self._newline = newline
        self._headers: list[Header] = []
        self._sections: list[Section] = []

        for header in headers:
            tokenizer.validate_header(header.key, header.value, dialect)
            self._headers.append(header)
        for section in sections:
            self._check_section(section)
            self._sections.append(section)

    @classmethod
    def _from_parsed(
        cls,
        headers: list[Header],
        sections: list[Section],
        dialect: Dialect,
        newline: str,
    ) -> Showfile:
        """Build a showfile from parser output without re-validating it."""
        showfile = cls(dialect=dialect, newline=newline)
        showfile._headers = headers
        showfile._sections = sections
        return showfile

    @classmethod
    def from_str(cls, text: str, dialect: Dialect | None = None) -> Showfile:
        """Parse show file text.

        See ``showfile.parser.parse``.
        """
        from showfile.parser import parse

        return parse(text, dialect)

    def to_string(self) -> str:
        """Serialize to show file text.

        See ``showfile.writer.serialize``.
        """
        from showfile.writer import serialize

        return serialize(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (
            f"Showfile(headers={len(self._headers)}, sections={len(self._sections)}, "
            f"dialect={self._dialect.name!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Showfile):
            return NotImplemented
        return self._headers == other._headers and self._sections == other._sections

    __hash__ = None  # type: ignore[assignment]

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def newline(self) -> str:
        return self._newline

    @property
    def headers(self) -> tuple[Header, ...]:
        """Headers in file order."""
        return tuple(self._headers)

    @property
    def sections(self) -> tuple[Section, ...]:
        """Sections in file order."""
        return tuple(self._sections)

    def sections_where(self, identifier: SectionIdentifier | str) -> Iterator[Section]:
        """Lazily yield the sections with the given identifier, in file order.

        Each call returns a fresh generator over the current section list.

        Parameters
        ----------
        identifier : SectionIdentifier | str
            A section kind, an ``UnknownTag``, or a raw marker tag which is
            resolved through the showfile's dialect.

        Examples
        --------
        >>> show = Showfile.from_str("$CUESTACK,A\\n$GROUP\\n$CUESTACK,B\\n")
        >>> [s.arguments for s in show.sections_where(SectionKind.CUE_STACK)]
        [('A',), ('B',)]
        >>> [s.arguments for s in show.sections_where("CUESTACK")]
        [('A',), ('B',)]
        """
        if isinstance(identifier, str):
            identifier = self._dialect.identifier_for(identifier)
        return (section for section in self._sections if section.identifier == identifier)

    def append_header(self, key: str, value: str | None = None, *, index: int | None = None) -> Header:
        """Add a header at the end, or before position ``index``.

        Raises
        ------
        ValueError
            If the header would not read back unchanged.
        """
        tokenizer.validate_header(key, value, self._dialect)
        header = Header(key, value)
        self._insert(self._headers, header, index)
        return header

    def append_section(
        self,
        identifier: SectionIdentifier | str,
        arguments: Sequence[str] = (),
        *,
        index: int | None = None,
    ) -> Section:
        """Add an empty section at the end, or before position ``index``.

        Raises
        ------
        ValueError
            If the marker line would not read back unchanged.
        """
        if isinstance(identifier, str):
            identifier = self._dialect.identifier_for(identifier)
        section = Section(identifier, tuple(arguments))
        self._check_section(section)
        self._insert(self._sections, section, index)
        return section

    def append_row(self, section: Section, fields: Sequence[str], *, index: int | None = None) -> Row:
        """Add a row to an owned section, at the end or before position ``index``.

        An empty ``fields`` sequence adds a blank row.

        Raises
        ------
        ValueError
            If the section does not belong to this showfile, or the row
            would not read back unchanged.
        """
        if not any(owned is section for owned in self._sections):
            msg = "Section does not belong to this showfile"
            raise ValueError(msg)
        row = Row(tuple(fields))
        tokenizer.validate_row(row.fields, self._dialect)
        section._insert_row(row, index)
        return row

    @staticmethod
    def _insert(items: list, item: object, index: int | None) -> None:
        if index is None:
            items.append(item)
        else:
            items.insert(index, item)

    def _check_section(self, section: Section) -> None:
        dialect = self._dialect
        identifier = section.identifier
        if isinstance(identifier, UnknownTag):
            if not tokenizer.is_valid_tag(identifier.tag):
                msg = f"Invalid section tag: {identifier.tag!r}"
                raise ValueError(msg)
            if isinstance(dialect.identifier_for(identifier.tag), SectionKind):
                msg = f"Tag {identifier.tag!r} is a known tag in the {dialect.name} dialect"
                raise ValueError(msg)
        tokenizer.validate_arguments(dialect.tag_for(identifier), section.arguments, dialect)

        if section.trailing_blank_lines < 0 or (section.trailing_blank_lines and not dialect.terminated):
            msg = f"trailing_blank_lines={section.trailing_blank_lines} is not valid in the {dialect.name} dialect"
            raise ValueError(msg)
        for row in section.rows:
            tokenizer.validate_row(row.fields, dialect)


@dataclass(frozen=True)
class HeaderLine:
    """A header line (only produced before the first section)."""

    line_number: int
    key: str
    value: str | None


@dataclass(frozen=True)
class MarkerLine:
    """A section-start marker.

    Parameters
    ----------
    line_number : int
        1-based source line.
    tag : str
        The raw marker tag.
    arguments : tuple[str, ...]
        Raw fields following the tag.
    """

    line_number: int
    tag: str
    arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class RowLine:
    """A data row of the open section; no fields for a blank line."""

    line_number: int
    fields: tuple[str, ...]


@dataclass(frozen=True)
class TerminatorLine:
    """The end of the open section (terminated dialects only)."""

    line_number: int


@dataclass(frozen=True)
class SpacerLine:
    """A blank line between two terminated sections."""

    line_number: int


ClassifiedLine = HeaderLine | MarkerLine | RowLine | TerminatorLine | SpacerLine
