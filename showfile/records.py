"""Typed views over known sections.

Sections store raw field text. A section record reads the fields of one
known section type into typed attributes and builds an equivalent section
back from them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol, TypeVar

from showfile.models import Row, Section, SectionIdentifier, SectionKind
from showfile.values import format_hex, quote_string

if TYPE_CHECKING:
    from showfile.models import Showfile

R = TypeVar("R", bound="SectionRecord")


class SectionRecord(Protocol):
    """Typed view of one section type."""

    IDENTIFIER: ClassVar[SectionIdentifier]

    @classmethod
    def from_section(cls: type[R], section: Section) -> R: ...

    def to_section(self) -> Section: ...


@dataclass(frozen=True)
class VersionRecord:
    """The version section MagicQ writes first.

    A version section is a single row such as
    ``007d,"MagicQ 1",01090307,0000,0002,`` (the trailing comma gives an
    empty last field).

    Parameters
    ----------
    format_code : int
        First field, 4 hex digits.
    product_name : str
        Quoted product name.
    software_version : int
        Software version packed one byte per component, 8 hex digits.
    unknown_1 : int
        4 hex digits, meaning not known yet.
    unknown_2 : int
        4 hex digits, meaning not known yet.

    Examples
    --------
    >>> section = Section(SectionKind.VERSION, rows=[Row(("007d", '"MagicQ 1"', "01090307", "0000", "0002", ""))])
    >>> version = VersionRecord.from_section(section)
    >>> version.product_name
    'MagicQ 1'
    >>> version.software_version_parts
    (1, 9, 3, 7)
    >>> version.to_section() == section
    True
    """

    IDENTIFIER: ClassVar[SectionIdentifier] = SectionKind.VERSION

    format_code: int
    product_name: str
    software_version: int
    unknown_1: int
    unknown_2: int

    @classmethod
    def from_section(cls, section: Section) -> VersionRecord:
        """Read a version section.

        Raises
        ------
        ValueError
            If the section is not a version section or its first row does
            not hold the expected fields.
        """
        if section.identifier != cls.IDENTIFIER:
            msg = f"Version section expected, got {section.identifier!r}"
            raise ValueError(msg)
        if not section.rows or len(section.rows[0]) < 5:
            msg = "Version section needs a row with at least 5 fields"
            raise ValueError(msg)

        row = section.rows[0]
        return cls(
            format_code=row.get_hex(0, 4),
            product_name=row.get_string(1),
            software_version=row.get_hex(2, 8),
            unknown_1=row.get_hex(3, 4),
            unknown_2=row.get_hex(4, 4),
        )

    def to_section(self) -> Section:
        """Build the version section, with MagicQ's trailing comma."""
        row = Row(
            (
                format_hex(self.format_code, 4),
                quote_string(self.product_name),
                format_hex(self.software_version, 8),
                format_hex(self.unknown_1, 4),
                format_hex(self.unknown_2, 4),
                "",
            )
        )
        return Section(self.IDENTIFIER, rows=[row])

    @property
    def software_version_parts(self) -> tuple[int, int, int, int]:
        """Software version as ``(major, minor, patch, build)``."""
        v = self.software_version
        return (v >> 24) & 0xFF, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF


def iter_records(showfile: Showfile, record_type: type[R]) -> Iterator[R]:
    """Lazily read every section of a record type's identifier.

    Examples
    --------
    >>> from showfile.dialect import MAGICQ_DIALECT
    >>> from showfile.parser import parse
    >>> show = parse('\\\\ MagicQ\\n\\nV,007d,"MagicQ 1",01090307,0000,0002,;\\n', MAGICQ_DIALECT)
    >>> [record.product_name for record in iter_records(show, VersionRecord)]
    ['MagicQ 1']
    """
    for section in showfile.sections_where(record_type.IDENTIFIER):
        yield record_type.from_section(section)
