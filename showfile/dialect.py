"""Show file dialects.

A dialect fixes the literal syntax of one show file flavour: the marker
sentinel, the header and field delimiters, quoting, the optional section
terminator and the table mapping marker tags to known section kinds.

Two dialects ship with the library:

- ``DEFAULT_DIALECT``: ``$TAG,arg`` markers, ``Key Value`` headers and
  comma separated rows, with sections running until the next marker.
- ``MAGICQ_DIALECT``: the MagicQ ``.shw`` layout, with ``\\ `` prefixed
  headers, single letter tags and ``;`` terminated sections.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from showfile.models import SectionIdentifier, SectionKind, UnknownTag
from showfile.tokenizer import is_valid_tag

# Tag tables map the tag written in the file to the section kind
DEFAULT_TAGS: dict[str, SectionKind] = {
    "VERSION": SectionKind.VERSION,
    "SETTINGS": SectionKind.SETTINGS,
    "HEAD": SectionKind.HEAD,
    "FIXTURE": SectionKind.FIXTURE,
    "PALETTE": SectionKind.PALETTE,
    "GROUP": SectionKind.GROUP,
    "FX": SectionKind.FX,
    "PLAYBACK": SectionKind.PLAYBACK,
    "CUESTACK": SectionKind.CUE_STACK,
    "EXECUTEPAGE": SectionKind.EXECUTE_PAGE,
    "EXECUTEITEM": SectionKind.EXECUTE_ITEM,
}

# MagicQ also writes r, Q, R, Z, J, u, H, E1 and Y sections; their
# meaning is unknown so they parse as UnknownTag.
MAGICQ_TAGS: dict[str, SectionKind] = {
    "V": SectionKind.VERSION,
    "T": SectionKind.SETTINGS,
    "P": SectionKind.HEAD,
    "L": SectionKind.FIXTURE,
    "F": SectionKind.PALETTE,
    "G": SectionKind.GROUP,
    "W": SectionKind.FX,
    "S": SectionKind.PLAYBACK,
    "C": SectionKind.CUE_STACK,
    "M": SectionKind.EXECUTE_PAGE,
    "N": SectionKind.EXECUTE_ITEM,
}


@dataclass(frozen=True)
class Dialect:
    """Literal syntax of a show file flavour.

    Parameters
    ----------
    name : str
        Short name used in messages and logs.
    tags : Mapping[str, SectionKind]
        Marker tag to section kind. Every ``SectionKind`` needs exactly one
        tag so that known sections can always be written back.
    marker_sentinel : str
        Text that starts a section marker line. May be empty only for
        terminated dialects.
    header_prefix : str
        Text every header line starts with (empty for none).
    header_delimiter : str
        Separates a header key from its value.
    field_delimiter : str
        Separates fields in rows and marker lines.
    quote_char : str | None
        Opens and closes a quoted field, or None to disable quoting.
    escape_char : str | None
        Escapes the next character inside a quoted field.
    section_terminator : str | None
        Closes a section at the end of its last row, or None when sections
        run until the next marker.

    Examples
    --------
    >>> DEFAULT_DIALECT.identifier_for("CUESTACK")
    <SectionKind.CUE_STACK: 'cue_stack'>
    >>> MAGICQ_DIALECT.tag_for(SectionKind.CUE_STACK)
    'C'
    >>> MAGICQ_DIALECT.identifier_for("E1")
    UnknownTag(tag='E1')
    """

    name: str
    tags: Mapping[str, SectionKind]
    marker_sentinel: str = "$"
    header_prefix: str = ""
    header_delimiter: str = " "
    field_delimiter: str = ","
    quote_char: str | None = '"'
    escape_char: str | None = "\\"
    section_terminator: str | None = None
    _kind_tags: dict[SectionKind, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.field_delimiter or not self.header_delimiter:
            msg = f"{self.name}: delimiters must not be empty"
            raise ValueError(msg)
        if not self.marker_sentinel and not self.section_terminator:
            msg = f"{self.name}: a dialect without a section terminator needs a marker sentinel"
            raise ValueError(msg)

        kind_tags: dict[SectionKind, str] = {}
        for tag, kind in self.tags.items():
            if not is_valid_tag(tag):
                msg = f"{self.name}: invalid section tag {tag!r}"
                raise ValueError(msg)
            if kind in kind_tags:
                msg = f"{self.name}: {kind.name} has two tags ({kind_tags[kind]!r} and {tag!r})"
                raise ValueError(msg)
            kind_tags[kind] = tag

        missing = [kind.name for kind in SectionKind if kind not in kind_tags]
        if missing:
            msg = f"{self.name}: no tag for {', '.join(missing)}"
            raise ValueError(msg)

        object.__setattr__(self, "_kind_tags", kind_tags)

    @property
    def terminated(self) -> bool:
        """Whether sections end with an explicit terminator."""
        return bool(self.section_terminator)

    def identifier_for(self, tag: str) -> SectionIdentifier:
        """Resolve a marker tag to a section identifier.

        Tags missing from the table resolve to ``UnknownTag(tag)``.
        """
        kind = self.tags.get(tag)
        if kind is None:
            return UnknownTag(tag)
        return kind

    def tag_for(self, identifier: SectionIdentifier) -> str:
        """Return the marker tag written for a section identifier."""
        if isinstance(identifier, UnknownTag):
            return identifier.tag
        return self._kind_tags[identifier]


DEFAULT_DIALECT = Dialect(name="default", tags=DEFAULT_TAGS)

MAGICQ_DIALECT = Dialect(
    name="magicq",
    tags=MAGICQ_TAGS,
    marker_sentinel="",
    header_prefix="\\ ",
    section_terminator=";",
)
