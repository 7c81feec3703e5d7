"""Round-trip reader and writer for lighting console show files.

Show files are text: a few header lines followed by sections of
comma separated rows, each section introduced by a marker line. This
library parses that text into a ``Showfile`` document, keeps every field
exactly as written (including sections it does not recognize), and
writes it back.

Examples
--------
>>> from showfile import parse, serialize, SectionKind

>>> text = '''Name MyShow
... $CUESTACK,Intro
... 1,Blackout,0
... 2,Fade Up,5
... '''
>>> show = parse(text)
>>> show.headers[0].value
'MyShow'
>>> stack = next(show.sections_where(SectionKind.CUE_STACK))
>>> stack.field(1, 1)
'Fade Up'

>>> # Edits only append, and writing keeps everything else unchanged
>>> _ = show.append_row(stack, ["3", "Open", "3"])
>>> print(serialize(show), end="")
Name MyShow
$CUESTACK,Intro
1,Blackout,0
2,Fade Up,5
3,Open,3
"""

import logging

from showfile.classifier import classify_lines
from showfile.dialect import DEFAULT_DIALECT, MAGICQ_DIALECT, Dialect
from showfile.errors import MalformedLine
from showfile.io import detect_dialect, read_showfile, write_showfile
from showfile.models import (
    Header,
    Row,
    Section,
    SectionIdentifier,
    SectionKind,
    Showfile,
    UnknownTag,
)
from showfile.parser import parse
from showfile.records import SectionRecord, VersionRecord, iter_records
from showfile.tokenizer import split_fields
from showfile.values import (
    HexValue,
    format_float,
    format_hex,
    parse_float,
    parse_hex,
    parse_string,
    parse_value,
    quote_string,
)
from showfile.writer import serialize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_DIALECT",
    "MAGICQ_DIALECT",
    "Dialect",
    "Header",
    "HexValue",
    "MalformedLine",
    "Row",
    "Section",
    "SectionIdentifier",
    "SectionKind",
    "SectionRecord",
    "Showfile",
    "UnknownTag",
    "VersionRecord",
    "classify_lines",
    "detect_dialect",
    "format_float",
    "format_hex",
    "iter_records",
    "parse",
    "parse_float",
    "parse_hex",
    "parse_string",
    "parse_value",
    "quote_string",
    "read_showfile",
    "serialize",
    "split_fields",
    "write_showfile",
]
