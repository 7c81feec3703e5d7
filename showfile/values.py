"""Typed accessors over raw field text.

Rows keep every field as raw text. The helpers in this module interpret
that text on demand as quoted strings, fixed-width hexadecimal numbers or
floats, and format values back into the text MagicQ writes.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

QUOTE = '"'
ESCAPE = "\\"

HEX_RE = re.compile(r"[0-9A-Fa-f]+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# MagicQ writes NaN with a sign
NAN_TEXT = {"nan": math.nan, "-nan": -math.nan}


@dataclass(frozen=True)
class HexValue:
    """A hexadecimal field; the digit count is significant.

    Parameters
    ----------
    value : int
        The parsed number.
    width : int
        Number of hex digits in the field.

    Examples
    --------
    >>> str(HexValue(0x7D, 4))
    '007d'
    """

    value: int
    width: int

    def __str__(self) -> str:
        return format_hex(self.value, self.width)


Value = str | HexValue | float | None


def is_quoted(field: str) -> bool:
    """Check if a field is a quoted string."""
    return len(field) >= 2 and field.startswith(QUOTE) and field.endswith(QUOTE)


def parse_string(field: str) -> str:
    """Unquote a quoted string field.

    Parameters
    ----------
    field : str
        Raw field text, quotes included.

    Returns
    -------
    str
        The string with quotes removed and escapes resolved.

    Raises
    ------
    ValueError
        If the field is not quoted.

    Examples
    --------
    >>> parse_string('"MagicQ 1"')
    'MagicQ 1'
    >>> parse_string('"Say \\\\"Go\\\\""')
    'Say "Go"'
    """
    if not is_quoted(field):
        msg = f"Quoted string expected, got {field!r}"
        raise ValueError(msg)

    body = field[1:-1]
    chars: list[str] = []
    i = 0
    while i < len(body):
        if body[i] == ESCAPE and i + 1 < len(body):
            i += 1
        chars.append(body[i])
        i += 1
    return "".join(chars)


def quote_string(text: str) -> str:
    """Quote a string for use as a field.

    Examples
    --------
    >>> quote_string("Fade, Up")
    '"Fade, Up"'
    >>> quote_string('Say "Go"')
    '"Say \\\\"Go\\\\""'
    """
    escaped = text.replace(ESCAPE, ESCAPE + ESCAPE).replace(QUOTE, ESCAPE + QUOTE)
    return f"{QUOTE}{escaped}{QUOTE}"


def parse_hex(field: str, width: int | None = None) -> HexValue:
    """Parse a hexadecimal field.

    Parameters
    ----------
    field : str
        Raw field text, e.g. ``"007d"``.
    width : int | None
        Required number of digits, or None to accept any width.

    Raises
    ------
    ValueError
        If the field is not hexadecimal or has the wrong width.

    Examples
    --------
    >>> parse_hex("007d", 4)
    HexValue(value=125, width=4)
    """
    if not HEX_RE.fullmatch(field):
        msg = f"Hex value expected, got {field!r}"
        raise ValueError(msg)
    if width is not None and len(field) != width:
        msg = f"Hex value {field!r} is {len(field)} characters long instead of {width}"
        raise ValueError(msg)
    return HexValue(int(field, 16), len(field))


def format_hex(value: int, width: int, *, upper: bool | None = None) -> str:
    """Format a number as zero-padded hex.

    Parameters
    ----------
    value : int
        Non-negative number.
    width : int
        Minimum digit count.
    upper : bool | None
        Use upper-case digits. By default only 16-digit values are upper
        case, which is what MagicQ writes.

    Examples
    --------
    >>> format_hex(0x7D, 4)
    '007d'
    >>> format_hex(0xABC, 16)
    '0000000000000ABC'
    """
    if upper is None:
        upper = width == 16
    return f"{value:0{width}{'X' if upper else 'x'}}"


def parse_float(field: str) -> float:
    """Parse a float field, including ``nan`` and ``-nan``.

    Raises
    ------
    ValueError
        If the field is not a number.

    Examples
    --------
    >>> parse_float("0.500000")
    0.5
    >>> math.copysign(1.0, parse_float("-nan"))
    -1.0
    """
    if field in NAN_TEXT:
        return NAN_TEXT[field]
    if not FLOAT_RE.fullmatch(field):
        msg = f"Float value expected, got {field!r}"
        raise ValueError(msg)
    return float(field)


def format_float(value: float) -> str:
    """Format a float the way MagicQ does (six decimals, signed NaN).

    Examples
    --------
    >>> format_float(0.5)
    '0.500000'
    >>> format_float(-math.nan)
    '-nan'
    """
    if math.isnan(value):
        return "-nan" if math.copysign(1.0, value) < 0 else "nan"
    return f"{value:.6f}"


def parse_value(field: str) -> Value:
    """Guess the type of a field.

    Tries a quoted string, then hex, then float. Anything else is returned
    as the raw text; an empty field gives None.

    Examples
    --------
    >>> parse_value('"Intro"')
    'Intro'
    >>> parse_value("0001")
    HexValue(value=1, width=4)
    >>> parse_value("0.05")
    0.05
    >>> parse_value("Blackout")
    'Blackout'
    >>> parse_value("") is None
    True
    """
    if not field:
        return None
    if is_quoted(field):
        return parse_string(field)
    if HEX_RE.fullmatch(field):
        return parse_hex(field)
    if field in NAN_TEXT or FLOAT_RE.fullmatch(field):
        return parse_float(field)
    return field
