"""Errors raised while reading show files."""

from __future__ import annotations


class MalformedLine(ValueError):
    """A line that cannot be read into fields at all.

    Raised for structural problems only (an unterminated quoted field, text
    outside of any section, a section that is never closed, ...). Unknown
    section tags and header keys are data, not errors.

    Parameters
    ----------
    line_number : int
        1-based number of the offending line.
    reason : str
        Human readable description of the problem.
    line : str
        The raw text of the offending line.

    Examples
    --------
    >>> err = MalformedLine(3, "unterminated quoted field", '1,"Open')
    >>> str(err)
    'line 3: unterminated quoted field: \\'1,"Open\\''
    """

    def __init__(self, line_number: int, reason: str, line: str) -> None:
        self.line_number = line_number
        self.reason = reason
        self.line = line
        super().__init__(f"line {line_number}: {reason}: {line!r}")
