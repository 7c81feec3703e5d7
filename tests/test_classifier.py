"""Tests for show file line classification."""

import pytest

from showfile.classifier import classify_lines, detect_newline, iter_lines
from showfile.dialect import MAGICQ_DIALECT
from showfile.errors import MalformedLine
from showfile.models import HeaderLine, MarkerLine, RowLine, SpacerLine, TerminatorLine

SCENARIO = """Name MyShow
$CUESTACK,Intro
1,Blackout,0
2,Fade Up,5

$CUESTACK,Main
1,Open,3
"""


class TestIterLines:
    """Line splitting tests."""

    def test_empty_text(self) -> None:
        """Test empty text has no lines."""
        assert list(iter_lines("")) == []

    def test_final_newline(self) -> None:
        """Test a final newline does not add a line."""
        assert list(iter_lines("a\nb\n")) == [(1, "a"), (2, "b")]

    def test_no_final_newline(self) -> None:
        """Test the last line without a newline is kept."""
        assert list(iter_lines("a\nb")) == [(1, "a"), (2, "b")]

    def test_blank_lines_kept(self) -> None:
        """Test blank lines are yielded, including a blank last line."""
        assert list(iter_lines("a\n\n\n")) == [(1, "a"), (2, ""), (3, "")]

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_line_endings(self, newline: str) -> None:
        """Test all line endings split lines."""
        text = f"a{newline}b{newline}"
        assert list(iter_lines(text)) == [(1, "a"), (2, "b")]
        assert detect_newline(text) == newline

    def test_detect_newline_default(self) -> None:
        """Test single-line text defaults to \\n."""
        assert detect_newline("a") == "\n"


class TestClassifyDefaultDialect:
    """Classification with the default dialect."""

    def test_scenario(self) -> None:
        """Test the cue stack example line by line."""
        lines = list(classify_lines(SCENARIO))
        assert lines == [
            HeaderLine(1, "Name", "MyShow"),
            MarkerLine(2, "CUESTACK", ("Intro",)),
            RowLine(3, ("1", "Blackout", "0")),
            RowLine(4, ("2", "Fade Up", "5")),
            RowLine(5, ()),
            MarkerLine(6, "CUESTACK", ("Main",)),
            RowLine(7, ("1", "Open", "3")),
        ]

    def test_header_after_section_is_row(self) -> None:
        """Test header-looking lines after a marker are rows."""
        lines = list(classify_lines("$GROUP\nName Other\n"))
        assert lines[1] == RowLine(2, ("Name Other",))

    def test_blank_lines_before_first_section(self) -> None:
        """Test blank lines in the header area are blank headers."""
        lines = list(classify_lines("Name A\n\n$GROUP\n"))
        assert lines[1] == HeaderLine(2, "", None)

    def test_unknown_tag(self) -> None:
        """Test unknown tags still open a section."""
        lines = list(classify_lines("$ZONES,Stage\n1,2\n"))
        assert lines == [MarkerLine(1, "ZONES", ("Stage",)), RowLine(2, ("1", "2"))]

    def test_trailing_comma_argument(self) -> None:
        """Test an empty argument after a trailing comma is kept."""
        lines = list(classify_lines("$GROUP,\n"))
        assert lines == [MarkerLine(1, "GROUP", ("",))]

    def test_is_lazy(self) -> None:
        """Test lines before a malformed line are yielded first."""
        lines = classify_lines('Name A\n$GROUP\n1,"open\n')
        assert next(lines) == HeaderLine(1, "Name", "A")
        assert next(lines) == MarkerLine(2, "GROUP", ())
        with pytest.raises(MalformedLine):
            next(lines)

    def test_restartable(self) -> None:
        """Test classifying the same text twice gives the same lines."""
        assert list(classify_lines(SCENARIO)) == list(classify_lines(SCENARIO))


class TestClassifyMalformed:
    """Structural errors."""

    def test_unterminated_quote(self) -> None:
        """Test the error carries line number and raw line."""
        with pytest.raises(MalformedLine) as excinfo:
            list(classify_lines('$CUESTACK,Intro\n1,Blackout,0\n2,"Fade Up,5\n'))
        assert excinfo.value.line_number == 3
        assert excinfo.value.line == '2,"Fade Up,5'
        assert "unterminated quoted field" in excinfo.value.reason

    def test_sentinel_row_inside_section(self) -> None:
        """Test a sentinel line without a valid tag stays a row."""
        lines = list(classify_lines("Name A\n$CUESTACK,Intro\n$ 5.00,price\n$\n"))
        assert lines[2:] == [RowLine(3, ("$ 5.00", "price")), RowLine(4, ("$",))]

    def test_sentinel_header_before_first_section(self) -> None:
        """Test a sentinel line without a valid tag is a header before any marker."""
        lines = list(classify_lines("$Cue Stack\n$\n$GROUP\n"))
        assert lines == [
            HeaderLine(1, "$Cue", "Stack"),
            HeaderLine(2, "$", None),
            MarkerLine(3, "GROUP", ()),
        ]

    def test_is_value_error(self) -> None:
        """Test MalformedLine can be caught as ValueError."""
        with pytest.raises(ValueError):
            list(classify_lines('$GROUP\n"x\n'))


class TestClassifyMagicQ:
    """Classification with the terminated MagicQ dialect."""

    def test_single_line_section(self) -> None:
        """Test marker, row and terminator on one line."""
        lines = list(classify_lines('\\ MagicQ\n\nV,007d,"MagicQ 1",;\n', MAGICQ_DIALECT))
        assert lines == [
            HeaderLine(1, "MagicQ", None),
            HeaderLine(2, "", None),
            MarkerLine(3, "V"),
            RowLine(3, ("007d", '"MagicQ 1"', "")),
            TerminatorLine(3),
        ]

    def test_multi_line_section(self) -> None:
        """Test rows continue until the terminator."""
        text = "C,0001,1,\n\n0002,2,;\n\nG,0001,;\n"
        lines = list(classify_lines(text, MAGICQ_DIALECT))
        assert lines == [
            MarkerLine(1, "C"),
            RowLine(1, ("0001", "1", "")),
            RowLine(2, ()),
            RowLine(3, ("0002", "2", "")),
            TerminatorLine(3),
            SpacerLine(4),
            MarkerLine(5, "G"),
            RowLine(5, ("0001", "")),
            TerminatorLine(5),
        ]

    def test_rows_are_never_markers(self) -> None:
        """Test marker-looking rows inside a section stay rows."""
        lines = list(classify_lines("C,0001,\nG,0002,;\n", MAGICQ_DIALECT))
        assert lines[2] == RowLine(2, ("G", "0002", ""))

    def test_terminator_alone(self) -> None:
        """Test a terminator on its own line yields no row."""
        lines = list(classify_lines("C,0001,\n;\n", MAGICQ_DIALECT))
        assert lines == [
            MarkerLine(1, "C"),
            RowLine(1, ("0001", "")),
            TerminatorLine(2),
        ]

    def test_empty_section(self) -> None:
        """Test a section with no rows."""
        lines = list(classify_lines("C,;\n", MAGICQ_DIALECT))
        assert lines == [MarkerLine(1, "C"), TerminatorLine(1)]

    def test_text_between_sections(self) -> None:
        """Test stray text between sections is malformed."""
        with pytest.raises(MalformedLine) as excinfo:
            list(classify_lines("C,0001,;\n\"stray\"\n", MAGICQ_DIALECT))
        assert excinfo.value.line_number == 2
        assert excinfo.value.reason == "text outside of a section"

    def test_missing_header_prefix(self) -> None:
        """Test a header without the prefix is malformed."""
        with pytest.raises(MalformedLine, match="does not start with"):
            list(classify_lines("Name MyShow\n", MAGICQ_DIALECT))

    def test_unterminated_section(self) -> None:
        """Test a section open at end of input is malformed."""
        with pytest.raises(MalformedLine) as excinfo:
            list(classify_lines("C,0001,\n0002,\n", MAGICQ_DIALECT))
        assert excinfo.value.line_number == 2
        assert "opened on line 1" in excinfo.value.reason
