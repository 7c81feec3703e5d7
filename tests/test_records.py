"""Tests for typed section records."""

from pathlib import Path

import pytest

from showfile import (
    MAGICQ_DIALECT,
    Row,
    Section,
    SectionKind,
    Showfile,
    UnknownTag,
    VersionRecord,
    iter_records,
    parse,
    serialize,
)

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"

VERSION_ROW = Row(("007d", '"MagicQ 1"', "01090307", "0000", "0002", ""))


class TestVersionRecord:
    """Version section reading and writing."""

    def test_from_section(self) -> None:
        """Test every field is read with its type."""
        record = VersionRecord.from_section(Section(SectionKind.VERSION, rows=[VERSION_ROW]))
        assert record == VersionRecord(
            format_code=0x7D,
            product_name="MagicQ 1",
            software_version=0x01090307,
            unknown_1=0,
            unknown_2=2,
        )

    def test_software_version_parts(self) -> None:
        """Test the packed version splits one byte per component."""
        record = VersionRecord(0x7D, "MagicQ 1", 0x01090307, 0, 2)
        assert record.software_version_parts == (1, 9, 3, 7)

    def test_to_section(self) -> None:
        """Test writing back gives the MagicQ row with its trailing empty field."""
        record = VersionRecord(0x7D, "MagicQ 1", 0x01090307, 0, 2)
        assert record.to_section() == Section(SectionKind.VERSION, rows=[VERSION_ROW])

    def test_written_section_serializes(self) -> None:
        """Test a built section can be added to a MagicQ showfile."""
        record = VersionRecord(0x7D, 'Magic "Q"', 0x01090307, 0, 2)
        show = Showfile(sections=[record.to_section()], dialect=MAGICQ_DIALECT)
        assert serialize(show) == 'V,007d,"Magic \\"Q\\"",01090307,0000,0002,;\n'

    def test_wrong_section_type(self) -> None:
        """Test other sections are refused."""
        with pytest.raises(ValueError, match="Version section expected"):
            VersionRecord.from_section(Section(SectionKind.CUE_STACK, rows=[VERSION_ROW]))
        with pytest.raises(ValueError, match="Version section expected"):
            VersionRecord.from_section(Section(UnknownTag("V"), rows=[VERSION_ROW]))

    @pytest.mark.parametrize(
        "rows",
        [[], [Row(("007d", '"MagicQ 1"'))], [Row(())]],
    )
    def test_missing_fields(self, rows: list[Row]) -> None:
        """Test a version section without a full first row is refused."""
        with pytest.raises(ValueError, match="at least 5 fields"):
            VersionRecord.from_section(Section(SectionKind.VERSION, rows=rows))

    @pytest.mark.parametrize(
        "row",
        [
            Row(("7d", '"MagicQ 1"', "01090307", "0000", "0002", "")),
            Row(("007d", "MagicQ 1", "01090307", "0000", "0002", "")),
            Row(("007d", '"MagicQ 1"', "1.9.3.7", "0000", "0002", "")),
        ],
    )
    def test_bad_fields(self, row: Row) -> None:
        """Test fields of the wrong type or width are refused."""
        with pytest.raises(ValueError):
            VersionRecord.from_section(Section(SectionKind.VERSION, rows=[row]))


class TestIterRecords:
    """Reading records from a whole showfile."""

    def test_festival(self) -> None:
        """Test the version record of a MagicQ file."""
        show = parse((TESTDATA_DIR / "festival.shw").read_text(), MAGICQ_DIALECT)
        records = list(iter_records(show, VersionRecord))
        assert len(records) == 1
        assert records[0].software_version_parts == (1, 9, 3, 7)

    def test_no_matching_sections(self) -> None:
        """Test a file without version sections gives no records."""
        show = parse("$CUESTACK,Intro\n1,Blackout,0\n")
        assert list(iter_records(show, VersionRecord)) == []

    def test_is_lazy(self) -> None:
        """Test a bad section only fails when reached."""
        show = parse("$VERSION\n007d,\"MagicQ 1\",01090307,0000,0002,\n$VERSION\nbroken\n")
        records = iter_records(show, VersionRecord)
        assert next(records).product_name == "MagicQ 1"
        with pytest.raises(ValueError):
            next(records)
