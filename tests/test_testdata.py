"""Tests that read and write back the show files in testdata."""

from pathlib import Path

import pytest

from showfile import (
    DEFAULT_DIALECT,
    MAGICQ_DIALECT,
    MalformedLine,
    Row,
    SectionKind,
    UnknownTag,
    VersionRecord,
    iter_records,
    read_showfile,
    write_showfile,
)

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"

ROUND_TRIP_FILES = [
    ("festival.shw", MAGICQ_DIALECT),
    ("cue_stacks.show", DEFAULT_DIALECT),
]


@pytest.mark.parametrize(("name", "dialect"), ROUND_TRIP_FILES)
def test_byte_exact_round_trip(name: str, dialect: object, tmp_path: Path) -> None:
    """Reading and writing a testdata file gives back the same bytes."""
    source = TESTDATA_DIR / name
    show = read_showfile(source)
    assert show.dialect is dialect

    target = tmp_path / name
    write_showfile(show, target)
    assert target.read_bytes() == source.read_bytes()
    assert read_showfile(target) == show


def test_unterminated_file_fails() -> None:
    """A MagicQ file ending inside a section does not parse."""
    with pytest.raises(MalformedLine) as excinfo:
        read_showfile(TESTDATA_DIR / "unterminated.shw")
    assert excinfo.value.line_number == 5
    assert "never terminated" in excinfo.value.reason


class TestCueStacksFile:
    """Content of cue_stacks.show."""

    @pytest.fixture
    def show(self):
        return read_showfile(TESTDATA_DIR / "cue_stacks.show")

    def test_headers(self, show) -> None:
        """Test the three headers."""
        assert [(h.key, h.value) for h in show.headers] == [
            ("Name", "MyShow"),
            ("Author", "Lighting Desk Crew"),
            ("Version", "3"),
        ]

    def test_sections(self, show) -> None:
        """Test section identifiers in file order."""
        assert [s.identifier for s in show.sections] == [
            SectionKind.VERSION,
            SectionKind.FIXTURE,
            SectionKind.CUE_STACK,
            SectionKind.CUE_STACK,
            SectionKind.PALETTE,
            UnknownTag("ZONES"),
            SectionKind.PLAYBACK,
        ]

    def test_cue_stacks(self, show) -> None:
        """Test both cue stacks, quoted field and header-looking row included."""
        intro, main = show.sections_where(SectionKind.CUE_STACK)
        assert intro.arguments == ("Intro",)
        assert intro.rows[-1].is_blank
        assert main.rows == (
            Row(("1", "Open", "3")),
            Row(("2", '"Chase, fast"', "0.5")),
            Row(("Name Ignored",)),
        )
        assert main.rows[1].get_string(1) == "Chase, fast"

    def test_unknown_section(self, show) -> None:
        """Test the unknown section keeps its tag and arguments."""
        (zones,) = show.sections_where("ZONES")
        assert zones.arguments == ("Stage", "Left")

    def test_empty_last_section(self, show) -> None:
        """Test the final section has no rows."""
        assert show.sections[-1].rows == ()


class TestFestivalFile:
    """Content of festival.shw."""

    @pytest.fixture
    def show(self):
        return read_showfile(TESTDATA_DIR / "festival.shw")

    def test_version(self, show) -> None:
        """Test the version record."""
        (version,) = iter_records(show, VersionRecord)
        assert version.product_name == "MagicQ 1"
        assert version.format_code == 0x7D

    def test_fixtures(self, show) -> None:
        """Test typed access to the fixture rows."""
        (fixtures,) = show.sections_where(SectionKind.FIXTURE)
        names = [row.get_string(1) for row in fixtures]
        assert names == ["Generic Dimmer", 'Moving Head "Spot"', "LED Par"]
        assert [row.get_hex(2, 8) for row in fixtures] == [1, 16, 7]

    def test_unknown_sections(self, show) -> None:
        """Test unknown MagicQ tags keep their rows."""
        (r,) = show.sections_where(UnknownTag("r"))
        assert r.rows[0].get_hex(0, 16) == 0xABC
        assert next(show.sections_where("E1")).rows[0].get_string(0) == "unknown block"
