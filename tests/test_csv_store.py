"""Tests for the line-based CSV reader and writer."""

from pathlib import Path

import pytest

from comicshop.models.comic import Comic, ComicStatus
from comicshop.services.registry import comic_from_fields, comic_to_line
from comicshop.storage.csv_store import join_fields, read_csv, write_csv


class TestReadCsv:
    """Tests for reading data files."""

    def test_skips_header_and_blank_lines(self, tmp_path: Path) -> None:
        """The header and blank lines are not rows."""
        path = tmp_path / "rows.csv"
        path.write_text("ID,Name\n\nA1,First\n   \nA2,Second\n", encoding="utf-8")

        rows = read_csv(path, lambda fields: fields)

        assert rows == [["A1", "First"], ["A2", "Second"]]

    def test_header_skipped_even_if_it_looks_like_data(self, tmp_path: Path) -> None:
        """The first line is dropped whatever it holds."""
        path = tmp_path / "rows.csv"
        path.write_text("A0,Zero\nA1,First\n", encoding="utf-8")

        assert read_csv(path, lambda fields: fields[0]) == ["A1"]

    def test_mapper_none_skips_row(self, tmp_path: Path) -> None:
        """Rows the mapper rejects are left out."""
        path = tmp_path / "rows.csv"
        path.write_text("ID,Name\nA1,First\nbroken\nA2,Second\n", encoding="utf-8")

        rows = read_csv(path, lambda fields: fields if len(fields) == 2 else None)

        assert [r[0] for r in rows] == ["A1", "A2"]

    def test_no_quote_handling(self, tmp_path: Path) -> None:
        """Quotes are kept and commas always split."""
        path = tmp_path / "rows.csv"
        path.write_text('ID,Name\nA1,"Smith, John"\n', encoding="utf-8")

        assert read_csv(path, lambda fields: fields) == [["A1", '"Smith', ' John"']]

    def test_handles_crlf(self, tmp_path: Path) -> None:
        """Windows line endings are stripped."""
        path = tmp_path / "rows.csv"
        path.write_bytes(b"ID,Name\r\nA1,First\r\n")

        assert read_csv(path, lambda fields: fields) == [["A1", "First"]]

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty file has no rows."""
        path = tmp_path / "rows.csv"
        path.write_text("", encoding="utf-8")

        assert read_csv(path, lambda fields: fields) == []

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file raises OSError."""
        with pytest.raises(FileNotFoundError):
            read_csv(tmp_path / "missing.csv", lambda fields: fields)


class TestWriteCsv:
    """Tests for writing data files."""

    def test_writes_header_and_lines(self, tmp_path: Path) -> None:
        """The header comes first, then one line per record."""
        path = tmp_path / "out.csv"

        write_csv(path, ["a", "b"], lambda r: join_fields(r, r.upper()), "Low,Up")

        assert path.read_text(encoding="utf-8") == "Low,Up\na,A\nb,B\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        """Writing truncates the previous contents."""
        path = tmp_path / "out.csv"
        path.write_text("old content\nmore\n", encoding="utf-8")

        write_csv(path, ["x"], str, "H")

        assert path.read_text(encoding="utf-8") == "H\nx\n"

    @pytest.mark.parametrize("header", [None, "", "  "])
    def test_blank_header_omitted(self, tmp_path: Path, header: str | None) -> None:
        """A blank or missing header is not written."""
        path = tmp_path / "out.csv"

        write_csv(path, ["x"], str, header)

        assert path.read_text(encoding="utf-8") == "x\n"

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """Missing parent directories are created."""
        path = tmp_path / "nested" / "dir" / "out.csv"

        write_csv(path, [], str, "H")

        assert path.read_text(encoding="utf-8") == "H\n"


class TestComicRoundTrip:
    """Tests for the inventory line format."""

    def test_comics_survive_write_and_read(self, tmp_path: Path) -> None:
        """Comics written to disk load back unchanged."""
        path = tmp_path / "comics.csv"
        comics = [
            Comic("Watchmen #1", "Alan Moore", "WM1", ComicStatus.AVAILABLE),
            Comic("Saga #1", "Brian K. Vaughan", "SG1", ComicStatus.SOLD),
            Comic("Maus", "Art Spiegelman", "MA1", ComicStatus.RESERVED),
        ]

        write_csv(path, comics, comic_to_line, "ID,Titulo,Autor,Estado")
        loaded = read_csv(path, comic_from_fields)

        assert [(c.id, c.title, c.author, c.status) for c in loaded] == [
            (c.id, c.title, c.author, c.status) for c in comics
        ]
