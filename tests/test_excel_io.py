"""Unit tests for spreadsheet I/O utilities."""

# Module responsibilities:
# - Validate sheet reading with offsets, caps and text rendering.
# - Assert read/write failures surface as ReadError/WriteError.
# - Check the written workbook layout and the write/read round trip.

from __future__ import annotations

import datetime as dt
import zipfile
from pathlib import Path

import pytest
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font

from collate.core.errors import ReadError, WriteError
from collate_io.excel_reader import cell_text, read_rows
from collate_io.excel_writer import write_matrix


def test_read_rows_applies_offset_and_cap(make_workbook) -> None:
    path = make_workbook(
        "source.xlsx",
        [["header", "h2"], ["a", "1"], ["b", "2"], ["c", "3"], ["d", "4"]],
    )

    assert read_rows(path, "Data") == [["header", "h2"], ["a", "1"], ["b", "2"], ["c", "3"], ["d", "4"]]
    assert read_rows(path, "Data", start=1) == [["a", "1"], ["b", "2"], ["c", "3"], ["d", "4"]]
    assert read_rows(path, "Data", start=1, count=2) == [["a", "1"], ["b", "2"]]


def test_read_rows_offset_past_end_is_empty(make_workbook) -> None:
    path = make_workbook("short.xlsx", [["only"]])

    assert read_rows(path, "Data", start=5) == []


def test_read_rows_renders_values_as_text(make_workbook) -> None:
    path = make_workbook(
        "typed.xlsx",
        [[1, 2.5, 3.0, True, None, dt.datetime(2024, 5, 10)]],
    )

    assert read_rows(path, "Data") == [["1", "2.5", "3", "TRUE", "", "2024-05-10"]]


def test_read_rows_drops_trailing_blank_rows(tmp_path: Path) -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = "Data"
    ws.append(["a", "b"])
    ws.append(["", "c"])
    # styled but empty cell extends the used range
    ws.cell(row=6, column=1).font = Font(bold=True)
    path = tmp_path / "styled.xlsx"
    wb.save(path)

    assert read_rows(path, "Data") == [["a", "b"], ["", "c"]]


def test_read_rows_missing_sheet_raises(make_workbook) -> None:
    path = make_workbook("source.xlsx", [["a"]], sheet="Other")

    with pytest.raises(ReadError) as excinfo:
        read_rows(path, "Data")

    assert "Data" in str(excinfo.value)
    assert excinfo.value.path == path


def test_read_rows_rejects_non_workbook(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_text("not a zip archive", encoding="utf-8")

    with pytest.raises(ReadError):
        read_rows(path, "Data")


def test_read_rows_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ReadError):
        read_rows(tmp_path / "absent.xlsx", "Data")


def test_read_rows_csv_source(tmp_path: Path) -> None:
    path = tmp_path / "source.csv"
    path.write_text("a,b\n,c\n007,\n", encoding="utf-8")

    assert read_rows(path, "ignored") == [["a", "b"], ["", "c"], ["007", ""]]


def test_read_rows_rejects_corrupt_sheet_xml(make_workbook, tmp_path: Path) -> None:
    source = make_workbook("good.xlsx", [["a", "b"]])
    broken = tmp_path / "corrupt.xlsx"
    with zipfile.ZipFile(source) as src, zipfile.ZipFile(broken, "w") as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                data = b"<worksheet><sheetData><row>"
            dst.writestr(item, data)

    with pytest.raises(ReadError) as excinfo:
        read_rows(broken, "Data")

    assert excinfo.value.path == broken
    assert "corrupt.xlsx" in str(excinfo.value)


def test_read_rows_csv_keeps_wider_later_rows(tmp_path: Path) -> None:
    path = tmp_path / "ragged.csv"
    path.write_text("a,b\nc,d,e\nf\n", encoding="utf-8")

    assert read_rows(path, "ignored") == [
        ["a", "b", ""],
        ["c", "d", "e"],
        ["f", "", ""],
    ]


def test_read_rows_empty_csv(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    assert read_rows(path, "ignored") == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        ("text", "text"),
        (False, "FALSE"),
        (12, "12"),
        (4.0, "4"),
        (0.25, "0.25"),
        (dt.date(2024, 1, 2), "2024-01-02"),
        (dt.datetime(2024, 1, 2, 13, 30), "2024-01-02 13:30:00"),
    ],
)
def test_cell_text(value, expected) -> None:
    assert cell_text(value) == expected


def test_write_matrix_places_cells_by_letter_address(tmp_path: Path) -> None:
    out = tmp_path / "out" / "merged.xlsx"
    matrix = [["f.xlsx", "0", "a", "b"], ["f.xlsx", "1", "=SUM(A1:A2)"]]

    written = write_matrix(matrix, out, "Data")

    assert written == out
    assert not (out.parent / "merged.xlsx.tmp").exists()
    wb = load_workbook(out)
    assert wb.sheetnames == ["Data"]
    ws = wb["Data"]
    assert ws["A1"].value == "f.xlsx"
    assert ws["D1"].value == "b"
    assert ws["B2"].value == "1"
    assert ws["C2"].value == "=SUM(A1:A2)"
    assert ws["C2"].data_type == "s"
    assert ws["D2"].value is None


def test_write_matrix_rejects_invalid_sheet_title(tmp_path: Path) -> None:
    out = tmp_path / "merged.xlsx"

    with pytest.raises(WriteError):
        write_matrix([["a"]], out, "bad/name")

    assert not out.exists()


def test_round_trip_matches_matrix(tmp_path: Path) -> None:
    out = tmp_path / "merged.xlsx"
    matrix = [
        ["a.xlsx", "0", "name", "qty"],
        ["a.xlsx", "1", "bolt", "12"],
        ["b.xlsx", "0", "nut", "=1+1"],
    ]

    write_matrix(matrix, out, "Merged")

    assert read_rows(out, "Merged") == matrix


def test_round_trip_pads_short_rows_to_sheet_width(tmp_path: Path) -> None:
    out = tmp_path / "merged.xlsx"
    matrix = [["a.xlsx", "x", "y", "z"], ["b.xlsx", "w"]]

    write_matrix(matrix, out, "Merged")

    # workbook rows come back as wide as the used range
    assert read_rows(out, "Merged") == [["a.xlsx", "x", "y", "z"], ["b.xlsx", "w", "", ""]]
