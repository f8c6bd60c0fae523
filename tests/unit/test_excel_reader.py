from __future__ import annotations
from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from sheet_invoice.excel.reader import DecodeError, normalize_sheet, read_workbook, read_workbook_file


def test_read_workbook_first_row_is_header(make_workbook, header, make_row):
    data = make_workbook([header, make_row("INV-1", "Widget", 2, 100, 18)])
    sheet = read_workbook(data)
    assert sheet.sheet_name == "Invoices"
    assert sheet.columns == header
    assert len(sheet.rows) == 1
    row = sheet.rows[0]
    assert row.row_number == 2
    assert row.values["Invoice No"] == "INV-1"
    assert row.values["Seller Pincode"] == 560001
    assert row.values["Invoice Date"] == 45000
    assert row.values["HSN Code"] == "8471"


def test_read_workbook_keeps_na_like_text(make_workbook, header, make_row):
    sheet = read_workbook(make_workbook([header, make_row("INV-1", "Widget", 1, 1, 0)]))
    assert sheet.rows[0].values["GST No If Available"] == "N/A"


def test_read_workbook_reads_first_sheet_only(make_workbook):
    data = make_workbook(
        [["Invoice No", "Qty"], ["INV-1", 1]],
        sheets={"Other": [["Invoice No", "Qty"], ["INV-X", 9]]},
    )
    sheet = read_workbook(data)
    assert [r.values["Invoice No"] for r in sheet.rows] == ["INV-1"]


def test_blank_cells_are_omitted_and_blank_rows_skipped(make_workbook):
    data = make_workbook([
        ["Invoice No", "Customer Name", "Qty"],
        ["INV-1", None, 1],
        [None, None, None],
        ["INV-2", "Bob", 2],
    ])
    sheet = read_workbook(data)
    assert [r.row_number for r in sheet.rows] == [2, 4]
    assert "Customer Name" not in sheet.rows[0].values
    assert sheet.rows[1].values == {"Invoice No": "INV-2", "Customer Name": "Bob", "Qty": 2}


def test_header_case_and_whitespace_preserved(make_workbook):
    sheet = read_workbook(make_workbook([[" Invoice NO ", "qty"], ["A", 1]]))
    assert sheet.columns == [" Invoice NO ", "qty"]


def test_duplicate_and_blank_headers_get_unique_names(make_workbook):
    sheet = read_workbook(make_workbook([
        ["Name", "Name", None, 2024],
        ["a", "b", "c", "d"],
    ]))
    assert sheet.columns == ["Name", "Name_1", "__EMPTY", "2024"]
    assert sheet.rows[0].values == {"Name": "a", "Name_1": "b", "__EMPTY": "c", "2024": "d"}


def test_table_below_blank_rows_uses_first_used_row_as_header(make_workbook):
    sheet = read_workbook(make_workbook([
        [None, None],
        [None, None],
        ["Invoice No", "Qty"],
        ["INV-1", 2],
    ]))
    assert sheet.columns == ["Invoice No", "Qty"]
    assert [(r.row_number, r.values) for r in sheet.rows] == [(4, {"Invoice No": "INV-1", "Qty": 2})]


def test_leading_blank_columns_are_not_columns(make_workbook):
    sheet = read_workbook(make_workbook([
        [None, "Invoice No", "Qty"],
        [None, "INV-1", 2],
    ]))
    assert sheet.columns == ["Invoice No", "Qty"]
    assert sheet.rows[0].values == {"Invoice No": "INV-1", "Qty": 2}


def test_text_cells_keep_their_type_under_numeric_header(make_workbook):
    sheet = read_workbook(make_workbook([[5, "Qty"], ["7", 1]]))
    assert sheet.columns == ["5", "Qty"]
    assert sheet.rows[0].values == {"5": "7", "Qty": 1}


def test_typed_date_cells_come_back_as_datetime(make_workbook):
    sheet = read_workbook(make_workbook([["Invoice Date"], [datetime(2024, 1, 5, 10, 30)]]))
    value = sheet.rows[0].values["Invoice Date"]
    assert isinstance(value, datetime)
    assert (value.year, value.month, value.day, value.hour) == (2024, 1, 5, 10)


def test_null_sentinels_blank_matching_text(make_workbook):
    data = make_workbook([["Invoice No", "GST No", "Phone"], ["INV-1", "null", " - "]])
    sheet = read_workbook(data, null_sentinels={"NULL", "-"})
    assert sheet.rows[0].values == {"Invoice No": "INV-1"}


@pytest.mark.parametrize("data", [b"", b"not a workbook", b"PK\x03\x04garbage"])
def test_undecodable_buffer_raises_decode_error(data):
    with pytest.raises(DecodeError):
        read_workbook(data)


def test_read_workbook_file(temp_workdir: Path, make_workbook):
    path = temp_workdir / "data" / "one.xlsx"
    path.write_bytes(make_workbook([["Invoice No"], ["INV-1"]]))
    sheet = read_workbook_file(path)
    assert sheet.rows[0].values == {"Invoice No": "INV-1"}


def test_read_workbook_file_missing(temp_workdir: Path):
    with pytest.raises(DecodeError):
        read_workbook_file(temp_workdir / "missing.xlsx")


def test_normalize_sheet_from_dataframe():
    df = pd.DataFrame([
        ["Invoice No", "Qty"],
        ["INV-1", 3],
        ["", ""],
        ["INV-2", ""],
    ])
    sheet = normalize_sheet(df, "S")
    assert [r.row_number for r in sheet.rows] == [2, 4]
    assert sheet.rows[1].values == {"Invoice No": "INV-2"}


def test_normalize_sheet_trims_leading_blank_rows_and_columns():
    df = pd.DataFrame([
        ["", "", ""],
        ["", "Invoice No", "Qty"],
        ["", "INV-1", 3],
    ])
    sheet = normalize_sheet(df, "S")
    assert sheet.columns == ["Invoice No", "Qty"]
    assert [r.row_number for r in sheet.rows] == [3]


def test_normalize_sheet_all_blank_dataframe():
    sheet = normalize_sheet(pd.DataFrame([["", None], [None, ""]]), "Blank")
    assert sheet.columns == []
    assert sheet.rows == []


def test_normalize_sheet_empty_dataframe():
    sheet = normalize_sheet(pd.DataFrame(), "Empty")
    assert sheet.columns == []
    assert sheet.rows == []
