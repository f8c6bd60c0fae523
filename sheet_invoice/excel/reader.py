from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData
from ..services.coercion import cell_text, is_blank

"""Workbook reader (tabular decoder).

The first used row of the first worksheet is the header row, every following
row is a data row. Blank rows and columns ahead of the table are ignored.
Sheet selection is not configurable.

pandas (openpyxl engine) does the decoding. Columns are read as object dtype
so cells keep the type the workbook stored. The default NA-string conversion
of pandas is switched off so that texts such as "N/A" or "NULL" in a GST
column reach the resolver unchanged; null_sentinels is the opt-in
replacement for it.
"""

__all__ = [
    "DecodeError",
    "SheetData",
    "read_workbook",
    "read_workbook_file",
    "normalize_sheet",
]

EMPTY_HEADER = "__EMPTY"


class DecodeError(Exception):
    """Raised when the buffer cannot be opened as a spreadsheet workbook."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[RowData]


def read_workbook(data: bytes, *, null_sentinels: set[str] | frozenset[str] | None = None) -> SheetData:
    """Decode a workbook buffer and return the rows of its first sheet.

    Parameters
    ----------
    data: raw workbook bytes (.xlsx)
    null_sentinels: upper-cased cell texts treated as blank cells

    Raises
    ------
    DecodeError: the buffer is not a readable workbook
    """
    try:
        with pd.ExcelFile(io.BytesIO(data)) as xls:
            if not xls.sheet_names:
                raise DecodeError("workbook has no sheets")
            name = str(xls.sheet_names[0])
            df = xls.parse(
                xls.sheet_names[0],
                header=None,
                dtype=object,
                keep_default_na=False,
                na_values=None,
            )
    except DecodeError:
        raise
    except Exception as e:
        raise DecodeError(f"cannot decode workbook: {e}") from e
    return normalize_sheet(df, name, null_sentinels=null_sentinels)


def read_workbook_file(path: Path, *, null_sentinels: set[str] | frozenset[str] | None = None) -> SheetData:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"cannot read workbook {path}: {e}") from e
    return read_workbook(data, null_sentinels=null_sentinels)


def _header_names(raw_headers: list[Any]) -> list[str]:
    """Render header cells as column names.

    Blank headers become __EMPTY, __EMPTY_1, ...; repeated names get a numeric
    suffix (Name, Name_1, Name_2) so every column keeps its own key.
    """
    names: list[str] = []
    seen: dict[str, int] = {}
    for raw in raw_headers:
        base = EMPTY_HEADER if is_blank(raw) else cell_text(raw)
        name = base
        if name in seen:
            count = seen[base]
            while f"{base}_{count}" in seen:
                count += 1
            seen[base] = count + 1
            name = f"{base}_{count}"
        seen.setdefault(name, 1)
        names.append(name)
    return names


def _used_range(df: pd.DataFrame) -> tuple[int, int] | None:
    """Position of the first non-blank row and column, None for a blank sheet."""
    blank = df.apply(lambda col: col.map(is_blank))
    used_rows = ~blank.all(axis=1)
    used_cols = ~blank.all(axis=0)
    if not used_rows.any():
        return None
    return int(used_rows.to_numpy().argmax()), int(used_cols.to_numpy().argmax())


def normalize_sheet(
    df: pd.DataFrame,
    sheet_name: str,
    null_sentinels: set[str] | frozenset[str] | None = None,
) -> SheetData:
    """Turn a header-less raw DataFrame into header -> value rows.

    Steps:
    1. Leading blank rows and columns are dropped, so the table starts at the
       sheet's first used cell
    2. First used row becomes the header
    3. Remaining rows become RowData, numbered as spreadsheet rows
    4. Blank cells and null sentinel texts are omitted from the row mapping
    5. Rows with no non-blank cell are skipped
    """
    if df.shape[0] == 0 or df.shape[1] == 0:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])
    origin = _used_range(df)
    if origin is None:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])
    first_row, first_col = origin
    table = df.iloc[first_row:, first_col:]
    columns = _header_names(table.iloc[0].tolist())
    rows: list[RowData] = []
    for offset, raw in enumerate(table.iloc[1:].itertuples(index=False, name=None)):
        values: dict[str, Any] = {}
        for col, val in zip(columns, raw, strict=False):
            if is_blank(val):
                continue
            if null_sentinels and isinstance(val, str) and val.strip().upper() in null_sentinels:
                continue
            values[col] = val
        if not values:
            continue
        rows.append(RowData(row_number=first_row + offset + 2, values=values))
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)
