from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model for the spreadsheet -> invoice normalizer.

RowData represents a single data row of the first worksheet after header
processing. It lives only until the field resolver has read it.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single worksheet row.

    ``values`` maps the literal header text (case and whitespace preserved) to
    the raw cell value. Blank cells are not present in the mapping.
    The row_number refers to the spreadsheet row (header = 1, first data row = 2).
    """
    row_number: int  # spreadsheet row number (first data row = 2)
    values: dict[str, Any]  # header -> raw cell value (str | number | datetime)
