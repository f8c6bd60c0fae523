from __future__ import annotations

import math
import numbers
import re
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

import pandas as pd

"""Cell value coercion for the invoice aggregator.

Every function here returns a definite value and never raises: spreadsheet
cells are user data and a bad cell must not abort the whole parse.

Numbers:
- coerce_number: numeric pass-through, text stripped to [0-9.-] then parsed, else 0
- coerce_gst_percent: "18%" -> 18, 0.18 -> 18 (fraction heuristic), else 0
Dates:
- coerce_date: spreadsheet serial (day 0 = 1899-12-30) -> "DD/MM/YYYY H:MM:SS AM|PM"
  built from UTC components only; text passes through unchanged
"""

__all__ = [
    "is_blank",
    "cell_text",
    "coerce_number",
    "coerce_gst_percent",
    "coerce_date",
    "format_invoice_date",
    "serial_to_datetime",
]

# Serial number of 1970-01-01 in the 1900 date system (day 0 = 1899-12-30)
UNIX_EPOCH_SERIAL = 25569
MS_PER_DAY = 86400 * 1000
_UNIX_EPOCH = datetime(1970, 1, 1)
_SERIAL_DAY_ZERO = date(1899, 12, 30)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _as_python_number(value: Any) -> int | float:
    if isinstance(value, numbers.Integral):
        return int(value)
    result = float(value)
    return result if math.isfinite(result) else 0


def is_blank(value: Any) -> bool:
    """True for None, NaN/NaT and the empty string."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def cell_text(value: Any) -> str:
    """Render a raw cell as text ("" for blank, 1001.0 -> "1001")."""
    if is_blank(value):
        return ""
    if isinstance(value, str):
        return value
    if _is_number(value):
        number = _as_python_number(value)
        if isinstance(number, float) and number.is_integer():
            return str(int(number))
        return str(number)
    return str(value)


def coerce_number(value: Any) -> int | float:
    """Coerce qty / amount cells. Unparsable or empty input gives 0."""
    if _is_number(value):
        return _as_python_number(value)
    if isinstance(value, str):
        clean = _NON_NUMERIC.sub("", value)
        try:
            return float(clean)
        except ValueError:
            return 0
    return 0


def coerce_gst_percent(value: Any, *, normalize_fraction: bool = True) -> float:
    """Coerce a GST percent cell.

    Text has its "%" removed and its leading number parsed. With
    normalize_fraction, values strictly between 0 and 1 are read as fractions
    and multiplied by 100, so a genuine sub-1% rate is not representable.
    """
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(value.replace("%", "", 1))
        percent = float(match.group(1)) if match else 0.0
    elif _is_number(value):
        percent = float(_as_python_number(value))
    else:
        percent = 0.0
    if not math.isfinite(percent):
        percent = 0.0
    if normalize_fraction and 0 < percent < 1:
        percent = percent * 100
    return percent


def serial_to_datetime(serial: float) -> datetime:
    """Spreadsheet serial day count -> naive UTC datetime, rounded to the millisecond."""
    millis = math.floor((serial - UNIX_EPOCH_SERIAL) * MS_PER_DAY + 0.5)
    return _UNIX_EPOCH + timedelta(milliseconds=millis)


def format_invoice_date(value: datetime) -> str:
    """DD/MM/YYYY H:MM:SS AM|PM on a 12-hour clock (hour 0 -> 12)."""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    hours = value.hour
    suffix = "PM" if hours >= 12 else "AM"
    hours = hours % 12 or 12
    return (
        f"{value.day:02d}/{value.month:02d}/{value.year} "
        f"{hours}:{value.minute:02d}:{value.second:02d} {suffix}"
    )


def coerce_date(value: Any) -> str:
    """Format an invoice date cell.

    Blank and zero give "". Numbers are spreadsheet serials, typed date cells
    are formatted directly (time-only cells on 30/12/1899), text is returned
    as-is without validation.
    """
    if is_blank(value) or (_is_number(value) and not value):
        return ""
    if isinstance(value, str):
        return value
    if _is_number(value):
        try:
            return format_invoice_date(serial_to_datetime(float(value)))
        except (OverflowError, ValueError):
            return cell_text(value)
    if isinstance(value, datetime):
        return format_invoice_date(value)
    if isinstance(value, date):
        return format_invoice_date(datetime.combine(value, time()))
    if isinstance(value, time):
        # time-only cell: serial fraction on day 0
        return format_invoice_date(datetime.combine(_SERIAL_DAY_ZERO, value))
    return str(value)
