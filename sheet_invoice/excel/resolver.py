from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.row_data import RowData

"""Field resolver: logical field name -> raw cell value.

A header matches a key part when its lowercased text contains the lowercased
key part, and (if given) does not contain the lowercased exclude part. Headers
are scanned in row order and the first match wins; there is no ranking by
specificity, so sheets must avoid overlapping header names the exclusion
cannot tell apart (e.g. "GST No" before "Customer GST No").
"""

__all__ = [
    "EMPTY",
    "resolve",
    "first_value",
]

EMPTY = ""
_LAST = object()


def _values(row: RowData | Mapping[str, Any]) -> Mapping[str, Any]:
    return row.values if isinstance(row, RowData) else row


def resolve(row: RowData | Mapping[str, Any], key_part: str, exclude_part: str | None = None) -> Any:
    """Return the cell under the first header matching ``key_part``.

    The value is returned unmodified (str, number or datetime). EMPTY ("") is
    returned when no header matches.
    """
    key = key_part.lower()
    exclude = exclude_part.lower() if exclude_part else None
    for header, value in _values(row).items():
        lower = header.lower()
        if key not in lower:
            continue
        if exclude is not None and exclude in lower:
            continue
        return value
    return EMPTY


def first_value(
    row: RowData | Mapping[str, Any],
    *lookups: str | tuple[str, str],
    default: Any = _LAST,
) -> Any:
    """Resolve several lookups in turn and return the first truthy value.

    Each lookup is either a key part or a ``(key_part, exclude_part)`` pair.
    Empty strings and zero fall through to the next lookup. When none is
    truthy, ``default`` is returned if given, else the last resolution.
    """
    value: Any = EMPTY
    for lookup in lookups:
        if isinstance(lookup, tuple):
            value = resolve(row, lookup[0], lookup[1])
        else:
            value = resolve(row, lookup)
        if value:
            return value
    return value if default is _LAST else default
