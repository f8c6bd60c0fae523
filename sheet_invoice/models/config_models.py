from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the spreadsheet -> invoice normalizer.

These are the typed domain view of config/sheet_invoice.yml. Loading and
validation live in sheet_invoice/config/loader.py.
"""

DEFAULT_ERROR_LOG_DIR = "./logs"


@dataclass(frozen=True)
class ParserConfig:
    """Root configuration object for parsing.

    gst_fraction_normalization:
        Treat GST values strictly between 0 and 1 as fractions (0.18 -> 18).
        Sub-1% rates cannot be expressed while this is on.
    null_sentinels:
        Upper-cased cell texts treated as blank cells (e.g. {"NULL", "-"}).
    """
    gst_fraction_normalization: bool = True
    null_sentinels: frozenset[str] = field(default_factory=frozenset)
    error_log_dir: str = DEFAULT_ERROR_LOG_DIR
