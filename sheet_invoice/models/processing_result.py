from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .invoice import InvoiceData

"""Processing result models for batch runs over several workbooks.

A ProcessingResult aggregates per-file outcomes and carries every invoice that
was parsed successfully, in file order then first-seen order.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    invoices: int
    products: int
    skipped_rows: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for the SUMMARY output line and the JSON export."""
    success_files: int
    failed_files: int
    total_invoices: int
    total_products: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)
    invoices: list[InvoiceData] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
