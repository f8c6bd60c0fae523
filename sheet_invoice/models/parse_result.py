from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .invoice import InvoiceData

"""ParseResult model: the output of one decode -> aggregate pass."""

__all__ = [
    "ParseResult",
]


@dataclass(frozen=True)
class ParseResult:
    """Ordered invoices of one workbook, in first-seen invoice number order.

    Behaves as a read-only sequence of InvoiceData. Row bookkeeping is kept
    alongside so callers can report dropped rows.
    """
    invoices: tuple[InvoiceData, ...] = ()
    total_rows: int = 0  # data rows handed to the aggregator
    skipped_rows: tuple[int, ...] = ()  # row numbers without an invoice number

    def __len__(self) -> int:
        return len(self.invoices)

    def __iter__(self) -> Iterator[InvoiceData]:
        return iter(self.invoices)

    def __getitem__(self, index: int) -> InvoiceData:
        return self.invoices[index]

    @property
    def product_count(self) -> int:
        return sum(len(inv.products) for inv in self.invoices)

    def invoice_numbers(self) -> list[str]:
        return [inv.invoice_no for inv in self.invoices]
