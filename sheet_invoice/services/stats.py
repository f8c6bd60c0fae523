from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..models.invoice import InvoiceData

"""Per-invoice totals for reporting collaborators.

One InvoiceStat per invoice: the grand total (taxable value plus GST over all
products) rounded to 2 decimals. Nothing is persisted here.
"""

__all__ = [
    "InvoiceStat",
    "build_invoice_stats",
]


@dataclass(frozen=True)
class InvoiceStat:
    invoice_no: str
    customer_name: str
    amount: float


def build_invoice_stats(invoices: Iterable[InvoiceData]) -> list[InvoiceStat]:
    return [
        InvoiceStat(
            invoice_no=inv.invoice_no,
            customer_name=inv.customer.name,
            amount=round(inv.grand_total, 2),
        )
        for inv in invoices
    ]
