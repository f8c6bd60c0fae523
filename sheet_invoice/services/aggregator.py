from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..excel.resolver import EMPTY, first_value, resolve
from ..models.config_models import ParserConfig
from ..models.invoice import Customer, InvoiceDraft, Product, Seller
from ..models.parse_result import ParseResult
from ..models.row_data import RowData
from .coercion import cell_text, coerce_date, coerce_gst_percent, coerce_number

"""Invoice aggregator.

Folds worksheet rows into invoices keyed by invoice number. The expected sheet
layout is one row per product with the invoice-level columns (seller, customer,
date) repeated on every row; only the first row of each invoice number feeds
those invoice-level fields.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "aggregate",
    "build_seller",
    "build_customer",
    "build_product",
]


def build_seller(row: RowData | Mapping[str, Any]) -> Seller:
    return Seller(
        name=cell_text(resolve(row, "seller name")),
        address=cell_text(resolve(row, "seller address")),
        pincode=cell_text(resolve(row, "seller pincode")),
        gst_no=cell_text(resolve(row, "seller gst no")),
    )


def build_customer(row: RowData | Mapping[str, Any]) -> Customer:
    """Customer fields, falling back to the unprefixed column when no
    "customer ..." column exists (single-party sheets)."""
    return Customer(
        name=cell_text(first_value(row, "customer name", ("name", "seller"))),
        address=cell_text(first_value(row, "customer address", ("address", "seller"))),
        pincode=cell_text(first_value(row, "customer pincode", ("pincode", "seller"))),
        gst_no=cell_text(first_value(row, "gst no if available", "customer gst", default=EMPTY)),
        phone=cell_text(first_value(row, "phone", "mobile", "contact", default=EMPTY)),
    )


def build_product(row: RowData | Mapping[str, Any], config: ParserConfig) -> Product:
    return Product(
        details=cell_text(resolve(row, "product details")),
        hsn_code=cell_text(resolve(row, "hsn code")),
        qty=coerce_number(resolve(row, "qty")),
        amount=coerce_number(resolve(row, "product amount")),
        gst_percent=coerce_gst_percent(
            resolve(row, "gst percent"),
            normalize_fraction=config.gst_fraction_normalization,
        ),
    )


def _numbered(rows: Iterable[RowData | Mapping[str, Any]]) -> Iterable[RowData]:
    for offset, row in enumerate(rows):
        if isinstance(row, RowData):
            yield row
        else:
            yield RowData(row_number=offset + 2, values=dict(row))


def aggregate(
    rows: Iterable[RowData | Mapping[str, Any]],
    *,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Group rows by invoice number into InvoiceData, in first-seen order.

    Rows without an invoice number are skipped. Every other row appends one
    Product to its invoice, including the row that created the invoice.
    """
    cfg = config or ParserConfig()
    # insertion order of this dict is the output order
    drafts: dict[str, InvoiceDraft] = {}
    skipped: list[int] = []
    total = 0
    for row in _numbered(rows):
        total += 1
        invoice_no = cell_text(resolve(row, "invoice no") or "")
        if not invoice_no:
            logger.debug(f"row {row.row_number}: no invoice number, skipped")
            skipped.append(row.row_number)
            continue
        draft = drafts.get(invoice_no)
        if draft is None:
            draft = InvoiceDraft(
                invoice_no=invoice_no,
                date=coerce_date(first_value(row, "invoice date", "date")),
                seller=build_seller(row),
                customer=build_customer(row),
            )
            drafts[invoice_no] = draft
        draft.add_product(build_product(row, cfg))
    logger.debug(f"aggregated rows={total} invoices={len(drafts)} skipped={len(skipped)}")
    return ParseResult(
        invoices=tuple(d.seal() for d in drafts.values()),
        total_rows=total,
        skipped_rows=tuple(skipped),
    )
