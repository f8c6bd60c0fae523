from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Invoice domain models.

Seller / Customer / Product / InvoiceData are the normalized shape handed to
rendering and editing collaborators. InvoiceData is frozen once aggregation
finishes; the mutable phase lives in ``InvoiceDraft``.
"""

__all__ = [
    "Seller",
    "Customer",
    "Product",
    "InvoiceData",
    "InvoiceDraft",
]


@dataclass(frozen=True)
class Seller:
    name: str = ""
    address: str = ""
    pincode: str = ""
    gst_no: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "address": self.address,
            "pincode": self.pincode,
            "gstNo": self.gst_no,
        }


@dataclass(frozen=True)
class Customer:
    name: str = ""
    address: str = ""
    pincode: str = ""
    gst_no: str = ""
    phone: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "address": self.address,
            "pincode": self.pincode,
            "gstNo": self.gst_no,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class Product:
    """One invoice line. ``amount`` is the rate per unit."""
    details: str
    hsn_code: str
    qty: float
    amount: float
    gst_percent: float

    @property
    def taxable_value(self) -> float:
        return self.qty * self.amount

    @property
    def gst_amount(self) -> float:
        return self.taxable_value * self.gst_percent / 100

    @property
    def total(self) -> float:
        return self.taxable_value + self.gst_amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "details": self.details,
            "hsnCode": self.hsn_code,
            "qty": self.qty,
            "amount": self.amount,
            "gstPercent": self.gst_percent,
        }


@dataclass(frozen=True)
class InvoiceData:
    """A sealed invoice group: every row sharing one invoice number.

    Attributes:
        invoice_no: Non-empty key, unique within a ParseResult
        date: Formatted invoice date (DD/MM/YYYY H:MM:SS AM|PM) or the sheet text as-is
        seller: Seller taken from the first row of the group
        customer: Customer taken from the first row of the group
        products: One Product per row of the group, in row order
    """
    invoice_no: str
    date: str
    seller: Seller
    customer: Customer
    products: tuple[Product, ...] = ()

    @property
    def total_taxable(self) -> float:
        return sum(p.taxable_value for p in self.products)

    @property
    def total_gst(self) -> float:
        return sum(p.gst_amount for p in self.products)

    @property
    def grand_total(self) -> float:
        return self.total_taxable + self.total_gst

    def to_dict(self) -> dict[str, Any]:
        """Downstream (renderer / editor) shape with camelCase keys."""
        return {
            "invoiceNo": self.invoice_no,
            "date": self.date,
            "seller": self.seller.to_dict(),
            "customer": self.customer.to_dict(),
            "products": [p.to_dict() for p in self.products],
        }


@dataclass
class InvoiceDraft:
    """Mutable invoice group used while rows are still being folded in."""
    invoice_no: str
    date: str
    seller: Seller
    customer: Customer
    products: list[Product] = field(default_factory=list)

    def add_product(self, product: Product) -> None:
        self.products.append(product)

    def seal(self) -> InvoiceData:
        return InvoiceData(
            invoice_no=self.invoice_no,
            date=self.date,
            seller=self.seller,
            customer=self.customer,
            products=tuple(self.products),
        )
