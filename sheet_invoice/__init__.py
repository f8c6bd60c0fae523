"""Spreadsheet -> invoice normalizer.

Reads the first sheet of a workbook and folds its rows into ordered,
deduplicated invoice records (seller, customer, date, products).
"""

from .excel.reader import DecodeError
from .excel.resolver import resolve
from .models import Customer, InvoiceData, ParseResult, ParserConfig, Product, Seller
from .services.aggregator import aggregate
from .services.pipeline import parse_file, parse_workbook

__all__ = [
    "DecodeError",
    "ParserConfig",
    "ParseResult",
    "InvoiceData",
    "Seller",
    "Customer",
    "Product",
    "aggregate",
    "parse_file",
    "parse_workbook",
    "resolve",
]
