"""Domain models for the spreadsheet -> invoice normalizer.

This package contains the dataclasses shared by the reader, the aggregator and
the batch orchestration.
"""

from .config_models import ParserConfig
from .error_record import ErrorRecord
from .invoice import Customer, InvoiceData, InvoiceDraft, Product, Seller
from .parse_result import ParseResult
from .processing_result import FileStat, ProcessingResult
from .row_data import RowData

__all__ = [
    # Configuration models
    "ParserConfig",
    # Invoice models
    "Seller",
    "Customer",
    "Product",
    "InvoiceData",
    "InvoiceDraft",
    # Processing models
    "RowData",
    "ParseResult",
    "FileStat",
    "ProcessingResult",
    "ErrorRecord",
]
