# Shared pytest fixtures
from __future__ import annotations
import io
import logging
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from sheet_invoice.logging.init import APP_LOGGER_NAME, reset_logging

HEADER = [
    "Invoice No",
    "Invoice Date",
    "Seller Name",
    "Seller Address",
    "Seller Pincode",
    "Seller GST No",
    "Customer Name",
    "Customer Address",
    "Customer Pincode",
    "GST No If Available",
    "Phone",
    "Product Details",
    "HSN Code",
    "Qty",
    "Product Amount",
    "GST Percent",
]


def invoice_row(invoice_no: object, details: str, qty: object, amount: object, gst: object) -> list[object]:
    return [
        invoice_no,
        45000,
        "Acme Traders",
        "12 Market Road",
        560001,
        "29ABCDE1234F1Z5",
        "Ravi Kumar",
        "4 Lake View",
        560034,
        "N/A",
        9876543210,
        details,
        "8471",
        qty,
        amount,
        gst,
    ]


def workbook_bytes(rows: list[list[object]], sheets: dict[str, list[list[object]]] | None = None) -> bytes:
    """Build an .xlsx in memory; ``rows`` (header first) becomes the first sheet."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Invoices", header=False, index=False)
        for name, extra in (sheets or {}).items():
            pd.DataFrame(extra).to_excel(writer, sheet_name=name, header=False, index=False)
    return buf.getvalue()


def write_workbook(path: Path, rows: list[list[object]]) -> Path:
    path.write_bytes(workbook_bytes(rows))
    return path


@pytest.fixture(autouse=True)
def _reset_app_logger():
    reset_logging()
    yield
    # drop handlers bound to this test's captured stdout
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """gst_fraction_normalization: true
null_sentinels: ["NULL", "-"]
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sheet_invoice.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def two_invoice_rows() -> list[list[object]]:
    return [
        HEADER,
        invoice_row("INV-1", "Widget A", 2, 100, 0.18),
        invoice_row("INV-1", "Widget B", 1, 50, 18),
        invoice_row(None, "Orphan", 1, 10, 5),
        invoice_row("INV-2", "Gadget", "3", "1,234.50", "12%"),
    ]


@pytest.fixture()
def data_workbooks(temp_workdir: Path, two_invoice_rows) -> list[Path]:
    data_dir = temp_workdir / "data"
    return [
        write_workbook(data_dir / "jan.xlsx", two_invoice_rows),
        write_workbook(data_dir / "feb.xlsx", [HEADER, invoice_row("INV-9", "Cable", 4, 25, 5)]),
    ]


@pytest.fixture()
def header() -> list[str]:
    return list(HEADER)


@pytest.fixture()
def make_row():
    return invoice_row


@pytest.fixture()
def make_workbook():
    return workbook_bytes
