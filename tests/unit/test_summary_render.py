from __future__ import annotations

import re
from datetime import UTC, datetime

from sheet_invoice.models.processing_result import ProcessingResult
from sheet_invoice.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY files=(\d+)/(\d+) success=(\d+) failed=(\d+) invoices=(\d+) "
    r"products=(\d+) skipped_rows=(\d+) elapsed_sec=([0-9.]+)$"
)


def _result(elapsed: float, **overrides) -> ProcessingResult:
    start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=UTC)
    values = dict(
        success_files=2,
        failed_files=1,
        total_invoices=5,
        total_products=12,
        skipped_rows=3,
        start_time=start,
        end_time=start,
        elapsed_seconds=elapsed,
    )
    values.update(overrides)
    return ProcessingResult(**values)


def test_render_summary_line_format():
    line = render_summary_line(3, _result(2.0))
    assert line == (
        "SUMMARY files=3/3 success=2 failed=1 invoices=5 products=12 skipped_rows=3 elapsed_sec=2"
    )
    assert SUMMARY_PATTERN.match(line)


def test_render_summary_line_fractional_elapsed():
    assert render_summary_line(3, _result(1.23456)).endswith("elapsed_sec=1.235")
    assert render_summary_line(3, _result(0.0012)).endswith("elapsed_sec=0.0012")
    assert render_summary_line(3, _result(0.0)).endswith("elapsed_sec=0")


def test_render_summary_line_empty_run():
    line = render_summary_line(0, _result(0.0, success_files=0, failed_files=0, total_invoices=0,
                                          total_products=0, skipped_rows=0))
    assert line.startswith("SUMMARY files=0/0 success=0 failed=0 invoices=0 products=0 skipped_rows=0")
    assert SUMMARY_PATTERN.match(line)
