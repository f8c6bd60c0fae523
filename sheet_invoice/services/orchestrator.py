from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import DecodeError
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ParserConfig
from ..models.error_record import DECODE_ERROR, MISSING_INVOICE_NO, ErrorRecord
from ..models.invoice import InvoiceData
from ..models.processing_result import FileStat, ProcessingResult
from .pipeline import parse_file
from .progress import ProgressTracker

"""Batch orchestration over several workbooks.

Each file is parsed independently: a file that cannot be decoded is recorded
as failed and the run continues with the next one. Rows dropped for a missing
invoice number are reported to the error log, not treated as failures.
"""

logger = logging.getLogger(__name__)

WORKBOOK_SUFFIXES = {".xlsx"}


class ProcessingError(Exception):
    """Fatal batch error (bad input path)."""


def scan_workbooks(directory: Path) -> list[Path]:
    """List workbook files in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in WORKBOOK_SUFFIXES and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def collect_inputs(inputs: Iterable[Path]) -> list[Path]:
    """Expand CLI inputs: directories are scanned, files are kept as given."""
    paths: list[Path] = []
    for item in inputs:
        if item.is_dir():
            paths.extend(scan_workbooks(item))
        elif item.exists():
            paths.append(item)
        else:
            raise ProcessingError(f"Path not found: {item}")
    return paths


def process_files(
    paths: list[Path],
    config: ParserConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Parse every workbook and aggregate the run metrics.

    Args:
        paths: Workbook files, processed in the given order
        config: Parser configuration (defaults when None)
        error_log: Buffer receiving DECODE_ERROR / MISSING_INVOICE_NO records

    Returns:
        ProcessingResult with per-file stats and all parsed invoices
    """
    cfg = config or ParserConfig()
    start_time = datetime.now(UTC)
    file_stats: list[FileStat] = []
    invoices: list[InvoiceData] = []
    success = failed = total_products = skipped_rows = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            t0 = time.perf_counter()
            try:
                parsed = parse_file(path, cfg)
            except DecodeError as e:
                failed += 1
                logger.error(f"{path.name}: {e}")
                if error_log is not None:
                    error_log.append(ErrorRecord.create(path.name, -1, DECODE_ERROR, str(e)))
                file_stats.append(
                    FileStat(
                        file_name=path.name,
                        status="failed",
                        invoices=0,
                        products=0,
                        skipped_rows=0,
                        elapsed_seconds=time.perf_counter() - t0,
                        error=str(e),
                    )
                )
                progress.finish_file(failed=failed)
                continue

            success += 1
            invoices.extend(parsed)
            total_products += parsed.product_count
            skipped_rows += len(parsed.skipped_rows)
            if error_log is not None:
                for row_number in parsed.skipped_rows:
                    error_log.append(
                        ErrorRecord.create(path.name, row_number, MISSING_INVOICE_NO, "row has no invoice number")
                    )
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status="success",
                    invoices=len(parsed),
                    products=parsed.product_count,
                    skipped_rows=len(parsed.skipped_rows),
                    elapsed_seconds=time.perf_counter() - t0,
                )
            )
            logger.info(
                f"{path.name}: invoices={len(parsed)} products={parsed.product_count} "
                f"skipped_rows={len(parsed.skipped_rows)}"
            )
            progress.finish_file(invoices=len(invoices))

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success,
        failed_files=failed,
        total_invoices=len(invoices),
        total_products=total_products,
        skipped_rows=skipped_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        invoices=invoices,
    )
