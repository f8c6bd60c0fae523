from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from sheet_invoice.config.loader import ConfigError, load_config_or_default
from sheet_invoice.excel.reader import DecodeError, read_workbook_file
from sheet_invoice.logging.error_log import ErrorLogBuffer
from sheet_invoice.logging.init import log_summary, setup_logging
from sheet_invoice.services.orchestrator import ProcessingError, collect_inputs, process_files
from sheet_invoice.services.stats import build_invoice_stats
from sheet_invoice.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (--config, SHEET_INVOICE_CONFIG, or config/sheet_invoice.yml)
- Expand inputs (directories are scanned for .xlsx, non-recursive)
- Parse every workbook, log per-invoice totals, print the SUMMARY line
- Optionally write the invoices as JSON (--output)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "SHEET_INVOICE_CONFIG"


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv; existing environment variables win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Spreadsheet -> invoice normalizer")
    p.add_argument("inputs", nargs="+", type=Path, help="Workbook files or directories")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--output", type=Path, default=None, help="Write parsed invoices as JSON")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(paths: list[Path]) -> int:
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            sd = read_workbook_file(f)
        except DecodeError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEET: {sd.sheet_name} cols={sd.columns}")
        # datetime cells are not JSON friendly, isoformat them for display
        sample = [
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.values.items()}
            for r in sd.rows[:3]
        ]
        print("    sample_rows=", sample)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    config_path = args.config
    if config_path is None and os.getenv(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])
    try:
        cfg = load_config_or_default(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        paths = collect_inputs(args.inputs)
    except ProcessingError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(paths)

    error_log = ErrorLogBuffer(Path(cfg.error_log_dir))
    result = process_files(paths, cfg, error_log=error_log)

    for stat in build_invoice_stats(result.invoices):
        logger.info(f"invoice={stat.invoice_no} customer={stat.customer_name!r} amount={stat.amount:.2f}")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        payload = [inv.to_dict() for inv in result.invoices]
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"wrote {len(payload)} invoices to {args.output}")

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"error log: {log_path}")

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result.total_files, result).removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
