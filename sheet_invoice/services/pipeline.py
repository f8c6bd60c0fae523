from __future__ import annotations

import logging
from pathlib import Path

from ..excel.reader import read_workbook, read_workbook_file
from ..models.config_models import ParserConfig
from ..models.parse_result import ParseResult
from .aggregator import aggregate

"""Single-workbook entry points: decode the first sheet, then aggregate.

Both calls are synchronous and stateless. DecodeError propagates to the
caller without retry.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "parse_workbook",
    "parse_file",
]


def parse_workbook(data: bytes, config: ParserConfig | None = None) -> ParseResult:
    cfg = config or ParserConfig()
    sheet = read_workbook(data, null_sentinels=cfg.null_sentinels)
    logger.debug(f"sheet={sheet.sheet_name} columns={sheet.columns} rows={len(sheet.rows)}")
    return aggregate(sheet.rows, config=cfg)


def parse_file(path: Path, config: ParserConfig | None = None) -> ParseResult:
    cfg = config or ParserConfig()
    sheet = read_workbook_file(Path(path), null_sentinels=cfg.null_sentinels)
    logger.debug(f"file={Path(path).name} sheet={sheet.sheet_name} rows={len(sheet.rows)}")
    return aggregate(sheet.rows, config=cfg)
