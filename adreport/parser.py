"""Parse a keyword-ad campaign export into a ParsedReport.

Export layout::

    <report title>
    <label>,<username>
    <label>,<store name>
    <label>,<seller id>
    <label>,<ad name>
    <label>,<product id>
    <separator>
    <label>,<report creation time>
    <label>,<time range>
    Thứ tự,Từ khóa,Loại từ khóa,...      <- column header row
    <data rows, 24 comma-separated fields, CSV quoting allowed>

Blank lines are dropped before any positional lookup, so the header indices
below refer to the non-blank lines only.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from adreport.mappers import map_fields_to_record
from adreport.schema import (
    DATA_SECTION_MARKER,
    MIN_ROW_FIELDS,
    AdRecord,
    ParsedReport,
    ReportHeader,
)
from adreport.statistics import compute_statistics

logger = logging.getLogger(__name__)

# header field -> index into the non-blank line list
_HEADER_LINES = {
    "username": 1,
    "store_name": 2,
    "seller_id": 3,
    "ad_name": 4,
    "product_id": 5,
    "report_creation_time": 7,
    "time_range": 8,
}


class ReportParseError(ValueError):
    """Raised when the export has no recognisable data section."""


def _split_lines(text: str) -> List[str]:
    if text.startswith("\ufeff"):
        text = text[1:]
    lines = (line.rstrip("\r") for line in text.split("\n"))
    return [line for line in lines if line.strip()]


def _second_field(lines: List[str], idx: int) -> str:
    if idx >= len(lines):
        return ""
    parts = lines[idx].split(",")
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def parse_header(lines: List[str]) -> ReportHeader:
    return ReportHeader(
        report_title=lines[0].strip() if lines else "",
        **{name: _second_field(lines, idx) for name, idx in _HEADER_LINES.items()},
    )


def find_data_start(lines: List[str]) -> int:
    """Index of the first data line (the line after the column header row)."""
    for i, line in enumerate(lines):
        if DATA_SECTION_MARKER in line:
            return i + 1
    raise ReportParseError("Could not find data section in CSV")


def split_fields(line: str) -> Optional[List[str]]:
    """Split one delimited line honouring CSV quoting; None if unparseable."""
    try:
        return next(csv.reader([line]), [])
    except csv.Error:
        return None


def parse_rows(lines: List[str]) -> Tuple[List[AdRecord], int]:
    """Map data lines to records. Returns (records, dropped_count)."""
    records: List[AdRecord] = []
    dropped = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        row = split_fields(line)
        if row is None or len(row) < MIN_ROW_FIELDS:
            dropped += 1
            logger.debug(
                "Dropping data line %d: %s fields (need %d)",
                lineno,
                "unparseable" if row is None else len(row),
                MIN_ROW_FIELDS,
            )
            continue
        records.append(map_fields_to_record(row))
    return records, dropped


def parse_report(text: str, top_n: int = 10) -> ParsedReport:
    """Parse raw export text. Raises ReportParseError if the data section is missing."""
    lines = _split_lines(text)
    header = parse_header(lines)
    start = find_data_start(lines)

    records, dropped = parse_rows(lines[start:])
    if dropped:
        logger.warning(
            "Skipped %d malformed data row(s) with fewer than %d fields",
            dropped,
            MIN_ROW_FIELDS,
        )
    logger.debug("Parsed %d ad record(s) from report %r", len(records), header.report_title)

    return ParsedReport(
        header=header,
        records=tuple(records),
        statistics=compute_statistics(records, top_n=top_n),
        dropped_rows=dropped,
    )


def parse_report_file(path: str | Path, top_n: int = 10) -> ParsedReport:
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_report(text, top_n=top_n)
