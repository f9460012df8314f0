"""Filter / sort / paginate / export over the parsed record DataFrame.

All functions are pure: they take a DataFrame produced by
:func:`adreport.mappers.records_to_dataframe` and return a new one.
"""

from __future__ import annotations

import io
import math
import re
from dataclasses import dataclass
from typing import List, Tuple

import pandas as pd

from adreport.mappers import to_int
from adreport.schema import INT_FIELDS, RATIO_FIELDS, RECORD_COLUMNS

ALL_TYPES = "all"
EXPORT_FILE_NAME = "filtered_ad_data.csv"

# (export header, record column)
EXPORT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("Order", "order"),
    ("Keyword", "keyword"),
    ("Type", "keyword_type"),
    ("Search Command", "search_command"),
    ("Views", "views"),
    ("Clicks", "clicks"),
    ("Click Rate", "click_rate"),
    ("Conversions", "conversions"),
    ("Cost", "cost"),
    ("GMV", "gmv"),
    ("Avg Rank", "average_rank"),
)
_QUOTED_EXPORT_COLUMNS = {"keyword", "keyword_type", "search_command"}

_LEADING_FLOAT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def ratio_value(text) -> float:
    """Numeric value of a formatted ratio such as '3.25%'; 0.0 if not numeric."""
    m = _LEADING_FLOAT.match(str(text).replace("%", "").strip())
    if not m:
        return 0.0
    value = float(m.group(0))
    return value if math.isfinite(value) else 0.0


def keyword_types(df: pd.DataFrame) -> List[str]:
    """Distinct non-empty keyword types, in first-seen order."""
    return [t for t in df["keyword_type"].drop_duplicates().tolist() if t]


def filter_records(
    df: pd.DataFrame,
    search: str = "",
    keyword_type: str = ALL_TYPES,
) -> pd.DataFrame:
    """Case-insensitive substring match on keyword / search command, exact match on type."""
    mask = pd.Series(True, index=df.index)
    if search:
        needle = search.lower()
        in_keyword = df["keyword"].str.lower().str.contains(needle, regex=False)
        in_command = df["search_command"].str.lower().str.contains(needle, regex=False)
        mask &= in_keyword | in_command
    if keyword_type and keyword_type != ALL_TYPES:
        mask &= df["keyword_type"] == keyword_type
    return df[mask].copy()


def _sort_key(field: str):
    if field in INT_FIELDS:
        return None
    if field in RATIO_FIELDS:
        return lambda s: s.map(ratio_value)
    return lambda s: s.astype(str).str.lower()


def sort_records(df: pd.DataFrame, field: str = "order", ascending: bool = True) -> pd.DataFrame:
    """Stable sort by *field* using numeric, ratio or case-insensitive text ordering."""
    if field not in RECORD_COLUMNS:
        raise ValueError(f"Unknown sort field: {field!r}")
    return df.sort_values(
        field,
        ascending=ascending,
        kind="stable",
        key=_sort_key(field),
    )


@dataclass(frozen=True)
class Page:
    rows: pd.DataFrame
    page: int
    total_pages: int
    start: int  # 0-based offset of the first row
    end: int  # exclusive
    total: int


def paginate(df: pd.DataFrame, page: int = 1, page_size: int = 25) -> Page:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(df)
    total_pages = math.ceil(total / page_size)
    page = max(1, min(page, total_pages)) if total_pages else 1
    start = (page - 1) * page_size
    end = min(start + page_size, total)
    return Page(
        rows=df.iloc[start:end],
        page=page,
        total_pages=total_pages,
        start=start,
        end=end,
        total=total,
    )


def page_window(page: int, total_pages: int, width: int = 5) -> List[int]:
    """Page numbers to show as buttons, centred on *page* where possible."""
    if total_pages <= 0:
        return []
    first = max(1, min(total_pages - width + 1, page - width // 2))
    return list(range(first, first + min(width, total_pages)))


def _quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def _export_cell(col: str, value) -> str:
    if col in _QUOTED_EXPORT_COLUMNS:
        return _quote(value)
    text = str(value)
    if any(ch in text for ch in ',"\n'):
        return _quote(text)
    return text


def export_csv(df: pd.DataFrame) -> str:
    """Render the visible rows in the fixed 11-column export layout."""
    lines = [",".join(header for header, _ in EXPORT_COLUMNS)]
    for row in df.to_dict(orient="records"):
        lines.append(",".join(_export_cell(col, row[col]) for _, col in EXPORT_COLUMNS))
    return "\n".join(lines)


def read_export_csv(text: str) -> pd.DataFrame:
    """Read an exported CSV back into record-named columns."""
    df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    df = df.rename(columns=dict(EXPORT_COLUMNS))
    for _, col in EXPORT_COLUMNS:
        if col in INT_FIELDS:
            df[col] = df[col].map(to_int).astype("int64")
    return df
