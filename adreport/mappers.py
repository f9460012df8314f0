"""Mapping utilities between raw report fields, AdRecord and pandas DataFrames."""
from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

import pandas as pd

from adreport.schema import INT_FIELDS, RECORD_COLUMNS, AdRecord

_LEADING_INT = re.compile(r"[+-]?\d+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def to_int(v: Any) -> int:
    """Parse the leading integer of *v*; 0 when there is none.

    "12abc" -> 12, "3.9" -> 3, "" / None / "n/a" -> 0. Results are clamped to
    the int64 range so they fit DataFrame integer columns.
    """
    if v is None:
        return 0
    if isinstance(v, int):
        return _clamp(v)
    try:
        if pd.isna(v):
            return 0
    except (TypeError, ValueError):
        pass
    m = _LEADING_INT.match(str(v).strip())
    if not m:
        return 0
    try:
        n = int(m.group(0))
    except ValueError:
        return 0
    return _clamp(n)


def _clamp(n: int) -> int:
    return max(INT64_MIN, min(INT64_MAX, n))


def _to_str(v: Any) -> str:
    if v is None:
        return ""
    return str(v)


def map_fields_to_record(row: Sequence[str]) -> AdRecord:
    """Build an AdRecord from positional source fields."""
    values = {}
    for idx, name in enumerate(RECORD_COLUMNS):
        raw = row[idx] if idx < len(row) else None
        values[name] = to_int(raw) if name in INT_FIELDS else _to_str(raw)
    return AdRecord(**values)


def records_to_dataframe(records: Iterable[AdRecord]) -> pd.DataFrame:
    data = [r.to_dict() for r in records]
    df = pd.DataFrame(data, columns=list(RECORD_COLUMNS))
    for col in INT_FIELDS:
        df[col] = df[col].astype("int64")
    return df

