"""Aggregate statistics over a parsed record set.

Everything here is recomputed from scratch for each record set; nothing is
updated incrementally.

Minimum values skip records whose metric is 0, so a reported minimum of 0
means "no record had a positive value" rather than "the smallest value was
0". Maximum values over an empty record set are 0.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence, Tuple

from adreport.schema import AdRecord

EXTREME_METRICS = ("views", "clicks", "cost", "gmv")


@dataclass(frozen=True)
class TopKeyword:
    keyword: str
    views: int
    clicks: int
    cost: int


@dataclass(frozen=True)
class MetricExtremes:
    views: int = 0
    clicks: int = 0
    cost: int = 0
    gmv: int = 0


@dataclass(frozen=True)
class ReportStatistics:
    total_views: int = 0
    total_clicks: int = 0
    total_cost: int = 0
    total_gmv: int = 0
    total_conversions: int = 0
    average_click_rate: float = 0.0
    average_conversion_rate: float = 0.0
    top_keywords: Tuple[TopKeyword, ...] = ()
    max_values: MetricExtremes = MetricExtremes()
    min_values: MetricExtremes = MetricExtremes()

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["top_keywords"] = [asdict(k) for k in self.top_keywords]
        return out


def _rate(numerator: int, denominator: int) -> float:
    return (numerator / denominator) * 100 if denominator > 0 else 0.0


def _max_values(records: Sequence[AdRecord]) -> MetricExtremes:
    if not records:
        return MetricExtremes()
    return MetricExtremes(
        **{m: max(getattr(r, m) for r in records) for m in EXTREME_METRICS}
    )


def _min_values(records: Sequence[AdRecord]) -> MetricExtremes:
    values = {}
    for m in EXTREME_METRICS:
        positive = [getattr(r, m) for r in records if getattr(r, m) > 0]
        values[m] = min(positive) if positive else 0
    return MetricExtremes(**values)


def top_keywords_by_views(records: Sequence[AdRecord], n: int = 10) -> Tuple[TopKeyword, ...]:
    """Return the *n* records with the most views.

    Ranks a sorted copy; *records* keeps its source order. Records with equal
    views stay in source order.
    """
    ranked = sorted(records, key=lambda r: r.views, reverse=True)[:n]
    return tuple(TopKeyword(r.keyword, r.views, r.clicks, r.cost) for r in ranked)


def compute_statistics(records: Sequence[AdRecord], top_n: int = 10) -> ReportStatistics:
    total_views = sum(r.views for r in records)
    total_clicks = sum(r.clicks for r in records)
    total_conversions = sum(r.conversions for r in records)

    return ReportStatistics(
        total_views=total_views,
        total_clicks=total_clicks,
        total_cost=sum(r.cost for r in records),
        total_gmv=sum(r.gmv for r in records),
        total_conversions=total_conversions,
        average_click_rate=_rate(total_clicks, total_views),
        average_conversion_rate=_rate(total_conversions, total_clicks),
        top_keywords=top_keywords_by_views(records, top_n),
        max_values=_max_values(records),
        min_values=_min_values(records),
    )
