"""Typed records for a parsed keyword-ad campaign report."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any, Dict, Tuple

if TYPE_CHECKING:
    from adreport.statistics import ReportStatistics

DATA_SECTION_MARKER = "Thứ tự,Từ khóa,Loại từ khóa"
MIN_ROW_FIELDS = 24

# Source column order of the data section.
RECORD_COLUMNS: Tuple[str, ...] = (
    "order",
    "keyword",
    "keyword_type",
    "search_command",
    "bidding_method",
    "views",
    "clicks",
    "click_rate",
    "conversions",
    "direct_conversions",
    "conversion_rate",
    "direct_conversion_rate",
    "cost_per_conversion",
    "direct_cost_per_conversion",
    "products_sold",
    "direct_products_sold",
    "gmv",
    "direct_gmv",
    "cost",
    "average_rank",
    "roas",
    "direct_roas",
    "acos",
    "direct_acos",
)

INT_FIELDS = frozenset(
    {
        "order",
        "views",
        "clicks",
        "conversions",
        "direct_conversions",
        "products_sold",
        "direct_products_sold",
        "gmv",
        "direct_gmv",
        "cost",
        "average_rank",
    }
)

# Pre-formatted percentage / ratio text, compared numerically when sorting.
RATIO_FIELDS = frozenset(
    {
        "click_rate",
        "conversion_rate",
        "direct_conversion_rate",
        "roas",
        "direct_roas",
        "acos",
        "direct_acos",
    }
)


@dataclass(frozen=True)
class ReportHeader:
    report_title: str = ""
    username: str = ""
    store_name: str = ""
    seller_id: str = ""
    ad_name: str = ""
    product_id: str = ""
    report_creation_time: str = ""
    time_range: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class AdRecord:
    """One keyword row of the data section.

    Ratio columns (``click_rate``, ``roas`` ...) keep the exporter's own
    formatting; they are never recomputed from the counts.
    """

    order: int = 0
    keyword: str = ""
    keyword_type: str = ""
    search_command: str = ""
    bidding_method: str = ""
    views: int = 0
    clicks: int = 0
    click_rate: str = ""
    conversions: int = 0
    direct_conversions: int = 0
    conversion_rate: str = ""
    direct_conversion_rate: str = ""
    cost_per_conversion: str = ""
    direct_cost_per_conversion: str = ""
    products_sold: int = 0
    direct_products_sold: int = 0
    gmv: int = 0
    direct_gmv: int = 0
    cost: int = 0
    average_rank: int = 0
    roas: str = ""
    direct_roas: str = ""
    acos: str = ""
    direct_acos: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ParsedReport:
    """Header, records and statistics produced together by one parse."""

    header: ReportHeader
    records: Tuple[AdRecord, ...]
    statistics: "ReportStatistics"
    dropped_rows: int = 0

    @property
    def record_count(self) -> int:
        return len(self.records)
