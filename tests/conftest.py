"""Shared builders for sample campaign exports."""

from __future__ import annotations

import csv
import io
from typing import Dict, List

import pytest

from adreport.schema import DATA_SECTION_MARKER, RECORD_COLUMNS

HEADER_LINES = [
    "Báo cáo Quảng cáo Từ khóa",
    "Tên người dùng,shop_owner",
    "Tên cửa hàng,My Store",
    "ID người bán,123456",
    "Tên quảng cáo,Summer Sale",
    "ID sản phẩm,987654",
    ",,,,",
    "Ngày tạo báo cáo,01/07/2024 10:00",
    "Khoảng thời gian,01/06/2024 - 30/06/2024",
    "",
]

COLUMN_HEADER = (
    DATA_SECTION_MARKER
    + ",Từ khóa tìm kiếm,Phương thức đấu giá,Lượt xem,Lượt click,Tỷ lệ click,"
    "Lượt chuyển đổi,Lượt chuyển đổi trực tiếp,Tỷ lệ chuyển đổi,Tỷ lệ chuyển đổi trực tiếp,"
    "Chi phí cho mỗi lượt chuyển đổi,Chi phí cho mỗi lượt chuyển đổi trực tiếp,"
    "Sản phẩm đã bán,Sản phẩm đã bán trực tiếp,GMV,GMV trực tiếp,Chi phí,Thứ hạng trung bình,"
    "ROAS,ROAS trực tiếp,ACOS,ACOS trực tiếp"
)

_DEFAULTS: Dict[str, object] = {
    "order": 1,
    "keyword": "áo thun",
    "keyword_type": "Từ khóa rộng",
    "search_command": "áo thun nam",
    "bidding_method": "Tự động",
    "views": 100,
    "clicks": 10,
    "click_rate": "10.00%",
    "conversions": 2,
    "direct_conversions": 1,
    "conversion_rate": "20.00%",
    "direct_conversion_rate": "10.00%",
    "cost_per_conversion": "5000",
    "direct_cost_per_conversion": "10000",
    "products_sold": 3,
    "direct_products_sold": 1,
    "gmv": 300000,
    "direct_gmv": 100000,
    "cost": 10000,
    "average_rank": 4,
    "roas": "30.00",
    "direct_roas": "10.00",
    "acos": "3.33%",
    "direct_acos": "10.00%",
}


def _to_line(values: List[object]) -> str:
    buf = io.StringIO()
    csv.writer(buf, lineterminator="").writerow(values)
    return buf.getvalue()


@pytest.fixture
def make_row():
    """Return a builder: make_row(views=5, keyword="x") -> one CSV data line."""

    def _make(**overrides) -> str:
        values = {**_DEFAULTS, **overrides}
        return _to_line([values[c] for c in RECORD_COLUMNS])

    return _make


@pytest.fixture
def make_report():
    """Return a builder joining header lines, the column header and data lines."""

    def _make(rows: List[str], header_lines: List[str] = None, marker: bool = True) -> str:
        lines = list(HEADER_LINES if header_lines is None else header_lines)
        if marker:
            lines.append(COLUMN_HEADER)
        lines.extend(rows)
        return "\n".join(lines) + "\n"

    return _make
