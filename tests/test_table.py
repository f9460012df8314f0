"""Tests for table filtering, sorting, pagination and CSV export."""

from __future__ import annotations

import pandas as pd
import pytest

from adreport.mappers import records_to_dataframe
from adreport.parser import parse_report
from adreport.schema import AdRecord, INT_FIELDS
from adreport.table import (
    export_csv,
    filter_records,
    keyword_types,
    page_window,
    paginate,
    ratio_value,
    read_export_csv,
    sort_records,
)


def _df():
    return records_to_dataframe(
        [
            AdRecord(order=1, keyword="Áo Thun", keyword_type="Rộng", search_command="ao thun nam", views=50, click_rate="2.5%"),
            AdRecord(order=2, keyword="quần jean", keyword_type="Chính xác", search_command="jean xanh", views=300, click_rate="10%"),
            AdRecord(order=3, keyword="giày", keyword_type="", search_command="giày thể thao", views=50, click_rate="-"),
            AdRecord(order=4, keyword="áo khoác", keyword_type="Rộng", search_command="AO KHOAC", views=7, click_rate="0.75%"),
        ]
    )


class TestFilter:
    def test_search_is_case_insensitive_substring(self):
        out = filter_records(_df(), search="ÁO")
        assert out["order"].tolist() == [1, 4]

    def test_search_matches_search_command(self):
        out = filter_records(_df(), search="ao khoac")
        assert out["order"].tolist() == [4]

    def test_search_is_literal(self):
        assert filter_records(_df(), search=".*").empty

    def test_type_equality(self):
        out = filter_records(_df(), keyword_type="Rộng")
        assert out["order"].tolist() == [1, 4]

    def test_all_types_and_empty_search(self):
        assert len(filter_records(_df())) == 4

    def test_keyword_types_skip_empty(self):
        assert keyword_types(_df()) == ["Rộng", "Chính xác"]


class TestSort:
    def test_numeric(self):
        assert sort_records(_df(), "views")["order"].tolist() == [4, 1, 3, 2]

    def test_numeric_desc_is_stable(self):
        assert sort_records(_df(), "views", ascending=False)["order"].tolist() == [2, 1, 3, 4]

    def test_ratio_strips_percent(self):
        # '-' parses as 0
        assert sort_records(_df(), "click_rate")["order"].tolist() == [3, 4, 1, 2]

    def test_text_case_insensitive(self):
        assert sort_records(_df(), "search_command")["order"].tolist() == [4, 1, 3, 2]

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            sort_records(_df(), "nope")

    def test_ratio_value(self):
        assert ratio_value("12.5%") == 12.5
        assert ratio_value("3.1x") == 3.1
        assert ratio_value("") == 0.0
        assert ratio_value("N/A") == 0.0


class TestPaginate:
    def test_pages(self):
        df = records_to_dataframe([AdRecord(order=i) for i in range(1, 61)])
        page = paginate(df, page=3, page_size=25)
        assert page.total_pages == 3
        assert page.rows["order"].tolist() == list(range(51, 61))
        assert (page.start, page.end, page.total) == (50, 60, 60)

    def test_page_clamped(self):
        df = records_to_dataframe([AdRecord(order=i) for i in range(1, 11)])
        assert paginate(df, page=9, page_size=4).page == 3
        assert paginate(df, page=0, page_size=4).page == 1

    def test_empty(self):
        page = paginate(records_to_dataframe([]), page=1, page_size=25)
        assert page.total_pages == 0
        assert page.rows.empty

    def test_bad_page_size(self):
        with pytest.raises(ValueError):
            paginate(_df(), page_size=0)

    def test_page_window(self):
        assert page_window(1, 3) == [1, 2, 3]
        assert page_window(1, 10) == [1, 2, 3, 4, 5]
        assert page_window(6, 10) == [4, 5, 6, 7, 8]
        assert page_window(10, 10) == [6, 7, 8, 9, 10]
        assert page_window(1, 0) == []


class TestExport:
    def test_header_and_quoting(self):
        text = export_csv(_df().head(1))
        lines = text.split("\n")
        assert lines[0] == "Order,Keyword,Type,Search Command,Views,Clicks,Click Rate,Conversions,Cost,GMV,Avg Rank"
        assert lines[1] == '1,"Áo Thun","Rộng","ao thun nam",50,0,2.5%,0,0,0,0'

    def test_embedded_quotes_escaped(self):
        df = records_to_dataframe([AdRecord(order=1, keyword='say "hi", ok', click_rate="1,5%")])
        line = export_csv(df).split("\n")[1]
        assert line.startswith('1,"say ""hi"", ok"')
        assert '"1,5%"' in line

    def test_empty_view_is_header_only(self):
        assert export_csv(records_to_dataframe([])).count("\n") == 0

    def test_round_trip_numeric_fields(self, make_report, make_row):
        rows = [
            make_row(order=i, keyword=f'kw, "{i}"', views=i * 11, clicks=i, cost=i * 1000, gmv=i * 5000, average_rank=i % 7)
            for i in range(1, 21)
        ]
        report = parse_report(make_report(rows))
        df = records_to_dataframe(report.records)

        back = read_export_csv(export_csv(df))

        assert len(back) == len(df)
        for col in ("order", "views", "clicks", "conversions", "cost", "gmv", "average_rank"):
            assert col in INT_FIELDS
            assert back[col].tolist() == df[col].tolist()
        assert back["keyword"].tolist() == df["keyword"].tolist()

    def test_out_of_range_values_export_and_read_back(self, make_report, make_row):
        report = parse_report(make_report([make_row(gmv="99999999999999999999")]))
        df = records_to_dataframe(report.records)
        back = read_export_csv(export_csv(df))
        assert back.loc[0, "gmv"] == 2**63 - 1

    def test_read_export_clamps_oversized_numbers(self):
        text = "Order,Keyword,Type,Search Command,Views,Clicks,Click Rate,Conversions,Cost,GMV,Avg Rank\n1,\"kw\",\"\",\"\",1,0,,0,0," + "9" * 30 + ",0"
        back = read_export_csv(text)
        assert back.loc[0, "gmv"] == 2**63 - 1

    def test_read_export_keeps_na_text(self):
        text = 'Order,Keyword,Type,Search Command,Views,Clicks,Click Rate,Conversions,Cost,GMV,Avg Rank\n1,"NA","","",1,0,,0,0,0,0'
        back = read_export_csv(text)
        assert back.loc[0, "keyword"] == "NA"
        assert back.loc[0, "keyword_type"] == ""
        assert isinstance(back, pd.DataFrame)
