"""Streamlit app — Ad Data Analytics Dashboard.

Upload a keyword-ad campaign export and explore it through four views:
  📈 Overview    — report details + key metrics
  🧮 Statistics  — max / min values, top keywords, Markdown summary
  📊 Charts      — keyword, cost and trend charts
  📋 Data Table  — search, filter, sort, paginate, export CSV
"""

from __future__ import annotations

from typing import Dict

import pandas as pd
import streamlit as st

from adreport.charts import (
    cost_performance_chart,
    keyword_type_distribution,
    top_keywords_chart,
    trend_chart,
)
from adreport.config import AppConfig, load_config
from adreport.formatting import (
    format_currency,
    format_integer,
    format_number,
    format_percent,
)
from adreport.log import configure_logging
from adreport.mappers import records_to_dataframe
from adreport.report_md import format_summary
from adreport.schema import ParsedReport
from adreport.state import VIEWS, AppState, load_upload, remove_upload, select_view
from adreport.table import (
    ALL_TYPES,
    EXPORT_FILE_NAME,
    export_csv,
    filter_records,
    keyword_types,
    page_window,
    paginate,
    sort_records,
)

# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

VIEW_LABELS: Dict[str, str] = {
    "overview": "📈 Overview",
    "statistics": "🧮 Statistics",
    "charts": "📊 Charts",
    "table": "📋 Data Table",
}

SORTABLE_COLUMNS: Dict[str, str] = {
    "order": "#",
    "keyword": "Keyword",
    "views": "Views",
    "clicks": "Clicks",
    "click_rate": "Click Rate",
    "conversions": "Conv.",
    "cost": "Cost",
    "gmv": "GMV",
    "average_rank": "Rank",
}

TABLE_COLUMNS: Dict[str, str] = {
    "order": "#",
    "keyword": "Keyword",
    "keyword_type": "Type",
    "search_command": "Search Command",
    "views": "Views",
    "clicks": "Clicks",
    "click_rate": "Click Rate",
    "conversions": "Conv.",
    "cost": "Cost",
    "gmv": "GMV",
    "average_rank": "Rank",
}

# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def _get_state() -> AppState:
    if "app_state" not in st.session_state:
        st.session_state.app_state = AppState()
    return st.session_state.app_state


def _set_state(state: AppState) -> None:
    st.session_state.app_state = state


def _get_config() -> AppConfig:
    if "cfg" not in st.session_state:
        cfg = load_config("config.yaml")
        configure_logging(cfg.logging.level)
        st.session_state.cfg = cfg
    return st.session_state.cfg


def _display_table(page_df: pd.DataFrame) -> pd.DataFrame:
    """Format a page of records for display (money in đồng, '-' for zero)."""
    out = page_df[list(TABLE_COLUMNS)].copy()
    for col in ("views", "clicks", "conversions"):
        out[col] = out[col].map(format_integer)
    for col in ("cost", "gmv"):
        out[col] = out[col].map(lambda v: format_currency(v) if v > 0 else "-")
    out["average_rank"] = out["average_rank"].map(lambda v: str(v) if v else "-")
    return out.rename(columns=TABLE_COLUMNS)


# ─────────────────────────────────────────────────────────────────────────────
# Upload
# ─────────────────────────────────────────────────────────────────────────────


def upload_section(cfg: AppConfig) -> AppState:
    state = _get_state()

    uploaded = st.file_uploader(
        "📄 **Upload CSV File**",
        type=[ext.lstrip(".") for ext in cfg.intake.allowed_extensions],
        help=f"Supports CSV files up to {cfg.intake.max_upload_mb}MB",
    )

    if uploaded is None:
        if state.file_name is not None:
            state = remove_upload(state)
            _set_state(state)
        return state

    if (uploaded.name, uploaded.size) != (state.file_name, state.file_size):
        with st.spinner("Processing your data..."):
            state = load_upload(
                state,
                name=uploaded.name,
                size=uploaded.size,
                data=uploaded.getvalue(),
                mime_type=uploaded.type or "",
                cfg=cfg,
            )
        _set_state(state)

    return state


# ─────────────────────────────────────────────────────────────────────────────
# Overview / Statistics
# ─────────────────────────────────────────────────────────────────────────────


def overview_view(report: ParsedReport) -> None:
    header = report.header
    stats = report.statistics

    st.subheader(header.report_title or "Report")
    c1, c2, c3 = st.columns(3)
    c1.markdown(f"**Store Name**  \n{header.store_name or '—'}")
    c2.markdown(f"**Ad Campaign**  \n{header.ad_name or '—'}")
    c3.markdown(f"**Time Range**  \n{header.time_range or '—'}")
    c1.markdown(f"**Product ID**  \n{header.product_id or '—'}")
    c2.markdown(f"**Seller ID**  \n{header.seller_id or '—'}")
    c3.markdown(f"**Generated**  \n{header.report_creation_time or '—'}")
    st.divider()

    m = st.columns(6)
    m[0].metric("👁️ Total Views", format_number(stats.total_views))
    m[1].metric("🖱️ Total Clicks", format_number(stats.total_clicks))
    m[2].metric("💸 Total Cost", format_currency(stats.total_cost))
    m[3].metric("📈 Total GMV", format_currency(stats.total_gmv))
    m[4].metric("🎯 Conversions", format_number(stats.total_conversions))
    m[5].metric("📊 Avg Click Rate", format_percent(stats.average_click_rate))

    st.caption(
        f"{report.record_count} keyword rows · "
        f"avg conversion rate {format_percent(stats.average_conversion_rate)}"
    )
    if report.dropped_rows:
        st.warning(
            f"⚠️ {report.dropped_rows} malformed row(s) had fewer than 24 columns and were skipped.",
            icon="⚠️",
        )


def statistics_view(report: ParsedReport) -> None:
    stats = report.statistics
    hi, lo = stats.max_values, stats.min_values

    col_max, col_min = st.columns(2)
    with col_max:
        st.markdown("#### ⬆️ Maximum Values")
        st.markdown(
            f"- Views: **{format_number(hi.views)}**\n"
            f"- Clicks: **{format_number(hi.clicks)}**\n"
            f"- Cost: **{format_currency(hi.cost)}**\n"
            f"- GMV: **{format_currency(hi.gmv)}**"
        )
    with col_min:
        st.markdown("#### ⬇️ Minimum Values (Non-zero)")
        st.markdown(
            f"- Views: **{format_number(lo.views)}**\n"
            f"- Clicks: **{format_number(lo.clicks)}**\n"
            f"- Cost: **{format_currency(lo.cost)}**\n"
            f"- GMV: **{format_currency(lo.gmv)}**"
        )
        st.caption("0 means no row had a positive value for that metric.")

    st.markdown(f"#### 🏆 Top {len(stats.top_keywords)} Keywords by Views")
    if stats.top_keywords:
        top = pd.DataFrame(
            [
                {
                    "#": i,
                    "Keyword": k.keyword,
                    "Views": format_integer(k.views),
                    "Clicks": format_integer(k.clicks),
                    "Cost": format_currency(k.cost),
                }
                for i, k in enumerate(stats.top_keywords, start=1)
            ]
        )
        st.dataframe(top, use_container_width=True, hide_index=True)
    else:
        st.info("No keyword rows in this report.")

    st.download_button(
        "⬇️ Download summary (Markdown)",
        data=format_summary(report).encode("utf-8"),
        file_name="ad_report_summary.md",
        mime="text/markdown",
    )


# ─────────────────────────────────────────────────────────────────────────────
# Charts
# ─────────────────────────────────────────────────────────────────────────────


def charts_view(report: ParsedReport, cfg: AppConfig) -> None:
    ccfg = cfg.charts
    df = records_to_dataframe(report.records)

    st.markdown("#### Top Keywords Performance")
    top = top_keywords_chart(report.statistics, ccfg.top_keyword_label_chars)
    if top.empty:
        st.info("No keyword rows to chart.")
    else:
        st.bar_chart(top, x="name", y=["views", "clicks", "cost"], use_container_width=True)

    st.markdown("#### Cost vs Click Efficiency")
    cost_perf = cost_performance_chart(df, ccfg.cost_performance_rows, ccfg.cost_label_chars)
    if cost_perf.empty:
        st.info("No rows with both views and cost.")
    else:
        st.area_chart(cost_perf, x="keyword", y=["cost", "efficiency"], use_container_width=True)

    trend = trend_chart(df, ccfg.trend_rows)
    col_dist, col_trend = st.columns(2)
    with col_dist:
        st.markdown("#### Keyword Type Distribution")
        dist = keyword_type_distribution(df)
        if dist.empty:
            st.info("No keyword types.")
        else:
            st.bar_chart(dist, x="name", y="count", use_container_width=True)
            shares = dist.assign(share=dist["share"].map(lambda s: format_percent(s * 100, 0)))
            st.dataframe(shares, use_container_width=True, hide_index=True)
    with col_trend:
        st.markdown("#### Click Rate Trend")
        if trend.empty:
            st.info("No rows to chart.")
        else:
            st.line_chart(trend, x="order", y="click_rate", use_container_width=True)

    st.markdown("#### Views vs Clicks")
    if not trend.empty:
        st.bar_chart(trend, x="order", y=["views", "clicks"], use_container_width=True)


# ─────────────────────────────────────────────────────────────────────────────
# Data table
# ─────────────────────────────────────────────────────────────────────────────


def table_view(report: ParsedReport, cfg: AppConfig) -> None:
    tcfg = cfg.table
    df = records_to_dataframe(report.records)

    col_search, col_type, col_size = st.columns([3, 2, 1])
    with col_search:
        search = st.text_input("🔍 Search keywords or commands...", key="tbl_search")
    with col_type:
        types = [ALL_TYPES] + keyword_types(df)
        keyword_type = st.selectbox(
            "Filter by type",
            types,
            format_func=lambda t: "All Types" if t == ALL_TYPES else t,
            key="tbl_type",
        )
    with col_size:
        options = tcfg.page_size_options
        default_idx = options.index(tcfg.page_size) if tcfg.page_size in options else 0
        page_size = st.selectbox("Show", options, index=default_idx, key="tbl_page_size")

    col_sort, col_dir = st.columns([3, 1])
    with col_sort:
        sort_field = st.selectbox(
            "Sort by",
            list(SORTABLE_COLUMNS),
            format_func=SORTABLE_COLUMNS.get,
            key="tbl_sort",
        )
    with col_dir:
        direction = st.radio("Direction", ["asc", "desc"], horizontal=True, key="tbl_dir")

    view = sort_records(
        filter_records(df, search, keyword_type),
        sort_field,
        ascending=direction == "asc",
    )

    col_badge, col_export = st.columns([4, 1])
    col_badge.caption(f"**{len(view)} of {len(df)} records**")
    col_export.download_button(
        "⬇️ Export CSV",
        data=export_csv(view).encode("utf-8"),
        file_name=EXPORT_FILE_NAME,
        mime="text/csv",
        use_container_width=True,
    )

    # Reset to page 1 whenever the filtered view changes shape.
    view_key = (search, keyword_type, sort_field, direction, page_size)
    if st.session_state.get("tbl_view_key") != view_key:
        st.session_state.tbl_view_key = view_key
        st.session_state.tbl_page = 1

    page = paginate(view, st.session_state.get("tbl_page", 1), page_size)
    st.dataframe(_display_table(page.rows), use_container_width=True, hide_index=True)

    if page.total_pages > 1:
        st.caption(f"Showing {page.start + 1} to {page.end} of {page.total} entries")
        window = page_window(page.page, page.total_pages, tcfg.page_window)
        buttons = st.columns(len(window) + 2)
        if buttons[0].button("Previous", disabled=page.page == 1, key="tbl_prev"):
            st.session_state.tbl_page = page.page - 1
            st.rerun()
        for col, num in zip(buttons[1:-1], window):
            if col.button(
                str(num),
                type="primary" if num == page.page else "secondary",
                key=f"tbl_page_{num}",
            ):
                st.session_state.tbl_page = num
                st.rerun()
        if buttons[-1].button("Next", disabled=page.page == page.total_pages, key="tbl_next"):
            st.session_state.tbl_page = page.page + 1
            st.rerun()


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────


def main() -> None:
    st.set_page_config(
        page_title="Ad Data Analytics Dashboard",
        page_icon="📊",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.title("📊 Ad Data Analytics Dashboard")
    st.caption(
        "Upload your CSV files and get comprehensive insights with "
        "interactive charts and statistics"
    )

    cfg = _get_config()
    state = upload_section(cfg)

    if state.error:
        st.error(f"❌ {state.error}")

    if not state.has_report:
        if state.file_name is None:
            st.info(
                "👆 **No data uploaded yet.**  \n"
                "Upload a CSV file to start analyzing your advertising data."
            )
        return

    view = st.radio(
        "view",
        VIEWS,
        index=VIEWS.index(state.active_view),
        format_func=VIEW_LABELS.get,
        horizontal=True,
        label_visibility="collapsed",
    )
    if view != state.active_view:
        state = select_view(state, view)
        _set_state(state)
    st.divider()

    report = state.report
    if view == "overview":
        overview_view(report)
    elif view == "statistics":
        statistics_view(report)
    elif view == "charts":
        charts_view(report, cfg)
    else:
        table_view(report, cfg)


if __name__ == "__main__":
    main()
