"""Markdown summary of a parsed report."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from adreport.formatting import format_currency, format_integer, format_percent
from adreport.schema import ParsedReport


def format_summary(report: ParsedReport, now: Optional[datetime] = None) -> str:
    header = report.header
    stats = report.statistics
    now = now or datetime.now(timezone.utc)

    lines: List[str] = [
        f"# {header.report_title or 'Ad Report'} — Summary",
        f"**Generated:** {now.strftime('%Y-%m-%d %H:%M UTC')}",
        "",
        "## Report",
        f"- Store: {header.store_name}",
        f"- Ad campaign: {header.ad_name}",
        f"- Time range: {header.time_range}",
        f"- Product ID: {header.product_id}",
        f"- Seller ID: {header.seller_id}",
        f"- Report created: {header.report_creation_time}",
        "",
        "## Key metrics",
        f"- Keywords: {format_integer(report.record_count)}",
        f"- Total views: {format_integer(stats.total_views)}",
        f"- Total clicks: {format_integer(stats.total_clicks)}",
        f"- Total conversions: {format_integer(stats.total_conversions)}",
        f"- Total cost: {format_currency(stats.total_cost)}",
        f"- Total GMV: {format_currency(stats.total_gmv)}",
        f"- Avg click rate: {format_percent(stats.average_click_rate)}",
        f"- Avg conversion rate: {format_percent(stats.average_conversion_rate)}",
        "",
    ]

    if report.dropped_rows:
        lines += [f"> {report.dropped_rows} malformed row(s) were skipped.", ""]

    # ── Extremes ──────────────────────────────────────────────────────────────
    hi, lo = stats.max_values, stats.min_values
    lines += [
        "## Max / min (min ignores zero values)",
        "| Metric | Max | Min |",
        "|---|---:|---:|",
        f"| Views | {format_integer(hi.views)} | {format_integer(lo.views)} |",
        f"| Clicks | {format_integer(hi.clicks)} | {format_integer(lo.clicks)} |",
        f"| Cost | {format_currency(hi.cost)} | {format_currency(lo.cost)} |",
        f"| GMV | {format_currency(hi.gmv)} | {format_currency(lo.gmv)} |",
        "",
    ]

    if not stats.top_keywords:
        lines.append("No keyword rows in this report.")
        return "\n".join(lines)

    lines += [
        f"## Top {len(stats.top_keywords)} keywords by views",
        "| # | Keyword | Views | Clicks | Cost |",
        "|---:|---|---:|---:|---:|",
    ]
    for i, k in enumerate(stats.top_keywords, start=1):
        keyword = k.keyword.replace("|", "\\|")
        lines.append(
            f"| {i} | {keyword} | {format_integer(k.views)} | "
            f"{format_integer(k.clicks)} | {format_currency(k.cost)} |"
        )
    return "\n".join(lines)
