"""Chart-ready DataFrames derived from a parsed report."""

from __future__ import annotations

import pandas as pd

from adreport.formatting import truncate_label
from adreport.statistics import ReportStatistics

UNKNOWN_TYPE = "Unknown"


def top_keywords_chart(stats: ReportStatistics, label_chars: int = 20) -> pd.DataFrame:
    """Views / clicks / cost of the top keywords, labelled by truncated keyword."""
    rows = [
        {
            "name": truncate_label(k.keyword, label_chars),
            "views": k.views,
            "clicks": k.clicks,
            "cost": k.cost,
        }
        for k in stats.top_keywords
    ]
    return pd.DataFrame(rows, columns=["name", "views", "clicks", "cost"])


def cost_performance_chart(
    df: pd.DataFrame,
    limit: int = 20,
    label_chars: int = 15,
) -> pd.DataFrame:
    """Cost against click efficiency for the first *limit* records with views and cost."""
    active = df[(df["views"] > 0) & (df["cost"] > 0)].head(limit)
    out = pd.DataFrame(
        {
            "keyword": active["keyword"].map(lambda k: truncate_label(k, label_chars)),
            "cost": active["cost"],
            "views": active["views"],
            "clicks": active["clicks"],
            "efficiency": active["clicks"] / active["views"] * 100,
        },
        columns=["keyword", "cost", "views", "clicks", "efficiency"],
    )
    return out.reset_index(drop=True)


def keyword_type_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """Record count and traffic per keyword type; an empty type counts as 'Unknown'."""
    columns = ["name", "count", "total_views", "total_clicks", "share"]
    if df.empty:
        return pd.DataFrame(columns=columns)

    types = df["keyword_type"].where(df["keyword_type"] != "", UNKNOWN_TYPE)
    grouped = (
        df.assign(name=types)
        .groupby("name", sort=False)
        .agg(
            count=("order", "size"),
            total_views=("views", "sum"),
            total_clicks=("clicks", "sum"),
        )
        .reset_index()
    )
    grouped["share"] = grouped["count"] / grouped["count"].sum()
    return grouped[columns]


def trend_chart(df: pd.DataFrame, limit: int = 15) -> pd.DataFrame:
    """Per-record traffic for the first *limit* records in source order."""
    head = df.head(limit)
    both = (head["clicks"] > 0) & (head["views"] > 0)
    click_rate = (head["clicks"] / head["views"].where(both, 1) * 100).where(both, 0.0)
    out = pd.DataFrame(
        {
            "order": head["order"],
            "views": head["views"],
            "clicks": head["clicks"],
            "cost": head["cost"],
            "click_rate": click_rate.astype(float),
        },
        columns=["order", "views", "clicks", "cost", "click_rate"],
    )
    return out.reset_index(drop=True)
