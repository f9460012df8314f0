"""CLI entry point for the ad report dashboard."""

from __future__ import annotations

import json
from pathlib import Path

import click

from adreport import __version__
from adreport.config import load_config
from adreport.formatting import format_currency, format_integer, format_percent
from adreport.log import configure_logging
from adreport.mappers import records_to_dataframe
from adreport.parser import ReportParseError, parse_report_file
from adreport.report_md import format_summary
from adreport.schema import RECORD_COLUMNS
from adreport.table import ALL_TYPES, export_csv, filter_records, sort_records


def _load_report(input_path: str, config_path: str):
    cfg = load_config(config_path)
    configure_logging(cfg.logging.level)
    try:
        return parse_report_file(input_path, top_n=cfg.statistics.top_n)
    except ReportParseError as exc:
        raise click.ClickException(str(exc))
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"Could not read {input_path} as UTF-8: {exc}")


@click.group()
@click.version_option(version=__version__, prog_name="adreport")
def cli():
    """Ad report dashboard: keyword campaign export tools."""
    pass


@cli.command()
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to campaign export CSV",
)
@click.option("--json", "as_json", is_flag=True, help="Print statistics as JSON")
@click.option("--markdown", "as_markdown", is_flag=True, help="Print a Markdown summary")
@click.option("--config", "config_path", default="config.yaml", help="Config file path")
def summary(input_path: str, as_json: bool, as_markdown: bool, config_path: str):
    """Print header details and aggregate statistics for one export."""
    report = _load_report(input_path, config_path)
    stats = report.statistics

    if as_json:
        payload = {
            "header": report.header.to_dict(),
            "records": report.record_count,
            "dropped_rows": report.dropped_rows,
            "statistics": stats.to_dict(),
        }
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    if as_markdown:
        click.echo(format_summary(report))
        return

    header = report.header
    click.echo(f"📄 {header.report_title}")
    click.echo(f"   Store:      {header.store_name}")
    click.echo(f"   Campaign:   {header.ad_name}")
    click.echo(f"   Time range: {header.time_range}")
    click.echo("")
    click.echo(f"📊 Keywords: {report.record_count}")
    if report.dropped_rows:
        click.echo(f"   Skipped malformed rows: {report.dropped_rows}", err=True)
    click.echo(f"   Views:       {format_integer(stats.total_views)}")
    click.echo(f"   Clicks:      {format_integer(stats.total_clicks)}")
    click.echo(f"   Conversions: {format_integer(stats.total_conversions)}")
    click.echo(f"   Cost:        {format_currency(stats.total_cost)}")
    click.echo(f"   GMV:         {format_currency(stats.total_gmv)}")
    click.echo(f"   Click rate:  {format_percent(stats.average_click_rate)}")
    click.echo(f"   Conv. rate:  {format_percent(stats.average_conversion_rate)}")

    if stats.top_keywords:
        click.echo("")
        click.echo("🏆 Top keywords by views:")
        for i, k in enumerate(stats.top_keywords, start=1):
            click.echo(f"   {i:>2}. {k.keyword}  —  {format_integer(k.views)} views")


@cli.command()
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to campaign export CSV",
)
@click.option("--out", "out_path", default="filtered_ad_data.csv", show_default=True)
@click.option("--search", default="", help="Substring to match in keyword / search command")
@click.option("--type", "keyword_type", default=ALL_TYPES, show_default=True, help="Keyword type")
@click.option(
    "--sort",
    "sort_field",
    default="order",
    show_default=True,
    type=click.Choice(list(RECORD_COLUMNS)),
)
@click.option("--desc", is_flag=True, help="Sort descending")
@click.option("--config", "config_path", default="config.yaml", help="Config file path")
def export(
    input_path: str,
    out_path: str,
    search: str,
    keyword_type: str,
    sort_field: str,
    desc: bool,
    config_path: str,
):
    """Write the filtered / sorted keyword table as CSV."""
    report = _load_report(input_path, config_path)
    df = records_to_dataframe(report.records)
    view = sort_records(filter_records(df, search, keyword_type), sort_field, ascending=not desc)

    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(export_csv(view), encoding="utf-8")

    click.echo(f"✅ Exported {len(view)} of {len(df)} rows to {p}")


if __name__ == "__main__":
    cli()
