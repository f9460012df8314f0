"""Tests for config.yaml loading."""

from __future__ import annotations

import pytest

from adreport.config import AppConfig, load_config


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.yaml")
    assert cfg == AppConfig()
    assert cfg.intake.max_upload_bytes == 10 * 1024 * 1024
    assert cfg.table.page_size_options == [25, 50, 100]
    assert cfg.statistics.top_n == 10


def test_partial_yaml_overrides(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text(
        "table:\n"
        "  page_size: 50\n"
        "charts:\n"
        "  trend_rows: 30\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg.table.page_size == 50
    assert cfg.table.page_window == 5
    assert cfg.charts.trend_rows == 30
    assert cfg.charts.cost_label_chars == 15
    assert cfg.logging.level == "DEBUG"


def test_empty_yaml(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == AppConfig()


def test_unknown_key_raises(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("table:\n  rows_per_page: 10\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(p)


def test_repo_config_matches_defaults():
    """The shipped config.yaml mirrors the built-in defaults."""
    from pathlib import Path

    shipped = Path(__file__).resolve().parent.parent / "config.yaml"
    assert load_config(shipped) == AppConfig()
