"""Load and validate config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml


@dataclass
class IntakeConfig:
    max_upload_mb: int = 10
    allowed_extensions: List[str] = field(default_factory=lambda: [".csv"])

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@dataclass
class StatisticsConfig:
    top_n: int = 10


@dataclass
class TableConfig:
    page_size: int = 25
    page_size_options: List[int] = field(default_factory=lambda: [25, 50, 100])
    page_window: int = 5  # page-number buttons shown at once


@dataclass
class ChartConfig:
    top_keyword_label_chars: int = 20
    cost_label_chars: int = 15
    cost_performance_rows: int = 20
    trend_rows: int = 15


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    intake: IntakeConfig = field(default_factory=IntakeConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    table: TableConfig = field(default_factory=TableConfig)
    charts: ChartConfig = field(default_factory=ChartConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path = "config.yaml") -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    p = Path(path)
    raw: dict = {}
    if p.exists():
        with open(p, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    return AppConfig(
        intake=IntakeConfig(**raw.get("intake", {})),
        statistics=StatisticsConfig(**raw.get("statistics", {})),
        table=TableConfig(**raw.get("table", {})),
        charts=ChartConfig(**raw.get("charts", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )
