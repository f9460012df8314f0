"""Upload → parse → display state, owned by the app and updated by pure transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from adreport.config import AppConfig
from adreport.intake import UploadRejectedError, decode_upload, validate_upload
from adreport.parser import ReportParseError, parse_report
from adreport.schema import ParsedReport

logger = logging.getLogger(__name__)

VIEWS = ("overview", "statistics", "charts", "table")
PARSE_FAILED_MESSAGE = "Failed to parse CSV file. Please check the file format."


@dataclass(frozen=True)
class AppState:
    file_name: Optional[str] = None
    file_size: int = 0
    report: Optional[ParsedReport] = None
    error: Optional[str] = None
    active_view: str = "overview"

    @property
    def has_report(self) -> bool:
        return self.report is not None


def load_upload(
    state: AppState,
    name: str,
    size: int,
    data: bytes,
    mime_type: str = "",
    cfg: Optional[AppConfig] = None,
) -> AppState:
    """Validate and parse an uploaded export, returning the next state.

    An intake rejection keeps whatever report was already on screen but records
    the rejected file, so the same upload is not validated again. A parse
    failure clears the report, so stale data is never shown next to the error.
    """
    cfg = cfg or AppConfig()
    try:
        validate_upload(
            name,
            size,
            mime_type,
            max_bytes=cfg.intake.max_upload_bytes,
            allowed_extensions=cfg.intake.allowed_extensions,
        )
        text = decode_upload(data)
    except UploadRejectedError as exc:
        return replace(state, file_name=name, file_size=size, error=str(exc))

    try:
        report = parse_report(text, top_n=cfg.statistics.top_n)
    except ReportParseError as exc:
        logger.warning("Parse of %r failed: %s", name, exc)
        return AppState(file_name=name, file_size=size, error=PARSE_FAILED_MESSAGE)

    return AppState(file_name=name, file_size=size, report=report, active_view="overview")


def select_view(state: AppState, view: str) -> AppState:
    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view!r}")
    return replace(state, active_view=view)


def remove_upload(state: AppState) -> AppState:
    return AppState()
