"""Upload checks applied before a file reaches the parser."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class UploadRejectedError(ValueError):
    """Raised when an uploaded file is not an acceptable CSV export."""


def validate_upload(
    name: str,
    size: int,
    mime_type: str = "",
    max_bytes: int = DEFAULT_MAX_BYTES,
    allowed_extensions=(".csv",),
) -> None:
    """Reject non-CSV or oversized uploads; return None when the file is acceptable."""
    lowered = (name or "").lower()
    is_csv = "csv" in (mime_type or "").lower() or lowered.endswith(tuple(allowed_extensions))
    if not is_csv:
        logger.info("Rejected upload %r (type=%r): not a CSV file", name, mime_type)
        raise UploadRejectedError("Please select a CSV file")

    if size > max_bytes:
        logger.info("Rejected upload %r: %d bytes > %d", name, size, max_bytes)
        limit_mb = max_bytes // (1024 * 1024)
        raise UploadRejectedError(f"File size must be less than {limit_mb}MB")


def decode_upload(data: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a leading BOM."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UploadRejectedError(f"Could not read file as UTF-8 text: {exc}") from exc
