"""Logging setup for the adreport package."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.StreamHandler] = None


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stderr handler to the ``adreport`` logger (once) and set its level.

    Repeat calls point the existing handler at the current ``sys.stderr``.
    """
    global _handler
    logger = logging.getLogger("adreport")
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(_handler)
    else:
        _handler.setStream(sys.stderr)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return logger
