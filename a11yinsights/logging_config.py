"""Logging utilities for the a11y-insights audit pipeline."""

from __future__ import annotations

import logging
import sys
from typing import Optional


_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# Third party loggers that flood DEBUG output with connection details.
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def configure_logging(level: int = logging.INFO, stream: Optional[logging.Handler] = None) -> None:
    """Configure the root logger for an audit run.

    Parameters
    ----------
    level:
        The logging level applied to the root logger.
    stream:
        Optional handler. When omitted a handler writing to ``sys.stdout`` is
        installed.
    """

    root_logger = logging.getLogger()
    handler: logging.Handler = stream if stream is not None else logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    # Repeated calls (CLI plus tests) must not stack handlers.
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


__all__ = ["configure_logging"]
