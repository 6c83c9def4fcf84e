"""Tests for :mod:`a11yinsights.logging_config`."""

from __future__ import annotations

import logging
from io import StringIO

from a11yinsights.logging_config import configure_logging


def test_configure_logging_sets_handler() -> None:
    """Given a custom stream When configure_logging is called Then logs are formatted and directed there."""

    stream = StringIO()
    handler = logging.StreamHandler(stream)

    configure_logging(level=logging.DEBUG, stream=handler)

    logging.getLogger("demo").debug("hello")

    contents = stream.getvalue()
    assert "hello" in contents
    assert "| DEBUG | demo |" in contents


def test_configure_logging_replaces_previous_handlers() -> None:
    """Given repeated configuration When logging Then only the latest handler receives records."""

    first, second = StringIO(), StringIO()

    configure_logging(stream=logging.StreamHandler(first))
    configure_logging(stream=logging.StreamHandler(second))
    logging.getLogger("demo").info("once")

    assert first.getvalue() == ""
    assert second.getvalue().count("once") == 1
    assert logging.getLogger("httpx").level == logging.WARNING
