# tests/test_logging_setup.py

from __future__ import annotations

import logging

import pytest

from task_calendar.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    "name, level, shown",
    [
        ("task_calendar.core.view_state", logging.DEBUG, True),
        ("task_calendar", logging.INFO, True),
        ("py.warnings", logging.WARNING, True),
        ("py.warnings", logging.INFO, False),
        ("httpx", logging.WARNING, False),
        ("httpx", logging.ERROR, True),
        ("task_calendar_other", logging.INFO, False),
    ],
)
def test_console_filter_levels(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown
