# src/task_calendar/core/grid.py

"""
Month grid calculations (no UI dependencies).

A grid is always 6 weeks x 7 days = 42 cells, Monday first, so the rendered
calendar keeps the same height for every month.
"""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from .datekey import day_key, next_month, prev_month

WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
GRID_COLUMNS = 7
GRID_CELLS = 42


class CellMembership(StrEnum):
    """Which month a cell belongs to, relative to the displayed month."""

    PREVIOUS = "previous"
    CURRENT = "current"
    NEXT = "next"


@dataclass(frozen=True, slots=True)
class CalendarCell:
    day: int
    membership: CellMembership
    year: int
    month: int

    @property
    def key(self) -> str:
        return day_key(self.year, self.month, self.day)

    @property
    def in_current_month(self) -> bool:
        return self.membership is CellMembership.CURRENT


def build_grid(year: int, month: int) -> list[CalendarCell]:
    """
    Return the 42 cells for (year, month).

    Leading cells are the last days of the previous month needed to align
    day 1 under its weekday column; trailing cells are days of the next month
    that fill the grid up to 42.
    """
    # calendar.monthrange already numbers weekdays Monday=0 .. Sunday=6.
    first_weekday, days_in_month = calendar.monthrange(year, month)

    py, pm = prev_month(year, month)
    ny, nm = next_month(year, month)
    days_in_prev = calendar.monthrange(py, pm)[1]

    cells: list[CalendarCell] = []

    for day in range(days_in_prev - first_weekday + 1, days_in_prev + 1):
        cells.append(CalendarCell(day, CellMembership.PREVIOUS, py, pm))

    for day in range(1, days_in_month + 1):
        cells.append(CalendarCell(day, CellMembership.CURRENT, year, month))

    remaining = GRID_CELLS - len(cells)
    for day in range(1, remaining + 1):
        cells.append(CalendarCell(day, CellMembership.NEXT, ny, nm))

    return cells


def grid_weeks(cells: Sequence[CalendarCell]) -> list[list[CalendarCell]]:
    """Split a flat grid into rows of 7."""
    return [list(cells[i : i + GRID_COLUMNS]) for i in range(0, len(cells), GRID_COLUMNS)]
