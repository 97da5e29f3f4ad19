# tests/test_grid.py

from __future__ import annotations

import calendar
from itertools import groupby

import pytest

from task_calendar.core.grid import CellMembership, build_grid, grid_weeks

ALL_MONTHS = [(y, m) for y in (2023, 2024, 2025) for m in range(1, 13)]


@pytest.mark.parametrize(("year", "month"), ALL_MONTHS)
def test_grid_shape_holds_for_every_month(year: int, month: int) -> None:
    cells = build_grid(year, month)
    assert len(cells) == 42

    current = [c for c in cells if c.membership is CellMembership.CURRENT]
    assert len(current) == calendar.monthrange(year, month)[1]

    # Runs appear in order previous -> current -> next, each ascending by 1.
    runs = [(m, [c.day for c in grp]) for m, grp in groupby(cells, key=lambda c: c.membership)]
    assert [m for m, _ in runs if m is CellMembership.CURRENT] == [CellMembership.CURRENT]
    for _, days in runs:
        assert days == list(range(days[0], days[0] + len(days)))

    # Column 0 is Monday.
    first = current[0]
    assert cells.index(first) == calendar.weekday(year, month, 1)


def test_leap_february_2024() -> None:
    cells = build_grid(2024, 2)
    current = [c for c in cells if c.in_current_month]
    assert len(current) == 29
    assert 42 - len(current) == 13

    leading = [c for c in cells if c.membership is CellMembership.PREVIOUS]
    assert [c.key for c in leading] == ["2024-01-29", "2024-01-30", "2024-01-31"]


def test_december_rolls_into_next_year() -> None:
    cells = build_grid(2024, 12)
    trailing = [c for c in cells if c.membership is CellMembership.NEXT]
    assert trailing
    assert all((c.year, c.month) == (2025, 1) for c in trailing)
    assert trailing[0].key == "2025-01-01"


def test_january_leading_cells_come_from_previous_december() -> None:
    cells = build_grid(2025, 1)
    leading = [c for c in cells if c.membership is CellMembership.PREVIOUS]
    assert [c.key for c in leading] == ["2024-12-30", "2024-12-31"]


def test_month_starting_on_monday_has_no_leading_cells() -> None:
    cells = build_grid(2024, 4)
    assert cells[0].key == "2024-04-01"
    assert cells[0].in_current_month


def test_grid_weeks_gives_six_rows_of_seven() -> None:
    weeks = grid_weeks(build_grid(2024, 3))
    assert len(weeks) == 6
    assert all(len(w) == 7 for w in weeks)
