# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest

from task_calendar.core.view_state import ViewState
from task_calendar.tasks.task_models import Task

from .fakes import FakeTaskRepo

TODAY = date(2024, 3, 5)


@pytest.fixture()
def seed_tasks() -> list[Task]:
    return [
        Task(id=1, date=date(2024, 3, 5), title="Buy milk"),
        Task(id=2, date=date(2024, 3, 5), title="Call Ana", notes="about the trip"),
        Task(id=3, date=date(2024, 3, 20), title="Dentist", is_done=True),
        Task(id=4, date=date(2024, 4, 2), title="Pay rent"),
        Task(id=5, date=date(2024, 2, 29), title="Leap day"),
    ]


@pytest.fixture()
def repo(seed_tasks: list[Task]) -> FakeTaskRepo:
    return FakeTaskRepo(seed_tasks)


@pytest.fixture()
def view(repo: FakeTaskRepo) -> ViewState:
    """ViewState on 2024-03-05 backed by the in-memory repo (not loaded yet)."""
    return ViewState(repo, today=TODAY)
