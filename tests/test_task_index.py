# tests/test_task_index.py

from __future__ import annotations

from datetime import date

from task_calendar.core.task_index import index_by_day
from task_calendar.tasks.task_models import Task, TaskPatch


def test_empty_index_returns_empty_buckets() -> None:
    index = index_by_day([])
    assert index["2024-03-05"] == ()
    assert index.tasks_for("1999-01-01") == ()
    assert index.count("2024-03-05") == 0
    assert "2024-03-05" not in index
    assert len(index) == 0


def test_buckets_keep_store_order() -> None:
    tasks = [
        Task(id=9, date=date(2024, 3, 5), title="later id first"),
        Task(id=2, date=date(2024, 3, 6), title="other day"),
        Task(id=1, date=date(2024, 3, 5), title="earlier id second", is_done=True),
    ]
    index = index_by_day(tasks)

    assert [t.id for t in index["2024-03-05"]] == [9, 1]
    assert index.count("2024-03-05") == 2
    assert index.done_count("2024-03-05") == 1
    assert set(index) == {"2024-03-05", "2024-03-06"}


def test_record_dates_are_indexed_by_their_calendar_day() -> None:
    records = [
        {"id": 1, "task_date": "2024-03-05T00:00:00.000Z", "title": "a", "notes": "", "is_done": 0},
        {"id": 2, "task_date": "2024-03-05T23:59:59+09:00", "title": "b", "notes": None},
        {"id": 3, "task_date": "2024-03-06", "title": "c", "notes": "n", "is_done": True},
    ]
    tasks = [Task.from_record(r) for r in records]
    index = index_by_day(tasks)

    assert [t.id for t in index["2024-03-05"]] == [1, 2]
    assert tasks[0].notes is None
    assert tasks[0].is_done is False
    assert tasks[2].is_done is True


def test_task_patch_sends_only_set_fields() -> None:
    assert TaskPatch(is_done=True).as_dict() == {"is_done": True}
    assert TaskPatch(title="t", notes=None).as_dict() == {"title": "t", "notes": None}
    assert TaskPatch().is_empty()
