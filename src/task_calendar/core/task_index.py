# src/task_calendar/core/task_index.py

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from .datekey import day_key

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskIndex(Mapping[str, tuple["Task", ...]]):
    """
    Read-only day_key -> tasks mapping.

    Buckets keep the order the tasks were given in (store order).
    Looking up a day without tasks returns an empty tuple, not KeyError.
    """

    __slots__ = ("_buckets",)

    def __init__(self, buckets: dict[str, tuple[Task, ...]]) -> None:
        self._buckets = buckets

    def __getitem__(self, key: str) -> tuple[Task, ...]:
        return self._buckets.get(key, ())

    def __contains__(self, key: object) -> bool:
        return key in self._buckets

    def __iter__(self) -> Iterator[str]:
        return iter(self._buckets)

    def __len__(self) -> int:
        return len(self._buckets)

    def tasks_for(self, key: str) -> tuple[Task, ...]:
        return self[key]

    def count(self, key: str) -> int:
        return len(self._buckets.get(key, ()))

    def done_count(self, key: str) -> int:
        return sum(1 for t in self._buckets.get(key, ()) if t.is_done)


def index_by_day(tasks: Iterable[Task]) -> TaskIndex:
    """Group tasks by the day key of their date. O(n)."""
    grouped: dict[str, list[Task]] = {}
    for task in tasks:
        d = task.date
        key = day_key(d.year, d.month, d.day)
        grouped.setdefault(key, []).append(task)
    return TaskIndex({k: tuple(v) for k, v in grouped.items()})
