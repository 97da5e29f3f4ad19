# tests/fakes.py

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any

from task_calendar.core.datekey import month_key_of, parse_day_key
from task_calendar.core.errors import NotFoundError, ValidationError
from task_calendar.tasks.task_models import NewTask, Task, TaskPatch


class FakeTaskRepo:
    """
    In-memory TaskRepo for ViewState tests.

    - Records every call in `calls` as (op, arg)
    - `fail_next(op, exc)` makes the next call of `op` raise `exc`
    - `hold(month)` blocks the next list_tasks(month) until `release(month)`;
      the held call returns the rows as they were when it was issued
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: dict[int, Task] = {t.id: t for t in (tasks or [])}
        self._next_id = max(self.tasks, default=0) + 1
        self.calls: list[tuple[str, Any]] = []
        self._failures: dict[str, list[Exception]] = {}
        self._gates: dict[str, asyncio.Event] = {}
        self._held: dict[str, asyncio.Event] = {}

    # ---- test controls ----

    def fail_next(self, op: str, exc: Exception) -> None:
        self._failures.setdefault(op, []).append(exc)

    def hold(self, month: str) -> None:
        self._gates[month] = asyncio.Event()

    def release(self, month: str) -> None:
        self._held.pop(month).set()

    def ops(self) -> list[str]:
        return [op for op, _ in self.calls]

    def _maybe_fail(self, op: str) -> None:
        pending = self._failures.get(op)
        if pending:
            raise pending.pop(0)

    # ---- TaskRepo ----

    async def list_tasks(self, month: str) -> list[Task]:
        self.calls.append(("list_tasks", month))
        rows = [t for t in self.tasks.values() if month_key_of(t.date) == month]
        gate = self._gates.pop(month, None)
        if gate is not None:
            self._held[month] = gate
            await gate.wait()
        self._maybe_fail("list_tasks")
        return rows

    async def create_task(self, new: NewTask) -> Task:
        self.calls.append(("create_task", new))
        self._maybe_fail("create_task")
        if not new.title.strip():
            raise ValidationError("Title is required")
        task = Task(
            id=self._next_id,
            date=parse_day_key(new.date),
            title=new.title,
            notes=new.notes,
        )
        self._next_id += 1
        self.tasks[task.id] = task
        return task

    async def update_task(self, task_id: int, patch: TaskPatch) -> Task:
        self.calls.append(("update_task", (task_id, patch)))
        self._maybe_fail("update_task")
        task = self.tasks.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        updated = replace(task, **patch.as_dict())
        self.tasks[task_id] = updated
        return updated

    async def delete_task(self, task_id: int) -> None:
        self.calls.append(("delete_task", task_id))
        self._maybe_fail("delete_task")
        if task_id not in self.tasks:
            raise NotFoundError(task_id)
        del self.tasks[task_id]
