# src/task_calendar/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

ViewState depends on this Protocol instead of a concrete store, so the SQLite
store, the HTTP client and test fakes are interchangeable.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import NewTask, Task, TaskPatch


class TaskRepo(Protocol):
    """
    Task store addressed by month (list) or by task id (update/delete).

    Failures are reported with core.errors:
    - list_tasks:  StoreError
    - create_task: ValidationError | StoreError
    - update_task: NotFoundError | StoreError
    - delete_task: NotFoundError | StoreError
    """

    async def list_tasks(self, month: str) -> list[Task]: ...

    async def create_task(self, new: NewTask) -> Task: ...

    async def update_task(self, task_id: int, patch: TaskPatch) -> Task: ...

    async def delete_task(self, task_id: int) -> None: ...
