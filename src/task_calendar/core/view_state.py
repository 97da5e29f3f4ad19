# src/task_calendar/core/view_state.py

from __future__ import annotations

"""
View state for the month calendar.

One owned record holds the displayed month, the selected day, the cached tasks
of the displayed month, the add form, the edit/delete session and the last
error. Every mutation follows the same protocol:

    store call -> unconditional re-fetch of the displayed month -> replace tasks

There is no local patching of individual tasks. `tasks` is therefore either
exactly what the last applied fetch returned, or untouched.

Failures never escape an operation: they end up in `last_error`.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date

from ..tasks.task_models import NewTask, Task, TaskPatch
from .datekey import (
    day_key_of,
    month_key,
    month_key_of,
    month_of_day,
    parse_day_key,
    parse_month_key,
    shift_month,
)
from .errors import TaskStoreError
from .grid import CalendarCell, build_grid
from .ports import TaskRepo
from .task_index import TaskIndex, index_by_day

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Error"


def error_message(exc: BaseException) -> str:
    """User-facing message for a collaborator failure."""
    msg = getattr(exc, "message", None) or str(exc)
    return msg.strip() or FALLBACK_ERROR


def clean_notes(notes: str | None) -> str | None:
    """Trim notes; empty becomes None (absent), never ""."""
    if notes is None:
        return None
    return notes.strip() or None


@dataclass(slots=True)
class AddForm:
    title: str = ""
    notes: str = ""

    def clear(self) -> None:
        self.title = ""
        self.notes = ""


@dataclass(frozen=True, slots=True)
class EditDraft:
    title: str
    notes: str


# ---- modal session: Closed | Editing | ConfirmingDelete ----


@dataclass(frozen=True, slots=True)
class Closed:
    pass


@dataclass(frozen=True, slots=True)
class Editing:
    task: Task
    draft: EditDraft


@dataclass(frozen=True, slots=True)
class ConfirmingDelete:
    task: Task


Session = Closed | Editing | ConfirmingDelete

CLOSED = Closed()


class ViewState:
    def __init__(
        self,
        store: TaskRepo,
        *,
        today: date | None = None,
        follow_selection: bool = True,
    ) -> None:
        today = today or date.today()

        self._store = store
        self.follow_selection = follow_selection

        self.displayed_month: str = month_key_of(today)
        self.selected_day: str = day_key_of(today)
        self.tasks: tuple[Task, ...] = ()
        self.last_error: str | None = None
        self._fetch_seq = 0

        self.form = AddForm()
        self.session: Session = CLOSED

    # ---- derived views ----

    @property
    def grid(self) -> list[CalendarCell]:
        return build_grid(*parse_month_key(self.displayed_month))

    @property
    def index(self) -> TaskIndex:
        return index_by_day(self.tasks)

    @property
    def selected_tasks(self) -> tuple[Task, ...]:
        return self.index[self.selected_day]

    @property
    def month_title(self) -> str:
        year, month = parse_month_key(self.displayed_month)
        return f"{calendar.month_name[month]} {year}"

    # ---- internals ----

    def _fail(self, op: str, exc: Exception) -> None:
        msg = error_message(exc)
        if isinstance(exc, TaskStoreError):
            logger.warning("%s failed: %s", op, msg)
        else:
            logger.exception("%s failed", op)
        self.last_error = msg

    def _is_stale(self, seq: int, month: str) -> bool:
        return seq != self._fetch_seq or month != self.displayed_month

    async def _fetch_month(self) -> bool:
        """
        Fetch the displayed month and replace `tasks`.

        The response is applied only if this is still the latest fetch and
        `displayed_month` still equals the month it was issued for; otherwise
        it is dropped (as is a failure of such a stale request). Returns False
        only when an error was recorded.
        """
        self._fetch_seq += 1
        seq = self._fetch_seq
        month = self.displayed_month
        try:
            tasks = await self._store.list_tasks(month)
        except Exception as exc:
            if self._is_stale(seq, month):
                logger.debug("Ignoring failed stale fetch month=%s", month)
                return True
            self._fail("list_tasks", exc)
            return False

        if self._is_stale(seq, month):
            logger.debug(
                "Discarding stale fetch month=%s displayed=%s", month, self.displayed_month
            )
            return True

        self.tasks = tuple(tasks)
        logger.debug("Loaded %d tasks for month=%s", len(self.tasks), month)
        return True

    # ---- loading / navigation ----

    async def load(self) -> bool:
        """Fetch the displayed month."""
        self.last_error = None
        return await self._fetch_month()

    async def reload(self) -> bool:
        """Explicit re-read, e.g. after a refresh failed following a successful write."""
        return await self.load()

    async def select_month(self, delta: int) -> bool:
        """Shift the displayed month by delta and fetch it. selected_day is kept."""
        self.last_error = None
        year, month = shift_month(*parse_month_key(self.displayed_month), delta)
        self.displayed_month = month_key(year, month)
        return await self._fetch_month()

    async def show_month(self, key: str) -> bool:
        """Jump to an explicit month ("YYYY-MM") and fetch it."""
        year, month = parse_month_key(key)
        self.last_error = None
        self.displayed_month = month_key(year, month)
        return await self._fetch_month()

    async def select_day(self, key: str) -> bool:
        """
        Select a day.

        Inside the displayed month this never fetches. For a day of another
        month (a leading/trailing grid cell) the displayed month follows the
        selection when follow_selection is on; otherwise only the selection
        changes.
        """
        day = parse_day_key(key)
        self.selected_day = day_key_of(day)

        target = month_of_day(self.selected_day)
        if target == self.displayed_month or not self.follow_selection:
            return True

        self.last_error = None
        self.displayed_month = target
        return await self._fetch_month()

    # ---- CRUD ----

    async def add_task(self, title: str, notes: str | None = None) -> bool:
        clean_title = (title or "").strip()
        if not clean_title:
            return False

        self.last_error = None
        new = NewTask(date=self.selected_day, title=clean_title, notes=clean_notes(notes))
        try:
            created = await self._store.create_task(new)
        except Exception as exc:
            self._fail("create_task", exc)
            return False

        logger.info("Task created id=%s date=%s", created.id, new.date)
        self.form.clear()
        return await self._fetch_month()

    async def add_from_form(self) -> bool:
        return await self.add_task(self.form.title, self.form.notes)

    async def toggle_done(self, task: Task) -> bool:
        self.last_error = None
        try:
            await self._store.update_task(task.id, TaskPatch(is_done=not task.is_done))
        except Exception as exc:
            self._fail("update_task", exc)
            return False

        logger.info("Task %s is_done -> %s", task.id, not task.is_done)
        return await self._fetch_month()

    async def edit_task(self, task_id: int, title: str, notes: str | None) -> bool:
        clean_title = (title or "").strip()
        if not clean_title:
            return False

        self.last_error = None
        patch = TaskPatch(title=clean_title, notes=clean_notes(notes))
        try:
            await self._store.update_task(task_id, patch)
        except Exception as exc:
            self._fail("update_task", exc)
            return False

        logger.info("Task %s edited", task_id)
        if not await self._fetch_month():
            return False

        if isinstance(self.session, Editing) and self.session.task.id == task_id:
            self.session = CLOSED
        return True

    async def remove_task(self, task_id: int) -> bool:
        self.last_error = None
        try:
            await self._store.delete_task(task_id)
        except Exception as exc:
            self._fail("delete_task", exc)
            return False

        logger.info("Task %s deleted", task_id)
        if not await self._fetch_month():
            return False

        if isinstance(self.session, ConfirmingDelete) and self.session.task.id == task_id:
            self.session = CLOSED
        return True

    # ---- edit / delete sessions ----

    def open_edit(self, task: Task) -> None:
        self.session = Editing(task=task, draft=EditDraft(title=task.title, notes=task.notes or ""))

    def update_draft(self, *, title: str | None = None, notes: str | None = None) -> bool:
        session = self.session
        if not isinstance(session, Editing):
            return False
        draft = EditDraft(
            title=session.draft.title if title is None else title,
            notes=session.draft.notes if notes is None else notes,
        )
        self.session = Editing(task=session.task, draft=draft)
        return True

    async def save_edit(self) -> bool:
        session = self.session
        if not isinstance(session, Editing):
            return False
        return await self.edit_task(session.task.id, session.draft.title, session.draft.notes)

    def open_delete(self, task: Task) -> None:
        self.session = ConfirmingDelete(task=task)

    async def confirm_delete(self) -> bool:
        session = self.session
        if not isinstance(session, ConfirmingDelete):
            return False
        return await self.remove_task(session.task.id)

    def cancel(self) -> None:
        self.session = CLOSED
