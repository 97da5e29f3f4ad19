# src/task_calendar/tasks/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from ..core.datekey import day_key_of, parse_day_key, parse_month_key
from ..core.errors import NotFoundError, StoreError, ValidationError
from .task_models import NewTask, Task, TaskPatch

logger = logging.getLogger(__name__)


class SqliteTaskStore:
    """
    SQLite task store implementing the TaskRepo port.

    The schema is simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Each call opens its own short-lived connection and runs in a worker thread
    (asyncio.to_thread), so the event loop is never blocked.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("SqliteTaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task_date TEXT NOT NULL,
                    title TEXT NOT NULL,
                    notes TEXT,
                    is_done INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SqliteTaskStore migration: added column %s", name)

            add_col("notes", "TEXT")
            add_col("is_done", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_date ON tasks(task_date)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            date=parse_day_key(row["task_date"]),
            title=str(row["title"] or ""),
            notes=row["notes"] or None,
            is_done=bool(row["is_done"]),
        )

    def _fetch_one(self, conn: sqlite3.Connection, task_id: int) -> Task:
        row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
        if row is None:
            raise NotFoundError(task_id)
        return self._row_to_task(row)

    async def _run(self, op: str, fn: Any, *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except sqlite3.Error as e:
            logger.exception("SqliteTaskStore %s failed", op)
            raise StoreError(f"Database error during {op}: {e}") from e

    # ---- sync implementations ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)
        finally:
            conn.close()

    def _list_sync(self, month: str) -> list[Task]:
        year, mon = parse_month_key(month)
        prefix = f"{year:04d}-{mon:02d}-"
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                SELECT *
                FROM tasks
                WHERE task_date LIKE ?
                ORDER BY task_date ASC, id ASC
                """,
                (prefix + "%",),
            )
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def _create_sync(self, new: NewTask) -> Task:
        title = (new.title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        try:
            task_date = day_key_of(parse_day_key(new.date))
        except ValueError as e:
            raise ValidationError(str(e)) from None

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.execute(
                """
                INSERT INTO tasks(task_date, title, notes, is_done, created_at, updated_at)
                VALUES (?, ?, ?, 0, ?, ?)
                """,
                (task_date, title, new.notes or None, now, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for tasks insert")
            task = self._fetch_one(conn, rowid)
            logger.debug("Task added id=%s date=%s", task.id, task_date)
            return task
        finally:
            conn.close()

    def _update_sync(self, task_id: int, patch: TaskPatch) -> Task:
        changes = patch.as_dict()
        fields: list[str] = []
        params: list[Any] = []

        if "title" in changes:
            title = (changes["title"] or "").strip()
            if not title:
                raise ValidationError("Title is required")
            fields.append("title = ?")
            params.append(title)

        if "notes" in changes:
            fields.append("notes = ?")
            params.append(changes["notes"] or None)

        if "is_done" in changes:
            fields.append("is_done = ?")
            params.append(1 if changes["is_done"] else 0)

        conn = self._get_conn()
        try:
            if not patch.is_empty():
                fields.append("updated_at = ?")
                params.append(time.time())
                params.append(int(task_id))
                cur = conn.execute(f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?", params)
                conn.commit()
                if cur.rowcount == 0:
                    raise NotFoundError(task_id)
            return self._fetch_one(conn, task_id)
        finally:
            conn.close()

    def _delete_sync(self, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            if cur.rowcount == 0:
                raise NotFoundError(task_id)
        finally:
            conn.close()

    # ---- TaskRepo ----

    async def list_tasks(self, month: str) -> list[Task]:
        return await self._run("list_tasks", self._list_sync, month)

    async def create_task(self, new: NewTask) -> Task:
        return await self._run("create_task", self._create_sync, new)

    async def update_task(self, task_id: int, patch: TaskPatch) -> Task:
        return await self._run("update_task", self._update_sync, task_id, patch)

    async def delete_task(self, task_id: int) -> None:
        await self._run("delete_task", self._delete_sync, task_id)
