# src/task_calendar/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the concrete task store (SQLite file or HTTP service),
- wires it into a ViewState.
"""

from __future__ import annotations

import logging
from datetime import date

from ..config import STORE_HTTP, get_settings
from ..core.ports import TaskRepo
from ..core.view_state import ViewState
from ..tasks.http_store import HttpTaskStore
from ..tasks.task_store import SqliteTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(*, settings=None) -> TaskRepo:
    """
    Build the task store selected by settings.store_kind.

    Keeping settings injectable makes this easy to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    if settings.store_kind == STORE_HTTP:
        logger.info("Using HTTP task store at %s", settings.api_base_url)
        return HttpTaskStore(settings.api_base_url, timeout=settings.api_timeout_seconds)

    _ensure_local_dirs(settings)
    logger.info("Using SQLite task store at %s", settings.tasks_db_path)
    return SqliteTaskStore(settings.tasks_db_path)


async def close_store(store: TaskRepo) -> None:
    """Release store resources (HTTP connection pool). SQLite needs nothing."""
    aclose = getattr(store, "aclose", None)
    if aclose is not None:
        await aclose()


def create_view_state(store: TaskRepo, *, settings=None, today: date | None = None) -> ViewState:
    if settings is None:
        settings = get_settings()
    return ViewState(store, today=today, follow_selection=settings.follow_selection)
