# src/task_calendar/core/errors.py

from __future__ import annotations

"""
Errors raised by task stores.

Stores raise only these; ViewState turns them into a user-visible message.
"""


class TaskStoreError(Exception):
    """Base class for every failure reported by a TaskRepo."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskStoreError):
    """The store rejected the payload (e.g. empty title)."""


class NotFoundError(TaskStoreError):
    """The referenced task does not exist (anymore)."""

    def __init__(self, task_id: int, message: str = "") -> None:
        super().__init__(message or f"Task {task_id} not found")
        self.task_id = task_id


class StoreError(TaskStoreError):
    """Transport or server failure. Not retried automatically."""
