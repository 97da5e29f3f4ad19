# src/task_calendar/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from ..core.datekey import coerce_date, day_key_of


class _Unset(Enum):
    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET


def _bool_from_record(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(raw)


@dataclass(frozen=True, slots=True)
class Task:
    """
    A task scheduled on one calendar day.

    notes=None means "no notes"; stores never hand out an empty string.
    """

    id: int
    date: date
    title: str
    notes: str | None = None
    is_done: bool = False

    @property
    def day_key(self) -> str:
        return day_key_of(self.date)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Task:
        """Build a Task from the store's JSON/row shape (task_date, is_done, ...)."""
        raw_date = record.get("task_date", record.get("date"))
        if raw_date is None:
            raise ValueError("task record has no task_date")
        notes = record.get("notes")
        return cls(
            id=int(record["id"]),
            date=coerce_date(raw_date),
            title=str(record.get("title") or ""),
            notes=str(notes) if notes else None,
            is_done=_bool_from_record(record.get("is_done", False)),
        )


@dataclass(frozen=True, slots=True)
class NewTask:
    """Create payload. `date` is a DayKey."""

    date: str
    title: str
    notes: str | None = None

    def to_record(self) -> dict[str, Any]:
        return {"task_date": self.date, "title": self.title, "notes": self.notes}


@dataclass(frozen=True, slots=True)
class TaskPatch:
    """
    Partial update. Fields left as UNSET are not changed.

    notes=None is an explicit "clear notes".
    """

    title: str | _Unset = UNSET
    notes: str | None | _Unset = UNSET
    is_done: bool | _Unset = UNSET

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.title is not UNSET:
            out["title"] = self.title
        if self.notes is not UNSET:
            out["notes"] = self.notes
        if self.is_done is not UNSET:
            out["is_done"] = self.is_done
        return out

    def is_empty(self) -> bool:
        return not self.as_dict()
