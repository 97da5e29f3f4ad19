# src/task_calendar/tasks/http_store.py

"""
HTTP/JSON task store client.

Endpoints (relative to base_url):
    GET    /tasks?month=YYYY-MM   -> [task, ...]
    POST   /tasks                 -> task
    PATCH  /tasks/{id}            -> task
    DELETE /tasks/{id}            -> 204

Task JSON: {"id", "task_date", "title", "notes", "is_done"}.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import NotFoundError, StoreError, ValidationError
from .task_models import NewTask, Task, TaskPatch

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


def _detail(response: httpx.Response) -> str:
    """Best-effort error text from a failed response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("detail", "message", "error"):
            val = data.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
    text = (response.text or "").strip()
    return text[:200] if text else f"HTTP {response.status_code}"


class HttpTaskStore:
    """TaskRepo backed by a remote HTTP service."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        logger.info("HttpTaskStore ready base_url=%s", self._base_url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        task_id: int | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise StoreError(f"Task service timed out after {self._timeout:g} seconds") from e
        except httpx.HTTPError as e:
            raise StoreError(f"Error calling task service: {e}") from e

        if response.is_success:
            return response

        msg = _detail(response)
        logger.warning("%s %s -> %s %s", method, path, response.status_code, msg)
        if response.status_code == 404 and task_id is not None:
            raise NotFoundError(task_id, msg)
        if response.status_code in (400, 422):
            raise ValidationError(msg)
        raise StoreError(f"Task service error {response.status_code}: {msg}")

    @staticmethod
    def _parse_task(data: Any) -> Task:
        if not isinstance(data, dict):
            raise StoreError("Task service returned an unexpected payload")
        try:
            return Task.from_record(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Task service returned an invalid task: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise StoreError("Task service returned invalid JSON") from e

    # ---- TaskRepo ----

    async def list_tasks(self, month: str) -> list[Task]:
        response = await self._request("GET", "/tasks", params={"month": month})
        data = self._json(response)
        if not isinstance(data, list):
            raise StoreError("Task service returned an unexpected payload")
        return [self._parse_task(item) for item in data]

    async def create_task(self, new: NewTask) -> Task:
        if not (new.title or "").strip():
            raise ValidationError("Title is required")
        response = await self._request("POST", "/tasks", json=new.to_record())
        return self._parse_task(self._json(response))

    async def update_task(self, task_id: int, patch: TaskPatch) -> Task:
        response = await self._request(
            "PATCH", f"/tasks/{int(task_id)}", task_id=task_id, json=patch.as_dict()
        )
        return self._parse_task(self._json(response))

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{int(task_id)}", task_id=task_id)

