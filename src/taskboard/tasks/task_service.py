# src/taskboard/tasks/task_service.py

"""
Task data-access wrapper.

Each operation is one request/response round trip to the "tasks" collection.
Failures are logged and re-raised as BackendError with the operation in the message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from ..backend.errors import BackendError, BackendNotFoundError
from ..core.ports import DataBackend
from .task_models import Task, TaskInsert, TaskUpdate

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse(row: Any, prefix: str) -> Task:
    if not isinstance(row, dict):
        raise BackendError(f"{prefix}: unexpected response from backend")
    try:
        return Task.from_row(row)
    except (KeyError, TypeError, ValueError) as e:
        raise BackendError(f"{prefix}: malformed task row ({e})") from e


def _rewrap(err: BackendError, prefix: str) -> BackendError:
    """Same error class and metadata, message prefixed with the failed operation."""
    return type(err)(
        f"{prefix}: {err.message}",
        status_code=err.status_code,
        code=err.code,
        details=err.details,
    )


class TaskService:
    def __init__(
        self,
        backend: DataBackend,
        *,
        table: str = TASKS_TABLE,
        clock: Clock | None = None,
    ) -> None:
        self._backend = backend
        self._table = table
        self._clock: Clock = clock or _utc_now

    @staticmethod
    def _one(row: Any, prefix: str) -> Task:
        if isinstance(row, list):
            # Some backends answer a single-row request with a one-element list.
            if not row:
                raise BackendNotFoundError(f"{prefix}: no rows returned")
            row = row[0]
        return _parse(row, prefix)

    async def create_task(self, fields: TaskInsert | TaskUpdate) -> Task:
        try:
            row = await self._backend.insert(self._table, dict(fields), single=True)
        except BackendError as e:
            logger.error("Error creating task: %s", e)
            raise _rewrap(e, "Failed to create task") from e
        task = self._one(row, "Failed to create task")
        logger.info("Created task id=%s", task.id)
        return task

    async def get_all_tasks(self) -> list[Task]:
        try:
            rows = await self._backend.select(self._table, order="created_at", descending=True)
        except BackendError as e:
            logger.error("Error fetching tasks: %s", e)
            raise _rewrap(e, "Failed to fetch tasks") from e
        tasks = [_parse(r, "Failed to fetch tasks") for r in (rows or [])]
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    async def get_task(self, task_id: int) -> Task:
        try:
            row = await self._backend.select(self._table, filters={"id": task_id}, single=True)
        except BackendError as e:
            logger.error("Error fetching task id=%s: %s", task_id, e)
            raise _rewrap(e, "Failed to fetch task") from e
        return self._one(row, "Failed to fetch task")

    async def update_task(self, task_id: int, updates: TaskUpdate) -> Task:
        values = {**updates, "updated_at": self._clock().isoformat()}
        try:
            row = await self._backend.update(
                self._table,
                values,
                filters={"id": task_id},
                single=True,
            )
        except BackendError as e:
            logger.error("Error updating task id=%s: %s", task_id, e)
            raise _rewrap(e, "Failed to update task") from e
        task = self._one(row, "Failed to update task")
        logger.info("Updated task id=%s fields=%s", task_id, sorted(updates))
        return task

    async def delete_task(self, task_id: int) -> None:
        try:
            await self._backend.delete(self._table, filters={"id": task_id})
        except BackendError as e:
            logger.error("Error deleting task id=%s: %s", task_id, e)
            raise _rewrap(e, "Failed to delete task") from e
        logger.info("Deleted task id=%s", task_id)

    async def toggle_task_completion(self, task_id: int, completed: bool) -> Task:
        return await self.update_task(task_id, {"completed": completed})
