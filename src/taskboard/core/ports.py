# src/taskboard/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the hosted backend and the UI swappable and makes testing easier.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from ..tasks.task_models import Task, TaskFormData, TaskInsert, TaskUpdate


class DataBackend(Protocol):
    """Generic filter/order/insert/update/delete primitives of the hosted data service."""

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
        single: bool = False,
    ) -> Any: ...

    async def insert(self, table: str, row: Mapping[str, Any], *, single: bool = True) -> Any: ...

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        filters: Mapping[str, Any],
        single: bool = False,
    ) -> Any: ...

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> None: ...


class TaskRepo(Protocol):
    """What the root controller needs from the task data-access wrapper."""

    async def create_task(self, fields: TaskInsert | TaskUpdate) -> Task: ...
    async def get_all_tasks(self) -> list[Task]: ...
    async def get_task(self, task_id: int) -> Task: ...
    async def update_task(self, task_id: int, updates: TaskUpdate) -> Task: ...
    async def delete_task(self, task_id: int) -> None: ...
    async def toggle_task_completion(self, task_id: int, completed: bool) -> Task: ...


class Notifier(Protocol):
    """User-visible success/failure notifications (toasts)."""

    def success(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...


class SaveTaskHandler(Protocol):
    """Callback the task form awaits on submit."""

    async def __call__(self, form: TaskFormData) -> object: ...
