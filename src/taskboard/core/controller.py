# src/taskboard/core/controller.py

"""
Root controller.

Owns the in-memory task list and orchestrates:
- load-on-start,
- optimistic local merges after each data-access call (no re-fetch),
- success/failure notifications.

Create/update failures are re-raised so the form can stay open;
toggle/delete failures are swallowed after the notification.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..backend.errors import BackendError
from ..tasks.task_models import Task, TaskFormData
from .ports import Notifier, TaskRepo
from .state import BoardState

logger = logging.getLogger(__name__)

StateListener = Callable[[BoardState], None]

LOAD_FAILED = "Failed to load tasks. Please check your Supabase configuration."
SAVE_FAILED = "Failed to save task. Please try again."
TOGGLE_FAILED = "Failed to update task status. Please try again."
DELETE_FAILED = "Failed to delete task. Please try again."


class TaskController:
    def __init__(
        self,
        repo: TaskRepo,
        notifier: Notifier,
        *,
        on_change: StateListener | None = None,
    ) -> None:
        self.repo = repo
        self.notifier = notifier
        self.state = BoardState()
        self._listeners: list[StateListener] = []
        if on_change is not None:
            self._listeners.append(on_change)

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("State listener failed.")

    # ---- load ----

    async def load_tasks(self) -> None:
        self.state.loading = True
        self._changed()
        try:
            self.state.tasks = await self.repo.get_all_tasks()
            logger.info("Loaded %d tasks", len(self.state.tasks))
        except BackendError:
            logger.exception("Error loading tasks")
            self.notifier.error(LOAD_FAILED)
        finally:
            self.state.loading = False
            self._changed()

    # ---- modal ----

    def open_create(self) -> None:
        self.state.editing_task = None
        self.state.modal_open = True
        self._changed()

    def open_edit(self, task: Task) -> None:
        self.state.editing_task = task
        self.state.modal_open = True
        self._changed()

    def close_modal(self) -> None:
        self.state.modal_open = False
        self.state.editing_task = None
        self._changed()

    # ---- mutations ----

    async def save_task(self, form: TaskFormData) -> Task:
        editing = self.state.editing_task
        try:
            if editing is not None:
                task = await self.repo.update_task(editing.id, form.as_fields())
                self.state.replace(task)
                message = "Task updated successfully!"
            else:
                task = await self.repo.create_task(form.as_fields())
                self.state.tasks = [task, *self.state.tasks]
                message = "Task created successfully!"
        except BackendError:
            logger.exception("Error saving task (editing=%s)", editing.id if editing else None)
            self.notifier.error(SAVE_FAILED)
            raise

        self.state.modal_open = False
        self.state.editing_task = None
        self._changed()
        self.notifier.success(message)
        return task

    async def toggle_complete(self, task_id: int, completed: bool) -> None:
        try:
            task = await self.repo.toggle_task_completion(task_id, completed)
        except BackendError:
            logger.exception("Error updating task status id=%s", task_id)
            self.notifier.error(TOGGLE_FAILED)
            return

        self.state.replace(task)
        self._changed()
        self.notifier.success("Task completed!" if completed else "Task marked as pending!")

    async def delete_task(self, task_id: int) -> None:
        try:
            await self.repo.delete_task(task_id)
        except BackendError:
            logger.exception("Error deleting task id=%s", task_id)
            self.notifier.error(DELETE_FAILED)
            return

        self.state.remove(task_id)
        self._changed()
        self.notifier.success("Task deleted successfully!")
