# src/taskboard/ui/app.py

"""
Taskboard TUI application.

One main screen (task list) and one modal screen (task form).
All backend work runs in Textual workers; the controller owns the state.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..core.controller import TaskController
from ..core.ports import TaskRepo
from ..core.state import BoardState
from .task_list import TaskListView
from .task_modal import TaskModal

logger = logging.getLogger(__name__)

ShutdownHook = Callable[[], Awaitable[None]]


class AppNotifier:
    """Notifier port backed by Textual toasts."""

    def __init__(self, app: App) -> None:
        self._app = app

    def success(self, message: str) -> None:
        self._app.notify(message, markup=False)

    def error(self, message: str) -> None:
        self._app.notify(message, title="Error", severity="error", markup=False)


class TaskBoardApp(App):
    """Task manager backed by a hosted database."""

    TITLE = "Task Manager"
    SUB_TITLE = "Supabase tasks"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("space", "toggle_task", "Done/Undo", show=True),
        Binding("d", "delete_task", "Delete", show=True),
        Binding("r", "reload", "Reload", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    _LIST_ACTIONS = frozenset({"new_task", "edit_task", "toggle_task", "delete_task", "reload"})

    def __init__(
        self,
        repo: TaskRepo,
        *,
        settings=None,
        on_shutdown: ShutdownHook | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._settings = settings
        self._on_shutdown = on_shutdown
        self.controller = TaskController(repo, AppNotifier(self), on_change=self._state_changed)
        self._task_list: TaskListView | None = None
        if settings is not None:
            self.title = getattr(settings, "app_name", self.TITLE)

    def compose(self) -> ComposeResult:
        yield Header()
        self._task_list = TaskListView(on_delete=self.controller.delete_task, id="tasks")
        yield self._task_list
        yield Footer()

    def on_mount(self) -> None:
        self.task_list.show(self.controller.state)
        if self._settings is not None and not getattr(self._settings, "is_configured", True):
            self.notify(
                "Supabase is not configured. Set TASKBOARD_SUPABASE_URL and "
                "TASKBOARD_SUPABASE_ANON_KEY (see setup instructions).",
                severity="warning",
                markup=False,
            )
        self.run_worker(self.controller.load_tasks(), group="load", exclusive=True)

    async def on_unmount(self) -> None:
        if self._on_shutdown is not None:
            try:
                await self._on_shutdown()
            except Exception:
                logger.exception("Shutdown hook failed.")

    @property
    def task_list(self) -> TaskListView:
        # Held directly: queries only see the active screen, which may be the modal.
        if self._task_list is None:
            raise RuntimeError("TaskBoardApp has not been composed yet")
        return self._task_list

    def _state_changed(self, state: BoardState) -> None:
        self.task_list.show(state)

    # ---- modal ----

    def _open_modal(self) -> None:
        modal = TaskModal(self.controller.state.editing_task, on_save=self.controller.save_task)
        self.push_screen(modal, callback=self._modal_closed)

    def _modal_closed(self, saved: bool | None) -> None:
        if not saved:
            self.controller.close_modal()

    # ---- actions ----

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        # List actions are inert while the form is open.
        if action in self._LIST_ACTIONS and isinstance(self.screen, TaskModal):
            return False
        return True

    def action_new_task(self) -> None:
        self.controller.open_create()
        self._open_modal()

    def action_edit_task(self) -> None:
        task = self.task_list.selected_task()
        if task is None:
            return
        self.controller.open_edit(task)
        self._open_modal()

    def action_toggle_task(self) -> None:
        task = self.task_list.selected_task()
        if task is None:
            return
        self.run_worker(self.controller.toggle_complete(task.id, not task.completed))

    def action_delete_task(self) -> None:
        task_id = self.task_list.selected_task_id()
        if task_id is None:
            return
        self.run_worker(self.task_list.request_delete(task_id))

    def action_reload(self) -> None:
        self.run_worker(self.controller.load_tasks(), group="load", exclusive=True)
