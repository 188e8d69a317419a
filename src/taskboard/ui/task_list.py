# src/taskboard/ui/task_list.py

"""Task list view: loading / empty / table states plus in-flight delete tracking."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import DataTable, Label, Static
from textual.widgets.data_table import CellDoesNotExist

from ..core.state import BoardState
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

DeleteHandler = Callable[[int], Awaitable[None]]

COLUMNS = ("Done", "Title", "Description", "Status", "Created")

SETUP_INSTRUCTIONS = """\
Setup Instructions

1. Create a Supabase project at https://supabase.com

2. Create the tasks table (SQL editor):

   CREATE TABLE tasks (
     id BIGSERIAL PRIMARY KEY,
     title TEXT NOT NULL,
     description TEXT,
     completed BOOLEAN DEFAULT FALSE,
     created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
     updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
   );

3. Put the project settings in .env:

   TASKBOARD_SUPABASE_URL=your_supabase_url
   TASKBOARD_SUPABASE_ANON_KEY=your_supabase_anon_key

4. Optionally enable Row Level Security in the Supabase dashboard.
"""


def format_created(task: Task) -> str:
    return task.created_at.astimezone().strftime("%b %d, %Y %H:%M")


def task_cells(task: Task, *, deleting: bool = False) -> tuple[Text, ...]:
    done_style = "dim strike" if task.completed else ""
    status = "Deleting..." if deleting else task.status_label
    return (
        Text("✔" if task.completed else "·", style="green" if task.completed else ""),
        Text(task.title, style=f"bold {done_style}".strip()),
        Text(task.description or "No description", style=done_style or "dim"),
        Text(status, style="yellow" if deleting else ("green" if task.completed else "cyan")),
        Text(format_created(task), style="dim"),
    )


class TaskListView(Vertical):
    """Renders the task list from BoardState; owns the set of task ids being deleted."""

    DEFAULT_CSS = """
    TaskListView {
        height: 1fr;
        border: solid $primary;
        padding: 0 1;
    }

    TaskListView .title {
        text-style: bold;
        margin-bottom: 1;
    }

    TaskListView #loading {
        color: $text-muted;
        content-align: center middle;
        width: 100%;
    }

    TaskListView #empty {
        color: $text-muted;
        height: auto;
    }

    TaskListView DataTable {
        height: 1fr;
    }
    """

    def __init__(self, *, on_delete: DeleteHandler, **kwargs) -> None:
        super().__init__(**kwargs)
        self._on_delete = on_delete
        self._state: BoardState | None = None
        self.deleting: set[int] = set()

    def compose(self) -> ComposeResult:
        yield Label("Tasks", classes="title", id="summary")
        yield Label("Loading tasks...", id="loading")
        yield Static(
            "No tasks found\nCreate your first task to get started! (press n)\n\n" + SETUP_INSTRUCTIONS,
            id="empty",
        )
        yield DataTable(id="task-table", cursor_type="row", zebra_stripes=True)

    def on_mount(self) -> None:
        self.query_one(DataTable).add_columns(*COLUMNS)
        self._render_rows()

    # ---- rendering ----

    def show(self, state: BoardState) -> None:
        self._state = state
        if self.is_mounted:
            self._render_rows()

    def _render_rows(self) -> None:
        state = self._state
        loading = state is None or state.loading
        tasks = [] if state is None else state.tasks

        self.query_one("#loading").display = loading
        self.query_one("#empty").display = not loading and not tasks
        table = self.query_one(DataTable)
        table.display = not loading and bool(tasks)

        summary = self.query_one("#summary", Label)
        if state is not None and not loading:
            summary.update(
                f"Tasks  ({state.pending_count} pending, {state.completed_count} completed)"
            )
        else:
            summary.update("Tasks")

        selected = self.selected_task_id()
        table.clear()
        for task in tasks:
            table.add_row(*task_cells(task, deleting=task.id in self.deleting), key=str(task.id))

        if selected is not None:
            for index, task in enumerate(tasks):
                if task.id == selected:
                    table.move_cursor(row=index)
                    break

    # ---- selection ----

    def selected_task_id(self) -> int | None:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        try:
            row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        except CellDoesNotExist:
            return None
        if row_key.value is None:
            return None
        return int(row_key.value)

    def selected_task(self) -> Task | None:
        task_id = self.selected_task_id()
        if task_id is None or self._state is None:
            return None
        return self._state.find(task_id)

    # ---- delete ----

    async def request_delete(self, task_id: int) -> bool:
        """Delete one task; a second request for an id already in flight is ignored."""
        if task_id in self.deleting:
            logger.debug("Delete already in flight id=%s", task_id)
            return False

        self.deleting.add(task_id)
        self._render_if_ready()
        try:
            await self._on_delete(task_id)
        finally:
            self.deleting.discard(task_id)
            self._render_if_ready()
        return True

    def _render_if_ready(self) -> None:
        if self.is_mounted and self._state is not None:
            self._render_rows()
