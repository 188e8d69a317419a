# src/taskboard/ui/task_modal.py

"""Modal form for creating or editing a task."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, TextArea
from textual.worker import Worker

from ..backend.errors import BackendError, friendly_backend_error_message
from ..core.ports import SaveTaskHandler
from ..tasks.task_models import Task, TaskFormData

logger = logging.getLogger(__name__)


class TaskModal(ModalScreen[bool]):
    """
    Task form.

    Dismisses with True after a successful save, False on cancel.
    A failed save keeps the form open (with the error shown) so it can be retried.
    """

    DEFAULT_CSS = """
    TaskModal {
        align: center middle;
    }

    TaskModal #dialog {
        width: 64;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    TaskModal #heading {
        text-style: bold;
        margin-bottom: 1;
    }

    TaskModal TextArea {
        height: 6;
    }

    TaskModal #error {
        color: $error;
        height: auto;
    }

    TaskModal #buttons {
        height: auto;
        align-horizontal: right;
        padding-top: 1;
    }

    TaskModal #buttons Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    def __init__(self, task: Task | None, *, on_save: SaveTaskHandler, **kwargs) -> None:
        super().__init__(**kwargs)
        self._editing = task
        self._on_save = on_save
        self.submitting = False
        self._save_worker: Worker[bool] | None = None

    @property
    def submit_label(self) -> str:
        if self.submitting:
            return "Saving..."
        return "Update Task" if self._editing is not None else "Create Task"

    def compose(self) -> ComposeResult:
        title = self._editing.title if self._editing else ""
        description = (self._editing.description or "") if self._editing else ""

        with Vertical(id="dialog"):
            yield Label("Edit Task" if self._editing else "Create New Task", id="heading")
            yield Label("Title")
            yield Input(value=title, placeholder="Enter task title...", id="title")
            yield Label("Description")
            yield TextArea(description, id="description")
            yield Label("", id="error", markup=False)
            with Horizontal(id="buttons"):
                yield Button("Cancel", id="cancel")
                yield Button(self.submit_label, id="save", variant="primary")

    def on_mount(self) -> None:
        self._sync_buttons()
        self.query_one("#title", Input).focus()

    # ---- form state ----

    def draft(self) -> TaskFormData:
        return TaskFormData(
            title=self.query_one("#title", Input).value.strip(),
            description=self.query_one("#description", TextArea).text.strip(),
        )

    def can_submit(self) -> bool:
        return not self.submitting and bool(self.draft().title)

    def _sync_buttons(self) -> None:
        save = self.query_one("#save", Button)
        save.label = self.submit_label
        save.disabled = not self.can_submit()
        self.query_one("#cancel", Button).disabled = self.submitting

    def on_input_changed(self, event: Input.Changed) -> None:
        self._sync_buttons()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._start_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self._start_submit()
        elif event.button.id == "cancel":
            self.action_cancel()

    def _start_submit(self) -> None:
        # One save at a time; Enter in the title field bypasses the disabled button.
        if self.submitting or (self._save_worker is not None and not self._save_worker.is_finished):
            return
        self._save_worker = self.run_worker(self.submit(), group="save")

    def action_cancel(self) -> None:
        if self.submitting:
            return
        self.dismiss(False)

    # ---- submit ----

    async def submit(self) -> bool:
        """Save the draft; returns True when the form was saved and dismissed."""
        if not self.can_submit():
            return False

        form = self.draft()
        error_label = self.query_one("#error", Label)
        error_label.update("")

        self.submitting = True
        self._sync_buttons()
        saved = False
        try:
            await self._on_save(form)
            saved = True
        except BackendError as e:
            logger.info("Task form save failed: %s", e)
            error_label.update(friendly_backend_error_message(e))
        finally:
            self.submitting = False
            if not saved and self.is_attached:
                self._sync_buttons()

        if saved:
            self.dismiss(True)
        return saved
