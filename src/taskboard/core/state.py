# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_models import Task


@dataclass
class BoardState:
    """
    Everything the root controller owns.

    Only the controller mutates this; views read it.
    """

    tasks: list[Task] = field(default_factory=list)
    loading: bool = True
    modal_open: bool = False
    editing_task: Task | None = None

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self.tasks if not t.completed)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.completed)

    def find(self, task_id: int) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def replace(self, task: Task) -> None:
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    def remove(self, task_id: int) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]
