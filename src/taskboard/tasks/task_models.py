# src/taskboard/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, NotRequired, TypedDict


class TaskInsert(TypedDict):
    title: str
    description: NotRequired[str | None]
    completed: NotRequired[bool]


class TaskUpdate(TypedDict, total=False):
    title: str
    description: str | None
    completed: bool


def parse_timestamp(raw: Any) -> datetime:
    """
    Parse a backend timestamp (ISO-8601, `Z` accepted) into an aware datetime.

    Naive values are assumed to be UTC.
    """
    if isinstance(raw, datetime):
        dt = raw
    else:
        s = str(raw or "").strip()
        if not s:
            raise ValueError("timestamp is empty")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str | None
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Task:
        description = row.get("description")
        return cls(
            id=int(row["id"]),
            title=str(row.get("title") or ""),
            description=None if description is None else str(description),
            completed=bool(row.get("completed", False)),
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at") or row.get("created_at")),
        )

    @property
    def status_label(self) -> str:
        return "Completed" if self.completed else "Pending"


@dataclass(slots=True, frozen=True)
class TaskFormData:
    """What the task form submits (already trimmed)."""

    title: str
    description: str = ""

    def as_fields(self) -> TaskUpdate:
        return {"title": self.title, "description": self.description}
