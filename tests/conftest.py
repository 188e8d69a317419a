# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.core.controller import TaskController
from taskboard.tasks.task_service import TaskService

from .fakes import FakeBackend, FakeNotifier, TickingClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the composition root and the app.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="Task Manager",
        log_level="INFO",
        supabase_url="https://demo.supabase.co",
        supabase_anon_key="anon-test-key",
        rest_url="https://demo.supabase.co/rest/v1",
        tasks_table="tasks",
        request_timeout_seconds=5.0,
        data_dir=tmp_path / "data",
        is_configured=True,
    )


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def backend(clock: TickingClock) -> FakeBackend:
    return FakeBackend(clock)


@pytest.fixture()
def service(backend: FakeBackend, clock: TickingClock) -> TaskService:
    return TaskService(backend, clock=clock)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def controller(service: TaskService, notifier: FakeNotifier) -> TaskController:
    return TaskController(service, notifier)
