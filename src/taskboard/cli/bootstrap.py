# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- constructs the backend client explicitly and wires it into the task service and the app.
"""

from __future__ import annotations

import logging

import httpx

from ..backend.client import BackendClient
from ..config import get_settings
from ..tasks.task_service import TaskService
from ..ui.app import TaskBoardApp

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_app(
    *,
    settings=None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TaskBoardApp:
    """
    Build the TUI app from the provided settings.

    Keeping settings (and the HTTP transport) injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if not settings.is_configured:
        logger.warning(
            "Supabase settings are placeholders (url=%s); requests will fail until configured.",
            settings.supabase_url,
        )

    backend = BackendClient.from_settings(settings, transport=transport)
    service = TaskService(backend, table=settings.tasks_table)

    return TaskBoardApp(service, settings=settings, on_shutdown=backend.aclose)
