# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time: placeholders are used until configured.
- Backend credentials also accept the plain SUPABASE_* and legacy VITE_* names.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

PLACEHOLDER_SUPABASE_URL = "https://your-project.supabase.co"
PLACEHOLDER_SUPABASE_ANON_KEY = "your-anon-key"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides the real environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Hosted backend (Supabase / PostgREST) ----
    supabase_url: str
    supabase_anon_key: str
    tasks_table: str
    request_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST endpoint."""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @property
    def is_configured(self) -> bool:
        """False while the backend URL or key still hold the placeholders."""
        return (
            bool(self.supabase_url.strip())
            and bool(self.supabase_anon_key.strip())
            and self.supabase_url != PLACEHOLDER_SUPABASE_URL
            and self.supabase_anon_key != PLACEHOLDER_SUPABASE_ANON_KEY
        )

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Task Manager").strip() or "Task Manager"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        supabase_url = (
            _first_env(
                _k("SUPABASE_URL"),
                "SUPABASE_URL",
                "VITE_SUPABASE_URL",
                default=PLACEHOLDER_SUPABASE_URL,
            )
            or PLACEHOLDER_SUPABASE_URL
        ).strip()
        supabase_anon_key = (
            _first_env(
                _k("SUPABASE_ANON_KEY"),
                "SUPABASE_ANON_KEY",
                "VITE_SUPABASE_ANON_KEY",
                default=PLACEHOLDER_SUPABASE_ANON_KEY,
            )
            or PLACEHOLDER_SUPABASE_ANON_KEY
        ).strip()

        tasks_table = _env(_k("TASKS_TABLE"), "tasks").strip() or "tasks"
        request_timeout_seconds = _env_float(_k("REQUEST_TIMEOUT_SECONDS"), 15.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            supabase_url=supabase_url,
            supabase_anon_key=supabase_anon_key,
            tasks_table=tasks_table,
            request_timeout_seconds=request_timeout_seconds,
            data_dir=data_dir,
        )


# Read once at process start.
SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
