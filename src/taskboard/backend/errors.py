# src/taskboard/backend/errors.py

from __future__ import annotations

from typing import Any


class BackendError(RuntimeError):
    """
    Any failed round trip to the hosted data service.

    `message` is human readable (taken from the backend response when there is one).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    def __str__(self) -> str:
        return self.message


class BackendNotFoundError(BackendError):
    """No row matched a request that expects exactly one."""


def friendly_backend_error_message(err: Exception) -> str:
    msg = str(err).strip() or "Backend error."
    status = getattr(err, "status_code", None)
    if status in (401, 403):
        return "Backend rejected the access key. Check TASKBOARD_SUPABASE_ANON_KEY in .env."
    if status == 404 and not isinstance(err, BackendNotFoundError):
        return "Backend table not found. Create the tasks table (see setup instructions)."
    return msg
