# src/taskboard/backend/client.py

"""
Hosted data service client (Supabase / PostgREST over HTTP).

Exposes the generic primitives the rest of the app is allowed to use:
- select (equality filters, single-column ordering, optional single row)
- insert / update (returning the stored rows)
- delete

The client is constructed explicitly by the composition root and passed to callers.
No retries: every failure becomes one BackendError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .errors import BackendError, BackendNotFoundError

logger = logging.getLogger(__name__)

SINGLE_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"
RETURN_REPRESENTATION = "return=representation"

# PostgREST: "JSON object requested, multiple (or no) rows returned".
SINGULAR_ROW_ERROR_CODE = "PGRST116"


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _build_params(
    *,
    columns: str | None = None,
    filters: Mapping[str, Any] | None = None,
    order: str | None = None,
    descending: bool = False,
) -> dict[str, str]:
    params: dict[str, str] = {}
    if columns:
        params["select"] = columns
    for column, value in (filters or {}).items():
        op = "is" if value is None else "eq"
        params[column] = f"{op}.{_filter_value(value)}"
    if order:
        params["order"] = f"{order}.{'desc' if descending else 'asc'}"
    return params


def _error_from_response(response: httpx.Response) -> BackendError:
    status = response.status_code
    message = ""
    code: str | None = None
    details: Any = None

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = str(body.get("message") or body.get("error_description") or body.get("error") or "")
        raw_code = body.get("code")
        code = str(raw_code) if raw_code is not None else None
        details = body.get("details")
    if not message:
        message = response.text.strip() or response.reason_phrase or f"HTTP {status}"

    if code == SINGULAR_ROW_ERROR_CODE and (not details or "0 rows" in str(details)):
        return BackendNotFoundError(message, status_code=status, code=code, details=details)
    return BackendError(message, status_code=status, code=code, details=details)


class BackendClient:
    """Thin async wrapper over the PostgREST endpoint of a Supabase project."""

    def __init__(
        self,
        *,
        rest_url: str,
        api_key: str,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not rest_url or not rest_url.strip():
            raise ValueError("rest_url is required")

        timeout = httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds))
        self._http = httpx.AsyncClient(
            base_url=rest_url.rstrip("/") + "/",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )
        logger.info("BackendClient ready url=%s", rest_url)

    @classmethod
    def from_settings(
        cls,
        settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> BackendClient:
        return cls(
            rest_url=settings.rest_url,
            api_key=settings.supabase_anon_key,
            timeout_seconds=float(getattr(settings, "request_timeout_seconds", 15.0)),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        single: bool = False,
        prefer: str | None = None,
    ) -> Any:
        headers: dict[str, str] = {}
        if single:
            headers["Accept"] = SINGLE_OBJECT_MEDIA_TYPE
        if prefer:
            headers["Prefer"] = prefer

        logger.debug("%s /%s params=%s", method, table, params)
        try:
            response = await self._http.request(
                method,
                table,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise BackendError(f"Network error talking to backend: {e}") from e

        if not response.is_success:
            err = _error_from_response(response)
            logger.debug(
                "%s /%s failed status=%s code=%s msg=%s",
                method,
                table,
                err.status_code,
                err.code,
                err.message,
            )
            raise err

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                "Backend returned a non-JSON body.", status_code=response.status_code
            ) from e

    # ---- public API ----

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Mapping[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
        single: bool = False,
    ) -> Any:
        """Rows as a list of dicts, or one dict when single=True."""
        params = _build_params(columns=columns, filters=filters, order=order, descending=descending)
        return await self._request("GET", table, params=params, single=single)

    async def insert(self, table: str, row: Mapping[str, Any], *, single: bool = True) -> Any:
        params = _build_params(columns="*")
        return await self._request(
            "POST",
            table,
            params=params,
            json=dict(row),
            single=single,
            prefer=RETURN_REPRESENTATION,
        )

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        filters: Mapping[str, Any],
        single: bool = False,
    ) -> Any:
        if not filters:
            # An unfiltered PATCH would touch every row.
            raise ValueError("update requires at least one filter")
        params = _build_params(columns="*", filters=filters)
        return await self._request(
            "PATCH",
            table,
            params=params,
            json=dict(values),
            single=single,
            prefer=RETURN_REPRESENTATION,
        )

    async def delete(self, table: str, *, filters: Mapping[str, Any]) -> None:
        if not filters:
            raise ValueError("delete requires at least one filter")
        params = _build_params(filters=filters)
        await self._request("DELETE", table, params=params)
