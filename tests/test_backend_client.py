# tests/test_backend_client.py

from __future__ import annotations

import json

import httpx
import pytest

from taskboard.backend.client import BackendClient
from taskboard.backend.errors import (
    BackendError,
    BackendNotFoundError,
    friendly_backend_error_message,
)

ROW = {
    "id": 7,
    "title": "Buy milk",
    "description": None,
    "completed": False,
    "created_at": "2025-01-05T09:30:00.123456+00:00",
    "updated_at": "2025-01-05T09:30:00.123456+00:00",
}


class Recorder:
    """MockTransport handler that records requests and replays one canned response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(handler) -> BackendClient:
    return BackendClient(
        rest_url="https://demo.supabase.co/rest/v1",
        api_key="anon-test-key",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_select_builds_order_and_auth_headers() -> None:
    rec = Recorder(httpx.Response(200, json=[ROW]))
    async with make_client(rec) as client:
        rows = await client.select("tasks", order="created_at", descending=True)

    assert rows == [ROW]
    req = rec.last
    assert req.method == "GET"
    assert req.url.path == "/rest/v1/tasks"
    assert req.url.params["select"] == "*"
    assert req.url.params["order"] == "created_at.desc"
    assert req.headers["apikey"] == "anon-test-key"
    assert req.headers["authorization"] == "Bearer anon-test-key"


@pytest.mark.asyncio
async def test_select_single_uses_equality_filter_and_object_media_type() -> None:
    rec = Recorder(httpx.Response(200, json=ROW))
    async with make_client(rec) as client:
        row = await client.select("tasks", filters={"id": 7}, single=True)

    assert row == ROW
    assert rec.last.url.params["id"] == "eq.7"
    assert rec.last.headers["accept"] == "application/vnd.pgrst.object+json"


@pytest.mark.asyncio
async def test_insert_posts_json_and_asks_for_representation() -> None:
    rec = Recorder(httpx.Response(201, json=ROW))
    async with make_client(rec) as client:
        row = await client.insert("tasks", {"title": "Buy milk"})

    assert row["id"] == 7
    req = rec.last
    assert req.method == "POST"
    assert json.loads(req.content) == {"title": "Buy milk"}
    assert req.headers["prefer"] == "return=representation"


@pytest.mark.asyncio
async def test_update_patches_filtered_row() -> None:
    rec = Recorder(httpx.Response(200, json={**ROW, "completed": True}))
    async with make_client(rec) as client:
        row = await client.update("tasks", {"completed": True}, filters={"id": 7}, single=True)

    assert row["completed"] is True
    req = rec.last
    assert req.method == "PATCH"
    assert req.url.params["id"] == "eq.7"
    assert json.loads(req.content) == {"completed": True}


@pytest.mark.asyncio
async def test_delete_sends_filter_and_accepts_empty_body() -> None:
    rec = Recorder(httpx.Response(204))
    async with make_client(rec) as client:
        result = await client.delete("tasks", filters={"id": 7})

    assert result is None
    assert rec.last.method == "DELETE"
    assert rec.last.url.params["id"] == "eq.7"


@pytest.mark.asyncio
async def test_update_and_delete_require_filters() -> None:
    rec = Recorder(httpx.Response(204))
    async with make_client(rec) as client:
        with pytest.raises(ValueError):
            await client.update("tasks", {"completed": True}, filters={})
        with pytest.raises(ValueError):
            await client.delete("tasks", filters={})
    assert rec.requests == []


@pytest.mark.asyncio
async def test_zero_rows_single_maps_to_not_found() -> None:
    body = {
        "code": "PGRST116",
        "details": "The result contains 0 rows",
        "hint": None,
        "message": "JSON object requested, multiple (or no) rows returned",
    }
    rec = Recorder(httpx.Response(406, json=body))
    async with make_client(rec) as client:
        with pytest.raises(BackendNotFoundError) as exc_info:
            await client.select("tasks", filters={"id": 1}, single=True)

    err = exc_info.value
    assert err.status_code == 406
    assert err.code == "PGRST116"
    assert "multiple (or no) rows" in err.message


@pytest.mark.asyncio
async def test_error_body_message_is_surfaced() -> None:
    body = {"code": "42P01", "details": None, "hint": None, "message": 'relation "public.tasks" does not exist'}
    rec = Recorder(httpx.Response(404, json=body))
    async with make_client(rec) as client:
        with pytest.raises(BackendError) as exc_info:
            await client.select("tasks")

    err = exc_info.value
    assert not isinstance(err, BackendNotFoundError)
    assert err.message == 'relation "public.tasks" does not exist'
    assert err.code == "42P01"


@pytest.mark.asyncio
async def test_non_json_error_falls_back_to_text() -> None:
    rec = Recorder(httpx.Response(502, text="Bad gateway"))
    async with make_client(rec) as client:
        with pytest.raises(BackendError, match="Bad gateway"):
            await client.select("tasks")


@pytest.mark.asyncio
async def test_transport_error_becomes_backend_error() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(boom) as client:
        with pytest.raises(BackendError, match="Network error") as exc_info:
            await client.select("tasks")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_from_settings_uses_rest_url(settings) -> None:
    client = BackendClient.from_settings(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    assert str(client._http.base_url) == "https://demo.supabase.co/rest/v1/"


@pytest.mark.parametrize("status", [401, 403])
def test_friendly_message_for_rejected_key(status: int) -> None:
    err = BackendError("JWT expired", status_code=status)
    assert "TASKBOARD_SUPABASE_ANON_KEY" in friendly_backend_error_message(err)


def test_friendly_message_for_missing_table() -> None:
    err = BackendError('relation "public.tasks" does not exist', status_code=404, code="42P01")
    assert "tasks table" in friendly_backend_error_message(err)


def test_friendly_message_keeps_not_found_and_other_errors() -> None:
    missing_row = BackendNotFoundError("no rows", status_code=404)
    assert friendly_backend_error_message(missing_row) == "no rows"
    assert friendly_backend_error_message(BackendError("  boom  ", status_code=500)) == "boom"
    assert friendly_backend_error_message(BackendError("")) == "Backend error."
