# tests/test_task_service.py

from __future__ import annotations

import pytest

from taskboard.backend.errors import BackendError, BackendNotFoundError
from taskboard.tasks.task_service import TaskService

from .fakes import FakeBackend


@pytest.mark.asyncio
async def test_create_assigns_fresh_id_and_defaults_to_pending(service: TaskService) -> None:
    first = await service.create_task({"title": "Buy milk"})
    second = await service.create_task({"title": "Walk dog", "description": "before 9"})

    assert first.id != second.id
    assert first.completed is False
    assert first.description is None
    assert second.description == "before 9"
    assert first.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_get_all_tasks_is_newest_first(service: TaskService, backend: FakeBackend) -> None:
    backend.seed("tasks", "oldest", "middle", "newest")

    tasks = await service.get_all_tasks()

    assert [t.title for t in tasks] == ["newest", "middle", "oldest"]
    stamps = [t.created_at for t in tasks]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_get_all_tasks_empty(service: TaskService) -> None:
    assert await service.get_all_tasks() == []


@pytest.mark.asyncio
async def test_get_task_missing_raises_not_found(service: TaskService) -> None:
    with pytest.raises(BackendNotFoundError) as exc_info:
        await service.get_task(404)
    assert isinstance(exc_info.value, BackendError)
    assert str(exc_info.value).startswith("Failed to fetch task:")


@pytest.mark.asyncio
async def test_update_applies_partial_fields_and_refreshes_updated_at(service: TaskService) -> None:
    task = await service.create_task({"title": "Draft", "description": "keep me"})

    updated = await service.update_task(task.id, {"title": "Final"})

    assert updated.title == "Final"
    assert updated.description == "keep me"
    assert updated.updated_at > task.updated_at
    assert updated.created_at == task.created_at


@pytest.mark.asyncio
async def test_toggle_twice_restores_value_and_bumps_updated_at(service: TaskService) -> None:
    task = await service.create_task({"title": "Flip"})

    done = await service.toggle_task_completion(task.id, True)
    undone = await service.toggle_task_completion(task.id, False)

    assert done.completed is True
    assert undone.completed is task.completed
    assert task.updated_at < done.updated_at < undone.updated_at


@pytest.mark.asyncio
async def test_delete_removes_task_and_repeats_are_harmless(service: TaskService) -> None:
    keep = await service.create_task({"title": "keep"})
    gone = await service.create_task({"title": "gone"})

    await service.delete_task(gone.id)
    await service.delete_task(gone.id)

    for _ in range(2):
        ids = [t.id for t in await service.get_all_tasks()]
        assert ids == [keep.id]


@pytest.mark.asyncio
async def test_backend_failure_is_rewrapped_with_operation(
    service: TaskService, backend: FakeBackend
) -> None:
    backend.fail_with = BackendError("permission denied for table tasks", status_code=401)

    with pytest.raises(BackendError) as exc_info:
        await service.create_task({"title": "nope"})

    err = exc_info.value
    assert str(err) == "Failed to create task: permission denied for table tasks"
    assert err.status_code == 401
    assert isinstance(err.__cause__, BackendError)


@pytest.mark.asyncio
async def test_malformed_row_becomes_backend_error(backend: FakeBackend) -> None:
    backend.tables["tasks"] = [{"title": "no id", "created_at": "2025-01-01T00:00:00Z"}]
    service = TaskService(backend)

    with pytest.raises(BackendError, match="malformed task row"):
        await service.get_all_tasks()


@pytest.mark.asyncio
async def test_buy_milk_scenario(service: TaskService) -> None:
    created = await service.create_task({"title": "Buy milk"})

    tasks = await service.get_all_tasks()
    assert len(tasks) == 1
    assert tasks[0].title == "Buy milk"
    assert tasks[0].completed is False

    await service.toggle_task_completion(created.id, True)
    fetched = await service.get_task(created.id)
    assert fetched.completed is True
    assert fetched.updated_at > created.updated_at

    await service.delete_task(created.id)
    assert await service.get_all_tasks() == []
