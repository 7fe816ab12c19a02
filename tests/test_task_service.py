# tests/test_task_service.py

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from vott_server.errors import InvalidArgumentError, NotFoundError
from vott_server.schemas.task import TaskWrite
from vott_server.services.task_service import TaskService, merge_task_fields

from .conftest import FakeClock

URLS = {
    "stellaUrl": "https://stella.example",
    "vottBackendUrl": "https://vott.example",
    "imageServerUrl": "https://images.example",
    "taskServerUrl": "https://tasks.example",
}


def task_payload(**fields) -> TaskWrite:
    return TaskWrite.model_validate({"id": "a", **URLS, **fields})


@pytest.mark.asyncio
async def test_new_task_gets_defaults(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)

    task = await service.save(task_payload(imageList={"x": "u1", "y": "u2"}))

    assert task.progress == {"x": "NOTVISITED", "y": "NOTVISITED"}
    assert task.attribute_keys == {}
    assert task.last_used_for_project_creation == ""
    assert task.created_at == "2026-10-17T09:00:00Z"
    assert task.last_updated_at == task.created_at


@pytest.mark.asyncio
async def test_update_keeps_created_at_and_client_progress_wins(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)
    await service.save(task_payload(imageList={"x": "u1", "y": "u2"}))
    created_at = (await service.find_one("a")).created_at

    task = await service.save(task_payload(progress={"x": "TAGGED"}))

    assert task.progress == {"x": "TAGGED"}
    assert task.image_list == {"x": "u1", "y": "u2"}
    assert task.created_at == created_at
    assert task.last_updated_at > created_at


@pytest.mark.asyncio
async def test_update_fills_missing_fields_from_stored_task(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)
    await service.save(
        task_payload(
            imageList={"x": "u1"},
            attributeKeys={"color": {"type": "select"}},
            tags=["cat", "dog"],
        )
    )
    stored = await service.find_one("a")
    stored.last_used_for_project_creation = "project-1"
    await session.commit()

    task = await service.save(
        TaskWrite.model_validate({"id": "a", "stellaUrl": "https://stella-2.example", "categories": ["animals"]})
    )

    assert task.stella_url == "https://stella-2.example"
    assert task.vott_backend_url == URLS["vottBackendUrl"]
    assert task.attribute_keys == {"color": {"type": "select"}}
    assert task.progress == {"x": "NOTVISITED"}
    assert task.last_used_for_project_creation == "project-1"
    assert task.extra == {"tags": ["cat", "dog"], "categories": ["animals"]}


@pytest.mark.asyncio
async def test_client_timestamps_are_ignored(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)

    task = await service.save(
        task_payload(createdAt="1999-01-01T00:00:00Z", lastUsedForProjectCreation="stale")
    )
    assert task.created_at == "2026-10-17T09:00:00Z"
    assert task.last_used_for_project_creation == ""

    task = await service.save(task_payload(createdAt="1999-01-01T00:00:00Z"))
    assert task.created_at == "2026-10-17T09:00:00Z"
    assert task.last_updated_at == "2026-10-17T09:00:01Z"


@pytest.mark.asyncio
async def test_progress_is_empty_without_images(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)

    task = await service.save(task_payload(imageList={}))

    assert task.progress == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["stellaUrl", "vottBackendUrl", "imageServerUrl", "taskServerUrl"])
async def test_missing_required_url_is_rejected(session: AsyncSession, clock: FakeClock, missing: str) -> None:
    service = TaskService(session, clock=clock)
    payload = {"id": "a", **URLS}
    del payload[missing]

    with pytest.raises(InvalidArgumentError):
        await service.save(TaskWrite.model_validate(payload))

    assert await service.exists("a") is False


@pytest.mark.asyncio
async def test_blank_values_are_rejected(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)

    with pytest.raises(InvalidArgumentError):
        await service.save(task_payload(taskServerUrl="  "))
    with pytest.raises(InvalidArgumentError):
        await service.save(TaskWrite.model_validate(URLS))

    assert await service.find_all() == []


@pytest.mark.asyncio
async def test_find_delete_and_exists(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)
    await service.save(task_payload())
    await service.save(task_payload(id="b"))

    assert [task.id for task in await service.find_all()] == ["a", "b"]
    assert await service.exists("a") is True

    await service.delete("a")

    assert await service.exists("a") is False
    with pytest.raises(NotFoundError):
        await service.find_one("a")
    with pytest.raises(NotFoundError):
        await service.delete("a")


def test_merge_policy_is_field_by_field() -> None:
    stored = {
        "id": "a",
        "stella_url": "old-stella",
        "vott_backend_url": "old-vott",
        "image_list": {"x": "u1"},
        "progress": {"x": "VISITED"},
        "created_at": "2026-01-01T00:00:00Z",
        "extra": {"tags": ["old"], "color": "red"},
    }
    incoming = {
        "id": "a",
        "stella_url": "new-stella",
        "vott_backend_url": None,
        "image_list": {"y": "u2"},
        "progress": None,
        "created_at": "2030-01-01T00:00:00Z",
        "extra": {"tags": ["new"], "color": None},
    }

    merged = merge_task_fields(incoming, stored)

    assert merged["stella_url"] == "new-stella"
    assert merged["vott_backend_url"] == "old-vott"
    assert merged["image_list"] == {"y": "u2"}
    assert merged["progress"] == {"x": "VISITED"}
    assert merged["created_at"] == "2026-01-01T00:00:00Z"
    assert merged["extra"] == {"tags": ["new"], "color": "red"}


@pytest.mark.asyncio
async def test_null_unknown_member_keeps_stored_value(session: AsyncSession, clock: FakeClock) -> None:
    service = TaskService(session, clock=clock)
    await service.save(task_payload(tags=["cat"]))

    task = await service.save(TaskWrite.model_validate({"id": "a", "tags": None}))

    assert task.extra == {"tags": ["cat"]}
