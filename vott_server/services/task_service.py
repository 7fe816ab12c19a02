"""Task persistence with upsert-with-merge semantics."""
from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from vott_server.db.repository import TaskRepository
from vott_server.db.session import transaction
from vott_server.errors import InvalidArgumentError, NotFoundError
from vott_server.models import Task
from vott_server.models.task import TASK_FIELDS
from vott_server.schemas.task import AssetState, TaskWrite
from vott_server.services.clock import Clock, utc_now_iso

logger = structlog.get_logger(__name__)

# Attribute name -> message used when the value is absent or blank.
REQUIRED_FIELDS = {
    "id": "No ID found",
    "stella_url": "No Stella URL found",
    "vott_backend_url": "No VoTT backend url found",
    "image_server_url": "No image server url found",
    "task_server_url": "No task server url found",
}


def merge_task_fields(incoming: dict[str, Any], stored: dict[str, Any]) -> dict[str, Any]:
    """Fill the gaps of ``incoming`` with the values of ``stored``.

    Policy, per field:

    * scalar and mapping fields: the incoming value wins unless it is None,
      mappings (image_list, progress, attribute_keys) are replaced whole;
    * created_at: always the stored value;
    * extra: merged member by member, incoming members win unless they are None.
    """
    merged = dict(incoming)
    for name in TASK_FIELDS:
        if name in ("created_at", "extra"):
            continue
        if merged.get(name) is None:
            merged[name] = stored.get(name)
    merged["created_at"] = stored.get("created_at")
    incoming_extra = {key: value for key, value in (incoming.get("extra") or {}).items() if value is not None}
    merged["extra"] = {**(stored.get("extra") or {}), **incoming_extra}
    return merged


def default_progress(image_list: dict[str, str] | None) -> dict[str, str]:
    if not image_list:
        return {}
    return {key: AssetState.NOTVISITED.value for key in image_list}


def validate_task_fields(fields: dict[str, Any]) -> None:
    for name, message in REQUIRED_FIELDS.items():
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidArgumentError(message)


class TaskService:
    """CRUD over Task rows; the only writer of the ``tasks`` table."""

    def __init__(self, session: AsyncSession, clock: Clock = utc_now_iso) -> None:
        self.session = session
        self.repository = TaskRepository(session)
        self.clock = clock

    async def find_all(self) -> list[Task]:
        logger.debug("task.find_all")
        return await self.repository.find_all()

    async def find_one(self, task_id: str) -> Task:
        logger.debug("task.find_one", task_id=task_id)
        task = await self.repository.find_by_id(task_id)
        if task is None:
            raise NotFoundError("No task found for the provided ID")
        return task

    async def exists(self, task_id: str) -> bool:
        return await self.repository.find_by_id(task_id) is not None

    async def save(self, payload: TaskWrite) -> Task:
        fields = payload.to_fields()
        logger.debug("task.save", task_id=fields["id"])

        async with transaction(self.session):
            existing = await self.repository.find_by_id(fields["id"]) if fields["id"] else None
            now = self.clock()
            if existing is not None:
                fields = merge_task_fields(fields, existing.to_fields())
                fields["last_updated_at"] = now
                if fields["last_used_for_project_creation"] is None:
                    fields["last_used_for_project_creation"] = ""
            else:
                fields["created_at"] = now
                fields["last_updated_at"] = now
                fields["last_used_for_project_creation"] = ""

            if fields["attribute_keys"] is None:
                fields["attribute_keys"] = {}
            if fields["progress"] is None:
                fields["progress"] = default_progress(fields["image_list"])

            validate_task_fields(fields)

            task = existing if existing is not None else Task()
            for name in TASK_FIELDS:
                setattr(task, name, fields[name])
            task = await self.repository.save(task)

        logger.info("task.saved", task_id=task.id, created=existing is None)
        return task

    async def delete(self, task_id: str) -> None:
        logger.debug("task.delete", task_id=task_id)
        async with transaction(self.session):
            if await self.repository.find_by_id(task_id) is None:
                raise NotFoundError("No task found for the provided ID")
            await self.repository.delete_by_id(task_id)
        logger.info("task.deleted", task_id=task_id)
