"""Narrow per-entity data access over an ``AsyncSession``.

Repositories never commit; the calling service owns the transaction.
"""
from __future__ import annotations

from typing import Generic, TypeVar
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from vott_server.models import File, Task
from vott_server.models.file import file_key

# Dialects with INSERT ... ON CONFLICT DO UPDATE.
UPSERT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}

ModelT = TypeVar("ModelT", File, Task)


class Repository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, entity_id: str) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def find_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def save(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete_by_id(self, entity_id: str) -> None:
        entity = await self.find_by_id(entity_id)
        if entity is not None:
            await self.session.delete(entity)
            await self.session.flush()


class FileRepository(Repository[File]):
    model = File

    async def find_by_file_name(self, name: str, owner_uuid: str) -> File | None:
        result = await self.session.execute(select(File).where(File.name == name, File.uuid == owner_uuid))
        return result.scalar_one_or_none()

    async def upsert(self, name: str, owner_uuid: str, data: str) -> File:
        """Insert or replace the data of ``(name, owner_uuid)`` in one statement."""
        insert = UPSERT_INSERTS[self.session.get_bind().dialect.name]
        statement = insert(File).values(
            id=str(uuid4()),
            name=name,
            uuid=owner_uuid,
            file_name=file_key(name, owner_uuid),
            data=data,
        )
        statement = statement.on_conflict_do_update(
            index_elements=["name", "uuid"],
            set_={"data": statement.excluded.data},
        )
        await self.session.execute(statement)
        result = await self.session.execute(
            select(File)
            .where(File.name == name, File.uuid == owner_uuid)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()


class TaskRepository(Repository[Task]):
    model = Task
