"""Opaque metadata blobs keyed by ``(fileName, uuid)``."""
from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from vott_server.db.repository import FileRepository
from vott_server.db.session import transaction
from vott_server.errors import EmptyBodyError, InvalidArgumentError
from vott_server.models import File

logger = structlog.get_logger(__name__)


def _require_uuid(owner_uuid: str | None) -> str:
    if owner_uuid is None or not owner_uuid.strip():
        raise InvalidArgumentError("uuid must not be blank")
    return owner_uuid


class FileMetadataStore:
    """The only writer of the ``files`` table.

    The stored ``data`` is never parsed; reads return it byte for byte.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repository = FileRepository(session)

    async def list_all(self) -> list[File]:
        return await self.repository.find_all()

    async def get(self, name: str, owner_uuid: str | None) -> str | None:
        owner_uuid = _require_uuid(owner_uuid)
        file = await self.repository.find_by_file_name(name, owner_uuid)
        return file.data if file is not None else None

    async def put(self, name: str, owner_uuid: str | None, body: str) -> str:
        owner_uuid = _require_uuid(owner_uuid)
        if not body:
            raise EmptyBodyError("Request body must not be empty")

        async with transaction(self.session):
            file = await self.repository.upsert(name, owner_uuid, body)
        logger.info("file.stored", file_name=file.file_name)
        return file.data

    async def delete(self, name: str, owner_uuid: str | None) -> None:
        """Remove the blob if present; deleting an unknown key is not an error."""
        owner_uuid = _require_uuid(owner_uuid)
        async with transaction(self.session):
            file = await self.repository.find_by_file_name(name, owner_uuid)
            if file is not None:
                await self.repository.delete_by_id(file.id)
                logger.info("file.deleted", file_name=file.file_name)
