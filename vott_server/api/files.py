"""Per-image metadata endpoints used by the client to persist annotation state."""
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from vott_server.db.session import get_session
from vott_server.errors import InvalidArgumentError
from vott_server.schemas.file import FileRead
from vott_server.services.file_store import FileMetadataStore

router = APIRouter()


def get_file_store(session: AsyncSession = Depends(get_session)) -> FileMetadataStore:
    return FileMetadataStore(session)


@router.get("")
async def list_files(store: FileMetadataStore = Depends(get_file_store)) -> Response:
    files = await store.list_all()
    if not files:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse([FileRead.model_validate(file).model_dump(by_alias=True) for file in files])


@router.get("/{file_name}")
async def get_file(
    file_name: str,
    uuid: str = Query(...),
    store: FileMetadataStore = Depends(get_file_store),
) -> Response:
    data = await store.get(file_name, uuid)
    if data is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(content=data, media_type="application/json")


@router.put("/{file_name}")
async def put_file(
    file_name: str,
    request: Request,
    uuid: str = Query(...),
    store: FileMetadataStore = Depends(get_file_store),
) -> Response:
    try:
        body = (await request.body()).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidArgumentError("Request body must be UTF-8") from exc
    data = await store.put(file_name, uuid, body)
    return Response(content=data, status_code=status.HTTP_202_ACCEPTED, media_type="application/json")


@router.delete("/{file_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    file_name: str,
    uuid: str = Query(...),
    store: FileMetadataStore = Depends(get_file_store),
) -> Response:
    await store.delete(file_name, uuid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
