"""Task CRUD endpoints."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from vott_server.db.session import get_session
from vott_server.schemas.task import TaskRead, TaskWrite
from vott_server.services.clock import Clock, get_clock
from vott_server.services.task_service import TaskService

router = APIRouter()


def get_task_service(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> TaskService:
    return TaskService(session, clock=clock)


@router.get("")
async def list_tasks(service: TaskService = Depends(get_task_service)) -> list[dict]:
    tasks = await service.find_all()
    return [TaskRead.from_fields(task.to_fields()).to_json() for task in tasks]


@router.get("/{task_id}")
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)) -> dict:
    task = await service.find_one(task_id)
    return TaskRead.from_fields(task.to_fields()).to_json()


@router.head("/{task_id}")
async def task_exists(task_id: str, service: TaskService = Depends(get_task_service)) -> Response:
    found = await service.exists(task_id)
    return Response(status_code=status.HTTP_200_OK if found else status.HTTP_404_NOT_FOUND)


@router.put("")
@router.post("")
async def save_task(task: TaskWrite, service: TaskService = Depends(get_task_service)) -> dict:
    saved = await service.save(task)
    return TaskRead.from_fields(saved.to_fields()).to_json()


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> Response:
    await service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
