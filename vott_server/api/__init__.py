"""Expose the aggregated API router."""
from fastapi import APIRouter

from . import files, images, tasks

api_router = APIRouter()
api_router.include_router(images.router, prefix="/images", tags=["images"])
api_router.include_router(files.router, prefix="/file", tags=["files"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])

__all__ = ["api_router"]
