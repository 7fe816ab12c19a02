"""Import models for Alembic autogeneration."""
from .file import File
from .task import Task

__all__ = ["File", "Task"]
