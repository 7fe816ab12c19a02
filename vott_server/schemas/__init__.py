"""Schema exports."""
from .file import FileRead
from .task import AssetState, TaskRead, TaskWrite

__all__ = [
    "AssetState",
    "FileRead",
    "TaskRead",
    "TaskWrite",
]
