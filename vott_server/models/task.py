"""Annotation task descriptors."""
from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Column, String
from sqlalchemy.dialects.postgresql import JSONB

from vott_server.db.session import Base

JSONColumn = JSON().with_variant(JSONB(), "postgresql")

# Persisted attribute names, in the order they appear in the Task JSON.
TASK_FIELDS = (
    "id",
    "stella_url",
    "vott_backend_url",
    "image_server_url",
    "task_server_url",
    "image_list",
    "progress",
    "attribute_keys",
    "created_at",
    "last_updated_at",
    "last_used_for_project_creation",
    "extra",
)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    stella_url = Column(String, nullable=False)
    vott_backend_url = Column(String, nullable=False)
    image_server_url = Column(String, nullable=False)
    task_server_url = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
    last_updated_at = Column(String, nullable=False)
    last_used_for_project_creation = Column(String, nullable=False, default="")
    image_list = Column(JSONColumn, nullable=True)
    progress = Column(JSONColumn, nullable=False, default=dict)
    attribute_keys = Column(JSONColumn, nullable=False, default=dict)
    # Client fields the service does not interpret (tags, categories, ...).
    extra = Column(JSONColumn, nullable=False, default=dict)

    def to_fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in TASK_FIELDS}
