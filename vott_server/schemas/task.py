"""Pydantic schemas for annotation tasks.

The client speaks camelCase JSON. Members that are not declared here are kept
in ``model_extra`` and stored untouched.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AssetState(str, Enum):
    NOTVISITED = "NOTVISITED"
    VISITED = "VISITED"
    TAGGED = "TAGGED"


class TaskBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str | None = None
    stella_url: str | None = None
    vott_backend_url: str | None = None
    image_server_url: str | None = None
    task_server_url: str | None = None
    image_list: dict[str, str] | None = None
    progress: dict[str, AssetState] | None = None
    attribute_keys: dict[str, Any] | None = None
    created_at: str | None = None
    last_updated_at: str | None = None
    last_used_for_project_creation: str | None = None


class TaskWrite(TaskBase):
    def to_fields(self) -> dict[str, Any]:
        """Declared fields by attribute name, plus undeclared members under ``extra``."""
        fields = {name: getattr(self, name) for name in TaskBase.model_fields}
        if fields["progress"] is not None:
            fields["progress"] = {key: state.value for key, state in fields["progress"].items()}
        fields["extra"] = dict(self.model_extra or {})
        return fields


class TaskRead(TaskBase):
    @classmethod
    def from_fields(cls, fields: dict[str, Any]) -> "TaskRead":
        values = {name: value for name, value in fields.items() if name != "extra"}
        extra = fields.get("extra") or {}
        # Declared fields take precedence over a same-named extra member.
        return cls.model_validate({**extra, **values})

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
