"""Pydantic schemas for stored file metadata."""
from pydantic import BaseModel, ConfigDict, Field


class FileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    file_name: str = Field(serialization_alias="fileName")
    data: str
