"""Opaque per-image metadata stored by the annotation client."""
from uuid import uuid4

from sqlalchemy import Column, String, Text, UniqueConstraint

from vott_server.db.session import Base


def file_key(name: str, owner_uuid: str) -> str:
    return f"{name}_{owner_uuid}"


class File(Base):
    __tablename__ = "files"
    __table_args__ = (UniqueConstraint("name", "uuid", name="uq_files_name_uuid"),)

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    name = Column(String, nullable=False)
    uuid = Column(String, nullable=False)
    file_name = Column(String, nullable=False, index=True)
    data = Column(Text, nullable=False)
