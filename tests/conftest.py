# tests/conftest.py

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

# The application engine is built at import time; keep it off PostgreSQL.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vott_server.api.images import get_image_assets
from vott_server.db.session import Base, get_session
from vott_server.main import app
from vott_server.services.clock import ISO_8601_UTC, get_clock
from vott_server.services.images import ImageAssets

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-jpeg-body\xff\xd9"
CATALOG = '{"images": [{"name": "photo.jpg"}]}'


class FakeClock:
    """
    Deterministic clock: every call is one second after the previous one.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 10, 17, 9, 0, 0, tzinfo=timezone.utc)
        self.calls = 0

    def __call__(self) -> str:
        value = self.current.strftime(ISO_8601_UTC)
        self.current += timedelta(seconds=1)
        self.calls += 1
        return value


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture()
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def assets(tmp_path: Path) -> ImageAssets:
    """
    Asset root with one JPEG, plus a file next to the root that must stay unreachable.
    """
    root = tmp_path / "images"
    root.mkdir()
    (root / "photo.jpg").write_bytes(JPEG_BYTES)
    (tmp_path / "secret.jpg").write_bytes(b"do not serve")
    catalog = tmp_path / "data.json"
    catalog.write_text(CATALOG, encoding="utf-8")
    return ImageAssets(root, catalog)


@pytest_asyncio.fixture()
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    clock: FakeClock,
    assets: ImageAssets,
) -> AsyncIterator[AsyncClient]:
    async def override_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_image_assets] = lambda: assets
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
            yield http
    finally:
        app.dependency_overrides.clear()
