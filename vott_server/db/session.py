"""Database session and engine setup."""
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from vott_server.errors import BackendFailureError
from vott_server.settings import settings

logger = structlog.get_logger(__name__)

Base = declarative_base()

engine = create_async_engine(settings.database_url, echo=False, future=True)
async_session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session for request handlers."""
    async with async_session_factory() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit on success, roll back on any exception.

    Driver and ORM errors are re-raised as ``BackendFailureError``.
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("db.transaction_failed", error=str(exc))
        raise BackendFailureError("Database operation failed") from exc
    except Exception:
        await session.rollback()
        raise


async def create_schema() -> None:
    """Create missing tables; Alembic owns the schema outside development."""
    import vott_server.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
