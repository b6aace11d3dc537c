"""Database engine, declarative base, and session dependency."""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from roomcraft.app.core.config import settings


class Base(DeclarativeBase):
    """Declarative base for all record store tables."""


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide one database session per request."""
    async with AsyncSessionLocal() as session:
        yield session
