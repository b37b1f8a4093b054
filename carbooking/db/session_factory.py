from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from carbooking.db.base import Base
from carbooking.settings import settings


def create_engine(db_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    return create_async_engine(
        db_url or settings.db_url,
        echo=settings.db_echo if echo is None else echo,
        pool_pre_ping=True,
    )


def get_db_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create the key-value table if it is missing. There are no migrations."""
    # registers KVEntry on the metadata
    from carbooking.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
