from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.core.config import settings

from typing import AsyncIterator
import logging


Base = declarative_base()


connection_string = settings.database.connection_string

if not connection_string:
    raise RuntimeError("Set SUPABASE_DB_URL (or DATABASE_URL) in the environment")

engine = create_async_engine(
    connection_string,
    echo=False,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    expire_on_commit=False,
)


logger = logging.getLogger(__name__)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Session rolled back due to error: {e}")
            raise


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create the users/flashcards tables if they are missing."""
    # Register the mapped classes on Base.metadata before create_all
    import app.core.db.schemas  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
