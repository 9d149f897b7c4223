from typing import AsyncIterator

import structlog
from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()

logger = structlog.get_logger(__name__)


class Database:
    """
    Storage client for one process: the async engine plus its session factory.

    Built in the application lifespan and kept on `app.state.db`; request
    handlers get sessions from it through `get_db`.
    """

    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url, echo=echo)
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def connect(self, create_tables: bool = True) -> None:
        # Any failure here must stop the process from starting
        try:
            async with self.engine.begin() as conn:
                if create_tables:
                    await conn.run_sync(Base.metadata.create_all)
                else:
                    await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            logger.exception("database_connection_failed", url=self.engine.url.render_as_string())
            await self.engine.dispose()
            raise
        logger.info("database_connected", url=self.engine.url.render_as_string())

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.db.sessionmaker() as session:
        yield session
