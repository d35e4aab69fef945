from typing import AsyncGenerator

from advanced_alchemy.config import AsyncSessionConfig
from litestar.plugins.sqlalchemy import SQLAlchemyAsyncConfig
from sqlalchemy.ext.asyncio import AsyncSession

from mcjars.core import settings
from mcjars.db import Base

session_config = SQLAlchemyAsyncConfig(
    connection_string=settings.database_url,
    create_all=True,
    metadata=Base.metadata,
    session_config=AsyncSessionConfig(expire_on_commit=False)
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_config.get_session() as session:
        yield session
