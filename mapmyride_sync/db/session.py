from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from mapmyride_sync.db.base import Base


def create_engine_for(database_url: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create the workout tables if they do not exist yet."""
    import mapmyride_sync.models  # noqa: F401 - so all models are registered

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
