"""
Async SQLite engine and request-scoped sessions for upload records
"""
import os

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from zipprompt.core.config import settings
from zipprompt.models import Base


def _engine_options(url: str) -> dict:
    options = {"echo": settings.DEBUG}
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        # An in-memory database exists per connection; share one
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Session for one request: committed when the handler returns, rolled back if it raises"""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db():
    """Create the SQLite file's directory and any missing tables"""
    parsed = make_url(settings.DATABASE_URL)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        directory = os.path.dirname(parsed.database)
        if directory:
            os.makedirs(directory, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    await engine.dispose()
