# app/database/connection.py
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from config.appconfig import settings

# SQLite files are opened per session so the engine can be shared across event loops
engine_kwargs = {"echo": settings.DATABASE_ECHO}
if settings.is_sqlite:
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    """Yield a database session per request."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create all tables registered on Base."""
    import app.model_registry  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
