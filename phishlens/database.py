"""Async engine and session factory for the learning-record store."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from .config import PhishLensConfig
from .models.base import Base
from .utils.logging import get_logger

logger = get_logger("phishlens.database")

_engine = None
_session_factory = None


def _engine_options(database_url: str) -> dict[str, Any]:
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    if ":memory:" in database_url:
        # Every pooled connection would otherwise open its own empty database
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}


def get_engine(config: PhishLensConfig):
    """Get or create the async database engine."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            config.database_url,
            echo=config.debug,
            **_engine_options(config.database_url),
        )
    return _engine


def get_session_factory(config: PhishLensConfig) -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(config), expire_on_commit=False)
    return _session_factory


async def create_tables(config: PhishLensConfig) -> None:
    """Create the ``learning_records`` table if it is missing."""
    async with get_engine(config).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_tables_ready", url=config.database_url)


async def close_engine() -> None:
    """Dispose the engine; the next ``get_engine`` call builds a fresh one."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
