"""
Async SQLAlchemy engine construction.
Uses asyncpg for PostgreSQL and aiosqlite for local SQLite files.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


def build_engine(database_url: str, pooled: bool = True) -> AsyncEngine:
    """
    Create an async engine for ``database_url``.
    ``pooled=False`` opens a fresh connection per session, so no
    connection is shared between the bridge loop and any other event loop.
    """
    kwargs = {"echo": False}
    if database_url.startswith("postgresql+asyncpg"):
        kwargs["connect_args"] = {"ssl": "disable"}
    if not pooled:
        kwargs["poolclass"] = NullPool
    elif not database_url.startswith("sqlite"):
        kwargs.update(pool_size=20, max_overflow=10, pool_pre_ping=True)
    logger.info(f"Created async engine for {database_url.split('@')[-1]}")
    return create_async_engine(database_url, **kwargs)
