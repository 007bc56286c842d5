"""
DatabaseOverrideStore — override store backed by the agent_overrides table.
Exposes the synchronous store contract on top of the async repository.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agent_console.config.settings import settings
from agent_console.db.base import Base
from agent_console.db.engine import build_engine
from agent_console.db.override_repository import OverrideRepository
from agent_console.db.sync_bridge import BackgroundLoop
from agent_console.overrides.store import OverrideStore

logger = logging.getLogger(__name__)


class DatabaseOverrideStore(OverrideStore):
    """Override rows keyed by (tenant_id, agent_key)."""

    def __init__(self, tenant_id: Optional[str] = None, database_url: Optional[str] = None):
        super().__init__(tenant_id)
        self._engine: AsyncEngine = build_engine(database_url or settings.database_url, pooled=False)
        self._session_factory = async_sessionmaker(
            bind=self._engine, class_=AsyncSession, expire_on_commit=False,
        )
        self._bridge = BackgroundLoop(name=f"override-store-{self.tenant_id}")

    # ── Schema ────────────────────────────────────────────────────

    async def create_tables_async(self) -> None:
        from agent_console.db import models  # noqa: F401
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Ensured agent_overrides table for tenant scope {self.tenant_id}")

    def create_tables(self) -> None:
        self._bridge.run(self.create_tables_async())

    # ── Async primitives ──────────────────────────────────────────

    async def _read_async(self, agent_key: str) -> Optional[str]:
        async with self._session_factory() as session:
            row = await OverrideRepository(session).get(self.tenant_id, agent_key)
            return row.record_json if row else None

    async def _write_async(self, agent_key: str, payload: str, updated_by: str) -> None:
        async with self._session_factory() as session:
            await OverrideRepository(session).upsert(self.tenant_id, agent_key, payload, updated_by)
            await session.commit()

    async def _delete_async(self, agent_key: str) -> None:
        async with self._session_factory() as session:
            await OverrideRepository(session).delete(self.tenant_id, agent_key)
            await session.commit()

    async def version_async(self, agent_key: str) -> Optional[int]:
        async with self._session_factory() as session:
            row = await OverrideRepository(session).get(self.tenant_id, agent_key)
            return row.version if row else None

    # ── OverrideStore primitives ──────────────────────────────────

    def _read(self, agent_key: str) -> Optional[str]:
        return self._bridge.run(self._read_async(agent_key))

    def _write(self, agent_key: str, payload: str, updated_by: str) -> None:
        self._bridge.run(self._write_async(agent_key, payload, updated_by))

    def _delete(self, agent_key: str) -> None:
        self._bridge.run(self._delete_async(agent_key))

    def version(self, agent_key: str) -> Optional[int]:
        """Row version, bumped on every save."""
        try:
            return self._bridge.run(self.version_async(agent_key))
        except Exception as e:
            logger.warning(f"Override version lookup failed for {self.tenant_id}/{agent_key}: {e}")
            return None

    def close(self) -> None:
        """Dispose the engine and stop the bridge loop. Idempotent."""
        if self._bridge.closed:
            return
        self._bridge.run(self._engine.dispose())
        self._bridge.close()
