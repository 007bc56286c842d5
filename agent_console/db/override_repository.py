"""
OverrideRepository — async CRUD for agent override rows.
Stores the serialised record as-is; parsing and validation belong to the
override store and registry.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from agent_console.db.models import AgentOverrideModel

logger = logging.getLogger(__name__)


class OverrideRepository:
    """Async operations on the agent_overrides table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, tenant_id: str, agent_key: str) -> Optional[AgentOverrideModel]:
        result = await self._session.execute(
            select(AgentOverrideModel).where(
                AgentOverrideModel.tenant_id == tenant_id,
                AgentOverrideModel.agent_key == agent_key,
            )
        )
        return result.scalar_one_or_none()

    async def upsert(
        self, tenant_id: str, agent_key: str, record_json: str, updated_by: str = "",
    ) -> AgentOverrideModel:
        """Replace the stored record, bumping its version."""
        row = await self.get(tenant_id, agent_key)
        if row is None:
            row = AgentOverrideModel(
                tenant_id=tenant_id,
                agent_key=agent_key,
                record_json=record_json,
                version=1,
                updated_by=updated_by,
            )
            self._session.add(row)
        else:
            row.record_json = record_json
            row.version = (row.version or 0) + 1
            row.updated_by = updated_by
            row.updated_at = datetime.utcnow()
        await self._session.flush()
        logger.info(f"Stored override {tenant_id}/{agent_key} v{row.version}")
        return row

    async def delete(self, tenant_id: str, agent_key: str) -> bool:
        result = await self._session.execute(
            delete(AgentOverrideModel).where(
                AgentOverrideModel.tenant_id == tenant_id,
                AgentOverrideModel.agent_key == agent_key,
            )
        )
        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Deleted override {tenant_id}/{agent_key}")
        return deleted
