"""
SQLAlchemy ORM models for the Agent Console.
Maps to the tables created by the Alembic migrations.
"""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from agent_console.db.base import Base


# ── Agent Overrides ────────────────────────────────────────────────────────────

class AgentOverrideModel(Base):
    """
    One override record per (tenant, agent). ``record_json`` holds the sparse
    override exactly as serialised by OverrideRecord.to_storage(); the row is
    replaced wholesale on every save.
    """
    __tablename__ = "agent_overrides"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: f"ovr-{uuid.uuid4().hex[:8]}"
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, default="platform")
    agent_key: Mapped[str] = mapped_column(String(128), nullable=False)
    record_json: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    version: Mapped[int] = mapped_column(Integer, default=1)
    updated_by: Mapped[str] = mapped_column(String(128), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("tenant_id", "agent_key", name="uq_agent_overrides_tenant_agent"),
        Index("ix_agent_overrides_tenant", "tenant_id"),
    )

    def __repr__(self) -> str:
        return f"<AgentOverride tenant={self.tenant_id} agent={self.agent_key!r} v{self.version}>"
