"""Agent overrides table

Revision ID: 001
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One sparse override record per (tenant, agent)
    op.create_table(
        "agent_overrides",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("tenant_id", sa.String(64), nullable=False, server_default="platform"),
        sa.Column("agent_key", sa.String(128), nullable=False),
        sa.Column("record_json", sa.Text, nullable=False, server_default="{}"),
        sa.Column("version", sa.Integer, server_default="1"),
        sa.Column("updated_by", sa.String(128), server_default=""),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
        sa.UniqueConstraint("tenant_id", "agent_key", name="uq_agent_overrides_tenant_agent"),
    )
    op.create_index("ix_agent_overrides_tenant", "agent_overrides", ["tenant_id"])


def downgrade() -> None:
    op.drop_index("ix_agent_overrides_tenant", table_name="agent_overrides")
    op.drop_table("agent_overrides")
