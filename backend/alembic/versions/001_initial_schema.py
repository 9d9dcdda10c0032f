"""Initial schema — devices, policies, orchestration history, decision log, anchors.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "smart_home_devices",
        sa.Column("pk", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False, index=True),
        sa.Column("device_id", sa.String(255), nullable=False),
        sa.Column("device_name", sa.String(255), nullable=False),
        sa.Column("device_type", sa.String(50), nullable=False),
        sa.Column("state", sa.JSON, nullable=False),
        sa.Column("last_synced_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "device_id", name="uq_device_per_user"),
    )

    op.create_table(
        "environmental_policies",
        sa.Column("pk", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False, index=True),
        sa.Column("policy_name", sa.String(255), nullable=False),
        sa.Column("condition", sa.JSON, nullable=False),
        sa.Column("action", sa.JSON, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "orchestration_history",
        sa.Column("pk", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(255), nullable=False, index=True),
        sa.Column("policy_id", sa.String(255), nullable=False),
        sa.Column("policy_name", sa.String(255), nullable=False),
        sa.Column("triggered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("actions", sa.JSON, nullable=False),
    )

    op.create_table(
        "quantum_decision_log",
        sa.Column("pk", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(255), nullable=False, index=True),
        sa.Column("decision_context", sa.JSON, nullable=False),
        sa.Column("tri_state", sa.String(50), nullable=False),
        sa.Column("quat_state", sa.String(50), nullable=True),
        sa.Column("action", sa.String(255), nullable=False),
        sa.Column("outcome", sa.String(50), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "anchor_states",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("emotion_vector", sa.JSON, nullable=False),
        sa.Column("friction_score", sa.Float, nullable=False, server_default="0"),
        sa.Column("current_task", sa.Text, nullable=True),
        sa.Column("clipboard_history", sa.JSON, nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("anchor_states")
    op.drop_table("quantum_decision_log")
    op.drop_table("orchestration_history")
    op.drop_table("environmental_policies")
    op.drop_table("smart_home_devices")
