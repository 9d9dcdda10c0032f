"""EnvironmentalPolicy ORM — conditional automation rule owned by a user.

Invariants:
    - Rows are append-only; only is_active changes after insert
    - condition/action stored as JSON in the shape produced by sql_stores codecs
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from attune.db.base import Base


class EnvironmentalPolicyRow(Base):
    __tablename__ = "environmental_policies"

    pk: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    policy_name: Mapped[str] = mapped_column(String(255), nullable=False)
    condition: Mapped[dict] = mapped_column(JSON, nullable=False)
    action: Mapped[dict] = mapped_column(JSON, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
