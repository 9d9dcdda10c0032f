"""OrchestrationRecord ORM — one row per executed policy.

Invariants:
    - Append-only; autoincrement pk is the insertion order used for tail reads
    - actions stores the ordered per-device outcomes
"""

from datetime import datetime

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from attune.db.base import Base


class OrchestrationRecordRow(Base):
    __tablename__ = "orchestration_history"

    pk: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    policy_id: Mapped[str] = mapped_column(String(255), nullable=False)
    policy_name: Mapped[str] = mapped_column(String(255), nullable=False)
    triggered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    actions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
