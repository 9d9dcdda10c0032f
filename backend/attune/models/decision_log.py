"""DecisionLog ORM — audit row for every emitted collapse decision.

Design Decisions:
    - Logging table, not enforcement: no business logic reads it back
    - JSON column for decision_context: the context shape is transient and may grow
"""

from datetime import datetime

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from attune.db.base import Base


class DecisionLogRow(Base):
    __tablename__ = "quantum_decision_log"

    pk: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    decision_context: Mapped[dict] = mapped_column(JSON, nullable=False)
    tri_state: Mapped[str] = mapped_column(String(50), nullable=False)
    quat_state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    action: Mapped[str] = mapped_column(String(255), nullable=False)
    outcome: Mapped[str] = mapped_column(String(50), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
